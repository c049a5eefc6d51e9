"""Tests for six7typing.core.profile – player name and saved settings."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from six7typing.core.profile import ProfileStore, clean_username
from six7typing.core.texts import Mode


@pytest.fixture()
def store(tmp_path: Path) -> ProfileStore:
    """ProfileStore under a temp home so tests don't touch ~/.six7typing."""
    return ProfileStore(tmp_path)


class TestCleanUsername:
    def test_trims(self):
        assert clean_username("  ana ") == "ana"

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_empty(self, value):
        with pytest.raises(ValueError, match="Please enter a username"):
            clean_username(value)

    def test_too_long(self):
        with pytest.raises(ValueError, match="12 characters"):
            clean_username("x" * 13)

    def test_max_length_ok(self):
        assert clean_username("x" * 12) == "x" * 12


class TestProfileStore:
    def test_defaults(self, store):
        assert store.username is None
        assert store.mode is None
        assert store.time_limit_s is None

    def test_set_username_persists(self, tmp_path, store):
        assert store.set_username(" ana ") == "ana"
        assert ProfileStore(tmp_path).username == "ana"

    def test_invalid_username_not_saved(self, tmp_path, store):
        with pytest.raises(ValueError):
            store.set_username("")
        assert not (tmp_path / "profile.json").exists()

    def test_update_settings(self, tmp_path, store):
        store.update_settings(Mode.SENTENCES, 30)
        reloaded = ProfileStore(tmp_path)
        assert reloaded.mode is Mode.SENTENCES
        assert reloaded.time_limit_s == 30

    def test_file_layout(self, tmp_path, store):
        store.set_username("ana")
        store.update_settings(Mode.WORDS, 60)
        data = json.loads((tmp_path / "profile.json").read_text())
        assert data == {"username": "ana", "mode": "words", "time_limit_s": 60}

    def test_corrupt_file(self, tmp_path):
        (tmp_path / "profile.json").write_text("not json")
        assert ProfileStore(tmp_path).username is None

    def test_invalid_fields_dropped(self, tmp_path):
        (tmp_path / "profile.json").write_text(
            json.dumps({"username": "x" * 40, "mode": "zen", "time_limit_s": -4})
        )
        store = ProfileStore(tmp_path)
        assert store.username is None
        assert store.mode is None
        assert store.time_limit_s is None

    def test_non_dict_file(self, tmp_path):
        (tmp_path / "profile.json").write_text("[]")
        assert ProfileStore(tmp_path).mode is None
