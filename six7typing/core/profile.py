from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from six7typing.core.leaderboard import MAX_NAME_LENGTH
from six7typing.core.texts import Mode

logger = logging.getLogger(__name__)


@dataclass
class Profile:
    username: Optional[str] = None
    mode: Optional[str] = None
    time_limit_s: Optional[int] = None


def clean_username(value: str) -> str:
    """Trim *value* and check it fits on the leaderboard."""
    name = (value or "").strip()
    if not name:
        raise ValueError("Please enter a username!")
    if len(name) > MAX_NAME_LENGTH:
        raise ValueError(f"Username must be {MAX_NAME_LENGTH} characters or fewer.")
    return name


class ProfileStore:
    """Stores the player's name and last round settings.
    File: <home>/profile.json."""

    def __init__(self, home: Path) -> None:
        self._file_path = home / "profile.json"
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._profile = self._load()

    @property
    def username(self) -> Optional[str]:
        return self._profile.username

    @property
    def mode(self) -> Optional[Mode]:
        """Last mode the player picked, None if never saved."""
        if self._profile.mode is None:
            return None
        return Mode(self._profile.mode)

    @property
    def time_limit_s(self) -> Optional[int]:
        return self._profile.time_limit_s

    def set_username(self, value: str) -> str:
        name = clean_username(value)
        self._profile.username = name
        self._save()
        return name

    def update_settings(self, mode: Mode, time_limit_s: int) -> None:
        self._profile.mode = Mode(mode).value
        self._profile.time_limit_s = int(time_limit_s)
        self._save()

    def _load(self) -> Profile:
        if not self._file_path.exists():
            return Profile()
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load profile from %s: %s", self._file_path, e)
            return Profile()
        if not isinstance(payload, dict):
            return Profile()

        profile = Profile()
        username = payload.get("username")
        if isinstance(username, str):
            try:
                profile.username = clean_username(username)
            except ValueError:
                logger.warning("Ignoring invalid stored username %r", username)
        mode = payload.get("mode")
        if mode in {m.value for m in Mode}:
            profile.mode = mode
        limit = payload.get("time_limit_s")
        if isinstance(limit, int) and not isinstance(limit, bool) and limit > 0:
            profile.time_limit_s = limit
        return profile

    def _save(self) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            self._file_path.write_text(json.dumps(asdict(self._profile), indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save profile to %s: %s", self._file_path, e)
