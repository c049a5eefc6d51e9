from __future__ import annotations

import json
import logging
import threading
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, List, Optional, Protocol

import requests

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 12
MAX_SCORE = 200
DEFAULT_LIMIT = 10


@dataclass(frozen=True)
class ScoreEntry:
    name: str
    score: int


class Leaderboard(Protocol):
    """Best score per player name."""

    def submit(self, name: str, score: int) -> bool:
        """Record *score* for *name*; False when the submission is rejected."""

    def list_scores(self, limit: int = DEFAULT_LIMIT) -> List[ScoreEntry]:
        """Top *limit* entries, highest score first."""


def is_valid_submission(name: object, score: object) -> bool:
    """Name of 1..12 characters (after trimming) and an integer score in 0..200."""
    if not isinstance(name, str):
        return False
    trimmed = name.strip()
    if not trimmed or len(trimmed) > MAX_NAME_LENGTH:
        return False
    if isinstance(score, bool) or not isinstance(score, int):
        return False
    return 0 <= score <= MAX_SCORE


class LeaderboardStore:
    """Leaderboard persisted as a JSON list of ``{"name", "score"}`` objects.

    A player keeps only their best score; lower submissions are accepted but
    do not change the board.
    """

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._scores = self._load()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def submit(self, name: str, score: int) -> bool:
        if not is_valid_submission(name, score):
            logger.info("Rejected score submission name=%r score=%r", name, score)
            return False
        name = name.strip()
        with self._lock:
            if score > self._scores.get(name, -1):
                self._scores[name] = score
                self._save()
        return True

    def list_scores(self, limit: int = DEFAULT_LIMIT) -> List[ScoreEntry]:
        with self._lock:
            items = list(self._scores.items())
        items.sort(key=lambda item: item[1], reverse=True)
        return [ScoreEntry(name=n, score=s) for n, s in items[: max(0, limit)]]

    def _load(self) -> Dict[str, int]:
        scores: Dict[str, int] = {}
        if not self._file_path.exists():
            return scores
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load scores from %s: %s", self._file_path, e)
            return scores
        if not isinstance(payload, list):
            logger.warning("Ignoring scores file %s: expected a list", self._file_path)
            return scores

        for item in payload:
            if not isinstance(item, dict):
                continue
            name, score = item.get("name"), item.get("score")
            if not is_valid_submission(name, score):
                continue
            name = name.strip()
            scores[name] = max(score, scores.get(name, score))
        return scores

    def _save(self) -> None:
        payload = [asdict(ScoreEntry(name=n, score=s)) for n, s in self._scores.items()]
        try:
            self._file_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save scores to %s: %s", self._file_path, e)


class HttpLeaderboard:
    """Client for a remote leaderboard server (``GET``/``POST /scores``)."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http = session or requests.Session()

    @property
    def scores_url(self) -> str:
        return f"{self._base_url}/scores"

    def submit(self, name: str, score: int) -> bool:
        if not is_valid_submission(name, score):
            logger.info("Not submitting invalid score name=%r score=%r", name, score)
            return False
        try:
            res = self._http.post(
                self.scores_url,
                json={"name": name.strip(), "score": score},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.error("POST /scores error: %s", e)
            return False
        if not res.ok:
            logger.error("POST /scores failed: %s %s", res.status_code, res.text)
            return False
        return True

    def list_scores(self, limit: int = DEFAULT_LIMIT) -> List[ScoreEntry]:
        try:
            res = self._http.get(self.scores_url, params={"limit": limit}, timeout=self._timeout)
            res.raise_for_status()
            payload = res.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("Error loading scores: %s", e)
            return []
        if payload is None:
            return []
        if not isinstance(payload, list):
            logger.error("Error loading scores: expected a list, got %s", type(payload).__name__)
            return []

        entries: List[ScoreEntry] = []
        for item in payload:
            try:
                entries.append(ScoreEntry(name=str(item["name"]), score=int(item["score"])))
            except (KeyError, TypeError, ValueError):
                logger.debug("Skipping malformed score entry %r", item)
        return entries[:limit]
