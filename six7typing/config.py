"""Runtime configuration read from ``SIX7_*`` environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from six7typing.core.leaderboard import HttpLeaderboard, Leaderboard, LeaderboardStore
from six7typing.core.session import DEFAULT_TIME_LIMIT_S
from six7typing.core.texts import Mode

logger = logging.getLogger(__name__)

TIME_LIMIT_CHOICES = (10, 30, 60)
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return default
    if value <= 0:
        logger.warning("Ignoring %s=%r: must be positive", name, raw)
        return default
    return value


@dataclass(frozen=True)
class AppConfig:
    home: Path
    leaderboard_url: Optional[str] = None
    time_limit_s: int = DEFAULT_TIME_LIMIT_S
    mode: Mode = Mode.WORDS
    log_level: str = "INFO"
    scores_file: Path = Path("scores.json")
    host: str = "127.0.0.1"
    port: int = 3000

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "AppConfig":
        env = os.environ if env is None else env

        home_raw = env.get("SIX7_HOME")
        home = Path(home_raw).expanduser() if home_raw else Path.home() / ".six7typing"

        mode_raw = (env.get("SIX7_MODE") or Mode.WORDS.value).strip().lower()
        try:
            mode = Mode(mode_raw)
        except ValueError:
            logger.warning("Ignoring SIX7_MODE=%r: expected words or sentences", mode_raw)
            mode = Mode.WORDS

        url = (env.get("SIX7_LEADERBOARD_URL") or "").strip() or None

        return cls(
            home=home,
            leaderboard_url=url,
            time_limit_s=_int_env(env, "SIX7_TIME_LIMIT", DEFAULT_TIME_LIMIT_S),
            mode=mode,
            log_level=(env.get("SIX7_LOG_LEVEL") or "INFO").strip().upper(),
            scores_file=Path(env.get("SIX7_SCORES_FILE") or "scores.json"),
            host=env.get("SIX7_HOST") or "127.0.0.1",
            port=_int_env(env, "SIX7_PORT", 3000),
        )


def configure_logging(level: str = "INFO") -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )


def build_leaderboard(config: AppConfig) -> Leaderboard:
    """Remote leaderboard when a URL is configured, else a local scores file."""
    if config.leaderboard_url:
        logger.info("Using remote leaderboard at %s", config.leaderboard_url)
        return HttpLeaderboard(config.leaderboard_url)
    return LeaderboardStore(config.home / "scores.json")
