from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from six7typing.core.clock import Clock, Scheduler, TimerHandle
from six7typing.core.grading import GradingEngine
from six7typing.core.keys import KeyPress, normalize_key
from six7typing.core.leaderboard import MAX_SCORE, Leaderboard
from six7typing.core.render import DisplayCell, render
from six7typing.core.sequence import TargetSequence
from six7typing.core.stats import RoundStats, compute_stats
from six7typing.core.texts import Mode, TextSource

logger = logging.getLogger(__name__)

DEFAULT_TIME_LIMIT_S = 10
TICK_INTERVAL_S = 1.0


class Phase(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    ENDED = "ended"


@dataclass(frozen=True)
class RoundSummary:
    """Final result of a round, shown on the game-over screen."""

    wpm: int
    accuracy_percent: int
    correct: int
    total: int
    mode: Mode
    time_limit_s: int

    @property
    def headline(self) -> str:
        return f"You had {self.wpm} WPM with {self.accuracy_percent}% accuracy!"


@dataclass(frozen=True)
class SessionView:
    """Snapshot handed to the display after every change."""

    phase: Phase
    mode: Mode
    time_limit_s: int
    time_remaining_s: int
    cursor: int
    cells: tuple[DisplayCell, ...]
    word_count: int
    stats: RoundStats


class SessionListener(Protocol):
    def on_update(self, view: SessionView) -> None:
        ...

    def on_round_end(self, summary: RoundSummary) -> None:
        ...


def _check_time_limit(seconds: int) -> int:
    if isinstance(seconds, bool) or not isinstance(seconds, int) or seconds <= 0:
        raise ValueError(f"time limit must be a positive number of seconds, got {seconds!r}")
    return seconds


class TypingSession:
    """Timed typing round: idle until the first key, active while the
    countdown runs, ended when it reaches zero.

    Texts are requested from *texts* on restart and whenever the current
    one is typed to the end with time left; the keystroke log spans every
    text of the round. All calls are expected on one event loop: the
    scheduler fires :meth:`tick` on the same thread that delivers keys.
    """

    def __init__(
        self,
        *,
        texts: TextSource,
        clock: Clock,
        scheduler: Scheduler,
        mode: Mode = Mode.WORDS,
        time_limit_s: int = DEFAULT_TIME_LIMIT_S,
        leaderboard: Optional[Leaderboard] = None,
        player_name: Optional[str] = None,
        listener: Optional[SessionListener] = None,
    ) -> None:
        self._texts = texts
        self._clock = clock
        self._scheduler = scheduler
        self._mode = Mode(mode)
        self._time_limit_s = _check_time_limit(time_limit_s)
        self._leaderboard = leaderboard
        self.player_name = player_name
        self._listener = listener

        self._engine = GradingEngine()
        self._phase = Phase.IDLE
        self._started_at: Optional[float] = None
        self._time_remaining_s = self._time_limit_s
        self._timer: Optional[TimerHandle] = None
        self._summary: Optional[RoundSummary] = None

        self._reset_round()

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def time_limit_s(self) -> int:
        return self._time_limit_s

    @property
    def time_remaining_s(self) -> int:
        return self._time_remaining_s

    @property
    def started_at(self) -> Optional[float]:
        """Clock time of the first keystroke, None while idle."""
        return self._started_at

    @property
    def engine(self) -> GradingEngine:
        return self._engine

    @property
    def summary(self) -> Optional[RoundSummary]:
        """Result of the finished round, None until it ends."""
        return self._summary

    @property
    def listener(self) -> Optional[SessionListener]:
        return self._listener

    @listener.setter
    def listener(self, listener: Optional[SessionListener]) -> None:
        self._listener = listener
        self._notify()

    # -- input ----------------------------------------------------------

    def handle_key(self, press: KeyPress) -> bool:
        """Feed one raw key press. Returns True when it changed the state."""
        if press.is_backspace:
            return self.backspace()
        ch = normalize_key(press)
        if ch is None:
            return False
        return self.type_char(ch)

    def type_char(self, ch: str) -> bool:
        if self._phase is Phase.ENDED:
            return False
        if self._engine.sequence is None or self._engine.is_exhausted:
            # an earlier generator failure left nothing to type
            self._install_next_text()
            if self._engine.sequence is None or self._engine.is_exhausted:
                return False
        if self._phase is Phase.IDLE:
            self.start()

        if self._engine.on_printable(ch) is None:
            return False
        if self._engine.is_exhausted and self._phase is Phase.ACTIVE and self._time_remaining_s > 0:
            self._install_next_text()
        self._notify()
        return True

    def backspace(self) -> bool:
        if self._phase is not Phase.ACTIVE:
            return False
        if not self._engine.on_backspace():
            return False
        self._notify()
        return True

    # -- lifecycle ------------------------------------------------------

    def start(self) -> None:
        """Start the countdown. Only acts while idle."""
        if self._phase is not Phase.IDLE:
            return
        self._phase = Phase.ACTIVE
        self._started_at = self._clock.now()
        self._time_remaining_s = self._time_limit_s
        self._timer = self._scheduler.schedule_repeating(TICK_INTERVAL_S, self.tick)
        logger.info("Round started: mode=%s limit=%ss", self._mode.value, self._time_limit_s)

    def tick(self) -> None:
        """One countdown second. Ticks outside an active round are ignored."""
        if self._phase is not Phase.ACTIVE:
            return
        self._time_remaining_s = max(0, self._time_remaining_s - 1)
        if self._time_remaining_s <= 0:
            self._end_round()
            return
        self._notify()

    def restart(self) -> None:
        self._reset_round()

    def set_mode(self, mode: Mode) -> None:
        self._mode = Mode(mode)
        self._reset_round()

    def set_time_limit(self, seconds: int) -> None:
        self._time_limit_s = _check_time_limit(seconds)
        self._reset_round()

    # -- read side ------------------------------------------------------

    def stats(self) -> RoundStats:
        return compute_stats(self._engine.log, self._started_at, self._clock.now())

    def view(self) -> SessionView:
        sequence = self._engine.sequence
        return SessionView(
            phase=self._phase,
            mode=self._mode,
            time_limit_s=self._time_limit_s,
            time_remaining_s=self._time_remaining_s,
            cursor=self._engine.cursor,
            cells=tuple(render(self._engine)),
            word_count=0 if sequence is None else sequence.word_count,
            stats=self.stats(),
        )

    # -- internals ------------------------------------------------------

    def _reset_round(self) -> None:
        self._cancel_timer()
        self._phase = Phase.IDLE
        self._started_at = None
        self._time_remaining_s = self._time_limit_s
        self._summary = None
        self._engine.reset(self._next_sequence())
        self._notify()

    def _end_round(self) -> None:
        if self._phase is not Phase.ACTIVE:
            return
        self._phase = Phase.ENDED
        self._cancel_timer()

        stats = self.stats()
        self._summary = RoundSummary(
            wpm=stats.wpm,
            accuracy_percent=stats.accuracy_percent,
            correct=stats.correct,
            total=stats.total,
            mode=self._mode,
            time_limit_s=self._time_limit_s,
        )
        logger.info(
            "Round ended: %d WPM, %d%% accuracy (%d/%d)",
            stats.wpm, stats.accuracy_percent, stats.correct, stats.total,
        )
        self._notify()
        if self._listener is not None:
            self._listener.on_round_end(self._summary)
        self._submit_score(self._summary.wpm)

    def _cancel_timer(self) -> None:
        timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()

    def _next_sequence(self) -> Optional[TargetSequence]:
        try:
            return TargetSequence.from_text(self._texts.generate(self._mode))
        except Exception:
            logger.exception("Text generator failed for mode %s", self._mode.value)
            return None

    def _install_next_text(self) -> None:
        sequence = self._next_sequence()
        if sequence is None:
            return
        self._engine.load(sequence)
        logger.debug("Installed next text (%d units)", len(sequence))

    def _submit_score(self, wpm: int) -> None:
        if self._leaderboard is None or not self.player_name:
            return
        if not 0 <= wpm <= MAX_SCORE:
            logger.info("Not submitting out-of-range score %d", wpm)
            return
        try:
            accepted = self._leaderboard.submit(self.player_name, wpm)
        except Exception:
            logger.warning("Score submission failed", exc_info=True)
            return
        if not accepted:
            logger.info("Leaderboard rejected score %d for %r", wpm, self.player_name)

    def _notify(self) -> None:
        if self._listener is not None:
            self._listener.on_update(self.view())
