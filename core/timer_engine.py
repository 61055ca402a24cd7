# -*- coding: utf-8 -*-

import logging
import time
import uuid
from dataclasses import dataclass
from typing import Callable, Optional, Union

from domain.models import (
    ClickEvent,
    Label,
    MouseButton,
    NagLevel,
    NotifyError,
    PomodoroConfig,
    WidgetState,
)

logger = logging.getLogger(__name__)


# ----- Phases -----
@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Working:
    started_at: float  # monotonic seconds


@dataclass(frozen=True)
class Paused:
    accumulated: float  # elapsed work seconds frozen at pause


@dataclass(frozen=True)
class OnBreak:
    started_at: float  # monotonic seconds


TimerPhase = Union[Idle, Working, Paused, OnBreak]


def format_elapsed(seconds: float) -> str:
    sec = max(0, int(seconds))
    return f"{sec // 60}:{sec % 60:02d}"


class PomodoroBlock:
    """
    Pomodoro block for a status bar (no Tkinter, no i3bar).
    Host calls tick() on the interval it returns and click() for every
    mouse event on the bar; the block only reacts to events carrying its id.

    Counts up, not down: the label shows how long the current phase
    has been running.
    """

    poll_interval = 1.0

    def __init__(
        self,
        config: Optional[PomodoroConfig] = None,
        notifier=None,
        clock: Callable[[], float] = time.monotonic,
        on_error: Optional[Callable[[Exception], None]] = None,
    ):
        cfg = config or PomodoroConfig()

        self.id = uuid.uuid4().hex
        self.work_sec = int(cfg.work_sec)
        self.break_sec = int(cfg.break_sec)
        self.message = cfg.message
        self.break_message = cfg.break_message
        self.use_nag = bool(cfg.use_nag)

        self.notifier = notifier
        self.clock = clock
        self.on_error = on_error

        self.phase: TimerPhase = Idle()
        self.count = 0
        self.label = self.render()

    # ----- Elapsed time -----
    def elapsed(self) -> float:
        phase = self.phase
        if isinstance(phase, (Working, OnBreak)):
            return self.clock() - phase.started_at
        if isinstance(phase, Paused):
            return phase.accumulated
        return 0.0

    # ----- Rendering -----
    def compute_state(self) -> WidgetState:
        phase = self.phase
        if isinstance(phase, Working):
            return WidgetState.INFO
        if isinstance(phase, Paused):
            return WidgetState.WARNING
        if isinstance(phase, OnBreak):
            return WidgetState.CRITICAL
        return WidgetState.IDLE

    def render(self) -> Label:
        return Label(
            text=f"{self.count} | {format_elapsed(self.elapsed())}",
            state=self.compute_state(),
        )

    # ----- Host entry points -----
    def tick(self) -> float:
        """
        Returns seconds the host should wait before the next tick.
        """
        phase = self.phase
        if isinstance(phase, Working):
            if self.elapsed() >= self.work_sec:
                self.phase = OnBreak(self.clock())
                logger.debug("block %s: work over, break started", self.id)
                self._nag(self.message, NagLevel.URGENT)
        elif isinstance(phase, OnBreak):
            if self.elapsed() >= self.break_sec:
                self.phase = Idle()
                self.count += 1
                logger.debug("block %s: break over, cycles=%d", self.id, self.count)
                self._nag(self.break_message, NagLevel.WARNING)

        self.label = self.render()
        return self.poll_interval

    def click(self, event: ClickEvent) -> bool:
        """
        Returns True if the event was meant for this block.
        """
        if event.name is None or event.name != self.id:
            return False

        if event.button == MouseButton.RIGHT:
            self.reset()
            return True

        phase = self.phase
        now = self.clock()
        if isinstance(phase, Idle):
            self.phase = Working(now)
        elif isinstance(phase, Working):
            self.phase = Paused(now - phase.started_at)
        elif isinstance(phase, Paused):
            self.phase = Working(self._backdate(now, phase.accumulated))
        elif isinstance(phase, OnBreak):
            # skipping the break still counts the cycle
            self.phase = Working(now)
            self.count += 1

        self.label = self.render()
        return True

    def reset(self) -> None:
        self.phase = Idle()
        self.count = 0
        self.label = self.render()

    # ----- Internals -----
    def _backdate(self, now: float, accumulated: float) -> float:
        started_at = now - accumulated
        if started_at < 0:
            # monotonic readings are never negative; drop the paused time
            logger.debug(
                "block %s: cannot backdate %.1fs before clock origin, resuming from zero",
                self.id,
                accumulated,
            )
            return now
        return started_at

    def _nag(self, message: str, level: NagLevel) -> None:
        if not self.use_nag or self.notifier is None:
            return
        try:
            self.notifier.notify(message, level)
        except NotifyError as e:
            # transition is already committed
            logger.warning("block %s: notification failed: %s", self.id, e)
            if self.on_error:
                self.on_error(e)
