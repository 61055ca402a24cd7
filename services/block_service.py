# -*- coding: utf-8 -*-

import logging
import time
from typing import Callable, Dict, List, Optional, Tuple

from core.timer_engine import PomodoroBlock
from domain.models import ClickEvent, Label, PomodoroConfig
from services.nag_service import NagNotifier

logger = logging.getLogger(__name__)

Rendered = List[Tuple[str, Label]]


class BlockService:
    """
    Orchestrates:
    - the bar's pomodoro blocks, in display order
    - per-block tick scheduling (each block says when it wants the next tick)
    - click routing (every click goes to every block, the addressed one acts)
    - error reporting and render callbacks for the hosts
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock

        self._blocks: List[PomodoroBlock] = []
        self._next_due: Dict[str, float] = {}

        self.last_error: Optional[str] = None

        self._on_render: Optional[Callable[[Rendered], None]] = None
        self._on_error: Optional[Callable[[str], None]] = None

    # ----- Callbacks -----
    def set_on_render(self, fn: Callable[[Rendered], None]) -> None:
        self._on_render = fn

    def set_on_error(self, fn: Callable[[str], None]) -> None:
        self._on_error = fn

    def _emit_render(self) -> None:
        if self._on_render:
            self._on_render(self.labels())

    def _report_error(self, err: Exception) -> None:
        self.last_error = str(err)
        if self._on_error:
            self._on_error(self.last_error)

    # ----- Blocks -----
    def build_block(self, config: PomodoroConfig) -> PomodoroBlock:
        notifier = NagNotifier(config.nag_path) if config.use_nag else None
        block = PomodoroBlock(
            config,
            notifier=notifier,
            clock=self.clock,
            on_error=self._report_error,
        )
        self.add_block(block)
        return block

    def add_block(self, block: PomodoroBlock) -> None:
        self._blocks.append(block)
        # first tick right away
        self._next_due[block.id] = self.clock()

    @property
    def blocks(self) -> List[PomodoroBlock]:
        return list(self._blocks)

    def labels(self) -> Rendered:
        return [(b.id, b.label) for b in self._blocks]

    def clear_error(self) -> None:
        self.last_error = None

    # ----- Host entry points -----
    def tick_due(self, now: Optional[float] = None) -> float:
        """
        Ticks every block whose turn has come.
        Returns seconds until the next block is due (0 when there are none).
        """
        if now is None:
            now = self.clock()

        ticked = False
        for block in self._blocks:
            if self._next_due[block.id] <= now:
                interval = block.tick()
                self._next_due[block.id] = now + interval
                ticked = True

        if ticked:
            self._emit_render()

        if not self._next_due:
            return 0.0
        return max(0.0, min(self._next_due.values()) - now)

    def click(self, event: ClickEvent) -> bool:
        handled = False
        for block in self._blocks:
            if block.click(event):
                handled = True

        if handled:
            self._emit_render()
        else:
            logger.debug("ignoring click for unknown block %r", event.name)
        return handled
