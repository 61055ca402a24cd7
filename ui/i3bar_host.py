# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import logging
import queue
import sys
import threading
from typing import Optional

from domain.models import ClickEvent, MouseButton, ThemeConfig
from services.block_service import BlockService, Rendered

logger = logging.getLogger(__name__)

HEADER = {"version": 1, "click_events": True}

ERROR_NAME = "error"

_EOF = object()


def encode_blocks(rendered: Rendered, theme: ThemeConfig, error: Optional[str] = None) -> str:
    """
    One status line: a JSON array of i3bar blocks.
    A pending error is shown as an extra block at the end.
    """
    blocks = [
        {
            "full_text": f" {label.text} ",
            "name": block_id,
            "color": theme.fg(label.state),
            "background": theme.bg(label.state),
            "separator_block_width": 12,
        }
        for block_id, label in rendered
    ]
    if error:
        blocks.append({"full_text": f" {error} ", "name": ERROR_NAME, "color": theme.error_fg})
    return json.dumps(blocks)


def decode_click(line: str) -> Optional[ClickEvent]:
    """
    i3bar sends an endless JSON array, one click object per line:
      [
      {"name": "...", "button": 1, ...}
      ,{"name": "...", "button": 3, ...}
    Returns None for the opening bracket and for blank lines.
    """
    s = line.strip().lstrip(",").strip()
    if not s or s == "[":
        return None

    try:
        obj = json.loads(s)
    except json.JSONDecodeError:
        logger.warning("cannot decode click event: %r", s)
        return None
    if not isinstance(obj, dict):
        logger.warning("unexpected click payload: %r", s)
        return None

    name = obj.get("name")
    button = obj.get("button")
    return ClickEvent(
        name=name if isinstance(name, str) else None,
        button=MouseButton.from_code(button) if isinstance(button, int) else MouseButton.UNKNOWN,
    )


class I3BarHost:
    """
    Runs the blocks as an i3bar status command (status_command in i3 config).
    Clicks are read on a daemon thread and handed over through a queue,
    so blocks are only ever touched from run().
    """

    def __init__(self, block_service: BlockService, theme: Optional[ThemeConfig] = None,
                 stdin=None, stdout=None):
        self.block_service = block_service
        self.theme = theme or ThemeConfig()
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

        self._events: queue.Queue = queue.Queue()
        self._first_line = True

        self.block_service.set_on_render(self._write_status)

    def _read_clicks(self) -> None:
        try:
            for line in self.stdin:
                event = decode_click(line)
                if event is not None:
                    self._events.put(event)
        finally:
            self._events.put(_EOF)

    def _write(self, text: str) -> None:
        self.stdout.write(text + "\n")
        self.stdout.flush()

    def _write_status(self, rendered: Rendered) -> None:
        line = encode_blocks(rendered, self.theme, self.block_service.last_error)
        if self._first_line:
            self._first_line = False
            self._write(line)
        else:
            self._write("," + line)

    def run(self) -> None:
        """
        Returns when i3bar closes our stdin.
        """
        self._write(json.dumps(HEADER))
        self._write("[")

        reader = threading.Thread(target=self._read_clicks, name="i3bar-clicks", daemon=True)
        reader.start()

        while True:
            wait = self.block_service.tick_due()
            try:
                event = self._events.get(timeout=wait if wait > 0 else None)
            except queue.Empty:
                continue
            if event is _EOF:
                logger.debug("stdin closed, stopping")
                return
            if event.name == ERROR_NAME:
                # click the error away
                self.block_service.clear_error()
                self._write_status(self.block_service.labels())
                continue
            self.block_service.click(event)
