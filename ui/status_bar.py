# -*- coding: utf-8 -*-

import tkinter as tk
from typing import Dict, Optional

from domain.models import ClickEvent, Label, MouseButton, ThemeConfig
from services.block_service import BlockService, Rendered

# tk event.num -> button
TK_BUTTONS = (1, 2, 3)


def click_from_tk(block_id: str, num: int) -> ClickEvent:
    return ClickEvent(name=block_id, button=MouseButton.from_code(num))


def ms_until(seconds: float) -> int:
    # after() wants whole milliseconds; never spin
    return max(50, int(seconds * 1000))


class StatusBar:
    """
    Thin always-on-top bar: one label per block, left to right.
    Left/middle click = start/pause/resume/skip break, right click = reset.
    """

    def __init__(self, block_service: BlockService, theme: Optional[ThemeConfig] = None):
        self.block_service = block_service
        self.theme = theme or ThemeConfig()

        self.root = tk.Tk()
        self.root.title("Pomodoro")
        self.root.attributes("-topmost", True)
        self.root.configure(bg=self.theme.bar_bg)
        self.root.protocol("WM_DELETE_WINDOW", self._close)

        self._labels: Dict[str, tk.Label] = {}
        self._tick_job = None

        self._build_ui()

        # wire callbacks from service -> bar UI
        self.block_service.set_on_render(self._render)
        self.block_service.set_on_error(self._show_error)

        # initial render
        self._render(self.block_service.labels())

    def _build_ui(self):
        row = tk.Frame(self.root, bg=self.theme.bar_bg)
        row.pack(fill="x", padx=4, pady=2)

        for block_id, _ in self.block_service.labels():
            lbl = tk.Label(row, font=("Sans", 11, "bold"), padx=8, pady=2)
            lbl.pack(side="left", padx=(0, 4))
            for num in TK_BUTTONS:
                lbl.bind(
                    f"<ButtonPress-{num}>",
                    lambda e, bid=block_id: self._on_click(bid, e.num),
                )
            self._labels[block_id] = lbl

        self.error_var = tk.StringVar(value="")
        self.error_label = tk.Label(
            self.root,
            textvariable=self.error_var,
            fg=self.theme.error_fg,
            bg=self.theme.bar_bg,
            font=("Sans", 9),
        )
        # click the error away
        self.error_label.bind("<ButtonPress-1>", lambda e: self._clear_error())

    # ---- Tick loop ----
    def _schedule(self, seconds: float):
        self._tick_job = self.root.after(ms_until(seconds), self._tick_once)

    def _tick_once(self):
        self._tick_job = None
        wait = self.block_service.tick_due()
        self._schedule(wait)

    def _stop_tick_loop(self):
        if self._tick_job is not None:
            self.root.after_cancel(self._tick_job)
            self._tick_job = None

    def _close(self):
        self._stop_tick_loop()
        self.root.destroy()

    # ---- Input ----
    def _on_click(self, block_id: str, num: int):
        self.block_service.click(click_from_tk(block_id, num))

    # ---- Service callbacks ----
    def _render(self, rendered: Rendered):
        for block_id, label in rendered:
            widget = self._labels.get(block_id)
            if widget is not None:
                self._paint(widget, label)

    def _paint(self, widget: tk.Label, label: Label):
        widget.configure(
            text=label.text,
            bg=self.theme.bg(label.state),
            fg=self.theme.fg(label.state),
        )

    def _show_error(self, message: str):
        self.error_var.set(message)
        self.error_label.pack(fill="x", padx=4, pady=(0, 2))

    def _clear_error(self):
        self.block_service.clear_error()
        self.error_var.set("")
        self.error_label.pack_forget()

    def run(self):
        self._tick_once()
        self.root.mainloop()
