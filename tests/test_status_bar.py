# -*- coding: utf-8 -*-

import pytest

pytest.importorskip("tkinter")

from domain.models import ClickEvent, MouseButton  # noqa: E402
from ui.status_bar import click_from_tk, ms_until  # noqa: E402


class TestClickFromTk:
    def test_buttons(self):
        assert click_from_tk("abc", 1) == ClickEvent(name="abc", button=MouseButton.LEFT)
        assert click_from_tk("abc", 2) == ClickEvent(name="abc", button=MouseButton.MIDDLE)
        assert click_from_tk("abc", 3) == ClickEvent(name="abc", button=MouseButton.RIGHT)


class TestMsUntil:
    def test_rounds_to_ms(self):
        assert ms_until(1.0) == 1000
        assert ms_until(0.25) == 250

    def test_never_spins(self):
        assert ms_until(0) == 50
        assert ms_until(0.001) == 50


class TestClose:
    def test_close_cancels_pending_tick(self):
        from unittest.mock import MagicMock

        from ui.status_bar import StatusBar

        bar = StatusBar.__new__(StatusBar)
        bar.root = MagicMock()
        bar._tick_job = "after#12"

        bar._close()

        bar.root.after_cancel.assert_called_once_with("after#12")
        bar.root.destroy.assert_called_once_with()
        assert bar._tick_job is None

    def test_close_without_pending_tick(self):
        from unittest.mock import MagicMock

        from ui.status_bar import StatusBar

        bar = StatusBar.__new__(StatusBar)
        bar.root = MagicMock()
        bar._tick_job = None

        bar._close()

        bar.root.after_cancel.assert_not_called()
        bar.root.destroy.assert_called_once_with()
