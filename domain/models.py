# -*- coding: utf-8 -*-

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class MouseButton(Enum):
    LEFT = "left"
    MIDDLE = "middle"
    RIGHT = "right"
    WHEEL_UP = "wheel_up"
    WHEEL_DOWN = "wheel_down"
    BACK = "back"
    FORWARD = "forward"
    UNKNOWN = "unknown"

    @classmethod
    def from_code(cls, code: int) -> "MouseButton":
        # X11 / i3bar button numbering
        return _BUTTON_CODES.get(code, cls.UNKNOWN)


_BUTTON_CODES = {
    1: MouseButton.LEFT,
    2: MouseButton.MIDDLE,
    3: MouseButton.RIGHT,
    4: MouseButton.WHEEL_UP,
    5: MouseButton.WHEEL_DOWN,
    8: MouseButton.BACK,
    9: MouseButton.FORWARD,
}


@dataclass(frozen=True)
class ClickEvent:
    name: Optional[str]  # id of the block the click was aimed at
    button: MouseButton


class WidgetState(Enum):
    IDLE = "idle"
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class NagLevel(Enum):
    URGENT = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Label:
    text: str
    state: WidgetState


@dataclass(frozen=True)
class PomodoroConfig:
    length: int = 25  # minutes
    break_length: int = 5  # minutes
    message: str = "Pomodoro over! Take a break!"
    break_message: str = "Break over! Time to work!"
    use_nag: bool = False
    nag_path: str = "i3-nagbar"

    @property
    def work_sec(self) -> int:
        return self.length * 60

    @property
    def break_sec(self) -> int:
        return self.break_length * 60


def _default_colors() -> Dict[WidgetState, Tuple[str, str]]:
    # (background, foreground)
    return {
        WidgetState.IDLE: ("#2E3440", "#D8DEE9"),
        WidgetState.INFO: ("#4A90E2", "#FFFFFF"),
        WidgetState.WARNING: ("#EBCB8B", "#2E3440"),
        WidgetState.CRITICAL: ("#BF616A", "#FFFFFF"),
    }


@dataclass(frozen=True)
class ThemeConfig:
    bar_bg: str = "#1D1F21"
    error_fg: str = "#FF5555"
    colors: Dict[WidgetState, Tuple[str, str]] = field(default_factory=_default_colors)

    def bg(self, state: WidgetState) -> str:
        return self.colors[state][0]

    def fg(self, state: WidgetState) -> str:
        return self.colors[state][1]


@dataclass(frozen=True)
class BarConfig:
    theme: ThemeConfig = field(default_factory=ThemeConfig)
    blocks: List[PomodoroConfig] = field(default_factory=lambda: [PomodoroConfig()])


class NotifyError(RuntimeError):
    """Notifier program could not be launched."""
