# -*- coding: utf-8 -*-

import json
import logging
import re
from dataclasses import fields
from typing import Any, Dict, Optional

from domain.models import BarConfig, PomodoroConfig, ThemeConfig, WidgetState

logger = logging.getLogger(__name__)

# json type expected for each block option
_BLOCK_TYPES = {
    "length": int,
    "break_length": int,
    "message": str,
    "break_message": str,
    "use_nag": bool,
    "nag_path": str,
}

_COLOR_RE = re.compile(r"#[0-9A-Fa-f]{6}")

_THEME_KEYS = {"bar_bg", "error_fg"} | {
    f"{s.value}_{part}" for s in WidgetState for part in ("bg", "fg")
}


class ConfigError(ValueError):
    pass


def load_config(path: Optional[str] = None) -> BarConfig:
    """
    Reads the bar config from a JSON file. No path means all defaults.
    """
    if path is None:
        return BarConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{path}: invalid JSON: {e}") from e
    except OSError as e:
        raise ConfigError(f"{path}: cannot read config: {e}") from e

    logger.debug("loaded config from %s", path)
    return parse_config(data)


def parse_config(data: Any) -> BarConfig:
    if not isinstance(data, dict):
        raise ConfigError("config must be a JSON object")

    unknown = set(data) - {"theme", "blocks"}
    if unknown:
        raise ConfigError(f"unknown top-level keys: {', '.join(sorted(unknown))}")

    theme = _parse_theme(data.get("theme", {}))

    raw_blocks = data.get("blocks")
    if raw_blocks is None:
        return BarConfig(theme=theme)
    if not isinstance(raw_blocks, list):
        raise ConfigError("'blocks' must be a list")

    if not raw_blocks:
        raise ConfigError("'blocks' must not be empty")

    blocks = [_parse_block(i, raw) for i, raw in enumerate(raw_blocks)]
    return BarConfig(theme=theme, blocks=blocks)


def _parse_block(index: int, raw: Any) -> PomodoroConfig:
    where = f"blocks[{index}]"
    if not isinstance(raw, dict):
        raise ConfigError(f"{where}: must be an object")

    opts: Dict[str, Any] = dict(raw)
    kind = opts.pop("block", None)
    if kind != "pomodoro":
        raise ConfigError(f"{where}: unsupported block {kind!r}")

    unknown = set(opts) - set(_BLOCK_TYPES)
    if unknown:
        raise ConfigError(f"{where}: unknown fields: {', '.join(sorted(unknown))}")

    for key, value in opts.items():
        expected = _BLOCK_TYPES[key]
        # bool is an int subclass; don't accept true as a length
        if expected is int and isinstance(value, bool):
            raise ConfigError(f"{where}.{key}: expected integer, got {value!r}")
        if not isinstance(value, expected):
            raise ConfigError(
                f"{where}.{key}: expected {expected.__name__}, got {type(value).__name__}"
            )

    for key in ("message", "break_message", "nag_path"):
        if key in opts and "\x00" in opts[key]:
            raise ConfigError(f"{where}.{key}: must not contain NUL characters")

    for key in ("length", "break_length"):
        if key in opts and opts[key] <= 0:
            raise ConfigError(f"{where}.{key}: must be a positive number of minutes")

    if "nag_path" in opts and not opts["nag_path"].strip():
        raise ConfigError(f"{where}.nag_path: must not be empty")

    return PomodoroConfig(**opts)


def _parse_theme(raw: Any) -> ThemeConfig:
    if not isinstance(raw, dict):
        raise ConfigError("'theme' must be an object")

    unknown = set(raw) - _THEME_KEYS
    if unknown:
        raise ConfigError(f"theme: unknown keys: {', '.join(sorted(unknown))}")
    for key, value in raw.items():
        if not isinstance(value, str) or not _COLOR_RE.fullmatch(value):
            raise ConfigError(f"theme.{key}: expected a #RRGGBB colour, got {value!r}")

    base = ThemeConfig()
    colors = dict(base.colors)
    for state in WidgetState:
        bg, fg = colors[state]
        colors[state] = (
            raw.get(f"{state.value}_bg", bg),
            raw.get(f"{state.value}_fg", fg),
        )

    kwargs = {f.name: raw[f.name] for f in fields(ThemeConfig) if f.name in raw}
    return ThemeConfig(colors=colors, **kwargs)
