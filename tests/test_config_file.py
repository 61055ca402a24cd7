# -*- coding: utf-8 -*-

import json

import pytest

from domain.models import BarConfig, PomodoroConfig, WidgetState
from storage.config_file import ConfigError, load_config, parse_config


class TestLoadConfig:
    def test_no_path_gives_defaults(self):
        cfg = load_config(None)
        assert cfg == BarConfig()
        assert cfg.blocks == [PomodoroConfig()]

    def test_reads_file(self, tmp_path):
        path = tmp_path / "bar.json"
        path.write_text(
            json.dumps(
                {
                    "blocks": [
                        {"block": "pomodoro", "length": 50, "break_length": 10, "use_nag": True},
                        {"block": "pomodoro"},
                    ]
                }
            ),
            encoding="utf-8",
        )
        cfg = load_config(str(path))
        assert len(cfg.blocks) == 2
        assert cfg.blocks[0].work_sec == 50 * 60
        assert cfg.blocks[0].break_sec == 10 * 60
        assert cfg.blocks[0].use_nag is True
        assert cfg.blocks[0].nag_path == "i3-nagbar"
        assert cfg.blocks[1] == PomodoroConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="cannot read"):
            load_config(str(tmp_path / "nope.json"))

    def test_bad_json(self, tmp_path):
        path = tmp_path / "bar.json"
        path.write_text("{blocks: [", encoding="utf-8")
        with pytest.raises(ConfigError, match="invalid JSON"):
            load_config(str(path))


class TestParseBlocks:
    def test_defaults(self):
        cfg = parse_config({"blocks": [{"block": "pomodoro"}]})
        block = cfg.blocks[0]
        assert block.length == 25
        assert block.break_length == 5
        assert block.message == "Pomodoro over! Take a break!"
        assert block.break_message == "Break over! Time to work!"
        assert block.use_nag is False
        assert block.nag_path == "i3-nagbar"

    def test_all_options(self):
        cfg = parse_config(
            {
                "blocks": [
                    {
                        "block": "pomodoro",
                        "length": 45,
                        "break_length": 15,
                        "message": "stop",
                        "break_message": "go",
                        "use_nag": True,
                        "nag_path": "/usr/local/bin/nag",
                    }
                ]
            }
        )
        assert cfg.blocks[0] == PomodoroConfig(45, 15, "stop", "go", True, "/usr/local/bin/nag")

    def test_empty_blocks_list(self):
        with pytest.raises(ConfigError, match="must not be empty"):
            parse_config({"blocks": []})

    @pytest.mark.parametrize(
        "block, match",
        [
            ({"block": "clock"}, "unsupported block"),
            ({"length": 5}, "unsupported block"),
            ({"block": "pomodoro", "lenght": 5}, "unknown fields: lenght"),
            ({"block": "pomodoro", "length": "25"}, "expected int"),
            ({"block": "pomodoro", "length": True}, "expected integer"),
            ({"block": "pomodoro", "length": 2.5}, "expected int"),
            ({"block": "pomodoro", "break_length": 0}, "positive"),
            ({"block": "pomodoro", "length": -1}, "positive"),
            ({"block": "pomodoro", "use_nag": "yes"}, "expected bool"),
            ({"block": "pomodoro", "message": 3}, "expected str"),
            ({"block": "pomodoro", "nag_path": "  "}, "must not be empty"),
            ({"block": "pomodoro", "message": "over\u0000now"}, "NUL"),
            ({"block": "pomodoro", "break_message": "\x00"}, "NUL"),
            ({"block": "pomodoro", "nag_path": "i3-nag\x00bar"}, "NUL"),
        ],
    )
    def test_invalid_block(self, block, match):
        with pytest.raises(ConfigError, match=match):
            parse_config({"blocks": [block]})

    def test_block_not_object(self):
        with pytest.raises(ConfigError, match=r"blocks\[0\]"):
            parse_config({"blocks": ["pomodoro"]})

    def test_blocks_not_list(self):
        with pytest.raises(ConfigError, match="must be a list"):
            parse_config({"blocks": {"block": "pomodoro"}})

    def test_top_level_must_be_object(self):
        with pytest.raises(ConfigError):
            parse_config([{"block": "pomodoro"}])

    def test_unknown_top_level(self):
        with pytest.raises(ConfigError, match="icons"):
            parse_config({"icons": "awesome"})


class TestParseTheme:
    def test_overrides(self):
        cfg = parse_config({"theme": {"bar_bg": "#000000", "critical_bg": "#FF0000"}})
        assert cfg.theme.bar_bg == "#000000"
        assert cfg.theme.bg(WidgetState.CRITICAL) == "#FF0000"
        # untouched entries keep defaults
        default = BarConfig().theme
        assert cfg.theme.fg(WidgetState.CRITICAL) == default.fg(WidgetState.CRITICAL)
        assert cfg.theme.bg(WidgetState.INFO) == default.bg(WidgetState.INFO)
        assert cfg.blocks == [PomodoroConfig()]

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="unknown keys"):
            parse_config({"theme": {"good_bg": "#fff"}})

    @pytest.mark.parametrize("value", [12, "", "blueish", "#FFF", "#12345G", "#1234567"])
    def test_bad_value(self, value):
        with pytest.raises(ConfigError, match="#RRGGBB"):
            parse_config({"theme": {"idle_fg": value}})

    def test_lowercase_hex_accepted(self):
        cfg = parse_config({"theme": {"info_bg": "#a1b2c3"}})
        assert cfg.theme.bg(WidgetState.INFO) == "#a1b2c3"
