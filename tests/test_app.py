# -*- coding: utf-8 -*-

from unittest.mock import patch

import app


class TestMain:
    def test_parser_defaults(self):
        args = app.build_parser().parse_args([])
        assert args.config is None
        assert args.host == "tk"
        assert args.verbose is False

    def test_config_error_exits_2(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text('{"blocks": [{"block": "pomodoro", "length": 0}]}', encoding="utf-8")

        assert app.main(["-c", str(path), "--host", "i3bar"]) == 2
        assert "config error" in capsys.readouterr().err

    @patch("ui.i3bar_host.I3BarHost.run")
    def test_i3bar_host_gets_configured_blocks(self, mock_run, tmp_path):
        path = tmp_path / "bar.json"
        path.write_text(
            '{"blocks": [{"block": "pomodoro"}, {"block": "pomodoro", "length": 50}]}',
            encoding="utf-8",
        )

        with patch("app.BlockService.build_block") as build_block:
            assert app.main(["-c", str(path), "--host", "i3bar"]) == 0

        assert build_block.call_count == 2
        assert build_block.call_args_list[1].args[0].length == 50
        mock_run.assert_called_once_with()
