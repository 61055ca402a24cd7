#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import argparse
import logging
import sys

from services.block_service import BlockService
from storage.config_file import ConfigError, load_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Pomodoro block for a status bar")
    parser.add_argument("-c", "--config", help="JSON config file (defaults if omitted)")
    parser.add_argument(
        "--host",
        choices=("tk", "i3bar"),
        default="tk",
        help="tk: small always-on-top window; i3bar: status_command protocol on stdout",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    # stderr only: stdout belongs to i3bar in i3bar mode
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"config error: {e}", file=sys.stderr)
        return 2

    block_service = BlockService()
    for block_config in config.blocks:
        block_service.build_block(block_config)

    if args.host == "i3bar":
        from ui.i3bar_host import I3BarHost

        I3BarHost(block_service, config.theme).run()
    else:
        from ui.status_bar import StatusBar

        StatusBar(block_service, config.theme).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
