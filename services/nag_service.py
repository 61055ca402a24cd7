# -*- coding: utf-8 -*-

import logging
import subprocess

from domain.models import NagLevel, NotifyError

logger = logging.getLogger(__name__)


class NagNotifier:
    """
    Launches the nag program (i3-nagbar by default) and returns right away.
    The child is never waited on, so a hung nagbar can't stall the bar.
    """

    def __init__(self, nag_path: str = "i3-nagbar"):
        self.nag_path = str(nag_path)

    def command(self, message: str, level: NagLevel):
        return [self.nag_path, "-t", level.value, "-m", message]

    def notify(self, message: str, level: NagLevel) -> None:
        cmd = self.command(message, level)
        logger.debug("launching %s", cmd)
        try:
            subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except (OSError, ValueError) as e:
            # ValueError: NUL byte in the program path or message
            raise NotifyError(f"Failed to start {self.nag_path}: {e}") from e
