"""Console logging for the report CLI.

Every module logs through ``logging.getLogger(__name__)``, so all of them sit
under the ``perps_report`` logger. ``configure_console_log`` is the one place
that attaches the console handler and picks the level for that whole tree.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict

PACKAGE_LOGGER = "perps_report"
CONSOLE_HANDLER = "perps_report.console"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class SimpleLogger:
    """CLI-side wrapper: plain messages with an optional payload, banners, run timers."""

    def __init__(self, name: str = PACKAGE_LOGGER) -> None:
        self._logger = logging.getLogger(name)
        self._timers: Dict[str, datetime] = {}

    def debug(self, msg: str, payload: Any | None = None) -> None:
        self._logger.debug(self._format(msg, payload))

    def error(self, msg: str, payload: Any | None = None) -> None:
        self._logger.error(self._format(msg, payload))

    def banner(self, msg: str) -> None:
        self._logger.info(f"==== {msg} ====")

    def start_timer(self, name: str) -> None:
        self._timers[name] = datetime.now()

    def end_timer(self, name: str) -> None:
        start = self._timers.pop(name, None)
        if start:
            self._logger.info(f"{name} completed in {datetime.now() - start}")

    @staticmethod
    def _format(msg: str, payload: Any | None) -> str:
        return msg if payload is None else f"{msg} {payload}"


log = SimpleLogger()


def configure_console_log(debug: bool = False, level: str | None = None) -> logging.Logger:
    """Attach the console handler (once) and set the package log level.

    ``debug`` wins over ``level``; ``level`` is a name such as ``"WARNING"``.
    """
    lvl = logging.DEBUG if debug else logging.getLevelName((level or "INFO").upper())
    if not isinstance(lvl, int):
        lvl = logging.INFO

    package = logging.getLogger(PACKAGE_LOGGER)
    if not any(h.get_name() == CONSOLE_HANDLER for h in package.handlers):
        handler = logging.StreamHandler()
        handler.set_name(CONSOLE_HANDLER)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        package.addHandler(handler)
    package.setLevel(lvl)
    return package


__all__ = ["SimpleLogger", "log", "configure_console_log"]
