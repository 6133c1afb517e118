"""Append-only request log for a Valence session."""

from __future__ import annotations

import json
import logging
from enum import IntEnum
from typing import Any, Optional

log = logging.getLogger(__name__)

DEFAULT_LOG_FILE = "valence.log"

WRITE_METHODS = frozenset({"POST", "PUT", "DELETE"})


class LogMode(IntEnum):
    """Which calls end up in the request log."""

    NONE = 0
    WRITES = 1
    ALL = 2


class RequestLog:
    """Writes one line per API call to a file.

    Lines look like ``2024-05-01 13:37:00 POST /d2l/api/... {"Name": "x"} 200``.
    The file handle stays open until the log is reconfigured or closed.
    Records go straight to the file handler, so no logger is registered
    with the `logging` module for a session.
    """

    def __init__(self) -> None:
        self.mode = LogMode.NONE
        self._handler: Optional[logging.FileHandler] = None

    @property
    def filename(self) -> Optional[str]:
        return self._handler.baseFilename if self._handler else None

    def configure(self, mode: LogMode, log_file: Optional[str] = None) -> None:
        """Switch mode and (re)open the log file, closing any previous one."""
        self.close()
        self.mode = LogMode(mode)

        handler = logging.FileHandler(log_file or DEFAULT_LOG_FILE, mode="a")
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
        )
        self._handler = handler
        log.debug("Request log now %s at %s", self.mode.name, handler.baseFilename)

    def close(self) -> None:
        if self._handler is not None:
            self._handler.close()
            self._handler = None

    def wants(self, method: str, file_transfer: bool = False) -> bool:
        if self._handler is None or self.mode == LogMode.NONE:
            return False
        if self.mode == LogMode.ALL:
            return True
        # file transfers are only recorded in ALL mode
        return not file_transfer and method.upper() in WRITE_METHODS

    def record(
        self,
        route: str,
        method: str,
        data: Any,
        status_code: Optional[int],
        file_transfer: bool = False,
    ) -> None:
        if not self.wants(method, file_transfer):
            return
        payload = json.dumps(data if data is not None else [])
        self._handler.handle(
            logging.makeLogRecord(
                {
                    "name": __name__,
                    "levelno": logging.INFO,
                    "levelname": "INFO",
                    "msg": "%s %s %s %s",
                    "args": (method.upper(), route, payload, status_code),
                }
            )
        )
