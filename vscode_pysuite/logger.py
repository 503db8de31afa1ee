import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "PYSUITE_LOG_LEVEL"
_FORMAT = "%(levelname)s [%(name)s] %(message)s"


class Logger:
    """Thin per-component wrapper around the standard logging module."""

    def __init__(self, name: str, level: Optional[str] = None) -> None:
        self._logger = logging.getLogger(f"vscode_pysuite.{name}")
        root = logging.getLogger("vscode_pysuite")
        if not root.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(_FORMAT))
            root.addHandler(handler)
        level_name = (level or os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
        root.setLevel(getattr(logging, level_name, logging.WARNING))

    def debug(self, message: str) -> None:
        self._logger.debug(message)

    def info(self, message: str) -> None:
        self._logger.info(message)

    def warning(self, message: str) -> None:
        self._logger.warning(message)

    def error(self, message: str) -> None:
        self._logger.error(message)
