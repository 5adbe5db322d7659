"""
User-facing notifications (toasts in the UI).
Purely observational; nothing in the data layer depends on them.
"""

import logging


class Notifier:
    """Receives sync and connectivity notices. The base class drops them."""

    def info(self, message: str) -> None:
        pass

    def success(self, message: str) -> None:
        pass

    def warning(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass


class LoggingNotifier(Notifier):
    """Writes notices to the ``dairy_ledger.notifications`` logger."""

    def __init__(self, logger_name: str = "dairy_ledger.notifications"):
        self._logger = logging.getLogger(logger_name)

    def info(self, message: str) -> None:
        self._logger.info(message)

    def success(self, message: str) -> None:
        self._logger.info(message)

    def warning(self, message: str) -> None:
        self._logger.warning(message)

    def error(self, message: str) -> None:
        self._logger.error(message)
