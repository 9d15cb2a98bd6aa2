from __future__ import annotations

import logging
from abc import ABC, abstractmethod


# Logging configuration
logger = logging.getLogger("library_lending")
logger.setLevel(logging.INFO)

if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


class EventLogger(ABC):
    """Sink for human-readable lending events."""

    @abstractmethod
    def log(self, message: str) -> None:
        pass


class ConsoleLogger(EventLogger):
    """
    Forwards lending events to a stdlib logger at INFO level.
    """

    def __init__(self, name: str = "library_lending.events") -> None:
        self._logger = logging.getLogger(name)

    def log(self, message: str) -> None:
        self._logger.info(message)
