"""
Injectable diagnostics channel.

The orchestrator and the providers report what they are doing through a
Diagnostics instance that is passed to them explicitly. Each record is sent
to the standard logging hierarchy and to every subscriber, so the CLI and the
web job streams can observe a run without intercepting global output.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from .logger import get_logger

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@dataclass(frozen=True)
class DiagnosticRecord:
    """A single structured diagnostic emitted during a run."""

    level: str
    message: str
    language: str = ""
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "level": self.level,
            "message": self.message,
            "language": self.language,
            "timestamp": self.timestamp,
            **self.extra,
        }


Subscriber = Callable[[DiagnosticRecord], None]


class Diagnostics:
    """Logger wrapper that fans records out to subscribers."""

    def __init__(self, name: str = "pipeline", logger: Optional[logging.Logger] = None):
        self.logger = logger or get_logger(name)
        self._subscribers: List[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a subscriber and return a function that removes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def emit(self, level: str, message: str, language: str = "", **extra: Any) -> DiagnosticRecord:
        """Log a record and publish it to subscribers."""
        record = DiagnosticRecord(level=level, message=message, language=language, extra=extra)

        prefix = f"[{language}] " if language else ""
        self.logger.log(LEVELS.get(level, logging.INFO), "%s%s", prefix, message)

        for callback in list(self._subscribers):
            try:
                callback(record)
            except Exception:
                self.logger.exception("Diagnostics subscriber %r failed", callback)

        return record

    def debug(self, message: str, language: str = "", **extra: Any) -> DiagnosticRecord:
        return self.emit("debug", message, language, **extra)

    def info(self, message: str, language: str = "", **extra: Any) -> DiagnosticRecord:
        return self.emit("info", message, language, **extra)

    def warning(self, message: str, language: str = "", **extra: Any) -> DiagnosticRecord:
        return self.emit("warning", message, language, **extra)

    def error(self, message: str, language: str = "", **extra: Any) -> DiagnosticRecord:
        return self.emit("error", message, language, **extra)

