"""Utilities for recording dispatched requests."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Literal, Optional, Protocol

Outcome = Literal["blocked", "routed", "transport"]

logger = logging.getLogger(__name__)


@dataclass
class RequestRecord:
    method: str
    target: Any
    url: str
    outcome: Outcome
    route: Optional[str] = None


class RequestEmitter(Protocol):
    def emit(self, record: RequestRecord) -> None:  # pragma: no cover - interface
        ...


class NoopEmitter:
    def emit(self, record: RequestRecord) -> None:  # pragma: no cover
        return None


class LoggingEmitter:
    def __init__(self, log: Optional[logging.Logger] = None, level: int = logging.INFO):
        self._log = log or logger
        self._level = level

    def emit(self, record: RequestRecord) -> None:
        suffix = f" via route {record.route}" if record.route else ""
        self._log.log(
            self._level,
            f"{record.method} {record.url} -> {record.outcome}{suffix}",
        )


DEFAULT_EMITTER: RequestEmitter = NoopEmitter()
