"""Cancellation signals attached to request options."""

from __future__ import annotations

from typing import Optional

from .errors import CancellationError


class CancelSignal:
    """One-way cancellation flag, equivalent to an abort signal."""

    def __init__(self) -> None:
        self._cancelled = False
        self._reason: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def cancel(self, reason: str = "cancelled") -> None:
        if self._cancelled:
            return
        self._cancelled = True
        self._reason = reason

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise CancellationError(self._reason or "cancelled")

    def __repr__(self) -> str:
        state = f"cancelled={self._reason!r}" if self._cancelled else "active"
        return f"CancelSignal({state})"


def _aborted() -> CancelSignal:
    signal = CancelSignal()
    signal.cancel()
    return signal


# Shared by every blacklisted call; already terminal.
ABORTED = _aborted()
