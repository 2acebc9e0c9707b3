from __future__ import annotations

from httpx import TransportError


class HttpInterceptError(Exception):
    """Base class for errors raised by http_intercept itself."""


class CancellationError(HttpInterceptError):
    """Raised by a transport when the call carries a cancelled signal."""

    def __init__(self, reason: str = "cancelled") -> None:
        super().__init__(reason)
        self.reason = reason


class InterceptorContractError(HttpInterceptError, TypeError):
    """An interceptor or route handler returned a value of the wrong type."""


class RedispatchLimitError(HttpInterceptError):
    def __init__(self, depth: int, limit: int) -> None:
        super().__init__(f"dispatch nested {depth} levels deep (limit {limit})")
        self.depth = depth
        self.limit = limit


__all__ = [
    "HttpInterceptError",
    "CancellationError",
    "InterceptorContractError",
    "RedispatchLimitError",
    "TransportError",
]
