"""Client-facing exports for http_intercept."""

from .config import HttpSettings
from .dispatcher import Http
from .emitter import LoggingEmitter, NoopEmitter, RequestEmitter, RequestRecord
from .errors import (
    CancellationError,
    HttpInterceptError,
    InterceptorContractError,
    RedispatchLimitError,
    TransportError,
)
from .headers import HeaderSet, overlay_headers
from .models import RequestOptions
from .registry import Blacklist, Intercept, InterceptorSet, RouteTable
from .signals import ABORTED, CancelSignal
from .transport import HttpxTransport, Transport
from .urls import is_absolute, join_url, resolve_url

__all__ = [
    "Http",
    "HttpSettings",
    "RequestOptions",
    "HeaderSet",
    "overlay_headers",
    "Blacklist",
    "Intercept",
    "InterceptorSet",
    "RouteTable",
    "CancelSignal",
    "ABORTED",
    "Transport",
    "HttpxTransport",
    "RequestEmitter",
    "RequestRecord",
    "NoopEmitter",
    "LoggingEmitter",
    "HttpInterceptError",
    "CancellationError",
    "InterceptorContractError",
    "RedispatchLimitError",
    "TransportError",
    "resolve_url",
    "join_url",
    "is_absolute",
]
