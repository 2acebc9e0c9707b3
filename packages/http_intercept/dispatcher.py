"""Request dispatch pipeline for http_intercept.

``Http.dispatch`` composes the configured base URL, default headers,
blacklist and interceptor collections around a transport call. Each call runs
the same fixed sequence of stages:

1. normalize the method and resolve the target, joining the base URL onto
   relative targets;
2. abort blacklisted targets by handing the transport a cancelled signal;
3. fill in default headers the caller did not set;
4. run request interceptors in insertion order;
5. return a matching route handler's response without touching the network;
6. send through the transport;
7. run response interceptors in insertion order over the transport response.

Collections are read at the moment each stage runs, so registrations made
while a call is suspended are visible to that call's later stages.
"""

from __future__ import annotations

import inspect
import logging
from contextvars import ContextVar
from typing import Any, Mapping, Optional

import httpx

from .config import HttpSettings
from .emitter import DEFAULT_EMITTER, RequestEmitter, RequestRecord
from .errors import InterceptorContractError, RedispatchLimitError
from .headers import HeaderSet, overlay_headers
from .models import DEFAULT_METHOD, RequestOptions
from .registry import Blacklist, Intercept
from .signals import ABORTED
from .transport import HttpxTransport, Transport
from .urls import RequestTarget, is_absolute, join_url, resolve_url

logger = logging.getLogger(__name__)

# Nesting depth of in-flight dispatches per Http instance, keyed by id().
_DISPATCH_DEPTHS: ContextVar[dict[int, int]] = ContextVar(
    "http_intercept_dispatch_depths", default={}
)


# ---------------------------------------------------------------------------
# Helper utilities
# ---------------------------------------------------------------------------


async def _call(func, *args):
    result = func(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


def _expect_options(value: Any, interceptor) -> RequestOptions:
    if not isinstance(value, RequestOptions):
        raise InterceptorContractError(
            f"request interceptor {interceptor!r} returned "
            f"{type(value).__name__}, expected RequestOptions"
        )
    return value


def _expect_response(value: Any, source) -> httpx.Response:
    if not isinstance(value, httpx.Response):
        raise InterceptorContractError(
            f"{source!r} returned {type(value).__name__}, expected httpx.Response"
        )
    return value


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------


class Http:
    """Stateful request dispatcher.

    ``base``, ``headers``, ``blacklist`` and ``intercept`` may be changed at
    any time; each call reads them when the corresponding stage runs.
    """

    def __init__(
        self,
        transport: Optional[Transport] = None,
        *,
        base: str = "",
        emitter: RequestEmitter = DEFAULT_EMITTER,
        max_redispatch_depth: Optional[int] = None,
    ) -> None:
        self.base = base
        self.headers = HeaderSet()
        self.blacklist = Blacklist()
        self.intercept = Intercept()
        self.transport: Transport = (
            HttpxTransport() if transport is None else transport
        )
        self.emitter = emitter
        self.max_redispatch_depth = max_redispatch_depth

    @classmethod
    def from_settings(
        cls,
        settings: HttpSettings,
        transport: Optional[Transport] = None,
        *,
        emitter: RequestEmitter = DEFAULT_EMITTER,
    ) -> "Http":
        if transport is None:
            transport = HttpxTransport(timeout=settings.timeout)
        http = cls(
            transport,
            base=settings.base_url,
            emitter=emitter,
            max_redispatch_depth=settings.max_redispatch_depth,
        )
        for name, value in settings.default_headers.items():
            http.headers.set(name, value)
        return http

    async def dispatch(
        self,
        target: RequestTarget,
        options: RequestOptions | Mapping[str, Any] | None = None,
    ) -> httpx.Response:
        depths = dict(_DISPATCH_DEPTHS.get())
        depth = depths.get(id(self), 0) + 1
        limit = self.max_redispatch_depth
        if limit is not None and depth > limit + 1:
            logger.warning(f"Re-dispatch depth {depth - 1} exceeds limit {limit}")
            raise RedispatchLimitError(depth - 1, limit)

        depths[id(self)] = depth
        token = _DISPATCH_DEPTHS.set(depths)
        try:
            return await self._run(target, RequestOptions.coerce(options))
        finally:
            _DISPATCH_DEPTHS.reset(token)

    async def _run(
        self, target: RequestTarget, options: RequestOptions
    ) -> httpx.Response:
        # Normalize
        if not options.method:
            options.method = DEFAULT_METHOD
        raw_url = resolve_url(target)
        url = raw_url
        if self.base and not is_absolute(raw_url):
            url = join_url(self.base, raw_url)

        # Gate
        if self.blacklist.is_blocked(target, raw_url, url):
            logger.debug(f"Blocked {options.method} {url}")
            options.signal = ABORTED
            self.emitter.emit(
                RequestRecord(
                    method=options.method, target=target, url=url, outcome="blocked"
                )
            )
            return await self.transport.send(url, options)

        # Header overlay
        options.headers = overlay_headers(options.headers, self.headers)

        # Request chain
        for interceptor in self.intercept.request:
            options = _expect_options(await _call(interceptor, url, options), interceptor)

        # Route check
        if len(self.intercept.route):
            matched = self.intercept.route.match(url)
            if matched is not None:
                pattern, handler = matched
                logger.debug(f"Routed {options.method} {url} to {pattern.pattern!r}")
                response = _expect_response(await _call(handler, url, options), handler)
                self.emitter.emit(
                    RequestRecord(
                        method=options.method or DEFAULT_METHOD,
                        target=target,
                        url=url,
                        outcome="routed",
                        route=pattern.pattern,
                    )
                )
                return response

        # Transport
        logger.debug(f"Sending {options.method} {url}")
        response = await self.transport.send(url, options)
        self.emitter.emit(
            RequestRecord(
                method=options.method or DEFAULT_METHOD,
                target=target,
                url=url,
                outcome="transport",
            )
        )

        # Response chain
        for interceptor in self.intercept.response:
            response = _expect_response(
                await _call(interceptor, options, response), interceptor
            )
        return response

    async def aclose(self) -> None:
        close = getattr(self.transport, "aclose", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> "Http":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
