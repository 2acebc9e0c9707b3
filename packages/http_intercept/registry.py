"""Interceptor collections for http_intercept.

This module defines the containers the dispatcher reads at each pipeline
stage: ordered duplicate-free interceptor sets, the pattern-keyed route table
and the request blacklist. All of them are long-lived and may be mutated
between or during calls; the dispatcher reads them at the time of use.
"""

from __future__ import annotations

import re
from typing import (
    Any,
    Awaitable,
    Callable,
    Generic,
    Iterator,
    Optional,
    TypeVar,
    Union,
)

import httpx

from .models import RequestOptions
from .urls import RequestTarget


# ---------------------------------------------------------------------------
# Interceptor signatures
# ---------------------------------------------------------------------------

RequestInterceptor = Callable[
    [str, RequestOptions], Union[RequestOptions, Awaitable[RequestOptions]]
]
ResponseInterceptor = Callable[
    [RequestOptions, httpx.Response],
    Union[httpx.Response, Awaitable[httpx.Response]],
]
RouteHandler = Callable[
    [str, RequestOptions], Union[httpx.Response, Awaitable[httpx.Response]]
]

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Ordered sets
# ---------------------------------------------------------------------------


class InterceptorSet(Generic[T]):
    """Insertion-ordered collection that ignores repeated additions.

    Adding an interceptor that is already present is a no-op: it neither
    duplicates the entry nor moves it to the end.
    """

    def __init__(self) -> None:
        self._items: dict[Any, T] = {}

    @staticmethod
    def _key(item: T) -> Any:
        try:
            hash(item)
        except TypeError:
            return ("id", id(item))
        return item

    def add(self, item: T) -> T:
        self._items.setdefault(self._key(item), item)
        return item

    def delete(self, item: T) -> bool:
        return self._items.pop(self._key(item), None) is not None

    def clear(self) -> None:
        self._items.clear()

    def __contains__(self, item: object) -> bool:
        return self._key(item) in self._items  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[T]:
        # Live view: additions made while iterating are picked up.
        seen: set[Any] = set()
        while True:
            for key, item in list(self._items.items()):
                if key not in seen:
                    break
            else:
                return
            seen.add(key)
            yield item

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._items.values())!r})"


# ---------------------------------------------------------------------------
# Route table
# ---------------------------------------------------------------------------


class RouteTable:
    """Ordered mapping of regex pattern to route handler.

    Patterns given as strings are compiled on insertion. Re-setting an
    existing pattern replaces its handler but keeps its position.
    """

    def __init__(self) -> None:
        self._routes: dict[re.Pattern[str], RouteHandler] = {}

    @staticmethod
    def _compile(pattern: Union[str, re.Pattern[str]]) -> re.Pattern[str]:
        if isinstance(pattern, str):
            return re.compile(pattern)
        return pattern

    def set(
        self, pattern: Union[str, re.Pattern[str]], handler: RouteHandler
    ) -> re.Pattern[str]:
        compiled = self._compile(pattern)
        self._routes[compiled] = handler
        return compiled

    def get(self, pattern: Union[str, re.Pattern[str]]) -> Optional[RouteHandler]:
        return self._routes.get(self._compile(pattern))

    def delete(self, pattern: Union[str, re.Pattern[str]]) -> bool:
        return self._routes.pop(self._compile(pattern), None) is not None

    def clear(self) -> None:
        self._routes.clear()

    def match(self, url: str) -> Optional[tuple[re.Pattern[str], RouteHandler]]:
        """Return the first registered ``(pattern, handler)`` matching ``url``."""

        for pattern, handler in list(self._routes.items()):
            if pattern.search(url):
                return pattern, handler
        return None

    def __contains__(self, pattern: object) -> bool:
        if not isinstance(pattern, (str, re.Pattern)):
            return False
        return self._compile(pattern) in self._routes

    def __iter__(self) -> Iterator[re.Pattern[str]]:
        return iter(list(self._routes))

    def __len__(self) -> int:
        return len(self._routes)


# ---------------------------------------------------------------------------
# Blacklist
# ---------------------------------------------------------------------------


class Blacklist:
    """Set of request targets and URL strings whose calls are aborted.

    Entries are matched as given: a relative path and its absolute form are
    distinct entries and must both be added to block both spellings.
    """

    def __init__(self) -> None:
        self._entries: dict[Any, RequestTarget] = {}

    @staticmethod
    def _key(entry: RequestTarget) -> Any:
        try:
            hash(entry)
        except TypeError:
            return ("id", id(entry))
        return entry

    def add(self, entry: RequestTarget) -> None:
        self._entries.setdefault(self._key(entry), entry)

    def delete(self, entry: RequestTarget) -> bool:
        return self._entries.pop(self._key(entry), None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def is_blocked(self, target: RequestTarget, *urls: str) -> bool:
        if target in self:
            return True
        return any(url in self for url in urls)

    def __contains__(self, entry: object) -> bool:
        return self._key(entry) in self._entries  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[RequestTarget]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class Intercept:
    """The three interception collections consulted by a dispatcher."""

    def __init__(self) -> None:
        self.request: InterceptorSet[RequestInterceptor] = InterceptorSet()
        self.response: InterceptorSet[ResponseInterceptor] = InterceptorSet()
        self.route = RouteTable()

    def clear(self) -> None:
        self.request.clear()
        self.response.clear()
        self.route.clear()
