"""URL helpers used by the dispatcher before any stage runs."""

from __future__ import annotations

import re
from typing import Union

import httpx

RequestTarget = Union[str, httpx.URL, httpx.Request]

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*://")


def resolve_url(target: RequestTarget) -> str:
    """Return the string URL carried by ``target``."""

    if isinstance(target, str):
        return target
    if isinstance(target, httpx.URL):
        return str(target)
    if isinstance(target, httpx.Request):
        return str(target.url)
    raise TypeError(f"unsupported request target: {type(target).__name__}")


def is_absolute(url: str) -> bool:
    # Requires "scheme://", not just an "http" prefix: "httpbin/x" is joined
    # and "ftp://host" is not.
    return bool(_SCHEME_RE.match(url))


def join_url(base: str, path: str) -> str:
    """Join ``base`` and ``path`` with exactly one slash at the seam.

    Only one trailing slash is stripped from ``base`` and only one leading
    slash is added to ``path``; anything beyond that is left as given.
    """

    if not base:
        return path
    if base.endswith("/"):
        base = base[:-1]
    if not path.startswith("/"):
        path = "/" + path
    return base + path
