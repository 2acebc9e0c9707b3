"""Transport collaborators that put a request on the wire."""

from __future__ import annotations

from typing import Optional, Protocol

import httpx

from .models import DEFAULT_METHOD, RequestOptions

# Request extensions httpx and httpcore act on; other keys stay with the
# options for interceptors and are not sent.
HTTPX_EXTENSION_KEYS = frozenset({"sni_hostname", "target", "trace"})


def _httpx_extensions(extensions: dict) -> Optional[dict]:
    selected = {k: v for k, v in extensions.items() if k in HTTPX_EXTENSION_KEYS}
    return selected or None


class Transport(Protocol):
    async def send(self, url: str, options: RequestOptions) -> httpx.Response:
        """Send ``options`` to ``url`` and return the response.

        Implementations must fail with ``CancellationError`` before touching
        the network when ``options.signal`` is already cancelled, and let
        transport-level failures propagate unmodified.
        """
        ...


class HttpxTransport:
    """Transport backed by an ``httpx.AsyncClient``.

    A client created here is owned and closed by :meth:`aclose`; a client
    passed in is left for the caller to close.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        timeout: Optional[float] = None,
    ) -> None:
        self._owns_client = client is None
        if client is None:
            client = (
                httpx.AsyncClient()
                if timeout is None
                else httpx.AsyncClient(timeout=timeout)
            )
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def send(self, url: str, options: RequestOptions) -> httpx.Response:
        if options.signal is not None:
            options.signal.raise_if_cancelled()

        headers = options.header_set().items()
        kwargs = {}
        if options.timeout is not None:
            kwargs["timeout"] = options.timeout
        request = self._client.build_request(
            (options.method or DEFAULT_METHOD).upper(),
            url,
            headers=headers,
            content=options.content,
            json=options.json,
            params=options.params,
            extensions=_httpx_extensions(options.extensions),
            **kwargs,
        )
        return await self._client.send(request)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
