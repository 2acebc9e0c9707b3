from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional

from .headers import HeaderSet, HeaderSource
from .signals import CancelSignal

DEFAULT_METHOD = "GET"


@dataclass
class RequestOptions:
    """Per-call request options, mutated in place as the pipeline runs.

    ``body`` is accepted as another name for ``content``.
    """

    method: Optional[str] = None
    headers: Optional[HeaderSource] = None
    content: Any = None
    json: Any = None
    params: Optional[Mapping[str, Any]] = None
    timeout: Optional[float] = None
    signal: Optional[CancelSignal] = None
    extensions: dict[str, Any] = field(default_factory=dict)

    @property
    def body(self) -> Any:
        return self.content

    @body.setter
    def body(self, value: Any) -> None:
        self.content = value

    @classmethod
    def coerce(
        cls, options: "RequestOptions | Mapping[str, Any] | None"
    ) -> "RequestOptions":
        if options is None:
            return cls()
        if isinstance(options, RequestOptions):
            return options
        options = dict(options)
        if "body" in options:
            if options.get("content") is not None:
                raise ValueError("pass either 'body' or 'content', not both")
            options["content"] = options.pop("body")
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in options.items() if k in known}
        extensions = dict(kwargs.pop("extensions", None) or {})
        extensions.update({k: v for k, v in options.items() if k not in known})
        return cls(**kwargs, extensions=extensions)

    def header_set(self) -> HeaderSet:
        if isinstance(self.headers, HeaderSet):
            return self.headers
        return HeaderSet(self.headers)
