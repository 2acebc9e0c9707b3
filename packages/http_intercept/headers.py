"""Header containers and the default-header overlay."""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping, Optional, Tuple, Union

HeaderSource = Union["HeaderSet", Mapping[str, str], Iterable[Tuple[str, str]]]


class HeaderSet:
    """Insertion-ordered header mapping keyed by lower-cased name.

    Setting an existing name replaces its value in place without moving it.
    """

    def __init__(self, source: Optional[HeaderSource] = None) -> None:
        self._items: dict[str, str] = {}
        if source is None:
            return
        pairs = source.items() if hasattr(source, "items") else source
        for name, value in pairs:
            self.set(name, value)

    def set(self, name: str, value: str) -> None:
        self._items[name.lower()] = str(value)

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self._items.get(name.lower(), default)

    def has(self, name: str) -> bool:
        return name.lower() in self._items

    def delete(self, name: str) -> None:
        self._items.pop(name.lower(), None)

    def clear(self) -> None:
        self._items.clear()

    def keys(self) -> list[str]:
        return list(self._items)

    def items(self) -> list[tuple[str, str]]:
        return list(self._items.items())

    def copy(self) -> "HeaderSet":
        return HeaderSet(self._items)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __getitem__(self, name: str) -> str:
        return self._items[name.lower()]

    def __setitem__(self, name: str, value: str) -> None:
        self.set(name, value)

    def __delitem__(self, name: str) -> None:
        del self._items[name.lower()]

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HeaderSet):
            return self._items == other._items
        if isinstance(other, Mapping):
            return self._items == {str(k).lower(): str(v) for k, v in other.items()}
        return NotImplemented

    def __repr__(self) -> str:
        return f"HeaderSet({self._items!r})"


def overlay_headers(
    caller: Optional[HeaderSource], defaults: HeaderSet
) -> HeaderSet:
    """Return a fresh set seeded from ``caller`` with ``defaults`` filled in.

    Caller values always win; defaults only fill names the caller left unset.
    """

    merged = HeaderSet(caller)
    for name, value in defaults.items():
        if not merged.has(name):
            merged.set(name, value)
    return merged
