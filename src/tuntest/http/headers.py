"""Ordered, case-insensitive HTTP header map."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, MutableMapping

from typing_extensions import override


def canonical_name(name: str) -> str:
    """Return the canonical form of a header name, e.g. ``content-type`` -> ``Content-Type``."""
    return "-".join(part[:1].upper() + part[1:].lower() for part in name.strip().split("-"))


class Headers(MutableMapping[str, str]):
    """
    Header map keeping insertion order with case-insensitive keys.

    Keys are stored canonicalized. Setting an existing key replaces its value
    but keeps its original position, so serialized output is deterministic.
    """

    def __init__(self, items: Mapping[str, str] | Iterable[tuple[str, str]] | None = None):
        self._items: dict[str, str] = {}
        if items:
            self.update(items)

    @override
    def __getitem__(self, name: str) -> str:
        return self._items[canonical_name(name)]

    @override
    def __setitem__(self, name: str, value: str) -> None:
        self._items[canonical_name(name)] = str(value)

    @override
    def __delitem__(self, name: str) -> None:
        del self._items[canonical_name(name)]

    @override
    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and canonical_name(name) in self._items

    @override
    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    @override
    def __len__(self) -> int:
        return len(self._items)

    @override
    def __eq__(self, other: object) -> bool:
        if isinstance(other, Headers):
            return list(self.items()) == list(other.items())
        if isinstance(other, Mapping):
            return self == Headers(other)
        return NotImplemented

    @override
    def __repr__(self) -> str:
        return f"Headers({list(self.items())!r})"

    def copy(self) -> "Headers":
        return Headers(self.items())

    def to_bytes(self) -> bytes:
        """Wire form of the header block, without the terminating blank line."""
        return b"".join(f"{k}: {v}\r\n".encode("latin-1") for k, v in self._items.items())
