"""Canonical tabular model shared by extraction, projection, export and rendering."""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator


def _upper_char(ch: str) -> str:
    upper = ch.upper()
    return upper if len(upper) == 1 else ch


def fold_case(text: str) -> str:
    """
    Ordinal ignore-case key: each character uppercased on its own.

    Characters whose uppercase form is longer are kept as they are, so
    ``"Straße"`` and ``"STRASSE"`` fold to different keys.
    """
    return "".join(_upper_char(ch) for ch in text)


class RowRecord(MutableMapping):
    """
    One extracted row: header -> normalized cell text.

    Keys compare case-insensitively; the casing of the last write is kept for
    iteration. Duplicate header names collide, last write wins.
    """

    __slots__ = ("_items",)

    def __init__(self, items=None) -> None:
        self._items: dict[str, tuple[str, str]] = {}
        if items:
            self.update(items)

    @staticmethod
    def _fold(key: str) -> str:
        return fold_case(key)

    def __getitem__(self, key: str) -> str:
        return self._items[self._fold(key)][1]

    def __setitem__(self, key: str, value: str) -> None:
        self._items[self._fold(key)] = (key, value)

    def __delitem__(self, key: str) -> None:
        del self._items[self._fold(key)]

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._fold(key) in self._items

    def lookup(self, header: str) -> str:
        """Value for ``header``, or ``""`` when the row has no such key."""
        entry = self._items.get(self._fold(header))
        return entry[1] if entry is not None else ""

    def __repr__(self) -> str:
        return f"RowRecord({dict(self.items())!r})"


@dataclass(frozen=True)
class TabularData:
    sheet_name: str
    headers: tuple[str, ...]
    rows: tuple[RowRecord, ...]

    def with_headers(self, headers) -> "TabularData":
        # Rows are shared, not copied.
        return TabularData(self.sheet_name, tuple(headers), self.rows)


@dataclass(frozen=True)
class RenderContext:
    title: str


def resolve_title(source: str | Path, sheet_name: str, override: str | None = None) -> str:
    if override is not None:
        return override
    return f"{Path(source).name} — {sheet_name}"
