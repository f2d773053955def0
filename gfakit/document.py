"""
GFA document base - the in-memory collection of parsed records.

A document is a bag of per-kind lists. Nothing is deduplicated or sorted:
insert() appends to the list that matches the record's kind, and iteration
yields headers first, then every other kind in the order the dialect
declares them (RECORD_LISTS).
"""

from __future__ import annotations

import itertools
from pathlib import Path
from typing import Any, ClassVar, Iterator

from gfakit.spec import FIELD_SEPARATOR


def render_line(kind: bytes, fields: list[bytes], optional: Any) -> bytes:
    """Join a record kind, its fields and its tags into one GFA line."""
    return FIELD_SEPARATOR.join([kind, *fields, *optional.render()])


class GFADocument:
    """Shared behaviour of GFA and GFA2. Subclasses are dataclasses."""

    # (record kind letter, list attribute), in output order
    RECORD_LISTS: ClassVar[tuple[tuple[bytes, str], ...]] = ()

    def _list_for(self, kind: bytes) -> list:
        for letter, attr in self.RECORD_LISTS:
            if letter == kind:
                return getattr(self, attr)
        raise TypeError(f"{type(self).__name__} cannot hold {kind!r} records")

    def insert(self, record: Any) -> None:
        """Append a record to the list for its kind."""
        self._list_for(record.kind).append(record)

    def lines(self) -> Iterator[Any]:
        """Iterate over all records without consuming the document."""
        return itertools.chain.from_iterable(getattr(self, attr) for _, attr in self.RECORD_LISTS)

    def __iter__(self) -> Iterator[Any]:
        return self.lines()

    def drain(self) -> Iterator[Any]:
        """Iterate over all records, leaving the document empty."""
        taken = []
        for _, attr in self.RECORD_LISTS:
            taken.append(getattr(self, attr))
            setattr(self, attr, [])
        return itertools.chain.from_iterable(taken)

    def __len__(self) -> int:
        return sum(len(getattr(self, attr)) for _, attr in self.RECORD_LISTS)

    def counts(self) -> dict[str, int]:
        return {attr: len(getattr(self, attr)) for _, attr in self.RECORD_LISTS}

    def render(self) -> bytes:
        from gfakit.writer import GFAWriter
        return GFAWriter.serialize(self)

    def __bytes__(self) -> bytes:
        return self.render()

    def write(self, path: str | Path) -> int:
        """Write to a file. Returns bytes written."""
        from gfakit.writer import GFAWriter
        return GFAWriter.write(self, path)

    def __repr__(self) -> str:
        counts = ", ".join(f"{k}={v}" for k, v in self.counts().items())
        return f"{type(self).__name__}({counts})"
