"""
GFA optional fields (tags).

A tag is a single whitespace-free token `TT:t:VALUE`:
  - TT     two byte tag name
  - t      type character, one of A i f Z J H B
  - VALUE  typed payload, validated against the type's own grammar

Two interchangeable collections hold the tags of a record:
  - OptionalFields keeps every tag, in input order, duplicates included
  - NoOptionalFields validates and throws everything away

Usage:
    field = OptField.parse(b"LN:i:123")
    field.value                          # 123
    field.render()                       # b"LN:i:123"

    tags = OptionalFields.parse([b"LN:i:5", b"RC:i:9"])
    tags.get(b"RC").value                # 9
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, Iterator

from gfakit.spec import ARRAY_SUBTYPES, INT64_MAX, INT64_MIN, PATTERNS, TAG_TYPES

logger = logging.getLogger(__name__)


# =============================================================================
# Values
# =============================================================================

@dataclass(frozen=True)
class TagArray:
    """Payload of a `B` tag: a numeric subtype and its values."""

    subtype: str
    values: tuple

    def __post_init__(self) -> None:
        if self.subtype not in ARRAY_SUBTYPES:
            raise ValueError(f"Invalid array subtype: {self.subtype!r}")
        object.__setattr__(self, "values", tuple(self.values))
        if not self.values:
            raise ValueError("Array tag must hold at least one value")
        bounds = ARRAY_SUBTYPES[self.subtype]
        for v in self.values:
            if bounds is None:
                if not isinstance(v, float) or not math.isfinite(v):
                    raise ValueError(f"Array subtype 'f' needs finite floats, got {v!r}")
            else:
                if isinstance(v, bool) or not isinstance(v, int):
                    raise ValueError(f"Array subtype {self.subtype!r} needs ints, got {v!r}")
                if not bounds[0] <= v <= bounds[1]:
                    raise ValueError(f"Value {v} out of range for subtype {self.subtype!r}")

    def render(self) -> bytes:
        return self.subtype.encode("ascii") + b",".join(_render_number(v) for v in self.values)

    def __iter__(self) -> Iterator:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)


def _render_number(value: int | float) -> bytes:
    return repr(value).encode("ascii")


def _parse_array(raw: bytes) -> TagArray | None:
    m = PATTERNS["tag_B"].fullmatch(raw)
    if m is None:
        return None
    subtype = m.group(1).decode("ascii")
    items = m.group(2).split(b",")
    try:
        if subtype == "f":
            values = tuple(float(x) for x in items)
        else:
            values = tuple(int(x) for x in items)
        return TagArray(subtype, values)
    except ValueError:
        return None


# =============================================================================
# OptField
# =============================================================================

@dataclass(frozen=True)
class OptField:
    """One typed optional field. The payload always matches its type."""

    tag: bytes
    type: str
    value: Any

    def __post_init__(self) -> None:
        if not isinstance(self.tag, bytes) or PATTERNS["tag_name"].fullmatch(self.tag) is None:
            raise ValueError(f"Invalid tag name: {self.tag!r}")
        if self.type not in TAG_TYPES:
            raise ValueError(f"Invalid tag type: {self.type!r}")
        if not _value_matches(self.type, self.value):
            raise ValueError(f"Value {self.value!r} does not match tag type {self.type!r}")

    # -- constructors ---------------------------------------------------------

    @classmethod
    def char(cls, tag: bytes, value: bytes) -> OptField:
        return cls(tag, "A", value)

    @classmethod
    def int(cls, tag: bytes, value: int) -> OptField:
        return cls(tag, "i", value)

    @classmethod
    def float(cls, tag: bytes, value: float) -> OptField:
        return cls(tag, "f", value)

    @classmethod
    def text(cls, tag: bytes, value: bytes) -> OptField:
        return cls(tag, "Z", value)

    @classmethod
    def json(cls, tag: bytes, value: bytes) -> OptField:
        return cls(tag, "J", value)

    @classmethod
    def hex(cls, tag: bytes, value: bytes) -> OptField:
        return cls(tag, "H", value)

    @classmethod
    def array(cls, tag: bytes, subtype: str, values: Iterable) -> OptField:
        return cls(tag, "B", TagArray(subtype, tuple(values)))

    # -- codec ----------------------------------------------------------------

    @classmethod
    def parse(cls, token: bytes) -> OptField | None:
        """
        Parse one `TT:t:VALUE` token. Returns None if the token is not a
        well-formed tag or the value does not fit its type.
        """
        m = PATTERNS["tag"].fullmatch(token)
        if m is None:
            return None
        tag, kind, raw = m.group(1), m.group(2).decode("ascii"), m.group(3)

        if kind == "B":
            value = _parse_array(raw)
            if value is None:
                return None
            return cls(tag, kind, value)

        if PATTERNS[f"tag_{kind}"].fullmatch(raw) is None:
            return None

        if kind == "i":
            value = int(raw)
            if not INT64_MIN <= value <= INT64_MAX:
                return None
        elif kind == "f":
            value = float(raw)
            if not math.isfinite(value):
                return None
        elif kind == "H":
            value = bytes.fromhex(raw.decode("ascii"))
        else:
            value = bytes(raw)
        return cls(tag, kind, value)

    def render(self) -> bytes:
        """Canonical `TT:t:VALUE` form."""
        if self.type in ("i", "f"):
            payload = _render_number(self.value)
        elif self.type == "H":
            payload = self.value.hex().upper().encode("ascii")
        elif self.type == "B":
            payload = self.value.render()
        else:
            payload = self.value
        return b"%s:%s:%s" % (self.tag, self.type.encode("ascii"), payload)

    def __bytes__(self) -> bytes:
        return self.render()

    def __str__(self) -> str:
        return self.render().decode("ascii")


def _value_matches(kind: str, value: Any) -> bool:
    if kind == "i":
        return isinstance(value, int) and not isinstance(value, bool) and INT64_MIN <= value <= INT64_MAX
    if kind == "f":
        return isinstance(value, float) and math.isfinite(value)
    if kind == "B":
        return isinstance(value, TagArray)
    if not isinstance(value, bytes):
        return False
    if kind == "H":
        return len(value) > 0
    return PATTERNS[f"tag_{kind}"].fullmatch(value) is not None


# =============================================================================
# Collections
# =============================================================================

class OptionalFields(list):
    """Keeps every tag of a record in the order it was read."""

    @classmethod
    def parse(cls, tokens: Iterable[bytes]) -> OptionalFields:
        fields = cls()
        for token in tokens:
            field = OptField.parse(token)
            if field is None:
                logger.debug("Dropping invalid optional field %r", token)
                continue
            fields.append(field)
        return fields

    def fields(self) -> Iterator[OptField]:
        return iter(self)

    def get(self, tag: bytes) -> OptField | None:
        """First field with the given tag name."""
        for field in self:
            if field.tag == tag:
                return field
        return None

    def get_all(self, tag: bytes) -> list[OptField]:
        return [f for f in self if f.tag == tag]

    def render(self) -> list[bytes]:
        return [f.render() for f in self]


class NoOptionalFields:
    """Discards tags. Every instance is equal to every other."""

    __slots__ = ()

    @classmethod
    def parse(cls, tokens: Iterable[bytes]) -> NoOptionalFields:
        for token in tokens:
            if OptField.parse(token) is None:
                logger.debug("Dropping invalid optional field %r", token)
        return cls()

    def fields(self) -> Iterator[OptField]:
        return iter(())

    def get(self, tag: bytes) -> OptField | None:
        return None

    def get_all(self, tag: bytes) -> list[OptField]:
        return []

    def render(self) -> list[bytes]:
        return []

    def __len__(self) -> int:
        return 0

    def __iter__(self) -> Iterator[OptField]:
        return iter(())

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NoOptionalFields)

    def __hash__(self) -> int:
        return hash(NoOptionalFields)

    def __repr__(self) -> str:
        return "NoOptionalFields()"
