"""Field grammar helpers shared by the GFA1 and GFA2 record parsers."""

from __future__ import annotations

from typing import Any, Iterator

from gfakit.errors import IntegerParseError, InvalidField, MissingFields
from gfakit.orientation import Orientation
from gfakit.spec import PATTERNS, VERSION_TAG
from gfakit.tag import OptField


def next_field(tokens: Iterator[bytes]) -> bytes:
    token = next(tokens, None)
    if token is None:
        raise MissingFields()
    return token


def parse_pattern(tokens: Iterator[bytes], pattern: str, name: str) -> bytes:
    """Consume one token that must fully match PATTERNS[pattern]."""
    token = next_field(tokens)
    if PATTERNS[pattern].fullmatch(token) is None:
        raise InvalidField(name)
    return bytes(token)


def parse_orientation(tokens: Iterator[bytes]) -> Orientation:
    orient = Orientation.parse(next_field(tokens))
    if orient is None:
        raise InvalidField("Orientation")
    return orient


def parse_sequence(tokens: Iterator[bytes]) -> bytes:
    return parse_pattern(tokens, "sequence", "Sequence")


def parse_overlap(tokens: Iterator[bytes]) -> bytes:
    return parse_pattern(tokens, "overlap", "Overlap")


def parse_alignment(tokens: Iterator[bytes]) -> bytes:
    return parse_pattern(tokens, "alignment", "Alignment")


def to_int(token: bytes) -> int:
    if PATTERNS["int"].fullmatch(token) is None:
        raise IntegerParseError(bytes(token))
    return int(token)


def parse_int(tokens: Iterator[bytes]) -> int:
    return to_int(next_field(tokens))


def parse_header_version(tokens: Iterator[bytes]) -> tuple[bytes | None, list[bytes]]:
    """
    Split the fields of an H line into (version, remaining tag tokens).
    The version is taken from a leading VN:Z tag; H lines may have no fields.
    """
    rest = list(tokens)
    if rest:
        field = OptField.parse(rest[0])
        if field is not None and field.tag == VERSION_TAG and field.type == "Z":
            return field.value, rest[1:]
    return None, rest


def iter_oriented(items: list[bytes], ids: Any) -> Iterator[tuple[Any, Orientation]]:
    """Lazily parse `id+` / `id-` items with the given id strategy."""
    for item in items:
        orient = Orientation.parse(item[-1:])
        if orient is None:
            raise InvalidField("Orientation")
        name = ids.parse_bare(item[:-1])
        if name is None:
            raise InvalidField("Segment id")
        yield name, orient
