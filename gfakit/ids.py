"""
Segment identifier strategies.

A parser is built with one of two strategies and every id in the file goes
through it:

    OpaqueId   ids stay the validated bytes (b"s148227")
    DenseId    ids become integers via a fixed byte -> code substitution

Each strategy parses three kinds of occurrence:

    parse_bare(token)        <id>        [!-~]+
    parse_optional(token)    <id> | *    [!-~]+ or the placeholder '*'
    parse_reference(token)   <id>[+-]    id with a mandatory orientation

DenseId cipher:
    Every byte in '!'..'~' becomes the two digit code ord(byte) - 32
    ('!' -> 01, 'A' -> 33, '~' -> 94). The codes are concatenated and read as
    one decimal number, so b"s1" -> "8317" -> 8317. Codes never start with
    "00", which makes the mapping injective and reversible (decode()).
    The optional placeholder '*' is the sentinel 0, which no name can produce.
    References append one digit for the orientation: 0 for '+', 1 for '-'.
    Results longer than MAX_ID_DIGITS digits, or above DENSE_ID_MAX (the
    unsigned 64-bit range), raise EncodingOverflow.
"""

from __future__ import annotations

from typing import Iterator, Union

from gfakit.errors import EncodingOverflow, InvalidField, MissingFields
from gfakit.orientation import Orientation
from gfakit.spec import (
    DENSE_CODE_OFFSET,
    DENSE_ID_MAX,
    MAX_ID_DIGITS,
    OPTIONAL_ID_SENTINEL,
    ORIENTATION_DIGITS,
    PATTERNS,
)

SegmentId = Union[bytes, int]


class _IdStrategy:
    """Iterator helpers shared by both strategies."""

    @classmethod
    def parse_next(cls, tokens: Iterator[bytes], name: str = "Segment id") -> SegmentId:
        token = next(tokens, None)
        if token is None:
            raise MissingFields()
        parsed = cls.parse_bare(token)
        if parsed is None:
            raise InvalidField(name)
        return parsed

    @classmethod
    def parse_next_optional(cls, tokens: Iterator[bytes], name: str = "Id") -> SegmentId:
        token = next(tokens, None)
        if token is None:
            raise MissingFields()
        parsed = cls.parse_optional(token)
        if parsed is None:
            raise InvalidField(name)
        return parsed

    @classmethod
    def parse_next_reference(
        cls, tokens: Iterator[bytes], name: str = "Reference"
    ) -> tuple[SegmentId, Orientation]:
        token = next(tokens, None)
        if token is None:
            raise MissingFields()
        parsed = cls.parse_reference(token)
        if parsed is None:
            raise InvalidField(name)
        return parsed


# =============================================================================
# OpaqueId
# =============================================================================

class OpaqueId(_IdStrategy):
    """Ids are the raw bytes of the name."""

    @staticmethod
    def parse_bare(token: bytes) -> bytes | None:
        if PATTERNS["id"].fullmatch(token) is None:
            return None
        return bytes(token)

    @staticmethod
    def parse_optional(token: bytes) -> bytes | None:
        if PATTERNS["opt_id"].fullmatch(token) is None:
            return None
        return bytes(token)

    @staticmethod
    def parse_reference(token: bytes) -> tuple[bytes, Orientation] | None:
        m = PATTERNS["ref"].fullmatch(token)
        if m is None:
            return None
        return bytes(m.group(1)), Orientation(m.group(2))

    @staticmethod
    def render(value: bytes) -> bytes:
        return value


# =============================================================================
# DenseId
# =============================================================================

class DenseId(_IdStrategy):
    """Ids are integers built from a per-byte substitution cipher."""

    @staticmethod
    def encode(name: bytes, limit: int = MAX_ID_DIGITS) -> int:
        """Encode an already validated name. Raises EncodingOverflow."""
        digits = "".join("%02d" % (b - DENSE_CODE_OFFSET) for b in name)
        significant = len(digits.lstrip("0"))
        value = int(digits)
        if significant > limit or value > DENSE_ID_MAX:
            raise EncodingOverflow(bytes(name), significant, limit)
        return value

    @staticmethod
    def decode(value: int) -> bytes:
        """Invert encode(). The sentinel 0 decodes to b'*'."""
        if value == OPTIONAL_ID_SENTINEL:
            return b"*"
        if value < 0:
            raise ValueError(f"Not a dense id: {value}")
        digits = str(value)
        if len(digits) % 2:
            digits = "0" + digits
        codes = (int(digits[i:i + 2]) for i in range(0, len(digits), 2))
        return bytes(c + DENSE_CODE_OFFSET for c in codes)

    @staticmethod
    def body(value: int) -> int:
        """Strip the orientation digit of an encoded reference."""
        return value // 10

    @staticmethod
    def orientation(value: int) -> Orientation:
        """Orientation digit of an encoded reference."""
        return Orientation.FORWARD if value % 10 == 0 else Orientation.BACKWARD

    @classmethod
    def parse_bare(cls, token: bytes) -> int | None:
        if PATTERNS["id"].fullmatch(token) is None:
            return None
        return cls.encode(token)

    @classmethod
    def parse_optional(cls, token: bytes) -> int | None:
        if token == b"*":
            return OPTIONAL_ID_SENTINEL
        return cls.parse_bare(token)

    @classmethod
    def parse_reference(cls, token: bytes) -> tuple[int, Orientation] | None:
        m = PATTERNS["ref"].fullmatch(token)
        if m is None:
            return None
        name, sign = m.group(1), m.group(2)
        try:
            encoded = cls.encode(name, MAX_ID_DIGITS - 1)
        except EncodingOverflow as e:
            raise EncodingOverflow(bytes(token), e.digits + 1, MAX_ID_DIGITS) from None
        value = encoded * 10 + ORIENTATION_DIGITS[sign]
        if value > DENSE_ID_MAX:
            raise EncodingOverflow(bytes(token), len(str(value)), MAX_ID_DIGITS)
        return value, Orientation(sign)

    @classmethod
    def render(cls, value: int) -> bytes:
        return cls.decode(value)


# =============================================================================
# Rendering by value type
# =============================================================================

def render_id(value: SegmentId) -> bytes:
    """Serialize an id produced by either strategy."""
    if isinstance(value, int):
        return DenseId.render(value)
    return OpaqueId.render(value)


def render_reference(value: SegmentId, orient: Orientation) -> bytes:
    """Serialize an id produced by parse_reference() together with its orientation."""
    if isinstance(value, int):
        return DenseId.decode(DenseId.body(value)) + orient.symbol
    return OpaqueId.render(value) + orient.symbol
