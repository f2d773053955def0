"""
GFA parse errors.

Two levels:
  - Field errors (ParseFieldError) are raised by the record grammars while a
    single line is being consumed.
  - Line errors (ParseError) are what the parsers surface. A field error is
    always wrapped into InvalidLine together with the raw line before the
    tolerance policy looks at it.
"""

from __future__ import annotations

from enum import Enum


class ParserTolerance(Enum):
    """How a parser reacts to a line it cannot parse."""

    PEDANTIC = "pedantic"    # every error stops parsing
    SAFE = "safe"            # skip empty and unknown lines, stop on the rest
    IGNORE_ALL = "ignore"    # skip every bad line


class GFAError(Exception):
    """Base class for every error raised by gfakit."""


# =============================================================================
# Field errors
# =============================================================================

class ParseFieldError(GFAError, ValueError):
    """A single field of a record could not be parsed."""


class MissingFields(ParseFieldError):
    def __init__(self) -> None:
        super().__init__("Line is missing fields")


class InvalidField(ParseFieldError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Invalid field: {name}")
        self.name = name


class IntegerParseError(ParseFieldError):
    def __init__(self, value: bytes) -> None:
        super().__init__(f"Could not parse integer: {value!r}")
        self.value = value


class EncodingOverflow(ParseFieldError):
    """A name is too long for the dense integer id encoding."""

    def __init__(self, name: bytes, digits: int, limit: int) -> None:
        super().__init__(
            f"Encoding {name!r} needs {digits} digits, "
            f"exceeds the unsigned 64-bit id range ({limit} digits at most)"
        )
        self.name = name
        self.digits = digits
        self.limit = limit


# =============================================================================
# Line errors
# =============================================================================

class ParseError(GFAError):
    """A line (or the file it came from) could not be parsed."""

    def can_safely_continue(self, tolerance: ParserTolerance) -> bool:
        if tolerance is ParserTolerance.IGNORE_ALL:
            return True
        return False


class EmptyLine(ParseError):
    def __init__(self) -> None:
        super().__init__("Empty line")

    def can_safely_continue(self, tolerance: ParserTolerance) -> bool:
        return tolerance is not ParserTolerance.PEDANTIC


class UnknownLineType(ParseError):
    def __init__(self, kind: bytes = b"") -> None:
        super().__init__(f"Unknown line type: {kind!r}")
        self.kind = kind

    def can_safely_continue(self, tolerance: ParserTolerance) -> bool:
        return tolerance is not ParserTolerance.PEDANTIC


class InvalidLine(ParseError):
    """Wraps a field error together with the offending raw line."""

    def __init__(self, error: ParseFieldError, line: bytes) -> None:
        super().__init__(f"{error} in line {bytes(line)!r}")
        self.error = error
        self.line = bytes(line)

    def can_safely_continue(self, tolerance: ParserTolerance) -> bool:
        # The id strategy cannot represent the input at all
        if isinstance(self.error, EncodingOverflow):
            return False
        return super().can_safely_continue(tolerance)


class GFAIOError(ParseError, OSError):
    def __init__(self, error: OSError) -> None:
        super().__init__(f"I/O error: {error}")
        self.error = error

    def can_safely_continue(self, tolerance: ParserTolerance) -> bool:
        return False


class ExtensionError(ParseError, ValueError):
    def __init__(self, path: str) -> None:
        super().__init__(f"Unsupported file extension: {path}")
        self.path = path
