"""
Error Tests - tolerance policy per error kind.
"""

import pytest

from gfakit.errors import (
    EmptyLine,
    EncodingOverflow,
    ExtensionError,
    GFAIOError,
    InvalidField,
    InvalidLine,
    MissingFields,
    ParserTolerance,
    UnknownLineType,
)

ALL = list(ParserTolerance)


class TestCanSafelyContinue:

    @pytest.mark.parametrize("error", [EmptyLine(), UnknownLineType(b"X")])
    def test_recoverable(self, error):
        assert not error.can_safely_continue(ParserTolerance.PEDANTIC)
        assert error.can_safely_continue(ParserTolerance.SAFE)
        assert error.can_safely_continue(ParserTolerance.IGNORE_ALL)

    def test_invalid_line(self):
        error = InvalidLine(InvalidField("Overlap"), b"L\ta\t+\tb\t+\t?")
        assert not error.can_safely_continue(ParserTolerance.PEDANTIC)
        assert not error.can_safely_continue(ParserTolerance.SAFE)
        assert error.can_safely_continue(ParserTolerance.IGNORE_ALL)

    @pytest.mark.parametrize("tolerance", ALL)
    def test_fatal(self, tolerance):
        overflow = InvalidLine(EncodingOverflow(b"x", 22, 20), b"S\tx\t*")
        assert not overflow.can_safely_continue(tolerance)
        assert not GFAIOError(OSError("disk")).can_safely_continue(tolerance)


class TestMessages:

    def test_invalid_line_message(self):
        error = InvalidLine(MissingFields(), b"S\t1")
        assert "missing fields" in str(error)
        assert error.line == b"S\t1"

    def test_extension_error_is_value_error(self):
        assert isinstance(ExtensionError("graph.txt"), ValueError)

    def test_io_error_is_os_error(self):
        assert isinstance(GFAIOError(OSError("disk")), OSError)
