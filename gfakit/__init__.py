"""gfakit - read, write and convert GFA 1 / GFA 2 assembly graphs."""

from gfakit.errors import GFAError, ParseError, ParseFieldError, ParserTolerance
from gfakit.gfa1 import GFA
from gfakit.gfa2 import GFA2
from gfakit.ids import DenseId, OpaqueId
from gfakit.orientation import Orientation
from gfakit.reader import GFA1Parser, GFA2Parser, GFAParserBuilder
from gfakit.tag import NoOptionalFields, OptField, OptionalFields
from gfakit.writer import GFAWriter

__version__ = "0.1.0"

__all__ = [
    "DenseId",
    "GFA",
    "GFA1Parser",
    "GFA2",
    "GFA2Parser",
    "GFAError",
    "GFAParserBuilder",
    "GFAWriter",
    "NoOptionalFields",
    "OpaqueId",
    "OptField",
    "OptionalFields",
    "Orientation",
    "ParseError",
    "ParseFieldError",
    "ParserTolerance",
]
