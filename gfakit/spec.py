"""
GFA Format Specification (GFA 1.0 / GFA 2.0)
============================================

Layout (one record per line, fields separated by TAB):
    H  [VN:Z:<version>]                                  <tag>*
    S  <id>  <sequence>                                  <tag>*   (GFA1)
    S  <id>  <length>  <sequence>                        <tag>*   (GFA2)
    L  <from> <+-> <to> <+-> <overlap>                   <tag>*   (GFA1)
    C  <container> <+-> <contained> <+-> <pos> <overlap> <tag>*   (GFA1)
    P  <name> <id+-,id+-,...> <cigar,cigar,...>          <tag>*   (GFA1)
    F  <id> <ref+-> <sbeg> <send> <fbeg> <fend> <align>  <tag>*   (GFA2)
    E  <id|*> <sid1+-> <sid2+-> <beg1> <end1> <beg2> <end2> <align> <tag>*  (GFA2)
    G  <id|*> <sid1+-> <sid2+-> <dist> <var|*>           <tag>*   (GFA2)
    O  <id|*> <ref+- ref+- ...>                          <tag>*   (GFA2)
    U  <id|*> <id id ...>                                <tag>*   (GFA2)

Tags:
    TT:t:VALUE                   <- two byte name, one type char, typed value

Design Decisions:
    - Everything is handled as bytes; GFA is ASCII but not guaranteed UTF-8
    - Every sub-grammar is a full-match regex compiled once, at import
    - Positions in GFA2 carry an optional trailing '$' (end-of-segment)
"""

import re

# Record kind letters
HEADER = b"H"
SEGMENT = b"S"
LINK = b"L"
CONTAINMENT = b"C"
PATH = b"P"
FRAGMENT = b"F"
EDGE = b"E"
GAP = b"G"
GROUP_O = b"O"
GROUP_U = b"U"

# Header version written by the GFA1 -> GFA2 converter
GFA2_VERSION = b"2.0"
VERSION_TAG = b"VN"

FIELD_SEPARATOR = b"\t"

# Optional field types
TAG_TYPES = {
    "A": "Printable character",
    "i": "Signed integer (64 bit)",
    "f": "Single-precision floating point number",
    "Z": "Printable string, including space",
    "J": "JSON, excluding new-line and tab (kept as raw text)",
    "H": "Byte array in hex format",
    "B": "Array of integers or floats",
}

# Array subtype -> inclusive (min, max); None for floats
ARRAY_SUBTYPES = {
    "c": (-(2 ** 7), 2 ** 7 - 1),
    "C": (0, 2 ** 8 - 1),
    "s": (-(2 ** 15), 2 ** 15 - 1),
    "S": (0, 2 ** 16 - 1),
    "i": (-(2 ** 31), 2 ** 31 - 1),
    "I": (0, 2 ** 32 - 1),
    "f": None,
}

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# Dense integer ids: one two-digit code per byte, decimal width capped
MAX_ID_DIGITS = 20
DENSE_ID_MAX = 2 ** 64 - 1
DENSE_CODE_OFFSET = 32
OPTIONAL_ID_SENTINEL = 0
ORIENTATION_DIGITS = {b"+": 0, b"-": 1}

# File extensions accepted by parse_file
EXTENSIONS = (".gfa", ".gfa1", ".gfa2")

_FLOAT = rb"[-+]?[0-9]*\.?[0-9]+(?:[eE][-+]?[0-9]+)?"
_CIGAR_OP = rb"[0-9]+[MIDNSHPX=]"

# Process-wide compiled grammar table, read-only after import
PATTERNS = {
    "id": re.compile(rb"[!-~]+"),
    "opt_id": re.compile(rb"[!-~]+|\*"),
    "ref": re.compile(rb"([!-~]+)([+-])"),
    "sequence": re.compile(rb"\*|[A-Za-z=.]+"),
    "overlap": re.compile(rb"\*|(?:" + _CIGAR_OP + rb")+"),
    "path_overlaps": re.compile(rb"\*|" + _CIGAR_OP + rb"(?:," + _CIGAR_OP + rb")*"),
    "path_segments": re.compile(rb"[!-~]+[+-](?:,[!-~]+[+-])*"),
    "alignment": re.compile(rb"\*|(?:" + _CIGAR_OP + rb")+|-?[0-9]+(?:,-?[0-9]+)*"),
    "position": re.compile(rb"([0-9]+)(\$?)"),
    "int": re.compile(rb"[-+]?[0-9]+"),
    "group_o": re.compile(rb"[!-~]+[+-](?: [!-~]+[+-])*"),
    "group_u": re.compile(rb"[!-~]+(?: [!-~]+)*"),
    "tag_name": re.compile(rb"[A-Za-z][A-Za-z0-9]"),
    "tag": re.compile(rb"([A-Za-z][A-Za-z0-9]):([AifZJHB]):(.+)", re.DOTALL),
    "tag_A": re.compile(rb"[!-~]"),
    "tag_i": re.compile(rb"[-+]?[0-9]+"),
    "tag_f": re.compile(_FLOAT),
    "tag_Z": re.compile(rb"[ !-~]+"),
    "tag_J": re.compile(rb"[ !-~]+"),
    "tag_H": re.compile(rb"(?:[0-9A-Fa-f]{2})+"),
    "tag_B": re.compile(rb"([cCsSiIf]),?(" + _FLOAT + rb"(?:," + _FLOAT + rb")*)"),
}
