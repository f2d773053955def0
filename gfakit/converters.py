"""
GFA 1 -> GFA 2 conversion (best effort).

    H  ->  one H line with VN:Z:2.0, other header tags kept
    S  ->  S with an explicit length (sequence length, or LN:i when '*')
    L  ->  E with '*' id, positions computed from the overlap CIGAR
    C  ->  E with '*' id, anchored at the containment position
    P  ->  O group, comma list turned into a space list (overlaps dropped)

Positions need segment lengths. When a length is unknown the edge gets the
placeholder positions 0 / 0$ and a warning is logged.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from gfakit import gfa1, gfa2
from gfakit.gfa2 import Position
from gfakit.ids import SegmentId
from gfakit.orientation import Orientation
from gfakit.spec import GFA2_VERSION, ORIENTATION_DIGITS, VERSION_TAG
from gfakit.tag import OptionalFields

logger = logging.getLogger(__name__)

_CIGAR_OP = re.compile(rb"([0-9]+)([MIDNSHPX=])")

# CIGAR operations that consume the first / second segment of an overlap
_FROM_OPS = b"MDN=X"
_TO_OPS = b"MIS=X"


def overlap_lengths(overlap: bytes) -> tuple[int, int]:
    """Bases covered on the (from, to) segments by a CIGAR overlap. '*' is (0, 0)."""
    from_len = to_len = 0
    if overlap == b"*":
        return 0, 0
    for count, op in _CIGAR_OP.findall(overlap):
        if op in _FROM_OPS:
            from_len += int(count)
        if op in _TO_OPS:
            to_len += int(count)
    return from_len, to_len


def _pos(offset: int, length: int) -> Position:
    return Position(offset, offset == length)


def _reference(value: SegmentId, orient: Orientation) -> SegmentId:
    # Dense ids carry the orientation digit when used as references
    if isinstance(value, int):
        return value * 10 + ORIENTATION_DIGITS[orient.symbol]
    return value


def _placeholder(value: SegmentId) -> SegmentId:
    return 0 if isinstance(value, int) else b"*"


def _link_to_edge(link: gfa1.Link, lengths: dict) -> gfa2.Edge:
    len_a = lengths.get(link.from_segment, 0)
    len_b = lengths.get(link.to_segment, 0)
    ovl_a, ovl_b = overlap_lengths(link.overlap)

    if not len_a or not len_b:
        logger.warning(
            "Unknown segment length for link %r -> %r, using placeholder positions",
            link.from_segment, link.to_segment,
        )
        beg1, end1, beg2, end2 = Position(0), Position(0, True), Position(0), Position(0, True)
    else:
        if link.from_orient is Orientation.FORWARD:
            beg1, end1 = _pos(len_a - ovl_a, len_a), _pos(len_a, len_a)
        else:
            beg1, end1 = _pos(0, len_a), _pos(ovl_a, len_a)
        if link.to_orient is Orientation.FORWARD:
            beg2, end2 = _pos(0, len_b), _pos(ovl_b, len_b)
        else:
            beg2, end2 = _pos(len_b - ovl_b, len_b), _pos(len_b, len_b)

    return gfa2.Edge(
        _placeholder(link.from_segment),
        _reference(link.from_segment, link.from_orient),
        link.from_orient,
        _reference(link.to_segment, link.to_orient),
        link.to_orient,
        beg1,
        end1,
        beg2,
        end2,
        link.overlap,
        link.optional,
    )


def _containment_to_edge(cont: gfa1.Containment, lengths: dict) -> gfa2.Edge:
    len_a = lengths.get(cont.container_name, 0)
    len_b = lengths.get(cont.contained_name, 0)
    ovl_a, _ = overlap_lengths(cont.overlap)
    if cont.overlap == b"*":
        ovl_a = len_b

    if not len_a or not len_b:
        logger.warning(
            "Unknown segment length for containment %r > %r, using placeholder positions",
            cont.container_name, cont.contained_name,
        )
        beg1, end1, beg2, end2 = Position(0), Position(0, True), Position(0), Position(0, True)
    else:
        beg1, end1 = _pos(cont.pos, len_a), _pos(cont.pos + ovl_a, len_a)
        beg2, end2 = _pos(0, len_b), _pos(len_b, len_b)

    return gfa2.Edge(
        _placeholder(cont.container_name),
        _reference(cont.container_name, cont.container_orient),
        cont.container_orient,
        _reference(cont.contained_name, cont.contained_orient),
        cont.contained_orient,
        beg1,
        end1,
        beg2,
        end2,
        cont.overlap,
        cont.optional,
    )


def convert_gfa1_to_gfa2(gfa: gfa1.GFA) -> gfa2.GFA2:
    """Convert a parsed GFA 1 document into a GFA 2 document."""
    out = gfa2.GFA2()

    header_tags = OptionalFields(
        t for h in gfa.headers for t in h.optional if t.tag != VERSION_TAG
    )
    out.insert(gfa2.Header(GFA2_VERSION, header_tags))

    lengths = {}
    for seg in gfa.segments:
        length = seg.length()
        lengths[seg.name] = length
        out.insert(gfa2.Segment(seg.name, length, seg.sequence, seg.optional))

    for link in gfa.links:
        out.insert(_link_to_edge(link, lengths))

    for cont in gfa.containments:
        out.insert(_containment_to_edge(cont, lengths))

    for path in gfa.paths:
        out.insert(
            gfa2.GroupO(path.path_name, path.segment_names.replace(b",", b" "), path.optional, path.ids)
        )

    logger.info("Converted GFA1 %s into GFA2 %s", gfa.counts(), out.counts())
    return out


def convert_file(src: str | Path, dst: str | Path, progress: bool = False) -> gfa2.GFA2:
    """Parse a GFA 1 file and write it out as GFA 2."""
    from gfakit.reader import GFA1Parser

    converted = convert_gfa1_to_gfa2(GFA1Parser().parse_file(src, progress=progress))
    converted.write(dst)
    return converted
