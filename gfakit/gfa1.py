"""
GFA 1 records and the GFA document.

    H  [VN:Z:1.0]                                         <tag>*
    S  <name> <sequence>                                  <tag>*
    L  <from> <+-> <to> <+-> <overlap>                    <tag>*
    C  <container> <+-> <contained> <+-> <pos> <overlap>  <tag>*
    P  <path name> <id+-,id+-,...> <overlap,overlap,...>  <tag>*

Every record class has parse_line(tokens, ids, tags), which consumes the
fields after the kind letter, and render(), which gives the line back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Iterator, Union

from gfakit.document import GFADocument, render_line
from gfakit.fields import (
    iter_oriented,
    parse_header_version,
    parse_int,
    parse_orientation,
    parse_overlap,
    parse_pattern,
    parse_sequence,
)
from gfakit.ids import OpaqueId, SegmentId, render_id
from gfakit.orientation import Orientation
from gfakit.spec import CONTAINMENT, HEADER, LINK, PATH, SEGMENT
from gfakit.tag import NoOptionalFields, OptField, OptionalFields

Tags = Union[OptionalFields, NoOptionalFields]


@dataclass
class Header:
    version: bytes | None = None
    optional: Tags = field(default_factory=OptionalFields)

    kind: ClassVar[bytes] = HEADER

    @classmethod
    def parse_line(cls, tokens: Iterator[bytes], ids=OpaqueId, tags=OptionalFields) -> Header:
        version, rest = parse_header_version(tokens)
        return cls(version, tags.parse(rest))

    def render(self) -> bytes:
        fields = []
        if self.version is not None:
            fields.append(OptField.text(b"VN", self.version).render())
        return render_line(self.kind, fields, self.optional)

    def __bytes__(self) -> bytes:
        return self.render()


@dataclass
class Segment:
    name: SegmentId
    sequence: bytes
    optional: Tags = field(default_factory=OptionalFields)

    kind: ClassVar[bytes] = SEGMENT

    @classmethod
    def parse_line(cls, tokens: Iterator[bytes], ids=OpaqueId, tags=OptionalFields) -> Segment:
        name = ids.parse_next(tokens)
        sequence = parse_sequence(tokens)
        return cls(name, sequence, tags.parse(tokens))

    def render(self) -> bytes:
        return render_line(self.kind, [render_id(self.name), self.sequence], self.optional)

    def __bytes__(self) -> bytes:
        return self.render()

    def length(self) -> int:
        """Sequence length, falling back to the LN tag when the sequence is '*'."""
        if self.sequence == b"*":
            ln = self.optional.get(b"LN")
            return ln.value if ln is not None and ln.type == "i" else 0
        return len(self.sequence)


@dataclass
class Link:
    from_segment: SegmentId
    from_orient: Orientation
    to_segment: SegmentId
    to_orient: Orientation
    overlap: bytes
    optional: Tags = field(default_factory=OptionalFields)

    kind: ClassVar[bytes] = LINK

    @classmethod
    def parse_line(cls, tokens: Iterator[bytes], ids=OpaqueId, tags=OptionalFields) -> Link:
        from_segment = ids.parse_next(tokens)
        from_orient = parse_orientation(tokens)
        to_segment = ids.parse_next(tokens)
        to_orient = parse_orientation(tokens)
        overlap = parse_overlap(tokens)
        return cls(from_segment, from_orient, to_segment, to_orient, overlap, tags.parse(tokens))

    def render(self) -> bytes:
        fields = [
            render_id(self.from_segment),
            self.from_orient.symbol,
            render_id(self.to_segment),
            self.to_orient.symbol,
            self.overlap,
        ]
        return render_line(self.kind, fields, self.optional)

    def __bytes__(self) -> bytes:
        return self.render()


@dataclass
class Containment:
    container_name: SegmentId
    container_orient: Orientation
    contained_name: SegmentId
    contained_orient: Orientation
    pos: int
    overlap: bytes
    optional: Tags = field(default_factory=OptionalFields)

    kind: ClassVar[bytes] = CONTAINMENT

    @classmethod
    def parse_line(cls, tokens: Iterator[bytes], ids=OpaqueId, tags=OptionalFields) -> Containment:
        container_name = ids.parse_next(tokens)
        container_orient = parse_orientation(tokens)
        contained_name = ids.parse_next(tokens)
        contained_orient = parse_orientation(tokens)
        pos = parse_int(tokens)
        overlap = parse_overlap(tokens)
        return cls(
            container_name,
            container_orient,
            contained_name,
            contained_orient,
            pos,
            overlap,
            tags.parse(tokens),
        )

    def render(self) -> bytes:
        fields = [
            render_id(self.container_name),
            self.container_orient.symbol,
            render_id(self.contained_name),
            self.contained_orient.symbol,
            str(self.pos).encode("ascii"),
            self.overlap,
        ]
        return render_line(self.kind, fields, self.optional)

    def __bytes__(self) -> bytes:
        return self.render()


@dataclass
class Path:
    """
    A path through the graph. The segment list is kept as the raw
    comma-separated bytes; iter() parses it lazily, and each call starts over.
    """

    path_name: bytes
    segment_names: bytes
    overlaps: bytes
    optional: Tags = field(default_factory=OptionalFields)
    ids: type = field(default=OpaqueId, repr=False, compare=False)

    kind: ClassVar[bytes] = PATH

    @classmethod
    def parse_line(cls, tokens: Iterator[bytes], ids=OpaqueId, tags=OptionalFields) -> Path:
        # Path names are never part of the segment namespace
        path_name = OpaqueId.parse_next(tokens, "Path name")
        segment_names = parse_pattern(tokens, "path_segments", "Segment names")
        overlaps = parse_pattern(tokens, "path_overlaps", "Overlap")
        path = cls(path_name, segment_names, overlaps, tags.parse(tokens), ids)
        if ids is not OpaqueId:
            # Encode every member once so overflow is reported with this line
            for _ in path.iter():
                pass
        return path

    def iter(self) -> Iterator[tuple[SegmentId, Orientation]]:
        """Yield (segment id, orientation) for every step of the path."""
        return iter_oriented(self.segment_names.split(b","), self.ids)

    def __iter__(self) -> Iterator[tuple[SegmentId, Orientation]]:
        return self.iter()

    def overlap_list(self) -> list[bytes]:
        if self.overlaps == b"*":
            return []
        return self.overlaps.split(b",")

    def render(self) -> bytes:
        fields = [self.path_name, self.segment_names, self.overlaps]
        return render_line(self.kind, fields, self.optional)

    def __bytes__(self) -> bytes:
        return self.render()


@dataclass(repr=False)
class GFA(GFADocument):
    headers: list[Header] = field(default_factory=list)
    segments: list[Segment] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)
    containments: list[Containment] = field(default_factory=list)
    paths: list[Path] = field(default_factory=list)

    RECORD_LISTS: ClassVar[tuple[tuple[bytes, str], ...]] = (
        (HEADER, "headers"),
        (SEGMENT, "segments"),
        (LINK, "links"),
        (CONTAINMENT, "containments"),
        (PATH, "paths"),
    )
