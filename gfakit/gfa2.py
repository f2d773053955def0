"""
GFA 2 records and the GFA2 document.

    H  [VN:Z:2.0]                                                   <tag>*
    S  <sid> <slen> <sequence>                                      <tag>*
    F  <sid> <external ref+-> <sbeg> <send> <fbeg> <fend> <align>   <tag>*
    E  <eid|*> <sid1+-> <sid2+-> <beg1> <end1> <beg2> <end2> <align> <tag>*
    G  <gid|*> <sid1+-> <sid2+-> <dist> <var|*>                     <tag>*
    O  <oid|*> <ref+- ref+- ...>                                    <tag>*
    U  <uid|*> <id id ...>                                          <tag>*

Positions are integers with an optional trailing '$' marking the end of
the segment. Group member lists are single fields with space separated
items, kept raw and parsed lazily by iter().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Iterator, Union

from gfakit.document import GFADocument, render_line
from gfakit.errors import InvalidField
from gfakit.fields import (
    iter_oriented,
    next_field,
    parse_alignment,
    parse_header_version,
    parse_int,
    parse_pattern,
    parse_sequence,
    to_int,
)
from gfakit.ids import OpaqueId, SegmentId, render_id, render_reference
from gfakit.orientation import Orientation
from gfakit.spec import EDGE, FRAGMENT, GAP, GROUP_O, GROUP_U, HEADER, PATTERNS, SEGMENT
from gfakit.tag import NoOptionalFields, OptField, OptionalFields

Tags = Union[OptionalFields, NoOptionalFields]


@dataclass(frozen=True)
class Position:
    offset: int
    is_end: bool = False

    @classmethod
    def parse(cls, token: bytes) -> Position | None:
        m = PATTERNS["position"].fullmatch(token)
        if m is None:
            return None
        return cls(int(m.group(1)), m.group(2) == b"$")

    @classmethod
    def parse_next(cls, tokens: Iterator[bytes]) -> Position:
        pos = cls.parse(next_field(tokens))
        if pos is None:
            raise InvalidField("Position")
        return pos

    def render(self) -> bytes:
        return str(self.offset).encode("ascii") + (b"$" if self.is_end else b"")

    def __bytes__(self) -> bytes:
        return self.render()


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
    id: SegmentId
    length: int
    sequence: bytes
    optional: Tags = field(default_factory=OptionalFields)

    kind: ClassVar[bytes] = SEGMENT

    @classmethod
    def parse_line(cls, tokens: Iterator[bytes], ids=OpaqueId, tags=OptionalFields) -> Segment:
        sid = ids.parse_next(tokens)
        length = parse_int(tokens)
        sequence = parse_sequence(tokens)
        return cls(sid, length, sequence, tags.parse(tokens))

    def render(self) -> bytes:
        fields = [render_id(self.id), str(self.length).encode("ascii"), self.sequence]
        return render_line(self.kind, fields, self.optional)

    def __bytes__(self) -> bytes:
        return self.render()


@dataclass
class Fragment:
    id: SegmentId
    ext_ref: SegmentId
    ext_orient: Orientation
    sbeg: Position
    send: Position
    fbeg: Position
    fend: Position
    alignment: bytes
    optional: Tags = field(default_factory=OptionalFields)

    kind: ClassVar[bytes] = FRAGMENT

    @classmethod
    def parse_line(cls, tokens: Iterator[bytes], ids=OpaqueId, tags=OptionalFields) -> Fragment:
        sid = ids.parse_next(tokens)
        ext_ref, ext_orient = ids.parse_next_reference(tokens, "External reference")
        sbeg = Position.parse_next(tokens)
        send = Position.parse_next(tokens)
        fbeg = Position.parse_next(tokens)
        fend = Position.parse_next(tokens)
        alignment = parse_alignment(tokens)
        return cls(sid, ext_ref, ext_orient, sbeg, send, fbeg, fend, alignment, tags.parse(tokens))

    def render(self) -> bytes:
        fields = [
            render_id(self.id),
            render_reference(self.ext_ref, self.ext_orient),
            self.sbeg.render(),
            self.send.render(),
            self.fbeg.render(),
            self.fend.render(),
            self.alignment,
        ]
        return render_line(self.kind, fields, self.optional)

    def __bytes__(self) -> bytes:
        return self.render()


@dataclass
class Edge:
    id: SegmentId
    sid1: SegmentId
    sid1_orient: Orientation
    sid2: SegmentId
    sid2_orient: Orientation
    beg1: Position
    end1: Position
    beg2: Position
    end2: Position
    alignment: bytes
    optional: Tags = field(default_factory=OptionalFields)

    kind: ClassVar[bytes] = EDGE

    @classmethod
    def parse_line(cls, tokens: Iterator[bytes], ids=OpaqueId, tags=OptionalFields) -> Edge:
        eid = ids.parse_next_optional(tokens, "Edge id")
        sid1, sid1_orient = ids.parse_next_reference(tokens, "Sid1")
        sid2, sid2_orient = ids.parse_next_reference(tokens, "Sid2")
        beg1 = Position.parse_next(tokens)
        end1 = Position.parse_next(tokens)
        beg2 = Position.parse_next(tokens)
        end2 = Position.parse_next(tokens)
        alignment = parse_alignment(tokens)
        return cls(
            eid,
            sid1,
            sid1_orient,
            sid2,
            sid2_orient,
            beg1,
            end1,
            beg2,
            end2,
            alignment,
            tags.parse(tokens),
        )

    def render(self) -> bytes:
        fields = [
            render_id(self.id),
            render_reference(self.sid1, self.sid1_orient),
            render_reference(self.sid2, self.sid2_orient),
            self.beg1.render(),
            self.end1.render(),
            self.beg2.render(),
            self.end2.render(),
            self.alignment,
        ]
        return render_line(self.kind, fields, self.optional)

    def __bytes__(self) -> bytes:
        return self.render()


@dataclass
class Gap:
    id: SegmentId
    sid1: SegmentId
    sid1_orient: Orientation
    sid2: SegmentId
    sid2_orient: Orientation
    dist: int
    var: int | None = None
    optional: Tags = field(default_factory=OptionalFields)

    kind: ClassVar[bytes] = GAP

    @classmethod
    def parse_line(cls, tokens: Iterator[bytes], ids=OpaqueId, tags=OptionalFields) -> Gap:
        gid = ids.parse_next_optional(tokens, "Gap id")
        sid1, sid1_orient = ids.parse_next_reference(tokens, "Sid1")
        sid2, sid2_orient = ids.parse_next_reference(tokens, "Sid2")
        dist = parse_int(tokens)
        var = next_field(tokens)
        var = None if var == b"*" else to_int(var)
        return cls(gid, sid1, sid1_orient, sid2, sid2_orient, dist, var, tags.parse(tokens))

    def render(self) -> bytes:
        fields = [
            render_id(self.id),
            render_reference(self.sid1, self.sid1_orient),
            render_reference(self.sid2, self.sid2_orient),
            str(self.dist).encode("ascii"),
            b"*" if self.var is None else str(self.var).encode("ascii"),
        ]
        return render_line(self.kind, fields, self.optional)

    def __bytes__(self) -> bytes:
        return self.render()


@dataclass
class GroupO:
    """Ordered group (path). Members are oriented references."""

    id: bytes
    var_field: bytes
    optional: Tags = field(default_factory=OptionalFields)
    ids: type = field(default=OpaqueId, repr=False, compare=False)

    kind: ClassVar[bytes] = GROUP_O

    @classmethod
    def parse_line(cls, tokens: Iterator[bytes], ids=OpaqueId, tags=OptionalFields) -> GroupO:
        gid = OpaqueId.parse_next_optional(tokens, "Group id")
        var_field = parse_pattern(tokens, "group_o", "References")
        group = cls(gid, var_field, tags.parse(tokens), ids)
        if ids is not OpaqueId:
            for _ in group.iter():
                pass
        return group

    def iter(self) -> Iterator[tuple[SegmentId, Orientation]]:
        return iter_oriented(self.var_field.split(b" "), self.ids)

    def __iter__(self) -> Iterator[tuple[SegmentId, Orientation]]:
        return self.iter()

    def render(self) -> bytes:
        return render_line(self.kind, [self.id, self.var_field], self.optional)

    def __bytes__(self) -> bytes:
        return self.render()


@dataclass
class GroupU:
    """Unordered group (set). Members carry no orientation."""

    id: bytes
    var_field: bytes
    optional: Tags = field(default_factory=OptionalFields)
    ids: type = field(default=OpaqueId, repr=False, compare=False)

    kind: ClassVar[bytes] = GROUP_U

    @classmethod
    def parse_line(cls, tokens: Iterator[bytes], ids=OpaqueId, tags=OptionalFields) -> GroupU:
        gid = OpaqueId.parse_next_optional(tokens, "Group id")
        var_field = parse_pattern(tokens, "group_u", "Ids")
        group = cls(gid, var_field, tags.parse(tokens), ids)
        if ids is not OpaqueId:
            for _ in group.iter():
                pass
        return group

    def iter(self) -> Iterator[SegmentId]:
        for item in self.var_field.split(b" "):
            name = self.ids.parse_bare(item)
            if name is None:
                raise InvalidField("Id")
            yield name

    def __iter__(self) -> Iterator[SegmentId]:
        return self.iter()

    def render(self) -> bytes:
        return render_line(self.kind, [self.id, self.var_field], self.optional)

    def __bytes__(self) -> bytes:
        return self.render()


@dataclass(repr=False)
class GFA2(GFADocument):
    headers: list[Header] = field(default_factory=list)
    segments: list[Segment] = field(default_factory=list)
    fragments: list[Fragment] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    gaps: list[Gap] = field(default_factory=list)
    groups_o: list[GroupO] = field(default_factory=list)
    groups_u: list[GroupU] = field(default_factory=list)

    RECORD_LISTS: ClassVar[tuple[tuple[bytes, str], ...]] = (
        (HEADER, "headers"),
        (SEGMENT, "segments"),
        (FRAGMENT, "fragments"),
        (EDGE, "edges"),
        (GAP, "gaps"),
        (GROUP_O, "groups_o"),
        (GROUP_U, "groups_u"),
    )
