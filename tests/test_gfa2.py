"""
GFA 2 Record Tests - positions, edges, gaps, fragments and groups.
"""

import pytest

from gfakit.errors import IntegerParseError, InvalidField
from gfakit.gfa2 import GFA2, Edge, Fragment, Gap, GroupO, GroupU, Header, Position, Segment
from gfakit.ids import DenseId
from gfakit.orientation import Orientation


def fields(line):
    return iter(line.split(b"\t")[1:])


# =============================================================================
# Position
# =============================================================================

class TestPosition:

    def test_plain(self):
        assert Position.parse(b"10") == Position(10, False)

    def test_end_marker(self):
        pos = Position.parse(b"10$")
        assert pos.offset == 10
        assert pos.is_end
        assert pos.render() == b"10$"

    @pytest.mark.parametrize("token", [b"", b"$", b"-1", b"1$$", b"x"])
    def test_invalid(self, token):
        assert Position.parse(token) is None

    def test_parse_next_invalid(self):
        with pytest.raises(InvalidField) as exc:
            Position.parse_next(iter([b"x"]))
        assert exc.value.name == "Position"


# =============================================================================
# Header / Segment
# =============================================================================

class TestHeaderAndSegment:

    def test_header(self):
        h = Header.parse_line(fields(b"H\tVN:Z:2.0\tTS:i:100"))
        assert h.version == b"2.0"
        assert h.render() == b"H\tVN:Z:2.0\tTS:i:100"

    def test_segment(self):
        s = Segment.parse_line(fields(b"S\ts1\t10\tACGTACGTAC"))
        assert s.id == b"s1"
        assert s.length == 10
        assert s.render() == b"S\ts1\t10\tACGTACGTAC"

    def test_segment_bad_length(self):
        with pytest.raises(IntegerParseError):
            Segment.parse_line(fields(b"S\ts1\tten\tACGT"))


# =============================================================================
# Fragment / Edge / Gap
# =============================================================================

class TestFragment:

    def test_parse(self):
        f = Fragment.parse_line(fields(b"F\ts1\tread1+\t0\t5\t10\t15\t5M"))
        assert f.ext_ref == b"read1"
        assert f.ext_orient is Orientation.FORWARD
        assert f.fend == Position(15)
        assert f.render() == b"F\ts1\tread1+\t0\t5\t10\t15\t5M"

    def test_reference_required(self):
        with pytest.raises(InvalidField) as exc:
            Fragment.parse_line(fields(b"F\ts1\tread1\t0\t5\t10\t15\t5M"))
        assert exc.value.name == "External reference"


class TestEdge:

    LINE = b"E\te1\ts1+\ts2-\t5\t10$\t0\t5\t5M"

    def test_parse(self):
        e = Edge.parse_line(fields(self.LINE))
        assert e.id == b"e1"
        assert (e.sid1, e.sid1_orient) == (b"s1", Orientation.FORWARD)
        assert (e.sid2, e.sid2_orient) == (b"s2", Orientation.BACKWARD)
        assert e.end1 == Position(10, True)
        assert e.alignment == b"5M"

    def test_render(self):
        assert Edge.parse_line(fields(self.LINE)).render() == self.LINE

    def test_trace_alignment(self):
        e = Edge.parse_line(fields(b"E\t*\ts1+\ts2+\t0\t5\t0\t5\t-2,3,4"))
        assert e.alignment == b"-2,3,4"

    def test_placeholder_id_dense(self):
        e = Edge.parse_line(fields(b"E\t*\ts1+\ts2-\t0\t5\t0\t5\t*"), ids=DenseId)
        assert e.id == 0
        assert e.sid1 == 83170
        assert e.sid2 == 83181
        assert e.render() == b"E\t*\ts1+\ts2-\t0\t5\t0\t5\t*"

    def test_bad_alignment(self):
        with pytest.raises(InvalidField) as exc:
            Edge.parse_line(fields(b"E\te1\ts1+\ts2-\t5\t10$\t0\t5\tnope"))
        assert exc.value.name == "Alignment"


class TestGap:

    def test_unknown_variance(self):
        g = Gap.parse_line(fields(b"G\tg1\ts1+\ts2+\t100\t*"))
        assert g.dist == 100
        assert g.var is None
        assert g.render() == b"G\tg1\ts1+\ts2+\t100\t*"

    def test_variance(self):
        g = Gap.parse_line(fields(b"G\t*\ts2-\ts1+\t-50\t10"))
        assert g.id == b"*"
        assert g.dist == -50
        assert g.var == 10

    def test_bad_variance(self):
        with pytest.raises(IntegerParseError):
            Gap.parse_line(fields(b"G\tg1\ts1+\ts2+\t100\tten"))


# =============================================================================
# Groups
# =============================================================================

class TestGroups:

    def test_ordered_group(self):
        o = GroupO.parse_line(fields(b"O\tp1\ts1+ s2-"))
        assert o.id == b"p1"
        assert list(o) == [(b"s1", Orientation.FORWARD), (b"s2", Orientation.BACKWARD)]
        assert o.render() == b"O\tp1\ts1+ s2-"

    def test_ordered_group_dense(self):
        o = GroupO.parse_line(fields(b"O\t*\ts1+ s2-"), ids=DenseId)
        assert o.id == b"*"
        assert list(o) == [(8317, Orientation.FORWARD), (8318, Orientation.BACKWARD)]

    def test_ordered_group_needs_orientation(self):
        with pytest.raises(InvalidField):
            GroupO.parse_line(fields(b"O\tp1\ts1 s2"))

    def test_unordered_group(self):
        u = GroupU.parse_line(fields(b"U\tu1\ts1 s2 e1"))
        assert list(u) == [b"s1", b"s2", b"e1"]
        assert list(u.iter()) == list(u)

    def test_unordered_group_dense(self):
        u = GroupU.parse_line(fields(b"U\tu1\ts1 s2"), ids=DenseId)
        assert list(u) == [8317, 8318]


# =============================================================================
# GFA2 document
# =============================================================================

class TestGFA2Document:

    def test_counts(self):
        doc = GFA2()
        doc.insert(Header(b"2.0"))
        doc.insert(GroupU(b"u1", b"s1"))
        assert doc.counts()["groups_u"] == 1
        assert len(doc) == 2
        assert bytes(doc) == b"H\tVN:Z:2.0\nU\tu1\ts1\n"
