"""
Tag Tests - Optional field codec and the two tag collections.
"""

import pytest

from gfakit.tag import NoOptionalFields, OptField, OptionalFields, TagArray


# =============================================================================
# OptField.parse
# =============================================================================

class TestOptFieldParse:

    def test_integer(self):
        f = OptField.parse(b"LN:i:123")
        assert f.tag == b"LN"
        assert f.type == "i"
        assert f.value == 123

    def test_negative_integer(self):
        assert OptField.parse(b"RC:i:-7").value == -7

    def test_unsigned_array(self):
        f = OptField.parse(b"AB:B:I1,2,3")
        assert f.type == "B"
        assert f.value.subtype == "I"
        assert list(f.value) == [1, 2, 3]

    def test_array_with_comma_after_subtype(self):
        f = OptField.parse(b"AB:B:I,1,2,3")
        assert f.value == TagArray("I", (1, 2, 3))

    def test_float_array(self):
        f = OptField.parse(b"FA:B:f0.5,1e2")
        assert f.value.values == (0.5, 100.0)

    def test_char(self):
        assert OptField.parse(b"CH:A:x").value == b"x"

    def test_float(self):
        assert OptField.parse(b"XF:f:-1.5e3").value == -1500.0

    def test_string_with_spaces(self):
        assert OptField.parse(b"ZZ:Z:hello world").value == b"hello world"

    def test_json_kept_raw(self):
        f = OptField.parse(b'JS:J:{"a": [1, 2]}')
        assert f.value == b'{"a": [1, 2]}'

    def test_hex_decoded(self):
        assert OptField.parse(b"HX:H:1aff").value == b"\x1a\xff"

    @pytest.mark.parametrize("token", [
        b"LN:i:abc",
        b"LN:i:9223372036854775808",
        b"LN:q:1",
        b"L:i:1",
        b"1N:i:1",
        b"LN:i:",
        b"CH:A:xy",
        b"HX:H:abc",
        b"AB:B:c200",
        b"AB:B:C-1",
        b"AB:B:q1,2",
        b"AB:B:I",
        b"XF:f:nan",
        b"LN:i:1\t",
    ])
    def test_invalid_tokens(self, token):
        assert OptField.parse(token) is None


# =============================================================================
# OptField construction and rendering
# =============================================================================

class TestOptFieldRender:

    def test_render_integer(self):
        assert OptField.int(b"LN", 123).render() == b"LN:i:123"

    def test_render_float(self):
        assert OptField.float(b"XF", 0.5).render() == b"XF:f:0.5"

    def test_render_hex_uppercase(self):
        assert OptField.parse(b"HX:H:1aff").render() == b"HX:H:1AFF"

    def test_render_array_canonical(self):
        assert OptField.parse(b"AB:B:I,1,2,3").render() == b"AB:B:I1,2,3"

    def test_render_text(self):
        f = OptField.text(b"ID", b"link three")
        assert bytes(f) == b"ID:Z:link three"
        assert str(f) == "ID:Z:link three"

    def test_render_json(self):
        assert OptField.json(b"JS", b"[1]").render() == b"JS:J:[1]"

    def test_render_char(self):
        assert OptField.char(b"CH", b"+").render() == b"CH:A:+"

    def test_array_constructor(self):
        f = OptField.array(b"AR", "s", [-5, 300])
        assert f.render() == b"AR:B:s-5,300"

    def test_reparse_render(self):
        for token in [b"LN:i:5", b"XF:f:2.25", b"ZZ:Z:a b", b"HX:H:00FF", b"AB:B:c-1,1"]:
            assert OptField.parse(token).render() == token

    @pytest.mark.parametrize("field", [
        OptField.char(b"CH", b"+"),
        OptField.int(b"LN", -5),
        OptField.float(b"XF", 1e20),
        OptField.text(b"ZZ", b" padded text "),
        OptField.json(b"JS", b'{"a": [1, 2]}'),
        OptField.hex(b"HX", b"\x00\xff"),
        OptField.array(b"AI", "I", [0, 4294967295]),
        OptField.array(b"AF", "f", [0.5, -2.0, 3e-07]),
        OptField.int(b"a1", 1),
    ])
    def test_parse_of_render_is_identity(self, field):
        assert OptField.parse(field.render()) == field


class TestOptFieldValidation:

    def test_value_must_match_type(self):
        with pytest.raises(ValueError):
            OptField(b"LN", "i", "12")

    def test_bool_is_not_integer(self):
        with pytest.raises(ValueError):
            OptField.int(b"LN", True)

    def test_integer_out_of_range(self):
        with pytest.raises(ValueError):
            OptField.int(b"LN", 2 ** 63)

    def test_bad_tag_name(self):
        with pytest.raises(ValueError):
            OptField.int(b"LNX", 1)

    @pytest.mark.parametrize("tag", [b"1A", b"A_", b"_A", b"A"])
    def test_tag_name_follows_grammar(self, tag):
        with pytest.raises(ValueError):
            OptField.int(tag, 1)

    def test_bad_type(self):
        with pytest.raises(ValueError):
            OptField(b"LN", "x", b"1")

    def test_char_must_be_one_byte(self):
        with pytest.raises(ValueError):
            OptField.char(b"CH", b"ab")

    def test_array_range_checked(self):
        with pytest.raises(ValueError):
            TagArray("C", (256,))

    def test_empty_array_rejected(self):
        with pytest.raises(ValueError):
            TagArray("i", ())

    def test_float_array_needs_floats(self):
        with pytest.raises(ValueError):
            TagArray("f", (1,))


# =============================================================================
# Collections
# =============================================================================

class TestOptionalFields:

    def test_keeps_order_and_duplicates(self):
        tags = OptionalFields.parse([b"LN:i:5", b"RC:i:9", b"LN:i:6"])
        assert [f.tag for f in tags] == [b"LN", b"RC", b"LN"]
        assert tags.get(b"LN").value == 5
        assert [f.value for f in tags.get_all(b"LN")] == [5, 6]

    def test_drops_invalid_tokens(self):
        tags = OptionalFields.parse([b"LN:i:5", b"garbage", b"RC:i:x"])
        assert len(tags) == 1

    def test_get_missing(self):
        assert OptionalFields().get(b"LN") is None

    def test_render(self):
        tags = OptionalFields.parse([b"LN:i:5", b"ZZ:Z:x"])
        assert tags.render() == [b"LN:i:5", b"ZZ:Z:x"]
        assert list(tags.fields()) == list(tags)


class TestNoOptionalFields:

    def test_discards_everything(self):
        tags = NoOptionalFields.parse([b"LN:i:5", b"RC:i:9"])
        assert len(tags) == 0
        assert list(tags) == []
        assert tags.render() == []
        assert tags.get(b"LN") is None
        assert tags.get_all(b"LN") == []

    def test_all_instances_equal(self):
        assert NoOptionalFields.parse([b"LN:i:5"]) == NoOptionalFields()
        assert hash(NoOptionalFields()) == hash(NoOptionalFields())
        assert NoOptionalFields() != OptionalFields()
