"""
CSV codec tests.

Covers encoding of the default fixture, round trips, lenient decoding
(unknown columns, ragged rows, reordered columns) and value parsing.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import pytest

from serbench import Fixture, FieldDescriptor, FieldKind
from serbench.codecs import CsvCodec, CsvFormatError, deserialize, parse_value, serialize


@dataclass
class Packed:
    ids: Tuple[int, ...] = (1, 2)
    maybe: Optional[Tuple[int, ...]] = None


@dataclass
class Mixed:
    count: int = 7
    label: str = "x"
    ratio: float = 0.5
    enabled: bool = True
    ids: List[int] = field(default_factory=list)
    note: Optional[str] = None


class TestSerialize:
    def test_default_fixture(self):
        assert serialize(Fixture()) == "i1,i2,i3,i4,i5,mas" + os.linesep + "1,2,3,4,5,1;2"

    def test_empty_sequence_is_empty_cell(self):
        header, values = serialize(Fixture(mas=[])).split(os.linesep)
        assert values == "1,2,3,4,5,"

    def test_negative_values(self):
        _, values = serialize(Fixture(i1=-10, mas=[-1, 0, 3])).split(os.linesep)
        assert values == "-10,2,3,4,5,-1;0;3"

    def test_none_is_empty_cell(self):
        text = serialize(Mixed(note=None))
        assert text.split(os.linesep)[1] == "7,x,0.5,True,,"

    def test_codec_object(self):
        codec = CsvCodec(Fixture)
        assert codec.serialize(Fixture()) == serialize(Fixture())


class TestRoundTrip:
    @pytest.mark.parametrize("sequence", [[1, 2], [42], [5, -3, 0, 1000000]])
    def test_fixture(self, sequence):
        original = Fixture(i1=10, i2=-20, i3=0, i4=2147483647, i5=-2147483648, mas=sequence)
        restored = deserialize(serialize(original), Fixture)
        assert restored == original
        assert restored is not original
        assert restored.mas is not original.mas

    def test_empty_sequence_round_trips_to_empty_list(self):
        restored = deserialize(serialize(Fixture(mas=[])), Fixture)
        assert restored.mas == []

    @pytest.mark.parametrize("ids", [(1, 2), (7,), ()])
    def test_tuple_field_keeps_tuple_type(self, ids):
        original = Packed(ids=ids, maybe=(3, 4))
        restored = deserialize(serialize(original), Packed)
        assert restored == original
        assert type(restored.ids) is tuple
        assert type(restored.maybe) is tuple

    def test_empty_optional_tuple_is_none(self):
        assert deserialize(serialize(Packed()), Packed).maybe is None

    def test_mixed_kinds(self):
        original = Mixed(count=3, label="abc", ratio=2.25, enabled=False, ids=[9, 8], note="hi")
        assert deserialize(serialize(original), Mixed) == original


class TestDeserialize:
    def test_one_line_fails(self):
        with pytest.raises(CsvFormatError):
            deserialize("i1,i2,i3", Fixture)

    def test_empty_text_fails(self):
        with pytest.raises(CsvFormatError):
            deserialize("", Fixture)

    def test_blank_lines_are_dropped(self):
        obj = deserialize("\n\ni1,i2\r\n\r\n7,8\n\n", Fixture)
        assert (obj.i1, obj.i2) == (7, 8)

    def test_blank_lines_alone_fail(self):
        with pytest.raises(CsvFormatError):
            deserialize("i1\n\n\r\n", Fixture)

    def test_accepts_both_newlines(self):
        assert deserialize("i1,mas\r\n9,4;5", Fixture) == deserialize("i1,mas\n9,4;5", Fixture)

    def test_unknown_column_is_ignored(self):
        obj = deserialize("i1,bogus,i3\n10,99,30", Fixture)
        assert obj.i1 == 10
        assert obj.i3 == 30
        assert obj.i2 == 2
        assert not hasattr(obj, "bogus")

    def test_name_match_is_case_sensitive(self):
        obj = deserialize("I1,MAS\n10,7;7", Fixture)
        assert obj == Fixture()

    def test_consistent_reordering(self):
        obj = deserialize("mas,i5,i1\n3;4,50,10", Fixture)
        assert obj == Fixture(i1=10, i5=50, mas=[3, 4])

    def test_longer_header_drops_trailing_names(self):
        obj = deserialize("i1,i2,i3\n10,20", Fixture)
        assert (obj.i1, obj.i2, obj.i3) == (10, 20, 3)

    def test_longer_value_row_drops_trailing_values(self):
        obj = deserialize("i1\n10,20,30", Fixture)
        assert (obj.i1, obj.i2, obj.i3) == (10, 2, 3)

    def test_extra_lines_are_ignored(self):
        obj = deserialize("i1\n10\nnot,a,row", Fixture)
        assert obj.i1 == 10

    def test_non_numeric_value_fails(self):
        with pytest.raises(CsvFormatError):
            deserialize("i1\nabc", Fixture)

    def test_non_numeric_segment_fails(self):
        with pytest.raises(CsvFormatError):
            deserialize("mas\n1;x;3", Fixture)

    def test_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            deserialize("only one line", Fixture)

    def test_codec_object(self):
        assert CsvCodec(Fixture).deserialize("i2\n22") == Fixture(i2=22)


class TestParseValue:
    def test_empty_integer_is_zero(self):
        assert parse_value("", FieldDescriptor("i1", FieldKind.INTEGER)) == 0

    def test_empty_sequence_is_empty_list(self):
        assert parse_value("", FieldDescriptor("mas", FieldKind.INTEGER_SEQUENCE)) == []

    def test_empty_optional_is_none(self):
        assert parse_value("", FieldDescriptor("note", FieldKind.TEXT, optional=True)) is None

    def test_empty_scalars(self):
        assert parse_value("", FieldDescriptor("f", FieldKind.FLOAT)) == 0.0
        assert parse_value("", FieldDescriptor("b", FieldKind.BOOLEAN)) is False
        assert parse_value("", FieldDescriptor("t", FieldKind.TEXT)) == ""

    @pytest.mark.parametrize("raw, expected", [("0", 0), ("-15", -15), ("+8", 8), (" 12 ", 12)])
    def test_integer(self, raw, expected):
        assert parse_value(raw, FieldDescriptor("i1", FieldKind.INTEGER)) == expected

    @pytest.mark.parametrize("raw", ["1.5", "1_000", "0x10", "abc", "١٢"])
    def test_integer_rejects_non_decimal(self, raw):
        with pytest.raises(CsvFormatError):
            parse_value(raw, FieldDescriptor("i1", FieldKind.INTEGER))

    def test_sequence_uses_container(self):
        descriptor = FieldDescriptor("ids", FieldKind.INTEGER_SEQUENCE, container=tuple)
        assert parse_value("4;5", descriptor) == (4, 5)
        assert parse_value("", descriptor) == ()

    def test_sequence_skips_empty_segments(self):
        descriptor = FieldDescriptor("mas", FieldKind.INTEGER_SEQUENCE)
        assert parse_value(";1;;2;", descriptor) == [1, 2]
        assert parse_value(";;", descriptor) == []

    def test_float(self):
        assert parse_value("2.5", FieldDescriptor("f", FieldKind.FLOAT)) == 2.5
        with pytest.raises(CsvFormatError):
            parse_value("two", FieldDescriptor("f", FieldKind.FLOAT))

    @pytest.mark.parametrize("raw, expected", [("True", True), ("false", False), ("TRUE", True)])
    def test_boolean(self, raw, expected):
        assert parse_value(raw, FieldDescriptor("b", FieldKind.BOOLEAN)) is expected

    def test_boolean_rejects_other_text(self):
        with pytest.raises(CsvFormatError):
            parse_value("yes", FieldDescriptor("b", FieldKind.BOOLEAN))

    def test_text_is_kept(self):
        assert parse_value(" a b ", FieldDescriptor("t", FieldKind.TEXT)) == " a b "
