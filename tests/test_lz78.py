import random

import pytest

from text_compression.errors import FormatError, IndexOutOfRange, TypeMismatch
from text_compression.LZ78 import (
    EncodedPair,
    build_dictionary,
    decode,
    encode,
    encoded_to_string,
    estimate_compressed_size,
    string_to_encoded,
)


@pytest.fixture
def random_texts():
    rng = random.Random(42)
    alphabet = "ab c\n,ñ€"
    return [
        "".join(rng.choice(alphabet) for _ in range(rng.randint(0, 300)))
        for _ in range(25)
    ]


class TestEncode:
    def test_repeated_symbol(self):
        assert encode("aaaa") == [(0, "a"), (1, "a"), (1, "")]

    def test_empty_text(self):
        assert encode("") == []

    def test_distinct_symbols(self):
        assert encode("ab") == [(0, "a"), (0, "b")]

    def test_growing_phrases(self):
        assert encode("ABABABA") == [(0, "A"), (0, "B"), (1, "B"), (3, "A")]

    def test_pairs_are_named(self):
        pair = encode("x")[0]
        assert isinstance(pair, EncodedPair)
        assert (pair.index, pair.char) == (0, "x")

    @pytest.mark.parametrize("value", [None, 42, b"bytes", ["a", "b"]])
    def test_rejects_non_text(self, value):
        with pytest.raises(TypeMismatch):
            encode(value)

    def test_type_mismatch_is_a_type_error(self):
        with pytest.raises(TypeError):
            encode(3.14)

    def test_indices_reference_earlier_codes(self, random_texts):
        for text in random_texts:
            for position, (index, _) in enumerate(encode(text)):
                # pair i can only see codes 0..i
                assert 0 <= index <= position


class TestDecode:
    def test_repeated_symbol(self):
        assert decode([(0, "a"), (1, "a"), (1, "")]) == "aaaa"

    def test_empty_sequence(self):
        assert decode([]) == ""

    def test_accepts_tuple_of_pairs(self):
        assert decode(((0, "B"), (0, "C"), (1, "C"))) == "BCBC"

    def test_round_trip(self, random_texts):
        for text in random_texts:
            assert decode(encode(text)) == text

    def test_round_trip_text(self):
        text = "Lorem ipsum dolor sit amet, lorem ipsum dolor sit amet.\n" * 20
        assert decode(encode(text)) == text

    def test_unassigned_index(self):
        with pytest.raises(IndexOutOfRange) as exc_info:
            decode([(1, "a")])
        assert exc_info.value.index == 1
        assert exc_info.value.next_code == 1
        assert exc_info.value.position == 0

    def test_index_not_assigned_yet(self):
        with pytest.raises(IndexOutOfRange) as exc_info:
            decode([(0, "a"), (2, "b")])
        assert exc_info.value.position == 1

    def test_negative_index(self):
        with pytest.raises(IndexOutOfRange):
            decode([(-1, "a")])

    def test_index_error_is_builtin_index_error(self):
        with pytest.raises(IndexError):
            decode([(5, "a")])

    @pytest.mark.parametrize("pairs", ["0,a", None, 7, {"index": 0}])
    def test_rejects_non_sequence(self, pairs):
        with pytest.raises(TypeMismatch):
            decode(pairs)

    @pytest.mark.parametrize("pair", [(True, "a"), ("0", "a"), (0, 5), (0, "ab"), (0,), 3])
    def test_rejects_malformed_pair(self, pair):
        with pytest.raises(TypeMismatch):
            decode([pair])


class TestBuildDictionary:
    def test_codes_are_sequential(self, random_texts):
        for text in random_texts:
            table = build_dictionary(encode(text))
            assert [index for index, _ in table] == list(range(len(table)))

    def test_every_entry_extends_an_earlier_one(self, random_texts):
        for text in random_texts:
            strings = {string for _, string in build_dictionary(encode(text))}
            for string in strings:
                assert string == "" or string[:-1] in strings

    def test_registers_every_non_empty_string(self):
        pairs = encode("aaaa")
        assert build_dictionary(pairs) == [(0, ""), (1, "a"), (2, "aa"), (3, "a")]

    def test_deduplicated_display(self):
        pairs = encode("aaaa")
        assert build_dictionary(pairs, deduplicate=True) == [(0, ""), (1, "a"), (2, "aa")]

    def test_deduplicated_display_can_shift_indices(self):
        pairs = [(0, "a"), (0, "a"), (2, "b")]
        assert build_dictionary(pairs) == [(0, ""), (1, "a"), (2, "a"), (3, "ab")]
        assert build_dictionary(pairs, deduplicate=True) == [(0, ""), (1, "a"), (2, "b")]

    def test_validates_indices(self):
        with pytest.raises(IndexOutOfRange):
            build_dictionary([(3, "a")])

    def test_empty_sequence(self):
        assert build_dictionary([]) == [(0, "")]


class TestTextFormat:
    def test_serialize(self):
        assert encoded_to_string([(0, "a"), (1, "a"), (1, "")]) == "0,a\n1,a\n1,"

    def test_serialize_empty(self):
        assert encoded_to_string([]) == ""

    def test_serialize_rejects_multi_char_pair(self):
        with pytest.raises(TypeMismatch):
            encoded_to_string([(0, "ab")])

    def test_parse(self):
        assert string_to_encoded("0,a\n1,a\n1,") == [(0, "a"), (1, "a"), (1, "")]

    def test_parse_trims_whitespace(self):
        assert string_to_encoded("\n  0,B\n0,C\n1,C\n\n") == [(0, "B"), (0, "C"), (1, "C")]

    def test_parse_blank_blob(self):
        assert string_to_encoded("  \n") == []

    def test_missing_comma(self):
        with pytest.raises(FormatError) as exc_info:
            string_to_encoded("abc")
        assert exc_info.value.line_number == 1
        assert exc_info.value.line == "abc"

    def test_bad_index_on_later_line(self):
        with pytest.raises(FormatError) as exc_info:
            string_to_encoded("0,a\nx,b")
        assert exc_info.value.line_number == 2

    @pytest.mark.parametrize("blob", ["-1,a", ",a", "1.5,a", "0,ab"])
    def test_invalid_lines(self, blob):
        with pytest.raises(FormatError):
            string_to_encoded(blob)

    def test_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            string_to_encoded("nonsense")

    def test_parse_rejects_non_text(self):
        with pytest.raises(TypeMismatch):
            string_to_encoded([(0, "a")])

    def test_comma_character(self):
        pairs = encode("a,b,")
        blob = encoded_to_string(pairs)
        assert blob == "0,a\n0,,\n0,b\n2,"
        assert string_to_encoded(blob) == pairs

    def test_newline_character(self):
        text = "a\nb\n\nc"
        blob = encoded_to_string(encode(text))
        assert decode(string_to_encoded(blob)) == text

    def test_round_trip_through_text(self):
        text = "la casa, la cosa\ny la causa\tfinal"
        assert decode(string_to_encoded(encoded_to_string(encode(text)))) == text


def test_estimate_compressed_size():
    assert estimate_compressed_size(encode("aaaa")) == 6
    assert estimate_compressed_size([]) == 0
