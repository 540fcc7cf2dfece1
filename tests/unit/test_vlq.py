import pytest

from svis.errors import SourceMapError, VLQDecodeError
from svis.parsing.vlq import decode_segment, decode_values

GOLDEN_SEGMENTS = [
    ("AA2CA", (0, 0, 43, 0)),
    ("MAAK", (6, 0, 0, 5)),
    ("YAAa", (12, 0, 0, 13)),
    ("gBAAa", (16, 0, 0, 13)),
    ("AAAA", (0, 0, 0, 0)),
    ("EAC3B", (2, 0, 1, -27)),
    ("MAAM", (6, 0, 0, 6)),
    ("AAAA", (0, 0, 0, 0)),
    ("EACN", (2, 0, 1, -6)),
    ("YAAY", (12, 0, 0, 12)),
    ("EAAE", (2, 0, 0, 2)),
    ("iBAAiB", (17, 0, 0, 17)),
    ("aAAc", (13, 0, 0, 14)),
    ("AAAA", (0, 0, 0, 0)),
    ("EAC7C", (2, 0, 1, -45)),
    ("OAAO", (7, 0, 0, 7)),
]


@pytest.mark.parametrize("segment, expected", GOLDEN_SEGMENTS)
def test_decode_segment_golden_vectors(segment, expected):
    assert decode_segment(segment) == expected


def test_empty_segment_decodes_to_zeros():
    assert decode_segment("") == (0, 0, 0, 0)


def test_fifth_value_is_accepted_and_ignored():
    # 4 position fields followed by a names index of 3.
    assert decode_segment("AAAAG") == (0, 0, 0, 0)
    assert decode_segment("EAC3BC") == (2, 0, 1, -27)


def test_unterminated_sequence():
    # 'g' has the continuation bit set and nothing follows it.
    with pytest.raises(VLQDecodeError) as exc_info:
        decode_segment("AAAg")

    assert exc_info.value.reason == "unterminated sequence"
    assert exc_info.value.segment == "AAAg"


@pytest.mark.parametrize("segment", ["AAA", "AAAAAA", "A"])
def test_wrong_field_count(segment):
    with pytest.raises(VLQDecodeError) as exc_info:
        decode_segment(segment)

    assert exc_info.value.reason == "wrong field count"
    assert segment in str(exc_info.value)


def test_character_outside_alphabet():
    with pytest.raises(VLQDecodeError) as exc_info:
        decode_segment("AA-A")

    assert exc_info.value.reason == "invalid character"
    assert "'-'" in str(exc_info.value)


def test_url_safe_variant_is_rejected():
    with pytest.raises(VLQDecodeError):
        decode_segment("AA_A")


def test_vlq_errors_are_per_file_errors():
    assert issubclass(VLQDecodeError, SourceMapError)


def test_decode_values_multi_digit():
    assert decode_values("gqjG") == [100000]
    assert decode_values("hqjG") == [-100000]
    assert decode_values("DFLx+BhqjG") == [-1, -2, -5, -1000, -100000]
    assert decode_values("CEKw+BgqjG") == [1, 2, 5, 1000, 100000]
    assert decode_values("/+Z") == [-13295]
