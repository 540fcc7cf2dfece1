"""
Base64 VLQ decoding for source map segments.

A segment is a run of characters from the standard base64 alphabet. Every character
carries six bits: bit 5 (0x20) is the continuation flag, the low five bits are payload.
A value ends at the first character without the continuation flag. Inside a value the
digits are little-endian; the first digit spends its bit 0 on the sign and only bits 1-4
on magnitude.
"""

from typing import List, Tuple

from ..errors import VLQDecodeError

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
B64 = {c: i for i, c in enumerate(ALPHABET)}

CONTINUATION_BIT = 0b100000
SEGMENT_FIELDS = 4


def _group(segment: str) -> List[List[int]]:
    """Maps characters to 6-bit digits and splits them into one group per value."""
    groups: List[List[int]] = []
    current: List[int] = []

    for char in segment:
        digit = B64.get(char)
        if digit is None:
            raise VLQDecodeError(
                f"Invalid base64 character {char!r} in VLQ segment {segment!r}",
                segment=segment,
                reason="invalid character",
            )

        current.append(digit)
        if not digit & CONTINUATION_BIT:
            groups.append(current)
            current = []

    if current:
        raise VLQDecodeError(
            f"Last VLQ sequence never ended in segment {segment!r}",
            segment=segment,
            reason="unterminated sequence",
        )

    return groups


def _decode_group(digits: List[int]) -> int:
    value = 0
    negative = False

    for index in range(len(digits) - 1, -1, -1):
        digit = digits[index]
        if index == 0:
            negative = bool(digit & 1)
            value = (value << 4) | ((digit >> 1) & 0b1111)
        else:
            value = (value << 5) | (digit & 0b11111)

    return -value if negative else value


def decode_values(segment: str) -> List[int]:
    """Decodes every VLQ value of a run, whatever their count."""
    return [_decode_group(g) for g in _group(segment)]


def decode_segment(segment: str) -> Tuple[int, int, int, int]:
    """
    Decodes one mapping segment into its four position deltas.

    Returns:
        `(delta_gen_column, delta_src_file, delta_src_line, delta_src_column)`.
        An empty segment decodes to four zeros.

    Raises:
        VLQDecodeError: On characters outside the alphabet, an unterminated last value,
            or a value count other than 4 or 5 (the fifth, a `names` index, is ignored).
    """
    if not segment:
        return (0, 0, 0, 0)

    groups = _group(segment)
    if len(groups) not in (4, 5):
        raise VLQDecodeError(
            f"Either 4 or 5 VLQ values should be present, {len(groups)} values found. "
            f"Base64 value: {segment}",
            segment=segment,
            reason="wrong field count",
        )

    delta_gen_column, delta_src_file, delta_src_line, delta_src_column = (
        _decode_group(g) for g in groups[:SEGMENT_FIELDS]
    )
    return delta_gen_column, delta_src_file, delta_src_line, delta_src_column
