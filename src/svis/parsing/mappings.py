import logging
from typing import List

from ..errors import VLQDecodeError
from ..models import EMPTY_MAPPING, Mapping
from .vlq import decode_segment

logger = logging.getLogger(__name__)


def decode_mappings(mappings: str) -> List[Mapping]:
    """
    Rebuilds the absolute mapping table from the encoded `mappings` string.

    `;` separates generated lines and `,` separates segments. The generated column is
    relative to the previous segment of the same line and restarts from 0 on every line,
    while the source file, line and column accumulate over the whole table.

    Raises:
        VLQDecodeError: If a segment is malformed or yields a negative position.
    """
    result: List[Mapping] = []
    prev = EMPTY_MAPPING

    for gen_line, line_chunk in enumerate(mappings.split(";")):
        if not line_chunk:
            continue

        line_prev_column = 0

        for index, segment in enumerate(line_chunk.split(",")):
            try:
                d_gen_column, d_src_file, d_src_line, d_src_column = decode_segment(segment)
            except VLQDecodeError as e:
                raise VLQDecodeError(
                    f"{e.message} (generated line {gen_line}, segment {index})",
                    segment=e.segment,
                    reason=e.reason,
                ) from e

            mapping = Mapping(
                gen_line=gen_line,
                gen_column=line_prev_column + d_gen_column,
                src_file=prev.src_file + d_src_file,
                src_line=prev.src_line + d_src_line,
                src_column=prev.src_column + d_src_column,
            )

            if min(mapping.gen_column, mapping.src_file, mapping.src_line, mapping.src_column) < 0:
                raise VLQDecodeError(
                    f"Segment {segment!r} yields a negative position {mapping} "
                    f"(generated line {gen_line}, segment {index})",
                    segment=segment,
                    reason="negative position",
                )

            line_prev_column = mapping.gen_column
            prev = mapping
            result.append(mapping)

    logger.debug(f"Decoded {len(result)} mappings over {mappings.count(';') + 1} generated lines")
    return result
