import logging

from opentelemetry import trace

from .errors import AttributionError
from .models import EMPTY_MAPPING, SourceMapping, SourceMappingFileInfo, SourceMappingInfo
from .utils.text import split_lines, utf8_len

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


def calculate_size_by_file(file_contents: str, source_mapping: SourceMapping) -> SourceMappingInfo:
    """
    Attributes the bytes of a generated file to the original sources of its map.

    Every mapping owns the span from its generated column up to the next mapping on the
    same line, or up to the end of the line for the last mapping of a line. The first
    mapping of a line is also charged with the unmapped prefix before it: source maps
    usually skip keywords and punctuation, so in `function example() {}` the mapping may
    start at `example` and `function ` would otherwise be lost.

    Args:
        file_contents (str): Text of the generated file.
        source_mapping (SourceMapping): Its reconstructed source map.

    Returns:
        SourceMappingInfo: Per-source byte counts in `sources` order, plus their sum.

    Raises:
        AttributionError: If the map contradicts the file (a span ending before it starts,
            a generated line the file does not have, or an unknown source index).
    """
    with tracer.start_as_current_span("analyzer.calculate_size") as span:
        span.set_attribute("file.path", source_mapping.file)

        line_lengths = [utf8_len(line) for line in split_lines(file_contents)]
        info_by_file = [SourceMappingFileInfo(file=index) for index in range(len(source_mapping.sources))]
        sum_bytes = 0

        mappings = source_mapping.mappings
        prev_mapping = EMPTY_MAPPING

        for index, mapping in enumerate(mappings):
            if mapping.src_file >= len(info_by_file):
                raise AttributionError(
                    f"Mapping {mapping} references source #{mapping.src_file} but only "
                    f"{len(info_by_file)} sources exist in {source_mapping.file}",
                    path=source_mapping.file,
                )
            if mapping.gen_line >= len(line_lengths):
                raise AttributionError(
                    f"Mapping {mapping} points past the last line ({len(line_lengths)}) of {source_mapping.file}",
                    path=source_mapping.file,
                )

            bytes_ = 0
            if index == 0 or mapping.gen_line != prev_mapping.gen_line:
                bytes_ += mapping.gen_column

            next_mapping = mappings[index + 1] if index + 1 < len(mappings) else None
            if next_mapping is not None and next_mapping.gen_line == mapping.gen_line:
                end_column = next_mapping.gen_column
            else:
                end_column = line_lengths[mapping.gen_line]

            if end_column < mapping.gen_column:
                # Seen with maps that point at columns the generated file does not have.
                raise AttributionError(
                    f"Subtraction underflow: calculating bytes for path {source_mapping.file}, "
                    f"operation: {end_column} - {mapping.gen_column}",
                    path=source_mapping.file,
                )

            bytes_ += end_column - mapping.gen_column

            info_by_file[mapping.src_file].bytes += bytes_
            sum_bytes += bytes_
            prev_mapping = mapping

        span.set_attribute("analyzer.sum_bytes", sum_bytes)
        logger.debug(f"Attributed {sum_bytes} bytes of {source_mapping.file} to {len(info_by_file)} sources")

        return SourceMappingInfo(
            source_mapping=source_mapping,
            sum_bytes=sum_bytes,
            info_by_file=info_by_file,
        )
