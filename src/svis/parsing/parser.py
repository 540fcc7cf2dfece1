import base64
import binascii
import json
import logging
import os
from typing import Tuple

from opentelemetry import trace

from ..errors import (
    EmptyFileError,
    ExternalSourceMapError,
    GeneratedFileError,
    InlineSourceMapError,
    SourceMapError,
    SourceMapJSONError,
    UnsupportedFormatError,
)
from ..models import RawSourceMap, SourceMapping
from ..utils.text import split_lines, utf8_len

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

DIRECTIVE_PREFIX = "//# sourceMappingURL="
DATA_URI_PREFIX = "data:application/json;"
BASE64_MARKER = "base64,"


def parse_file_by_path(path: str) -> Tuple[str, SourceMapping]:
    """
    Locates, loads and decodes the source map of a generated file.

    **Workflow:**
    1.  Reads the generated file and takes its last line.
    2.  The last line must be a `//# sourceMappingURL=` directive, pointing either to an
        inline base64 data URI or to a `.map` file relative to the generated file.
    3.  Parses the JSON, replaces its `file` with `path` and rebuilds the mapping table.
    4.  Records the on-disk size of the file and the footprint of the directive.

    Args:
        path (str): Path of the generated (bundled/minified) file.

    Returns:
        Tuple[str, SourceMapping]: The generated file contents and its reconstructed source map.

    Raises:
        SourceMapError: Any per-file failure (see `svis.errors`).
    """
    with tracer.start_as_current_span("parser.parse_file") as span:
        span.set_attribute("file.path", path)

        try:
            source_file_len = os.stat(path).st_size
            with open(path, "rb") as f:
                raw = f.read()
        except OSError as e:
            raise GeneratedFileError(f"Cannot read file {path}: {e}", path=path) from e

        try:
            contents = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise GeneratedFileError(f"File {path} is not valid UTF-8: {e}", path=path) from e

        lines = split_lines(contents)
        if not lines:
            raise EmptyFileError(f"File {path} is empty.", path=path)

        last_line = lines[-1]

        try:
            raw_source_map = parse_raw_source_map(path, last_line)
        except SourceMapError as e:
            e.path = e.path or path
            raise

        raw_source_map.file = path

        try:
            source_mapping = SourceMapping.from_raw(raw_source_map)
        except SourceMapError as e:
            e.path = path
            raise

        source_mapping.source_file_len = source_file_len
        source_mapping.source_map_len = directive_footprint(contents)

        span.set_attribute("sourcemap.sources", len(source_mapping.sources))
        span.set_attribute("sourcemap.mappings", len(source_mapping.mappings))
        logger.debug(
            f"Parsed {path}: {len(source_mapping.sources)} sources, {len(source_mapping.mappings)} mappings"
        )

        return contents, source_mapping


def directive_footprint(contents: str) -> int:
    """
    Bytes taken by the trailing directive line.

    Counts everything after the last content line: the terminator separating it from the
    directive, the directive itself and any terminator after it. A file made only of the
    directive is its own footprint.
    """
    body = contents
    if body.endswith("\n"):
        body = body[:-1]
    if body.endswith("\r"):
        body = body[:-1]

    cut = body.rfind("\n")
    if cut == -1:
        return utf8_len(contents)

    content = body[:cut]
    if content.endswith("\r"):
        content = content[:-1]
    return utf8_len(contents) - utf8_len(content)


def parse_raw_source_map(path: str, line: str) -> RawSourceMap:
    """
    Resolves the directive on `line` to the raw source map document.

    Raises:
        UnsupportedFormatError: If `line` is not a `//# sourceMappingURL=` directive.
        InlineSourceMapError: If a data URI has no `base64,` marker or an invalid payload.
        ExternalSourceMapError: If the referenced map file cannot be read.
        SourceMapJSONError: If the document is not a valid source map.
    """
    directive = line.strip()
    if not directive.startswith(DIRECTIVE_PREFIX):
        raise UnsupportedFormatError(f"Unsupported format: {directive[:100]}", path=path)

    url = directive[len(DIRECTIVE_PREFIX) :]

    if url.startswith(DATA_URI_PREFIX):
        index = url.find(BASE64_MARKER)
        if index == -1:
            raise InlineSourceMapError(f"File {path} does not contain base64 sourcemap.", path=path)

        payload = url[index + len(BASE64_MARKER) :]
        try:
            decoded = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise InlineSourceMapError(f"File {path} contains invalid base64 sourcemap: {e}", path=path) from e

        json_text = decoded.decode("utf-8", errors="replace")
    else:
        map_path = os.path.join(os.path.dirname(path), url)
        try:
            with open(map_path, "r", encoding="utf-8", errors="replace") as f:
                json_text = f.read()
        except OSError as e:
            raise ExternalSourceMapError(f"Cannot read source map {map_path}: {e}", path=path) from e

    return parse_source_map_text(json_text)


def parse_source_map_text(json_text: str) -> RawSourceMap:
    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as e:
        raise SourceMapJSONError(f"Invalid source map JSON: {e}") from e

    return RawSourceMap.from_dict(data)
