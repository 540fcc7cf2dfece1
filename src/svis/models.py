from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from .errors import SourceMapJSONError
from .utils.paths import file_name_of, infer_sources_root


@dataclass
class RawSourceMap:
    """
    The source map JSON document as found on disk (or inside a data URI).

    Only the keys the pipeline needs are kept. `file` is informational: the parser
    replaces it with the real path of the generated file.
    """

    sources: List[str]
    mappings: str
    file: str = ""
    source_root: Optional[str] = None
    names: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "RawSourceMap":
        """
        Validates the decoded JSON value and builds a RawSourceMap.

        Raises:
            SourceMapJSONError: If `data` is not an object, a required key is missing,
                or a value has the wrong type.
        """
        if not isinstance(data, dict):
            raise SourceMapJSONError(f"Source map must be a JSON object, got {type(data).__name__}")

        for key in ("sources", "mappings"):
            if key not in data:
                raise SourceMapJSONError(f"Source map is missing required key '{key}'")

        sources = data["sources"]
        if not isinstance(sources, list) or not all(s is None or isinstance(s, str) for s in sources):
            raise SourceMapJSONError("'sources' must be a list of strings")

        mappings = data["mappings"]
        if not isinstance(mappings, str):
            raise SourceMapJSONError("'mappings' must be a string")

        names = data.get("names") or []
        if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
            raise SourceMapJSONError("'names' must be a list of strings")

        file = data.get("file") or ""
        if not isinstance(file, str):
            raise SourceMapJSONError("'file' must be a string")

        source_root = data.get("sourceRoot")
        if source_root is not None and not isinstance(source_root, str):
            raise SourceMapJSONError("'sourceRoot' must be a string")

        return cls(
            sources=[s or "" for s in sources],
            mappings=mappings,
            file=file,
            source_root=source_root,
            names=list(names),
        )


@dataclass(frozen=True, slots=True)
class Mapping:
    """One decoded segment: a generated position and the source position it maps to (all 0-based)."""

    gen_line: int = 0
    gen_column: int = 0
    src_file: int = 0
    src_line: int = 0
    src_column: int = 0


# Sentinel used before the first mapping of a table.
EMPTY_MAPPING = Mapping()


@dataclass
class SourceMapping:
    """
    Fully reconstructed source map of one generated file.

    `source_file_len` and `source_map_len` do not come from the JSON document; the parser fills
    them from the file on disk so presentation code never has to touch the filesystem again.
    """

    file: str
    sources: List[str]
    mappings: List[Mapping]
    names: List[str] = field(default_factory=list)
    source_root: Optional[str] = None
    source_file_len: int = 0
    source_map_len: int = 0
    file_name: str = ""

    @classmethod
    def from_raw(cls, raw: RawSourceMap) -> "SourceMapping":
        from .parsing.mappings import decode_mappings

        return cls(
            file=raw.file,
            sources=raw.sources,
            mappings=decode_mappings(raw.mappings),
            names=raw.names,
            source_root=raw.source_root,
            file_name=file_name_of(raw.file),
        )

    def is_empty(self) -> bool:
        return not self.sources and not self.mappings

    def sources_root(self) -> str:
        return infer_sources_root(self.file, self.sources, self.source_root)

    @property
    def source_file_without_source_map_len(self) -> int:
        return self.source_file_len - self.source_map_len

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SourceMappingFileInfo:
    """Bytes attributed to one entry of `sources`, referenced by index."""

    file: int
    bytes: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SourceMappingInfo:
    """Size attribution result for one generated file."""

    source_mapping: SourceMapping
    sum_bytes: int
    info_by_file: List[SourceMappingFileInfo]

    def get_file_name(self, file: int) -> str:
        return self.source_mapping.sources[file]

    @property
    def remainder(self) -> int:
        """Bytes not attributed to any source: preamble, imports, whitespace, comments."""
        return self.source_mapping.source_file_without_source_map_len - self.sum_bytes

    def to_dict(self) -> Dict[str, Any]:
        mapping = self.source_mapping
        return {
            "file": mapping.file,
            "file_name": mapping.file_name,
            "source_file_len": mapping.source_file_len,
            "source_map_len": mapping.source_map_len,
            "sources_root": mapping.sources_root(),
            "sum_bytes": self.sum_bytes,
            "remainder": self.remainder,
            "info_by_file": [
                {"source": self.get_file_name(i.file), "bytes": i.bytes} for i in self.info_by_file
            ],
        }


@dataclass
class FileResult:
    """
    Outcome of analyzing one generated file inside a batch.

    Exactly one of `info` and `error` is set.
    """

    file: str
    info: Optional[SourceMappingInfo] = None
    error: Optional[Exception] = None
    file_name: str = ""

    def __post_init__(self):
        if not self.file_name:
            self.file_name = file_name_of(self.file)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        if self.info is not None:
            return {"file": self.file, "ok": True, "info": self.info.to_dict()}
        return {"file": self.file, "ok": False, "error": str(self.error)}


@dataclass
class BatchSummary:
    files_checked: int = 0
    files_failed: int = 0
    cancelled: int = 0

    @property
    def files_succeeded(self) -> int:
        return self.files_checked - self.files_failed

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
