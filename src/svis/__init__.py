from .analyzer import calculate_size_by_file
from .collector import discover_files
from .errors import DiscoveryError, SourceMapError, SvisError
from .models import (
    BatchSummary,
    FileResult,
    Mapping,
    RawSourceMap,
    SourceMapping,
    SourceMappingFileInfo,
    SourceMappingInfo,
)
from .parsing import decode_mappings, decode_segment, parse_file_by_path
from .runner import AnalysisJob, BatchRunner, ProgressCounter, analyze_path, analyze_path_concurrent, handle_file

__all__ = [
    "discover_files", "handle_file",
    "analyze_path", "analyze_path_concurrent",
    "BatchRunner", "AnalysisJob", "ProgressCounter",
    "parse_file_by_path", "decode_mappings", "decode_segment", "calculate_size_by_file",
    "Mapping", "RawSourceMap", "SourceMapping", "SourceMappingFileInfo", "SourceMappingInfo",
    "FileResult", "BatchSummary",
    "SvisError", "DiscoveryError", "SourceMapError",
]
