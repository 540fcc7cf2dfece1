"""
Ordering and lookup over a finished batch.

Batch runners deliver results in discovery or completion order; these helpers give
presentation code the views the interactive tool offered: sort by name, by meaningful
file size or by number of sources, and "which bundle contains this source file".
"""

from enum import Enum
from typing import Iterable, List

from ..models import FileResult


class ResultSort(str, Enum):
    NAME = "name"
    SIZE = "size"
    SOURCES = "sources"


def _failures_first(result: FileResult) -> int:
    return 1 if result.ok else 0


def _sort_key(sort: ResultSort):
    if sort is ResultSort.NAME:
        return lambda r: (r.file_name, r.file)
    if sort is ResultSort.SIZE:
        return lambda r: (
            _failures_first(r),
            r.info.source_mapping.source_file_without_source_map_len if r.ok else 0,
            r.file,
        )
    return lambda r: (_failures_first(r), len(r.info.info_by_file) if r.ok else 0, r.file)


def sort_results(results: Iterable[FileResult], sort: ResultSort = ResultSort.NAME, reverse: bool = False) -> List[FileResult]:
    """
    Sorts batch results.

    For SIZE and SOURCES, failed files come before successful ones (after them when
    `reverse` is set). Ties are broken by path so the order is stable across runs.
    """
    return sorted(results, key=_sort_key(ResultSort(sort)), reverse=reverse)


def find_results_by_source(results: Iterable[FileResult], query: str) -> List[FileResult]:
    """Successful results whose `sources` contain `query` as a substring."""
    return [
        r
        for r in results
        if r.ok and any(query in source for source in r.info.source_mapping.sources)
    ]
