from .browse import ResultSort, find_results_by_source, sort_results
from .formatting import format_bytes, format_percentage
from .terminal import render_error, render_file_info
from .tree import SourceTreeNode, build_source_tree, render_tree

__all__ = [
    "ResultSort", "sort_results", "find_results_by_source",
    "format_bytes", "format_percentage",
    "render_file_info", "render_error",
    "SourceTreeNode", "build_source_tree", "render_tree",
]
