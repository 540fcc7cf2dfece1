from typing import List

import click

from ..models import FileResult, SourceMappingInfo
from ..utils.paths import without_relative_part
from .formatting import format_bytes, format_percentage
from .tree import build_source_tree, render_tree


def _file(text: str) -> str:
    return click.style(text, bold=True)


def _highlight(text: str) -> str:
    return click.style(text, fg="cyan")


def _highlight2(text: str) -> str:
    return click.style(text, fg="green")


def _sizes(n: int, total: int) -> str:
    return f"{_highlight(format_bytes(n))} ({_highlight2(format_percentage(n, total))})"


def render_file_info(info: SourceMappingInfo, tree: bool = False) -> List[str]:
    """
    Text report for one analyzed file.

    Lists every source with its share of the meaningful file size (the file minus its
    directive), largest first, or as a directory tree when `tree` is set; then the
    attributed sum and the unattributed remainder.
    """
    mapping = info.source_mapping

    if mapping.is_empty():
        return [
            f"File {_file(mapping.file)} contains empty sourcemap "
            '(both "sources" and "mappings" arrays are empty)'
        ]

    total = mapping.source_file_without_source_map_len
    lines = [
        f"File {_file(mapping.file)}, total size {_highlight(format_bytes(total))}.",
        f"Size contribution per file (all paths are relative to {_file(mapping.sources_root())}):",
    ]

    if tree:
        lines.extend(render_tree(build_source_tree(info), total))
    else:
        for file_info in sorted(info.info_by_file, key=lambda i: i.bytes, reverse=True):
            name = without_relative_part(info.get_file_name(file_info.file))
            lines.append(f"- {_file(name)}, size {_sizes(file_info.bytes, total)}")

    lines.append(f"Total: {_sizes(info.sum_bytes, total)}")
    lines.append(
        "Remaining size taken by preamble, imports, whitespace, comments, etc.: "
        f"{_sizes(info.remainder, total)}"
    )
    return lines


def render_error(result: FileResult) -> List[str]:
    return [
        f"{click.style('!', fg='red', bold=True)} Error when parsing file {_file(result.file)}, "
        "make sure the sourcemap is correct:",
        f"- {result.error}",
    ]
