from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..models import SourceMappingInfo
from ..utils.paths import without_relative_part
from .formatting import format_bytes, format_percentage


@dataclass
class SourceTreeNode:
    """
    A directory (or, when `is_leaf`, a source file) of the sources tree.

    `bytes` of a directory is the sum over all its descendants. Directory children are
    keyed `"<name>/"` so a folder and a file with the same name can coexist.
    """

    name: str
    path: str
    bytes: int = 0
    is_leaf: bool = False
    children: Dict[str, "SourceTreeNode"] = field(default_factory=dict)

    def sorted_children(self) -> List["SourceTreeNode"]:
        """Directories first, then files, each group by name."""
        return sorted(self.children.values(), key=lambda c: (c.is_leaf, c.name))

    def find(self, path: str) -> Optional["SourceTreeNode"]:
        """Looks up a directory or source file by its project-relative path."""
        *dirs, last = path.split("/")
        node = self
        for part in dirs:
            node = node.children.get(f"{part}/")
            if node is None:
                return None
        return node.children.get(last) or node.children.get(f"{last}/")


def build_source_tree(info: SourceMappingInfo) -> SourceTreeNode:
    """
    Groups per-source byte counts by directory.

    Leading `../` runs are stripped from source paths first, so sources climbing out of
    the map's directory still land under readable project-relative folders.
    """
    root = SourceTreeNode(name="", path="")

    for file_info in info.info_by_file:
        path = without_relative_part(info.get_file_name(file_info.file))
        *dirs, leaf = path.split("/")

        node = root
        node.bytes += file_info.bytes
        for part in dirs:
            child = node.children.get(f"{part}/")
            if child is None:
                child_path = f"{node.path}/{part}" if node.path else part
                child = SourceTreeNode(name=part, path=child_path)
                node.children[f"{part}/"] = child
            node = child
            node.bytes += file_info.bytes

        leaf_node = node.children.get(leaf)
        if leaf_node is None:
            leaf_node = SourceTreeNode(name=leaf, path=path, is_leaf=True)
            node.children[leaf] = leaf_node
        leaf_node.bytes += file_info.bytes

    return root


def render_tree(root: SourceTreeNode, total: int, max_depth: Optional[int] = None) -> List[str]:
    """
    Indented text rendering of a sources tree, two spaces per level.

    Directories at `max_depth` or deeper are shown collapsed (`►`) with their aggregate only.
    """
    lines: List[str] = []

    def walk(node: SourceTreeNode, depth: int):
        for child in node.sorted_children():
            padding = " " * (depth * 2)
            sizes = f"{format_bytes(child.bytes)} ({format_percentage(child.bytes, total)})"
            if child.is_leaf:
                lines.append(f"{padding}{child.name} {sizes}")
                continue

            expanded = max_depth is None or depth < max_depth
            icon = "▼" if expanded else "►"
            lines.append(f"{padding}{icon} {child.name} {sizes}")
            if expanded:
                walk(child, depth + 1)

    walk(root, 0)
    return lines
