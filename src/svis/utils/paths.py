from typing import Optional, Sequence


def file_name_of(path: str) -> str:
    """Basename after the last `/`, or the whole path when there is none."""
    pos = path.rfind("/")
    return path[pos + 1 :] if pos != -1 else path


def without_relative_part(path: str) -> str:
    """Drops every leading `../` so sources read as project-relative paths."""
    while path.startswith("../"):
        path = path[3:]
    return path


def infer_sources_root(file: str, sources: Sequence[str], source_root: Optional[str] = None) -> str:
    """
    Best-effort directory that the entries of `sources` are relative to.

    An explicit non-empty `sourceRoot` wins. Otherwise the number of leading `..`
    components of the first source tells how many directories to climb from the
    generated file: strip that many trailing components of `file`, plus one for the
    file name itself.

    Only reliable when `sources[0]` is relative to the project root like its siblings.
    """
    if source_root:
        return source_root

    if not sources:
        return ""

    relative_jumps = 0
    for part in sources[0].split("/"):
        if part != "..":
            break
        relative_jumps += 1

    parts = file.split("/")
    keep = len(parts) - (relative_jumps + 1)
    return "/".join(parts[: max(keep, 0)])
