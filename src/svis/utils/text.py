from typing import List


def split_lines(text: str) -> List[str]:
    """
    Splits text on `\\n`, dropping a `\\r` that precedes it.

    A terminator at the very end does not produce an extra empty line, so
    `"a\\nb\\n"` and `"a\\nb"` both give `["a", "b"]` and `""` gives `[]`.
    Unlike `str.splitlines`, Unicode separators such as U+2028 are left alone: they
    can legally appear inside JavaScript string literals and do not start a new
    generated line as far as source maps are concerned.
    """
    if not text:
        return []

    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()

    return [line[:-1] if line.endswith("\r") else line for line in lines]


def utf8_len(text: str) -> int:
    return len(text.encode("utf-8"))
