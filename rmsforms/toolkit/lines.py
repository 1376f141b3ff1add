import re
from collections.abc import Sequence

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(text: str | None) -> list[str]:
    """Split text on any line terminator."""
    if not text:
        return []
    return _LINE_BREAK.split(text)


def get_string_from_form_lines(
    lines: Sequence[str], tag: str, delimiter: str = "="
) -> str | None:
    """Return the remainder of the first line starting with ``tag``.

    Lines are trimmed before matching. The value is whatever follows the
    first ``delimiter``; a matching line with no delimiter yields ``None``,
    as does no matching line.
    """
    for line in lines:
        line = line.strip()
        if line.startswith(tag):
            _, found, value = line.partition(delimiter)
            if not found:
                return None
            return value
    return None


def value_after(lines: Sequence[str], prefix: str) -> str | None:
    """Return the trimmed remainder of the first line starting with ``prefix``."""
    for line in lines:
        if line.startswith(prefix):
            return line[len(prefix):].strip()
    return None


def index_of(lines: Sequence[str], prefix: str, start: int = 0) -> int:
    """Index of the first line (trimmed) starting with ``prefix``, or -1."""
    for i in range(start, len(lines)):
        if lines[i].strip().startswith(prefix):
            return i
    return -1


def lines_between(
    lines: Sequence[str], start: str, end: str | None = None, include_start: bool = False
) -> list[str]:
    """Collect the lines after the one starting with ``start``.

    Collection stops before the first later line starting with ``end``, or at
    the end of input. When ``include_start`` is set, whatever follows the
    start label on its own line is kept as the first element.
    """
    begin = index_of(lines, start)
    if begin < 0:
        return []
    result = []
    if include_start:
        head = lines[begin].strip()[len(start):].strip()
        if head:
            result.append(head)
    for line in lines[begin + 1:]:
        if end is not None and line.strip().startswith(end):
            break
        result.append(line)
    return result
