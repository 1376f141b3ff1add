from collections.abc import Iterable

from rmsforms.messages.base import RawMessage
from rmsforms.toolkit.lines import split_lines

MAP_FILE_NAME = "MapFileName"


def parse_form_data(text: str | bytes | None) -> dict[str, str]:
    """Parse a ``FormData.txt`` side channel into a key/value mapping.

    Each line is ``key=value``; only the first ``=`` separates. Lines without
    one are ignored and the first occurrence of a key wins.
    """
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")
    values: dict[str, str] = {}
    for line in split_lines(text):
        key, found, value = line.partition("=")
        key = key.strip()
        if found and key and key not in values:
            values[key] = value.strip()
    return values


def map_file_name(text: str | bytes | None) -> str:
    """The ``MapFileName`` a form declares in its side channel, or ``""``."""
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")
    for line in split_lines(text):
        line = line.strip()
        if line.startswith(MAP_FILE_NAME):
            _, _, value = line.partition("=")
            return value.strip()
    return ""


class FormDataIndex:
    """Read-only FormData entries keyed by ``(sender, message id)``."""

    def __init__(self, entries: dict[tuple[str, str], dict[str, str]] | None = None) -> None:
        self._entries = dict(entries or {})

    @classmethod
    def from_messages(cls, messages: Iterable[RawMessage]) -> "FormDataIndex":
        entries = {}
        for message in messages:
            content = message.form_data
            if content is not None:
                entries[message.key] = parse_form_data(content)
        return cls(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def lookup(self, message: RawMessage) -> dict[str, str] | None:
        """Entry for this message, falling back to its own attachment."""
        entry = self._entries.get(message.key)
        if entry is None and message.form_data is not None:
            entry = parse_form_data(message.form_data)
        return entry
