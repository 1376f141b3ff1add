from collections.abc import Iterable
from datetime import date, datetime, time


class MultiDateTimeParser:
    """Tries an ordered list of ``strptime`` patterns and keeps the first that fits.

    Forms in the field are filled in by hand, by different client versions and
    in different locales, so each parser declares the patterns it has seen.
    Failure is reported as ``None``; the caller decides whether that rejects the
    message or leaves the field unparsed.
    """

    def __init__(self, patterns: Iterable[str]) -> None:
        self._patterns = tuple(patterns)
        if not self._patterns:
            raise ValueError("at least one date/time pattern is required")

    @property
    def patterns(self) -> tuple[str, ...]:
        return self._patterns

    def parse(self, text: str | None) -> datetime | None:
        if not text:
            return None
        text = text.strip()
        for pattern in self._patterns:
            try:
                return datetime.strptime(text, pattern)
            except ValueError:
                continue
        return None

    def parse_date(self, text: str | None) -> date | None:
        parsed = self.parse(text)
        return parsed.date() if parsed is not None else None

    def parse_time(self, text: str | None) -> time | None:
        parsed = self.parse(text)
        return parsed.time() if parsed is not None else None
