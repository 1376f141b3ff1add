import re
import xml.etree.ElementTree as ET
from collections.abc import Iterable

from rmsforms.toolkit.exceptions import DocumentParseError
from rmsforms.toolkit.location import INVALID, LatLongPair, parse_combined

DEFAULT_LATLON_TAGS: tuple[str, ...] = ("maplat", "gps2", "GPS2", "gpslat")

_PARSEME = re.compile(r"<parseme>.*?</parseme>", re.DOTALL)
_BAD_CHARACTER_REFERENCES = ("&#21;", "&#21")


def merged_tag_names(overrides: Iterable[str] = ()) -> list[str]:
    """Default lat/long tags followed by any form-specific ones, without repeats."""
    merged = list(DEFAULT_LATLON_TAGS)
    for tag in overrides:
        if tag not in merged:
            merged.append(tag)
    return merged


def missing_location_context(overrides: Iterable[str] = ()) -> str:
    """Rejection context naming every tag searched for a location."""
    return "couldn't find lat/long within tags: [" + ", ".join(merged_tag_names(overrides)) + "]"


class FormDocument:
    """A navigable view over one RMS viewer attachment.

    Built fresh for every message; never share an instance across threads.
    """

    def __init__(self, message_id: str, root: ET.Element) -> None:
        self.message_id = message_id
        self._root = root

    @classmethod
    def build(
        cls, message_id: str, text: str | bytes | None, remove_parseme: bool = True
    ) -> "FormDocument":
        """Repair and parse a viewer attachment.

        Args:
            message_id: Id of the message the attachment belongs to.
            text: Raw attachment content.
            remove_parseme: Drop the embedded ``<parseme>`` block, which holds
                JSON that is not well-formed XML content for most forms.

        Returns:
            The parsed document.

        Raises:
            DocumentParseError: if the repaired text is still not parseable.
        """
        if isinstance(text, bytes):
            text = text.decode("utf-8", errors="replace")
        text = (text or "").strip()

        start = text.find("<")
        if start > 0:
            text = text[start:]
        if remove_parseme:
            text = _PARSEME.sub("", text)
        if not text.endswith(">"):
            text = text + ">"
        for reference in _BAD_CHARACTER_REFERENCES:
            text = text.replace(reference, "_")

        try:
            root = ET.fromstring(text)
        except ET.ParseError as exc:
            raise DocumentParseError(f"can't parse xml for message {message_id}: {exc}") from exc
        return cls(message_id, root)

    def get(self, tag: str) -> str:
        """Trimmed text of the first element named ``tag``, or ``""``.

        Older templates capitalised some tag names, so a lowercase name that is
        not found is retried with its first letter capitalised.
        """
        element = next(self._root.iter(tag), None)
        if element is None and tag[:1].islower():
            element = next(self._root.iter(tag[0].upper() + tag[1:]), None)
        if element is None:
            return ""
        return (element.text or "").strip()

    def get_lat_long(self, overrides: Iterable[str] = ()) -> LatLongPair:
        """Search lat/long tags in order and return the first valid pair.

        A tag holding ``"lat, lon"`` is split; a tag ending in ``lat`` is paired
        with its ``lon`` sibling. Returns ``INVALID`` when nothing valid is found.
        """
        for tag in merged_tag_names(overrides):
            value = self.get(tag)
            if not value:
                continue
            combined = parse_combined(value)
            if combined is not None:
                if combined.is_valid:
                    return combined
                continue
            if tag.endswith("lat"):
                pair = LatLongPair(value, self.get(tag[:-3] + "lon"))
                if pair.is_valid:
                    return pair
        return INVALID

    def value_map(self) -> dict[str, str]:
        """Second-level element names mapped to their text, for diagnostics."""
        values: dict[str, str] = {}
        for section in self._root:
            for element in section:
                values[element.tag] = (element.text or "").strip()
        return values
