import re
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal, InvalidOperation

_MAIDENHEAD = re.compile(r"[a-rA-R]{2}[0-9]{2}[a-xA-X]{2}")
_FOUR_PLACES = Decimal("0.0001")
_FIVE_PLACES = Decimal("0.00001")


def _to_float(value: str) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _plain(value: Decimal) -> str:
    text = format(value.normalize(), "f")
    return "0" if text in ("-0", "") else text


@dataclass(frozen=True)
class LatLongPair:
    """A latitude/longitude pair kept as the strings the form supplied."""

    latitude: str
    longitude: str

    @classmethod
    def from_degrees(cls, latitude: float, longitude: float) -> "LatLongPair":
        """Build a pair from numbers, rounded half-up to four decimal places."""
        return cls(
            _plain(Decimal(str(latitude)).quantize(_FOUR_PLACES, rounding=ROUND_HALF_UP)),
            _plain(Decimal(str(longitude)).quantize(_FOUR_PLACES, rounding=ROUND_HALF_UP)),
        )

    @property
    def is_valid(self) -> bool:
        if not self.latitude or not self.longitude:
            return False
        lat = _to_float(self.latitude)
        lon = _to_float(self.longitude)
        if lat is None or lon is None:
            return False
        return abs(lat) <= 90.0 and abs(lon) <= 180.0

    def __str__(self) -> str:
        return f"{self.latitude}, {self.longitude}"


INVALID = LatLongPair("", "")

def parse_combined(value: str) -> LatLongPair | None:
    """Split a ``"lat, lon"`` field into a pair; ``None`` if there is no separator."""
    if "," not in value:
        return None
    lat, _, lon = value.partition(",")
    return LatLongPair(lat.strip(), lon.strip())


def is_valid_maidenhead(grid: str | None) -> bool:
    return bool(grid) and _MAIDENHEAD.fullmatch(grid.strip()) is not None


def maidenhead_to_lat_long(grid: str) -> LatLongPair:
    """Center of a six-character Maidenhead grid square.

    Raises:
        ValueError: if the grid is not a six-character locator.
    """
    if not is_valid_maidenhead(grid):
        raise ValueError(f"invalid maidenhead grid: {grid}")
    g = grid.strip().upper()
    lat = (
        -90.0
        + 10.0 * (ord(g[1]) - ord("A"))
        + (ord(g[3]) - ord("0"))
        + 2.5 / 60.0 * (ord(g[5]) - ord("A"))
        + 2.5 / 60.0 / 2.0
    )
    lon = (
        -180.0
        + 20.0 * (ord(g[0]) - ord("A"))
        + 2.0 * (ord(g[2]) - ord("0"))
        + 5.0 / 60.0 * (ord(g[4]) - ord("A"))
        + 5.0 / 60.0 / 2.0
    )
    return LatLongPair.from_degrees(lat, lon)


def convert_to_decimal_degrees(ddmm: str | None) -> str:
    """Turn a ``DD-MM.mmH`` coordinate (H in N/S/E/W) into signed decimal degrees.

    Values that are already decimal (optionally with a hemisphere letter) pass
    through. Minutes are rounded up to five places.

    Raises:
        ValueError: if the value is neither decimal nor degrees-minutes.
    """
    value = (ddmm or "").strip()
    if not value:
        return ""
    direction = value[-1].upper()
    body = value[:-1].strip() if direction in "NSEW" else value

    if value.startswith("-") or "-" not in body:
        if _to_float(body) is not None:
            if direction in "SW" and not body.startswith("-"):
                return f"-{body}"
            return body

    degrees_text, _, minutes_text = body.partition("-")
    try:
        degrees = Decimal(degrees_text.strip())
        minutes = Decimal(minutes_text.strip())
    except InvalidOperation as exc:
        raise ValueError(f"can't convert {ddmm} to decimal degrees") from exc
    decimal_degrees = (degrees + minutes / Decimal(60)).quantize(_FIVE_PLACES, rounding=ROUND_CEILING)
    sign = "-" if direction in "SW" else ""
    return sign + _plain(decimal_degrees)


def find_token_after(key: str, fields: Sequence[str]) -> str | None:
    """First non-empty token after a ``key`` token, e.g. ``LAT`` in ``"(LAT: 34.1 LON: ..."``.

    A leading punctuation character on each token is ignored, a trailing comma
    is dropped, and comma or apostrophe decimal separators become points.
    """
    key_found = False
    for raw in fields:
        field = raw.strip()
        if field and not (field[0].isalnum() or field[0] == "-"):
            field = field[1:]
        if field.rstrip(":") == key:
            key_found = True
            continue
        if not key_found:
            continue
        field = field.strip()
        if not field:
            continue
        if field.endswith(","):
            field = field[:-1]
        if "." not in field:
            field = field.replace(",", ".").replace("'", ".")
        return field
    return None
