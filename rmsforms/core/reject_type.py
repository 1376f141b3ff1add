from enum import Enum


class RejectType(Enum):
    """Closed set of reasons a message could not be turned into a typed record.

    Ids are persisted by downstream reports; never renumber.
    """

    WRONG_MESSAGE_TYPE = (0, "wrong message type")
    EXPLICIT_LOCATION = (1, "explicit bad location")
    PROCESSING_ERROR = (2, "unknown server error")
    EXPLICIT_OTHER = (3, "explicit other reasons")
    CANT_PARSE_LATLONG = (5, "can't parse lat/lon")
    CANT_PARSE_DYFI_JSON = (6, "can't parse DYFI json")
    CANT_PARSE_MIME = (8, "can't parse mime")
    UNSUPPORTED_TYPE = (10, "unsupported message type")
    CANT_PARSE_ETO_JSON = (11, "can't parse ETO json")
    CANT_PARSE_DATE_TIME = (12, "can't parse date/time")
    CANT_FIND_FORMDATA = (13, "can't find FormData in context")

    def __init__(self, id: int, text: str) -> None:
        self.id = id
        self.text = text

    def __str__(self) -> str:
        return self.text

