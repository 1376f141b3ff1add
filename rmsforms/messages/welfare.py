from dataclasses import dataclass, fields
from typing import ClassVar

from rmsforms.core.message_type import MessageType
from rmsforms.messages.base import TypedMessage
from rmsforms.toolkit.location import INVALID, LatLongPair


@dataclass(frozen=True)
class RRIQuickWelfareMessage(TypedMessage):
    """Radio Relay International "I Am Safe" quick welfare message."""

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.RRI_QUICK_WELFARE

    form_from: str = ""
    form_date_time: str = ""
    incident_name: str = ""
    text: str = ""
    version: str = ""


@dataclass(frozen=True)
class RRIWelfareRadiogramMessage(TypedMessage):
    """RRI welfare radiogram: header, address block, body and signature.

    The body sits between the first and second ``BT`` lines; the signature
    runs from the second ``BT`` to ``AR``.
    """

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.RRI_WELFARE_RADIOGRAM

    header: str = ""
    address: str = ""
    body: str = ""
    form_from: str = ""
    version: str = ""


@dataclass(frozen=True)
class RRIReplyWelfareRadiogramMessage(TypedMessage):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.RRI_REPLY_WELFARE_RADIOGRAM

    reply: str = ""
    reply_date_time: str = ""
    source_message: str = ""


@dataclass(frozen=True)
class WelfareBulletinBoardMessage(TypedMessage):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.WELFARE_BULLETIN_BOARD

    incident_name: str = ""
    form_to: str = ""
    form_from: str = ""
    form_message_type: str = ""
    date_time_local: str = ""
    date_time_utc: str = ""
    my_status: str = ""
    form_message: str = ""
    message_status: str = ""
    next_date: str = ""
    next_time: str = ""
    street: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str = ""
    radio_operator: str = ""
    coordinates_same: str = ""
    location: LatLongPair = INVALID
    what_three_words: str = ""
    version: str = ""

    def labelled_values(self) -> dict[str, str]:
        """Field values keyed by the labels the form shows, in form order."""
        values = {}
        for field in fields(self):
            label = WELFARE_BULLETIN_BOARD_LABELS.get(field.name)
            if label is not None:
                values[label] = getattr(self, field.name)
        values["Latitude"] = self.location.latitude
        values["Longitude"] = self.location.longitude
        return values


WELFARE_BULLETIN_BOARD_LABELS = {
    "incident_name": "Incident Name",
    "form_to": "To",
    "form_from": "From",
    "form_message_type": "Message Type",
    "date_time_local": "Date/Time Local",
    "date_time_utc": "Date/Time UTC",
    "my_status": "My Status",
    "form_message": "Message",
    "message_status": "Message Status",
    "next_date": "Next Date",
    "next_time": "Next Time",
    "street": "Street",
    "city": "City",
    "state": "State",
    "zip": "Zip",
    "country": "Country",
    "radio_operator": "Radio Operator",
    "coordinates_same": "Coordinates are same as address",
    "what_three_words": "What3words location",
    "version": "Version",
}
