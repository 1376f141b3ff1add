from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from rmsforms.core.message_type import MessageType
from rmsforms.messages.base import TypedMessage
from rmsforms.toolkit.location import INVALID, LatLongPair


@dataclass(frozen=True)
class CheckInMessage(TypedMessage):
    """Winlink check-in form, from the viewer attachment or the FormData side channel."""

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.CHECK_IN

    organization: str = ""
    location: LatLongPair = INVALID
    form_date_time: datetime | None = None
    status: str = ""
    band: str = ""
    mode: str = ""
    comments: str = ""
    version: str = ""
    data_source: str = ""


@dataclass(frozen=True)
class CheckOutMessage(CheckInMessage):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.CHECK_OUT


@dataclass(frozen=True)
class EtoCheckInMessage(TypedMessage):
    """Plain-text Thursday net check-in."""

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.ETO_CHECK_IN

    location: LatLongPair = INVALID
    comments: str = ""
    status: str = ""
    band: str = ""
    mode: str = ""
    version: str = ""


@dataclass(frozen=True)
class EtoCheckInV2Message(TypedMessage):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.ETO_CHECK_IN_V2

    location: LatLongPair = INVALID
    comments: str = ""
    form_date: str = ""
    form_time: str = ""
    form_name: str = ""
    version: str = ""


@dataclass(frozen=True)
class EtoResumeMessage(TypedMessage):
    """Participant resume: training certifications and served agencies."""

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.ETO_RESUME

    sent_by: str = ""
    form_date_time: str = ""
    has_is100: str = ""
    has_is200: str = ""
    has_is700: str = ""
    has_is800: str = ""
    has_is2200: str = ""
    has_aces: str = ""
    has_ec001: str = ""
    has_ec016: str = ""
    has_skywarn: str = ""
    has_auxcomm: str = ""
    has_comt: str = ""
    has_coml: str = ""
    agencies: tuple[str, ...] = ()
    comments: str = ""
    version: str = ""


@dataclass(frozen=True)
class MiroCheckInMessage(TypedMessage):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.MIRO_CHECK_IN

    form_date_time: datetime | None = None
    location: LatLongPair = INVALID
    power: str = ""
    band: str = ""
    mode: str = ""
    radio: str = ""
    antenna: str = ""
    portable: str = ""
    comments: str = ""
    version: str = ""
    rf_power: str = ""
    rms_gateway: str = ""
    distance_miles: str = ""


@dataclass(frozen=True)
class PositionMessage(TypedMessage):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.POSITION

    location: LatLongPair = INVALID
    comments: str = ""


@dataclass(frozen=True)
class AckMessage(TypedMessage):
    """Delivery acknowledgement returned for an earlier message."""

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.ACK

    original_subject: str = ""
    original_sender: str = ""
    original_to: str = ""
    received: str = ""
    acknowledged: str = ""
    original_id: str = ""
    attachment_count: str = ""
    size: str = ""
