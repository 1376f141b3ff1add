from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from rmsforms.core.message_type import MessageType
from rmsforms.messages.base import TypedMessage
from rmsforms.toolkit.location import INVALID, LatLongPair


@dataclass(frozen=True)
class Ics213Message(TypedMessage):
    """ICS-213 general message, from the viewer attachment or the FormData side channel."""

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.ICS_213

    organization: str = ""
    incident_name: str = ""
    form_from: str = ""
    form_to: str = ""
    form_subject: str = ""
    form_date: str = ""
    form_time: str = ""
    form_message: str = ""
    approved_by: str = ""
    position: str = ""
    is_exercise: bool = False
    location: LatLongPair = INVALID
    version: str = ""
    data_source: str = ""


@dataclass(frozen=True)
class Ics213ReplyMessage(TypedMessage):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.ICS_213_REPLY

    organization: str = ""
    form_message: str = ""
    reply: str = ""
    reply_by: str = ""
    reply_position: str = ""
    reply_date_time: str = ""


@dataclass(frozen=True)
class LineItem:
    quantity: str = ""
    kind: str = ""
    type: str = ""
    item: str = ""
    requested_date_time: str = ""
    estimated_date_time: str = ""
    cost: str = ""


@dataclass(frozen=True)
class Ics213RRMessage(TypedMessage):
    """ICS-213 RR resource request."""

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.ICS_213_RR

    organization: str = ""
    incident_name: str = ""
    activity_date_time: str = ""
    request_number: str = ""
    line_items: tuple[LineItem, ...] = ()
    delivery: str = ""
    substitutes: str = ""
    requested_by: str = ""
    priority: str = ""
    approved_by: str = ""
    logistics_order_number: str = ""
    supplier_info: str = ""
    supplier_name: str = ""
    supplier_point_of_contact: str = ""
    supply_notes: str = ""
    logistics_authorizer: str = ""
    logistics_date_time: str = ""
    ordered_by: str = ""
    finance_comments: str = ""
    finance_name: str = ""
    finance_date_time: str = ""


@dataclass(frozen=True)
class RadioEntry:
    row_number: int
    zone_group: str = ""
    channel_number: str = ""
    function: str = ""
    channel_name: str = ""
    assignment: str = ""
    rx_frequency: str = ""
    rx_narrow_wide: str = ""
    rx_tone: str = ""
    tx_frequency: str = ""
    tx_narrow_wide: str = ""
    tx_tone: str = ""
    mode: str = ""
    remarks: str = ""


@dataclass(frozen=True)
class Ics205Message(TypedMessage):
    """ICS-205 incident radio communications plan.

    Date/time and page fields keep the raw strings; the parsed values are
    ``None`` when the string did not parse and lenient parsing let it through.
    """

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.ICS_205

    organization: str = ""
    incident_name: str = ""
    date_time_prepared: str = ""
    prepared_date_time: datetime | None = None
    date_from: str = ""
    date_to: str = ""
    time_from: str = ""
    time_to: str = ""
    special_instructions: str = ""
    approved_by: str = ""
    approved_date_time_string: str = ""
    approved_date_time: datetime | None = None
    iap_page: str = ""
    radio_entries: tuple[RadioEntry, ...] = ()
    version: str = ""


@dataclass(frozen=True)
class Resource:
    name: str = ""
    ics_position: str = ""
    home_agency: str = ""


@dataclass(frozen=True)
class Activity:
    date_time: str = ""
    activities: str = ""


@dataclass(frozen=True)
class Ics214Message(TypedMessage):
    """ICS-214 activity log."""

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.ICS_214

    organization: str = ""
    incident_name: str = ""
    page: str = ""
    op_from: str = ""
    op_to: str = ""
    self_resource: Resource = Resource()
    assigned_resources: tuple[Resource, ...] = ()
    activities: tuple[Activity, ...] = ()
    prepared_by: str = ""
    version: str = ""


@dataclass(frozen=True)
class Ics214AMessage(Ics214Message):
    """ICS-214A individual activity log."""

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.ICS_214A


@dataclass(frozen=True)
class CommunicationsEntry:
    date_time: str = ""
    from_: str = ""
    to: str = ""
    subject: str = ""


@dataclass(frozen=True)
class Ics309Message(TypedMessage):
    """ICS-309 communications log."""

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.ICS_309

    organization: str = ""
    task_number: str = ""
    date_time_prepared: str = ""
    operational_period: str = ""
    task_name: str = ""
    operator_name: str = ""
    station_id: str = ""
    incident_name: str = ""
    page: str = ""
    version: str = ""
    activities: tuple[CommunicationsEntry, ...] = ()


@dataclass(frozen=True)
class PdfIcs309Message(Ics309Message):
    """ICS-309 communications log submitted as one or more PDF attachments."""

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.PDF_ICS_309

    pdf_attachment_indices: str = ""
    are_activities_combined: bool = False
