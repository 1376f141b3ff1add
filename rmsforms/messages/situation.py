from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from rmsforms.core.message_type import MessageType
from rmsforms.messages.base import DetailRecord, TypedMessage
from rmsforms.toolkit.location import INVALID, LatLongPair


@dataclass(frozen=True)
class FieldSituationMessage(TypedMessage):
    """Field Situation Report: status of every public utility at one location.

    Each utility carries a status and a free-text comment; ``variant`` names the
    template attachment the report arrived in.
    """

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.FIELD_SITUATION

    organization: str = ""
    location: LatLongPair = INVALID
    precedence: str = ""
    form_date_time: str = ""
    task: str = ""
    form_to: str = ""
    form_from: str = ""
    is_help_needed: str = ""
    needed_help: str = ""
    city: str = ""
    county: str = ""
    state: str = ""
    territory: str = ""
    landline_status: str = ""
    landline_comments: str = ""
    voip_status: str = ""
    voip_comments: str = ""
    cell_phone_status: str = ""
    cell_phone_comments: str = ""
    cell_text_status: str = ""
    cell_text_comments: str = ""
    radio_status: str = ""
    radio_comments: str = ""
    tv_status: str = ""
    tv_comments: str = ""
    sat_tv_status: str = ""
    sat_tv_comments: str = ""
    cable_tv_status: str = ""
    cable_tv_comments: str = ""
    water_status: str = ""
    water_comments: str = ""
    power_status: str = ""
    power_comments: str = ""
    power_stable: str = ""
    power_stable_comments: str = ""
    natural_gas_status: str = ""
    natural_gas_comments: str = ""
    internet_status: str = ""
    internet_comments: str = ""
    noaa_status: str = ""
    noaa_comments: str = ""
    noaa_audio_degraded: str = ""
    noaa_audio_degraded_comments: str = ""
    additional_comments: str = ""
    poc: str = ""
    version: str = ""
    variant: str = ""


@dataclass(frozen=True)
class SpotrepMessage(TypedMessage):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.SPOTREP

    location: LatLongPair = INVALID
    location_string: str = ""
    landline_status: str = ""
    landline_comments: str = ""
    cell_phone_status: str = ""
    cell_phone_comments: str = ""
    radio_status: str = ""
    radio_comments: str = ""
    tv_status: str = ""
    tv_comments: str = ""
    water_status: str = ""
    water_comments: str = ""
    power_status: str = ""
    power_comments: str = ""
    internet_status: str = ""
    internet_comments: str = ""
    additional_comments: str = ""
    poc: str = ""


@dataclass(frozen=True)
class QuickMessage(TypedMessage):
    """Quick message; its location is the centre of a Maidenhead grid square."""

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.QUICK

    location: LatLongPair = INVALID
    form_date_time: datetime | None = None
    attention: str = ""
    send_to_address: str = ""
    from_name_group: str = ""
    date_time_string: str = ""
    form_subject: str = ""
    form_message: str = ""
    version: str = ""


DAMAGE_CATEGORIES = (
    "Houses",
    "Apt Complexes",
    "Mobile Homes",
    "Residential High Rise",
    "Commercial High Rise",
    "Public Blgs",
    "Small Businesses",
    "Factories/Industrial Complexes",
    "Roads",
    "Bridges",
    "Electrical Distribution",
    "Schools",
)


@dataclass(frozen=True)
class DamageEntry:
    description: str = ""
    affected: str = ""
    minor: str = ""
    major: str = ""
    destroyed: str = ""
    total: str = ""
    loss_string: str = ""
    loss_amount: str = ""


@dataclass(frozen=True)
class DamageAssessmentMessage(TypedMessage):
    """Windshield damage assessment: twelve fixed categories plus three write-ins."""

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.DAMAGE_ASSESSMENT

    organization: str = ""
    jurisdiction: str = ""
    mission_incident_id: str = ""
    form_type: str = ""
    event_type: str = ""
    description: str = ""
    survey_area: str = ""
    survey_team: str = ""
    event_start_date: str = ""
    survey_date: str = ""
    damage_entries: tuple[DamageEntry, ...] = ()
    total_loss_string: str = ""
    comments: str = ""
    version: str = ""


@dataclass(frozen=True)
class HumanitarianNeedsMessage(TypedMessage):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.HUMANITARIAN_NEEDS

    location: LatLongPair = INVALID
    team_id: str = ""
    form_date: str = ""
    form_time: str = ""
    address: str = ""
    needs_health: bool = False
    needs_shelter: bool = False
    needs_food: bool = False
    needs_water: bool = False
    needs_logistics: bool = False
    needs_other: bool = False
    description: str = ""
    other: str = ""
    approved_by: str = ""
    position: str = ""
    version: str = ""


@dataclass(frozen=True)
class EyeWarnDetail:
    color: str = ""
    form_date: str = ""
    form_time: str = ""
    text: str = ""


@dataclass(frozen=True)
class EyeWarnMessage(TypedMessage):
    """EyeWarn net summary with red, yellow and green observation reports."""

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.EYEWARN

    exercise_or_incident: str = ""
    form_date: str = ""
    form_time: str = ""
    ncs: str = ""
    incident_name: str = ""
    total_check_ins: str = ""
    red_reports: tuple[EyeWarnDetail, ...] = ()
    yellow_reports: tuple[EyeWarnDetail, ...] = ()
    green_reports: tuple[EyeWarnDetail, ...] = ()
    version: str = ""

    def detail_records(self) -> list[DetailRecord]:
        return [
            EyeWarnDetailMessage(self.message, parent=self, detail=detail)
            for detail in (*self.red_reports, *self.yellow_reports, *self.green_reports)
        ]


@dataclass(frozen=True)
class EyeWarnDetailMessage(DetailRecord):
    """One colour-coded EyeWarn report, emitted next to its parent summary."""

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.EYEWARN_DETAIL

    parent: EyeWarnMessage | None = None
    detail: EyeWarnDetail = EyeWarnDetail()


@dataclass(frozen=True)
class PegelstandMessage(TypedMessage):
    """German water-level ("Pegelstand") report."""

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.PEGELSTAND

    form_date_time: str = ""
    report_status: str = ""
    form_sender: str = ""
    sender_is_observer: str = ""
    observer_email: str = ""
    observer_phone: str = ""
    city: str = ""
    region: str = ""
    federal_state: str = ""
    state: str = ""
    location: LatLongPair = INVALID
    mgrs: str = ""
    grid: str = ""
    measured_values: str = ""
    measurement_location_number: str = ""
    speed: str = ""
    speed_units: str = ""
    volume: str = ""
    volume_units: str = ""
    trend: str = ""
    water_level: str = ""
    water_level_units: str = ""
    comments: str = ""
    version: str = ""
