from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from rmsforms.core.message_type import MessageType
from rmsforms.messages.base import TypedMessage
from rmsforms.toolkit.location import INVALID, LatLongPair


@dataclass(frozen=True)
class BedCount:
    count: str = ""
    notes: str = ""
    name: str = ""


@dataclass(frozen=True)
class HospitalBedMessage(TypedMessage):
    """Hospital bed availability, one count per ward type plus two write-ins."""

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.HOSPITAL_BED

    form_date_time: datetime | None = None
    location: LatLongPair = INVALID
    organization: str = ""
    facility: str = ""
    contact_person: str = ""
    contact_phone: str = ""
    contact_email: str = ""
    emergency: BedCount = BedCount()
    pediatrics: BedCount = BedCount()
    medical: BedCount = BedCount()
    psychiatry: BedCount = BedCount()
    burn: BedCount = BedCount()
    critical: BedCount = BedCount()
    other1: BedCount = BedCount()
    other2: BedCount = BedCount()
    total_bed_count: str = ""
    additional_comments: str = ""


@dataclass(frozen=True)
class HospitalStatusMessage(TypedMessage):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.HOSPITAL_STATUS

    organization: str = ""
    is_exercise: bool = False
    report_type: str = ""
    update_string: str = ""
    incident_name: str = ""
    form_date_time: datetime | None = None
    facility_name: str = ""
    facility_type: str = ""
    facility_other: str = ""
    location: LatLongPair = INVALID
    contact_name: str = ""
    contact_phone: str = ""
    contact_extension: str = ""
    contact_cell_phone: str = ""
    contact_email: str = ""
    facility_status: str = ""
    facility_comments: str = ""
    is_comms_impacted: bool = False
    comms_email: str = ""
    comms_landline: str = ""
    comms_fax: str = ""
    comms_internet: str = ""
    comms_cell: str = ""
    comms_sat_phone: str = ""
    comms_ham_radio: str = ""
    comms_comments: str = ""
    is_utils_impacted: bool = False
    utils_power: str = ""
    utils_water: str = ""
    utils_sanitation: str = ""
    utils_hvac: str = ""
    utils_comments: str = ""
    are_evac_concerns: bool = False
    evacuating: str = ""
    evacuating_status: str = ""
    partial_evac: str = ""
    partial_evac_status: str = ""
    total_evac: str = ""
    total_evac_status: str = ""
    shelter_in_place: str = ""
    shelter_in_place_status: str = ""
    evac_comments: str = ""
    are_casualties: bool = False
    casualties_immediate: str = ""
    casualties_delayed: str = ""
    casualties_minor: str = ""
    casualties_fatalities: str = ""
    casualties_comments: str = ""
    plan_activated: bool = False
    command_center_activated: bool = False
    generator_in_use: bool = False
    resource_request_in_4_hours: bool = False
    additional_comments: str = ""
    version: str = ""


CASUALTY_KEYS = (
    "Patients seen",
    "Waiting to be seen",
    "Admitted",
    "Critical care bed",
    "Medical/surgical bed",
    "Pediatric Bed",
    "Discharged",
    "Transferred",
    "Expired",
)


@dataclass(frozen=True)
class CasualtyEntry:
    adult_count: str = ""
    child_count: str = ""
    comment: str = ""


@dataclass(frozen=True)
class Hics259Message(TypedMessage):
    """HICS-259 hospital casualty and fatality report.

    ``casualties`` pairs every key in ``CASUALTY_KEYS`` with its entry, in that order.
    """

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.HICS_259

    incident_name: str = ""
    form_date_time: datetime | None = None
    operational_period: str = ""
    op_from: datetime | None = None
    op_to: datetime | None = None
    casualties: tuple[tuple[str, CasualtyEntry], ...] = ()
    patient_tracking_manager: str = ""
    facility_name: str = ""
    version: str = ""

    def casualty(self, key: str) -> CasualtyEntry:
        return dict(self.casualties).get(key, CasualtyEntry())
