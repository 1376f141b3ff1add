from datetime import datetime

from rmsforms.core.message_type import MessageType
from rmsforms.messages.base import ParseResult, RawMessage
from rmsforms.messages.hospital import (
    CASUALTY_KEYS,
    BedCount,
    CasualtyEntry,
    Hics259Message,
    HospitalBedMessage,
    HospitalStatusMessage,
)
from rmsforms.parsers.base import BaseParser
from rmsforms.toolkit.dates import MultiDateTimeParser
from rmsforms.toolkit.document import FormDocument
from rmsforms.toolkit.version import version_token

HOSPITAL_DATE_TIME = MultiDateTimeParser(["%Y-%m-%d %H:%M:%S"])

YES = "YES"


class HospitalBedParser(BaseParser):
    MESSAGE_TYPE = MessageType.HOSPITAL_BED

    def _parse(self, message: RawMessage) -> ParseResult:
        document = self.document(message)
        location = document.get_lat_long()
        if not location.is_valid:
            return self.reject_location(message)

        def beds(index: int, name_tag: str | None = None) -> BedCount:
            return BedCount(
                count=document.get(f"b{index}"),
                notes=document.get(f"note{index}"),
                name=document.get(name_tag) if name_tag else "",
            )

        return HospitalBedMessage(
            message,
            form_date_time=HOSPITAL_DATE_TIME.parse(document.get("datetime")),
            location=location,
            organization=document.get("title"),
            facility=document.get("facility"),
            contact_person=document.get("contact"),
            contact_phone=document.get("phone"),
            contact_email=document.get("email"),
            emergency=beds(1),
            pediatrics=beds(2),
            medical=beds(3),
            psychiatry=beds(4),
            burn=beds(5),
            critical=beds(6),
            other1=beds(7, "othertype2"),
            other2=beds(8, "othertype3"),
            total_bed_count=document.get("totalbeds"),
            additional_comments=document.get("comments"),
        )


class HospitalStatusParser(BaseParser):
    """Hospital status report; YES/NO radio buttons become booleans."""

    MESSAGE_TYPE = MessageType.HOSPITAL_STATUS

    def _parse(self, message: RawMessage) -> ParseResult:
        document = self.document(message)

        def yes(tag: str) -> bool:
            return document.get(tag) == YES

        return HospitalStatusMessage(
            message,
            organization=document.get("title"),
            is_exercise=document.get("exbtn").lower() == "true",
            report_type=document.get("rtype"),
            update_string=document.get("updatenum"),
            incident_name=document.get("incident1"),
            form_date_time=HOSPITAL_DATE_TIME.parse(document.get("datetime")),
            facility_name=document.get("facilityname3a"),
            facility_type=document.get("factype3b"),
            facility_other=document.get("othertype"),
            location=document.get_lat_long(),
            contact_name=document.get("contact4"),
            contact_phone=document.get("contactphone"),
            contact_extension=document.get("phonex"),
            contact_cell_phone=document.get("cell4"),
            contact_email=document.get("contactemail"),
            facility_status=document.get("facility5"),
            facility_comments=document.get("comments5"),
            is_comms_impacted=yes("bcommipaired"),
            comms_email=document.get("commsemail"),
            comms_landline=document.get("commslandline"),
            comms_fax=document.get("commsfax"),
            comms_internet=document.get("commsinternet"),
            comms_cell=document.get("commscell"),
            comms_sat_phone=document.get("commssat"),
            comms_ham_radio=document.get("commsheart"),
            comms_comments=document.get("comments6"),
            is_utils_impacted=yes("butilitiesimpared"),
            utils_power=document.get("utilitiesa"),
            utils_water=document.get("utilitiesb"),
            utils_sanitation=document.get("utilitiesc"),
            utils_hvac=document.get("utilitiesd"),
            utils_comments=document.get("comments7"),
            are_evac_concerns=yes("bevacconcerns"),
            evacuating=document.get("bevac8"),
            evacuating_status=document.get("a8a"),
            partial_evac=document.get("bpartial8"),
            partial_evac_status=document.get("a8b"),
            total_evac=document.get("btotal8"),
            total_evac_status=document.get("a8c"),
            shelter_in_place=document.get("bshelter8"),
            shelter_in_place_status=document.get("a8d"),
            evac_comments=document.get("comments8"),
            are_casualties=yes("btherearecausalties"),
            casualties_immediate=document.get("immediate9"),
            casualties_delayed=document.get("delayed9"),
            casualties_minor=document.get("minor9"),
            casualties_fatalities=document.get("fatalities9"),
            casualties_comments=document.get("comments9"),
            plan_activated=yes("bplan10a"),
            command_center_activated=yes("bfccactive10"),
            generator_in_use=yes("bgenerator10"),
            resource_request_in_4_hours=yes("bresiourcerequest10"),
            additional_comments=document.get("comments10"),
            version=version_token(document.get("templateversion")),
        )


HICS_DATE = MultiDateTimeParser(["%Y-%m-%d", "%m/%d/%y", "%m/%d/%Y"])
HICS_TIME = MultiDateTimeParser(["%H:%M", "%H%M"])


def hics_date_time(date_text: str, time_text: str) -> datetime | None:
    """Combine a HICS date field and time field; ``None`` unless both parse."""
    parsed_date = HICS_DATE.parse_date(date_text)
    parsed_time = HICS_TIME.parse_time(time_text)
    if parsed_date is None or parsed_time is None:
        return None
    return datetime.combine(parsed_date, parsed_time)


class Hics259Parser(BaseParser):
    """HICS-259 casualty report.

    Casualty rows are lettered: row ``i`` has adult count ``<letter>1``,
    child count ``<letter>2`` and ``comment<i>``.
    """

    MESSAGE_TYPE = MessageType.HICS_259

    def _parse(self, message: RawMessage) -> ParseResult:
        document = self.document(message)
        return Hics259Message(
            message,
            incident_name=document.get("incidentname"),
            form_date_time=hics_date_time(document.get("thedate"), document.get("thetime")),
            operational_period=document.get("opperiod"),
            op_from=hics_date_time(document.get("datefrom"), document.get("timefrom")),
            op_to=hics_date_time(document.get("dateto"), document.get("timeto")),
            casualties=self._casualties(document),
            patient_tracking_manager=document.get("prepedbychief"),
            facility_name=document.get("facility"),
            version=version_token(document.get("templateversion")),
        )

    def _casualties(self, document: FormDocument) -> tuple[tuple[str, CasualtyEntry], ...]:
        casualties = []
        for i, key in enumerate(CASUALTY_KEYS, start=1):
            letter = chr(ord("a") + i - 1)
            entry = CasualtyEntry(
                adult_count=document.get(f"{letter}1"),
                child_count=document.get(f"{letter}2"),
                comment=document.get(f"comment{i}"),
            )
            casualties.append((key, entry))
        return tuple(casualties)
