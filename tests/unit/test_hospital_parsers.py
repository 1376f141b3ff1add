from datetime import datetime

from rmsforms.core.context import ParserContext
from rmsforms.core.message_type import MessageType
from rmsforms.core.reject_type import RejectType
from rmsforms.messages.base import RawMessage, RejectionMessage
from rmsforms.messages.hospital import (
    CASUALTY_KEYS,
    BedCount,
    CasualtyEntry,
    Hics259Message,
    HospitalBedMessage,
    HospitalStatusMessage,
)
from rmsforms.parsers.hospital import (
    Hics259Parser,
    HospitalBedParser,
    HospitalStatusParser,
    hics_date_time,
)
from rmsforms.toolkit.location import LatLongPair


def _viewer(tags: dict[str, str]) -> bytes:
    body = "".join(f"<{tag}>{value}</{tag}>" for tag, value in tags.items())
    return f"<RMS_Express_Form><variables>{body}</variables></RMS_Express_Form>".encode()


def _make_message(message_type: MessageType, tags: dict[str, str]) -> RawMessage:
    return RawMessage(message_id="MSG1", sender="K1ABC", attachments={message_type.attachment_name: _viewer(tags)})


class TestHospitalBedParser:
    def test_parses_bed_counts(self) -> None:
        tags = {
            "maplat": "47.6",
            "maplon": "-122.3",
            "datetime": "2024-03-04 12:30:00",
            "facility": "General",
            "b1": "5",
            "note1": "ER busy",
            "b7": "2",
            "othertype2": "Maternity",
            "totalbeds": "7",
        }
        result = HospitalBedParser(ParserContext()).parse(_make_message(MessageType.HOSPITAL_BED, tags))

        assert isinstance(result, HospitalBedMessage)
        assert result.form_date_time == datetime(2024, 3, 4, 12, 30)
        assert result.location == LatLongPair("47.6", "-122.3")
        assert result.emergency == BedCount("5", "ER busy", "")
        assert result.other1 == BedCount("2", "", "Maternity")
        assert result.total_bed_count == "7"

    def test_rejects_missing_location(self) -> None:
        result = HospitalBedParser(ParserContext()).parse(_make_message(MessageType.HOSPITAL_BED, {"b1": "5"}))

        assert isinstance(result, RejectionMessage)
        assert result.reason is RejectType.CANT_PARSE_LATLONG


class TestHospitalStatusParser:
    def test_radio_buttons_become_booleans(self) -> None:
        tags = {
            "exbtn": "True",
            "facilityname3a": "General",
            "bcommipaired": "YES",
            "btherearecausalties": "NO",
            "bgenerator10": "YES",
            "templateversion": "Hospital Status 1.2",
        }
        result = HospitalStatusParser(ParserContext()).parse(_make_message(MessageType.HOSPITAL_STATUS, tags))

        assert isinstance(result, HospitalStatusMessage)
        assert result.is_exercise is True
        assert result.facility_name == "General"
        assert result.is_comms_impacted is True
        assert result.are_casualties is False
        assert result.generator_in_use is True
        assert result.version == "1.2"


class TestHicsDateTime:
    def test_iso_date(self) -> None:
        assert hics_date_time("2024-03-04", "12:30") == datetime(2024, 3, 4, 12, 30)

    def test_two_digit_year_and_compact_time(self) -> None:
        assert hics_date_time("03/04/24", "1230") == datetime(2024, 3, 4, 12, 30)

    def test_four_digit_year(self) -> None:
        assert hics_date_time("03/04/2024", "08:15") == datetime(2024, 3, 4, 8, 15)

    def test_missing_part_is_none(self) -> None:
        assert hics_date_time("", "12:30") is None
        assert hics_date_time("2024-03-04", "noon") is None


class TestHics259Parser:
    def test_parses_casualty_rows(self) -> None:
        tags = {
            "incidentname": "Bus crash",
            "thedate": "2024-03-04",
            "thetime": "12:30",
            "a1": "3",
            "a2": "1",
            "comment1": "triage",
            "i1": "1",
            "facility": "General",
        }
        result = Hics259Parser(ParserContext()).parse(_make_message(MessageType.HICS_259, tags))

        assert isinstance(result, Hics259Message)
        assert result.form_date_time == datetime(2024, 3, 4, 12, 30)
        assert [key for key, _ in result.casualties] == list(CASUALTY_KEYS)
        assert result.casualties[0] == (CASUALTY_KEYS[0], CasualtyEntry("3", "1", "triage"))
        assert result.casualty("Expired") == CasualtyEntry("1", "", "")
        assert result.casualty("Unknown") == CasualtyEntry()
