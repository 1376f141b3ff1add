from datetime import datetime

from rmsforms.core.context import ParserContext
from rmsforms.core.message_type import MessageType
from rmsforms.core.reject_type import RejectType
from rmsforms.messages.base import RawMessage, RejectionMessage
from rmsforms.messages.checkin import (
    AckMessage,
    CheckInMessage,
    CheckOutMessage,
    EtoCheckInMessage,
    EtoCheckInV2Message,
    EtoResumeMessage,
    MiroCheckInMessage,
    PositionMessage,
)
from rmsforms.parsers.checkin import (
    DATA_SOURCE_FORM_DATA,
    DATA_SOURCE_RMS_VIEWER,
    AckParser,
    CheckInParser,
    EtoCheckInParser,
    EtoCheckInV2Parser,
    EtoResumeParser,
    MiroCheckInParser,
    PositionParser,
)
from rmsforms.toolkit.document import missing_location_context
from rmsforms.toolkit.location import LatLongPair

CHECK_IN_ATTACHMENT = "RMS_Express_Form_Winlink_Check_In_Viewer.xml"


def _viewer(tags: dict[str, str]) -> bytes:
    body = "".join(f"<{tag}>{value}</{tag}>" for tag, value in tags.items())
    return f"<RMS_Express_Form><variables>{body}</variables></RMS_Express_Form>".encode()


def _make_message(
    subject: str = "",
    plain_content: str = "",
    attachments: dict[str, bytes] | None = None,
) -> RawMessage:
    return RawMessage(
        message_id="MSG1",
        sender="K1ABC",
        subject=subject,
        plain_content=plain_content,
        attachments=attachments or {},
    )


def _check_in_tags(**overrides: str) -> dict[str, str]:
    tags = {
        "organization": "County ARES",
        "datetime": "2024-03-04 12:30:00",
        "maplat": "47.1",
        "maplon": "-122.2",
        "status": "Available",
        "band": "40m",
        "session": "Winlink",
        "comments": "All good",
        "templateversion": "Winlink Check-in 5.0.10",
    }
    tags.update(overrides)
    return tags


CHECK_IN_FORM_DATA = (
    "Organization=County ARES\n"
    "DateTime=2024-03-04 12:30:00\n"
    "Latitude=47.1\n"
    "Longitude=-122.2\n"
    "Status=Available\n"
    "Band=40m\n"
    "Session=Winlink\n"
    "Comments=All good\n"
    "Template Version=Winlink Check-in 5.0.10\n"
    "MapFileName=Winlink_Check_In_Initial.html\n"
)


class TestCheckInParserViewer:
    def test_parses_viewer_attachment(self) -> None:
        message = _make_message(attachments={CHECK_IN_ATTACHMENT: _viewer(_check_in_tags())})
        result = CheckInParser(ParserContext()).parse(message)

        assert isinstance(result, CheckInMessage)
        assert result.organization == "County ARES"
        assert result.location == LatLongPair("47.1", "-122.2")
        assert result.form_date_time == datetime(2024, 3, 4, 12, 30)
        assert result.mode == "Winlink"
        assert result.version == "5.0.10"
        assert result.data_source == DATA_SOURCE_RMS_VIEWER

    def test_falls_back_to_gps2(self) -> None:
        tags = _check_in_tags(maplat="", maplon="", gps2="47.5, -122.5")
        message = _make_message(attachments={CHECK_IN_ATTACHMENT: _viewer(tags)})
        result = CheckInParser(ParserContext()).parse(message)

        assert isinstance(result, CheckInMessage)
        assert result.location == LatLongPair("47.5", "-122.5")

    def test_rejects_missing_location_naming_tags(self) -> None:
        tags = _check_in_tags(maplat="", maplon="")
        message = _make_message(attachments={CHECK_IN_ATTACHMENT: _viewer(tags)})
        result = CheckInParser(ParserContext()).parse(message)

        assert isinstance(result, RejectionMessage)
        assert result.reason is RejectType.CANT_PARSE_LATLONG
        assert result.context == missing_location_context()

    def test_check_out_uses_its_own_attachment_and_type(self) -> None:
        attachment = "RMS_Express_Form_Winlink_Check_out_Viewer.xml"
        message = _make_message(attachments={attachment: _viewer(_check_in_tags())})
        result = CheckInParser(ParserContext(), MessageType.CHECK_OUT).parse(message)

        assert isinstance(result, CheckOutMessage)
        assert result.message_type is MessageType.CHECK_OUT


class TestCheckInParserFormData:
    def test_form_data_and_viewer_yield_the_same_record(self) -> None:
        parser = CheckInParser(ParserContext())
        from_viewer = parser.parse(_make_message(attachments={CHECK_IN_ATTACHMENT: _viewer(_check_in_tags())}))
        from_form_data = parser.parse(_make_message(attachments={"FormData.txt": CHECK_IN_FORM_DATA.encode()}))

        assert isinstance(from_viewer, CheckInMessage)
        assert isinstance(from_form_data, CheckInMessage)
        assert from_form_data.data_source == DATA_SOURCE_FORM_DATA
        for name in ("organization", "location", "form_date_time", "status", "band", "mode", "comments", "version"):
            assert getattr(from_form_data, name) == getattr(from_viewer, name)

    def test_rejects_without_form_data(self) -> None:
        result = CheckInParser(ParserContext()).parse(_make_message())

        assert isinstance(result, RejectionMessage)
        assert result.reason is RejectType.CANT_FIND_FORMDATA

    def test_rejects_form_data_without_location(self) -> None:
        form_data = CHECK_IN_FORM_DATA.replace("Latitude=47.1\n", "")
        result = CheckInParser(ParserContext()).parse(_make_message(attachments={"FormData.txt": form_data.encode()}))

        assert isinstance(result, RejectionMessage)
        assert result.reason is RejectType.CANT_PARSE_LATLONG


ETO_BODY = (
    "Status: Available\n"
    "Band Used: 40m\n"
    "Session Type: Winlink\n"
    "GPS Coordinates: LAT: 34.1 LON: -118.2\n"
    "Comments:\n"
    "nice day\n"
    "\n"
    "----------\n"
    "Version: ETO 1.2\n"
)


class TestEtoCheckInParser:
    def test_parses_plain_text_check_in(self) -> None:
        result = EtoCheckInParser(ParserContext()).parse(_make_message(plain_content=ETO_BODY))

        assert isinstance(result, EtoCheckInMessage)
        assert result.location == LatLongPair("34.1", "-118.2")
        assert result.comments == "nice day"
        assert result.status == "Available"
        assert result.band == "40m"
        assert result.mode == "Winlink"
        assert result.version == "1.2"

    def test_rejects_without_gps_line(self) -> None:
        result = EtoCheckInParser(ParserContext()).parse(_make_message(plain_content="Status: Available"))

        assert isinstance(result, RejectionMessage)
        assert result.reason is RejectType.CANT_PARSE_LATLONG


class TestEtoCheckInV2Parser:
    def test_parses_json_body(self) -> None:
        body = (
            "Check-in follows\n"
            '{"Latitude": "34.1", "Longitude": "-118.2", "Comments": "ok",\n'
            '"DateTimeLocal": "2024-03-04 12:30", "FormName": "ETO", "Version": "2.0"}\n'
        )
        result = EtoCheckInV2Parser(ParserContext()).parse(_make_message(plain_content=body))

        assert isinstance(result, EtoCheckInV2Message)
        assert result.location == LatLongPair("34.1", "-118.2")
        assert result.form_date == "2024-03-04"
        assert result.form_time == "12:30"
        assert result.version == "2.0"

    def test_rejects_body_without_json(self) -> None:
        result = EtoCheckInV2Parser(ParserContext()).parse(_make_message(plain_content="no json here"))

        assert isinstance(result, RejectionMessage)
        assert result.reason is RejectType.CANT_PARSE_ETO_JSON

    def test_rejects_broken_json(self) -> None:
        result = EtoCheckInV2Parser(ParserContext()).parse(_make_message(plain_content='{"Latitude": }'))

        assert isinstance(result, RejectionMessage)
        assert result.reason is RejectType.CANT_PARSE_ETO_JSON


class TestEtoResumeParser:
    def test_parses_certifications_and_agencies(self) -> None:
        body = '{"SentBy": "K1ABC", "IS100": "true", "IS200": "false", "Agencies": "ARES|RACES| "}'
        result = EtoResumeParser(ParserContext()).parse(_make_message(plain_content=body))

        assert isinstance(result, EtoResumeMessage)
        assert result.sent_by == "K1ABC"
        assert result.has_is100 == "true"
        assert result.has_is200 == "false"
        assert result.agencies == ("ARES", "RACES")

    def test_rejects_non_object_json(self) -> None:
        result = EtoResumeParser(ParserContext()).parse(_make_message(plain_content="[1, 2]"))

        assert isinstance(result, RejectionMessage)
        assert result.reason is RejectType.CANT_PARSE_ETO_JSON


class TestMiroCheckInParser:
    def test_parses_csv_line(self) -> None:
        body = "1,2024-03-04,12:30:00,K1ABC,47.1,-122.2,100,40m,VARA,IC-7300,dipole,no,hi,1.0\n"
        result = MiroCheckInParser(ParserContext()).parse(_make_message(plain_content=body))

        assert isinstance(result, MiroCheckInMessage)
        assert result.form_date_time == datetime(2024, 3, 4, 12, 30)
        assert result.location == LatLongPair("47.1", "-122.2")
        assert result.band == "40m"
        assert result.version == "1.0"
        assert result.rms_gateway == ""

    def test_reads_optional_trailing_fields(self) -> None:
        body = "1,2024-03-04,12:30:00,K1ABC,47.1,-122.2,100,40m,VARA,IC-7300,dipole,no,hi,1.0,50,W7RMS,12.5"
        result = MiroCheckInParser(ParserContext()).parse(_make_message(plain_content=body))

        assert isinstance(result, MiroCheckInMessage)
        assert result.rms_gateway == "W7RMS"
        assert result.distance_miles == "12.5"

    def test_rejects_short_line(self) -> None:
        result = MiroCheckInParser(ParserContext()).parse(_make_message(plain_content="1,2,3"))

        assert isinstance(result, RejectionMessage)
        assert result.reason is RejectType.CANT_PARSE_MIME


class TestPositionParser:
    def test_converts_degrees_minutes_and_joins_comment(self) -> None:
        body = "Latitude: 47-30.00N\nLongitude: 122-15.00W\nComment: first part=\nsecond part\n"
        result = PositionParser(ParserContext()).parse(_make_message(plain_content=body))

        assert isinstance(result, PositionMessage)
        assert result.location == LatLongPair("47.5", "-122.25")
        assert result.comments == "first partsecond part"

    def test_rejects_missing_coordinates(self) -> None:
        result = PositionParser(ParserContext()).parse(_make_message(plain_content="Comment: lost"))

        assert isinstance(result, RejectionMessage)
        assert result.reason is RejectType.CANT_PARSE_LATLONG


class TestAckParser:
    def test_parses_labelled_lines(self) -> None:
        body = "Subject: weekly net\nFrom: W2XYZ\nReceived: 2024-03-04 12:00\nMessage ID: ABC123\n"
        result = AckParser(ParserContext()).parse(_make_message(subject="ACK: weekly net", plain_content=body))

        assert isinstance(result, AckMessage)
        assert result.original_subject == "weekly net"
        assert result.original_sender == "W2XYZ"
        assert result.received == "2024-03-04 12:00"
        assert result.original_id == "ABC123"

    def test_subject_falls_back_to_ack_subject(self) -> None:
        result = AckParser(ParserContext()).parse(_make_message(subject="ACK: drill", plain_content=""))

        assert isinstance(result, AckMessage)
        assert result.original_subject == "drill"
