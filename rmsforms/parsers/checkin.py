import csv
import json

from rmsforms.core.message_type import MessageType
from rmsforms.core.reject_type import RejectType
from rmsforms.messages.base import ParseResult, RawMessage, RejectionMessage
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
from rmsforms.parsers.base import BaseParser
from rmsforms.toolkit.dates import MultiDateTimeParser
from rmsforms.toolkit.lines import get_string_from_form_lines, lines_between
from rmsforms.toolkit.location import LatLongPair, convert_to_decimal_degrees, find_token_after
from rmsforms.toolkit.version import version_token

DATA_SOURCE_RMS_VIEWER = "RMS viewer"
DATA_SOURCE_FORM_DATA = "FormData"

CHECK_IN_DATE_TIME = MultiDateTimeParser(["%Y-%m-%d %H:%M:%S"])

# FormData label for each viewer tag of the check-in template
CHECK_IN_FORM_DATA_KEYS = {
    "organization": "Organization",
    "datetime": "DateTime",
    "latitude": "Latitude",
    "longitude": "Longitude",
    "status": "Status",
    "band": "Band",
    "session": "Session",
    "comments": "Comments",
    "templateversion": "Template Version",
}


class CheckInParser(BaseParser):
    """Winlink check-in and check-out forms.

    The viewer attachment is read when present; otherwise the FormData side
    channel for the same sender and message id is used.
    """

    MESSAGE_TYPE = MessageType.CHECK_IN

    def _parse(self, message: RawMessage) -> ParseResult:
        if self._message_type.attachment_name in message.attachments:
            return self._parse_viewer(message)
        return self._parse_form_data(message)

    def _parse_viewer(self, message: RawMessage) -> ParseResult:
        document = self.document(message)

        location = document.get_lat_long()
        if not location.is_valid:
            return self.reject_location(message)

        return self._build(
            message,
            organization=document.get("organization"),
            location=location,
            form_date_time=CHECK_IN_DATE_TIME.parse(document.get("datetime")),
            status=document.get("status"),
            band=document.get("band"),
            mode=document.get("session"),
            comments=document.get("comments"),
            version=version_token(document.get("templateversion")),
            data_source=DATA_SOURCE_RMS_VIEWER,
        )

    def _parse_form_data(self, message: RawMessage) -> ParseResult:
        values = self.form_data(message)
        if isinstance(values, RejectionMessage):
            return values

        keys = CHECK_IN_FORM_DATA_KEYS
        location = LatLongPair(values.get(keys["latitude"], ""), values.get(keys["longitude"], ""))
        if not location.is_valid:
            return self.reject(
                message,
                RejectType.CANT_PARSE_LATLONG,
                f"couldn't find lat/long within FormData keys: [{keys['latitude']}, {keys['longitude']}]",
            )

        return self._build(
            message,
            organization=values.get(keys["organization"], ""),
            location=location,
            form_date_time=CHECK_IN_DATE_TIME.parse(values.get(keys["datetime"])),
            status=values.get(keys["status"], ""),
            band=values.get(keys["band"], ""),
            mode=values.get(keys["session"], ""),
            comments=values.get(keys["comments"], ""),
            version=version_token(values.get(keys["templateversion"])),
            data_source=DATA_SOURCE_FORM_DATA,
        )

    def _build(self, message: RawMessage, **fields: object) -> CheckInMessage:
        if self._message_type == MessageType.CHECK_OUT:
            return CheckOutMessage(message, **fields)  # type: ignore[arg-type]
        return CheckInMessage(message, **fields)  # type: ignore[arg-type]


class EtoCheckInParser(BaseParser):
    """Plain-text check-in with a ``GPS Coordinates: LAT: x LON: y`` line."""

    MESSAGE_TYPE = MessageType.ETO_CHECK_IN

    def _parse(self, message: RawMessage) -> ParseResult:
        lines = self.lines(message)

        lat_long_string = get_string_from_form_lines(lines, "GPS Coordinates", ":")
        if lat_long_string is None:
            return self.reject(message, RejectType.CANT_PARSE_LATLONG, message.plain_content)
        fields = lat_long_string.split(" ")
        location = LatLongPair(find_token_after("LAT", fields) or "", find_token_after("LON", fields) or "")
        if not location.is_valid:
            return self.reject(message, RejectType.CANT_PARSE_LATLONG, lat_long_string)

        comments = [line.strip() for line in lines_between(lines, "Comments:", "----------")]
        return EtoCheckInMessage(
            message,
            location=location,
            comments="\n".join(line for line in comments if line),
            status=(get_string_from_form_lines(lines, "Status", ":") or "").strip(),
            band=(get_string_from_form_lines(lines, "Band Used", ":") or "").strip(),
            mode=(get_string_from_form_lines(lines, "Session Type", ":") or "").strip(),
            version=version_token(get_string_from_form_lines(lines, "Version", ":")),
        )


class EtoCheckInV2Parser(BaseParser):
    """Check-in whose body carries one JSON object."""

    MESSAGE_TYPE = MessageType.ETO_CHECK_IN_V2

    def _parse(self, message: RawMessage) -> ParseResult:
        content = message.plain_content or ""
        begin = content.find("{")
        end = content.rfind("}")
        if begin < 0 or end < begin:
            return self.reject(message, RejectType.CANT_PARSE_ETO_JSON, "no json object in message body")
        try:
            values = json.loads(content[begin:end + 1].replace("\n", "").replace("\r", ""))
        except json.JSONDecodeError as exc:
            return self.reject(message, RejectType.CANT_PARSE_ETO_JSON, str(exc))
        if not isinstance(values, dict):
            return self.reject(message, RejectType.CANT_PARSE_ETO_JSON, "json body is not an object")

        form_date = form_time = ""
        date_time_fields = str(values.get("DateTimeLocal") or "").split(" ")
        if len(date_time_fields) == 2:
            form_date, form_time = (f.strip() for f in date_time_fields)

        return EtoCheckInV2Message(
            message,
            location=LatLongPair(str(values.get("Latitude") or ""), str(values.get("Longitude") or "")),
            comments=str(values.get("Comments") or ""),
            form_date=form_date,
            form_time=form_time,
            form_name=str(values.get("FormName") or ""),
            version=str(values.get("Version") or ""),
        )


class EtoResumeParser(BaseParser):
    MESSAGE_TYPE = MessageType.ETO_RESUME

    def _parse(self, message: RawMessage) -> ParseResult:
        json_string = (message.plain_content or "").strip().replace("\n", "").replace("\r", "")
        try:
            values = json.loads(json_string)
        except json.JSONDecodeError as exc:
            return self.reject(message, RejectType.CANT_PARSE_ETO_JSON, str(exc))
        if not isinstance(values, dict):
            return self.reject(message, RejectType.CANT_PARSE_ETO_JSON, "json body is not an object")

        def value(key: str) -> str:
            return str(values.get(key) or "")

        agencies = tuple(a.strip() for a in value("Agencies").split("|") if a.strip())
        return EtoResumeMessage(
            message,
            sent_by=value("SentBy"),
            form_date_time=value("DateTimeLocal"),
            has_is100=value("IS100"),
            has_is200=value("IS200"),
            has_is700=value("IS700"),
            has_is800=value("IS800"),
            has_is2200=value("IS2200"),
            has_aces=value("ACES"),
            has_ec001=value("EC001"),
            has_ec016=value("EC016"),
            has_skywarn=value("SKYWARN"),
            has_auxcomm=value("AUXCOMM"),
            has_comt=value("COMT"),
            has_coml=value("COML"),
            agencies=agencies,
            comments=value("Comments"),
            version=value("Version"),
        )


class MiroCheckInParser(BaseParser):
    """One CSV line: id, date, time, call, lat, lon, power, band, mode, ..."""

    MESSAGE_TYPE = MessageType.MIRO_CHECK_IN

    MIN_FIELDS = 14
    DATE_TIME = MultiDateTimeParser(["%Y-%m-%d %H:%M:%S"])

    def _parse(self, message: RawMessage) -> ParseResult:
        content_line = (message.plain_content or "").strip()
        if not content_line:
            return self.reject(message, RejectType.CANT_PARSE_MIME, message.plain_content)
        try:
            fields = next(csv.reader([content_line.splitlines()[0]]))
        except (csv.Error, StopIteration) as exc:
            return self.reject(message, RejectType.CANT_PARSE_MIME, f"{content_line}: {exc}")
        if len(fields) < self.MIN_FIELDS:
            return self.reject(message, RejectType.CANT_PARSE_MIME, content_line)

        rf_power = rms_gateway = distance_miles = ""
        if len(fields) >= 17:
            rf_power, rms_gateway, distance_miles = fields[14], fields[15], fields[16]

        return MiroCheckInMessage(
            message,
            form_date_time=self.DATE_TIME.parse(f"{fields[1]} {fields[2]}"),
            location=LatLongPair(fields[4].strip(), fields[5].strip()),
            power=fields[6],
            band=fields[7],
            mode=fields[8],
            radio=fields[9],
            antenna=fields[10],
            portable=fields[11],
            comments=fields[12],
            version=fields[13],
            rf_power=rf_power,
            rms_gateway=rms_gateway,
            distance_miles=distance_miles,
        )


class PositionParser(BaseParser):
    """Position report with degrees-minutes coordinates."""

    MESSAGE_TYPE = MessageType.POSITION

    def _parse(self, message: RawMessage) -> ParseResult:
        lines = self.lines(message)
        latitude = convert_to_decimal_degrees(_value_after_colon(lines, "Latitude: "))
        longitude = convert_to_decimal_degrees(_value_after_colon(lines, "Longitude: "))
        if not latitude or not longitude:
            return self.reject(message, RejectType.CANT_PARSE_LATLONG, f"lat: {latitude}, lon: {longitude}")
        return PositionMessage(
            message,
            location=LatLongPair(latitude, longitude),
            comments=_continued_comment(lines),
        )


def _value_after_colon(lines: list[str], label: str) -> str:
    for line in lines:
        if line.startswith(label):
            return line[line.index(": ") + 2:].strip()
    return ""


def _continued_comment(lines: list[str]) -> str:
    """A ``Comment:`` value, joined across ``=``-terminated continuation lines."""
    comments = ""
    found = False
    for line in lines:
        if not found and (line.startswith("Comment: ") or line.startswith("Comments: ")):
            found = True
            line = line[line.index(" ") + 1:]
        if found:
            if line.endswith("="):
                comments += line[:-1]
            else:
                comments += line
                break
    return comments


class AckParser(BaseParser):
    """Acknowledgement body of ``Label: value`` lines."""

    MESSAGE_TYPE = MessageType.ACK

    LABELS = {
        "original_subject": ("Subject:",),
        "original_sender": ("Sender:", "From:"),
        "original_to": ("To:",),
        "received": ("Received:",),
        "acknowledged": ("Acknowledged:", "Read:"),
        "original_id": ("Message ID:", "ID:"),
        "attachment_count": ("Attachments:",),
        "size": ("Size:",),
    }

    def _parse(self, message: RawMessage) -> ParseResult:
        lines = [line.strip() for line in self.lines(message)]
        values = {}
        for name, labels in self.LABELS.items():
            values[name] = ""
            for label in labels:
                value = get_string_from_form_lines(lines, label, ":")
                if value is not None:
                    values[name] = value.strip()
                    break
        if not values["original_subject"] and message.subject.startswith("ACK:"):
            values["original_subject"] = message.subject[len("ACK:"):].strip()
        return AckMessage(message, **values)
