import re

from rmsforms.core.message_type import MessageType
from rmsforms.core.reject_type import RejectType
from rmsforms.messages.base import ParseResult, RawMessage, RejectionMessage
from rmsforms.messages.ics import (
    Activity,
    CommunicationsEntry,
    Ics205Message,
    Ics213Message,
    Ics213ReplyMessage,
    Ics213RRMessage,
    Ics214AMessage,
    Ics214Message,
    Ics309Message,
    LineItem,
    PdfIcs309Message,
    RadioEntry,
    Resource,
)
from rmsforms.parsers.base import BaseParser
from rmsforms.parsers.checkin import DATA_SOURCE_FORM_DATA, DATA_SOURCE_RMS_VIEWER
from rmsforms.parsers.exceptions import ParserError
from rmsforms.pdf.base import is_pdf
from rmsforms.toolkit.dates import MultiDateTimeParser
from rmsforms.toolkit.document import FormDocument
from rmsforms.toolkit.location import LatLongPair
from rmsforms.toolkit.version import version_token

IS_EXERCISE = "** THIS IS AN EXERCISE **"

ICS_DATE_TIME = MultiDateTimeParser(["%Y-%m-%d %H:%M"])


def _is_integer(text: str) -> bool:
    try:
        int(text)
    except ValueError:
        return False
    return True


class Ics213Parser(BaseParser):
    """ICS-213 general message, from the viewer attachment or the FormData side channel."""

    MESSAGE_TYPE = MessageType.ICS_213

    LOCATION_TAGS = ("maplat", "maplon")

    def _parse(self, message: RawMessage) -> ParseResult:
        if self._message_type.attachment_name in message.attachments:
            return self._parse_viewer(message)
        return self._parse_form_data(message)

    def _parse_viewer(self, message: RawMessage) -> ParseResult:
        document = self.document(message)
        return Ics213Message(
            message,
            organization=document.get("formtitle"),
            incident_name=document.get("inc_name"),
            form_from=document.get("fm_name"),
            form_to=document.get("to_name"),
            form_subject=document.get("subjectline"),
            form_date=document.get("mdate"),
            form_time=document.get("mtime"),
            form_message=document.get("message"),
            approved_by=document.get("approved_name"),
            position=document.get("approved_postitle"),
            is_exercise=document.get("isexercise") == IS_EXERCISE,
            location=document.get_lat_long(self.LOCATION_TAGS),
            version=version_token(document.get("templateversion"), 2),
            data_source=DATA_SOURCE_RMS_VIEWER,
        )

    def _parse_form_data(self, message: RawMessage) -> ParseResult:
        values = self.form_data(message)
        if isinstance(values, RejectionMessage):
            return values
        return Ics213Message(
            message,
            organization=values.get("Organization", ""),
            incident_name=values.get("1. Incident Name", ""),
            form_from=values.get("3. From", ""),
            form_to=values.get("2. To (Name/Position)", ""),
            form_subject=values.get("4. Subject", ""),
            form_date=values.get("5. Date", ""),
            form_time=values.get("6. Time", ""),
            form_message=values.get("7. Message", ""),
            approved_by=values.get("8. Approved by", ""),
            position=values.get("8b.Position / Title", ""),
            is_exercise=values.get("0. Form Note", "") == IS_EXERCISE,
            location=LatLongPair(values.get("Latitude", ""), values.get("Longitude", "")),
            version="(unknown)",
            data_source=DATA_SOURCE_FORM_DATA,
        )


class Ics213ReplyParser(BaseParser):
    MESSAGE_TYPE = MessageType.ICS_213_REPLY

    def _parse(self, message: RawMessage) -> ParseResult:
        document = self.document(message)
        return Ics213ReplyMessage(
            message,
            organization=document.get("formtitle"),
            form_message=document.get("message"),
            reply=document.get("reply"),
            reply_by=document.get("rply_by"),
            reply_position=document.get("rply_position"),
            reply_date_time=document.get("rply_dtm"),
        )


class Ics213RRParser(BaseParser):
    """ICS-213 RR resource request; all eight line-item rows are kept, blank or not."""

    MESSAGE_TYPE = MessageType.ICS_213_RR

    LINE_ITEMS = 8

    def _parse(self, message: RawMessage) -> ParseResult:
        document = self.document(message)
        return Ics213RRMessage(
            message,
            organization=document.get("formtitle"),
            incident_name=document.get("incname"),
            activity_date_time=document.get("activitydatetime1"),
            request_number=document.get("reqnum"),
            line_items=self._line_items(document),
            delivery=document.get("delivery"),
            substitutes=document.get("subs1"),
            requested_by=document.get("reqname"),
            priority=document.get("priority"),
            approved_by=document.get("secapp"),
            logistics_order_number=document.get("lognum"),
            supplier_info=document.get("supinfo"),
            supplier_name=document.get("supname"),
            supplier_point_of_contact=document.get("poc"),
            supply_notes=document.get("notes"),
            logistics_authorizer=document.get("authsig"),
            logistics_date_time=document.get("activitydatetime2"),
            ordered_by=document.get("orderby"),
            finance_comments=document.get("fincomm"),
            finance_name=document.get("finrepname"),
            finance_date_time=document.get("activitydatetime3"),
        )

    def _line_items(self, document: FormDocument) -> tuple[LineItem, ...]:
        return tuple(
            LineItem(
                quantity=document.get(f"qty{i}"),
                kind=document.get(f"kind{i}"),
                type=document.get(f"type{i}"),
                item=document.get(f"item{i}"),
                requested_date_time=document.get(f"reqdatetime{i}"),
                estimated_date_time=document.get(f"estdatetime{i}"),
                cost=document.get(f"cost{i}"),
            )
            for i in range(1, self.LINE_ITEMS + 1)
        )


class Ics205Parser(BaseParser):
    """ICS-205 radio plan.

    Under strict parsing an unparseable prepared/approved date or a
    non-numeric IAP page rejects the message; otherwise the raw strings are
    kept for downstream validation.
    """

    MESSAGE_TYPE = MessageType.ICS_205

    RADIO_ROWS = 10

    def _parse(self, message: RawMessage) -> ParseResult:
        document = self.document(message)

        prepared_string = document.get("activitydatetime2")
        prepared = ICS_DATE_TIME.parse(prepared_string)
        if prepared is None and self.strict:
            return self.reject(
                message, RejectType.CANT_PARSE_DATE_TIME, f"can't parse Date/Time Prepared: {prepared_string}"
            )

        approved_string = document.get("activitydatetime1")
        approved = ICS_DATE_TIME.parse(approved_string)
        if approved is None and self.strict:
            return self.reject(
                message, RejectType.CANT_PARSE_DATE_TIME, f"can't parse Date/Time Approved: {approved_string}"
            )

        iap_page = document.get("iap_page")
        if not _is_integer(iap_page) and self.strict:
            return self.reject(message, RejectType.EXPLICIT_OTHER, f"can't parse IAP Page: {iap_page}")

        return Ics205Message(
            message,
            organization=document.get("formtitle"),
            incident_name=document.get("incident_name"),
            date_time_prepared=prepared_string,
            prepared_date_time=prepared,
            date_from=document.get("datefrom"),
            date_to=document.get("dateto"),
            time_from=document.get("timefrom"),
            time_to=document.get("timeto"),
            special_instructions=document.get("specialinstructions"),
            approved_by=document.get("preparedname"),
            approved_date_time_string=approved_string,
            approved_date_time=approved,
            iap_page=iap_page,
            radio_entries=self._radio_entries(document),
            version=version_token(document.get("templateversion")),
        )

    def _radio_entries(self, document: FormDocument) -> tuple[RadioEntry, ...]:
        entries = []
        for i in range(1, self.RADIO_ROWS + 1):
            values = {
                "zone_group": document.get(f"zonegrp{i}"),
                "channel_number": document.get(f"ch{i}"),
                "function": document.get(f"function{i}"),
                "channel_name": document.get(f"channelname{i}"),
                "assignment": document.get(f"assignment{i}"),
                "rx_frequency": document.get(f"rx{i}"),
                "rx_narrow_wide": document.get(f"nwmode{i}"),
                "rx_tone": document.get(f"rxtone{i}"),
                "tx_frequency": document.get(f"tx{i}"),
                "tx_narrow_wide": document.get(f"tnwmode{i}"),
                "tx_tone": document.get(f"txtone{i}"),
                "mode": document.get(f"mode{i}"),
                "remarks": document.get(f"remarks{i}"),
            }
            entries.append(RadioEntry(row_number=i, **values))
        return tuple(entries)


class Ics214Parser(BaseParser):
    """ICS-214 and ICS-214A activity logs; the two templates share tag names."""

    MESSAGE_TYPE = MessageType.ICS_214

    ROWS = 8

    def _parse(self, message: RawMessage) -> ParseResult:
        document = self.document(message)

        page = document.get("page")
        if self.strict and not _is_integer(page):
            return self.reject(message, RejectType.EXPLICIT_OTHER, f"can't parse Page: {page}")

        resources = []
        activities = []
        for i in range(1, self.ROWS + 1):
            resources.append(
                Resource(document.get(f"name{i}"), document.get(f"ics_position{i}"), document.get(f"home_agency{i}"))
            )
            activities.append(Activity(document.get(f"activitydatetime{i}"), document.get(f"activities{i}")))

        message_cls = Ics214AMessage if self._message_type == MessageType.ICS_214A else Ics214Message
        return message_cls(
            message,
            organization=document.get("formtitle"),
            incident_name=document.get("incident_name"),
            page=page,
            op_from=document.get("datetimefrom"),
            op_to=document.get("datetimeto"),
            self_resource=Resource(document.get("name"), document.get("ics_position"), document.get("home_agency")),
            assigned_resources=tuple(resources),
            activities=tuple(activities),
            prepared_by=document.get("preparedname"),
            version=version_token(document.get("templateversion")),
        )


# Templates before v13.10 wrote the "to" station into the "from" column and vice
# versa. The threshold is a property of the published template, not derived.
ICS_309_SWAP_BEFORE_VERSION = 1400


def ics309_version_number(version: str) -> int | None:
    """``"v13.9.2"`` -> 1392 and ``"v13.10"`` -> 1400; ``None`` if not numeric."""
    if not version:
        return 0
    fields = version[1:].split(".")
    number = 0
    for field in fields:
        if not field.isdigit():
            return None
        number = 10 * number + int(field)
    if len(fields) == 2:
        number *= 10
    return number


class Ics309Parser(BaseParser):
    """ICS-309 communications log."""

    MESSAGE_TYPE = MessageType.ICS_309

    DISPLAY_ACTIVITIES = 30

    def _parse(self, message: RawMessage) -> ParseResult:
        document = self.document(message)
        version = version_token(document.get("templateversion"))

        version_number = ics309_version_number(version)
        swap = version_number is not None and version_number < ICS_309_SWAP_BEFORE_VERSION

        activities = []
        for i in range(1, self.DISPLAY_ACTIVITIES + 1):
            entry_from, entry_to = document.get(f"from{i}"), document.get(f"to{i}")
            if swap:
                entry_from, entry_to = entry_to, entry_from
            activities.append(CommunicationsEntry(document.get(f"time{i}"), entry_from, entry_to, document.get(f"sub{i}")))

        return Ics309Message(
            message,
            organization=document.get("title"),
            task_number=document.get("task"),
            date_time_prepared=document.get("activitydatetime1"),
            operational_period=document.get("opper"),
            task_name=document.get("taskname"),
            operator_name=document.get("opname"),
            station_id=document.get("operid"),
            incident_name=document.get("incident_name"),
            page=document.get("page"),
            version=version,
            activities=tuple(activities),
        )


_PDF_ACTIVITY = re.compile(
    r"^(?P<time>\d{4}-\d{2}-\d{2}\s+\d{1,2}:\d{2}|\d{1,2}:\d{2}|\d{4})\s+(?P<from>\S+)\s+(?P<to>\S+)\s*(?P<subject>.*)$"
)


def _labelled(lines: list[str], label: str) -> str:
    pattern = re.compile(rf"{re.escape(label)}\s*:?\s*(.*)$", re.IGNORECASE)
    for line in lines:
        match = pattern.search(line)
        if match:
            return match.group(1).strip()
    return ""


class PdfIcs309Parser(BaseParser):
    """ICS-309 communications log printed to PDF and attached to a plain message.

    Every PDF attachment is read; when there is more than one their activity
    rows are combined in attachment order.
    """

    MESSAGE_TYPE = MessageType.PDF_ICS_309

    def _parse(self, message: RawMessage) -> ParseResult:
        extractor = self._context.pdf_extractor
        if extractor is None:
            raise ParserError("no PDF extractor configured")

        indices = []
        lines = []
        for index, content in enumerate(message.attachments.values()):
            if is_pdf(content):
                indices.append(index)
                lines.extend(extractor.extract_lines(content))
        if not indices:
            return self.reject(message, RejectType.UNSUPPORTED_TYPE, "no PDF attachment found")

        activities = []
        for line in lines:
            match = _PDF_ACTIVITY.match(line)
            if match:
                activities.append(
                    CommunicationsEntry(match["time"], match["from"], match["to"], match["subject"].strip())
                )

        return PdfIcs309Message(
            message,
            organization=_labelled(lines, "COMMUNICATIONS LOG"),
            task_number=_labelled(lines, "Task #"),
            date_time_prepared=_labelled(lines, "Date/Time Prepared"),
            operational_period=_labelled(lines, "Operational Period"),
            task_name=_labelled(lines, "Task Name"),
            operator_name=_labelled(lines, "Radio Operator"),
            station_id=_labelled(lines, "Station ID"),
            incident_name=_labelled(lines, "Incident Name"),
            page=_labelled(lines, "Page"),
            version="",
            activities=tuple(activities),
            pdf_attachment_indices=",".join(str(i) for i in indices),
            are_activities_combined=len(indices) > 1,
        )
