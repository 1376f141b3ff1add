import json

from rmsforms.core.message_type import MessageType
from rmsforms.core.reject_type import RejectType
from rmsforms.messages.base import ParseResult, RawMessage
from rmsforms.messages.situation import (
    DAMAGE_CATEGORIES,
    DamageAssessmentMessage,
    DamageEntry,
    EyeWarnDetail,
    EyeWarnMessage,
    FieldSituationMessage,
    HumanitarianNeedsMessage,
    PegelstandMessage,
    QuickMessage,
    SpotrepMessage,
)
from rmsforms.parsers.base import BaseParser
from rmsforms.parsers.exceptions import ParserError
from rmsforms.toolkit.dates import MultiDateTimeParser
from rmsforms.toolkit.document import FormDocument
from rmsforms.toolkit.lines import lines_between, value_after
from rmsforms.toolkit.location import INVALID, LatLongPair, is_valid_maidenhead, maidenhead_to_lat_long
from rmsforms.toolkit.version import exact_token, version_token

FIELD_SITUATION_VARIANTS = (
    "RMS_Express_Form_Field Situation Report_viewer.xml",
    "RMS_Express_Form_Field Situation Report 23_viewer.xml",
    "RMS_Express_Form_Field Situation Report 25_viewer.xml",
    "RMS_Express_Form_Field Situation Report 26_viewer.xml",
    "RMS_Express_Form_Field Situation Report viewer.xml",
)


class FieldSituationParser(BaseParser):
    """Field Situation Report in any of its published template variants.

    The variants share one tag vocabulary; an attachment in the family that is
    not a known variant is rejected as unsupported.
    """

    MESSAGE_TYPE = MessageType.FIELD_SITUATION

    def _parse(self, message: RawMessage) -> ParseResult:
        family = [name for name in message.attachments if self._message_type.matches_attachment(name)]
        if not family:
            raise ParserError(f"no {self._message_type} attachment in message {message.message_id}")
        variant = next((name for name in family if name in FIELD_SITUATION_VARIANTS), None)
        if variant is None:
            return self.reject(message, RejectType.UNSUPPORTED_TYPE, family[0])

        document = self.document(message, variant)
        location = document.get_lat_long()
        if not location.is_valid:
            return self.reject_location(message)

        return FieldSituationMessage(
            message,
            organization=document.get("title"),
            location=location,
            precedence=document.get("precedence"),
            form_date_time=document.get("udtgfld"),
            task=document.get("msgnr"),
            form_to=document.get("msgto"),
            form_from=document.get("msgsender"),
            is_help_needed=document.get("safetyneed"),
            needed_help=document.get("comm0"),
            city=document.get("city"),
            county=document.get("county"),
            state=document.get("state"),
            territory=document.get("territory"),
            landline_status=document.get("pots"),
            landline_comments=document.get("comm1"),
            voip_status=document.get("voip"),
            voip_comments=document.get("comm1a"),
            cell_phone_status=document.get("cell"),
            cell_phone_comments=document.get("comm2"),
            cell_text_status=document.get("celltext"),
            cell_text_comments=document.get("comm2a"),
            radio_status=document.get("amfm"),
            radio_comments=document.get("comm3"),
            tv_status=document.get("tvstatus"),
            tv_comments=document.get("comm4"),
            sat_tv_status=document.get("tvstatusb"),
            sat_tv_comments=document.get("comm4b"),
            cable_tv_status=document.get("tvstatusc"),
            cable_tv_comments=document.get("comm4c"),
            water_status=document.get("waterworks"),
            water_comments=document.get("comm5"),
            power_status=document.get("powerworks"),
            power_comments=document.get("comm6"),
            power_stable=document.get("powerstable"),
            power_stable_comments=document.get("comm6a"),
            natural_gas_status=document.get("natgas"),
            natural_gas_comments=document.get("comm9c"),
            internet_status=document.get("inter"),
            internet_comments=document.get("comm7"),
            noaa_status=document.get("noaa"),
            noaa_comments=document.get("noaacom"),
            noaa_audio_degraded=document.get("noaab"),
            noaa_audio_degraded_comments=document.get("noaacomb"),
            additional_comments=document.get("message"),
            poc=document.get("poc"),
            version=exact_token(document.get("templateversion"), 4, 5),
            variant=variant,
        )


class SpotrepParser(BaseParser):
    MESSAGE_TYPE = MessageType.SPOTREP

    def _parse(self, message: RawMessage) -> ParseResult:
        document = self.document(message)
        location = document.get_lat_long()
        if not location.is_valid:
            return self.reject_location(message)

        return SpotrepMessage(
            message,
            location=location,
            location_string=document.get("city"),
            landline_status=document.get("land"),
            landline_comments=document.get("comm1"),
            cell_phone_status=document.get("cell"),
            cell_phone_comments=document.get("comm2"),
            radio_status=document.get("amfm"),
            radio_comments=document.get("comm3"),
            tv_status=document.get("tvstatus"),
            tv_comments=document.get("comm4"),
            water_status=document.get("waterworks"),
            water_comments=document.get("comm5"),
            power_status=document.get("powerworks"),
            power_comments=document.get("comm6"),
            internet_status=document.get("inter"),
            internet_comments=document.get("comm7"),
            additional_comments=document.get("message"),
            poc=document.get("poc"),
        )


class QuickParser(BaseParser):
    MESSAGE_TYPE = MessageType.QUICK

    DATE_TIME = MultiDateTimeParser(["%Y-%m-%d %H:%M"])

    def _parse(self, message: RawMessage) -> ParseResult:
        document = self.document(message)
        grid = document.get("grid_square")
        location = maidenhead_to_lat_long(grid) if is_valid_maidenhead(grid) else INVALID
        date_time_string = document.get("time")

        return QuickMessage(
            message,
            location=location,
            form_date_time=self.DATE_TIME.parse(date_time_string),
            attention=document.get("attn"),
            send_to_address=document.get("address"),
            from_name_group=document.get("from_name"),
            date_time_string=date_time_string,
            form_subject=document.get("subjectline"),
            form_message=document.get("message"),
            version=version_token(document.get("templateversion")),
        )


class DamageAssessmentParser(BaseParser):
    """Windshield damage assessment survey."""

    MESSAGE_TYPE = MessageType.DAMAGE_ASSESSMENT

    ENTRIES = 15

    def _parse(self, message: RawMessage) -> ParseResult:
        document = self.document(message)
        return DamageAssessmentMessage(
            message,
            organization=document.get("title"),
            jurisdiction=document.get("jur"),
            mission_incident_id=document.get("misnum"),
            form_type=document.get("status"),
            event_type=document.get("event"),
            description=document.get("other"),
            survey_area=document.get("surarea"),
            survey_team=document.get("surteam"),
            event_start_date=document.get("datetime1"),
            survey_date=document.get("date"),
            damage_entries=self._damage_entries(document),
            total_loss_string=document.get("dollar16"),
            comments=document.get("comments"),
            version=version_token(document.get("templateversion")),
        )

    def _damage_entries(self, document: FormDocument) -> tuple[DamageEntry, ...]:
        entries = []
        for i in range(1, self.ENTRIES + 1):
            if i <= len(DAMAGE_CATEGORIES):
                description = DAMAGE_CATEGORIES[i - 1]
            else:
                description = document.get(f"other{i}")
            entries.append(
                DamageEntry(
                    description=description,
                    affected=document.get(f"aff{i}"),
                    minor=document.get(f"min{i}"),
                    major=document.get(f"maj{i}"),
                    destroyed=document.get(f"des{i}"),
                    total=document.get(f"total{i}"),
                    loss_string=document.get(f"dollar{i}"),
                    loss_amount=document.get(f"hdollar{i}"),
                )
            )
        return tuple(entries)


class HumanitarianNeedsParser(BaseParser):
    MESSAGE_TYPE = MessageType.HUMANITARIAN_NEEDS

    LOCATION_TAGS = ("maplat", "maplon")

    def _parse(self, message: RawMessage) -> ParseResult:
        document = self.document(message)
        return HumanitarianNeedsMessage(
            message,
            location=document.get_lat_long(self.LOCATION_TAGS),
            team_id=document.get("teamid"),
            form_date=document.get("thedate"),
            form_time=document.get("thetime"),
            address=document.get("address"),
            needs_health=bool(document.get("health")),
            needs_shelter=bool(document.get("shelter")),
            needs_food=bool(document.get("food")),
            needs_water=bool(document.get("water")),
            needs_logistics=bool(document.get("logistics")),
            needs_other=bool(document.get("other")),
            description=document.get("situationdescription"),
            other=document.get("otherinfo"),
            approved_by=document.get("approvedby"),
            position=document.get("titlepos"),
            version=version_token(document.get("templateversion"), 2),
        )


EYEWARN_COLORS = ("RED", "YELLOW", "GREEN")


def eyewarn_details(blob: str, color: str) -> tuple[EyeWarnDetail, ...]:
    """Reports of one colour from the EyeWarn ``parseme`` JSON block.

    Each report's ISO timestamp is split into ``MM/DD/YYYY`` and ``HH:MM``.

    Raises:
        ParserError: if the block is not valid JSON.
    """
    if not blob.strip():
        return ()
    try:
        root = json.loads(blob)
    except json.JSONDecodeError as exc:
        raise ParserError(f"can't parse json: {exc}") from exc

    key = color.lower() + "Reports"
    details = []
    for reports in _find_values(root, key):
        for report in reports:
            year, month, day = str(report.get("date", ""))[:10].split("-")
            details.append(
                EyeWarnDetail(
                    color=color,
                    form_date=f"{month}/{day}/{year}",
                    form_time=str(report.get("time", ""))[11:16],
                    text=str(report.get("data", "")),
                )
            )
    return tuple(details)


def _find_values(node: object, key: str) -> list:
    found = []
    if isinstance(node, dict):
        for name, value in node.items():
            if name == key:
                found.append(value)
            else:
                found.extend(_find_values(value, key))
    elif isinstance(node, list):
        for item in node:
            found.extend(_find_values(item, key))
    return found


class EyeWarnParser(BaseParser):
    """EyeWarn summary; the colour reports live in the ``parseme`` block, which is kept."""

    MESSAGE_TYPE = MessageType.EYEWARN

    def _parse(self, message: RawMessage) -> ParseResult:
        document = self.document(message, remove_parseme=False)
        parseme = document.get("parseme")
        red, yellow, green = (eyewarn_details(parseme, color) for color in EYEWARN_COLORS)

        return EyeWarnMessage(
            message,
            exercise_or_incident=document.get("form-exercise"),
            form_date=document.get("form-date"),
            form_time=document.get("form-time"),
            ncs=document.get("form-ncs"),
            incident_name=document.get("form-name"),
            total_check_ins=document.get("form-checkins"),
            red_reports=red,
            yellow_reports=yellow,
            green_reports=green,
            version=version_token(document.get("template-version")),
        )


COMMENTS_END = "------------------------------------"


class PegelstandParser(BaseParser):
    """German water-level report, sent as labelled plain-text lines."""

    MESSAGE_TYPE = MessageType.PEGELSTAND

    def _parse(self, message: RawMessage) -> ParseResult:
        lines = self.lines(message)

        def value(prefix: str) -> str:
            return value_after(lines, prefix) or ""

        def token(prefix: str, index: int) -> str:
            tokens = value(prefix).split()
            return tokens[index] if index < len(tokens) else ""

        location = INVALID
        coordinates = value("Coordinates:").split()
        if len(coordinates) >= 5:
            location = LatLongPair(coordinates[1], coordinates[4])

        comments = lines_between(lines, "Event Comments:", COMMENTS_END)

        return PegelstandMessage(
            message,
            form_date_time=value("Date Time "),
            report_status=value("01. Report Status:"),
            form_sender=value("03. Rufzeichen des Absenders:"),
            sender_is_observer=value("02. Ist der Absender auch gleichzeitig der Beobachter?"),
            observer_email=value("04. Beobachter Email:"),
            observer_phone=value("05. Beobachter Telefonnummer:"),
            city=value("06. Stadt:"),
            region=value("07. Region:"),
            federal_state=value("08. Bundesland:"),
            state=value("09. Staat:"),
            location=location,
            mgrs=value("MGRS "),
            measured_values=value("10. Messwerterhebung:"),
            measurement_location_number=value("11. Standort der Messung:"),
            speed=token("12. Geschwindigkeit:", 0),
            speed_units=token("12. Geschwindigkeit:", 2),
            volume=token("13. Volumen/Zeit:", 0),
            volume_units=token("13. Volumen/Zeit:", 2),
            trend=value("14. Tendenz:"),
            water_level=token("15. Pegel:", 0),
            water_level_units=token("15. Pegel:", 1),
            comments="\n".join(comments[:-1]).strip(),
            version=version_token(value("Senders Template Version:"), 3),
        )
