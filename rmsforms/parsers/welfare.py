from rmsforms.core.message_type import MessageType
from rmsforms.messages.base import ParseResult, RawMessage
from rmsforms.messages.welfare import (
    RRIQuickWelfareMessage,
    RRIReplyWelfareRadiogramMessage,
    RRIWelfareRadiogramMessage,
    WelfareBulletinBoardMessage,
)
from rmsforms.parsers.base import BaseParser
from rmsforms.toolkit.lines import split_lines, value_after
from rmsforms.toolkit.mime import decode_quoted_printable
from rmsforms.toolkit.version import version_token

QUICK_WELFARE_SUBJECT_PREFIX = "I Am Safe Message From "
QUICK_WELFARE_SUBJECT_SUFFIX = " - DO NOT REPLY!"
QUICK_WELFARE_VERSION = "Template Version: Quick Welfare Message. "
RADIOGRAM_VERSION = "Template Version: RRI Welfare Radiogram v. "

BREAK = "BT"
END_OF_MESSAGE = "AR"


class _QuotedPrintableParser(BaseParser):
    """Base for the Radio Relay International forms, whose bodies arrive quoted-printable."""

    def decoded_lines(self, message: RawMessage) -> list[str]:
        return split_lines(decode_quoted_printable("\n".join(self.lines(message))))


class RRIQuickWelfareParser(_QuotedPrintableParser):
    MESSAGE_TYPE = MessageType.RRI_QUICK_WELFARE

    def _parse(self, message: RawMessage) -> ParseResult:
        lines = self.decoded_lines(message)
        return RRIQuickWelfareMessage(
            message,
            form_from=self._form_from(message.subject),
            form_date_time=value_after(lines, "Original Message Created: ") or "",
            incident_name=value_after(lines, "It Was Sent From: ") or "",
            text="".join(_paragraph(lines, 2)),
            version=value_after(lines, QUICK_WELFARE_VERSION) or "",
        )

    @staticmethod
    def _form_from(subject: str) -> str:
        """The sender's name from ``I Am Safe Message From <name> - DO NOT REPLY!``."""
        name = subject
        if name.startswith(QUICK_WELFARE_SUBJECT_PREFIX):
            name = name[len(QUICK_WELFARE_SUBJECT_PREFIX):]
        end = name.find(QUICK_WELFARE_SUBJECT_SUFFIX)
        return name[:end] if end >= 0 else name


def _paragraph(lines: list[str], start: int) -> list[str]:
    """Trimmed lines from ``start`` up to the first blank line."""
    paragraph = []
    for line in lines[start:]:
        line = line.strip()
        if not line:
            break
        paragraph.append(line)
    return paragraph


class RRIWelfareRadiogramParser(_QuotedPrintableParser):
    """ARRL-style radiogram: header line, address, ``BT``, body, ``BT``, signature, ``AR``."""

    MESSAGE_TYPE = MessageType.RRI_WELFARE_RADIOGRAM

    def _parse(self, message: RawMessage) -> ParseResult:
        lines = self.decoded_lines(message)
        sections: list[list[str]] = [[], [], []]
        break_count = 0
        for line in lines[1:]:
            if line.strip() == BREAK:
                break_count += 1
                continue
            if break_count >= 2 and line.strip() == END_OF_MESSAGE:
                break
            if break_count < len(sections):
                sections[break_count].append(line.strip() if break_count == 0 else line)

        address, body, signature = ("".join(line + "\n" for line in section) for section in sections)
        return RRIWelfareRadiogramMessage(
            message,
            header=lines[0] if lines else "",
            address=address,
            body=body,
            form_from=signature,
            version=value_after(lines, RADIOGRAM_VERSION) or "",
        )


class RRIReplyWelfareRadiogramParser(_QuotedPrintableParser):
    """Reply to a radiogram: the reply text, the ``On ... wrote:`` line and the quoted source."""

    MESSAGE_TYPE = MessageType.RRI_REPLY_WELFARE_RADIOGRAM

    def _parse(self, message: RawMessage) -> ParseResult:
        reply = []
        source = []
        reply_date_time = ""
        in_source = False
        for line in self.decoded_lines(message):
            if not in_source:
                if not line.strip():
                    continue
                if line.startswith("On ") and line.endswith(" wrote:"):
                    reply_date_time = line
                    in_source = True
                    continue
                if not line.startswith("> "):
                    reply.append(line)
                    continue
                in_source = True
            if line.startswith("> "):
                source.append(line[2:])

        return RRIReplyWelfareRadiogramMessage(
            message,
            reply="\n".join(reply),
            reply_date_time=reply_date_time,
            source_message="\n".join(source),
        )


class WelfareBulletinBoardParser(BaseParser):
    MESSAGE_TYPE = MessageType.WELFARE_BULLETIN_BOARD

    LOCATION_TAGS = ("maplat", "maplon")

    def _parse(self, message: RawMessage) -> ParseResult:
        document = self.document(message)
        return WelfareBulletinBoardMessage(
            message,
            incident_name=document.get("incidentname"),
            form_to=document.get("msgto"),
            form_from=document.get("from"),
            form_message_type=document.get("msgtype"),
            date_time_local=document.get("datetime"),
            date_time_utc=document.get("utctime"),
            my_status=document.get("msgstatus"),
            form_message=document.get("message"),
            message_status=document.get("message_status"),
            next_date=document.get("nextdate"),
            next_time=document.get("nexttime"),
            street=document.get("street"),
            city=document.get("city"),
            state=document.get("state"),
            zip=document.get("zip"),
            country=document.get("country"),
            radio_operator=document.get("callsign"),
            coordinates_same=document.get("addresssame"),
            location=document.get_lat_long(self.LOCATION_TAGS),
            what_three_words=document.get("w3w"),
            version=version_token(document.get("templateversion")),
        )
