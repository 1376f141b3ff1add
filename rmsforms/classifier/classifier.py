from collections.abc import Callable

from rmsforms.core.context import ParserContext
from rmsforms.core.form_data import map_file_name
from rmsforms.core.message_type import FORM_PREFIX, MessageType
from rmsforms.logging.logger import Log
from rmsforms.messages.base import RawMessage
from rmsforms.parsers.weather import BEGIN_JSON, END_JSON
from rmsforms.pdf.base import is_pdf

# Members tested against attachment names: the prefix family first, then the
# exact names in declaration order.
ATTACHMENT_TYPES: tuple[MessageType, ...] = tuple(
    sorted(
        (member for member in MessageType if member.attachment_name is not None),
        key=lambda member: not member.match_prefix,
    )
)

MAP_FILE_TYPES: tuple[MessageType, ...] = (
    MessageType.CHECK_IN,
    MessageType.CHECK_OUT,
    MessageType.ICS_213,
    MessageType.WX_HURRICANE,
)


def _starts_with_any(*prefixes: str) -> Callable[[str], bool]:
    return lambda subject: subject.startswith(prefixes)


def _starts_with_ignore_case(prefix: str) -> Callable[[str], bool]:
    return lambda subject: subject.lower().startswith(prefix.lower())


SUBJECT_RULES: tuple[tuple[Callable[[str], bool], MessageType], ...] = (
    (_starts_with_any("DYFI Automatic Entry"), MessageType.DYFI),
    (_starts_with_any("Hurricane Report"), MessageType.WX_HURRICANE),
    (
        _starts_with_any("Winlink Thursday Net Check-In", "Re: Winlink Thursday Net Check-In"),
        MessageType.ETO_CHECK_IN,
    ),
    (
        _starts_with_any("ETO Winlink Thursday Check-In", "Re: ETO Winlink Thursday Check-In"),
        MessageType.ETO_CHECK_IN_V2,
    ),
    (
        lambda subject: subject == "MIRO Check In" or subject.startswith(("MIRO Winlink Check In", "MIRO After Action")),
        MessageType.MIRO_CHECK_IN,
    ),
    (lambda subject: subject == "Position Report", MessageType.POSITION),
    (_starts_with_any("ETO Participant resume"), MessageType.ETO_RESUME),
    (_starts_with_any("ACK:"), MessageType.ACK),
    (
        lambda subject: subject.startswith("I Am Safe Message From ") and subject.endswith(" - DO NOT REPLY!"),
        MessageType.RRI_QUICK_WELFARE,
    ),
    (_starts_with_ignore_case("Re: QTC 1 "), MessageType.RRI_REPLY_WELFARE_RADIOGRAM),
    (_starts_with_ignore_case("QTC 1 "), MessageType.RRI_WELFARE_RADIOGRAM),
    (lambda subject: "pegelstand" in subject.lower(), MessageType.PEGELSTAND),
)

QUICK_WELFARE_MARKER = "Template Version: Quick Welfare Message"
WELFARE_RADIOGRAM_MARKER = "Template Version: RRI Welfare Radiogram"


class Classifier:
    """Resolves the message type of a raw message.

    Precedence, first match wins: form attachment name, FormData ``MapFileName``,
    subject line, body and attachment structure, and finally plain text.
    Classification never raises and depends only on the message itself.
    """

    def __init__(self, context: ParserContext | None = None) -> None:
        self._context = context or ParserContext()

    def classify(self, message: RawMessage) -> MessageType:
        message_type = (
            self._by_attachment(message)
            or self._by_map_file_name(message)
            or self._by_subject(message)
            or self._by_structure(message)
            or MessageType.PLAIN
        )
        if self._context.is_flagged(message):
            Log.flagged(f"classified {message.message_id} from {message.sender} as {message_type}")
        return message_type

    @staticmethod
    def _by_attachment(message: RawMessage) -> MessageType | None:
        for message_type in ATTACHMENT_TYPES:
            for name in message.attachments:
                if message_type.matches_attachment(name):
                    return message_type
        return None

    @staticmethod
    def _by_map_file_name(message: RawMessage) -> MessageType | None:
        content = message.form_data
        if content is None:
            return None
        name = map_file_name(content)
        if not name:
            return None
        for message_type in MAP_FILE_TYPES:
            if name.startswith(message_type.map_file_prefix):
                return message_type
        return None

    @staticmethod
    def _by_subject(message: RawMessage) -> MessageType | None:
        subject = message.subject or ""
        for matches, message_type in SUBJECT_RULES:
            if matches(subject):
                return message_type
        return None

    @staticmethod
    def _by_structure(message: RawMessage) -> MessageType | None:
        content = message.plain_content or ""
        if BEGIN_JSON in content and END_JSON in content:
            return MessageType.DYFI
        if QUICK_WELFARE_MARKER in content:
            return MessageType.RRI_QUICK_WELFARE
        if WELFARE_RADIOGRAM_MARKER in content:
            return MessageType.RRI_WELFARE_RADIOGRAM
        for name, attachment in message.attachments.items():
            if name.lower().endswith(".pdf") and "309" in name and is_pdf(attachment):
                return MessageType.PDF_ICS_309
        if any(name.startswith(FORM_PREFIX) for name in message.attachments):
            return MessageType.UNSUPPORTED
        return None
