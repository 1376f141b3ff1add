from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar

from rmsforms.core.message_type import FORM_DATA_ATTACHMENT, MessageType
from rmsforms.core.reject_type import RejectType
from rmsforms.toolkit.location import LatLongPair


@dataclass(frozen=True)
class RawMessage:
    """One exported message as delivered by the read stage. Never mutated."""

    message_id: str
    sender: str
    subject: str = ""
    source: str = ""
    to: str = ""
    to_list: tuple[str, ...] = ()
    cc_list: tuple[str, ...] = ()
    mime: str = ""
    plain_content: str = ""
    attachments: dict[str, bytes] = field(default_factory=dict)
    msg_date_time: datetime | None = None
    msg_location: LatLongPair | None = None
    msg_location_source: str = ""
    file_name: str = ""

    @property
    def key(self) -> tuple[str, str]:
        """Correlation key shared with the FormData side channel."""
        return (self.sender, self.message_id)

    @property
    def needs_decoding(self) -> bool:
        return bool(self.mime) and not self.plain_content and not self.attachments

    @property
    def form_data(self) -> bytes | None:
        return self.attachments.get(FORM_DATA_ATTACHMENT)

    def attachment_text(self, name: str) -> str | None:
        content = self.attachments.get(name)
        if content is None:
            return None
        return content.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class TypedMessage:
    """Base for every successfully extracted form record."""

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.PLAIN

    message: RawMessage

    @property
    def message_type(self) -> MessageType:
        return self.MESSAGE_TYPE

    @property
    def message_id(self) -> str:
        return self.message.message_id

    @property
    def sender(self) -> str:
        return self.message.sender

    def detail_records(self) -> list["DetailRecord"]:
        """Child records derived from this message; most forms have none."""
        return []


@dataclass(frozen=True)
class DetailRecord(TypedMessage):
    """A child record emitted alongside, not instead of, its parent message."""


@dataclass(frozen=True)
class RejectionMessage:
    """A message that could not be extracted, with the reason and what was tried."""

    message: RawMessage
    reason: RejectType
    context: str = ""

    @property
    def message_type(self) -> MessageType:
        return MessageType.REJECTS

    @property
    def message_id(self) -> str:
        return self.message.message_id

    @property
    def sender(self) -> str:
        return self.message.sender

    def detail_records(self) -> list[DetailRecord]:
        return []


@dataclass(frozen=True)
class PlainMessage(TypedMessage):
    """A message that matched no form; carried with its decoded body."""

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.PLAIN

    content: str = ""


ParseResult = TypedMessage | RejectionMessage
