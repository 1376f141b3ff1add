from abc import ABC, abstractmethod
from collections.abc import Iterable

from rmsforms.core.context import ParserContext
from rmsforms.core.form_data import FormDataIndex
from rmsforms.core.message_type import MessageType
from rmsforms.core.reject_type import RejectType
from rmsforms.logging.logger import Log
from rmsforms.messages.base import ParseResult, RawMessage, RejectionMessage
from rmsforms.parsers.exceptions import MissingAttachmentError
from rmsforms.toolkit.document import FormDocument, missing_location_context
from rmsforms.toolkit.lines import split_lines


class BaseParser(ABC):
    """Contract for all per-form parsers.

    Subclasses implement ``_parse`` and may raise freely; ``parse`` is the
    public entry and never raises. Parsers hold only the read-only context
    they were built with, so one instance serves every message and thread.
    """

    MESSAGE_TYPE: MessageType = MessageType.PLAIN

    def __init__(self, context: ParserContext, message_type: MessageType | None = None) -> None:
        self._context = context
        self._message_type = message_type or self.MESSAGE_TYPE

    @property
    def message_type(self) -> MessageType:
        return self._message_type

    @property
    def strict(self) -> bool:
        return self._context.strict_parsing

    def parse(self, message: RawMessage) -> ParseResult:
        """Extract a typed record from a raw message.

        Args:
            message: The raw message this parser was dispatched for.

        Returns:
            The typed record, or a rejection naming what could not be extracted.
            Any exception raised while parsing becomes a ``PROCESSING_ERROR``
            rejection carrying the exception text.
        """
        try:
            return self._parse(message)
        except Exception as exc:
            return self.reject(message, RejectType.PROCESSING_ERROR, str(exc) or type(exc).__name__)

    @abstractmethod
    def _parse(self, message: RawMessage) -> ParseResult:
        raise NotImplementedError

    def reject(self, message: RawMessage, reason: RejectType, context: str) -> RejectionMessage:
        Log.debug(f"Rejecting {message.message_id} from {message.sender} as {self._message_type}: {reason}")
        return RejectionMessage(message=message, reason=reason, context=context)

    def reject_location(self, message: RawMessage, overrides: Iterable[str] = ()) -> RejectionMessage:
        return self.reject(message, RejectType.CANT_PARSE_LATLONG, missing_location_context(overrides))

    def document(
        self,
        message: RawMessage,
        attachment_name: str | None = None,
        remove_parseme: bool = True,
    ) -> FormDocument:
        """Build the viewer document for this message's form attachment.

        Raises:
            MissingAttachmentError: if the message has no such attachment.
            DocumentParseError: if the attachment is not a parseable document.
        """
        name = attachment_name or self._message_type.attachment_name
        content = message.attachments.get(name) if name else None
        if content is None:
            raise MissingAttachmentError(f"no attachment named {name} in message {message.message_id}")
        document = FormDocument.build(message.message_id, content, remove_parseme=remove_parseme)
        if self._context.is_flagged(message):
            Log.flagged(f"{self._message_type} {message.message_id} from {message.sender}: {document.value_map()}")
        return document

    def lines(self, message: RawMessage) -> list[str]:
        """The plain-text body split into lines."""
        if self._context.is_flagged(message):
            Log.flagged(f"{self._message_type} {message.message_id} from {message.sender}: {message.plain_content!r}")
        return split_lines(message.plain_content)

    def form_data(self, message: RawMessage) -> dict[str, str] | RejectionMessage:
        """FormData side-channel values for this message, or the rejection explaining their absence."""
        index = self._context.form_data
        if index is None:
            if message.form_data is None:
                return self.reject(message, RejectType.CANT_FIND_FORMDATA, "no FormData map")
            index = FormDataIndex()
        values = index.lookup(message)
        if values is None:
            return self.reject(
                message,
                RejectType.CANT_FIND_FORMDATA,
                f"no FormData entry for message: {message.sender}/{message.message_id}",
            )
        return values
