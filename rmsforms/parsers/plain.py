from rmsforms.core.message_type import FORM_PREFIX, MessageType
from rmsforms.core.reject_type import RejectType
from rmsforms.messages.base import ParseResult, PlainMessage, RawMessage
from rmsforms.parsers.base import BaseParser


class PlainParser(BaseParser):
    """Messages that match no form are kept with their decoded body."""

    MESSAGE_TYPE = MessageType.PLAIN

    def _parse(self, message: RawMessage) -> ParseResult:
        return PlainMessage(message, content=message.plain_content)


class UnsupportedParser(BaseParser):
    """Form attachments this engine has no parser for are rejected by name."""

    MESSAGE_TYPE = MessageType.UNSUPPORTED

    def _parse(self, message: RawMessage) -> ParseResult:
        names = sorted(name for name in message.attachments if name.startswith(FORM_PREFIX))
        return self.reject(message, RejectType.UNSUPPORTED_TYPE, ", ".join(names))
