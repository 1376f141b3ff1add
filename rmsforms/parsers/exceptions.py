class ParserError(Exception):
    """Base exception for errors raised inside a parser body."""


class MissingAttachmentError(ParserError):
    """Raised when the attachment a parser was dispatched for is not present."""
