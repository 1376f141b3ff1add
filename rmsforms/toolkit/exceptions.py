class ToolkitError(Exception):
    """Base exception for all extraction toolkit errors."""


class DocumentParseError(ToolkitError):
    """Raised when a form attachment cannot be built into a navigable document."""


class MimeDecodeError(ToolkitError):
    """Raised when a raw MIME body cannot be decoded into content and attachments."""
