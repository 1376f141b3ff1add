import quopri
import re
from dataclasses import dataclass, field
from email import policy
from email.message import Message
from email.parser import BytesParser

from rmsforms.toolkit.exceptions import MimeDecodeError

_DISPOSITION_BLOCK = re.compile(
    r"^Content-Disposition:[^\r\n]*(?:\r?\n[ \t][^\r\n]*)*",
    re.IGNORECASE | re.MULTILINE,
)
_DOUBLED_QUOTES = re.compile(r'=""([^"]*)""')
_BAD_CHARACTER_REFERENCE = "&#21"


@dataclass(frozen=True)
class DecodedMime:
    """Plain-text body and attachments recovered from a raw MIME message."""

    plain_content: str
    attachments: dict[str, bytes] = field(default_factory=dict)


def repair_mime(text: str) -> str:
    """Rewrite known client malformations so the body becomes parseable.

    Some client versions double the quotes around a ``Content-Disposition``
    filename (``filename=""name.xml""``) and emit an invalid ``&#21``
    character reference.
    """
    text = _DISPOSITION_BLOCK.sub(lambda m: _DOUBLED_QUOTES.sub(r'="\1"', m.group(0)), text)
    return text.replace(_BAD_CHARACTER_REFERENCE, "_")


def _decode_text(part: Message, payload: bytes) -> str:
    charset = part.get_content_charset() or "utf-8"
    try:
        return payload.decode(charset, errors="replace")
    except LookupError:
        return payload.decode("utf-8", errors="replace")


def decode_mime(text: str | bytes) -> DecodedMime:
    """Decode a raw MIME message into its plain body and named attachments.

    Unnamed attachment parts are named ``attachment-N`` by position.

    Raises:
        MimeDecodeError: if the message structure cannot be decoded.
    """
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")
    if not text or not text.strip():
        raise MimeDecodeError("empty mime content")

    try:
        message = BytesParser(policy=policy.default).parsebytes(
            repair_mime(text).encode("utf-8", errors="replace")
        )
        if not message.keys():
            raise MimeDecodeError("no mime headers found")

        plain_content = ""
        attachments: dict[str, bytes] = {}
        index = 0
        for part in message.walk():
            if part.is_multipart():
                continue
            payload = part.get_payload(decode=True) or b""
            filename = part.get_filename()
            if filename or part.get_content_disposition() == "attachment":
                attachments[filename or f"attachment-{index}"] = payload
                index += 1
            elif part.get_content_type() == "text/plain" and not plain_content:
                plain_content = _decode_text(part, payload)
        return DecodedMime(plain_content=plain_content, attachments=attachments)
    except MimeDecodeError:
        raise
    except Exception as exc:
        raise MimeDecodeError(f"mime decoding failed: {exc}") from exc


def decode_quoted_printable(text: str | None) -> str:
    """Decode a quoted-printable body, as some templates send their plain text."""
    if not text:
        return ""
    return quopri.decodestring(text.encode("utf-8")).decode("utf-8", errors="replace")
