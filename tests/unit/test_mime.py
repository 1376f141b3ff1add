import pytest

from rmsforms.toolkit.exceptions import MimeDecodeError
from rmsforms.toolkit.mime import decode_mime, decode_quoted_printable, repair_mime

MULTIPART = (
    "MIME-Version: 1.0\n"
    "Subject: ICS 213\n"
    'Content-Type: multipart/mixed; boundary="XYZ"\n'
    "\n"
    "--XYZ\n"
    'Content-Type: text/plain; charset="utf-8"\n'
    "Content-Transfer-Encoding: 7bit\n"
    "\n"
    "Hello body\n"
    "--XYZ\n"
    "Content-Type: application/xml\n"
    'Content-Disposition: attachment; filename=""RMS_Express_Form_ICS213_Initial_Viewer.xml""\n'
    "Content-Transfer-Encoding: 7bit\n"
    "\n"
    "<form><x>1</x></form>\n"
    "--XYZ\n"
    "Content-Type: application/octet-stream\n"
    "Content-Disposition: attachment\n"
    "Content-Transfer-Encoding: 7bit\n"
    "\n"
    "unnamed\n"
    "--XYZ--\n"
)


class TestRepairMime:
    def test_collapses_doubled_filename_quotes(self) -> None:
        repaired = repair_mime('Content-Disposition: attachment; filename=""a.xml""')
        assert repaired == 'Content-Disposition: attachment; filename="a.xml"'

    def test_keeps_an_empty_quoted_filename(self) -> None:
        header = 'Content-Disposition: attachment; filename=""'
        assert repair_mime(header) == header

    def test_repairs_only_the_doubled_value(self) -> None:
        repaired = repair_mime('Content-Disposition: attachment; filename=""a.xml""; size=""')
        assert repaired == 'Content-Disposition: attachment; filename="a.xml"; size=""'

    def test_leaves_other_headers_alone(self) -> None:
        assert repair_mime('X-Note: ""quoted""') == 'X-Note: ""quoted""'

    def test_replaces_bad_character_reference(self) -> None:
        assert repair_mime("a&#21b") == "a_b"


class TestDecodeMime:
    def test_splits_body_and_attachments(self) -> None:
        decoded = decode_mime(MULTIPART)
        assert decoded.plain_content.strip() == "Hello body"
        assert decoded.attachments["RMS_Express_Form_ICS213_Initial_Viewer.xml"].strip() == b"<form><x>1</x></form>"

    def test_unnamed_attachment_named_by_position(self) -> None:
        decoded = decode_mime(MULTIPART)
        assert decoded.attachments["attachment-1"].strip() == b"unnamed"

    def test_single_part_message(self) -> None:
        decoded = decode_mime("Subject: hi\nContent-Type: text/plain\n\nplain body")
        assert decoded.plain_content.strip() == "plain body"
        assert decoded.attachments == {}

    def test_empty_raises(self) -> None:
        with pytest.raises(MimeDecodeError, match="empty"):
            decode_mime("   ")

    def test_headerless_text_raises(self) -> None:
        with pytest.raises(MimeDecodeError):
            decode_mime("just some words without any header")


class TestDecodeQuotedPrintable:
    def test_decodes_escapes_and_soft_breaks(self) -> None:
        assert decode_quoted_printable("caf=C3=A9 au=\nlait") == "café aulait"

    def test_empty(self) -> None:
        assert decode_quoted_printable(None) == ""
