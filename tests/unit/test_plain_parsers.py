import pytest

from rmsforms.core.context import ParserContext
from rmsforms.core.message_type import MessageType
from rmsforms.core.reject_type import RejectType
from rmsforms.messages.base import PlainMessage, RawMessage, RejectionMessage
from rmsforms.parsers.base import BaseParser
from rmsforms.parsers.hospital import HospitalBedParser
from rmsforms.parsers.ics import Ics213Parser, Ics309Parser
from rmsforms.parsers.plain import PlainParser, UnsupportedParser
from rmsforms.parsers.washington import WaEyewarnParser, WaIsnapParser


def _make_message(**kwargs: object) -> RawMessage:
    defaults: dict = {"message_id": "MSG1", "sender": "K1ABC"}
    defaults.update(kwargs)
    return RawMessage(**defaults)


class TestPlainParser:
    def test_keeps_body(self) -> None:
        message = _make_message(subject="Hello", plain_content="Just saying hi")
        result = PlainParser(ParserContext()).parse(message)

        assert isinstance(result, PlainMessage)
        assert result.content == "Just saying hi"
        assert result.message_type is MessageType.PLAIN
        assert result.message is message


class TestUnsupportedParser:
    def test_rejects_with_sorted_form_names(self) -> None:
        message = _make_message(
            attachments={
                "RMS_Express_Form_Zeta_Viewer.xml": b"<x/>",
                "photo.jpg": b"\xff\xd8",
                "RMS_Express_Form_Alpha_Viewer.xml": b"<x/>",
            }
        )
        result = UnsupportedParser(ParserContext()).parse(message)

        assert isinstance(result, RejectionMessage)
        assert result.reason is RejectType.UNSUPPORTED_TYPE
        assert result.context == "RMS_Express_Form_Alpha_Viewer.xml, RMS_Express_Form_Zeta_Viewer.xml"


class TestParsersNeverRaise:
    @pytest.mark.parametrize("parser_cls", [WaEyewarnParser, HospitalBedParser, Ics309Parser, WaIsnapParser])
    def test_missing_attachment_is_processing_error(self, parser_cls: type[BaseParser]) -> None:
        result = parser_cls(ParserContext()).parse(_make_message(subject="garbage"))

        assert isinstance(result, RejectionMessage)
        assert result.reason is RejectType.PROCESSING_ERROR
        assert "no attachment named" in result.context

    @pytest.mark.parametrize(
        "parser_cls",
        [WaEyewarnParser, HospitalBedParser, Ics213Parser, Ics309Parser, WaIsnapParser],
    )
    def test_unparseable_attachment_is_processing_error(self, parser_cls: type[BaseParser]) -> None:
        name = parser_cls.MESSAGE_TYPE.attachment_name
        result = parser_cls(ParserContext()).parse(_make_message(attachments={name: b"not xml at all"}))

        assert isinstance(result, RejectionMessage)
        assert result.reason is RejectType.PROCESSING_ERROR
        assert result.context

    @pytest.mark.parametrize("content", [b"", b"\x00\xff\xfe\x01binary", b"<RMS_Express_Form><variables><a>"])
    def test_empty_or_binary_attachment_is_processing_error(self, content: bytes) -> None:
        message = _make_message(attachments={MessageType.HOSPITAL_BED.attachment_name: content})
        result = HospitalBedParser(ParserContext()).parse(message)

        assert isinstance(result, RejectionMessage)
        assert result.reason is RejectType.PROCESSING_ERROR
