import json
from unittest.mock import MagicMock, patch

import pytest

from rmsforms.classifier.classifier import Classifier
from rmsforms.config.settings import Settings
from rmsforms.core.context import ParserContext
from rmsforms.core.form_data import FormDataIndex
from rmsforms.core.message_type import FORM_DATA_ATTACHMENT, MessageType
from rmsforms.core.reject_type import RejectType
from rmsforms.messages.base import PlainMessage, RawMessage, RejectionMessage
from rmsforms.messages.situation import EyeWarnDetailMessage, EyeWarnMessage
from rmsforms.messages.washington import WaEyewarnMessage
from rmsforms.parsers.registry import ParserRegistry
from rmsforms.pdf.pymupdf_adapter import PyMuPdfAdapter
from rmsforms.processor.processor import Processor, build_processor, classify_messages

WA_EYEWARN = MessageType.WA_EYEWARN.attachment_name

EYEWARN_JSON = {
    "reports": {
        "redReports": [{"date": "2024-03-04T12:30:00Z", "time": "2024-03-04T12:30:00Z", "data": "Bridge out"}],
        "yellowReports": [{"date": "2024-03-04T13:00:00Z", "time": "2024-03-04T13:05:00Z", "data": "Tree down"}],
    }
}


def _viewer(tags: dict[str, str]) -> bytes:
    body = "".join(f"<{tag}>{value}</{tag}>" for tag, value in tags.items())
    return f"<RMS_Express_Form><variables>{body}</variables></RMS_Express_Form>".encode()


def _plain(message_id: str = "P1", sender: str = "K1ABC") -> RawMessage:
    return RawMessage(message_id=message_id, sender=sender, subject="Hello", plain_content="Just saying hi")


def _wa_eyewarn(message_id: str = "W1") -> RawMessage:
    return RawMessage(
        message_id=message_id,
        sender="W7XYZ",
        subject="EyeWarn",
        attachments={WA_EYEWARN: _viewer({"ncs": "W7XYZ", "chkins": "9"})},
    )


def _wa_field_situation_without_location(message_id: str = "F1") -> RawMessage:
    return RawMessage(
        message_id=message_id,
        sender="N3DEF",
        attachments={MessageType.WA_FIELD_SITUATION.attachment_name: _viewer({"msgto": "EOC"})},
    )


def _eyewarn(message_id: str = "E1") -> RawMessage:
    document = (
        "<RMS_Express_Form><variables>"
        "<form-ncs>K1ABC</form-ncs>"
        f"<parseme>{json.dumps(EYEWARN_JSON)}</parseme>"
        "<template-version>EyeWarn 2.0</template-version>"
        "</variables></RMS_Express_Form>"
    ).encode()
    return RawMessage(
        message_id=message_id, sender="K1ABC", attachments={MessageType.EYEWARN.attachment_name: document}
    )


def _mime_message(message_id: str = "M1") -> RawMessage:
    mime = (
        "MIME-Version: 1.0\n"
        "Subject: EyeWarn\n"
        'Content-Type: multipart/mixed; boundary="XYZ"\n'
        "\n"
        "--XYZ\n"
        "Content-Type: text/plain\n"
        "\n"
        "see attached\n"
        "--XYZ\n"
        "Content-Type: application/xml\n"
        f'Content-Disposition: attachment; filename="{WA_EYEWARN}"\n'
        "\n"
        f"{_viewer({'ncs': 'W7XYZ', 'chkins': '4'}).decode()}\n"
        "--XYZ--\n"
    )
    return RawMessage(message_id=message_id, sender="W7XYZ", subject="EyeWarn", mime=mime)


def _make_processor(context: ParserContext | None = None, max_workers: int = 1) -> Processor:
    context = context or ParserContext()
    return Processor(context, Classifier(context), ParserRegistry.create(context), max_workers=max_workers)


class TestProcessorBuckets:
    def test_buckets_in_first_produced_order(self) -> None:
        messages = [_wa_eyewarn(), _plain("P1"), _wa_field_situation_without_location(), _plain("P2")]

        results = _make_processor().process(messages)

        assert list(results) == [MessageType.WA_EYEWARN, MessageType.PLAIN, MessageType.REJECTS]
        assert [r.message_id for r in results[MessageType.PLAIN]] == ["P1", "P2"]
        assert isinstance(results[MessageType.WA_EYEWARN][0], WaEyewarnMessage)

    def test_rejections_go_to_rejects(self) -> None:
        results = _make_processor().process([_wa_field_situation_without_location()])

        [rejection] = results[MessageType.REJECTS]
        assert isinstance(rejection, RejectionMessage)
        assert rejection.reason is RejectType.CANT_PARSE_LATLONG
        assert rejection.message_id == "F1"

    def test_detail_records_follow_their_parent(self) -> None:
        results = _make_processor().process([_eyewarn()])

        [summary] = results[MessageType.EYEWARN]
        details = results[MessageType.EYEWARN_DETAIL]
        assert isinstance(summary, EyeWarnMessage)
        assert len(details) == 2
        assert all(isinstance(d, EyeWarnDetailMessage) for d in details)
        assert all(d.parent is summary for d in details)

    def test_empty_batch(self) -> None:
        assert _make_processor().process([]) == {}

    def test_worker_pool_matches_sequential_result(self) -> None:
        messages = [
            _wa_eyewarn("W1"),
            _plain("P1"),
            _eyewarn("E1"),
            _wa_field_situation_without_location("F1"),
            _plain("P2"),
            _wa_eyewarn("W2"),
        ]

        sequential = _make_processor().process(messages)
        threaded = _make_processor(max_workers=4).process(messages)

        assert list(threaded) == list(sequential)
        assert threaded == sequential


class TestProcessOne:
    def test_decodes_mime_before_classifying(self) -> None:
        message = _mime_message()
        assert message.needs_decoding

        [result] = _make_processor().process_one(message)

        assert isinstance(result, WaEyewarnMessage)
        assert result.total_check_ins == "4"
        assert result.message.plain_content.strip() == "see attached"
        assert WA_EYEWARN in result.message.attachments
        assert message.attachments == {}

    def test_undecodable_mime_is_rejected(self) -> None:
        message = RawMessage(message_id="M2", sender="K1ABC", mime="   \n")

        [result] = _make_processor().process_one(message)

        assert isinstance(result, RejectionMessage)
        assert result.reason is RejectType.CANT_PARSE_MIME
        assert "empty" in result.context

    def test_message_with_content_is_not_redecoded(self) -> None:
        message = RawMessage(message_id="P3", sender="K1ABC", mime="   \n", plain_content="hello there")

        [result] = _make_processor().process_one(message)

        assert isinstance(result, PlainMessage)
        assert result.content == "hello there"

    def test_parser_returning_another_type_is_rejected(self) -> None:
        context = ParserContext()
        parser = MagicMock()
        parser.parse.side_effect = lambda message: PlainMessage(message, content="")
        registry = MagicMock(spec=ParserRegistry)
        registry.get.return_value = parser
        processor = Processor(context, Classifier(context), registry)

        [result] = processor.process_one(_wa_eyewarn())

        assert isinstance(result, RejectionMessage)
        assert result.reason is RejectType.WRONG_MESSAGE_TYPE
        assert result.context == "expected wa_eyewarn, got plain"
        registry.get.assert_called_once_with(MessageType.WA_EYEWARN)

    def test_type_without_parser_is_unsupported(self) -> None:
        context = ParserContext()
        processor = Processor(context, Classifier(context), ParserRegistry({}))

        [result] = processor.process_one(_plain())

        assert isinstance(result, RejectionMessage)
        assert result.reason is RejectType.UNSUPPORTED_TYPE
        assert result.context == "no parser for plain"

    @patch("rmsforms.processor.processor.Log")
    def test_flagged_message_is_logged(self, mock_log: MagicMock) -> None:
        processor = _make_processor(ParserContext(filter_ids=frozenset({"K1ABC"})))

        processor.process_one(_plain("P9", sender="K1ABC"))
        processor.process_one(_plain("P10", sender="N0ONE"))

        flagged = [call.args[0] for call in mock_log.flagged.call_args_list]
        assert len(flagged) == 1
        assert "P9" in flagged[0]


class TestBuildProcessor:
    def test_wires_settings_into_context(self) -> None:
        settings = Settings(pdf_engine="pymupdf", strict_parsing=True, filter_ids="K1ABC, W7XYZ", max_workers=3)
        form_data = FormDataIndex()

        processor = build_processor(settings, form_data)

        assert processor._max_workers == 3
        assert processor._context.strict_parsing is True
        assert processor._context.filter_ids == frozenset({"K1ABC", "W7XYZ"})
        assert processor._context.form_data is form_data
        assert isinstance(processor._context.pdf_extractor, PyMuPdfAdapter)

    def test_unknown_pdf_engine_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown PDF engine"):
            build_processor(Settings(pdf_engine="ghostscript"))


class TestClassifyMessages:
    def test_processes_batch_with_settings(self) -> None:
        results = classify_messages([_plain("P1"), _wa_eyewarn("W1")], Settings())

        assert list(results) == [MessageType.PLAIN, MessageType.WA_EYEWARN]

    @patch("rmsforms.processor.processor.build_processor")
    def test_indexes_form_data_from_batch(self, mock_build: MagicMock) -> None:
        with_form_data = RawMessage(
            message_id="C1",
            sender="K1ABC",
            attachments={FORM_DATA_ATTACHMENT: b"MapFileName=Winlink_Check_In.html\nLatitude=47.6\n"},
        )
        settings = Settings()

        classify_messages([with_form_data, _plain("P1")], settings)

        mock_build.assert_called_once()
        called_settings, index = mock_build.call_args.args
        assert called_settings is settings
        assert ("K1ABC", "C1") in index
        assert ("K1ABC", "P1") not in index
        mock_build.return_value.process.assert_called_once()
