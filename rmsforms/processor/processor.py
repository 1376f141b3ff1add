import dataclasses
from collections import Counter
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from rmsforms.classifier.classifier import Classifier
from rmsforms.config.settings import Settings
from rmsforms.core.context import ParserContext
from rmsforms.core.form_data import FormDataIndex
from rmsforms.core.message_type import MessageType
from rmsforms.core.reject_type import RejectType
from rmsforms.logging.logger import Log
from rmsforms.messages.base import ParseResult, RawMessage, RejectionMessage, TypedMessage
from rmsforms.parsers.registry import ParserRegistry
from rmsforms.pdf.factory import PdfExtractorFactory
from rmsforms.toolkit.exceptions import MimeDecodeError
from rmsforms.toolkit.mime import decode_mime

ProcessedMessages = dict[MessageType, list[ParseResult]]


class Processor:
    """Classifies and extracts a batch of raw messages.

    Per message: decode MIME if needed -> classify -> dispatch to the type's
    parser -> emit the result and any detail records. Output is bucketed by
    message type, with rejections under ``REJECTS``.
    """

    def __init__(
        self,
        context: ParserContext,
        classifier: Classifier,
        registry: ParserRegistry,
        max_workers: int = 1,
    ) -> None:
        self._context = context
        self._classifier = classifier
        self._registry = registry
        self._max_workers = max(1, max_workers)

    def process(self, messages: Sequence[RawMessage]) -> ProcessedMessages:
        """Classify and extract every message.

        Buckets appear in the order their type was first produced and each
        bucket keeps input order, whether or not a worker pool is used.
        """
        Log.info(f"Processing {len(messages)} messages with {self._max_workers} worker(s)")

        if self._max_workers > 1:
            with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
                per_message = list(executor.map(self.process_one, messages))
        else:
            per_message = [self.process_one(message) for message in messages]

        results: ProcessedMessages = {}
        for records in per_message:
            for record in records:
                results.setdefault(record.message_type, []).append(record)

        counts = Counter({message_type: len(records) for message_type, records in results.items()})
        for message_type, count in counts.items():
            Log.info(f"{message_type}: {count}")
        return results

    def process_one(self, message: RawMessage) -> list[ParseResult]:
        """The primary result for one message followed by its detail records."""
        if self._context.is_flagged(message):
            Log.flagged(f"processing {message.message_id} from {message.sender}: {message.subject}")

        if message.needs_decoding:
            try:
                decoded = decode_mime(message.mime)
            except MimeDecodeError as exc:
                return [self._reject(message, RejectType.CANT_PARSE_MIME, str(exc))]
            message = dataclasses.replace(
                message, plain_content=decoded.plain_content, attachments=decoded.attachments
            )

        message_type = self._classifier.classify(message)
        parser = self._registry.get(message_type)
        if parser is None:
            return [self._reject(message, RejectType.UNSUPPORTED_TYPE, f"no parser for {message_type}")]

        result = parser.parse(message)
        if isinstance(result, TypedMessage) and result.message_type != message_type:
            return [
                self._reject(
                    message,
                    RejectType.WRONG_MESSAGE_TYPE,
                    f"expected {message_type}, got {result.message_type}",
                )
            ]
        if isinstance(result, RejectionMessage):
            Log.debug(f"Rejected {message.message_id} from {message.sender}: {result.reason} {result.context}")

        return [result, *result.detail_records()]

    @staticmethod
    def _reject(message: RawMessage, reason: RejectType, context: str) -> RejectionMessage:
        Log.debug(f"Rejected {message.message_id} from {message.sender}: {reason} {context}")
        return RejectionMessage(message=message, reason=reason, context=context)


def build_processor(settings: Settings, form_data: FormDataIndex | None = None) -> Processor:
    """Build a Processor with its context, classifier and parser registry."""
    context = ParserContext(
        filter_ids=settings.filter_id_set,
        strict_parsing=settings.strict_parsing,
        form_data=form_data,
        pdf_extractor=PdfExtractorFactory.create(settings),
    )
    return Processor(
        context=context,
        classifier=Classifier(context),
        registry=ParserRegistry.create(context),
        max_workers=settings.max_workers,
    )


def classify_messages(messages: Sequence[RawMessage], settings: Settings | None = None) -> ProcessedMessages:
    """Entry point: configure logging, index FormData side channels, process the batch."""
    settings = settings or Settings()
    Log.configure(settings.log_level)
    processor = build_processor(settings, FormDataIndex.from_messages(messages))
    return processor.process(messages)
