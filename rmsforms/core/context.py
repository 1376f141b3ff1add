from dataclasses import dataclass, field

from rmsforms.core.form_data import FormDataIndex
from rmsforms.messages.base import RawMessage
from rmsforms.pdf.base import BasePdfExtractor


@dataclass(frozen=True)
class ParserContext:
    """Shared read-only state handed to the classifier and every parser at start-up."""

    filter_ids: frozenset[str] = frozenset()
    strict_parsing: bool = False
    form_data: FormDataIndex | None = field(default=None, compare=False)
    pdf_extractor: BasePdfExtractor | None = field(default=None, compare=False)

    def is_flagged(self, message: RawMessage) -> bool:
        """True when the message id or sender is one the operator asked to watch."""
        return message.message_id in self.filter_ids or message.sender in self.filter_ids
