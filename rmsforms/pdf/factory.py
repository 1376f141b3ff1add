from rmsforms.config.settings import Settings
from rmsforms.logging.logger import Log
from rmsforms.pdf.base import BasePdfExtractor
from rmsforms.pdf.pdfplumber_adapter import PdfPlumberAdapter
from rmsforms.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Creates the PDF text extractor handed to parsers through the context."""

    ADAPTERS: dict[str, type[BasePdfExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        engine = settings.pdf_engine.strip().lower()
        try:
            adapter_cls = cls.ADAPTERS[engine]
        except KeyError:
            raise ValueError(f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}") from None
        Log.debug(f"Using {adapter_cls.__name__} for PDF attachments")
        return adapter_cls()
