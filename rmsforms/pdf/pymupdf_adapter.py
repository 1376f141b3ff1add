import pymupdf

from rmsforms.logging.logger import Log
from rmsforms.pdf.base import BasePdfExtractor
from rmsforms.pdf.exceptions import PdfExtractionError


class PyMuPdfAdapter(BasePdfExtractor):
    """Reads form text from PDF attachments using PyMuPDF, in reading order."""

    def extract_pages(self, pdf_bytes: bytes) -> list[str]:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text("text", sort=True).strip() for page in doc]
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf extraction failed: {exc}") from exc
        Log.debug(f"pymupdf read {len(pages)} page(s) from {len(pdf_bytes)} bytes")
        return pages
