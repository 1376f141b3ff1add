import io

import pdfplumber

from rmsforms.logging.logger import Log
from rmsforms.pdf.base import BasePdfExtractor
from rmsforms.pdf.exceptions import PdfExtractionError


class PdfPlumberAdapter(BasePdfExtractor):
    """Reads form text from PDF attachments using pdfplumber.

    A tight horizontal tolerance keeps adjacent log columns (time, from, to)
    as separate words.
    """

    X_TOLERANCE = 1.5

    def extract_pages(self, pdf_bytes: bytes) -> list[str]:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [(page.extract_text(x_tolerance=self.X_TOLERANCE) or "").strip() for page in pdf.pages]
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber extraction failed: {exc}") from exc
        Log.debug(f"pdfplumber read {len(pages)} page(s) from {len(pdf_bytes)} bytes")
        return pages
