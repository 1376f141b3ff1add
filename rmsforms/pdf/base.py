import re
from abc import ABC, abstractmethod

PDF_MAGIC = b"%PDF-"

_RUNS_OF_SPACE = re.compile(r"[ \t\u00a0]+")


def is_pdf(content: bytes | None) -> bool:
    """True when the bytes open with a ``%PDF-x.y`` header line."""
    if not content or not content.startswith(PDF_MAGIC):
        return False
    header = content.split(b"\n", 1)[0].split(b"\r", 1)[0]
    return len(header) < 16


class BasePdfExtractor(ABC):
    """Contract for the adapters that read printed forms out of PDF attachments."""

    @abstractmethod
    def extract_pages(self, pdf_bytes: bytes) -> list[str]:
        """Extract the text of each page of a PDF attachment.

        Args:
            pdf_bytes: Raw PDF attachment content.

        Returns:
            One string per page, in page order.

        Raises:
            PdfExtractionError: if extraction fails for any reason.
        """

    def extract(self, pdf_bytes: bytes) -> str:
        return "\n".join(self.extract_pages(pdf_bytes)).strip()

    def extract_lines(self, pdf_bytes: bytes) -> list[str]:
        """Non-blank text lines across all pages, with runs of spaces collapsed.

        Printed form rows come out with column padding; collapsing it lets
        callers match rows with simple token patterns.
        """
        lines = []
        for page in self.extract_pages(pdf_bytes):
            for line in page.splitlines():
                line = _RUNS_OF_SPACE.sub(" ", line).strip()
                if line:
                    lines.append(line)
        return lines
