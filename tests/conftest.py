import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

LINE_HEIGHT = 18


def _pdf(pages: list[list[str]]) -> bytes:
    """Render one PDF page per entry, each line drawn top-down at the left margin."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for lines in pages:
        y = 720
        for line in lines:
            c.drawString(72, y, line)
            y -= LINE_HEIGHT
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    return _pdf([["Hello PDF World"]])


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    return _pdf([["Page one content"], ["Page two content"]])


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """A single blank page."""
    return _pdf([[]])


def _ics309_pdf(rows: list[str]) -> bytes:
    header = [
        "COMMUNICATIONS LOG: County ARES",
        "Incident Name: Winter Storm",
        "Task #: 42",
        "Radio Operator: Jane Smith",
        "Station ID: K1ABC",
    ]
    return _pdf([header + rows])


@pytest.fixture()
def ics309_pdf_bytes() -> bytes:
    """A printed ICS-309 log with a header and two activity rows."""
    return _ics309_pdf(["1200 K1ABC W2XYZ Net opened", "1215 W2XYZ K1ABC Traffic passed"])


@pytest.fixture()
def ics309_second_pdf_bytes() -> bytes:
    """A continuation page of the same log with one more activity row."""
    return _ics309_pdf(["1300 K1ABC N3DEF Net closed"])
