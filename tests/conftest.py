"""
Shared fixtures: Flask test client and in-memory PDFs.
"""

import pytest
import fitz  # PyMuPDF


@pytest.fixture
def client():
    from pdfmath.app import app
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


@pytest.fixture
def make_pdf():
    """Build a PDF with one labelled page per entry in ``widths``."""
    def _make(widths=(595,)):
        doc = fitz.open()
        for i, width in enumerate(widths):
            page = doc.new_page(width=width, height=842)
            page.insert_text((72, 72), f"Page {i + 1}", fontsize=24)
        data = doc.tobytes()
        doc.close()
        return data
    return _make
