"""PDF -> page images via PyMuPDF."""

import base64
import logging
from typing import Iterator, List

import fitz  # PyMuPDF

from .errors import PdfProcessingError

logger = logging.getLogger(__name__)

DEFAULT_SCALE = 2.0


def iter_page_images(pdf_bytes: bytes, scale: float = DEFAULT_SCALE) -> Iterator[bytes]:
    """Yield PNG bytes for each page, in page order.

    Pages are rendered lazily as the generator is consumed.
    """
    matrix = fitz.Matrix(scale, scale)
    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        for page in doc:
            pix = page.get_pixmap(matrix=matrix, alpha=False)
            yield pix.tobytes("png")


def to_data_uri(png_bytes: bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(png_bytes).decode("ascii")


def rasterize(pdf_bytes: bytes, scale: float = DEFAULT_SCALE) -> List[str]:
    images = []
    try:
        for png in iter_page_images(pdf_bytes, scale=scale):
            images.append(to_data_uri(png))
    except Exception as e:
        logger.exception("PDF processing error")
        raise PdfProcessingError(details=str(e)) from e
    logger.info("Rasterized %d page(s) at scale %.1f", len(images), scale)
    return images
