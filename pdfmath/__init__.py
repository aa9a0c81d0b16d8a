"""
pdfmath
=======

Small conversion service for documents with LaTeX-style math:

- PDF pages -> PNG images
- text with \\( inline \\) and \\[ block \\] math -> JPEG
- the same text -> paginated PDF
"""

__version__ = "0.1.0"

from .segmenter import Span, SpanKind, segment
from .image_layout import layout_image, render_image
from .pdf_layout import layout_document, render_document
from .rasterize import rasterize

__all__ = [
    "Span", "SpanKind", "segment",
    "layout_image", "render_image",
    "layout_document", "render_document",
    "rasterize",
]
