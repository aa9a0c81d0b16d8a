"""
Text -> paginated PDF rendering.

Plain text is wrapped to the page width with bullet and ``*bold*`` handling,
math spans are written as coloured strings. A page break is checked before
every drawn line.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import fitz  # PyMuPDF

from .config import PdfOptions
from .errors import RenderError
from .formatting import BULLET, has_bold, prepare_text_for_pdf, tokenize_bold
from .segmenter import Span, SpanKind, segment

logger = logging.getLogger(__name__)

FONT_NORMAL = "helv"
FONT_BOLD = "hebo"


@dataclass(frozen=True)
class TextOp:
    page: int
    x: float
    y: float
    text: str
    bold: bool
    font_size: float
    color: Tuple[int, int, int]


@dataclass
class LayoutCursor:
    y: float
    page: int = 1


class PdfCanvas:
    """Minimal drawing surface over a PyMuPDF document.

    Keeps the current font weight, size and colour like a pen, and records
    every string it writes in ``ops``.
    """

    def __init__(self, page_format: str = "a4", font_size: float = 12):
        self.doc = fitz.open()
        self.page_width, self.page_height = fitz.paper_size(page_format)
        self.font_size = font_size
        self.bold = False
        self.color = (0, 0, 0)
        self.ops: List[TextOp] = []
        self._page = None
        self.add_page()

    @property
    def page_count(self) -> int:
        return self.doc.page_count

    def add_page(self):
        self._page = self.doc.new_page(width=self.page_width, height=self.page_height)

    def set_font(self, bold: bool = False):
        self.bold = bold

    def set_font_size(self, size: float):
        self.font_size = size

    def set_text_color(self, rgb: Tuple[int, int, int]):
        self.color = tuple(rgb)

    def text_width(self, s: str, bold: Optional[bool] = None) -> float:
        use_bold = self.bold if bold is None else bold
        return fitz.get_text_length(s, fontname=FONT_BOLD if use_bold else FONT_NORMAL, fontsize=self.font_size)

    def _break_word(self, word: str, max_width: float) -> List[str]:
        pieces = []
        while len(word) > 1 and self.text_width(word) > max_width:
            cut = 1
            while cut < len(word) and self.text_width(word[:cut + 1]) <= max_width:
                cut += 1
            pieces.append(word[:cut])
            word = word[cut:]
        pieces.append(word)
        return pieces

    def split_text_to_size(self, text: str, max_width: float) -> List[str]:
        """Greedy word wrap on spaces; over-long words are broken by character."""
        lines = []
        for paragraph in text.split("\n"):
            current = ""
            for word in paragraph.split(" "):
                candidate = f"{current} {word}" if current else word
                if self.text_width(candidate) <= max_width:
                    current = candidate
                    continue
                if current:
                    lines.append(current)
                pieces = self._break_word(word, max_width)
                lines.extend(pieces[:-1])
                current = pieces[-1]
            lines.append(current)
        return lines

    def text(self, s: str, x: float, y: float):
        if not s:
            return
        self._page.insert_text(
            (x, y), s,
            fontname=FONT_BOLD if self.bold else FONT_NORMAL,
            fontsize=self.font_size,
            color=tuple(c / 255.0 for c in self.color),
        )
        self.ops.append(TextOp(self.page_count, x, y, s, self.bold, self.font_size, self.color))

    def to_bytes(self) -> bytes:
        return self.doc.tobytes(garbage=3, deflate=True)

    def close(self):
        self.doc.close()


class PaginatedLayout:
    """Lays spans out onto a PdfCanvas. One instance per request."""

    def __init__(self, canvas: PdfCanvas, options: PdfOptions):
        self.canvas = canvas
        self.opts = options
        self.line_height = options.line_height
        self.max_width = canvas.page_width - options.margin * 2
        self.cursor = LayoutCursor(y=options.margin)

    def check_new_page(self):
        if self.cursor.y > self.canvas.page_height - self.opts.margin:
            self.canvas.add_page()
            self.cursor.y = self.opts.margin
            self.cursor.page += 1
            logger.debug("Starting page %d", self.cursor.page)

    def add_text_with_wrap(self, text: str, x: float, center: bool = False):
        """Wrap already-normalized text to the content width and draw it."""
        for line in self.canvas.split_text_to_size(text, self.max_width):
            self.check_new_page()
            if center:
                self.canvas.text(line, (self.canvas.page_width - self.canvas.text_width(line)) / 2, self.cursor.y)
            else:
                self.canvas.text(line, x, self.cursor.y)
            self.cursor.y += self.line_height

    def _bullet_line(self, line: str):
        margin = self.opts.margin
        indent = self.opts.bullet_indent
        self.check_new_page()
        self.canvas.text(BULLET, margin, self.cursor.y)
        rest = line[len(BULLET):].strip()
        if rest:
            wrapped = self.canvas.split_text_to_size(rest, self.max_width - indent)
            for index, sub in enumerate(wrapped):
                if index > 0:
                    self.cursor.y += self.line_height
                    self.check_new_page()
                self.canvas.text(sub, margin + indent, self.cursor.y)
        self.cursor.y += self.line_height

    def _bold_line(self, line: str):
        self.check_new_page()
        x = self.opts.margin
        for run in tokenize_bold(line):
            self.canvas.set_font(bold=run.bold)
            self.canvas.text(run.text, x, self.cursor.y)
            x += self.canvas.text_width(run.text)
        self.canvas.set_font(bold=False)
        self.cursor.y += self.line_height

    def plain_text(self, content: str):
        for raw in content.split("\n"):
            # normalizing can turn Unicode line separators into newlines
            for line in prepare_text_for_pdf(raw).split("\n"):
                self._plain_line(line)

    def _plain_line(self, line: str):
        stripped = line.strip()
        if not stripped:
            self.cursor.y += self.line_height * 0.5
        elif stripped.startswith(BULLET):
            self._bullet_line(stripped)
        elif has_bold(line):
            self._bold_line(line)
        else:
            self.add_text_with_wrap(line, self.opts.margin)

    def block_math(self, content: str):
        self.cursor.y += self.line_height * 0.5
        self.check_new_page()
        self.canvas.set_text_color(self.opts.accent_color)
        self.canvas.set_font_size(self.opts.font_size + 2)
        self.add_text_with_wrap(prepare_text_for_pdf(content), self.opts.margin, center=True)
        self.canvas.set_text_color(self.opts.text_color)
        self.canvas.set_font_size(self.opts.font_size)
        self.cursor.y += self.line_height * 0.5

    def inline_math(self, content: str):
        self.check_new_page()
        self.canvas.set_text_color(self.opts.accent_color)
        self.add_text_with_wrap(prepare_text_for_pdf(content), self.opts.margin)
        self.canvas.set_text_color(self.opts.text_color)

    def run(self, spans: List[Span]):
        for span in spans:
            if span.kind is SpanKind.BLOCK_MATH:
                self.block_math(span.content)
            elif span.kind is SpanKind.INLINE_MATH:
                self.inline_math(span.content)
            else:
                self.plain_text(span.content)
        return self.canvas


def layout_document(text: str, options: Optional[PdfOptions] = None) -> PdfCanvas:
    opts = options or PdfOptions()
    canvas = PdfCanvas(opts.page_format, opts.font_size)
    try:
        PaginatedLayout(canvas, opts).run(segment(text))
    except Exception:
        canvas.close()
        raise
    return canvas


def render_document(text: str, options: Optional[PdfOptions] = None) -> bytes:
    try:
        canvas = layout_document(text, options)
        try:
            data = canvas.to_bytes()
        finally:
            canvas.close()
    except Exception as e:
        raise RenderError("Failed to generate PDF", details=str(e)) from e
    logger.debug("Rendered PDF: %d bytes", len(data))
    return data
