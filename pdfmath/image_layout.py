"""
Text -> JPEG rendering.

The text is segmented, laid out line by line onto a fixed-width canvas,
described as SVG and rasterized with PyMuPDF. Pillow encodes the JPEG.
Math is not typeset: it is drawn as a plain string in the accent colour.
"""

import io
import logging
from dataclasses import dataclass, field
from typing import List, Optional
from xml.sax.saxutils import escape

import fitz  # PyMuPDF
from PIL import Image

from .config import ImageOptions
from .errors import RenderError
from .formatting import Run, tokenize_bold
from .segmenter import SpanKind, segment

logger = logging.getLogger(__name__)

MEASURE_FONT = "helv"
MEASURE_FONT_BOLD = "hebo"
BLOCK_MATH_SIZE_BUMP = 2


@dataclass
class DrawItem:
    x: float
    y: float
    runs: List[Run]
    font_size: float
    color: str
    kind: SpanKind = SpanKind.PLAIN_TEXT

    @property
    def text(self) -> str:
        return "".join(r.text for r in self.runs)


@dataclass
class ImageLayout:
    width: float
    height: float
    cursor_y: float
    items: List[DrawItem] = field(default_factory=list)
    background: str = "white"
    font_family: str = "sans-serif"


def text_width(runs: List[Run], font_size: float) -> float:
    return sum(
        fitz.get_text_length(r.text, fontname=MEASURE_FONT_BOLD if r.bold else MEASURE_FONT, fontsize=font_size)
        for r in runs
    )


def layout_image(text: str, options: Optional[ImageOptions] = None) -> ImageLayout:
    opts = options or ImageOptions()
    line_height = opts.line_height
    y = opts.padding + opts.font_size
    items: List[DrawItem] = []

    for span in segment(text):
        if span.kind is SpanKind.BLOCK_MATH:
            size = opts.font_size + BLOCK_MATH_SIZE_BUMP
            runs = [Run(span.content)]
            y += line_height * 0.5
            x = (opts.width - text_width(runs, size)) / 2
            item = DrawItem(x, y, runs, size, opts.accent_color, span.kind)
            logger.debug("Block math %r centred at x=%.1f", item.text, x)
            items.append(item)
            y += line_height * 2
        elif span.kind is SpanKind.INLINE_MATH:
            items.append(DrawItem(opts.padding, y, [Run(span.content)], opts.font_size,
                                  opts.accent_color, span.kind))
            y += line_height
        else:
            for line in span.content.split("\n"):
                if line.strip():
                    items.append(DrawItem(opts.padding, y, tokenize_bold(line), opts.font_size,
                                          opts.text_color, span.kind))
                y += line_height

    height = max(opts.height, y + opts.padding)
    return ImageLayout(opts.width, height, y, items, opts.background, opts.font_family)


def _svg_runs(runs: List[Run]) -> str:
    out = []
    for r in runs:
        if r.bold:
            out.append(f'<tspan font-weight="bold">{escape(r.text)}</tspan>')
        else:
            out.append(escape(r.text))
    return "".join(out)


def to_svg(layout: ImageLayout) -> str:
    """Vector description of the layout: a background rect plus one <text> per item."""
    w, h = int(round(layout.width)), int(round(layout.height))
    body = "\n  ".join(
        f'<text x="{item.x:.2f}" y="{item.y:.2f}" fill="{item.color}" font-size="{item.font_size:g}" '
        f'font-family="{layout.font_family}">{_svg_runs(item.runs)}</text>'
        for item in layout.items
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<svg width="{w}" height="{h}" xmlns="http://www.w3.org/2000/svg">\n'
        f'  <rect width="{w}" height="{h}" fill="{layout.background}"/>\n'
        f'  {body}\n'
        '</svg>'
    )


def rasterize_svg(svg: str, quality: int = 95) -> bytes:
    with fitz.open(stream=svg.encode("utf-8"), filetype="svg") as doc:
        pix = doc[0].get_pixmap(alpha=False)
        img = Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
    buffer = io.BytesIO()
    img.save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()


def render_image(text: str, options: Optional[ImageOptions] = None) -> bytes:
    opts = options or ImageOptions()
    layout = layout_image(text, opts)
    logger.debug("Image layout: %d items, canvas %sx%s", len(layout.items), layout.width, layout.height)
    try:
        return rasterize_svg(to_svg(layout), quality=opts.jpeg_quality)
    except Exception as e:
        raise RenderError("Failed to generate JPG", details=str(e)) from e
