"""
Split raw text into plain-text and math spans.

Block math is delimited by ``\\[ ... \\]`` and inline math by ``\\( ... \\)``.
The shortest match wins and may span newlines. A delimiter without its
closing partner is never matched, so it stays in the surrounding plain text.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List

MATH_PATTERN = re.compile(r"(\\\[[\s\S]*?\\\]|\\\([\s\S]*?\\\))")

BLOCK_OPEN, BLOCK_CLOSE = "\\[", "\\]"
INLINE_OPEN, INLINE_CLOSE = "\\(", "\\)"


class SpanKind(Enum):
    PLAIN_TEXT = "text"
    INLINE_MATH = "math-inline"
    BLOCK_MATH = "math-block"


@dataclass(frozen=True)
class Span:
    kind: SpanKind
    content: str

    @property
    def is_math(self) -> bool:
        return self.kind is not SpanKind.PLAIN_TEXT

    def source(self) -> str:
        """Delimited form of the span, e.g. ``\\[ x \\]``."""
        if self.kind is SpanKind.BLOCK_MATH:
            return f"{BLOCK_OPEN} {self.content} {BLOCK_CLOSE}"
        if self.kind is SpanKind.INLINE_MATH:
            return f"{INLINE_OPEN} {self.content} {INLINE_CLOSE}"
        return self.content


def _classify(part: str) -> Span:
    if part.startswith(BLOCK_OPEN) and part.endswith(BLOCK_CLOSE):
        return Span(SpanKind.BLOCK_MATH, part[2:-2].strip())
    if part.startswith(INLINE_OPEN) and part.endswith(INLINE_CLOSE):
        return Span(SpanKind.INLINE_MATH, part[2:-2].strip())
    return Span(SpanKind.PLAIN_TEXT, part)


def segment(text: str) -> List[Span]:
    """Return the spans of ``text`` in left-to-right order.

    Whitespace-only pieces are dropped. Math content is trimmed, plain text
    is kept verbatim.
    """
    spans = []
    for part in MATH_PATTERN.split(text or ""):
        if not part.strip():
            continue
        spans.append(_classify(part))
    return spans
