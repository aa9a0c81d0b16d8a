"""
Tests for text/math segmentation.
"""

from pdfmath.segmenter import Span, SpanKind, segment


class TestSegment:
    """Splitting text into plain and math spans."""

    def test_plain_text_only(self):
        assert segment("just words") == [Span(SpanKind.PLAIN_TEXT, "just words")]

    def test_block_math(self):
        spans = segment("Formula: \\[ x = 1 \\]")

        assert spans == [
            Span(SpanKind.PLAIN_TEXT, "Formula: "),
            Span(SpanKind.BLOCK_MATH, "x = 1"),
        ]

    def test_inline_math_is_trimmed(self):
        spans = segment("\\(   E = mc^2  \\)")

        assert spans == [Span(SpanKind.INLINE_MATH, "E = mc^2")]

    def test_block_math_spans_newlines(self):
        spans = segment("\\[\n  a + b\n  = c\n\\]")

        assert len(spans) == 1
        assert spans[0].kind is SpanKind.BLOCK_MATH
        assert spans[0].content == "a + b\n  = c"

    def test_shortest_match(self):
        spans = segment("\\( a \\) and \\( b \\)")

        assert [s.kind for s in spans] == [
            SpanKind.INLINE_MATH, SpanKind.PLAIN_TEXT, SpanKind.INLINE_MATH,
        ]
        assert [s.content for s in spans] == ["a", " and ", "b"]

    def test_whitespace_only_pieces_dropped(self):
        spans = segment("\\[ a \\]\n  \n\\[ b \\]")

        assert spans == [Span(SpanKind.BLOCK_MATH, "a"), Span(SpanKind.BLOCK_MATH, "b")]

    def test_plain_text_kept_verbatim(self):
        spans = segment("  leading\nand trailing  \\( x \\)")

        assert spans[0].content == "  leading\nand trailing  "

    def test_empty_input(self):
        assert segment("") == []
        assert segment("   \n ") == []


class TestMalformedMarkup:
    """Unterminated delimiters stay literal."""

    def test_unterminated_block(self):
        text = "start \\[ x = 1 and nothing closes it"
        spans = segment(text)

        assert not any(s.kind is SpanKind.BLOCK_MATH for s in spans)
        assert spans == [Span(SpanKind.PLAIN_TEXT, text)]
        assert "\\[" in spans[0].content

    def test_unterminated_inline_before_block(self):
        spans = segment("\\( a \\[ b \\]")

        assert spans == [
            Span(SpanKind.PLAIN_TEXT, "\\( a "),
            Span(SpanKind.BLOCK_MATH, "b"),
        ]

    def test_mismatched_closers(self):
        spans = segment("\\[ a \\)")

        assert spans == [Span(SpanKind.PLAIN_TEXT, "\\[ a \\)")]


class TestRoundTrip:

    def test_sources_rebuild_input(self):
        """Concatenated delimited forms reproduce balanced input."""
        text = "Intro \\( a+b \\) then\n\\[ c = d \\]\nend"
        spans = segment(text)

        assert "".join(s.source() for s in spans) == text

    def test_is_math(self):
        block, plain = segment("\\[ x \\] tail")

        assert block.is_math
        assert not plain.is_math
