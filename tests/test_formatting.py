"""
Tests for the bold tokenizer and PDF text normalization.
"""

from pdfmath.formatting import BULLET, Run, has_bold, prepare_text_for_pdf, tokenize_bold


class TestTokenizeBold:

    def test_simple_toggle(self):
        assert tokenize_bold("a *b* c") == [Run("a "), Run("b", bold=True), Run(" c")]

    def test_whole_line_bold(self):
        assert tokenize_bold("*Answer:*") == [Run("Answer:", bold=True)]

    def test_no_asterisks(self):
        assert tokenize_bold("plain") == [Run("plain")]
        assert tokenize_bold("") == []

    def test_unmatched_asterisk_is_literal(self):
        assert tokenize_bold("a * b") == [Run("a * b")]
        assert tokenize_bold("*x") == [Run("*x")]

    def test_empty_pair_is_literal(self):
        assert tokenize_bold("**") == [Run("**")]

    def test_nested_toggles_stay_one_level(self):
        """Inner asterisks close the outer run; the rest is read left to right."""
        assert tokenize_bold("*a *b* c*") == [
            Run("a ", bold=True), Run("b"), Run(" c", bold=True),
        ]

    def test_extra_asterisks_left_literal(self):
        assert tokenize_bold("***x**") == [Run("**"), Run("x", bold=True), Run("*")]

    def test_has_bold(self):
        assert has_bold("some *bold* text")
        assert not has_bold("Y* is foreign output")
        assert not has_bold("**")


class TestPrepareTextForPdf:

    def test_cjk_bracketed_individually(self):
        assert prepare_text_for_pdf("好 ok") == "[好] ok"
        assert prepare_text_for_pdf("中文abc") == "[中][文]abc"

    def test_latin_untouched(self):
        assert prepare_text_for_pdf("x = 1 [a]") == "x = 1 [a]"

    def test_zero_width_removed(self):
        assert prepare_text_for_pdf("a\u200bb\u200c\u200dc\ufeff") == "abc"

    def test_line_separators_become_newlines(self):
        assert prepare_text_for_pdf("a\u2028b\u2029c") == "a\nb\nc"

    def test_bullet_joiner_artifact(self):
        assert prepare_text_for_pdf("\u2022\u2060  item") == BULLET + " item"

    def test_plain_bullet_unchanged(self):
        assert prepare_text_for_pdf("•   item") == "•   item"
