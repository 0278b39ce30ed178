"""Tests for document assembly into markdown."""

import pytest
from helpers import doc, para

from richmark.converter.assembler import (
    RenderedParagraph,
    analyze_paragraph,
    convert,
    convert_buffer,
    render_paragraph,
)
from richmark.converter.models import ConversionState, Document, ListKind, StyledRun

BASE = 16


def _ordered(text, list_id="a", **style):
    return para(StyledRun(text=text, **style), kind=ListKind.ordered, list_id=list_id)


def _bullet(text, list_id="u", **style):
    return para(StyledRun(text=text, **style), kind=ListKind.unordered, list_id=list_id)


# ---------------------------------------------------------------------------
# Whole documents
# ---------------------------------------------------------------------------


class TestConvert:
    def test_sample_buffer(self, sample_buffer, base_size):
        assert convert_buffer(sample_buffer, base_size) == (
            "# Release notes\n\n"
            "1. Install\n\n"
            "2. Configure\n\n"
            "- Faster **startup**\n\n"
            "See the [*manual*](https://example.com/manual) for details."
        )

    def test_empty_document(self):
        assert convert(Document(), BASE) == ""

    def test_only_blank_paragraphs(self):
        assert convert(doc(para(""), para("   "), para()), BASE) == ""

    def test_paragraphs_separated_by_one_blank_line(self):
        assert convert(doc(para("One"), para("Two")), BASE) == "One\n\nTwo"

    def test_blank_paragraphs_do_not_stack(self):
        document = doc(para("One"), para(""), para(""), para("  "), para("Two"))
        assert convert(document, BASE) == "One\n\nTwo"

    def test_leading_and_trailing_blanks_trimmed(self):
        assert convert(doc(para(""), para("Body"), para("")), BASE) == "Body"

    @pytest.mark.parametrize("base", [0, -1, -12.5])
    def test_non_positive_base_rejected(self, base):
        with pytest.raises(ValueError, match="base_font_size"):
            convert(doc(para("x")), base)

    def test_newlines_inside_runs_untouched(self):
        document = doc(para(StyledRun(text="a\n\n\n\nb", bold=True)), para(""), para("c"))
        assert convert(document, BASE) == "**a\n\n\n\nb**\n\nc"

    def test_counters_do_not_leak_between_calls(self):
        document = doc(_ordered("First"))
        assert convert(document, BASE) == "1. First"
        assert convert(document, BASE) == "1. First"


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------


class TestLists:
    def test_instances_number_independently(self):
        document = doc(_ordered("1. First"), _ordered("2. Second"), _ordered("1. Other", "b"))
        assert convert(document, BASE) == "1. First\n\n2. Second\n\n1. Other"

    def test_interleaved_instances(self):
        document = doc(
            _ordered("x", "a"), _ordered("y", "b"), _ordered("z", "a"), _ordered("w", "b")
        )
        assert convert(document, BASE) == "1. x\n\n1. y\n\n2. z\n\n2. w"

    def test_numbering_resumes_after_other_paragraphs(self):
        document = doc(_ordered("x"), para("between"), _bullet("b"), _ordered("y"))
        assert convert(document, BASE) == "1. x\n\nbetween\n\n- b\n\n2. y"

    def test_source_numbers_replaced(self):
        document = doc(_ordered("7. Seven"), _ordered("9) Nine"))
        assert convert(document, BASE) == "1. Seven\n\n2. Nine"

    def test_bullets_normalised(self):
        document = doc(_bullet("• dot"), _bullet("* star"), _bullet("- dash"), _bullet("plain"))
        assert convert(document, BASE) == "- dot\n\n- star\n\n- dash\n\n- plain"

    def test_dot_bullet_without_space(self):
        assert convert(doc(_bullet("•Item")), BASE) == "- Item"

    def test_blank_list_item_takes_no_ordinal(self):
        document = doc(_ordered("x"), _ordered("  "), _ordered("y"))
        assert convert(document, BASE) == "1. x\n\n2. y"

    def test_marker_only_item_renders_empty_entry(self):
        assert convert(doc(_ordered("3.")), BASE) == "1."

    def test_marker_styles_do_not_leak(self):
        item = para(
            StyledRun(text="1. ", bold=True),
            StyledRun(text="Step"),
            kind=ListKind.ordered,
            list_id="a",
        )
        assert convert(doc(item), BASE) == "1. Step"


# ---------------------------------------------------------------------------
# Headings
# ---------------------------------------------------------------------------


class TestHeadings:
    @pytest.mark.parametrize("size, prefix", [(30, "#"), (23, "##"), (19.5, "###")])
    def test_levels(self, size, prefix):
        document = doc(para(StyledRun(text="Title", font_size=size)))
        assert convert(document, BASE) == f"{prefix} Title"

    def test_only_leading_run_counts(self):
        document = doc(para(StyledRun(text="small "), StyledRun(text="BIG", font_size=40)))
        assert convert(document, BASE) == "small BIG"

    def test_leading_whitespace_run_skipped(self):
        document = doc(para(StyledRun(text="  "), StyledRun(text="Title", font_size=30)))
        assert convert(document, BASE) == "# Title"

    def test_styles_kept_inside_heading(self):
        document = doc(para(StyledRun(text="Bold title", bold=True, font_size=30)))
        assert convert(document, BASE) == "# **Bold title**"

    def test_heading_wins_over_list(self):
        document = doc(_ordered("1. Title", font_size=26), _ordered("2. Next"))
        assert convert(document, BASE) == "# Title\n\n2. Next"

    def test_threshold_uses_base_size(self):
        document = doc(para(StyledRun(text="Title", font_size=22)))
        assert convert(document, 12) == "# Title"
        assert convert(document, 20) == "Title"


# ---------------------------------------------------------------------------
# Single paragraphs
# ---------------------------------------------------------------------------


class TestRenderParagraph:
    def test_leading_whitespace_removed(self):
        assert render_paragraph(para("   indented"), BASE, ConversionState()) == "indented"

    def test_trailing_whitespace_kept(self):
        assert render_paragraph(para("text  "), BASE, ConversionState()) == "text  "

    def test_blank_is_empty_line(self):
        assert render_paragraph(para(" \t "), BASE, ConversionState()) == ""

    def test_escaping_applied(self):
        assert render_paragraph(para("a [b] `c`"), BASE, ConversionState()) == (
            "a \\[b\\] \\`c\\`"
        )


class TestAnalyzeParagraph:
    def test_reports_classification(self):
        state = ConversionState()
        result = analyze_paragraph(_ordered("1. Item", font_size=30), BASE, state)
        assert result == RenderedParagraph("# Item", ListKind.ordered, 1, 1)
        assert not result.blank

    def test_blank(self):
        result = analyze_paragraph(_ordered(""), BASE, ConversionState())
        assert result.blank
        assert result.ordinal is None
