from notion.rich_text import render_rich_text
from notion.types import RichTextSpan, spans_from_api


def test_empty_sequence_renders_empty_string():
    assert render_rich_text([]) == ""


def test_plain_spans_concatenate_without_separator():
    spans = [RichTextSpan("Hello"), RichTextSpan(", "), RichTextSpan("world")]
    assert render_rich_text(spans) == "Hello, world"


def test_code_is_innermost_then_italic_then_bold():
    span = RichTextSpan("x", bold=True, italic=True, code=True)
    assert render_rich_text([span]) == "***`x`***"


def test_strikethrough_sits_between_code_and_italic():
    span = RichTextSpan("x", italic=True, strikethrough=True, code=True)
    assert render_rich_text([span]) == "*~~`x`~~*"


def test_bold_strikethrough():
    assert render_rich_text([RichTextSpan("gone", bold=True, strikethrough=True)]) == "**~~gone~~**"


def test_link_wraps_styled_text_outermost():
    span = RichTextSpan("docs", bold=True, href="https://example.com")
    assert render_rich_text([span]) == "[**docs**](https://example.com)"


def test_from_api_tolerates_missing_annotations():
    spans = spans_from_api(
        [
            {"plain_text": "a"},
            {"plain_text": "b", "annotations": {"bold": True}, "href": None},
            {"plain_text": "c", "annotations": {"italic": True}, "href": "https://c.dev"},
        ]
    )
    assert spans[0] == RichTextSpan("a")
    assert render_rich_text(spans) == "a**b**[*c*](https://c.dev)"


def test_from_api_none_is_empty():
    assert spans_from_api(None) == []
