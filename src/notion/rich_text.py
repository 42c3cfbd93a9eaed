"""Inline rich text to Markdown."""

from typing import Iterable

from .types import RichTextSpan


def render_span(span: RichTextSpan) -> str:
    # Wrapping order is fixed: code innermost, then strike, italic, bold, link.
    content = span.plain_text
    if span.code:
        content = f"`{content}`"
    if span.strikethrough:
        content = f"~~{content}~~"
    if span.italic:
        content = f"*{content}*"
    if span.bold:
        content = f"**{content}**"
    if span.href:
        content = f"[{content}]({span.href})"
    return content


def render_rich_text(spans: Iterable[RichTextSpan]) -> str:
    """Render spans to Markdown, concatenated with no separator."""
    return "".join(render_span(span) for span in spans)
