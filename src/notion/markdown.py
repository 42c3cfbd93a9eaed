"""Render fetched block trees to Markdown."""

from typing import Callable, Dict, List, Optional, Sequence

from .rich_text import render_rich_text
from .types import Block, BlockType, spans_from_api

INDENT = "  "

Renderer = Callable[[Block, str], Optional[str]]


def _text(block: Block) -> str:
    return render_rich_text(block.rich_text())


def _file_url(block: Block) -> str:
    """Resolve an image/video/file/pdf source: external URL or Notion-hosted file URL."""
    if block.data.get("type") == "external":
        return (block.data.get("external") or {}).get("url", "")
    return (block.data.get("file") or {}).get("url", "")


def _labelled_link(label: str) -> Renderer:
    # Label is "<Kind>: <url>", not the bare URL, matching the video/file/pdf links.
    def render(block: Block, prefix: str) -> str:
        url = block.data.get("url", "")
        return f"[{label}: {url}]({url})"

    return render


def _hosted_link(label: str) -> Renderer:
    def render(block: Block, prefix: str) -> str:
        url = _file_url(block)
        return f"[{label}: {url}]({url})"

    return render


def _heading(marker: str) -> Renderer:
    def render(block: Block, prefix: str) -> str:
        return f"\n{marker} {_text(block)}"

    return render


def _nothing(block: Block, prefix: str) -> None:
    # Containers whose content lives entirely in their children.
    return None


def _paragraph(block: Block, prefix: str) -> str:
    return prefix + _text(block)


def _bulleted(block: Block, prefix: str) -> str:
    return f"{prefix}- {_text(block)}"


def _numbered(block: Block, prefix: str) -> str:
    # Always "1."; Markdown viewers renumber consecutive items.
    return f"{prefix}1. {_text(block)}"


def _to_do(block: Block, prefix: str) -> str:
    checkbox = "[x]" if block.data.get("checked") else "[ ]"
    return f"{prefix}- {checkbox} {_text(block)}"


def _toggle(block: Block, prefix: str) -> str:
    # Only the opening tag is written; </details> is never emitted.
    return f"{prefix}<details>\n{prefix}<summary>{_text(block)}</summary>\n"


def _code(block: Block, prefix: str) -> str:
    lang = block.data.get("language") or ""
    return f"\n```{lang}\n{_text(block)}\n```\n"


def _quote(block: Block, prefix: str) -> str:
    return f"{prefix}> {_text(block)}"


def _callout(block: Block, prefix: str) -> str:
    icon = block.data.get("icon") or {}
    emoji = f"{icon.get('emoji', '')} " if icon.get("type") == "emoji" else ""
    return f"{prefix}> {emoji}{_text(block)}"


def _image(block: Block, prefix: str) -> str:
    caption = render_rich_text(block.rich_text("caption")) or "image"
    return f"![{caption}]({_file_url(block)})"


def _equation(block: Block, prefix: str) -> str:
    return f"${block.data.get('expression', '')}$"


def _table_row(block: Block, prefix: str) -> str:
    cells = [render_rich_text(spans_from_api(cell)) for cell in block.data.get("cells", [])]
    return f"| {' | '.join(cells)} |"


def _child_page(block: Block, prefix: str) -> str:
    return f"📄 **{block.data.get('title', '')}**"


def _child_database(block: Block, prefix: str) -> str:
    return f"📊 **{block.data.get('title', '')}**"


RENDERERS: Dict[BlockType, Renderer] = {
    BlockType.PARAGRAPH: _paragraph,
    BlockType.HEADING_1: _heading("#"),
    BlockType.HEADING_2: _heading("##"),
    BlockType.HEADING_3: _heading("###"),
    BlockType.BULLETED_LIST_ITEM: _bulleted,
    BlockType.NUMBERED_LIST_ITEM: _numbered,
    BlockType.TO_DO: _to_do,
    BlockType.TOGGLE: _toggle,
    BlockType.CODE: _code,
    BlockType.QUOTE: _quote,
    BlockType.CALLOUT: _callout,
    BlockType.DIVIDER: lambda block, prefix: "\n---\n",
    BlockType.TABLE_OF_CONTENTS: lambda block, prefix: "[Table of Contents]",
    BlockType.BOOKMARK: _labelled_link("Bookmark"),
    BlockType.IMAGE: _image,
    BlockType.VIDEO: _hosted_link("Video"),
    BlockType.FILE: _hosted_link("File"),
    BlockType.PDF: _hosted_link("PDF"),
    BlockType.EQUATION: _equation,
    BlockType.TABLE: _nothing,
    BlockType.TABLE_ROW: _table_row,
    BlockType.COLUMN_LIST: _nothing,
    BlockType.COLUMN: _nothing,
    BlockType.SYNCED_BLOCK: _nothing,
    BlockType.TEMPLATE: _nothing,
    BlockType.LINK_TO_PAGE: lambda block, prefix: "[Link to page]",
    BlockType.CHILD_PAGE: _child_page,
    BlockType.CHILD_DATABASE: _child_database,
    BlockType.EMBED: _labelled_link("Embed"),
    BlockType.LINK_PREVIEW: _labelled_link("Link"),
    BlockType.UNSUPPORTED: _nothing,
}


def render_block(block: Block, indent: int = 0) -> Optional[str]:
    """Render a single block (not its children), or None if it has no own content."""
    return RENDERERS[block.type](block, INDENT * indent)


def blocks_to_markdown(
    blocks: Sequence[Block], indent: int = 0, *, expand_child_pages: bool = False
) -> str:
    """Render a block forest to Markdown in document order.

    Args:
        blocks: Top-level blocks, with children already attached.
        indent: Nesting level of `blocks`; children are rendered one level deeper.
        expand_child_pages: If True, a child page is written as a `##` section
            with its content flattened to indent 0 instead of a bold link line.

    Returns:
        The rendered fragments joined by newlines.
    """
    lines: List[str] = []

    for block in blocks:
        if expand_child_pages and block.type is BlockType.CHILD_PAGE:
            lines.append(f"\n## {block.data.get('title', '')}\n")
            if block.children:
                lines.append(
                    blocks_to_markdown(block.children, 0, expand_child_pages=expand_child_pages)
                )
            continue

        line = render_block(block, indent)
        if line is not None:
            lines.append(line)

        if block.children:
            lines.append(
                blocks_to_markdown(block.children, indent + 1, expand_child_pages=expand_child_pages)
            )

    return "\n".join(lines)
