"""Notion API client and Markdown rendering."""

from .blocks import fetch_block_tree
from .client import NotionAPIError, NotionClient
from .database import NotionDatabase, fetch_all_pages
from .markdown import blocks_to_markdown, render_block
from .page import extract_date, extract_title
from .rich_text import render_rich_text
from .types import Block, BlockType, Page, RichTextSpan

__all__ = [
    "Block",
    "BlockType",
    "NotionAPIError",
    "NotionClient",
    "NotionDatabase",
    "Page",
    "RichTextSpan",
    "blocks_to_markdown",
    "extract_date",
    "extract_title",
    "fetch_all_pages",
    "fetch_block_tree",
    "render_block",
    "render_rich_text",
]
