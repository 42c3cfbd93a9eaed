"""Type definitions and constants for Notion API."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, TypedDict

PropertyType = Literal["title", "rich_text", "date"]


class PropertyValue(TypedDict, total=False):
    """A Notion property value."""

    type: PropertyType
    title: List[Dict[str, Any]]  # For title properties
    rich_text: List[Dict[str, Any]]  # For rich_text properties
    date: Optional[Dict[str, Any]]  # For date properties


class BlockType(str, Enum):
    """Every block type the renderer knows about."""

    PARAGRAPH = "paragraph"
    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    BULLETED_LIST_ITEM = "bulleted_list_item"
    NUMBERED_LIST_ITEM = "numbered_list_item"
    TO_DO = "to_do"
    TOGGLE = "toggle"
    CODE = "code"
    QUOTE = "quote"
    CALLOUT = "callout"
    DIVIDER = "divider"
    TABLE_OF_CONTENTS = "table_of_contents"
    BOOKMARK = "bookmark"
    IMAGE = "image"
    VIDEO = "video"
    FILE = "file"
    PDF = "pdf"
    EQUATION = "equation"
    TABLE = "table"
    TABLE_ROW = "table_row"
    COLUMN_LIST = "column_list"
    COLUMN = "column"
    SYNCED_BLOCK = "synced_block"
    TEMPLATE = "template"
    LINK_TO_PAGE = "link_to_page"
    CHILD_PAGE = "child_page"
    CHILD_DATABASE = "child_database"
    EMBED = "embed"
    LINK_PREVIEW = "link_preview"
    UNSUPPORTED = "unsupported"

    @classmethod
    def parse(cls, value: str) -> "BlockType":
        """Map a raw type string to a member, falling back to UNSUPPORTED."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNSUPPORTED


@dataclass(frozen=True)
class RichTextSpan:
    """One styled run of inline text."""

    plain_text: str
    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    code: bool = False
    href: Optional[str] = None

    @classmethod
    def from_api(cls, obj: Dict[str, Any]) -> "RichTextSpan":
        annotations = obj.get("annotations") or {}
        return cls(
            plain_text=obj.get("plain_text", ""),
            bold=bool(annotations.get("bold")),
            italic=bool(annotations.get("italic")),
            strikethrough=bool(annotations.get("strikethrough")),
            code=bool(annotations.get("code")),
            href=obj.get("href") or None,
        )


def spans_from_api(items: Optional[List[Dict[str, Any]]]) -> List[RichTextSpan]:
    """Convert a raw rich_text array into spans."""
    return [RichTextSpan.from_api(item) for item in items or []]


@dataclass
class Block:
    """A content block and, once fetched, its children.

    `children` is always present. It stays empty until the fetcher has listed
    the children of a block whose `has_children` flag is set.
    """

    id: str
    type: BlockType
    has_children: bool = False
    data: Dict[str, Any] = field(default_factory=dict)
    raw_type: str = ""
    children: List["Block"] = field(default_factory=list)

    @classmethod
    def from_api(cls, obj: Dict[str, Any]) -> Optional["Block"]:
        """Build a block from an API object, or None if it is only a partial block."""
        raw_type = obj.get("type")
        block_id = obj.get("id")
        if not raw_type or not block_id:
            return None
        return cls(
            id=block_id,
            type=BlockType.parse(raw_type),
            has_children=bool(obj.get("has_children")),
            data=obj.get(raw_type) or {},
            raw_type=raw_type,
        )

    def rich_text(self, key: str = "rich_text") -> List[RichTextSpan]:
        return spans_from_api(self.data.get(key))


@dataclass
class Page:
    """A database entry: its id, creation time and properties."""

    id: str
    created_time: str
    properties: Dict[str, PropertyValue] = field(default_factory=dict)

    @classmethod
    def from_api(cls, obj: Dict[str, Any]) -> Optional["Page"]:
        """Build a page from an API object, or None if it carries no properties."""
        properties = obj.get("properties")
        if not isinstance(properties, dict):
            return None
        return cls(
            id=obj.get("id", ""),
            created_time=obj.get("created_time", ""),
            properties=properties,
        )


@dataclass
class PaginatedResults:
    """One page of a paginated listing."""

    items: List[Dict[str, Any]]
    next_cursor: Optional[str] = None
