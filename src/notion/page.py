"""Metadata extraction from database pages."""

from .types import Page

UNTITLED = "Untitled"


def extract_title(page: Page) -> str:
    """Plain text of the first title property, or "Untitled"."""
    for prop in page.properties.values():
        if prop.get("type") == "title":
            text = "".join(t.get("plain_text", "") for t in prop.get("title") or [])
            return text or UNTITLED
    return UNTITLED


def extract_date(page: Page) -> str:
    """Start of the first date property, else the date part of created_time."""
    for prop in page.properties.values():
        if prop.get("type") == "date":
            start = (prop.get("date") or {}).get("start")
            if start:
                return start
            break
    return page.created_time.split("T")[0]
