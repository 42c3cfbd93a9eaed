"""Notion Database operations."""

import os
from typing import List, Optional

from loguru import logger

from .client import NotionClient
from .types import Page


async def fetch_all_pages(client: NotionClient, database_id: str) -> List[Page]:
    """Return every entry of a database in query order, skipping items without properties."""
    pages: List[Page] = []
    cursor: Optional[str] = None
    while True:
        batch = await client.query_database(database_id, cursor)
        for item in batch.items:
            page = Page.from_api(item)
            if page is not None:
                pages.append(page)
        if not batch.next_cursor:
            break
        cursor = batch.next_cursor
    return pages


class NotionDatabase:
    """A Notion database whose entries are synced."""

    def __init__(self, client: NotionClient, database_id: Optional[str] = None) -> None:
        """Initialize a database.

        Args:
            client: The NotionClient instance to use for API calls
            database_id: The ID of the database. Default to NOTION_DB_ID env var.
        """
        self.client = client
        self.database_id = database_id or os.getenv("NOTION_DB_ID")
        if not self.database_id:
            raise RuntimeError("NOTION_DB_ID not set")

    async def fetch_all_pages(self) -> List[Page]:
        """Query every page of the database."""
        pages = await fetch_all_pages(self.client, self.database_id)
        logger.info(f"[notion] database {self.database_id} has {len(pages)} pages")
        return pages
