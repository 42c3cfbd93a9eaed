"""Fetch the complete block tree of a page."""

from typing import List, Optional

from loguru import logger

from .client import NotionClient
from .types import Block


async def list_children(client: NotionClient, block_id: str) -> List[Block]:
    """Drain every page of children under `block_id`, skipping partial blocks."""
    blocks: List[Block] = []
    cursor: Optional[str] = None
    while True:
        batch = await client.list_block_children(block_id, cursor)
        for item in batch.items:
            block = Block.from_api(item)
            if block is not None:
                blocks.append(block)
        if not batch.next_cursor:
            break
        cursor = batch.next_cursor
    return blocks


async def fetch_block_tree(client: NotionClient, block_id: str) -> List[Block]:
    """Fetch all blocks under a page, with every nested child attached.

    The tree is walked depth-first with an explicit stack, so nesting depth is
    limited by memory rather than the interpreter's recursion limit. Requests
    are issued one at a time, and a block's whole subtree is fetched before
    its next sibling.

    Args:
        client: The NotionClient instance to use for API calls
        block_id: The ID of the page (or block) whose children to fetch

    Returns:
        Top-level blocks in document order.
    """
    top = await list_children(client, block_id)
    stack = [b for b in reversed(top) if b.has_children]
    fetched = 0

    while stack:
        block = stack.pop()
        block.children = await list_children(client, block.id)
        fetched += 1
        stack.extend(child for child in reversed(block.children) if child.has_children)

    logger.debug(f"[notion] fetched {len(top)} blocks and {fetched} nested lists for {block_id}")
    return top
