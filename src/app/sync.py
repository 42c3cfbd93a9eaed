"""Mirror a Notion database into a Google Drive folder of Markdown files."""

import asyncio
import re
import sys
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from loguru import logger

from drive.client import GoogleDriveClient
from notion import (
    NotionClient,
    NotionDatabase,
    blocks_to_markdown,
    extract_date,
    extract_title,
    fetch_block_tree,
)

from .settings import Settings, settings as default_settings

_UNSAFE_CHARS = re.compile(r'[<>:"/\\|?*]')
_WHITESPACE = re.compile(r"\s+")
MAX_FILENAME = 100


@dataclass
class SyncReport:
    """Outcome of one sync run."""

    succeeded: int = 0
    failed: int = 0
    failed_page_ids: List[str] = field(default_factory=list)

    def as_dict(self) -> dict:
        return asdict(self)


def sanitize_filename(name: str) -> str:
    """Make a title safe to use as a file name."""
    name = _UNSAFE_CHARS.sub("-", name)
    name = _WHITESPACE.sub(" ", name).strip()
    return name[:MAX_FILENAME]


def render_page_document(title: str, body: str, synced_at: Optional[datetime] = None) -> str:
    """Wrap a rendered page body with its title and sync banner."""
    synced_at = synced_at or datetime.now(timezone.utc)
    return "\n".join(
        [
            f"# {title}",
            "",
            f"*Synced from Notion on {synced_at.isoformat()}*",
            "",
            "---",
            "",
            body,
        ]
    )


async def sync_database(
    cfg: Optional[Settings] = None,
    notion: Optional[NotionClient] = None,
    drive: Optional[GoogleDriveClient] = None,
) -> SyncReport:
    """Fetch, render and upload every page of the configured database.

    A failure while handling one page is logged and counted; the run moves on
    to the next page. Missing configuration raises ConfigError before any page
    is touched.

    Args:
        cfg: Settings to use. Defaults to the environment-derived settings.
        notion: Notion client. Built from cfg when omitted.
        drive: Drive client. Built from cfg when omitted.

    Returns:
        SyncReport with success and failure counts.
    """
    cfg = cfg or default_settings
    cfg.require_sync_config()

    drive = drive or GoogleDriveClient(
        root_folder_id=cfg.drive_root_folder_id, token_path=cfg.google_token_path
    )
    if notion is not None:
        return await _sync_pages(cfg, notion, drive)
    async with NotionClient(token=cfg.notion_token) as client:
        return await _sync_pages(cfg, client, drive)


async def _sync_pages(cfg: Settings, notion: NotionClient, drive: GoogleDriveClient) -> SyncReport:
    logger.info(
        f"[sync] start database={cfg.notion_database_id} drive_folder={cfg.drive_folder!r}"
    )
    folder = await asyncio.to_thread(drive.ensure_folder, cfg.drive_folder)

    pages = await NotionDatabase(notion, cfg.notion_database_id).fetch_all_pages()

    report = SyncReport()
    for page in pages:
        try:
            title = extract_title(page)
            date = extract_date(page)
            filename = sanitize_filename(f"{date} - {title}") + ".md"
            logger.info(f"[sync] processing {title!r} ({page.id})")

            blocks = await fetch_block_tree(notion, page.id)
            body = blocks_to_markdown(blocks, expand_child_pages=cfg.expand_child_pages)
            document = render_page_document(title, body)

            await asyncio.to_thread(folder.upload_text, filename, document)
            report.succeeded += 1

            await asyncio.sleep(cfg.upload_delay_s)
        except Exception as e:
            report.failed += 1
            report.failed_page_ids.append(page.id)
            logger.exception(f"[sync] ERROR page={page.id} -> {type(e).__name__}: {e}")

    logger.info(f"[sync] complete: success={report.succeeded} errors={report.failed}")
    return report


def main() -> int:
    try:
        asyncio.run(sync_database())
    except Exception as e:
        logger.exception(f"[sync] failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
