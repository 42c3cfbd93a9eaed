from datetime import datetime, timezone

import pytest

from app.settings import ConfigError, Settings
from app.sync import render_page_document, sanitize_filename, sync_database
from notion.types import PaginatedResults


def page_item(page_id, title, date=None):
    props = {"Name": {"type": "title", "title": [{"plain_text": title}]}}
    if date:
        props["Date"] = {"type": "date", "date": {"start": date}}
    return {"id": page_id, "created_time": "2025-08-12T09:30:00.000Z", "properties": props}


def para(block_id, text, has_children=False, kind="paragraph"):
    return {
        "id": block_id,
        "type": kind,
        "has_children": has_children,
        kind: {"rich_text": [{"plain_text": text, "annotations": {}}], "title": text},
    }


class FakeNotion:
    def __init__(self, pages, children, broken=()):
        self.pages = pages
        self.children = children
        self.broken = set(broken)

    async def query_database(self, database_id, cursor=None):
        return PaginatedResults(items=self.pages)

    async def list_block_children(self, block_id, cursor=None):
        if block_id in self.broken:
            raise RuntimeError("Notion API error (502): bad gateway")
        return PaginatedResults(items=self.children.get(block_id, []))


class FakeFolder:
    id = "folder-1"

    def __init__(self):
        self.uploads = {}

    def upload_text(self, name, content):
        self.uploads[name] = content
        return f"file-{len(self.uploads)}"


class FakeDrive:
    def __init__(self):
        self.folder = FakeFolder()
        self.paths = []

    def ensure_folder(self, path):
        self.paths.append(path)
        return self.folder


@pytest.fixture
def cfg(tmp_path):
    token = tmp_path / "google_token.json"
    token.write_text("{}")
    return Settings(
        notion_token="secret",
        notion_database_id="db",
        drive_folder="Meeting Notes",
        google_token_path=token,
        upload_delay_s=0,
    )


@pytest.mark.asyncio
async def test_sync_uploads_one_document_per_page(cfg):
    notion = FakeNotion(
        pages=[page_item("p1", "Standup", "2025-01-02"), page_item("p2", "")],
        children={"p1": [para("b1", "Shipped it")]},
    )
    drive = FakeDrive()

    report = await sync_database(cfg, notion=notion, drive=drive)

    assert (report.succeeded, report.failed) == (2, 0)
    assert drive.paths == ["Meeting Notes"]
    uploads = drive.folder.uploads
    assert set(uploads) == {"2025-01-02 - Standup.md", "2025-08-12 - Untitled.md"}
    doc = uploads["2025-01-02 - Standup.md"]
    assert doc.startswith("# Standup\n\n*Synced from Notion on ")
    assert doc.endswith("---\n\nShipped it")


@pytest.mark.asyncio
async def test_one_failing_page_does_not_stop_the_run(cfg):
    notion = FakeNotion(
        pages=[page_item("p1", "A"), page_item("p2", "B"), page_item("p3", "C")],
        children={},
        broken={"p2"},
    )
    drive = FakeDrive()

    report = await sync_database(cfg, notion=notion, drive=drive)

    assert (report.succeeded, report.failed) == (2, 1)
    assert report.failed_page_ids == ["p2"]
    assert len(drive.folder.uploads) == 2


@pytest.mark.asyncio
async def test_child_pages_are_expanded_when_configured(cfg):
    cfg.expand_child_pages = True
    notion = FakeNotion(
        pages=[page_item("p1", "Notes")],
        children={"p1": [para("cp", "Monday", True, kind="child_page")], "cp": [para("x", "agenda")]},
    )
    drive = FakeDrive()

    await sync_database(cfg, notion=notion, drive=drive)

    (doc,) = drive.folder.uploads.values()
    assert doc.endswith("\n## Monday\n\nagenda")


@pytest.mark.asyncio
async def test_missing_configuration_fails_before_any_work(cfg):
    cfg.notion_token = ""
    drive = FakeDrive()

    with pytest.raises(ConfigError, match="NOTION_TOKEN"):
        await sync_database(cfg, notion=FakeNotion([], {}), drive=drive)

    assert drive.paths == []


def test_missing_google_token_is_a_config_error(tmp_path):
    cfg = Settings(
        notion_token="t", notion_database_id="db", google_token_path=tmp_path / "absent.json"
    )
    with pytest.raises(ConfigError, match="Google token"):
        cfg.require_sync_config()


def test_sanitize_filename():
    assert sanitize_filename('2025-01-02 - a/b:c*"d"?') == "2025-01-02 - a-b-c--d--"
    assert sanitize_filename("  many\t\tspaces \n here ") == "many spaces here"
    assert len(sanitize_filename("x" * 300)) == 100


def test_render_page_document():
    when = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    doc = render_page_document("Title", "body", when)
    assert doc == (
        "# Title\n\n*Synced from Notion on 2025-01-02T03:04:05+00:00*\n\n---\n\nbody"
    )


@pytest.mark.asyncio
async def test_sync_holds_one_notion_client_open_for_the_run(cfg, monkeypatch):
    import app.sync as sync_module

    events = []

    class PooledNotion(FakeNotion):
        def __init__(self, token):
            super().__init__(pages=[page_item("p1", "A")], children={"p1": [para("b", "x")]})

        async def __aenter__(self):
            events.append("open")
            return self

        async def __aexit__(self, *exc_info):
            events.append("close")

        async def query_database(self, database_id, cursor=None):
            events.append("query")
            return await super().query_database(database_id, cursor)

    monkeypatch.setattr(sync_module, "NotionClient", PooledNotion)

    report = await sync_database(cfg, drive=FakeDrive())

    assert report.succeeded == 1
    assert events == ["open", "query", "close"]
