from types import SimpleNamespace

from fastapi.testclient import TestClient
from app import main as app_main
from app.sync import SyncReport

def test_sync_enqueue(monkeypatch):
    calls = []
    # stub queue.enqueue
    def fake_enqueue(*a, **k):
        calls.append((a, k))
        return SimpleNamespace(id="job-1")
    monkeypatch.setattr(app_main.q, "enqueue", fake_enqueue)
    c = TestClient(app_main.app)
    r = c.post("/sync")
    assert r.status_code == 200
    assert r.json() == {"job_id": "job-1"}
    (args, kwargs), = calls
    assert args == ("worker.tasks.sync_job",)
    assert kwargs["retry"].max == 3

def test_sync_job_reports_partial_failure(monkeypatch):
    import worker.tasks as tasks
    async def fake_sync():
        return SyncReport(succeeded=4, failed=1, failed_page_ids=["p9"])
    monkeypatch.setattr(tasks, "sync_database", fake_sync)
    out = tasks.sync_job()
    assert out == {"status": "partial", "succeeded": 4, "failed": 1, "failed_page_ids": ["p9"]}
