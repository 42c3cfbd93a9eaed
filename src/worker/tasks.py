import asyncio

from app.sync import sync_database
from loguru import logger


def sync_job() -> dict:
    """Run one full database sync inside an rq worker."""
    report = asyncio.run(sync_database())
    logger.info(f"[sync_job] done ok={report.succeeded} failed={report.failed}")
    return {"status": "ok" if not report.failed else "partial", **report.as_dict()}
