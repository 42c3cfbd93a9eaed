from fastapi import FastAPI
from loguru import logger
from redis import Redis
from rq import Queue, Retry

from .settings import settings

app = FastAPI(title="Notion to Drive Markdown Sync")
redis = Redis.from_url(settings.redis_url)
q = Queue("default", connection=redis)


@app.get("/health")
def health() -> dict:
    return {"ok": True}


@app.post("/sync")
def enqueue_sync() -> dict:
    job = q.enqueue(
        "worker.tasks.sync_job",
        retry=Retry(max=3, interval=[10, 30, 60]),
    )
    logger.info(f"enqueued sync job {job.id}")
    return {"job_id": job.id}
