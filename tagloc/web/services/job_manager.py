"""Job manager for tracking background localization runs."""

import asyncio
import json
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import AsyncGenerator, List, Optional

from ...diagnostics import LEVELS, DiagnosticRecord
from ...models.entry import ParseMetadata, ProcessedEntry
from ...translation.pipeline import LocalizationRun


class JobStatus(str, Enum):
    """Job status enum."""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class Job:
    """Represents a background localization job."""
    job_id: str
    status: JobStatus
    created_at: str
    languages: List[str] = field(default_factory=list)
    run: Optional[LocalizationRun] = None
    error: Optional[str] = None
    events: List[dict] = field(default_factory=list)

    @property
    def entries(self) -> List[ProcessedEntry]:
        return self.run.entries if self.run else []

    @property
    def metadata(self) -> Optional[ParseMetadata]:
        return self.run.parse.metadata if self.run else None

    def to_dict(self) -> dict:
        data = {
            "job_id": self.job_id,
            "status": self.status.value,
            "created_at": self.created_at,
            "languages": self.languages,
            "error": self.error,
            "result": None,
        }
        if self.run:
            data["result"] = self.run.to_dict()
        return data


class JobManager:
    """Keeps jobs in memory and replays their events as Server-Sent Events."""

    def __init__(self, heartbeat: float = 30.0):
        self.jobs: dict[str, Job] = {}
        self.heartbeat = heartbeat
        self._changed: dict[str, asyncio.Event] = {}

    def create_job(self, languages: List[str] = None) -> Job:
        """Create a new job."""
        job_id = str(uuid.uuid4())
        job = Job(
            job_id=job_id,
            status=JobStatus.PENDING,
            created_at=datetime.now().isoformat(),
            languages=languages or [],
        )
        self.jobs[job_id] = job
        return job

    def get_job(self, job_id: str) -> Optional[Job]:
        """Get a job by ID."""
        return self.jobs.get(job_id)

    def set_running(self, job_id: str) -> None:
        """Mark job as running."""
        if job_id in self.jobs:
            self.jobs[job_id].status = JobStatus.RUNNING

    def set_completed(self, job_id: str, run: LocalizationRun) -> None:
        """Mark job as completed and publish the completion event."""
        job = self.jobs.get(job_id)
        if not job:
            return
        job.status = JobStatus.COMPLETED
        job.run = run
        self._publish(job, {
            "event": "complete",
            "succeeded": run.batch.succeeded,
            "failures": run.batch.failures,
            "entries": len(run.entries),
        })

    def set_failed(self, job_id: str, error: str) -> None:
        """Mark job as failed and publish the error event."""
        job = self.jobs.get(job_id)
        if not job:
            return
        job.status = JobStatus.FAILED
        job.error = error
        self._publish(job, {"event": "error", "error": error})

    def record(self, job_id: str, record: DiagnosticRecord) -> None:
        """Diagnostics subscriber target: store a record for the job's stream."""
        job = self.jobs.get(job_id)
        if job:
            self._publish(job, {"event": "log", **record.to_dict()})

    def _publish(self, job: Job, event: dict) -> None:
        job.events.append(event)
        changed = self._changed.get(job.job_id)
        if changed:
            changed.set()

    async def stream_events(self, job_id: str, min_level: str = "debug") -> AsyncGenerator[str, None]:
        """
        Yield Server-Sent Events for a job, replaying earlier events first.

        Args:
            job_id: Job to follow
            min_level: Log events below this diagnostic level are skipped

        Yields SSE-formatted strings until the job completes or fails.
        """
        threshold = LEVELS[min_level]
        job = self.jobs.get(job_id)
        if not job:
            yield f"event: error\ndata: {json.dumps({'error': 'Job not found'})}\n\n"
            return

        changed = self._changed.setdefault(job_id, asyncio.Event())
        sent = 0

        while True:
            while sent < len(job.events):
                event = dict(job.events[sent])
                sent += 1
                name = event.pop("event")
                if name == "log" and LEVELS.get(event.get("level"), 0) < threshold:
                    continue
                yield f"event: {name}\ndata: {json.dumps(event)}\n\n"
                if name in ("complete", "error"):
                    return

            changed.clear()
            try:
                await asyncio.wait_for(changed.wait(), timeout=self.heartbeat)
            except asyncio.TimeoutError:
                # Send heartbeat to keep connection alive
                yield ": heartbeat\n\n"
