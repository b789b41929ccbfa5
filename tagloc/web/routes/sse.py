"""Server-Sent Events streaming routes."""

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import StreamingResponse

from ...diagnostics import LEVELS

router = APIRouter()

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


@router.get("/jobs/{job_id}/stream")
async def stream_job_events(
    request: Request,
    job_id: str,
    level: str = Query("debug", description="Lowest diagnostic level to forward"),
):
    """
    Stream job diagnostics via Server-Sent Events.

    Events:
    - log: {"level": str, "message": str, "language": str, "timestamp": str, ...}
    - complete: {"succeeded": [...], "failures": {...}, "entries": int}
    - error: {"error": str}
    """
    if level not in LEVELS:
        raise HTTPException(400, f"Unknown level {level!r}, expected one of: {', '.join(LEVELS)}")

    job_manager = request.app.state.job_manager
    if not job_manager.get_job(job_id):
        raise HTTPException(404, "Job not found")

    return StreamingResponse(
        job_manager.stream_events(job_id, min_level=level),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
