"""REST API routes."""

from typing import Optional

from fastapi import APIRouter, BackgroundTasks, HTTPException, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from ...diagnostics import Diagnostics
from ...errors import ExportError, InputValidationError, ProviderError
from ...logger import get_logger
from ...models.languages import TARGET_LANGUAGES, SelectionMode
from ...translation.clients import ProviderKind
from ..services.job_manager import JobStatus
from ..services.localization_service import LocalizationService, ProcessOptions

router = APIRouter()
logger = get_logger(__name__)


# Request/Response models
class TranslateRequest(BaseModel):
    texts: list[str]
    targetLang: str = Field(min_length=1)
    provider: ProviderKind = ProviderKind.ECHO
    customEndpoint: Optional[str] = None
    context: Optional[str] = None
    apiKey: Optional[str] = None


class TranslateResponse(BaseModel):
    translations: list[str]


class ProcessRequest(BaseModel):
    text: str
    mode: SelectionMode = SelectionMode.SINGLE
    language: Optional[str] = None
    languages: list[str] = []
    provider: ProviderKind = ProviderKind.ECHO
    customEndpoint: Optional[str] = None
    context: Optional[str] = None
    chunkSize: int = Field(default=0, ge=0)
    apiKey: Optional[str] = None

    def to_options(self) -> ProcessOptions:
        return ProcessOptions(
            text=self.text,
            mode=self.mode,
            language=self.language,
            languages=self.languages,
            provider=self.provider,
            custom_endpoint=self.customEndpoint,
            context=self.context,
            chunk_size=self.chunkSize,
            api_key=self.apiKey,
        )


def _error(status: int, error: str, details: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": error, "details": details})


@router.get("/languages")
async def list_languages():
    """List the supported target languages."""
    return {"languages": [option.to_dict() for option in TARGET_LANGUAGES]}


# Translation endpoints
@router.post("/translate", response_model=TranslateResponse)
async def translate(body: TranslateRequest):
    """Translate one chunk of texts with the requested provider."""
    logger.info(
        "Translation request: %d items to %s via %s",
        len(body.texts), body.targetLang, body.provider.value,
    )
    service = LocalizationService()
    try:
        translations = await service.translate_texts(
            body.texts,
            body.targetLang,
            body.provider,
            custom_endpoint=body.customEndpoint,
            context=body.context,
            api_key=body.apiKey,
        )
    except ProviderError as e:
        logger.error("Translation error: %s", e.message)
        return _error(500, "Translation failed", e.message)
    except Exception as e:
        logger.exception("Unexpected translation error")
        return _error(500, "Translation failed", str(e) or type(e).__name__)

    return {"translations": translations}


@router.post("/process")
async def process(body: ProcessRequest):
    """Run the whole pipeline and return the processed entries."""
    service = LocalizationService()
    try:
        run = await service.process(body.to_options())
    except InputValidationError as e:
        return _error(400, "Invalid input", e.message)
    except ProviderError as e:
        return _error(500, "Translation failed", e.message)
    except Exception as e:
        logger.exception("Unexpected processing error")
        return _error(500, "Translation failed", str(e) or type(e).__name__)

    return run.to_dict()


# Job endpoints
@router.post("/jobs")
async def start_job(request: Request, body: ProcessRequest, background_tasks: BackgroundTasks):
    """Start a background processing job."""
    job_manager = request.app.state.job_manager

    job = job_manager.create_job(languages=body.languages or ([body.language] if body.language else []))
    background_tasks.add_task(_run_job, job_manager, job.job_id, body.to_options())

    return {"job_id": job.job_id}


async def _run_job(job_manager, job_id: str, options: ProcessOptions):
    """Run a processing job in the background."""
    job_manager.set_running(job_id)

    diagnostics = Diagnostics("jobs")
    unsubscribe = diagnostics.subscribe(lambda record: job_manager.record(job_id, record))

    try:
        run = await LocalizationService().process(options, diagnostics=diagnostics)
        job_manager.set_completed(job_id, run)
    except (InputValidationError, ProviderError) as e:
        job_manager.set_failed(job_id, e.message)
    except Exception as e:
        logger.exception("Job %s failed", job_id)
        job_manager.set_failed(job_id, str(e))
    finally:
        unsubscribe()


def _get_job(request: Request, job_id: str):
    job = request.app.state.job_manager.get_job(job_id)
    if not job:
        raise HTTPException(404, "Job not found")
    return job


def _get_completed_job(request: Request, job_id: str):
    job = _get_job(request, job_id)
    if job.status != JobStatus.COMPLETED:
        raise HTTPException(409, f"Job is {job.status.value}")
    if not job.entries:
        raise HTTPException(404, "Job produced no results")
    return job


@router.get("/jobs/{job_id}")
async def get_job_status(request: Request, job_id: str):
    """Get job status and result (polling fallback)."""
    return _get_job(request, job_id).to_dict()


@router.get("/jobs/{job_id}/report.csv")
async def download_report(request: Request, job_id: str):
    """Download the CSV risk report of a completed job."""
    job = _get_completed_job(request, job_id)
    content = LocalizationService().export_csv(job.entries)
    name = job.entries[0].language_code if len(job.languages) == 1 else "batch"

    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="risk_report_{name}.csv"'},
    )


@router.get("/jobs/{job_id}/download")
async def download_localized(request: Request, job_id: str, keepHeader: bool = False):
    """Download the localized file, or a ZIP when several languages succeeded."""
    job = _get_completed_job(request, job_id)
    try:
        filename, content, media_type = LocalizationService().export_txt(
            job.entries, job.metadata, include_raw_header=keepHeader
        )
    except ExportError as e:
        return _error(500, "Export failed", e.message)

    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
