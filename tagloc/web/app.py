"""FastAPI application for the localization service."""

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import config
from ..logger import get_logger, setup_logging
from .routes import api, sse
from .services.job_manager import JobManager

logger = get_logger(__name__)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies with the {error, details} shape."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return JSONResponse(status_code=400, content={"error": "Invalid input", "details": details})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="tagloc",
        description="Tagged-text localization with risk scanning",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # Store services in app state
    app.state.job_manager = JobManager()

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.debug("%s %s", request.method, request.url.path)
        return await call_next(request)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    # Include routers
    app.include_router(api.router, prefix="/api")
    app.include_router(sse.router, prefix="/api")

    return app


app = create_app()


def main():
    """Entry point for the tagloc-web command."""
    import argparse

    parser = argparse.ArgumentParser(description="Run the tagloc translation server")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    args = parser.parse_args()

    setup_logging(config.log_level)
    logger.info("Starting tagloc server at http://%s:%s", args.host, args.port)
    uvicorn.run(
        "tagloc.web.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
