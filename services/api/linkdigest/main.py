"""FastAPI application setup, static landing page and health endpoint."""

import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from linkdigest.llm import build_summarizer
from linkdigest.routers.summarize import error_response, router as summarize_router
from linkdigest.settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=level.upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application for one deployment profile.

    The summarizer is created here, once; it is None for the pass-through
    profile or when the profile's credential is missing.
    """
    settings = settings or default_settings
    configure_logging(settings.log_level)

    app = FastAPI(
        title="LinkDigest API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.summarizer = build_summarizer(settings)
    logger.info(
        "Starting env=%s backend=%s max_chars=%s summarizer=%s",
        settings.app_env, settings.summary_backend, settings.effective_max_chars,
        app.state.summarizer.name if app.state.summarizer else None,
    )

    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        details = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
            for err in exc.errors()
        ]
        return error_response(400, "invalid request", details)

    @app.get("/health")
    def health():
        """Return a simple health payload for uptime checks."""
        return {
            "status": "ok",
            "env": settings.app_env,
            "backend": settings.summary_backend,
            "summarizer_ready": app.state.summarizer is not None,
        }

    app.include_router(summarize_router, prefix="/api", tags=["summarize"])

    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        # Mounted last so the API routes above take precedence.
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.warning("Static directory %s not found; landing page disabled", static_dir)

    return app


app = create_app()
