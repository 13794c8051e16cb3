"""FastAPI application factory and entrypoint. No business logic; only wiring, error mapping and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from dashboard import __version__
from dashboard.api import router as api_router
from dashboard.core.config import Settings, get_settings
from dashboard.core.database import build_engine, build_session_factory
from dashboard.core.exceptions import DashboardError, StoreError
from dashboard.models import Base
from dashboard.services.seed import seed_if_empty

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )


def _format_validation_errors(exc: RequestValidationError) -> str:
    """Short client message from FastAPI's validation errors, e.g. 'title: Field required'."""
    parts = []
    for err in exc.errors()[:3]:
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc) or "request"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request"


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(DashboardError)
    async def handle_dashboard_error(_request: Request, exc: DashboardError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.message},
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"message": _format_validation_errors(exc)},
        )

    @app.exception_handler(SQLAlchemyError)
    async def handle_store_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.error(
            "Unhandled store error",
            exc_info=exc,
            extra={"path": request.url.path, "method": request.method},
        )
        err = StoreError()
        return JSONResponse(status_code=err.status_code, content={"message": err.message})


def _init_store(app: FastAPI) -> None:
    settings: Settings = app.state.settings
    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=app.state.engine)
    if settings.SEED_ON_STARTUP:
        db = app.state.session_factory()
        try:
            seed_if_empty(db, settings)
        finally:
            db.close()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    _init_store(app)
    logger.info(
        "Dashboard API started",
        extra={"environment": app.state.settings.APP_ENV},
    )
    yield
    app.state.engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app around one Settings instance; engine and session factory live on app.state."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Record Dashboard API",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = build_engine(settings)
    app.state.session_factory = build_session_factory(app.state.engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _register_error_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Record Dashboard API"}

    return app


app = create_app()
