import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.engine import Engine

from . import models  # noqa: F401
from .config import ALLOWED_ORIGINS, DATABASE_URL
from .database import Base, build_session_factory, create_db_engine
from .domain.clients import router as clients_router
from .domain.focus import router as focus_router
from .domain.invoices import router as invoices_router
from .domain.projects import router as projects_router
from .domain.schedule import router as schedule_router
from .domain.tasks import router as tasks_router
from .domain.workspace import router as workspace_router
from .exceptions import ConfigurationError, PersistenceError
from .routes.ai import router as ai_router
from .routes.calendar import router as calendar_router
from .routes.demo import router as demo_router
from .routes.materialize import router as materialize_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    engine: Optional[Engine] = app.state.engine
    if engine is None:
        logger.warning("DATABASE_URL not set - data endpoints will answer 500")
    else:
        try:
            Base.metadata.create_all(bind=engine, checkfirst=True)
            logger.info("Database tables created successfully")
        except Exception as e:
            # Another worker may have created them first
            error_msg = str(e)
            if "already exists" in error_msg or "duplicate key" in error_msg:
                logger.info("Database tables already exist (created by another worker)")
            else:
                logger.error(f"Failed to create database tables: {e}")

    yield

    if engine is not None and app.state.owns_engine:
        engine.dispose()
    logger.info("Application shutting down...")


async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error(f"{request.method} {request.url.path} - {exc.message}")
    return PlainTextResponse(exc.message, status_code=500)


async def persistence_error_handler(request: Request, exc: PersistenceError):
    logger.error(f"{request.method} {request.url.path} - Persistence error: {exc.message}")
    return PlainTextResponse(exc.message, status_code=500)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Report a missing caller identity as 401 instead of a 422 validation error;
    everything else stays a 422.
    """
    for error in exc.errors():
        if error.get("loc") and "x-user-id" in str(error.get("loc")).lower():
            logger.warning(f"Authentication failed for {request.url.path}: missing X-User-Id header")
            return JSONResponse(status_code=401, content={"detail": "Not authenticated"})

    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(exc.errors())})


def create_app(database_url: Optional[str] = DATABASE_URL, engine: Optional[Engine] = None) -> FastAPI:
    """Build the API.

    The database engine is created here and handed to request handlers through
    ``app.state``; pass ``engine`` to reuse an existing one (tests do). An
    engine passed in is left open on shutdown; its owner disposes it.
    """
    owns_engine = engine is None and bool(database_url)
    if owns_engine:
        engine = create_db_engine(database_url)

    app = FastAPI(title="TILSF API", version="1.0.0", lifespan=lifespan)
    app.state.engine = engine
    app.state.owns_engine = owns_engine
    app.state.session_factory = build_session_factory(engine) if engine is not None else None

    app.add_exception_handler(ConfigurationError, configuration_error_handler)
    app.add_exception_handler(PersistenceError, persistence_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # Serverless-style functions
    app.include_router(materialize_router)
    app.include_router(calendar_router)
    app.include_router(ai_router)
    app.include_router(demo_router)

    # App pages
    app.include_router(workspace_router)
    app.include_router(clients_router)
    app.include_router(projects_router)
    app.include_router(tasks_router)
    app.include_router(schedule_router)
    app.include_router(invoices_router)
    app.include_router(focus_router)

    @app.get("/")
    def root():
        return {"message": "TILSF API is running"}

    @app.get("/health")
    def health():
        return {"status": "healthy", "database": app.state.session_factory is not None}

    return app


app = create_app()
