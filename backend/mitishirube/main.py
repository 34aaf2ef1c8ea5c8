"""FastAPI application entry point."""
import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from mitishirube.auth.policy import AccessPolicy
from mitishirube.auth.strategy import AuthStrategy, build_strategy
from mitishirube.config import Settings, settings
from mitishirube.database import Base, create_db_engine, create_session_factory, engine
from mitishirube.errors import MitishirubeError, StorageError

# Import routers
from mitishirube.routers import auth, events, content

# Import all models so Base.metadata knows about them
from mitishirube.models.event import Event                 # noqa: F401
from mitishirube.models.schedule import ScheduleEntry      # noqa: F401
from mitishirube.models.booth import Booth, BoothUser      # noqa: F401
from mitishirube.models.post import BoothPost              # noqa: F401
from mitishirube.models.session import LoginSession        # noqa: F401

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
# Local time, so no UTC "Z" suffix
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"


def configure_logging(app_settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, app_settings.LOG_LEVEL.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(MitishirubeError)
    async def domain_error_handler(request: Request, exc: MitishirubeError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0]["msg"] if errors else "invalid request"
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Storage failure on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": StorageError.default_message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


def create_app(app_settings: Optional[Settings] = None, auth_strategy: Optional[AuthStrategy] = None) -> FastAPI:
    app_settings = app_settings or settings
    configure_logging(app_settings)

    app = FastAPI(
        title="Mitishirube",
        description="Event information, schedules and booth posts",
        version="0.1.0",
    )
    app.state.settings = app_settings
    if app_settings.DATABASE_URL == settings.DATABASE_URL:
        app.state.engine = engine
    else:
        app.state.engine = create_db_engine(app_settings.DATABASE_URL)
    app.state.session_factory = create_session_factory(app.state.engine)
    app.state.auth_strategy = auth_strategy or build_strategy(app_settings)
    app.state.access_policy = AccessPolicy(public_reads=app_settings.PUBLIC_READS)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.get_cors_origins_list(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    # Register routers
    app.include_router(auth.router, prefix="/api", tags=["Auth"])
    app.include_router(events.router, prefix="/api", tags=["Events"])
    app.include_router(content.router, prefix="/api", tags=["Content"])

    @app.on_event("startup")
    def on_startup():
        """Create database tables on startup (for SQLite dev mode)."""
        db_engine = app.state.engine
        if db_engine.url.get_backend_name() == "sqlite":
            Base.metadata.create_all(bind=db_engine)
        logger.info("Started with AUTH_MODE=%s", app.state.auth_strategy.mode)

    @app.get("/api/health")
    def health_check():
        return {"status": "ok"}

    # Static pages last so the API routes win
    if app_settings.STATIC_DIR and Path(app_settings.STATIC_DIR).is_dir():
        app.mount("/", StaticFiles(directory=app_settings.STATIC_DIR, html=True), name="static")

    return app


app = create_app()
