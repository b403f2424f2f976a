"""
TaskHub Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   `create_app()` builds the context objects (settings, database,
       session store), stores them on `app.state`, registers middleware,
       exception handlers and routes, and returns the app.
Who:   uvicorn (`uvicorn taskhub.main:app`) and the test suite, which calls
       create_app() with its own settings and database.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │  app.state: settings │ database │ session_store     │
    │                                                     │
    │  Middleware:  Request ID → Logging → CORS           │
    │                                                     │
    │  Routes:                                            │
    │   /api/register /api/login /api/logout              │
    │   /api/projects[/{id}]   /api/tasks[/{id}]          │
    │   /health                                           │
    │                                                     │
    │  Exception Handlers:                                │
    │   Validation/Conflict→400 │ Auth→401 │ NotFound→404 │
    │   Database/Session/unexpected→500                   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, log insecure settings, optionally create
              tables (AUTO_CREATE_TABLES)
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskhub import __version__
from taskhub.config import Settings, get_default_settings
from taskhub.database import Database
from taskhub.exceptions import TaskHubError
from taskhub.middleware.logging import RequestLoggingMiddleware
from taskhub.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from taskhub.routes import auth, health, projects, tasks
from taskhub.sessions import InMemorySessionStore, SessionStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the whole process.

    Format: 2024-01-15T12:00:00 [INFO] taskhub.access: GET /api/projects 200 ...
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access log replaces uvicorn's; SQL echo only at DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    if level != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings
    database: Database = app.state.database

    setup_logging(settings.log_level)
    logger.info("TaskHub Backend %s starting up...", __version__)

    for warning in settings.production_warnings():
        logger.warning("Configuration: %s", warning)

    if settings.auto_create_tables:
        await database.create_all()
        logger.info("Database tables created (AUTO_CREATE_TABLES)")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("TaskHub Backend shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _current_request_id(request: Request) -> str:
    return request_id_var.get("") or getattr(request.state, "request_id", "")


def _error_response(request: Request, status_code: int, message: str) -> JSONResponse:
    rid = _current_request_id(request)
    headers = {REQUEST_ID_HEADER: rid} if rid else None
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "requestId": rid},
        headers=headers,
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    """
    Turn Pydantic's error list into one sentence.

    Missing fields are reported together ("Missing required field(s):
    email, password"); otherwise the first problem is described. An absent
    or null JSON body has its own message.
    """
    errors = exc.errors()
    if any(tuple(err.get("loc", ())) == ("body",) and err.get("type") == "missing" for err in errors):
        return "Request body is required."
    missing = [str(err["loc"][-1]) for err in errors if err.get("type") == "missing" and err.get("loc")]
    if missing:
        return f"Missing required field(s): {', '.join(missing)}."
    if not errors:
        return "Invalid request."
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    field = ".".join(loc)
    if field:
        return f"Invalid value for '{field}': {first.get('msg', 'invalid')}."
    return f"Invalid request: {first.get('msg', 'invalid body')}."


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to `{"error": "<message>", "requestId": "<id>"}` bodies.

    Handler hierarchy:
        TaskHubError subclasses → their own status_code (400/401/404/500)
        RequestValidationError  → 400 (FastAPI's default would be 422)
        Exception (fallback)    → 500, traceback logged, generic message

    5xx responses never include internal details; those go to the log.
    """

    @app.exception_handler(TaskHubError)
    async def handle_app_error(request: Request, exc: TaskHubError):
        rid = _current_request_id(request)
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        elif exc.status_code != 404:
            logger.info("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return _error_response(request, exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        message = _describe_validation_error(exc)
        logger.info("[%s] Request validation failed: %s", _current_request_id(request), message)
        return _error_response(request, 400, message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            _current_request_id(request),
            str(exc),
            exc_info=exc,
        )
        return _error_response(request, 500, "An unexpected error occurred. Please try again.")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    session_store: Optional[SessionStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings:      defaults to values from the environment
        database:      defaults to Database.from_settings(settings)
        session_store: defaults to an InMemorySessionStore with the
                       configured TTL

    Returns:
        A fully configured FastAPI instance.
    """
    settings = settings or get_default_settings()

    app = FastAPI(
        title="TaskHub API",
        description=(
            "Session-authenticated API for users, projects and tasks. "
            "Projects are visible only to their owner; tasks only to the owner "
            "of their project."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database or Database.from_settings(settings)
    app.state.session_store = session_store or InMemorySessionStore(
        ttl_seconds=settings.session_ttl_seconds
    )

    # Middleware executes in REVERSE order of addition
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,  # session cookie
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(projects.router)
    app.include_router(tasks.router)
    app.include_router(health.router)

    return app


# uvicorn expects `taskhub.main:app` to be importable
app = create_app()
