"""
Student Records API - FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires lifespan, middleware, exception handlers and routes.
Who:   uvicorn (`uvicorn student_api.main:app`), `python -m student_api`, tests.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware:  [Request ID] → [Logging] → [CORS]          │
    │                                                          │
    │  Routes:                                                 │
    │    POST /login           POST /register                  │
    │    GET  /students/search/{id}                            │
    │    PUT  /students/update/{id}                            │
    │    DELETE /students/delete/{id}                          │
    │    GET  /            GET /health                         │
    │                                                          │
    │  Exception Handlers:                                     │
    │    Validation→400 │ Auth→401 │ Permission→403 │ 404 │ 500│
    └──────────────────────────────────────────────────────────┘

Every error body is {"error": <message>, "request_id": <id>}.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from student_api import __version__
from student_api.config import settings
from student_api.database import dispose_engine
from student_api.exceptions import StudentAPIError
from student_api.middleware.logging import RequestLoggingMiddleware
from student_api.middleware.request_id import RequestIDMiddleware, request_id_var
from student_api.routes import auth, health, pages, students

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the whole process.

    Format: 2024-01-15T12:00:00 [INFO] student_api.access: POST /login 200 ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("asyncpg").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, configuration check.
    Shutdown: dispose the database engine.
    """
    setup_logging()
    logger.info("Student Records API %s starting up...", __version__)

    # The server still starts so /health can report the problem
    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.warning("Configuration warning: %s", str(e))

    logger.info("Student table: %s", settings.student_table)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Student Records API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def current_request_id(request: Request) -> str:
    """
    The request ID from the context, falling back to request.state.

    The catch-all handler runs in ServerErrorMiddleware, outside
    RequestIDMiddleware, where the context variable is no longer set.
    """
    return request_id_var.get("") or getattr(request.state, "request_id", "")


def error_response(
    status_code: int,
    message: str,
    headers: Optional[dict] = None,
    request_id: Optional[str] = None,
) -> JSONResponse:
    rid = request_id or request_id_var.get("")
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "request_id": rid or None},
        headers=headers,
    )


def describe_validation_errors(exc: RequestValidationError) -> str:
    """Flattens FastAPI's validation errors into one line, e.g. 'path.student_id: ...'."""
    parts = []
    for error in exc.errors():
        field = ".".join(str(x) for x in error.get("loc", ()) if x != "body")
        parts.append(f"{field}: {error.get('msg')}" if field else str(error.get("msg")))
    return "Invalid request: " + "; ".join(parts)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to HTTP responses.

        ValidationError            → 400
        RequestValidationError     → 400 (bad JSON, non-integer id, wrong types)
        AuthenticationError        → 401
        PermissionDeniedError      → 403
        NotFoundError              → 404
        DatabaseError              → 500
        StarletteHTTPException     → its own status (unknown route, bad method)
        Exception (fallback)       → 500
    """

    @app.exception_handler(StudentAPIError)
    async def handle_student_api_error(request: Request, exc: StudentAPIError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        else:
            logger.warning("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        message = describe_validation_errors(exc)
        logger.warning("[%s] Malformed request: %s", request_id_var.get(""), message)
        return error_response(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: the exception message is returned; the traceback is logged."""
        rid = current_request_id(request)
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return error_response(
            500,
            str(exc) or type(exc).__name__,
            headers={"X-Request-ID": rid} if rid else None,
            request_id=rid,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Student Records API",
        description=(
            "Register, log in, look up, update and delete student records "
            "stored in a managed PostgreSQL table."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(students.router)
    app.include_router(pages.router)
    app.include_router(health.router)

    return app


app = create_app()
