"""
TechTales presentation core

FastAPI application entry point. The app plays the backend-for-frontend of a
single browser tab: it owns one session store and hands it to every handler.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from techtales.api.deps import install_services
from techtales.api.middleware.request_id import RequestIdMiddleware
from techtales.api.v1 import router as api_v1_router
from techtales.config import get_settings
from techtales.data_access.seed import seed_demo_content
from techtales.database import async_session_maker, close_db, init_db
from techtales.errors import (
    AuthCancelled,
    CommentValidationError,
    DataAccessFailure,
    DuplicateEmail,
    InvalidCredentials,
    TechTalesError,
    Unauthenticated,
)
from techtales.logging_config import configure_logging, get_logger
from techtales.schemas.common import HealthResponse

settings = get_settings()
logger = get_logger(__name__)

ERROR_STATUS = {
    InvalidCredentials: status.HTTP_401_UNAUTHORIZED,
    Unauthenticated: status.HTTP_401_UNAUTHORIZED,
    DuplicateEmail: status.HTTP_409_CONFLICT,
    AuthCancelled: status.HTTP_400_BAD_REQUEST,
    DataAccessFailure: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan handler.

    Runs startup and shutdown tasks.
    """
    configure_logging(
        log_level=settings.log_level,
        environment=settings.environment,
        debug=settings.debug,
    )

    logger.info("Starting %s v%s", settings.project_name, settings.version)
    await init_db()
    if settings.seed_demo_content:
        await seed_demo_content(async_session_maker)
    store = await install_services(app, async_session_maker)
    logger.info("Session store ready", extra={"authenticated": store.is_authenticated})

    yield

    logger.info("Shutting down...")
    await close_db()
    logger.info("Database connections closed")


app = FastAPI(
    title=settings.project_name,
    description="""
    TechTales presentation core.

    - **Session**: mock login, signup, provider signup, logout and profile updates
    - **Articles**: article pages with rendered markdown, related reading, likes and bookmarks
    - **Comments**: post and delete comments as the signed-in user
    - **Navigation**: site links and the account menu
    """,
    version=settings.version,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


_cors_origins = [
    "http://localhost:5173",  # Vite default
    "http://localhost:8080",
    "http://127.0.0.1:5173",
]

# Last added = outermost, so CORS wraps every response
app.add_middleware(RequestIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_headers(request: Request) -> dict:
    """CORS and request-id headers for error responses."""
    origin = request.headers.get("origin") or ""
    headers = {
        "Access-Control-Allow-Origin": origin if origin in _cors_origins else _cors_origins[0],
        "Access-Control-Allow-Credentials": "true",
    }
    req_id = getattr(request.state, "request_id", None)
    if req_id:
        headers["X-Request-ID"] = req_id
    return headers


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=_error_headers(request),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": "Validation error", "errors": errors},
        headers=_error_headers(request),
    )


@app.exception_handler(CommentValidationError)
async def comment_validation_handler(request: Request, exc: CommentValidationError):
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": "Validation error",
            "errors": [{"field": exc.field, "message": str(exc), "type": exc.error_type}],
        },
        headers=_error_headers(request),
    )


@app.exception_handler(TechTalesError)
async def techtales_error_handler(request: Request, exc: TechTalesError):
    """Map identity and data access errors to status codes."""
    status_code = next(
        (code for error_type, code in ERROR_STATUS.items() if isinstance(exc, error_type)),
        status.HTTP_400_BAD_REQUEST,
    )
    if isinstance(exc, DataAccessFailure):
        logger.error("Data access failure: %s", exc)
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "code": type(exc).__name__},
        headers=_error_headers(request),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception("Unhandled exception: %s", exc)
    req_id = getattr(request.state, "request_id", None)
    if settings.debug:
        content = {"detail": str(exc), "type": type(exc).__name__, "request_id": req_id}
    else:
        content = {"detail": "Internal server error", "request_id": req_id}
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
        headers=_error_headers(request),
    )


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(request: Request):
    """Check application health."""
    store = getattr(request.app.state, "session_store", None)
    return HealthResponse(
        status="ok",
        version=settings.version,
        database="connected",
        authenticated=bool(store and store.is_authenticated),
    )


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.project_name,
        "version": settings.version,
        "docs": "/docs" if settings.debug else "disabled",
        "api": {
            "v1": settings.api_v1_prefix,
        },
    }


app.include_router(
    api_v1_router,
    prefix=settings.api_v1_prefix,
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "techtales.main:app",
        host="127.0.0.1",
        port=8000,
        reload=settings.debug,
    )
