"""
FastAPI Application Entry Point.

This module creates and configures the FastAPI application instance.
It handles:
1. Application initialization (create_app factory)
2. Router registration
3. Middleware configuration (audit, security headers, CORS)
4. Exception handlers (custom exceptions, validation, database errors)
5. Startup/shutdown of the document store and AI client

Run with: uvicorn interview_coach.api.main:app --reload
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from interview_coach import __version__
from interview_coach.api.routes import (
    auth_router,
    behavioral_router,
    coach_agent_router,
    code_router,
    health_router,
    llm_router,
    mock_router,
    questions_router,
    resume_router,
    system_design_router,
)
from interview_coach.core.audit import AuditMiddleware, SecurityHeadersMiddleware
from interview_coach.core.config import DEFAULT_JWT_SECRET, Settings, get_settings
from interview_coach.core.exceptions import CoachException, DatabaseError, ValidationError
from interview_coach.core.logging_config import get_logger, setup_logging
from interview_coach.database.connection import DocumentStore, build_store
from interview_coach.llm.client import LLMClient
from interview_coach.models.common import ErrorResponse

logger = get_logger(__name__)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    401: {"model": ErrorResponse, "description": "Missing or invalid token"},
    403: {"model": ErrorResponse, "description": "Not allowed for this user"},
    404: {"model": ErrorResponse, "description": "Document not found"},
    500: {"model": ErrorResponse, "description": "Database or AI failure"},
    503: {"model": ErrorResponse, "description": "Database unavailable"},
}


def _validation_message(exc: RequestValidationError) -> ValidationError:
    """Turn FastAPI's error list into one readable ValidationError."""
    errors = exc.errors()
    if not errors:
        return ValidationError("Invalid request")
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(location) or None
    message = first.get("msg", "Invalid request")
    if field:
        message = f"{field}: {message}"
    return ValidationError(message, field=field)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[DocumentStore] = None,
    llm_client: Optional[LLMClient] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration; read from the environment when omitted
        store: Document store to use instead of one built from settings
        llm_client: AI client to use instead of one built from settings

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan manager.

        - Startup: build the store and AI client unless injected, verify the store
        - Shutdown: close the store if it was built here
        """
        logger.info(f"Starting {settings.app_name} {__version__} in {settings.app_env} mode")
        logger.info(f"LLM provider: {settings.llm_provider}")
        logger.info(f"Audit logging: {settings.enable_audit_logging}")
        if settings.jwt_secret == DEFAULT_JWT_SECRET:
            logger.warning("JWT_SECRET is not set; using the development default")

        owns_store = app.state.store is None
        if owns_store:
            app.state.store = build_store(settings)
        if app.state.llm_client is None:
            app.state.llm_client = LLMClient(settings)

        if app.state.store.check_connection():
            try:
                app.state.store.ensure_indexes()
            except PyMongoError as e:
                logger.error(f"Failed to ensure indexes: {e}")
        else:
            logger.warning("Document store unreachable at startup; requests will get 503 until it answers")

        yield  # Application runs here

        logger.info(f"Shutting down {settings.app_name}")
        if owns_store:
            app.state.store.close()

    app = FastAPI(
        title="Interview Coach API",
        description="""
    Backend for an interview-practice application.

    ## Features

    - **Question banks**: coding, system design, behavioral and LLM topics
    - **AI authoring**: admins generate questions with a generative-AI model
    - **Practice interviews**: coding, behavioral and system design sessions with AI grading
    - **Learning history**: saved practice, wrong-question review, ability map
    - **Coaching**: daily plans, goal chat, resume help
    """,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.store = store
    app.state.llm_client = llm_client

    # ============================================================
    # Middleware Configuration (Order matters!)
    # ============================================================

    app.add_middleware(SecurityHeadersMiddleware)

    if settings.enable_audit_logging:
        app.add_middleware(AuditMiddleware)

    if settings.is_development():
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=False,
            allow_methods=["*"],
            allow_headers=["*"],
        )
        logger.warning("CORS configured for development (all origins allowed)")
    else:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # ============================================================
    # Exception Handlers
    # ============================================================

    @app.exception_handler(CoachException)
    async def coach_exception_handler(request: Request, exc: CoachException):
        """Handle all custom application exceptions."""
        if exc.status_code >= 500:
            logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Report malformed bodies and parameters as 400."""
        error = _validation_message(exc)
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(PyMongoError)
    async def database_error_handler(request: Request, exc: PyMongoError):
        logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
        error = DatabaseError(f"Database operation failed: {exc}")
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Handle uncaught exceptions globally.

        Detailed error information is only included in development mode.
        """
        logger.exception(f"Unhandled exception: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_error",
                "message": "An unexpected error occurred",
                "details": str(exc) if settings.is_development() else None,
            },
        )

    # ============================================================
    # Routers
    # ============================================================

    app.include_router(health_router)
    for router in (
        auth_router,
        questions_router,
        code_router,
        behavioral_router,
        llm_router,
        system_design_router,
        mock_router,
        coach_agent_router,
        resume_router,
    ):
        app.include_router(router, responses=ERROR_RESPONSES)

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "message": "Interview Coach API",
            "version": __version__,
            "documentation": "/docs",
            "health": "/health",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "interview_coach.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=get_settings().is_development(),
    )
