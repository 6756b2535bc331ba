"""
Automation Editor API
FastAPI application serving the visual workflow editor model

Architecture:
- Graph model: store, mutator, builder, serializer
- Editor sessions: one per open editor
- Persistence API client: the only outbound call, on save
"""
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from automation_editor.api.routes import health, catalog, editor
from automation_editor.core.config import get_settings
from automation_editor.core.errors import (
    AutomationApiError,
    CannotDeleteTrigger,
    DuplicateId,
    DuplicateTrigger,
    EditorError,
    InvalidEditorState,
    NotFound
)
from automation_editor.core.logging import setup_logging, get_logger

# Initialize logging
setup_logging()
logger = get_logger(__name__)

# Get settings
settings = get_settings()

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Visual workflow automation editor: trigger + action graph flattened to automation definitions"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# CUSTOM EXCEPTION HANDLERS
# ============================================================================

# Checked in order; anything else derived from EditorError is a 422
ERROR_STATUS = [
    (NotFound, status.HTTP_404_NOT_FOUND),
    (DuplicateId, status.HTTP_409_CONFLICT),
    (DuplicateTrigger, status.HTTP_409_CONFLICT),
    (CannotDeleteTrigger, status.HTTP_409_CONFLICT),
    (InvalidEditorState, status.HTTP_409_CONFLICT),
    (AutomationApiError, status.HTTP_502_BAD_GATEWAY),
]


def status_for(exc: EditorError) -> int:
    for error_type, status_code in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_422_UNPROCESSABLE_ENTITY


@app.exception_handler(EditorError)
async def editor_exception_handler(request: Request, exc: EditorError):
    """
    Editor errors are scoped to one session; report them and keep serving
    """
    status_code = status_for(exc)
    logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc.message}")

    return JSONResponse(status_code=status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Custom handler for request validation errors
    Provides clearer error messages for API consumers
    """
    errors = []
    for error in exc.errors():
        field = " -> ".join(str(x) for x in error["loc"])
        errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"]
        })

    logger.warning(f"Validation error on {request.url.path}: {errors}")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation Error",
            "message": "Request validation failed. Please check the required fields and formats.",
            "details": errors
        }
    )


# ============================================================================
# INCLUDE API ROUTERS
# ============================================================================

app.include_router(health.router)
app.include_router(catalog.router)
app.include_router(editor.router)


# ============================================================================
# ROOT ENDPOINT
# ============================================================================

@app.get("/", tags=["Health"])
async def root():
    """Root endpoint with API information"""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "endpoints": [
            "/health",
            "/catalog",
            "/editor/sessions"
        ]
    }


# ============================================================================
# STARTUP/SHUTDOWN EVENTS
# ============================================================================

@app.on_event("startup")
async def startup_event():
    """Application startup"""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Automation API: {settings.AUTOMATION_API_BASE_URL}")
    logger.info(f"Action ordering: {settings.ACTION_ORDERING}")


@app.on_event("shutdown")
async def shutdown_event():
    """Application shutdown"""
    logger.info(f"Shutting down {settings.APP_NAME}")


# ============================================================================
# MAIN (for running directly)
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "automation_editor.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
