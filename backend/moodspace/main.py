"""
FastAPI entrypoint for Mood Space application.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from moodspace.core.config import settings
from moodspace.core.errors import MoodSpaceError, RecordNotSavedError, ValidationError
from moodspace.core.logging import configure_logging
from moodspace.core.utils import format_error
from moodspace.api.router import api_router
from moodspace.api.routes import pages

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Mood Space API",
    description="Personal mood tracking with supportive responses and trends",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(MoodSpaceError)
async def mood_space_error_handler(request: Request, exc: MoodSpaceError):
    """Render application errors as {"error": message}."""
    body = format_error(exc.message, exc.details)
    if isinstance(exc, RecordNotSavedError):
        body["ai"] = exc.ai_response
    return JSONResponse(status_code=exc.status_code, content=body)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Reject invalid input before any store access."""
    details = [
        {"loc": list(err.get("loc", [])), "msg": err.get("msg")}
        for err in exc.errors()
    ]
    return await mood_space_error_handler(request, ValidationError("Invalid request", details))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    """Collapse anything else to a 500."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    message = str(exc) if settings.EXPOSE_ERROR_DETAILS else "Internal server error"
    return JSONResponse(status_code=500, content=format_error(message or exc.__class__.__name__))


# Include API routes
app.include_router(api_router, prefix="/api")

# Server-rendered pages: /, /login, /dashboard
app.include_router(pages.router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
