"""
FastAPI entrypoint for TrackNest backend application.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from tracknest.core.config import settings
from tracknest.core.exceptions import AuthError, TrackNestError
from tracknest.core.utils import describe_validation_errors, format_error
from tracknest.api.router import api_router
from tracknest.api.routes import auth
from tracknest.db.init_db import startup

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    startup()
    yield


app = FastAPI(
    title="TrackNest API",
    description="Backend API for personal workout, diet and symptom journaling",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(TrackNestError)
async def handle_app_error(request: Request, exc: TrackNestError):
    """Translate the error taxonomy into status codes."""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    message = exc.message
    if exc.status_code >= 500:
        # Already logged where it happened; keep details out of the response
        message = "Internal server error"
    return JSONResponse(status_code=exc.status_code, content=format_error(message), headers=headers)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    """Malformed bodies, unknown enum names and bad parameters are 400s."""
    return JSONResponse(status_code=400, content=format_error(describe_validation_errors(exc.errors())))


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=format_error(str(exc.detail)),
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content=format_error("Internal server error"))


# Include API routes
app.include_router(auth.router)
app.include_router(api_router, prefix="/api")


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "healthy"}
