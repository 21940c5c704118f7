"""FastAPI web application for LeeTracker."""

import logging
import os
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from leetracker import __version__
from leetracker.api.responses import error_response
from leetracker.api.routes import analytics, daily_summaries, problems, users, verification
from leetracker.api.routes.vocabulary import difficulties_router, languages_router, tags_router
from leetracker.database.database import init_db
from leetracker.errors import TrackerError

load_dotenv()

logger = logging.getLogger(__name__)

API_PREFIX = os.getenv("API_PREFIX", "").rstrip("/")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGIN", "http://localhost:3000").split(",")
    if origin.strip()
]

# Initialize FastAPI app
app = FastAPI(
    title="LeeTracker API",
    description="Tracks solved LeetCode problems, time spent and verified profiles",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TrackerError)
async def tracker_error_handler(request: Request, exc: TrackerError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return error_response(exc.message, exc.status_code)


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    # Any uniqueness violation that reaches the API is a conflict, whatever the column.
    logger.warning(f"{request.method} {request.url.path} hit a constraint: {exc.orig}")
    return error_response("Resource already exists", 409)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else first.get("msg", "Invalid request")
    else:
        message = "Invalid request"
    return error_response(message, 400)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(str(exc.detail), exc.status_code)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response("Internal server error", 500)


@app.on_event("startup")
def on_startup():
    init_db()


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


for router in (
    users.router,
    problems.router,
    tags_router,
    languages_router,
    difficulties_router,
    daily_summaries.router,
    analytics.router,
    verification.router,
):
    app.include_router(router, prefix=API_PREFIX)
