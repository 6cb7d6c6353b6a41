"""
Job Board - Main Application

FastAPI backend with:
- PostgreSQL (SQLAlchemy ORM) for users, companies, jobs, applications
- MongoDB as a short-lived response cache
- JWT authentication in HTTP-only cookies

Run: uvicorn jobboard.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobboard import __version__
from jobboard.api.routes import api_router
from jobboard.core.config import get_settings
from jobboard.db.database import check_db_connection, init_db
from jobboard.db.mongodb import check_mongo_connection, init_mongo_indexes
from jobboard.logging_config import setup_logging

setup_logging()

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and cache indexes on startup."""
    logger.info("Starting Job Board API...")
    init_db()

    if settings.cache_enabled:
        try:
            init_mongo_indexes()
        except PyMongoError as e:
            logger.warning(f"MongoDB index initialization failed, cache will degrade to misses: {e}")

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title="Job Board API",
    description="""
    Job seekers search, save and apply to jobs; companies post jobs and
    review applications.

    ## Features
    - **Authentication**: cookie-based JWT access/refresh tokens, Google sign-in
    - **Jobs**: search, filter, paginate, save and apply
    - **Companies**: job posting and application review
    - **Profiles**: job seeker profile management
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Cookies need explicit origins for credentialed requests in production
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as {"error": message}."""
    if exc.status_code >= 500:
        logger.error(f"HTTP {exc.status_code} on {request.method} {request.url.path}: {exc.detail}")
    elif exc.status_code >= 400:
        logger.debug(f"HTTP {exc.status_code} on {request.method} {request.url.path}: {exc.detail}")

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Request validation failures are 400s naming the first bad field."""
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
        message = f"{field}: {first.get('msg')}" if field else first.get("msg", message)

    return JSONResponse(
        status_code=400,
        content={"error": message, "details": jsonable_encoder(errors)},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log unhandled errors with traceback and answer with a generic 500."""
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


app.include_router(api_router, prefix="/api")


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "database": "connected" if check_db_connection() else "disconnected",
        "cache": (
            ("connected" if check_mongo_connection() else "disconnected")
            if settings.cache_enabled else "disabled"
        ),
    }
