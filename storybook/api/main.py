"""FastAPI application for the Illustrated Storybook Generator."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storybook.config import is_venice_enabled

from .config import API_PREFIX, CORS_ORIGINS, LOG_FORMAT, LOG_LEVEL
from .logging import configure_logging
from .routes import books, diagnostics, exports, images, models

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown."""
    configure_logging(
        json_format=LOG_FORMAT == "json",
        level=getattr(logging, LOG_LEVEL, logging.INFO),
    )
    if is_venice_enabled():
        logger.info("Venice.ai API key configured")
    else:
        logger.warning("Venice.ai API key missing - serving offline fallback content")

    yield


app = FastAPI(
    title="Illustrated Storybook Generator API",
    description="""
Generate illustrated 8-page children's books with Venice.ai.

## Features
- **Story writing**: storyboard, grade-appropriate prose and a consistent main character
- **Illustrations**: cover, page and end-page art from allow-listed safe image models
- **Export**: print-ready PDF or a standalone interactive HTML book

Without a Venice.ai key every endpoint answers with offline placeholder content.
    """,
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials="*" not in CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render errors as {"error": ...}; dict details are passed through."""
    content = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={"error": "Invalid request body.", "details": jsonable_encoder(exc.errors())},
    )


# Include routers
app.include_router(books.router, prefix=API_PREFIX, tags=["Books"])
app.include_router(images.router, prefix=API_PREFIX, tags=["Images"])
app.include_router(models.router, prefix=API_PREFIX, tags=["Models"])
app.include_router(diagnostics.router, prefix=API_PREFIX, tags=["Diagnostics"])
app.include_router(exports.router, prefix=API_PREFIX, tags=["Export"])


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
