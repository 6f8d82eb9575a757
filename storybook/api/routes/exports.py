"""PDF and HTML export endpoints."""

import asyncio
import logging
from urllib.parse import quote

import httpx
from fastapi import APIRouter, HTTPException, Response, status

from storybook.core.rendering import (
    StorybookPDFBuilder,
    UnsafeImageURLError,
    html_filename,
    inline_book_images,
    pdf_filename,
    render_book_html,
)
from storybook.core.types import Book

from ..dependencies import HttpClient
from ..models.requests import ExportRequest

logger = logging.getLogger(__name__)

router = APIRouter()


def _attachment(filename: str) -> dict:
    ascii_name = filename.encode("ascii", "ignore").decode("ascii") or "storybook"
    return {
        "Content-Disposition": f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"
    }


async def _inline(book: Book, client: httpx.AsyncClient) -> Book:
    try:
        return await inline_book_images(book, client)
    except UnsafeImageURLError as e:
        logger.warning(f"Refused illustration URL for export: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Image URLs must be public https addresses.", "details": str(e)},
        ) from e
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Could not fetch illustrations for export: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to export the book.", "details": str(e)},
        ) from e


@router.post(
    "/export/pdf",
    summary="Export a book as PDF",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
async def export_pdf(request: ExportRequest, client: HttpClient):
    """Render a finished book as a landscape A4 PDF."""
    book = await _inline(request.to_book(), client)
    builder = StorybookPDFBuilder(signature=request.signature)
    pdf_bytes = await asyncio.to_thread(builder.build, book)

    logger.info(f'Exported PDF for "{book.title}" ({len(pdf_bytes)} bytes)')
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers=_attachment(pdf_filename(book.title)),
    )


@router.post(
    "/export/html",
    summary="Export a book as standalone HTML",
    response_class=Response,
    responses={200: {"content": {"text/html": {}}}},
)
async def export_html(request: ExportRequest, client: HttpClient):
    """Render a finished book as a self-contained interactive HTML page."""
    book = await _inline(request.to_book(), client)
    html = render_book_html(book, signature=request.signature)

    return Response(
        content=html,
        media_type="text/html; charset=utf-8",
        headers=_attachment(html_filename(book.title)),
    )
