"""Renderers that turn a finished book into PDF or HTML."""

from .html_builder import html_filename, render_book_html
from .images import (
    ImageFetchError,
    UnsafeImageURLError,
    check_image_url,
    decode_data_uri,
    fetch_image_as_data_uri,
    inline_book_images,
    load_raster_image,
)
from .palettes import CLASSIC_PALETTE, PagePalette, select_palette
from .pdf_builder import StorybookPDFBuilder, pdf_filename

__all__ = [
    "CLASSIC_PALETTE",
    "ImageFetchError",
    "PagePalette",
    "StorybookPDFBuilder",
    "UnsafeImageURLError",
    "check_image_url",
    "decode_data_uri",
    "fetch_image_as_data_uri",
    "html_filename",
    "inline_book_images",
    "load_raster_image",
    "pdf_filename",
    "render_book_html",
    "select_palette",
]
