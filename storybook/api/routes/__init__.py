"""API route modules."""

from . import books, diagnostics, exports, images, models

__all__ = ["books", "diagnostics", "exports", "images", "models"]
