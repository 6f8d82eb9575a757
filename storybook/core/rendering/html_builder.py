"""
Render a finished book as a standalone interactive HTML page.
"""

from jinja2 import Environment, PackageLoader, select_autoescape

from storybook.config import STORY_CONSTANTS
from ..types import Book
from .palettes import PagePalette, select_palette

_environment = Environment(
    loader=PackageLoader("storybook.core.rendering", "templates"),
    autoescape=select_autoescape(["html", "j2"]),
)


def html_filename(title: str) -> str:
    return f"{(title or 'storybook').replace(' ', '_')}.html"


def render_book_html(book: Book, palette: PagePalette = None, signature: str = None) -> str:
    """
    Render the book into a single HTML document.

    All text is escaped by the template. Images are embedded as given, so
    call `inline_book_images` first for a fully offline file.
    """
    palette = palette or select_palette(book.full_text)
    template = _environment.get_template("book.html.j2")

    return template.render(
        book=book,
        pages=list(book.iter_pages()),
        signature=signature or STORY_CONSTANTS["signature"],
        colors={
            "background": PagePalette.to_hex(palette.background),
            "border": PagePalette.to_hex(palette.border),
            "text": PagePalette.to_hex(palette.text),
            "accent": PagePalette.to_hex(palette.accent),
        },
    )
