"""
Render a finished book into a printable landscape A4 PDF.

Layout (millimetres, measured from the top-left corner):
- Cover: the cover illustration, full bleed
- Story pages: palette background, border inset 5, square illustration of side
  height / 1.8 placed 15 from the top with a 2 offset shadow, centred text
  20 below the illustration, page number near the bottom-right corner
- End page: illustration of side height / 2 placed 20 from the top, signature
  line 30 below it, small corner decorations

Images must already be inlined as data URIs (see `inline_book_images`).
"""

from io import BytesIO
from typing import Optional

from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from storybook.config import STORY_CONSTANTS
from ..types import Book
from .images import load_raster_image
from .palettes import PagePalette, select_palette

PAGE_SIZE = landscape(A4)

BORDER_INSET = 5 * mm
BORDER_WIDTH = 1 * mm
SHADOW_OFFSET = 2 * mm
PAGE_IMAGE_TOP = 15 * mm
TEXT_GAP = 20 * mm
TEXT_SIDE_MARGIN = 30 * mm
PAGE_NUMBER_RIGHT = 25 * mm
PAGE_NUMBER_BOTTOM = 20 * mm
END_IMAGE_TOP = 20 * mm
SIGNATURE_GAP = 30 * mm
DECORATION_INSET = 15 * mm

BODY_FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"
BODY_FONT_SIZE = 18
MIN_BODY_FONT_SIZE = 11
LINE_HEIGHT_FACTOR = 1.15


def pdf_filename(title: str) -> str:
    """File name for a book's PDF: the title with spaces as underscores."""
    return f"{(title or 'storybook').replace(' ', '_')}.pdf"


class StorybookPDFBuilder:
    """
    Lay a Book out onto PDF pages with reportlab.

    Args:
        signature: Line printed on the end page
        palette: Fixed palette; chosen from the story text when omitted
    """

    def __init__(self, signature: str = None, palette: Optional[PagePalette] = None):
        self.signature = signature or STORY_CONSTANTS["signature"]
        self.palette = palette

    def build(self, book: Book) -> bytes:
        """Render the book and return the PDF bytes."""
        buffer = BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=PAGE_SIZE)
        pdf.setTitle(book.title)
        pdf.setSubject(book.summary or "")

        width, height = PAGE_SIZE
        palette = self.palette or select_palette(book.full_text)

        self._draw_cover_page(pdf, book, palette, width, height)
        pdf.showPage()

        for number, text, image_url in book.iter_pages():
            self._draw_story_page(pdf, number, text, image_url, palette, width, height)
            pdf.showPage()

        self._draw_end_page(pdf, book, palette, width, height)
        pdf.showPage()

        pdf.save()
        return buffer.getvalue()

    def write(self, book: Book, output_path) -> None:
        with open(output_path, "wb") as handle:
            handle.write(self.build(book))

    # ------------------------------------------------------------------ pages

    def _draw_cover_page(
        self,
        pdf: canvas.Canvas,
        book: Book,
        palette: PagePalette,
        width: float,
        height: float,
    ) -> None:
        image = load_raster_image(book.cover_image_url)
        if image is not None:
            pdf.drawImage(ImageReader(image), 0, 0, width, height)
            return

        self._fill_page(pdf, palette.accent, width, height)
        pdf.setFillColorRGB(*PagePalette.to_unit(palette.text))
        pdf.setFont(BOLD_FONT, 32)
        for index, line in enumerate(simpleSplit(book.title, BOLD_FONT, 32, width - 2 * TEXT_SIDE_MARGIN)):
            pdf.drawCentredString(width / 2, height / 2 - index * 32 * LINE_HEIGHT_FACTOR, line)

    def _draw_story_page(
        self,
        pdf: canvas.Canvas,
        number: int,
        text: str,
        image_url: str,
        palette: PagePalette,
        width: float,
        height: float,
    ) -> None:
        self._draw_background(pdf, palette, width, height)

        image_size = height / 1.8
        image_x = (width - image_size) / 2
        image_y = height - PAGE_IMAGE_TOP - image_size
        self._draw_framed_image(pdf, image_url, image_x, image_y, image_size, palette)

        text_width = width - 2 * TEXT_SIDE_MARGIN
        baseline = image_y - TEXT_GAP
        font_size, lines = self._fit_text(text, text_width, baseline - BORDER_INSET)

        pdf.setFillColorRGB(*PagePalette.to_unit(palette.text))
        pdf.setFont(BODY_FONT, font_size)
        leading = font_size * LINE_HEIGHT_FACTOR
        for index, line in enumerate(lines):
            pdf.drawCentredString(width / 2, baseline - index * leading, line)

        pdf.setFont(BOLD_FONT, 14)
        pdf.drawCentredString(width - PAGE_NUMBER_RIGHT, PAGE_NUMBER_BOTTOM - 14 * 0.35, str(number))

    def _draw_end_page(
        self,
        pdf: canvas.Canvas,
        book: Book,
        palette: PagePalette,
        width: float,
        height: float,
    ) -> None:
        self._draw_background(pdf, palette, width, height)

        image_size = height / 2
        image_x = (width - image_size) / 2
        image_y = height - END_IMAGE_TOP - image_size
        self._draw_framed_image(pdf, book.end_page_image_url, image_x, image_y, image_size, palette)

        pdf.setFillColorRGB(*PagePalette.to_unit(palette.text))
        pdf.setFont(BOLD_FONT, 24)
        pdf.drawCentredString(width / 2, image_y - SIGNATURE_GAP, self.signature)

        pdf.setFillColorRGB(*PagePalette.to_unit(palette.border))
        pdf.setFont(BODY_FONT, 12)
        pdf.drawCentredString(DECORATION_INSET, height - DECORATION_INSET, "*")
        pdf.drawCentredString(width - DECORATION_INSET, height - DECORATION_INSET, "*")
        pdf.drawCentredString(DECORATION_INSET, DECORATION_INSET, "+")

    # ------------------------------------------------------------------ helpers

    @staticmethod
    def _fill_page(pdf: canvas.Canvas, color, width: float, height: float) -> None:
        pdf.setFillColorRGB(*PagePalette.to_unit(color))
        pdf.rect(0, 0, width, height, stroke=0, fill=1)

    def _draw_background(self, pdf: canvas.Canvas, palette: PagePalette, width: float, height: float) -> None:
        self._fill_page(pdf, palette.background, width, height)

        pdf.saveState()
        pdf.setStrokeColorRGB(*PagePalette.to_unit(palette.border))
        pdf.setLineWidth(BORDER_WIDTH)
        pdf.rect(
            BORDER_INSET,
            BORDER_INSET,
            width - 2 * BORDER_INSET,
            height - 2 * BORDER_INSET,
            stroke=1,
            fill=0,
        )
        pdf.restoreState()

    def _draw_framed_image(
        self,
        pdf: canvas.Canvas,
        image_url: str,
        x: float,
        y: float,
        size: float,
        palette: PagePalette,
    ) -> None:
        pdf.saveState()
        pdf.setFillColorCMYK(0, 0, 0, 0.1)
        pdf.rect(x + SHADOW_OFFSET, y - SHADOW_OFFSET, size, size, stroke=0, fill=1)
        pdf.restoreState()

        image = load_raster_image(image_url)
        if image is not None:
            pdf.drawImage(ImageReader(image), x, y, size, size)
            return

        # Placeholder panel for SVG art and unreadable images
        pdf.saveState()
        pdf.setFillColorRGB(*PagePalette.to_unit(palette.accent))
        pdf.setStrokeColorRGB(*PagePalette.to_unit(palette.border))
        pdf.roundRect(x, y, size, size, 6 * mm, stroke=1, fill=1)
        pdf.restoreState()

    @staticmethod
    def _fit_text(text: str, width: float, available_height: float) -> tuple[float, list[str]]:
        """Wrap text at the body size, shrinking the font until it fits."""
        font_size = BODY_FONT_SIZE
        while True:
            lines = simpleSplit(text or "", BODY_FONT, font_size, width)
            needed = len(lines) * font_size * LINE_HEIGHT_FACTOR
            if needed <= available_height or font_size <= MIN_BODY_FONT_SIZE:
                return font_size, lines
            font_size -= 1
