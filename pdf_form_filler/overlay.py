"""Draw free text onto a page, for forms with no interactive fields."""

import io
import logging

from pypdf import PdfReader
from reportlab.pdfgen import canvas

from . import config
from .errors import InvalidPageError, OutOfBoundsError
from .models import TextOverlay

log = logging.getLogger(config.LOGGER_NAME)

# Client-facing names -> reportlab base-14 font names
FONT_MAP = {
    "Helvetica": "Helvetica",
    "TimesRoman": "Times-Roman",
    "Courier": "Courier",
}
DEFAULT_FONT = "Helvetica"
DEFAULT_FONT_SIZE = 12


def _render_overlay(text: str, x: float, y: float, font: str, size: float, page_size) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=page_size)
    c.setFillColorRGB(0, 0, 0)
    c.setFont(font, size)
    c.drawString(x, y, text)
    c.save()
    return buf.getvalue()


def draw_text_on_page(
    document,
    text: str,
    x: float,
    y: float,
    page: int,
    font_size: float = DEFAULT_FONT_SIZE,
    font_name: str = DEFAULT_FONT,
) -> TextOverlay:
    """Stamp black text with its baseline at (x, y) on a 1-indexed page."""
    page_count = len(document.pages)
    if page < 1 or page > page_count:
        raise InvalidPageError(page, page_count)
    if font_name not in FONT_MAP:
        raise ValueError(f"Unsupported font '{font_name}'. Use one of: {', '.join(FONT_MAP)}")

    pdf_page = document.pages[page - 1]
    box = pdf_page.mediabox
    left, bottom = float(box.left), float(box.bottom)
    right, top = float(box.right), float(box.top)

    if x < left or x > right:
        raise OutOfBoundsError("x", x, right, left)
    if y < bottom or y > top:
        raise OutOfBoundsError("y", y, top, bottom)

    # overlay spans from the origin so page space coordinates need no shift
    overlay = _render_overlay(text, x, y, FONT_MAP[font_name], font_size, (right, top))
    pdf_page.merge_page(PdfReader(io.BytesIO(overlay)).pages[0])

    log.info(f"Drew {text!r} at ({x}, {y}) on page {page}")
    return TextOverlay(text=text, x=x, y=y, page=page, font_size=font_size, font_name=font_name)
