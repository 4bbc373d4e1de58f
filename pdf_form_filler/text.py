"""
Page text extraction, with or without positions.

Positions come from pypdf's text visitor: the text matrix at the start of a
run composed with the current transformation matrix gives its baseline origin
in page space. Widths are measured with reportlab's metrics for the standard
fonts and fall back to Helvetica for anything else.
"""

import logging
import math

from reportlab.pdfbase import pdfmetrics

from . import config
from .errors import InvalidPageError
from .models import PageText, TextRun

log = logging.getLogger(config.LOGGER_NAME)

FALLBACK_FONT = "Helvetica"


def _mult(m, n):
    """Multiply two PDF affine matrices given as 6-item sequences."""
    return [
        m[0] * n[0] + m[1] * n[2],
        m[0] * n[1] + m[1] * n[3],
        m[2] * n[0] + m[3] * n[2],
        m[2] * n[1] + m[3] * n[3],
        m[4] * n[0] + m[5] * n[2] + n[4],
        m[4] * n[1] + m[5] * n[3] + n[5],
    ]


def _base_font(font_dict) -> str:
    if not font_dict:
        return FALLBACK_FONT
    name = str(font_dict.get("/BaseFont", "")).lstrip("/")
    name = name.split("+", 1)[-1]  # subset prefix, e.g. ABCDEF+Helvetica
    return name if name in pdfmetrics.standardFonts else FALLBACK_FONT


def _text_width(text: str, font_dict, size: float) -> float:
    font = _base_font(font_dict)
    try:
        return pdfmetrics.stringWidth(text, font, size)
    except (KeyError, ValueError) as e:
        log.debug(f"No metrics for {text!r} in {font}, estimating width: {e}")
        return len(text) * size * 0.5



def _check_page(document, page: int) -> None:
    page_count = len(document.pages)
    if page < 1 or page > page_count:
        raise InvalidPageError(page, page_count)


def page_runs(pdf_page) -> list[TextRun]:
    runs: list[TextRun] = []

    def visitor(text, cm, tm, font_dict, font_size):
        text = text.strip()
        if not text:
            return
        matrix = _mult([float(v) for v in tm], [float(v) for v in cm])
        scale = math.hypot(matrix[2], matrix[3]) or 1.0
        size = float(font_size or 0) * scale
        runs.append(TextRun(
            text=text,
            x=matrix[4],
            y=matrix[5],
            width=_text_width(text, font_dict, size),
            height=size,
        ))

    pdf_page.extract_text(visitor_text=visitor)
    return runs


def extract_page_text(document, page: int) -> PageText:
    _check_page(document, page)
    text = document.pages[page - 1].extract_text() or ""
    return PageText(page=page, text=text.strip())


def extract_all_text(document) -> list[PageText]:
    return [extract_page_text(document, number) for number in range(1, len(document.pages) + 1)]


def extract_text_with_positions(document, page: int) -> PageText:
    """Text of one page plus every run with its x, y, width and height."""
    _check_page(document, page)
    runs = page_runs(document.pages[page - 1])
    log.debug(f"Extracted {len(runs)} text run(s) from page {page}")
    return PageText(page=page, text=" ".join(run.text for run in runs), items=runs)
