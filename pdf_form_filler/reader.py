"""Open a PDF from disk into an editable pypdf document."""

import io
import logging
import os

from pypdf import PdfReader, PdfWriter

from . import config
from .errors import (
    FileNotFoundPdfError,
    FileTooLargeError,
    InvalidPdfError,
    NotAPdfError,
    ProtectedPdfError,
)
from .fields import extract_fields
from .models import LoadedPdf

log = logging.getLogger(config.LOGGER_NAME)


def load_pdf(file_path: str) -> LoadedPdf:
    """
    Load and validate a PDF.

    Checks run in order: the file exists, has a .pdf extension, is within the
    size limit, parses, and is not encrypted. The returned document is a
    PdfWriter clone, so fills and overlays never touch the file on disk.
    """
    path = os.path.abspath(file_path)

    if not os.path.isfile(path):
        raise FileNotFoundPdfError(path)

    if not path.lower().endswith(".pdf"):
        raise NotAPdfError(path)

    size = os.path.getsize(path)
    if size > config.MAX_PDF_SIZE_BYTES:
        raise FileTooLargeError(path, size, config.MAX_PDF_SIZE_BYTES)

    with open(path, "rb") as f:
        pdf_bytes = f.read()

    try:
        reader = PdfReader(io.BytesIO(pdf_bytes))
        encrypted = reader.is_encrypted
        if not encrypted:
            len(reader.pages)  # force the page tree to parse
    except Exception as e:
        log.warning(f"Could not parse {path}: {e}")
        raise InvalidPdfError(path, str(e)) from e

    if encrypted:
        raise ProtectedPdfError(path)

    try:
        document = PdfWriter(clone_from=reader)
    except Exception as e:
        raise InvalidPdfError(path, str(e)) from e

    fields = extract_fields(document)
    loaded = LoadedPdf(
        document=document,
        path=path,
        page_count=len(document.pages),
        has_form=len(fields) > 0,
        field_count=len(fields),
    )
    log.info(f"Loaded {path}: {loaded.page_count} page(s), {loaded.field_count} form field(s)")
    return loaded
