import os

# ----- Configuration ----------------------------------------------------

SERVER_NAME = "PDF-Form-Filler"
VERSION = "0.1.0"
LOGGER_NAME = "pdf-form-filler"

# Maximum accepted PDF size. Override with PDF_FORM_MAX_SIZE_MB.
MAX_PDF_SIZE_MB = int(os.getenv("PDF_FORM_MAX_SIZE_MB", "50"))
MAX_PDF_SIZE_BYTES = MAX_PDF_SIZE_MB * 1024 * 1024

LOG_LEVEL = os.getenv("PDF_FORM_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

# Temp files written by preview_pdf are named <prefix><hex>.pdf
PREVIEW_PREFIX = "pdf_form_preview_"

INSTRUCTIONS = (
    "Open a PDF with open_pdf, inspect its form with list_fields and "
    "get_field_context, fill fields with fill_field (or draw_text for static forms), "
    "then preview_pdf and save_pdf. The original file is never overwritten."
)
