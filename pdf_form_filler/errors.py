"""
Error types raised by the PDF layer and the session store.

Every error carries a stable ``code`` and a ``category`` so that the tool
layer can report it as a readable message with the error flag set.
"""

from enum import Enum

from .config import MAX_PDF_SIZE_BYTES


class ErrorCode(str, Enum):
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    NOT_A_PDF = "NOT_A_PDF"
    INVALID_PDF = "INVALID_PDF"
    PROTECTED_PDF = "PROTECTED_PDF"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    FIELD_NOT_FOUND = "FIELD_NOT_FOUND"
    INVALID_PAGE = "INVALID_PAGE"
    READ_ONLY_FIELD = "READ_ONLY_FIELD"
    INVALID_FIELD_VALUE = "INVALID_FIELD_VALUE"
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    SAVE_FAILED = "SAVE_FAILED"
    PREVIEW_FAILED = "PREVIEW_FAILED"
    NO_SESSION = "NO_SESSION"


class ErrorCategory(str, Enum):
    FILE_ACCESS = "file-access"
    VALIDATION = "validation"
    FIELD_STATE = "field-state"
    SESSION_STATE = "session-state"


class PdfFormError(Exception):
    """Base class for every error the server reports back to the client."""

    code: ErrorCode
    category: ErrorCategory


# ----- File access ------------------------------------------------------

class FileNotFoundPdfError(PdfFormError):
    code = ErrorCode.FILE_NOT_FOUND
    category = ErrorCategory.FILE_ACCESS

    def __init__(self, path: str):
        super().__init__(f"PDF file not found: {path}")
        self.path = path


class NotAPdfError(PdfFormError):
    code = ErrorCode.NOT_A_PDF
    category = ErrorCategory.FILE_ACCESS

    def __init__(self, path: str):
        super().__init__(f"File is not a PDF: {path}")
        self.path = path


class InvalidPdfError(PdfFormError):
    code = ErrorCode.INVALID_PDF
    category = ErrorCategory.FILE_ACCESS

    def __init__(self, path: str, reason: str | None = None):
        message = f"Invalid PDF file: {path}"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)
        self.path = path
        self.reason = reason


class ProtectedPdfError(PdfFormError):
    code = ErrorCode.PROTECTED_PDF
    category = ErrorCategory.FILE_ACCESS

    def __init__(self, path: str):
        super().__init__(f"PDF is password protected: {path}")
        self.path = path


class FileTooLargeError(PdfFormError):
    code = ErrorCode.FILE_TOO_LARGE
    category = ErrorCategory.FILE_ACCESS

    def __init__(self, path: str, size_bytes: int, limit_bytes: int = MAX_PDF_SIZE_BYTES):
        size_mb = size_bytes / 1024 / 1024
        limit_mb = limit_bytes / 1024 / 1024
        super().__init__(
            f"PDF file too large: {path} ({size_mb:.2f}MB exceeds {limit_mb:.0f}MB limit)"
        )
        self.path = path
        self.size_bytes = size_bytes


class SaveError(PdfFormError):
    code = ErrorCode.SAVE_FAILED
    category = ErrorCategory.FILE_ACCESS

    def __init__(self, path: str, reason: str):
        super().__init__(f"Error saving PDF to {path}: {reason}")
        self.path = path
        self.reason = reason


class PreviewError(PdfFormError):
    code = ErrorCode.PREVIEW_FAILED
    category = ErrorCategory.FILE_ACCESS

    def __init__(self, reason: str):
        super().__init__(f"Error opening PDF viewer: {reason}")
        self.reason = reason


# ----- Validation -------------------------------------------------------

class InvalidPageError(PdfFormError):
    code = ErrorCode.INVALID_PAGE
    category = ErrorCategory.VALIDATION

    def __init__(self, page: int, page_count: int):
        super().__init__(f"Invalid page number: {page}. PDF has {page_count} page(s)")
        self.page = page
        self.page_count = page_count


class OutOfBoundsError(PdfFormError):
    code = ErrorCode.OUT_OF_BOUNDS
    category = ErrorCategory.VALIDATION

    def __init__(self, axis: str, value: float, limit: float, origin: float = 0):
        super().__init__(
            f"Coordinate {axis}={value:g} is out of bounds (must be between {origin:g} and {limit:g})"
        )
        self.axis = axis
        self.value = value
        self.origin = origin
        self.limit = limit


class InvalidFieldValueError(PdfFormError):
    code = ErrorCode.INVALID_FIELD_VALUE
    category = ErrorCategory.VALIDATION

    def __init__(self, field_name: str, value: str, options: list[str]):
        super().__init__(
            f"Invalid value '{value}' for field '{field_name}'. "
            f"Valid options: {', '.join(options)}"
        )
        self.field_name = field_name
        self.value = value
        self.options = options


# ----- Field state ------------------------------------------------------

class FieldNotFoundError(PdfFormError):
    code = ErrorCode.FIELD_NOT_FOUND
    category = ErrorCategory.FIELD_STATE

    def __init__(self, field_name: str):
        super().__init__(f"Field '{field_name}' not found in PDF")
        self.field_name = field_name


class ReadOnlyFieldError(PdfFormError):
    code = ErrorCode.READ_ONLY_FIELD
    category = ErrorCategory.FIELD_STATE

    def __init__(self, field_name: str):
        super().__init__(f"Field '{field_name}' is read-only and cannot be modified")
        self.field_name = field_name


# ----- Session state ----------------------------------------------------

class NoSessionError(PdfFormError):
    code = ErrorCode.NO_SESSION
    category = ErrorCategory.SESSION_STATE

    def __init__(self, message: str = "No active PDF session. Use open_pdf first."):
        super().__init__(message)


def format_tool_error(error: BaseException) -> str:
    """Turn any exception into the message returned to the client."""
    if isinstance(error, PdfFormError):
        return str(error)
    message = str(error)
    if message:
        return f"Error: {message}"
    return f"Unknown error occurred: {type(error).__name__}"
