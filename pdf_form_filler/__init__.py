"""MCP server for reading, understanding and filling PDF forms."""

from .config import SERVER_NAME, VERSION
from .labels import build_field_context, infer_label
from .models import FieldContext, FieldType, FormField, Rect, TextRun
from .server import create_server
from .session import PdfSession, SessionStore

__version__ = VERSION

__all__ = [
    "SERVER_NAME",
    "VERSION",
    "FieldContext",
    "FieldType",
    "FormField",
    "PdfSession",
    "Rect",
    "SessionStore",
    "TextRun",
    "build_field_context",
    "create_server",
    "infer_label",
]
