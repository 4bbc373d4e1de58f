"""
MCP server – read, understand and fill PDF forms.

Tools operate on a single open document held in a ``SessionStore``:

    open_pdf                 open and validate a PDF, returns a summary
    list_fields              field metadata as JSON, optionally for one page
    get_field_context        field metadata plus the label inferred from page text
    fill_field               fill a field, asking the user for the value when needed
    draw_text                stamp text on a page (static forms)
    preview_pdf              open the current state in the system viewer
    save_pdf                 write the edited document to a new file
    get_page_content         plain text of a page
    get_text_with_positions  text runs of a page with coordinates

Failures are returned to the client as tool errors; nothing here exits the
process.
"""

import json
import logging
import os
import tempfile
import uuid
from typing import Literal

from mcp.server.fastmcp import Context, FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from . import config, viewer
from .errors import InvalidPageError, ReadOnlyFieldError, format_tool_error
from .fields import extract_fields, get_field
from .labels import build_field_context
from .models import FieldContext, FieldType, FormField
from .overlay import DEFAULT_FONT, DEFAULT_FONT_SIZE, draw_text_on_page
from .reader import load_pdf
from .session import PdfSession, SessionStore
from .text import extract_page_text, extract_text_with_positions
from .writer import fill_field as fill_pdf_field
from .writer import save_pdf as save_pdf_file

log = logging.getLogger(config.LOGGER_NAME)

FontName = Literal["Helvetica", "TimesRoman", "Courier"]


def _fail(error: Exception) -> ToolError:
    message = format_tool_error(error)
    log.warning(message)
    return ToolError(message)


def _summary(path: str, page_count: int, field_count: int) -> str:
    if field_count:
        kind = f"Interactive Form with {field_count} fields"
    else:
        kind = "Static PDF (no form fields). Use get_text_with_positions and draw_text to fill it"
    return "\n".join([
        f"Successfully opened PDF: {os.path.basename(path)}",
        f"Path: {path}",
        f"Pages: {page_count}",
        f"Type: {kind}",
    ])


def value_schema(field: FormField) -> dict:
    """JSON schema used to elicit a value of the right shape for a field."""
    match field.type:
        case FieldType.CHECKBOX:
            schema = {"type": "boolean"}
        case FieldType.RADIO | FieldType.DROPDOWN:
            schema = {"type": "string", "enum": list(field.options or [])}
        case FieldType.TEXT | FieldType.MULTILINE:
            schema = {"type": "string"}
    schema["title"] = field.name
    return schema


def field_context(document, field: FormField) -> FieldContext:
    """Infer a field's label; extraction failures give an empty context."""
    if field.rect is None:
        return FieldContext(page_number=field.page)
    try:
        page_text = extract_text_with_positions(document, field.page)
    except Exception as e:
        log.warning(f"Text extraction failed for page {field.page}: {e}")
        return FieldContext(page_number=field.page)
    return build_field_context(field.rect, field.page, page_text.items or [])


def create_server(store: SessionStore | None = None) -> FastMCP:
    """Build a server with every tool registered against ``store``."""
    store = store if store is not None else SessionStore()

    mcp = FastMCP(config.SERVER_NAME, instructions=config.INSTRUCTIONS)

    @mcp.tool()
    def open_pdf(path: str) -> str:
        """Open a PDF file and get a document summary: page count, form fields and document type."""
        try:
            loaded = load_pdf(path)
        except Exception as e:
            raise _fail(e) from e
        store.open(PdfSession(
            document=loaded.document,
            file_path=loaded.path,
            original_path=loaded.path,
            page_count=loaded.page_count,
        ))
        return _summary(loaded.path, loaded.page_count, loaded.field_count)

    @mcp.tool()
    def list_fields(page: int | None = None) -> str:
        """List the form fields of the open PDF (name, type, page, current value), optionally for one page (1-indexed)."""
        try:
            session = store.get_active()
            if page is not None and (page < 1 or page > session.page_count):
                raise InvalidPageError(page, session.page_count)
            fields = extract_fields(session.document)
        except Exception as e:
            raise _fail(e) from e
        if page is not None:
            fields = [f for f in fields if f.page == page]
        return json.dumps([f.to_dict() for f in fields], indent=2)

    @mcp.tool()
    def get_field_context(fieldName: str) -> str:
        """Get a form field's metadata together with its inferred label and the text near it."""
        try:
            session = store.get_active()
            field = get_field(session.document, fieldName)
        except Exception as e:
            raise _fail(e) from e
        context = field_context(session.document, field)
        return json.dumps({"field": field.to_dict(), "context": context.to_dict()}, indent=2)

    @mcp.tool()
    async def fill_field(fieldName: str, ctx: Context, value: str | bool | None = None) -> str:
        """
        Fill a form field in the open PDF. When no value is given the user is
        asked for one of the right type (text, true/false, or one of the options).
        """
        try:
            session = store.get_active()
            field = get_field(session.document, fieldName)
            if field.read_only:
                raise ReadOnlyFieldError(fieldName)

            if value is None:
                result = await ctx.session.elicit(
                    message=f'Please provide a value for field "{fieldName}"',
                    requestedSchema={
                        "type": "object",
                        "properties": {fieldName: value_schema(field)},
                        "required": [fieldName],
                    },
                    related_request_id=ctx.request_id,
                )
                content = result.content or {}
                if result.action != "accept" or not isinstance(content.get(fieldName), (str, bool)):
                    log.info(f"Filling '{fieldName}' was cancelled or declined")
                    return "Field filling cancelled or declined by user."
                value = content[fieldName]

            filled = fill_pdf_field(session.document, fieldName, value)
        except Exception as e:
            raise _fail(e) from e

        store.mark_modified()
        return (
            f'Successfully filled field "{fieldName}" with value: {filled.value} '
            f"(Previous: {filled.previous_value})"
        )

    @mcp.tool()
    def draw_text(
        text: str,
        x: float,
        y: float,
        page: int,
        fontSize: float = DEFAULT_FONT_SIZE,
        fontName: FontName = DEFAULT_FONT,
    ) -> str:
        """Draw text at page coordinates (points, origin bottom-left) on a 1-indexed page."""
        try:
            session = store.get_active()
            drawn = draw_text_on_page(session.document, text, x, y, page, fontSize, fontName)
        except Exception as e:
            raise _fail(e) from e
        store.mark_modified()
        return (
            f'Drew "{drawn.text}" at ({drawn.x:g}, {drawn.y:g}) on page {drawn.page} '
            f"with {drawn.font_name} {drawn.font_size:g}pt"
        )

    @mcp.tool()
    def preview_pdf() -> str:
        """Open the current PDF in the system default viewer for visual inspection."""
        try:
            session = store.get_active()
            if not session.is_modified:
                viewer.open_file(session.file_path)
                which = "original" if session.file_path == session.original_path else "saved"
                return f"Opened {which} file in viewer: {session.file_path}"

            temp_path = os.path.join(
                tempfile.gettempdir(), f"{config.PREVIEW_PREFIX}{uuid.uuid4().hex[:8]}.pdf"
            )
            saved = save_pdf_file(session.document, session.original_path, temp_path)
            viewer.open_file(saved.output_path)
        except Exception as e:
            raise _fail(e) from e
        return f"Saved changes to temporary file and opened in viewer: {saved.output_path}"

    @mcp.tool()
    def save_pdf(outputPath: str | None = None) -> str:
        """Save the PDF to a new file (default {original}_filled.pdf). The original file is never modified."""
        try:
            session = store.get_active()
            saved = save_pdf_file(session.document, session.original_path, outputPath)
        except Exception as e:
            raise _fail(e) from e
        store.mark_saved(saved.output_path)
        return f"Successfully saved PDF to: {saved.output_path} ({saved.bytes_written} bytes)"

    @mcp.tool()
    def get_page_content(page: int) -> str:
        """Extract the text content of a page (1-indexed)."""
        try:
            session = store.get_active()
            page_text = extract_page_text(session.document, page)
        except Exception as e:
            raise _fail(e) from e
        return page_text.text

    @mcp.tool()
    def get_text_with_positions(page: int) -> str:
        """Get each text item on a page with its x, y, width and height in points."""
        try:
            session = store.get_active()
            page_text = extract_text_with_positions(session.document, page)
            pdf_page = session.document.pages[page - 1]
        except Exception as e:
            raise _fail(e) from e
        return json.dumps({
            "page": page,
            "width": float(pdf_page.mediabox.width),
            "height": float(pdf_page.mediabox.height),
            "text": page_text.text,
            "items": [item.to_dict() for item in page_text.items or []],
        }, indent=2)

    return mcp
