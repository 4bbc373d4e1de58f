"""
Form field discovery.

Walks the document's AcroForm tree and turns every terminal field into a
``FormField``: its fully-qualified name, type, page, flags, current value,
options and the rectangle its widgets occupy on that page.
"""

import logging
from dataclasses import dataclass

from pypdf.generic import IndirectObject

from . import config
from .errors import FieldNotFoundError
from .models import FieldType, FieldValue, FormField, Rect

log = logging.getLogger(config.LOGGER_NAME)

# Field flag bits (PDF 32000-1, tables 221, 226, 228)
FF_READ_ONLY = 1 << 0
FF_REQUIRED = 1 << 1
FF_MULTILINE = 1 << 12
FF_RADIO = 1 << 15
FF_PUSHBUTTON = 1 << 16

OFF = "/Off"


@dataclass
class FieldNode:
    """A terminal AcroForm field and references to its widget annotations."""

    name: str
    node: object  # pypdf DictionaryObject
    widgets: list


def _get(obj, key):
    value = obj.get(key)
    return value.get_object() if value is not None else None


def inherited(node, key):
    """Look a key up on the field, then on its ancestors."""
    while node is not None:
        if key in node:
            return _get(node, key)
        node = _get(node, "/Parent")
    return None


def name_text(name) -> str:
    return str(name)[1:] if str(name).startswith("/") else str(name)


def iter_field_nodes(document) -> list[FieldNode]:
    acroform = _get(document.root_object, "/AcroForm")
    if acroform is None:
        return []
    fields = _get(acroform, "/Fields")
    if not fields:
        return []
    out: list[FieldNode] = []
    _walk(list(fields), "", out)
    return out


def _walk(refs, parent_name: str, out: list[FieldNode]) -> None:
    for ref in refs:
        node = ref.get_object()
        partial = node.get("/T")
        if partial is None:
            name = parent_name
        else:
            name = f"{parent_name}.{partial}" if parent_name else str(partial)

        kids = _get(node, "/Kids") or []
        child_fields = [kid for kid in kids if "/T" in kid.get_object()]
        if child_fields:
            _walk(child_fields, name, out)
        else:
            widgets = list(kids) if kids else [ref]
            out.append(FieldNode(name=name, node=node, widgets=widgets))


def find_field_node(document, field_name: str) -> FieldNode:
    for field_node in iter_field_nodes(document):
        if field_node.name == field_name:
            return field_node
    raise FieldNotFoundError(field_name)


def field_type(node) -> FieldType | None:
    """Classify a field; push buttons and signatures are not fillable and give None."""
    flags = int(inherited(node, "/Ff") or 0)
    match inherited(node, "/FT"):
        case "/Tx":
            return FieldType.MULTILINE if flags & FF_MULTILINE else FieldType.TEXT
        case "/Btn":
            if flags & FF_PUSHBUTTON:
                return None
            return FieldType.RADIO if flags & FF_RADIO else FieldType.CHECKBOX
        case "/Ch":
            return FieldType.DROPDOWN
        case _:
            return None


def on_state(widget) -> str:
    """The appearance name a checkbox or radio widget uses when selected."""
    appearances = _get(widget, "/AP")
    normal = _get(appearances, "/N") if appearances is not None else None
    if normal is not None and hasattr(normal, "keys"):
        for key in normal.keys():
            if key != OFF:
                return str(key)
    return "/Yes"


def field_options(node, ftype: FieldType, widgets) -> list[str] | None:
    match ftype:
        case FieldType.DROPDOWN:
            options = []
            for entry in inherited(node, "/Opt") or []:
                entry = entry.get_object()
                # [export_value, display_text] pairs carry the value in slot 0
                options.append(str(entry[0].get_object()) if isinstance(entry, list) else str(entry))
            return options
        case FieldType.RADIO:
            options = []
            for widget in widgets:
                state = name_text(on_state(widget.get_object()))
                if state not in options:
                    options.append(state)
            return options
        case FieldType.TEXT | FieldType.MULTILINE | FieldType.CHECKBOX:
            return None


def field_value(node, ftype: FieldType, widgets) -> FieldValue:
    value = inherited(node, "/V")
    match ftype:
        case FieldType.TEXT | FieldType.MULTILINE:
            return str(value) if value else None
        case FieldType.CHECKBOX:
            if value is None and widgets:
                value = _get(widgets[0].get_object(), "/AS")
            return value is not None and value != OFF
        case FieldType.RADIO:
            if value is None or value == OFF:
                return None
            return name_text(value)
        case FieldType.DROPDOWN:
            if isinstance(value, list):
                value = value[0].get_object() if value else None
            return str(value) if value else None


def _page_index(document) -> dict[int, int]:
    """Map widget object numbers to the 1-indexed page whose /Annots lists them."""
    pages: dict[int, int] = {}
    for number, page in enumerate(document.pages, start=1):
        annots = _get(page, "/Annots")
        for ref in annots or []:
            if isinstance(ref, IndirectObject):
                pages.setdefault(ref.idnum, number)
    return pages


def _widget_page(document, widget_ref, page_index: dict[int, int]) -> int | None:
    if isinstance(widget_ref, IndirectObject) and widget_ref.idnum in page_index:
        return page_index[widget_ref.idnum]
    page_ref = widget_ref.get_object().get("/P")
    if isinstance(page_ref, IndirectObject):
        for number, page in enumerate(document.pages, start=1):
            ref = page.indirect_reference
            if ref is not None and ref.idnum == page_ref.idnum:
                return number
    return None


def _convert(document, field_node: FieldNode, ftype: FieldType, page_index: dict[int, int]) -> FormField:
    node, widgets = field_node.node, field_node.widgets
    flags = int(inherited(node, "/Ff") or 0)

    page = None
    rect = None
    for widget_ref in widgets:
        widget_page = _widget_page(document, widget_ref, page_index) or 1
        if page is None:
            page = widget_page
        if widget_page != page:
            continue
        raw = _get(widget_ref.get_object(), "/Rect")
        if raw is None:
            continue
        widget_rect = Rect.from_pdf_array(raw)
        rect = widget_rect if rect is None else rect.union(widget_rect)

    return FormField(
        name=field_node.name,
        type=ftype,
        page=page or 1,
        required=bool(flags & FF_REQUIRED),
        read_only=bool(flags & FF_READ_ONLY),
        current_value=field_value(node, ftype, widgets),
        options=field_options(node, ftype, widgets),
        rect=rect,
    )


def extract_fields(document) -> list[FormField]:
    """All fillable fields of the document, in AcroForm order."""
    page_index = _page_index(document)
    fields = []
    for field_node in iter_field_nodes(document):
        ftype = field_type(field_node.node)
        if ftype is None:
            log.debug(f"Skipping non-fillable field {field_node.name}")
            continue
        fields.append(_convert(document, field_node, ftype, page_index))
    return fields


def get_field(document, field_name: str) -> FormField:
    for form_field in extract_fields(document):
        if form_field.name == field_name:
            return form_field
    raise FieldNotFoundError(field_name)


def get_fields_by_page(document, page: int) -> list[FormField]:
    return [f for f in extract_fields(document) if f.page == page]
