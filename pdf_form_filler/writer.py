"""Filling form fields and saving the edited document."""

import io
import logging
import os

from pypdf.generic import BooleanObject, NameObject, TextStringObject

from . import config
from .errors import FieldNotFoundError, InvalidFieldValueError, ReadOnlyFieldError, SaveError
from .fields import (
    FF_READ_ONLY,
    OFF,
    field_options,
    field_type,
    field_value,
    find_field_node,
    inherited,
    on_state,
)
from .models import FieldType, FilledField, SaveResult

log = logging.getLogger(config.LOGGER_NAME)


def _set_need_appearances(document) -> None:
    try:
        acroform = document.root_object.get("/AcroForm")
        if acroform is not None:
            acroform.get_object()[NameObject("/NeedAppearances")] = BooleanObject(True)
    except Exception as e:
        log.warning(f"Could not set NeedAppearances flag: {e}")


def _refresh_appearance(document, field_name: str, value: str, widgets) -> None:
    """Regenerate the visible appearance of a text or choice field where pypdf can."""
    for page in document.pages:
        annots = page.get("/Annots")
        if annots is None:
            continue
        annot_ids = {getattr(ref, "idnum", None) for ref in annots.get_object()}
        if not any(getattr(w, "idnum", None) in annot_ids for w in widgets):
            continue
        try:
            document.update_page_form_field_values(page, {field_name: value})
        except Exception as e:
            log.warning(f"Could not regenerate appearance for '{field_name}': {e}")


def _checkbox_value(value: str | bool) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


def _set_button_state(node, widgets, selected: str | None) -> None:
    """Select the widget whose on-state is ``selected`` (a /Name) and turn the rest off."""
    node[NameObject("/V")] = NameObject(selected or OFF)
    for ref in widgets:
        widget = ref.get_object()
        state = on_state(widget)
        widget[NameObject("/AS")] = NameObject(state if state == selected else OFF)


def fill_field(document, field_name: str, value: str | bool) -> FilledField:
    """
    Set a field's value.

    Text fields take the trimmed string; checkboxes take a bool or "true";
    radio groups and dropdowns only accept one of their declared options.
    """
    field_node = find_field_node(document, field_name)
    node, widgets = field_node.node, field_node.widgets
    ftype = field_type(node)
    if ftype is None:
        # push buttons and signatures are not listed, so not fillable either
        raise FieldNotFoundError(field_name)

    if int(inherited(node, "/Ff") or 0) & FF_READ_ONLY:
        raise ReadOnlyFieldError(field_name)

    previous = field_value(node, ftype, widgets)

    match ftype:
        case FieldType.TEXT | FieldType.MULTILINE:
            new_value = str(value).strip()
            node[NameObject("/V")] = TextStringObject(new_value)
            _refresh_appearance(document, field_name, new_value, widgets)
        case FieldType.CHECKBOX:
            new_value = _checkbox_value(value)
            state = on_state(widgets[0].get_object()) if widgets else "/Yes"
            _set_button_state(node, widgets, state if new_value else None)
        case FieldType.RADIO:
            new_value = str(value)
            options = field_options(node, ftype, widgets) or []
            if new_value not in options:
                raise InvalidFieldValueError(field_name, new_value, options)
            _set_button_state(node, widgets, f"/{new_value}")
        case FieldType.DROPDOWN:
            new_value = str(value)
            options = field_options(node, ftype, widgets) or []
            if new_value not in options:
                raise InvalidFieldValueError(field_name, new_value, options)
            node[NameObject("/V")] = TextStringObject(new_value)
            if "/I" in node:
                del node["/I"]
            _refresh_appearance(document, field_name, new_value, widgets)

    _set_need_appearances(document)
    log.info(f"Filled '{field_name}' ({ftype.value}): {previous!r} -> {new_value!r}")
    return FilledField(name=field_name, type=ftype, value=new_value, previous_value=previous)


def default_output_path(original_path: str) -> str:
    root, ext = os.path.splitext(original_path)
    if ext.lower() == ".pdf":
        return f"{root}_filled{ext}"
    return f"{original_path}_filled.pdf"


def save_pdf(document, original_path: str, output_path: str | None = None) -> SaveResult:
    """
    Write the document to ``output_path`` (default ``<original>_filled.pdf``).

    The original file is never overwritten. Missing parent directories are
    created and an existing file at the target is replaced.
    """
    target = os.path.abspath(output_path or default_output_path(original_path))

    if target == os.path.abspath(original_path):
        raise SaveError(target, "Output path cannot be the same as original file")

    try:
        os.makedirs(os.path.dirname(target), exist_ok=True)
        buf = io.BytesIO()
        document.write(buf)
        pdf_bytes = buf.getvalue()
        with open(target, "wb") as f:
            f.write(pdf_bytes)
    except Exception as e:
        raise SaveError(target, str(e)) from e

    log.info(f"Saved {len(pdf_bytes)} bytes to {target}")
    return SaveResult(output_path=target, bytes_written=len(pdf_bytes))
