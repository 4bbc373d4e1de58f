import os

import pytest
from pypdf.generic import NameObject, NumberObject

from pdf_form_filler.errors import (
    FieldNotFoundError,
    InvalidFieldValueError,
    ReadOnlyFieldError,
    SaveError,
)
from pdf_form_filler.fields import FF_PUSHBUTTON, find_field_node, get_field
from pdf_form_filler.models import FieldType
from pdf_form_filler.reader import load_pdf
from pdf_form_filler.writer import default_output_path, fill_field, save_pdf


def test_fill_text_field_trims_value(simple_doc):
    filled = fill_field(simple_doc, "name", "  John Doe  ")
    assert filled.type == FieldType.TEXT
    assert filled.value == "John Doe"
    assert filled.previous_value is None
    assert get_field(simple_doc, "name").current_value == "John Doe"


def test_fill_reports_previous_value(simple_doc):
    fill_field(simple_doc, "comments", "first")
    filled = fill_field(simple_doc, "comments", "second")
    assert filled.previous_value == "first"
    assert filled.type == FieldType.MULTILINE


@pytest.mark.parametrize("value, expected", [(True, True), ("true", True), ("TRUE", True), ("no", False), (False, False)])
def test_fill_checkbox(simple_doc, value, expected):
    filled = fill_field(simple_doc, "agree_terms", value)
    assert filled.value is expected
    assert get_field(simple_doc, "agree_terms").current_value is expected


def test_uncheck_checkbox(simple_doc):
    fill_field(simple_doc, "agree_terms", True)
    filled = fill_field(simple_doc, "agree_terms", False)
    assert filled.previous_value is True
    assert get_field(simple_doc, "agree_terms").current_value is False


def test_fill_radio(simple_doc):
    filled = fill_field(simple_doc, "gender", "female")
    assert filled.value == "female"
    assert get_field(simple_doc, "gender").current_value == "female"

    fill_field(simple_doc, "gender", "other")
    assert get_field(simple_doc, "gender").current_value == "other"


def test_radio_widgets_follow_selection(simple_doc):
    fill_field(simple_doc, "gender", "female")
    states = [str(w.get_object()["/AS"]) for w in find_field_node(simple_doc, "gender").widgets]
    assert states == ["/Off", "/female", "/Off"]


def test_fill_radio_rejects_unknown_option(simple_doc):
    with pytest.raises(InvalidFieldValueError) as excinfo:
        fill_field(simple_doc, "gender", "unknown")
    assert "male" in excinfo.value.options


def test_fill_dropdown(simple_doc):
    filled = fill_field(simple_doc, "country", "Canada")
    assert filled.previous_value == "United States"
    assert get_field(simple_doc, "country").current_value == "Canada"


def test_fill_dropdown_rejects_unknown_option(simple_doc):
    with pytest.raises(InvalidFieldValueError, match="Valid options"):
        fill_field(simple_doc, "country", "Atlantis")


def test_fill_unknown_field(simple_doc):
    with pytest.raises(FieldNotFoundError):
        fill_field(simple_doc, "missing", "x")


def test_fill_push_button_is_not_a_field(simple_doc):
    node = find_field_node(simple_doc, "agree_terms").node
    node[NameObject("/Ff")] = NumberObject(FF_PUSHBUTTON)
    with pytest.raises(FieldNotFoundError):
        get_field(simple_doc, "agree_terms")
    with pytest.raises(FieldNotFoundError, match="agree_terms"):
        fill_field(simple_doc, "agree_terms", "hello")
    assert node.get("/V") != "hello"


def test_fill_read_only_field(pdfs):
    document = load_pdf(pdfs.read_only).document
    with pytest.raises(ReadOnlyFieldError, match="read-only"):
        fill_field(document, "reference", "REF-999")
    assert get_field(document, "reference").current_value == "REF-001"


def test_fill_sets_need_appearances(simple_doc):
    fill_field(simple_doc, "name", "Jane")
    assert bool(simple_doc.root_object["/AcroForm"]["/NeedAppearances"]) is True


def test_default_output_path():
    assert default_output_path("/tmp/form.pdf") == "/tmp/form_filled.pdf"
    assert default_output_path("/tmp/FORM.PDF") == "/tmp/FORM_filled.PDF"


def test_save_default_path(pdfs, tmp_path):
    source = tmp_path / "copy.pdf"
    source.write_bytes(open(pdfs.simple_form, "rb").read())
    document = load_pdf(str(source)).document
    fill_field(document, "name", "Saved Name")

    result = save_pdf(document, str(source))
    assert result.output_path == str(tmp_path / "copy_filled.pdf")
    assert result.bytes_written == os.path.getsize(result.output_path)

    reopened = load_pdf(result.output_path).document
    assert get_field(reopened, "name").current_value == "Saved Name"


def test_save_creates_directories(simple_doc, pdfs, tmp_path):
    target = tmp_path / "nested" / "dir" / "out.pdf"
    result = save_pdf(simple_doc, pdfs.simple_form, str(target))
    assert result.output_path == str(target)
    assert target.exists()


def test_save_refuses_to_overwrite_original(simple_doc, pdfs):
    with pytest.raises(SaveError, match="same as original"):
        save_pdf(simple_doc, pdfs.simple_form, pdfs.simple_form)


def test_save_wraps_io_errors(simple_doc, pdfs, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory")
    with pytest.raises(SaveError, match="Error saving PDF"):
        save_pdf(simple_doc, pdfs.simple_form, str(blocker / "out.pdf"))
