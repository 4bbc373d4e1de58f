"""Shared fixtures: sample PDFs generated with reportlab's AcroForm support."""

from types import SimpleNamespace

import pytest
from pypdf import PdfReader, PdfWriter
from reportlab.pdfgen import canvas

from pdf_form_filler.reader import load_pdf
from pdf_form_filler.server import create_server
from pdf_form_filler.session import SessionStore

LETTER = (612, 792)


def make_simple_form(path):
    """Text, checkbox, dropdown, radio group and multiline fields, each with a label."""
    c = canvas.Canvas(str(path), pagesize=LETTER)
    form = c.acroForm

    c.setFont("Helvetica", 18)
    c.drawString(50, 742, "Simple Form Test PDF")

    c.setFont("Helvetica", 12)
    c.drawString(50, 720, "Name:")
    form.textfield(name="name", x=50, y=700, width=200, height=20, value="", fieldFlags="")

    c.drawString(50, 670, "Email:")
    form.textfield(name="email", x=50, y=650, width=200, height=20, value="", fieldFlags="required")

    c.drawString(70, 602, "I agree to the terms:")
    form.checkbox(name="agree_terms", x=50, y=600, size=15, checked=False, fieldFlags="")

    c.drawString(50, 570, "Country:")
    form.choice(
        name="country",
        value="United States",
        options=["United States", "Canada", "United Kingdom", "Australia", "Other"],
        x=50, y=550, width=200, height=20,
        fieldFlags="combo",
    )

    c.drawString(50, 520, "Gender:")
    for option, y in (("male", 500), ("female", 480), ("other", 460)):
        form.radio(
            name="gender", value=option, selected=False,
            x=50, y=y, size=15, fieldFlags="noToggleToOff radio",
        )
    c.setFont("Helvetica", 10)
    c.drawString(70, 502, "Male")
    c.drawString(70, 482, "Female")
    c.drawString(70, 462, "Other")

    c.setFont("Helvetica", 12)
    c.drawString(50, 450, "Comments:")
    form.textfield(name="comments", x=50, y=380, width=300, height=60, value="", fieldFlags="multiline")

    c.showPage()
    c.save()


def make_multi_page(path):
    c = canvas.Canvas(str(path), pagesize=LETTER)
    form = c.acroForm

    c.setFont("Helvetica", 16)
    c.drawString(50, 750, "Page 1: Personal Information")
    c.setFont("Helvetica", 12)
    c.drawString(50, 700, "First Name:")
    form.textfield(name="first_name", x=50, y=680, width=200, height=20, value="", fieldFlags="")
    c.drawString(50, 640, "Last Name:")
    form.textfield(name="last_name", x=50, y=620, width=200, height=20, value="", fieldFlags="")
    c.showPage()

    c.setFont("Helvetica", 16)
    c.drawString(50, 750, "Page 2: Contact Information")
    c.setFont("Helvetica", 12)
    c.drawString(50, 700, "Phone:")
    form.textfield(name="phone", x=50, y=680, width=200, height=20, value="", fieldFlags="")
    c.drawString(50, 660, "Address:")
    form.textfield(name="address", x=50, y=620, width=300, height=40, value="", fieldFlags="multiline")
    c.showPage()

    c.setFont("Helvetica", 16)
    c.drawString(50, 750, "Page 3: Preferences")
    c.setFont("Helvetica", 12)
    c.drawString(70, 702, "Subscribe to newsletter")
    form.checkbox(name="subscribe_newsletter", x=50, y=700, size=15, checked=False, fieldFlags="")
    c.showPage()
    c.save()


def make_empty(path):
    c = canvas.Canvas(str(path), pagesize=LETTER)
    c.setFont("Helvetica", 18)
    c.drawString(50, 750, "Empty PDF Test")
    c.setFont("Helvetica", 12)
    c.drawString(50, 700, "This PDF has no form fields.")
    c.showPage()
    c.save()


def make_read_only(path):
    c = canvas.Canvas(str(path), pagesize=LETTER)
    c.setFont("Helvetica", 12)
    c.drawString(50, 720, "Reference number:")
    c.acroForm.textfield(name="reference", x=50, y=700, width=200, height=20,
                         value="REF-001", fieldFlags="readOnly")
    c.showPage()
    c.save()


def make_protected(path, source):
    writer = PdfWriter(clone_from=PdfReader(str(source)))
    writer.encrypt("secret")
    with open(path, "wb") as f:
        writer.write(f)


@pytest.fixture(scope="session")
def pdfs(tmp_path_factory):
    root = tmp_path_factory.mktemp("pdfs")
    paths = SimpleNamespace(
        simple_form=str(root / "simple-form.pdf"),
        multi_page=str(root / "multi-page.pdf"),
        empty=str(root / "empty.pdf"),
        read_only=str(root / "read-only.pdf"),
        protected=str(root / "protected.pdf"),
        corrupt=str(root / "corrupt.pdf"),
        not_pdf=str(root / "notes.txt"),
    )
    make_simple_form(paths.simple_form)
    make_multi_page(paths.multi_page)
    make_empty(paths.empty)
    make_read_only(paths.read_only)
    make_protected(paths.protected, paths.empty)
    with open(paths.corrupt, "wb") as f:
        f.write(b"this is not really a pdf")
    with open(paths.not_pdf, "w") as f:
        f.write("plain text")
    return paths


@pytest.fixture
def simple_doc(pdfs):
    return load_pdf(pdfs.simple_form).document


@pytest.fixture
def multi_doc(pdfs):
    return load_pdf(pdfs.multi_page).document


@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def server(store):
    return create_server(store)


@pytest.fixture
def anyio_backend():
    return "asyncio"
