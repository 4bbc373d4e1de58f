"""Plain data types shared by the PDF layer, the label engine and the tools."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FieldType(str, Enum):
    TEXT = "text"
    MULTILINE = "multiline"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    DROPDOWN = "dropdown"


FieldValue = str | bool | None


@dataclass(frozen=True)
class Rect:
    """A box in page points, origin bottom-left, y growing upward."""

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_pdf_array(cls, values) -> "Rect":
        """Build from a PDF ``[x1 y1 x2 y2]`` array in any corner order."""
        x1, y1, x2, y2 = (float(v) for v in values)
        return cls(min(x1, x2), min(y1, y2), abs(x2 - x1), abs(y2 - y1))

    def union(self, other: "Rect") -> "Rect":
        left = min(self.x, other.x)
        bottom = min(self.y, other.y)
        right = max(self.x + self.width, other.x + other.width)
        top = max(self.y + self.height, other.y + other.height)
        return Rect(left, bottom, right - left, top - bottom)


@dataclass(frozen=True)
class TextRun:
    text: str
    x: float
    y: float
    width: float
    height: float

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "x": round(self.x, 2),
            "y": round(self.y, 2),
            "width": round(self.width, 2),
            "height": round(self.height, 2),
        }


@dataclass
class FormField:
    name: str
    type: FieldType
    page: int
    required: bool
    read_only: bool
    current_value: FieldValue
    options: list[str] | None = None
    rect: Rect | None = None

    def to_dict(self) -> dict:
        d: dict[str, Any] = {
            "name": self.name,
            "type": self.type.value,
            "page": self.page,
            "required": self.required,
            "readOnly": self.read_only,
            "currentValue": self.current_value,
        }
        if self.options is not None:
            d["options"] = self.options
        return d


@dataclass
class FieldContext:
    page_number: int
    inferred_label: str | None = None
    nearby_text: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        d: dict[str, Any] = {}
        if self.inferred_label is not None:
            d["inferredLabel"] = self.inferred_label
        if self.nearby_text:
            d["nearbyText"] = list(self.nearby_text)
        d["pageNumber"] = self.page_number
        return d


@dataclass
class LoadedPdf:
    document: Any  # pypdf.PdfWriter
    path: str
    page_count: int
    has_form: bool
    field_count: int


@dataclass
class PageText:
    page: int
    text: str
    items: list[TextRun] | None = None


@dataclass
class FilledField:
    name: str
    type: FieldType
    value: str | bool
    previous_value: FieldValue


@dataclass
class SaveResult:
    output_path: str
    bytes_written: int


@dataclass
class TextOverlay:
    text: str
    x: float
    y: float
    page: int
    font_size: float
    font_name: str
