"""The currently open document, owned by the server instance."""

import logging
from dataclasses import dataclass
from typing import Any

from . import config
from .errors import NoSessionError

log = logging.getLogger(config.LOGGER_NAME)


@dataclass
class PdfSession:
    document: Any  # pypdf.PdfWriter
    file_path: str  # changes after a save
    original_path: str
    page_count: int
    is_modified: bool = False


class SessionStore:
    """Holds zero or one open document. Opening a new one replaces the old."""

    def __init__(self):
        self._active: PdfSession | None = None

    def open(self, session: PdfSession) -> PdfSession:
        if self._active is not None and self._active.is_modified:
            log.warning(f"Discarding unsaved changes to {self._active.original_path}")
        self._active = session
        return session

    def get_active(self) -> PdfSession:
        if self._active is None:
            raise NoSessionError()
        return self._active

    def is_active(self) -> bool:
        return self._active is not None

    def mark_modified(self) -> None:
        if self._active is not None:
            self._active.is_modified = True

    def mark_saved(self, path: str) -> None:
        if self._active is not None:
            self._active.file_path = path
            self._active.is_modified = False

    def clear(self) -> None:
        self._active = None
