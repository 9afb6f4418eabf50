"""DocumentSpec — what the user asked to create."""

from __future__ import annotations

from pydantic import BaseModel

from odtctl.domain.errors import EmptyFilenameError

ODT_EXTENSION = ".odt"


def normalize_filename(raw: str | None) -> str:
    """Trim *raw* and reject it if nothing is left.

    Filesystem-illegal characters are not checked here; the OS reports
    those when the file is written.
    """
    filename = (raw or "").strip()
    if not filename:
        raise EmptyFilenameError()
    return filename


class DocumentSpec(BaseModel):
    """A filename (without extension) and the body text of the single paragraph."""

    model_config = {"frozen": True}

    filename: str
    body_text: str = ""

    @classmethod
    def create(cls, filename: str | None, body_text: str = "") -> DocumentSpec:
        return cls(filename=normalize_filename(filename), body_text=body_text)

    @property
    def file_name(self) -> str:
        return f"{self.filename}{ODT_EXTENSION}"
