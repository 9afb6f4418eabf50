"""Filesystem operations for dated document folders.

INVARIANT: Nothing here streams. Documents arrive as a fully built byte
buffer and are written with a single call, so a failed build never leaves
a half-written file behind. A crash during the write itself can still
truncate the file.

Existing files are overwritten (last write wins). Re-running on the same
day against the same filename replaces the earlier document.
"""

from __future__ import annotations

from pathlib import Path

from odtctl.domain.document import ODT_EXTENSION

# ---------------------------------------------------------------------------
# Folders
# ---------------------------------------------------------------------------


def create_folder(root: Path, name: str) -> Path:
    """Create ``root/name`` and return it. An existing folder is success."""
    folder = root / name
    folder.mkdir(parents=True, exist_ok=True)
    return folder


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


def resolve_document_path(folder: Path, filename: str) -> Path:
    """Return ``folder/filename.odt``.

    Raises:
        ValueError: the resulting path escapes *folder*.
    """
    path = folder / f"{filename}{ODT_EXTENSION}"

    # Guard against path traversal via a crafted filename
    if not path.resolve().is_relative_to(folder.resolve()):
        msg = f"Path escapes document folder: {path}"
        raise ValueError(msg)

    return path


def write_document(folder: Path, filename: str, data: bytes) -> Path:
    """Write *data* to ``folder/filename.odt`` in one call, replacing any existing file."""
    path = resolve_document_path(folder, filename)
    path.write_bytes(data)
    return path


def read_document(path: Path) -> bytes:
    """Read a document back for inspection."""
    return path.read_bytes()
