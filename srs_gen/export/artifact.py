"""The export result and the "save/download" capability that receives it."""

from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from srs_gen.utils import ensure_dir, sanitize_filename

DEFAULT_FILENAME_TOKEN = "project"
PDF_MEDIA_TYPE = "application/pdf"

# Checked before mimetypes, whose answers vary by platform.
_KNOWN_EXTENSIONS = {
    PDF_MEDIA_TYPE: "pdf",
    "application/msword": "doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
}


class ExportArtifact(BaseModel):
    """Opaque document bytes plus the file name they should be saved under."""

    model_config = ConfigDict(frozen=True)

    content: bytes = Field(..., description="The finished paginated document")
    filename: str = Field(..., description="Suggested file name, e.g. 'Acme-SRS.pdf'")
    media_type: str = Field(default=PDF_MEDIA_TYPE)
    page_count: Optional[int] = Field(
        default=None, ge=1, description="Known when the document was laid out locally"
    )

    @property
    def size(self) -> int:
        return len(self.content)


def artifact_filename(project_name: str, extension: str = "pdf") -> str:
    """Build ``<sanitized project name or "project">-SRS.<extension>``."""
    stem = sanitize_filename(project_name, default=DEFAULT_FILENAME_TOKEN)
    return f"{stem}-SRS.{extension.lstrip('.')}"


def extension_for(media_type: str) -> str:
    """File extension (without the dot) for a document media type.

    Unknown types fall back to ``"pdf"``.
    """
    media_type = media_type.split(";", 1)[0].strip().lower()
    if media_type in _KNOWN_EXTENSIONS:
        return _KNOWN_EXTENSIONS[media_type]
    guessed = mimetypes.guess_extension(media_type) if media_type else None
    return guessed.lstrip(".") if guessed else "pdf"


def save_artifact(artifact: ExportArtifact, directory: str | Path) -> Path:
    """Write *artifact* into *directory* and return the file path.

    An existing file with the same name is overwritten.
    """
    target = ensure_dir(directory) / artifact.filename
    target.write_bytes(artifact.content)
    return target
