"""Locally selected files."""

import mimetypes
from dataclasses import dataclass
from pathlib import Path

from threshold_viewer.core.config import ACCEPTED_MEDIA_PREFIX

FALLBACK_MEDIA_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class SelectedFile:
    """A file picked by the user: raw bytes plus declared media type."""

    content: bytes
    media_type: str
    filename: str = "upload"

    @property
    def is_image(self) -> bool:
        return self.media_type.lower().startswith(ACCEPTED_MEDIA_PREFIX)

    @classmethod
    def from_path(cls, path: str | Path) -> "SelectedFile":
        path = Path(path)
        media_type, _ = mimetypes.guess_type(path.name)
        return cls(
            content=path.read_bytes(),
            media_type=media_type or FALLBACK_MEDIA_TYPE,
            filename=path.name,
        )

    def __repr__(self) -> str:
        return f"SelectedFile(filename={self.filename!r}, media_type={self.media_type!r}, size={len(self.content)})"
