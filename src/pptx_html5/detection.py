from __future__ import annotations

from pathlib import Path

PPTX_EXTENSION = ".pptx"
PPTX_MIME = "application/vnd.openxmlformats-officedocument.presentationml.presentation"


def accepts_upload(
    filename: str | None,
    content_type: str | None,
    allowed_mime_types: tuple[str, ...] = (PPTX_MIME,),
) -> bool:
    if content_type and content_type in allowed_mime_types:
        return True
    return Path(filename or "").suffix.lower() == PPTX_EXTENSION


__all__ = ["PPTX_EXTENSION", "PPTX_MIME", "accepts_upload"]
