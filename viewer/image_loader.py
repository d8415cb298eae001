"""
image_loader.py
===============
Decode stage of the viewer: turns an uploaded file into a self-describing
data URI suitable for JSON transport.

Only the declared media type is checked; the bytes themselves are forwarded
as-is.
"""

from __future__ import annotations

import base64
import mimetypes
from dataclasses import dataclass
from typing import Optional

NOT_AN_IMAGE_MESSAGE = "Please upload an image file"
EMPTY_FILE_MESSAGE   = "The selected file is empty"


class ImageValidationError(ValueError):
    """Raised when an uploaded file cannot be used as an analysis image."""


@dataclass(frozen=True)
class EncodedImage:
    filename: str
    media_type: str
    data: bytes

    @property
    def data_uri(self) -> str:
        payload = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.media_type};base64,{payload}"


def resolve_media_type(filename: str, media_type: Optional[str]) -> str:
    """Prefer the browser-declared type; fall back to guessing from the name."""
    if media_type:
        return media_type.strip().lower()
    guessed, _ = mimetypes.guess_type(filename)
    return (guessed or "").lower()


def load_image(filename: str, data: bytes, media_type: Optional[str] = None) -> EncodedImage:
    media = resolve_media_type(filename, media_type)
    if not media.startswith("image/"):
        raise ImageValidationError(NOT_AN_IMAGE_MESSAGE)
    if not data:
        raise ImageValidationError(EMPTY_FILE_MESSAGE)
    return EncodedImage(filename=filename, media_type=media, data=data)
