"""
Picking a pasted image out of clipboard data.

A paste delivers a list of typed items (browser DataTransfer items, multipart
parts posted by the web page, or what the system clipboard holds). Only items
whose type is exactly one of the supported image MIME types are accepted.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable

from PIL import Image, ImageGrab, UnidentifiedImageError

from config import SUPPORTED_IMAGE_TYPES
from errors import UnsupportedPasteDataError
from preprocessing import ImageBlob

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClipboardItem:
    """One typed entry of pasted data.

    Attributes:
        type: MIME type announced by the source.
        get_as_file: Returns the payload, or None when the item has no file.
    """

    type: str
    get_as_file: Callable[[], ImageBlob | None]


def get_image_file_from_clipboard(items: Iterable[ClipboardItem] | None) -> ImageBlob | None:
    """Return the first supported image with a payload, or None.

    Items whose type is not exactly a supported MIME type are skipped, as
    are supported items whose payload cannot be retrieved.
    """
    if not items:
        return None

    for item in items:
        if item.type not in SUPPORTED_IMAGE_TYPES:
            continue
        payload = item.get_as_file()
        if payload:
            return payload
    return None


def require_image_from_clipboard(items: Iterable[ClipboardItem] | None) -> ImageBlob:
    """Like get_image_file_from_clipboard() but raise when nothing matches.

    Raises:
        UnsupportedPasteDataError: If no supported image is present.
    """
    image = get_image_file_from_clipboard(items)
    if image is None:
        raise UnsupportedPasteDataError()
    return image


def item_from_bytes(data: bytes, mime_type: str, name: str | None = None) -> ClipboardItem:
    """Wrap raw bytes as a clipboard item; empty data yields no payload."""
    blob = ImageBlob(data=data, mime_type=mime_type, name=name) if data else None
    return ClipboardItem(type=mime_type, get_as_file=lambda: blob)


def sniff_mime_type(data: bytes) -> str | None:
    """Identify an image MIME type from its content, or None if unreadable."""
    try:
        with Image.open(io.BytesIO(data)) as image:
            return Image.MIME.get(image.format or "")
    except (UnidentifiedImageError, OSError):
        return None


def item_from_path(path: str | Path) -> ClipboardItem:
    """Build a clipboard item from an image file, typed by its content.

    Only the header is read to decide the type; the file body is loaded
    when the item is picked.

    Raises:
        OSError: If the file cannot be opened.
    """
    path = Path(path)
    try:
        with Image.open(path) as image:
            mime_type = Image.MIME.get(image.format or "") or "application/octet-stream"
    except UnidentifiedImageError:
        mime_type = "application/octet-stream"

    def load() -> ImageBlob | None:
        data = path.read_bytes()
        return ImageBlob(data=data, mime_type=mime_type, name=path.name) if data else None

    return ClipboardItem(type=mime_type, get_as_file=load)


def read_system_clipboard_image() -> ImageBlob:
    """Return the image currently on the system clipboard as PNG.

    Some platforms put copied files on the clipboard as a list of paths;
    those are read and filtered like any other paste.

    Raises:
        UnsupportedPasteDataError: If the clipboard holds no supported image.
    """
    try:
        content = ImageGrab.grabclipboard()
    except (OSError, NotImplementedError) as exc:
        raise UnsupportedPasteDataError(
            f"{UnsupportedPasteDataError.user_message} (clipboard unreadable: {exc})"
        ) from exc

    if isinstance(content, Image.Image):
        buffer = io.BytesIO()
        content.save(buffer, format="PNG")
        logger.debug("Read %dx%d image from system clipboard", *content.size)
        return ImageBlob(data=buffer.getvalue(), mime_type="image/png", name="clipboard.png")

    if isinstance(content, list):
        items = [item_from_path(path) for path in content if Path(path).is_file()]
        return require_image_from_clipboard(items)

    raise UnsupportedPasteDataError()
