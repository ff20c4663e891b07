"""
Clipboard helpers: choosing a pasted image and copying text back.
"""

from .paste import (
    ClipboardItem,
    get_image_file_from_clipboard,
    item_from_bytes,
    item_from_path,
    read_system_clipboard_image,
    require_image_from_clipboard,
    sniff_mime_type,
)
from .copy_text import copy_text_to_clipboard

__all__ = [
    "ClipboardItem",
    "get_image_file_from_clipboard",
    "item_from_bytes",
    "item_from_path",
    "read_system_clipboard_image",
    "require_image_from_clipboard",
    "sniff_mime_type",
    "copy_text_to_clipboard",
]
