# Purpose: Static extension -> MIME type table, so output never depends on the host's mime.types.
from __future__ import annotations
import os
from typing import Dict, Mapping, Optional

MIME_TYPES: Dict[str, str] = {
    # web/document types
    ".avif": "image/avif",
    ".css": "text/css; charset=utf-8",
    ".gif": "image/gif",
    ".htm": "text/html; charset=utf-8",
    ".html": "text/html; charset=utf-8",
    ".jpeg": "image/jpeg",
    ".jpg": "image/jpeg",
    ".js": "text/javascript; charset=utf-8",
    ".json": "application/json",
    ".mjs": "text/javascript; charset=utf-8",
    ".pdf": "application/pdf",
    ".png": "image/png",
    ".svg": "image/svg+xml",
    ".txt": "text/plain; charset=utf-8",
    ".wasm": "application/wasm",
    ".webp": "image/webp",
    ".xml": "text/xml; charset=utf-8",
    # cinema / media
    ".mxf": "application/mxf",
    ".wav": "audio/wav",
    ".tif": "image/tiff",
    ".tiff": "image/tiff",
    ".j2c": "image/j2c",
    ".jp2": "image/jp2",
    ".mov": "video/quicktime",
    ".mp4": "video/mp4",
    ".ttf": "font/ttf",
    ".otf": "font/otf",
}


def build_table(extra: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Built-in table with `extra` merged over it; keys are lowercased."""
    if not extra:
        return MIME_TYPES
    return {**MIME_TYPES, **{k.lower(): v for k, v in extra.items()}}


def type_for(filename: str, table: Optional[Mapping[str, str]] = None) -> str:
    """MIME type for `filename`'s extension; "" when unknown. Lookup is case-insensitive."""
    ext = os.path.splitext(filename)[1]
    if not ext:
        return ""
    return (MIME_TYPES if table is None else table).get(ext.lower(), "")
