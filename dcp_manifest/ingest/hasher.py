# Purpose: SHA-1 content digest for packing-list Hash fields.
from __future__ import annotations
import hashlib
import logging

from dcp_manifest.errors import PackageIOError

log = logging.getLogger("dcp_manifest.hasher")

BLOCK_SIZE = 1 << 16


def digest(path: str, strict: bool = False) -> str:
    """
    Lowercase hex SHA-1 of the file at `path`, streamed in blocks.

    A failed open or read is logged and the digest of whatever was consumed
    so far is returned (the empty-content digest if nothing was read).
    Such a value is not trustworthy. Pass strict=True to raise
    PackageIOError instead.
    """
    h = hashlib.sha1()
    try:
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(BLOCK_SIZE), b""):
                h.update(chunk)
    except OSError as exc:
        if strict:
            raise PackageIOError(path, exc.strerror or str(exc)) from exc
        log.error("hash of %s is incomplete: %s", path, exc)
    return h.hexdigest()
