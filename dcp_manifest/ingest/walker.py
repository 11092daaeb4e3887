# Purpose: Walk a package folder and yield its entries in native directory order.
from __future__ import annotations
import logging
import os
from enum import Enum
from typing import Iterable, Iterator, List, NamedTuple

from dcp_manifest.errors import FilesystemError

log = logging.getLogger("dcp_manifest.walker")


class FailurePolicy(str, Enum):
    ABORT = "abort"   # raise FilesystemError on the first problem
    SKIP = "skip"     # log it and carry on with whatever is still readable


class FileEntry(NamedTuple):
    full_path: str
    base_name: str
    is_regular_file: bool
    size_in_bytes: int


def _fail(policy: FailurePolicy, path: str, exc: OSError) -> None:
    err = FilesystemError(path, exc.strerror or str(exc))
    if policy is FailurePolicy.ABORT:
        raise err from exc
    log.warning("skipping unreadable entry %s", err)


def _entry_for(dirent: os.DirEntry, policy: FailurePolicy) -> FileEntry | None:
    try:
        regular = dirent.is_file(follow_symlinks=False)
        size = dirent.stat(follow_symlinks=False).st_size if regular else 0
    except OSError as exc:
        _fail(policy, dirent.path, exc)
        return None
    return FileEntry(dirent.path, dirent.name, regular, size)


def walk(root: str, policy: FailurePolicy = FailurePolicy.ABORT) -> Iterator[FileEntry]:
    """
    Depth-first walk of `root`, lazily yielding every entry (directories,
    symlinks and special files included; consumers filter on
    `is_regular_file`). Order is whatever os.scandir reports, not sorted.
    Symlinked directories are listed but not descended into.

    Under ABORT an unreadable root raises FilesystemError; under SKIP it is
    logged and the walk yields nothing.
    """
    policy = FailurePolicy(policy)
    try:
        it = os.scandir(root)
    except OSError as exc:
        _fail(policy, root, exc)
        return

    with it:
        while True:
            try:
                dirent = next(it)
            except StopIteration:
                break
            except OSError as exc:
                # directory vanished or became unreadable mid-listing
                _fail(policy, root, exc)
                break

            entry = _entry_for(dirent, policy)
            if entry is None:
                continue
            yield entry

            try:
                is_dir = dirent.is_dir(follow_symlinks=False)
            except OSError as exc:
                _fail(policy, dirent.path, exc)
                continue
            if is_dir:
                yield from walk(dirent.path, policy)


def collect(root: str, policy: FailurePolicy = FailurePolicy.ABORT,
            exclude: Iterable[str] = ()) -> List[FileEntry]:
    """Regular files under `root` in traversal order; `exclude` names are dropped at the top level only."""
    skip = set(exclude)
    top = os.path.normpath(root)
    files: List[FileEntry] = []
    for entry in walk(root, policy):
        if not entry.is_regular_file:
            continue
        if entry.base_name in skip and os.path.dirname(os.path.normpath(entry.full_path)) == top:
            continue
        files.append(entry)
    log.debug("collected %d regular files under %s", len(files), root)
    return files
