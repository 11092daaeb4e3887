# Purpose: Error kinds raised while scanning a package folder and writing its manifests.
from __future__ import annotations


class ManifestError(Exception):
    """Base class for every error this package raises on purpose."""


class FilesystemError(ManifestError):
    """Path missing, unreadable, or gone while the tree was being walked."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}" if reason else path)


class DirectoryNotFound(FilesystemError):
    pass


class DirectoryEmpty(FilesystemError):
    pass


class PackageIOError(ManifestError):
    """A file could not be opened/read for hashing, or an output file could not be created."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}" if reason else path)


class SerializationError(ManifestError):
    pass
