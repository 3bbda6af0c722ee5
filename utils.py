"""Common utility functions shared across routes and services."""
import posixpath
import re
from typing import List, Sequence, TypeVar

from errors import IconValidationError

T = TypeVar("T")

_WINDOWS_DRIVE = re.compile(r"^[A-Za-z]:")


def validate_relative_path(path: str) -> str:
    """Reject absolute paths and parent-directory traversal.

    Purely lexical: the file system is never touched. Returns the path with
    backslashes turned into forward slashes.
    """
    if not path or not path.strip():
        raise IconValidationError("Empty path")
    if "\x00" in path:
        raise IconValidationError("Invalid character in path")
    norm = path.replace("\\", "/")
    if norm.startswith("/") or _WINDOWS_DRIVE.match(norm):
        raise IconValidationError(f"Absolute path not allowed: {path}")
    parts = norm.split("/")
    if ".." in parts:
        raise IconValidationError(f"Path traversal not allowed: {path}")
    clean = posixpath.normpath(norm)
    if clean in (".", "") or clean.startswith("../"):
        raise IconValidationError(f"Invalid path: {path}")
    return clean


def validate_component(name: str) -> str:
    """A single file or directory name: a safe relative path with no separator."""
    clean = validate_relative_path(name)
    if "/" in clean:
        raise IconValidationError(f"Nested path not allowed: {name}")
    return clean


def chunk(items: Sequence[T], size: int) -> List[List[T]]:
    """Split items into rows of `size` entries, the last row may be shorter."""
    if size <= 0:
        raise ValueError("size must be positive")
    return [list(items[i:i + size]) for i in range(0, len(items), size)]
