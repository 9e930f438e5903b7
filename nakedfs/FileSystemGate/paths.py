"""
FileSystemGate path translation.

Portable paths are the framework's slash-separated, optionally
scheme-qualified paths (``file:/tmp/data``). Native paths are whatever the
local operating system understands. This module converts between the two.
"""

import os
import posixpath
import re
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

# A scheme must start with a letter and precede the first slash
_SCHEME = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.-]*):")
# Windows drive specification, with or without the portable leading slash
_WINDOWS_DRIVE = re.compile(r"^/?[a-zA-Z]:(?:[\\/]|$)")
_DRIVE_ROOT = re.compile(r"^/[a-zA-Z]:/$")

# A leading "X:" component names a drive only on Windows
WINDOWS_DRIVES = os.name == "nt"


def _has_drive(path: str) -> bool:
    return WINDOWS_DRIVES and _WINDOWS_DRIVE.match(path) is not None


def _is_drive_root(path: str) -> bool:
    return WINDOWS_DRIVES and _DRIVE_ROOT.match(path) is not None


def _normalize(path: str) -> str:
    """Collapse repeated slashes and drop a trailing slash."""
    path = re.sub(r"/+", "/", path)
    if len(path) > 1 and path.endswith("/") and not _is_drive_root(path):
        path = path[:-1]
    return path


def normalize_path(native_path: Union[str, os.PathLike]) -> str:
    """
    Normalize a native path syntactically.

    Resolves ``.`` and ``..`` segments and redundant separators without
    touching the filesystem or following links.
    """
    return os.path.normpath(os.fspath(native_path))


class FsPath(BaseModel):
    """A portable hierarchical path, optionally qualified by scheme and authority."""
    model_config = ConfigDict(frozen=True)

    scheme: Optional[str] = None
    authority: Optional[str] = None
    path: str

    @classmethod
    def parse(cls, text: str) -> "FsPath":
        """
        Parse a portable path string.

        Accepts ``scheme://authority/path``, ``scheme:/path``, plain absolute
        or relative paths, and on Windows drive paths such as ``C:\\data``.
        """
        if not text:
            raise ValueError("Cannot create a path from an empty string")

        if _has_drive(text):
            return cls(path=_normalize("/" + text.lstrip("/").replace("\\", "/")))

        scheme = None
        authority = None
        rest = text

        match = _SCHEME.match(text)
        if match:
            scheme = match.group(1)
            rest = text[match.end():]

        if rest.startswith("//"):
            end = rest.find("/", 2)
            if end == -1:
                authority, rest = rest[2:], ""
            else:
                authority, rest = rest[2:end], rest[end:]

        if scheme is not None and not rest:
            rest = "/"

        return cls(scheme=scheme, authority=authority or None, path=_normalize(rest))

    @classmethod
    def from_native(cls, native_path: Union[str, os.PathLike]) -> "FsPath":
        """Express a native path in portable form."""
        text = os.fspath(native_path)
        if os.sep != "/":
            text = text.replace(os.sep, "/")
        if _has_drive(text) and not text.startswith("/"):
            text = "/" + text
        return cls(path=_normalize(text))

    def to_native(self) -> Path:
        """The native equivalent of this path's path component."""
        path = self.path
        if _has_drive(path) and path.startswith("/"):
            path = path[1:]
        return Path(path)

    def is_absolute(self) -> bool:
        return self.path.startswith("/")

    @property
    def name(self) -> str:
        """Final path component; empty for the root."""
        return self.path.rsplit("/", 1)[-1]

    @property
    def parent(self) -> Optional["FsPath"]:
        """The containing path, or None at the root."""
        if self.path in ("", "/") or _is_drive_root(self.path):
            return None
        index = self.path.rfind("/")
        if index == -1:
            return None
        parent = self.path[:index] or "/"
        return FsPath(scheme=self.scheme, authority=self.authority, path=parent)

    def join(self, child: Union["FsPath", str]) -> "FsPath":
        """Resolve ``child`` against this path."""
        if isinstance(child, str):
            child = FsPath.parse(child)

        if child.scheme is not None:
            return child
        if child.is_absolute():
            return FsPath(scheme=self.scheme, authority=self.authority, path=child.path)

        if self.path:
            joined = posixpath.normpath(self.path.rstrip("/") + "/" + child.path)
        else:
            joined = child.path
        return FsPath(scheme=self.scheme, authority=self.authority, path=_normalize(joined))

    def make_qualified(self, uri: "FsPath", working_directory: "FsPath") -> "FsPath":
        """
        Fully qualify this path for a filesystem.

        Relative paths resolve against ``working_directory``; missing scheme
        and authority are taken from the filesystem ``uri``.
        """
        path = self if self.is_absolute() else working_directory.join(self)

        if path.scheme is not None and (path.authority is not None or uri.authority is None):
            return path

        scheme = path.scheme if path.scheme is not None else uri.scheme
        authority = path.authority if path.authority is not None else uri.authority
        return FsPath(scheme=scheme, authority=authority, path=path.path)

    def __str__(self) -> str:
        text = ""
        if self.scheme is not None:
            text += f"{self.scheme}:"
        if self.authority is not None:
            text += f"//{self.authority}"
        return text + self.path
