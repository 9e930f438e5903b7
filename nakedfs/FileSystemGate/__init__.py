"""
FileSystemGate - Direct local filesystem access for data-processing frameworks.

Provides:
- File status records built from os.stat, with POSIX permissions and
  ownership where the platform has them
- Directory listings that tolerate children vanishing mid-listing
- Permission changes without shelling out to chmod
- Translation between portable framework paths and native paths

Usage:
    from nakedfs.FileSystemGate import NakedLocalFileSystem, FsPermission

    fs = NakedLocalFileSystem()

    status = fs.get_file_status("/data/input.csv")
    for child in fs.list_status("/data"):
        print(child.path, child.length, child.permission)

    fs.set_permission("/data/input.csv", FsPermission.from_mode(0o640))
"""

import os
from pathlib import Path
from typing import List, Optional, Union

from nakedfs.Config import ConfigManager, get_manager
from nakedfs.shared.gate import GateLogger

from .identity import detect_windows, remove_principal_domain
from .models import (
    FileStatus,
    FileSystemContext,
    FsAction,
    FsPermission,
    PosixAttributes,
    PosixFilePermission,
)
from .operations import (
    POSIX_ATTRIBUTES_AVAILABLE,
    apply_permission,
    build_file_status,
    list_file_statuses,
)
from .paths import FsPath
from .permissions import fs_action_of, to_fs_permission, to_posix_permissions

# Logger for this gate
_log = GateLogger.get("FileSystemGate")

PathLike = Union[FsPath, str]


class NakedLocalFileSystem:
    """
    Local filesystem reached directly through the os module.

    All settings are fixed at construction, so one instance can be shared
    between threads. Nothing is cached: every call reads current state.
    Symbolic links are not supported; statuses describe link targets.
    """

    def __init__(
        self,
        uri: Optional[PathLike] = None,
        config: Optional[ConfigManager] = None,
        working_directory: Optional[Union[str, os.PathLike]] = None,
        block_size: Optional[int] = None,
        is_windows: Optional[bool] = None,
        posix_attributes: Optional[bool] = None,
    ):
        """
        Initialize the filesystem.

        Args:
            uri: Filesystem URI (default: NAKEDFS_URI, ``file:///``)
            config: Configuration source (default: the global ConfigManager)
            working_directory: Native directory relative paths resolve against
                (default: NAKEDFS_WORKING_DIR, then the process cwd)
            block_size: Default block size (default: NAKEDFS_LOCAL_BLOCK_SIZE)
            is_windows: Whether principal names are domain-qualified
                (default: NAKEDFS_WINDOWS, then detected)
            posix_attributes: Whether the POSIX attribute view is used
                (default: NAKEDFS_POSIX_ATTRIBUTES, then detected)
        """
        config = config or get_manager()

        # Unset means the host application owns the nakedfs logger level
        log_level = config.get("NAKEDFS_LOG_LEVEL")
        if log_level:
            try:
                GateLogger.set_level(log_level)
            except ValueError as e:
                _log.warning(f"Ignoring NAKEDFS_LOG_LEVEL: {e}")

        if uri is None:
            uri = config.get("NAKEDFS_URI", "file:///")
        if not isinstance(uri, FsPath):
            uri = FsPath.parse(uri)

        if working_directory is None:
            working_directory = config.get("NAKEDFS_WORKING_DIR") or os.getcwd()
        working_path = FsPath.from_native(os.path.abspath(working_directory))
        working_path = working_path.make_qualified(uri, working_path)

        if block_size is None:
            block_size = config.get_block_size()

        if is_windows is None:
            is_windows = config.get("NAKEDFS_WINDOWS")
            if is_windows is None:
                is_windows = detect_windows()

        if posix_attributes is None:
            posix_attributes = config.get("NAKEDFS_POSIX_ATTRIBUTES", POSIX_ATTRIBUTES_AVAILABLE)
        if posix_attributes and not POSIX_ATTRIBUTES_AVAILABLE:
            _log.warning("POSIX attributes requested but not supported on this platform; disabling")
            posix_attributes = False

        self._context = FileSystemContext(
            uri=uri,
            working_directory=working_path,
            block_size=block_size,
            is_windows=is_windows,
            posix_attributes=posix_attributes,
        )

        _log.info(
            f"Initialized {self} for {uri} (working directory {working_path}, "
            f"block size {block_size}, POSIX attributes {'on' if posix_attributes else 'off'})"
        )

    # ==================== Filesystem Properties ====================

    @property
    def context(self) -> FileSystemContext:
        """The immutable settings shared by every operation."""
        return self._context

    def get_uri(self) -> FsPath:
        return self._context.uri

    def get_working_directory(self) -> FsPath:
        return self._context.working_directory

    def get_default_block_size(self, path: Optional[PathLike] = None) -> int:
        """Default block size; the same for every path on this filesystem."""
        return self._context.block_size

    def get_file_system_default_block_size(self) -> int:
        return self.get_default_block_size()

    def supports_symlinks(self) -> bool:
        """
        Symbolic links are not supported.

        Callers must check this themselves before taking link-specific code
        paths; status and listing calls do not refuse links, they follow them.
        """
        return False

    # ==================== Path Translation ====================

    def check_path(self, path: FsPath) -> None:
        """
        Ensure a path belongs to this filesystem.

        Raises:
            ValueError: If the path names a different scheme or authority
        """
        uri = self._context.uri
        if path.scheme is None:
            return
        if (
            path.scheme.lower() != (uri.scheme or "").lower()
            or (path.authority is not None and path.authority != uri.authority)
        ):
            raise ValueError(f"Wrong FS: {path}, expected: {uri}")

    def to_native_path(self, path: PathLike) -> Path:
        """
        Convert a portable path to a native one.

        Relative paths resolve against the working directory.
        """
        if not isinstance(path, FsPath):
            path = FsPath.parse(path)
        self.check_path(path)

        if not path.is_absolute():
            path = self._context.working_directory.join(path)
        return path.to_native()

    # ==================== Status Operations ====================

    def get_file_status(self, path: PathLike) -> FileStatus:
        """
        Get the status of a portable path.

        Raises:
            FileNotFoundError: If the path does not exist
            OSError: For any other access failure
        """
        return self.get_native_file_status(self.to_native_path(path))

    def get_native_file_status(self, native_path: Union[str, os.PathLike]) -> FileStatus:
        """Get the status of a native path."""
        return build_file_status(native_path, self._context)

    def list_status(self, path: PathLike) -> List[FileStatus]:
        """
        List the statuses of a directory's children, in no particular order.

        A non-directory yields a single-element list holding its own status.

        Raises:
            FileNotFoundError: If the path does not exist
            OSError: For any other failure, including on a single child
        """
        return self.list_native_status(self.to_native_path(path))

    def list_native_status(self, native_path: Union[str, os.PathLike]) -> List[FileStatus]:
        """List the statuses of a native directory's children."""
        return list_file_statuses(native_path, self._context)

    def set_permission(self, path: PathLike, permission: FsPermission) -> bool:
        """
        Set the permission bits of a path.

        Does nothing on platforms without a POSIX attribute view.

        Returns:
            True if the permission was applied
        """
        return apply_permission(self.to_native_path(path), permission, self._context)

    def __str__(self) -> str:
        return "NakedLocalFS"

    def __repr__(self) -> str:
        return f"NakedLocalFileSystem(uri={str(self._context.uri)!r})"


__all__ = [
    "NakedLocalFileSystem",
    "FileStatus",
    "FileSystemContext",
    "FsAction",
    "FsPath",
    "FsPermission",
    "PosixAttributes",
    "PosixFilePermission",
    "build_file_status",
    "list_file_statuses",
    "apply_permission",
    "fs_action_of",
    "to_fs_permission",
    "to_posix_permissions",
    "remove_principal_domain",
    "detect_windows",
]
