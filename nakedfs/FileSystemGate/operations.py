"""
FileSystemGate file operations.

Builds status records, directory listings and permission changes directly
from the os module, without shelling out to native helpers.
"""

import errno
import os
import stat
from typing import List, Optional, Union

from nakedfs.shared.gate import GateLogger

from .identity import remove_principal_domain
from .models import FileStatus, FileSystemContext, FsPermission, PosixAttributes
from .paths import FsPath, normalize_path
from .permissions import (
    posix_permissions_from_mode,
    posix_permissions_to_mode,
    to_fs_permission,
    to_posix_permissions,
)

_log = GateLogger.get("FileSystemGate")

NativePath = Union[str, os.PathLike]

# Whether this interpreter can resolve owners and groups (pwd/grp modules)
POSIX_ATTRIBUTES_AVAILABLE = os.name == "posix"


def _not_found(native_path: NativePath) -> FileNotFoundError:
    path = os.fspath(native_path)
    return FileNotFoundError(errno.ENOENT, f"File `{path}` does not exist.", path)


def _absolute(native_path: NativePath, context: FileSystemContext) -> str:
    """Resolve a relative native path against the filesystem working directory."""
    path = os.fspath(native_path)
    if os.path.isabs(path):
        return path
    return os.path.join(os.fspath(context.working_directory.to_native()), path)


def _user_name(uid: int) -> str:
    import pwd

    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        # No passwd entry (common in containers); report the numeric id
        return str(uid)


def _group_name(gid: int) -> str:
    import grp

    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return str(gid)


def read_posix_attributes(
    stat_result: os.stat_result,
    context: FileSystemContext
) -> Optional[PosixAttributes]:
    """
    Read permission and ownership from a stat result.

    Args:
        stat_result: Result of ``os.stat`` for the path
        context: Filesystem settings

    Returns:
        PosixAttributes, or None if the platform has no POSIX attribute view
    """
    if not context.posix_attributes:
        return None

    permission = to_fs_permission(posix_permissions_from_mode(stat_result.st_mode))
    owner = remove_principal_domain(_user_name(stat_result.st_uid), context.is_windows)
    group = remove_principal_domain(_group_name(stat_result.st_gid), context.is_windows)

    return PosixAttributes(permission=permission, owner=owner, group=group)


def build_file_status(native_path: NativePath, context: FileSystemContext) -> FileStatus:
    """
    Describe a file or directory. Symbolic links are followed.

    Args:
        native_path: Native path to describe
        context: Filesystem settings

    Returns:
        FileStatus for the path

    Raises:
        FileNotFoundError: If the path does not exist, or vanishes while read
        OSError: For any other access failure
    """
    native_path = _absolute(native_path, context)

    # No existence pre-check; stat reports a missing path itself
    try:
        stat_result = os.stat(native_path)
    except FileNotFoundError as e:
        raise _not_found(native_path) from e

    posix = read_posix_attributes(stat_result, context)

    path = FsPath.from_native(normalize_path(native_path)).make_qualified(
        context.uri, context.working_directory
    )

    return FileStatus(
        length=stat_result.st_size,
        is_dir=stat.S_ISDIR(stat_result.st_mode),
        block_size=context.block_size,
        modification_time=stat_result.st_mtime_ns // 1_000_000,
        access_time=stat_result.st_atime_ns // 1_000_000,
        posix=posix,
        path=path,
    )


def _is_directory_no_follow(native_path: str) -> bool:
    """Check for a real directory; a link to a directory does not count."""
    try:
        return stat.S_ISDIR(os.lstat(native_path).st_mode)
    except OSError:
        # Missing or unreadable; building the status reports the actual failure
        return False


def list_file_statuses(native_path: NativePath, context: FileSystemContext) -> List[FileStatus]:
    """
    List the statuses of a directory's children.

    If the path is not a directory, the result holds only the status of the
    path itself. Order is not guaranteed. A child removed between
    enumeration and inspection is left out, so the result may never have
    existed as an exact snapshot at any single point in time.

    Args:
        native_path: Native path to list
        context: Filesystem settings

    Returns:
        List of FileStatus

    Raises:
        FileNotFoundError: If the path does not exist
        OSError: For any other failure, including on a single child
    """
    native_path = _absolute(native_path, context)

    if not _is_directory_no_follow(native_path):
        return [build_file_status(native_path, context)]

    statuses: List[FileStatus] = []
    try:
        with os.scandir(native_path) as entries:
            for entry in entries:
                try:
                    statuses.append(build_file_status(entry.path, context))
                except FileNotFoundError:
                    _log.debug(f"Skipping {entry.path}: removed during listing")
    except FileNotFoundError as e:
        raise _not_found(native_path) from e

    return statuses


def apply_permission(
    native_path: NativePath,
    permission: FsPermission,
    context: FileSystemContext
) -> bool:
    """
    Set the permission bits of a path.

    Args:
        native_path: Native path to change
        permission: Permission triad to apply
        context: Filesystem settings

    Returns:
        True if applied, False if the platform has no POSIX attribute view
    """
    native_path = _absolute(native_path, context)

    if not context.posix_attributes:
        _log.debug(f"No POSIX attribute view; permissions of {native_path} left unchanged")
        return False

    mode = posix_permissions_to_mode(to_posix_permissions(permission))
    try:
        os.chmod(native_path, mode)
    except FileNotFoundError as e:
        raise _not_found(native_path) from e

    return True
