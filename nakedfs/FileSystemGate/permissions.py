"""
FileSystemGate permission translation.

Converts between the portable owner/group/other permission triad and the
native set of POSIX permission flags. The sticky, setuid and setgid bits are
not modeled and never survive a conversion.
"""

from typing import AbstractSet, FrozenSet

from .models import FsAction, FsPermission, PosixFilePermission


def to_posix_permissions(permission: FsPermission) -> FrozenSet[PosixFilePermission]:
    """
    Convert a permission triad to the equivalent set of POSIX flags.

    Args:
        permission: The portable permission triad

    Returns:
        The native permission flags
    """
    posix_permissions = set()

    user_action = permission.user_action
    if user_action.implies(FsAction.READ):
        posix_permissions.add(PosixFilePermission.OWNER_READ)
    if user_action.implies(FsAction.WRITE):
        posix_permissions.add(PosixFilePermission.OWNER_WRITE)
    if user_action.implies(FsAction.EXECUTE):
        posix_permissions.add(PosixFilePermission.OWNER_EXECUTE)

    group_action = permission.group_action
    if group_action.implies(FsAction.READ):
        posix_permissions.add(PosixFilePermission.GROUP_READ)
    if group_action.implies(FsAction.WRITE):
        posix_permissions.add(PosixFilePermission.GROUP_WRITE)
    if group_action.implies(FsAction.EXECUTE):
        posix_permissions.add(PosixFilePermission.GROUP_EXECUTE)

    other_action = permission.other_action
    if other_action.implies(FsAction.READ):
        posix_permissions.add(PosixFilePermission.OTHERS_READ)
    if other_action.implies(FsAction.WRITE):
        posix_permissions.add(PosixFilePermission.OTHERS_WRITE)
    if other_action.implies(FsAction.EXECUTE):
        posix_permissions.add(PosixFilePermission.OTHERS_EXECUTE)

    return frozenset(posix_permissions)


def to_fs_permission(posix_permissions: AbstractSet[PosixFilePermission]) -> FsPermission:
    """
    Convert a set of POSIX flags to the equivalent permission triad.

    Args:
        posix_permissions: The native permission flags

    Returns:
        The portable permission triad
    """
    owner_action = fs_action_of(
        PosixFilePermission.OWNER_READ in posix_permissions,
        PosixFilePermission.OWNER_WRITE in posix_permissions,
        PosixFilePermission.OWNER_EXECUTE in posix_permissions,
    )
    group_action = fs_action_of(
        PosixFilePermission.GROUP_READ in posix_permissions,
        PosixFilePermission.GROUP_WRITE in posix_permissions,
        PosixFilePermission.GROUP_EXECUTE in posix_permissions,
    )
    other_action = fs_action_of(
        PosixFilePermission.OTHERS_READ in posix_permissions,
        PosixFilePermission.OTHERS_WRITE in posix_permissions,
        PosixFilePermission.OTHERS_EXECUTE in posix_permissions,
    )
    return FsPermission.of(owner_action, group_action, other_action)


def fs_action_of(read: bool, write: bool, execute: bool) -> FsAction:
    """Compose an action set from independent read/write/execute flags."""
    result = FsAction.NONE
    if read:
        result |= FsAction.READ
    if write:
        result |= FsAction.WRITE
    if execute:
        result |= FsAction.EXECUTE
    return FsAction(result)


def posix_permissions_from_mode(mode: int) -> FrozenSet[PosixFilePermission]:
    """The permission flags present in a ``st_mode`` value."""
    return frozenset(flag for flag in PosixFilePermission if mode & flag.value)


def posix_permissions_to_mode(posix_permissions: AbstractSet[PosixFilePermission]) -> int:
    """The 9-bit mode for a set of permission flags, suitable for ``os.chmod``."""
    mode = 0
    for flag in posix_permissions:
        mode |= flag.value
    return mode
