"""
FileSystemGate Pydantic models.

Defines the portable permission triad, the native POSIX permission flags,
and the immutable file status records handed back to callers.
"""

import stat
from enum import Enum, IntFlag
from typing import Optional, Dict, Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from .paths import FsPath


class FsAction(IntFlag):
    """A set of read/write/execute actions for one permission class."""
    NONE = 0
    EXECUTE = 1
    WRITE = 2
    WRITE_EXECUTE = 3
    READ = 4
    READ_EXECUTE = 5
    READ_WRITE = 6
    ALL = 7

    def implies(self, action: "FsAction") -> bool:
        """Check whether this action set includes every action in ``action``."""
        return (self & action) == action

    @property
    def symbol(self) -> str:
        """Symbolic form, e.g. ``r-x``."""
        return (
            ("r" if self & FsAction.READ else "-")
            + ("w" if self & FsAction.WRITE else "-")
            + ("x" if self & FsAction.EXECUTE else "-")
        )

    @classmethod
    def from_symbol(cls, symbol: str) -> "FsAction":
        """Parse a three-character symbol such as ``rw-``."""
        if len(symbol) != 3 or any(c not in allowed for c, allowed in zip(symbol, ("r-", "w-", "x-"))):
            raise ValueError(f"Invalid action symbol: {symbol!r}")
        result = cls.NONE
        if symbol[0] == "r":
            result |= cls.READ
        if symbol[1] == "w":
            result |= cls.WRITE
        if symbol[2] == "x":
            result |= cls.EXECUTE
        return cls(result)


class FsPermission(BaseModel):
    """Owner/group/other permission triad, without sticky or setuid bits."""
    model_config = ConfigDict(frozen=True)

    user_action: FsAction = Field(default=FsAction.NONE)
    group_action: FsAction = Field(default=FsAction.NONE)
    other_action: FsAction = Field(default=FsAction.NONE)

    @classmethod
    def of(cls, user: FsAction, group: FsAction, other: FsAction) -> "FsPermission":
        return cls(user_action=user, group_action=group, other_action=other)

    @classmethod
    def from_mode(cls, mode: int) -> "FsPermission":
        """Create from a numeric mode; bits above the low nine are ignored."""
        return cls.of(
            FsAction((mode >> 6) & 0o7),
            FsAction((mode >> 3) & 0o7),
            FsAction(mode & 0o7),
        )

    @classmethod
    def from_symbolic(cls, symbolic: str) -> "FsPermission":
        """Create from a nine-character form such as ``rwxr-x---``."""
        if len(symbolic) != 9:
            raise ValueError(f"Invalid symbolic permission: {symbolic!r}")
        return cls.of(
            FsAction.from_symbol(symbolic[0:3]),
            FsAction.from_symbol(symbolic[3:6]),
            FsAction.from_symbol(symbolic[6:9]),
        )

    def to_mode(self) -> int:
        """The 9-bit numeric mode, e.g. ``0o750``."""
        return (int(self.user_action) << 6) | (int(self.group_action) << 3) | int(self.other_action)

    def __str__(self) -> str:
        return self.user_action.symbol + self.group_action.symbol + self.other_action.symbol


class PosixFilePermission(Enum):
    """The nine native POSIX permission flags; values are ``stat`` mode bits."""
    OWNER_READ = stat.S_IRUSR
    OWNER_WRITE = stat.S_IWUSR
    OWNER_EXECUTE = stat.S_IXUSR
    GROUP_READ = stat.S_IRGRP
    GROUP_WRITE = stat.S_IWGRP
    GROUP_EXECUTE = stat.S_IXGRP
    OTHERS_READ = stat.S_IROTH
    OTHERS_WRITE = stat.S_IWOTH
    OTHERS_EXECUTE = stat.S_IXOTH


class PosixAttributes(BaseModel):
    """Permission and ownership read through the POSIX attribute view."""
    model_config = ConfigDict(frozen=True)

    permission: FsPermission
    owner: str
    group: str


class FileSystemContext(BaseModel):
    """Immutable per-filesystem settings that every status query needs."""
    model_config = ConfigDict(frozen=True)

    uri: FsPath = Field(description="Filesystem identity statuses are qualified against")
    working_directory: FsPath = Field(description="Absolute path relative paths resolve against")
    block_size: int = Field(gt=0, description="Default block size reported for every status")
    is_windows: bool = Field(default=False, description="Principal names are domain-qualified")
    posix_attributes: bool = Field(default=True, description="The POSIX attribute view is available")


class FileStatus(BaseModel):
    """
    Status of one filesystem entry at the moment it was read.

    ``posix`` is None when the platform exposes no POSIX attribute view, in
    which case permission, owner and group are all absent. Two statuses are
    equal when they describe the same path, like the framework's own records.
    """
    model_config = ConfigDict(frozen=True)

    length: int = Field(ge=0, description="Size in bytes")
    is_dir: bool
    block_replication: int = Field(default=1)
    block_size: int
    modification_time: int = Field(description="Milliseconds since the epoch")
    access_time: int = Field(description="Milliseconds since the epoch")
    posix: Optional[PosixAttributes] = None
    path: FsPath

    @property
    def is_file(self) -> bool:
        return not self.is_dir

    @property
    def is_directory(self) -> bool:
        return self.is_dir

    @property
    def is_symlink(self) -> bool:
        # Links are followed when the status is read; the link itself is never described.
        return False

    @property
    def permission(self) -> Optional[FsPermission]:
        return self.posix.permission if self.posix is not None else None

    @property
    def owner(self) -> Optional[str]:
        return self.posix.owner if self.posix is not None else None

    @property
    def group(self) -> Optional[str]:
        return self.posix.group if self.posix is not None else None

    @property
    def name(self) -> str:
        return self.path.name

    @field_serializer("path")
    def serialize_path(self, path: FsPath) -> str:
        return str(path)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FileStatus):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        data = self.model_dump(mode="json", exclude={"posix"})
        data["permission"] = str(self.permission) if self.permission is not None else None
        data["owner"] = self.owner
        data["group"] = self.group
        return data
