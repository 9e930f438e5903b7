"""
nakedfs - Local filesystem access for data-processing frameworks without
native helpers or subprocess shells.

Translates between the framework's portable permission and status model and
what the operating system reports through the os module.
"""

__version__ = "0.1.0"


# Lazy imports to avoid loading everything at once
def __getattr__(name):
    if name == "NakedLocalFileSystem":
        from .FileSystemGate import NakedLocalFileSystem
        return NakedLocalFileSystem
    elif name == "FileStatus":
        from .FileSystemGate.models import FileStatus
        return FileStatus
    elif name == "FsPermission":
        from .FileSystemGate.models import FsPermission
        return FsPermission
    elif name == "FsAction":
        from .FileSystemGate.models import FsAction
        return FsAction
    elif name == "FsPath":
        from .FileSystemGate.paths import FsPath
        return FsPath
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "__version__",
    "NakedLocalFileSystem",
    "FileStatus",
    "FsPermission",
    "FsAction",
    "FsPath",
]
