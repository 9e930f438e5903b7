"""
Tests for building file statuses.
"""

import errno
import os

import pytest

from nakedfs.FileSystemGate import operations
from nakedfs.FileSystemGate.models import FsPermission
from nakedfs.FileSystemGate.operations import build_file_status
from nakedfs.FileSystemGate.paths import FsPath

from conftest import requires_posix


class TestBasicStatus:
    """Tests for size, kind and timestamps."""

    def test_missing_path(self, temp_dir, context):
        """A missing path should raise FileNotFoundError naming it."""
        missing = temp_dir / "missing"

        with pytest.raises(FileNotFoundError) as excinfo:
            build_file_status(missing, context)

        assert excinfo.value.errno == errno.ENOENT
        assert excinfo.value.filename == str(missing)
        assert "does not exist" in str(excinfo.value)

    def test_file(self, temp_dir, context):
        """A file should report its size, block size and modification time."""
        test_file = temp_dir / "test.txt"
        test_file.write_bytes(b"foobar")

        status = build_file_status(test_file, context)

        assert status.is_file is True
        assert status.is_directory is False
        assert status.length == 6
        assert status.block_size == context.block_size
        assert status.block_replication == 1
        assert status.modification_time == os.stat(test_file).st_mtime_ns // 1_000_000
        assert status.access_time == os.stat(test_file).st_atime_ns // 1_000_000

    def test_directory(self, temp_dir, context):
        """An empty directory should be reported as a directory."""
        directory = temp_dir / "foobar"
        directory.mkdir()

        status = build_file_status(directory, context)

        assert status.is_directory is True
        assert status.is_file is False
        assert status.block_size == context.block_size

    def test_never_reports_symlink(self, temp_dir, context):
        """Links are followed; the status describes the target."""
        target = temp_dir / "target.txt"
        target.write_bytes(b"foobar")
        link = temp_dir / "link.txt"
        try:
            os.symlink(target, link)
        except (OSError, NotImplementedError):
            pytest.skip("Symbolic links cannot be created here")

        status = build_file_status(link, context)

        assert status.is_symlink is False
        assert status.length == 6
        assert status.name == "link.txt"

    def test_other_errors_propagate(self, temp_dir, context, monkeypatch):
        """Access failures other than non-existence should surface unchanged."""
        test_file = temp_dir / "secret.txt"
        test_file.write_bytes(b"x")
        real_stat = os.stat

        def denied_stat(path, *args, **kwargs):
            if os.fspath(path) == str(test_file):
                raise PermissionError(errno.EACCES, "Permission denied", str(test_file))
            return real_stat(path, *args, **kwargs)

        monkeypatch.setattr(operations.os, "stat", denied_stat)

        with pytest.raises(PermissionError):
            build_file_status(test_file, context)


class TestStatusPath:
    """Tests for the qualified path on a status."""

    def test_path_is_qualified(self, temp_dir, context):
        test_file = temp_dir / "test.txt"
        test_file.write_bytes(b"foobar")

        status = build_file_status(test_file, context)

        assert status.path.scheme == "file"
        assert status.path == FsPath(scheme="file", path=FsPath.from_native(test_file).path)
        assert status.name == "test.txt"

    def test_relative_segments_normalized(self, temp_dir, context):
        (temp_dir / "sub").mkdir()
        test_file = temp_dir / "test.txt"
        test_file.write_bytes(b"foobar")

        status = build_file_status(os.path.join(str(temp_dir), "sub", "..", "test.txt"), context)

        assert status == build_file_status(test_file, context)
        assert ".." not in str(status.path)

    def test_relative_native_path_uses_working_directory(self, temp_dir, context):
        (temp_dir / "test.txt").write_bytes(b"foobar")

        status = build_file_status("test.txt", context)

        assert status.length == 6
        assert status.path == build_file_status(temp_dir / "test.txt", context).path

    def test_equality_by_path(self, temp_dir, context):
        """Statuses of the same path compare equal even after the file changes."""
        test_file = temp_dir / "test.txt"
        test_file.write_bytes(b"foo")
        before = build_file_status(test_file, context)
        test_file.write_bytes(b"foobar")
        after = build_file_status(test_file, context)

        assert before == after
        assert before.length != after.length
        assert len({before, after}) == 1


class TestPosixAttributes:
    """Tests for permission and ownership."""

    def test_absent_without_posix_view(self, temp_dir, context):
        """Permission, owner and group should all be absent together."""
        test_file = temp_dir / "test.txt"
        test_file.write_bytes(b"foobar")
        no_posix = context.model_copy(update={"posix_attributes": False})

        status = build_file_status(test_file, no_posix)

        assert status.posix is None
        assert status.permission is None
        assert status.owner is None
        assert status.group is None
        assert status.length == 6

    @requires_posix
    def test_permission_read_from_mode(self, temp_dir, context):
        test_file = temp_dir / "test.txt"
        test_file.write_bytes(b"foobar")
        os.chmod(test_file, 0o640)

        status = build_file_status(test_file, context)

        assert status.permission == FsPermission.from_mode(0o640)

    @requires_posix
    def test_sticky_bit_not_reported(self, temp_dir, context):
        directory = temp_dir / "shared"
        directory.mkdir()
        os.chmod(directory, 0o1777)

        status = build_file_status(directory, context)

        assert status.permission.to_mode() == 0o777

    @requires_posix
    def test_owner_and_group(self, temp_dir, context):
        import grp
        import pwd

        test_file = temp_dir / "test.txt"
        test_file.write_bytes(b"foobar")
        stat_result = os.stat(test_file)

        status = build_file_status(test_file, context)

        try:
            expected_owner = pwd.getpwuid(stat_result.st_uid).pw_name
        except KeyError:
            expected_owner = str(stat_result.st_uid)
        try:
            expected_group = grp.getgrgid(stat_result.st_gid).gr_name
        except KeyError:
            expected_group = str(stat_result.st_gid)

        assert status.owner == expected_owner
        assert status.group == expected_group

    def test_windows_principals_stripped(self, temp_dir, context, monkeypatch):
        """Domain-qualified owner and group names should be reduced to bare names."""
        monkeypatch.setattr(operations, "_user_name", lambda uid: "WORKGROUP\\alice")
        monkeypatch.setattr(operations, "_group_name", lambda gid: "WORKGROUP\\staff")
        test_file = temp_dir / "test.txt"
        test_file.write_bytes(b"foobar")
        windows = context.model_copy(update={"is_windows": True, "posix_attributes": True})

        status = build_file_status(test_file, windows)

        assert status.owner == "alice"
        assert status.group == "staff"

    def test_to_dict(self, temp_dir, context):
        test_file = temp_dir / "test.txt"
        test_file.write_bytes(b"foobar")
        no_posix = context.model_copy(update={"posix_attributes": False})

        data = build_file_status(test_file, no_posix).to_dict()

        assert data["length"] == 6
        assert data["path"].startswith("file:")
        assert data["permission"] is None
        assert data["owner"] is None
