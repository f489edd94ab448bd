"""Tests for MemoryFS.open_file() flag handling (O_CREAT, O_EXCL, O_TRUNC, O_APPEND)."""

import pytest

from swapfs import (
    O_APPEND,
    O_CREAT,
    O_EXCL,
    O_RDONLY,
    O_RDWR,
    O_TRUNC,
    O_WRONLY,
    AlreadyExists,
    MemoryFS,
    NotADirectory,
    NotARegularFile,
    NotFound,
)


def _contents(fs, path):
    with fs.open(path) as f:
        return f.read()


@pytest.fixture
def fs():
    fs = MemoryFS()
    with fs.create("/existing") as f:
        f.write(b"old content")
    return fs


class TestCreate:
    """Test O_CREAT and O_EXCL."""

    def test_open_missing_without_creat_raises(self, fs):
        with pytest.raises(NotFound):
            fs.open_file("/missing", O_RDWR)

    def test_creat_makes_file_with_mode(self, fs):
        fs.open_file("/new", O_WRONLY | O_CREAT, 0o640).close()

        info = fs.stat("/new")
        assert info.is_file is True
        assert info.size == 0
        assert info.perm == 0o640

    def test_creat_keeps_existing_content(self, fs):
        fs.open_file("/existing", O_RDWR | O_CREAT).close()

        assert _contents(fs, "/existing") == b"old content"

    def test_creat_excl_twice_fails(self):
        """The second exclusive create on a path fails."""
        fs = MemoryFS()

        fs.open_file("/new", O_CREAT | O_EXCL, 0o644).close()

        with pytest.raises(AlreadyExists):
            fs.open_file("/new", O_CREAT | O_EXCL, 0o644)

    def test_creat_excl_is_file_exists_error(self, fs):
        with pytest.raises(FileExistsError):
            fs.open_file("/existing", O_WRONLY | O_CREAT | O_EXCL)

    def test_creat_missing_parent_raises(self, fs):
        with pytest.raises(NotFound):
            fs.open_file("/no/such/dir/file", O_WRONLY | O_CREAT)

    def test_creat_parent_is_file_raises(self, fs):
        with pytest.raises(NotADirectory):
            fs.open_file("/existing/child", O_WRONLY | O_CREAT)

    def test_create_helper_truncates(self, fs):
        fs.create("/existing").close()

        assert fs.stat("/existing").size == 0


class TestFileKind:
    """Only regular files can be opened for I/O."""

    def test_open_directory_raises(self, fs):
        fs.mkdir("/dir")

        with pytest.raises(NotARegularFile):
            fs.open("/dir")

    def test_creat_on_directory_raises(self, fs):
        fs.mkdir("/dir")

        with pytest.raises(NotARegularFile):
            fs.open_file("/dir", O_WRONLY | O_CREAT)

    def test_not_regular_file_is_is_a_directory_error(self, fs):
        with pytest.raises(IsADirectoryError):
            fs.open("/")


class TestTruncate:
    """Test O_TRUNC."""

    def test_trunc_clears_content(self, fs):
        with fs.open_file("/existing", O_WRONLY | O_TRUNC) as f:
            f.write(b"new")

        assert _contents(fs, "/existing") == b"new"

    def test_trunc_visible_to_open_handles(self, fs):
        reader = fs.open("/existing")

        fs.open_file("/existing", O_WRONLY | O_TRUNC).close()

        assert reader.read() == b""
        reader.close()


class TestAppend:
    """Test O_APPEND."""

    def test_append_starts_at_end(self, fs):
        with fs.open_file("/existing", O_RDWR | O_APPEND) as f:
            assert f.tell() == 11

    def test_append_never_overwrites(self, fs):
        with fs.open_file("/existing", O_WRONLY | O_APPEND) as f:
            f.write(b" + more")

        assert _contents(fs, "/existing") == b"old content + more"

    def test_append_after_seek_still_appends(self, fs):
        with fs.open_file("/existing", O_RDWR | O_APPEND) as f:
            f.seek(0)
            f.write(b"!")
            assert f.tell() == 12

        assert _contents(fs, "/existing") == b"old content!"

    def test_without_append_starts_at_zero(self, fs):
        with fs.open_file("/existing", O_RDONLY) as f:
            assert f.tell() == 0

    def test_creat_append_on_new_file(self, fs):
        with fs.open_file("/log", O_WRONLY | O_CREAT | O_APPEND) as f:
            f.write(b"one\n")
        with fs.open_file("/log", O_WRONLY | O_CREAT | O_APPEND) as f:
            f.write(b"two\n")

        assert _contents(fs, "/log") == b"one\ntwo\n"
