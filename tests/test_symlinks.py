"""Tests for symlink creation, resolution and link-aware operations."""

import pytest

from swapfs import (
    O_CREAT,
    O_WRONLY,
    AlreadyExists,
    MemoryFS,
    NodeKind,
    NotARegularFile,
    NotASymlink,
    NotFound,
    TooManyLinks,
)


def _write(fs, path, data):
    with fs.create(path) as f:
        f.write(data)


def _read(fs, path):
    with fs.open(path) as f:
        return f.read()


class TestSymlinkBasics:
    """Test symlink() and readlink()."""

    def test_open_follows_link(self):
        fs = MemoryFS()
        _write(fs, "/target", b"data")

        fs.symlink("/target", "/link")

        assert _read(fs, "/link") == b"data"

    def test_stat_follows_lstat_does_not(self):
        fs = MemoryFS()
        _write(fs, "/target", b"data")
        fs.symlink("/target", "/link")

        assert fs.lstat("/link").kind is NodeKind.SYMLINK
        assert fs.lstat("/link").is_symlink is True
        assert fs.stat("/link").kind is NodeKind.FILE
        assert fs.stat("/link").size == 4

    def test_lstat_size_is_target_length(self):
        fs = MemoryFS()
        fs.symlink("/some/target", "/link")

        assert fs.lstat("/link").size == len("/some/target")

    def test_readlink_returns_absolute_target(self):
        fs = MemoryFS()
        fs.makedirs("/dir")
        fs.chdir("/dir")

        fs.symlink("file", "link")

        assert fs.readlink("/dir/link") == "/dir/file"

    def test_readlink_on_file_raises(self):
        fs = MemoryFS()
        _write(fs, "/f", b"")

        with pytest.raises(NotASymlink):
            fs.readlink("/f")

    def test_readlink_missing_raises(self):
        with pytest.raises(NotFound):
            MemoryFS().readlink("/nope")

    def test_symlink_over_existing_raises(self):
        fs = MemoryFS()
        _write(fs, "/f", b"")

        with pytest.raises(AlreadyExists):
            fs.symlink("/anything", "/f")

    def test_dangling_link(self):
        fs = MemoryFS()
        fs.symlink("/missing", "/link")

        assert fs.lstat("/link").is_symlink is True
        with pytest.raises(NotFound):
            fs.stat("/link")
        with pytest.raises(NotFound):
            fs.open("/link")


class TestSymlinkResolution:
    """Symlinks in intermediate and final path positions."""

    def test_intermediate_directory_link(self):
        fs = MemoryFS()
        fs.makedirs("/real/sub")
        _write(fs, "/real/sub/f", b"through")
        fs.symlink("/real", "/alias")

        assert _read(fs, "/alias/sub/f") == b"through"
        assert fs.lstat("/alias/sub").is_dir is True

    def test_chain_of_links(self):
        fs = MemoryFS()
        _write(fs, "/end", b"chain")
        fs.symlink("/end", "/b")
        fs.symlink("/b", "/a")

        assert _read(fs, "/a") == b"chain"
        assert fs.readlink("/a") == "/b"

    def test_cycle_raises_too_many_links(self):
        fs = MemoryFS()
        fs.symlink("/b", "/a")
        fs.symlink("/a", "/b")

        with pytest.raises(TooManyLinks):
            fs.stat("/a")
        assert fs.lstat("/a").is_symlink is True

    def test_cycle_with_large_limit_raises_too_many_links(self):
        fs = MemoryFS(max_symlink_depth=5000)
        fs.symlink("/b", "/a")
        fs.symlink("/a", "/b")

        with pytest.raises(TooManyLinks):
            fs.stat("/a")
        with pytest.raises(TooManyLinks):
            fs.open("/b/child")

    def test_limit_counts_every_link_in_a_path(self):
        fs = MemoryFS(max_symlink_depth=1)
        fs.makedirs("/real/sub")
        _write(fs, "/real/sub/f", b"")
        fs.symlink("/real", "/r")
        fs.symlink("/r/sub", "/s")

        assert fs.stat("/r/sub/f").is_file is True
        with pytest.raises(TooManyLinks):
            fs.stat("/s/f")

    def test_depth_limit_is_configurable(self):
        fs = MemoryFS(max_symlink_depth=1)
        _write(fs, "/end", b"")
        fs.symlink("/end", "/b")
        fs.symlink("/b", "/a")

        assert fs.stat("/b").is_file is True
        with pytest.raises(TooManyLinks):
            fs.stat("/a")

    def test_chdir_through_link(self):
        fs = MemoryFS()
        fs.makedirs("/real")
        fs.symlink("/real", "/alias")

        fs.chdir("/alias")
        _write(fs, "f", b"x")

        assert fs.getcwd() == "/alias"
        assert fs.listdir("/real") == ["f"]

    def test_makedirs_through_link(self):
        fs = MemoryFS()
        fs.makedirs("/real")
        fs.symlink("/real", "/alias")

        fs.makedirs("/alias/a/b")

        assert fs.stat("/real/a/b").is_dir is True

    def test_makedirs_through_dangling_link_raises(self):
        fs = MemoryFS()
        fs.symlink("/missing", "/alias")

        with pytest.raises(AlreadyExists):
            fs.makedirs("/alias/a")


class TestLinkAwareOperations:
    """Operations that act on the link itself rather than its target."""

    def test_remove_removes_link_only(self):
        fs = MemoryFS()
        _write(fs, "/target", b"keep")
        fs.symlink("/target", "/link")

        fs.remove("/link")

        assert fs.listdir("/") == ["target"]
        assert _read(fs, "/target") == b"keep"

    def test_remove_all_does_not_descend_into_link(self):
        fs = MemoryFS()
        fs.makedirs("/real")
        _write(fs, "/real/f", b"keep")
        fs.symlink("/real", "/alias")

        fs.remove_all("/alias")

        assert fs.listdir("/") == ["real"]
        assert fs.listdir("/real") == ["f"]

    def test_rename_moves_link(self):
        fs = MemoryFS()
        _write(fs, "/target", b"")
        fs.symlink("/target", "/link")

        fs.rename("/link", "/moved")

        assert fs.readlink("/moved") == "/target"
        assert fs.stat("/target").is_file is True

    def test_chmod_and_truncate_follow(self):
        fs = MemoryFS()
        _write(fs, "/target", b"abcdef")
        fs.symlink("/target", "/link")

        fs.chmod("/link", 0o600)
        fs.truncate("/link", 3)

        assert fs.stat("/target").perm == 0o600
        assert _read(fs, "/target") == b"abc"

    def test_creat_through_link_writes_target(self):
        fs = MemoryFS()
        _write(fs, "/target", b"")
        fs.symlink("/target", "/link")

        with fs.open_file("/link", O_WRONLY | O_CREAT) as f:
            f.write(b"via link")

        assert _read(fs, "/target") == b"via link"

    def test_open_link_to_directory_raises(self):
        fs = MemoryFS()
        fs.makedirs("/dir")
        fs.symlink("/dir", "/link")

        with pytest.raises(NotARegularFile):
            fs.open("/link")
