"""Unit tests for DirectoryMirror.

Tests recursive uploads, remote directory creation, cancellation and
result reporting.
"""

import pytest
from pathlib import Path

from ftpkit.ftp.mirror import DirectoryMirror, MirrorResult
from ftpkit.ftp.transport import TransferMode


@pytest.fixture
def local_tree(tmp_path: Path) -> Path:
    """Create a small local site tree."""
    root = tmp_path / "site"
    (root / "css").mkdir(parents=True)
    (root / "img").mkdir()
    (root / ".git").mkdir()
    (root / "index.html").write_text("<html></html>")
    (root / "css" / "main.css").write_text("body {}")
    (root / "img" / "logo.png").write_bytes(b"\x89PNG\r\n")
    (root / ".env").write_text("SECRET=1")
    (root / ".git" / "HEAD").write_text("ref: refs/heads/main")
    return root


class TestMirrorResult:
    """Tests for MirrorResult dataclass."""

    def test_success(self):
        result = MirrorResult(local_path="/tmp/site", remote_path="/www")
        assert result.success is True

    def test_failures_mean_not_success(self):
        result = MirrorResult(local_path="/tmp/site", remote_path="/www", failures=["/www/a"])
        assert result.success is False

    def test_error_message_means_not_success(self):
        result = MirrorResult(local_path="/tmp/site", remote_path="/www", error_message="boom")
        assert result.success is False


class TestDirectoryMirror:
    """Tests for DirectoryMirror class."""

    def test_mirror_tree(self, client, transport, local_tree):
        """Test every visible file is uploaded and directories created."""
        result = DirectoryMirror(client).mirror(local_tree, "/www")

        assert result.success is True
        assert result.files_uploaded == 3
        assert result.directories_created == 3
        assert transport.files["/www/index.html"] == b"<html></html>"
        assert transport.files["/www/css/main.css"] == b"body {}"
        assert transport.files["/www/img/logo.png"] == b"\x89PNG\r\n"
        assert result.bytes_transferred == 13 + 7 + 6

    def test_hidden_entries_skipped(self, client, transport, local_tree):
        DirectoryMirror(client).mirror(local_tree, "/www")

        assert "/www/.env" not in transport.files
        assert "/www/.git" not in transport.dirs

    def test_upload_modes_follow_extension(self, client, transport, local_tree):
        DirectoryMirror(client).mirror(local_tree, "/www")

        modes = {c[1]: c[2] for c in transport.calls if c[0] == "put"}
        assert modes["/www/index.html"] is TransferMode.ASCII
        assert modes["/www/img/logo.png"] is TransferMode.BINARY

    def test_existing_remote_directory_reused(self, client, transport, local_tree):
        transport.add_dir("/www/css")

        result = DirectoryMirror(client).mirror(local_tree, "/www")

        assert result.directories_created == 1
        assert result.success is True

    def test_relative_remote_dir_resolved(self, client, transport, local_tree):
        """Test relative targets are anchored at the current directory."""
        transport.add_dir("/home/deploy")
        client.change_dir("/home/deploy")

        result = DirectoryMirror(client).mirror(local_tree, "www")

        assert result.remote_path == "/home/deploy/www"
        assert "/home/deploy/www/index.html" in transport.files

    def test_working_directory_restored(self, client, transport, local_tree):
        transport.add_dir("/home")
        client.change_dir("/home")

        DirectoryMirror(client).mirror(local_tree, "/www")

        assert client.current_dir() == "/home"

    def test_uncreatable_directory_recorded(self, client, transport, local_tree):
        transport.failing.add("mkdir")

        result = DirectoryMirror(client).mirror(local_tree, "/www")

        assert result.success is False
        assert result.failures == ["/www/"]
        assert result.files_uploaded == 0

    def test_failed_upload_recorded(self, client, transport, local_tree):
        transport.failing.add("put")

        result = DirectoryMirror(client).mirror(local_tree, "/www")

        assert result.files_uploaded == 0
        assert "/www/index.html" in result.failures

    def test_file_callback(self, client, local_tree):
        seen = []

        DirectoryMirror(client).mirror(
            local_tree,
            "/www",
            on_file_complete=lambda local, remote, ok: seen.append((remote, ok))
        )

        assert ("/www/index.html", True) in seen
        assert len(seen) == 3

    def test_cancel_stops_remaining_work(self, client, transport, local_tree):
        mirror = DirectoryMirror(client)

        def cancel_after_first(local, remote, ok):
            mirror.cancel()

        result = mirror.mirror(local_tree, "/www", on_file_complete=cancel_after_first)

        assert result.cancelled is True
        assert result.success is False
        assert result.files_uploaded == 1

    def test_not_connected(self, client, local_tree):
        client.close()

        result = DirectoryMirror(client).mirror(local_tree, "/www")

        assert result.error_message == "Not connected to FTP"

    def test_local_dir_missing(self, client, transport, tmp_path):
        result = DirectoryMirror(client).mirror(tmp_path / "nope", "/www")

        assert result.error_message.startswith("Not a directory")
        assert transport.calls == []
