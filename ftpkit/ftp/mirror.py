"""Directory mirroring for ftpkit.

Uploads a local directory tree to the server, creating remote
directories as needed.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Union

from ftpkit.ftp.client import FTPClient
from ftpkit.ftp.transport import TransferMode

logger = logging.getLogger("ftpkit.mirror")


@dataclass
class MirrorResult:
    """Result of mirroring one local directory."""
    local_path: str
    remote_path: str
    files_uploaded: int = 0
    directories_created: int = 0
    bytes_transferred: int = 0
    failures: List[str] = field(default_factory=list)
    cancelled: bool = False
    duration_seconds: float = 0.0
    error_message: Optional[str] = None

    @property
    def success(self) -> bool:
        """True if every file and directory was mirrored."""
        return self.error_message is None and not self.failures and not self.cancelled


# Called with (local_file, remote_file, uploaded) after each file
FileCallback = Callable[[Path, str, bool], None]


class DirectoryMirror:
    """Mirrors local directory trees onto the server."""

    def __init__(self, client: FTPClient):
        """
        Initialize the mirror.

        Args:
            client: Connected FTP client
        """
        self._client = client
        self._cancelled = threading.Event()

    @property
    def is_cancelled(self) -> bool:
        """True if current operation was cancelled."""
        return self._cancelled.is_set()

    def cancel(self) -> None:
        """Cancel current mirror operation."""
        self._cancelled.set()

    def reset_cancel(self) -> None:
        """Reset cancellation flag for new operation."""
        self._cancelled.clear()

    def mirror(
        self,
        local_dir: Union[str, Path],
        remote_dir: str,
        on_file_complete: Optional[FileCallback] = None
    ) -> MirrorResult:
        """
        Upload a local directory tree.

        Hidden entries (names starting with '.') are skipped. Files go up
        with TransferMode.AUTO. The remote working directory is restored
        afterwards.

        Args:
            local_dir: Local directory to mirror
            remote_dir: Remote target directory, created if missing
            on_file_complete: Optional callback after each file

        Returns:
            MirrorResult describing what was transferred
        """
        local_dir = Path(local_dir)
        result = MirrorResult(local_path=str(local_dir), remote_path=remote_dir)

        if not self._client.is_live:
            result.error_message = "Not connected to FTP"
            return result

        if not local_dir.is_dir():
            result.error_message = f"Not a directory: {local_dir}"
            return result

        self.reset_cancel()
        start_time = time.time()

        origin = self._client.current_dir()
        if not remote_dir.startswith("/") and origin:
            remote_dir = f"{origin.rstrip('/')}/{remote_dir}"
        result.remote_path = remote_dir

        try:
            self._mirror_dir(local_dir, remote_dir.rstrip("/") + "/", result, on_file_complete)
        finally:
            if origin:
                self._client.change_dir(origin)

        result.cancelled = self._cancelled.is_set()
        result.duration_seconds = time.time() - start_time
        logger.info(
            f"Mirrored '{local_dir}' to '{remote_dir}': "
            f"{result.files_uploaded} files, {len(result.failures)} failures"
        )
        return result

    def _ensure_remote_dir(self, remote_dir: str, result: MirrorResult) -> bool:
        """Enter remote_dir, creating it first when it does not exist."""
        if self._client.change_dir(remote_dir):
            return True

        if not self._client.make_dir(remote_dir) or not self._client.change_dir(remote_dir):
            return False

        result.directories_created += 1
        return True

    def _mirror_dir(
        self,
        local_dir: Path,
        remote_dir: str,
        result: MirrorResult,
        on_file_complete: Optional[FileCallback]
    ) -> None:
        if not self._ensure_remote_dir(remote_dir, result):
            logger.warning(f"Cannot enter remote directory '{remote_dir}'")
            result.failures.append(remote_dir)
            return

        for entry in sorted(local_dir.iterdir()):
            if self._cancelled.is_set():
                return
            if entry.name.startswith("."):
                continue

            if entry.is_dir():
                self._mirror_dir(entry, f"{remote_dir}{entry.name}/", result, on_file_complete)
                continue

            remote_file = f"{remote_dir}{entry.name}"
            uploaded = self._client.upload(entry, remote_file, mode=TransferMode.AUTO)
            if uploaded:
                result.files_uploaded += 1
                result.bytes_transferred += entry.stat().st_size
            else:
                result.failures.append(remote_file)

            if on_file_complete:
                on_file_complete(entry, remote_file, uploaded)
