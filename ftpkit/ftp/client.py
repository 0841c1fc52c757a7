"""FTP client for ftpkit.

FTPClient owns a single authenticated FTP session and exposes the
directory and file operations built on top of FTPTransport. Every
operation checks that the session is still live first and reports
failure through its return value; only construction and read_file raise.
"""

import functools
import io
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Union

from ftpkit.ftp.exceptions import FTPError, FTPFileTooLargeError
from ftpkit.ftp.transport import FTPTransport, TransferMode, resolve_mode
from ftpkit.utils.validators import validate_file_path

logger = logging.getLogger("ftpkit.client")


# Largest remote file read_file will buffer in memory (2 MiB)
MAX_READ_SIZE = 2 * 1024 * 1024


def requires_session(failure=False) -> Callable:
    """
    Guard an FTPClient method behind the liveness check.

    When the session is not live the wrapped method is not called and
    `failure` is returned instead.

    Args:
        failure: Value returned when there is no live session
    """
    def decorator(method: Callable) -> Callable:
        @functools.wraps(method)
        def wrapper(self: "FTPClient", *args, **kwargs):
            if not self.is_live:
                logger.debug(f"{method.__name__} skipped: not connected")
                return failure
            result = method(self, *args, **kwargs)
            self._update_activity()
            return result
        return wrapper
    return decorator


class FTPClient:
    """Directory and file operations over one FTP session."""

    def __init__(
        self,
        hostname: str,
        username: str,
        password: str,
        port: int = 21,
        passive: bool = True,
        timeout: int = 30,
        transport_factory: Callable[..., FTPTransport] = FTPTransport
    ):
        """
        Connect, log in and select the data connection mode.

        Args:
            hostname: FTP server host
            username: FTP username
            password: FTP password
            port: FTP control port
            passive: Use passive mode data connections
            timeout: Socket timeout in seconds
            transport_factory: Callable building the transport

        Raises:
            FTPConnectionError: If the server cannot be reached
            FTPAuthenticationError: If login is rejected
        """
        self._transport: Optional[FTPTransport] = None
        self._hostname = hostname
        self._port = port
        self._connected_at: Optional[datetime] = None
        self._last_activity: Optional[datetime] = None

        transport = transport_factory(timeout=timeout)
        try:
            transport.connect(hostname, port)
            transport.login(username, password)
            transport.set_passive(passive)
        except FTPError as e:
            logger.error(f"Could not open session: {e}")
            transport.close()
            raise

        self._transport = transport
        self._connected_at = datetime.now()
        self._last_activity = self._connected_at
        logger.info(f"Connected to {hostname}:{port} as {username}")

    def __enter__(self) -> "FTPClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __del__(self):
        self.close()

    @property
    def is_live(self) -> bool:
        """True if the session is open and authenticated."""
        return self._transport is not None and self._transport.is_open

    @property
    def hostname(self) -> str:
        return self._hostname

    @property
    def port(self) -> int:
        return self._port

    @property
    def connected_at(self) -> Optional[datetime]:
        """Timestamp when connection was established."""
        return self._connected_at

    @property
    def last_activity(self) -> Optional[datetime]:
        """Timestamp of last operation on the live session."""
        return self._last_activity

    def close(self) -> None:
        """Close the session. Safe to call more than once."""
        transport = getattr(self, "_transport", None)
        if transport is None:
            return

        self._transport = None
        self._connected_at = None
        transport.close()
        logger.info(f"Disconnected from {self._hostname}:{self._port}")

    def _update_activity(self) -> None:
        """Update last activity timestamp."""
        self._last_activity = datetime.now()

    # Navigation and metadata

    @requires_session(False)
    def change_dir(self, path: str) -> bool:
        """Change the remote working directory."""
        return self._transport.chdir(path)

    @requires_session(None)
    def current_dir(self) -> Optional[str]:
        """Remote working directory, or None."""
        return self._transport.pwd()

    @requires_session(-1)
    def size(self, path: str) -> int:
        """
        Size of a remote file.

        Returns:
            Size in bytes, or -1 if the file is absent or the query failed
        """
        return self._transport.size(path)

    @requires_session(-1)
    def modified_time(self, path: str) -> int:
        """
        Last modification time of a remote file.

        Returns:
            Unix timestamp, or -1 if the file is absent or the query failed
        """
        return self._transport.mdtm(path)

    # Directories

    @requires_session(False)
    def make_dir(self, path: str, permissions: Optional[Union[int, str]] = None) -> bool:
        """
        Create a remote directory.

        Args:
            path: Directory to create
            permissions: Optional mode applied after creation (e.g. 0o755)

        Returns:
            True if the directory was created. A failed chmod afterwards
            is logged and does not change the result.
        """
        if not self._transport.mkdir(path):
            return False

        if permissions is not None:
            self.chmod(path, permissions)
        return True

    @requires_session(False)
    def chmod(self, path: str, perm: Union[int, str]) -> bool:
        """Set permissions on a remote path."""
        return self._transport.chmod(perm, path)

    @requires_session(None)
    def list_files(self, path: str = ".", detailed: bool = False) -> Optional[List[str]]:
        """
        List a remote directory.

        Args:
            path: Directory to list
            detailed: Return raw listing lines instead of names

        Returns:
            Entries in server order, or None on failure
        """
        return self._transport.list_dir(path, detailed)

    @requires_session(False)
    def delete_dir(self, path: str) -> bool:
        """
        Delete a remote directory and everything below it.

        Each entry is first deleted as a file. When that fails the entry
        is taken to be a directory and deleted recursively. Failures
        below the top level are logged, not reported.

        Args:
            path: Directory to delete

        Returns:
            True if the directory itself was removed
        """
        if not path:
            logger.warning("Refusing to delete a directory with an empty path")
            return False

        path = path.rstrip("/") + "/"

        for entry in self.list_files(path) or []:
            name = entry.rstrip("/").rsplit("/", 1)[-1]
            if name in ("", ".", ".."):
                continue

            target = path + name
            if not self._transport.delete(target):
                logger.debug(f"'{target}' is not a plain file, descending")
                if not self.delete_dir(target):
                    logger.debug(f"Could not fully delete '{target}'")

        removed = self._transport.rmdir(path)
        if removed:
            logger.info(f"Deleted directory '{path}'")
        return removed

    # Files

    @requires_session(False)
    def upload(
        self,
        local_path: Union[str, os.PathLike],
        remote_path: str,
        mode: TransferMode = TransferMode.BINARY,
        permissions: Optional[Union[int, str]] = None
    ) -> bool:
        """
        Upload a local file.

        Args:
            local_path: Existing local file
            remote_path: Destination on the server
            mode: Transfer mode; AUTO picks by file extension
            permissions: Optional mode applied after the upload

        Returns:
            True if the file was transferred
        """
        is_valid, error = validate_file_path(Path(local_path), must_exist=True)
        if not is_valid:
            logger.warning(f"Upload to '{remote_path}' skipped: {error}")
            return False

        mode = resolve_mode(mode, local_path)
        if not self._transport.put(remote_path, local_path, mode):
            return False

        if permissions is not None:
            self.chmod(remote_path, permissions)
        logger.info(f"Uploaded '{local_path}' to '{remote_path}'")
        return True

    @requires_session(False)
    def download(
        self,
        remote_path: str,
        local_path: Union[str, os.PathLike],
        mode: TransferMode = TransferMode.BINARY
    ) -> bool:
        """
        Download a remote file to a local path.

        The remote file must answer a size query; otherwise it is treated
        as missing and nothing is transferred.
        """
        if self.size(remote_path) == -1:
            logger.warning(f"Download skipped: '{remote_path}' not found")
            return False

        if not self._transport.get(local_path, remote_path, mode, 0):
            return False
        logger.info(f"Downloaded '{remote_path}' to '{local_path}'")
        return True

    @requires_session(False)
    def create_file(self, path: str) -> bool:
        """Create an empty remote file; fails if it already exists."""
        if self.size(path) != -1:
            logger.warning(f"Cannot create '{path}': file already exists")
            return False

        return self._transport.put(path, io.BytesIO(b""), TransferMode.ASCII)

    @requires_session(False)
    def delete_file(self, path: str) -> bool:
        """Delete a single remote file."""
        return self._transport.delete(path)

    @requires_session(False)
    def rename(self, old_name: str, new_name: str) -> bool:
        """Rename or move a remote path."""
        return self._transport.rename(old_name, new_name)

    move = rename

    @requires_session(None)
    def read_file(self, path: str, encoding: Optional[str] = "utf-8") -> Optional[Union[str, bytes]]:
        """
        Read a remote file into memory.

        Args:
            path: Remote file
            encoding: Text encoding, or None to return bytes

        Returns:
            File contents, or None if the transfer or decoding failed

        Raises:
            FTPFileTooLargeError: If the file is larger than MAX_READ_SIZE
        """
        size = self.size(path)
        if size > MAX_READ_SIZE:
            raise FTPFileTooLargeError(path, size, MAX_READ_SIZE)

        buffer = io.BytesIO()
        if not self._transport.get(buffer, path, TransferMode.BINARY, 0):
            return None

        data = buffer.getvalue()
        if encoding is None:
            return data
        try:
            return data.decode(encoding)
        except UnicodeDecodeError as e:
            logger.warning(f"Read of '{path}' failed: not valid {encoding}: {e}")
            return None

    @requires_session(False)
    def save_file(self, path: str, content: Union[str, bytes]) -> bool:
        """
        Write content to a remote file, replacing it if present.

        Args:
            path: Remote file
            content: Text (encoded as UTF-8) or bytes
        """
        if isinstance(content, str):
            content = content.encode("utf-8")

        buffer = io.BytesIO()
        buffer.write(content)
        buffer.seek(0)
        return self._transport.put(path, buffer, TransferMode.BINARY)
