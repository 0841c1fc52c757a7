"""FTP transport primitives for ftpkit.

Provides TransferMode, the extension based mode lookup, and FTPTransport,
a thin adapter over ftplib.FTP. Every primitive apart from connect and
login reports failure through its return value instead of raising.
"""

import logging
import os
import socket
from datetime import datetime, timezone
from enum import Enum
from ftplib import FTP, all_errors, error_perm
from pathlib import PurePosixPath
from typing import BinaryIO, List, Optional, Union

from ftpkit.ftp.exceptions import (
    FTPAuthenticationError,
    FTPConnectionError,
    FTPNotConnectedError,
    FTPTimeoutError,
)

logger = logging.getLogger("ftpkit.transport")


class TransferMode(Enum):
    """Data transfer type for uploads and downloads."""
    BINARY = "binary"
    ASCII = "ascii"
    AUTO = "auto"


# Extensions transferred as text when TransferMode.AUTO is requested
TEXT_EXTENSIONS = frozenset([
    "txt", "text", "php", "phps", "php4", "js", "css",
    "htm", "html", "phtml", "shtml", "log", "xml",
])


def resolve_mode(mode: TransferMode, path: Union[str, os.PathLike]) -> TransferMode:
    """
    Turn TransferMode.AUTO into a concrete mode for the given file.

    Args:
        mode: Requested transfer mode
        path: Local or remote file name used for the extension lookup

    Returns:
        TransferMode.ASCII or TransferMode.BINARY
    """
    if mode is not TransferMode.AUTO:
        return mode

    extension = PurePosixPath(os.fspath(path)).suffix.lstrip(".").lower()
    if extension in TEXT_EXTENSIONS:
        return TransferMode.ASCII
    return TransferMode.BINARY


Source = Union[str, os.PathLike, BinaryIO]


class FTPTransport:
    """One ftplib session exposing the primitive FTP operations."""

    # Block size for FTP transfers (8KB)
    BLOCK_SIZE = 8192

    def __init__(self, timeout: int = 30, encoding: str = "utf-8"):
        """
        Initialize the transport.

        Args:
            timeout: Socket timeout in seconds, applied at connect
            encoding: Encoding used for commands and ASCII transfers
        """
        self._timeout = timeout
        self._encoding = encoding
        self._ftp: Optional[FTP] = None

    @property
    def is_open(self) -> bool:
        """True if the control connection is open."""
        return self._ftp is not None and self._ftp.sock is not None

    @property
    def ftp(self) -> FTP:
        """
        Get the underlying FTP object.

        Raises:
            FTPNotConnectedError: If not connected
        """
        if self._ftp is None:
            raise FTPNotConnectedError("FTP access")
        return self._ftp

    def connect(self, host: str, port: int) -> None:
        """
        Open the control connection.

        Raises:
            FTPTimeoutError: If the connection attempt times out
            FTPConnectionError: If the server cannot be reached
        """
        ftp = FTP(encoding=self._encoding)
        ftp.set_debuglevel(0)

        try:
            ftp.connect(host=host, port=port, timeout=self._timeout)
        except socket.timeout:
            raise FTPTimeoutError(host, port, self._timeout)
        except all_errors as e:
            raise FTPConnectionError(host, port, e)

        self._ftp = ftp
        logger.debug(f"Control connection open to {host}:{port}")

    def login(self, username: str, password: str) -> None:
        """
        Authenticate the session.

        Raises:
            FTPAuthenticationError: If the server rejects the credentials
        """
        try:
            self.ftp.login(user=username, passwd=password)
        except all_errors as e:
            raise FTPAuthenticationError(username, e)

    def set_passive(self, passive: bool) -> None:
        """Select passive or active data connections."""
        self.ftp.set_pasv(passive)

    def close(self) -> None:
        """Close the session; never raises."""
        if self._ftp:
            try:
                self._ftp.quit()
            except Exception:
                # Best effort close
                try:
                    self._ftp.close()
                except Exception:
                    pass

        self._ftp = None

    def _run(self, description: str, command, *args) -> bool:
        """Run an ftplib call, converting protocol errors into False."""
        try:
            command(*args)
        except all_errors as e:
            logger.warning(f"{description} failed: {e}")
            return False
        return True

    def chdir(self, path: str) -> bool:
        return self._run(f"Change directory to '{path}'", self.ftp.cwd, path)

    def pwd(self) -> Optional[str]:
        try:
            return self.ftp.pwd()
        except all_errors as e:
            logger.warning(f"Print working directory failed: {e}")
            return None

    def mkdir(self, path: str) -> bool:
        return self._run(f"Create directory '{path}'", self.ftp.mkd, path)

    def rmdir(self, path: str) -> bool:
        return self._run(f"Remove directory '{path}'", self.ftp.rmd, path)

    def delete(self, path: str) -> bool:
        return self._run(f"Delete '{path}'", self.ftp.delete, path)

    def rename(self, old_name: str, new_name: str) -> bool:
        return self._run(
            f"Rename '{old_name}' to '{new_name}'",
            self.ftp.rename,
            old_name,
            new_name,
        )

    def chmod(self, perm: Union[int, str], path: str) -> bool:
        """Apply permissions via SITE CHMOD; ints are sent in octal."""
        mode = f"{perm:o}" if isinstance(perm, int) else str(perm)
        return self._run(
            f"Chmod {mode} '{path}'",
            self.ftp.sendcmd,
            f"SITE CHMOD {mode} {path}",
        )

    def list_dir(self, path: str, detailed: bool = False) -> Optional[List[str]]:
        """
        List a directory.

        Args:
            path: Remote directory
            detailed: Return raw LIST lines instead of NLST names

        Returns:
            Ordered entries, or None if the listing failed
        """
        ftp = self.ftp
        try:
            if detailed:
                lines: List[str] = []
                ftp.retrlines(f"LIST {path}", lines.append)
                return lines
            return ftp.nlst(path)
        except error_perm as e:
            # Some servers answer an empty NLST with 550 instead of no data
            if "no files found" in str(e).lower():
                return []
            logger.warning(f"Listing '{path}' failed: {e}")
            return None
        except all_errors as e:
            logger.warning(f"Listing '{path}' failed: {e}")
            return None

    def get(
        self,
        destination: Source,
        remote_path: str,
        mode: TransferMode = TransferMode.BINARY,
        offset: int = 0
    ) -> bool:
        """
        Download a remote file into a local path or writable binary stream.

        Args:
            destination: Local file path or binary file object
            remote_path: Remote file to retrieve
            mode: Transfer mode (AUTO is resolved from remote_path)
            offset: Byte offset to restart from (binary mode only)

        Returns:
            True if the transfer completed
        """
        mode = resolve_mode(mode, remote_path)
        try:
            if isinstance(destination, (str, os.PathLike)):
                with open(destination, "wb") as f:
                    self._retrieve(f, remote_path, mode, offset)
            else:
                self._retrieve(destination, remote_path, mode, offset)
        except all_errors as e:
            logger.warning(f"Download of '{remote_path}' failed: {e}")
            if isinstance(destination, (str, os.PathLike)):
                self._discard_partial(destination)
            return False
        return True

    @staticmethod
    def _discard_partial(local_path: Union[str, os.PathLike]) -> None:
        try:
            os.remove(local_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.debug(f"Could not remove partial download '{local_path}': {e}")

    def _retrieve(self, fp: BinaryIO, remote_path: str, mode: TransferMode, offset: int) -> None:
        command = f"RETR {remote_path}"
        if mode is TransferMode.ASCII:
            encoding = self._encoding

            def write_line(line: str) -> None:
                fp.write(line.encode(encoding) + b"\n")

            self.ftp.retrlines(command, write_line)
        else:
            self.ftp.retrbinary(
                command,
                fp.write,
                blocksize=self.BLOCK_SIZE,
                rest=offset or None
            )

    def put(
        self,
        remote_path: str,
        source: Source,
        mode: TransferMode = TransferMode.BINARY,
        offset: int = 0
    ) -> bool:
        """
        Upload a local path or readable binary stream to a remote file.

        Args:
            remote_path: Remote file to create or overwrite
            source: Local file path or binary file object
            mode: Transfer mode (AUTO is resolved from remote_path)
            offset: Byte offset to restart from (binary mode only)

        Returns:
            True if the transfer completed
        """
        mode = resolve_mode(mode, remote_path)
        try:
            if isinstance(source, (str, os.PathLike)):
                with open(source, "rb") as f:
                    self._store(f, remote_path, mode, offset)
            else:
                self._store(source, remote_path, mode, offset)
        except all_errors as e:
            logger.warning(f"Upload to '{remote_path}' failed: {e}")
            return False
        return True

    def _store(self, fp: BinaryIO, remote_path: str, mode: TransferMode, offset: int) -> None:
        command = f"STOR {remote_path}"
        if mode is TransferMode.ASCII:
            self.ftp.storlines(command, fp)
        else:
            self.ftp.storbinary(
                command,
                fp,
                blocksize=self.BLOCK_SIZE,
                rest=offset or None
            )

    def size(self, path: str) -> int:
        """Return the remote file size in bytes, or -1."""
        ftp = self.ftp
        try:
            # SIZE is refused by many servers while in ASCII mode
            ftp.voidcmd("TYPE I")
            result = ftp.size(path)
        except all_errors as e:
            logger.debug(f"SIZE '{path}' failed: {e}")
            return -1
        return result if result is not None else -1

    def mdtm(self, path: str) -> int:
        """Return the remote modification time as a Unix timestamp, or -1."""
        try:
            response = self.ftp.sendcmd(f"MDTM {path}")
            # "213 YYYYMMDDHHMMSS[.sss]", always UTC
            stamp = response[3:].strip()[:14]
            modified = datetime.strptime(stamp, "%Y%m%d%H%M%S")
        except all_errors + (ValueError,) as e:
            logger.debug(f"MDTM '{path}' failed: {e}")
            return -1
        return int(modified.replace(tzinfo=timezone.utc).timestamp())
