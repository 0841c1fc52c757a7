"""FTP-specific exceptions for ftpkit.

Only session setup failures and the read size ceiling are raised to the
caller. Everything else an FTPClient does reports failure through its
return value.
"""


class FTPError(Exception):
    """Base exception for all FTP-related errors."""

    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


class FTPConnectionError(FTPError):
    """Failed to establish FTP connection."""

    def __init__(self, host: str, port: int, original_error: Exception = None):
        self.host = host
        self.port = port
        message = f"Failed to connect to {host}:{port}"
        super().__init__(message, original_error)


class FTPTimeoutError(FTPConnectionError):
    """Connecting to the FTP server timed out."""

    def __init__(self, host: str, port: int, timeout: int = 30):
        super().__init__(host, port)
        self.timeout = timeout
        self.message = f"Connection to {host}:{port} timed out after {timeout} seconds"
        self.args = (self.message,)


class FTPAuthenticationError(FTPError):
    """FTP authentication (login) failed."""

    def __init__(self, username: str, original_error: Exception = None):
        self.username = username
        message = f"Authentication failed for user '{username}'"
        super().__init__(message, original_error)


class FTPNotConnectedError(FTPError):
    """Operation attempted without active FTP connection."""

    def __init__(self, operation: str = "Operation"):
        message = f"{operation} requires an active FTP connection"
        super().__init__(message)


class FTPFileTooLargeError(FTPError):
    """Remote file exceeds the in-memory read limit."""

    def __init__(self, path: str, size: int, limit: int):
        self.path = path
        self.size = size
        self.limit = limit
        message = f"File '{path}' is too large to read ({size} bytes, limit {limit})"
        super().__init__(message)
