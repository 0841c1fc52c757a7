"""ftpkit: a connection-bound FTP client wrapper."""

__version__ = "1.0.0"
