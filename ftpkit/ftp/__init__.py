"""FTP operations module for ftpkit.

This module handles all FTP-related functionality:
- FTPClient: Session-bound directory and file operations
- FTPTransport: ftplib adapter exposing the protocol primitives
- FTPConnectionConfig / connect: Configured session setup
- DirectoryMirror: Recursive upload of local directory trees
- Exceptions: FTP-specific error types
"""
