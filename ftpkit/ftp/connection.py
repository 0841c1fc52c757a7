"""FTP connection configuration for ftpkit.

Provides the FTPConnectionConfig dataclass and connect(), which opens an
FTPClient from a configuration and, optionally, a keyring-stored password.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ftpkit.config.credentials import CredentialManager
from ftpkit.ftp.client import FTPClient
from ftpkit.ftp.transport import FTPTransport
from ftpkit.utils.validators import validate_host, validate_port, validate_timeout

logger = logging.getLogger("ftpkit.connection")


@dataclass
class FTPConnectionConfig:
    """FTP connection configuration."""
    host: str
    port: int = 21
    username: str = "anonymous"
    passive_mode: bool = True
    timeout: int = 30

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.host:
            raise ValueError("Host is required")

        for is_valid, error in (
            validate_host(self.host),
            validate_port(self.port),
            validate_timeout(self.timeout),
        ):
            if not is_valid:
                raise ValueError(error)


def connect(
    config: FTPConnectionConfig,
    password: Optional[str] = None,
    credentials: Optional[CredentialManager] = None,
    transport_factory: Callable[..., FTPTransport] = FTPTransport
) -> FTPClient:
    """
    Open an FTPClient for a configuration.

    Args:
        config: Connection configuration
        password: FTP password; looked up in the keyring when None
        credentials: Credential store used for the lookup
        transport_factory: Callable building the transport

    Returns:
        Connected FTPClient

    Raises:
        FTPConnectionError: If the server cannot be reached
        FTPAuthenticationError: If login is rejected
    """
    if password is None and credentials is not None:
        password = credentials.get_password(config.host, config.username)
        if password is None:
            logger.debug(f"No stored password for {config.username}@{config.host}")

    return FTPClient(
        config.host,
        config.username,
        password or "",
        port=config.port,
        passive=config.passive_mode,
        timeout=config.timeout,
        transport_factory=transport_factory,
    )
