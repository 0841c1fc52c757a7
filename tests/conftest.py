"""Pytest configuration and shared fixtures for ftpkit tests."""

import pytest
from pathlib import Path

from ftpkit.ftp.client import FTPClient

from tests.fakes import FakeTransport


# Test constants
TEST_FTP_HOST = "ftp.example.com"
TEST_FTP_USER = "testuser"
TEST_FTP_PASS = "secret"


@pytest.fixture
def transport() -> FakeTransport:
    """Provide an empty in-memory transport."""
    return FakeTransport()


@pytest.fixture
def client(transport: FakeTransport) -> FTPClient:
    """Provide a connected client whose call log starts empty."""
    ftp_client = FTPClient(
        TEST_FTP_HOST,
        TEST_FTP_USER,
        TEST_FTP_PASS,
        transport_factory=lambda **kwargs: transport
    )
    transport.calls.clear()
    yield ftp_client
    ftp_client.close()


@pytest.fixture
def local_file(tmp_path: Path) -> Path:
    """Create a small local binary file."""
    path = tmp_path / "payload.bin"
    path.write_bytes(b"\x00\x01\x02payload")
    return path
