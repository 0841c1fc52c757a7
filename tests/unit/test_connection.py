"""Unit tests for FTPConnectionConfig and connect()."""

import pytest
from unittest.mock import Mock

from ftpkit.config.credentials import CredentialManager
from ftpkit.ftp.connection import FTPConnectionConfig, connect
from ftpkit.ftp.exceptions import FTPAuthenticationError

from tests.fakes import FakeTransport


class TestFTPConnectionConfig:
    """Tests for FTPConnectionConfig dataclass."""

    def test_default_values(self):
        """Test default configuration values."""
        config = FTPConnectionConfig(host="192.168.1.100")
        assert config.host == "192.168.1.100"
        assert config.port == 21
        assert config.username == "anonymous"
        assert config.passive_mode is True
        assert config.timeout == 30

    def test_custom_values(self):
        config = FTPConnectionConfig(
            host="ftp.example.com",
            port=2121,
            username="deploy",
            passive_mode=False,
            timeout=60
        )
        assert config.port == 2121
        assert config.username == "deploy"
        assert config.passive_mode is False
        assert config.timeout == 60

    def test_empty_host_raises_error(self):
        with pytest.raises(ValueError, match="Host is required"):
            FTPConnectionConfig(host="")

    def test_malformed_host_raises_error(self):
        with pytest.raises(ValueError, match="Invalid host"):
            FTPConnectionConfig(host="bad host!")

    def test_invalid_port_raises_error(self):
        with pytest.raises(ValueError, match="Port must be between"):
            FTPConnectionConfig(host="192.168.1.1", port=0)
        with pytest.raises(ValueError, match="Port must be between"):
            FTPConnectionConfig(host="192.168.1.1", port=70000)

    def test_invalid_timeout_raises_error(self):
        with pytest.raises(ValueError, match="Timeout must be between"):
            FTPConnectionConfig(host="192.168.1.1", timeout=1)
        with pytest.raises(ValueError, match="Timeout must be between"):
            FTPConnectionConfig(host="192.168.1.1", timeout=500)


class TestConnect:
    """Tests for the connect() factory."""

    @pytest.fixture
    def config(self):
        return FTPConnectionConfig(host="ftp.example.com", port=2121, username="deploy", passive_mode=False)

    def test_connect_with_password(self, config, transport):
        ftp_client = connect(config, password="secret", transport_factory=lambda **kw: transport)

        assert ftp_client.is_live is True
        assert ("connect", "ftp.example.com", 2121) in transport.calls
        assert ("login", "deploy", "secret") in transport.calls
        assert transport.passive is False

    def test_connect_passes_timeout(self, config):
        received = {}

        def factory(**kwargs):
            received.update(kwargs)
            return FakeTransport(**kwargs)

        connect(config, password="secret", transport_factory=factory)
        assert received["timeout"] == 30

    def test_password_from_keyring(self, config, transport):
        """Test a missing password is looked up in the credential store."""
        credentials = Mock(spec=CredentialManager)
        credentials.get_password.return_value = "secret"

        ftp_client = connect(config, credentials=credentials, transport_factory=lambda **kw: transport)

        assert ftp_client.is_live is True
        credentials.get_password.assert_called_once_with("ftp.example.com", "deploy")

    def test_explicit_password_skips_keyring(self, config, transport):
        credentials = Mock(spec=CredentialManager)

        connect(config, password="secret", credentials=credentials, transport_factory=lambda **kw: transport)

        credentials.get_password.assert_not_called()

    def test_no_stored_password_uses_empty(self, config, transport):
        credentials = Mock(spec=CredentialManager)
        credentials.get_password.return_value = None

        with pytest.raises(FTPAuthenticationError):
            connect(config, credentials=credentials, transport_factory=lambda **kw: transport)

        assert ("login", "deploy", "") in transport.calls
