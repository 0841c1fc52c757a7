"""Input validators for ftpkit.

Validation helpers for connection settings and local file paths. Each
returns an (is_valid, error_message) tuple.
"""

import re
from pathlib import Path
from typing import Optional, Tuple, Union


Validation = Tuple[bool, Optional[str]]

# IPv4 address pattern
IPV4_PATTERN = re.compile(
    r'^(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}'
    r'(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)$'
)

# Hostname pattern (simplified)
HOSTNAME_PATTERN = re.compile(
    r'^(?=.{1,253}$)(?!-)[A-Za-z0-9-]{1,63}(?<!-)(\.[A-Za-z0-9-]{1,63})*$'
)

PORT_RANGE = (1, 65535)
TIMEOUT_RANGE = (5, 300)


def validate_ip_address(ip: str) -> Validation:
    """Check that ip is a dotted IPv4 address."""
    if not ip or not ip.strip():
        return False, "IP address is required"

    ip = ip.strip()
    if IPV4_PATTERN.match(ip):
        return True, None
    return False, f"Invalid IP address format: {ip}"


def validate_hostname(hostname: str) -> Validation:
    """
    Validate a DNS hostname.

    Args:
        hostname: Hostname to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not hostname or not hostname.strip():
        return False, "Hostname is required"

    hostname = hostname.strip()
    if HOSTNAME_PATTERN.match(hostname):
        return True, None
    return False, f"Invalid hostname format: {hostname}"


def validate_host(host: str) -> Validation:
    """
    Validate a host given as an IPv4 address or a hostname.

    Args:
        host: Host string to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not host or not host.strip():
        return False, "Host is required"

    host = host.strip()
    if validate_ip_address(host)[0] or validate_hostname(host)[0]:
        return True, None

    return False, f"Invalid host: {host}. Must be a valid IP address or hostname."


def _validate_int_range(value, label: str, bounds: Tuple[int, int], unit: str = "") -> Validation:
    if not isinstance(value, int):
        try:
            value = int(value)
        except (ValueError, TypeError):
            return False, f"{label} must be a number"

    low, high = bounds
    if value < low or value > high:
        return False, f"{label} must be between {low} and {high}{unit}, got {value}"
    return True, None


def validate_port(port: int) -> Validation:
    return _validate_int_range(port, "Port", PORT_RANGE)


def validate_timeout(timeout: int) -> Validation:
    """Timeouts are whole seconds within TIMEOUT_RANGE."""
    return _validate_int_range(timeout, "Timeout", TIMEOUT_RANGE, " seconds")


def validate_file_path(path: Union[str, Path], must_exist: bool = True) -> Validation:
    """
    Validate a local file path.

    Args:
        path: Path to validate
        must_exist: If True, the path must name an existing regular file

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not path:
        return False, "File path is required"

    path = Path(path)
    if must_exist:
        if not path.exists():
            return False, f"File does not exist: {path}"
        if not path.is_file():
            return False, f"Path is not a file: {path}"

    return True, None
