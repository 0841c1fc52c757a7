"""Configuration module for ftpkit.

This module handles client settings and credentials:
- SettingsManager: JSON-based settings persistence
- CredentialManager: Secure password storage via keyring
- Paths: Application data directory discovery
- ClientSettings: Settings dataclass
"""
