"""Credential persistence backends."""

from .credentials import CredentialStore, FileCredentialStore, MemoryCredentialStore

__all__ = ["CredentialStore", "FileCredentialStore", "MemoryCredentialStore"]
