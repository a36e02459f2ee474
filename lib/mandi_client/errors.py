from __future__ import annotations


class MandiClientError(Exception):
    """Base client error."""


class StorageError(MandiClientError):
    """Client-side storage could not be read."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


class SessionError(MandiClientError):
    """Stored session is not usable."""
