"""Exception types shared by the backend, scanner, and runtime loop."""

from __future__ import annotations


class LazyduError(Exception):
    """Base class for errors raised deliberately by lazydu."""


class BackendError(LazyduError):
    """A storage operation (list, delete, purge) failed."""

    def __init__(self, remote: str, message: str) -> None:
        super().__init__(message)
        self.remote = remote


class ScanError(LazyduError):
    """Background discovery failed in a way that ends the session."""
