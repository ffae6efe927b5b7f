"""Custom exceptions for the remote-artwork library."""

from __future__ import annotations


class ArtworkError(Exception):
    """Base exception for all artwork-related errors."""

    def __init__(self, message: str, repository: str | None = None) -> None:
        self.repository = repository
        super().__init__(message)


class RepositoryConnectionError(ArtworkError):
    """Raised when a repository catalog cannot be downloaded."""

    def __init__(self, repository: str, details: str | None = None) -> None:
        message = f"Error downloading repository '{repository}'"
        if details:
            message += f": {details}"
        super().__init__(message, repository)


class CatalogParseError(ArtworkError):
    """Raised when a repository response is not a valid catalog."""

    def __init__(self, repository: str | None = None, details: str | None = None) -> None:
        message = "Error deserializing repository response"
        if repository:
            message += f" from '{repository}'"
        if details:
            message += f": {details}"
        super().__init__(message, repository)


class InvalidConfigurationError(ArtworkError):
    """Raised when configuration is invalid."""

    def __init__(self, details: str) -> None:
        super().__init__(f"Invalid configuration: {details}")

