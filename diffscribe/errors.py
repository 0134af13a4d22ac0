"""Error types raised by the diffscribe pipeline."""

from __future__ import annotations


class DiffScribeError(RuntimeError):
    """Base class for every failure the pipeline reports."""


class ConfigurationError(DiffScribeError):
    """Raised when required environment input or the config file is invalid."""


class FileAccessError(DiffScribeError):
    """Raised when the pull request template cannot be read."""


class RemoteError(DiffScribeError):
    """Raised when an HTTP call fails or returns an unexpected status.

    ``status_code`` is ``None`` when the request never produced a response
    (DNS failure, refused connection, ...); ``body`` then holds the reason.
    """

    def __init__(self, message: str, *, status_code: int | None = None, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        detail = message
        if status_code is not None:
            detail = f"{message} (status {status_code})"
        if body.strip():
            detail = f"{detail}: {body.strip()}"
        super().__init__(detail)


class ParseError(DiffScribeError):
    """Raised when the inference endpoint returns an unusable response."""


__all__ = [
    "ConfigurationError",
    "DiffScribeError",
    "FileAccessError",
    "ParseError",
    "RemoteError",
]
