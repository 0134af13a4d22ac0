"""Logging utilities for the diffscribe command."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

_LOGGER_NAME = "diffscribe"
_MASK = "***"


class SecretMaskingFilter(logging.Filter):
    """Replaces credential values in log records before any handler emits them."""

    def __init__(self, secrets: Iterable[str | None] = ()) -> None:
        super().__init__()
        # Longest first so a secret containing another is masked whole.
        self._secrets = sorted({s for s in secrets if s}, key=len, reverse=True)

    def mask(self, text: str) -> str:
        for secret in self._secrets:
            text = text.replace(secret, _MASK)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        if not self._secrets:
            return True
        record.msg = self.mask(record.getMessage())
        record.args = None
        if record.exc_info and not record.exc_text:
            record.exc_text = logging.Formatter().formatException(record.exc_info)
        if record.exc_text:
            record.exc_text = self.mask(record.exc_text)
        return True


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the diffscribe hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    secrets: Iterable[str | None] = (),
) -> logging.Logger:
    """Install console (and optional file) handlers that never print ``secrets``.

    The filter sits on the handlers rather than the logger so records from
    child loggers such as ``diffscribe.github`` are masked too.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    masking = SecretMaskingFilter(secrets)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[diffscribe] %(levelname)s %(message)s"))
    stream_handler.addFilter(masking)
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        file_handler.addFilter(masking)
        logger.addHandler(file_handler)

    return logger


__all__ = ["SecretMaskingFilter", "configure_logging", "get_logger"]
