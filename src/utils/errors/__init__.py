"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    DownloadTimeoutError,
    FileSizeLimitError,
    InfrastructureError,
    MediaDownloadError,
)

__all__ = [
    "DownloadTimeoutError",
    "FileSizeLimitError",
    "InfrastructureError",
    "MediaDownloadError",
]
