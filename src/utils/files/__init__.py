"""Utilitários de arquivo: categoria semântica e extensão canônica."""

from .classifier import (
    DEFAULT_EXTENSION,
    FileCategory,
    extract_extension,
    normalize_mime_type,
    resolve_extension,
    resolve_file_category,
)

__all__ = [
    "DEFAULT_EXTENSION",
    "FileCategory",
    "extract_extension",
    "normalize_mime_type",
    "resolve_extension",
    "resolve_file_category",
]
