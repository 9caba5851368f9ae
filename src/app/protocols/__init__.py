"""Protocolos e contratos do core da aplicação."""

from .media_downloader import MediaDownloaderProtocol
from .models import (
    DingtalkMessageContext,
    DownloadedFile,
    ExtractedFileInfo,
    InboundContext,
    RichTextParseResult,
)

__all__ = [
    "DingtalkMessageContext",
    "DownloadedFile",
    "ExtractedFileInfo",
    "InboundContext",
    "MediaDownloaderProtocol",
    "RichTextParseResult",
]
