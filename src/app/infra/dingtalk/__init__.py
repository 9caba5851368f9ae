"""Implementações de IO para a Open API DingTalk."""

from .access_token import AccessTokenCache, DingtalkAccessTokenProvider
from .media_downloader import DingtalkMediaDownloader, build_download_client

__all__ = [
    "AccessTokenCache",
    "DingtalkAccessTokenProvider",
    "DingtalkMediaDownloader",
    "build_download_client",
]
