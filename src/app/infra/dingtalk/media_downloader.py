"""Downloader de mídia DingTalk (download code → arquivo local).

Fluxo: troca o download code por uma URL temporária via Open API, baixa
o conteúdo em streaming aplicando o limite de tamanho do tipo e grava em
disco. Uma única tentativa, sem retry; a URL remota nunca sai daqui.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from pathlib import Path
from typing import TYPE_CHECKING

import httpx

from app.protocols.models import DownloadedFile
from config.settings import get_dingtalk_settings
from utils.errors import DownloadTimeoutError, FileSizeLimitError, MediaDownloadError
from utils.files import normalize_mime_type, resolve_extension

from .access_token import DingtalkAccessTokenProvider

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.constants.dingtalk import MediaMsgType
    from config.settings import DingtalkSettings

logger = logging.getLogger(__name__)

DOWNLOAD_URL_PATH = "/v1.0/robot/messageFiles/download"
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def build_download_client(settings: DingtalkSettings) -> httpx.AsyncClient:
    """Cliente HTTP cujo timeout por operação acompanha download_timeout_ms."""
    return httpx.AsyncClient(
        timeout=settings.download_timeout_ms / 1000,
        follow_redirects=True,
    )


def _content_length(response: httpx.Response) -> int | None:
    value = response.headers.get("content-length")
    if value is None or not value.isdigit():
        return None
    return int(value)


class DingtalkMediaDownloader:
    """Implementação de MediaDownloaderProtocol para a Open API DingTalk."""

    def __init__(
        self,
        settings: DingtalkSettings | None = None,
        token_provider: DingtalkAccessTokenProvider | None = None,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ) -> None:
        self._settings = settings if settings is not None else get_dingtalk_settings()
        if token_provider is None:
            token_provider = DingtalkAccessTokenProvider(self._settings)
        self._token_provider = token_provider
        self._client_factory = client_factory or self._default_client

    def _default_client(self) -> httpx.AsyncClient:
        return build_download_client(self._settings)

    async def download(
        self,
        download_code: str,
        msg_type: MediaMsgType,
        file_name: str | None = None,
    ) -> DownloadedFile:
        """Baixa a mídia e grava em settings.media_dir.

        Raises:
            FileSizeLimitError: Conteúdo maior que o limite do tipo.
            DownloadTimeoutError: Download excedeu download_timeout_ms.
            MediaDownloadError: Demais falhas (HTTP, URL ausente, token).
        """
        timeout_ms = self._settings.download_timeout_ms
        try:
            async with asyncio.timeout(timeout_ms / 1000):
                return await self._download(download_code, msg_type, file_name)
        except (TimeoutError, httpx.TimeoutException) as exc:
            logger.warning(
                "dingtalk_media_download_timeout",
                extra={"msg_type": msg_type.value, "timeout_ms": timeout_ms},
            )
            raise DownloadTimeoutError(timeout_ms) from exc

    async def _download(
        self,
        download_code: str,
        msg_type: MediaMsgType,
        file_name: str | None,
    ) -> DownloadedFile:
        token = await self._token_provider.get_token()
        try:
            async with self._client_factory() as client:
                download_url = await self._resolve_download_url(client, token, download_code)
                async with client.stream("GET", download_url) as response:
                    response.raise_for_status()
                    return await self._save_response(response, msg_type, file_name)
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == 401:
                self._token_provider.invalidate()
            logger.warning(
                "dingtalk_media_download_http_error",
                extra={"msg_type": msg_type.value, "status_code": exc.response.status_code},
            )
            raise MediaDownloadError(
                f"Media download failed with HTTP {exc.response.status_code}"
            ) from exc
        except httpx.TimeoutException:
            raise
        except httpx.HTTPError as exc:
            logger.warning(
                "dingtalk_media_download_failed",
                extra={"msg_type": msg_type.value, "error_type": type(exc).__name__},
            )
            raise MediaDownloadError("Media download failed") from exc
        except OSError as exc:
            logger.warning(
                "dingtalk_media_write_failed",
                extra={"msg_type": msg_type.value, "error_type": type(exc).__name__},
            )
            raise MediaDownloadError(f"Could not write media to {self._settings.media_dir}") from exc

    async def _resolve_download_url(
        self,
        client: httpx.AsyncClient,
        token: str,
        download_code: str,
    ) -> str:
        response = await client.post(
            f"{self._settings.api_base_url}{DOWNLOAD_URL_PATH}",
            headers={"x-acs-dingtalk-access-token": token},
            json={
                "downloadCode": download_code,
                "robotCode": self._settings.effective_robot_code,
            },
        )
        response.raise_for_status()
        try:
            data = response.json()
        except ValueError as exc:
            raise MediaDownloadError("Download URL response is not valid JSON") from exc

        url = data.get("downloadUrl") if isinstance(data, dict) else None
        if not isinstance(url, str) or not url:
            raise MediaDownloadError("DingTalk returned no downloadUrl")
        return url

    async def _save_response(
        self,
        response: httpx.Response,
        msg_type: MediaMsgType,
        file_name: str | None,
    ) -> DownloadedFile:
        limit = self._settings.max_size_for(msg_type)
        declared = _content_length(response)
        if declared is not None and declared > limit:
            raise FileSizeLimitError(declared, limit, msg_type.value)

        content_type = (
            normalize_mime_type(response.headers.get("content-type")) or DEFAULT_CONTENT_TYPE
        )
        target = self._target_path(content_type, file_name)

        size = 0
        completed = False
        try:
            # Escrita síncrona: chunks do httpx são pequenos e o total é limitado por tipo.
            with target.open("wb") as fh:
                async for chunk in response.aiter_bytes():
                    size += len(chunk)
                    if size > limit:
                        raise FileSizeLimitError(size, limit, msg_type.value)
                    fh.write(chunk)
            completed = True
        finally:
            if not completed:
                target.unlink(missing_ok=True)

        logger.info(
            "dingtalk_media_downloaded",
            extra={"msg_type": msg_type.value, "size_bytes": size, "content_type": content_type},
        )
        return DownloadedFile(
            path=str(target),
            content_type=content_type,
            size=size,
            file_name=file_name,
        )

    def _target_path(self, content_type: str, file_name: str | None) -> Path:
        media_dir = Path(self._settings.media_dir)
        media_dir.mkdir(parents=True, exist_ok=True)
        extension = resolve_extension(content_type, file_name)
        return (media_dir / f"dingtalk-{uuid.uuid4().hex}{extension}").resolve()
