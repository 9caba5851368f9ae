"""Protocolo do downloader de mídia DingTalk."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.constants.dingtalk import MediaMsgType
    from app.protocols.models import DownloadedFile


class MediaDownloaderProtocol(Protocol):
    """Contrato para baixar mídia por download code e gravar em disco local.

    Implementações levantam FileSizeLimitError quando o conteúdo excede o
    limite do tipo, DownloadTimeoutError quando estoura o tempo e
    MediaDownloadError nas demais falhas. Uma única tentativa, sem retry.
    """

    async def download(
        self,
        download_code: str,
        msg_type: MediaMsgType,
        file_name: str | None = None,
    ) -> DownloadedFile:
        """Baixa mídia e retorna o arquivo local."""
        ...
