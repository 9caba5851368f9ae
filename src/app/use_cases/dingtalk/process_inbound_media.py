"""Use case: mensagem DingTalk bruta → InboundContext com mídia local.

Orquestra extractor/parser (puros), o downloader (IO) e o overlay de
contexto. Falhas de download não interrompem o processamento: o contexto
segue sem os campos de mídia correspondentes.

Imagens de richText: baixadas em sequência, na ordem dos elementos. Se
qualquer uma falhar, o conjunto inteiro é descartado, garantindo que
MediaPaths[i] sempre corresponda à i-ésima imagem da mensagem.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from api.normalizers.dingtalk import (
    extract_file_from_message,
    normalize_message,
    parse_rich_text_message,
)
from app.constants.dingtalk import MediaMsgType
from app.observability import bind_correlation_id, record_latency, record_media_download
from config.logging import log_media_fallback
from utils.errors import DownloadTimeoutError, FileSizeLimitError, MediaDownloadError

from .inbound_context import (
    assign_media_fields_to_context,
    build_file_context_message,
    build_inbound_context,
    build_rich_text_body,
)

if TYPE_CHECKING:
    from app.protocols import (
        DingtalkMessageContext,
        DownloadedFile,
        ExtractedFileInfo,
        InboundContext,
        MediaDownloaderProtocol,
    )

logger = logging.getLogger(__name__)


def _failure_outcome(exc: MediaDownloadError) -> str:
    if isinstance(exc, FileSizeLimitError):
        return "size_limit"
    if isinstance(exc, DownloadTimeoutError):
        return "timeout"
    return "error"


class InboundMediaProcessor:
    """Monta o InboundContext de uma mensagem, baixando a mídia referenciada."""

    def __init__(self, downloader: MediaDownloaderProtocol) -> None:
        self._downloader = downloader

    async def handle(
        self,
        raw: Any,
        session_key: str,
        account_id: str,
    ) -> InboundContext | None:
        """Normaliza o envelope e processa; None se o envelope for inválido."""
        message_context = normalize_message(raw)
        if message_context is None:
            return None
        return await self.process(raw, message_context, session_key, account_id)

    async def process(
        self,
        raw: Any,
        message_context: DingtalkMessageContext,
        session_key: str,
        account_id: str,
    ) -> InboundContext:
        """Processa uma mensagem inbound.

        Args:
            raw: Payload bruto do callback (usado pelo extractor/parser)
            message_context: Envelope já normalizado
            session_key: Chave de sessão resolvida pelo roteamento
            account_id: Conta DingTalk que recebeu a mensagem

        Returns:
            Contexto canônico, com campos de mídia quando o download teve sucesso.
        """
        with bind_correlation_id(message_context.message_id) as correlation_id:
            start = time.perf_counter()
            base = build_inbound_context(message_context, session_key, account_id)

            file_info = extract_file_from_message(raw)
            downloaded_media: DownloadedFile | None = None
            media_body: str | None = None
            if file_info is not None:
                downloaded_media = await self._download_single(file_info)
                media_body = build_file_context_message(file_info.msg_type, file_info.file_name)

            rich_text_images: list[DownloadedFile] = []
            rich_text = parse_rich_text_message(raw)
            if rich_text is not None and rich_text.image_codes:
                rich_text_images = await self._download_rich_text_images(rich_text.image_codes)
                media_body = build_rich_text_body(rich_text, len(rich_text_images))

            ctx = assign_media_fields_to_context(
                base,
                downloaded_media,
                file_info,
                rich_text_images,
                media_body,
            )
            record_latency(
                "inbound_media",
                "process",
                (time.perf_counter() - start) * 1000,
                correlation_id,
            )
            return ctx

    async def _download_single(self, file_info: ExtractedFileInfo) -> DownloadedFile | None:
        try:
            downloaded = await self._downloader.download(
                file_info.download_code,
                file_info.msg_type,
                file_info.file_name,
            )
        except MediaDownloadError as exc:
            outcome = _failure_outcome(exc)
            record_media_download(file_info.msg_type.value, outcome)
            log_media_fallback(logger, "single_media", file_info.msg_type.value, outcome)
            return None
        record_media_download(file_info.msg_type.value, "ok", downloaded.size)
        return downloaded

    async def _download_rich_text_images(self, image_codes: list[str]) -> list[DownloadedFile]:
        downloaded: list[DownloadedFile] = []
        for code in image_codes:
            try:
                image = await self._downloader.download(code, MediaMsgType.PICTURE)
            except MediaDownloadError as exc:
                outcome = _failure_outcome(exc)
                record_media_download(MediaMsgType.PICTURE.value, outcome)
                log_media_fallback(
                    logger,
                    "rich_text_images",
                    MediaMsgType.PICTURE.value,
                    outcome,
                    image_count=len(image_codes),
                )
                return []
            record_media_download(MediaMsgType.PICTURE.value, "ok", image.size)
            downloaded.append(image)
        return downloaded
