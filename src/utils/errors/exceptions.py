"""Exceções de domínio para falhas de infraestrutura e download de mídia.

Os componentes de normalização são totais e nunca levantam estas exceções.
Elas são levantadas apenas pelo downloader de mídia (app/infra/dingtalk)
e propagadas ao chamador para reporte ao usuário.
"""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class MediaDownloadError(InfrastructureError):
    """Falha genérica ao obter mídia do storage da plataforma."""


class FileSizeLimitError(MediaDownloadError):
    """Mídia excede o limite de tamanho configurado para o tipo de mensagem.

    Attributes:
        actual_size: Tamanho observado em bytes
        limit_size: Limite configurado em bytes
        msg_type: Tipo de mensagem (picture, video, audio, file)
    """

    def __init__(self, actual_size: int, limit_size: int, msg_type: str) -> None:
        super().__init__(
            f"File size {actual_size} bytes exceeds limit {limit_size} bytes for {msg_type}"
        )
        self.actual_size = actual_size
        self.limit_size = limit_size
        self.msg_type = msg_type


class DownloadTimeoutError(MediaDownloadError, TimeoutError):
    """Download excedeu o tempo máximo permitido.

    Também é um TimeoutError builtin, então `except TimeoutError` captura.
    """

    def __init__(self, timeout_ms: int) -> None:
        super().__init__(f"Download timed out after {timeout_ms}ms")
        self.timeout_ms = timeout_ms
