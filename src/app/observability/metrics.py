"""Métricas do pipeline inbound emitidas como logs estruturados.

O backend de logs agrega os eventos `metric_*` por campo:
- metric_latency: duração do processamento de uma mensagem
- metric_media_download: contador de downloads por msg_type e outcome

Nenhum evento carrega download code, URL ou conteúdo da mensagem.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def _emit(event: str, metric_type: str, fields: dict[str, object]) -> None:
    logger.info(event, extra={"metric_type": metric_type, **fields})


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Emite a duração de uma operação, em ms com duas casas."""
    _emit(
        "metric_latency",
        "latency",
        {
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_media_download(
    msg_type: str,
    outcome: str,
    size_bytes: int | None = None,
    correlation_id: str | None = None,
) -> None:
    """Conta um download de mídia.

    Args:
        msg_type: picture, video, audio ou file
        outcome: "ok", "size_limit", "timeout" ou "error"
        size_bytes: Bytes gravados (somente quando outcome == "ok")
        correlation_id: Sobrescreve o correlation_id do contexto
    """
    fields: dict[str, object] = {"msg_type": msg_type, "outcome": outcome}
    if size_bytes is not None:
        fields["size_bytes"] = size_bytes
    if correlation_id:
        fields["correlation_id"] = correlation_id
    _emit("metric_media_download", "counter", fields)
