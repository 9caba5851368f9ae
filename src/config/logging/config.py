"""Setup do logging JSON do serviço de inbound.

Uso:
    from config.logging import configure_logging

    configure_logging(level="INFO", correlation_id_getter=get_correlation_id)

Módulos usam `logging.getLogger(__name__)` com nome de evento em
snake_case e contexto em `extra={}`.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

from config.logging.filters import DEFAULT_CHANNEL, CorrelationIdFilter
from config.logging.formatters import create_json_formatter
from config.settings.base import DEFAULT_SERVICE_NAME, VALID_LOG_LEVELS

if TYPE_CHECKING:
    from collections.abc import Callable

# Clientes HTTP logam cada request em INFO; URLs de download são temporárias e assinadas
NOISY_LOGGERS: tuple[str, ...] = ("httpx", "httpcore")


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    channel: str = DEFAULT_CHANNEL,
    stream: TextIO | None = None,
) -> None:
    """Instala um único handler JSON no root logger.

    Args:
        level: DEBUG, INFO, WARNING, ERROR ou CRITICAL (qualquer caixa).
        service_name: Valor do campo "service".
        correlation_id_getter: Fonte do correlation_id do evento em curso
            (ex: app.observability.get_correlation_id).
        channel: Valor padrão do campo "channel".
        stream: Destino da saída; stderr se omitido.

    Raises:
        ValueError: Nível fora de VALID_LOG_LEVELS.
    """
    normalized = level.upper()
    if normalized not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Use um de: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter, channel))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(normalized)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Atalho para logging.getLogger."""
    return logging.getLogger(name)


def log_media_fallback(
    logger: logging.Logger,
    component: str,
    msg_type: str,
    outcome: str,
    image_count: int | None = None,
) -> None:
    """Registra que o contexto seguiu sem a mídia de um componente.

    Args:
        logger: Logger do módulo chamador.
        component: "single_media" ou "rich_text_images".
        msg_type: Tipo da mensagem cuja mídia foi descartada.
        outcome: "size_limit", "timeout" ou "error".
        image_count: Quantidade de imagens descartadas (richText).
    """
    extra: dict[str, object] = {
        "fallback_used": True,
        "component": component,
        "msg_type": msg_type,
        "outcome": outcome,
    }
    if image_count is not None:
        extra["image_count"] = image_count

    logger.warning("dingtalk_media_fallback", extra=extra)
