"""Filters de logging para injeção de contexto.

Campos injetados em todo record:
- correlation_id: id da mensagem inbound em processamento
- service: nome do serviço
- channel: canal de origem (ex: dingtalk)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

DEFAULT_CHANNEL = "dingtalk"


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id, service e channel em cada record de log.

    Valores passados explicitamente via `extra` são preservados.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia.
        channel: Canal padrão quando o record não informa um.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
        channel: str = DEFAULT_CHANNEL,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")
        self._channel = channel

    def filter(self, record: logging.LogRecord) -> bool:
        """Enriquece o record; nunca descarta."""
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        if not getattr(record, "channel", None):
            record.channel = self._channel
        return True
