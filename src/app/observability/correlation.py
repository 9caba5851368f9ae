"""correlation_id por mensagem inbound.

Cada evento DingTalk é processado com o id da mensagem como
correlation_id, injetado nos logs pelo CorrelationIdFilter. Usa
ContextVar, então handlers concorrentes não interferem entre si.

Uso:
    with bind_correlation_id(message_context.message_id):
        ...
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (vazio se não definido)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id; gera um UUID v4 se None ou vazio."""
    return _correlation_id.set(correlation_id or str(uuid.uuid4()))


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o correlation_id ao valor anterior."""
    _correlation_id.reset(token)


@contextmanager
def bind_correlation_id(correlation_id: str | None) -> Iterator[str]:
    """Define o correlation_id durante o bloco e restaura ao sair."""
    token = set_correlation_id(correlation_id)
    try:
        yield _correlation_id.get()
    finally:
        reset_correlation_id(token)
