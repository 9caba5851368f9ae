"""Decodificação do payload bruto DingTalk.

O campo "content" chega como objeto ou como string JSON, conforme a
versão da plataforma. Toda decodificação acontece aqui, uma vez por
fronteira; os chamadores trabalham apenas com dicts.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any

logger = logging.getLogger(__name__)

_MSG_TYPE_KEYS = ("msgtype", "msgType")


def decode_json_value(value: Any) -> Any:
    """Retorna value decodificado se for string JSON; senão o próprio value.

    JSON malformado resulta em None (nunca propaga exceção).
    """
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except (ValueError, RecursionError) as exc:
        logger.debug(
            "dingtalk_payload_json_invalid",
            extra={"error_type": type(exc).__name__, "length": len(value)},
        )
        return None


def read_msg_type(raw: Any) -> str | None:
    """Lê a tag de tipo da mensagem (msgtype ou msgType)."""
    if not isinstance(raw, Mapping):
        return None
    for key in _MSG_TYPE_KEYS:
        value = raw.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def decode_content(raw: Any) -> dict[str, Any] | None:
    """Normaliza raw["content"] para dict, ou None se ausente/inválido."""
    if not isinstance(raw, Mapping):
        return None
    content = decode_json_value(raw.get("content"))
    if not isinstance(content, dict):
        return None
    return content


def first_non_empty_str(record: Mapping[str, Any], keys: Iterable[str]) -> str | None:
    """Avalia as chaves em ordem e retorna o primeiro valor string não vazio."""
    for key in keys:
        value = record.get(key)
        if isinstance(value, str) and value:
            return value
    return None
