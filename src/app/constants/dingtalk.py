"""Enums de domínio para mensagens DingTalk."""

from __future__ import annotations

from enum import StrEnum


class MediaMsgType(StrEnum):
    """Tipos de mensagem de mídia única (baixáveis via download code)."""

    PICTURE = "picture"
    VIDEO = "video"
    AUDIO = "audio"
    FILE = "file"


class RichTextElementType(StrEnum):
    """Tipos de elemento dentro de uma mensagem richText.

    TEXT é o padrão documentado: elemento sem "type" é tratado como texto.
    """

    TEXT = "text"
    PICTURE = "picture"
    AT = "at"


class ChatType(StrEnum):
    """Tipo de conversa normalizado."""

    DIRECT = "direct"
    GROUP = "group"


TEXT_MSG_TYPE = "text"
RICH_TEXT_MSG_TYPE = "richText"

# conversationType do callback Stream: "1" = conversa direta, "2" = grupo
GROUP_CONVERSATION_TYPE = "2"

PROVIDER_NAME = "dingtalk"
