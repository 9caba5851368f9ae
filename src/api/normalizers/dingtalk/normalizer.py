"""Normalizer DingTalk: envelope bruto → DingtalkMessageContext."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from app.constants.dingtalk import (
    GROUP_CONVERSATION_TYPE,
    RICH_TEXT_MSG_TYPE,
    TEXT_MSG_TYPE,
    ChatType,
    MediaMsgType,
)
from app.protocols.models import DingtalkMessageContext

from .extractor import extract_file_from_message
from .models import DingtalkRawMessage
from .rich_text import parse_rich_text_message

logger = logging.getLogger(__name__)


def join_text_parts(text_parts: list[str]) -> str:
    """Concatena os trechos de texto de uma mensagem richText."""
    return "".join(text_parts).strip()


def _primary_text(message: DingtalkRawMessage, raw: Any) -> str:
    if message.msgtype == TEXT_MSG_TYPE:
        return message.text.content.strip() if message.text else ""
    if message.msgtype == RICH_TEXT_MSG_TYPE:
        parsed = parse_rich_text_message(raw)
        return join_text_parts(parsed.text_parts) if parsed else ""
    if message.msgtype == MediaMsgType.AUDIO:
        info = extract_file_from_message(raw)
        if info and isinstance(info.recognition, str):
            return info.recognition.strip()
    return ""


def _was_mentioned(message: DingtalkRawMessage) -> bool:
    if message.is_in_at_list is not None:
        return message.is_in_at_list
    return bool(message.at_users)


def normalize_message(raw: Any) -> DingtalkMessageContext | None:
    """Normaliza o callback bruto para o envelope interno.

    Args:
        raw: Payload do callback Stream (dict)

    Returns:
        DingtalkMessageContext, ou None se o envelope não tiver os campos
        mínimos (conversa, remetente, tipo e id da mensagem).
    """
    if not isinstance(raw, dict):
        return None
    try:
        message = DingtalkRawMessage.model_validate(raw)
    except ValidationError as exc:
        logger.info(
            "dingtalk_message_envelope_invalid",
            extra={"error_count": exc.error_count()},
        )
        return None

    message_id = message.msg_id or message.stream_message_id
    if not message_id:
        logger.info("dingtalk_message_without_id", extra={"msg_type": message.msgtype})
        return None

    chat_type = (
        ChatType.GROUP
        if message.conversation_type == GROUP_CONVERSATION_TYPE
        else ChatType.DIRECT
    )
    return DingtalkMessageContext(
        conversation_id=message.conversation_id,
        message_id=message_id,
        sender_id=message.sender_id,
        chat_type=chat_type,
        content=_primary_text(message, raw),
        content_type=message.msgtype,
        mentioned_bot=_was_mentioned(message),
        sender_nick=message.sender_nick or None,
        robot_code=message.robot_code,
    )
