"""Parser de mensagens richText (texto, imagens inline e menções)."""

from __future__ import annotations

import logging
from typing import Any

from app.constants.dingtalk import RICH_TEXT_MSG_TYPE, MediaMsgType, RichTextElementType
from app.protocols.models import RichTextParseResult

from ._payload import decode_content, decode_json_value, first_non_empty_str, read_msg_type
from .extractor import DOWNLOAD_CODE_FIELDS

logger = logging.getLogger(__name__)

_ELEMENT_TYPES = frozenset(item.value for item in RichTextElementType)


def _resolve_element_type(tag: Any) -> RichTextElementType | None:
    """Resolve o tipo do elemento; ausência de tag significa TEXT."""
    if tag is None:
        return RichTextElementType.TEXT
    if isinstance(tag, str) and tag in _ELEMENT_TYPES:
        return RichTextElementType(tag)
    return None


def _decode_elements(raw: Any) -> list[Any] | None:
    content = decode_content(raw)
    if content is None:
        return None
    elements = decode_json_value(content.get("richText"))
    if not isinstance(elements, list):
        return None
    return elements


def parse_rich_text_message(raw: Any) -> RichTextParseResult | None:
    """Separa uma mensagem richText em textos, download codes e menções.

    Elementos picture sem download code são descartados; elementos com tag
    desconhecida são ignorados. Lista vazia (após decodificação) resulta em
    None, assim como payload malformado ou mensagem que não é richText.
    """
    if read_msg_type(raw) != RICH_TEXT_MSG_TYPE:
        return None

    elements = _decode_elements(raw)
    if not elements:
        return None

    result = RichTextParseResult()
    picture_fields = DOWNLOAD_CODE_FIELDS[MediaMsgType.PICTURE]
    skipped = 0

    for element in elements:
        if not isinstance(element, dict):
            skipped += 1
            continue
        element_type = _resolve_element_type(element.get("type"))
        if element_type is RichTextElementType.TEXT:
            text = element.get("text")
            if isinstance(text, str):
                result.text_parts.append(text)
        elif element_type is RichTextElementType.PICTURE:
            code = first_non_empty_str(element, picture_fields)
            if code is None:
                skipped += 1
                continue
            result.image_codes.append(code)
        elif element_type is RichTextElementType.AT:
            user_id = element.get("userId")
            if isinstance(user_id, str):
                result.mentions.append(user_id)
        else:
            skipped += 1

    if skipped:
        logger.debug("dingtalk_rich_text_elements_skipped", extra={"skipped": skipped})
    return result
