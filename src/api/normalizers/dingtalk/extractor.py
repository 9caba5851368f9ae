"""Extrator de mídia única DingTalk (picture, video, audio, file).

Não faz download nem validação de negócio - apenas extração estrutural
do download code e dos metadados específicos de cada tipo.
"""

from __future__ import annotations

import logging
from typing import Any

from app.constants.dingtalk import MediaMsgType
from app.protocols.models import ExtractedFileInfo

from ._payload import decode_content, first_non_empty_str, read_msg_type

logger = logging.getLogger(__name__)

# Cadeia de fallback do download code por tipo (primeiro match vence)
DOWNLOAD_CODE_FIELDS: dict[MediaMsgType, tuple[str, ...]] = {
    MediaMsgType.PICTURE: ("downloadCode", "pictureDownloadCode"),
    MediaMsgType.VIDEO: ("downloadCode", "videoDownloadCode"),
    MediaMsgType.AUDIO: ("downloadCode",),
    MediaMsgType.FILE: ("downloadCode",),
}

# Extras copiados sem transformação: campo do payload -> atributo
_EXTRA_FIELDS: dict[MediaMsgType, tuple[tuple[str, str], ...]] = {
    MediaMsgType.PICTURE: (),
    MediaMsgType.VIDEO: (("duration", "duration"),),
    MediaMsgType.AUDIO: (("duration", "duration"), ("recognition", "recognition")),
    MediaMsgType.FILE: (("fileName", "file_name"), ("fileSize", "file_size")),
}

_MEDIA_MSG_TYPES = frozenset(item.value for item in MediaMsgType)


def resolve_media_msg_type(raw: Any) -> MediaMsgType | None:
    """Retorna o MediaMsgType da mensagem, ou None se não for mídia única."""
    msg_type = read_msg_type(raw)
    if msg_type not in _MEDIA_MSG_TYPES:
        return None
    return MediaMsgType(msg_type)


def extract_file_from_message(raw: Any) -> ExtractedFileInfo | None:
    """Extrai descritor de mídia de uma mensagem bruta.

    Args:
        raw: Mensagem do callback Stream ({"msgtype": ..., "content": ...});
            content pode ser dict ou string JSON.

    Returns:
        ExtractedFileInfo com download_code resolvido, ou None quando o tipo
        não é suportado, o payload é inválido ou não há download code.
    """
    msg_type = resolve_media_msg_type(raw)
    if msg_type is None:
        return None

    content = decode_content(raw)
    if content is None:
        logger.info("dingtalk_media_content_invalid", extra={"msg_type": msg_type.value})
        return None

    download_code = first_non_empty_str(content, DOWNLOAD_CODE_FIELDS[msg_type])
    if download_code is None:
        logger.info("dingtalk_media_download_code_missing", extra={"msg_type": msg_type.value})
        return None

    extras = {
        attr: content[key]
        for key, attr in _EXTRA_FIELDS[msg_type]
        if content.get(key) is not None
    }
    return ExtractedFileInfo(download_code=download_code, msg_type=msg_type, **extras)
