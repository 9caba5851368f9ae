"""Construção do contexto canônico inbound (InboundContext).

Funções puras: recebem envelopes/descritores já normalizados e devolvem
um novo dict. O contexto base nunca é mutado; o overlay de mídia é
sempre aplicado sobre uma cópia.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from api.normalizers.dingtalk.normalizer import join_text_parts
from app.constants.dingtalk import PROVIDER_NAME, ChatType, MediaMsgType

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.protocols.models import (
        DingtalkMessageContext,
        DownloadedFile,
        ExtractedFileInfo,
        InboundContext,
        RichTextParseResult,
    )

_MEDIA_PLACEHOLDERS: dict[MediaMsgType, str] = {
    MediaMsgType.PICTURE: "[image]",
    MediaMsgType.VIDEO: "[video]",
    MediaMsgType.AUDIO: "[voice message]",
    MediaMsgType.FILE: "[file]",
}


def build_inbound_context(
    message_context: DingtalkMessageContext,
    session_key: str,
    account_id: str,
) -> InboundContext:
    """Monta o contexto base a partir do envelope normalizado.

    Body, RawBody e CommandBody recebem o texto principal da mensagem.
    Nenhum campo de mídia é preenchido aqui.
    """
    is_group = message_context.chat_type == ChatType.GROUP
    sender_name = message_context.sender_nick or message_context.sender_id
    target = (
        f"chat:{message_context.conversation_id}"
        if is_group
        else f"user:{message_context.sender_id}"
    )
    body = message_context.content

    return {
        "Body": body,
        "RawBody": body,
        "CommandBody": body,
        "From": f"{PROVIDER_NAME}:{message_context.sender_id}",
        "To": target,
        "SessionKey": session_key,
        "AccountId": account_id,
        "ChatType": message_context.chat_type.value,
        "ConversationLabel": message_context.conversation_id if is_group else sender_name,
        "SenderName": sender_name,
        "SenderId": message_context.sender_id,
        "Provider": PROVIDER_NAME,
        "Surface": PROVIDER_NAME,
        "MessageSid": message_context.message_id,
        "WasMentioned": message_context.mentioned_bot,
        "OriginatingChannel": PROVIDER_NAME,
        "OriginatingTo": target,
    }


def assign_media_fields_to_context(
    base: InboundContext,
    downloaded_media: DownloadedFile | None,
    extracted_file_info: ExtractedFileInfo | None,
    downloaded_rich_text_images: Sequence[DownloadedFile] | None,
    media_body: str | None,
) -> InboundContext:
    """Aplica campos de mídia sobre uma cópia do contexto base.

    Regras (independentes entre si):
    - downloaded_media: MediaPath e MediaType
    - imagens de richText: MediaPaths e MediaTypes, na ordem recebida
    - media_body não vazio com algum ramo de mídia ativo: Body, RawBody e
      CommandBody sobrescritos juntos
    - extracted_file_info tipo file: FileName e FileSize, cada um se presente
    - extracted_file_info tipo audio com recognition: Transcript

    MediaUrl/MediaUrls nunca são preenchidos.

    Args:
        base: Contexto de build_inbound_context (não é alterado)
        downloaded_media: Mídia única já gravada em disco
        extracted_file_info: Descritor da mensagem de mídia única
        downloaded_rich_text_images: Imagens de richText em ordem de origem
        media_body: Texto que substitui o corpo quando há mídia

    Returns:
        Novo InboundContext.
    """
    ctx: InboundContext = {**base}
    images = list(downloaded_rich_text_images or ())
    media_attached = False

    if downloaded_media is not None:
        ctx["MediaPath"] = downloaded_media.path
        ctx["MediaType"] = downloaded_media.content_type
        media_attached = True

    if images:
        ctx["MediaPaths"] = [image.path for image in images]
        ctx["MediaTypes"] = [image.content_type for image in images]
        media_attached = True

    if media_attached and media_body:
        ctx["Body"] = media_body
        ctx["RawBody"] = media_body
        ctx["CommandBody"] = media_body

    if extracted_file_info is not None:
        if extracted_file_info.msg_type == MediaMsgType.FILE:
            if extracted_file_info.file_name:
                ctx["FileName"] = extracted_file_info.file_name
            if extracted_file_info.file_size is not None:
                ctx["FileSize"] = extracted_file_info.file_size
        elif extracted_file_info.msg_type == MediaMsgType.AUDIO and extracted_file_info.recognition:
            ctx["Transcript"] = extracted_file_info.recognition

    return ctx


def build_file_context_message(msg_type: MediaMsgType | str, file_name: str | None = None) -> str:
    """Texto placeholder usado como Body de mensagens de mídia única."""
    if msg_type == MediaMsgType.FILE and file_name:
        return f"[file: {file_name}]"
    try:
        return _MEDIA_PLACEHOLDERS[MediaMsgType(msg_type)]
    except ValueError:
        return "[media]"


def build_rich_text_body(parsed: RichTextParseResult, image_count: int) -> str:
    """Corpo de uma mensagem richText: textos seguidos do marcador de imagens."""
    text = join_text_parts(parsed.text_parts)
    if image_count <= 0:
        return text
    marker = "[image]" if image_count == 1 else f"[{image_count} images]"
    return f"{text}\n{marker}" if text else marker
