"""Modelos canônicos do pipeline inbound de mídia.

Contratos trocados entre normalizers (api/), use cases (app/use_cases)
e o downloader (app/infra). Valores imutáveis, exceto InboundContext,
que é um dict plano construído uma vez por evento e nunca mutado após
a entrega à camada de reply/dispatch.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypedDict

from app.constants.dingtalk import ChatType, MediaMsgType


@dataclass(frozen=True, slots=True)
class ExtractedFileInfo:
    """Descritor de mídia única extraído da mensagem bruta.

    Invariante: download_code nunca é vazio. Extras não aplicáveis ao
    tipo ficam None (não recebem valor padrão).
    """

    download_code: str
    msg_type: MediaMsgType
    file_name: str | None = None
    file_size: int | None = None
    duration: int | float | None = None
    recognition: str | None = None


@dataclass(frozen=True, slots=True)
class RichTextParseResult:
    """Projeções independentes de uma mensagem richText.

    Cada lista preserva a ordem relativa dos elementos do mesmo tipo;
    a ordem entre tipos diferentes não é preservada.
    """

    text_parts: list[str] = field(default_factory=list)
    image_codes: list[str] = field(default_factory=list)
    mentions: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class DownloadedFile:
    """Mídia já gravada em disco local pelo downloader."""

    path: str
    content_type: str
    size: int
    file_name: str | None = None


@dataclass(frozen=True, slots=True)
class DingtalkMessageContext:
    """Envelope normalizado de uma mensagem DingTalk recebida."""

    conversation_id: str
    message_id: str
    sender_id: str
    chat_type: ChatType
    content: str
    content_type: str
    mentioned_bot: bool = False
    sender_nick: str | None = None
    robot_code: str | None = None


class InboundContext(TypedDict, total=False):
    """Contexto canônico entregue à camada de reply/dispatch.

    Os nomes das chaves são contrato estável: consumidores fazem match
    direto neles. MediaUrl/MediaUrls nunca são preenchidos; mídia é
    sempre referenciada por caminho local.
    """

    Body: str
    RawBody: str
    CommandBody: str
    From: str
    To: str
    SessionKey: str
    AccountId: str
    ChatType: str
    ConversationLabel: str
    SenderName: str
    SenderId: str
    Provider: str
    Surface: str
    MessageSid: str
    WasMentioned: bool
    OriginatingChannel: str
    OriginatingTo: str
    MediaPath: str
    MediaType: str
    MediaPaths: list[str]
    MediaTypes: list[str]
    FileName: str
    FileSize: int
    Transcript: str
