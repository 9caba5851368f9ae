"""Modelo pydantic do envelope bruto recebido via DingTalk Stream."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DingtalkAtUser(BaseModel):
    """Usuário mencionado (@) na mensagem."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    dingtalk_id: str | None = Field(None, alias="dingtalkId")
    staff_id: str | None = Field(None, alias="staffId")


class DingtalkTextBlock(BaseModel):
    """Bloco de texto de mensagens msgtype=text."""

    model_config = ConfigDict(extra="allow")

    content: str = ""


class DingtalkRawMessage(BaseModel):
    """Callback de mensagem do robô DingTalk.

    Campos extras são preservados; content é mantido como veio (dict ou
    string JSON) e decodificado depois pelos extractors.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    conversation_id: str = Field(..., alias="conversationId", min_length=1)
    sender_id: str = Field(..., alias="senderId", min_length=1)
    msgtype: str = Field(..., min_length=1)
    conversation_type: str = Field("1", alias="conversationType")
    sender_nick: str | None = Field(None, alias="senderNick")
    sender_staff_id: str | None = Field(None, alias="senderStaffId")
    msg_id: str | None = Field(None, alias="msgId")
    stream_message_id: str | None = Field(None, alias="streamMessageId")
    text: DingtalkTextBlock | None = None
    content: dict[str, Any] | str | None = None
    at_users: list[DingtalkAtUser] = Field(default_factory=list, alias="atUsers")
    is_in_at_list: bool | None = Field(None, alias="isInAtList")
    robot_code: str | None = Field(None, alias="robotCode")
