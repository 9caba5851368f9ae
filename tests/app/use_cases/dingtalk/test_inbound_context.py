"""Testes para a construção do InboundContext."""

from __future__ import annotations

import copy

import pytest

from app.constants.dingtalk import ChatType, MediaMsgType
from app.protocols.models import (
    DingtalkMessageContext,
    DownloadedFile,
    ExtractedFileInfo,
    RichTextParseResult,
)
from app.use_cases.dingtalk import (
    assign_media_fields_to_context,
    build_file_context_message,
    build_inbound_context,
    build_rich_text_body,
)

MEDIA_KEYS = ("MediaPath", "MediaType", "MediaPaths", "MediaTypes", "FileName", "FileSize", "Transcript")


def _message_context(**overrides: object) -> DingtalkMessageContext:
    values: dict[str, object] = {
        "conversation_id": "cid-1",
        "message_id": "msg-1",
        "sender_id": "user-1",
        "chat_type": ChatType.DIRECT,
        "content": "hello",
        "content_type": "text",
        "sender_nick": "Alice",
    }
    values.update(overrides)
    return DingtalkMessageContext(**values)  # type: ignore[arg-type]


def _base() -> dict:
    return build_inbound_context(_message_context(), "session-1", "account-1")


def _file(path: str = "/tmp/a.jpg", content_type: str = "image/jpeg") -> DownloadedFile:
    return DownloadedFile(path=path, content_type=content_type, size=10)


class TestBuildInboundContext:
    """Testes de build_inbound_context."""

    def test_direct_message(self) -> None:
        """Conversa direta endereça o usuário."""
        ctx = _base()
        assert ctx["Body"] == "hello"
        assert ctx["RawBody"] == "hello"
        assert ctx["CommandBody"] == "hello"
        assert ctx["From"] == "dingtalk:user-1"
        assert ctx["To"] == "user:user-1"
        assert ctx["OriginatingTo"] == "user:user-1"
        assert ctx["ChatType"] == "direct"
        assert ctx["ConversationLabel"] == "Alice"
        assert ctx["SenderName"] == "Alice"
        assert ctx["SenderId"] == "user-1"
        assert ctx["SessionKey"] == "session-1"
        assert ctx["AccountId"] == "account-1"
        assert ctx["Provider"] == "dingtalk"
        assert ctx["Surface"] == "dingtalk"
        assert ctx["OriginatingChannel"] == "dingtalk"
        assert ctx["MessageSid"] == "msg-1"
        assert ctx["WasMentioned"] is False

    def test_group_message(self) -> None:
        """Grupo endereça a conversa."""
        ctx = build_inbound_context(
            _message_context(chat_type=ChatType.GROUP, mentioned_bot=True), "s", "a"
        )
        assert ctx["To"] == "chat:cid-1"
        assert ctx["ConversationLabel"] == "cid-1"
        assert ctx["ChatType"] == "group"
        assert ctx["WasMentioned"] is True

    def test_sender_name_falls_back_to_id(self) -> None:
        """Sem nick, usa o id do remetente."""
        ctx = build_inbound_context(_message_context(sender_nick=None), "s", "a")
        assert ctx["SenderName"] == "user-1"

    def test_no_media_fields(self) -> None:
        """Contexto base nunca tem campos de mídia."""
        ctx = _base()
        for key in (*MEDIA_KEYS, "MediaUrl", "MediaUrls"):
            assert key not in ctx


class TestAssignMediaFieldsToContext:
    """Testes de assign_media_fields_to_context."""

    def test_no_media_returns_equal_copy(self) -> None:
        """Sem mídia, resultado igual ao base e sem MediaUrl."""
        base = _base()
        result = assign_media_fields_to_context(base, None, None, [], None)
        assert result == base
        assert result is not base
        assert "MediaUrl" not in result
        assert "MediaUrls" not in result

    def test_base_is_never_mutated(self) -> None:
        """O base permanece idêntico após o overlay completo."""
        base = _base()
        snapshot = copy.deepcopy(base)
        result = assign_media_fields_to_context(
            base,
            _file(),
            ExtractedFileInfo(download_code="f", msg_type=MediaMsgType.FILE, file_name="a.pdf", file_size=3),
            [_file("/tmp/1.png", "image/png")],
            "[file: a.pdf]",
        )
        assert base == snapshot
        assert result["Body"] == "[file: a.pdf]"
        assert "MediaPath" not in base

    def test_single_media_sets_path_type_and_body(self) -> None:
        """Mídia única define MediaPath/MediaType e os três corpos juntos."""
        result = assign_media_fields_to_context(
            _base(),
            _file(),
            ExtractedFileInfo(download_code="p", msg_type=MediaMsgType.PICTURE),
            None,
            "[image]",
        )
        assert result["MediaPath"] == "/tmp/a.jpg"
        assert result["MediaType"] == "image/jpeg"
        assert result["Body"] == result["RawBody"] == result["CommandBody"] == "[image]"
        assert "MediaUrl" not in result

    def test_media_body_ignored_without_media(self) -> None:
        """media_body sem mídia anexada não altera os corpos."""
        result = assign_media_fields_to_context(_base(), None, None, [], "[image]")
        assert result["Body"] == "hello"
        assert result["RawBody"] == "hello"
        assert result["CommandBody"] == "hello"

    def test_empty_media_body_keeps_body(self) -> None:
        """media_body vazio não sobrescreve."""
        result = assign_media_fields_to_context(_base(), _file(), None, None, "")
        assert result["Body"] == "hello"
        assert result["MediaPath"] == "/tmp/a.jpg"

    def test_file_name_and_size_independent(self) -> None:
        """FileName e FileSize são opcionais de forma independente."""
        info = ExtractedFileInfo(download_code="f", msg_type=MediaMsgType.FILE, file_name="a.pdf")
        result = assign_media_fields_to_context(_base(), _file(), info, None, None)
        assert result["FileName"] == "a.pdf"
        assert "FileSize" not in result

        sized = ExtractedFileInfo(download_code="f", msg_type=MediaMsgType.FILE, file_size=0)
        result = assign_media_fields_to_context(_base(), _file(), sized, None, None)
        assert result["FileSize"] == 0
        assert "FileName" not in result

    def test_file_fields_do_not_depend_on_download(self) -> None:
        """Metadados do arquivo entram mesmo sem o download."""
        info = ExtractedFileInfo(download_code="f", msg_type=MediaMsgType.FILE, file_name="a.pdf", file_size=10)
        result = assign_media_fields_to_context(_base(), None, info, None, "[file: a.pdf]")
        assert result["FileName"] == "a.pdf"
        assert result["FileSize"] == 10
        assert "MediaPath" not in result
        assert result["Body"] == "hello"

    def test_audio_with_recognition_sets_transcript(self) -> None:
        """Áudio com recognition define Transcript."""
        info = ExtractedFileInfo(download_code="a", msg_type=MediaMsgType.AUDIO, recognition="hello")
        result = assign_media_fields_to_context(_base(), _file(content_type="audio/amr"), info, None, None)
        assert result["Transcript"] == "hello"

    @pytest.mark.parametrize("recognition", [None, ""])
    def test_audio_without_recognition_has_no_transcript(self, recognition: str | None) -> None:
        """Áudio sem recognition não recebe placeholder."""
        info = ExtractedFileInfo(download_code="a", msg_type=MediaMsgType.AUDIO, recognition=recognition)
        result = assign_media_fields_to_context(_base(), _file(content_type="audio/amr"), info, None, None)
        assert "Transcript" not in result

    def test_transcript_only_for_audio(self) -> None:
        """recognition em outro tipo é ignorado."""
        info = ExtractedFileInfo(download_code="v", msg_type=MediaMsgType.VIDEO, recognition="x")
        result = assign_media_fields_to_context(_base(), _file(), info, None, None)
        assert "Transcript" not in result
        assert "FileName" not in result

    def test_rich_text_images_in_order(self) -> None:
        """MediaPaths/MediaTypes seguem a ordem das imagens recebidas."""
        images = [
            _file("/tmp/1.png", "image/png"),
            _file("/tmp/2.jpg", "image/jpeg"),
            _file("/tmp/3.gif", "image/gif"),
        ]
        result = assign_media_fields_to_context(_base(), None, None, images, "hi\n[3 images]")
        assert result["MediaPaths"] == ["/tmp/1.png", "/tmp/2.jpg", "/tmp/3.gif"]
        assert result["MediaTypes"] == ["image/png", "image/jpeg", "image/gif"]
        assert result["Body"] == "hi\n[3 images]"
        assert "MediaPath" not in result
        assert "MediaUrls" not in result

    def test_single_and_multi_branches_both_fire(self) -> None:
        """Os dois ramos de mídia são independentes."""
        result = assign_media_fields_to_context(
            _base(), _file(), None, [_file("/tmp/2.png", "image/png")], "body"
        )
        assert result["MediaPath"] == "/tmp/a.jpg"
        assert result["MediaPaths"] == ["/tmp/2.png"]


class TestBuildFileContextMessage:
    """Testes de build_file_context_message."""

    @pytest.mark.parametrize(
        ("msg_type", "expected"),
        [
            (MediaMsgType.PICTURE, "[image]"),
            (MediaMsgType.VIDEO, "[video]"),
            (MediaMsgType.AUDIO, "[voice message]"),
            (MediaMsgType.FILE, "[file]"),
            ("sticker", "[media]"),
        ],
    )
    def test_placeholders(self, msg_type: str, expected: str) -> None:
        """Placeholder por tipo de mensagem."""
        assert build_file_context_message(msg_type) == expected

    def test_file_with_name(self) -> None:
        """Arquivo com nome inclui o nome."""
        assert build_file_context_message(MediaMsgType.FILE, "a.pdf") == "[file: a.pdf]"


class TestBuildRichTextBody:
    """Testes de build_rich_text_body."""

    def test_text_only(self) -> None:
        """Sem imagens baixadas, apenas o texto."""
        parsed = RichTextParseResult(text_parts=["Hi ", "there"])
        assert build_rich_text_body(parsed, 0) == "Hi there"

    def test_single_image(self) -> None:
        """Uma imagem usa o marcador singular."""
        parsed = RichTextParseResult(text_parts=["Look"], image_codes=["c"])
        assert build_rich_text_body(parsed, 1) == "Look\n[image]"

    def test_images_without_text(self) -> None:
        """Sem texto, apenas o marcador."""
        parsed = RichTextParseResult(image_codes=["a", "b"])
        assert build_rich_text_body(parsed, 2) == "[2 images]"
