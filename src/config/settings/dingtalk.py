"""Settings específicas do canal DingTalk.

Credenciais do robô, endpoint da Open API e limites de download de mídia.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from app.constants.dingtalk import MediaMsgType

DINGTALK_API_BASE_URL: str = "https://api.dingtalk.com"

_MB = 1024 * 1024

DEFAULT_MAX_SIZE_BYTES: dict[MediaMsgType, int] = {
    MediaMsgType.PICTURE: 20 * _MB,
    MediaMsgType.VIDEO: 100 * _MB,
    MediaMsgType.AUDIO: 20 * _MB,
    MediaMsgType.FILE: 100 * _MB,
}


def _default_media_dir() -> str:
    return str(Path(tempfile.gettempdir()) / "dingtalk-media")


@dataclass(frozen=True)
class DingtalkSettings:
    """Configurações do canal DingTalk.

    Attributes:
        client_id: AppKey do aplicativo (também usado como robotCode padrão)
        client_secret: AppSecret do aplicativo
        robot_code: Código do robô; usa client_id se vazio
        api_base_url: URL base da Open API
        media_dir: Diretório local onde a mídia baixada é gravada
        download_timeout_ms: Tempo máximo de um download, em ms
        max_size_bytes: Limite de tamanho por tipo de mensagem
        token_refresh_margin_seconds: Antecedência para renovar o access token
    """

    client_id: str = ""
    client_secret: str = ""
    robot_code: str = ""
    api_base_url: str = DINGTALK_API_BASE_URL

    media_dir: str = field(default_factory=_default_media_dir)
    download_timeout_ms: int = 120_000
    max_size_bytes: dict[MediaMsgType, int] = field(
        default_factory=lambda: dict(DEFAULT_MAX_SIZE_BYTES)
    )

    token_refresh_margin_seconds: int = 300

    @property
    def effective_robot_code(self) -> str:
        """robotCode enviado nas chamadas de download."""
        return self.robot_code or self.client_id

    def max_size_for(self, msg_type: MediaMsgType) -> int:
        """Limite de tamanho em bytes para o tipo de mensagem."""
        return self.max_size_bytes.get(msg_type, DEFAULT_MAX_SIZE_BYTES[msg_type])

    def validate(self) -> list[str]:
        """Valida configurações mínimas do DingTalk.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.client_id:
            errors.append("DINGTALK_CLIENT_ID não configurado")

        if not self.client_secret:
            errors.append("DINGTALK_CLIENT_SECRET não configurado")

        if self.download_timeout_ms <= 0:
            errors.append("DINGTALK_DOWNLOAD_TIMEOUT_MS deve ser > 0")

        for msg_type, limit in self.max_size_bytes.items():
            if limit <= 0:
                errors.append(f"DINGTALK_MAX_{msg_type.value.upper()}_BYTES deve ser > 0")

        if self.token_refresh_margin_seconds < 0:
            errors.append("DINGTALK_TOKEN_REFRESH_MARGIN_SECONDS deve ser >= 0")

        return errors


def _load_max_sizes_from_env() -> dict[MediaMsgType, int]:
    return {
        msg_type: int(
            os.getenv(f"DINGTALK_MAX_{msg_type.value.upper()}_BYTES", str(default))
        )
        for msg_type, default in DEFAULT_MAX_SIZE_BYTES.items()
    }


def _load_from_env() -> DingtalkSettings:
    """Carrega DingtalkSettings a partir de variáveis de ambiente."""
    return DingtalkSettings(
        client_id=os.getenv("DINGTALK_CLIENT_ID", ""),
        client_secret=os.getenv("DINGTALK_CLIENT_SECRET", ""),
        robot_code=os.getenv("DINGTALK_ROBOT_CODE", ""),
        api_base_url=os.getenv("DINGTALK_API_BASE_URL", DINGTALK_API_BASE_URL),
        media_dir=os.getenv("DINGTALK_MEDIA_DIR", "") or _default_media_dir(),
        download_timeout_ms=int(os.getenv("DINGTALK_DOWNLOAD_TIMEOUT_MS", "120000")),
        max_size_bytes=_load_max_sizes_from_env(),
        token_refresh_margin_seconds=int(
            os.getenv("DINGTALK_TOKEN_REFRESH_MARGIN_SECONDS", "300")
        ),
    )


@lru_cache(maxsize=1)
def get_dingtalk_settings() -> DingtalkSettings:
    """Retorna instância cacheada de DingtalkSettings."""
    return _load_from_env()
