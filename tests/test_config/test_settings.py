"""Testes para config.settings (base e DingTalk)."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from app.constants.dingtalk import MediaMsgType
from config.settings import (
    DINGTALK_API_BASE_URL,
    BaseSettings,
    DingtalkSettings,
    get_base_settings,
    get_dingtalk_settings,
)


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    get_base_settings.cache_clear()
    get_dingtalk_settings.cache_clear()
    yield
    get_base_settings.cache_clear()
    get_dingtalk_settings.cache_clear()


class TestBaseSettings:
    """Testes de BaseSettings."""

    def test_defaults(self) -> None:
        """Padrões de desenvolvimento."""
        settings = BaseSettings()
        assert settings.is_development
        assert not settings.is_production
        assert settings.service_name == "dingtalk-inbound"
        assert settings.validate() == []

    def test_empty_service_name_invalid(self) -> None:
        """Nome de serviço vazio é erro."""
        assert BaseSettings(service_name="").validate() == ["SERVICE_NAME não pode ser vazio"]

    def test_invalid_log_level(self) -> None:
        """LOG_LEVEL fora dos níveis válidos é erro."""
        assert BaseSettings(log_level="VERBOSE").validate() == ["LOG_LEVEL inválido: VERBOSE"]

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("prod", "production"), ("Stage", "staging"), ("local", "development"), ("qa", "development")],
    )
    def test_environment_aliases(
        self, monkeypatch: pytest.MonkeyPatch, raw: str, expected: str
    ) -> None:
        """Aliases de ENVIRONMENT; valor desconhecido vira development."""
        monkeypatch.setenv("ENVIRONMENT", raw)
        settings = get_base_settings()
        assert settings.environment == expected
        assert settings.strict_validation is (expected != "development")

    def test_loads_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Ambiente e log level vêm das variáveis de ambiente."""
        monkeypatch.setenv("ENVIRONMENT", "prod")
        monkeypatch.setenv("LOG_LEVEL", "warning")
        settings = get_base_settings()
        assert settings.is_production
        assert settings.log_level == "WARNING"

    def test_debug_defaults_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """DEBUG=true sem LOG_LEVEL usa DEBUG."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.setenv("DEBUG", "1")
        assert get_base_settings().log_level == "DEBUG"


class TestDingtalkSettings:
    """Testes de DingtalkSettings."""

    def test_defaults(self) -> None:
        """Padrões de endpoint, timeout e limites."""
        settings = DingtalkSettings()
        assert settings.api_base_url == DINGTALK_API_BASE_URL
        assert settings.download_timeout_ms == 120_000
        assert settings.max_size_for(MediaMsgType.PICTURE) == 20 * 1024 * 1024
        assert settings.max_size_for(MediaMsgType.VIDEO) == 100 * 1024 * 1024
        assert settings.media_dir.endswith("dingtalk-media")

    def test_robot_code_falls_back_to_client_id(self) -> None:
        """robotCode padrão é o client_id."""
        assert DingtalkSettings(client_id="key").effective_robot_code == "key"
        assert DingtalkSettings(client_id="key", robot_code="bot").effective_robot_code == "bot"

    def test_max_size_uses_default_for_missing_type(self) -> None:
        """Tipo ausente do dict usa o limite padrão."""
        settings = DingtalkSettings(max_size_bytes={MediaMsgType.FILE: 5})
        assert settings.max_size_for(MediaMsgType.FILE) == 5
        assert settings.max_size_for(MediaMsgType.AUDIO) == 20 * 1024 * 1024

    def test_validate_reports_missing_credentials(self) -> None:
        """Credenciais ausentes são erros."""
        errors = DingtalkSettings().validate()
        assert "DINGTALK_CLIENT_ID não configurado" in errors
        assert "DINGTALK_CLIENT_SECRET não configurado" in errors

    def test_validate_rejects_invalid_limits(self) -> None:
        """Timeout e limites devem ser positivos."""
        errors = DingtalkSettings(
            client_id="k",
            client_secret="s",
            download_timeout_ms=0,
            max_size_bytes={MediaMsgType.VIDEO: 0},
        ).validate()
        assert errors == [
            "DINGTALK_DOWNLOAD_TIMEOUT_MS deve ser > 0",
            "DINGTALK_MAX_VIDEO_BYTES deve ser > 0",
        ]

    def test_loads_from_env(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        """Variáveis de ambiente DINGTALK_*."""
        monkeypatch.setenv("DINGTALK_CLIENT_ID", "app-key")
        monkeypatch.setenv("DINGTALK_CLIENT_SECRET", "secret")
        monkeypatch.setenv("DINGTALK_MEDIA_DIR", str(tmp_path))
        monkeypatch.setenv("DINGTALK_DOWNLOAD_TIMEOUT_MS", "5000")
        monkeypatch.setenv("DINGTALK_MAX_PICTURE_BYTES", "1024")

        settings = get_dingtalk_settings()

        assert settings.client_id == "app-key"
        assert settings.media_dir == str(tmp_path)
        assert settings.download_timeout_ms == 5000
        assert settings.max_size_for(MediaMsgType.PICTURE) == 1024
        assert settings.validate() == []
        assert get_dingtalk_settings() is settings
