"""Bootstrap da aplicação: inicialização e wiring.

Composition root: configura logging, valida settings e conecta o
downloader concreto ao use case de inbound.

Uso:
    from app.bootstrap import initialize_app, get_inbound_media_processor

    initialize_app()
    processor = get_inbound_media_processor()
    ctx = await processor.handle(raw, session_key, account_id)
"""

from __future__ import annotations

import logging
from functools import lru_cache

from app.infra.dingtalk import AccessTokenCache, DingtalkAccessTokenProvider, DingtalkMediaDownloader
from app.observability import get_correlation_id
from app.use_cases.dingtalk import InboundMediaProcessor
from config.logging import configure_logging
from config.settings import get_base_settings, get_dingtalk_settings

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa logging estruturado e valida settings.

    Deve ser chamada uma vez no início do serviço.
    """
    base = get_base_settings()
    configure_logging(
        level=base.log_level,
        service_name=base.service_name,
        correlation_id_getter=get_correlation_id,
    )
    validate_runtime_settings()


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` apenas registra o alerta.
    """
    base = get_base_settings()
    errors: list[str] = [f"base: {error}" for error in base.validate()]
    errors.extend(f"dingtalk: {error}" for error in get_dingtalk_settings().validate())

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if base.strict_validation:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {base.environment}:\n{details}")


@lru_cache(maxsize=1)
def get_access_token_provider() -> DingtalkAccessTokenProvider:
    """Provider de access token (singleton, cache compartilhado)."""
    return DingtalkAccessTokenProvider(get_dingtalk_settings(), AccessTokenCache())


@lru_cache(maxsize=1)
def get_inbound_media_processor() -> InboundMediaProcessor:
    """Use case de inbound com o downloader DingTalk (singleton)."""
    settings = get_dingtalk_settings()
    downloader = DingtalkMediaDownloader(settings, get_access_token_provider())
    return InboundMediaProcessor(downloader)
