"""Settings gerais do processo (ambiente, nome do serviço, nível de log)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

Environment = Literal["development", "staging", "production"]

DEFAULT_SERVICE_NAME = "dingtalk-inbound"

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

# Aliases aceitos em ENVIRONMENT; qualquer outro valor vira development
_ENVIRONMENT_ALIASES: dict[str, Environment] = {
    "production": "production",
    "prod": "production",
    "staging": "staging",
    "stage": "staging",
    "development": "development",
    "dev": "development",
    "local": "development",
}

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class BaseSettings:
    """Settings compartilhadas por todos os componentes.

    Attributes:
        environment: development, staging ou production
        service_name: Campo "service" dos logs
        debug: Ativa log em DEBUG quando LOG_LEVEL não é informado
        log_level: Nível do root logger
    """

    environment: Environment = "development"
    service_name: str = DEFAULT_SERVICE_NAME
    debug: bool = False
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def strict_validation(self) -> bool:
        """Settings inválidas impedem o boot fora de development."""
        return self.environment != "development"

    def validate(self) -> list[str]:
        """Retorna a lista de problemas encontrados (vazia = OK)."""
        errors: list[str] = []

        if self.environment not in set(_ENVIRONMENT_ALIASES.values()):
            errors.append(f"ENVIRONMENT inválido: {self.environment}")

        if not self.service_name:
            errors.append("SERVICE_NAME não pode ser vazio")

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(f"LOG_LEVEL inválido: {self.log_level}")

        return errors


def _load_base_from_env() -> BaseSettings:
    raw_env = os.getenv("ENVIRONMENT", "development").strip().lower()
    debug = os.getenv("DEBUG", "").strip().lower() in _TRUTHY
    return BaseSettings(
        environment=_ENVIRONMENT_ALIASES.get(raw_env, "development"),
        service_name=os.getenv("SERVICE_NAME", DEFAULT_SERVICE_NAME),
        debug=debug,
        log_level=os.getenv("LOG_LEVEL", "DEBUG" if debug else "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """BaseSettings carregadas do ambiente (cacheadas)."""
    return _load_base_from_env()
