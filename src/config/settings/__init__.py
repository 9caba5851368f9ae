"""Agregador de settings do serviço de inbound DingTalk.

Re-exporta as settings de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.dingtalk import (
    DINGTALK_API_BASE_URL,
    DingtalkSettings,
    get_dingtalk_settings,
)

__all__ = [
    "DINGTALK_API_BASE_URL",
    "BaseSettings",
    "DingtalkSettings",
    "Environment",
    "get_base_settings",
    "get_dingtalk_settings",
]
