"""Access token da Open API DingTalk, com cache explícito.

O cache é um objeto injetável com relógio próprio: nada de estado global
de módulo. Entradas expiradas são removidas na leitura.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

from config.settings import get_dingtalk_settings
from utils.errors import MediaDownloadError

if TYPE_CHECKING:
    from collections.abc import Callable

    from config.settings import DingtalkSettings

logger = logging.getLogger(__name__)

ACCESS_TOKEN_PATH = "/v1.0/oauth2/accessToken"
DEFAULT_TOKEN_TTL_SECONDS = 7200


@dataclass(frozen=True, slots=True)
class CachedToken:
    """Token e instante de expiração (na escala do relógio do cache)."""

    token: str
    expires_at: float


class AccessTokenCache:
    """Cache de access tokens por chave (AppKey).

    Args:
        clock: Função de tempo monotônico em segundos. Injetável para testes.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, CachedToken] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        """Retorna token válido ou None; remove a entrada se expirada."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() >= entry.expires_at:
                del self._entries[key]
                logger.debug("dingtalk_access_token_expired", extra={"component": "token_cache"})
                return None
            return entry.token

    def put(self, key: str, token: str, ttl_seconds: float) -> None:
        """Armazena token válido por ttl_seconds a partir de agora."""
        with self._lock:
            self._entries[key] = CachedToken(token=token, expires_at=self._clock() + ttl_seconds)

    def invalidate(self, key: str) -> bool:
        """Remove a entrada da chave; True se existia."""
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        """Remove todas as entradas."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def _default_client_factory() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=10.0)


class DingtalkAccessTokenProvider:
    """Obtém e cacheia o access token do aplicativo DingTalk."""

    def __init__(
        self,
        settings: DingtalkSettings | None = None,
        cache: AccessTokenCache | None = None,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ) -> None:
        self._settings = settings if settings is not None else get_dingtalk_settings()
        self._cache = cache if cache is not None else AccessTokenCache()
        self._client_factory = client_factory or _default_client_factory
        self._lock = asyncio.Lock()

    @property
    def cache(self) -> AccessTokenCache:
        return self._cache

    async def get_token(self) -> str:
        """Retorna token do cache ou solicita um novo.

        Raises:
            MediaDownloadError: Credenciais ausentes, erro HTTP ou token vazio.
        """
        key = self._settings.client_id
        cached = self._cache.get(key)
        if cached:
            return cached

        async with self._lock:
            cached = self._cache.get(key)
            if cached:
                return cached
            token, expires_in = await self._request_token()
            ttl = max(expires_in - self._settings.token_refresh_margin_seconds, 0)
            self._cache.put(key, token, ttl)
            logger.info("dingtalk_access_token_refreshed", extra={"ttl_seconds": ttl})
            return token

    def invalidate(self) -> None:
        """Descarta o token atual (ex: após resposta 401)."""
        self._cache.invalidate(self._settings.client_id)

    async def _request_token(self) -> tuple[str, int]:
        if not self._settings.client_id or not self._settings.client_secret:
            raise MediaDownloadError("DingTalk client_id/client_secret not configured")

        url = f"{self._settings.api_base_url}{ACCESS_TOKEN_PATH}"
        payload = {
            "appKey": self._settings.client_id,
            "appSecret": self._settings.client_secret,
        }
        try:
            async with self._client_factory() as client:
                response = await client.post(url, json=payload)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as exc:
            logger.warning(
                "dingtalk_access_token_request_failed",
                extra={"error_type": type(exc).__name__},
            )
            raise MediaDownloadError("DingTalk access token request failed") from exc
        except ValueError as exc:
            raise MediaDownloadError("DingTalk access token response is not valid JSON") from exc

        token = data.get("accessToken") if isinstance(data, dict) else None
        if not isinstance(token, str) or not token:
            raise MediaDownloadError("DingTalk returned empty access token")

        expires_in = data.get("expireIn", DEFAULT_TOKEN_TTL_SECONDS)
        if not isinstance(expires_in, int) or expires_in <= 0:
            expires_in = DEFAULT_TOKEN_TTL_SECONDS
        return token, expires_in
