"""Owned bearer credential for the catalog API (client-credentials flow)."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

import requests
from spotipy.cache_handler import MemoryCacheHandler
from spotipy.oauth2 import SpotifyClientCredentials, SpotifyOauthError

from moodwave.errors import UpstreamFailure

logger = logging.getLogger(__name__)

# Client-credentials tokens are issued for an hour
DEFAULT_TOKEN_LIFETIME_SECONDS = 3600


class CatalogCredentials:
    """Lazily fetched, expiry-checked catalog token.

    Also satisfies spotipy's auth-manager protocol (``get_access_token``) so
    the same instance is handed to ``spotipy.Spotify`` and to anything else
    that needs a bearer token.
    """

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        *,
        expiry_margin: int = 60,
        request_timeout: Optional[float] = None,
        manager=None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._client_id = client_id
        self._client_secret = client_secret
        self._expiry_margin = max(0, int(expiry_margin))
        self._request_timeout = request_timeout
        self._manager = manager
        self._clock = clock
        self._lock = threading.RLock()
        self._token: Optional[str] = None
        self._expires_at = 0.0

    @property
    def is_configured(self) -> bool:
        return self._manager is not None or bool(self._client_id and self._client_secret)

    @property
    def expires_at(self) -> float:
        return self._expires_at

    def _resolve_manager(self):
        if self._manager is not None:
            return self._manager
        if not self.is_configured:
            raise UpstreamFailure("Catalog client id and secret are not configured.")
        self._manager = SpotifyClientCredentials(
            client_id=self._client_id,
            client_secret=self._client_secret,
            cache_handler=MemoryCacheHandler(),
            requests_timeout=self._request_timeout,
        )
        return self._manager

    def _is_fresh(self) -> bool:
        return bool(self._token) and self._clock() < self._expires_at - self._expiry_margin

    def _fetch(self) -> str:
        manager = self._resolve_manager()
        try:
            token = manager.get_access_token(as_dict=False, check_cache=False)
        except (SpotifyOauthError, requests.RequestException) as exc:
            logger.error("Error getting catalog access token: %s", exc)
            raise UpstreamFailure("Failed to obtain catalog access token.") from exc
        if not token:
            raise UpstreamFailure("Catalog returned an empty access token.")

        cached = None
        cache_handler = getattr(manager, "cache_handler", None)
        if cache_handler is not None:
            cached = cache_handler.get_cached_token()
        expires_at = (cached or {}).get("expires_at")
        self._expires_at = float(expires_at) if expires_at else self._clock() + DEFAULT_TOKEN_LIFETIME_SECONDS
        self._token = token
        logger.info("Catalog access token obtained.")
        return token

    def get(self) -> str:
        with self._lock:
            if self._is_fresh():
                return self._token  # type: ignore[return-value]
            return self._fetch()

    def force_refresh(self) -> str:
        with self._lock:
            logger.debug("Forcing catalog token refresh.")
            return self._fetch()

    def get_access_token(self, as_dict: bool = False, check_cache: bool = True) -> str:
        if not check_cache:
            return self.force_refresh()
        return self.get()


__all__ = ["CatalogCredentials", "DEFAULT_TOKEN_LIFETIME_SECONDS"]
