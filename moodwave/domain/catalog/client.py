# moodwave/domain/catalog/client.py
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

import requests
import spotipy
from spotipy.exceptions import SpotifyException

from config import Config
from moodwave.errors import NotFound, UpstreamFailure
from moodwave.observability.metrics import record_catalog_call
from moodwave.observability.tracing import catalog_span
from moodwave.settings import CatalogSettings, load_catalog_settings

from .credentials import CatalogCredentials

logger = logging.getLogger(__name__)

# The audio-features endpoint accepts at most 100 ids per request
AUDIO_FEATURES_BATCH_SIZE = 100


class CatalogClient:
    def __init__(self, credentials: Optional[CatalogCredentials] = None,
                 market: Optional[str] = None,
                 request_timeout: Optional[float] = None,
                 spotify_client=None):
        """Wraps the catalog API; single attempt per call, no transport retries."""
        self.credentials = credentials or CatalogCredentials(
            client_id=Config.SPOTIPY_CLIENT_ID,
            client_secret=Config.SPOTIPY_CLIENT_SECRET,
            expiry_margin=Config.CATALOG_TOKEN_EXPIRY_MARGIN_SECONDS,
            request_timeout=request_timeout,
        )
        self.market = market or Config.CATALOG_MARKET

        self.sp = spotify_client
        if self.sp is None:
            self.sp = spotipy.Spotify(
                auth_manager=self.credentials,
                requests_timeout=request_timeout or Config.CATALOG_REQUEST_TIMEOUT,
                retries=0,
                status_retries=0,
            )
        else:
            logger.info("Spotipy client injected into CatalogClient.")

        if not self.credentials.is_configured:
            logger.warning("Catalog client ID and secret not provided. Catalog endpoints will fail until configured.")

    @classmethod
    def from_settings(cls, settings: Optional[CatalogSettings] = None) -> "CatalogClient":
        settings = settings or load_catalog_settings()
        credentials = CatalogCredentials(
            client_id=settings.client_id,
            client_secret=settings.client_secret,
            expiry_margin=settings.token_expiry_margin,
            request_timeout=settings.request_timeout,
        )
        return cls(credentials=credentials, market=settings.market, request_timeout=settings.request_timeout)

    @property
    def is_configured(self) -> bool:
        return self.credentials.is_configured

    def _translate(self, operation: str, exc: SpotifyException) -> Exception:
        if exc.http_status in (400, 404):
            logger.warning("Catalog resource not found during %s: %s", operation, exc.msg)
            return NotFound(f"Catalog resource not found during {operation}.")
        logger.error("Catalog API call failed during %s: %s", operation, exc)
        return UpstreamFailure(f"Catalog request failed during {operation}.")

    def _call(self, operation: str, call: Callable[[], Any], resource_id: Optional[str] = None) -> Any:
        """Run one catalog call; ``operation`` doubles as the metrics label."""
        label = f"{operation} {resource_id}" if resource_id else operation
        try:
            with catalog_span(operation, resource_id):
                try:
                    result = call()
                except SpotifyException as exc:
                    if exc.http_status != 401:
                        raise
                    logger.warning("Catalog token rejected during %s. Refreshing credentials.", label)
                    self.credentials.force_refresh()
                    result = call()
        except SpotifyException as exc:
            record_catalog_call(operation, "error")
            raise self._translate(label, exc) from exc
        except requests.RequestException as exc:
            record_catalog_call(operation, "error")
            logger.error("Catalog transport error during %s: %s", label, exc)
            raise UpstreamFailure(f"Catalog request failed during {label}.") from exc
        except UpstreamFailure:
            record_catalog_call(operation, "error")
            raise
        record_catalog_call(operation, "ok")
        return result

    def new_releases(self, limit: int = 50) -> List[Dict[str, Any]]:
        response = self._call("new_releases", lambda: self.sp.new_releases(limit=limit)) or {}
        return list((response.get("albums") or {}).get("items") or [])

    def playlist(self, playlist_id: str) -> Dict[str, Any]:
        return self._call("playlist", lambda: self.sp.playlist(playlist_id), playlist_id) or {}

    def playlist_tracks(self, playlist_id: str, limit: int = 100) -> List[Dict[str, Any]]:
        """Tracks of a catalog playlist; episodes and removed tracks are skipped."""
        response = self._call(
            "playlist_tracks",
            lambda: self.sp.playlist_items(playlist_id, limit=limit, market=self.market, additional_types=("track",)),
            playlist_id,
        ) or {}
        return [item["track"] for item in response.get("items") or [] if item and item.get("track")]

    def artist(self, artist_id: str) -> Dict[str, Any]:
        return self._call("artist", lambda: self.sp.artist(artist_id), artist_id) or {}

    def artist_top_tracks(self, artist_id: str) -> List[Dict[str, Any]]:
        response = self._call(
            "artist_top_tracks",
            lambda: self.sp.artist_top_tracks(artist_id, country=self.market),
            artist_id,
        ) or {}
        return list(response.get("tracks") or [])

    def artist_albums(self, artist_id: str, limit: int = 1) -> List[Dict[str, Any]]:
        response = self._call(
            "artist_albums",
            lambda: self.sp.artist_albums(artist_id, country=self.market, limit=limit),
            artist_id,
        ) or {}
        return list(response.get("items") or [])

    def album_tracks(self, album_id: str) -> List[Dict[str, Any]]:
        response = self._call(
            "album_tracks",
            lambda: self.sp.album_tracks(album_id, market=self.market),
            album_id,
        ) or {}
        return list(response.get("items") or [])

    def search_tracks(self, query: str, limit: int = 20) -> List[Dict[str, Any]]:
        response = self._call(
            "search_tracks",
            lambda: self.sp.search(q=query, type="track", limit=limit, market=self.market),
        ) or {}
        return list((response.get("tracks") or {}).get("items") or [])

    def track(self, track_id: str) -> Dict[str, Any]:
        track = self._call("track", lambda: self.sp.track(track_id, market=self.market), track_id)
        if not track or not track.get("id"):
            raise NotFound(f"Catalog track {track_id} not found.")
        return track

    def audio_features(self, track_ids: Sequence[str]) -> List[Optional[Dict[str, Any]]]:
        """Feature dicts aligned with ``track_ids``; ``None`` where the catalog has none."""
        ids = list(track_ids)
        features: List[Optional[Dict[str, Any]]] = []
        for start in range(0, len(ids), AUDIO_FEATURES_BATCH_SIZE):
            chunk = ids[start:start + AUDIO_FEATURES_BATCH_SIZE]
            response = self._call("audio_features", lambda chunk=chunk: self.sp.audio_features(chunk)) or []
            response = list(response)
            # Pad so a short response never shifts later ids onto the wrong features
            response.extend([None] * (len(chunk) - len(response)))
            features.extend(response[:len(chunk)])
        return features


__all__ = ["CatalogClient", "AUDIO_FEATURES_BATCH_SIZE"]
