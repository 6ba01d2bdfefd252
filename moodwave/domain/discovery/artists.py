"""Artist track lookup with a top-tracks -> latest album -> name search fallback chain."""

from __future__ import annotations

import logging
from typing import List, Optional

from moodwave.errors import MoodwaveError
from moodwave.models.catalog_mapping import tracks_from_catalog
from moodwave.models.dto import TrackDTO

from .sources import FALLBACK_ARTIST_NAMES

logger = logging.getLogger(__name__)

NAME_SEARCH_LIMIT = 10


def _top_tracks(catalog, artist_id: str) -> List[TrackDTO]:
    try:
        return tracks_from_catalog(catalog.artist_top_tracks(artist_id))
    except MoodwaveError as exc:
        logger.warning("Standard top tracks failed for %s, trying alternatives: %s", artist_id, exc)
        return []


def _latest_album_tracks(catalog, artist_id: str) -> List[TrackDTO]:
    try:
        albums = catalog.artist_albums(artist_id, limit=1)
        if not albums:
            return []
        album = albums[0]
        return tracks_from_catalog(catalog.album_tracks(album["id"]), album=album)
    except MoodwaveError as exc:
        logger.warning("Album fallback failed for %s: %s", artist_id, exc)
        return []


def _artist_name(catalog, artist_id: str) -> Optional[str]:
    name = FALLBACK_ARTIST_NAMES.get(artist_id)
    if name:
        return name
    try:
        return (catalog.artist(artist_id) or {}).get("name")
    except MoodwaveError as exc:
        logger.warning("Could not resolve artist name for %s: %s", artist_id, exc)
        return None


def _name_search(catalog, artist_id: str) -> List[TrackDTO]:
    name = _artist_name(catalog, artist_id)
    if not name:
        return []
    try:
        return tracks_from_catalog(catalog.search_tracks(name, limit=NAME_SEARCH_LIMIT))
    except MoodwaveError as exc:
        logger.warning("Search fallback failed for %s: %s", name, exc)
        return []


def resolve_artist_tracks(catalog, artist_id: str) -> List[TrackDTO]:
    """Return the first non-empty result of the fallback chain (possibly empty)."""
    for step in (_top_tracks, _latest_album_tracks, _name_search):
        tracks = step(catalog, artist_id)
        if tracks:
            return tracks
    logger.info("No tracks found for artist %s after all fallbacks.", artist_id)
    return []


__all__ = ["resolve_artist_tracks"]
