#!/usr/bin/env python
"""
Catalog payload -> DTO/DB/JSON conversion utilities.

Every handler that returns tracks or stored songs goes through
``project_track`` so the response shape is defined in exactly one place.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from .dto import AlbumImage, TrackDTO


def _first_image(images: Optional[Iterable[Dict[str, Any]]]) -> Optional[AlbumImage]:
    for image in images or []:
        if image and image.get("url"):
            return AlbumImage(url=image["url"], height=image.get("height"), width=image.get("width"))
    return None


def _artist_names(raw: Dict[str, Any]) -> List[str]:
    return [a.get("name") for a in raw.get("artists") or [] if a and a.get("name")]


def track_from_catalog(raw: Dict[str, Any], album: Optional[Dict[str, Any]] = None) -> TrackDTO:
    """Build a TrackDTO from a catalog track object.

    ``album`` supplies the album context for simplified track objects (album
    track listings) that carry no album of their own.
    """
    album_info = raw.get("album") or album or {}
    return TrackDTO(
        id=raw["id"],
        title=raw.get("name") or "",
        artists=_artist_names(raw),
        album_name=album_info.get("name"),
        album_id=album_info.get("id"),
        image=_first_image(album_info.get("images")),
        duration_ms=int(raw.get("duration_ms") or 0),
        preview_url=raw.get("preview_url"),
        external_url=(raw.get("external_urls") or {}).get("spotify"),
        uri=raw.get("uri"),
    )


def tracks_from_catalog(items: Iterable[Optional[Dict[str, Any]]], album: Optional[Dict[str, Any]] = None) -> List[TrackDTO]:
    """Map a list of catalog tracks, skipping removed/local entries without an id."""
    return [track_from_catalog(item, album=album) for item in items if item and item.get("id")]


def album_release_from_catalog(raw: Dict[str, Any]) -> TrackDTO:
    """New-release listings are albums; they are exposed in the track shape."""
    return TrackDTO(
        id=raw["id"],
        title=raw.get("name") or "",
        artists=_artist_names(raw),
        album_name=raw.get("name"),
        album_id=raw.get("id"),
        image=_first_image(raw.get("images")),
        external_url=(raw.get("external_urls") or {}).get("spotify"),
        uri=raw.get("uri"),
    )


def project_track(track: TrackDTO) -> Dict[str, Any]:
    """Flatten a track into the JSON shape returned by the API."""
    payload: Dict[str, Any] = {
        "id": track.id,
        "name": track.title,
        "artists": ", ".join(track.artists),
        "artist_list": list(track.artists),
        "album": track.album_name,
        "album_id": track.album_id,
        "image": track.image.url if track.image else None,
        "duration_ms": track.duration_ms,
        "preview_url": track.preview_url,
        "external_url": track.external_url,
        "uri": track.uri,
    }
    for key in ("primary_artist", "language", "mood"):
        value = getattr(track, key)
        if value is not None:
            payload[key] = value
    return payload


def song_kwargs_from_track(track: TrackDTO) -> dict:
    """Return field mapping suitable for creating or updating a Song row."""
    return {
        "spotify_id": track.id,
        "title": track.title,
        "artists": list(track.artists),
        "album_name": track.album_name or "",
        "album_spotify_id": track.album_id or "",
        "album_image_url": track.image.url if track.image else None,
        "album_image_height": track.image.height if track.image else None,
        "album_image_width": track.image.width if track.image else None,
        "duration_ms": track.duration_ms,
        "preview_url": track.preview_url,
        "spotify_uri": track.uri or f"spotify:track:{track.id}",
    }


__all__ = [
    "track_from_catalog",
    "tracks_from_catalog",
    "album_release_from_catalog",
    "project_track",
    "song_kwargs_from_track",
]
