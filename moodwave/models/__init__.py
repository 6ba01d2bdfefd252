"""Track DTOs and catalog mapping helpers."""

from .dto import AlbumImage, AudioFeatures, TrackDTO
from .catalog_mapping import (
    album_release_from_catalog,
    project_track,
    song_kwargs_from_track,
    track_from_catalog,
    tracks_from_catalog,
)

__all__ = [
    "AlbumImage",
    "AudioFeatures",
    "TrackDTO",
    "album_release_from_catalog",
    "project_track",
    "song_kwargs_from_track",
    "track_from_catalog",
    "tracks_from_catalog",
]
