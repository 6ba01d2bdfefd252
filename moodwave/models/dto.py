#!/usr/bin/env python
"""
Pydantic DTOs for catalog tracks.

Tracks are ephemeral: they are built from catalog payloads, annotated by the
discovery services (audio features, provenance) and projected to JSON. Only
the Song table persists a subset of them.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class AlbumImage(BaseModel):
    url: str
    height: Optional[int] = None
    width: Optional[int] = None


class AudioFeatures(BaseModel):
    """The three audio-feature dimensions used for mood matching."""

    valence: float = Field(ge=0.0, le=1.0)
    energy: float = Field(ge=0.0, le=1.0)
    danceability: float = Field(ge=0.0, le=1.0)


class TrackDTO(BaseModel):
    """Normalized track-level metadata suitable for API responses and Song upserts."""

    id: str
    title: str
    artists: List[str] = Field(default_factory=list)
    album_name: Optional[str] = None
    album_id: Optional[str] = None
    image: Optional[AlbumImage] = None
    duration_ms: int = Field(default=0, ge=0)
    preview_url: Optional[str] = None
    external_url: Optional[str] = None
    uri: Optional[str] = None

    features: Optional[AudioFeatures] = None

    # Provenance, set by the aggregator and the mood endpoint
    primary_artist: Optional[str] = None
    language: Optional[str] = None
    source: Optional[str] = None
    mood: Optional[str] = None


__all__ = ["AlbumImage", "AudioFeatures", "TrackDTO"]
