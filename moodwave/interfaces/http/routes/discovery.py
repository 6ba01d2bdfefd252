"""Public catalog browsing routes: releases, mixed feeds, artists, mood and search."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from moodwave.domain.discovery import TrackAggregator, filter_by_mood, resolve_artist_tracks
from moodwave.domain.discovery.sources import (
    MIXED_ALT_ARTIST_SOURCES,
    MIXED_ALT_LIMIT,
    MIXED_ARTIST_SOURCES,
    MIXED_HITS_LIMIT,
    MIXED_HITS_SOURCES,
)
from moodwave.errors import BadRequest, NotFound
from moodwave.models.catalog_mapping import (
    album_release_from_catalog,
    project_track,
    tracks_from_catalog,
)


discovery_bp = Blueprint("discovery_bp", __name__, url_prefix="/api")

NEW_RELEASES_LIMIT = 50
MOOD_SEARCH_LIMIT = 50
SEARCH_LIMIT = 20


def _catalog():
    return current_app.extensions["catalog_client"]


def _aggregator() -> TrackAggregator:
    return TrackAggregator(
        _catalog(),
        max_workers=current_app.config.get("AGGREGATOR_MAX_WORKERS", 4),
        rng=current_app.extensions.get("aggregator_rng"),
    )


def _projected(tracks):
    return jsonify([project_track(track) for track in tracks])


@discovery_bp.route("/new-releases", methods=["GET"])
def new_releases():
    albums = _catalog().new_releases(limit=NEW_RELEASES_LIMIT)
    return _projected(album_release_from_catalog(album) for album in albums if album and album.get("id"))


@discovery_bp.route("/mixed-hits", methods=["GET"])
def mixed_hits():
    return _projected(_aggregator().aggregate(MIXED_HITS_SOURCES, limit=MIXED_HITS_LIMIT))


@discovery_bp.route("/mixed", methods=["GET"])
def mixed():
    return _projected(_aggregator().aggregate(MIXED_ARTIST_SOURCES))


@discovery_bp.route("/mixed1", methods=["GET"])
def mixed_alt():
    return _projected(_aggregator().aggregate(MIXED_ALT_ARTIST_SOURCES, limit=MIXED_ALT_LIMIT, dedupe=True))


@discovery_bp.route("/artist-top-tracks/<artist_id>", methods=["GET"])
def artist_top_tracks(artist_id: str):
    artist_id = (artist_id or "").strip()
    if not artist_id:
        raise BadRequest("Artist ID is required.")
    return _projected(resolve_artist_tracks(_catalog(), artist_id))


@discovery_bp.route("/songs/<mood>", methods=["GET"])
def songs_by_mood(mood: str):
    mood = (mood or "").strip()
    if not mood:
        raise BadRequest("Mood parameter is required.")

    catalog = _catalog()
    tracks = tracks_from_catalog(catalog.search_tracks(mood, limit=MOOD_SEARCH_LIMIT))
    if request.args.get("filter") == "features":
        tracks = filter_by_mood(tracks, mood, feature_lookup=catalog.audio_features)
    if not tracks:
        raise NotFound(f"No {mood} songs found.")

    tag = mood.lower()
    return _projected(track.model_copy(update={"mood": tag}) for track in tracks)


@discovery_bp.route("/search/songs", methods=["GET"])
def search_songs():
    query = (request.args.get("q") or "").strip()
    if not query:
        raise BadRequest("Search query is required.")
    return _projected(tracks_from_catalog(_catalog().search_tracks(query, limit=SEARCH_LIMIT)))


__all__ = ["discovery_bp"]
