"""Discovery domain: mood filtering, multi-source aggregation, artist lookups."""

from .aggregator import SourceSpec, TrackAggregator
from .artists import resolve_artist_tracks
from .mood import MOOD_PROFILES, filter_by_mood, known_moods

__all__ = [
    "SourceSpec",
    "TrackAggregator",
    "resolve_artist_tracks",
    "MOOD_PROFILES",
    "filter_by_mood",
    "known_moods",
]
