"""Mood profiles over audio features and the mood filter."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from pydantic import ValidationError

from moodwave.models.dto import AudioFeatures, TrackDTO
from moodwave.observability.metrics import record_mood_filter_fallback

logger = logging.getLogger(__name__)

FeatureLookup = Callable[[Sequence[str]], Sequence[Optional[Mapping[str, Any]]]]


@dataclass(frozen=True)
class MoodRange:
    """Closed intervals, inclusive on both ends, per feature dimension."""

    valence: Tuple[float, float]
    energy: Tuple[float, float]
    danceability: Tuple[float, float]

    def contains(self, features: AudioFeatures) -> bool:
        for dimension in ("valence", "energy", "danceability"):
            low, high = getattr(self, dimension)
            if not low <= getattr(features, dimension) <= high:
                return False
        return True


MOOD_PROFILES: Dict[str, MoodRange] = {
    "happy": MoodRange(valence=(0.6, 1.0), energy=(0.5, 1.0), danceability=(0.5, 1.0)),
    "neutral": MoodRange(valence=(0.3, 0.6), energy=(0.3, 0.7), danceability=(0.3, 0.7)),
    "angry": MoodRange(valence=(0.0, 0.4), energy=(0.7, 1.0), danceability=(0.3, 0.8)),
    "sad": MoodRange(valence=(0.0, 0.3), energy=(0.0, 0.5), danceability=(0.0, 0.5)),
}


def _normalize(mood: Optional[str]) -> str:
    return (mood or "").strip().lower()


def known_moods() -> List[str]:
    return list(MOOD_PROFILES)


def profile_for(mood: Optional[str]) -> Optional[MoodRange]:
    return MOOD_PROFILES.get(_normalize(mood))


def matches_mood(features: Optional[AudioFeatures], mood: str) -> bool:
    profile = profile_for(mood)
    if profile is None or features is None:
        return False
    return profile.contains(features)


def _to_features(raw: Optional[Mapping[str, Any]]) -> Optional[AudioFeatures]:
    if not raw:
        return None
    try:
        return AudioFeatures(
            valence=raw["valence"],
            energy=raw["energy"],
            danceability=raw["danceability"],
        )
    except (KeyError, TypeError, ValidationError):
        return None


def filter_by_mood(
    tracks: Sequence[TrackDTO],
    mood: Optional[str],
    feature_lookup: Optional[FeatureLookup] = None,
) -> List[TrackDTO]:
    """Keep the tracks whose three audio features all fall inside the mood's ranges.

    Unknown moods pass the input through unchanged. Tracks already carrying
    features are not looked up again; the rest are resolved in one batch. When
    that batch lookup fails the unfiltered input is returned.
    """
    profile = profile_for(mood)
    if profile is None:
        return list(tracks)

    pending = [track.id for track in tracks if track.features is None]
    looked_up: Dict[str, Optional[AudioFeatures]] = {}
    if pending:
        if feature_lookup is None:
            logger.warning("No feature lookup available for mood %s; returning unfiltered tracks.", mood)
            record_mood_filter_fallback()
            return list(tracks)
        try:
            raw_features = list(feature_lookup(pending))
        except Exception as exc:
            logger.warning("Error fetching audio features for mood %s: %s", mood, exc)
            record_mood_filter_fallback()
            return list(tracks)
        for track_id, raw in zip(pending, raw_features):
            looked_up[track_id] = _to_features(raw)

    kept: List[TrackDTO] = []
    for track in tracks:
        features = track.features or looked_up.get(track.id)
        if features is None:
            continue
        if profile.contains(features):
            kept.append(track.model_copy(update={"features": features}))
    return kept


__all__ = [
    "MoodRange",
    "MOOD_PROFILES",
    "known_moods",
    "profile_for",
    "matches_mood",
    "filter_by_mood",
]
