"""Merge tracks from several catalog sources into one shuffled list."""

from __future__ import annotations

import logging
import random
from concurrent.futures import ThreadPoolExecutor
from typing import List, Literal, Optional, Sequence

from pydantic import BaseModel, Field

from moodwave.errors import MoodwaveError, UpstreamFailure
from moodwave.models.catalog_mapping import tracks_from_catalog
from moodwave.models.dto import TrackDTO
from moodwave.observability.metrics import record_source_failure
from moodwave.observability.tracing import attached_context, capture_context

logger = logging.getLogger(__name__)


class SourceSpec(BaseModel):
    """One aggregation source: a curated playlist or an artist's top tracks."""

    kind: Literal["playlist", "artist"]
    source_id: str
    count: int = Field(ge=0)
    language: str
    name: Optional[str] = None

    @property
    def label(self) -> str:
        return self.name or self.source_id


class TrackAggregator:
    def __init__(self, catalog, max_workers: int = 4, rng: Optional[random.Random] = None) -> None:
        self.catalog = catalog
        self.max_workers = max(1, int(max_workers))
        self._rng = rng or random.Random()

    def _fetch_raw(self, source: SourceSpec) -> list:
        if source.kind == "playlist":
            return self.catalog.playlist_tracks(source.source_id, limit=max(1, source.count))
        return self.catalog.artist_top_tracks(source.source_id)

    def _fetch_source(self, source: SourceSpec, trace_ctx=None) -> Optional[List[TrackDTO]]:
        """Tagged tracks for one source, or ``None`` when the source failed."""
        try:
            with attached_context(trace_ctx):
                raw_tracks = self._fetch_raw(source)
        except MoodwaveError as exc:
            logger.warning("Error fetching tracks for %s: %s", source.label, exc)
            record_source_failure()
            return None

        tags = {"language": source.language, "source": source.source_id}
        if source.kind == "artist":
            tags["primary_artist"] = source.label
        return [
            track.model_copy(update=tags)
            for track in tracks_from_catalog(raw_tracks)[:source.count]
        ]

    def aggregate(
        self,
        sources: Sequence[SourceSpec],
        limit: Optional[int] = None,
        dedupe: bool = False,
    ) -> List[TrackDTO]:
        """Merge, shuffle and truncate the tracks of ``sources``.

        A failed source contributes nothing. Only a single-source feed whose
        one source failed raises ``UpstreamFailure``; a multi-source feed
        where every source failed yields an empty list.
        """
        if not sources:
            return []

        trace_ctx = capture_context()
        workers = min(self.max_workers, len(sources))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="aggregator") as pool:
            # map() yields in submission order, so the merge is deterministic
            per_source = list(pool.map(lambda source: self._fetch_source(source, trace_ctx), sources))

        if len(sources) == 1 and per_source[0] is None:
            raise UpstreamFailure(f"Source {sources[0].label} failed.")

        merged: List[TrackDTO] = []
        seen_ids = set()
        for result in per_source:
            for track in result or []:
                if dedupe:
                    if track.id in seen_ids:
                        continue
                    seen_ids.add(track.id)
                merged.append(track)

        self._rng.shuffle(merged)
        if limit is not None:
            merged = merged[:max(0, limit)]
        logger.info(
            "Aggregated %s tracks from %s sources (%s failed).",
            len(merged),
            len(sources),
            sum(1 for result in per_source if result is None),
        )
        return merged


__all__ = ["SourceSpec", "TrackAggregator"]
