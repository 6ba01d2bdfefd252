from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Union

from sqlalchemy.exc import IntegrityError

from moodwave.database.db_manager import Playlist, PlaylistSong, Song, User, db
from moodwave.errors import BadRequest, Conflict, Forbidden, NotFound, ServerError
from moodwave.models.catalog_mapping import song_kwargs_from_track
from moodwave.models.dto import TrackDTO


logger = logging.getLogger(__name__)


def _name_key(name: str) -> str:
    return name.strip().lower()


class PlaylistStore:
    """User-scoped playlist persistence with ownership enforcement."""

    def __init__(self, session=None, clock: Optional[Callable[[], datetime]] = None) -> None:
        self._session = session
        self._clock = clock or datetime.utcnow

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    def _commit(self, action: str) -> None:
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            logger.warning("Integrity error while trying to %s: %s", action, exc)
            raise Conflict(f"Could not {action}: conflicting record.") from exc
        except Exception as exc:
            self.session.rollback()
            logger.error("Failed to %s: %s", action, exc, exc_info=True)
            raise ServerError(f"Failed to {action}.") from exc

    def _touch(self, playlist: Playlist) -> None:
        playlist.updated_at = self._clock()

    @staticmethod
    def _ensure_owner(playlist: Playlist, requester_id: Union[int, str, None]) -> None:
        if requester_id is None or str(playlist.user_id) != str(requester_id):
            raise Forbidden()

    def _name_taken(self, owner: User, name: str, *, exclude_id: Optional[int] = None) -> bool:
        key = _name_key(name)
        return any(
            _name_key(p.name) == key and p.id != exclude_id
            for p in owner.playlists
        )

    def create(self, owner: User, name: Optional[str], description: Optional[str] = None) -> Playlist:
        name = (name or "").strip()
        if not name:
            raise BadRequest("Playlist name is required.")
        if self._name_taken(owner, name):
            raise Conflict("A playlist with this name already exists.")

        now = self._clock()
        playlist = Playlist(
            name=name,
            description=(description or "").strip(),
            created_at=now,
            updated_at=now,
        )
        owner.playlists.append(playlist)
        self.session.add(playlist)
        self._commit("create playlist")
        logger.info("Created playlist %s for user %s", playlist.id, owner.id)
        return playlist

    def list(self, owner: User) -> List[Playlist]:
        """Owned playlists in stored order, deduplicated by case-insensitive name."""
        seen = set()
        unique: List[Playlist] = []
        for playlist in owner.playlists:
            key = _name_key(playlist.name)
            if key in seen:
                continue
            seen.add(key)
            unique.append(playlist)
        return unique

    def get_owned(self, playlist_id: Union[int, str], requester_id: Union[int, str, None]) -> Playlist:
        try:
            pk = int(playlist_id)
        except (TypeError, ValueError):
            raise NotFound("Playlist not found.")
        playlist = self.session.get(Playlist, pk)
        if playlist is None:
            raise NotFound("Playlist not found.")
        self._ensure_owner(playlist, requester_id)
        return playlist

    def upsert_song(self, track: TrackDTO) -> Song:
        """Insert or refresh the Song row keyed by the catalog id."""
        fields = song_kwargs_from_track(track)
        song = self.session.query(Song).filter_by(spotify_id=track.id).first()
        if song is None:
            song = Song(**fields)
            self.session.add(song)
        else:
            for key, value in fields.items():
                setattr(song, key, value)
        try:
            self.session.commit()
        except IntegrityError:
            # Another request inserted the same catalog id first
            self.session.rollback()
            song = self.session.query(Song).filter_by(spotify_id=track.id).first()
            if song is None:
                raise ServerError("Failed to store song.")
            for key, value in fields.items():
                setattr(song, key, value)
            self._commit("store song")
        return song

    def add_song(self, playlist: Playlist, song: Song, requester_id: Union[int, str, None]) -> Playlist:
        self._ensure_owner(playlist, requester_id)
        if song is None:
            raise NotFound("Song not found.")
        if any(entry.song is song or entry.song_id == song.id for entry in playlist.entries):
            return playlist

        next_position = max((entry.position for entry in playlist.entries), default=-1) + 1
        playlist.entries.append(PlaylistSong(song=song, position=next_position, added_at=self._clock()))
        self._touch(playlist)
        self._commit("add song to playlist")
        return playlist

    def remove_song(self, playlist: Playlist, song_id: Union[int, str], requester_id: Union[int, str, None]) -> Playlist:
        """Drop every reference matching the song's primary key or catalog id."""
        self._ensure_owner(playlist, requester_id)
        target = str(song_id)
        for entry in list(playlist.entries):
            song = entry.song
            if str(entry.song_id) == target or (song is not None and song.spotify_id == target):
                playlist.entries.remove(entry)
        for index, entry in enumerate(playlist.entries):
            entry.position = index
        self._touch(playlist)
        self._commit("remove song from playlist")
        return playlist

    def sync_from_catalog(self, playlist: Playlist, payload: Dict[str, Any], requester_id: Union[int, str, None]) -> Playlist:
        """Merge catalog playlist metadata; absent fields keep their current values."""
        self._ensure_owner(playlist, requester_id)
        payload = payload or {}

        name = (payload.get("name") or "").strip()
        if name:
            if self._name_taken(playlist.owner, name, exclude_id=playlist.id):
                raise Conflict("A playlist with this name already exists.")
            playlist.name = name
        if payload.get("description"):
            playlist.description = payload["description"]
        if payload.get("id"):
            playlist.spotify_id = payload["id"]
        images = payload.get("images") or []
        if images and images[0].get("url"):
            playlist.image_url = images[0]["url"]
            playlist.image_height = images[0].get("height")
            playlist.image_width = images[0].get("width")

        self._touch(playlist)
        self._commit("sync playlist with catalog")
        return playlist


__all__ = ["PlaylistStore"]
