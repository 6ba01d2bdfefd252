"""Shared test stubs for the Spotipy client and token manager interfaces."""

import time
from typing import Dict, Iterable, List, Optional, Sequence

from spotipy.cache_handler import MemoryCacheHandler
from spotipy.exceptions import SpotifyException


def catalog_error(status: int, message: str = "error") -> SpotifyException:
    return SpotifyException(status, -1, message)


def make_track(
    track_id: str,
    name: Optional[str] = None,
    artists: Sequence[str] = ("Artist",),
    album_id: str = "album-1",
    album_name: str = "Album",
    with_image: bool = True,
) -> dict:
    images = [{"url": f"http://img/{album_id}.jpg", "height": 640, "width": 640}] if with_image else []
    return {
        "id": track_id,
        "name": name or f"Song {track_id}",
        "artists": [{"id": f"artist-{a}", "name": a} for a in artists],
        "album": {"id": album_id, "name": album_name, "images": images},
        "duration_ms": 200000,
        "preview_url": f"http://preview/{track_id}.mp3",
        "external_urls": {"spotify": f"https://open.spotify.com/track/{track_id}"},
        "uri": f"spotify:track:{track_id}",
    }


def make_features(valence: float, energy: float, danceability: float, track_id: str = "") -> dict:
    return {"id": track_id, "valence": valence, "energy": energy, "danceability": danceability}


class SpotipyStub:
    """In-memory stand-in for ``spotipy.Spotify`` covering the calls the catalog client makes.

    ``errors`` maps a method name, or a ``(method, resource_id)`` pair, to an
    exception raised on every call or to a list of exceptions consumed one
    per call.
    """

    def __init__(self):
        self.releases: List[dict] = []
        self.tracks: Dict[str, dict] = {}
        self.playlists: Dict[str, dict] = {}
        self.playlist_entries: Dict[str, List[Optional[dict]]] = {}
        self.top_tracks: Dict[str, List[dict]] = {}
        self.albums: Dict[str, List[dict]] = {}
        self.album_entries: Dict[str, List[dict]] = {}
        self.artists: Dict[str, dict] = {}
        self.search_results: Dict[str, List[dict]] = {}
        self.features: Dict[str, dict] = {}
        self.errors: Dict[object, object] = {}
        self.calls: List[tuple] = []

    def _maybe_fail(self, method: str, resource_id=None):
        for key in ((method, resource_id), method):
            error = self.errors.get(key)
            if error is None:
                continue
            if isinstance(error, list):
                if error:
                    raise error.pop(0)
                continue
            raise error

    def _record(self, method: str, resource_id=None, **kwargs):
        self.calls.append((method, resource_id, kwargs))
        self._maybe_fail(method, resource_id)

    def calls_to(self, method: str) -> List[tuple]:
        return [call for call in self.calls if call[0] == method]

    def add_tracks(self, tracks: Iterable[dict]) -> None:
        for track in tracks:
            self.tracks[track["id"]] = track

    def new_releases(self, limit=20, **kwargs):
        self._record("new_releases", limit=limit)
        return {"albums": {"items": self.releases[:limit]}}

    def playlist(self, playlist_id, **kwargs):
        self._record("playlist", playlist_id)
        if playlist_id not in self.playlists:
            raise catalog_error(404, "non existing id")
        return self.playlists[playlist_id]

    def playlist_items(self, playlist_id, limit=100, market=None, additional_types=("track",), **kwargs):
        self._record("playlist_items", playlist_id, limit=limit, market=market)
        entries = self.playlist_entries.get(playlist_id, [])[:limit]
        return {"items": [{"track": track} for track in entries]}

    def artist(self, artist_id):
        self._record("artist", artist_id)
        return self.artists.get(artist_id)

    def artist_top_tracks(self, artist_id, country="US"):
        self._record("artist_top_tracks", artist_id, country=country)
        return {"tracks": self.top_tracks.get(artist_id, [])}

    def artist_albums(self, artist_id, country=None, limit=20, **kwargs):
        self._record("artist_albums", artist_id, country=country, limit=limit)
        return {"items": self.albums.get(artist_id, [])[:limit]}

    def album_tracks(self, album_id, market=None, **kwargs):
        self._record("album_tracks", album_id, market=market)
        return {"items": self.album_entries.get(album_id, [])}

    def search(self, q, limit=10, type="track", market=None, **kwargs):
        self._record("search", q, limit=limit, type=type, market=market)
        return {"tracks": {"items": self.search_results.get(q, [])[:limit]}}

    def track(self, track_id, market=None):
        self._record("track", track_id, market=market)
        if track_id not in self.tracks:
            raise catalog_error(404, "non existing id")
        return self.tracks[track_id]

    def audio_features(self, tracks=None):
        ids = list(tracks or [])
        self._record("audio_features", tuple(ids))
        return [self.features.get(track_id) for track_id in ids]


class TokenManagerStub:
    """Client-credentials manager that issues numbered tokens."""

    def __init__(self, lifetime: int = 3600, clock=time.time, error: Optional[Exception] = None, use_cache: bool = True):
        self.lifetime = lifetime
        self.clock = clock
        self.error = error
        self.calls = 0
        self.cache_handler = MemoryCacheHandler() if use_cache else None

    def get_access_token(self, as_dict=False, check_cache=True):
        self.calls += 1
        if self.error is not None:
            raise self.error
        token = f"token-{self.calls}"
        if self.cache_handler is not None:
            self.cache_handler.save_token_to_cache(
                {"access_token": token, "expires_at": int(self.clock()) + self.lifetime}
            )
        return token


class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


__all__ = [
    "SpotipyStub",
    "TokenManagerStub",
    "FakeClock",
    "catalog_error",
    "make_track",
    "make_features",
]
