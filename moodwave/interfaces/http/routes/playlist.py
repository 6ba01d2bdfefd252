"""Playlist routes with ownership enforcement."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user, login_required

from moodwave.database.db_manager import Playlist, Song
from moodwave.domain.playlists import PlaylistStore
from moodwave.errors import BadRequest
from moodwave.models.catalog_mapping import project_track, track_from_catalog


playlist_bp = Blueprint('playlist_bp', __name__, url_prefix='/api/playlists')


def _store() -> PlaylistStore:
    return current_app.extensions['playlist_store']


def _isoformat(value):
    return value.isoformat() if value else None


def _serialize_song(song: Song) -> dict:
    payload = project_track(song.to_track())
    payload['song_id'] = song.id
    return payload


def _serialize_playlist(playlist: Playlist) -> dict:
    return {
        'id': playlist.id,
        'name': playlist.name,
        'description': playlist.description or '',
        'songs': [_serialize_song(song) for song in playlist.songs],
        'image': playlist.image,
        'spotifyId': playlist.spotify_id,
        'createdAt': _isoformat(playlist.created_at),
        'updatedAt': _isoformat(playlist.updated_at),
    }


def _required_spotify_id(payload: dict, message: str) -> str:
    spotify_id = (payload.get('spotifyId') or payload.get('spotify_id') or '').strip()
    if not spotify_id:
        raise BadRequest(message)
    return spotify_id


@playlist_bp.route('', methods=['POST'])
@login_required
def create_playlist():
    payload = request.get_json(silent=True) or {}
    playlist = _store().create(current_user, payload.get('name'), payload.get('description'))
    return jsonify(_serialize_playlist(playlist)), 201


@playlist_bp.route('', methods=['GET'])
@login_required
def list_playlists():
    return jsonify([_serialize_playlist(p) for p in _store().list(current_user)]), 200


@playlist_bp.route('/<playlist_id>/songs', methods=['POST'])
@login_required
def add_song(playlist_id):
    payload = request.get_json(silent=True) or {}
    spotify_id = _required_spotify_id(payload, 'Spotify track ID is required.')

    store = _store()
    playlist = store.get_owned(playlist_id, current_user.id)
    raw_track = current_app.extensions['catalog_client'].track(spotify_id)
    song = store.upsert_song(track_from_catalog(raw_track))
    store.add_song(playlist, song, current_user.id)
    return jsonify(_serialize_playlist(playlist)), 200


@playlist_bp.route('/<playlist_id>/songs/<song_id>', methods=['DELETE'])
@login_required
def remove_song(playlist_id, song_id):
    store = _store()
    playlist = store.get_owned(playlist_id, current_user.id)
    store.remove_song(playlist, song_id, current_user.id)
    return jsonify(_serialize_playlist(playlist)), 200


@playlist_bp.route('/<playlist_id>/play', methods=['GET'])
@login_required
def play_playlist(playlist_id):
    playlist = _store().get_owned(playlist_id, current_user.id)
    return jsonify({
        'playlistId': playlist.id,
        'name': playlist.name,
        'songs': [_serialize_song(song) for song in playlist.songs],
    }), 200


@playlist_bp.route('/<playlist_id>/sync', methods=['POST'])
@login_required
def sync_playlist(playlist_id):
    payload = request.get_json(silent=True) or {}
    spotify_id = _required_spotify_id(payload, 'Spotify playlist ID is required.')

    store = _store()
    playlist = store.get_owned(playlist_id, current_user.id)
    catalog_payload = current_app.extensions['catalog_client'].playlist(spotify_id)
    store.sync_from_catalog(playlist, catalog_payload, current_user.id)
    return jsonify(_serialize_playlist(playlist)), 200


__all__ = ['playlist_bp']
