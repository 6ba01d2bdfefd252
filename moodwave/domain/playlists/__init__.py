"""Playlist domain services."""

from .store import PlaylistStore

__all__ = ["PlaylistStore"]
