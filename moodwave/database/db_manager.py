# moodwave/database/db_manager.py
import logging
import os
from datetime import datetime

from flask_login import UserMixin
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.engine import make_url
from sqlalchemy.orm import relationship
from werkzeug.security import check_password_hash, generate_password_hash

# Initialize the SQLAlchemy object
db = SQLAlchemy()
logger = logging.getLogger(__name__)


def _isoformat(value):
    return value.isoformat() if value else None


class User(UserMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=True)
    username = db.Column(db.String(120), unique=True, nullable=False, index=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    # External catalog identity, unique when linked
    spotify_id = db.Column(db.String(64), unique=True, nullable=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Stored reference order is creation order
    playlists = relationship(
        "Playlist",
        back_populates="owner",
        order_by="Playlist.id",
        cascade="all, delete-orphan",
        lazy=True,
    )

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def get_id(self) -> str:
        return str(self.id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "username": self.username,
            "email": self.email,
            "spotify_id": self.spotify_id,
            "created_at": _isoformat(self.created_at),
        }

    def __repr__(self) -> str:
        return f"<User {self.username}>"


class Song(db.Model):
    """Durable projection of a catalog track, shared across playlists."""

    __tablename__ = "songs"

    id = db.Column(db.Integer, primary_key=True)
    spotify_id = db.Column(db.String(64), unique=True, nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    artists = db.Column(db.JSON, nullable=False, default=list)  # list[str]
    album_name = db.Column(db.String(255), nullable=False, default="")
    album_spotify_id = db.Column(db.String(64), nullable=False, default="")
    album_image_url = db.Column(db.String(500), nullable=True)
    album_image_height = db.Column(db.Integer, nullable=True)
    album_image_width = db.Column(db.Integer, nullable=True)
    duration_ms = db.Column(db.Integer, nullable=False, default=0)
    preview_url = db.Column(db.String(500), nullable=True)
    spotify_uri = db.Column(db.String(255), nullable=False)
    added_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def to_track(self):
        from moodwave.models.dto import AlbumImage, TrackDTO

        image = None
        if self.album_image_url:
            image = AlbumImage(
                url=self.album_image_url,
                height=self.album_image_height,
                width=self.album_image_width,
            )
        return TrackDTO(
            id=self.spotify_id,
            title=self.title,
            artists=list(self.artists or []),
            album_name=self.album_name or None,
            album_id=self.album_spotify_id or None,
            image=image,
            duration_ms=self.duration_ms,
            preview_url=self.preview_url,
            uri=self.spotify_uri,
        )

    def __repr__(self):
        return f"<Song {self.spotify_id}: {self.title}>"


class Playlist(db.Model):
    __tablename__ = "playlists"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False, default="")
    spotify_id = db.Column(db.String(64), unique=True, nullable=True)
    image_url = db.Column(db.String(500), nullable=True)
    image_height = db.Column(db.Integer, nullable=True)
    image_width = db.Column(db.Integer, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    owner = relationship("User", back_populates="playlists")
    entries = relationship(
        "PlaylistSong",
        back_populates="playlist",
        order_by="PlaylistSong.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def songs(self) -> list:
        return [entry.song for entry in self.entries if entry.song is not None]

    @property
    def image(self) -> dict | None:
        if not self.image_url:
            return None
        return {"url": self.image_url, "height": self.image_height, "width": self.image_width}

    def __repr__(self):
        return f"<Playlist {self.id}: {self.name}>"


class PlaylistSong(db.Model):
    __tablename__ = "playlist_songs"

    id = db.Column(db.Integer, primary_key=True)
    playlist_id = db.Column(
        db.Integer,
        ForeignKey("playlists.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    song_id = db.Column(
        db.Integer,
        ForeignKey("songs.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    position = db.Column(db.Integer, nullable=False, default=0)
    added_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    playlist = relationship("Playlist", back_populates="entries")
    song = relationship("Song", lazy="joined")

    __table_args__ = (
        UniqueConstraint("playlist_id", "song_id", name="uq_playlist_song_once"),
    )


def initialize_database(app):
    """
    Initializes the SQLAlchemy extension with the Flask app instance
    and creates all database tables if they don't already exist.
    """
    db.init_app(app)

    # Ensure the directory for the configured SQLite file exists
    try:
        uri = app.config.get("SQLALCHEMY_DATABASE_URI")
        if uri:
            url = make_url(uri)
            # Only handle file-based SQLite (not :memory:)
            if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
                db_dir = os.path.dirname(url.database)
                if db_dir and not os.path.exists(db_dir):
                    os.makedirs(db_dir, exist_ok=True)
                    logger.info("Created SQLite DB directory: %s", db_dir)
    except Exception as e:
        # Don't block app startup on path parsing issues; log and continue
        logger.warning("Could not ensure SQLite directory exists: %s", e)

    with app.app_context():
        db.create_all()
        logger.info("Database tables created or already exist.")


__all__ = ["db", "User", "Song", "Playlist", "PlaylistSong", "initialize_database"]
