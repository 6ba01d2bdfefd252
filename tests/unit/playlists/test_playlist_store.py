from datetime import datetime

import pytest

from moodwave.database.db_manager import Song
from moodwave.domain.playlists import PlaylistStore
from moodwave.errors import BadRequest, Conflict, Forbidden, NotFound
from moodwave.models.dto import AlbumImage, TrackDTO


@pytest.fixture
def store(db_session):
    return PlaylistStore()


@pytest.fixture
def owner(factories):
    return factories.UserFactory()


@pytest.mark.unit
def test_create_rejects_case_insensitive_duplicate_name(store, owner):
    store.create(owner, "Road Trip")
    with pytest.raises(Conflict):
        store.create(owner, "road trip")
    assert [p.name for p in owner.playlists] == ["Road Trip"]


@pytest.mark.unit
def test_same_name_is_allowed_for_different_users(store, owner, factories):
    other = factories.UserFactory()
    store.create(owner, "Focus")
    assert store.create(other, "Focus").name == "Focus"


@pytest.mark.unit
@pytest.mark.parametrize("name", [None, "", "   "])
def test_create_requires_a_name(store, owner, name):
    with pytest.raises(BadRequest):
        store.create(owner, name)


@pytest.mark.unit
def test_create_sets_defaults(store, owner):
    playlist = store.create(owner, "  Evening  ")
    assert playlist.name == "Evening"
    assert playlist.description == ""
    assert playlist.songs == []
    assert playlist.image is None
    assert playlist.user_id == owner.id


@pytest.mark.unit
def test_list_dedupes_stored_names_case_insensitively(store, owner, factories):
    factories.PlaylistFactory(owner=owner, name="Chill")
    factories.PlaylistFactory(owner=owner, name="chill")
    factories.PlaylistFactory(owner=owner, name="Work")

    assert [p.name for p in store.list(owner)] == ["Chill", "Work"]


@pytest.mark.unit
def test_adding_the_same_song_twice_keeps_one_reference(store, owner, factories):
    song = factories.SongFactory()
    playlist = store.create(owner, "Mix")

    store.add_song(playlist, song, owner.id)
    store.add_song(playlist, song, owner.id)

    assert [s.id for s in playlist.songs] == [song.id]


@pytest.mark.unit
def test_songs_keep_insertion_order(store, owner, factories):
    songs = [factories.SongFactory() for _ in range(3)]
    playlist = store.create(owner, "Ordered")
    for song in songs:
        store.add_song(playlist, song, owner.id)

    assert [s.id for s in playlist.songs] == [s.id for s in songs]
    assert [e.position for e in playlist.entries] == [0, 1, 2]


@pytest.mark.unit
def test_remove_absent_song_is_a_no_op(store, owner, factories):
    song = factories.SongFactory()
    playlist = store.create(owner, "Keep")
    store.add_song(playlist, song, owner.id)

    store.remove_song(playlist, "not-in-playlist", owner.id)

    assert [s.id for s in playlist.songs] == [song.id]


@pytest.mark.unit
def test_remove_by_primary_key_or_catalog_id_compacts_positions(store, owner, factories):
    first, middle, last = (factories.SongFactory() for _ in range(3))
    playlist = store.create(owner, "Trim")
    for song in (first, middle, last):
        store.add_song(playlist, song, owner.id)

    store.remove_song(playlist, str(middle.id), owner.id)
    assert [s.id for s in playlist.songs] == [first.id, last.id]
    assert [e.position for e in playlist.entries] == [0, 1]

    store.remove_song(playlist, last.spotify_id, owner.id)
    assert [s.id for s in playlist.songs] == [first.id]


@pytest.mark.unit
def test_mutations_by_non_owner_are_forbidden(store, owner, factories):
    intruder = factories.UserFactory()
    song = factories.SongFactory()
    playlist = store.create(owner, "Private")

    with pytest.raises(Forbidden):
        store.add_song(playlist, song, intruder.id)
    with pytest.raises(Forbidden):
        store.remove_song(playlist, song.id, intruder.id)
    with pytest.raises(Forbidden):
        store.sync_from_catalog(playlist, {"name": "Hijacked"}, intruder.id)
    with pytest.raises(Forbidden):
        store.get_owned(playlist.id, intruder.id)
    assert playlist.songs == []


@pytest.mark.unit
@pytest.mark.parametrize("playlist_id", [999999, "not-a-number"])
def test_get_owned_missing_playlist_is_not_found(store, owner, playlist_id):
    with pytest.raises(NotFound):
        store.get_owned(playlist_id, owner.id)


@pytest.mark.unit
def test_add_missing_song_is_not_found(store, owner):
    playlist = store.create(owner, "Empty")
    with pytest.raises(NotFound):
        store.add_song(playlist, None, owner.id)


@pytest.mark.unit
def test_upsert_song_refreshes_existing_row(store, db_session):
    track = TrackDTO(
        id="sp-1",
        title="First Title",
        artists=["A", "B"],
        album_name="Album",
        album_id="alb-1",
        image=AlbumImage(url="http://img/1.jpg", height=300, width=300),
        duration_ms=1000,
    )
    song = store.upsert_song(track)
    again = store.upsert_song(track.model_copy(update={"title": "Second Title"}))

    assert again is song
    assert song.title == "Second Title"
    assert song.spotify_uri == "spotify:track:sp-1"
    assert song.album_image_height == 300
    assert db_session.query(Song).filter_by(spotify_id="sp-1").count() == 1


@pytest.mark.unit
def test_sync_merges_present_fields_only(owner, factories):
    stamp = datetime(2024, 5, 1, 12, 0, 0)
    store = PlaylistStore(clock=lambda: stamp)
    playlist = store.create(owner, "Old", "kept description")

    store.sync_from_catalog(
        playlist,
        {"id": "cat-1", "name": "New", "images": [{"url": "http://img/p.jpg", "height": 300, "width": 300}]},
        owner.id,
    )

    assert playlist.name == "New"
    assert playlist.description == "kept description"
    assert playlist.spotify_id == "cat-1"
    assert playlist.image == {"url": "http://img/p.jpg", "height": 300, "width": 300}
    assert playlist.updated_at == stamp

    store.sync_from_catalog(playlist, {}, owner.id)
    assert playlist.name == "New"
    assert playlist.spotify_id == "cat-1"


@pytest.mark.unit
def test_sync_cannot_rename_onto_another_playlist(store, owner):
    store.create(owner, "Taken")
    playlist = store.create(owner, "Mine")
    with pytest.raises(Conflict):
        store.sync_from_catalog(playlist, {"name": "taken"}, owner.id)


@pytest.mark.unit
def test_sync_may_keep_its_own_name_in_other_case(store, owner):
    playlist = store.create(owner, "Mine")
    store.sync_from_catalog(playlist, {"name": "MINE"}, owner.id)
    assert playlist.name == "MINE"
