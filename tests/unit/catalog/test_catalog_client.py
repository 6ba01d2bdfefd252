import pytest
import requests
import spotipy

from moodwave.domain.catalog import CatalogClient, CatalogCredentials
from moodwave.domain.catalog.client import AUDIO_FEATURES_BATCH_SIZE
from moodwave.errors import NotFound, UpstreamFailure
from moodwave.settings import CatalogSettings
from tests.support.stubs import catalog_error, make_features, make_track


@pytest.mark.unit
def test_rejected_token_is_refreshed_and_call_replayed_once(catalog_client, spotify_stub, token_manager):
    spotify_stub.add_tracks([make_track("t1")])
    spotify_stub.errors["track"] = [catalog_error(401, "The access token expired")]

    assert catalog_client.track("t1")["id"] == "t1"
    assert len(spotify_stub.calls_to("track")) == 2
    assert token_manager.calls == 1


@pytest.mark.unit
def test_second_rejection_is_an_upstream_failure(catalog_client, spotify_stub):
    spotify_stub.errors["track"] = [catalog_error(401), catalog_error(401)]
    with pytest.raises(UpstreamFailure):
        catalog_client.track("t1")
    assert len(spotify_stub.calls_to("track")) == 2


@pytest.mark.unit
@pytest.mark.parametrize("status", [400, 404])
def test_client_errors_map_to_not_found(catalog_client, spotify_stub, status):
    spotify_stub.errors["artist"] = catalog_error(status)
    with pytest.raises(NotFound):
        catalog_client.artist("nope")


@pytest.mark.unit
def test_server_errors_are_not_retried(catalog_client, spotify_stub):
    spotify_stub.errors["search"] = catalog_error(500)
    with pytest.raises(UpstreamFailure):
        catalog_client.search_tracks("happy")
    assert len(spotify_stub.calls_to("search")) == 1


@pytest.mark.unit
def test_transport_errors_become_upstream_failure(catalog_client, spotify_stub):
    spotify_stub.errors["new_releases"] = requests.ConnectionError("reset")
    with pytest.raises(UpstreamFailure):
        catalog_client.new_releases()


@pytest.mark.unit
def test_unknown_track_is_not_found(catalog_client):
    with pytest.raises(NotFound):
        catalog_client.track("missing")


@pytest.mark.unit
def test_search_uses_market_and_limit(catalog_client, spotify_stub):
    spotify_stub.search_results["sad"] = [make_track(str(i)) for i in range(60)]

    result = catalog_client.search_tracks("sad", limit=50)

    assert len(result) == 50
    (_, query, kwargs), = spotify_stub.calls_to("search")
    assert query == "sad"
    assert kwargs == {"limit": 50, "type": "track", "market": "IN"}


@pytest.mark.unit
def test_playlist_tracks_skip_removed_entries(catalog_client, spotify_stub):
    spotify_stub.playlist_entries["p1"] = [make_track("a"), None, make_track("b")]
    assert [t["id"] for t in catalog_client.playlist_tracks("p1")] == ["a", "b"]


@pytest.mark.unit
def test_new_releases_returns_album_items(catalog_client, spotify_stub):
    spotify_stub.releases = [{"id": f"alb{i}", "name": f"Album {i}"} for i in range(3)]
    assert [a["id"] for a in catalog_client.new_releases(limit=2)] == ["alb0", "alb1"]


@pytest.mark.unit
def test_audio_features_are_chunked_and_aligned(catalog_client, spotify_stub):
    ids = [f"t{i}" for i in range(AUDIO_FEATURES_BATCH_SIZE + 50)]
    spotify_stub.features = {track_id: make_features(0.5, 0.5, 0.5, track_id) for track_id in ids[::2]}

    features = catalog_client.audio_features(ids)

    batches = spotify_stub.calls_to("audio_features")
    assert [len(call[1]) for call in batches] == [AUDIO_FEATURES_BATCH_SIZE, 50]
    assert len(features) == len(ids)
    assert features[0]["id"] == "t0"
    assert features[1] is None


@pytest.mark.unit
def test_audio_features_short_response_is_padded(catalog_client, spotify_stub):
    spotify_stub.audio_features = lambda tracks=None: [make_features(0.1, 0.1, 0.1, "a")]
    assert catalog_client.audio_features(["a", "b", "c"])[1:] == [None, None]


@pytest.mark.unit
def test_default_client_uses_credentials_as_auth_manager():
    credentials = CatalogCredentials(client_id="id", client_secret="secret")
    client = CatalogClient(credentials=credentials, market="US", request_timeout=5)

    assert isinstance(client.sp, spotipy.Spotify)
    assert client.sp.auth_manager is credentials
    assert client.market == "US"
    assert client.is_configured is True


@pytest.mark.unit
def test_from_settings_passes_market_and_credentials():
    settings = CatalogSettings(client_id="id", client_secret="secret", market="gb")
    client = CatalogClient.from_settings(settings)
    assert client.market == "GB"
    assert client.is_configured is True
