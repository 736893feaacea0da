"""
Tests for Discogs client.
"""

import pytest
import sys
from pathlib import Path
from unittest.mock import Mock, patch

import requests

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from labeltracks.clients.discogs import DiscogsClient, parse_release_detail, parse_release_summaries
from labeltracks.core.exceptions import (
    APIError,
    AuthenticationError,
    NetworkError,
    PayloadError,
    RateLimitError,
)
from labeltracks.models.releases import ReleaseDetail


@pytest.fixture
def client(make_config, fake_sleep):
    return DiscogsClient(make_config(), sleep=fake_sleep)


class TestDiscogsClient:
    """Tests for DiscogsClient class."""

    def test_initialization_sets_headers(self, client):
        headers = client.session.headers
        assert headers["Authorization"] == "Discogs token=test-token"
        assert headers["User-Agent"] == "Test/1.0"
        assert headers["Accept"] == "application/json"

    def test_base_url_trailing_slash(self, make_config):
        client = DiscogsClient(make_config(base_url="https://api.discogs.com/"))
        assert client.base_url == "https://api.discogs.com"

    def test_retry_policy_from_config(self, make_config, fake_sleep):
        client = DiscogsClient(make_config(max_attempts=3, rate_limit_backoff=5.0), sleep=fake_sleep)
        assert client.retry_policy.max_attempts == 3
        assert client.retry_policy.backoff_seconds == 5.0
        assert client.retry_policy.sleep is fake_sleep

    @patch('labeltracks.clients.discogs.requests.Session.get')
    def test_label_releases_page_request(self, mock_get, client, make_response):
        mock_get.return_value = make_response(json_data={"releases": [], "pagination": {"page": 1, "pages": 1}})

        data = client.get_label_releases_page(123, page=2, per_page=50)

        assert data["releases"] == []
        args, kwargs = mock_get.call_args
        assert args[0] == "https://api.discogs.com/labels/123/releases"
        assert kwargs["params"] == {"page": 2, "per_page": 50}
        assert kwargs["timeout"] == 30

    @patch('labeltracks.clients.discogs.requests.Session.get')
    def test_master_versions_page_request(self, mock_get, client, make_response):
        mock_get.return_value = make_response(json_data={"versions": []})

        client.get_master_versions_page(77, page=1, per_page=100)

        assert mock_get.call_args[0][0] == "https://api.discogs.com/masters/77/versions"

    @patch('labeltracks.clients.discogs.requests.Session.get')
    def test_get_release_parses_detail(self, mock_get, client, make_response, release_payload):
        mock_get.return_value = make_response(json_data=release_payload)

        detail = client.get_release(501)

        assert mock_get.call_args[0][0] == "https://api.discogs.com/releases/501"
        assert isinstance(detail, ReleaseDetail)
        assert detail.id == 501
        assert detail.year == 1987
        assert detail.primary_format.name == "CD"
        assert detail.primary_format.descriptions == ("Compilation", "Remastered")
        assert detail.tracklist[0].artists == ["Artist X", "Artist Y"]

    @pytest.mark.parametrize("status", [401, 403])
    @patch('labeltracks.clients.discogs.requests.Session.get')
    def test_auth_failure(self, mock_get, status, client, make_response, fake_sleep):
        mock_get.return_value = make_response(status_code=status)

        with pytest.raises(AuthenticationError) as exc_info:
            client.get_release(1)

        assert exc_info.value.status_code == status
        assert mock_get.call_count == 1
        assert fake_sleep.sleeps == []

    @patch('labeltracks.clients.discogs.requests.Session.get')
    def test_rate_limit_retries_once_then_succeeds(self, mock_get, client, make_response, release_payload, fake_sleep):
        mock_get.side_effect = [make_response(status_code=429), make_response(json_data=release_payload)]

        detail = client.get_release(501)

        assert detail.id == 501
        assert mock_get.call_count == 2
        assert fake_sleep.sleeps == [60.0]
        assert mock_get.call_args_list[0] == mock_get.call_args_list[1]

    @patch('labeltracks.clients.discogs.requests.Session.get')
    def test_rate_limit_gives_up_after_one_retry(self, mock_get, client, make_response, fake_sleep):
        mock_get.return_value = make_response(status_code=429)

        with pytest.raises(RateLimitError):
            client.get_release(501)

        assert mock_get.call_count == 2
        assert fake_sleep.sleeps == [60.0]

    @patch('labeltracks.clients.discogs.requests.Session.get')
    def test_server_error(self, mock_get, client, make_response):
        mock_get.return_value = make_response(status_code=500)

        with pytest.raises(APIError) as exc_info:
            client.get_release(1)

        assert exc_info.value.status_code == 500
        assert not isinstance(exc_info.value, (AuthenticationError, RateLimitError))
        assert mock_get.call_count == 1

    @patch('labeltracks.clients.discogs.requests.Session.get')
    def test_connection_error(self, mock_get, client):
        mock_get.side_effect = requests.exceptions.ConnectionError("unreachable")

        with pytest.raises(NetworkError):
            client.get_release(1)

    @patch('labeltracks.clients.discogs.requests.Session.get')
    def test_invalid_json(self, mock_get, client, make_response):
        response = make_response()
        response.json.side_effect = ValueError("Expecting value")
        mock_get.return_value = response

        with pytest.raises(APIError):
            client.get_release(1)

    @patch('labeltracks.clients.discogs.requests.Session.get')
    def test_non_object_payload(self, mock_get, client, make_response):
        mock_get.return_value = make_response(json_data=[1, 2, 3])

        with pytest.raises(PayloadError):
            client.get_label_releases_page(1, 1, 100)

    @patch('labeltracks.clients.discogs.requests.Session.get')
    def test_diagnostics_does_not_change_result(self, mock_get, make_config, make_response):
        client = DiscogsClient(make_config(diagnostics=True))
        mock_get.return_value = make_response(
            json_data={"releases": []},
            headers={"X-Discogs-Ratelimit-Remaining": "59"}
        )

        assert client.get_label_releases_page(1, 1, 100) == {"releases": []}

    def test_injected_session(self, make_config):
        session = Mock()
        session.headers = {}
        client = DiscogsClient(make_config(), session=session)

        assert client.session is session
        assert session.headers["Authorization"] == "Discogs token=test-token"


class TestParsing:
    """Tests for payload parsing helpers."""

    def test_parse_release_summaries(self):
        summaries = parse_release_summaries([
            {"id": 1, "title": "Now 9", "year": 1987, "type": "release", "role": "Main"},
            {"id": 2, "title": "Now 10", "year": 0},
            {"title": "no id"},
        ])

        assert [s.id for s in summaries] == [1, 2]
        assert summaries[0].type == "release"
        assert summaries[0].role == "Main"
        assert summaries[1].year is None

    def test_parse_master_summary(self):
        summary = parse_release_summaries([{"id": 3, "title": "Now 11", "type": "master", "main_release": 99}])[0]

        assert summary.is_master
        assert summary.main_release == 99

    def test_parse_release_detail_missing_fields(self):
        detail = parse_release_detail({}, 42)

        assert detail.id == 42
        assert detail.year is None
        assert detail.formats == []
        assert detail.tracklist == []
        assert detail.primary_format.name == ""

    def test_parse_track_without_artists(self):
        detail = parse_release_detail({"tracklist": [{"position": "A1", "title": "Song"}]}, 1)

        track = detail.tracklist[0]
        assert track.artists == []
        assert track.first_artist is None

    def test_summaries_skip_non_numeric_and_non_object_entries(self):
        summaries = parse_release_summaries([
            {"id": "abc", "title": "Now 1"},
            "oops",
            None,
            {"id": "7", "title": "Now 7"},
        ])

        assert [s.id for s in summaries] == [7]

    def test_summaries_non_list_listing_is_empty(self):
        assert parse_release_summaries({"id": 1}) == []

    def test_detail_skips_malformed_tracks_and_artists(self):
        detail = parse_release_detail({
            "id": 5,
            "tracklist": [
                "oops",
                {"position": "A1", "title": "Song", "artists": ["bad", {"name": "Artist"}]},
                {"position": 3, "title": ["not", "text"]},
            ],
        }, 5)

        assert len(detail.tracklist) == 2
        assert detail.tracklist[0].position == "A1"
        assert detail.tracklist[0].artists == ["Artist"]
        assert detail.tracklist[1].position == ""
        assert detail.tracklist[1].title is None

    def test_detail_tolerates_malformed_formats(self):
        detail = parse_release_detail({
            "formats": ["CD", {"name": "Vinyl", "descriptions": "Reissue"}, {"name": "CD", "descriptions": ["Promo", 3]}],
        }, 5)

        assert [f.name for f in detail.formats] == ["Vinyl", "CD"]
        assert detail.formats[0].descriptions == ()
        assert detail.formats[1].descriptions == ("Promo",)

    def test_detail_non_list_tracklist_is_empty(self):
        assert parse_release_detail({"tracklist": {"A1": "Song"}}, 5).tracklist == []

    def test_detail_non_numeric_id_falls_back_to_requested_id(self):
        assert parse_release_detail({"id": "x"}, 42).id == 42
