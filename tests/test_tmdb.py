"""
Tests for the server TMDb client and the client-side TMDb helpers.
"""

import unittest
from unittest.mock import MagicMock, patch

import requests

from server.core.tmdb import (
    TMDbClient,
    TMDbError,
    TMDbNotFound,
    TMDbAuthError,
    TMDbConnectionError,
)
from app.services import tmdb as client_tmdb


def fake_response(status_code, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload or {}
    return response


class TestTMDbClient(unittest.TestCase):

    def setUp(self):
        self.http = MagicMock()
        self.client = TMDbClient(api_key="k", base_url="https://tmdb.test/3/", timeout=5, session=self.http)

    def test_get_adds_api_key(self):
        self.http.get.return_value = fake_response(200, {"results": []})

        data = self.client.search_movies("alien", page=2)

        self.assertEqual(data, {"results": []})
        self.http.get.assert_called_once_with(
            "https://tmdb.test/3/search/movie",
            params={"query": "alien", "page": 2, "api_key": "k"},
            timeout=5,
        )

    def test_endpoint_paths(self):
        self.http.get.return_value = fake_response(200)
        self.client.videos(550)
        self.client.trending("day")
        urls = [c.args[0] for c in self.http.get.call_args_list]
        self.assertEqual(urls, [
            "https://tmdb.test/3/movie/550/videos",
            "https://tmdb.test/3/trending/movie/day",
        ])

    def test_status_mapping(self):
        cases = [(404, TMDbNotFound), (401, TMDbAuthError), (503, TMDbError), (429, TMDbError)]
        for status, error in cases:
            self.http.get.return_value = fake_response(status)
            with self.assertRaises(error):
                self.client.movie_details(1)

    def test_network_failures(self):
        self.http.get.side_effect = requests.exceptions.Timeout()
        with self.assertRaises(TMDbConnectionError):
            self.client.popular()

        self.http.get.side_effect = requests.exceptions.ConnectionError()
        with self.assertRaises(TMDbConnectionError):
            self.client.popular()

    def test_non_json_body(self):
        response = fake_response(200)
        response.json.side_effect = ValueError("Expecting value")
        self.http.get.return_value = response

        with self.assertRaises(TMDbError):
            self.client.genres()


class TestClientHelpers(unittest.TestCase):

    def test_pick_trailer_prefers_youtube_trailer(self):
        listing = {"results": [
            {"key": "t1", "site": "Vimeo", "type": "Trailer"},
            {"key": "c1", "site": "YouTube", "type": "Clip"},
            {"key": "t2", "site": "YouTube", "type": "Trailer"},
        ]}
        self.assertEqual(client_tmdb.pick_trailer(listing)["key"], "t2")

    def test_pick_trailer_falls_back(self):
        listing = {"results": [{"key": "c1", "site": "YouTube", "type": "Clip"}]}
        self.assertEqual(client_tmdb.pick_trailer(listing)["key"], "c1")
        self.assertIsNone(client_tmdb.pick_trailer({"results": []}))
        self.assertIsNone(client_tmdb.pick_trailer(None))

    def test_urls(self):
        self.assertEqual(
            client_tmdb.youtube_url({"key": "abc", "site": "YouTube"}),
            "https://www.youtube.com/watch?v=abc",
        )
        self.assertIsNone(client_tmdb.youtube_url({"key": "abc", "site": "Vimeo"}))
        self.assertTrue(client_tmdb.poster_url("/p.jpg").endswith("w500/p.jpg"))
        self.assertIsNone(client_tmdb.poster_url(None))

    @patch("app.services.tmdb.requests.get")
    def test_client_calls_tmdb_directly(self, mock_get):
        mock_get.return_value = fake_response(200, {"results": [{"key": "abc"}]})

        self.assertEqual(client_tmdb.videos(550), {"results": [{"key": "abc"}]})
        client_tmdb.recommendations(550, page=2)

        first, second = mock_get.call_args_list
        self.assertTrue(first.args[0].endswith("/movie/550/videos"))
        self.assertIn("api_key", first.kwargs["params"])
        self.assertTrue(second.args[0].endswith("/movie/550/recommendations"))
        self.assertEqual(second.kwargs["params"]["page"], 2)

    @patch("app.services.tmdb.requests.get")
    def test_client_errors_become_error_dicts(self, mock_get):
        mock_get.return_value = fake_response(500)
        self.assertIn("error", client_tmdb.videos(1))

        mock_get.side_effect = requests.ConnectionError("down")
        self.assertIn("error", client_tmdb.recommendations(1))


if __name__ == '__main__':
    unittest.main()
