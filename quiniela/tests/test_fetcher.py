import asyncio
import unittest
from unittest import mock

import requests

from quiniela.config import HttpSettings
from quiniela.fetcher import HtmlFetcher


def _response(text: str = "", content: bytes = b"", error: Exception = None) -> mock.Mock:
    resp = mock.Mock()
    resp.text = text
    resp.content = content or text.encode("utf-8")
    if error is not None:
        resp.raise_for_status.side_effect = error
    return resp


def _session(cookies, responses) -> mock.MagicMock:
    session = mock.MagicMock()
    session.__enter__.return_value = session
    session.__exit__.return_value = False
    session.cookies = cookies
    session.get.side_effect = responses
    return session


class FetchTextTests(unittest.TestCase):
    def setUp(self) -> None:
        self.fetcher = HtmlFetcher(HttpSettings(user_agent="Mozilla/5.0 test", timeout_seconds=3))

    @mock.patch("quiniela.fetcher.requests.get")
    def test_returns_body_with_browser_headers(self, mock_get) -> None:
        mock_get.return_value = _response("<html>ok</html>")

        text = asyncio.run(self.fetcher.fetch_text("https://example.test/"))

        self.assertEqual(text, "<html>ok</html>")
        _, kwargs = mock_get.call_args
        self.assertEqual(kwargs["headers"]["User-Agent"], "Mozilla/5.0 test")
        self.assertEqual(kwargs["timeout"], 3)

    @mock.patch("quiniela.fetcher.requests.get")
    def test_transport_errors_become_none(self, mock_get) -> None:
        for error in (requests.ConnectionError("dns"), requests.Timeout("slow")):
            mock_get.side_effect = error
            with self.assertLogs("quiniela.fetcher", level="WARNING"):
                self.assertIsNone(asyncio.run(self.fetcher.fetch_text("https://example.test/")))

    @mock.patch("quiniela.fetcher.requests.get")
    def test_error_status_becomes_none(self, mock_get) -> None:
        mock_get.return_value = _response("busy", error=requests.HTTPError("503"))

        with self.assertLogs("quiniela.fetcher", level="WARNING"):
            self.assertIsNone(asyncio.run(self.fetcher.fetch_text("https://example.test/")))


class FetchWithSessionTests(unittest.TestCase):
    landing = "https://fallback.test/index.php"
    ajax = "https://fallback.test/ajax.php"

    def _fetcher(self, session: mock.MagicMock) -> HtmlFetcher:
        return HtmlFetcher(HttpSettings(timeout_seconds=4), session_factory=lambda: session)

    def test_forwards_referer_and_decodes_latin1(self) -> None:
        body = "<td>Córdoba</td>".encode("latin-1")
        session = _session({"PHPSESSID": "abc"}, [_response("landing"), _response(content=body)])

        text = asyncio.run(self._fetcher(session).fetch_with_session(self.landing, self.ajax))

        self.assertEqual(text, "<td>Córdoba</td>")
        self.assertEqual(session.get.call_count, 2)
        ajax_call = session.get.call_args_list[1]
        self.assertEqual(ajax_call.args[0], self.ajax)
        self.assertEqual(ajax_call.kwargs["headers"]["Referer"], self.landing)
        self.assertEqual(ajax_call.kwargs["timeout"], 4)

    def test_missing_cookies_still_fetches(self) -> None:
        session = _session({}, [_response("landing"), _response(content=b"<table></table>")])

        with self.assertLogs("quiniela.fetcher", level="WARNING") as logs:
            text = asyncio.run(self._fetcher(session).fetch_with_session(self.landing, self.ajax))

        self.assertEqual(text, "<table></table>")
        self.assertTrue(any("No session cookies" in line for line in logs.output))

    def test_landing_failure_still_fetches(self) -> None:
        session = _session({}, [requests.ConnectionError("down"), _response(content=b"<table></table>")])

        with self.assertLogs("quiniela.fetcher", level="WARNING"):
            text = asyncio.run(self._fetcher(session).fetch_with_session(self.landing, self.ajax))

        self.assertEqual(text, "<table></table>")

    def test_ajax_failure_becomes_none(self) -> None:
        session = _session({"PHPSESSID": "abc"}, [_response("landing"), requests.Timeout("slow")])

        with self.assertLogs("quiniela.fetcher", level="WARNING"):
            text = asyncio.run(self._fetcher(session).fetch_with_session(self.landing, self.ajax))

        self.assertIsNone(text)

    def test_unknown_encoding_becomes_none(self) -> None:
        session = _session({"PHPSESSID": "abc"}, [_response("landing"), _response(content=b"<table></table>")])

        with self.assertLogs("quiniela.fetcher", level="WARNING") as logs:
            text = asyncio.run(self._fetcher(session).fetch_with_session(self.landing, self.ajax, "no-such-codec"))

        self.assertIsNone(text)
        self.assertTrue(any("Unknown encoding" in line for line in logs.output))


if __name__ == "__main__":
    unittest.main()
