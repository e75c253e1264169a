import unittest
from unittest.mock import MagicMock, patch

import requests

from redirector.checks.http_probe import HttpProbe
from redirector.checks.results import CheckSummary, ProbeResult


def _response(status_code: int, chunks=(b"ok",), error: Exception | None = None) -> MagicMock:
    resp = MagicMock(status_code=status_code)
    resp.__enter__.return_value = resp
    if error is None:
        resp.iter_content.return_value = iter(chunks)
    else:
        resp.iter_content.side_effect = error
    return resp


class HttpProbeTests(unittest.TestCase):
    def setUp(self) -> None:
        self.http = HttpProbe(max_connections=4, timeout_s=0.5)
        self.addCleanup(self.http.close)

    def test_get_uses_timeout_and_streams_the_body(self) -> None:
        resp = _response(200, chunks=(b"a", b"b", b"c"))
        with patch.object(self.http.session, "get", return_value=resp) as mock_get:
            result = self.http.probe("http://example.local/")

        mock_get.assert_called_once_with(
            "http://example.local/", timeout=(0.5, 0.5), stream=True
        )
        resp.iter_content.assert_called_once()
        resp.__exit__.assert_called_once()
        self.assertEqual(result.status_code, 200)
        self.assertIsNone(result.error)
        self.assertFalse(result.failed)

    def test_any_status_is_a_transport_success(self) -> None:
        with patch.object(self.http.session, "get", return_value=_response(404)):
            result = self.http.probe("http://example.local/missing")

        self.assertEqual(result.status_code, 404)
        self.assertIsNone(result.error)
        self.assertIsNone(result.error_kind)
        self.assertTrue(result.failed)

    def test_timeout_is_a_transport_error(self) -> None:
        with patch.object(
            self.http.session, "get", side_effect=requests.Timeout("timed out")
        ):
            result = self.http.probe("http://example.local/slow")

        self.assertIsNone(result.status_code)
        self.assertEqual(result.error_kind, "transport")
        self.assertIn("timed out", result.error)
        self.assertTrue(result.failed)

    def test_missing_scheme_is_a_transport_error(self) -> None:
        result = self.http.probe("www.example.com")

        self.assertIsNone(result.status_code)
        self.assertEqual(result.error_kind, "transport")

    def test_body_read_failure_is_reported_separately(self) -> None:
        resp = _response(200, error=requests.ConnectionError("reset by peer"))
        with patch.object(self.http.session, "get", return_value=resp):
            result = self.http.probe("http://example.local/")

        self.assertEqual(result.error_kind, "body_read")
        self.assertIn("body discard error", result.error)
        self.assertEqual(result.status_code, 200)
        self.assertTrue(result.failed)
        resp.__exit__.assert_called_once()

    def test_body_past_the_deadline_is_a_transport_error(self) -> None:
        resp = _response(200, chunks=(b"a", b"b", b"c"))
        with patch.object(self.http.session, "get", return_value=resp), patch(
            "redirector.checks.http_probe.time.perf_counter",
            side_effect=[0.0, 0.1, 0.6, 0.6],
        ):
            result = self.http.probe("http://example.local/trickle")

        self.assertIsNone(result.status_code)
        self.assertEqual(result.error_kind, "transport")
        self.assertIn("timed out", result.error)
        self.assertEqual(result.latency_ms, 600)
        self.assertTrue(result.failed)
        resp.__exit__.assert_called_once()


class CheckSummaryTests(unittest.TestCase):
    def test_only_status_200_without_error_is_healthy(self) -> None:
        summary = CheckSummary()
        for result in (
            ProbeResult(url="a", status_code=200),
            ProbeResult(url="b", status_code=301),
            ProbeResult(url="c", status_code=204),
            ProbeResult(url="d", error="dns", error_kind="transport"),
            ProbeResult(url="e", status_code=200, error="short body", error_kind="body_read"),
        ):
            summary.add(result)

        self.assertEqual(summary.processed, 5)
        self.assertEqual(summary.failed, 4)


if __name__ == "__main__":
    unittest.main()
