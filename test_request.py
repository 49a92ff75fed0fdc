import unittest
from unittest.mock import patch, Mock

import requests

from coingecko.envelope import Envelope
from coingecko.errors import InvalidRequestError, ResponseParseError
from coingecko.request import (
    RequestOptions,
    build_request_options,
    encode_query,
    parse_response,
    perform_request,
)


def fake_response(status_code=200, reason="OK", body=b'{"a": 1}'):
    return Mock(status_code=status_code, reason=reason, content=body)


class TestBuildRequestOptions(unittest.TestCase):

    def test_prefixes_version_and_uppercases_method(self):
        options = build_request_options("get", "/ping")
        self.assertEqual(options, RequestOptions(path="/api/v3/ping", method="GET",
                                                 host="api.coingecko.com", port=443))

    def test_empty_or_missing_params_leave_no_query_string(self):
        self.assertEqual(build_request_options("GET", "/global").path, "/api/v3/global")
        self.assertEqual(build_request_options("GET", "/global", {}).path, "/api/v3/global")
        self.assertEqual(build_request_options("GET", "/global", "page=2").path, "/api/v3/global")

    def test_query_keeps_mapping_order(self):
        options = build_request_options("GET", "/coins/markets", {"vs_currency": "eur", "page": 2, "per_page": 50})
        self.assertEqual(options.path, "/api/v3/coins/markets?vs_currency=eur&page=2&per_page=50")

    def test_url_uses_host(self):
        options = build_request_options("GET", "/ping", host="pro-api.coingecko.com")
        self.assertEqual(options.url, "https://pro-api.coingecko.com/api/v3/ping")


class TestEncodeQuery(unittest.TestCase):

    def test_percent_encodes_keys_and_values(self):
        self.assertEqual(encode_query({"ids": "bitcoin,ethereum"}), "ids=bitcoin%2Cethereum")
        self.assertEqual(encode_query({"type": "Meet up"}), "type=Meet%20up")
        self.assertEqual(encode_query({"a b": "x/y"}), "a%20b=x%2Fy")

    def test_booleans_are_lowercase(self):
        self.assertEqual(encode_query({"sparkline": False, "tickers": True}), "sparkline=false&tickers=true")

    def test_none_values_encode_as_empty(self):
        self.assertEqual(encode_query({"page": None, "per_page": 10}), "page=&per_page=10")

    def test_builder_keeps_none_valued_keys(self):
        options = build_request_options("GET", "/coins/markets", {"vs_currency": "usd", "category": None, "page": 2})
        self.assertEqual(options.path, "/api/v3/coins/markets?vs_currency=usd&category=&page=2")

    def test_list_values_repeat_the_key(self):
        self.assertEqual(encode_query({"id": ["a", "b"]}), "id=a&id=b")


class TestParseResponse(unittest.TestCase):

    def test_success_envelope(self):
        envelope = parse_response(200, "OK", '{"a":1}')
        self.assertEqual(envelope, Envelope(success=True, message="OK", code=200, data={"a": 1}))

    def test_http_error_is_returned_not_raised(self):
        envelope = parse_response(404, "Not Found", '{"error": "coin not found"}')
        self.assertFalse(envelope.success)
        self.assertEqual(envelope.code, 404)
        self.assertEqual(envelope.data, {"error": "coin not found"})

    def test_status_range_bounds(self):
        self.assertTrue(parse_response(299, "", "[]").success)
        self.assertFalse(parse_response(300, "", "[]").success)
        self.assertFalse(parse_response(199, "", "[]").success)

    def test_html_page_raises_invalid_request(self):
        with self.assertRaises(InvalidRequestError) as ctx:
            parse_response(200, "OK", "<!DOCTYPE html><html><body>oops</body></html>")
        self.assertEqual(ctx.exception.status_code, 200)

    def test_lowercase_html_doctype_also_raises(self):
        with self.assertRaises(InvalidRequestError):
            parse_response(403, "Forbidden", "\n<!doctype html>\n<html></html>")

    def test_invalid_json_raises_parse_error(self):
        with self.assertRaises(ResponseParseError) as ctx:
            parse_response(200, "OK", "not json")
        self.assertEqual(ctx.exception.body, "not json")
        self.assertIsInstance(ctx.exception, ValueError)

    def test_to_dict(self):
        envelope = parse_response(200, "OK", '{"gecko_says": "(V3) To the Moon!"}')
        self.assertEqual(envelope.to_dict(), {
            "success": True,
            "message": "OK",
            "code": 200,
            "data": {"gecko_says": "(V3) To the Moon!"},
        })


class TestPerformRequest(unittest.TestCase):

    def test_uses_session_and_returns_envelope(self):
        session = Mock()
        session.request.return_value = fake_response()
        options = build_request_options("GET", "/ping")

        envelope = perform_request(options, session=session, timeout=5)

        session.request.assert_called_once_with(
            "GET", "https://api.coingecko.com/api/v3/ping",
            headers={"Accept": "application/json"}, timeout=5,
        )
        self.assertEqual(envelope, Envelope(True, "OK", 200, {"a": 1}))

    @patch("coingecko.request.requests.request")
    def test_without_session_uses_module_level_request(self, mock_request):
        mock_request.return_value = fake_response(404, "Not Found", b'{"error": "x"}')
        envelope = perform_request(build_request_options("GET", "/coins/nope"))
        self.assertFalse(envelope.success)
        self.assertEqual(envelope.code, 404)
        mock_request.assert_called_once()

    def test_transport_error_propagates(self):
        session = Mock()
        session.request.side_effect = requests.ConnectionError("connection refused")
        with self.assertRaises(requests.ConnectionError):
            perform_request(build_request_options("GET", "/ping"), session=session)

    def test_body_is_decoded_as_utf8(self):
        session = Mock()
        session.request.return_value = fake_response(body='{"name": "Ðogecoin"}'.encode("utf-8"))
        envelope = perform_request(build_request_options("GET", "/coins/dogecoin"), session=session)
        self.assertEqual(envelope.data, {"name": "Ðogecoin"})

    def test_html_body_never_yields_envelope(self):
        session = Mock()
        session.request.return_value = fake_response(body=b"<!DOCTYPE html><html></html>")
        with self.assertRaises(InvalidRequestError):
            perform_request(build_request_options("GET", "/coins/markets"), session=session)


if __name__ == '__main__':
    unittest.main()
