# coingecko/request.py
import json
import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple
from urllib.parse import quote, urlencode

import requests

from .config import DEFAULT_TIMEOUT
from .constants import HOST, HTML_DOCTYPE, PATH_PREFIX, PORT
from .envelope import Envelope
from .errors import InvalidRequestError, ResponseParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestOptions:
    path: str
    method: str
    host: str = HOST
    port: int = PORT

    @property
    def url(self) -> str:
        if self.port == PORT:
            return f"https://{self.host}{self.path}"
        return f"https://{self.host}:{self.port}{self.path}"


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_query(params: Mapping[str, Any]) -> str:
    """Serializes a mapping into percent-encoded ``key=value`` pairs joined by ``&``.

    Keys keep the mapping's order. ``None`` encodes as an empty value
    (``key=``) and list or tuple values repeat the key once per item.
    """
    pairs: List[Tuple[str, str]] = []
    for key, value in params.items():
        items = value if isinstance(value, (list, tuple)) else [value]
        for item in items:
            pairs.append((str(key), _as_text(item)))
    return urlencode(pairs, quote_via=quote)


def build_request_options(method: str, path: str, params: Optional[Mapping[str, Any]] = None,
                          host: str = HOST) -> RequestOptions:
    """Builds the options of one request: versioned path plus query string."""
    method = method.upper()
    query = encode_query(params) if isinstance(params, Mapping) else ""
    full_path = f"{PATH_PREFIX}{path}"
    if query:
        full_path = f"{full_path}?{query}"
    return RequestOptions(path=full_path, method=method, host=host, port=PORT)


def parse_response(status_code: int, reason: str, body: str) -> Envelope:
    """Decodes a response body and wraps it, whatever the status code."""
    if body.lstrip()[:len(HTML_DOCTYPE)].lower() == HTML_DOCTYPE:
        logger.error(f"Received an HTML page instead of JSON (HTTP {status_code})")
        raise InvalidRequestError(
            "There was a problem with your request. The parameter(s) you gave are missing or incorrect.",
            status_code=status_code,
        )
    try:
        data = json.loads(body)
    except ValueError as e:
        logger.error(f"Could not decode response body as JSON (HTTP {status_code}): {e}")
        raise ResponseParseError(f"Invalid JSON in response: {e}", status_code=status_code, body=body) from e

    envelope = Envelope.from_status(status_code, reason, data)
    if not envelope.success:
        logger.warning(f"CoinGecko answered HTTP {status_code} {reason}")
    return envelope


def perform_request(options: RequestOptions, session: Optional[requests.Session] = None,
                    timeout: float = DEFAULT_TIMEOUT) -> Envelope:
    """Performs the HTTPS call described by ``options``.

    Transport errors (``requests.RequestException``) propagate unchanged.
    """
    http = session if session is not None else requests
    logger.debug(f"{options.method} {options.url}")
    resp = http.request(
        options.method,
        options.url,
        headers={"Accept": "application/json"},
        timeout=timeout,
    )
    body = resp.content.decode("utf-8", errors="replace")
    return parse_response(resp.status_code, resp.reason, body)
