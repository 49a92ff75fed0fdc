# coingecko/errors.py
from typing import Optional


class CoinGeckoError(Exception):
    """Base class for errors raised by this library."""


class InvalidParameterError(CoinGeckoError, ValueError):
    """A required argument is absent, empty or of the wrong shape."""

    def __init__(self, message: str, parameter: Optional[str] = None):
        super().__init__(message)
        self.parameter = parameter


class MissingParameterError(InvalidParameterError):
    """A required key is missing from the params mapping."""


class InvalidRequestError(CoinGeckoError, RuntimeError):
    """The gateway answered with an HTML page instead of JSON."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ResponseParseError(CoinGeckoError, ValueError):
    """The response body could not be decoded as JSON."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
