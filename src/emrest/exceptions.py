"""Errors raised by the emrest clients."""

import requests

# Connection failures, timeouts and non-2xx statuses are raised by requests
# and reach the caller unchanged.
TransportError = requests.RequestException


class RestClientError(Exception):
    """Base exception for REST client errors."""

    pass


class ParseError(RestClientError):
    """Raised when a response body cannot be parsed as JSON."""

    pass
