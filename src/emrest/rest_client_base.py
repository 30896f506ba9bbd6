import re
from abc import ABC, abstractmethod
from importlib.metadata import version
from typing import Any, Mapping, Optional, Set
from urllib.parse import quote

_URI_VARIABLE = re.compile(r"\{([^{}/]+)\}")


def expand_uri(template: str, *uri_variables: Any) -> str:
    """Fill the ``{name}`` placeholders of a URI template.

    Values are taken in order from ``uri_variables``, or by name when a single
    mapping is given. Every value is percent-encoded.

    Raises:
        ValueError: If a placeholder has no value
    """
    if len(uri_variables) == 1 and isinstance(uri_variables[0], Mapping):
        variables = uri_variables[0]

        def by_name(match):
            name = match.group(1)
            if name not in variables:
                raise ValueError(f"Map has no value for '{name}'")
            return quote(str(variables[name]), safe="")

        return _URI_VARIABLE.sub(by_name, template)

    values = iter(uri_variables)

    def in_order(match):
        try:
            return quote(str(next(values)), safe="")
        except StopIteration:
            raise ValueError(
                f"Not enough variable values available to expand '{match.group(1)}'"
            ) from None

    return _URI_VARIABLE.sub(in_order, template)


class RestClientBase(ABC):
    """Abstract base class defining the interface for REST clients."""

    VALID_METHODS = {"GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS", "TRACE"}
    DEFAULT_TIMEOUT = 60

    @staticmethod
    def get_version() -> str:
        try:
            return version("emrest")
        except Exception:
            return "unknown"

    DEFAULT_USER_AGENT = f"emrest/{get_version.__func__()}"

    DEFAULT_HEADERS = {
        "Accept": "application/json",
        "Content-Type": "application/json",
        "User-Agent": DEFAULT_USER_AGENT,
    }

    @abstractmethod
    def __enter__(self):
        """Enter the context manager."""
        raise NotImplementedError("__enter__ must be implemented by subclass")

    @abstractmethod
    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit the context manager."""
        raise NotImplementedError("__exit__ must be implemented by subclass")

    def _validate_http_method(self, method: str) -> str:
        method = method.upper()
        if method not in self.VALID_METHODS:
            raise ValueError(f"Invalid HTTP method: {method}")
        return method

    def _validate_timeout(self, timeout: Optional[float]) -> None:
        """Validate timeout is a positive number."""
        if timeout is not None:
            if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
                raise ValueError("Timeout must be a positive number")
            if timeout <= 0:
                raise ValueError("Timeout must be a positive number")

    @abstractmethod
    def update_headers(self, headers: dict[str, str]) -> None:
        """Add or replace default request headers."""
        raise NotImplementedError("update_headers must be implemented by subclass")

    @abstractmethod
    def request(self, method: str, url: str, *uri_variables, **kwargs):
        """Send one request and return the raw response."""
        raise NotImplementedError("request must be implemented by subclass")

    @abstractmethod
    def get_for_entity(self, url: str, response_type, *uri_variables):
        """GET and wrap status, headers and body in a ResponseEntity."""
        raise NotImplementedError("get_for_entity must be implemented by subclass")

    @abstractmethod
    def get_for_object(self, url: str, response_type, *uri_variables):
        """GET and return the deserialized body, or None."""
        raise NotImplementedError("get_for_object must be implemented by subclass")

    @abstractmethod
    def post_for_object(self, url: str, body, response_type, *uri_variables):
        """POST and return the deserialized body, or None."""
        raise NotImplementedError("post_for_object must be implemented by subclass")

    @abstractmethod
    def post_for_location(self, url: str, body, *uri_variables) -> Optional[str]:
        """POST and return the Location header, or None."""
        raise NotImplementedError("post_for_location must be implemented by subclass")

    @abstractmethod
    def post_for_entity(self, url: str, body, response_type, *uri_variables, headers=None):
        """POST and wrap status, headers and body in a ResponseEntity."""
        raise NotImplementedError("post_for_entity must be implemented by subclass")

    @abstractmethod
    def put(self, url: str, body, *uri_variables) -> None:
        """PUT without reading the response body."""
        raise NotImplementedError("put must be implemented by subclass")

    @abstractmethod
    def exchange(self, url: str, method: str, body, response_type, *uri_variables, headers=None):
        """Send any method and wrap the response in a ResponseEntity."""
        raise NotImplementedError("exchange must be implemented by subclass")

    @abstractmethod
    def delete(self, url: str, *uri_variables) -> None:
        """DELETE without reading the response body."""
        raise NotImplementedError("delete must be implemented by subclass")

    @abstractmethod
    def head_for_headers(self, url: str, *uri_variables):
        """HEAD and return the response headers."""
        raise NotImplementedError("head_for_headers must be implemented by subclass")

    @abstractmethod
    def options_for_allow(self, url: str, *uri_variables) -> Set[str]:
        """OPTIONS and return the methods listed in the Allow header."""
        raise NotImplementedError("options_for_allow must be implemented by subclass")
