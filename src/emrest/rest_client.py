import threading
from functools import lru_cache
from typing import Any, Dict, Optional, Set

import requests
from pydantic import BaseModel, ConfigDict, PrivateAttr, TypeAdapter
from requests.structures import CaseInsensitiveDict

from .logging import DefaultLogger, Logger
from .response import ResponseEntity
from .rest_client_base import RestClientBase, expand_uri


@lru_cache(maxsize=None)
def _type_adapter(response_type: Any) -> TypeAdapter:
    return TypeAdapter(response_type)


class RestClient(BaseModel, RestClientBase):
    """Synchronous REST client built on a ``requests.Session``.

    Every call is a single blocking round-trip. Non-2xx responses raise
    ``requests.HTTPError``; connection errors and timeouts are raised by
    requests unchanged. There are no retries.
    """

    timeout: Optional[float] = 60
    session: Optional[requests.Session] = None
    headers: Optional[Dict[str, str]] = None
    logger: Optional[Logger] = None
    _owns_session: bool = False
    _session_lock: Any = PrivateAttr(default_factory=threading.Lock)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def __init__(self, **data):
        if "timeout" in data:
            self._validate_timeout(data["timeout"])

        super().__init__(**data)
        default_headers = self.DEFAULT_HEADERS.copy()
        if self.headers:
            default_headers.update(self.headers)
        self.headers = default_headers

        if self.logger is None:
            self.logger = DefaultLogger(name="emrest-rest-client")

    def __enter__(self) -> "RestClient":
        """Open a session unless one was supplied by the caller."""
        self._get_session()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Close the session if this client created it."""
        with self._session_lock:
            try:
                if self.session is not None and self._owns_session:
                    self.session.close()
                    self.logger.debug("Closed HTTP session")
            finally:
                if self._owns_session:
                    self.session = None
                    self._owns_session = False

    def close(self) -> None:
        self.__exit__(None, None, None)

    def _get_session(self) -> requests.Session:
        # Concurrent first calls must share one session
        with self._session_lock:
            if self.session is None:
                self.session = requests.Session()
                self._owns_session = True
                self.logger.debug("Opened HTTP session")
            return self.session

    @staticmethod
    def _serialize_body(body: Any) -> Any:
        if isinstance(body, BaseModel):
            return body.model_dump(mode="json", by_alias=True)
        return body

    @staticmethod
    def _read_body(response: requests.Response, response_type: Any) -> Any:
        """Deserialize the response body into ``response_type``.

        ``None`` skips the body, ``str`` returns the raw text and an empty body
        reads as ``None``.
        """
        if response_type is None or not response.content:
            return None
        if response_type is str:
            return response.text
        # A literal JSON null is an absent body as well
        return _type_adapter(Optional[response_type]).validate_json(response.content)

    def _to_entity(self, response: requests.Response, response_type: Any) -> ResponseEntity:
        entity_cls = ResponseEntity[response_type] if response_type is not None else ResponseEntity
        return entity_cls.from_response(response, self._read_body(response, response_type))

    def request(
        self,
        method: str,
        url: str,
        *uri_variables: Any,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> requests.Response:
        """Make an HTTP request.

        Args:
            method: HTTP method to use
            url: URL template, ``{name}`` placeholders are filled from uri_variables
            *uri_variables: Values for the placeholders, positional or one mapping
            body: Request body, pydantic models are sent with their JSON aliases
            headers: Headers to send on top of the client defaults
            timeout: Request timeout in seconds, defaults to the client timeout

        Returns:
            The ``requests.Response`` of a successful (2xx) exchange

        Raises:
            requests.HTTPError: If the server answers with a non-2xx status
            requests.RequestException: On connection errors and timeouts
        """
        method = self._validate_http_method(method)
        self._validate_timeout(timeout)
        request_url = expand_uri(url, *uri_variables)

        merged_headers = self.headers.copy()
        if headers:
            merged_headers.update(headers)

        payload = self._serialize_body(body)

        self.logger.debug(
            f"Making {method} request to {request_url} with "
            f"headers={merged_headers}, data={payload}"
        )

        try:
            response = self._get_session().request(
                method=method,
                url=request_url,
                json=payload,
                headers=merged_headers,
                timeout=timeout or self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            self.logger.error(f"{method} request to {request_url} failed: {e}")
            raise

        self.logger.debug(f"Received response: status={response.status_code}")
        return response

    def get_for_entity(self, url: str, response_type: Any, *uri_variables: Any) -> ResponseEntity:
        response = self.request("GET", url, *uri_variables)
        return self._to_entity(response, response_type)

    def get_for_object(self, url: str, response_type: Any, *uri_variables: Any) -> Any:
        response = self.request("GET", url, *uri_variables)
        return self._read_body(response, response_type)

    def post_for_object(self, url: str, body: Any, response_type: Any, *uri_variables: Any) -> Any:
        response = self.request("POST", url, *uri_variables, body=body)
        return self._read_body(response, response_type)

    def post_for_location(self, url: str, body: Any, *uri_variables: Any) -> Optional[str]:
        response = self.request("POST", url, *uri_variables, body=body)
        return response.headers.get("Location")

    def post_for_entity(
        self,
        url: str,
        body: Any,
        response_type: Any,
        *uri_variables: Any,
        headers: Optional[Dict[str, str]] = None,
    ) -> ResponseEntity:
        response = self.request("POST", url, *uri_variables, body=body, headers=headers)
        return self._to_entity(response, response_type)

    def put(self, url: str, body: Any, *uri_variables: Any) -> None:
        self.request("PUT", url, *uri_variables, body=body)

    def exchange(
        self,
        url: str,
        method: str,
        body: Any,
        response_type: Any,
        *uri_variables: Any,
        headers: Optional[Dict[str, str]] = None,
    ) -> ResponseEntity:
        """Send a request with any method and wrap the full response.

        Args:
            url: URL template
            method: HTTP method to use
            body: Request body, or None
            response_type: Type to deserialize the body into, or None to skip it
            *uri_variables: Values for the URL placeholders
            headers: Extra request headers

        Returns:
            ResponseEntity with status code, headers and the typed body
        """
        response = self.request(method, url, *uri_variables, body=body, headers=headers)
        return self._to_entity(response, response_type)

    def delete(self, url: str, *uri_variables: Any) -> None:
        self.request("DELETE", url, *uri_variables)

    def head_for_headers(self, url: str, *uri_variables: Any) -> CaseInsensitiveDict:
        response = self.request("HEAD", url, *uri_variables)
        return CaseInsensitiveDict(response.headers)

    def options_for_allow(self, url: str, *uri_variables: Any) -> Set[str]:
        """Return the methods in the Allow header, ignoring unknown tokens."""
        response = self.request("OPTIONS", url, *uri_variables)
        allow = response.headers.get("Allow", "")
        methods = {token.strip().upper() for token in allow.split(",") if token.strip()}
        return methods & self.VALID_METHODS

    def update_headers(self, headers: Dict[str, str]) -> None:
        """Update the default headers for this client.

        Args:
            headers: New headers to add or update
        """
        if not self.headers:
            self.headers = {}
        self.headers.update(headers)
        self.logger.debug(f"Updated headers: {headers}")

    def update_timeout(self, timeout: float) -> None:
        """Update the timeout for this client.

        Args:
            timeout: New timeout value in seconds
        """
        if timeout is None:
            raise ValueError("Timeout must be a positive number")
        self._validate_timeout(timeout)
        self.timeout = timeout
        self.logger.debug(f"Updated timeout to {timeout}s")
