from typing import Generic, Optional, TypeVar

import requests
from pydantic import BaseModel, ConfigDict
from requests.structures import CaseInsensitiveDict

T = TypeVar("T")


class ResponseEntity(BaseModel, Generic[T]):
    """HTTP status, headers and deserialized body of a single response."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    status_code: int
    headers: CaseInsensitiveDict
    body: Optional[T] = None

    @classmethod
    def from_response(cls, response: requests.Response, body: Optional[T] = None) -> "ResponseEntity":
        return cls(
            status_code=response.status_code,
            headers=CaseInsensitiveDict(response.headers),
            body=body,
        )

    @property
    def has_body(self) -> bool:
        return self.body is not None

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300
