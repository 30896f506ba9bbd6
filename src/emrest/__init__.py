from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("emrest")
except PackageNotFoundError:
    __version__ = "unknown"

from .employee_client import EmployeeRestClient
from .exceptions import ParseError, RestClientError, TransportError
from .json_node import JsonNode, JsonNodeType, parse_tree
from .models import Employee
from .response import ResponseEntity
from .rest_client import RestClient

__all__ = [
    "Employee",
    "EmployeeRestClient",
    "JsonNode",
    "JsonNodeType",
    "ParseError",
    "ResponseEntity",
    "RestClient",
    "RestClientError",
    "TransportError",
    "parse_tree",
]
