from typing import List, Optional, Set

from requests.structures import CaseInsensitiveDict

from .json_node import JsonNode, parse_tree
from .logging import DefaultLogger, Logger
from .models import Employee
from .response import ResponseEntity
from .rest_client_base import RestClientBase

RESOURCE_PATH = "/rest/employees"


class EmployeeRestClient:
    """Client for the employee resource of a REST service.

    Each method shows one call style of the underlying REST client against
    ``{host}:{port}/rest/employees``. Transport errors raised by the REST
    client reach the caller unchanged.
    """

    def __init__(
        self,
        rest_client: RestClientBase,
        host: str,
        port: int,
        logger: Optional[Logger] = None,
    ):
        """Initialize the employee client.

        Args:
            rest_client: REST client used for every request
            host: Host including the scheme, e.g. ``http://localhost``
            port: Port of the service
            logger: Optional logger instance
        """
        self.rest_client = rest_client
        self._request_uri = f"{host}:{port}{RESOURCE_PATH}"
        self.logger = logger or DefaultLogger(name="emrest-employee-client")

    @property
    def request_uri(self) -> str:
        return self._request_uri

    def fetch_entity(self, id: int) -> ResponseEntity[Employee]:
        """Request the employee with the given id via GET.

        Args:
            id: The id of the employee resource

        Returns:
            ResponseEntity with status code, headers and the Employee body
        """
        self.logger.debug(f"Fetching employee {id} as entity")
        return self.rest_client.get_for_entity(f"{self.request_uri}/{{id}}", Employee, id)

    def fetch_page(self, page: int, page_size: int) -> List[Employee]:
        """Request one page of employees via GET.

        Args:
            page: Zero-based page number
            page_size: Number of employees per page

        Returns:
            The employees of the page, an empty list if the body is empty

        Raises:
            ValueError: If page is negative or page_size is not positive
        """
        if page < 0:
            raise ValueError("Page must not be negative")
        if page_size < 1:
            raise ValueError("Page size must be greater than 0")

        self.logger.debug(f"Fetching employees page={page} page_size={page_size}")
        employees = self.rest_client.get_for_object(
            f"{self.request_uri}?page={{page}}&pageSize={{pageSize}}",
            List[Employee],
            {"page": page, "pageSize": page_size},
        )
        return list(employees) if employees is not None else []

    def fetch_object(self, id: int) -> Optional[Employee]:
        """Request the employee with the given id, or None if the body is empty."""
        self.logger.debug(f"Fetching employee {id} as object")
        return self.rest_client.get_for_object(f"{self.request_uri}/{{id}}", Employee, id)

    def fetch_as_json(self, id: int) -> JsonNode:
        """Request the employee with the given id as a generic JSON tree.

        Raises:
            ParseError: If the received text is not valid JSON
        """
        self.logger.debug(f"Fetching employee {id} as JSON tree")
        json_string = self.rest_client.get_for_object(f"{self.request_uri}/{{id}}", str, id)
        return parse_tree(json_string)

    def create_object(self, employee: Employee) -> Optional[Employee]:
        """Create an employee via POST and return the created employee."""
        self.logger.debug("Creating employee", employee=employee.to_json())
        return self.rest_client.post_for_object(self.request_uri, employee, Employee)

    def create_location(self, employee: Employee) -> Optional[str]:
        """Create an employee via POST and return its Location URI."""
        self.logger.debug("Creating employee for location", employee=employee.to_json())
        return self.rest_client.post_for_location(self.request_uri, employee)

    def create_entity(self, employee: Employee) -> ResponseEntity[Employee]:
        """Create an employee via POST with custom request headers.

        Returns:
            ResponseEntity with status code, headers and the created Employee
        """
        headers = {
            "User-Agent": "EmployeeRestClient demo class",
            "Accept-Language": "en-US",
        }
        self.logger.debug("Creating employee as entity", employee=employee.to_json())
        return self.rest_client.post_for_entity(
            self.request_uri, employee, Employee, headers=headers
        )

    def replace(self, employee: Employee) -> None:
        """Update an employee via PUT."""
        self.logger.debug(f"Replacing employee {employee.id}")
        self.rest_client.put(f"{self.request_uri}/{{id}}", employee, employee.id)

    def replace_with_response(self, employee: Employee) -> ResponseEntity[Employee]:
        """Update an employee via a generic PUT exchange.

        Returns:
            ResponseEntity with status code, headers and the updated Employee
        """
        self.logger.debug(f"Replacing employee {employee.id} with exchange")
        return self.rest_client.exchange(
            f"{self.request_uri}/{{id}}", "PUT", employee, Employee, employee.id
        )

    def remove(self, id: int) -> None:
        """Delete an employee via DELETE."""
        self.logger.debug(f"Removing employee {id}")
        self.rest_client.delete(f"{self.request_uri}/{{id}}", id)

    def remove_with_response(self, id: int) -> ResponseEntity:
        """Delete an employee via a generic DELETE exchange.

        Returns:
            ResponseEntity with status code and headers, without a body
        """
        self.logger.debug(f"Removing employee {id} with exchange")
        return self.rest_client.exchange(f"{self.request_uri}/{{id}}", "DELETE", None, None, id)

    def headers(self) -> CaseInsensitiveDict:
        """Request the resource headers via HEAD."""
        self.logger.debug("Requesting resource headers")
        return self.rest_client.head_for_headers(self.request_uri)

    def allowed_methods(self, id: int) -> Set[str]:
        """Request the allowed HTTP methods for an employee via OPTIONS."""
        self.logger.debug(f"Requesting allowed methods for employee {id}")
        return self.rest_client.options_for_allow(f"{self.request_uri}/{{id}}", id)
