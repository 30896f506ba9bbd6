from typing import List
from unittest.mock import MagicMock

import pytest
import requests

from emrest.logging import Logger
from emrest.models import Employee
from emrest.response import ResponseEntity
from emrest.rest_client import RestClient

BASE_URL = "http://localhost:8080/rest/employees"


class TestRestClientInitialization:
    def test_init_with_defaults(self):
        client = RestClient()
        assert client.timeout == 60
        assert client.session is None
        assert client.headers == RestClient.DEFAULT_HEADERS.copy()
        assert isinstance(client.logger, Logger)

    def test_init_with_custom_values(self):
        custom_headers = {"X-Custom-Header": "value"}
        session = requests.Session()

        client = RestClient(timeout=30, headers=custom_headers, session=session)

        assert client.timeout == 30
        assert client.session is session

        # Headers should be merged with defaults
        for key, value in RestClient.DEFAULT_HEADERS.items():
            assert client.headers[key] == value
        assert client.headers["X-Custom-Header"] == "value"

    def test_custom_headers_override_defaults(self):
        client = RestClient(headers={"Accept": "text/plain"})
        assert client.headers["Accept"] == "text/plain"
        assert client.headers["Content-Type"] == "application/json"

    def test_default_headers_are_not_shared(self):
        client = RestClient()
        client.update_headers({"X-Only-Here": "1"})
        assert "X-Only-Here" not in RestClient.DEFAULT_HEADERS
        assert "X-Only-Here" not in RestClient().headers

    def test_custom_logger(self):
        logger = MagicMock(spec=Logger)
        client = RestClient(logger=logger)
        assert client.logger is logger


class TestRestClientValidation:
    def test_validate_timeout_valid(self):
        assert RestClient(timeout=10).timeout == 10
        assert RestClient(timeout=0.5).timeout == 0.5

    def test_validate_timeout_invalid(self):
        with pytest.raises(ValueError) as excinfo:
            RestClient(timeout=0)
        assert "Timeout must be a positive number" in str(excinfo.value)

        with pytest.raises(ValueError):
            RestClient(timeout=-1)

        with pytest.raises(ValueError):
            RestClient(timeout="invalid")

    def test_request_with_invalid_method(self, rest_client, mock):
        with pytest.raises(ValueError) as excinfo:
            rest_client.request("INVALID", BASE_URL)
        assert "Invalid HTTP method" in str(excinfo.value)
        assert not mock.called

    def test_request_method_is_case_insensitive(self, rest_client, mock):
        mock.get(BASE_URL, json=[])
        rest_client.request("get", BASE_URL)
        assert mock.last_request.method == "GET"


class TestRestClientRequests:
    def test_request_sends_default_headers(self, rest_client, mock):
        mock.get(BASE_URL, json=[])

        rest_client.request("GET", BASE_URL)

        sent = mock.last_request.headers
        assert sent["Accept"] == "application/json"
        assert sent["Content-Type"] == "application/json"
        assert sent["User-Agent"].startswith("emrest/")

    def test_request_headers_override_defaults(self, rest_client, mock):
        mock.get(BASE_URL, json=[])

        rest_client.request("GET", BASE_URL, headers={"User-Agent": "custom"})

        assert mock.last_request.headers["User-Agent"] == "custom"
        assert "User-Agent" in rest_client.headers
        assert rest_client.headers["User-Agent"] != "custom"

    def test_request_serializes_models_with_aliases(self, rest_client, mock, employee):
        mock.post(BASE_URL, status_code=201)

        rest_client.request("POST", BASE_URL, body=employee)

        assert mock.last_request.json() == {
            "id": 1,
            "firstName": "Ann",
            "lastName": "Lee",
            "yearlyIncome": 50000,
        }

    def test_request_expands_uri_variables(self, rest_client, mock):
        mock.get(f"{BASE_URL}/42", json={})

        rest_client.request("GET", f"{BASE_URL}/{{id}}", 42)

        assert mock.last_request.url == f"{BASE_URL}/42"

    def test_request_uses_client_timeout(self, rest_client, mock):
        mock.get(BASE_URL, json=[])
        rest_client.update_timeout(15)

        rest_client.request("GET", BASE_URL)

        assert mock.last_request.timeout == 15

    def test_request_timeout_override(self, rest_client, mock):
        mock.get(BASE_URL, json=[])

        rest_client.request("GET", BASE_URL, timeout=3)

        assert mock.last_request.timeout == 3

    def test_get_for_entity(self, rest_client, mock, employee_json):
        mock.get(
            f"{BASE_URL}/1",
            json=employee_json,
            headers={"Content-Type": "application/json", "X-Custom": "value"},
        )

        entity = rest_client.get_for_entity(f"{BASE_URL}/{{id}}", Employee, 1)

        assert isinstance(entity, ResponseEntity)
        assert entity.status_code == 200
        assert entity.is_success
        assert entity.headers["x-custom"] == "value"
        assert entity.body == Employee(id=1, first_name="Ann", last_name="Lee", yearly_income=50000)

    def test_entity_is_parametrized_with_response_type(self, rest_client, mock, employee_page_json):
        mock.get(BASE_URL, json=employee_page_json)

        entity = rest_client.get_for_entity(BASE_URL, List[Employee])

        assert isinstance(entity, ResponseEntity)
        assert entity.__class__.__pydantic_generic_metadata__["args"] == (List[Employee],)
        assert all(isinstance(e, Employee) for e in entity.body)

    def test_entity_without_response_type_is_not_parametrized(self, rest_client, mock):
        mock.delete(f"{BASE_URL}/1", status_code=204)

        entity = rest_client.exchange(f"{BASE_URL}/{{id}}", "DELETE", None, None, 1)

        assert entity.__class__ is ResponseEntity

    def test_get_for_object_null_body(self, rest_client, mock):
        mock.get(BASE_URL, text="null")

        assert rest_client.get_for_object(BASE_URL, List[Employee]) is None

    def test_get_for_object_list(self, rest_client, mock, employee_page_json):
        mock.get(BASE_URL, json=employee_page_json)

        employees = rest_client.get_for_object(BASE_URL, List[Employee])

        assert [e.id for e in employees] == [1, 2]
        assert employees[1].last_name is None

    def test_get_for_object_as_text(self, rest_client, mock):
        mock.get(f"{BASE_URL}/1", text='{"id": 1}')

        assert rest_client.get_for_object(f"{BASE_URL}/{{id}}", str, 1) == '{"id": 1}'

    def test_get_for_object_empty_body(self, rest_client, mock):
        mock.get(f"{BASE_URL}/1", text="")

        assert rest_client.get_for_object(f"{BASE_URL}/{{id}}", Employee, 1) is None

    def test_post_for_location(self, rest_client, mock, employee):
        mock.post(BASE_URL, status_code=201, headers={"Location": f"{BASE_URL}/1"})

        assert rest_client.post_for_location(BASE_URL, employee) == f"{BASE_URL}/1"

    def test_post_for_location_without_header(self, rest_client, mock, employee):
        mock.post(BASE_URL, status_code=201)

        assert rest_client.post_for_location(BASE_URL, employee) is None

    def test_put_returns_nothing(self, rest_client, mock, employee):
        mock.put(f"{BASE_URL}/1", json={"ignored": True})

        assert rest_client.put(f"{BASE_URL}/{{id}}", employee, 1) is None
        assert mock.last_request.method == "PUT"

    def test_exchange_without_response_type(self, rest_client, mock):
        mock.delete(f"{BASE_URL}/1", status_code=204)

        entity = rest_client.exchange(f"{BASE_URL}/{{id}}", "DELETE", None, None, 1)

        assert entity.status_code == 204
        assert entity.body is None
        assert not entity.has_body

    def test_head_for_headers(self, rest_client, mock):
        mock.head(BASE_URL, headers={"X-Total-Count": "12"})

        headers = rest_client.head_for_headers(BASE_URL)

        assert headers["x-total-count"] == "12"
        assert mock.last_request.method == "HEAD"

    def test_options_for_allow(self, rest_client, mock):
        mock.options(f"{BASE_URL}/1", headers={"Allow": "GET, put,DELETE ,OPTIONS"})

        methods = rest_client.options_for_allow(f"{BASE_URL}/{{id}}", 1)

        assert methods == {"GET", "PUT", "DELETE", "OPTIONS"}

    def test_options_for_allow_ignores_unknown_tokens(self, rest_client, mock):
        mock.options(f"{BASE_URL}/1", headers={"Allow": "GET,FETCH,,HEAD"})

        assert rest_client.options_for_allow(f"{BASE_URL}/{{id}}", 1) == {"GET", "HEAD"}

    def test_options_for_allow_without_header(self, rest_client, mock):
        mock.options(f"{BASE_URL}/1")

        assert rest_client.options_for_allow(f"{BASE_URL}/{{id}}", 1) == set()


class TestRestClientUtilities:
    def test_update_headers(self):
        client = RestClient()
        original_headers = client.headers.copy()

        new_headers = {
            "Accept-Language": "en-US",
            "X-Custom-Header": "value",
        }

        client.update_headers(new_headers)

        # Original headers should be preserved
        for key, value in original_headers.items():
            if key not in new_headers:
                assert client.headers[key] == value

        for key, value in new_headers.items():
            assert client.headers[key] == value

    def test_update_timeout(self):
        client = RestClient()
        original_timeout = client.timeout

        client.update_timeout(120)

        assert client.timeout == 120
        assert client.timeout != original_timeout

    @pytest.mark.parametrize("timeout", [0, -5, None, "10"])
    def test_update_timeout_invalid(self, timeout):
        client = RestClient()
        with pytest.raises(ValueError):
            client.update_timeout(timeout)
        assert client.timeout == 60
