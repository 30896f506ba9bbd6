import pytest
import requests_mock

from emrest.employee_client import EmployeeRestClient
from emrest.models import Employee
from emrest.rest_client import RestClient


@pytest.fixture
def host():
    return "http://localhost"


@pytest.fixture
def port():
    return 8080


@pytest.fixture
def request_uri(host, port):
    return f"{host}:{port}/rest/employees"


@pytest.fixture
def mock():
    """Mocker that intercepts every request made through requests."""
    with requests_mock.Mocker() as m:
        yield m


@pytest.fixture
def rest_client():
    """
    Fixture that provides a RestClient instance within its context manager.

    This ensures the session opened for each test is closed afterwards.
    """
    with RestClient() as client:
        yield client


@pytest.fixture
def employee_client(rest_client, host, port):
    return EmployeeRestClient(rest_client, host, port)


@pytest.fixture
def employee():
    return Employee(id=1, first_name="Ann", last_name="Lee", yearly_income=50000)


@pytest.fixture
def employee_json():
    return {"id": 1, "firstName": "Ann", "lastName": "Lee", "yearlyIncome": 50000}


@pytest.fixture
def employee_page_json():
    return [
        {"id": 1, "firstName": "Ann", "lastName": "Lee", "yearlyIncome": 50000},
        {"id": 2, "firstName": "Bob", "lastName": None, "yearlyIncome": 42000},
    ]
