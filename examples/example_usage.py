"""Example usage of the EmployeeRestClient.

Expects an employee service listening on http://localhost:8080.
"""

import logging

from emrest import Employee, EmployeeRestClient, RestClient
from emrest.logging import DefaultLogger

HOST = "http://localhost"
PORT = 8080


def main():
    """Run every call style once against the employee resource."""
    logger = DefaultLogger(name="emrest-example", level=logging.DEBUG)

    with RestClient(timeout=10, logger=logger) as rest_client:
        client = EmployeeRestClient(rest_client, HOST, PORT, logger=logger)

        created = client.create_object(Employee(first_name="Ann", last_name="Lee", yearly_income=50000))
        print(f"Created: {created}")

        location = client.create_location(Employee(first_name="Bob", last_name="Ray", yearly_income=42000))
        print(f"Location: {location}")

        entity = client.create_entity(Employee(first_name="Cy", yearly_income=38000))
        print(f"Created entity: status={entity.status_code} body={entity.body}")

        employee_id = created.id if created else 1

        entity = client.fetch_entity(employee_id)
        print(f"Entity: status={entity.status_code} content-type={entity.headers.get('Content-Type')}")
        print(f"Object: {client.fetch_object(employee_id)}")
        print(f"JSON tree id: {client.fetch_as_json(employee_id).path('id').as_text()}")
        print(f"First page: {client.fetch_page(0, 10)}")

        updated = Employee(id=employee_id, first_name="Ann", last_name="Lee", yearly_income=55000)
        client.replace(updated)
        print(f"Replaced: {client.replace_with_response(updated).body}")

        print(f"Headers: {dict(client.headers())}")
        print(f"Allowed methods: {sorted(client.allowed_methods(employee_id))}")

        print(f"Deleted: status={client.remove_with_response(employee_id).status_code}")
        if location:
            client.remove(int(location.rstrip('/').rsplit('/', 1)[-1]))


if __name__ == "__main__":
    main()
