from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Employee(BaseModel):
    """The employee resource as exchanged with the REST service.

    Attributes use Python names; the JSON representation uses the camelCase
    names the service expects. Both are accepted on construction.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int = 0
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    yearly_income: int = Field(default=0, alias="yearlyIncome")

    def to_json(self) -> str:
        """Serialize to the wire format."""
        return self.model_dump_json(by_alias=True)

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_json(cls, data: Union[str, bytes]) -> "Employee":
        """Parse an employee from its wire format.

        Raises:
            pydantic.ValidationError: If the data is not a valid employee document
        """
        return cls.model_validate_json(data)
