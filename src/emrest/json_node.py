"""Generic JSON tree for responses read without a target model."""

from enum import Enum
from typing import Any, Iterator, List, Optional, Union

from pydantic_core import from_json

from .exceptions import ParseError


class JsonNodeType(str, Enum):
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    MISSING = "missing"


class JsonNode:
    """A node of a parsed JSON document.

    Each node carries its kind and its value. Objects hold a dict of child
    nodes and arrays a list of child nodes; scalars hold the plain Python
    value. Absent lookups through :meth:`path` yield a MISSING node, so
    chained lookups never fail.
    """

    __slots__ = ("node_type", "_value")

    def __init__(self, node_type: JsonNodeType, value: Any = None):
        self.node_type = node_type
        self._value = value

    @classmethod
    def from_value(cls, value: Any) -> "JsonNode":
        """Build a tree from plain Python JSON values."""
        if value is None:
            return cls(JsonNodeType.NULL)
        # bool before int, bool is an int subclass
        if isinstance(value, bool):
            return cls(JsonNodeType.BOOLEAN, value)
        if isinstance(value, (int, float)):
            return cls(JsonNodeType.NUMBER, value)
        if isinstance(value, str):
            return cls(JsonNodeType.STRING, value)
        if isinstance(value, dict):
            return cls(
                JsonNodeType.OBJECT,
                {str(k): cls.from_value(v) for k, v in value.items()},
            )
        if isinstance(value, (list, tuple)):
            return cls(JsonNodeType.ARRAY, [cls.from_value(v) for v in value])
        raise TypeError(f"Unsupported JSON value type: {type(value).__name__}")

    @classmethod
    def missing(cls) -> "JsonNode":
        return cls(JsonNodeType.MISSING)

    # Kind predicates
    def is_object(self) -> bool:
        return self.node_type is JsonNodeType.OBJECT

    def is_array(self) -> bool:
        return self.node_type is JsonNodeType.ARRAY

    def is_string(self) -> bool:
        return self.node_type is JsonNodeType.STRING

    def is_number(self) -> bool:
        return self.node_type is JsonNodeType.NUMBER

    def is_boolean(self) -> bool:
        return self.node_type is JsonNodeType.BOOLEAN

    def is_null(self) -> bool:
        return self.node_type is JsonNodeType.NULL

    def is_missing(self) -> bool:
        return self.node_type is JsonNodeType.MISSING

    def is_container(self) -> bool:
        return self.is_object() or self.is_array()

    # Lookup
    def get(self, key: Union[str, int]) -> Optional["JsonNode"]:
        """Return the child for a field name or array index, or None if absent."""
        if self.is_object() and isinstance(key, str):
            return self._value.get(key)
        if self.is_array() and isinstance(key, int) and not isinstance(key, bool):
            if -len(self._value) <= key < len(self._value):
                return self._value[key]
        return None

    def path(self, key: Union[str, int]) -> "JsonNode":
        """Like :meth:`get`, but returns a MISSING node instead of None."""
        node = self.get(key)
        return node if node is not None else JsonNode.missing()

    def has(self, key: Union[str, int]) -> bool:
        return self.get(key) is not None

    def field_names(self) -> List[str]:
        if self.is_object():
            return list(self._value)
        return []

    def __getitem__(self, key: Union[str, int]) -> "JsonNode":
        node = self.get(key)
        if node is None:
            if self.is_array():
                raise IndexError(key)
            raise KeyError(key)
        return node

    def __contains__(self, key: Union[str, int]) -> bool:
        return self.has(key)

    def __len__(self) -> int:
        if self.is_container():
            return len(self._value)
        return 0

    def __iter__(self) -> Iterator["JsonNode"]:
        """Iterate over array elements or object values."""
        if self.is_object():
            return iter(list(self._value.values()))
        if self.is_array():
            return iter(list(self._value))
        return iter(())

    # Scalar access
    def as_text(self) -> Optional[str]:
        if self.is_string():
            return self._value
        if self.is_number():
            return str(self._value)
        if self.is_boolean():
            return "true" if self._value else "false"
        if self.is_null():
            return "null"
        return None

    def as_int(self) -> int:
        if self.is_number() or self.is_boolean():
            return int(self._value)
        if self.is_string():
            return int(self._value)
        raise ValueError(f"Cannot read {self.node_type.value} node as int")

    def as_float(self) -> float:
        if self.is_number() or self.is_boolean():
            return float(self._value)
        if self.is_string():
            return float(self._value)
        raise ValueError(f"Cannot read {self.node_type.value} node as float")

    def as_bool(self) -> bool:
        if self.is_boolean():
            return self._value
        if self.is_number():
            return self._value != 0
        raise ValueError(f"Cannot read {self.node_type.value} node as bool")

    def to_python(self) -> Any:
        """Convert back to plain dicts, lists and scalars."""
        if self.is_object():
            return {k: v.to_python() for k, v in self._value.items()}
        if self.is_array():
            return [v.to_python() for v in self._value]
        return self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonNode):
            return NotImplemented
        return self.node_type is other.node_type and self._value == other._value

    def __repr__(self) -> str:
        return f"JsonNode({self.node_type.value}, {self.to_python()!r})"


def parse_tree(text: Optional[Union[str, bytes]]) -> JsonNode:
    """Parse JSON text into a :class:`JsonNode` tree.

    Raises:
        ParseError: If the text is empty or not valid JSON
    """
    if text is None or not text.strip():
        raise ParseError("Cannot parse an empty JSON document")

    try:
        value = from_json(text, allow_inf_nan=False)
    except ValueError as e:
        raise ParseError(f"Failed to parse JSON: {e}") from e

    return JsonNode.from_value(value)
