"""Built-in type-conversion strategies exposed on the registry."""

from decimal import Decimal
from enum import Enum
from typing import Any
from typing import get_origin

from .protocols import ObjectMapperProtocol


def _is_class(candidate: Any) -> bool:
    # Parameterized generics such as list[int] are not classes for issubclass()
    return isinstance(candidate, type) and get_origin(candidate) is None


class AssignableMapper:
    """Passes values through when the destination type accepts them as-is."""

    def is_match(self, source_type: type, destination_type: type) -> bool:
        if destination_type is Any:
            return True
        if not (_is_class(source_type) and _is_class(destination_type)):
            return False
        return issubclass(source_type, destination_type)

    def map(self, value: Any, destination_type: type) -> Any:
        return value


class EnumMapper:
    """Maps enum members onto another enum by member name."""

    def is_match(self, source_type: type, destination_type: type) -> bool:
        return all(_is_class(t) and issubclass(t, Enum) for t in (source_type, destination_type))

    def map(self, value: Any, destination_type: type) -> Any:
        try:
            return destination_type[value.name]
        except KeyError as e:
            raise ValueError(f"{destination_type.__qualname__} has no member named '{value.name}'") from e


class StringMapper:
    """Converts any value to str."""

    def is_match(self, source_type: type, destination_type: type) -> bool:
        return destination_type is str

    def map(self, value: Any, destination_type: type) -> Any:
        return str(value)


class ConstructorMapper:
    """Builds primitive values by calling the destination type on the value.

    Strings convert to bool by spelling ("true"/"false", "yes"/"no", "1"/"0"),
    not by truthiness.
    """

    PRIMITIVES = (int, float, bool, Decimal)
    TRUE_STRINGS = frozenset({"true", "yes", "on", "1"})
    FALSE_STRINGS = frozenset({"false", "no", "off", "0", ""})

    def is_match(self, source_type: type, destination_type: type) -> bool:
        return destination_type in self.PRIMITIVES and source_type in (*self.PRIMITIVES, str)

    def map(self, value: Any, destination_type: type) -> Any:
        if destination_type is bool and isinstance(value, str):
            return self._parse_bool(value)
        return destination_type(value)

    def _parse_bool(self, value: str) -> bool:
        normalized = value.strip().lower()
        if normalized in self.TRUE_STRINGS:
            return True
        if normalized in self.FALSE_STRINGS:
            return False
        raise ValueError(f"Cannot convert '{value}' to bool")


def default_mappers() -> list[ObjectMapperProtocol]:
    """Return a fresh list of the built-in strategies, in precedence order."""
    return [AssignableMapper(), EnumMapper(), StringMapper(), ConstructorMapper()]
