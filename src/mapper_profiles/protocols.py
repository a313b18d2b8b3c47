"""Protocols for the collaborators a registry hands to the mapping engine."""

from typing import Any
from typing import Protocol


class ServiceConstructorProtocol(Protocol):
    """Protocol for constructing objects from their type.

    The registry uses it to build profile types found during discovery; the
    mapping engine uses it to build destination objects.

    Example implementations:
        - default_service_constructor (calls the type with no arguments)
        - A dependency-injection container's resolve method
        - Mock implementation for testing
    """

    def __call__(self, object_type: type) -> Any:
        """Construct an instance of object_type.

        Args:
            object_type: Type to construct

        Returns:
            New instance of object_type
        """
        ...


class ObjectMapperProtocol(Protocol):
    """Protocol for type-conversion strategies.

    The mapping engine tries strategies in registry order and uses the first
    one whose is_match() accepts the type pair.
    """

    def is_match(self, source_type: type, destination_type: type) -> bool:
        """Check whether this strategy converts source_type to destination_type.

        Args:
            source_type: Type of the value being mapped
            destination_type: Requested type

        Returns:
            True if map() can handle the pair, False otherwise
        """
        ...

    def map(self, value: Any, destination_type: type) -> Any:
        """Convert value to destination_type.

        Args:
            value: Source value
            destination_type: Requested type

        Returns:
            Converted value
        """
        ...
