"""Profile base class - the unit of mapping configuration."""

from abc import ABC
from collections.abc import Callable
from typing import Any

from .schema import MappingDeclaration


class Profile(ABC):
    """Named bundle of mapping declarations.

    Subclass and override `configure()` to declare maps:

        >>> class OrderProfile(Profile):
        ...     def configure(self):
        ...         self.create_map(Order, OrderDto).ignore("internal_notes")

    Concrete subclasses are picked up by discovery passes and must be
    constructible without arguments. Declare a subclass abstract (abstract
    methods) to keep it out of discovery.
    """

    def __init__(self, name: str | None = None, configure: Callable[["Profile"], None] | None = None):
        """
        Initialize profile and run its configuration.

        Args:
            name: Profile name. Defaults to the profile class's qualified name
            configure: Optional callable run after `configure()` with this profile
        """
        cls = type(self)
        self.name = name or f"{cls.__module__}.{cls.__qualname__}"
        self.declarations: list[MappingDeclaration] = []

        self.configure()
        if configure is not None:
            configure(self)

    def configure(self) -> None:
        """Declare this profile's maps. No-op by default."""

    def create_map(self, source_type: type[Any], destination_type: type[Any]) -> MappingDeclaration:
        """
        Declare a map from source_type to destination_type.

        Args:
            source_type: Type mapped from
            destination_type: Type mapped to

        Returns:
            The new declaration, for fluent member configuration
        """
        declaration = MappingDeclaration(source_type=source_type, destination_type=destination_type)
        self.declarations.append(declaration)
        return declaration

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Profile):
            return NotImplemented
        return type(self) is type(other) and self.name == other.name and self.declarations == other.declarations

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, declarations={len(self.declarations)})"
