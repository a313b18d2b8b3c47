"""Class and member annotations for annotation-driven mapping declarations."""

from collections.abc import Callable
from typing import Annotated
from typing import Any
from typing import ClassVar
from typing import TypeVar
from typing import get_origin

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from .schema import MEMBER_EFFECT_TYPES
from .schema import MappingDeclaration

AUTO_MAP_ATTRIBUTE = "__automap__"

T = TypeVar("T", bound=type)


class AutoMapAnnotation(BaseModel):
    """Declares that the decorated class is a mapping destination.

    Holds the source type plus the blanket policy applied to the
    synthesized declaration before any member effects.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source_type: type[Any] = Field(..., description="Type mapped from")
    reverse_map: bool = False
    max_depth: int | None = None
    preserve_references: bool = False
    construct_using_service_locator: bool = False
    include_all_derived: bool = False
    type_converter: Callable[..., Any] | None = None

    def apply_configuration(self, declaration: MappingDeclaration) -> None:
        """Apply this annotation's blanket policy to a declaration."""
        if self.reverse_map:
            declaration.with_reverse_map()
        if self.max_depth is not None:
            declaration.with_max_depth(self.max_depth)
        if self.preserve_references:
            declaration.with_preserve_references()
        if self.construct_using_service_locator:
            declaration.with_service_locator_construction()
        if self.include_all_derived:
            declaration.with_include_all_derived()
        if self.type_converter is not None:
            declaration.convert_using(self.type_converter)


def auto_map(source_type: type[Any], **policy: Any) -> Callable[[T], T]:
    """
    Mark a class as the destination of a map from source_type.

    Keyword arguments are the blanket policy fields of AutoMapAnnotation
    (reverse_map, max_depth, preserve_references, ...).

    Example:
        >>> @auto_map(Customer, reverse_map=True)
        ... class CustomerDto:
        ...     name: str
        ...     email: Annotated[str, SourceMember(name="primary_email")]
    """
    annotation = AutoMapAnnotation(source_type=source_type, **policy)

    def decorate(cls: T) -> T:
        setattr(cls, AUTO_MAP_ATTRIBUTE, annotation)
        return cls

    return decorate


def get_auto_map_annotation(cls: type) -> AutoMapAnnotation | None:
    """
    Return the auto-map annotation declared directly on cls.

    Annotations inherited from base classes do not count, and any other
    object stored under the attribute name is ignored.
    """
    annotation = vars(cls).get(AUTO_MAP_ATTRIBUTE)
    if isinstance(annotation, AutoMapAnnotation):
        return annotation
    return None


def is_class_var(hint: Any) -> bool:
    if get_origin(hint) is Annotated:
        hint = hint.__origin__
    return hint is ClassVar or get_origin(hint) is ClassVar


def member_effects(hint: Any) -> list[Any]:
    """Return the member effects attached to a type hint, in declaration order."""
    if get_origin(hint) is not Annotated:
        return []
    return [item for item in hint.__metadata__ if isinstance(item, MEMBER_EFFECT_TYPES)]
