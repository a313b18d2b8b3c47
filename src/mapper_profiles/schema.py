"""Pydantic schemas for mapping declarations and their member overrides."""

from collections.abc import Callable
from typing import Annotated
from typing import Any
from typing import Literal

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class Ignore(BaseModel):
    """Destination member is left out of the mapping."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["ignore"] = "ignore"


class MapFrom(BaseModel):
    """Destination member is computed from the whole source object."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["map_from"] = "map_from"
    resolver: Callable[[Any], Any] = Field(..., description="Callable receiving the source object")


class SourceMember(BaseModel):
    """Destination member is read from a differently named source member."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["source_member"] = "source_member"
    name: str = Field(..., description="Name of the member on the source type")


class NullSubstitute(BaseModel):
    """Value used when the resolved source value is None."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["null_substitute"] = "null_substitute"
    value: Any = Field(..., description="Replacement for a None source value")


class UseExistingValue(BaseModel):
    """Destination member keeps the value it already has."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["use_existing_value"] = "use_existing_value"


MemberEffect = Ignore | MapFrom | SourceMember | NullSubstitute | UseExistingValue
"""
Member effect variants, usable both in `for_member()` calls and as field annotations:
- `Annotated[str, Ignore()]`
- `Annotated[str, SourceMember(name="full_name")]`
- `Annotated[int, MapFrom(resolver=lambda src: len(src.items))]`
"""

MEMBER_EFFECT_TYPES = (Ignore, MapFrom, SourceMember, NullSubstitute, UseExistingValue)

SourceEffect = Annotated[Ignore | MapFrom | SourceMember, Field(discriminator="kind")]

# Each effect configures one aspect of a member; effects on different aspects combine.
EFFECT_ASPECTS: dict[type, str] = {
    Ignore: "source",
    MapFrom: "source",
    SourceMember: "source",
    NullSubstitute: "null_substitute",
    UseExistingValue: "use_existing_value",
}


def effect_aspect(effect: MemberEffect) -> str:
    """Return the name of the rule aspect an effect configures."""
    for effect_type, aspect in EFFECT_ASPECTS.items():
        if isinstance(effect, effect_type):
            return aspect
    raise TypeError(f"Expected a member effect, got {type(effect).__name__}")


class MemberOverrideRule(BaseModel):
    """Configuration of one destination member.

    Aspects:
    - `source`: where the value comes from (Ignore, MapFrom or SourceMember)
    - `null_substitute`: replacement for a None source value
    - `use_existing_value`: keep the destination's current value

    Applying an effect replaces only its own aspect, so `Ignore()` followed
    by `SourceMember(name="x")` leaves the same rule as the rename alone.
    """

    model_config = ConfigDict(frozen=True)

    member: str = Field(..., description="Destination member name")
    source: SourceEffect | None = None
    null_substitute: NullSubstitute | None = None
    use_existing_value: UseExistingValue | None = None

    @property
    def ignored(self) -> bool:
        return isinstance(self.source, Ignore)

    @property
    def source_member(self) -> str | None:
        return self.source.name if isinstance(self.source, SourceMember) else None

    @property
    def resolver(self) -> Callable[[Any], Any] | None:
        return self.source.resolver if isinstance(self.source, MapFrom) else None

    def effect_for(self, effect: MemberEffect) -> MemberEffect | None:
        """Return the effect currently held in the aspect that effect configures."""
        return getattr(self, effect_aspect(effect))

    def apply(self, effect: MemberEffect) -> "MemberOverrideRule":
        """Return a copy of this rule with effect applied to its aspect."""
        return self.model_copy(update={effect_aspect(effect): effect})


class MappingDeclaration(BaseModel):
    """Source type to destination type pairing plus member-level overrides.

    Declarations are built through the fluent methods below while a profile
    is being configured and are treated as read-only afterwards.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    source_type: type[Any]
    destination_type: type[Any]
    member_rules: list[MemberOverrideRule] = Field(default_factory=list)
    reverse_map: bool = False
    max_depth: int | None = None
    preserve_references: bool = False
    construct_using_service_locator: bool = False
    include_all_derived: bool = False
    type_converter: Callable[..., Any] | None = None

    def rule_for(self, member: str) -> MemberOverrideRule | None:
        """Return the override rule for a member, or None if it has none."""
        for rule in self.member_rules:
            if rule.member == member:
                return rule
        return None

    def for_member(self, member: str, effect: MemberEffect) -> "MappingDeclaration":
        """
        Apply an effect to a destination member.

        Effects on different aspects of a member combine; an effect on an
        aspect that is already configured replaces the earlier one. The
        member keeps the position of its first rule.

        Args:
            member: Destination member name
            effect: One of the member effect variants

        Returns:
            This declaration, for chaining

        Raises:
            TypeError: If effect is not a member effect variant
        """
        if not isinstance(effect, MEMBER_EFFECT_TYPES):
            raise TypeError(f"Expected a member effect for '{member}', got {type(effect).__name__}")

        for index, existing in enumerate(self.member_rules):
            if existing.member == member:
                self.member_rules[index] = existing.apply(effect)
                return self

        self.member_rules.append(MemberOverrideRule(member=member).apply(effect))
        return self

    def ignore(self, member: str) -> "MappingDeclaration":
        return self.for_member(member, Ignore())

    def with_reverse_map(self) -> "MappingDeclaration":
        self.reverse_map = True
        return self

    def with_max_depth(self, depth: int) -> "MappingDeclaration":
        if depth < 1:
            raise ValueError(f"Max depth must be positive, got: {depth}")
        self.max_depth = depth
        return self

    def with_preserve_references(self) -> "MappingDeclaration":
        self.preserve_references = True
        return self

    def with_service_locator_construction(self) -> "MappingDeclaration":
        self.construct_using_service_locator = True
        return self

    def with_include_all_derived(self) -> "MappingDeclaration":
        self.include_all_derived = True
        return self

    def convert_using(self, converter: Callable[..., Any]) -> "MappingDeclaration":
        self.type_converter = converter
        return self


class AdvancedConfiguration(BaseModel):
    """Extension settings consumed by the mapping-plan compiler.

    Unknown keys are kept so downstream components can carry their own options.
    """

    model_config = ConfigDict(extra="allow")

    allow_additive_type_map_creation: bool = Field(
        False, description="Allow several declarations for the same type pair to be combined"
    )
    max_execution_plan_depth: int = Field(1, description="Depth up to which child mapping plans are inlined")
    skip_uninspectable_types: bool = Field(
        False,
        description=(
            "Skip annotated types whose members cannot be inspected instead of aborting the discovery pass. "
            "Off by default: any introspection failure is fatal."
        ),
    )
    before_seal: list[Callable[[Any], None]] = Field(default_factory=list)
    validators: list[Callable[[Any], None]] = Field(default_factory=list)

    def add_before_seal(self, callback: Callable[[Any], None]) -> None:
        """Register a callback run with the registry just before it is sealed."""
        self.before_seal.append(callback)

    def add_validator(self, callback: Callable[[Any], None]) -> None:
        """Register a validator run with the registry while it is sealed."""
        self.validators.append(callback)
