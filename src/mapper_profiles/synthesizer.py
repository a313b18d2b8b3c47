"""Synthesis of mapping declarations from auto-map annotated classes.

Each annotated destination class contributes one declaration to the
discovery pass's synthetic profile:

1. The declaration `source -> destination` is created
2. The annotation's blanket policy is applied
3. Member effects found in `Annotated[...]` field hints are applied per
   member, in declaration order; effects on different aspects of a member
   combine, and a later effect on the same aspect replaces the earlier one
"""

import logging
from typing import Any
from typing import get_type_hints

from .annotations import AutoMapAnnotation
from .annotations import is_class_var
from .annotations import member_effects
from .exceptions import IntrospectionError
from .profile import Profile
from .schema import MappingDeclaration

logger = logging.getLogger(__name__)


def public_instance_members(destination_type: type) -> dict[str, Any]:
    """
    Resolve the public instance member hints of a destination type.

    Base class members come first. ClassVar members and names starting
    with an underscore are excluded.

    Raises:
        IntrospectionError: If the type's hints cannot be resolved
    """
    try:
        hints = get_type_hints(destination_type, include_extras=True)
    except Exception as e:
        raise IntrospectionError(
            f"Cannot inspect members of {destination_type.__module__}.{destination_type.__qualname__}: {e}",
            {"type": destination_type.__qualname__, "module": destination_type.__module__},
        ) from e

    return {name: hint for name, hint in hints.items() if not name.startswith("_") and not is_class_var(hint)}


def apply_member_effect(declaration: MappingDeclaration, member: str, effect: Any) -> None:
    """Apply one member effect to a declaration, warning when it replaces another on the same aspect."""
    existing = declaration.rule_for(member)
    previous = existing.effect_for(effect) if existing is not None else None
    if previous is not None and previous != effect:
        logger.warning(
            "Member '%s' of %s: %s replaces earlier %s",
            member,
            declaration.destination_type.__qualname__,
            effect.kind,
            previous.kind,
        )
    declaration.for_member(member, effect)


def synthesize(profile: Profile, destination_type: type, annotation: AutoMapAnnotation) -> MappingDeclaration:
    """
    Append the declaration described by an auto-map annotation to profile.

    Members are inspected before anything is added, so an introspection
    failure leaves the profile untouched.

    Args:
        profile: Synthetic profile of the current discovery pass
        destination_type: Annotated class
        annotation: Its auto-map annotation

    Returns:
        The appended declaration

    Raises:
        IntrospectionError: If the destination type's members cannot be inspected
    """
    members = public_instance_members(destination_type)

    declaration = profile.create_map(annotation.source_type, destination_type)
    annotation.apply_configuration(declaration)

    for member, hint in members.items():
        for effect in member_effects(hint):
            apply_member_effect(declaration, member, effect)

    logger.debug(
        "Declared %s -> %s with %d member rule(s)",
        annotation.source_type.__qualname__,
        destination_type.__qualname__,
        len(declaration.member_rules),
    )
    return declaration
