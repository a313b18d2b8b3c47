"""Profile registry - the configuration handed to the mapping-plan compiler."""

import inspect
import logging
from collections.abc import Callable
from collections.abc import Iterable
from types import ModuleType
from typing import Any

from .annotations import get_auto_map_annotation
from .exceptions import InstantiationError
from .exceptions import IntrospectionError
from .exceptions import MapperConfigurationError
from .mappers import default_mappers
from .profile import Profile
from .protocols import ObjectMapperProtocol
from .protocols import ServiceConstructorProtocol
from .scanner import scan
from .schema import AdvancedConfiguration
from .schema import MappingDeclaration
from .synthesizer import synthesize

logger = logging.getLogger(__name__)

AUTO_MAP_PROFILE_NAME = "AutoMap"
DEFAULT_PROFILE_NAME = "Default"


class NamedProfile(Profile):
    """Profile configured by name and callable rather than by subclassing."""


def default_service_constructor(object_type: type) -> Any:
    """Construct object_type with no arguments."""
    return object_type()


def _flatten_targets(targets: tuple[Any, ...]) -> list[Any]:
    # add_maps([a, b]) and add_maps(a, b) are equivalent
    if len(targets) == 1:
        (target,) = targets
        if isinstance(target, Iterable) and not isinstance(target, (str, type, ModuleType)):
            return list(target)
    return list(targets)


class ProfileRegistry:
    """Collects mapping profiles from explicit registration and module discovery.

    Maps can also be declared on the registry itself with create_map(); they
    live in `default_profile`, which the compiler reads before every
    registered profile (see `all_profiles`).
    """

    def __init__(self):
        self._profiles: list[Profile] = []
        self._sealed = False
        self.default_profile: Profile = NamedProfile(DEFAULT_PROFILE_NAME)
        self.service_constructor: ServiceConstructorProtocol = default_service_constructor
        self.mappers: list[ObjectMapperProtocol] = default_mappers()
        self.advanced = AdvancedConfiguration()

    @property
    def profiles(self) -> tuple[Profile, ...]:
        """Registered profiles in insertion order, without the default profile."""
        return tuple(self._profiles)

    @property
    def all_profiles(self) -> tuple[Profile, ...]:
        """Default profile followed by the registered profiles, in compiler order."""
        return (self.default_profile, *self._profiles)

    def create_map(self, source_type: type[Any], destination_type: type[Any]) -> MappingDeclaration:
        """
        Declare a map directly on the registry's default profile.

        Example:
            >>> registry.create_map(Order, OrderDto).ignore("internal_notes")
        """
        self._check_open()
        return self.default_profile.create_map(source_type, destination_type)

    @property
    def sealed(self) -> bool:
        return self._sealed

    def _check_open(self) -> None:
        if self._sealed:
            raise MapperConfigurationError("Registry is sealed; no further profiles can be registered")

    def add_profile(self, profile: Profile | type[Profile]) -> Profile:
        """
        Register a profile instance, or construct and register a profile type.

        Profile names are not checked for uniqueness: several profiles may
        share a name.

        Args:
            profile: Profile instance or concrete Profile subclass

        Returns:
            The registered profile instance

        Raises:
            InstantiationError: If a profile type cannot be constructed
        """
        self._check_open()

        if isinstance(profile, type):
            profile = self._instantiate(profile)
        elif not isinstance(profile, Profile):
            raise TypeError(f"Expected a Profile or Profile type, got {type(profile).__name__}")

        self._profiles.append(profile)
        return profile

    def add_profiles(self, *targets: Any) -> None:
        """
        Register ready-made profiles, or run a discovery pass over scan targets.

        Args:
            targets: Profile instances, or modules / module names / types to scan
                (a single iterable of either is also accepted)

        Raises:
            TypeError: If profile instances are mixed with scan targets
            ModuleResolutionError, InstantiationError, IntrospectionError: See add_maps()
        """
        items = _flatten_targets(targets)
        instances = [item for item in items if isinstance(item, Profile)]

        if not instances:
            self.add_maps(items)
            return

        if len(instances) != len(items):
            raise TypeError("Cannot mix Profile instances with modules, module names or types")

        self._check_open()
        self._profiles.extend(instances)

    def add_maps(self, *targets: Any) -> None:
        """
        Run one discovery pass over modules and register what it finds.

        Every concrete Profile subclass defined in the scanned modules is
        constructed and registered. Classes decorated with @auto_map
        contribute declarations to one synthetic profile named
        AUTO_MAP_PROFILE_NAME, registered after them (even when empty).

        The pass is all-or-nothing: on failure no profile from this pass is
        registered. Passes are not deduplicated against earlier passes.

        Args:
            targets: Modules, module names, or types whose defining module is scanned
                (a single iterable is also accepted)

        Raises:
            ModuleResolutionError: If a target cannot be resolved to a module
            InstantiationError: If a discovered profile type cannot be constructed
            IntrospectionError: If a candidate type cannot be inspected
        """
        self._check_open()

        candidates = scan(_flatten_targets(targets))
        discovered: list[Profile] = []
        auto_map_profile = NamedProfile(AUTO_MAP_PROFILE_NAME)

        for candidate in candidates:
            if issubclass(candidate, Profile) and not inspect.isabstract(candidate):
                discovered.append(self._instantiate(candidate))

            annotation = get_auto_map_annotation(candidate)
            if annotation is None:
                continue

            try:
                synthesize(auto_map_profile, candidate, annotation)
            except IntrospectionError as e:
                if not self.advanced.skip_uninspectable_types:
                    raise
                logger.warning("Skipping %s: %s", candidate.__qualname__, e.message)

        discovered.append(auto_map_profile)
        self._profiles.extend(discovered)

        logger.debug(
            "Discovery pass registered %d explicit profile(s) and %d annotated declaration(s)",
            len(discovered) - 1,
            len(auto_map_profile.declarations),
        )

    def create_profile(self, name: str, configure: Callable[[Profile], None]) -> Profile:
        """
        Register a profile configured by a callable.

        Example:
            >>> registry.create_profile("orders", lambda p: p.create_map(Order, OrderDto))
        """
        return self.add_profile(NamedProfile(name, configure))

    def set_service_constructor(self, factory: ServiceConstructorProtocol) -> None:
        """Replace the factory used to construct profile types and destination objects."""
        self.service_constructor = factory

    def seal(self) -> None:
        """
        Freeze the registry before handing it to the compiler.

        Runs advanced.before_seal callbacks, then advanced.validators, each
        with this registry. Sealing an already sealed registry does nothing.
        """
        if self._sealed:
            return

        for callback in self.advanced.before_seal:
            callback(self)
        for validator in self.advanced.validators:
            validator(self)

        self._sealed = True
        logger.debug("Registry sealed with %d profile(s)", len(self._profiles))

    def _instantiate(self, profile_type: type) -> Profile:
        name = f"{profile_type.__module__}.{profile_type.__qualname__}"

        if not issubclass(profile_type, Profile):
            raise InstantiationError(f"{name} is not a Profile subclass", {"type": name})
        if inspect.isabstract(profile_type):
            raise InstantiationError(f"Cannot instantiate abstract profile {name}", {"type": name})

        try:
            profile = self.service_constructor(profile_type)
        except Exception as e:
            raise InstantiationError(f"Failed to construct profile {name}: {e}", {"type": name}) from e

        if not isinstance(profile, Profile):
            raise InstantiationError(
                f"Service constructor returned {type(profile).__name__} for profile {name}", {"type": name}
            )
        return profile
