"""Module scanner for locating candidate types in loaded modules."""

import importlib
import logging
import sys
from collections.abc import Iterable
from collections.abc import Iterator
from types import ModuleType
from typing import Any

from .exceptions import IntrospectionError
from .exceptions import ModuleResolutionError

logger = logging.getLogger(__name__)

# Modules of this package are never scanned: they define Profile itself and
# the synthetic annotation profile.
ENGINE_PACKAGE = __name__.rpartition(".")[0]


def resolve_module(target: Any) -> ModuleType:
    """
    Resolve a single scan target to a module.

    Supports three forms:
    1. Module object: used as-is
    2. Module name: "myapp.mappings" → imported with importlib
    3. Type: the module defining it ("myapp.mappings.OrderDto" → myapp.mappings)

    Args:
        target: Module, dotted module name, or representative type

    Returns:
        Resolved module

    Raises:
        ModuleResolutionError: If the target cannot be resolved to a module, including
            invalid names and modules that raise while being imported
    """
    if isinstance(target, ModuleType):
        return target

    if isinstance(target, str):
        try:
            return importlib.import_module(target)
        except ImportError as e:
            raise ModuleResolutionError(f"Module '{target}' could not be imported: {e}", {"module": target}) from e
        except (ValueError, TypeError) as e:
            # Empty or relative names
            raise ModuleResolutionError(f"Invalid module name '{target}': {e}", {"module": target}) from e
        except Exception as e:
            raise ModuleResolutionError(f"Module '{target}' failed while importing: {e}", {"module": target}) from e

    if isinstance(target, type):
        module = sys.modules.get(target.__module__)
        if module is None:
            raise ModuleResolutionError(
                f"Module '{target.__module__}' of type {target.__qualname__} is not loaded",
                {"module": target.__module__, "type": target.__qualname__},
            )
        return module

    raise ModuleResolutionError(
        f"Cannot resolve {target!r} to a module: expected a module, module name, or type",
        {"target": repr(target)},
    )


def resolve_modules(targets: Iterable[Any]) -> list[ModuleType]:
    """
    Resolve scan targets to modules, preserving order.

    A module reached through several targets (e.g. two types defined in
    the same module) is returned once.

    Raises:
        ModuleResolutionError: If any target cannot be resolved
    """
    modules: dict[str, ModuleType] = {}
    for target in targets:
        module = resolve_module(target)
        modules.setdefault(module.__name__, module)
    return list(modules.values())


def is_scannable(module: ModuleType) -> bool:
    """
    Check whether a module takes part in discovery.

    Excluded:
    - Dynamically created modules (no import spec and no source file)
    - Modules belonging to this package
    """
    if getattr(module, "__spec__", None) is None and getattr(module, "__file__", None) is None:
        logger.debug("Skipping dynamic module %s", module.__name__)
        return False

    name = module.__name__
    if name == ENGINE_PACKAGE or name.startswith(f"{ENGINE_PACKAGE}."):
        return False

    return True


def _iter_public_classes(namespace: dict[str, Any], module_name: str, owner: str | None) -> Iterator[type]:
    for name, obj in list(namespace.items()):
        if name.startswith("_") or not isinstance(obj, type):
            continue
        if obj.__module__ != module_name:
            # Imported, not defined here
            continue

        expected_qualname = f"{owner}.{name}" if owner else name
        if obj.__qualname__ != expected_qualname:
            # Alias of a class defined under another name
            continue

        yield obj
        yield from _iter_public_classes(vars(obj), module_name, obj.__qualname__)


def iter_defined_types(module: ModuleType) -> Iterator[type]:
    """
    Enumerate public classes defined in a module.

    Classes are yielded in declaration order, each followed by its public
    nested classes. Imported classes, aliases and names starting with an
    underscore are skipped.

    Raises:
        IntrospectionError: If the module namespace cannot be read
    """
    try:
        namespace = vars(module)
    except TypeError as e:
        raise IntrospectionError(
            f"Module {module!r} has no inspectable namespace", {"module": getattr(module, "__name__", None)}
        ) from e

    yield from _iter_public_classes(namespace, module.__name__, None)


def scan(targets: Iterable[Any]) -> list[type]:
    """
    Collect candidate types for one discovery pass.

    Args:
        targets: Modules, module names, or representative types

    Returns:
        Flat list of candidate types, module by module

    Raises:
        ModuleResolutionError: If any target cannot be resolved
        IntrospectionError: If a module cannot be inspected
    """
    modules = [module for module in resolve_modules(targets) if is_scannable(module)]
    candidates = [cls for module in modules for cls in iter_defined_types(module)]

    logger.debug("Scanned %d module(s), found %d candidate type(s)", len(modules), len(candidates))
    return candidates
