"""Mapper Profiles - Profile discovery and mapping configuration registry."""

from .annotations import AutoMapAnnotation
from .annotations import auto_map
from .exceptions import InstantiationError
from .exceptions import IntrospectionError
from .exceptions import MapperConfigurationError
from .exceptions import ModuleResolutionError
from .mappers import default_mappers
from .profile import Profile
from .protocols import ObjectMapperProtocol
from .protocols import ServiceConstructorProtocol
from .registry import AUTO_MAP_PROFILE_NAME
from .registry import DEFAULT_PROFILE_NAME
from .registry import ProfileRegistry
from .registry import default_service_constructor
from .schema import AdvancedConfiguration
from .schema import Ignore
from .schema import MapFrom
from .schema import MappingDeclaration
from .schema import MemberEffect
from .schema import MemberOverrideRule
from .schema import NullSubstitute
from .schema import SourceMember
from .schema import UseExistingValue

__all__ = [
    # Registry
    "ProfileRegistry",
    "AUTO_MAP_PROFILE_NAME",
    "DEFAULT_PROFILE_NAME",
    "default_service_constructor",
    "default_mappers",
    # Profiles and annotations
    "Profile",
    "auto_map",
    "AutoMapAnnotation",
    # Schemas
    "MappingDeclaration",
    "MemberOverrideRule",
    "MemberEffect",
    "Ignore",
    "MapFrom",
    "SourceMember",
    "NullSubstitute",
    "UseExistingValue",
    "AdvancedConfiguration",
    # Protocols
    "ServiceConstructorProtocol",
    "ObjectMapperProtocol",
    # Exceptions
    "MapperConfigurationError",
    "ModuleResolutionError",
    "InstantiationError",
    "IntrospectionError",
]

__version__ = "0.1.0"
