"""Exception definitions for mapper-profiles."""


class MapperConfigurationError(Exception):
    """Base exception for mapping configuration errors."""

    def __init__(self, message: str, context: dict | None = None):
        """Initialize configuration error with message and optional context.

        Args:
            message: Human-readable error message
            context: Optional dict with error context (module names, types, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class ModuleResolutionError(MapperConfigurationError):
    """Raised when a scan target cannot be resolved to a module."""

    pass


class InstantiationError(MapperConfigurationError):
    """Raised when a profile type cannot be default-constructed."""

    pass


class IntrospectionError(MapperConfigurationError):
    """Raised when a candidate type or module cannot be fully inspected."""

    pass
