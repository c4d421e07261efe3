"""Error classes for typescripter.

This module provides:
- TypeScripterError: Base exception class for all generator errors
- DescriptorError, SnapshotLoadError: Descriptor input exceptions
- GeneratorConfigError: Configuration exception
- UnmappableTypeError: Type mapping exception (skips one method)
- PreambleError, ModuleWriteError: Fatal run exceptions
"""


class TypeScripterError(Exception):
    """Base exception for all typescripter errors."""

    pass


class DescriptorError(TypeScripterError):
    """Raised when a descriptor cannot be built from its input."""

    pass


class SnapshotLoadError(TypeScripterError):
    """Raised when a descriptor snapshot cannot be loaded or validated."""

    pass


class GeneratorConfigError(TypeScripterError):
    """Raised when generator configuration is invalid."""

    pass


class UnmappableTypeError(TypeScripterError):
    """Raised when a host type has no TypeScript representation."""

    def __init__(self, type_name: str, reason: str | None = None) -> None:
        """Initialise with the offending type name.

        Args:
            type_name: Host type name as written in the descriptor
            reason: Optional detail about why mapping failed

        """
        message = f"No TypeScript mapping for type '{type_name}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.type_name = type_name


class PreambleError(TypeScripterError):
    """Raised when the module preamble cannot be rendered."""

    pass


class ModuleWriteError(TypeScripterError):
    """Raised when the generated module cannot be persisted."""

    pass
