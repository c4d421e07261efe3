"""TypeScript DataService client generator.

Turns a snapshot of backend controller descriptors into one typed Angular
service module whose methods mirror the controller methods.

Pipeline: SnapshotLoader → DataServiceGenerator → write_if_changed
"""

from typescripter.descriptors import (
    ControllerDescriptor,
    HttpVerb,
    MethodDescriptor,
    ModelRegistry,
    ParameterDescriptor,
    TypeDescriptor,
)
from typescripter.diagnostics import (
    Diagnostic,
    DiagnosticKind,
    DiagnosticLog,
    GenerationSummary,
    Severity,
)
from typescripter.errors import (
    DescriptorError,
    GeneratorConfigError,
    ModuleWriteError,
    PreambleError,
    SnapshotLoadError,
    TypeScripterError,
    UnmappableTypeError,
)
from typescripter.generator import DataServiceGenerator, GenerationResult
from typescripter.generator_config import GeneratorConfig
from typescripter.snapshot import DescriptorSnapshot, SnapshotLoader
from typescripter.type_mapper import MappedType, TypeMapper

__all__ = [
    # Descriptors
    "ControllerDescriptor",
    "HttpVerb",
    "MethodDescriptor",
    "ModelRegistry",
    "ParameterDescriptor",
    "TypeDescriptor",
    # Diagnostics
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticLog",
    "GenerationSummary",
    "Severity",
    # Errors
    "DescriptorError",
    "GeneratorConfigError",
    "ModuleWriteError",
    "PreambleError",
    "SnapshotLoadError",
    "TypeScripterError",
    "UnmappableTypeError",
    # Generation
    "DataServiceGenerator",
    "DescriptorSnapshot",
    "GenerationResult",
    "GeneratorConfig",
    "MappedType",
    "SnapshotLoader",
    "TypeMapper",
]
