"""Mapping of host types onto TypeScript type expressions."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from typescripter.descriptors import ModelRegistry, TypeDescriptor
from typescripter.errors import UnmappableTypeError

logger = logging.getLogger(__name__)

TS_NUMBER = "number"
TS_BOOLEAN = "boolean"
TS_STRING = "string"
TS_ANY = "any"
TS_VOID = "void"
TS_TIMESTAMP = "moment.Moment"

PRIMITIVE_TYPES: dict[str, str] = {
    # Numeric
    "Byte": TS_NUMBER,
    "SByte": TS_NUMBER,
    "Int16": TS_NUMBER,
    "Int32": TS_NUMBER,
    "Int64": TS_NUMBER,
    "UInt16": TS_NUMBER,
    "UInt32": TS_NUMBER,
    "UInt64": TS_NUMBER,
    "Single": TS_NUMBER,
    "Double": TS_NUMBER,
    "Decimal": TS_NUMBER,
    "byte": TS_NUMBER,
    "sbyte": TS_NUMBER,
    "short": TS_NUMBER,
    "ushort": TS_NUMBER,
    "int": TS_NUMBER,
    "uint": TS_NUMBER,
    "long": TS_NUMBER,
    "ulong": TS_NUMBER,
    "float": TS_NUMBER,
    "double": TS_NUMBER,
    "decimal": TS_NUMBER,
    # Boolean
    "Boolean": TS_BOOLEAN,
    "bool": TS_BOOLEAN,
    # String-like
    "String": TS_STRING,
    "string": TS_STRING,
    "Char": TS_STRING,
    "char": TS_STRING,
    "Guid": TS_STRING,
    "Uri": TS_STRING,
    "TimeSpan": TS_STRING,
    # Untyped payloads
    "Object": TS_ANY,
    "object": TS_ANY,
    "dynamic": TS_ANY,
    "JObject": TS_ANY,
    "JToken": TS_ANY,
    "JArray": TS_ANY,
    # No payload
    "Void": TS_VOID,
    "void": TS_VOID,
    "Task": TS_VOID,
}

DATE_TYPES = frozenset({"DateTime", "DateTimeOffset"})

SEQUENCE_TYPES = frozenset(
    {
        "Array",
        "IEnumerable",
        "ICollection",
        "IList",
        "List",
        "IReadOnlyList",
        "IReadOnlyCollection",
        "HashSet",
        "ISet",
        "Collection",
    }
)

DICTIONARY_TYPES = frozenset({"Dictionary", "IDictionary", "IReadOnlyDictionary"})

# Wrappers whose single argument carries the actual shape
TRANSPARENT_WRAPPERS = frozenset({"Nullable", "Task", "ValueTask"})


@dataclass(frozen=True)
class MappedType:
    """TypeScript expression for a host type plus its classification."""

    expression: str
    is_model: bool = False
    is_model_collection: bool = False
    is_date: bool = False
    is_primitive: bool = False
    model_name: str | None = None


class TypeMapper:
    """Translate TypeDescriptors into TypeScript type expressions.

    Mapping is pure: the same descriptor always yields the same MappedType,
    and results are cached per descriptor.
    """

    def __init__(
        self,
        registry: ModelRegistry,
        overrides: Mapping[str, str] | None = None,
    ) -> None:
        """Initialise the mapper.

        Args:
            registry: Model types imported into the generated module
            overrides: Extra simple type names mapped to fixed TS expressions

        """
        self._registry = registry
        self._overrides = dict(overrides or {})
        self._cache: dict[TypeDescriptor, MappedType] = {}

    def map(self, descriptor: TypeDescriptor) -> MappedType:
        """Map a host type to its TypeScript representation.

        Args:
            descriptor: Host type to map

        Returns:
            MappedType with expression and classification flags

        Raises:
            UnmappableTypeError: If the type has no TypeScript representation

        """
        cached = self._cache.get(descriptor)
        if cached is not None:
            return cached
        mapped = self._map_uncached(descriptor)
        self._cache[descriptor] = mapped
        return mapped

    def _map_uncached(self, descriptor: TypeDescriptor) -> MappedType:
        name = descriptor.simple_name
        arguments = descriptor.generic_arguments

        if name in self._overrides:
            return MappedType(self._overrides[name], is_primitive=True)

        if self._registry.is_model(descriptor):
            return MappedType(name, is_model=True, model_name=name)

        if name in TRANSPARENT_WRAPPERS and len(arguments) == 1:
            return self.map(arguments[0])

        if name in DATE_TYPES and not arguments:
            return MappedType(TS_TIMESTAMP, is_date=True, is_primitive=True)

        if name in PRIMITIVE_TYPES and not arguments:
            return MappedType(PRIMITIVE_TYPES[name], is_primitive=True)

        if name in SEQUENCE_TYPES:
            return self._map_sequence(descriptor)

        if name in DICTIONARY_TYPES:
            return self._map_dictionary(descriptor)

        raise UnmappableTypeError(str(descriptor))

    def _map_sequence(self, descriptor: TypeDescriptor) -> MappedType:
        if len(descriptor.generic_arguments) != 1:
            raise UnmappableTypeError(
                str(descriptor), "sequences need exactly one element type"
            )
        element = self.map(descriptor.generic_arguments[0])
        expression = element.expression
        if " " in expression:
            expression = f"({expression})"
        return MappedType(
            f"{expression}[]",
            is_model_collection=element.is_model,
            model_name=element.model_name if element.is_model else None,
        )

    def _map_dictionary(self, descriptor: TypeDescriptor) -> MappedType:
        if len(descriptor.generic_arguments) != 2:
            raise UnmappableTypeError(
                str(descriptor), "dictionaries need a key and a value type"
            )
        # Keys are always serialized as JSON object property names
        self.map(descriptor.generic_arguments[0])
        value = self.map(descriptor.generic_arguments[1])
        return MappedType(f"{{ [key: string]: {value.expression} }}")
