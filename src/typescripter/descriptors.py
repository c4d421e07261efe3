"""Immutable descriptors of server-side controllers, methods and types.

Descriptors are plain structural data produced by an external discovery pass
(or loaded from a snapshot file). The generator only ever reads them.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import StrEnum
from typing import Any, override

from pydantic import BaseModel, ConfigDict, Field, field_validator

from typescripter.errors import DescriptorError

_TYPE_TOKEN = re.compile(r"\s*(?:(?P<name>[A-Za-z_][A-Za-z0-9_.`]*)|(?P<punct>\[\]|[<>,?]))")
_GENERIC_ARITY = re.compile(r"`\d+$")

_DESCRIPTOR_CONFIG = ConfigDict(frozen=True, extra="forbid")


class HttpVerb(StrEnum):
    """HTTP verbs a controller method can be bound to."""

    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"

    @property
    def client_method(self) -> str:
        """Name of the matching method on the Angular ``Http`` service."""
        return self.value.lower()

    @classmethod
    def parse(cls, text: str) -> HttpVerb:
        """Parse a verb annotation.

        Accepts plain verbs in any case (``get``, ``POST``) and attribute
        spellings (``HttpGet``, ``HttpDeleteAttribute``).

        Raises:
            DescriptorError: If the text names no supported verb

        """
        normalised = text.strip()
        if normalised.endswith("Attribute"):
            normalised = normalised[: -len("Attribute")]
        if normalised.lower().startswith("http") and len(normalised) > 4:
            normalised = normalised[4:]
        try:
            return cls(normalised.upper())
        except ValueError as e:
            raise DescriptorError(
                f"Unsupported HTTP verb annotation '{text}'. "
                f"Supported: {[verb.value for verb in cls]}"
            ) from e


class TypeDescriptor(BaseModel):
    """A host type: name, ordered generic arguments and model marker."""

    model_config = _DESCRIPTOR_CONFIG

    name: str = Field(min_length=1, description="Host type name, optionally namespaced")
    generic_arguments: tuple[TypeDescriptor, ...] = Field(
        default=(), description="Generic type arguments in declaration order"
    )
    is_model: bool = Field(
        default=False, description="Whether the type is a registered model type"
    )

    @field_validator("generic_arguments", mode="before")
    @classmethod
    def parse_string_arguments(cls, v: Any) -> Any:  # noqa: ANN401
        """Allow generic arguments to be written in host notation."""
        if isinstance(v, list | tuple):
            return tuple(_coerce_type(item) for item in v)
        return v

    @property
    def simple_name(self) -> str:
        """Name without namespace qualifier or generic arity suffix."""
        return _GENERIC_ARITY.sub("", self.name.rsplit(".", 1)[-1])

    @classmethod
    def parse(cls, text: str) -> TypeDescriptor:
        """Parse host type notation into a descriptor.

        Supports generics (``Dictionary<String, List<User>>``), the nullable
        shorthand (``Int32?``) and array suffixes (``User[]``).

        Raises:
            DescriptorError: If the text is not well-formed

        """
        tokens = _tokenize(text)
        parser = _TypeParser(tokens, text)
        descriptor = parser.parse_type()
        parser.expect_end()
        return descriptor

    def mark_models(self, model_names: Iterable[str]) -> TypeDescriptor:
        """Return a copy with ``is_model`` set for every registered model name."""
        names = frozenset(model_names)
        arguments = tuple(arg.mark_models(names) for arg in self.generic_arguments)
        return self.model_copy(
            update={
                "generic_arguments": arguments,
                "is_model": self.is_model or self.simple_name in names,
            }
        )

    @override
    def __str__(self) -> str:
        """Render back to host notation."""
        if not self.generic_arguments:
            return self.name
        inner = ", ".join(str(arg) for arg in self.generic_arguments)
        return f"{self.name}<{inner}>"


def _coerce_type(v: Any) -> Any:  # noqa: ANN401
    # Validators must raise ValueError for pydantic to report a ValidationError
    if isinstance(v, str):
        try:
            return TypeDescriptor.parse(v)
        except DescriptorError as e:
            raise ValueError(str(e)) from e
    return v


class ParameterDescriptor(BaseModel):
    """A method parameter."""

    model_config = _DESCRIPTOR_CONFIG

    name: str = Field(min_length=1)
    type: TypeDescriptor

    @field_validator("type", mode="before")
    @classmethod
    def parse_type(cls, v: Any) -> Any:  # noqa: ANN401
        """Accept host notation strings for the parameter type."""
        return _coerce_type(v)


class MethodDescriptor(BaseModel):
    """A controller method with its signature and optional verb annotation."""

    model_config = _DESCRIPTOR_CONFIG

    name: str = Field(min_length=1)
    parameters: tuple[ParameterDescriptor, ...] = ()
    return_type: TypeDescriptor = TypeDescriptor(name="Void")
    verb: HttpVerb | None = Field(
        default=None, description="Explicit verb annotation, wins over naming"
    )
    visibility: str = "public"
    is_static: bool = False
    declaring_type: str | None = Field(
        default=None,
        description="Type that declares the method; None means the owning controller",
    )

    @field_validator("return_type", mode="before")
    @classmethod
    def parse_return_type(cls, v: Any) -> Any:  # noqa: ANN401
        """Accept host notation strings for the return type."""
        return _coerce_type(v)

    @field_validator("verb", mode="before")
    @classmethod
    def parse_verb(cls, v: Any) -> Any:  # noqa: ANN401
        """Accept verb annotations in plain or attribute spelling."""
        if isinstance(v, str):
            try:
                return HttpVerb.parse(v)
            except DescriptorError as e:
                raise ValueError(str(e)) from e
        return v


class ControllerDescriptor(BaseModel):
    """A server-side controller and its methods."""

    model_config = _DESCRIPTOR_CONFIG

    name: str = Field(min_length=1)
    methods: tuple[MethodDescriptor, ...] = ()

    def resource_name(self, suffix: str = "Controller") -> str:
        """Controller name with the controller suffix removed."""
        if suffix and self.name.endswith(suffix) and len(self.name) > len(suffix):
            return self.name[: -len(suffix)]
        return self.name

    def exposed_methods(self) -> list[MethodDescriptor]:
        """Public instance methods declared on this controller itself."""
        return [
            method
            for method in self.methods
            if method.visibility == "public"
            and not method.is_static
            and method.declaring_type in (None, self.name)
        ]


class ModelRegistry(BaseModel):
    """Set of model type names imported into the generated module."""

    model_config = _DESCRIPTOR_CONFIG

    models: frozenset[str] = frozenset()

    def is_model(self, descriptor: TypeDescriptor) -> bool:
        """Check whether a type descriptor refers to a registered model."""
        return descriptor.is_model or descriptor.simple_name in self.models

    def sorted_names(self) -> list[str]:
        """Model names in import order."""
        return sorted(self.models)


# =============================================================================
# Host type notation parser
# =============================================================================


def _tokenize(text: str) -> list[str]:
    tokens: list[str] = []
    position = 0
    stripped = text.rstrip()
    while position < len(stripped):
        match = _TYPE_TOKEN.match(stripped, position)
        if not match:
            raise DescriptorError(
                f"Invalid type expression '{text}' at position {position}"
            )
        tokens.append(match.group("name") or match.group("punct"))
        position = match.end()
    if not tokens:
        raise DescriptorError("Type expression must not be empty")
    return tokens


class _TypeParser:
    """Recursive descent parser over type expression tokens."""

    def __init__(self, tokens: list[str], source: str) -> None:
        self._tokens = tokens
        self._source = source
        self._index = 0

    def _peek(self) -> str | None:
        return self._tokens[self._index] if self._index < len(self._tokens) else None

    def _advance(self) -> str:
        token = self._peek()
        if token is None:
            raise DescriptorError(f"Unexpected end of type expression '{self._source}'")
        self._index += 1
        return token

    def parse_type(self) -> TypeDescriptor:
        name = self._advance()
        if name in {"<", ">", ",", "?", "[]"}:
            raise DescriptorError(
                f"Expected a type name in '{self._source}', found '{name}'"
            )

        arguments: list[TypeDescriptor] = []
        if self._peek() == "<":
            self._advance()
            arguments.append(self.parse_type())
            while self._peek() == ",":
                self._advance()
                arguments.append(self.parse_type())
            if self._peek() != ">":
                raise DescriptorError(f"Unclosed generic arguments in '{self._source}'")
            self._advance()

        descriptor = TypeDescriptor(name=name, generic_arguments=tuple(arguments))
        while self._peek() in {"?", "[]"}:
            wrapper = "Nullable" if self._advance() == "?" else "Array"
            descriptor = TypeDescriptor(name=wrapper, generic_arguments=(descriptor,))
        return descriptor

    def expect_end(self) -> None:
        if self._peek() is not None:
            raise DescriptorError(
                f"Unexpected '{self._peek()}' in type expression '{self._source}'"
            )
