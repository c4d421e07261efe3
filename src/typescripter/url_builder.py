"""URL template construction for generated client methods."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from typescripter.descriptors import HttpVerb, ParameterDescriptor
from typescripter.naming import camelize
from typescripter.type_mapper import TypeMapper

SEPARATOR = "/"
BASE_PATH_REFERENCE = "${this.apiRelativePath}"
NULLABLE_WRAPPER = "Nullable"


def normalize_base_path(base_path: str) -> str:
    """Strip surrounding whitespace and trailing separators from a base path."""
    return base_path.strip().rstrip(SEPARATOR)


def combine_uri(*parts: str) -> str:
    """Join URL segments with exactly one separator between each pair.

    Leading and trailing separators on the segments are collapsed; empty
    segments are ignored. A leading separator on the first segment is kept.
    """
    segments = [part for part in parts if part and part.strip(SEPARATOR)]
    if not segments:
        return ""

    combined = segments[0].rstrip(SEPARATOR)
    for segment in segments[1:]:
        combined = f"{combined}{SEPARATOR}{segment.strip(SEPARATOR)}"
    return combined


@dataclass(frozen=True)
class UrlTemplate:
    """A TypeScript template-literal URL plus the request body reference."""

    path: str
    query: str = ""
    body: str | None = None
    excess_parameters: tuple[str, ...] = field(default=())

    def render(self) -> str:
        """Render the URL as it appears inside the template literal."""
        return f"{self.path}?{self.query}" if self.query else self.path


class UrlBuilder:
    """Builds URL templates from controller and method names."""

    def __init__(self, type_mapper: TypeMapper) -> None:
        """Initialise with the mapper used to detect date parameters.

        Args:
            type_mapper: Mapper for parameter types

        """
        self._type_mapper = type_mapper

    def build(
        self,
        base_path: str,
        resource: str,
        method_name: str,
        verb: HttpVerb,
        parameters: Sequence[ParameterDescriptor],
    ) -> UrlTemplate:
        """Build the URL template for one method.

        Args:
            base_path: Base path expression, usually the apiRelativePath reference
            resource: Controller resource name (controller name without suffix)
            method_name: Host method name
            verb: Resolved HTTP verb
            parameters: Method parameters in declaration order

        Returns:
            UrlTemplate; for POST, ``excess_parameters`` lists parameters that
            were not bound because only the first one becomes the body

        Raises:
            UnmappableTypeError: If a parameter type cannot be mapped

        """
        path = combine_uri(base_path, camelize(resource), camelize(method_name))

        if verb is HttpVerb.POST:
            body = parameters[0].name if parameters else None
            excess = tuple(parameter.name for parameter in parameters[1:])
            return UrlTemplate(path=path, body=body, excess_parameters=excess)

        query = "&".join(self._query_pair(parameter) for parameter in parameters)
        return UrlTemplate(path=path, query=query)

    def _query_pair(self, parameter: ParameterDescriptor) -> str:
        name = parameter.name
        if not self._type_mapper.map(parameter.type).is_date:
            return f"{name}=${{{name}}}"
        # Optional dates may be null on the client
        if parameter.type.simple_name == NULLABLE_WRAPPER:
            return f"{name}=${{{name} ? {name}.toISOString() : ''}}"
        return f"{name}=${{{name}.toISOString()}}"
