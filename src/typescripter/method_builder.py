"""Composition of TypeScript method entries from method descriptors."""

from __future__ import annotations

from dataclasses import dataclass

from typescripter.descriptors import HttpVerb, MethodDescriptor
from typescripter.naming import camelize
from typescripter.type_mapper import MappedType, TypeMapper
from typescripter.url_builder import UrlTemplate

METHOD_TEMPLATE = (
    "\t\t{name}: ({parameters}): Observable<{return_type}> => "
    "this.http.{http_method}(`{url}`{body})"
    ".map((res: Response) => {result_mapping})"
    ".catch(this.handleError),"
)


def result_mapping_expression(mapped: MappedType) -> str:
    """Expression turning the raw ``Response`` into the method's result.

    Model collections construct one instance per array element, in array
    order; single models construct one instance; everything else is returned
    as parsed JSON.
    """
    if mapped.is_model_collection:
        return f"res.json().map(r => new {mapped.model_name}(r))"
    if mapped.is_model:
        return f"new {mapped.model_name}(res.json())"
    return "res.json()"


@dataclass(frozen=True)
class MethodBlock:
    """A fully resolved method entry, ready to be rendered."""

    source_name: str
    name: str
    parameters: str
    return_type: str
    verb: HttpVerb
    url: UrlTemplate
    result_mapping: str

    def render(self) -> str:
        """Render the method as one property of the controller grouping."""
        body = ""
        if self.verb is HttpVerb.POST:
            body = f", {self.url.body or 'null'}"
        return METHOD_TEMPLATE.format(
            name=self.name,
            parameters=self.parameters,
            return_type=self.return_type,
            http_method=self.verb.client_method,
            url=self.url.render(),
            body=body,
            result_mapping=self.result_mapping,
        )


class MethodSignatureBuilder:
    """Builds MethodBlocks from method descriptors."""

    def __init__(self, type_mapper: TypeMapper) -> None:
        """Initialise with the mapper for parameter and return types.

        Args:
            type_mapper: Mapper shared across the generation run

        """
        self._type_mapper = type_mapper

    def build(
        self, method: MethodDescriptor, verb: HttpVerb, url: UrlTemplate
    ) -> MethodBlock:
        """Build the method block for one controller method.

        Args:
            method: Method descriptor
            verb: Resolved HTTP verb
            url: URL template built for the method

        Returns:
            MethodBlock for rendering

        Raises:
            UnmappableTypeError: If a parameter or the return type cannot be mapped

        """
        parameters = ", ".join(
            f"{parameter.name}: {self._type_mapper.map(parameter.type).expression}"
            for parameter in method.parameters
        )
        return_type = self._type_mapper.map(method.return_type)

        return MethodBlock(
            source_name=method.name,
            name=camelize(method.name),
            parameters=parameters,
            return_type=return_type.expression,
            verb=verb,
            url=url,
            result_mapping=result_mapping_expression(return_type),
        )
