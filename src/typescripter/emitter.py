"""Rendering of the complete DataService module text."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from typescripter.descriptors import ModelRegistry
from typescripter.errors import PreambleError
from typescripter.method_builder import MethodBlock
from typescripter.naming import camelize

_TS_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

PREAMBLE: tuple[str, ...] = (
    "// tslint:disable:max-line-length",
    "// tslint:disable:member-ordering",
    "import { Injectable } from '@angular/core';",
    "import { Http, Response } from '@angular/http';",
    "import { Observable } from 'rxjs';",
    "import * as moment from 'moment';",
)

ERROR_HANDLER: tuple[str, ...] = (
    "\tprivate handleError(error: Response | any) {",
    "\t\tlet errMsg: string;",
    "\t\tif (error instanceof Response) {",
    "\t\t\tconst hdr = error.headers.get('ExceptionMessage');",
    "\t\t\tconst body = error.json() || '';",
    "\t\t\tconst err = body.error || JSON.stringify(body);",
    "\t\t\terrMsg = `${error.status}${hdr ? ' - ' + hdr : ''} - ${error.statusText || ''} ${err}`;",
    "\t\t} else {",
    "\t\t\terrMsg = error.message ? error.message : error.toString();",
    "\t\t}",
    "\t\tconsole.error(errMsg);",
    "\t\treturn Observable.throw(errMsg);",
    "\t}",
)


def alphabetical_key(name: str) -> tuple[str, str]:
    """Sort key giving case-insensitive alphabetical order with a stable tiebreak."""
    return (name.casefold(), name)


@dataclass(frozen=True)
class ControllerBlock:
    """A controller grouping with its generated methods."""

    resource_name: str
    methods: tuple[MethodBlock, ...] = field(default=())

    @property
    def member_name(self) -> str:
        """Property name of the grouping on the DataService class."""
        return camelize(self.resource_name)


class ModuleEmitter:
    """Renders controller blocks into one TypeScript module."""

    def __init__(self, class_name: str = "DataService", model_import_path: str = ".") -> None:
        """Initialise the emitter.

        Args:
            class_name: Name of the exported service class
            model_import_path: Module specifier model classes are imported from

        """
        self._class_name = class_name
        self._model_import_path = model_import_path

    def emit(
        self,
        controllers: Iterable[ControllerBlock],
        registry: ModelRegistry,
        base_path: str,
    ) -> str:
        """Render the module text.

        Controllers are ordered by resource name and methods by name so that
        regeneration from the same snapshot is byte-identical.

        Args:
            controllers: Controller blocks in any order
            registry: Models to import
            base_path: Normalised base path stored in ``apiRelativePath``

        Returns:
            Complete module text with ``\\n`` line endings

        Raises:
            PreambleError: If the class name or a model name is not a valid
                TypeScript identifier

        """
        lines = self._render_preamble(registry)
        lines.extend(
            [
                "",
                "@Injectable()",
                f"export class {self._class_name} {{",
                "\tconstructor(private http: Http) {}",
                "",
                f"\tapiRelativePath: string = '{_escape_single_quoted(base_path)}';",
                "",
            ]
        )

        for controller in sorted(
            controllers, key=lambda block: alphabetical_key(block.resource_name)
        ):
            lines.append(f"\t{controller.member_name} = {{")
            for method in sorted(
                controller.methods, key=lambda block: alphabetical_key(block.source_name)
            ):
                lines.append(method.render())
            lines.append("\t};")

        lines.append("")
        lines.extend(ERROR_HANDLER)
        lines.append("}")
        return "\n".join(lines) + "\n"

    def _render_preamble(self, registry: ModelRegistry) -> list[str]:
        if not _TS_IDENTIFIER.match(self._class_name):
            raise PreambleError(
                f"Service class name '{self._class_name}' is not a valid TypeScript identifier"
            )
        lines = list(PREAMBLE)
        for model_name in registry.sorted_names():
            if not _TS_IDENTIFIER.match(model_name):
                raise PreambleError(
                    f"Model name '{model_name}' is not a valid TypeScript identifier"
                )
            lines.append(
                f"import {{ {model_name} }} from '{_escape_single_quoted(self._model_import_path)}';"
            )
        return lines


def _escape_single_quoted(text: str) -> str:
    return text.replace("\\", "\\\\").replace("'", "\\'")
