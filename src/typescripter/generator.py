"""DataService generator: descriptor snapshot in, TypeScript module out."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from typescripter.descriptors import ControllerDescriptor, MethodDescriptor
from typescripter.diagnostics import (
    Diagnostic,
    DiagnosticKind,
    DiagnosticLog,
    GenerationSummary,
    Severity,
)
from typescripter.emitter import ControllerBlock, ModuleEmitter, alphabetical_key
from typescripter.errors import UnmappableTypeError
from typescripter.generator_config import GeneratorConfig
from typescripter.http_semantics import resolve_verb
from typescripter.method_builder import MethodBlock, MethodSignatureBuilder
from typescripter.snapshot import DescriptorSnapshot
from typescripter.type_mapper import TypeMapper
from typescripter.url_builder import BASE_PATH_REFERENCE, UrlBuilder
from typescripter.writer import write_if_changed

logger = logging.getLogger(__name__)


class GenerationResult(BaseModel):
    """Outcome of one generation run."""

    model_config = ConfigDict(frozen=True)

    module_text: str = ""
    output_path: Path
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    summary: GenerationSummary = Field(default_factory=GenerationSummary)
    generated_modules: list[str] = Field(
        default_factory=list, description="Names of the generated modules"
    )
    written: bool = False

    @property
    def has_errors(self) -> bool:
        """Whether any error-severity diagnostic was recorded."""
        return any(d.severity is Severity.ERROR for d in self.diagnostics)


class DataServiceGenerator:
    """Generates the DataService client module from a descriptor snapshot.

    The run is a synchronous batch transform. Problems with one method never
    stop its siblings, and problems with one controller never stop the
    others; they are reported as diagnostics instead. Only preamble and write
    failures abort the run.
    """

    def __init__(self, config: GeneratorConfig) -> None:
        """Initialise the generator with validated configuration.

        Args:
            config: Generator configuration

        """
        self._config = config

    def generate(self, snapshot: DescriptorSnapshot) -> GenerationResult:
        """Generate the module text without touching the filesystem.

        Args:
            snapshot: Controllers and models to generate from

        Returns:
            GenerationResult with module text, diagnostics and summary

        Raises:
            PreambleError: If the module preamble cannot be rendered

        """
        config = self._config
        if not config.is_enabled:
            logger.info("No base path configured, skipping DataService generation")
            return GenerationResult(output_path=config.output_path)

        registry = snapshot.registry
        type_mapper = TypeMapper(registry, config.type_overrides)
        url_builder = UrlBuilder(type_mapper)
        method_builder = MethodSignatureBuilder(type_mapper)
        diagnostics = DiagnosticLog()

        blocks: list[ControllerBlock] = []
        methods_processed = 0
        methods_emitted = 0

        for controller in sorted(
            snapshot.controllers, key=lambda c: alphabetical_key(c.name)
        ):
            methods = controller.exposed_methods()
            methods_processed += len(methods)

            duplicates = self._find_duplicates(controller, methods, diagnostics)
            if duplicates and config.duplicate_policy == "strict":
                logger.error(
                    "Skipping controller %s: duplicate method names %s",
                    controller.name,
                    sorted(duplicates),
                )
                continue

            method_blocks = [
                block
                for method in methods
                if (
                    block := self._build_method(
                        controller, method, url_builder, method_builder, diagnostics
                    )
                )
                is not None
            ]
            methods_emitted += len(method_blocks)
            blocks.append(
                ControllerBlock(
                    resource_name=controller.resource_name(config.controller_suffix),
                    methods=tuple(method_blocks),
                )
            )

        emitter = ModuleEmitter(config.module_name, config.model_import_path)
        module_text = emitter.emit(blocks, registry, config.api_relative_path)

        summary = GenerationSummary(
            controllers=len(snapshot.controllers),
            methods_processed=methods_processed,
            methods_emitted=methods_emitted,
            methods_skipped=methods_processed - methods_emitted,
        )
        logger.info(
            "Generated a data service with %d controllers and %d methods.",
            summary.controllers,
            summary.methods_processed,
        )
        return GenerationResult(
            module_text=module_text,
            output_path=config.output_path,
            diagnostics=diagnostics.entries,
            summary=summary,
            generated_modules=[config.module_name],
        )

    def write(self, result: GenerationResult) -> GenerationResult:
        """Persist a generation result if its text differs from the file on disk.

        Args:
            result: Result of ``generate``

        Returns:
            Copy of the result with ``written`` set

        Raises:
            ModuleWriteError: If the module cannot be written

        """
        if not result.generated_modules:
            return result
        written = write_if_changed(result.module_text, result.output_path)
        return result.model_copy(update={"written": written})

    def run(self, snapshot: DescriptorSnapshot) -> GenerationResult:
        """Generate and write in one step."""
        return self.write(self.generate(snapshot))

    def _find_duplicates(
        self,
        controller: ControllerDescriptor,
        methods: list[MethodDescriptor],
        diagnostics: DiagnosticLog,
    ) -> set[str]:
        """Record one diagnostic per method whose name collides case-insensitively."""
        severity = (
            Severity.ERROR if self._config.duplicate_policy == "strict" else Severity.WARNING
        )
        seen: dict[str, str] = {}
        duplicates: set[str] = set()
        for method in sorted(methods, key=lambda m: alphabetical_key(m.name)):
            key = method.name.casefold()
            if key in seen:
                duplicates.add(method.name)
                diagnostics.record(
                    DiagnosticKind.DUPLICATE_METHOD_NAME,
                    controller.name,
                    method.name,
                    f"Duplicate method name '{method.name}' (collides with "
                    f"'{seen[key]}'); overloads are not supported",
                    severity,
                )
            else:
                seen[key] = method.name
        return duplicates

    def _build_method(
        self,
        controller: ControllerDescriptor,
        method: MethodDescriptor,
        url_builder: UrlBuilder,
        method_builder: MethodSignatureBuilder,
        diagnostics: DiagnosticLog,
    ) -> MethodBlock | None:
        """Build one method block, recording a diagnostic and returning None on skip."""
        verb = resolve_verb(method)
        if verb is None:
            diagnostics.record(
                DiagnosticKind.UNRESOLVABLE_VERB,
                controller.name,
                method.name,
                f"The method '{controller.name}.{method.name}' does not have a "
                "recognizable HTTP method",
            )
            return None

        try:
            url = url_builder.build(
                BASE_PATH_REFERENCE,
                controller.resource_name(self._config.controller_suffix),
                method.name,
                verb,
                method.parameters,
            )
            block = method_builder.build(method, verb, url)
        except UnmappableTypeError as e:
            diagnostics.record(
                DiagnosticKind.UNMAPPABLE_TYPE,
                controller.name,
                method.name,
                str(e),
                Severity.ERROR,
            )
            return None

        if url.excess_parameters:
            diagnostics.record(
                DiagnosticKind.EXCESS_POST_PARAMETER,
                controller.name,
                method.name,
                "Only POST methods with zero or one parameter are supported; "
                f"ignoring {list(url.excess_parameters)}",
            )
        return block
