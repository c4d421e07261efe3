"""Structured diagnostics collected during generation.

Non-fatal conditions never stop generation. They are collected here and
returned to the caller next to the generated module text.
"""

import logging
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class DiagnosticKind(StrEnum):
    """Kinds of condition reported during generation."""

    UNMAPPABLE_TYPE = "UnmappableTypeError"
    UNRESOLVABLE_VERB = "UnresolvableVerbWarning"
    DUPLICATE_METHOD_NAME = "DuplicateMethodNameWarning"
    EXCESS_POST_PARAMETER = "ExcessPostParameterWarning"


class Severity(StrEnum):
    """Diagnostic severity."""

    WARNING = "warning"
    ERROR = "error"


class Diagnostic(BaseModel):
    """A single reportable condition tied to a controller and method."""

    model_config = ConfigDict(frozen=True)

    kind: DiagnosticKind
    severity: Severity = Severity.WARNING
    controller: str
    method: str | None = None
    message: str

    @property
    def location(self) -> str:
        """Dotted ``Controller.Method`` location."""
        return f"{self.controller}.{self.method}" if self.method else self.controller


class DiagnosticLog:
    """Ordered collection of diagnostics for one generation run."""

    def __init__(self) -> None:
        """Initialise an empty log."""
        self._entries: list[Diagnostic] = []

    def record(
        self,
        kind: DiagnosticKind,
        controller: str,
        method: str | None,
        message: str,
        severity: Severity = Severity.WARNING,
    ) -> Diagnostic:
        """Record a diagnostic and log it.

        Args:
            kind: Kind of condition
            controller: Controller name the condition belongs to
            method: Method name, if the condition is method-scoped
            message: Human-readable description
            severity: Warning (generation degraded) or error (output dropped)

        Returns:
            The recorded diagnostic

        """
        diagnostic = Diagnostic(
            kind=kind,
            severity=severity,
            controller=controller,
            method=method,
            message=message,
        )
        self._entries.append(diagnostic)
        log_level = logging.ERROR if severity is Severity.ERROR else logging.WARNING
        logger.log(log_level, "%s [%s]: %s", diagnostic.location, kind.value, message)
        return diagnostic

    @property
    def entries(self) -> list[Diagnostic]:
        """All diagnostics in recording order."""
        return list(self._entries)

    @property
    def warnings(self) -> list[Diagnostic]:
        """Diagnostics with warning severity."""
        return [d for d in self._entries if d.severity is Severity.WARNING]

    @property
    def errors(self) -> list[Diagnostic]:
        """Diagnostics with error severity."""
        return [d for d in self._entries if d.severity is Severity.ERROR]

    @property
    def has_errors(self) -> bool:
        """Whether any error-severity diagnostic was recorded."""
        return any(d.severity is Severity.ERROR for d in self._entries)

    def count(self, kind: DiagnosticKind) -> int:
        """Number of diagnostics of the given kind."""
        return sum(1 for d in self._entries if d.kind is kind)

    def __len__(self) -> int:
        """Return the number of recorded diagnostics."""
        return len(self._entries)


class GenerationSummary(BaseModel):
    """Counts reported after a generation run."""

    model_config = ConfigDict(frozen=True)

    controllers: int = Field(default=0, description="Controllers processed")
    methods_processed: int = Field(default=0, description="Exposed methods inspected")
    methods_emitted: int = Field(default=0, description="Methods written to the module")
    methods_skipped: int = Field(default=0, description="Methods left out of the module")
