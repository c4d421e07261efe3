"""Configuration for the DataService generator."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Literal, Self

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from typescripter.errors import GeneratorConfigError
from typescripter.url_builder import normalize_base_path

logger = logging.getLogger(__name__)

BASE_PATH_ENV = "TYPESCRIPTER_BASE_PATH"
OUTPUT_DIR_ENV = "TYPESCRIPTER_OUTPUT_DIR"


class GeneratorConfig(BaseModel):
    """Configuration for DataServiceGenerator with Pydantic validation.

    Immutable and strict: unknown keys are rejected so that typos in the
    configuration file fail loudly.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_assignment=True)

    base_path: str = Field(
        default="",
        description="Base path of the API; blank disables generation",
    )
    output_dir: Path = Field(
        default=Path("."),
        description="Directory the generated module is written to",
    )
    module_name: str = Field(
        default="DataService",
        min_length=1,
        pattern=r"^[A-Za-z_$][A-Za-z0-9_$]*$",
        description="Service class name, also used as the file name",
    )
    controller_suffix: str = Field(
        default="Controller",
        description="Suffix stripped from controller names",
    )
    model_import_path: str = Field(
        default=".",
        min_length=1,
        description="Module specifier model classes are imported from",
    )
    duplicate_policy: Literal["strict", "lenient"] = Field(
        default="strict",
        description="strict drops controllers with duplicate method names; lenient emits them",
    )
    type_overrides: dict[str, str] = Field(
        default_factory=dict,
        description="Extra host type names mapped to fixed TypeScript expressions",
    )

    @field_validator("base_path")
    @classmethod
    def strip_base_path(cls, v: str) -> str:
        """Strip surrounding whitespace; a lone separator still enables generation."""
        return v.strip()

    @property
    def api_relative_path(self) -> str:
        """Base path without trailing separators, as stored in the generated module."""
        return normalize_base_path(self.base_path)

    @property
    def output_path(self) -> Path:
        """Full path of the generated module."""
        return self.output_dir / f"{self.module_name}.ts"

    @property
    def is_enabled(self) -> bool:
        """Generation is disabled when no base path is configured."""
        return bool(self.base_path)

    @classmethod
    def from_properties(cls, properties: dict[str, Any]) -> Self:
        """Create configuration from a properties dictionary.

        Missing ``base_path`` and ``output_dir`` fall back to the
        TYPESCRIPTER_BASE_PATH and TYPESCRIPTER_OUTPUT_DIR environment variables.

        Args:
            properties: Raw configuration properties

        Returns:
            Validated configuration object

        Raises:
            GeneratorConfigError: If validation fails

        """
        merged = dict(properties)
        if "base_path" not in merged and os.getenv(BASE_PATH_ENV) is not None:
            merged["base_path"] = os.environ[BASE_PATH_ENV]
        if "output_dir" not in merged and os.getenv(OUTPUT_DIR_ENV) is not None:
            merged["output_dir"] = os.environ[OUTPUT_DIR_ENV]

        try:
            return cls.model_validate(merged)
        except ValidationError as e:
            raise GeneratorConfigError(f"Invalid generator configuration: {e}") from e

    @classmethod
    def load(cls, path: Path) -> Self:
        """Load configuration from a YAML file.

        Args:
            path: Path to the configuration file

        Returns:
            Validated configuration object

        Raises:
            GeneratorConfigError: If the file cannot be read, parsed or validated

        """
        try:
            with open(path, encoding="utf-8") as f:
                properties = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise GeneratorConfigError(f"Failed to parse config {path}: {e}") from e
        except OSError as e:
            raise GeneratorConfigError(f"Failed to read config {path}: {e}") from e

        if properties is None:
            properties = {}
        if not isinstance(properties, dict):
            raise GeneratorConfigError(f"Invalid configuration format in {path}")

        logger.debug("Loaded generator configuration from %s", path)
        return cls.from_properties(properties)  # type: ignore[arg-type]
