"""Loading of descriptor snapshots produced by a discovery pass.

A snapshot lists the model type names and the controllers of a backend:

.. code-block:: yaml

    models: [User, Address]
    controllers:
      - name: UserController
        methods:
          - name: GetUser
            parameters:
              - {name: id, type: Int32}
            return_type: User
          - name: Search
            verb: HttpPost
            parameters:
              - {name: query, type: "List<String>"}
            return_type: "IEnumerable<User>"

Types are written in host notation or as ``{name, generic_arguments}``
mappings.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from typescripter.descriptors import (
    ControllerDescriptor,
    MethodDescriptor,
    ModelRegistry,
    ParameterDescriptor,
)
from typescripter.errors import SnapshotLoadError

logger = logging.getLogger(__name__)

__all__ = [
    "DescriptorSnapshot",
    "SnapshotLoader",
]


class DescriptorSnapshot(BaseModel):
    """Controllers and models captured from the backend at one point in time."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    models: tuple[str, ...] = Field(default=(), description="Model type names")
    controllers: tuple[ControllerDescriptor, ...] = Field(
        default=(), description="Controller descriptors"
    )

    @field_validator("models")
    @classmethod
    def validate_unique_models(cls, models: tuple[str, ...]) -> tuple[str, ...]:
        """Validate that model names are unique."""
        duplicates = sorted({name for name in models if models.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate model names found: {duplicates}")
        return models

    @field_validator("controllers")
    @classmethod
    def validate_unique_controllers(
        cls, controllers: tuple[ControllerDescriptor, ...]
    ) -> tuple[ControllerDescriptor, ...]:
        """Validate that controller names are unique."""
        names = [controller.name for controller in controllers]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate controller names found: {duplicates}")
        return controllers

    @property
    def registry(self) -> ModelRegistry:
        """Model registry built from the snapshot's model names."""
        return ModelRegistry(models=frozenset(self.models))

    def with_model_flags(self) -> DescriptorSnapshot:
        """Return a copy whose type descriptors carry ``is_model`` markers."""
        names = frozenset(self.models)
        controllers = tuple(
            controller.model_copy(
                update={"methods": tuple(_mark_method(m, names) for m in controller.methods)}
            )
            for controller in self.controllers
        )
        return self.model_copy(update={"controllers": controllers})

    @property
    def method_count(self) -> int:
        """Number of exposed methods across all controllers."""
        return sum(len(c.exposed_methods()) for c in self.controllers)


def _mark_method(method: MethodDescriptor, names: frozenset[str]) -> MethodDescriptor:
    parameters = tuple(
        ParameterDescriptor(name=p.name, type=p.type.mark_models(names))
        for p in method.parameters
    )
    return method.model_copy(
        update={
            "parameters": parameters,
            "return_type": method.return_type.mark_models(names),
        }
    )


class SnapshotLoader:
    """Loads descriptor snapshots from YAML or JSON files."""

    @classmethod
    def load(cls, path: Path, controller_suffix: str = "Controller") -> DescriptorSnapshot:
        """Load and validate a snapshot file.

        Args:
            path: YAML or JSON snapshot file
            controller_suffix: Suffix every controller name must end with

        Returns:
            Validated snapshot with model markers applied

        Raises:
            SnapshotLoadError: If the file cannot be read, parsed or validated

        """
        data = cls._read(path)
        snapshot = cls.from_dict(data, source=str(path))
        cls._check_controller_suffix(snapshot, controller_suffix, path)
        logger.info(
            "Loaded snapshot %s: %d controllers, %d models",
            path,
            len(snapshot.controllers),
            len(snapshot.models),
        )
        return snapshot

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: str = "<dict>") -> DescriptorSnapshot:
        """Build a snapshot from already-parsed data.

        Raises:
            SnapshotLoadError: If validation fails

        """
        try:
            snapshot = DescriptorSnapshot.model_validate(data)
        except ValidationError as e:
            raise SnapshotLoadError(f"Invalid descriptor snapshot {source}: {e}") from e
        return snapshot.with_model_flags()

    @staticmethod
    def _read(path: Path) -> dict[str, Any]:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise SnapshotLoadError(f"Failed to parse snapshot {path}: {e}") from e
        except OSError as e:
            raise SnapshotLoadError(f"Failed to read snapshot {path}: {e}") from e

        if not isinstance(data, dict):
            raise SnapshotLoadError(f"Invalid snapshot format in {path}")
        return data  # type: ignore[return-value]

    @staticmethod
    def _check_controller_suffix(
        snapshot: DescriptorSnapshot, suffix: str, path: Path
    ) -> None:
        if not suffix:
            return
        invalid = [c.name for c in snapshot.controllers if not c.name.endswith(suffix)]
        if invalid:
            raise SnapshotLoadError(
                f"Controllers in {path} must end with '{suffix}': {sorted(invalid)}"
            )
