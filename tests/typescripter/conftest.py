"""Shared fixtures for typescripter tests."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from typescripter.descriptors import (
    ControllerDescriptor,
    MethodDescriptor,
    ModelRegistry,
    ParameterDescriptor,
)
from typescripter.generator_config import GeneratorConfig
from typescripter.snapshot import DescriptorSnapshot
from typescripter.type_mapper import TypeMapper


@pytest.fixture
def registry() -> ModelRegistry:
    """Registry with the models used across the tests."""
    return ModelRegistry(models=frozenset({"User", "Address"}))


@pytest.fixture
def type_mapper(registry: ModelRegistry) -> TypeMapper:
    """TypeMapper over the shared registry."""
    return TypeMapper(registry)


@pytest.fixture
def user_controller() -> ControllerDescriptor:
    """A typical controller mixing verbs, models and collections."""
    return ControllerDescriptor(
        name="UserController",
        methods=(
            MethodDescriptor(
                name="GetUser",
                parameters=(ParameterDescriptor(name="id", type="Int32"),),
                return_type="User",
            ),
            MethodDescriptor(name="GetUsers", return_type="IEnumerable<User>"),
            MethodDescriptor(
                name="UpdateUser",
                parameters=(ParameterDescriptor(name="user", type="User"),),
                return_type="Boolean",
            ),
            MethodDescriptor(
                name="DeleteUser",
                parameters=(ParameterDescriptor(name="id", type="Int32"),),
            ),
        ),
    )


@pytest.fixture
def snapshot(user_controller: ControllerDescriptor) -> DescriptorSnapshot:
    """Snapshot with a user controller and an address controller."""
    address_controller = ControllerDescriptor(
        name="AddressController",
        methods=(
            MethodDescriptor(
                name="GetAddresses",
                parameters=(
                    ParameterDescriptor(name="userId", type="Int32"),
                    ParameterDescriptor(name="since", type="DateTime"),
                ),
                return_type="List<Address>",
            ),
        ),
    )
    return DescriptorSnapshot(
        models=("User", "Address"),
        controllers=(user_controller, address_controller),
    ).with_model_flags()


@pytest.fixture
def config(tmp_path: Path) -> GeneratorConfig:
    """Generator configuration writing into a temporary directory."""
    return GeneratorConfig(base_path="/api", output_dir=tmp_path)


@pytest.fixture(autouse=True)
def restore_package_logger() -> Iterator[None]:
    """Undo logging configuration applied by CLI commands.

    The bundled configuration stops the package logger from propagating,
    which would hide records from ``caplog`` in later tests.
    """
    package_logger = logging.getLogger("typescripter")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate
