"""Tests for descriptor snapshot loading."""

import json
from pathlib import Path

import pytest

from typescripter.descriptors import ControllerDescriptor, MethodDescriptor
from typescripter.errors import SnapshotLoadError
from typescripter.snapshot import DescriptorSnapshot, SnapshotLoader

SNAPSHOT_YAML = """\
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
          - name: query
            type:
              name: List
              generic_arguments: [String]
        return_type: "IEnumerable<User>"
  - name: AddressController
    methods:
      - name: GetAddress
        return_type: Address
"""


class TestSnapshotLoader:
    """Tests for SnapshotLoader.load."""

    def test_load_yaml(self, tmp_path: Path) -> None:
        """Test loading a YAML snapshot."""
        path = tmp_path / "snapshot.yaml"
        path.write_text(SNAPSHOT_YAML, encoding="utf-8")

        snapshot = SnapshotLoader.load(path)

        assert snapshot.models == ("User", "Address")
        assert [c.name for c in snapshot.controllers] == [
            "UserController",
            "AddressController",
        ]
        assert snapshot.method_count == 3

    def test_model_flags_applied(self, tmp_path: Path) -> None:
        """Test that type descriptors referring to models are marked."""
        path = tmp_path / "snapshot.yaml"
        path.write_text(SNAPSHOT_YAML, encoding="utf-8")

        snapshot = SnapshotLoader.load(path)
        get_user, search = snapshot.controllers[0].methods

        assert get_user.return_type.is_model is True
        assert get_user.parameters[0].type.is_model is False
        assert search.return_type.generic_arguments[0].is_model is True
        assert str(search.parameters[0].type) == "List<String>"

    def test_load_json(self, tmp_path: Path) -> None:
        """Test that JSON snapshots load through the same path."""
        path = tmp_path / "snapshot.json"
        path.write_text(
            json.dumps(
                {
                    "models": ["User"],
                    "controllers": [
                        {"name": "UserController", "methods": [{"name": "GetUsers"}]}
                    ],
                }
            ),
            encoding="utf-8",
        )

        snapshot = SnapshotLoader.load(path)

        assert snapshot.controllers[0].methods[0].name == "GetUsers"

    def test_controller_suffix_enforced(self, tmp_path: Path) -> None:
        """Test that controllers must end with the configured suffix."""
        path = tmp_path / "snapshot.yaml"
        path.write_text("controllers:\n  - name: Users\n", encoding="utf-8")

        with pytest.raises(SnapshotLoadError, match="must end with 'Controller'"):
            SnapshotLoader.load(path)

    def test_custom_controller_suffix(self, tmp_path: Path) -> None:
        """Test that a different suffix can be configured."""
        path = tmp_path / "snapshot.yaml"
        path.write_text("controllers:\n  - name: UserApi\n", encoding="utf-8")

        snapshot = SnapshotLoader.load(path, controller_suffix="Api")

        assert snapshot.controllers[0].resource_name("Api") == "User"

    def test_invalid_yaml_raises_error(self, tmp_path: Path) -> None:
        """Test that malformed YAML raises SnapshotLoadError."""
        path = tmp_path / "snapshot.yaml"
        path.write_text("controllers: [", encoding="utf-8")

        with pytest.raises(SnapshotLoadError, match="Failed to parse snapshot"):
            SnapshotLoader.load(path)

    def test_missing_file_raises_error(self, tmp_path: Path) -> None:
        """Test that a missing file raises SnapshotLoadError."""
        with pytest.raises(SnapshotLoadError, match="Failed to read snapshot"):
            SnapshotLoader.load(tmp_path / "missing.yaml")

    def test_non_mapping_raises_error(self, tmp_path: Path) -> None:
        """Test that a top-level list is rejected."""
        path = tmp_path / "snapshot.yaml"
        path.write_text("- UserController\n", encoding="utf-8")

        with pytest.raises(SnapshotLoadError, match="Invalid snapshot format"):
            SnapshotLoader.load(path)

    def test_invalid_type_notation_raises_error(self) -> None:
        """Test that malformed type expressions fail validation."""
        data = {
            "controllers": [
                {
                    "name": "UserController",
                    "methods": [{"name": "GetUser", "return_type": "List<User"}],
                }
            ]
        }

        with pytest.raises(SnapshotLoadError, match="Unclosed generic"):
            SnapshotLoader.from_dict(data)

    def test_unknown_verb_raises_error(self) -> None:
        """Test that unsupported verb annotations fail validation."""
        data = {
            "controllers": [
                {"name": "UserController", "methods": [{"name": "Patch", "verb": "HttpPatch"}]}
            ]
        }

        with pytest.raises(SnapshotLoadError, match="Unsupported HTTP verb"):
            SnapshotLoader.from_dict(data)


class TestDescriptorSnapshot:
    """Tests for DescriptorSnapshot validation."""

    def test_duplicate_models_rejected(self) -> None:
        """Test that model names must be unique."""
        with pytest.raises(SnapshotLoadError, match="Duplicate model names"):
            SnapshotLoader.from_dict({"models": ["User", "User"]})

    def test_duplicate_controllers_rejected(self) -> None:
        """Test that controller names must be unique."""
        data = {"controllers": [{"name": "UserController"}, {"name": "UserController"}]}

        with pytest.raises(SnapshotLoadError, match="Duplicate controller names"):
            SnapshotLoader.from_dict(data)

    def test_registry_from_models(self) -> None:
        """Test that the registry contains exactly the snapshot models."""
        snapshot = DescriptorSnapshot(models=("User", "Address"))

        assert snapshot.registry.sorted_names() == ["Address", "User"]

    def test_method_count_ignores_hidden_methods(self) -> None:
        """Test that only exposed methods are counted."""
        snapshot = DescriptorSnapshot(
            controllers=(
                ControllerDescriptor(
                    name="UserController",
                    methods=(
                        MethodDescriptor(name="GetUser"),
                        MethodDescriptor(name="GetBase", declaring_type="BaseController"),
                    ),
                ),
            )
        )

        assert snapshot.method_count == 1
