"""Tests for TypeMapper."""

import pytest

from typescripter.descriptors import ModelRegistry, TypeDescriptor
from typescripter.errors import UnmappableTypeError
from typescripter.type_mapper import MappedType, TypeMapper


def _map(mapper: TypeMapper, text: str) -> MappedType:
    return mapper.map(TypeDescriptor.parse(text))


class TestPrimitiveMapping:
    """Tests for well-known host types."""

    @pytest.mark.parametrize(
        ("host_type", "expected"),
        [
            ("Int32", "number"),
            ("System.Int64", "number"),
            ("Decimal", "number"),
            ("double", "number"),
            ("Boolean", "boolean"),
            ("String", "string"),
            ("Guid", "string"),
            ("Char", "string"),
            ("Object", "any"),
            ("Void", "void"),
            ("Task", "void"),
        ],
    )
    def test_primitive_types(
        self, type_mapper: TypeMapper, host_type: str, expected: str
    ) -> None:
        """Test fixed mappings of primitive host types."""
        mapped = _map(type_mapper, host_type)

        assert mapped.expression == expected
        assert mapped.is_primitive is True
        assert mapped.is_model is False

    @pytest.mark.parametrize("host_type", ["DateTime", "DateTimeOffset", "DateTime?"])
    def test_dates_map_to_timestamp(self, type_mapper: TypeMapper, host_type: str) -> None:
        """Test that date/time types become moment timestamps flagged as dates."""
        mapped = _map(type_mapper, host_type)

        assert mapped.expression == "moment.Moment"
        assert mapped.is_date is True

    def test_nullable_maps_to_inner_type(self, type_mapper: TypeMapper) -> None:
        """Test that Nullable<T> is transparent."""
        assert _map(type_mapper, "Nullable<Int32>").expression == "number"

    def test_task_of_t_maps_to_t(self, type_mapper: TypeMapper) -> None:
        """Test that async return types are unwrapped."""
        mapped = _map(type_mapper, "Task<User>")

        assert mapped.expression == "User"
        assert mapped.is_model is True


class TestCollectionMapping:
    """Tests for sequences and dictionaries."""

    @pytest.mark.parametrize(
        "host_type",
        ["IEnumerable<Int32>", "List<Int32>", "IList<Int32>", "HashSet<Int32>", "Int32[]"],
    )
    def test_sequences_of_primitives(self, type_mapper: TypeMapper, host_type: str) -> None:
        """Test that sequences map to TS arrays."""
        mapped = _map(type_mapper, host_type)

        assert mapped.expression == "number[]"
        assert mapped.is_model_collection is False

    def test_sequence_of_models(self, type_mapper: TypeMapper) -> None:
        """Test that sequences of models are flagged as model collections."""
        mapped = _map(type_mapper, "IEnumerable<User>")

        assert mapped.expression == "User[]"
        assert mapped.is_model_collection is True
        assert mapped.model_name == "User"

    def test_nested_sequences(self, type_mapper: TypeMapper) -> None:
        """Test sequences of sequences."""
        assert _map(type_mapper, "List<List<String>>").expression == "string[][]"

    def test_dictionary(self, type_mapper: TypeMapper) -> None:
        """Test that dictionaries become index signatures."""
        mapped = _map(type_mapper, "Dictionary<String, List<User>>")

        assert mapped.expression == "{ [key: string]: User[] }"

    def test_sequence_of_dictionaries_is_parenthesised(self, type_mapper: TypeMapper) -> None:
        """Test that compound element types are wrapped before the array suffix."""
        mapped = _map(type_mapper, "List<Dictionary<String, Int32>>")

        assert mapped.expression == "({ [key: string]: number })[]"

    def test_sequence_without_element_type_raises_error(self, type_mapper: TypeMapper) -> None:
        """Test that non-generic sequences cannot be mapped."""
        with pytest.raises(UnmappableTypeError, match="IEnumerable"):
            _map(type_mapper, "IEnumerable")


class TestModelMapping:
    """Tests for registered model types."""

    def test_registered_model(self, type_mapper: TypeMapper) -> None:
        """Test that models keep their own name."""
        mapped = _map(type_mapper, "User")

        assert mapped == MappedType("User", is_model=True, model_name="User")

    def test_marked_model_outside_registry(self, type_mapper: TypeMapper) -> None:
        """Test that the descriptor's own marker is honoured."""
        mapped = type_mapper.map(TypeDescriptor(name="Order", is_model=True))

        assert mapped.is_model is True
        assert mapped.expression == "Order"


class TestUnmappableTypes:
    """Tests for types without a TypeScript representation."""

    def test_unknown_type_raises_error(self, type_mapper: TypeMapper) -> None:
        """Test that unknown types raise UnmappableTypeError."""
        with pytest.raises(UnmappableTypeError) as exc_info:
            _map(type_mapper, "Stream")

        assert exc_info.value.type_name == "Stream"

    def test_unknown_generic_argument_raises_error(self, type_mapper: TypeMapper) -> None:
        """Test that failures inside generic arguments propagate."""
        with pytest.raises(UnmappableTypeError, match="Stream"):
            _map(type_mapper, "List<Stream>")


class TestOverridesAndDeterminism:
    """Tests for configured overrides and pure behaviour."""

    def test_override_wins_over_builtin(self, registry: ModelRegistry) -> None:
        """Test that configured overrides take precedence."""
        mapper = TypeMapper(registry, {"Guid": "Uuid", "Stream": "Blob"})

        assert _map(mapper, "Guid").expression == "Uuid"
        assert _map(mapper, "Stream").expression == "Blob"

    def test_same_descriptor_same_result(self, type_mapper: TypeMapper) -> None:
        """Test that mapping is deterministic."""
        first = _map(type_mapper, "Dictionary<String, List<User>>")
        second = _map(type_mapper, "Dictionary<String, List<User>>")

        assert first == second
