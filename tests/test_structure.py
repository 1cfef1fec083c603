import pytest

from Garnish.Errors import StructureError
from Garnish.Node import Node
from Garnish.Player import Player
from Garnish.Queue import Queue
from Garnish.Structure import Structure, StructureRegistry


def test_defaults_are_library_classes() -> None:
    registry = StructureRegistry()

    assert registry.get("Player") is Player
    assert registry.get("Queue") is Queue
    assert registry.get("Node") is Node


def test_lookup_accepts_lowercase_names() -> None:
    registry = StructureRegistry()

    assert registry.get("player") is Player
    assert "queue" in registry


def test_extend_wraps_current_binding() -> None:
    registry = StructureRegistry()

    def extender(Base):
        class LoggedQueue(Base):
            pass
        return LoggedQueue

    extended = registry.extend("Queue", extender)

    assert registry.get("Queue") is extended
    assert issubclass(extended, Queue)


def test_extend_is_cumulative() -> None:
    registry = StructureRegistry()
    seen = []

    def first(Base):
        seen.append(Base)
        return type("First", (Base,), {})

    def second(Base):
        seen.append(Base)
        return type("Second", (Base,), {})

    registry.extend("Player", first)
    result = registry.extend("Player", second)

    assert seen[0] is Player
    assert seen[1].__name__ == "First"
    assert result.__mro__[1].__name__ == "First"
    assert registry.get("Player") is result


@pytest.mark.parametrize("name", ["Manager", "Track", "", None])
def test_unknown_names_are_rejected(name) -> None:
    registry = StructureRegistry()

    with pytest.raises(StructureError):
        registry.get(name)
    with pytest.raises(StructureError):
        registry.extend(name, lambda base: base)
    assert name not in registry


def test_unset_binding_is_rejected() -> None:
    registry = StructureRegistry({"Player": Player, "Queue": None, "Node": Node})

    with pytest.raises(StructureError):
        registry.get("Queue")


def test_structure_error_is_a_type_error() -> None:
    with pytest.raises(TypeError):
        StructureRegistry().get("Filters")


def test_process_wide_registry_has_defaults() -> None:
    assert Structure.get("Node") is not None
