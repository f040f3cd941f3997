from typing import Any

import pytest

from simplege.ecs import (
    Component,
    ComponentReference,
    Entity,
    EntitySystem,
    SetupResult,
    SetupStep,
    create_component,
    find_component,
    find_object,
    register_component,
    resolve,
    root_entity,
)


class Recorder(Component):
    TYPE = "TestEcsRecorder"

    def __init__(self, owner: Entity) -> None:
        super().__init__(owner)
        self.desc: Any = None
        self.events: list[str] = []
        self.disposed = False

    def setup(self, desc: Any) -> SetupResult:
        self.desc = desc
        return SetupResult(self)

    def on_enabled(self) -> None:
        self.events.append("enabled")

    def on_disabled(self) -> None:
        self.events.append("disabled")

    def _dispose(self) -> None:
        self.disposed = True


class Other(Component):
    TYPE = "TestEcsOther"


@pytest.fixture(autouse=True)
def clean_root():
    register_component(Recorder)
    yield
    root_entity().clear()
    EntitySystem.instance().iterate(None)


def test_add_child_sets_parent_and_name():
    parent, child = Entity(), Entity()
    parent.add_child("kid", child)
    assert child.parent is parent
    assert parent.get_child("kid") is child
    assert parent.children == (child,)
    assert parent.get_child("missing") is None


def test_add_child_with_parent_raises():
    first, second, child = Entity(), Entity(), Entity()
    first.add_child("kid", child)
    with pytest.raises(ValueError):
        second.add_child("kid", child)


def test_remove_child_detaches_and_deactivates():
    parent, child = Entity(), Entity()
    parent.add_child("kid", child)
    parent.remove_child(child)
    assert child.parent is None
    assert child.active is False
    assert parent.children == ()
    assert parent.get_child("kid") is None


def test_remove_non_child_raises():
    with pytest.raises(ValueError):
        Entity().remove_child(Entity())


def test_removed_entity_components_disposed_on_iterate():
    parent, child = Entity(), Entity()
    parent.add_child("kid", child)
    comp = child.add_component(Recorder, {}, [])
    parent.remove_child(child)
    assert comp.disposed is False
    EntitySystem.instance().iterate(None)
    assert comp.disposed is True
    assert child.get_component(Recorder) is None


def test_clear_drops_components_and_children():
    parent, child = Entity(), Entity()
    parent.add_child("kid", child)
    comp = parent.add_component(Recorder, {}, [])
    parent.clear()
    assert comp.disposed is True
    assert parent.children == ()
    assert child.active is False


def test_create_unknown_component_raises():
    with pytest.raises(KeyError):
        create_component("NoSuchComponentType", Entity())


def test_register_without_type_raises():
    class Nameless(Component):
        pass

    with pytest.raises(ValueError):
        register_component(Nameless)


def test_add_component_by_name_runs_setup():
    entity = Entity()
    pending: list[SetupResult] = []
    comp = entity.add_component("TestEcsRecorder", {"value": 3}, pending)
    assert isinstance(comp, Recorder)
    assert comp.desc == {"value": 3}
    assert comp.owner is entity
    assert comp.ready is True
    assert entity.get_component("TestEcsRecorder") is comp
    assert entity.get_component(Recorder) is comp
    assert entity.get_component(Other) is None


def test_add_component_twice_reuses_instance():
    entity = Entity()
    first = entity.add_component(Recorder, "a", [])
    second = entity.add_component(Recorder, "b", [])
    assert first is second
    assert second.desc == "b"


def test_enable_disable_hooks_only_on_change():
    comp = Recorder(Entity())
    comp.enable()
    comp.disable()
    comp.disable()
    comp.set_enabled(True)
    assert comp.events == ["disabled", "enabled"]
    assert comp.enabled is True


def test_setup_result_waits_for_ready_step():
    comp = Component(Entity())
    gate = {"open": False}
    ran: list[str] = []
    result = SetupResult(
        comp, [SetupStep(ready=lambda: gate["open"], execute=lambda: ran.append("x"))]
    )
    assert comp.ready is False
    assert result.is_ready() is False
    result.execute()
    assert ran == []
    gate["open"] = True
    result.execute()
    assert ran == ["x"]
    assert result.is_done() is True
    assert comp.ready is True


def test_append_adds_steps():
    comp = Component(Entity())
    ran: list[int] = []
    result = SetupResult(comp, [SetupStep(execute=lambda: ran.append(1))])
    result.append([SetupStep(execute=lambda: ran.append(2))])
    result.execute()
    assert ran == [1, 2]


def test_resolve_handles_dependencies():
    first, second = Component(Entity()), Component(Entity())
    pending = [
        SetupResult(second, [SetupStep(ready=lambda: first.ready)]),
        SetupResult(first, [SetupStep()]),
    ]
    assert resolve(pending) is True
    assert pending == []
    assert second.ready and first.ready


def test_resolve_reports_stuck_setup():
    comp = Component(Entity())
    pending = [SetupResult(comp, [SetupStep(ready=lambda: False)])]
    assert resolve(pending) is False
    assert len(pending) == 1


def test_find_object_and_component():
    holder, nested = Entity(), Entity()
    root_entity().add_child("holder", holder)
    holder.add_child("nested", nested)
    comp = nested.add_component(Recorder, {}, [])
    assert find_object("nested") is nested
    assert find_object("absent") is None
    assert find_component("nested.TestEcsRecorder") is comp
    assert find_component("absent.TestEcsRecorder") is None


def test_find_component_without_dot_uses_name_twice():
    entity = Entity()
    root_entity().add_child("TestEcsRecorder", entity)
    comp = entity.add_component(Recorder, {}, [])
    assert find_component("TestEcsRecorder") is comp


def test_component_reference_by_name():
    entity = Entity()
    root_entity().add_child("refd", entity)
    comp = entity.add_component(Recorder, {}, [])
    ref = ComponentReference("refd.TestEcsRecorder", Recorder)
    assert ref.is_empty() is False
    assert ref.resolve() is comp
    assert ref.is_ready() is True


def test_component_reference_kind_mismatch():
    entity = Entity()
    root_entity().add_child("mismatch", entity)
    entity.add_component(Recorder, {}, [])
    ref = ComponentReference("mismatch.TestEcsRecorder", Other)
    assert ref.resolve() is None
    assert ref.is_ready() is False


def test_component_reference_empty_and_direct():
    assert ComponentReference().is_empty() is True
    comp = Component(Entity())
    ref = ComponentReference(comp)
    assert ref.is_empty() is False
    assert ref.resolve() is comp
    assert ref.is_ready() is False