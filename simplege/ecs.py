"""Entities, components, deferred component setup and the scene root."""

from __future__ import annotations

import weakref
from collections.abc import Callable, Iterable, MutableSequence
from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, TypeVar

from .events import EventTrigger

C = TypeVar("C", bound="Component")


def _always_ready() -> bool:
    return True


@dataclass
class SetupStep:
    """One stage of a component's setup, run once ``ready`` returns True.

    A step without ``execute`` only waits for ``ready``.
    """

    ready: Callable[[], bool] = field(default=_always_ready)
    execute: Callable[[], None] | None = None


class SetupResult:
    """The remaining setup steps of a component, run in order as they become ready."""

    def __init__(self, component: Component, steps: Iterable[SetupStep] = ()) -> None:
        self.component = component
        self._steps: list[SetupStep] = list(steps)
        self._current = 0
        if self.is_done():
            component._mark_ready()

    def append(self, steps: Iterable[SetupStep]) -> None:
        """Add more steps after the existing ones."""
        self._steps.extend(steps)

    def is_done(self) -> bool:
        return self._current == len(self._steps)

    def is_ready(self) -> bool:
        """True when the next pending step may run."""
        return not self.is_done() and self._steps[self._current].ready()

    def execute(self) -> None:
        """Run every step that is ready, stopping at the first that is not."""
        while not self.is_done() and self._steps[self._current].ready():
            step = self._steps[self._current]
            if step.execute is not None:
                step.execute()
            self._current += 1
        if self.is_done():
            self.component._mark_ready()


def resolve(pending: MutableSequence[SetupResult]) -> bool:
    """Run pending setups until all are done or none can progress.

    ``pending`` is left holding the setups that could not finish; returns
    True when it is empty.
    """
    while pending:
        incomplete: list[SetupResult] = []
        any_ready = False
        for item in pending:
            if item.is_done():
                continue
            if item.is_ready():
                any_ready = True
                item.execute()
            if not item.is_done():
                incomplete.append(item)
        pending[:] = incomplete
        if not any_ready:
            break
    return not pending


class Component:
    """A piece of behaviour or data attached to an entity.

    ``state_changed`` handlers are called with ``(component, enabled)``
    whenever the component is enabled or disabled.
    """

    TYPE: ClassVar[str] = ""

    def __init__(self, owner: Entity) -> None:
        self._owner = owner
        self._enabled = True
        self._ready = False
        self.state_changed = EventTrigger()

    @property
    def owner(self) -> Entity:
        return self._owner

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def ready(self) -> bool:
        return self._ready

    def setup(self, desc: Any) -> SetupResult:
        """Configure the component from its description."""
        return SetupResult(self)

    def set_enabled(self, enabled: bool) -> None:
        if enabled:
            self.enable()
        else:
            self.disable()

    def enable(self) -> None:
        if not self._enabled:
            self._enabled = True
            self.on_enabled()

    def disable(self) -> None:
        if self._enabled:
            self._enabled = False
            self.on_disabled()

    def on_enabled(self) -> None:
        """Called when the component goes from disabled to enabled."""
        self.state_changed.trigger(self, True)

    def on_disabled(self) -> None:
        """Called when the component goes from enabled to disabled."""
        self.state_changed.trigger(self, False)

    def _mark_ready(self) -> None:
        self._ready = True

    def _dispose(self) -> None:
        """Release what the component holds; called when it leaves its entity."""
        self.state_changed.handlers.clear()


_registry: dict[str, type[Component]] = {}


def register_component(component_class: type[Component]) -> None:
    """Make a component class creatable by its ``TYPE`` name; the first registration wins."""
    if not component_class.TYPE:
        raise ValueError(f"{component_class.__name__} has no TYPE")
    _registry.setdefault(component_class.TYPE, component_class)


def create_component(type_name: str, owner: Entity) -> Component:
    """Create a registered component; an unknown name raises KeyError."""
    try:
        component_class = _registry[type_name]
    except KeyError:
        raise KeyError(f"unknown component type {type_name!r}") from None
    return component_class(owner)


class Entity:
    """A node of the scene tree holding named children and typed components."""

    def __init__(self) -> None:
        self.active = True
        self._parent: weakref.ref[Entity] | None = None
        self._children: list[Entity] = []
        self._children_by_name: dict[str, weakref.ref[Entity]] = {}
        self._components: dict[str, Component] = {}

    @property
    def parent(self) -> Entity | None:
        return self._parent() if self._parent is not None else None

    @property
    def children(self) -> tuple[Entity, ...]:
        return tuple(self._children)

    @property
    def components(self) -> dict[str, Component]:
        return dict(self._components)

    def add_child(self, name: str, child: Entity) -> None:
        """Attach ``child`` under ``name``; a child that already has a parent raises ValueError."""
        if child.parent is not None:
            raise ValueError("entity already has a parent")
        self._children.append(child)
        self._children_by_name[name] = weakref.ref(child)
        child._parent = weakref.ref(self)

    def remove_child(self, child: Entity) -> None:
        """Detach ``child`` and schedule it for removal."""
        if child.parent is not self:
            raise ValueError("entity is not a child of this entity")
        self._children = [c for c in self._children if c is not child]
        self._children_by_name = {
            name: ref for name, ref in self._children_by_name.items() if ref() is not child
        }
        child._parent = None
        EntitySystem.instance().remove(child)

    def add_component(
        self, kind: str | type[Component], desc: Any, pending: list[SetupResult]
    ) -> Component:
        """Add a component by type name or class, queueing its setup in ``pending``.

        If a component of that type is already present, it is set up again instead.
        """
        type_name = kind if isinstance(kind, str) else kind.TYPE
        component = self._components.get(type_name)
        if component is None:
            component = create_component(kind, self) if isinstance(kind, str) else kind(self)
            self._components[type_name] = component
        pending.append(component.setup(desc))
        return component

    def get_component(self, kind: str | type[C]) -> Component | C | None:
        """The component with the given type name, or of the given class."""
        if isinstance(kind, str):
            return self._components.get(kind)
        if kind.TYPE:
            found = self._components.get(kind.TYPE)
            return found if isinstance(found, kind) else None
        return next((c for c in self._components.values() if isinstance(c, kind)), None)

    def get_child(self, name: str) -> Entity | None:
        ref = self._children_by_name.get(name)
        return ref() if ref is not None else None

    def clear(self) -> None:
        """Schedule every child for removal and drop all components."""
        system = EntitySystem.instance()
        for child in self._children:
            system.remove(child)
        self._children_by_name.clear()
        self._children.clear()
        self._drop_components()

    def _drop_components(self) -> None:
        components = list(self._components.values())
        self._components.clear()
        for component in components:
            component._dispose()

    def _dispose(self) -> None:
        self._drop_components()
        children = self._children
        self._children = []
        self._children_by_name.clear()
        for child in children:
            child._parent = None
            child._dispose()


class EntitySystem:
    """Holds removed entities until the next frame, then disposes of them."""

    _instance: ClassVar[EntitySystem | None] = None

    def __init__(self) -> None:
        self._to_remove: list[Entity] = []

    @classmethod
    def instance(cls) -> EntitySystem:
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def remove(self, entity: Entity) -> None:
        """Deactivate ``entity`` and dispose of it on the next iteration."""
        entity.active = False
        self._to_remove.append(entity)

    def iterate(self, timing: Any) -> None:
        removed, self._to_remove = self._to_remove, []
        for entity in removed:
            entity._dispose()


_ROOT = Entity()


def root_entity() -> Entity:
    """The entity at the top of the scene tree."""
    return _ROOT


def _find_recursive(parent: Entity, name: str) -> Entity | None:
    found = parent.get_child(name)
    if found is not None:
        return found
    for child in parent.children:
        found = _find_recursive(child, name)
        if found is not None:
            return found
    return None


def find_object(name: str) -> Entity | None:
    """Search the scene tree for a child entity with the given name."""
    return _find_recursive(root_entity(), name)


def find_component(name: str) -> Component | None:
    """Look up ``"entity.Component"``; without a dot the name serves as both."""
    entity_name, sep, component_name = name.partition(".")
    if not sep:
        component_name = name
    entity = find_object(entity_name)
    if entity is None:
        return None
    return entity.get_component(component_name)


class ComponentReference(Generic[C]):
    """A component given directly or by ``"entity.Component"`` name, resolved lazily."""

    def __init__(
        self, target: C | str | None = None, kind: type[C] | None = None
    ) -> None:
        self.kind = kind
        self.name = ""
        self._resolved: C | None = None
        if isinstance(target, str):
            self.name = target
        elif target is not None:
            self._resolved = target

    def is_empty(self) -> bool:
        return self._resolved is None and not self.name

    def resolve(self) -> C | None:
        if self._resolved is None:
            found = find_component(self.name)
            if self.kind is not None and not isinstance(found, self.kind):
                found = None
            self._resolved = found
        return self._resolved

    def is_ready(self) -> bool:
        target = self.resolve()
        return target is not None and target.ready