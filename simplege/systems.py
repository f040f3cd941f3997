"""Systems run once per frame: logic updates and collision detection."""

from __future__ import annotations

import weakref
from abc import ABC, abstractmethod
from typing import Any, ClassVar

from simplege.ecs import Component, Entity
from simplege.events import Timing


class System:
    """Something updated once per frame."""

    def iterate(self, timing: Timing) -> None:
        """Advance by one frame."""


class LogicComponent(Component, ABC):
    """A component updated every frame by the logic system."""

    def __init__(self, owner: Entity) -> None:
        super().__init__(owner)
        LogicSystem.instance().register(self)

    @abstractmethod
    def update_logic(self, timing: Timing) -> None:
        """Advance the component's logic by one frame."""

    def _dispose(self) -> None:
        LogicSystem.instance().unregister(self)
        super()._dispose()


class LogicSystem(System):
    """Calls ``update_logic`` on every enabled logic component of an active entity."""

    _instance: ClassVar[LogicSystem | None] = None

    def __init__(self) -> None:
        self._components: weakref.WeakKeyDictionary[Any, None] = weakref.WeakKeyDictionary()

    @classmethod
    def instance(cls) -> LogicSystem:
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def register(self, component: LogicComponent) -> None:
        self._components[component] = None

    def unregister(self, component: LogicComponent) -> None:
        self._components.pop(component, None)

    def iterate(self, timing: Timing) -> None:
        for component in list(self._components):
            if component.enabled and component.owner.active:
                component.update_logic(timing)


class PhysicSystem(System):
    """Finds overlapping colliders and notifies both sides of each collision."""

    _instance: ClassVar[PhysicSystem | None] = None

    def __init__(self) -> None:
        self._colliders: weakref.WeakKeyDictionary[Any, None] = weakref.WeakKeyDictionary()

    @classmethod
    def instance(cls) -> PhysicSystem:
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def register(self, collider: Any) -> None:
        self._colliders[collider] = None

    def unregister(self, collider: Any) -> None:
        self._colliders.pop(collider, None)

    def iterate(self, timing: Timing) -> None:
        live = [c for c in list(self._colliders) if c.enabled and c.owner.active]
        collisions = [
            (first, second)
            for i, first in enumerate(live)
            for second in live[i + 1 :]
            if first.collides(second)
        ]
        for first, second in collisions:
            first.on_collision(second)
            second.on_collision(first)