"""Generic components: position, collision, enabling and keyboard input."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from enum import Enum
from typing import Any

from simplege.ecs import (
    Component,
    ComponentReference,
    Entity,
    SetupResult,
    SetupStep,
    register_component,
)
from simplege.math import Area, Point, Size, Vector, size_from_json
from simplege.systems import PhysicSystem


class PositionComponent(Component):
    """Position of an entity relative to its parent's position."""

    TYPE = "Position"

    def __init__(self, owner: Entity) -> None:
        super().__init__(owner)
        self.local_position = Point.origin(3)

    def setup(self, desc: Any) -> SetupResult:
        """Set the local position from a mapping with ``x``, ``y``, ``z`` or from three coordinates."""
        if isinstance(desc, Mapping):
            self.local_position = Point((desc["x"], desc["y"], desc["z"]))
        else:
            self.local_position = Point(desc).resized(3)
        return SetupResult(self)

    def world_position(self) -> Point:
        """The local position combined with the positions of every ancestor."""
        parent = self.owner.parent
        if parent is None:
            return self.local_position
        parent_position = parent.get_component(PositionComponent)
        if parent_position is None:
            return self.local_position
        return parent_position.world_position() + (self.local_position - Point.origin(3))

    def translate(self, delta: Vector) -> None:
        self.local_position = self.local_position + delta

    def clamp(self, lower: Point, upper: Point) -> None:
        """Keep each coordinate covered by the bounds between ``lower`` and ``upper``."""
        coords = list(self.local_position.coords)
        for i, (low, high) in enumerate(zip(lower, upper)):
            if coords[i] < low:
                coords[i] = low
            if coords[i] > high:
                coords[i] = high
        self.local_position = Point(coords)


class CollisionComponent(Component, ABC):
    """A component that reacts when a collider hits another."""

    @abstractmethod
    def on_collision(self, other: ColliderComponent) -> None:
        """Handle a collision with ``other``."""


class ColliderComponent(Component):
    """A rectangular collision box centred on the entity's world position."""

    TYPE = "Collider"

    def __init__(self, owner: Entity) -> None:
        super().__init__(owner)
        self.flag = 0
        self.mask = 0
        self.size: Size[int] = Size(0, 0)
        self.handler: ComponentReference[CollisionComponent] = ComponentReference(
            kind=CollisionComponent
        )
        PhysicSystem.instance().register(self)

    def setup(self, desc: Mapping[str, Any]) -> SetupResult:
        self.flag = int(desc["flag"])
        self.mask = int(desc["mask"])
        self.size = size_from_json(desc["size"])
        self.handler = ComponentReference(desc.get("handler"), kind=CollisionComponent)
        return SetupResult(self)

    def collides(self, other: ColliderComponent) -> bool:
        return self.area().intersects(other.area())

    def on_collision(self, other: ColliderComponent) -> None:
        """Forward the collision to the handler, if it can be found."""
        handler = self.handler.resolve()
        if handler is not None:
            handler.on_collision(other)

    def area(self) -> Area:
        """The collision box; raises RuntimeError without a position component."""
        position_component = self.owner.get_component(PositionComponent)
        if position_component is None:
            raise RuntimeError("collider needs a Position component on its entity")
        position = position_component.world_position()
        return Area(position[0], position[1], float(self.size.width), float(self.size.height))

    def _dispose(self) -> None:
        PhysicSystem.instance().unregister(self)
        super()._dispose()


def _references(entries: Mapping[str, bool]) -> list[tuple[ComponentReference[Component], bool]]:
    return [(ComponentReference(name), bool(value)) for name, value in entries.items()]


class EnablerComponent(Component):
    """Enables or disables other components at start and on an event."""

    TYPE = "Enabler"

    def __init__(self, owner: Entity) -> None:
        super().__init__(owner)
        self._on_event: list[tuple[ComponentReference[Component], bool]] = []

    def setup(self, desc: Mapping[str, Any]) -> SetupResult:
        """Read ``onStart`` and ``onEvent``, each mapping component names to a state."""
        on_start = _references(desc["onStart"])
        self._on_event = _references(desc["onEvent"])

        def ready() -> bool:
            return all(ref.is_ready() for ref, _ in on_start)

        def execute() -> None:
            _apply(on_start)

        return SetupResult(self, [SetupStep(ready=ready, execute=execute)])

    def on_event(self) -> None:
        """Apply the states given by ``onEvent``."""
        _apply(self._on_event)


def _apply(entries: Iterable[tuple[ComponentReference[Component], bool]]) -> None:
    for ref, state in entries:
        target = ref.resolve()
        if target is None:
            raise LookupError(f"component {ref.name!r} not found")
        target.set_enabled(state)


class Action(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ATTACK = "attack"


class InputComponent(Component, ABC):
    """A source of player actions."""

    @abstractmethod
    def is_active(self, action: Action) -> bool:
        """True while ``action`` is being requested."""


_KEY_NAMES = (
    "space", "apostrophe", "comma", "minus", "period", "slash",
    "0", "1", "2", "3", "4", "5", "6", "7", "8", "9",
    "semicolon", "equal",
    "a", "b", "c", "d", "e", "f", "g", "h", "i", "j", "k", "l", "m",
    "n", "o", "p", "q", "r", "s", "t", "u", "v", "w", "x", "y", "z",
    "left bracket", "backslash", "right bracket", "grave accent", "world 1", "world 2",
    "escape", "enter", "tab", "backspace", "insert", "delete",
    "right", "left", "down", "up", "page up", "page down", "home", "end",
    "caps lock", "scroll lock", "num lock", "print screen", "pause",
    "f1", "f2", "f3", "f4", "f5", "f6", "f7", "f8", "f9", "f10", "f11", "f12", "f13",
    "f14", "f15", "f16", "f17", "f18", "f19", "f20", "f21", "f22", "f23", "f24", "f25",
    "kp 0", "kp 1", "kp 2", "kp 3", "kp 4", "kp 5", "kp 6", "kp 7", "kp 8", "kp 9",
    "kp decimal", "kp divide", "kp multiply", "kp subtract", "kp add", "kp enter", "kp equal",
    "left shift", "left control", "left alt", "left super",
    "right shift", "right control", "right alt", "right super", "menu",
)

KeyCode = Enum(  # type: ignore[misc]
    "KeyCode", [("KEY_" + name.upper().replace(" ", "_"), name) for name in _KEY_NAMES]
)

_KEYBOARD_KEYS: dict[str, Any] = {code.value: code for code in KeyCode}


def key_code(name: str) -> Any:
    """The key code for a key name such as ``"space"`` or ``"left shift"``."""
    try:
        return _KEYBOARD_KEYS[name]
    except KeyError:
        raise KeyError(f"unknown key {name!r}") from None


def _no_key_pressed(code: Any) -> bool:
    return False


_key_reader: Callable[[Any], bool] = _no_key_pressed


def set_key_reader(reader: Callable[[Any], bool] | None) -> Callable[[Any], bool]:
    """Install the function telling whether a key is down; None restores the default.

    Returns the reader that was installed before.
    """
    global _key_reader
    previous = _key_reader
    _key_reader = reader if reader is not None else _no_key_pressed
    return previous


class KeyboardInputComponent(InputComponent):
    """Player actions read from keyboard keys."""

    TYPE = "KeyboardInput"

    def __init__(self, owner: Entity) -> None:
        super().__init__(owner)
        self.mapping: dict[Action, str] = {}

    def setup(self, desc: Mapping[str, Any]) -> SetupResult:
        """Read the key bound to every action from ``desc["mapping"]``."""
        keys = desc["mapping"]
        self.mapping = {action: str(keys[action.value]) for action in Action}
        return SetupResult(self)

    def is_active(self, action: Action) -> bool:
        return bool(_key_reader(key_code(self.mapping[action])))


def register_generic_components() -> None:
    """Make the generic components creatable by type name."""
    for component_class in (
        ColliderComponent,
        EnablerComponent,
        KeyboardInputComponent,
        PositionComponent,
    ):
        register_component(component_class)