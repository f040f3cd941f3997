"""Small geometry types: points, vectors, sizes and axis-aligned areas."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


def _as_coords(values: Iterable[float]) -> tuple[float, ...]:
    return tuple(float(v) for v in values)


def _padded(coords: tuple[float, ...], width: int) -> tuple[float, ...]:
    if width < 0:
        raise ValueError("width must not be negative")
    kept = coords[:width]
    return kept + (0.0,) * (width - len(kept))


def _check_index(coords: tuple[float, ...], index: int) -> int:
    if not 0 <= index < len(coords):
        raise IndexError(f"index {index} out of range for width {len(coords)}")
    return index


def _check_width(a: tuple[float, ...], b: tuple[float, ...]) -> None:
    if len(a) != len(b):
        raise ValueError(f"width mismatch: {len(a)} and {len(b)}")


@dataclass(frozen=True)
class Point:
    """A position in a space of any width."""

    coords: tuple[float, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "coords", _as_coords(self.coords))

    @classmethod
    def origin(cls, width: int) -> Point:
        """The point at the origin of a space of the given width."""
        return cls((0.0,) * width)

    def resized(self, width: int) -> Point:
        """Copy of this point in another width, truncated or padded with zeros."""
        return Point(_padded(self.coords, width))

    def __getitem__(self, index: int) -> float:
        return self.coords[_check_index(self.coords, index)]

    def __len__(self) -> int:
        return len(self.coords)

    def __iter__(self) -> Iterator[float]:
        return iter(self.coords)

    def __add__(self, other: object) -> Point:
        if not isinstance(other, Vector):
            return NotImplemented
        _check_width(self.coords, other.coords)
        return Point(a + b for a, b in zip(self.coords, other.coords))

    def __sub__(self, other: object) -> Vector:
        if not isinstance(other, Point):
            return NotImplemented
        _check_width(self.coords, other.coords)
        return Vector(a - b for a, b in zip(self.coords, other.coords))


@dataclass(frozen=True)
class Vector:
    """A displacement in a space of any width."""

    coords: tuple[float, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "coords", _as_coords(self.coords))

    def resized(self, width: int) -> Vector:
        """Copy of this vector in another width, truncated or padded with zeros."""
        return Vector(_padded(self.coords, width))

    def __getitem__(self, index: int) -> float:
        return self.coords[_check_index(self.coords, index)]

    def __len__(self) -> int:
        return len(self.coords)

    def __iter__(self) -> Iterator[float]:
        return iter(self.coords)

    def __add__(self, other: object) -> Vector | Point:
        if isinstance(other, Point):
            return other + self
        if not isinstance(other, Vector):
            return NotImplemented
        _check_width(self.coords, other.coords)
        return Vector(a + b for a, b in zip(self.coords, other.coords))

    def __mul__(self, scale: float) -> Vector:
        if not isinstance(scale, (int, float)):
            return NotImplemented
        return Vector(c * scale for c in self.coords)

    def magnitude_sq(self) -> float:
        return sum(c * c for c in self.coords)

    def magnitude(self) -> float:
        return math.sqrt(self.magnitude_sq())

    def normalized(self) -> Vector:
        """Unit vector in the same direction; a zero vector raises ValueError."""
        length = self.magnitude()
        if length == 0.0:
            raise ValueError("cannot normalize a zero vector")
        return Vector(c / length for c in self.coords)


@dataclass(frozen=True)
class Size(Generic[T]):
    width: T
    height: T


@dataclass(frozen=True)
class Area:
    """An axis-aligned rectangle given by its centre and its dimensions."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def position(self) -> Point:
        return Point((self.x, self.y))

    @property
    def size(self) -> Size[float]:
        return Size(self.width, self.height)

    @property
    def x_min(self) -> float:
        return self.x - self.width / 2.0

    @property
    def x_max(self) -> float:
        return self.x + self.width / 2.0

    @property
    def y_min(self) -> float:
        return self.y - self.height / 2.0

    @property
    def y_max(self) -> float:
        return self.y + self.height / 2.0

    def intersects(self, other: Area) -> bool:
        """True when the interiors overlap; touching edges do not count."""
        return not (
            self.x_min >= other.x_max
            or self.x_max <= other.x_min
            or self.y_min >= other.y_max
            or self.y_max <= other.y_min
        )


def point_from_json(data: Mapping[str, Any]) -> Point:
    """Build a 2D point from a mapping with keys ``x`` and ``y``."""
    return Point((float(data["x"]), float(data["y"])))


def size_from_json(data: Mapping[str, Any]) -> Size[Any]:
    """Build a size from a mapping with keys ``w`` and ``h``."""
    return Size(data["w"], data["h"])


def area_from_json(data: Mapping[str, Any]) -> Area:
    """Build an area from a mapping with keys ``x``, ``y``, ``w`` and ``h``."""
    position = point_from_json(data)
    size = size_from_json(data)
    return Area(position[0], position[1], float(size.width), float(size.height))