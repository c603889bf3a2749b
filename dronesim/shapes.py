"""Rotating shapes: circles spinning in place and squares orbiting a point."""

from __future__ import annotations

import abc
import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from dronesim.pid import PI

Vector = tuple[float, float]


def _normalize(angle: float) -> float:
    """Wrap an angle in degrees into the range [0, 360)."""
    angle = math.fmod(angle, 360.0)
    if angle < 0:
        angle += 360.0
    return angle


class Shape(abc.ABC):
    """A drawable shape with a position, an origin and a rotation in degrees."""

    position: Vector
    origin: Vector
    rotation: float

    @abc.abstractmethod
    def rotate(self, angle: float) -> None:
        """Rotate the shape by ``angle`` degrees."""


@dataclass
class Circle(Shape):
    """A circle centred on its position that spins about its own centre."""

    radius: float
    position: Vector
    color: str = "green"
    rotation: float = 0.0
    origin: Vector = field(init=False)

    def __post_init__(self) -> None:
        self.origin = (self.radius, self.radius)

    def rotate(self, angle: float) -> None:
        self.rotation = _normalize(self.rotation + angle)


@dataclass
class Square(Shape):
    """A square that spins about its centre while orbiting ``rotation_point``."""

    size: float
    position: Vector
    color: str = "red"
    rotation: float = 0.0
    rotation_point: Vector = (0.0, 0.0)
    origin: Vector = field(init=False)
    center: Vector = field(init=False)

    def __post_init__(self) -> None:
        self.origin = (self.size / 2, self.size / 2)
        self.center = self.position

    def rotate(self, angle: float) -> None:
        """Spin by ``angle`` degrees and move the square around ``rotation_point``."""
        px, py = self.rotation_point
        offset_x = self.position[0] - px
        offset_y = self.position[1] - py
        radians = angle * PI / 180.0
        cos_a = math.cos(radians)
        sin_a = math.sin(radians)
        new_x = px + offset_x * cos_a - offset_y * sin_a
        new_y = py + offset_x * sin_a + offset_y * cos_a
        self.rotation = _normalize(self.rotation + angle)
        self.position = (new_x, new_y)

    def rotate_around_point(self, angle: float, point: Vector) -> None:
        """Spin by ``angle`` degrees with the origin moved to ``point`` meanwhile.

        The origin is restored to the square's centre afterwards, so only the
        rotation changes.
        """
        self.origin = (point[0] - self.position[0], point[1] - self.position[1])
        self.rotation = _normalize(self.rotation + angle)
        self.origin = (self.size / 2, self.size / 2)

    def offset(self, x: float, y: float) -> None:
        """Shift the square by (x, y) and orbit its original centre from now on."""
        self.rotation_point = self.center
        self.position = (self.position[0] + x, self.position[1] + y)


class ShapeGround:
    """A central shape together with the shapes placed around it."""

    def __init__(self, inside: Shape, outside: Iterable[Shape] = ()) -> None:
        self.inside = inside
        self.outside = list(outside)

    def rotate(self, angle: float) -> None:
        """Rotate the inner shape, then every outer shape, by ``angle`` degrees."""
        for shape in self.shapes():
            shape.rotate(angle)

    def shapes(self) -> Iterator[Shape]:
        """Yield the shapes in drawing order: the inner one first."""
        yield self.inside
        yield from self.outside