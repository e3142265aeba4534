"""Three-dimensional points and the vector operations used on mesh geometry."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Iterator


@dataclass(frozen=True, order=True)
class Point3D:
    """An immutable point or vector in 3D space, ordered lexicographically."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Point3D) -> Point3D:
        if not isinstance(other, Point3D):
            return NotImplemented
        return Point3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Point3D) -> Point3D:
        if not isinstance(other, Point3D):
            return NotImplemented
        return Point3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> Point3D:
        if not isinstance(factor, Real):
            return NotImplemented
        return Point3D(self.x * factor, self.y * factor, self.z * factor)

    def __rmul__(self, factor: float) -> Point3D:
        return self.__mul__(factor)

    def __truediv__(self, factor: float) -> Point3D:
        if not isinstance(factor, Real):
            return NotImplemented
        return Point3D(self.x / factor, self.y / factor, self.z / factor)

    def __neg__(self) -> Point3D:
        return Point3D(-self.x, -self.y, -self.z)

    def cross(self, other: Point3D) -> Point3D:
        """Cross product of this vector with ``other``."""
        return Point3D(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def dot(self, other: Point3D) -> float:
        """Dot product of this vector with ``other``."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.sqrt(self.dot(self))

    def normalized(self) -> Point3D:
        """The vector scaled to unit length; a zero vector raises ZeroDivisionError."""
        return self / self.length()

    def rotate(self) -> Point3D:
        """Cyclically permute the coordinates to (z, x, y)."""
        return Point3D(self.z, self.x, self.y)


def vector_cross(pt1: Point3D, pt2: Point3D, pt3: Point3D) -> Point3D:
    """Cross product of the edges pt1->pt2 and pt2->pt3."""
    return (pt2 - pt1).cross(pt3 - pt2)


def triangle_area(pt1: Point3D, pt2: Point3D, pt3: Point3D) -> float:
    """Area of the triangle spanned by three points."""
    return 0.5 * vector_cross(pt1, pt2, pt3).length()


def _clamped_acos(cosine: float) -> float:
    return math.acos(min(1.0, max(-1.0, cosine)))


def angle_between(u: Point3D, v: Point3D) -> float:
    """Angle in radians between two vectors."""
    return _clamped_acos(u.dot(v) / u.length() / v.length())


def turning_angle(pt1: Point3D, pt2: Point3D, pt3: Point3D) -> float:
    """Angle between the segments pt1->pt2 and pt2->pt3."""
    return angle_between(pt2 - pt1, pt3 - pt2)


def combine(pt1: Point3D, coef1: float, pt2: Point3D, coef2: float) -> Point3D:
    """Linear combination ``coef1 * pt1 + coef2 * pt2``."""
    return coef1 * pt1 + coef2 * pt2