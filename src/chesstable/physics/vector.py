"""Small immutable 3-vector used for world-space transforms."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Vec3:
    """World-space point or direction. ``y`` is up; the table lies in x/z."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scaled(self, factor: float) -> Vec3:
        return Vec3(self.x * factor, self.y * factor, self.z * factor)

    def with_y(self, y: float) -> Vec3:
        """Copy with the vertical component replaced."""
        return Vec3(self.x, y, self.z)


ZERO = Vec3()
