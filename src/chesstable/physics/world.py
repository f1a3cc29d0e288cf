"""Minimal rigid-body world: gravity plus an inelastic ground plane.

Pieces rest on the table and fall back onto it after being dropped; that
is all the table needs from physics.  A body with ``mass == 0`` is static
and never integrated.
"""

from __future__ import annotations

import itertools

from chesstable.physics.vector import ZERO, Vec3

DEFAULT_GRAVITY = -9.82
DEFAULT_TIME_STEP = 1.0 / 60.0

_body_ids = itertools.count(1)


class RigidBody:
    """A box-shaped body tracked by :class:`PhysicsWorld`.

    Args:
        mass: Zero makes the body static.
        position: Centre of the body in world space.
        half_height: Distance from centre to bottom face, used for
            ground contact.
    """

    __slots__ = ("id", "mass", "position", "velocity", "half_height")

    def __init__(
        self,
        mass: float,
        position: Vec3 = ZERO,
        half_height: float = 0.0,
    ) -> None:
        self.id = next(_body_ids)
        self.mass = mass
        self.position = position
        self.velocity = ZERO
        self.half_height = half_height

    @property
    def is_static(self) -> bool:
        return self.mass <= 0.0

    def teleport(self, position: Vec3) -> None:
        """Place the body at *position* and drop any momentum."""
        self.position = position
        self.velocity = ZERO

    def __repr__(self) -> str:
        return f"RigidBody(id={self.id}, mass={self.mass}, position={self.position})"


class PhysicsWorld:
    """Owns the set of simulated bodies and advances them in fixed steps."""

    __slots__ = ("_bodies", "gravity", "ground_y", "time_step")

    def __init__(
        self,
        gravity: float = DEFAULT_GRAVITY,
        ground_y: float = 0.0,
        time_step: float = DEFAULT_TIME_STEP,
    ) -> None:
        self._bodies: dict[int, RigidBody] = {}
        self.gravity = gravity
        self.ground_y = ground_y
        self.time_step = time_step

    # ── Membership ───────────────────────────────────────────────────────

    def add_body(self, body: RigidBody) -> None:
        self._bodies[body.id] = body

    def remove_body(self, body: RigidBody) -> None:
        """Withdraw *body* from simulation; no-op if it is not present."""
        self._bodies.pop(body.id, None)

    def contains(self, body: RigidBody) -> bool:
        return body.id in self._bodies

    @property
    def bodies(self) -> list[RigidBody]:
        return list(self._bodies.values())

    # ── Simulation ───────────────────────────────────────────────────────

    def fixed_step(self) -> None:
        """Advance every dynamic body by one :attr:`time_step`."""
        dt = self.time_step
        for body in self._bodies.values():
            if body.is_static:
                continue
            velocity = body.velocity + Vec3(0.0, self.gravity * dt, 0.0)
            position = body.position + velocity.scaled(dt)
            rest_y = self.ground_y + body.half_height
            if position.y <= rest_y:
                position = position.with_y(rest_y)
                velocity = ZERO
            body.position = position
            body.velocity = velocity
