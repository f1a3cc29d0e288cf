"""Physics layer: vectors, rigid bodies and the simulated world."""

from chesstable.physics.vector import ZERO, Vec3
from chesstable.physics.world import PhysicsWorld, RigidBody

__all__ = ["PhysicsWorld", "RigidBody", "Vec3", "ZERO"]
