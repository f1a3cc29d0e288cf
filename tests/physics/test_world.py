"""Tests for the rigid-body world."""

from chesstable.physics.vector import ZERO, Vec3
from chesstable.physics.world import PhysicsWorld, RigidBody


def _settle(world: PhysicsWorld, frames: int = 120) -> None:
    for _ in range(frames):
        world.fixed_step()


class TestPhysicsWorld:
    def test_dynamic_body_falls_to_rest(self) -> None:
        world = PhysicsWorld()
        body = RigidBody(mass=0.1, position=Vec3(1.0, 0.5, 2.0), half_height=0.01)
        world.add_body(body)

        _settle(world)

        assert body.position == Vec3(1.0, 0.01, 2.0)
        assert body.velocity == ZERO

    def test_static_body_never_moves(self) -> None:
        world = PhysicsWorld()
        body = RigidBody(mass=0.0, position=Vec3(0.0, 3.0, 0.0))
        world.add_body(body)

        _settle(world, 10)

        assert body.position == Vec3(0.0, 3.0, 0.0)

    def test_removed_body_is_not_simulated(self) -> None:
        world = PhysicsWorld()
        body = RigidBody(mass=1.0, position=Vec3(0.0, 2.0, 0.0))
        world.add_body(body)
        world.remove_body(body)

        _settle(world, 10)

        assert not world.contains(body)
        assert body.position.y == 2.0

    def test_remove_absent_body_is_noop(self) -> None:
        world = PhysicsWorld()
        world.remove_body(RigidBody(mass=1.0))
        assert world.bodies == []

    def test_teleport_drops_momentum(self) -> None:
        world = PhysicsWorld()
        body = RigidBody(mass=1.0, position=Vec3(0.0, 5.0, 0.0))
        world.add_body(body)
        world.fixed_step()
        assert body.velocity != ZERO

        body.teleport(Vec3(1.0, 1.0, 1.0))

        assert body.position == Vec3(1.0, 1.0, 1.0)
        assert body.velocity == ZERO

    def test_body_ids_are_unique(self) -> None:
        assert RigidBody(mass=1.0).id != RigidBody(mass=1.0).id
