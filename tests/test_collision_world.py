from __future__ import annotations

import math

from panda3d.core import LVector3f, NodePath

from vfx_showcase.camera.orbit_controller import OrbitCameraController
from vfx_showcase.common.aabb import AABB
from vfx_showcase.physics.collision_world import CollisionWorld, euler_xyz_quat


def _wall(z: float) -> AABB:
    return AABB.from_center_size(LVector3f(0, 0, z), LVector3f(4, 4, 0.2))


def test_ray_hits_are_sorted_by_distance() -> None:
    world = CollisionWorld(boxes=[_wall(6.0), _wall(3.0)])
    assert world.body_count == 2

    hits = world.intersect_ray(LVector3f(0, 0, 0), LVector3f(0, 0, 1), 10.0)

    assert len(hits) == 2
    assert abs(hits[0].distance - 2.9) < 0.05
    assert abs(hits[1].distance - 5.9) < 0.05


def test_ray_stops_at_max_distance() -> None:
    world = CollisionWorld(boxes=[_wall(6.0)])
    assert world.intersect_ray(LVector3f(0, 0, 0), LVector3f(0, 0, 1), 4.0) == []


def test_empty_world_and_degenerate_rays() -> None:
    assert CollisionWorld(boxes=[]).intersect_ray(LVector3f(0, 0, 0), LVector3f(0, 0, 1), 5.0) == []
    world = CollisionWorld(boxes=[_wall(3.0)])
    assert world.intersect_ray(LVector3f(0, 0, 0), LVector3f(0, 0, 0), 5.0) == []
    assert world.intersect_ray(LVector3f(0, 0, 0), LVector3f(0, 0, 1), 0.0) == []


def test_orbit_camera_stops_in_front_of_bullet_wall() -> None:
    world = CollisionWorld(boxes=[_wall(3.0)], root=NodePath("collision-root"))
    ctrl = OrbitCameraController(NodePath("camera"), lambda: LVector3f(0, 0, 0), {"initialDistance": 5}, collidables=[world])

    pose = ctrl.reset()

    assert pose.collided is True
    assert float(pose.target.length()) <= 2.9 - ctrl.collision_radius + 0.05


def test_rotated_wall_is_hit_where_it_is_turned() -> None:
    # Thin wall centered on the origin, 4 wide along x, 0.2 thick along z.
    slab = AABB.from_center_size(LVector3f(0, 0, 0), LVector3f(4, 4, 0.2))
    origin = LVector3f(-5, 0, 0)
    ray = LVector3f(1, 0, 0)

    flat = CollisionWorld(boxes=[slab])
    assert abs(flat.intersect_ray(origin, ray, 10.0)[0].distance - 3.0) < 0.05

    turned = CollisionWorld(boxes=[])
    turned.add_box(slab, rotation_deg=(0, 45, 0))
    hits = turned.intersect_ray(origin, ray, 10.0)

    # Turned 45 degrees about Y, the slab crosses the x axis within 0.1 / cos(45) of its center.
    assert len(hits) == 1
    assert abs(hits[0].distance - (5.0 - 0.1 / math.cos(math.radians(45)))) < 0.05


def test_quarter_turn_wall_no_longer_blocks_its_old_footprint() -> None:
    slab = AABB.from_center_size(LVector3f(0, 0, 0), LVector3f(4, 4, 0.2))
    world = CollisionWorld(boxes=[])
    world.add_box(slab, rotation_deg=(0, 90, 0))

    # Turned a quarter about Y the slab spans x in [-0.1, 0.1], z in [-2, 2].
    along_x = world.intersect_ray(LVector3f(-5, 0, 1.5), LVector3f(1, 0, 0), 10.0)
    assert len(along_x) == 1
    assert abs(along_x[0].distance - 4.9) < 0.05

    along_z_offset = world.intersect_ray(LVector3f(1.5, 0, -5), LVector3f(0, 0, 1), 10.0)
    assert along_z_offset == []


def test_euler_rotation_about_single_axis() -> None:
    q = euler_xyz_quat((0, 90, 0))
    turned = q.xform(LVector3f(1, 0, 0))
    assert abs(float(turned.y)) < 1e-5
    assert abs(abs(float(turned.z)) - 1.0) < 1e-5

    assert (euler_xyz_quat(None).xform(LVector3f(1, 2, 3)) - LVector3f(1, 2, 3)).length() < 1e-6
    assert (euler_xyz_quat((0, 0, 0)).xform(LVector3f(1, 2, 3)) - LVector3f(1, 2, 3)).length() < 1e-6
