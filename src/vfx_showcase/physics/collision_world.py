from __future__ import annotations

from typing import Sequence

from panda3d.bullet import BulletBoxShape, BulletRigidBodyNode, BulletWorld
from panda3d.core import BitMask32, LPoint3f, LQuaternionf, LRotationf, LVector3f, NodePath

from vfx_showcase.common.aabb import AABB
from vfx_showcase.physics.raycast import RayHit


def euler_xyz_quat(rotation_deg: Sequence[float] | None) -> LQuaternionf:
    """
    Orientation for scene-config Euler angles (degrees, X then Y then Z, Y-up frame).

    Matches the intrinsic XYZ order of the scene JSON: the Z turn is applied
    first and the X turn last. Panda composes left to right.
    """

    if rotation_deg is None:
        return LQuaternionf.identQuat()
    rx, ry, rz = (float(c) for c in rotation_deg)
    qx = LRotationf(LVector3f(1, 0, 0), rx)
    qy = LRotationf(LVector3f(0, 1, 0), ry)
    qz = LRotationf(LVector3f(0, 0, 1), rz)
    return LQuaternionf(qz * qy * qx)


class CollisionWorld:
    """Bullet world holding the static walls the orbit camera must not clip through."""

    def __init__(self, *, boxes: list[AABB], root: NodePath | None = None) -> None:
        self._bworld = BulletWorld()
        # Query-only world; nothing is simulated.
        self._bworld.setGravity(LVector3f(0, 0, 0))
        # Keep bodies under an untransformed root so Bullet space == scene config space.
        self._root = root if root is not None else NodePath("collision-root")
        self._bodies: list[BulletRigidBodyNode] = []
        for i, box in enumerate(boxes):
            self.add_box(box, name=f"wall-{i}")

    @property
    def body_count(self) -> int:
        return len(self._bodies)

    def add_box(self, box: AABB, *, name: str = "wall", rotation_deg: Sequence[float] | None = None) -> NodePath:
        """`box` is the wall before rotation; it turns about its own center."""

        half = box.half_extents
        shape = BulletBoxShape(
            LVector3f(max(1e-4, float(half.x)), max(1e-4, float(half.y)), max(1e-4, float(half.z)))
        )
        body = BulletRigidBodyNode(str(name))
        body.setMass(0.0)
        body.addShape(shape)
        np = self._root.attachNewNode(body)
        np.setPos(box.center)
        np.setQuat(euler_xyz_quat(rotation_deg))
        self._bworld.attachRigidBody(body)
        self._bodies.append(body)
        return np

    def intersect_ray(self, origin: LVector3f, direction: LVector3f, max_distance: float) -> list[RayHit]:
        length = max(0.0, float(max_distance))
        if length <= 0.0 or not self._bodies:
            return []
        d = LVector3f(direction)
        if d.lengthSquared() <= 1e-12:
            return []
        d.normalize()
        start = LPoint3f(origin)
        end = LPoint3f(LVector3f(origin) + d * length)
        result = self._bworld.rayTestAll(start, end, BitMask32.allOn())
        hits = [
            RayHit(distance=float(h.getHitFraction()) * length, point=LPoint3f(h.getHitPos()))
            for h in result.getHits()
        ]
        hits.sort(key=lambda h: h.distance)
        return hits
