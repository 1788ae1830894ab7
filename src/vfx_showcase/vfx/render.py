from __future__ import annotations

from typing import Iterable, Sequence

from panda3d.core import (
    ColorBlendAttrib,
    Geom,
    GeomLinestrips,
    GeomNode,
    GeomPoints,
    GeomVertexData,
    GeomVertexFormat,
    GeomVertexWriter,
    LVector3f,
    NodePath,
    OmniBoundingVolume,
)

from vfx_showcase.vfx.colors import RGB


def _setup_particle_state(np: NodePath, *, additive: bool) -> None:
    np.setTransparency(True)
    np.setDepthWrite(False)
    np.setLightOff(1)
    np.setTwoSided(True)
    np.setBin("fixed", 30)
    if additive:
        np.setAttrib(ColorBlendAttrib.make(ColorBlendAttrib.MAdd, ColorBlendAttrib.OIncomingAlpha, ColorBlendAttrib.OOne))


def build_point_cloud(name: str, count: int, *, size: float, additive: bool = True) -> NodePath:
    """Point cloud with one dynamic row (position + RGBA) per particle."""

    n = max(0, int(count))
    vdata = GeomVertexData(name, GeomVertexFormat.getV3c4(), Geom.UHDynamic)
    vdata.setNumRows(n)
    vw = GeomVertexWriter(vdata, "vertex")
    cw = GeomVertexWriter(vdata, "color")
    for _ in range(n):
        vw.addData3f(0.0, 0.0, 0.0)
        cw.addData4f(1.0, 1.0, 1.0, 1.0)

    prim = GeomPoints(Geom.UHStatic)
    if n > 0:
        prim.addConsecutiveVertices(0, n)
    geom = Geom(vdata)
    geom.addPrimitive(prim)
    node = GeomNode(name)
    node.addGeom(geom)

    np = NodePath(node)
    np.setRenderModeThickness(max(1e-4, float(size)))
    np.setRenderModePerspective(True)
    _setup_particle_state(np, additive=additive)
    # Particles move every frame; bounds from the spawn frame would cull them.
    np.node().setFinal(True)
    np.node().setBounds(OmniBoundingVolume())
    return np


def write_point_cloud(
    np: NodePath,
    positions: Sequence[LVector3f],
    alphas: Sequence[float],
    *,
    color: RGB,
) -> None:
    node = np.node()
    if node.getNumGeoms() <= 0:
        return
    vdata = node.modifyGeom(0).modifyVertexData()
    if vdata.getNumRows() != len(positions):
        vdata.setNumRows(len(positions))
    vw = GeomVertexWriter(vdata, "vertex")
    cw = GeomVertexWriter(vdata, "color")
    for p, a in zip(positions, alphas):
        vw.setData3f(float(p.x), float(p.y), float(p.z))
        cw.setData4f(color.r, color.g, color.b, max(0.0, min(1.0, float(a))))


def build_line_node(name: str) -> NodePath:
    np = NodePath(GeomNode(name))
    _setup_particle_state(np, additive=False)
    np.node().setFinal(True)
    np.node().setBounds(OmniBoundingVolume())
    return np


def write_line_strip(np: NodePath, points: Iterable[LVector3f], *, color: RGB, alpha: float) -> None:
    node: GeomNode = np.node()
    node.removeAllGeoms()
    pts = list(points)
    if len(pts) < 2:
        return
    vdata = GeomVertexData(node.getName(), GeomVertexFormat.getV3c4(), Geom.UHDynamic)
    vdata.setNumRows(len(pts))
    vw = GeomVertexWriter(vdata, "vertex")
    cw = GeomVertexWriter(vdata, "color")
    a = max(0.0, min(1.0, float(alpha)))
    for p in pts:
        vw.addData3f(float(p.x), float(p.y), float(p.z))
        cw.addData4f(color.r, color.g, color.b, a)
    prim = GeomLinestrips(Geom.UHDynamic)
    prim.addConsecutiveVertices(0, len(pts))
    prim.closePrimitive()
    geom = Geom(vdata)
    geom.addPrimitive(prim)
    node.addGeom(geom)
