from __future__ import annotations

import random
import sys
import traceback
from pathlib import Path

from direct.gui.OnscreenText import OnscreenText
from direct.showbase.ShowBase import ShowBase
from direct.task import Task
from panda3d.core import (
    AmbientLight,
    ClockObject,
    DirectionalLight,
    Fog,
    LVector3f,
    LVector4f,
    NodePath,
    TextNode,
    loadPrcFileData,
)

from vfx_showcase.app_config import RunConfig
from vfx_showcase.camera.orbit_controller import OrbitCameraController
from vfx_showcase.common.aabb import AABB
from vfx_showcase.common.error_log import ErrorLog
from vfx_showcase.physics.collision_world import CollisionWorld, euler_xyz_quat
from vfx_showcase.scene_config import ShowcaseConfig, WallSpec, load_showcase_config
from vfx_showcase.showcase import Showcase
from vfx_showcase.vfx.colors import parse_color

# Browsers report ~100 units of deltaY per wheel notch; the zoom scale assumes that.
WHEEL_NOTCH_DELTA = 100.0
MAX_FRAME_DT = 0.05

HELP_TEXT = "\n".join(
    [
        "Arrow Left / Right   change effect",
        "Left mouse + drag    orbit camera",
        "Mouse wheel          zoom",
        "H                    toggle this help",
        "Esc                  quit",
    ]
)


def wall_box(spec: WallSpec) -> AABB:
    return AABB.from_center_size(LVector3f(*spec.position), LVector3f(*spec.size))


class ShowcaseApp(ShowBase):
    def __init__(self, cfg: RunConfig) -> None:
        loadPrcFileData("", "audio-library-name null")
        loadPrcFileData("", "win-fixed-size 0")
        if cfg.smoke:
            loadPrcFileData("", "window-type offscreen")

        super().__init__()

        self.cfg = cfg
        self.disableMouse()
        self.error_log = ErrorLog(persist_path=Path(cfg.error_log_path) if cfg.error_log_path else None)
        self.scene_cfg: ShowcaseConfig = load_showcase_config(Path(cfg.config_path) if cfg.config_path else None)
        self._rng = random.Random(cfg.seed)

        # Scene config and the orbit math are Y-up; Panda3D is Z-up.
        self.world_np = self.render.attachNewNode("world-y-up")
        self.world_np.setP(90)
        self.camera.reparentTo(self.world_np)

        self._setup_lighting()
        self._setup_fog()
        self.collision_world = self._setup_walls()

        self.showcase = Showcase.from_config(self.scene_cfg, stage=self.world_np.attachNewNode("vfx-stage"), rng=self._rng)
        self.orbit = OrbitCameraController(
            self.camera,
            self.showcase.focus_position,
            self.scene_cfg.camera,
            collidables=[self.collision_world] if self.collision_world.body_count > 0 else [],
            collision_radius=cfg.collision_radius,
        )
        self.showcase.bind_camera(self.orbit)
        if not self.showcase.effects:
            self.error_log.record_message(context="scene.effects", message="No effects configured")
        self.orbit.reset()

        self._setup_ui()
        self._setup_input()

        self.taskMgr.add(self._update, "showcase-update")
        if cfg.smoke:
            self._smoke_frames = max(1, int(cfg.smoke_frames))
            self.taskMgr.add(self._smoke_exit, "smoke-exit")

    # -- setup -------------------------------------------------------------

    def _setup_lighting(self) -> None:
        ambient = AmbientLight("ambient")
        ambient.setColor(LVector4f(0.25, 0.25, 0.25, 1))
        self.render.setLight(self.render.attachNewNode(ambient))

        key = DirectionalLight("key")
        key.setColor(LVector4f(1.0, 1.0, 1.0, 1))
        key_np = self.world_np.attachNewNode(key)
        key_np.setPos(5, 8, 6)
        key_np.lookAt(0, 0, 0)
        self.render.setLight(key_np)

        fill = DirectionalLight("fill")
        fill.setColor(LVector4f(0.53 * 0.5, 0.67 * 0.5, 1.0 * 0.5, 1))
        fill_np = self.world_np.attachNewNode(fill)
        fill_np.setPos(-6, 4, 4)
        fill_np.lookAt(0, 0, 0)
        self.render.setLight(fill_np)

    def _setup_fog(self) -> None:
        spec = self.scene_cfg.fog
        if spec is None:
            self.setBackgroundColor(0.07, 0.07, 0.1, 1)
            return
        c = parse_color(spec.color)
        fog = Fog("scene-fog")
        fog.setColor(c.r, c.g, c.b)
        fog.setLinearRange(float(spec.near), float(spec.far))
        self.render.setFog(fog)
        self.setBackgroundColor(c.r, c.g, c.b, 1)

    def _setup_walls(self) -> CollisionWorld:
        world = CollisionWorld(boxes=[], root=NodePath("collision-root"))
        for spec in self.scene_cfg.walls:
            box = wall_box(spec)
            world.add_box(box, name=spec.name, rotation_deg=spec.rotation)

            # Pivot at the wall center so rotation turns the wall in place.
            pivot = self.world_np.attachNewNode(spec.name)
            pivot.setPos(box.center)
            pivot.setQuat(euler_xyz_quat(spec.rotation))
            size = box.maximum - box.minimum
            # models/box spans (0,0,0)..(1,1,1).
            model = self.loader.loadModel("models/box")
            model.reparentTo(pivot)
            model.setScale(max(1e-4, float(size.x)), max(1e-4, float(size.y)), max(1e-4, float(size.z)))
            model.setPos(-size * 0.5)
            c = parse_color(spec.color)
            model.setColor(c.r, c.g, c.b, 1)
        return world

    def _setup_ui(self) -> None:
        self._caption = OnscreenText(
            text=self.showcase.selected_name,
            parent=self.aspect2d,
            pos=(0.0, -0.6),
            align=TextNode.ACenter,
            scale=0.075,
            fg=(1, 1, 1, 1),
            shadow=(0, 0, 0, 0.8),
        )
        self._help = OnscreenText(
            text=HELP_TEXT,
            parent=self.aspect2d,
            pos=(-1.25, 0.85),
            align=TextNode.ALeft,
            scale=0.045,
            fg=(1, 1, 1, 1),
            shadow=(0, 0, 0, 0.8),
            mayChange=False,
        )
        self._help.hide()
        self._error_line = OnscreenText(
            text="",
            parent=self.aspect2d,
            pos=(0.0, -0.9),
            align=TextNode.ACenter,
            scale=0.04,
            fg=(1.0, 0.35, 0.3, 1),
            shadow=(0, 0, 0, 0.8),
        )
        self._shown_error: tuple[str, int] | None = None
        self._refresh_error_line()

    def _setup_input(self) -> None:
        self.accept("mouse1", lambda: self._safe_call("input.pointer_down", lambda: self._pointer_down(0)))
        self.accept("mouse3", lambda: self._safe_call("input.pointer_down", lambda: self._pointer_down(2)))
        self.accept("mouse1-up", lambda: self._safe_call("input.pointer_up", self.orbit.on_pointer_up))
        self.accept("mouse3-up", lambda: self._safe_call("input.pointer_up", self.orbit.on_pointer_up))
        self.accept("wheel_up", lambda: self._safe_call("input.wheel", lambda: self.orbit.on_wheel(-WHEEL_NOTCH_DELTA)))
        self.accept("wheel_down", lambda: self._safe_call("input.wheel", lambda: self.orbit.on_wheel(WHEEL_NOTCH_DELTA)))
        self.accept("arrow_left", lambda: self._safe_call("input.select", self._select_previous))
        self.accept("arrow_right", lambda: self._safe_call("input.select", self._select_next))
        self.accept("h", self._toggle_help)
        self.accept("escape", self.userExit)

    # -- input -------------------------------------------------------------

    def _pointer_pixels(self) -> tuple[float, float] | None:
        watcher = self.mouseWatcherNode
        if watcher is None or not watcher.hasMouse() or self.win is None:
            return None
        mx = float(watcher.getMouseX())
        my = float(watcher.getMouseY())
        # Pixel coords with y growing downward, like client coordinates.
        return (mx + 1.0) * 0.5 * self.win.getXSize(), (1.0 - my) * 0.5 * self.win.getYSize()

    def _pointer_down(self, button: int) -> None:
        px = self._pointer_pixels()
        if px is None:
            return
        self.orbit.on_pointer_down(px[0], px[1], button=button)

    def _poll_pointer(self) -> None:
        if not self.orbit.is_dragging:
            return
        px = self._pointer_pixels()
        if px is not None:
            self.orbit.on_pointer_move(px[0], px[1])

    def _select_previous(self) -> None:
        self.showcase.select_previous()
        self._caption.setText(self.showcase.selected_name)

    def _select_next(self) -> None:
        self.showcase.select_next()
        self._caption.setText(self.showcase.selected_name)

    def _toggle_help(self) -> None:
        if self._help.isHidden():
            self._help.show()
        else:
            self._help.hide()

    # -- frame -------------------------------------------------------------

    def _update(self, task: Task) -> int:
        dt = min(ClockObject.getGlobalClock().getDt(), MAX_FRAME_DT)
        self._safe_call("frame.pointer", self._poll_pointer)
        self._safe_call("frame.tick", lambda: self.showcase.tick(dt))
        self._refresh_error_line()
        return Task.cont

    def _refresh_error_line(self) -> None:
        last = self.error_log.latest()
        shown = None if last is None else (last.summary_line(), last.count)
        if shown == self._shown_error:
            return
        self._shown_error = shown
        self._error_line.setText(self.error_log.banner())

    def _smoke_exit(self, task: Task) -> int:
        self._smoke_frames -= 1
        if self._smoke_frames <= 0:
            self.userExit()
            return Task.done
        return Task.cont

    def _safe_call(self, context: str, fn) -> None:
        try:
            fn()
        except Exception as e:
            self._handle_unhandled_error(context=context, exc=e)

    def _handle_unhandled_error(self, *, context: str, exc: BaseException) -> None:
        try:
            self.error_log.record_exception(context=context, exc=exc)
        except Exception:
            try:
                print(f"[FATAL] error logger failed: {traceback.format_exc()}", file=sys.stderr)
            except Exception:
                pass


def run(
    *,
    smoke: bool = False,
    config_path: str | None = None,
    error_log_path: str | None = None,
    seed: int | None = None,
) -> None:
    app = ShowcaseApp(
        RunConfig(
            smoke=smoke,
            config_path=config_path,
            error_log_path=error_log_path,
            seed=seed,
        )
    )
    app.run()
