"""
Tests for the viewport module: camera, resolver, controls, and renderer.

Usage:
    python test_viewport.py
    pytest test_viewport.py
"""

import math
import sys
from pathlib import Path

import numpy as np
import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from logic.game_state import Player
from viewport import (
    ViewportConfig, PerspectiveCamera, Ray, OrbitControls,
    CoordinateResolver, PlaneGeometry, SceneRenderer, screen_to_ndc
)


WIDTH, HEIGHT = 960, 720

# A few camera poses looking at the board from different sides
CAMERA_POSES = [
    (0.0, 5.0, 5.0),
    (0.0, 8.0, 0.5),
    (4.0, 3.0, -2.0),
    (-6.0, 4.0, 1.0),
]


def make_camera(position=(0.0, 5.0, 5.0), width=WIDTH, height=HEIGHT) -> PerspectiveCamera:
    camera = PerspectiveCamera(aspect=width / height)
    camera.position = np.array(position, dtype=np.float64)
    camera.look_at((0, 0, 0))
    return camera


# ==================== NDC ====================

def test_screen_to_ndc_corners_and_center():
    assert screen_to_ndc(0, 0, 800, 600) == (-1.0, 1.0)
    assert screen_to_ndc(800, 600, 800, 600) == (1.0, -1.0)
    assert screen_to_ndc(400, 300, 800, 600) == (0.0, 0.0)


def test_screen_to_ndc_empty_viewport():
    assert screen_to_ndc(10, 10, 0, 600) is None
    assert screen_to_ndc(10, 10, 800, 0) is None


# ==================== CAMERA ====================

def test_camera_defaults():
    camera = PerspectiveCamera()
    assert camera.fov == 45.0
    assert camera.aspect == pytest.approx(WIDTH / HEIGHT)
    np.testing.assert_allclose(camera.position, (0, 5, 5))


def test_camera_center_ray_hits_target():
    camera = make_camera()
    ray = camera.ray_from_ndc(0, 0)
    assert np.linalg.norm(ray.direction) == pytest.approx(1.0)
    np.testing.assert_allclose(ray.direction, np.array([0, -1, -1]) / math.sqrt(2), atol=1e-12)


def test_camera_project_inverts_ray():
    camera = make_camera((3.0, 4.0, 2.0))
    ray = camera.ray_from_ndc(0.3, -0.6)
    ndc = camera.project(ray.at(5.0))
    assert ndc == pytest.approx((0.3, -0.6))


def test_camera_project_behind_is_none():
    camera = make_camera()
    assert camera.project((0, 10, 10)) is None
    assert camera.world_to_screen((0, 10, 10), WIDTH, HEIGHT) is None


def test_camera_project_beyond_far_is_none():
    camera = make_camera()
    _, _, forward = camera.basis()
    assert camera.project(camera.position + forward * (camera.far - 1)) is not None
    assert camera.project(camera.position + forward * (camera.far + 1)) is None

    config = ViewportConfig()
    config.CAMERA_FAR = 5.0
    near_sighted = PerspectiveCamera(config)
    # Board center is about 7 units away
    assert near_sighted.project((0, 0, 0)) is None


def test_camera_set_aspect_ignores_empty_size():
    camera = make_camera()
    camera.set_aspect(1600, 900)
    assert camera.aspect == pytest.approx(16 / 9)
    camera.set_aspect(0, 0)
    assert camera.aspect == pytest.approx(16 / 9)


# ==================== PLANE ====================

def test_plane_hit_from_above_and_below():
    plane = PlaneGeometry()
    down = Ray(origin=np.array([0.5, 2.0, 0.5]), direction=np.array([0.0, -1.0, 0.0]))
    up = Ray(origin=np.array([0.5, -2.0, 0.5]), direction=np.array([0.0, 1.0, 0.0]))
    np.testing.assert_allclose(plane.intersect_ray(down), (0.5, 0.0, 0.5))
    np.testing.assert_allclose(plane.intersect_ray(up), (0.5, 0.0, 0.5))


def test_plane_misses():
    plane = PlaneGeometry()
    parallel = Ray(origin=np.array([0.0, 1.0, 0.0]), direction=np.array([1.0, 0.0, 0.0]))
    away = Ray(origin=np.array([0.0, 1.0, 0.0]), direction=np.array([0.0, 1.0, 0.0]))
    outside = Ray(origin=np.array([2.0, 1.0, 0.0]), direction=np.array([0.0, -1.0, 0.0]))
    assert plane.intersect_ray(parallel) is None
    assert plane.intersect_ray(away) is None
    assert plane.intersect_ray(outside) is None


def test_plane_edge_counts_as_hit():
    plane = PlaneGeometry()
    ray = Ray(origin=np.array([1.5, 1.0, -1.5]), direction=np.array([0.0, -1.0, 0.0]))
    assert plane.intersect_ray(ray) is not None


# ==================== RESOLVER ====================

@pytest.mark.parametrize("x, z, expected", [
    (0.0, 0.0, 4),
    (-1.0, -1.0, 0),
    (1.0, -1.0, 2),
    (-1.0, 1.0, 6),
    (1.0, 1.0, 8),
    (0.49, -0.51, 1),
    (-0.5, 0.0, 4),      # on a grid line: floor puts it in the right-hand cell
    (1.5, -1.5, 2),      # exact corners are clamped inside
    (-1.5, 1.5, 6),
    (1.5, 1.5, 8),
    (-1.5, -1.5, 0),
])
def test_point_to_index(x, z, expected):
    assert CoordinateResolver().point_to_index(x, z) == expected


def test_cell_position():
    resolver = CoordinateResolver()
    np.testing.assert_allclose(resolver.cell_position(0), (-1.0, 0.05, -1.0))
    np.testing.assert_allclose(resolver.cell_position(4), (0.0, 0.05, 0.0))
    np.testing.assert_allclose(resolver.cell_position(5), (1.0, 0.05, 0.0))
    np.testing.assert_allclose(resolver.cell_position(7), (0.0, 0.05, 1.0))


def test_resolve_screen_center_is_center_cell():
    camera = make_camera()
    index = CoordinateResolver().resolve_index(WIDTH / 2, HEIGHT / 2, WIDTH, HEIGHT, camera)
    assert index == 4


def test_resolve_off_board_is_none():
    camera = make_camera()
    resolver = CoordinateResolver()
    # Top of the screen looks past the board
    assert resolver.resolve_index(0, 0, WIDTH, HEIGHT, camera) is None
    assert resolver.resolve_index(WIDTH / 2, 0, WIDTH, HEIGHT, camera) is None


def test_resolve_empty_viewport_is_none():
    camera = make_camera()
    assert CoordinateResolver().resolve_index(0, 0, 0, 0, camera) is None


def test_resolve_with_custom_plane():
    camera = make_camera()
    tiny = PlaneGeometry(width=0.2, depth=0.2)
    resolver = CoordinateResolver()
    sx, sy = camera.world_to_screen((1.0, 0.0, 1.0), WIDTH, HEIGHT)
    assert resolver.resolve_index(sx, sy, WIDTH, HEIGHT, camera) == 8
    assert resolver.resolve_index(sx, sy, WIDTH, HEIGHT, camera, plane=tiny) is None


def test_resolve_is_deterministic():
    camera = make_camera((4.0, 3.0, -2.0))
    resolver = CoordinateResolver()
    results = {resolver.resolve_index(400, 420, WIDTH, HEIGHT, camera) for _ in range(5)}
    assert len(results) == 1


@pytest.mark.parametrize("position", CAMERA_POSES)
@pytest.mark.parametrize("index", range(9))
def test_placement_round_trip(position, index):
    camera = make_camera(position)
    resolver = CoordinateResolver()

    sx, sy = camera.world_to_screen(resolver.cell_position(index), WIDTH, HEIGHT)
    assert resolver.resolve_index(sx, sy, WIDTH, HEIGHT, camera) == index


def test_round_trip_after_resize():
    camera = make_camera(width=1600, height=900)
    resolver = CoordinateResolver()
    for index in range(9):
        sx, sy = camera.world_to_screen(resolver.cell_position(index), 1600, 900)
        assert resolver.resolve_index(sx, sy, 1600, 900, camera) == index


# ==================== ORBIT CONTROLS ====================

def test_controls_idle_update_does_not_move():
    camera = make_camera()
    controls = OrbitControls(camera)
    assert controls.update() is False
    np.testing.assert_allclose(camera.position, (0, 5, 5), atol=1e-9)


def test_controls_rotate_keeps_distance_and_settles():
    camera = make_camera()
    controls = OrbitControls(camera)
    radius = np.linalg.norm(camera.position)

    controls.rotate(100, 0, HEIGHT)
    assert controls.update() is True
    assert camera.position[0] < 0

    for _ in range(500):
        controls.update()

    assert np.linalg.norm(camera.position) == pytest.approx(radius)
    theta = math.atan2(camera.position[0], camera.position[2])
    assert theta == pytest.approx(-100 * 2 * math.pi / HEIGHT, abs=1e-6)
    assert controls.update() is False


def test_controls_dolly_clamps_distance():
    config = ViewportConfig()
    camera = make_camera()
    controls = OrbitControls(camera, config)

    controls.dolly(-200)
    controls.update()
    assert np.linalg.norm(camera.position) == pytest.approx(config.MAX_DISTANCE)

    controls.dolly(200)
    controls.update()
    assert np.linalg.norm(camera.position) == pytest.approx(config.MIN_DISTANCE)


def test_controls_cannot_flip_over_the_pole():
    camera = make_camera()
    controls = OrbitControls(camera)
    controls.rotate(0, 100000, HEIGHT)
    for _ in range(50):
        controls.update()
    assert np.all(np.isfinite(camera.position))
    # Camera stays on a well defined side of the target
    assert np.linalg.norm(camera.position[[0, 2]]) > 0



class _RecordingControls:
    def __init__(self):
        self.steps = []

    def dolly(self, steps):
        self.steps.append(steps)


@pytest.mark.parametrize("delta, expected", [
    (120, [1]),     # Windows
    (-240, [-1]),
    (1, [1]),       # macOS
    (-2, [-1]),
    (0, []),
])
def test_tk_wheel_zooms_one_step_per_event(delta, expected):
    pytest.importorskip("tkinter")
    pytest.importorskip("PIL.ImageTk")
    from types import SimpleNamespace
    from ui import TicTacToe3DUI

    fake_ui = SimpleNamespace(controls=_RecordingControls())
    TicTacToe3DUI._on_wheel(fake_ui, SimpleNamespace(delta=delta))
    assert fake_ui.controls.steps == expected


# ==================== RENDERER ====================

def test_render_frame_shape_and_background():
    config = ViewportConfig()
    renderer = SceneRenderer(config)
    frame = renderer.render(make_camera(width=320, height=240), 320, 240)

    assert frame.shape == (240, 320, 3)
    assert frame.dtype == np.uint8
    assert tuple(frame[0, 0]) == config.BACKGROUND_COLOR


def test_render_draws_grid():
    config = ViewportConfig()
    renderer = SceneRenderer(config)
    camera = make_camera(width=320, height=240)
    frame = renderer.render(camera, 320, 240)

    # Middle of the line between cells 3 and 4
    sx, sy = camera.world_to_screen((-0.5, 0.0, 0.0), 320, 240)
    assert tuple(frame[int(round(sy)), int(round(sx))]) != config.BACKGROUND_COLOR


def test_place_and_clear_marks():
    config = ViewportConfig()
    renderer = SceneRenderer(config)
    camera = make_camera(width=320, height=240)
    empty = renderer.render(camera, 320, 240)

    renderer.place_mark(4, Player.X)
    renderer.place_mark(0, Player.O)
    assert [(p.index, p.player) for p in renderer.pieces] == [(4, Player.X), (0, Player.O)]

    frame = renderer.render(camera, 320, 240)
    sx, sy = camera.world_to_screen(renderer.pieces[0].position, 320, 240)
    b, g, r = frame[int(round(sy)), int(round(sx))]
    assert r > b and r > g

    renderer.clear_marks()
    assert renderer.pieces == []
    np.testing.assert_array_equal(renderer.render(camera, 320, 240), empty)


def test_render_o_ring():
    renderer = SceneRenderer()
    camera = make_camera(width=320, height=240)
    empty = renderer.render(camera, 320, 240)

    renderer.place_mark(8, Player.O)
    frame = renderer.render(camera, 320, 240)
    assert (frame != empty).any()


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
