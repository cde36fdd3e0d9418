"""
Coordinate resolver for 3D TicTacToe.
Maps a screen point to a board cell by casting a ray onto the board plane.
"""

import math
import numpy as np
from typing import Optional, Tuple
from dataclasses import dataclass
from .camera import PerspectiveCamera, Ray
from .config import ViewportConfig


@dataclass
class PlaneGeometry:
    """
    The invisible click plane: a finite square in the horizontal (XZ)
    plane, centered at the origin. Hit from above or below.
    """
    width: float = 3.0
    depth: float = 3.0
    height: float = 0.0  # y of the plane

    def intersect_ray(self, ray: Ray) -> Optional[np.ndarray]:
        """
        Intersect a ray with the plane square.

        Returns:
            The 3D hit point, or None if the ray is parallel to the plane,
            points away from it, or hits outside the square.
        """
        denom = ray.direction[1]
        if abs(denom) < 1e-9:
            return None

        t = (self.height - ray.origin[1]) / denom
        if t < 0:
            return None

        point = ray.at(t)
        if abs(point[0]) > self.width / 2 or abs(point[2]) > self.depth / 2:
            return None

        return point


def screen_to_ndc(
    screen_x: float,
    screen_y: float,
    viewport_width: float,
    viewport_height: float
) -> Optional[Tuple[float, float]]:
    """
    Convert screen pixels (origin top-left) to normalized device coordinates.

    Returns:
        (ndc_x, ndc_y), or None for an empty viewport.
    """
    if viewport_width <= 0 or viewport_height <= 0:
        return None

    ndc_x = (screen_x / viewport_width) * 2 - 1
    ndc_y = -(screen_y / viewport_height) * 2 + 1
    return ndc_x, ndc_y


class CoordinateResolver:
    """
    Converts pointer positions into board indices.

    Pipeline:
    1. Screen pixels -> normalized device coordinates
    2. NDC -> ray from the camera
    3. Ray -> hit point on the board plane
    4. Hit point -> (row, col) -> board index

    Stateless with respect to the game: the same camera pose, viewport
    size and screen point always give the same answer.
    """

    def __init__(self, config: Optional[ViewportConfig] = None):
        """
        Initialize the resolver.

        Args:
            config: Viewport configuration.
        """
        self.config = config or ViewportConfig()
        self.plane = PlaneGeometry(
            width=self.config.PLANE_SIZE,
            depth=self.config.PLANE_SIZE
        )

    def resolve_index(
        self,
        screen_x: float,
        screen_y: float,
        viewport_width: float,
        viewport_height: float,
        camera: PerspectiveCamera,
        plane: Optional[PlaneGeometry] = None
    ) -> Optional[int]:
        """
        Find the board cell under a screen point.

        Args:
            screen_x: Pointer X in pixels.
            screen_y: Pointer Y in pixels.
            viewport_width: Viewport width in pixels.
            viewport_height: Viewport height in pixels.
            camera: Camera the viewport is rendered with.
            plane: Plane to hit, defaults to the board plane.

        Returns:
            Board index (0-8), or None if the pointer misses the board.
        """
        ndc = screen_to_ndc(screen_x, screen_y, viewport_width, viewport_height)
        if ndc is None:
            return None

        ray = camera.ray_from_ndc(*ndc)
        point = (plane or self.plane).intersect_ray(ray)
        if point is None:
            return None

        return self.point_to_index(point[0], point[2])

    def point_to_index(self, x: float, z: float) -> Optional[int]:
        """
        Convert a point on the board plane to a board index.

        Args:
            x: Plane X coordinate (columns, left to right).
            z: Plane Z coordinate (rows, far to near).

        Returns:
            Board index (0-8), or None if outside the grid.
        """
        half = self.config.PLANE_SIZE / 2
        limit = half - self.config.CLAMP_EPSILON
        cell = self.config.CELL_SIZE
        size = self.config.BOARD_SIZE

        x = float(np.clip(x, -limit, limit))
        z = float(np.clip(z, -limit, limit))

        col = math.floor((x + half) / cell)
        row = math.floor((z + half) / cell)

        if not (0 <= col < size and 0 <= row < size):
            return None

        return row * size + col

    def cell_position(self, index: int) -> np.ndarray:
        """
        Get the 3D position where a piece on this cell is drawn.

        Args:
            index: Board index (0-8).

        Returns:
            (x, y, z) cell center, lifted slightly above the plane.
        """
        size = self.config.BOARD_SIZE
        cell = self.config.CELL_SIZE
        row, col = divmod(index, size)
        center = (size - 1) / 2  # 1 for a 3x3 board

        return np.array([
            (col - center) * cell,
            self.config.PIECE_HEIGHT_OFFSET,
            (row - center) * cell,
        ])
