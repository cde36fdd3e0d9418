"""
Camera module for 3D TicTacToe.
A perspective camera that turns screen points into rays and back.
"""

import math
import numpy as np
from typing import Optional, Tuple
from dataclasses import dataclass
from .config import ViewportConfig


@dataclass
class Ray:
    """A ray in world space. direction is unit length."""
    origin: np.ndarray
    direction: np.ndarray

    def at(self, t: float) -> np.ndarray:
        """Point at distance t along the ray."""
        return self.origin + t * self.direction


class PerspectiveCamera:
    """
    Simple perspective camera.

    Uses a vertical field of view, like most 3D engines. The camera
    looks from position towards target, with +Y as up.
    """

    def __init__(self, config: Optional[ViewportConfig] = None, aspect: Optional[float] = None):
        """
        Initialize the camera.

        Args:
            config: Viewport configuration. Uses defaults if not provided.
            aspect: Width / height. Defaults to the configured window size.
        """
        self.config = config or ViewportConfig()
        self.fov = self.config.CAMERA_FOV
        self.near = self.config.CAMERA_NEAR
        self.far = self.config.CAMERA_FAR
        self.aspect = aspect or self.config.WINDOW_WIDTH / self.config.WINDOW_HEIGHT

        self.position = np.array(self.config.CAMERA_POSITION, dtype=np.float64)
        self.up = np.array(self.config.CAMERA_UP, dtype=np.float64)
        self.target = np.zeros(3)
        self.look_at(self.config.CAMERA_TARGET)

    def look_at(self, target):
        """Point the camera at target."""
        self.target = np.asarray(target, dtype=np.float64)

    def set_aspect(self, width: int, height: int):
        """Update the aspect ratio after a viewport resize."""
        if width > 0 and height > 0:
            self.aspect = width / height

    def basis(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Get the camera axes in world space.

        Returns:
            (right, up, forward) unit vectors.
        """
        forward = self.target - self.position
        forward = forward / np.linalg.norm(forward)

        right = np.cross(forward, self.up)
        norm = np.linalg.norm(right)
        if norm < 1e-9:
            # Looking straight along up; any horizontal right axis works
            right = np.array([1.0, 0.0, 0.0])
        else:
            right = right / norm

        up = np.cross(right, forward)
        return right, up, forward

    def _half_extents(self) -> Tuple[float, float]:
        """Half width and height of the view frustum at distance 1."""
        half_h = math.tan(math.radians(self.fov) / 2)
        return half_h * self.aspect, half_h

    def ray_from_ndc(self, ndc_x: float, ndc_y: float) -> Ray:
        """
        Cast a ray from the camera through a point in normalized
        device coordinates (-1..1 on both axes, +Y up).
        """
        right, up, forward = self.basis()
        half_w, half_h = self._half_extents()

        direction = forward + ndc_x * half_w * right + ndc_y * half_h * up
        direction = direction / np.linalg.norm(direction)

        return Ray(origin=self.position.copy(), direction=direction)

    def project(self, point) -> Optional[Tuple[float, float]]:
        """
        Project a world point to normalized device coordinates.

        Returns:
            (ndc_x, ndc_y), or None if the point is outside the
            camera's near..far depth range.
        """
        right, up, forward = self.basis()
        rel = np.asarray(point, dtype=np.float64) - self.position

        depth = float(np.dot(rel, forward))
        if depth <= self.near or depth > self.far:
            return None

        half_w, half_h = self._half_extents()
        ndc_x = float(np.dot(rel, right)) / (depth * half_w)
        ndc_y = float(np.dot(rel, up)) / (depth * half_h)
        return ndc_x, ndc_y

    def world_to_screen(self, point, width: int, height: int) -> Optional[Tuple[float, float]]:
        """
        Project a world point to screen pixels (origin top-left).

        Returns:
            (x, y) in pixels, or None if outside the depth range.
        """
        ndc = self.project(point)
        if ndc is None:
            return None

        ndc_x, ndc_y = ndc
        return (ndc_x + 1) / 2 * width, (1 - ndc_y) / 2 * height

    def pixels_per_unit(self, point, height: int) -> float:
        """How many screen pixels one world unit spans at point."""
        _, _, forward = self.basis()
        depth = float(np.dot(np.asarray(point, dtype=np.float64) - self.position, forward))
        if depth <= self.near:
            return 0.0

        _, half_h = self._half_extents()
        return height / (2 * half_h * depth)
