"""
Orbit controls for 3D TicTacToe.
Lets the player swing the camera around the board and zoom in and out.
"""

import math
import numpy as np
from typing import Optional
from .camera import PerspectiveCamera
from .config import ViewportConfig


# Keep the camera off the poles so the up vector stays usable
_POLAR_EPSILON = 1e-6
_CHANGE_EPSILON = 1e-6


class OrbitControls:
    """
    Orbits a camera around its target.

    The camera position is kept in spherical coordinates around the
    target:
    - radius: distance to the target (clamped to MIN/MAX_DISTANCE)
    - theta: angle around the Y axis
    - phi: angle down from the +Y axis

    With damping on, rotate() only queues motion; each update() applies
    a fraction of it, so the camera glides to a stop over a few frames.
    update() must therefore be called every frame.
    """

    def __init__(self, camera: PerspectiveCamera, config: Optional[ViewportConfig] = None):
        """
        Initialize the controls.

        Args:
            camera: The camera to move.
            config: Viewport configuration.
        """
        self.camera = camera
        self.config = config or ViewportConfig()

        # Pending motion
        self._delta_theta = 0.0
        self._delta_phi = 0.0
        self._scale = 1.0

    def rotate(self, dx: float, dy: float, viewport_height: float):
        """
        Queue a rotation from a pointer drag.

        Args:
            dx: Horizontal drag in pixels.
            dy: Vertical drag in pixels.
            viewport_height: Viewport height in pixels. A drag across the
                             full height turns the camera once around.
        """
        if viewport_height <= 0:
            return

        speed = 2 * math.pi * self.config.ROTATE_SPEED / viewport_height
        self._delta_theta -= dx * speed
        self._delta_phi -= dy * speed

    def dolly(self, steps: float):
        """
        Zoom by wheel steps. Positive steps move closer.
        """
        self._scale *= 0.95 ** (steps * self.config.ZOOM_SPEED)

    def update(self) -> bool:
        """
        Apply pending motion to the camera.

        Returns:
            True if the camera moved noticeably.
        """
        target = self.camera.target
        offset = self.camera.position - target

        radius = float(np.linalg.norm(offset))
        theta = math.atan2(offset[0], offset[2])
        phi = math.acos(float(np.clip(offset[1] / radius, -1.0, 1.0)))

        if self.config.ENABLE_DAMPING:
            theta += self._delta_theta * self.config.DAMPING_FACTOR
            phi += self._delta_phi * self.config.DAMPING_FACTOR
        else:
            theta += self._delta_theta
            phi += self._delta_phi

        phi = min(max(phi, _POLAR_EPSILON), math.pi - _POLAR_EPSILON)
        radius = min(max(radius * self._scale, self.config.MIN_DISTANCE),
                     self.config.MAX_DISTANCE)

        new_position = target + radius * np.array([
            math.sin(phi) * math.sin(theta),
            math.cos(phi),
            math.sin(phi) * math.cos(theta),
        ])

        moved = float(np.linalg.norm(new_position - self.camera.position)) > _CHANGE_EPSILON
        self.camera.position = new_position
        self.camera.look_at(target)

        if self.config.ENABLE_DAMPING:
            self._delta_theta *= 1 - self.config.DAMPING_FACTOR
            self._delta_phi *= 1 - self.config.DAMPING_FACTOR
        else:
            self._delta_theta = 0.0
            self._delta_phi = 0.0
        self._scale = 1.0

        return moved
