"""
Scene renderer for 3D TicTacToe.
Draws the board grid and the placed pieces into an OpenCV (BGR) frame.
"""

import math
import cv2
import numpy as np
from typing import List, Optional, Tuple
from dataclasses import dataclass
from logic.game_state import Player
from .camera import PerspectiveCamera
from .config import ViewportConfig
from .resolver import CoordinateResolver


@dataclass
class PieceVisual:
    """A piece drawn on the board."""
    index: int
    player: Player
    position: np.ndarray  # 3D center, slightly above the plane


class SceneRenderer:
    """
    Software renderer for the board.

    Receives "place mark" and "clear marks" commands from the game
    controller and keeps the list of piece visuals. render() draws the
    current scene for a camera; it reads no game state.
    """

    def __init__(self, config: Optional[ViewportConfig] = None):
        """
        Initialize the renderer.

        Args:
            config: Viewport configuration.
        """
        self.config = config or ViewportConfig()
        self.resolver = CoordinateResolver(self.config)
        self.pieces: List[PieceVisual] = []

        # X bars and O ring are built once and reused for every piece
        self._x_bars = self._build_x_bars()
        self._o_ring = self._build_o_ring()

    def _build_x_bars(self) -> List[Tuple[np.ndarray, np.ndarray]]:
        """Endpoints of the two X bars, relative to the piece center."""
        half = self.config.X_BAR_LENGTH / 2
        bars = []
        for angle in (math.pi / 4, -math.pi / 4):
            direction = np.array([math.cos(angle), 0.0, math.sin(angle)])
            bars.append((-half * direction, half * direction))
        return bars

    def _build_o_ring(self) -> np.ndarray:
        """Points around the O ring, relative to the piece center."""
        angles = np.linspace(0, 2 * math.pi, self.config.O_SEGMENTS, endpoint=False)
        radius = self.config.O_RADIUS
        return np.stack([
            radius * np.cos(angles),
            np.zeros_like(angles),
            radius * np.sin(angles),
        ], axis=1)

    def place_mark(self, index: int, player: Player):
        """Add a piece visual at the given board index."""
        position = self.resolver.cell_position(index)
        self.pieces.append(PieceVisual(index=index, player=player, position=position))

        if self.config.DEBUG_MODE:
            print(f"Placed {player.value} visual at cell {index} -> {position}")

    def clear_marks(self):
        """Release all piece visuals."""
        self.pieces.clear()

    def render(self, camera: PerspectiveCamera, width: int, height: int) -> np.ndarray:
        """
        Draw the scene.

        Args:
            camera: Camera to view the scene through.
            width: Frame width in pixels.
            height: Frame height in pixels.

        Returns:
            BGR frame of shape (height, width, 3).
        """
        frame = np.empty((height, width, 3), dtype=np.uint8)
        frame[:] = self.config.BACKGROUND_COLOR

        self._draw_grid(frame, camera)

        # Painter's order: far pieces first
        pieces = sorted(
            self.pieces,
            key=lambda p: -float(np.linalg.norm(p.position - camera.position))
        )
        for piece in pieces:
            if piece.player == Player.X:
                self._draw_x(frame, camera, piece.position)
            else:
                self._draw_o(frame, camera, piece.position)

        return frame

    def _to_pixel(self, camera: PerspectiveCamera, point, frame: np.ndarray) -> Optional[Tuple[int, int]]:
        height, width = frame.shape[:2]
        screen = camera.world_to_screen(point, width, height)
        if screen is None:
            return None
        return int(round(screen[0])), int(round(screen[1]))

    def _draw_segment(self, frame, camera, start, end, color, thickness):
        """Draw a 3D line segment. Skipped if either end is behind the camera."""
        p1 = self._to_pixel(camera, start, frame)
        p2 = self._to_pixel(camera, end, frame)
        if p1 is None or p2 is None:
            return
        cv2.line(frame, p1, p2, color, thickness, cv2.LINE_AA)

    def _draw_grid(self, frame: np.ndarray, camera: PerspectiveCamera):
        """Draw the grid helper: BOARD_SIZE + 1 lines along each axis."""
        half = self.config.PLANE_SIZE / 2
        for i in range(self.config.BOARD_SIZE + 1):
            k = -half + i * self.config.CELL_SIZE
            # Line along Z at x = k, then along X at z = k
            self._draw_segment(frame, camera, (k, 0, -half), (k, 0, half),
                               self.config.GRID_COLOR, self.config.GRID_THICKNESS)
            self._draw_segment(frame, camera, (-half, 0, k), (half, 0, k),
                               self.config.GRID_COLOR, self.config.GRID_THICKNESS)

    def _thickness(self, camera: PerspectiveCamera, point, size: float, frame: np.ndarray) -> int:
        """Pixel thickness of something `size` world units wide at point."""
        pixels = camera.pixels_per_unit(point, frame.shape[0]) * size
        return max(1, int(round(pixels)))

    def _draw_x(self, frame: np.ndarray, camera: PerspectiveCamera, position: np.ndarray):
        thickness = self._thickness(camera, position, self.config.X_BAR_WIDTH, frame)
        for start, end in self._x_bars:
            self._draw_segment(frame, camera, position + start, position + end,
                               self.config.X_COLOR, thickness)

    def _draw_o(self, frame: np.ndarray, camera: PerspectiveCamera, position: np.ndarray):
        points = []
        for offset in self._o_ring:
            pixel = self._to_pixel(camera, position + offset, frame)
            if pixel is None:
                return
            points.append(pixel)

        thickness = self._thickness(camera, position, 2 * self.config.O_TUBE_RADIUS, frame)
        cv2.polylines(frame, [np.array(points, dtype=np.int32)], True,
                      self.config.O_COLOR, thickness, cv2.LINE_AA)
