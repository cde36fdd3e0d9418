"""
Viewport module for 3D TicTacToe.
Handles the camera, orbit controls, pointer-to-cell resolution, and drawing.
"""

from .config import ViewportConfig
from .camera import PerspectiveCamera, Ray
from .controls import OrbitControls
from .resolver import CoordinateResolver, PlaneGeometry, screen_to_ndc
from .renderer import SceneRenderer
