"""
Viewport configuration for 3D TicTacToe.
All the settings for camera, board geometry, controls, and drawing.

Setup:
    pip install numpy opencv-python Pillow
"""


class ViewportConfig:
    """
    Configuration class for viewport settings.
    Change these values to adjust the look and feel!
    """

    # ==================== WINDOW SETTINGS ====================
    WINDOW_TITLE = "TicTacToe 3D"
    WINDOW_WIDTH = 960
    WINDOW_HEIGHT = 720
    FRAME_INTERVAL_MS = 16  # ~60 FPS render loop

    # ==================== CAMERA SETTINGS ====================
    CAMERA_FOV = 45.0        # Vertical field of view in degrees
    CAMERA_NEAR = 0.1
    CAMERA_FAR = 1000.0
    CAMERA_POSITION = (0.0, 5.0, 5.0)
    CAMERA_TARGET = (0.0, 0.0, 0.0)
    CAMERA_UP = (0.0, 1.0, 0.0)

    # ==================== BOARD SETTINGS ====================
    # TicTacToe is a 3x3 grid lying in the y=0 plane, centered at origin
    BOARD_SIZE = 3
    CELL_SIZE = 1.0
    PLANE_SIZE = CELL_SIZE * BOARD_SIZE  # 3 units square

    # Hit points are clamped this far inside the plane edge
    # so a click right on the border still lands in an edge cell
    CLAMP_EPSILON = 0.01

    # Pieces float slightly above the plane to avoid z-fighting
    PIECE_HEIGHT_OFFSET = 0.05

    # ==================== ORBIT CONTROLS ====================
    ENABLE_DAMPING = True
    DAMPING_FACTOR = 0.05
    MIN_DISTANCE = 3.0
    MAX_DISTANCE = 15.0
    ROTATE_SPEED = 1.0
    ZOOM_SPEED = 1.0

    # ==================== DRAWING (BGR colors) ====================
    BACKGROUND_COLOR = (221, 221, 221)   # 0xdddddd
    GRID_COLOR = (153, 153, 153)         # 0x999999
    GRID_THICKNESS = 2
    X_COLOR = (0, 0, 255)                # red
    O_COLOR = (255, 0, 0)                # blue

    # X = two crossed bars, O = a ring
    X_BAR_LENGTH = 0.8
    X_BAR_WIDTH = 0.1
    O_RADIUS = 0.35
    O_TUBE_RADIUS = 0.05
    O_SEGMENTS = 48

    # ==================== STATUS OVERLAY ====================
    STATUS_COLOR = (40, 40, 40)
    STATUS_FONT_SCALE = 0.9

    # ==================== DEBUG SETTINGS ====================
    DEBUG_MODE = False
