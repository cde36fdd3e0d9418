"""
Main entry point for 3D TicTacToe.

Two front-ends:
- Tkinter window (default): status bar, reset button, 3D board view
- OpenCV window (--no-ui): board view with status drawn on top,
  'r' to reset, 's' to save a screenshot, 'q' to quit

Both share the same controller, session, camera and renderer.
"""

import sys
import time
import cv2
import numpy as np
from typing import Optional

# Logic imports
from logic.session import GameSession

# Viewport imports
from viewport.config import ViewportConfig
from viewport.camera import PerspectiveCamera
from viewport.controls import OrbitControls
from viewport.renderer import SceneRenderer

from controller import GameController, InitializationError


__version__ = "1.0.0"


class OverlayStatus:
    """Status display that draws its text onto each frame."""

    def __init__(self, config: ViewportConfig):
        self.config = config
        self.text = ""

    def show_status(self, text: str):
        self.text = text
        print(f"Status: {text}")

    def draw(self, frame: np.ndarray):
        cv2.putText(
            frame, self.text, (20, 40),
            cv2.FONT_HERSHEY_SIMPLEX, self.config.STATUS_FONT_SCALE,
            self.config.STATUS_COLOR, 2, cv2.LINE_AA
        )


class KeyResetTrigger:
    """Reset trigger fired by a key press."""

    def __init__(self, key: str = 'r'):
        self.key = key
        self._callback = None

    def bind(self, callback):
        self._callback = callback

    def press(self):
        if self._callback is not None:
            self._callback()


class OpenCVViewer:
    """
    3D TicTacToe in an OpenCV window.

    Mouse:
    - Left click: place a mark
    - Right drag: orbit the camera
    - Wheel: zoom
    """

    def __init__(self, config: Optional[ViewportConfig] = None, verbose: bool = False):
        """
        Initialize the viewer.

        Args:
            config: Viewport configuration.
            verbose: Print every move and ignored click.
        """
        print("\n" + "="*60)
        print("   TicTacToe 3D - Initializing...")
        print("="*60 + "\n")

        self.config = config or ViewportConfig()
        self.window = self.config.WINDOW_TITLE

        self.camera = PerspectiveCamera(self.config)
        self.controls = OrbitControls(self.camera, self.config)
        self.renderer = SceneRenderer(self.config)
        self.status = OverlayStatus(self.config)
        self.reset_key = KeyResetTrigger('r')

        self.controller = GameController(
            status_display=self.status,
            reset_trigger=self.reset_key,
            renderer=self.renderer,
            camera=self.camera,
            viewport_size=(self.config.WINDOW_WIDTH, self.config.WINDOW_HEIGHT),
            session=GameSession(verbose=verbose)
        )

        self._drag_start = None
        self.is_running = False

    def start(self):
        """Open the window and run until quit."""
        print("\nStarting TicTacToe 3D...")
        print("Press 'q' to quit, 'r' to reset, 's' to save screenshot\n")

        cv2.namedWindow(self.window, cv2.WINDOW_NORMAL)
        cv2.resizeWindow(self.window, self.config.WINDOW_WIDTH, self.config.WINDOW_HEIGHT)
        cv2.setMouseCallback(self.window, self._on_mouse)

        self.is_running = True
        self._loop()

        cv2.destroyAllWindows()

    def _loop(self):
        """Main render / input loop."""
        while self.is_running:
            self._check_resize()
            self.controls.update()

            frame = self.renderer.render(
                self.camera,
                self.controller.viewport_width,
                self.controller.viewport_height
            )
            self.status.draw(frame)
            cv2.imshow(self.window, frame)

            # Handle key presses
            key = cv2.waitKey(self.config.FRAME_INTERVAL_MS) & 0xFF
            if key == ord('q'):
                print("\nGame quit by user.")
                self.is_running = False
            elif key == ord(self.reset_key.key):
                self.reset_key.press()
            elif key == ord('s'):
                filename = f"tictactoe3d_{int(time.time())}.png"
                cv2.imwrite(filename, frame)
                print(f"Saved: {filename}")

            # Window closed with the title bar button
            if cv2.getWindowProperty(self.window, cv2.WND_PROP_VISIBLE) < 1:
                self.is_running = False

    def _check_resize(self):
        """Follow the window size so clicks map to the right pixels."""
        _, _, width, height = cv2.getWindowImageRect(self.window)
        if width <= 0 or height <= 0:
            return
        if (width, height) != (self.controller.viewport_width, self.controller.viewport_height):
            self.controller.on_resize(width, height)

    def _on_mouse(self, event, x, y, flags, param):
        """OpenCV mouse callback."""
        if event == cv2.EVENT_LBUTTONDOWN:
            self.controller.on_pointer_click(x, y)
        elif event == cv2.EVENT_RBUTTONDOWN:
            self._drag_start = (x, y)
        elif event == cv2.EVENT_MOUSEMOVE and flags & cv2.EVENT_FLAG_RBUTTON:
            if self._drag_start is not None:
                dx = x - self._drag_start[0]
                dy = y - self._drag_start[1]
                self._drag_start = (x, y)
                self.controls.rotate(dx, dy, self.controller.viewport_height)
        elif event == cv2.EVENT_RBUTTONUP:
            self._drag_start = None
        elif event == cv2.EVENT_MOUSEWHEEL:
            self.controls.dolly(1 if cv2.getMouseWheelDelta(flags) > 0 else -1)


def main(argv=None) -> int:
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="TicTacToe 3D")
    parser.add_argument(
        "--no-ui",
        action="store_true",
        help="Run in a plain OpenCV window instead of the Tkinter UI"
    )
    parser.add_argument(
        "--width",
        type=int,
        default=ViewportConfig.WINDOW_WIDTH,
        help="Viewport width in pixels"
    )
    parser.add_argument(
        "--height",
        type=int,
        default=ViewportConfig.WINDOW_HEIGHT,
        help="Viewport height in pixels"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print moves, ignored clicks and piece placement"
    )

    args = parser.parse_args(argv)

    config = ViewportConfig()
    config.WINDOW_WIDTH = args.width
    config.WINDOW_HEIGHT = args.height
    config.DEBUG_MODE = args.debug

    try:
        if args.no_ui:
            viewer = OpenCVViewer(config, verbose=args.debug)
            viewer.start()
        else:
            from ui import TicTacToe3DUI
            print("\n" + "="*60)
            print("   TicTacToe 3D UI")
            print("="*60 + "\n")
            ui = TicTacToe3DUI(config, verbose=args.debug)
            ui.run()
    except InitializationError as e:
        print(f"ERROR: {e}")
        return 1
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")

    return 0


if __name__ == "__main__":
    sys.exit(main())
