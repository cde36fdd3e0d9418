"""
TicTacToe 3D UI
A graphical interface for 3D TicTacToe using Tkinter.

Shows:
- The 3D board view (left click to play, right drag to orbit, wheel to zoom)
- Game status
- Reset button
"""

import cv2
import tkinter as tk
from tkinter import ttk
from PIL import Image, ImageTk
from typing import Optional

# Logic imports
from logic.session import GameSession

# Viewport imports
from viewport.config import ViewportConfig
from viewport.camera import PerspectiveCamera
from viewport.controls import OrbitControls
from viewport.renderer import SceneRenderer

from controller import GameController


class LabelStatusDisplay:
    """Status display backed by a Tk label."""

    def __init__(self, label: ttk.Label):
        self.label = label

    def show_status(self, text: str):
        self.label.configure(text=text)


class ButtonResetTrigger:
    """Reset trigger backed by a Tk button."""

    def __init__(self, button: tk.Button):
        self.button = button

    def bind(self, callback):
        self.button.configure(command=callback)


class TicTacToe3DUI:
    """
    Main UI class for 3D TicTacToe.
    """

    def __init__(self, config: Optional[ViewportConfig] = None, verbose: bool = False):
        """
        Initialize the UI.

        Args:
            config: Viewport configuration.
            verbose: Print every move and ignored click.
        """
        self.config = config or ViewportConfig()
        self.is_running = False
        self._after_id = None
        self._drag_start = None

        self.camera = PerspectiveCamera(self.config)
        self.controls = OrbitControls(self.camera, self.config)
        self.renderer = SceneRenderer(self.config)

        # Create UI
        self._create_ui()

        self.controller = GameController(
            status_display=LabelStatusDisplay(self.status_label),
            reset_trigger=ButtonResetTrigger(self.reset_btn),
            renderer=self.renderer,
            camera=self.camera,
            viewport_size=(self.config.WINDOW_WIDTH, self.config.WINDOW_HEIGHT),
            session=GameSession(verbose=verbose)
        )

    def _create_ui(self):
        """Create the Tkinter UI."""
        self.root = tk.Tk()
        self.root.title(self.config.WINDOW_TITLE)
        self.root.configure(bg='#1a1a2e')
        self.root.minsize(320, 280)

        # Configure style
        style = ttk.Style()
        style.theme_use('clam')
        style.configure('TFrame', background='#1a1a2e')
        style.configure('Status.TLabel', background='#1a1a2e', foreground='#ffd700',
                        font=('Segoe UI', 14, 'bold'))

        # Top bar - status and reset
        top_frame = ttk.Frame(self.root)
        top_frame.pack(side=tk.TOP, fill=tk.X, padx=10, pady=8)

        self.status_label = ttk.Label(top_frame, text="", style='Status.TLabel')
        self.status_label.pack(side=tk.LEFT)

        self.reset_btn = tk.Button(
            top_frame,
            text="🔄 Reset",
            font=('Segoe UI', 11, 'bold'),
            bg='#6366f1',
            fg='white',
            width=12
        )
        self.reset_btn.pack(side=tk.RIGHT)

        # Board view
        self.canvas = tk.Canvas(
            self.root,
            width=self.config.WINDOW_WIDTH,
            height=self.config.WINDOW_HEIGHT,
            bg='#dddddd',
            highlightthickness=0
        )
        self.canvas.pack(fill=tk.BOTH, expand=True)

        # Input
        self.canvas.bind('<Button-1>', self._on_click)
        self.canvas.bind('<ButtonPress-3>', self._on_drag_start)
        self.canvas.bind('<B3-Motion>', self._on_drag)
        self.canvas.bind('<ButtonRelease-3>', self._on_drag_end)
        self.canvas.bind('<MouseWheel>', self._on_wheel)   # Windows / macOS
        self.canvas.bind('<Button-4>', lambda e: self.controls.dolly(1))   # X11 wheel up
        self.canvas.bind('<Button-5>', lambda e: self.controls.dolly(-1))  # X11 wheel down
        self.canvas.bind('<Configure>', self._on_resize)

        # Stop rendering while minimized
        self.root.bind('<Unmap>', self._on_unmap)
        self.root.bind('<Map>', self._on_map)

        self.root.protocol("WM_DELETE_WINDOW", self._quit)

    def _on_click(self, event):
        self.controller.on_pointer_click(event.x, event.y)

    def _on_drag_start(self, event):
        self._drag_start = (event.x, event.y)

    def _on_drag(self, event):
        if self._drag_start is None:
            return
        dx = event.x - self._drag_start[0]
        dy = event.y - self._drag_start[1]
        self._drag_start = (event.x, event.y)
        self.controls.rotate(dx, dy, self.controller.viewport_height)

    def _on_drag_end(self, event):
        self._drag_start = None

    def _on_wheel(self, event):
        # Windows reports multiples of 120, macOS small values; only the sign is portable
        if event.delta:
            self.controls.dolly(1 if event.delta > 0 else -1)

    def _on_resize(self, event):
        self.controller.on_resize(event.width, event.height)

    def _on_unmap(self, event):
        # <Unmap> on the root also fires for every child widget
        if event.widget is self.root:
            self._pause()

    def _on_map(self, event):
        if event.widget is self.root:
            self._resume()

    def _pause(self):
        """Stop the render loop."""
        self.is_running = False
        if self._after_id is not None:
            self.root.after_cancel(self._after_id)
            self._after_id = None

    def _resume(self):
        """Start the render loop if it is not running."""
        if self.is_running:
            return
        self.is_running = True
        self._animate()

    def _animate(self):
        """Render loop (runs on UI thread)."""
        if not self.is_running:
            return

        self.controls.update()

        width = self.controller.viewport_width
        height = self.controller.viewport_height
        frame = self.renderer.render(self.camera, width, height)

        # Convert BGR to RGB, then to a Tk image
        frame_rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        photo = ImageTk.PhotoImage(Image.fromarray(frame_rgb))

        self.canvas.delete("all")
        self.canvas.create_image(0, 0, anchor=tk.NW, image=photo)
        self.canvas.image = photo  # Keep reference

        self._after_id = self.root.after(self.config.FRAME_INTERVAL_MS, self._animate)

    def _quit(self):
        """Quit the application."""
        print("Quitting...")
        self._pause()
        self.root.quit()
        self.root.destroy()

    def run(self):
        """Run the UI main loop."""
        self._resume()
        self.root.mainloop()
