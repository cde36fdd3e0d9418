"""
Game controller for 3D TicTacToe.

Ties together:
- Input (pointer clicks, touches, resizes, the reset trigger)
- Viewport (camera and coordinate resolver)
- Logic (game session)
- Output (board renderer and status display)

The controller only talks to its collaborators through the small
interfaces below, so any window toolkit (or a test double) can plug in.
"""

from typing import Callable, Optional, Protocol, Sequence, Tuple

from logic.game_state import GameState, Player, StatusKind
from logic.session import GameEvent, GameEventType, GameSession
from viewport.camera import PerspectiveCamera
from viewport.resolver import CoordinateResolver


class StatusDisplay(Protocol):
    """Shows the turn / outcome text."""

    def show_status(self, text: str) -> None: ...


class ResetTrigger(Protocol):
    """Something the player activates to start over (a button, a key)."""

    def bind(self, callback: Callable[[], None]) -> None: ...


class BoardRenderer(Protocol):
    """Draws the pieces."""

    def place_mark(self, index: int, player: Player) -> None: ...

    def clear_marks(self) -> None: ...


class InitializationError(RuntimeError):
    """Required UI wiring is missing, the game cannot start."""


def status_text(state: GameState) -> str:
    """Human readable turn / outcome text for a game state."""
    if state.status.kind == StatusKind.WON:
        return f"Player {state.winner.value} wins!"
    if state.status.kind == StatusKind.TIED:
        return "It's a Tie!"
    return f"Player {state.current_player.value}'s turn"


class GameController:
    """
    Main controller for a 3D TicTacToe game.

    Game flow:
    1. A click or touch arrives with screen coordinates
    2. The resolver turns it into a board index (or None)
    3. The session validates and applies the move
    4. The renderer draws the new piece, the status display updates
    5. Reset clears the session, then the renderer's pieces
    """

    def __init__(
        self,
        status_display: Optional[StatusDisplay],
        reset_trigger: Optional[ResetTrigger],
        renderer: BoardRenderer,
        camera: PerspectiveCamera,
        viewport_size: Tuple[int, int],
        resolver: Optional[CoordinateResolver] = None,
        session: Optional[GameSession] = None
    ):
        """
        Initialize the controller.

        Args:
            status_display: Where status text goes. Required.
            reset_trigger: What starts a new game. Required.
            renderer: Receives place / clear commands for piece visuals.
            camera: Camera the viewport is rendered with.
            viewport_size: (width, height) of the viewport in pixels.
            resolver: Coordinate resolver, built from camera config if not given.
            session: Game session, a new one if not given.

        Raises:
            InitializationError: If the status display or reset trigger is missing.
        """
        if status_display is None or reset_trigger is None:
            missing = []
            if status_display is None:
                missing.append("status display")
            if reset_trigger is None:
                missing.append("reset trigger")
            raise InitializationError(
                f"Required UI element(s) not found: {', '.join(missing)}"
            )

        self.status_display = status_display
        self.renderer = renderer
        self.camera = camera
        self.viewport_width, self.viewport_height = viewport_size
        self.resolver = resolver or CoordinateResolver(camera.config)
        self.session = session or GameSession()

        self.session.subscribe(self._on_game_event)
        reset_trigger.bind(self.reset)

        self.status_display.show_status(status_text(self.session.state))

    @property
    def state(self) -> GameState:
        return self.session.state

    def on_pointer_click(self, screen_x: float, screen_y: float) -> bool:
        """
        Handle a click at screen coordinates.

        Returns:
            True if a move was made.
        """
        if not self.session.state.is_running:
            return False

        index = self.resolver.resolve_index(
            screen_x, screen_y,
            self.viewport_width, self.viewport_height,
            self.camera
        )
        if index is None:
            return False

        return self.session.apply_move(index)

    def on_touch_start(self, touches: Sequence[Tuple[float, float]]) -> bool:
        """Handle a touch start. Only the first touch point counts."""
        if not touches:
            return False

        screen_x, screen_y = touches[0]
        return self.on_pointer_click(screen_x, screen_y)

    def on_resize(self, width: int, height: int):
        """Viewport was resized. Game state is not touched."""
        if width <= 0 or height <= 0:
            return

        self.viewport_width = width
        self.viewport_height = height
        self.camera.set_aspect(width, height)

    def reset(self):
        """Start a new game."""
        self.session.reset()

    def _on_game_event(self, event: GameEvent):
        if event.kind == GameEventType.MOVE_APPLIED:
            self.renderer.place_mark(event.index, event.player)
        elif event.kind == GameEventType.GAME_RESET:
            self.renderer.clear_marks()

        self.status_display.show_status(status_text(event.state))
