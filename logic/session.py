"""
Game session for 3D TicTacToe.
Owns the current GameState and tells listeners when it changes.
"""

from enum import Enum
from typing import Callable, List, Optional
from dataclasses import dataclass
from .game_state import GameState, Player, index_to_row_col
from .move_validator import MoveValidator
from .win_checker import WinChecker
from . import state_machine


class GameEventType(Enum):
    """Kinds of session events."""
    MOVE_APPLIED = "move_applied"
    GAME_RESET = "game_reset"


@dataclass(frozen=True)
class GameEvent:
    """
    Something that changed the session state.

    For MOVE_APPLIED, index and player say which mark went where.
    state is always the state after the change.
    """
    kind: GameEventType
    state: GameState
    index: Optional[int] = None
    player: Optional[Player] = None


GameListener = Callable[[GameEvent], None]


class GameSession:
    """
    Runs one game after another.

    Game flow:
    1. apply_move() is called with a board index
    2. Invalid moves are ignored (nothing changes, no event)
    3. Valid moves update the state, then listeners get MOVE_APPLIED
    4. reset() starts over at any time, then listeners get GAME_RESET

    Listeners are called synchronously, so by the time apply_move() or
    reset() returns every listener has seen the change.
    """

    def __init__(self, verbose: bool = False):
        """
        Initialize the session.

        Args:
            verbose: If True, print ignored moves and the board after
                     each move.
        """
        self.verbose = verbose
        self.validator = MoveValidator()
        self.win_checker = WinChecker()
        self.state = state_machine.reset()
        self._listeners: List[GameListener] = []

    def subscribe(self, listener: GameListener):
        """Register a listener for session events."""
        self._listeners.append(listener)

    def apply_move(self, index) -> bool:
        """
        Place the current player's mark at index.

        Args:
            index: Board index (0-8), or None for a click that hit nothing.

        Returns:
            True if the move was applied, False if it was ignored.
        """
        result = self.validator.validate_move(self.state, index)
        if not result.is_valid:
            if self.verbose:
                print(f"Ignoring move: {result.error_message}")
            return False

        index = int(index)
        player = self.state.current_player
        self.state = state_machine.apply_move(
            self.state, index, self.validator, self.win_checker
        )

        if self.verbose:
            print(f"\n>>> {player.value} placed at cell {index} {index_to_row_col(index)}")
            self.state.print_board()

        self._emit(GameEvent(
            kind=GameEventType.MOVE_APPLIED,
            state=self.state,
            index=index,
            player=player
        ))
        return True

    def reset(self):
        """Reset the game, whatever state it is in."""
        if self.verbose:
            print("\nResetting game...")

        self.state = state_machine.reset()
        self._emit(GameEvent(kind=GameEventType.GAME_RESET, state=self.state))

    def _emit(self, event: GameEvent):
        for listener in self._listeners:
            listener(event)
