"""
Pure state transitions for 3D TicTacToe.

Every function takes a GameState and returns a GameState. Nothing here
prints, renders or keeps state of its own.
"""

from typing import Optional
from .game_state import GameState
from .move_validator import MoveValidator
from .win_checker import WinChecker


_validator = MoveValidator()
_checker = WinChecker()


def apply_move(
    state: GameState,
    index,
    validator: Optional[MoveValidator] = None,
    checker: Optional[WinChecker] = None
) -> GameState:
    """
    Place the current player's mark at index.

    Invalid moves (game over, bad index, occupied cell) are no-ops and
    return the very same state object.

    Args:
        state: State before the move.
        index: Board index (0-8).
        validator: Move validator, the shared default if not given.
        checker: Win checker, the shared default if not given.

    Returns:
        The state after the move.
    """
    validator = validator or _validator
    checker = checker or _checker

    if not validator.validate_move(state, index).is_valid:
        return state

    board = list(state.board)
    board[int(index)] = state.current_player.cell

    status = checker.evaluate(board)

    # The player who ended the game stays current
    if status.is_terminal:
        next_player = state.current_player
    else:
        next_player = state.current_player.opposite()

    return GameState(board=tuple(board), current_player=next_player, status=status)


def reset() -> GameState:
    """Return a fresh game: empty board, X to move, running."""
    return GameState()
