"""
Move validator for 3D TicTacToe.
Validates that moves follow the rules.
"""

import numbers
from typing import Optional
from dataclasses import dataclass
from .game_state import BOARD_CELLS, Cell, GameState


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates TicTacToe moves.

    Rules:
    1. Game must still be running
    2. Index must be a board cell (0-8)
    3. Can only place on empty cells
    """

    def validate_move(self, game_state: GameState, index) -> ValidationResult:
        """
        Validate a move.

        Args:
            game_state: Current game state.
            index: Board index to place the mark on. Anything that is
                   not an int in 0-8 (including None) is rejected.

        Returns:
            ValidationResult with is_valid and error_message.
        """
        # Check if game is over
        if game_state.is_game_over:
            return ValidationResult(
                is_valid=False,
                error_message="Game is already over!"
            )

        # numpy integers count, bool (an int subclass) never does
        if (not isinstance(index, numbers.Integral) or isinstance(index, bool)
                or not 0 <= index < BOARD_CELLS):
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid position {index!r}. Must be 0-{BOARD_CELLS - 1}."
            )

        # Check if cell is empty
        cell = game_state.board[index]
        if cell != Cell.EMPTY:
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell {index} is already occupied by {cell.value}"
            )

        # All checks passed!
        return ValidationResult(is_valid=True)
