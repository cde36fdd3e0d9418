"""
Win checker for 3D TicTacToe.
Checks if a player has won or if the game is a tie.
"""

from typing import Optional, Sequence, Tuple
from .game_state import Cell, GameStatus, Player


class WinChecker:
    """
    Checks for win conditions in TicTacToe.

    Win condition: 3 of the same mark in a row
    (horizontally, vertically, or diagonally)
    """

    # All possible winning lines as board indices, checked in this order
    WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
        # Rows
        (0, 1, 2),
        (3, 4, 5),
        (6, 7, 8),
        # Columns
        (0, 3, 6),
        (1, 4, 7),
        (2, 5, 8),
        # Diagonals
        (0, 4, 8),
        (2, 4, 6),
    )

    def check_winner(self, board: Sequence[Cell]) -> Optional[Player]:
        """
        Check if there's a winner.

        Args:
            board: The 9 board cells.

        Returns:
            The winning Player, or None if no winner yet.
        """
        for line in self.WINNING_LINES:
            winner = self._check_line(board, line)
            if winner is not None:
                return winner

        return None

    def _check_line(
        self,
        board: Sequence[Cell],
        line: Tuple[int, int, int]
    ) -> Optional[Player]:
        """Return the player owning all 3 cells of the line, if any."""
        a, b, c = (board[i] for i in line)

        if a != Cell.EMPTY and a == b == c:
            return Player[a.name]

        return None

    def check_draw(self, board: Sequence[Cell]) -> bool:
        """
        Check if the game is a tie.

        A tie occurs when all cells are filled AND there is no winner.
        """
        if self.check_winner(board) is not None:
            return False

        return Cell.EMPTY not in board

    def evaluate(self, board: Sequence[Cell]) -> GameStatus:
        """
        Evaluate the board.

        The win check runs before the tie check, so a move that fills
        the last cell and completes a line is a win.

        Returns:
            GameStatus.won(player), GameStatus.tied(), or
            GameStatus.running() if the game goes on.
        """
        winner = self.check_winner(board)

        if winner is not None:
            return GameStatus.won(winner)
        if Cell.EMPTY not in board:
            return GameStatus.tied()

        return GameStatus.running()
