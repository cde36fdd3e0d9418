"""
Game state for 3D TicTacToe.
Tracks the board, current player, and game status.
"""

from enum import Enum
from typing import Optional, List, Tuple
from dataclasses import dataclass


# Board is always 3x3, stored row-major
BOARD_SIZE = 3
BOARD_CELLS = BOARD_SIZE * BOARD_SIZE


class Cell(Enum):
    """What a single board cell holds."""
    EMPTY = " "
    X = "X"
    O = "O"


class Player(Enum):
    """The two players in the game."""
    X = "X"
    O = "O"

    def opposite(self) -> "Player":
        """Get the opposite player."""
        return Player.O if self == Player.X else Player.X

    @property
    def cell(self) -> Cell:
        """The cell value this player's mark leaves on the board."""
        return Cell[self.name]


class StatusKind(Enum):
    """Where the game is in its lifecycle."""
    RUNNING = "running"
    WON = "won"
    TIED = "tied"


@dataclass(frozen=True)
class GameStatus:
    """
    Game status: RUNNING, WON(winner) or TIED.

    Use the constructors below instead of building one by hand,
    so a WON status always carries its winner.
    """
    kind: StatusKind
    winner: Optional[Player] = None

    def __post_init__(self):
        if (self.kind == StatusKind.WON) != isinstance(self.winner, Player):
            raise ValueError(
                f"A {self.kind.value} status cannot have winner {self.winner!r}"
            )

    @classmethod
    def running(cls) -> "GameStatus":
        return cls(StatusKind.RUNNING)

    @classmethod
    def won(cls, winner: Player) -> "GameStatus":
        return cls(StatusKind.WON, winner)

    @classmethod
    def tied(cls) -> "GameStatus":
        return cls(StatusKind.TIED)

    @property
    def is_terminal(self) -> bool:
        return self.kind != StatusKind.RUNNING


def index_to_row_col(index: int) -> Tuple[int, int]:
    """Convert a board index (0-8) to (row, col)."""
    return index // BOARD_SIZE, index % BOARD_SIZE


def row_col_to_index(row: int, col: int) -> int:
    """Convert (row, col) to a board index (0-8)."""
    return row * BOARD_SIZE + col


@dataclass(frozen=True)
class GameState:
    """
    The complete state of the TicTacToe game.

    Tracks:
    - The 9 board cells (row-major)
    - Current player
    - Game status (running, won, tied)

    States are immutable. Moves and resets produce a new GameState
    (see logic.state_machine).
    """

    board: Tuple[Cell, ...] = (Cell.EMPTY,) * BOARD_CELLS

    # Current player's turn, frozen once the game is over
    current_player: Player = Player.X

    status: GameStatus = GameStatus(StatusKind.RUNNING)

    def __post_init__(self):
        if len(self.board) != BOARD_CELLS:
            raise ValueError(
                f"Board must have {BOARD_CELLS} cells, got {len(self.board)}"
            )
        bad = [cell for cell in self.board if not isinstance(cell, Cell)]
        if bad:
            raise ValueError(f"Board cells must be Cell values, got {bad[0]!r}")
        # Accept lists too, but always store a tuple
        object.__setattr__(self, "board", tuple(self.board))

    @property
    def is_running(self) -> bool:
        return self.status.kind == StatusKind.RUNNING

    @property
    def is_game_over(self) -> bool:
        return self.status.is_terminal

    @property
    def winner(self) -> Optional[Player]:
        return self.status.winner

    def get_empty_cells(self) -> List[int]:
        """
        Get all empty cells on the board.

        Returns:
            List of board indices.
        """
        return [i for i, cell in enumerate(self.board) if cell == Cell.EMPTY]

    def print_board(self):
        """Print the board to console."""
        print("\n  0   1   2")
        print("┌───┬───┬───┐")

        for row in range(BOARD_SIZE):
            row_str = "│"
            for col in range(BOARD_SIZE):
                cell = self.board[row_col_to_index(row, col)]
                row_str += f" {cell.value} │"
            print(f"{row} {row_str}")

            if row < BOARD_SIZE - 1:
                print("├───┼───┼───┤")

        print("└───┴───┴───┘")

        # Print game info
        if self.status.kind == StatusKind.WON:
            print(f"\n{self.winner.value} WINS!")
        elif self.status.kind == StatusKind.TIED:
            print("\nIt's a TIE!")
        else:
            print(f"\nCurrent turn: {self.current_player.value}")
