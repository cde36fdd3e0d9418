"""
Logic module for 3D TicTacToe.
Handles game state, rules, and the game session.
"""

from .game_state import GameState, GameStatus, StatusKind, Player, Cell
from .move_validator import MoveValidator
from .win_checker import WinChecker
from .state_machine import apply_move, reset
from .session import GameSession, GameEvent, GameEventType
