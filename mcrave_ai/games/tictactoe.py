"""
Tic-Tac-Toe forward model.

Two seats alternate placing their mark on a 3x3 board; three in a row wins
and a full board without a line is a draw. Actions are cell indices 0-8,
numbered row by row.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Final, List, Optional, Tuple

from mcrave_ai.core.constants import ActionSpace, GameResult
from mcrave_ai.core.interfaces import ForwardModel


WIN_LINES: Final[Tuple[Tuple[int, int, int], ...]] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # Rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # Columns
    (0, 4, 8), (2, 4, 6),             # Diagonals
)

MARKS: Final[Tuple[str, str]] = ("X", "O")


@dataclass
class TicTacToeState:
    """Board contents (seat index or None per cell) and turn information."""
    board: List[Optional[int]] = field(default_factory=lambda: [None] * 9)
    current_player: int = 0
    winner: Optional[int] = None
    game_over: bool = False
    turn_count: int = 0


def find_winner(board: List[Optional[int]]) -> Optional[int]:
    for a, b, c in WIN_LINES:
        if board[a] is not None and board[a] == board[b] == board[c]:
            return board[a]
    return None


class TicTacToeForwardModel(ForwardModel):
    """Rules of Tic-Tac-Toe. Scores are 1 for the winner, -1 for the loser, 0 otherwise."""
    
    def initial_state(self) -> TicTacToeState:
        return TicTacToeState()
    
    def copy_state(self, state: TicTacToeState) -> TicTacToeState:
        return TicTacToeState(
            board=list(state.board),
            current_player=state.current_player,
            winner=state.winner,
            game_over=state.game_over,
            turn_count=state.turn_count,
        )
    
    def legal_actions(self, state: TicTacToeState, action_space: ActionSpace = ActionSpace.DEFAULT) -> List[int]:
        if state.game_over:
            return []
        return [cell for cell, mark in enumerate(state.board) if mark is None]
    
    def apply_action(self, state: TicTacToeState, action: int) -> TicTacToeState:
        if state.game_over:
            raise ValueError("Game is already over")
        if not 0 <= action < 9 or state.board[action] is not None:
            raise ValueError(f"Illegal move {action}")
        
        state.board[action] = state.current_player
        state.turn_count += 1
        
        winner = find_winner(state.board)
        if winner is not None:
            state.winner = winner
            state.game_over = True
        elif all(mark is not None for mark in state.board):
            state.game_over = True
        else:
            state.current_player = 1 - state.current_player
        
        return state
    
    def current_seat(self, state: TicTacToeState) -> int:
        return state.current_player
    
    def is_terminal(self, state: TicTacToeState) -> bool:
        return state.game_over
    
    def copy_action(self, action: int) -> int:
        return action
    
    def num_seats(self, state: TicTacToeState) -> int:
        return 2
    
    def game_score(self, state: TicTacToeState, seat: int) -> float:
        if state.winner is None:
            return 0.0
        return 1.0 if state.winner == seat else -1.0
    
    def seat_result(self, state: TicTacToeState, seat: int) -> GameResult:
        if not state.game_over:
            return GameResult.ONGOING
        if state.winner is None:
            return GameResult.DRAW
        return GameResult.WIN if state.winner == seat else GameResult.LOSE
    
    def render(self, state: TicTacToeState) -> str:
        rows = []
        for row in range(3):
            cells = state.board[row * 3:row * 3 + 3]
            rows.append(" | ".join(MARKS[c] if c is not None else str(row * 3 + i)
                                   for i, c in enumerate(cells)))
        return "\n---------\n".join(rows)
