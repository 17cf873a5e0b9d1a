"""
Example games and match utilities.

Forward models here are small enough to test the search engine against and
to play from the command line.
"""

from mcrave_ai.games.tictactoe import TicTacToeForwardModel, TicTacToeState
from mcrave_ai.games.nim import NimForwardModel, NimState, NimAction
from mcrave_ai.games.match import RandomAgent, MatchResult, play_match, play_series

GAMES = {
    "tictactoe": TicTacToeForwardModel,
    "nim": NimForwardModel,
}

__all__ = [
    'TicTacToeForwardModel', 'TicTacToeState',
    'NimForwardModel', 'NimState', 'NimAction',
    'RandomAgent', 'MatchResult', 'play_match', 'play_series',
    'GAMES',
]
