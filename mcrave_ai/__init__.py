"""
MCRave AI - Monte Carlo Tree Search with RAVE for turn-based games.

This package provides a search engine that picks an agent's next action by
Monte Carlo Tree Search augmented with Rapid Action Value Estimation, along
with the interfaces a game implements to plug into it and a few example games.
"""

__version__ = "0.1.0"
__author__ = "MCRave AI Team"

# Make key components available at package level
from mcrave_ai.core.interfaces import ForwardModel, StateHeuristic
from mcrave_ai.mcts.config import MCRaveConfig
from mcrave_ai.mcts.agent import MCRaveAgent
from mcrave_ai.mcts.search import mcrave_search

# Version info as a tuple for programmatic access
VERSION_INFO = tuple(map(int, __version__.split('.')))
