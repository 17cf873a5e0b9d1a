#!/usr/bin/env python
"""
Command-line match runner for MCRave agents.

Example usage:
    # MCRave against a random agent at Tic-Tac-Toe
    mcrave-play --game tictactoe --opponent random --games 20
    
    # Two MCRave agents at three-player Nim, 200 ms per move
    mcrave-play --game nim --players 3 --budget-type time --budget 200
"""
import argparse
import json
import logging

from mcrave_ai.core.heuristics import ScoreHeuristic, WinLossHeuristic
from mcrave_ai.games import GAMES, NimForwardModel, RandomAgent, play_series
from mcrave_ai.mcts.agent import MCRaveAgent
from mcrave_ai.mcts.config import MCRaveConfig


def parse_args(argv=None):
    """Parse command-line arguments for match configuration."""
    parser = argparse.ArgumentParser(description="Play games between MCRave and baseline agents")
    
    parser.add_argument("--game", type=str, default="tictactoe", choices=sorted(GAMES),
                        help="Game to play")
    parser.add_argument("--players", type=int, default=2,
                        help="Number of seats (Nim only)")
    parser.add_argument("--games", type=int, default=10,
                        help="Number of games to play")
    parser.add_argument("--opponent", type=str, default="random", choices=["random", "mcrave"],
                        help="Agent type filling the other seats")
    
    # Search configuration
    parser.add_argument("--budget-type", type=str, default="iterations",
                        choices=["time", "iterations", "fm_calls"],
                        help="Resource bounding each decision")
    parser.add_argument("--budget", type=int, default=500,
                        help="Budget per decision (ms, iterations or FM calls)")
    parser.add_argument("--rave-weight", type=float, default=0.5,
                        help="RAVE blend weight alpha")
    parser.add_argument("--rave-update", type=str, default="simple_mean",
                        choices=["simple_mean", "decayed_mean"],
                        help="RAVE update rule")
    parser.add_argument("--rollout-length", type=int, default=10,
                        help="Maximum rollout length")
    parser.add_argument("--heuristic", type=str, default="score", choices=["score", "winloss"],
                        help="State heuristic used to evaluate rollouts")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for reproducibility")
    
    # Output
    parser.add_argument("--verbose", action="store_true",
                        help="Print a search report after every MCRave decision")
    parser.add_argument("--log-level", type=str.upper, default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Logging level for the mcrave_ai package")
    parser.add_argument("--no-progress", action="store_true",
                        help="Hide the progress bar")
    
    return parser.parse_args(argv)


def run(args):
    """Play the requested series and print its summary as JSON."""
    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")
    
    if args.game == "nim":
        forward_model = NimForwardModel(num_players=args.players)
        num_seats = args.players
    else:
        forward_model = GAMES[args.game]()
        num_seats = 2
    
    heuristic = ScoreHeuristic(forward_model) if args.heuristic == "score" else WinLossHeuristic(forward_model)
    
    def make_config(offset: int) -> MCRaveConfig:
        return MCRaveConfig(
            budget_type=args.budget_type,
            budget=args.budget,
            rave_weight=args.rave_weight,
            rave_update=args.rave_update,
            rollout_length=args.rollout_length,
            seed=None if args.seed is None else args.seed + offset,
        )
    
    agents = [MCRaveAgent(forward_model, heuristic, config=make_config(0), name="MCRave", verbose=args.verbose)]
    for seat in range(1, num_seats):
        seed = None if args.seed is None else args.seed + seat
        if args.opponent == "random":
            agents.append(RandomAgent(forward_model, name=f"Random {seat}", seed=seed))
        else:
            agents.append(MCRaveAgent(forward_model, heuristic, config=make_config(seat), name=f"MCRave {seat}"))
    
    summary = play_series(forward_model, agents, num_games=args.games, show_progress=not args.no_progress)
    print(json.dumps(summary, indent=2))
    return summary


def main(argv=None):
    run(parse_args(argv))


if __name__ == "__main__":
    main()
