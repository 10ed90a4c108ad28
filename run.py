#!/usr/bin/env python3
"""
Headsup Hold'em - Server Startup Script

Usage:
    python run.py [--host HOST] [--port PORT] [--reload]
    python run.py --simulate N [--personality P] [--opponent call|random] [--seed S]
"""

import argparse
import logging
import random

from headsup.agents.baseline import call_agent, random_agent
from headsup.agents.heuristic import Personality, decision_summary
from headsup.core.game import HeadsUpGame

MAX_HANDS_PER_MATCH = 500

logger = logging.getLogger("headsup.simulate")


def play_match(personality: Personality, opponent: str, rng: random.Random):
    """Play one match of the AI against a baseline agent. Returns (game, AI decisions)."""
    game = HeadsUpGame(
        player_ids=("baseline", "ai"),
        player_names=(f"{opponent.title()} Agent", f"AI ({personality.value})"),
        dealer_first=rng.choice(("baseline", "ai")),
        personality=personality,
        rng=rng,
    )
    decisions = []

    while not game.is_game_over and game.hand_number < MAX_HANDS_PER_MATCH:
        game.start_hand()
        while game.is_hand_running():
            if game.current_player.is_human:
                if opponent == "random":
                    action_type, amount = random_agent(game, rng)
                else:
                    action_type, amount = call_agent(game)
                game.apply_action(game.current_player.player_id, action_type, amount)
            else:
                result = game.play_ai_turn()
                decisions.append(result.decision)

    return game, decisions


def simulate(matches: int, personality: Personality, opponent: str, seed=None):
    rng = random.Random(seed)
    ai_wins = 0
    hands = 0
    decisions = []

    for i in range(matches):
        game, match_decisions = play_match(personality, opponent, rng)
        decisions.extend(match_decisions)
        hands += game.hand_number
        winner = game.overall_winner.player_id if game.overall_winner else None
        if winner == "ai":
            ai_wins += 1
        logger.info(f"Match {i + 1}: winner={winner} after {game.hand_number} hands")

    print(f"AI ({personality.value}) vs {opponent} agent: "
          f"won {ai_wins}/{matches} matches over {hands} hands")
    print(f"AI decisions: {decision_summary(decisions)}")


def main():
    parser = argparse.ArgumentParser(description="Headsup Hold'em Server")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--simulate", type=int, metavar="N",
                        help="Play N AI-vs-baseline matches instead of serving")
    parser.add_argument("--personality", default=Personality.BALANCED.value,
                        choices=[p.value for p in Personality], help="AI personality")
    parser.add_argument("--opponent", default="call", choices=["call", "random"],
                        help="Baseline agent the AI plays in simulations")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for simulations")
    args = parser.parse_args()

    if args.simulate:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s - %(message)s")
        logging.getLogger("headsup.core").setLevel(logging.WARNING)
        simulate(args.simulate, Personality(args.personality), args.opponent, args.seed)
        return

    import uvicorn
    uvicorn.run(
        "headsup.server.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
