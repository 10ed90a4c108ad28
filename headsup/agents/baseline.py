"""
Baseline agents.

Simple functional agents for self-play and testing. Each takes a
HeadsUpGame and returns an (ActionType, amount) tuple for the current
player, built only from game.get_legal_actions().
"""

import random
from typing import Optional, Tuple

from headsup.core.rules import ActionType


def random_agent(game, rng: Optional[random.Random] = None) -> Tuple[ActionType, int]:
    """
    Pick a random legal action.

    Raises pick a random increment within the legal window.

    Args:
        game: HeadsUpGame instance
        rng: Random source (defaults to the module-level generator)

    Returns:
        Tuple of (ActionType, amount)
    """
    rng = rng or random
    legal_actions = game.get_legal_actions()
    if not legal_actions:
        return ActionType.FOLD, 0

    action = rng.choice(legal_actions)
    action_type = ActionType(action["type"])
    if action_type == ActionType.RAISE:
        return action_type, rng.randint(action["min"], action["max"])
    return action_type, 0


def call_agent(game) -> Tuple[ActionType, int]:
    """
    Always check or call; fold only when the call cannot be afforded.

    Args:
        game: HeadsUpGame instance

    Returns:
        Tuple of (ActionType, amount)
    """
    action_types = [a["type"] for a in game.get_legal_actions()]
    if ActionType.CALL.value in action_types:
        return ActionType.CALL, 0
    return ActionType.FOLD, 0
