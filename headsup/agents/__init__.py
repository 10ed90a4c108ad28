"""
Headsup Agents - AI opponent and baseline agents

The heuristic opponent plays against the human; the baseline agents are
used for self-play and testing.
"""

from headsup.agents.heuristic import AIAction, AIDecision, Personality, make_decision
from headsup.agents.baseline import random_agent, call_agent

__all__ = [
    "AIAction",
    "AIDecision",
    "Personality",
    "make_decision",
    "random_agent",
    "call_agent",
]
