"""
Pydantic schemas for API request/response validation.
"""

from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field

from headsup.agents.heuristic import Personality
from headsup.core.rules import (
    DEFAULT_STARTING_STACK, DEFAULT_SMALL_BLIND, DEFAULT_BIG_BLIND,
    DEFAULT_MIN_RAISE_INCREMENT, DEFAULT_BUST_THRESHOLD,
)


# ============= Request Schemas =============

class InitGameRequest(BaseModel):
    """Request to initialize a match against the AI."""
    player_name: str = Field(default="Player1", min_length=1, max_length=32)
    human_is_dealer_first: bool = False
    personality: Personality = Personality.BALANCED
    starting_stack: int = Field(gt=0, default=DEFAULT_STARTING_STACK)
    small_blind: int = Field(gt=0, default=DEFAULT_SMALL_BLIND)
    big_blind: int = Field(gt=0, default=DEFAULT_BIG_BLIND)
    min_raise_increment: int = Field(gt=0, default=DEFAULT_MIN_RAISE_INCREMENT)
    bust_threshold: int = Field(ge=0, default=DEFAULT_BUST_THRESHOLD)
    seed: Optional[int] = Field(default=None, description="Seed for a reproducible match")


class ActionRequest(BaseModel):
    """Request to take a game action."""
    player_id: str = "human"
    action_type: str = Field(..., description="Action type: fold, call, raise")
    amount: Optional[int] = Field(default=0, ge=0, description="Raise increment on top of the call")


# ============= Response Schemas =============

class CardSchema(BaseModel):
    """Card representation."""
    suit: str
    rank: int
    display_rank: str
    text: str
    color: str


class EventSchema(BaseModel):
    """One step of a game transition."""
    type: str
    phase: str
    player_id: Optional[str] = None
    cards: List[CardSchema] = []
    amount: int = 0
    message: str = ""


class AIDecisionSchema(BaseModel):
    """Decision made by the AI, with its reasoning."""
    action: str
    amount: Optional[int] = None
    reasoning: str


class ActionResultSchema(BaseModel):
    """Result of starting a hand or taking an action."""
    success: bool
    message: str
    action_type: Optional[str] = None
    amount: int = 0
    events: List[EventSchema] = []
    hand_complete: bool = False
    hand_result: Optional[Dict[str, Any]] = None
    game_over: bool = False
    overall_winner: Optional[str] = None
    decision: Optional[AIDecisionSchema] = None


class ErrorSchema(BaseModel):
    """Rejected action."""
    error: str
    code: Optional[str] = None
