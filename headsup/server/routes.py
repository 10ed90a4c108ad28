"""
HTTP API Routes for Headsup.

A single local table: one human seat against the AI. Every transition
returns the events it produced so the client can animate them.
"""

from typing import Dict, Any, Optional
import logging
import random

from fastapi import APIRouter, HTTPException

from headsup.core.game import HeadsUpGame, ActionResult
from headsup.core.rules import TableConfig
from headsup.server.schemas import (
    InitGameRequest, ActionRequest, ActionResultSchema,
    AIDecisionSchema, ErrorSchema, EventSchema,
)

logger = logging.getLogger(__name__)

router = APIRouter()

HUMAN_ID = "human"
AI_ID = "ai"

# Global game instance for single-table mode
_game: Optional[HeadsUpGame] = None


def get_game() -> HeadsUpGame:
    """Get the current game instance."""
    if _game is None:
        raise HTTPException(status_code=400, detail="Game not initialized")
    return _game


def require_human(player_id: str) -> None:
    """Only the human seat is driven or observed through the API."""
    if player_id != HUMAN_ID:
        raise HTTPException(status_code=403, detail=f"Player {player_id} is not controlled by this client")


def _result_response(game: HeadsUpGame, result: ActionResult) -> Dict[str, Any]:
    """Serialize an ActionResult as seen from the human seat."""
    if not result.success:
        return ErrorSchema(
            error=result.message,
            code=result.error.value if result.error else None,
        ).model_dump()

    hand_complete = not game.is_hand_running()
    response = ActionResultSchema(
        success=True,
        message=result.message,
        action_type=result.action_type.value if result.action_type else None,
        amount=result.amount,
        events=[EventSchema(**event.to_dict(viewer_id=HUMAN_ID)) for event in result.events],
        hand_complete=hand_complete,
        hand_result=game.last_result.to_dict() if hand_complete and game.last_result else None,
        game_over=game.is_game_over,
        overall_winner=game.overall_winner.player_id if game.overall_winner else None,
        decision=AIDecisionSchema(**result.decision.to_dict()) if result.decision else None,
    )
    return response.model_dump()


@router.post("/init_game")
async def init_game(req: InitGameRequest) -> Dict[str, Any]:
    """
    Initialize a new match against the AI.

    This creates a new game instance; call /start_hand to deal.
    """
    global _game

    try:
        config = TableConfig(
            starting_stack=req.starting_stack,
            small_blind=req.small_blind,
            big_blind=req.big_blind,
            min_raise_increment=req.min_raise_increment,
            bust_threshold=req.bust_threshold,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    _game = HeadsUpGame(
        config=config,
        player_ids=(HUMAN_ID, AI_ID),
        player_names=(req.player_name, "AI Player"),
        ai_player_ids=(AI_ID,),
        dealer_first=HUMAN_ID if req.human_is_dealer_first else AI_ID,
        personality=req.personality,
        rng=random.Random(req.seed) if req.seed is not None else None,
    )
    logger.info(f"Game initialized for {req.player_name} vs {req.personality.value} AI")

    return {
        "success": True,
        "message": f"Game initialized: {req.player_name} vs AI ({req.personality.value})",
        "personality": req.personality.value,
        "total_bankroll": _game.total_bankroll,
    }


@router.post("/start_hand")
async def start_hand() -> Dict[str, Any]:
    """
    Start a new hand.

    Rotates and posts blinds, then deals hole cards.
    """
    game = get_game()

    result = game.start_hand()
    if not result.success:
        raise HTTPException(status_code=400, detail=result.message)

    response = _result_response(game, result)
    response["hand_number"] = game.hand_number
    return response


@router.get("/get_game_state")
async def get_game_state(player_id: str = HUMAN_ID) -> Dict[str, Any]:
    """
    Get the current game state.

    Returns public information and private information for the human player.
    """
    require_human(player_id)
    game = get_game()
    return game.get_state(for_player_id=player_id)


@router.get("/legal_actions")
async def get_legal_actions(player_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Get legal actions for a player (default: the current player).
    """
    game = get_game()

    if not game.is_hand_running():
        return {"actions": [], "message": "No hand in progress"}

    return {"actions": game.get_legal_actions(player_id)}


@router.post("/take_action")
async def take_action(req: ActionRequest) -> Dict[str, Any]:
    """
    Take a game action.

    Rejected actions come back as {"error", "code"} and leave the game unchanged.
    """
    require_human(req.player_id)
    game = get_game()
    result = game.apply_action(req.player_id, req.action_type, req.amount or 0)
    return _result_response(game, result)


@router.post("/ai_action")
async def ai_action() -> Dict[str, Any]:
    """
    Let the AI act if it is its turn.
    """
    game = get_game()
    result = game.play_ai_turn()
    return _result_response(game, result)


@router.get("/hand_result")
async def hand_result() -> Dict[str, Any]:
    """
    Get the result of the last finished hand.
    """
    game = get_game()
    if game.last_result is None:
        return {"result": None, "message": "No hand has finished yet"}
    return {"result": game.last_result.to_dict()}


@router.post("/reset_game")
async def reset_game() -> Dict[str, Any]:
    """
    Reset the game (for development/testing).
    """
    global _game
    _game = None
    return {"success": True, "message": "Game reset"}
