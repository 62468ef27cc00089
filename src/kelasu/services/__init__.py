"""Services used by Kelasu front ends."""

from kelasu.services.game_service import GameService, ManagedGame, MoveResult, get_game_service

__all__ = ["GameService", "ManagedGame", "MoveResult", "get_game_service"]
