from sandwich.backend.engine.gamestate.state import GameState, Phase

__all__ = ["GameState", "Phase"]
