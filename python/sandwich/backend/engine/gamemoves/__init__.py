from sandwich.backend.engine.gamemoves.moves import MoveEngine

__all__ = ["MoveEngine"]
