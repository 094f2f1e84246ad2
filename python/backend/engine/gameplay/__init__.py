from backend.engine.gameplay.game import GamePlay, Phase

__all__ = ["GamePlay", "Phase"]
