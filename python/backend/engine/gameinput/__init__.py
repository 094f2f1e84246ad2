from backend.engine.gameinput.handlers import DragHandler, TapHandler, parse_slot

__all__ = ["DragHandler", "TapHandler", "parse_slot"]
