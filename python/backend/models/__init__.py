from backend.models.board import Board, InvalidBoardError
from backend.models.picture import DEFAULT_IMAGE, resolve_image_ref

__all__ = ["Board", "DEFAULT_IMAGE", "InvalidBoardError", "resolve_image_ref"]
