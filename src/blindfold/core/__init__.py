"""Core domain layer — board model and notation with zero external dependencies.

Quick start::

    from blindfold.core import board_from_fen, board_to_fen, STARTING_FEN

    board = board_from_fen(STARTING_FEN)
    assert board_to_fen(board) == STARTING_FEN
"""

from blindfold.core.board import Board, Square, create_empty_board
from blindfold.core.enums import CastlingRights, Color, Difficulty, GameMode, PieceType
from blindfold.core.notation import (
    EMPTY_FEN,
    STARTING_FEN,
    DecodeResult,
    FenError,
    FenRecord,
    board_from_fen,
    board_to_fen,
    decode_board,
    parse_fen,
)
from blindfold.core.piece import Piece, PieceIdFactory
from blindfold.core.types import parse_square, square_name

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "Difficulty",
    "GameMode",
    "PieceType",
    # Types / helpers
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Piece",
    "PieceIdFactory",
    "Square",
    "create_empty_board",
    # Notation
    "EMPTY_FEN",
    "STARTING_FEN",
    "DecodeResult",
    "FenError",
    "FenRecord",
    "board_from_fen",
    "board_to_fen",
    "decode_board",
    "parse_fen",
]
