"""Notation package: FEN / PGN parsing and serialization."""

from blindfold.core.notation.fen import (
    EMPTY_FEN,
    STARTING_FEN,
    DecodeResult,
    FenError,
    FenRecord,
    board_from_fen,
    board_to_fen,
    castling_from_fen,
    castling_to_fen,
    decode_board,
    parse_fen,
    placement_from_board,
)
from blindfold.core.notation.pgn import (
    build_pgn,
    first_ply_of,
    move_number_label,
    parse_pgn_headers,
    parse_pgn_moves,
    pgn_movetext,
)

__all__ = [
    "EMPTY_FEN",
    "STARTING_FEN",
    "DecodeResult",
    "FenError",
    "FenRecord",
    "board_from_fen",
    "board_to_fen",
    "castling_from_fen",
    "castling_to_fen",
    "decode_board",
    "parse_fen",
    "placement_from_board",
    "build_pgn",
    "first_ply_of",
    "move_number_label",
    "parse_pgn_headers",
    "parse_pgn_moves",
    "pgn_movetext",
]
