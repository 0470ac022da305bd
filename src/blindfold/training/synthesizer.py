"""Random training positions for the memory exercise.

Boards are meant to be worth memorising, not reachable by legal play: two
non-adjacent kings plus a difficulty-dependent number of random pieces, with
pawns kept off the back ranks. Nothing else is checked.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable

from blindfold.core.board import Board
from blindfold.core.enums import Color, Difficulty, PieceType
from blindfold.core.piece import PieceIdFactory
from blindfold.core.types import Coord, chebyshev_distance, storage_order
from blindfold.training.settings import KING_COUNT, PIECE_COUNT_RANGES

_LOGGER = logging.getLogger(__name__)

EXTRA_PIECE_TYPES: tuple[PieceType, ...] = (
    PieceType.PAWN,
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
)

# Consecutive rejected draws before falling back to a deterministic scan.
MAX_DRAW_ATTEMPTS = 256

_BACK_RANKS = (0, 7)


class PositionSynthesizer:
    """Generates training boards by bounded rejection sampling.

    Args:
        rng: Source of randomness; pass a seeded ``random.Random`` for
            reproducible boards.
        ids: Piece-id factory of the owning session.
    """

    __slots__ = ("_rng", "_ids")

    def __init__(
        self,
        rng: random.Random | None = None,
        ids: PieceIdFactory | None = None,
    ) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._ids = ids if ids is not None else PieceIdFactory()

    def generate(self, difficulty: Difficulty) -> Board:
        low, high = PIECE_COUNT_RANGES[difficulty]
        return self.generate_with_count(self._rng.randint(low, high))

    def generate_with_count(self, extra_pieces: int) -> Board:
        """Board with two kings and exactly *extra_pieces* other pieces."""
        if extra_pieces < 0:
            raise ValueError(f"extra_pieces must be >= 0: {extra_pieces}")
        if extra_pieces + KING_COUNT >= 64:
            raise ValueError(
                f"Cannot place {extra_pieces} pieces besides the kings: "
                "the board would be full"
            )

        board = Board()

        # 1. Kings, never touching.
        white_king = self._random_coord()
        board[white_king] = self._ids.spawn("synth", Color.WHITE, PieceType.KING)
        black_king = self._draw_coord(
            lambda c: board.is_empty(c) and chebyshev_distance(c, white_king) > 1,
        )
        board[black_king] = self._ids.spawn("synth", Color.BLACK, PieceType.KING)

        # 2. Extra pieces; a rejected draw does not use up a slot.
        for _ in range(extra_pieces):
            self._place_random_piece(board)

        return board

    # ── Internal ─────────────────────────────────────────────────────────

    def _place_random_piece(self, board: Board) -> None:
        for _ in range(MAX_DRAW_ATTEMPTS):
            coord = self._random_coord()
            piece_type = self._rng.choice(EXTRA_PIECE_TYPES)
            color = self._random_color()
            if _is_valid_target(board, coord, piece_type):
                board[coord] = self._ids.spawn("synth", color, piece_type)
                return

        piece_type = self._rng.choice(EXTRA_PIECE_TYPES)
        color = self._random_color()
        coord = _scan(lambda c: _is_valid_target(board, c, piece_type))
        if coord is None:
            # Only back-rank squares are left.
            piece_type = self._rng.choice(EXTRA_PIECE_TYPES[1:])
            coord = _scan(lambda c: _is_valid_target(board, c, piece_type))
        if coord is None:
            raise RuntimeError("No empty square left for a synthesized piece")
        _LOGGER.debug(
            "Piece draw fell back to square scan after %d attempts", MAX_DRAW_ATTEMPTS
        )
        board[coord] = self._ids.spawn("synth", color, piece_type)

    def _draw_coord(self, accept: Callable[[Coord], bool]) -> Coord:
        for _ in range(MAX_DRAW_ATTEMPTS):
            coord = self._random_coord()
            if accept(coord):
                return coord
        coord = _scan(accept)
        if coord is None:
            raise RuntimeError("No square satisfies the placement constraint")
        _LOGGER.debug(
            "Square draw fell back to square scan after %d attempts", MAX_DRAW_ATTEMPTS
        )
        return coord

    def _random_coord(self) -> Coord:
        return self._rng.randrange(8), self._rng.randrange(8)

    def _random_color(self) -> Color:
        return Color.WHITE if self._rng.random() < 0.5 else Color.BLACK


def _is_valid_target(board: Board, coord: Coord, piece_type: PieceType) -> bool:
    if not board.is_empty(coord):
        return False
    return not (piece_type == PieceType.PAWN and coord[1] in _BACK_RANKS)


def _scan(accept: Callable[[Coord], bool]) -> Coord | None:
    for coord in storage_order():
        if accept(coord):
            return coord
    return None


def generate_random_position(
    difficulty: Difficulty, rng: random.Random | None = None
) -> Board:
    """One-off convenience wrapper around :class:`PositionSynthesizer`."""
    return PositionSynthesizer(rng).generate(difficulty)
