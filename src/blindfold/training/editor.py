"""BoardEditor — click/drag editing model shared by the reconstruction
board and the position editor."""

from __future__ import annotations

import logging

from blindfold.core.board import Board, SquareRef
from blindfold.core.enums import CastlingRights, Color
from blindfold.core.notation.fen import (
    STARTING_FEN,
    board_from_fen,
    board_to_fen,
    castling_from_fen,
    parse_fen,
)
from blindfold.core.piece import Piece, PieceIdFactory

_LOGGER = logging.getLogger(__name__)


class BoardEditor:
    """Edits a board the way the trainer UI does.

    With a palette piece selected, clicking a square drops a copy of it
    there. Without one, the first click on an occupied square picks it up
    and the next click on another square puts it down (clicking the same
    square again cancels).
    """

    __slots__ = (
        "_board",
        "_ids",
        "_selected_piece",
        "_move_source",
        "side_to_move",
        "castling",
        "en_passant",
    )

    def __init__(
        self, board: Board | None = None, ids: PieceIdFactory | None = None
    ) -> None:
        self._board = board if board is not None else Board()
        self._ids = ids if ids is not None else PieceIdFactory()
        self._selected_piece: Piece | None = None
        self._move_source: str | None = None
        self.side_to_move = Color.WHITE
        self.castling = CastlingRights.ALL
        self.en_passant: str | None = None

    # ── State ────────────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def selected_piece(self) -> Piece | None:
        return self._selected_piece

    @property
    def move_source(self) -> str | None:
        return self._move_source

    @property
    def fen(self) -> str:
        return board_to_fen(
            self._board,
            self.side_to_move.fen_char,
            self.castling,
            self.en_passant or "-",
        )

    # ── Palette / clicks ─────────────────────────────────────────────────

    def select_piece(self, piece: Piece | None) -> None:
        """Arm (or with ``None`` disarm) placement of a palette piece."""
        self._selected_piece = piece
        self._move_source = None

    def click(self, ref: SquareRef) -> None:
        square = self._board.square(ref)

        if self._selected_piece is not None:
            square.piece = self._ids.stamp("palette", self._selected_piece)
            self._move_source = None
            return

        if self._move_source is None:
            if square.piece is not None:
                self._move_source = square.name
            return

        if self._move_source != square.name:
            self._board.move(self._move_source, square.name)
        self._move_source = None

    def drag(self, from_ref: SquareRef, to_ref: SquareRef) -> bool:
        moved = self._board.move(from_ref, to_ref)
        self._move_source = None
        return moved

    def remove(self, ref: SquareRef) -> Piece | None:
        self._move_source = None
        return self._board.remove(ref)

    # ── Whole-board actions ──────────────────────────────────────────────

    def clear(self) -> None:
        self._board.clear()
        self._selected_piece = None
        self._move_source = None

    def set_starting_position(self) -> None:
        self._replace_board(board_from_fen(STARTING_FEN, self._ids))
        self.side_to_move = Color.WHITE
        self.castling = CastlingRights.ALL
        self.en_passant = None
        self._selected_piece = None

    def load_fen(self, fen: str) -> str | None:
        """Load a typed FEN. Returns an error message and keeps the current
        board when the input is malformed."""
        parts = fen.split()
        side: Color | None = None
        castling: CastlingRights | None = None
        en_passant: str | None = None
        try:
            if len(parts) >= 4:
                record = parse_fen(fen, self._ids)
                board = record.board
                side, castling = record.side_to_move, record.castling
                en_passant = record.en_passant
            else:
                # Placement plus optional side / castling, as typed in the box.
                board = board_from_fen(fen, self._ids)
                if len(parts) > 1:
                    side = Color.from_fen_char(parts[1])
                if len(parts) > 2:
                    castling = castling_from_fen(parts[2])
        except ValueError as exc:
            _LOGGER.debug("Editor rejected FEN %r: %s", fen, exc)
            return str(exc)

        self._replace_board(board)
        if side is not None:
            self.side_to_move = side
        if castling is not None:
            self.castling = castling
        self.en_passant = en_passant
        return None

    def _replace_board(self, board: Board) -> None:
        for dst, src in zip(self._board, board):
            dst.piece = src.piece
        self._move_source = None
