"""Rules-engine seam for the analysis board.

Move legality, SAN and game-end detection come from python-chess. The rest
of the package talks to it only through :class:`RulesEngine`, so positions
are opaque values here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

import chess

from blindfold.core.board import Board
from blindfold.core.enums import PieceType
from blindfold.core.notation.fen import FenError, board_to_fen

_TO_CHESS_PIECE: dict[PieceType, chess.PieceType] = {
    PieceType.PAWN: chess.PAWN,
    PieceType.KNIGHT: chess.KNIGHT,
    PieceType.BISHOP: chess.BISHOP,
    PieceType.ROOK: chess.ROOK,
    PieceType.QUEEN: chess.QUEEN,
    PieceType.KING: chess.KING,
}
_FROM_CHESS_PIECE: dict[chess.PieceType, PieceType] = {
    v: k for k, v in _TO_CHESS_PIECE.items()
}


class IllegalMoveError(ValueError):
    """Raised when a move is not legal in the given position."""


@dataclass(frozen=True, slots=True)
class MoveRequest:
    """A move as the UI expresses it: two square names and an optional
    promotion piece."""

    from_square: str
    to_square: str
    promotion: PieceType | None = None

    @property
    def uci(self) -> str:
        base = f"{self.from_square}{self.to_square}"
        if self.promotion is not None:
            base += self.promotion.letter
        return base


class RulesEngine(Protocol):
    """Operations the navigator needs from a chess rules engine."""

    def parse_position(self, fen: str) -> Any: ...

    def serialize(self, position: Any) -> str: ...

    def legal_destinations(self, position: Any, from_square: str) -> set[str]: ...

    def apply_move(self, position: Any, move: MoveRequest) -> Any: ...

    def to_san(self, position: Any, move: MoveRequest) -> str: ...

    def parse_san(self, position: Any, san: str) -> MoveRequest: ...

    def is_check(self, position: Any) -> bool: ...

    def is_checkmate(self, position: Any) -> bool: ...

    def is_stalemate(self, position: Any) -> bool: ...

    def result_token(self, position: Any) -> str: ...


class PythonChessRules:
    """:class:`RulesEngine` backed by ``chess.Board``."""

    __slots__ = ()

    def parse_position(self, fen: str) -> chess.Board:
        try:
            position = chess.Board(fen)
        except ValueError as exc:
            raise FenError(f"Invalid FEN {fen!r}: {exc}") from exc
        # Rights without a king and rook on their home squares are dropped.
        position.castling_rights = position.clean_castling_rights()
        status = position.status()
        if status != chess.STATUS_VALID:
            raise FenError(f"Illegal position {fen!r}: {describe_status(status)}")
        return position

    def serialize(self, position: chess.Board) -> str:
        return position.fen()

    def legal_destinations(self, position: chess.Board, from_square: str) -> set[str]:
        origin = chess.parse_square(from_square)
        return {
            chess.square_name(move.to_square)
            for move in position.legal_moves
            if move.from_square == origin
        }

    def apply_move(self, position: chess.Board, move: MoveRequest) -> chess.Board:
        chess_move = self._to_legal_move(position, move)
        after = position.copy(stack=False)
        after.push(chess_move)
        return after

    def to_san(self, position: chess.Board, move: MoveRequest) -> str:
        return position.san(self._to_legal_move(position, move))

    def parse_san(self, position: chess.Board, san: str) -> MoveRequest:
        try:
            chess_move = position.parse_san(san)
        except ValueError as exc:
            raise IllegalMoveError(f"Illegal move: {san}") from exc
        promotion = (
            _FROM_CHESS_PIECE[chess_move.promotion]
            if chess_move.promotion is not None
            else None
        )
        return MoveRequest(
            chess.square_name(chess_move.from_square),
            chess.square_name(chess_move.to_square),
            promotion,
        )

    def is_check(self, position: chess.Board) -> bool:
        return position.is_check()

    def is_checkmate(self, position: chess.Board) -> bool:
        return position.is_checkmate()

    def is_stalemate(self, position: chess.Board) -> bool:
        return position.is_stalemate()

    def result_token(self, position: chess.Board) -> str:
        """PGN result token: ``1-0``, ``0-1``, ``1/2-1/2`` or ``*``."""
        return position.result()

    def validation_error(self, fen: str) -> str | None:
        """Why *fen* is not a playable position, or ``None`` if it is."""
        try:
            self.parse_position(fen)
        except FenError as exc:
            return str(exc)
        return None

    # ── Internal ─────────────────────────────────────────────────────────

    def _to_legal_move(self, position: chess.Board, move: MoveRequest) -> chess.Move:
        try:
            origin = chess.parse_square(move.from_square)
            target = chess.parse_square(move.to_square)
        except ValueError as exc:
            raise IllegalMoveError(f"Illegal move: {move.uci}") from exc

        promotion = (
            _TO_CHESS_PIECE[move.promotion] if move.promotion is not None else None
        )
        piece = position.piece_at(origin)
        if (
            promotion is None
            and piece is not None
            and piece.piece_type == chess.PAWN
            and chess.square_rank(target) in (0, 7)
        ):
            promotion = chess.QUEEN

        chess_move = chess.Move(origin, target, promotion=promotion)
        if not position.is_legal(chess_move):
            raise IllegalMoveError(f"Illegal move: {move.uci}")
        return chess_move


def describe_status(status: chess.Status) -> str:
    """Human-readable list of the problems flagged in a board status."""
    problems = [
        flag.name.lower().replace("_", " ")
        for flag in chess.Status
        if flag and flag.name and (status & flag) == flag
    ]
    return ", ".join(problems) or "invalid position"


def validate_board(
    board: Board, side_to_move: str = "w", rules: PythonChessRules | None = None
) -> str | None:
    """Check an edited trainer board through the rules engine.

    Castling rights are left out, so only the piece placement and side to
    move are judged.
    """
    engine = rules if rules is not None else PythonChessRules()
    return engine.validation_error(board_to_fen(board, side_to_move, "-"))
