"""FEN parsing and serialization for trainer boards."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from blindfold.core.board import Board
from blindfold.core.enums import CastlingRights, Color
from blindfold.core.piece import Piece, PieceIdFactory
from blindfold.core.types import parse_square

_LOGGER = logging.getLogger(__name__)

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
EMPTY_FEN = "8/8/8/8/8/8/8/8 w - - 0 1"

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}


class FenError(ValueError):
    """Raised for malformed FEN or placement strings."""


@dataclass(frozen=True, slots=True)
class DecodeResult:
    """Outcome of decoding user-supplied FEN: a board or an error message."""

    board: Board | None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class FenRecord:
    """All six FEN fields."""

    board: Board
    side_to_move: Color = Color.WHITE
    castling: CastlingRights = CastlingRights.ALL
    en_passant: str | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1

    def to_fen(self) -> str:
        return board_to_fen(
            self.board,
            self.side_to_move.fen_char,
            self.castling,
            self.en_passant or "-",
            self.halfmove_clock,
            self.fullmove_number,
        )


# ── Placement field ──────────────────────────────────────────────────────────


def board_from_fen(fen: str, ids: PieceIdFactory | None = None) -> Board:
    """Decode the placement field of *fen* into a new :class:`Board`.

    Only the first whitespace-separated field is read; a bare placement
    string is accepted as well.
    """
    parts = fen.split()
    if not parts:
        raise FenError("Empty FEN")
    placement = parts[0]

    ranks = placement.split("/")
    if len(ranks) != 8:
        raise FenError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")

    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        y = 7 - rank_idx
        x = 0
        for ch in rank_text:
            if ch in "0123456789":
                step = int(ch)
                if not (1 <= step <= 8):
                    raise FenError(f"Invalid FEN digit {ch!r}: {fen!r}")
                x += step
                if x > 8:
                    raise FenError(f"Invalid FEN rank width: {fen!r}")
                continue
            if x >= 8:
                raise FenError(f"Invalid FEN rank width: {fen!r}")
            try:
                piece = Piece.from_char(ch)
            except ValueError:
                raise FenError(f"Invalid FEN character {ch!r}: {fen!r}") from None
            if ids is not None:
                piece = ids.stamp("fen", piece)
            board[(x, y)] = piece
            x += 1
        if x != 8:
            raise FenError(f"Invalid FEN rank width: {fen!r}")
    return board


def decode_board(fen: str, ids: PieceIdFactory | None = None) -> DecodeResult:
    """Like :func:`board_from_fen` but reports bad input instead of raising."""
    try:
        return DecodeResult(board_from_fen(fen, ids))
    except FenError as exc:
        _LOGGER.debug("Rejected FEN input: %s", exc)
        return DecodeResult(None, str(exc))


def placement_from_board(board: Board) -> str:
    """Placement field for *board*, rank 8 first."""
    rows: list[str] = []
    for row in board.rows:
        empty = 0
        text = ""
        for sq in row:
            if sq.piece is None:
                empty += 1
                continue
            if empty:
                text += str(empty)
                empty = 0
            text += str(sq.piece)
        if empty:
            text += str(empty)
        rows.append(text)
    return "/".join(rows)


def castling_to_fen(castling: CastlingRights) -> str:
    text = "".join(ch for ch, right in _CASTLING_CHARS.items() if castling & right)
    return text or "-"


def castling_from_fen(field: str) -> CastlingRights:
    castling = CastlingRights.NONE
    if field == "-":
        return castling
    seen: set[str] = set()
    for ch in field:
        right = _CASTLING_CHARS.get(ch)
        if right is None or ch in seen:
            raise FenError(f"Invalid FEN castling field: {field!r}")
        seen.add(ch)
        castling |= right
    return castling


def board_to_fen(
    board: Board,
    side_to_move: str = "w",
    castling: CastlingRights | str = "KQkq",
    en_passant: str = "-",
    halfmove: int = 0,
    fullmove: int = 1,
) -> str:
    """Assemble a full FEN string; the trailing fields are used verbatim."""
    if isinstance(castling, CastlingRights):
        castling_str = castling_to_fen(castling)
    else:
        castling_str = castling or "-"
    return (
        f"{placement_from_board(board)} {side_to_move} {castling_str} "
        f"{en_passant} {halfmove} {fullmove}"
    )


# ── Full record ──────────────────────────────────────────────────────────────


def parse_fen(fen: str, ids: PieceIdFactory | None = None) -> FenRecord:
    """Parse all FEN fields. The two clock fields are optional."""
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise FenError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    board = board_from_fen(parts[0], ids)

    try:
        side = Color.from_fen_char(parts[1])
    except ValueError:
        raise FenError(f"Invalid FEN side-to-move field: {parts[1]!r}") from None

    castling = castling_from_fen(parts[2])

    en_passant: str | None = None
    if parts[3] != "-":
        try:
            _, ep_y = parse_square(parts[3])
        except ValueError:
            raise FenError(f"Invalid FEN en-passant square: {parts[3]!r}") from None
        expected_y = 5 if side == Color.WHITE else 2
        if ep_y != expected_y:
            raise FenError(
                f"Invalid FEN en-passant square for side-to-move: {parts[3]!r}"
            )
        en_passant = parts[3]

    halfmove = _parse_clock(parts, 4, default=0, minimum=0, label="halfmove clock")
    fullmove = _parse_clock(parts, 5, default=1, minimum=1, label="fullmove number")

    return FenRecord(board, side, castling, en_passant, halfmove, fullmove)


def _parse_clock(
    parts: list[str], index: int, *, default: int, minimum: int, label: str
) -> int:
    if len(parts) <= index:
        return default
    try:
        value = int(parts[index])
    except ValueError:
        raise FenError(f"Invalid FEN {label}: {parts[index]!r}") from None
    if value < minimum:
        raise FenError(f"Invalid FEN {label}: {parts[index]!r}")
    return value
