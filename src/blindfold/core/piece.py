"""Piece value object and piece-id generation."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field, replace

from blindfold.core.enums import Color, PieceType

# FEN character ↔ (Color, PieceType); uppercase is white.
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    (ptype.letter.upper() if color == Color.WHITE else ptype.letter): (color, ptype)
    for color in Color
    for ptype in PieceType
}

# Unicode chess symbols run K Q R B N P from U+2654 (white), then black.
_SYMBOL_ORDER = (
    PieceType.KING,
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.PAWN,
)
_UNICODE: dict[tuple[Color, PieceType], str] = {
    (color, ptype): chr(0x2654 + 6 * color + offset)
    for color in Color
    for offset, ptype in enumerate(_SYMBOL_ORDER)
}

_FEN_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable piece value.

    ``id`` only identifies a piece instance for the UI layer; equality and
    hashing look at ``(color, piece_type)`` alone.
    """

    color: Color
    piece_type: PieceType
    id: str = field(default="", compare=False)

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.piece_type)]

    @classmethod
    def from_char(cls, char: str, piece_id: str = "") -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype, piece_id)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]

    def with_id(self, piece_id: str) -> Piece:
        return replace(self, id=piece_id)


class PieceIdFactory:
    """Session-scoped source of unique piece ids.

    Ids combine a monotonically increasing sequence number with the spawn
    context (``"fen"``, ``"synth"``, ``"palette"`` ...), e.g. ``"synth-N-7"``.
    Each trainer session or editor owns one factory.
    """

    __slots__ = ("_counter",)

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)

    def next_id(self, context: str, piece: Piece) -> str:
        return f"{context}-{piece}-{next(self._counter)}"

    def spawn(self, context: str, color: Color, piece_type: PieceType) -> Piece:
        """Build a fresh piece carrying a new id."""
        piece = Piece(color, piece_type)
        return piece.with_id(self.next_id(context, piece))

    def stamp(self, context: str, piece: Piece) -> Piece:
        """Copy of *piece* with a new id."""
        return piece.with_id(self.next_id(context, piece))
