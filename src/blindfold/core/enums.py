"""Core enumerations and flags for the trainer domain."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def fen_char(self) -> str:
        """Side-to-move field value, ``w`` or ``b``."""
        return "w" if self == Color.WHITE else "b"

    @classmethod
    def from_fen_char(cls, char: str) -> Color:
        if char == "w":
            return cls.WHITE
        if char == "b":
            return cls.BLACK
        raise ValueError(f"Invalid side-to-move field: {char!r}")

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def letter(self) -> str:
        """Lowercase FEN letter, e.g. ``n`` for a knight."""
        return _PIECE_LETTERS[self]


_PIECE_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH


class Difficulty(IntEnum):
    """Training tier; selects how many extra pieces a synthesized board gets."""

    EASY = auto()
    MEDIUM = auto()
    HARD = auto()


class GameMode(IntEnum):
    """Trainer flavour chosen on the home screen."""

    CLASSIC = auto()
    PROGRESSIVE = auto()
