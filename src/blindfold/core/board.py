"""Board - an 8x8 grid of named squares."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TypeAlias

from blindfold.core.enums import Color, PieceType
from blindfold.core.piece import Piece
from blindfold.core.types import Coord, parse_square, row_of, square_name

SquareRef: TypeAlias = "str | Coord"


class Square:
    """One board cell. ``x``, ``y`` and ``name`` never change; ``piece`` does."""

    __slots__ = ("_x", "_y", "_name", "piece")

    def __init__(self, x: int, y: int, piece: Piece | None = None) -> None:
        self._x = x
        self._y = y
        self._name = square_name(x, y)
        self.piece = piece

    @property
    def x(self) -> int:
        return self._x

    @property
    def y(self) -> int:
        return self._y

    @property
    def name(self) -> str:
        return self._name

    @property
    def coord(self) -> Coord:
        return self._x, self._y

    def is_empty(self) -> bool:
        return self.piece is None

    def __repr__(self) -> str:
        if self.piece is None:
            return f"Square({self._name!r})"
        return f"Square({self._name!r}, {self.piece!s})"


class Board:
    """Mutable 64-square board stored row-major from rank 8 to rank 1.

    Squares can be addressed by name (``"e4"``) or by ``(x, y)`` coordinate.
    """

    __slots__ = ("_rows",)

    def __init__(self) -> None:
        self._rows: list[list[Square]] = [
            [Square(x, y) for x in range(8)] for y in range(7, -1, -1)
        ]

    # -- Element access -----------------------------------------------------

    def square(self, ref: SquareRef) -> Square:
        x, y = parse_square(ref) if isinstance(ref, str) else ref
        if not (0 <= x < 8 and 0 <= y < 8):
            raise ValueError(f"Invalid square coordinates: ({x}, {y})")
        return self._rows[row_of(y)][x]

    def __getitem__(self, ref: SquareRef) -> Piece | None:
        return self.square(ref).piece

    def __setitem__(self, ref: SquareRef, piece: Piece | None) -> None:
        self.square(ref).piece = piece

    def __iter__(self) -> Iterator[Square]:
        """Squares in storage order: rank 8→1, file a→h."""
        for row in self._rows:
            yield from row

    @property
    def rows(self) -> list[list[Square]]:
        return self._rows

    def is_empty(self, ref: SquareRef) -> bool:
        return self.square(ref).piece is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> list[Square]:
        return [sq for sq in self if sq.piece is not None]

    def piece_count(self) -> int:
        return sum(1 for sq in self if sq.piece is not None)

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        return [
            sq
            for sq in self
            if sq.piece is not None
            and sq.piece.color == color
            and sq.piece.piece_type == piece_type
        ]

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        kings = self.pieces(color, PieceType.KING)
        if not kings:
            raise ValueError(f"No {color.name} king on board")
        return kings[0]

    # -- Mutation / copying -------------------------------------------------

    def place(self, ref: SquareRef, piece: Piece) -> Piece | None:
        """Put *piece* on a square, returning whatever it replaced."""
        sq = self.square(ref)
        previous = sq.piece
        sq.piece = piece
        return previous

    def remove(self, ref: SquareRef) -> Piece | None:
        sq = self.square(ref)
        piece = sq.piece
        sq.piece = None
        return piece

    def move(self, from_ref: SquareRef, to_ref: SquareRef) -> bool:
        """Relocate a piece, replacing any occupant. False if origin is empty."""
        src = self.square(from_ref)
        dst = self.square(to_ref)
        if src.piece is None:
            return False
        if src is dst:
            return True
        dst.piece = src.piece
        src.piece = None
        return True

    def clear(self) -> None:
        for sq in self:
            sq.piece = None

    def copy(self) -> Board:
        b = Board()
        for src, dst in zip(self, b):
            dst.piece = src.piece
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return all(a.piece == b.piece for a, b in zip(self, other))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank_idx, row in enumerate(self._rows):
            cells = [str(sq.piece) if sq.piece else "." for sq in row]
            rows.append(f"{8 - rank_idx} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)


def create_empty_board() -> Board:
    """64 empty squares named ``a1`` .. ``h8``."""
    return Board()
