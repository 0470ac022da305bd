"""Square coordinates and naming helpers.

Coordinates are zero-based ``(x, y)`` pairs: ``x`` is the file (0=a .. 7=h)
and ``y`` the rank (0=rank 1 .. 7=rank 8).

Boards are stored row-major from rank 8 down to rank 1, so the storage row
of a square is ``7 - y`` and its column is ``x``::

    row 0:  a8 b8 ... h8
    ...
    row 7:  a1 b1 ... h1
"""

from __future__ import annotations

from typing import TypeAlias

Coord: TypeAlias = tuple[int, int]

FILES = "abcdefgh"
RANKS = "12345678"


def square_name(x: int, y: int) -> str:
    """Human-readable name, e.g. ``(4, 3)`` → ``'e4'``."""
    if not (is_valid_coord(x) and is_valid_coord(y)):
        raise ValueError(f"Invalid square coordinates: ({x}, {y})")
    return FILES[x] + RANKS[y]


def parse_square(name: str) -> Coord:
    """Parse square name, e.g. ``'e4'`` → ``(4, 3)``."""
    if len(name) != 2 or name[0] not in FILES or name[1] not in RANKS:
        raise ValueError(f"Invalid square name: {name!r}")
    return FILES.index(name[0]), RANKS.index(name[1])


def is_valid_coord(value: int) -> bool:
    return 0 <= value < 8


def row_of(y: int) -> int:
    """Storage row for rank index *y*."""
    return 7 - y


def chebyshev_distance(a: Coord, b: Coord) -> int:
    """King-move distance between two squares."""
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


def storage_order() -> list[Coord]:
    """All 64 coordinates in board storage order (rank 8→1, file a→h)."""
    return [(x, y) for y in range(7, -1, -1) for x in range(8)]
