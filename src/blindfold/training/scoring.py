"""Comparison of a reconstructed board against the original."""

from __future__ import annotations

from dataclasses import dataclass, field

from blindfold.core.board import Board
from blindfold.core.piece import Piece

SQUARE_COUNT = 64


@dataclass(frozen=True, slots=True)
class Mismatch:
    """A square where the attempt differs from the original."""

    square: str
    expected: Piece | None
    actual: Piece | None

    @property
    def is_missing(self) -> bool:
        """Original had a piece the attempt left empty."""
        return self.expected is not None and self.actual is None

    @property
    def is_extra(self) -> bool:
        """Attempt put a piece on a square that was empty."""
        return self.expected is None and self.actual is not None


@dataclass(frozen=True, slots=True)
class ScoreReport:
    """Result of one reconstruction."""

    accuracy: int
    correct_squares: int
    mismatches: list[Mismatch] = field(default_factory=list)

    @property
    def is_perfect(self) -> bool:
        return not self.mismatches


def squares_match(expected: Piece | None, actual: Piece | None) -> bool:
    """Both empty, or the same piece type and color. Ids are ignored."""
    if expected is None or actual is None:
        return expected is None and actual is None
    return (
        expected.piece_type == actual.piece_type and expected.color == actual.color
    )


def percentage(correct: int, total: int = SQUARE_COUNT) -> int:
    """``100 * correct / total`` rounded half up, in integer arithmetic."""
    return (200 * correct + total) // (2 * total)


def diff(original: Board, attempt: Board) -> list[Mismatch]:
    """Mismatched squares in storage order (rank 8→1, file a→h)."""
    return [
        Mismatch(orig_sq.name, orig_sq.piece, attempt_sq.piece)
        for orig_sq, attempt_sq in zip(original, attempt)
        if not squares_match(orig_sq.piece, attempt_sq.piece)
    ]


def accuracy(original: Board, attempt: Board) -> int:
    """Share of the 64 squares reproduced exactly, as a whole percentage."""
    correct = sum(
        1
        for orig_sq, attempt_sq in zip(original, attempt)
        if squares_match(orig_sq.piece, attempt_sq.piece)
    )
    return percentage(correct)


def score(original: Board, attempt: Board) -> ScoreReport:
    mismatches = diff(original, attempt)
    correct = SQUARE_COUNT - len(mismatches)
    return ScoreReport(percentage(correct), correct, mismatches)
