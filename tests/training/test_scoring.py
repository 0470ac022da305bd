"""Tests for accuracy scoring and board diffs."""

import random

import pytest

from blindfold.core.board import Board, create_empty_board
from blindfold.core.enums import Color, Difficulty, PieceType
from blindfold.core.notation import STARTING_FEN, board_from_fen
from blindfold.core.piece import Piece
from blindfold.training.scoring import (
    accuracy,
    diff,
    percentage,
    score,
    squares_match,
)
from blindfold.training.synthesizer import PositionSynthesizer

_TWELVE_PIECES = "r3k3/1p3q2/3p4/2N5/4B3/1P6/5Q2/R3K2n w - - 0 1"


def _flip_color(board: Board, name: str) -> None:
    piece = board[name]
    assert piece is not None
    board[name] = Piece(piece.color.opposite, piece.piece_type)


class TestSquaresMatch:
    def test_both_empty(self) -> None:
        assert squares_match(None, None)

    def test_one_empty(self) -> None:
        piece = Piece(Color.WHITE, PieceType.PAWN)
        assert not squares_match(piece, None)
        assert not squares_match(None, piece)

    def test_same_kind_different_ids(self) -> None:
        assert squares_match(
            Piece(Color.BLACK, PieceType.ROOK, "x"),
            Piece(Color.BLACK, PieceType.ROOK, "y"),
        )

    def test_no_partial_credit(self) -> None:
        assert not squares_match(
            Piece(Color.BLACK, PieceType.ROOK), Piece(Color.WHITE, PieceType.ROOK)
        )
        assert not squares_match(
            Piece(Color.BLACK, PieceType.ROOK), Piece(Color.BLACK, PieceType.QUEEN)
        )


class TestAccuracy:
    def test_identical_boards_score_100(self) -> None:
        original = board_from_fen(_TWELVE_PIECES)
        assert original.piece_count() == 12
        assert accuracy(original, original) == 100
        assert accuracy(original, original.copy()) == 100

    def test_one_flipped_color(self) -> None:
        original = board_from_fen(_TWELVE_PIECES)
        attempt = original.copy()
        _flip_color(attempt, "c5")

        assert accuracy(original, attempt) == 98
        mismatches = diff(original, attempt)
        assert len(mismatches) == 1
        assert mismatches[0].square == "c5"
        assert mismatches[0].expected == Piece(Color.WHITE, PieceType.KNIGHT)
        assert mismatches[0].actual == Piece(Color.BLACK, PieceType.KNIGHT)

    def test_empty_attempt_against_starting_position(self) -> None:
        original = board_from_fen(STARTING_FEN)
        assert accuracy(original, create_empty_board()) == 50

    def test_symmetry_and_bounds(self, rng: random.Random) -> None:
        synth = PositionSynthesizer(rng)
        for _ in range(50):
            a = synth.generate(Difficulty.HARD)
            b = synth.generate(Difficulty.EASY)
            value = accuracy(a, b)
            assert value == accuracy(b, a)
            assert 0 <= value <= 100

    def test_consistent_with_diff(self, rng: random.Random) -> None:
        synth = PositionSynthesizer(rng)
        for _ in range(50):
            a = synth.generate(Difficulty.MEDIUM)
            b = synth.generate(Difficulty.MEDIUM)
            assert accuracy(a, b) == percentage(64 - len(diff(a, b)))

    @pytest.mark.parametrize(
        ("correct", "expected"),
        [(0, 0), (8, 13), (24, 38), (32, 50), (40, 63), (56, 88), (63, 98), (64, 100)],
    )
    def test_rounds_half_up(self, correct: int, expected: int) -> None:
        assert percentage(correct) == expected

    def test_full_board_mismatch_scores_zero(self) -> None:
        a = Board()
        b = Board()
        for sq in a:
            sq.piece = Piece(Color.WHITE, PieceType.QUEEN)
        for sq in b:
            sq.piece = Piece(Color.BLACK, PieceType.QUEEN)
        assert accuracy(a, b) == 0


class TestDiff:
    def test_order_follows_storage(self) -> None:
        original = board_from_fen(STARTING_FEN)
        attempt = create_empty_board()
        names = [m.square for m in diff(original, attempt)]
        assert names[:3] == ["a8", "b8", "c8"]
        assert names[-1] == "h1"
        assert names.index("h7") < names.index("a2")

    def test_missing_and_extra(self) -> None:
        original = Board()
        original["d4"] = Piece(Color.WHITE, PieceType.BISHOP)
        attempt = Board()
        attempt["e5"] = Piece(Color.WHITE, PieceType.BISHOP)
        extra, missing = diff(original, attempt)
        assert extra.square == "e5" and extra.is_extra
        assert missing.square == "d4" and missing.is_missing

    def test_no_mismatches_for_identical_boards(self) -> None:
        board = board_from_fen(_TWELVE_PIECES)
        assert diff(board, board.copy()) == []


class TestScoreReport:
    def test_report_fields(self) -> None:
        original = board_from_fen(_TWELVE_PIECES)
        attempt = original.copy()
        attempt.remove("a8")
        report = score(original, attempt)
        assert report.accuracy == 98
        assert report.correct_squares == 63
        assert [m.square for m in report.mismatches] == ["a8"]
        assert not report.is_perfect

    def test_perfect(self) -> None:
        board = board_from_fen(_TWELVE_PIECES)
        assert score(board, board).is_perfect
