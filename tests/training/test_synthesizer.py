"""Tests for PositionSynthesizer."""

import random

import pytest

from blindfold.core.board import Board
from blindfold.core.enums import Color, Difficulty, PieceType
from blindfold.core.types import chebyshev_distance
from blindfold.training.settings import PIECE_COUNT_RANGES
from blindfold.training.synthesizer import (
    PositionSynthesizer,
    generate_random_position,
)


def _assert_training_board(board: Board, difficulty: Difficulty) -> None:
    white_kings = board.pieces(Color.WHITE, PieceType.KING)
    black_kings = board.pieces(Color.BLACK, PieceType.KING)
    assert len(white_kings) == 1
    assert len(black_kings) == 1
    assert chebyshev_distance(white_kings[0].coord, black_kings[0].coord) > 1

    for sq in board.occupied():
        assert sq.piece is not None
        if sq.piece.piece_type == PieceType.PAWN:
            assert sq.y not in (0, 7), f"pawn on back rank at {sq.name}"

    low, high = PIECE_COUNT_RANGES[difficulty]
    assert low <= board.piece_count() - 2 <= high
    assert board.piece_count() < 64


class TestPositionSynthesizer:
    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_invariants_hold_over_many_boards(self, difficulty: Difficulty) -> None:
        synth = PositionSynthesizer(random.Random(7))
        for _ in range(200):
            _assert_training_board(synth.generate(difficulty), difficulty)

    def test_every_count_in_range_is_reachable(self, rng: random.Random) -> None:
        synth = PositionSynthesizer(rng)
        seen = {synth.generate(Difficulty.MEDIUM).piece_count() - 2 for _ in range(300)}
        assert seen == {5, 6, 7, 8}

    def test_same_seed_same_board(self) -> None:
        a = PositionSynthesizer(random.Random(99)).generate(Difficulty.HARD)
        b = PositionSynthesizer(random.Random(99)).generate(Difficulty.HARD)
        assert a == b

    def test_pieces_carry_unique_ids(self, rng: random.Random) -> None:
        board = PositionSynthesizer(rng).generate(Difficulty.HARD)
        ids = [sq.piece.id for sq in board.occupied() if sq.piece is not None]
        assert len(ids) == len(set(ids))
        assert all(piece_id.startswith("synth-") for piece_id in ids)

    def test_exact_count(self, rng: random.Random) -> None:
        board = PositionSynthesizer(rng).generate_with_count(20)
        assert board.piece_count() == 22

    def test_crowded_board_terminates(self, rng: random.Random) -> None:
        board = PositionSynthesizer(rng).generate_with_count(61)
        assert board.piece_count() == 63
        for sq in board.occupied():
            assert sq.piece is not None
            if sq.piece.piece_type == PieceType.PAWN:
                assert sq.y not in (0, 7)

    def test_full_board_is_rejected(self, rng: random.Random) -> None:
        with pytest.raises(ValueError, match="board would be full"):
            PositionSynthesizer(rng).generate_with_count(62)

    def test_negative_count_is_rejected(self, rng: random.Random) -> None:
        with pytest.raises(ValueError):
            PositionSynthesizer(rng).generate_with_count(-1)

    def test_fallback_scan_is_used_when_draws_keep_failing(self) -> None:
        class _StuckRandom(random.Random):
            """Always draws a1; only the first king gets placed by drawing."""

            def randrange(self, *args: object, **kwargs: object) -> int:  # type: ignore[override]
                return 0

        board = PositionSynthesizer(_StuckRandom(1)).generate_with_count(3)
        assert board.piece_count() == 5
        assert board["a1"] == board.king_square(Color.WHITE).piece

    def test_module_helper(self, rng: random.Random) -> None:
        board = generate_random_position(Difficulty.EASY, rng)
        _assert_training_board(board, Difficulty.EASY)
