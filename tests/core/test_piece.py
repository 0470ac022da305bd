"""Tests for Piece and PieceIdFactory."""

import pytest

from blindfold.core.enums import Color, PieceType
from blindfold.core.piece import Piece, PieceIdFactory


class TestPiece:
    def test_from_char(self) -> None:
        assert Piece.from_char("N") == Piece(Color.WHITE, PieceType.KNIGHT)
        assert Piece.from_char("q") == Piece(Color.BLACK, PieceType.QUEEN)

    def test_invalid_char_raises(self) -> None:
        with pytest.raises(ValueError, match="Invalid piece character"):
            Piece.from_char("x")

    def test_str_is_fen_char(self) -> None:
        assert str(Piece(Color.WHITE, PieceType.KING)) == "K"
        assert str(Piece(Color.BLACK, PieceType.PAWN)) == "p"

    def test_symbol(self) -> None:
        assert Piece(Color.BLACK, PieceType.KNIGHT).symbol == "♞"

    def test_id_is_not_part_of_equality(self) -> None:
        a = Piece(Color.WHITE, PieceType.ROOK, "a")
        b = Piece(Color.WHITE, PieceType.ROOK, "b")
        assert a == b
        assert hash(a) == hash(b)

    def test_color_is_part_of_equality(self) -> None:
        assert Piece(Color.WHITE, PieceType.ROOK) != Piece(Color.BLACK, PieceType.ROOK)


class TestPieceIdFactory:
    def test_ids_are_unique_and_monotonic(self) -> None:
        ids = PieceIdFactory()
        first = ids.spawn("synth", Color.WHITE, PieceType.KING)
        second = ids.spawn("synth", Color.WHITE, PieceType.KING)
        assert first.id == "synth-K-1"
        assert second.id == "synth-K-2"

    def test_factories_are_independent(self) -> None:
        a = PieceIdFactory()
        b = PieceIdFactory()
        a.spawn("fen", Color.BLACK, PieceType.PAWN)
        assert b.spawn("fen", Color.BLACK, PieceType.PAWN).id == "fen-p-1"

    def test_stamp_keeps_kind(self) -> None:
        piece = Piece(Color.BLACK, PieceType.BISHOP, "old")
        stamped = PieceIdFactory().stamp("palette", piece)
        assert stamped == piece
        assert stamped.id == "palette-b-1"
