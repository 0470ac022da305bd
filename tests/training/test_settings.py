"""Tests for GameSettings and difficulty ranges."""

import pytest

from blindfold.core.enums import Difficulty, GameMode
from blindfold.training.settings import (
    GameSettings,
    difficulty_label,
    total_piece_range,
)


class TestDifficultyRanges:
    @pytest.mark.parametrize(
        ("difficulty", "expected"),
        [
            (Difficulty.EASY, (4, 6)),
            (Difficulty.MEDIUM, (7, 10)),
            (Difficulty.HARD, (11, 16)),
        ],
    )
    def test_total_range_counts_kings(
        self, difficulty: Difficulty, expected: tuple[int, int]
    ) -> None:
        assert total_piece_range(difficulty) == expected

    def test_label(self) -> None:
        assert difficulty_label(Difficulty.HARD) == "Hard (11-16 pieces)"
        assert difficulty_label(Difficulty.EASY) == "Easy (4-6 pieces)"


class TestGameSettings:
    def test_defaults(self) -> None:
        settings = GameSettings()
        assert settings.mode == GameMode.CLASSIC
        assert settings.difficulty == Difficulty.EASY
        assert settings.memorize_time == 10
        assert settings.reconstruct_time == 60
        assert settings.fen is None

    @pytest.mark.parametrize("field", ["memorize_time", "reconstruct_time"])
    def test_non_positive_times_rejected(self, field: str) -> None:
        with pytest.raises(ValueError, match=field):
            GameSettings(**{field: 0})

    def test_blank_fen_means_random(self) -> None:
        assert GameSettings(fen="   ").fen is None

    def test_from_mapping_camel_case(self) -> None:
        settings = GameSettings.from_mapping(
            {
                "mode": "progressive",
                "difficulty": "HARD",
                "memorizeTime": "5",
                "reconstructTime": 30,
                "fen": "",
            }
        )
        assert settings == GameSettings(
            mode=GameMode.PROGRESSIVE,
            difficulty=Difficulty.HARD,
            memorize_time=5,
            reconstruct_time=30,
        )

    def test_from_mapping_snake_case_and_enums(self) -> None:
        settings = GameSettings.from_mapping(
            {"difficulty": Difficulty.MEDIUM, "memorize_time": 3, "fen": "8/8/8/8/8/8/8/8"}
        )
        assert settings.difficulty == Difficulty.MEDIUM
        assert settings.memorize_time == 3
        assert settings.fen == "8/8/8/8/8/8/8/8"

    def test_from_mapping_unknown_enum(self) -> None:
        with pytest.raises(ValueError, match="Unknown Difficulty"):
            GameSettings.from_mapping({"difficulty": "impossible"})
