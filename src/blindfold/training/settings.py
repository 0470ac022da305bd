"""Trainer settings and the difficulty → piece-count contract."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from blindfold.core.enums import Difficulty, GameMode

# Extra pieces placed next to the two kings, as closed ranges.
PIECE_COUNT_RANGES: dict[Difficulty, tuple[int, int]] = {
    Difficulty.EASY: (2, 4),
    Difficulty.MEDIUM: (5, 8),
    Difficulty.HARD: (9, 14),
}

KING_COUNT = 2


def total_piece_range(difficulty: Difficulty) -> tuple[int, int]:
    """Total pieces on the board for *difficulty*, kings included."""
    low, high = PIECE_COUNT_RANGES[difficulty]
    return low + KING_COUNT, high + KING_COUNT


def difficulty_label(difficulty: Difficulty) -> str:
    """Display label, e.g. ``"Hard (11-16 pieces)"``."""
    low, high = total_piece_range(difficulty)
    return f"{difficulty.name.title()} ({low}-{high} pieces)"


@dataclass
class GameSettings:
    """User-configurable options for one training exercise."""

    mode: GameMode = GameMode.CLASSIC
    difficulty: Difficulty = Difficulty.EASY
    memorize_time: int = 10  # seconds
    reconstruct_time: int = 60  # seconds
    fen: str | None = None  # overrides random synthesis when set

    def __post_init__(self) -> None:
        if self.memorize_time <= 0:
            raise ValueError(f"memorize_time must be positive: {self.memorize_time}")
        if self.reconstruct_time <= 0:
            raise ValueError(
                f"reconstruct_time must be positive: {self.reconstruct_time}"
            )
        if self.fen is not None and not self.fen.strip():
            self.fen = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> GameSettings:
        """Build settings from the loose dict handed between screens.

        Enum fields are given by name (``"HARD"``); both ``memorizeTime`` and
        ``memorize_time`` spellings are accepted.
        """
        kwargs: dict[str, Any] = {}
        if "mode" in data:
            kwargs["mode"] = _enum_by_name(GameMode, data["mode"])
        if "difficulty" in data:
            kwargs["difficulty"] = _enum_by_name(Difficulty, data["difficulty"])
        for key, attr in (
            ("memorizeTime", "memorize_time"),
            ("memorize_time", "memorize_time"),
            ("reconstructTime", "reconstruct_time"),
            ("reconstruct_time", "reconstruct_time"),
        ):
            if key in data:
                kwargs[attr] = int(data[key])
        if data.get("fen"):
            kwargs["fen"] = str(data["fen"])
        return cls(**kwargs)


def _enum_by_name(enum_cls: Any, value: Any) -> Any:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls[str(value).upper()]
    except KeyError:
        raise ValueError(f"Unknown {enum_cls.__name__}: {value!r}") from None
