"""Training layer — position synthesis, scoring and the exercise session.

Quick start::

    from blindfold.training import GameSettings, TrainerSession

    session = TrainerSession(GameSettings(memorize_time=15))
    session.start()
"""

from blindfold.training.editor import BoardEditor
from blindfold.training.scoring import (
    Mismatch,
    ScoreReport,
    accuracy,
    diff,
    score,
    squares_match,
)
from blindfold.training.session import TrainerPhase, TrainerSession
from blindfold.training.settings import (
    PIECE_COUNT_RANGES,
    GameSettings,
    difficulty_label,
    total_piece_range,
)
from blindfold.training.synthesizer import (
    PositionSynthesizer,
    generate_random_position,
)

__all__ = [
    # Settings
    "PIECE_COUNT_RANGES",
    "GameSettings",
    "difficulty_label",
    "total_piece_range",
    # Boards
    "BoardEditor",
    "PositionSynthesizer",
    "generate_random_position",
    # Scoring
    "Mismatch",
    "ScoreReport",
    "accuracy",
    "diff",
    "score",
    "squares_match",
    # Session
    "TrainerPhase",
    "TrainerSession",
]
