"""Analysis board: rules-engine seam and move-history navigation.

Quick start::

    from blindfold.analysis import BoardStateManager

    manager = BoardStateManager()
    manager.make_move("e2", "e4")
    manager.first_move()
"""

from blindfold.analysis.history import (
    BoardStateManager,
    HistoryReplayError,
    MoveHistoryEntry,
)
from blindfold.analysis.rules import (
    IllegalMoveError,
    MoveRequest,
    PythonChessRules,
    RulesEngine,
    validate_board,
)

__all__ = [
    "BoardStateManager",
    "HistoryReplayError",
    "IllegalMoveError",
    "MoveHistoryEntry",
    "MoveRequest",
    "PythonChessRules",
    "RulesEngine",
    "validate_board",
]
