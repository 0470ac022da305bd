"""Move history with random-access navigation for the analysis board."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any

from blindfold.analysis.rules import (
    IllegalMoveError,
    MoveRequest,
    PythonChessRules,
    RulesEngine,
)
from blindfold.core.enums import PieceType
from blindfold.core.notation.fen import STARTING_FEN, FenError
from blindfold.core.notation.pgn import (
    build_pgn,
    first_ply_of,
    parse_pgn_headers,
    parse_pgn_moves,
)

_LOGGER = logging.getLogger(__name__)


class HistoryReplayError(RuntimeError):
    """A FEN stored in the history could not be turned back into a position.

    History FENs come from the rules engine itself, so this points at a
    defect rather than bad input.
    """


@dataclass(frozen=True, slots=True)
class MoveHistoryEntry:
    """A single entry in the move history."""

    ply: int
    san: str
    fen: str
    from_square: str
    to_square: str
    timestamp: float = field(default_factory=time.time, compare=False)


class BoardStateManager:
    """Current position, the move list and a cursor into it.

    ``current_move_index`` is ``-1`` at the starting position, otherwise the
    index of the last applied entry. Making a move from a past point drops
    everything after the cursor first.
    """

    __slots__ = ("_rules", "_start_fen", "_position", "_history", "_current_index")

    def __init__(
        self, start_fen: str | None = None, rules: RulesEngine | None = None
    ) -> None:
        self._rules: RulesEngine = rules if rules is not None else PythonChessRules()
        self._start_fen = STARTING_FEN
        self._position: Any = None
        self._history: list[MoveHistoryEntry] = []
        self._current_index = -1
        self.reset(start_fen)

    @classmethod
    def from_pgn(cls, text: str, rules: RulesEngine | None = None) -> BoardStateManager:
        """Load a game; honours ``SetUp``/``FEN`` headers.

        Raises :class:`IllegalMoveError` on the first unplayable move.
        """
        headers = parse_pgn_headers(text)
        start_fen = None
        if headers.get("SetUp") == "1" and "FEN" in headers:
            start_fen = headers["FEN"]
        manager = cls(start_fen, rules)
        sans = parse_pgn_moves(text)
        applied = manager.play_sans(sans)
        if applied != len(sans):
            raise IllegalMoveError(f"Illegal move in PGN: {sans[applied]}")
        return manager

    # ── Lifecycle ────────────────────────────────────────────────────────

    def reset(self, fen: str | None = None) -> None:
        """Start over from *fen* (default: the standard initial position).

        Raises :class:`FenError` for an unusable FEN; the previous state is
        kept in that case.
        """
        start_fen = fen.strip() if fen else STARTING_FEN
        position = self._rules.parse_position(start_fen)
        self._start_fen = start_fen
        self._position = position
        self._history = []
        self._current_index = -1

    # ── Moves ────────────────────────────────────────────────────────────

    def make_move(
        self,
        from_square: str,
        to_square: str,
        promotion: PieceType | None = None,
    ) -> MoveHistoryEntry | None:
        """Play a move from the current cursor.

        Returns the new entry, or ``None`` if the move is illegal (state is
        left as it was).
        """
        try:
            destinations = self._rules.legal_destinations(self._position, from_square)
        except ValueError:
            _LOGGER.debug("Rejected move from malformed square %r", from_square)
            return None
        if to_square not in destinations:
            _LOGGER.debug("Rejected illegal move %s%s", from_square, to_square)
            return None

        request = MoveRequest(from_square, to_square, promotion)
        try:
            san = self._rules.to_san(self._position, request)
            position = self._rules.apply_move(self._position, request)
        except IllegalMoveError as exc:
            _LOGGER.debug("Rejected move: %s", exc)
            return None

        del self._history[self._current_index + 1 :]
        entry = MoveHistoryEntry(
            ply=len(self._history),
            san=san,
            fen=self._rules.serialize(position),
            from_square=from_square,
            to_square=to_square,
        )
        self._history.append(entry)
        self._position = position
        self._current_index = entry.ply
        return entry

    def play_san(self, san: str) -> MoveHistoryEntry | None:
        try:
            request = self._rules.parse_san(self._position, san)
        except IllegalMoveError:
            _LOGGER.debug("Rejected SAN %r", san)
            return None
        return self.make_move(request.from_square, request.to_square, request.promotion)

    def play_sans(self, sans: list[str]) -> int:
        """Play SAN moves in order; stops at the first one that fails.

        Returns how many were applied.
        """
        for count, san in enumerate(sans):
            if self.play_san(san) is None:
                return count
        return len(sans)

    def legal_moves(self, from_square: str) -> list[str]:
        """Sorted destination squares for the piece on *from_square*."""
        try:
            return sorted(self._rules.legal_destinations(self._position, from_square))
        except ValueError:
            return []

    # ── Navigation ───────────────────────────────────────────────────────

    def go_to_move(self, index: int) -> bool:
        """Move the cursor to *index*; out of range is a no-op (``False``)."""
        if not (-1 <= index < len(self._history)):
            return False

        fen = self._fen_at(index)
        try:
            position = self._rules.parse_position(fen)
        except FenError as exc:
            _LOGGER.error("History replay failed at ply %d (%s): %s", index, fen, exc)
            raise HistoryReplayError(
                f"Cannot rebuild position at ply {index}: {fen!r}"
            ) from exc

        self._position = position
        self._current_index = index
        return True

    def first_move(self) -> bool:
        return self.go_to_move(-1)

    def last_move(self) -> bool:
        return self.go_to_move(len(self._history) - 1)

    def next_move(self) -> bool:
        return self.go_to_move(self._current_index + 1)

    def previous_move(self) -> bool:
        return self.go_to_move(self._current_index - 1)

    @property
    def has_next(self) -> bool:
        return self._current_index < len(self._history) - 1

    @property
    def has_previous(self) -> bool:
        return self._current_index >= 0

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def position(self) -> Any:
        """Rules-engine position at the cursor."""
        return self._position

    @property
    def start_fen(self) -> str:
        return self._start_fen

    @property
    def current_fen(self) -> str:
        return self._fen_at(self._current_index)

    @property
    def current_move_index(self) -> int:
        return self._current_index

    @property
    def history(self) -> tuple[MoveHistoryEntry, ...]:
        return tuple(self._history)

    @property
    def sans(self) -> list[str]:
        return [entry.san for entry in self._history]

    @property
    def last_entry(self) -> MoveHistoryEntry | None:
        """Entry the cursor sits on, for last-move highlighting."""
        if self._current_index < 0:
            return None
        return self._history[self._current_index]

    def is_check(self) -> bool:
        return self._rules.is_check(self._position)

    def is_checkmate(self) -> bool:
        return self._rules.is_checkmate(self._position)

    def is_stalemate(self) -> bool:
        return self._rules.is_stalemate(self._position)

    def export_pgn(self, headers: dict[str, str] | None = None) -> str:
        """The whole mainline as PGN, regardless of the cursor."""
        all_headers = dict(headers or {})
        if self._start_fen != STARTING_FEN:
            all_headers.setdefault("SetUp", "1")
            all_headers.setdefault("FEN", self._start_fen)

        result_token = None
        if self._history:
            final = self._rules.parse_position(self._history[-1].fen)
            result_token = self._rules.result_token(final)
            if all_headers:
                all_headers.setdefault("Result", result_token)
        return build_pgn(
            all_headers,
            self.sans,
            result_token,
            first_ply=first_ply_of(self._start_fen),
        )

    # ── Internal ─────────────────────────────────────────────────────────

    def _fen_at(self, index: int) -> str:
        return self._start_fen if index == -1 else self._history[index].fen
