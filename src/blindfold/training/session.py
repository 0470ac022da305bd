"""TrainerSession — memorize / reconstruct / result flow on the Qt event loop."""

from __future__ import annotations

import logging
from enum import IntEnum, auto
from functools import partial

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from blindfold.core.board import Board, SquareRef
from blindfold.core.notation.fen import board_from_fen
from blindfold.core.piece import Piece, PieceIdFactory
from blindfold.training.editor import BoardEditor
from blindfold.training.scoring import ScoreReport, score
from blindfold.training.settings import GameSettings
from blindfold.training.synthesizer import PositionSynthesizer

_LOGGER = logging.getLogger(__name__)


class TrainerPhase(IntEnum):
    """Finite-state-machine states for one exercise."""

    IDLE = auto()
    MEMORIZE = auto()
    RECONSTRUCT = auto()
    RESULT = auto()


class TrainerSession(QObject):
    """Owns the original board, the user's reconstruction and the countdown.

    The countdown is a one-second repeating ``QTimer``. Every phase change
    replaces the timer and bumps a phase serial; a tick only applies if it
    carries the serial of the phase that scheduled it.
    """

    phase_changed = pyqtSignal(int)  # TrainerPhase
    time_changed = pyqtSignal(int)  # seconds left
    finished = pyqtSignal(object)  # ScoreReport

    TICK_INTERVAL_MS = 1000
    ADD_TIME_SECONDS = 10

    def __init__(
        self,
        settings: GameSettings | None = None,
        synthesizer: PositionSynthesizer | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._settings = settings if settings is not None else GameSettings()
        self._ids = PieceIdFactory()
        self._synthesizer = (
            synthesizer if synthesizer is not None else PositionSynthesizer(ids=self._ids)
        )
        self._phase = TrainerPhase.IDLE
        self._phase_serial = 0
        self._time_left = 0
        self._original = Board()
        self._editor = BoardEditor(ids=self._ids)
        self._report: ScoreReport | None = None
        self._timer: QTimer | None = None

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def phase(self) -> TrainerPhase:
        return self._phase

    @property
    def phase_serial(self) -> int:
        return self._phase_serial

    @property
    def time_left(self) -> int:
        return self._time_left

    @property
    def original_board(self) -> Board:
        return self._original

    @property
    def attempt_board(self) -> Board:
        return self._editor.board

    @property
    def editor(self) -> BoardEditor:
        return self._editor

    @property
    def report(self) -> ScoreReport | None:
        return self._report

    @property
    def is_ticking(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    # ── Flow ─────────────────────────────────────────────────────────────

    def start(self) -> None:
        """Begin a new exercise.

        A malformed ``settings.fen`` raises :class:`FenError` before any
        state changes.
        """
        if self._settings.fen:
            original = board_from_fen(self._settings.fen, self._ids)
        else:
            original = self._synthesizer.generate(self._settings.difficulty)

        self._original = original
        self._editor = BoardEditor(ids=self._ids)
        self._report = None
        self._enter_phase(TrainerPhase.MEMORIZE, self._settings.memorize_time)

    def restart(self) -> None:
        self.start()

    def ready(self) -> bool:
        """Skip what is left of the memorize phase."""
        if self._phase != TrainerPhase.MEMORIZE:
            return False
        self._enter_phase(TrainerPhase.RECONSTRUCT, self._settings.reconstruct_time)
        return True

    def add_time(self, seconds: int = ADD_TIME_SECONDS) -> bool:
        """Extend the countdown, restarting it if it had run out."""
        if self._phase not in (TrainerPhase.MEMORIZE, TrainerPhase.RECONSTRUCT):
            return False
        self._time_left += seconds
        self.time_changed.emit(self._time_left)
        if self._time_left > 0 and not self.is_ticking:
            self._start_timer()
        return True

    def submit(self) -> ScoreReport | None:
        """Score the reconstruction. Only valid while reconstructing."""
        if self._phase != TrainerPhase.RECONSTRUCT:
            return None
        report = score(self._original, self._editor.board)
        self._report = report
        self._enter_phase(TrainerPhase.RESULT, 0)
        _LOGGER.info(
            "Exercise scored %d%% (%d mismatches)",
            report.accuracy,
            len(report.mismatches),
        )
        self.finished.emit(report)
        return report

    def stop(self) -> None:
        """Cancel any pending tick, e.g. when the owning view goes away."""
        self._phase_serial += 1
        self._stop_timer()

    def tick(self) -> None:
        """Advance the countdown by one second for the current phase."""
        self._on_tick(self._phase_serial)

    # ── Reconstruction input ─────────────────────────────────────────────

    def select_piece(self, piece: Piece | None) -> bool:
        if self._phase != TrainerPhase.RECONSTRUCT:
            return False
        self._editor.select_piece(piece)
        return True

    def click(self, ref: SquareRef) -> bool:
        if self._phase != TrainerPhase.RECONSTRUCT:
            return False
        self._editor.click(ref)
        return True

    def drag(self, from_ref: SquareRef, to_ref: SquareRef) -> bool:
        if self._phase != TrainerPhase.RECONSTRUCT:
            return False
        return self._editor.drag(from_ref, to_ref)

    # ── Internal ─────────────────────────────────────────────────────────

    def _enter_phase(self, phase: TrainerPhase, seconds: int) -> None:
        self._stop_timer()
        self._phase_serial += 1
        self._phase = phase
        self._time_left = seconds
        _LOGGER.info("Trainer phase -> %s (%ds)", phase.name, seconds)
        self.phase_changed.emit(int(phase))
        self.time_changed.emit(seconds)
        if seconds > 0:
            self._start_timer()

    def _start_timer(self) -> None:
        timer = QTimer(self)
        timer.setInterval(self.TICK_INTERVAL_MS)
        timer.timeout.connect(partial(self._on_tick, self._phase_serial))
        timer.start()
        self._timer = timer

    def _stop_timer(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer.deleteLater()
        self._timer = None

    def _on_tick(self, serial: int) -> None:
        if serial != self._phase_serial:
            _LOGGER.debug("Dropped stale tick from phase serial %d", serial)
            return
        if self._phase not in (TrainerPhase.MEMORIZE, TrainerPhase.RECONSTRUCT):
            return
        if self._time_left == 0:
            return

        self._time_left -= 1
        self.time_changed.emit(self._time_left)
        if self._time_left > 0:
            return

        if self._phase == TrainerPhase.MEMORIZE:
            self._enter_phase(
                TrainerPhase.RECONSTRUCT, self._settings.reconstruct_time
            )
        else:
            # Editing stays open until the user submits.
            self._stop_timer()
            _LOGGER.info("Reconstruct time is up")
