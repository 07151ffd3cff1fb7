"""Game module for Tetris RL.

Exports the core game engine and supporting classes:
- Piece catalog: TetrominoType, shape_of, rotate, ActivePiece
- GameGrid: Board representation, collision checks, locking and line clearing
- ScoringRules: Score, level and gravity progression
- TetrisGame: Session state machine, plus the new_session/handle_input/tick facade
"""

from .grid import GameGrid, clear_full_rows, is_legal, lock
from .pieces import ActivePiece, TetrominoType, piece_cells, rotate, rotated_shape, shape_of
from .rules import ScoringRules, gravity_interval_seconds, level_for_lines, score_delta
from .core import (
    MOVEMENT_ACTIONS,
    Action,
    GameConfig,
    GameSnapshot,
    Phase,
    StepResult,
    TetrisGame,
    handle_input,
    new_session,
    tick,
)

__all__ = [
    "GameGrid",
    "is_legal",
    "lock",
    "clear_full_rows",
    "ActivePiece",
    "TetrominoType",
    "shape_of",
    "rotate",
    "rotated_shape",
    "piece_cells",
    "ScoringRules",
    "score_delta",
    "level_for_lines",
    "gravity_interval_seconds",
    "Action",
    "MOVEMENT_ACTIONS",
    "GameConfig",
    "GameSnapshot",
    "Phase",
    "StepResult",
    "TetrisGame",
    "new_session",
    "handle_input",
    "tick",
]
