from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Optional

import numpy as np

from .grid import GameGrid
from .pieces import ActivePiece, TetrominoType
from .rules import ScoringRules


class Action(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    ROTATE_CW = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    # Consumed by the driving loop, never change the game state
    TOGGLE_PAUSE = 5
    QUIT = 6


MOVEMENT_ACTIONS = (
    Action.MOVE_LEFT,
    Action.MOVE_RIGHT,
    Action.ROTATE_CW,
    Action.SOFT_DROP,
    Action.HARD_DROP,
)


class Phase(Enum):
    SPAWNING = "spawning"
    ACTIVE = "active"
    LOCKING = "locking"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    spawn_y: int = -2

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"board size must be positive, got {self.width}x{self.height}")


@dataclass(frozen=True)
class StepResult:
    """Outcome of one state transition.

    ``resets_gravity`` tells the driving loop to restart its fall clock: it is
    set whenever the piece fell a row or locked. ``topped_out`` marks a lock
    that left part of the piece above the board; those cells are dropped and
    play goes on.
    """

    moved: bool = False
    locked: bool = False
    lines_cleared: int = 0
    score_delta: int = 0
    resets_gravity: bool = False
    topped_out: bool = False


@dataclass(frozen=True)
class GameSnapshot:
    board: np.ndarray
    active: Optional[ActivePiece]
    next_kind: TetrominoType
    score: int
    level: int
    lines_cleared: int
    game_over: bool
    gravity_interval: float


class TetrisGame:
    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.score = 0
        self.lines_cleared_total = 0
        self.phase = Phase.SPAWNING
        self.current_piece: Optional[ActivePiece] = None
        self.next_kind = TetrominoType.I
        self.reset()

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.grid.reset()
        self.score = 0
        self.lines_cleared_total = 0
        self.current_piece = None
        self.next_kind = self._random_kind()
        self._spawn_piece()

    @property
    def level(self) -> int:
        return self.rules.level_for_lines(self.lines_cleared_total)

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    @property
    def gravity_interval(self) -> float:
        return self.rules.gravity_interval(self.level)

    def _random_kind(self) -> TetrominoType:
        return self.rng.choice(list(TetrominoType))

    def _spawn_piece(self) -> None:
        self.phase = Phase.SPAWNING
        kind = self.next_kind
        self.next_kind = self._random_kind()
        self.current_piece = ActivePiece(
            kind=kind,
            rotation=0,
            x=self.grid.width // 2 - 2,
            y=self.config.spawn_y,
        )
        # Immediate collision check: if overlaps, game over
        if self.grid.fits(self.current_piece):
            self.phase = Phase.ACTIVE
        else:
            self.phase = Phase.GAME_OVER

    def _try(self, candidate: ActivePiece) -> bool:
        if self.grid.fits(candidate):
            self.current_piece = candidate
            return True
        return False

    def _lock_piece(self) -> StepResult:
        assert self.current_piece is not None
        self.phase = Phase.LOCKING
        level = self.level
        topped_out = any(y < 0 for _, y in self.current_piece.cells())
        self.grid.lock(self.current_piece)
        lines = self.grid.clear_full_rows()
        gained = self.rules.score_for_lines(lines, level)
        self.lines_cleared_total += lines
        self.score += gained
        self._spawn_piece()
        return StepResult(
            locked=True,
            lines_cleared=lines,
            score_delta=gained,
            resets_gravity=True,
            topped_out=topped_out,
        )

    def _fall(self) -> StepResult:
        assert self.current_piece is not None
        if self._try(self.current_piece.moved(0, 1)):
            return StepResult(moved=True, resets_gravity=True)
        return self._lock_piece()

    def hard_drop(self) -> StepResult:
        if self.game_over or self.current_piece is None:
            return StepResult()
        # Drop until collision
        dropped = False
        while self._try(self.current_piece.moved(0, 1)):
            dropped = True
        return replace(self._lock_piece(), moved=dropped)

    def step(self, action: Action) -> StepResult:
        if self.game_over or self.current_piece is None:
            return StepResult()

        action = Action(action)
        if action == Action.MOVE_LEFT:
            return StepResult(moved=self._try(self.current_piece.moved(-1, 0)))
        if action == Action.MOVE_RIGHT:
            return StepResult(moved=self._try(self.current_piece.moved(1, 0)))
        if action == Action.ROTATE_CW:
            return StepResult(moved=self._try(self.current_piece.rotated(1)))
        if action == Action.SOFT_DROP:
            return self._fall()
        if action == Action.HARD_DROP:
            return self.hard_drop()
        return StepResult()

    def tick(self, elapsed_seconds: float) -> StepResult:
        """Apply one gravity fall if ``elapsed_seconds`` since the last fall reached the interval."""
        if self.game_over or self.current_piece is None:
            return StepResult()
        if elapsed_seconds < self.gravity_interval:
            return StepResult()
        return self._fall()

    def snapshot(self) -> GameSnapshot:
        board = self.grid.clone_state()
        board.setflags(write=False)
        return GameSnapshot(
            board=board,
            active=self.current_piece,
            next_kind=self.next_kind,
            score=self.score,
            level=self.level,
            lines_cleared=self.lines_cleared_total,
            game_over=self.game_over,
            gravity_interval=self.gravity_interval,
        )

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.grid.clone_state()
        if self.current_piece is not None and not self.game_over:
            for x, y in self.current_piece.cells():
                if self.grid.is_inside(x, y):
                    # Use negative to indicate falling piece overlay
                    state[y, x] = -int(self.current_piece.kind)
        return state


def new_session(
    width: int = 10,
    height: int = 20,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    rules: Optional[ScoringRules] = None,
) -> TetrisGame:
    config = GameConfig(width=width, height=height, random_seed=seed)
    return TetrisGame(config, rules=rules, rng=rng)


def handle_input(session: TetrisGame, action: Action) -> TetrisGame:
    session.step(action)
    return session


def tick(session: TetrisGame, elapsed_seconds: float) -> TetrisGame:
    session.tick(elapsed_seconds)
    return session
