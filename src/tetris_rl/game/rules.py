from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int, int] = (0, 40, 100, 300, 1200)
    lines_per_level: int = 10
    base_gravity_seconds: float = 0.8
    gravity_decay: float = 0.85
    min_gravity_seconds: float = 0.05

    def score_for_lines(self, lines: int, level: int) -> int:
        if not 0 <= lines < len(self.line_clear_scores):
            raise ValueError(f"cannot score {lines} lines in one clear")
        return self.line_clear_scores[lines] * level

    def level_for_lines(self, total_lines: int) -> int:
        return 1 + total_lines // self.lines_per_level

    def gravity_interval(self, level: int) -> float:
        return max(self.min_gravity_seconds, self.base_gravity_seconds * self.gravity_decay ** (level - 1))


DEFAULT_RULES = ScoringRules()


def score_delta(lines_cleared: int, level: int) -> int:
    return DEFAULT_RULES.score_for_lines(lines_cleared, level)


def level_for_lines(total_lines: int) -> int:
    return DEFAULT_RULES.level_for_lines(total_lines)


def gravity_interval_seconds(level: int) -> float:
    return DEFAULT_RULES.gravity_interval(level)
