from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 500, 800)
    lines_per_level: int = 10
    base_tick_ms: int = 600
    tick_step_ms: int = 100
    min_tick_ms: int = 50

    def score_for_lines(self, lines: int, level: int = 1) -> int:
        if lines <= 0:
            return 0
        if 1 <= lines <= 4:
            return self.line_clear_scores[lines - 1] * level
        # Four-cell pieces never clear more than 4; keep the curve increasing anyway
        return (self.line_clear_scores[-1] + (lines - 4) * 400) * level

    def level_for_lines(self, lines_cleared: int) -> int:
        return 1 + lines_cleared // self.lines_per_level

    def tick_interval_ms(self, level: int) -> int:
        return max(self.min_tick_ms, self.base_tick_ms - self.tick_step_ms * (level - 1))
