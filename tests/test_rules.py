from __future__ import annotations

from swiftris.game import ScoringRules


def test_score_increases_with_simultaneous_lines():
    rules = ScoringRules()
    scores = [rules.score_for_lines(n) for n in range(0, 5)]
    assert scores[0] == 0
    assert scores == sorted(scores)
    assert len(set(scores)) == 5


def test_tetris_beats_four_singles():
    rules = ScoringRules()
    assert rules.score_for_lines(4) > 4 * rules.score_for_lines(1)


def test_score_scales_with_level():
    rules = ScoringRules()
    assert rules.score_for_lines(2, level=3) == 3 * rules.score_for_lines(2, level=1)


def test_level_for_lines():
    rules = ScoringRules()
    assert rules.level_for_lines(0) == 1
    assert rules.level_for_lines(9) == 1
    assert rules.level_for_lines(10) == 2
    assert rules.level_for_lines(25) == 3


def test_tick_interval_shrinks_to_floor():
    rules = ScoringRules()
    assert rules.tick_interval_ms(1) == 600
    assert rules.tick_interval_ms(2) == 500
    assert rules.tick_interval_ms(6) == 100
    assert rules.tick_interval_ms(7) == 50
    assert rules.tick_interval_ms(40) == 50
