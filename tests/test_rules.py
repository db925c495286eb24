"""Tests for the special-rule engine."""

import numpy as np
import pytest

from gamemaster.session import GameMode, SpecialRule, SpecialRuleEngine
from gamemaster.session.rules import MAX_THRESHOLD, POST_NOTICE_RULES, RULE_DESCRIPTIONS, format_notice


class ScriptedRng:
    """Stands in for a Generator: replays uniform draws, integers default to 0."""

    def __init__(self, uniforms, integers=()):
        self.uniforms = list(uniforms)
        self.ints = list(integers)

    def uniform(self, low, high):
        value = self.uniforms.pop(0)
        assert low <= value <= high
        return value

    def integers(self, n):
        return self.ints.pop(0) if self.ints else 0


def test_game_mode_maps_to_rule():
    assert GameMode.CLASSIC.special_rule is None
    assert GameMode.CHAOS.special_rule is None
    assert GameMode.SWAP_MOVE.special_rule is SpecialRule.SWAP_MOVE
    assert POST_NOTICE_RULES == {SpecialRule.SWAP_MOVE}


def test_every_rule_has_ten_descriptions():
    for rule in SpecialRule:
        assert len(RULE_DESCRIPTIONS[rule]) == 10


def test_classic_never_rolls():
    engine = SpecialRuleEngine(GameMode.CLASSIC, np.random.default_rng(0))
    assert all(engine.roll(total, match_point=True) is None for total in range(50))


def test_turn_based_waits_for_three_actions():
    engine = SpecialRuleEngine(GameMode.SKIP_TURN, ScriptedRng([14.0, 0.0]))
    assert engine.roll(2, turn_based=True) is None
    assert engine.roll(3, turn_based=True) is SpecialRule.SKIP_TURN


def test_threshold_factors():
    def threshold(mode, rule):
        engine = SpecialRuleEngine(mode, ScriptedRng([13.0]))
        return engine.threshold(rule, total_actions=4)

    assert threshold(GameMode.SKIP_TURN, SpecialRule.SKIP_TURN) == pytest.approx(17.0)
    assert threshold(GameMode.CHAOS, SpecialRule.SKIP_TURN) == pytest.approx(34.0)
    assert threshold(GameMode.OVERRULE, SpecialRule.OVERRULE) == pytest.approx(7.0)

    engine = SpecialRuleEngine(GameMode.SKIP_TURN, ScriptedRng([13.0]))
    assert engine.threshold(SpecialRule.SKIP_TURN, 4, match_point=True) == pytest.approx(34.0)


def test_biased_overrule_depends_on_previous_mover():
    engine = SpecialRuleEngine(GameMode.OVERRULE, ScriptedRng([13.0, 13.0]), computer_biased=True)
    assert engine.threshold(SpecialRule.OVERRULE, 0) == pytest.approx(63.0)
    assert engine.threshold(SpecialRule.OVERRULE, 0, previous_mover_is_agent=True) == pytest.approx(-37.0)


def test_repeated_rule_decays_threshold():
    engine = SpecialRuleEngine(GameMode.JUMBLE, ScriptedRng([13.0, 0.0, 13.0, 0.0, 13.0]))
    assert engine.roll(0) is SpecialRule.JUMBLE
    assert engine.state.repeat_counter == 1
    engine.state.advance()

    assert engine.roll(0) is SpecialRule.JUMBLE
    assert engine.state.repeat_counter == 2
    engine.state.advance()

    assert engine.threshold(SpecialRule.JUMBLE, 0) == pytest.approx(13.0 - 20.0)


def test_roll_respects_threshold_and_cap():
    fires = SpecialRuleEngine(GameMode.SKIP_TURN, ScriptedRng([14.0, 14.0]))
    assert fires.roll(0) is SpecialRule.SKIP_TURN

    misses = SpecialRuleEngine(GameMode.SKIP_TURN, ScriptedRng([14.0, 14.5]))
    assert misses.roll(0) is None
    assert misses.state.active is None
    assert misses.state.repeat_counter == 0

    # 2 * 2 * (14 + 40) is far above the cap; the cap decides.
    capped = SpecialRuleEngine(GameMode.CHAOS, ScriptedRng([14.0, MAX_THRESHOLD + 1]))
    assert capped.roll(40, match_point=True) is None


def test_chaos_skips_team_rules_without_teams():
    engine = SpecialRuleEngine(GameMode.CHAOS, np.random.default_rng(1))
    assert SpecialRule.SWAP_TEAMS not in engine.candidates
    assert {engine.pick_candidate() for _ in range(200)} == set(engine.candidates)

    with_teams = SpecialRuleEngine(GameMode.CHAOS, np.random.default_rng(1), teams_enabled=True)
    assert SpecialRule.SWAP_TEAMS in with_teams.candidates


def test_notice_format():
    assert format_notice(SpecialRule.JUMBLE, "Shuffle!") == "[GAME MASTER]: Shuffle!"
    assert format_notice(SpecialRule.JUMBLE, "Shuffle!", chaos=True) == "[GAME MASTER (Jumble)]: Shuffle!"

    engine = SpecialRuleEngine(GameMode.SKIP_TURN, np.random.default_rng(0))
    assert engine.notice() is None
    engine.state.active = SpecialRule.SKIP_TURN
    assert engine.notice().split(": ", 1)[1] in RULE_DESCRIPTIONS[SpecialRule.SKIP_TURN]
