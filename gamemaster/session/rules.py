"""
Special rules: probabilistic per-turn modifiers chosen by the game master.

The engine only decides *whether* and *which* rule is active for a turn;
applying its effect (turn order, shuffles, team swaps, overrules) is the
session's job.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)


class SpecialRule(str, Enum):
    OVERRULE = "Overrule"
    JUMBLE = "Jumble"
    SWAP_MOVE = "Swap Move"
    SWAP_TEAMS = "Swap Teams"
    SKIP_TURN = "Skip Turn"


class GameMode(str, Enum):
    CLASSIC = "Classic"
    CHAOS = "Chaos"
    OVERRULE = "Overrule"
    JUMBLE = "Jumble"
    SWAP_MOVE = "Swap Move"
    SWAP_TEAMS = "Swap Teams"
    SKIP_TURN = "Skip Turn"

    @property
    def special_rule(self) -> Optional[SpecialRule]:
        """The single rule this mode injects (None for Classic and Chaos)."""
        if self in (GameMode.CLASSIC, GameMode.CHAOS):
            return None
        return SpecialRule(self.value)


# Announced after the actions are resolved rather than before collection.
POST_NOTICE_RULES = frozenset({SpecialRule.SWAP_MOVE})
# Only meaningful when the session has team labels.
TEAM_RULES = frozenset({SpecialRule.SWAP_TEAMS})

BASE_THRESHOLD_RANGE = (12.0, 15.0)
MAX_THRESHOLD = 75.0
OVERRULE_BIAS = -10.0
BIASED_OVERRULE_BIAS = 50.0
REPEAT_DECAY = 10.0
CHAOS_MULTIPLIER = 2.0
MATCH_POINT_MULTIPLIER = 2.0

RULE_DESCRIPTIONS: Dict[SpecialRule, Tuple[str, ...]] = {
    SpecialRule.OVERRULE: (
        "All buttons are yours! You can overrule any button. Go wild!",
        "Feeling powerful? Every button is at your command. Overrule away!",
        "Ha! Now you can overrule any button. Use your power wisely!",
        "It's your lucky day! All buttons are enabled. Overrule them all!",
        "Absolute power! You may overrule any button you wish. Enjoy!",
        "Every button bows to you! Overrule at will. The game is yours!",
        "Command central! You have the power to overrule any button!",
        "Mwahaha! All buttons are active. Overrule to your heart's content!",
        "No restrictions! Every button is yours to overrule. Have fun!",
        "Unlimited power! You can overrule any button. Go ahead, play master!",
    ),
    SpecialRule.JUMBLE: (
        "Time for some chaos! We're jumbling things around. Good luck!",
        "Things are about to get interesting! We're mixing it all up!",
        "Hold tight! We're jumbling the components. Try to keep track!",
        "Ready for a shake-up? Things are moving around. Stay sharp!",
        "Let's make it fun! We're jumbling everything. Keep an eye out!",
        "Chaos is here! We're moving things around. Good luck finding your way!",
        "Jumble time! Everything's on the move. Can you keep up?",
        "Mix and match! We're jumbling things up. Let's see how you handle it!",
        "Expect the unexpected! Things are getting jumbled. Stay alert!",
        "Mwahaha! We're moving things around. Let's see if you can keep track!",
    ),
    SpecialRule.SWAP_MOVE: (
        "Gotcha! Didn't see that coming, did you?",
        "Surprise! Bet you didn't plan for this!",
        "Ha! Just when you thought you had it figured out.",
        "Think you were clever? Think again!",
        "Oops! Hope you're ready for a change!",
        "Caught you off guard, didn't I?",
        "Bet you didn't expect this!",
        "Mwahaha! Let's see how well you adapt now!",
        "Thought you had the perfect move? Think again!",
        "Just when you had it all planned out...",
    ),
    SpecialRule.SWAP_TEAMS: (
        "Let's spice things up! Time for a team swap! Who's ready for a twist?",
        "Surprise, surprise! Teams are switching sides this round. Enjoy the chaos!",
        "Ha! Didn't see this coming, did you? Teams will swap places. Have fun!",
        "Guess what? It's swap time! Teams will trade sides. Let's see how you handle it!",
        "Feeling dizzy yet? Teams will switch sides this round. Good luck keeping up!",
        "Oh, the fun we'll have! Teams are swapping sides. Try not to get too confused!",
        "Plot twist! Teams will change places this round. Who's up for a challenge?",
        "I've got a trick up my sleeve! Teams are switching sides. Let the games continue!",
        "Hold onto your hats! Teams are swapping places this round. Enjoy the ride!",
        "Mwahaha! Teams will swap sides this round. Let's see how well you adapt!",
    ),
    SpecialRule.SKIP_TURN: (
        "Life's unfair, isn't it? Skip your turn and let the others play!",
        "Tough luck! You have to skip your turn. Better luck next time!",
        "Ha! You're sitting this one out. Skip your turn and watch the fun!",
        "Oops! Looks like you have to skip your turn. Enjoy the break!",
        "No turn for you! Skip this round and let the others have a go!",
        "Sorry, not sorry! You have to skip your turn. Watch and learn!",
        "Better luck next time! You're skipping this turn. Sit tight!",
        "Oh no! You've got to skip your turn. Cheer on your teammates!",
        "Tough break! Skip your turn and see how the others do!",
        "Mwahaha! You have to skip your turn. Let's see what happens next!",
    ),
}


def format_notice(rule: SpecialRule, description: str, chaos: bool = False) -> str:
    tag = "GAME MASTER"
    if chaos:
        tag += f" ({rule.value})"
    return f"[{tag}]: {description}"


@dataclass
class SpecialRuleState:
    active: Optional[SpecialRule] = None
    previous: Optional[SpecialRule] = None
    repeat_counter: int = 0

    def advance(self) -> None:
        """Close the turn: the active rule becomes the previous one."""
        self.previous = self.active

    def reset(self) -> None:
        self.active = None
        self.previous = None
        self.repeat_counter = 0


class SpecialRuleEngine:
    """
    Weighted-probability game master.

    Each eligible turn a candidate rule is picked (uniformly in Chaos, the
    configured rule otherwise) and fires iff
    ``min(threshold, MAX_THRESHOLD) >= uniform(0, 100)``.
    """

    def __init__(
        self,
        mode: GameMode,
        rng: Optional[np.random.Generator] = None,
        *,
        computer_biased: bool = False,
        teams_enabled: bool = False,
    ) -> None:
        self.mode = GameMode(mode)
        self.rng = rng or np.random.default_rng()
        self.computer_biased = computer_biased
        self.state = SpecialRuleState()
        self.candidates: Tuple[SpecialRule, ...] = tuple(
            rule for rule in SpecialRule if teams_enabled or rule not in TEAM_RULES
        )

    @property
    def is_chaos(self) -> bool:
        return self.mode is GameMode.CHAOS

    def allows_rules(self, total_actions: int, turn_based: bool) -> bool:
        if self.mode is GameMode.CLASSIC:
            return False
        # Turn-based boards need a few marks before a rule means anything.
        return total_actions > 2 if turn_based else True

    def pick_candidate(self) -> SpecialRule:
        if self.is_chaos:
            return self.candidates[int(self.rng.integers(len(self.candidates)))]
        rule = self.mode.special_rule
        assert rule is not None
        return rule

    def threshold(
        self,
        candidate: SpecialRule,
        total_actions: int,
        *,
        match_point: bool = False,
        previous_mover_is_agent: bool = False,
    ) -> float:
        low, high = BASE_THRESHOLD_RANGE
        value = float(self.rng.uniform(low, high)) + total_actions

        if self.is_chaos:
            value *= CHAOS_MULTIPLIER
        if match_point:
            value *= MATCH_POINT_MULTIPLIER
        if candidate is SpecialRule.OVERRULE:
            if self.computer_biased:
                value += -BIASED_OVERRULE_BIAS if previous_mover_is_agent else BIASED_OVERRULE_BIAS
            else:
                value += OVERRULE_BIAS
        if self.state.previous is not None:
            value -= REPEAT_DECAY * self.state.repeat_counter
        return value

    def roll(
        self,
        total_actions: int,
        *,
        turn_based: bool = False,
        match_point: bool = False,
        previous_mover_is_agent: bool = False,
    ) -> Optional[SpecialRule]:
        """Decide the rule for this turn and record it as the active one."""
        rule: Optional[SpecialRule] = None

        if self.allows_rules(total_actions, turn_based):
            candidate = self.pick_candidate()
            threshold = self.threshold(
                candidate,
                total_actions,
                match_point=match_point,
                previous_mover_is_agent=previous_mover_is_agent,
            )
            if min(threshold, MAX_THRESHOLD) >= float(self.rng.uniform(0.0, 100.0)):
                rule = candidate

        if rule is None:
            self.state.repeat_counter = 0
        elif rule is self.state.previous:
            self.state.repeat_counter += 1
        else:
            self.state.repeat_counter = 1

        self.state.active = rule
        if rule is not None:
            logger.info("Special rule %s has been chosen for this turn", rule.value)
        return rule

    def describe(self, rule: SpecialRule) -> str:
        options = RULE_DESCRIPTIONS[rule]
        return options[int(self.rng.integers(len(options)))]

    def notice(self) -> Optional[str]:
        rule = self.state.active
        if rule is None:
            return None
        return format_notice(rule, self.describe(rule), chaos=self.is_chaos)
