"""
Session orchestrator: lobby -> turn loop -> summary.

A session owns one match. Game specifics live behind a :class:`RoundResolver`
which reads the collected actions, mutates ``components`` and ends rounds
through :meth:`Session.set_game_status`.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence

import numpy as np

from .collector import AgentChoice, MoveCollector
from .components import Board, Component, copy_board, find_component, iter_components
from .errors import GameCancelled, InvalidConfiguration
from .player import Action, AgentStrategy, Identity, Player
from .rules import POST_NOTICE_RULES, SpecialRule, SpecialRuleEngine
from .settings import SessionSettings
from .surface import ActionSurface, MatchSummary, SessionView

logger = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    LOBBY = "lobby"
    ROUND_ACTIVE = "round_active"
    ROUND_RESOLVED = "round_resolved"
    MATCH_ENDED = "match_ended"
    ABORTED = "aborted"


class RoundResolver(ABC):
    """Game-specific resolution of one turn's actions."""

    @abstractmethod
    def on_action_collect(self, session: "Session", actions: Mapping[str, Action]) -> None:
        """Update ``session.components`` and call ``session.set_game_status`` when a round ends."""


class Session:
    """
    One match between 2..N players, at most one of them the agent.

    Public state read and written by resolvers: ``components``, ``players``,
    ``special_rule``, ``current_player_index``.
    """

    def __init__(
        self,
        settings: SessionSettings,
        components: Board,
        resolver: RoundResolver,
        identities: Sequence[Identity],
        surface: ActionSurface,
        *,
        agent_strategy: Optional[AgentStrategy] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        settings.validate()
        if len(identities) < 2:
            raise InvalidConfiguration("A session needs at least two players")
        if settings.teams and len(settings.teams) != len(identities):
            raise InvalidConfiguration(
                f"Expected one team per player, got {len(settings.teams)} teams for {len(identities)} players"
            )
        if sum(identity.is_agent for identity in identities) > 1:
            raise InvalidConfiguration("At most one agent can take part in a session")
        if not any(True for _ in iter_components(components)):
            raise InvalidConfiguration("A session needs at least one component")

        self.settings = settings
        self.resolver = resolver
        self.surface = surface
        self.rng = rng or np.random.default_rng()

        self.blank_board: Board = copy_board(components)
        self.components: Board = copy_board(components)
        self.team_list: List[str] = list(settings.teams)
        self.players: List[Player] = [
            Player(
                identity,
                team=self.team_list[seat] if self.team_list else None,
                on_change=self._on_player_change,
                agent_strategy=agent_strategy if identity.is_agent else None,
            )
            for seat, identity in enumerate(identities)
        ]

        self.current_player_index = -1
        self.current_round_actions: Dict[str, Action] = {}
        self.whole_match_actions: Dict[str, Action] = {}
        self.win_threshold = (settings.best_of + 1) // 2
        self.previous_win_threshold: Optional[int] = None
        self.game_status: Optional[str] = None
        self.round_winner: Optional[Player] = None
        self.status = SessionStatus.LOBBY
        self.summary: Optional[MatchSummary] = None
        self._deuce_applied = False
        self._deuce_notice: Optional[List[str]] = None

        self.rules = SpecialRuleEngine(
            settings.mode,
            self.rng,
            computer_biased=settings.computer_biased_game_master,
            teams_enabled=bool(self.team_list),
        )
        self.collector = MoveCollector(
            surface,
            max_decision_time=settings.max_decision_time,
            think_delay=settings.think_delay,
            rng=self.rng,
        )

    # ------------------------------------------------------------------ #
    # Derived state
    # ------------------------------------------------------------------ #

    @property
    def special_rule(self) -> Optional[SpecialRule]:
        return self.rules.state.active

    @special_rule.setter
    def special_rule(self, rule: Optional[SpecialRule]) -> None:
        self.rules.state.active = rule

    @property
    def previous_special_rule(self) -> Optional[SpecialRule]:
        return self.rules.state.previous

    @property
    def agent_player(self) -> Optional[Player]:
        return next((player for player in self.players if player.is_agent), None)

    @property
    def human_players(self) -> List[Player]:
        return [player for player in self.players if not player.is_agent]

    @property
    def current_player(self) -> Player:
        return self.players[max(self.current_player_index, 0)]

    @property
    def scores(self) -> List[int]:
        return [player.score for player in self.players]

    @property
    def highest_score(self) -> int:
        return max(self.scores)

    @property
    def is_match_point(self) -> bool:
        return self.highest_score == self.win_threshold - 1

    @property
    def enabled_move_ids(self) -> List[str]:
        return [c.move_id for c in iter_components(self.components) if not c.disabled]

    def player_label(self, player: Player) -> str:
        """Label for status text: "I"/"You" against the agent, otherwise the display name."""
        if self.agent_player is None:
            return player.identity.display_name
        return "I" if player.is_agent else "You"

    def player_by_team(self, team: Optional[str]) -> Optional[Player]:
        return next((player for player in self.players if player.team == team), None)

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    async def run(self) -> MatchSummary:
        """Play the match to the end. Cancellations mark the session aborted and propagate."""
        try:
            await self._lobby()
            logger.info(
                "Started new game: title=%s best_of=%d deuce=%s mode=%s max_decision_time=%s",
                self.settings.title,
                self.settings.best_of,
                self.settings.deuce,
                self.settings.mode.value,
                self.settings.max_decision_time,
            )

            while True:
                self.status = SessionStatus.ROUND_ACTIVE
                actions = await self._request_actions()

                rule = self.special_rule
                if rule is not None and rule in POST_NOTICE_RULES:
                    await self.surface.render(self._view(notice=self.rules.notice()))
                    await self._pause(self.settings.notice_delay)

                if actions is not None:
                    self.resolver.on_action_collect(self, actions)

                renew = self.highest_score < self.win_threshold
                if self.game_status:
                    await self._resolve_round(renew)
                if not renew:
                    break
        except GameCancelled as exc:
            await self._abort(exc)
            raise

        return await self._finish()

    async def _lobby(self) -> None:
        self.status = SessionStatus.LOBBY
        await self.surface.render(
            self._view(title=f"{self.settings.title} Game", fields=self.settings.lobby_fields)
        )
        await self.collector.confirm(
            [player.identity.id for player in self.human_players],
            self.settings.lobby_timeout,
        )

    async def _resolve_round(self, renew: bool) -> None:
        self.status = SessionStatus.ROUND_RESOLVED
        if self.settings.clear_board_on_point:
            await self.surface.render(self._view(game_status=self.game_status, inputs_enabled=False))
            if renew:
                self.components = copy_board(self.blank_board)
                logger.info("Board has been cleared")

        await self.surface.set_inputs_enabled(False)
        await self.surface.render(self._view(game_status=self.game_status, inputs_enabled=False))

        if renew:
            logger.info(
                "Nobody has won yet: win_threshold=%d scores=%s", self.win_threshold, self.scores
            )
            self.game_status = None
            self.check_match_point()
            await self.surface.set_inputs_enabled(True)
        await self._pause(self.settings.notice_delay)

    def check_match_point(self) -> bool:
        """Apply deuce the first time the lead is tied at match point. Returns whether it fired."""
        if self.win_threshold <= 1 or not self.is_match_point:
            return False
        leaders = [player for player in self.players if player.score == self.highest_score]
        if len(leaders) < 2 or not self.settings.deuce or self._deuce_applied:
            return False

        self.previous_win_threshold = self.win_threshold
        self.win_threshold += 1
        self._deuce_applied = True
        self._deuce_notice = [
            "You must win by two points",
            f"The game now ends on scoring {self.win_threshold} points",
        ]
        logger.info("Deuce: win threshold raised to %d", self.win_threshold)
        return True

    async def _finish(self) -> MatchSummary:
        self.status = SessionStatus.MATCH_ENDED
        leader = max(self.players, key=lambda player: player.score)
        agent = self.agent_player

        agent_lost: Optional[bool] = None
        if agent is None:
            description = f"{self.player_label(leader)} has won!"
        elif agent.score == self.highest_score:
            description = "Better luck next time! You lost."
            agent_lost = False
        else:
            description = "Congratulations! You have won!"
            agent_lost = True

        self.summary = MatchSummary(
            winner=self.player_label(leader),
            description=description,
            scores=self.scores,
            agent_lost=agent_lost,
        )
        logger.info("Game concluded: %s (final score %s)", description, self.summary.final_score)
        await self.surface.set_inputs_enabled(False)
        await self.surface.render(
            self._view(
                footer=f"Final Score: {self.summary.final_score}",
                summary=self.summary,
                inputs_enabled=False,
            )
        )
        return self.summary

    async def _abort(self, exc: GameCancelled) -> None:
        self.status = SessionStatus.ABORTED
        for move_id in self.current_round_actions:
            self.whole_match_actions.pop(move_id, None)
        self.current_round_actions.clear()
        logger.warning("Game aborted: %s", exc)
        await self.surface.set_inputs_enabled(False)
        await self.surface.render(self._view(game_status=str(exc), inputs_enabled=False))

    # ------------------------------------------------------------------ #
    # Turns
    # ------------------------------------------------------------------ #

    async def _request_actions(self) -> Optional[Dict[str, Action]]:
        settings = self.settings
        total_actions = len(self.whole_match_actions)
        previous_index = self.current_player_index
        previous_is_agent = previous_index >= 0 and self.players[previous_index].is_agent

        rule = self.rules.roll(
            total_actions,
            turn_based=settings.turn_based,
            match_point=self.is_match_point,
            previous_mover_is_agent=previous_is_agent,
        )

        increment = 2 if rule is SpecialRule.SKIP_TURN else 1
        self.current_player_index = (previous_index + increment) % len(self.players)
        logger.info(
            "Turn decision: previous=%s current=%s increment=%d total_actions=%d",
            self.players[max(previous_index, 0)].identity.display_name,
            self.current_player.identity.display_name,
            increment,
            total_actions,
        )

        if rule is SpecialRule.JUMBLE:
            self._jumble()
            self.resolver.on_action_collect(self, dict(self.whole_match_actions))
            if self.game_status:
                return None

        if rule is SpecialRule.SWAP_TEAMS:
            self._swap_teams()

        if self.previous_special_rule is SpecialRule.OVERRULE:
            self._revert_overrule()
        if rule is SpecialRule.OVERRULE:
            self._apply_overrule()

        self.rules.state.advance()
        self.current_round_actions.clear()

        current = self.current_player
        turn = None
        if settings.turn_based and not current.is_agent:
            turn = f"Turn: {self.player_label(current)}"
        notice = None
        if rule is not None and rule not in POST_NOTICE_RULES:
            notice = self.rules.notice()

        if settings.turn_based:
            awaiting = () if current.is_agent else (current.identity.id,)
        else:
            awaiting = tuple(player.identity.id for player in self.human_players)
        await self.surface.render(self._view(turn=turn, notice=notice, awaiting=awaiting))

        if settings.turn_based:
            if current.is_agent:
                extra = settings.notice_delay if rule is not None else 0.0
                await self._agent_act(current, extra)
                return dict(self.current_round_actions)
            expected = [current]
        else:
            agent = self.agent_player
            if agent is not None:
                await self._agent_act(agent)
            expected = self.human_players

        await self.collector.collect(expected, lambda: self.enabled_move_ids, self.record_action)
        return dict(self.current_round_actions)

    async def _agent_act(self, agent: Player, extra_delay: float = 0.0) -> None:
        choose: Optional[AgentChoice] = None
        strategy = agent.agent_strategy
        if strategy is not None:
            choose = lambda legal: strategy(self, legal)  # noqa: E731
        move_id = await self.collector.act_for_agent(agent, self.enabled_move_ids, choose, extra_delay)
        self.record_action(agent, move_id)

    def record_action(self, player: Player, move_id: str) -> Action:
        """Record a press by ``player``, applying click-disabling and Swap Move."""
        rule = self.special_rule
        if self.settings.disable_on_click and rule is not SpecialRule.OVERRULE:
            find_component(self.components, move_id).disabled = True

        author = player
        if rule is SpecialRule.SWAP_MOVE:
            seat = self.players.index(player)
            author = self.players[(seat + 1) % len(self.players)]

        action = Action(move_id=move_id, player=author)
        self.whole_match_actions[move_id] = action
        self.current_round_actions[move_id] = action
        logger.info(
            "Player action: move=%s by=%s team=%s move#=%d rule=%s",
            move_id,
            author.identity.display_name,
            author.team,
            len(self.whole_match_actions),
            rule.value if rule is not None else None,
        )
        return action

    def set_game_status(self, winner: Optional[Player] = None, description: Optional[str] = None) -> str:
        """
        End the current round with ``winner`` (or a tie when None).

        Clears the match's recorded actions, re-enables the board on
        disable-on-click games, resets the turn pointer, the teams and the
        special rule, then scores the winner.
        """
        self.whole_match_actions.clear()

        if self.settings.disable_on_click:
            for component in iter_components(self.components):
                component.disabled = False
            logger.debug("All components have been enabled")

        if self.settings.turn_based:
            self.current_player_index = -1

        if self.team_list:
            self.team_list = list(self.settings.teams)
            for player in self.players:
                player.reset_team()
            logger.debug("Teams have been reset")

        self.rules.state.reset()
        self.round_winner = winner

        if winner is None:
            self.game_status = f"It's a tie! {description or 'Nobody won'}"
        else:
            winner.score += 1
            label = self.player_label(winner)
            verb = "have" if label in ("I", "You") else "has"
            self.game_status = f"{label} {verb} won! {description or ''}".rstrip()
        return self.game_status

    # ------------------------------------------------------------------ #
    # Special rule effects
    # ------------------------------------------------------------------ #

    def _jumble(self) -> None:
        """Shuffle every cell; filled cells keep their author under their new move id."""
        cells = list(iter_components(self.components))
        order = self.rng.permutation(len(cells))
        previous = dict(self.whole_match_actions)
        self.whole_match_actions.clear()

        shuffled: List[Component] = []
        for slot, source_index in zip(cells, order):
            source = cells[int(source_index)]
            moved = Component(
                move_id=slot.move_id,
                label=source.label,
                mark=source.mark,
                disabled=source.is_filled,
            )
            if source.is_filled:
                action = previous.get(source.move_id)
                assert action is not None, f"filled cell {source.move_id} has no recorded action"
                self.whole_match_actions[slot.move_id] = Action(move_id=slot.move_id, player=action.player)
            shuffled.append(moved)

        it = iter(shuffled)
        self.components = [[next(it) for _ in row] for row in self.components]
        logger.info("Board jumbled: %d filled cells moved", len(self.whole_match_actions))

    def _swap_teams(self) -> None:
        self.team_list = self.team_list[1:] + self.team_list[:1]
        for player, team in zip(self.players, self.team_list):
            logger.info(
                "Player %s moving from [%s] to [%s]", player.identity.display_name, player.team, team
            )
            player.set_team(team)

    def _apply_overrule(self) -> None:
        """Enable cells recorded by other teams for the current player."""
        team = self.current_player.team
        for move_id, action in self.whole_match_actions.items():
            if action.player.team != team:
                find_component(self.components, move_id).disabled = False

    def _revert_overrule(self) -> None:
        for move_id in self.whole_match_actions:
            find_component(self.components, move_id).disabled = True

    def _on_player_change(self, player: Player) -> None:
        for actions in (self.whole_match_actions, self.current_round_actions):
            for action in actions.values():
                if action.player.id == player.id:
                    action.player = player

    # ------------------------------------------------------------------ #
    # Presentation
    # ------------------------------------------------------------------ #

    def _score_label(self, player: Player) -> str:
        if self.agent_player is None:
            return f"{player.identity.display_name}'s Score"
        return "My Score" if player.is_agent else "Your Score"

    def _footer(self) -> Optional[str]:
        if self.win_threshold <= 1 or not self.is_match_point:
            return None
        leaders = [player for player in self.players if player.score == self.highest_score]
        if len(leaders) > 1:
            return "Deuce!" if self._deuce_applied else None

        text = "Match Point!"
        if self.previous_win_threshold is not None and self.win_threshold != self.previous_win_threshold:
            leader = leaders[0]
            if self.agent_player is None:
                name = leader.identity.display_name
            else:
                name = "Me" if leader.is_agent else "You"
            text += f" Adv: {name}"
        return text

    def _view(self, **overrides) -> SessionView:
        deuce, self._deuce_notice = self._deuce_notice, None
        data = dict(
            title=self.settings.title,
            status=self.status.value,
            components=self.components,
            scores=[(self._score_label(player), player.score) for player in self.players],
            teams=[player.team for player in self.players],
            special_rule=self.special_rule.value if self.special_rule is not None else None,
            footer=self._footer(),
            deuce=deuce,
        )
        data.update(overrides)
        return SessionView(**data)

    @staticmethod
    async def _pause(seconds: float) -> None:
        if seconds > 0:
            await asyncio.sleep(seconds)

