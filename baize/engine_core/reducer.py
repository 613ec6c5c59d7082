"""
Reducer - Applies actions to frame state.

The reducer is the single point of state transition.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state
- Validates before applying, so a rejected action changes nothing
- Returns ActionResult with success/failure
- Every player event appends exactly one history entry
"""

from __future__ import annotations
import logging

from .action import Action, ActionType, ActionResult
from .balls import Ball, COLOR_ORDER, FOUL_VALUES
from .errors import ErrorCode
from .legality import FramePhase, frame_phase, legal_balls
from .state import FrameState, HistoryEntry, LastAction, TieBreak

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 20


class Reducer:
    """
    Reducer applies actions to frame state.

    Stateless - all state is in FrameState.
    """

    def apply(self, state: FrameState, action: Action) -> ActionResult:
        """
        Apply an action to the frame state.

        Returns ActionResult with new state or error.
        """
        rejection = self._validate_action(state, action)
        if rejection:
            message, code = rejection
            logger.warning("Rejected %s: %s", action.action_type.value, message)
            return ActionResult.failure(message, error_code=code)

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code=ErrorCode.UNKNOWN_ACTION,
            )

        result = handler(state, action)
        for change in result.state_changes:
            logger.debug(change)
        return result

    def _validate_action(
        self, state: FrameState, action: Action
    ) -> tuple[str, ErrorCode] | None:
        """
        Validate that an action is legal in the current state.

        Returns (message, code) if invalid, None if valid.
        """
        action_type = action.action_type
        payload = action.payload

        if action_type == ActionType.RESET_FRAME:
            return None

        if action_type == ActionType.SET_PLAYER_NAME:
            if payload.player is None:
                return "No player given to rename", ErrorCode.INVALID_PLAYER_NAME
            if not isinstance(payload.name, str):
                return (
                    f"Player name must be text, got {payload.name!r}",
                    ErrorCode.INVALID_PLAYER_NAME,
                )
            name = payload.name.strip()
            if not name:
                return "Player name must not be empty", ErrorCode.INVALID_PLAYER_NAME
            if len(name) > MAX_NAME_LENGTH:
                return (
                    f"Player name must be at most {MAX_NAME_LENGTH} characters",
                    ErrorCode.INVALID_PLAYER_NAME,
                )
            return None

        phase = frame_phase(state)
        if phase == FramePhase.FRAME_OVER:
            return "Frame is over - reset to start a new frame", ErrorCode.FRAME_OVER

        if action_type == ActionType.RESOLVE_COIN_TOSS:
            if phase != FramePhase.TIEBREAK_AWAITING_TOSS:
                return "No coin toss is pending", ErrorCode.NO_COIN_TOSS_PENDING
            if payload.player is None:
                return "Coin toss needs a winner", ErrorCode.NO_COIN_TOSS_PENDING
            return None

        if phase == FramePhase.TIEBREAK_AWAITING_TOSS:
            return "Resolve the coin toss before play resumes", ErrorCode.AWAITING_COIN_TOSS

        if action_type == ActionType.POT:
            allowed = legal_balls(state)
            if payload.ball is None or payload.ball not in allowed:
                ball_name = payload.ball.label if payload.ball else "nothing"
                legal = ", ".join(b.label for b in sorted(allowed, key=lambda b: b.points))
                return f"Cannot pot {ball_name} now (legal: {legal})", ErrorCode.ILLEGAL_BALL

        if action_type == ActionType.FOUL:
            points = payload.points
            if isinstance(points, bool) or not isinstance(points, int) or points not in FOUL_VALUES:
                return (
                    f"Foul value must be one of {sorted(FOUL_VALUES)}, got {points!r}",
                    ErrorCode.INVALID_FOUL_VALUE,
                )

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.POT: self._handle_pot,
            ActionType.FOUL: self._handle_foul,
            ActionType.END_TURN: self._handle_end_turn,
            ActionType.RESOLVE_COIN_TOSS: self._handle_coin_toss,
            ActionType.RESET_FRAME: self._handle_reset,
            ActionType.SET_PLAYER_NAME: self._handle_set_player_name,
        }
        return handlers.get(action_type)

    def _handle_pot(self, state: FrameState, action: Action) -> ActionResult:
        """Handle a successful pot. The same player stays at the table."""
        phase = frame_phase(state)
        ball = action.payload.ball
        player = state.current_player

        new_state = state.with_points(player, ball.points)
        new_state = new_state.with_entry(HistoryEntry.potted(player, ball))
        new_state = new_state._copy_with(break_score=state.break_score + ball.points)
        changes = [f"{state.name_of(player)} potted {ball.label} (+{ball.points})"]

        if ball is Ball.RED:
            new_state = new_state._copy_with(
                reds_remaining=state.reds_remaining - 1,
                last_action=LastAction.POTTED_RED,
            )
            return ActionResult.success_with_state(new_state, changes=changes)

        new_state = new_state._copy_with(last_action=LastAction.POTTED_COLOR)

        if phase == FramePhase.TIEBREAK_READY:
            new_state = new_state.with_color(Ball.BLACK, False)._copy_with(
                frame_over=True,
                tie_break=None,
            )
            logger.info("Respotted black potted by %s", state.name_of(player))
            changes.append(f"{state.name_of(player)} wins the frame on the respotted black")
            return ActionResult.success_with_state(new_state, changes=changes)

        if phase != FramePhase.COLOR_SEQUENCE:
            # Red phase or free colour after the final red: colour is respotted
            return ActionResult.success_with_state(new_state, changes=changes)

        new_state = new_state.with_color(ball, False)
        if ball is Ball.BLACK and new_state.reds_remaining == 0 and not new_state.colors_remaining:
            return self._end_of_frame(new_state, changes)
        return ActionResult.success_with_state(new_state, changes=changes)

    def _end_of_frame(self, state: FrameState, changes: list[str]) -> ActionResult:
        """All balls are down: decide the frame or respot the black."""
        scores = state.scores
        if len(set(scores.values())) > 1:
            new_state = state._copy_with(frame_over=True)
            winner = new_state.winner
            logger.info(
                "Frame won by %s (%d-%d)",
                state.name_of(winner),
                scores[winner],
                scores[winner.other],
            )
            changes.append(f"{state.name_of(winner)} wins the frame")
            return ActionResult.success_with_state(new_state, changes=changes)

        only_black = {color: color is Ball.BLACK for color in COLOR_ORDER}
        new_state = state._copy_with(
            tie_break=TieBreak(),
            colors_on_table=only_black,
            reds_remaining=0,
            break_score=0,
        ).with_entry(HistoryEntry.tie_announced(state.current_player))
        level = next(iter(scores.values()))
        logger.info("Scores level at %d - black respotted", level)
        changes.append(f"Scores level at {level}: black respotted, coin toss to decide who plays")
        return ActionResult.success_with_state(new_state, changes=changes)

    def _handle_foul(self, state: FrameState, action: Action) -> ActionResult:
        """Handle a foul: penalty to the opponent, who comes to the table."""
        points = action.payload.points
        fouler = state.current_player
        opponent = fouler.other

        new_state = state.with_points(opponent, points)
        new_state = new_state.with_entry(HistoryEntry.foul(fouler, points))
        new_state = new_state._copy_with(
            break_score=0,
            current_player=opponent,
            last_action=LastAction.FOUL,
        )
        changes = [f"{state.name_of(fouler)} foul ({points})"]

        if state.tie_break is not None:
            # A foul on the respotted black loses the frame
            new_state = new_state._copy_with(frame_over=True, tie_break=None)
            logger.info("Foul on the respotted black by %s", state.name_of(fouler))
            changes.append(f"{state.name_of(opponent)} wins the frame on a foul")

        return ActionResult.success_with_state(new_state, changes=changes)

    def _handle_end_turn(self, state: FrameState, action: Action) -> ActionResult:
        """Handle the end of a visit without a foul."""
        player = state.current_player
        new_state = state.with_entry(HistoryEntry.ended_turn(player))._copy_with(
            break_score=0,
            current_player=player.other,
            last_action=LastAction.ENDED_TURN,
        )
        return ActionResult.success_with_state(
            new_state,
            changes=[f"{state.name_of(player)} ended turn"],
        )

    def _handle_coin_toss(self, state: FrameState, action: Action) -> ActionResult:
        """Record the coin toss winner, who plays the respotted black."""
        winner = action.payload.player
        new_state = state.with_entry(
            HistoryEntry.coin_toss(state.current_player, winner)
        )._copy_with(
            tie_break=TieBreak(coin_toss_winner=winner),
            current_player=winner,
            break_score=0,
        )
        return ActionResult.success_with_state(
            new_state,
            changes=[f"{state.name_of(winner)} won the coin toss"],
        )

    def _handle_reset(self, state: FrameState, action: Action) -> ActionResult:
        """Start a fresh frame. Display names carry over."""
        new_state = FrameState.initial(state.player_names)
        logger.info("Frame reset")
        return ActionResult.success_with_state(new_state, changes=["Frame reset"])

    def _handle_set_player_name(self, state: FrameState, action: Action) -> ActionResult:
        player = action.payload.player
        name = action.payload.name.strip()
        new_names = state.player_names.copy()
        new_names[player] = name
        new_state = state._copy_with(player_names=new_names)
        return ActionResult.success_with_state(
            new_state,
            changes=[f"{player.value} is now {name}"],
        )


def apply_action(state: FrameState, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer()
    return reducer.apply(state, action)
