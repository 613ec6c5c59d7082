"""
Action System - Actions, payloads, and results.

Actions represent the four player events (pot, foul, end turn, coin toss)
plus the housekeeping operations (reset, rename). All state changes flow
through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .balls import Ball
from .errors import ErrorCode
from .state import PlayerId


class ActionType(Enum):
    """Types of actions in the system."""
    # Player events
    POT = "pot"
    FOUL = "foul"
    END_TURN = "end_turn"
    RESOLVE_COIN_TOSS = "resolve_coin_toss"

    # Housekeeping
    RESET_FRAME = "reset_frame"
    SET_PLAYER_NAME = "set_player_name"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields; validation happens in
    the reducer.
    """
    ball: Ball | None = None
    points: int | None = None
    player: PlayerId | None = None  # Coin toss winner, or player being renamed
    name: str | None = None


@dataclass
class Action:
    """
    A complete action to be applied to the frame state.

    Actions are:
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def pot(cls, ball: Ball) -> Action:
        return cls(action_type=ActionType.POT, payload=ActionPayload(ball=ball))

    @classmethod
    def foul(cls, points: int) -> Action:
        return cls(action_type=ActionType.FOUL, payload=ActionPayload(points=points))

    @classmethod
    def end_turn(cls) -> Action:
        return cls(action_type=ActionType.END_TURN)

    @classmethod
    def resolve_coin_toss(cls, winner: PlayerId) -> Action:
        return cls(
            action_type=ActionType.RESOLVE_COIN_TOSS,
            payload=ActionPayload(player=winner),
        )

    @classmethod
    def reset_frame(cls) -> Action:
        return cls(action_type=ActionType.RESET_FRAME)

    @classmethod
    def set_player_name(cls, player: PlayerId, name: str) -> Action:
        return cls(
            action_type=ActionType.SET_PLAYER_NAME,
            payload=ActionPayload(player=player, name=name),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Action:
        """
        Build an action from its JSON form, as used by replay files:

            {"action": "pot", "ball": "red"}
            {"action": "foul", "points": 5}
            {"action": "end_turn"}
            {"action": "resolve_coin_toss", "winner": "P2"}
            {"action": "set_player_name", "player": "P1", "name": "Ronnie"}
        """
        try:
            action_type = ActionType(data["action"])
        except KeyError:
            raise ValueError("Action missing 'action' field") from None

        if action_type == ActionType.POT:
            return cls.pot(Ball.parse(data["ball"]))
        if action_type == ActionType.FOUL:
            return cls.foul(_whole_number(data["points"]))
        if action_type == ActionType.RESOLVE_COIN_TOSS:
            return cls.resolve_coin_toss(PlayerId.parse(data["winner"]))
        if action_type == ActionType.SET_PLAYER_NAME:
            return cls.set_player_name(PlayerId.parse(data["player"]), data["name"])
        return cls(action_type=action_type)


def _whole_number(value: Any) -> int:
    """JSON points value as an int; 5 and 5.0 pass, 5.9 and "5" do not."""
    if isinstance(value, bool):
        raise ValueError(f"Points must be a whole number, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise ValueError(f"Points must be a whole number, got {value!r}")


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Error and error code (if failed)
    - Human-readable changes, for logs and UI toasts
    """
    success: bool
    new_state: Any | None = None  # FrameState
    error: str | None = None
    error_code: ErrorCode | None = None
    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: ErrorCode) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(success=True, new_state=state, state_changes=changes or [])
