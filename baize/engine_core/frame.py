"""
Frame - the object a presentation layer talks to.

Holds the current FrameState, routes every operation through the
reducer, and raises IllegalActionError when an action is rejected.
Not thread-safe; hosts sharing a frame between callers must hold one
lock around every call (see baize.session).
"""

from __future__ import annotations

from .action import Action, ActionResult
from .balls import Ball
from .errors import IllegalActionError
from .legality import FramePhase, frame_phase, legal_actions, legal_balls
from .reducer import Reducer
from .state import FrameState, PlayerId


class Frame:
    """
    A single snooker frame in play.

    Usage:
        frame = Frame()
        frame.pot(Ball.RED)
        frame.pot(Ball.BLACK)
        frame.end_turn()
        frame.legal_balls()  # frozenset({Ball.RED})
    """

    def __init__(
        self,
        player_names: dict[PlayerId, str] | None = None,
        state: FrameState | None = None,
    ):
        self._reducer = Reducer()
        self._state = state if state is not None else FrameState.initial(player_names)

    @property
    def state(self) -> FrameState:
        """The live state. Treat as read-only."""
        return self._state

    def get_state(self) -> FrameState:
        """Snapshot of the current state, safe to keep or modify."""
        return self._state.clone()

    def phase(self) -> FramePhase:
        return frame_phase(self._state)

    def legal_balls(self) -> frozenset[Ball]:
        return legal_balls(self._state)

    def legal_actions(self) -> list[Action]:
        return legal_actions(self._state)

    def apply(self, action: Action) -> ActionResult:
        """
        Apply any action.

        Raises IllegalActionError if the reducer rejects it; the state is
        unchanged in that case.
        """
        result = self._reducer.apply(self._state, action)
        if not result.success:
            raise IllegalActionError(result.error, result.error_code)
        self._state = result.new_state
        return result

    def pot(self, ball: Ball) -> FrameState:
        self.apply(Action.pot(ball))
        return self._state

    def foul(self, points: int) -> FrameState:
        self.apply(Action.foul(points))
        return self._state

    def end_turn(self) -> FrameState:
        self.apply(Action.end_turn())
        return self._state

    def resolve_coin_toss(self, winner: PlayerId) -> FrameState:
        self.apply(Action.resolve_coin_toss(winner))
        return self._state

    def reset_frame(self) -> FrameState:
        self.apply(Action.reset_frame())
        return self._state

    def set_player_name(self, player: PlayerId, name: str) -> FrameState:
        self.apply(Action.set_player_name(player, name))
        return self._state
