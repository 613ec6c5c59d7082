"""
Frame State - the record of one snooker frame in progress.

Design principles:
- Immutable-friendly: every transition returns a new FrameState
- Serializable: plain values only, so a frame can be logged or replayed
- Self-describing: legality is derived from fields, never from history text
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from copy import deepcopy
from enum import Enum

from .balls import Ball, COLOR_ORDER, INITIAL_REDS


class PlayerId(str, Enum):
    """The two players in a frame."""
    P1 = "P1"
    P2 = "P2"

    @property
    def other(self) -> PlayerId:
        return PlayerId.P2 if self is PlayerId.P1 else PlayerId.P1

    @classmethod
    def parse(cls, text: str) -> PlayerId:
        """Accept "P1", "p1", "1", "player1"."""
        if not isinstance(text, str):
            raise ValueError(f"Unknown player: {text!r}")
        key = text.strip().upper().replace("PLAYER", "P").replace(" ", "")
        if key in {"1", "2"}:
            key = f"P{key}"
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown player: {text!r}") from None


class LastAction(Enum):
    """What the previous event in the frame was."""
    NONE = "none"
    POTTED_RED = "potted_red"
    POTTED_COLOR = "potted_color"
    FOUL = "foul"
    ENDED_TURN = "ended_turn"


class EventKind(Enum):
    """Kinds of history entry."""
    POTTED = "potted"
    FOUL = "foul"
    ENDED_TURN = "ended_turn"
    TIE_ANNOUNCED = "tie_announced"
    COIN_TOSS = "coin_toss"


@dataclass(frozen=True)
class HistoryEntry:
    """
    One structured line of the frame log.

    points is the score delta the event caused. For a foul it is the
    penalty awarded to the opponent of `player`.
    """
    player: PlayerId
    kind: EventKind
    points: int = 0
    ball: Ball | None = None
    winner: PlayerId | None = None  # Coin toss only

    @classmethod
    def potted(cls, player: PlayerId, ball: Ball) -> HistoryEntry:
        return cls(player=player, kind=EventKind.POTTED, points=ball.points, ball=ball)

    @classmethod
    def foul(cls, player: PlayerId, points: int) -> HistoryEntry:
        return cls(player=player, kind=EventKind.FOUL, points=points)

    @classmethod
    def ended_turn(cls, player: PlayerId) -> HistoryEntry:
        return cls(player=player, kind=EventKind.ENDED_TURN)

    @classmethod
    def tie_announced(cls, player: PlayerId) -> HistoryEntry:
        return cls(player=player, kind=EventKind.TIE_ANNOUNCED)

    @classmethod
    def coin_toss(cls, player: PlayerId, winner: PlayerId) -> HistoryEntry:
        return cls(player=player, kind=EventKind.COIN_TOSS, winner=winner)


@dataclass(frozen=True)
class TieBreak:
    """
    Respotted-black sub-state.

    Present on FrameState only while the tiebreak is running. Without a
    coin toss winner nobody may play yet.
    """
    coin_toss_winner: PlayerId | None = None

    @property
    def awaiting_toss(self) -> bool:
        return self.coin_toss_winner is None


DEFAULT_PLAYER_NAMES: dict[PlayerId, str] = {
    PlayerId.P1: "Player 1",
    PlayerId.P2: "Player 2",
}


def _initial_colors() -> dict[Ball, bool]:
    return {color: True for color in COLOR_ORDER}


def _zero_scores() -> dict[PlayerId, int]:
    return {PlayerId.P1: 0, PlayerId.P2: 0}


@dataclass
class FrameState:
    """
    Complete frame state at a point in time.

    This is the canonical state the reducer operates on. Dicts held here
    are never mutated in place; transitions build new ones.
    """
    scores: dict[PlayerId, int] = field(default_factory=_zero_scores)
    current_player: PlayerId = PlayerId.P1
    reds_remaining: int = INITIAL_REDS
    colors_on_table: dict[Ball, bool] = field(default_factory=_initial_colors)
    break_score: int = 0
    frame_over: bool = False
    tie_break: TieBreak | None = None
    last_action: LastAction = LastAction.NONE

    # Append-only; transitions replace the tuple
    history: tuple[HistoryEntry, ...] = ()

    # Display only, no rule effect
    player_names: dict[PlayerId, str] = field(
        default_factory=lambda: dict(DEFAULT_PLAYER_NAMES)
    )

    @classmethod
    def initial(cls, player_names: dict[PlayerId, str] | None = None) -> FrameState:
        """Start-of-frame state, optionally carrying display names over."""
        names = dict(DEFAULT_PLAYER_NAMES)
        if player_names:
            names.update(player_names)
        return cls(player_names=names)

    @property
    def tie_break_active(self) -> bool:
        return self.tie_break is not None

    @property
    def reds_potted(self) -> int:
        return INITIAL_REDS - self.reds_remaining

    @property
    def colors_remaining(self) -> list[Ball]:
        """Colours still on the table, in potting order."""
        return [c for c in COLOR_ORDER if self.colors_on_table.get(c, False)]

    @property
    def winner(self) -> PlayerId | None:
        """Higher scorer once the frame is decided."""
        if not self.frame_over:
            return None
        p1, p2 = self.scores[PlayerId.P1], self.scores[PlayerId.P2]
        if p1 == p2:
            return None
        return PlayerId.P1 if p1 > p2 else PlayerId.P2

    def name_of(self, player: PlayerId) -> str:
        return self.player_names.get(player, DEFAULT_PLAYER_NAMES[player])

    def with_points(self, player: PlayerId, points: int) -> FrameState:
        """Return new state with points added to one player's total."""
        new_scores = self.scores.copy()
        new_scores[player] += points
        return self._copy_with(scores=new_scores)

    def with_entry(self, entry: HistoryEntry) -> FrameState:
        """Return new state with a history entry appended."""
        return self._copy_with(history=self.history + (entry,))

    def with_color(self, color: Ball, on_table: bool) -> FrameState:
        new_colors = self.colors_on_table.copy()
        new_colors[color] = on_table
        return self._copy_with(colors_on_table=new_colors)

    def _copy_with(self, **kwargs) -> FrameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)

    def clone(self) -> FrameState:
        """Deep copy the state."""
        return deepcopy(self)
