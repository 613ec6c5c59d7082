"""
History helpers - turn structured entries into display text, and check
that the log accounts for every point on the scoreboard.
"""

from __future__ import annotations
from typing import Iterable

from .state import EventKind, FrameState, HistoryEntry, PlayerId, DEFAULT_PLAYER_NAMES


def describe_entry(entry: HistoryEntry, names: dict[PlayerId, str] | None = None) -> str:
    """Format one history entry, e.g. "Player 1 potted Red (+1)"."""
    names = names or DEFAULT_PLAYER_NAMES
    who = names.get(entry.player, entry.player.value)

    if entry.kind == EventKind.POTTED:
        return f"{who} potted {entry.ball.label} (+{entry.points})"
    if entry.kind == EventKind.FOUL:
        return f"{who} foul ({entry.points})"
    if entry.kind == EventKind.ENDED_TURN:
        return f"{who} ended turn"
    if entry.kind == EventKind.TIE_ANNOUNCED:
        return "Scores level: black respotted"
    if entry.kind == EventKind.COIN_TOSS:
        return f"{names.get(entry.winner, entry.winner.value)} won the coin toss"
    raise ValueError(f"Unknown history entry kind: {entry.kind}")


def describe_history(state: FrameState) -> list[str]:
    """Format the whole frame log using the state's player names."""
    return [describe_entry(entry, state.player_names) for entry in state.history]


def reconcile_scores(history: Iterable[HistoryEntry]) -> dict[PlayerId, int]:
    """
    Rebuild both scores from the log alone.

    Pots score for the potter, fouls score for the fouler's opponent.
    """
    totals = {PlayerId.P1: 0, PlayerId.P2: 0}
    for entry in history:
        if entry.kind == EventKind.POTTED:
            totals[entry.player] += entry.points
        elif entry.kind == EventKind.FOUL:
            totals[entry.player.other] += entry.points
    return totals
