"""
Tests for the reducer (state transitions).

Tests:
- Pot, foul, end turn, coin toss, reset and rename
- Validation and error codes
- Rejected actions leave state untouched
- History entries
"""

import pytest

from baize.engine_core import (
    Action,
    ActionType,
    Ball,
    COLOR_ORDER,
    ErrorCode,
    EventKind,
    FrameState,
    HistoryEntry,
    LastAction,
    PlayerId,
    TieBreak,
    apply_action,
)


class TestPotAction:
    """Tests for pot action."""

    def test_pot_red_scores_and_removes_red(self):
        state = FrameState()
        result = apply_action(state, Action.pot(Ball.RED))

        assert result.success
        new_state = result.new_state
        assert new_state.scores[PlayerId.P1] == 1
        assert new_state.break_score == 1
        assert new_state.reds_remaining == 14
        assert new_state.last_action == LastAction.POTTED_RED
        assert new_state.current_player == PlayerId.P1

    def test_pot_color_in_red_phase_respots(self):
        state = FrameState(reds_remaining=10, last_action=LastAction.POTTED_RED, break_score=1)
        result = apply_action(state, Action.pot(Ball.PINK))

        assert result.success
        assert result.new_state.colors_on_table == state.colors_on_table
        assert result.new_state.break_score == 7
        assert result.new_state.last_action == LastAction.POTTED_COLOR

    def test_free_color_after_final_red_respots(self):
        state = FrameState(reds_remaining=0, last_action=LastAction.POTTED_RED)
        result = apply_action(state, Action.pot(Ball.BLUE))

        assert result.success
        assert result.new_state.colors_on_table[Ball.BLUE] is True
        assert result.new_state.last_action == LastAction.POTTED_COLOR

    def test_color_sequence_clears_only_that_color(self):
        state = FrameState(reds_remaining=0, last_action=LastAction.ENDED_TURN)
        result = apply_action(state, Action.pot(Ball.YELLOW))

        assert result.success
        colors = result.new_state.colors_on_table
        assert colors[Ball.YELLOW] is False
        assert all(colors[c] for c in COLOR_ORDER if c is not Ball.YELLOW)

    def test_pot_appends_history(self):
        result = apply_action(FrameState(), Action.pot(Ball.RED))
        assert result.new_state.history == (HistoryEntry.potted(PlayerId.P1, Ball.RED),)
        assert result.new_state.history[0].points == 1

    def test_illegal_ball_rejected(self):
        state = FrameState()
        result = apply_action(state, Action.pot(Ball.BLACK))

        assert not result.success
        assert result.error_code == ErrorCode.ILLEGAL_BALL
        assert result.new_state is None
        assert "black" in result.error.lower()

    def test_red_with_no_reds_rejected(self):
        state = FrameState(reds_remaining=0, last_action=LastAction.ENDED_TURN)
        result = apply_action(state, Action.pot(Ball.RED))
        assert result.error_code == ErrorCode.ILLEGAL_BALL

    def test_out_of_order_color_rejected(self):
        state = FrameState(reds_remaining=0, last_action=LastAction.ENDED_TURN)
        result = apply_action(state, Action.pot(Ball.GREEN))
        assert result.error_code == ErrorCode.ILLEGAL_BALL


class TestFrameEnd:
    """Tests for end-of-frame detection."""

    def _last_black(self, scores):
        colors = {c: c is Ball.BLACK for c in COLOR_ORDER}
        return FrameState(
            scores=scores,
            reds_remaining=0,
            colors_on_table=colors,
            last_action=LastAction.POTTED_COLOR,
        )

    def test_unequal_scores_end_frame(self):
        state = self._last_black({PlayerId.P1: 50, PlayerId.P2: 20})
        result = apply_action(state, Action.pot(Ball.BLACK))

        new_state = result.new_state
        assert new_state.frame_over
        assert new_state.winner == PlayerId.P1
        assert new_state.tie_break is None

    def test_equal_scores_start_tiebreak(self):
        state = self._last_black({PlayerId.P1: 50, PlayerId.P2: 57})
        state = state._copy_with(break_score=20)
        result = apply_action(state, Action.pot(Ball.BLACK))

        new_state = result.new_state
        assert not new_state.frame_over
        assert new_state.tie_break == TieBreak(coin_toss_winner=None)
        assert new_state.colors_on_table == {c: c is Ball.BLACK for c in COLOR_ORDER}
        assert new_state.reds_remaining == 0
        assert new_state.break_score == 0
        assert [e.kind for e in new_state.history] == [EventKind.POTTED, EventKind.TIE_ANNOUNCED]

    def test_no_actions_when_frame_over(self):
        state = FrameState(frame_over=True, scores={PlayerId.P1: 10, PlayerId.P2: 0})
        for action in (Action.pot(Ball.RED), Action.foul(4), Action.end_turn()):
            result = apply_action(state, action)
            assert not result.success
            assert result.error_code == ErrorCode.FRAME_OVER


class TestFoulAction:
    """Tests for foul action."""

    def test_foul_awards_opponent_and_passes_turn(self):
        state = FrameState(break_score=9, scores={PlayerId.P1: 9, PlayerId.P2: 0})
        result = apply_action(state, Action.foul(5))

        new_state = result.new_state
        assert new_state.scores == {PlayerId.P1: 9, PlayerId.P2: 5}
        assert new_state.current_player == PlayerId.P2
        assert new_state.break_score == 0
        assert new_state.last_action == LastAction.FOUL
        assert new_state.history[-1] == HistoryEntry.foul(PlayerId.P1, 5)

    def test_foul_leaves_table_alone(self):
        state = FrameState(reds_remaining=7, last_action=LastAction.POTTED_RED)
        result = apply_action(state, Action.foul(7))
        assert result.new_state.reds_remaining == 7
        assert result.new_state.colors_on_table == state.colors_on_table

    def test_invalid_foul_values(self):
        for points in (0, 3, 8, -4):
            result = apply_action(FrameState(), Action.foul(points))
            assert result.error_code == ErrorCode.INVALID_FOUL_VALUE

    def test_foul_value_must_be_int(self):
        """5.0 compares equal to 5 but is not a foul value."""
        for points in (5.0, True, "5", None):
            result = apply_action(FrameState(), Action.foul(points))
            assert not result.success
            assert result.error_code == ErrorCode.INVALID_FOUL_VALUE


class TestEndTurnAction:
    """Tests for end turn action."""

    def test_end_turn(self):
        state = FrameState(break_score=12, current_player=PlayerId.P2)
        result = apply_action(state, Action.end_turn())

        new_state = result.new_state
        assert new_state.current_player == PlayerId.P1
        assert new_state.break_score == 0
        assert new_state.last_action == LastAction.ENDED_TURN
        assert new_state.history[-1].kind == EventKind.ENDED_TURN
        assert new_state.history[-1].player == PlayerId.P2


class TestTiebreakActions:
    """Tests for coin toss and play on the respotted black."""

    def _awaiting(self):
        colors = {c: c is Ball.BLACK for c in COLOR_ORDER}
        return FrameState(
            scores={PlayerId.P1: 57, PlayerId.P2: 57},
            reds_remaining=0,
            colors_on_table=colors,
            tie_break=TieBreak(),
        )

    def test_coin_toss_sets_player(self):
        result = apply_action(self._awaiting(), Action.resolve_coin_toss(PlayerId.P2))

        new_state = result.new_state
        assert new_state.tie_break == TieBreak(coin_toss_winner=PlayerId.P2)
        assert new_state.current_player == PlayerId.P2
        assert new_state.history[-1].kind == EventKind.COIN_TOSS
        assert new_state.history[-1].winner == PlayerId.P2

    def test_play_blocked_until_toss(self):
        state = self._awaiting()
        for action in (Action.pot(Ball.BLACK), Action.foul(4), Action.end_turn()):
            result = apply_action(state, action)
            assert result.error_code == ErrorCode.AWAITING_COIN_TOSS

    def test_coin_toss_outside_tiebreak_rejected(self):
        result = apply_action(FrameState(), Action.resolve_coin_toss(PlayerId.P1))
        assert result.error_code == ErrorCode.NO_COIN_TOSS_PENDING

    def test_second_coin_toss_rejected(self):
        state = apply_action(self._awaiting(), Action.resolve_coin_toss(PlayerId.P1)).new_state
        result = apply_action(state, Action.resolve_coin_toss(PlayerId.P2))
        assert result.error_code == ErrorCode.NO_COIN_TOSS_PENDING

    def test_black_wins_tiebreak(self):
        state = apply_action(self._awaiting(), Action.resolve_coin_toss(PlayerId.P1)).new_state
        result = apply_action(state, Action.pot(Ball.BLACK))

        new_state = result.new_state
        assert new_state.frame_over
        assert new_state.tie_break is None
        assert new_state.colors_on_table[Ball.BLACK] is False
        assert new_state.winner == PlayerId.P1
        assert new_state.scores == {PlayerId.P1: 64, PlayerId.P2: 57}

    def test_foul_on_respotted_black_loses(self):
        state = apply_action(self._awaiting(), Action.resolve_coin_toss(PlayerId.P1)).new_state
        result = apply_action(state, Action.foul(7))

        new_state = result.new_state
        assert new_state.frame_over
        assert new_state.tie_break is None
        assert new_state.winner == PlayerId.P2

    def test_miss_on_respotted_black_passes_turn(self):
        state = apply_action(self._awaiting(), Action.resolve_coin_toss(PlayerId.P1)).new_state
        result = apply_action(state, Action.end_turn())

        new_state = result.new_state
        assert not new_state.frame_over
        assert new_state.current_player == PlayerId.P2
        assert new_state.tie_break == TieBreak(coin_toss_winner=PlayerId.P1)


class TestHousekeeping:
    """Tests for reset and rename."""

    def test_reset_restores_initial_state(self):
        state = FrameState(
            scores={PlayerId.P1: 70, PlayerId.P2: 3},
            reds_remaining=2,
            break_score=30,
            current_player=PlayerId.P2,
            history=(HistoryEntry.ended_turn(PlayerId.P1),),
        )
        result = apply_action(state, Action.reset_frame())
        assert result.new_state == FrameState()

    def test_reset_allowed_after_frame_over(self):
        result = apply_action(FrameState(frame_over=True), Action.reset_frame())
        assert result.success
        assert not result.new_state.frame_over

    def test_reset_keeps_player_names(self):
        names = {PlayerId.P1: "Ronnie", PlayerId.P2: "Judd"}
        result = apply_action(FrameState(player_names=names), Action.reset_frame())
        assert result.new_state.player_names == names

    def test_rename_strips_whitespace(self):
        result = apply_action(FrameState(), Action.set_player_name(PlayerId.P2, "  Judd  "))
        assert result.new_state.player_names[PlayerId.P2] == "Judd"
        assert result.new_state.history == ()

    def test_invalid_names_rejected(self):
        for name in ("", "   ", "x" * 21):
            result = apply_action(FrameState(), Action.set_player_name(PlayerId.P1, name))
            assert result.error_code == ErrorCode.INVALID_PLAYER_NAME

    def test_non_text_name_rejected(self):
        for name in (5, None, ["Ronnie"]):
            result = apply_action(FrameState(), Action.set_player_name(PlayerId.P1, name))
            assert result.error_code == ErrorCode.INVALID_PLAYER_NAME

    def test_rename_allowed_after_frame_over(self):
        result = apply_action(FrameState(frame_over=True), Action.set_player_name(PlayerId.P1, "Ronnie"))
        assert result.success


class TestRejectedActionsChangeNothing:
    """Failed actions leave the input state untouched."""

    def test_state_not_mutated(self):
        state = FrameState(reds_remaining=0, last_action=LastAction.ENDED_TURN)
        snapshot = state.clone()

        apply_action(state, Action.pot(Ball.BLACK))
        apply_action(state, Action.foul(2))
        apply_action(state, Action.resolve_coin_toss(PlayerId.P2))

        assert state == snapshot

    def test_successful_action_does_not_mutate_input(self):
        state = FrameState()
        snapshot = state.clone()
        apply_action(state, Action.pot(Ball.RED))
        assert state == snapshot


class TestActionFromDict:
    """Tests for building actions from replay JSON."""

    def test_parses_each_type(self):
        assert Action.from_dict({"action": "pot", "ball": "Red"}) == Action.pot(Ball.RED)
        assert Action.from_dict({"action": "foul", "points": 5}) == Action.foul(5)
        assert Action.from_dict({"action": "end_turn"}).action_type == ActionType.END_TURN
        assert Action.from_dict({"action": "resolve_coin_toss", "winner": "p2"}) == (
            Action.resolve_coin_toss(PlayerId.P2)
        )
        assert Action.from_dict({"action": "set_player_name", "player": "1", "name": "Ronnie"}) == (
            Action.set_player_name(PlayerId.P1, "Ronnie")
        )

    def test_unknown_ball_raises(self):
        with pytest.raises(ValueError):
            Action.from_dict({"action": "pot", "ball": "purple"})
        with pytest.raises(ValueError):
            Action.from_dict({"ball": "red"})

    def test_points_must_be_whole(self):
        assert Action.from_dict({"action": "foul", "points": 6.0}) == Action.foul(6)
        for points in (5.9, "5", True, None):
            with pytest.raises(ValueError):
                Action.from_dict({"action": "foul", "points": points})

    def test_non_text_ball_or_player_raises(self):
        with pytest.raises(ValueError):
            Action.from_dict({"action": "pot", "ball": 1})
        with pytest.raises(ValueError):
            Action.from_dict({"action": "resolve_coin_toss", "winner": 2})
        with pytest.raises(ValueError):
            Ball.parse(None)
        with pytest.raises(ValueError):
            PlayerId.parse(1)
