"""
Unit tests for match status transitions and winner resolution.
"""
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from league.errors import ConflictError, ValidationError
from league.models import Match
from league.outcome import resolve_winner, update_status


def make_match(score_a, score_b, round='League Stage', status='Live'):
    return Match(tournament_id='t', number=1, team_a_id='A', team_b_id='B', round=round,
                 status=status, score_a=score_a, score_b=score_b)


class TestResolveWinner:
    """Tests for deciding a match winner."""

    def test_team_a_wins(self):
        assert resolve_winner(make_match(2, 1)) == ('A', None)

    def test_team_b_wins(self):
        assert resolve_winner(make_match(0, 3)) == ('B', None)

    def test_league_draw(self):
        assert resolve_winner(make_match(1, 1)) == (None, None)

    def test_league_draw_ignores_penalties(self):
        assert resolve_winner(make_match(1, 1), 5, 4) == (None, None)

    def test_decisive_knockout_needs_no_penalties(self):
        assert resolve_winner(make_match(3, 2, round='Final')) == ('A', None)

    @pytest.mark.parametrize('round_name', ['Final', 'Semi-Final', 'Quarter-Final', 'Eliminator'])
    def test_knockout_draw_decided_on_penalties(self, round_name):
        assert resolve_winner(make_match(1, 1, round=round_name), 5, 4) == ('A', (5, 4))
        assert resolve_winner(make_match(1, 1, round=round_name), 2, 3) == ('B', (2, 3))

    @pytest.mark.parametrize('penalties', [
        (None, None),
        (5, None),
        (4, 4),
        (-1, 3),
        ('5', '4'),
        (True, False),
        (4.5, 3),
    ])
    def test_knockout_draw_invalid_penalties(self, penalties):
        with pytest.raises(ValidationError):
            resolve_winner(make_match(2, 2, round='Final'), *penalties)


class TestUpdateStatus:
    """Tests for status transitions."""

    def test_scheduled_to_live(self):
        match = make_match(0, 0, status='Scheduled')
        update_status(match, 'Live')
        assert match.status == 'Live'
        assert match.winner_id is None

    def test_finish_sets_winner(self):
        """scoreA=2, scoreB=1 in a league match: team A wins."""
        match = make_match(2, 1)
        update_status(match, 'Finished')
        assert match.status == 'Finished'
        assert match.winner_id == 'A'

    def test_finish_league_draw(self):
        match = make_match(1, 1)
        update_status(match, 'Finished')
        assert match.winner_id is None
        assert match.penalty_score_a is None
        assert match.penalty_score_b is None

    def test_finish_knockout_draw_without_penalties_rejected(self):
        """A tied Final without penalties is rejected and the match is untouched."""
        match = make_match(1, 1, round='Final')
        with pytest.raises(ValidationError):
            update_status(match, 'Finished')
        assert match.status == 'Live'
        assert match.winner_id is None
        assert match.penalty_score_a is None

    def test_finish_knockout_draw_with_penalties(self):
        match = make_match(1, 1, round='Final')
        update_status(match, 'Finished', 5, 4)
        assert match.status == 'Finished'
        assert match.winner_id == 'A'
        assert (match.penalty_score_a, match.penalty_score_b) == (5, 4)

    def test_scheduled_straight_to_finished(self):
        match = make_match(0, 1, status='Scheduled')
        update_status(match, 'Finished')
        assert match.winner_id == 'B'

    @pytest.mark.parametrize('current,target', [
        ('Live', 'Scheduled'),
        ('Finished', 'Live'),
        ('Finished', 'Scheduled'),
        ('Live', 'Live'),
        ('Finished', 'Finished'),
    ])
    def test_no_backward_or_repeated_transition(self, current, target):
        match = make_match(1, 0, status=current)
        with pytest.raises(ConflictError):
            update_status(match, target)
        assert match.status == current

    @pytest.mark.parametrize('status', [None, 'Paused', 'finished'])
    def test_unknown_status(self, status):
        with pytest.raises(ValidationError):
            update_status(make_match(0, 0), status)
