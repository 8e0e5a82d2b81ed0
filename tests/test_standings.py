"""
Unit tests for the points table.
"""
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from league.models import Match
from league.standings import compute_table, league_table


def row_for(table, team_id):
    return next(r for r in table if r['team_id'] == team_id)


class TestComputeTable:
    """Tests for folding finished matches into standings."""

    def test_empty_table(self):
        table = compute_table([], ['A', 'B'])
        assert [r['team_id'] for r in table] == ['A', 'B']
        assert all(r['played'] == 0 and r['points'] == 0 for r in table)

    def test_win_and_loss(self, finished_match):
        table = compute_table([finished_match('A', 'B', 2, 1)], ['A', 'B'])
        a, b = row_for(table, 'A'), row_for(table, 'B')
        assert (a['played'], a['won'], a['drawn'], a['lost'], a['points']) == (1, 1, 0, 0, 3)
        assert (b['played'], b['won'], b['drawn'], b['lost'], b['points']) == (1, 0, 0, 1, 0)
        assert (a['goals_for'], a['goals_against'], a['goal_difference']) == (2, 1, 1)
        assert (b['goals_for'], b['goals_against'], b['goal_difference']) == (1, 2, -1)

    def test_draw_gives_one_point_each(self, finished_match):
        table = compute_table([finished_match('A', 'B', 1, 1)], ['A', 'B'])
        for row in table:
            assert (row['drawn'], row['points']) == (1, 1)

    def test_unfinished_matches_ignored(self):
        live = Match(tournament_id='t', number=1, team_a_id='A', team_b_id='B', round='League Stage',
                     status='Live', score_a=4, score_b=0)
        table = compute_table([live], ['A', 'B'])
        assert all(r['played'] == 0 for r in table)

    def test_sorted_by_points_then_goal_difference(self, finished_match):
        matches = [
            finished_match('A', 'B', 1, 0),
            finished_match('C', 'D', 5, 0),
            finished_match('A', 'C', 0, 0),
            finished_match('B', 'D', 2, 2),
        ]
        table = compute_table(matches, ['A', 'B', 'C', 'D'])
        # A and C both have 4 points; C has the better goal difference
        assert [r['team_id'] for r in table] == ['C', 'A', 'B', 'D']

    def test_full_ties_keep_input_order(self, finished_match):
        """Equal points and goal difference: order follows the team list."""
        matches = [finished_match('A', 'B', 1, 1), finished_match('C', 'D', 2, 2)]
        assert [r['team_id'] for r in compute_table(matches, ['D', 'B', 'C', 'A'])] == ['D', 'B', 'C', 'A']
        assert [r['team_id'] for r in compute_table(matches, ['A', 'C', 'B', 'D'])] == ['A', 'C', 'B', 'D']

    def test_penalty_winner_counts_as_win(self, finished_match):
        final = finished_match('A', 'B', 1, 1, round='Final', winner_id='B')
        table = compute_table([final], ['A', 'B'])
        assert row_for(table, 'B')['won'] == 1
        assert row_for(table, 'B')['points'] == 3
        assert row_for(table, 'A')['lost'] == 1
        assert row_for(table, 'A')['goal_difference'] == 0

    def test_unknown_team_matches_ignored(self, finished_match):
        table = compute_table([finished_match('A', 'X', 3, 0)], ['A', 'B'])
        assert row_for(table, 'A')['played'] == 0

    def test_custom_filter(self, finished_match):
        matches = [finished_match('A', 'B', 1, 0, round='Group 1'), finished_match('A', 'B', 0, 1, round='Group 2')]
        table = compute_table(matches, ['A', 'B'], include=lambda r: r == 'Group 2')
        assert row_for(table, 'B')['points'] == 3
        assert row_for(table, 'A')['points'] == 0


class TestLeagueTable:
    """Tests for the league-stage-only table."""

    @pytest.mark.parametrize('round_name', ['Final', 'Semi-Final', 'Quarter-Final', 'Eliminator'])
    def test_knockout_rounds_excluded(self, finished_match, round_name):
        matches = [finished_match('A', 'B', 0, 1), finished_match('A', 'B', 3, 0, round=round_name)]
        league = league_table(matches, ['A', 'B'])
        everything = compute_table(matches, ['A', 'B'])
        assert [r['team_id'] for r in league] == ['B', 'A']
        assert row_for(league, 'A')['played'] == 1
        assert row_for(everything, 'A')['played'] == 2
        assert row_for(everything, 'A')['points'] == 3

    def test_custom_round_labels_count_as_league(self, finished_match):
        table = league_table([finished_match('A', 'B', 2, 0, round='Group Stage')], ['A', 'B'])
        assert row_for(table, 'A')['points'] == 3
