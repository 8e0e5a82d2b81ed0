"""
Points table for a tournament.
"""
from typing import Callable, Dict, List, Optional

from league.models import FINISHED, is_knockout

WIN_POINTS = 3
DRAW_POINTS = 1


def _empty_row(team_id: str) -> Dict:
    return {
        'team_id': team_id,
        'played': 0,
        'won': 0,
        'drawn': 0,
        'lost': 0,
        'goals_for': 0,
        'goals_against': 0,
        'goal_difference': 0,
        'points': 0,
    }


def compute_table(matches, team_ids: List[str], include: Optional[Callable[[str], bool]] = None) -> List[Dict]:
    """
    Fold finished matches into one row per team.

    ``include`` filters matches by round label; every round counts when it is
    None. The result of a match comes from its stored ``winner_id`` so a
    knockout decided on penalties counts as a win and a loss.

    Ranking: points (desc), goal difference (desc). Teams still level keep
    the order they have in ``team_ids``.
    """
    table = {team_id: _empty_row(team_id) for team_id in team_ids}

    for match in matches:
        if match.status != FINISHED:
            continue
        if include is not None and not include(match.round):
            continue
        if match.team_a_id not in table or match.team_b_id not in table:
            continue

        row_a = table[match.team_a_id]
        row_b = table[match.team_b_id]
        row_a['played'] += 1
        row_b['played'] += 1
        row_a['goals_for'] += match.score_a
        row_a['goals_against'] += match.score_b
        row_b['goals_for'] += match.score_b
        row_b['goals_against'] += match.score_a

        if match.winner_id == match.team_a_id:
            winner, loser = row_a, row_b
        elif match.winner_id == match.team_b_id:
            winner, loser = row_b, row_a
        else:
            row_a['drawn'] += 1
            row_b['drawn'] += 1
            row_a['points'] += DRAW_POINTS
            row_b['points'] += DRAW_POINTS
            continue
        winner['won'] += 1
        winner['points'] += WIN_POINTS
        loser['lost'] += 1

    for row in table.values():
        row['goal_difference'] = row['goals_for'] - row['goals_against']

    # sorted() is stable, so remaining ties keep team_ids order
    return sorted(table.values(), key=lambda r: (-r['points'], -r['goal_difference']))


def league_table(matches, team_ids: List[str]) -> List[Dict]:
    """Table over League Stage (non-knockout) matches only."""
    return compute_table(matches, team_ids, include=lambda round_name: not is_knockout(round_name))
