"""
Round-robin fixture generation and manual fixture management.
"""
from typing import List

from league.errors import ConflictError, ValidationError
from league.models import Match, LEAGUE_STAGE, SCHEDULED


def generate_round_robin(tournament_id: str, team_ids: List[str]) -> List[Match]:
    """
    Create one League Stage match for every pair of teams.

    Pairs are enumerated by a double loop over ``i < j`` so the order is
    team[0] vs team[1], team[0] vs team[2], ..., team[1] vs team[2], ...
    and match numbers run 1..N*(N-1)/2 in that order.
    """
    if len(team_ids) < 2:
        raise ValidationError('Need at least 2 teams to schedule matches')
    if len(set(team_ids)) != len(team_ids):
        raise ValidationError('Teams must be distinct to schedule matches')

    matches = []
    num_teams = len(team_ids)
    for i in range(num_teams):
        for j in range(i + 1, num_teams):
            matches.append(Match(
                tournament_id=tournament_id,
                number=len(matches) + 1,
                team_a_id=team_ids[i],
                team_b_id=team_ids[j],
                round=LEAGUE_STAGE,
            ))
    return matches


def schedule_tournament(tournament) -> List[Match]:
    """Build a fresh schedule for ``tournament`` and mark scheduling as done.

    The returned list replaces every existing match of the tournament.
    """
    matches = generate_round_robin(tournament.id, tournament.team_ids)
    tournament.is_scheduling_done = True
    return matches


def next_match_number(matches) -> int:
    return max((m.number for m in matches), default=0) + 1


def _check_participants(tournament, team_a_id, team_b_id):
    if not team_a_id or not team_b_id:
        raise ValidationError('Both teams are required')
    if team_a_id == team_b_id:
        raise ValidationError('A team cannot play against itself')
    for team_id in (team_a_id, team_b_id):
        if not tournament.has_team(team_id):
            raise ValidationError('Both teams must be part of this tournament')


def create_manual_match(tournament, matches, team_a_id, team_b_id, round_name) -> Match:
    """Create a single match outside the round-robin (e.g. a knockout round)."""
    round_name = round_name.strip() if isinstance(round_name, str) else ''
    if not round_name:
        raise ValidationError('Round is required')
    _check_participants(tournament, team_a_id, team_b_id)
    return Match(
        tournament_id=tournament.id,
        number=next_match_number(matches),
        team_a_id=team_a_id,
        team_b_id=team_b_id,
        round=round_name,
    )


def update_match_details(match, tournament, team_a_id=None, team_b_id=None, **when):
    """Patch teams, date or time of a fixture.

    Only truthy team ids replace the current ones, and only on a Scheduled
    match with no recorded goals or cards. ``date`` and ``time`` are written
    whenever they are passed, so passing None clears them.
    """
    new_a = team_a_id or match.team_a_id
    new_b = team_b_id or match.team_b_id
    if (new_a, new_b) != (match.team_a_id, match.team_b_id):
        if match.status != SCHEDULED or match.goals or match.cards:
            raise ConflictError('Teams can only be changed before a match has started')
        _check_participants(tournament, new_a, new_b)
    match.team_a_id = new_a
    match.team_b_id = new_b
    for field in ('date', 'time'):
        if field in when:
            setattr(match, field, when[field])
    return match
