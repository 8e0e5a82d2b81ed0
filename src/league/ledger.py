"""
Goal and card ledger for a single match.

Events are only ever appended. A goal also moves the score of the team it
benefits, which for an own goal is the scorer's opponent.
"""
from typing import Dict, Optional

from league.errors import ConflictError, ValidationError
from league.models import Card, Goal, CARD_TYPES, FINISHED


def ensure_open(match):
    """Events can only be recorded while a match is Scheduled or Live."""
    if match.status == FINISHED:
        raise ConflictError('Match is already finished')


def resolve_player_team(match, player_id: str, teams_by_id: Dict, preferred_team_id: Optional[str] = None) -> str:
    """
    Return the id of the match team whose roster contains ``player_id``.

    Team A is checked before team B. A player registered on both rosters is
    assigned to ``preferred_team_id`` when that is one of them.
    """
    candidates = []
    for team_id in match.team_ids:
        team = teams_by_id.get(team_id)
        if team is not None and team.is_member(player_id):
            candidates.append(team_id)
    if not candidates:
        raise ValidationError('Player is not part of any team in this match')
    if preferred_team_id in candidates:
        return preferred_team_id
    return candidates[0]


def _clean_name(name):
    if not isinstance(name, str):
        return None
    return name.strip() or None


def _acting_team(match, teams_by_id, player_id, player_name, team_id):
    if player_id:
        return resolve_player_team(match, player_id, teams_by_id, preferred_team_id=team_id)
    if not _clean_name(player_name):
        raise ValidationError('A registered player or a player name is required')
    if team_id not in match.team_ids:
        raise ValidationError('Team must be one of the two teams in this match')
    return team_id


def record_goal(match, teams_by_id, scorer_id=None, scorer_name=None, assist_id=None,
                assist_name=None, is_own_goal=False, team_id=None) -> Goal:
    """Append a goal to ``match`` and credit the benefiting team.

    A registered scorer's team comes from roster membership; a free-text
    scorer needs ``team_id`` naming the team they play for.
    """
    ensure_open(match)
    scorer_team_id = _acting_team(match, teams_by_id, scorer_id, scorer_name, team_id)
    benefiting_team_id = match.opponent_of(scorer_team_id) if is_own_goal else scorer_team_id

    if benefiting_team_id == match.team_a_id:
        match.score_a += 1
    else:
        match.score_b += 1

    goal = Goal(
        team_id=benefiting_team_id,
        scorer_id=scorer_id or None,
        scorer_name=None if scorer_id else _clean_name(scorer_name),
        assist_id=assist_id or None,
        assist_name=None if assist_id else _clean_name(assist_name),
        is_own_goal=bool(is_own_goal),
    )
    match.goals.append(goal)
    return goal


def record_card(match, teams_by_id, card_type, player_id=None, player_name=None, team_id=None) -> Card:
    """Append a card to ``match``. Cards never affect the score."""
    ensure_open(match)
    if card_type not in CARD_TYPES:
        raise ValidationError(f"Card type must be one of: {', '.join(CARD_TYPES)}")
    player_team_id = _acting_team(match, teams_by_id, player_id, player_name, team_id)
    card = Card(
        team_id=player_team_id,
        card_type=card_type,
        player_id=player_id or None,
        player_name=None if player_id else _clean_name(player_name),
    )
    match.cards.append(card)
    return card


def set_player_of_the_match(match, player_id, teams_by_id):
    """Name a player from either roster as player of the match."""
    if not player_id:
        raise ValidationError('Player is required')
    resolve_player_team(match, player_id, teams_by_id)
    match.player_of_the_match_id = player_id
    return match
