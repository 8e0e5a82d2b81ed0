"""
JSON views returned by the REST API.

Stored records only hold references (ids). Views keep those ids under their
``...Id`` keys and add the resolved record under a separate key, so clients
never have to guess whether a field is an id or an object. Password hashes
never leave this module.
"""
from typing import Dict, List, Optional


def profile_view(profile) -> Dict:
    return {
        'name': profile.name,
        'age': profile.age,
        'position': profile.position,
        'imageUrl': profile.image_url,
        'year': profile.year,
        'mobile': profile.mobile,
    }


def user_view(user) -> Dict:
    return {
        'id': user.id,
        'email': user.email,
        'profile': profile_view(user.profile),
        'created': user.created,
    }


def player_ref(user_id: Optional[str], users_by_id: Dict, name: Optional[str] = None) -> Optional[Dict]:
    """Resolve a player reference, falling back to a free-text name."""
    if user_id:
        user = users_by_id.get(user_id)
        if user is None:
            return {'id': user_id, 'name': None, 'imageUrl': None}
        return {'id': user.id, 'name': user.profile.name, 'imageUrl': user.profile.image_url}
    if name:
        return {'id': None, 'name': name, 'imageUrl': None}
    return None


def team_summary(team_id: Optional[str], teams_by_id: Dict) -> Optional[Dict]:
    if not team_id:
        return None
    team = teams_by_id.get(team_id)
    if team is None:
        return {'id': team_id, 'name': None, 'logoUrl': None}
    return {'id': team.id, 'name': team.name, 'logoUrl': team.logo_url}


def team_view(team, users_by_id: Dict) -> Dict:
    members = [users_by_id[m] for m in team.members if m in users_by_id]
    return {
        'id': team.id,
        'name': team.name,
        'logoUrl': team.logo_url,
        'inviteCode': team.invite_code,
        'adminIds': list(team.admin_ids),
        'memberIds': list(team.members),
        'captainId': team.captain_id,
        'viceCaptainId': team.vice_captain_id,
        'members': [user_view(u) for u in members],
        'admins': [player_ref(a, users_by_id) for a in team.admin_ids],
        'captain': player_ref(team.captain_id, users_by_id),
        'viceCaptain': player_ref(team.vice_captain_id, users_by_id),
        'created': team.created,
    }


def goal_view(goal, teams_by_id: Dict, users_by_id: Dict) -> Dict:
    return {
        'id': goal.id,
        'teamId': goal.team_id,
        'team': team_summary(goal.team_id, teams_by_id),
        'scorerId': goal.scorer_id,
        'scorer': player_ref(goal.scorer_id, users_by_id, goal.scorer_name),
        'assistId': goal.assist_id,
        'assist': player_ref(goal.assist_id, users_by_id, goal.assist_name),
        'isOwnGoal': goal.is_own_goal,
        'minute': goal.minute,
    }


def card_view(card, teams_by_id: Dict, users_by_id: Dict) -> Dict:
    return {
        'id': card.id,
        'teamId': card.team_id,
        'team': team_summary(card.team_id, teams_by_id),
        'playerId': card.player_id,
        'player': player_ref(card.player_id, users_by_id, card.player_name),
        'cardType': card.card_type,
        'minute': card.minute,
    }


def match_view(match, teams_by_id: Dict, users_by_id: Dict) -> Dict:
    return {
        'id': match.id,
        'tournamentId': match.tournament_id,
        'matchNumber': match.number,
        'round': match.round,
        'status': match.status,
        'date': match.date,
        'time': match.time,
        'teamAId': match.team_a_id,
        'teamBId': match.team_b_id,
        'teamA': team_summary(match.team_a_id, teams_by_id),
        'teamB': team_summary(match.team_b_id, teams_by_id),
        'scoreA': match.score_a,
        'scoreB': match.score_b,
        'penaltyScoreA': match.penalty_score_a,
        'penaltyScoreB': match.penalty_score_b,
        'winnerId': match.winner_id,
        'goals': [goal_view(g, teams_by_id, users_by_id) for g in match.goals],
        'cards': [card_view(c, teams_by_id, users_by_id) for c in match.cards],
        'playerOfTheMatchId': match.player_of_the_match_id,
        'playerOfTheMatch': player_ref(match.player_of_the_match_id, users_by_id),
    }


def standings_view(rows: List[Dict], teams_by_id: Dict) -> List[Dict]:
    return [{
        'position': position,
        'teamId': row['team_id'],
        'team': team_summary(row['team_id'], teams_by_id),
        'played': row['played'],
        'won': row['won'],
        'drawn': row['drawn'],
        'lost': row['lost'],
        'goalsFor': row['goals_for'],
        'goalsAgainst': row['goals_against'],
        'goalDifference': row['goal_difference'],
        'points': row['points'],
    } for position, row in enumerate(rows, start=1)]


def tournament_view(tournament, matches, teams_by_id: Dict, users_by_id: Dict) -> Dict:
    teams = [teams_by_id[t] for t in tournament.team_ids if t in teams_by_id]
    return {
        'id': tournament.id,
        'name': tournament.name,
        'logoUrl': tournament.logo_url,
        'inviteCode': tournament.invite_code,
        'adminId': tournament.admin_id,
        'admin': player_ref(tournament.admin_id, users_by_id),
        'teamIds': list(tournament.team_ids),
        'teams': [team_view(t, users_by_id) for t in teams],
        'isSchedulingDone': tournament.is_scheduling_done,
        'matches': [match_view(m, teams_by_id, users_by_id) for m in matches],
        'created': tournament.created,
    }


def stats_view(stats: Dict) -> Dict:
    return {
        'matchesPlayed': stats['matches_played'],
        'goals': stats['goals'],
        'ownGoals': stats['own_goals'],
        'assists': stats['assists'],
        'yellowCards': stats['yellow_cards'],
        'redCards': stats['red_cards'],
        'playerOfTheMatch': stats['player_of_the_match'],
    }
