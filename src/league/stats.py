"""
Per-player statistics across matches.
"""
from typing import Dict

from league.models import FINISHED


def player_stats(user_id: str, matches, teams_by_id: Dict) -> Dict:
    """Aggregate a player's record over ``matches``.

    A finished match counts as played when the player is on either roster.
    Own goals are tallied separately and never count as goals.

    Returns:
        Dict with matches_played, goals, own_goals, assists, yellow_cards,
        red_cards and player_of_the_match.
    """
    stats = {
        'matches_played': 0,
        'goals': 0,
        'own_goals': 0,
        'assists': 0,
        'yellow_cards': 0,
        'red_cards': 0,
        'player_of_the_match': 0,
    }

    for match in matches:
        rosters = [teams_by_id.get(team_id) for team_id in match.team_ids]
        if match.status == FINISHED and any(t is not None and t.is_member(user_id) for t in rosters):
            stats['matches_played'] += 1

        for goal in match.goals:
            if goal.scorer_id == user_id:
                if goal.is_own_goal:
                    stats['own_goals'] += 1
                else:
                    stats['goals'] += 1
            if goal.assist_id == user_id:
                stats['assists'] += 1

        for card in match.cards:
            if card.player_id != user_id:
                continue
            if card.card_type == 'Yellow':
                stats['yellow_cards'] += 1
            elif card.card_type == 'Red':
                stats['red_cards'] += 1

        if match.player_of_the_match_id == user_id:
            stats['player_of_the_match'] += 1

    return stats
