"""
Match status transitions and winner resolution.
"""
from league.errors import ConflictError, ValidationError
from league.models import MATCH_STATUSES, FINISHED, is_knockout


def _is_penalty_score(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def resolve_winner(match, penalty_score_a=None, penalty_score_b=None):
    """
    Decide the winner of ``match`` from its current score.

    Returns ``(winner_id, penalties)`` where ``penalties`` is the
    ``(penalty_score_a, penalty_score_b)`` pair to store, or None.

    - Different scores: the higher-scoring team wins.
    - Level score in a knockout round: two non-negative, non-equal penalty
      scores are required and the higher one wins.
    - Level score in any other round: a draw, winner is None.
    """
    if match.score_a > match.score_b:
        return match.team_a_id, None
    if match.score_b > match.score_a:
        return match.team_b_id, None
    if not is_knockout(match.round):
        return None, None

    if (not _is_penalty_score(penalty_score_a) or not _is_penalty_score(penalty_score_b)
            or penalty_score_a == penalty_score_b):
        raise ValidationError('Valid, non-equal penalty scores are required for a knockout draw.')
    winner_id = match.team_a_id if penalty_score_a > penalty_score_b else match.team_b_id
    return winner_id, (penalty_score_a, penalty_score_b)


def update_status(match, status, penalty_score_a=None, penalty_score_b=None):
    """Move ``match`` forward to ``status``.

    Statuses only move forward (Scheduled -> Live -> Finished, skipping Live is
    allowed). A rejected finish leaves the match unchanged.
    """
    if status not in MATCH_STATUSES:
        raise ValidationError(f"Status must be one of: {', '.join(MATCH_STATUSES)}")
    if MATCH_STATUSES.index(status) <= MATCH_STATUSES.index(match.status):
        raise ConflictError(f'Cannot change match status from {match.status} to {status}')

    if status == FINISHED:
        winner_id, penalties = resolve_winner(match, penalty_score_a, penalty_score_b)
        match.winner_id = winner_id
        if penalties:
            match.penalty_score_a, match.penalty_score_b = penalties
    match.status = status
    return match
