"""
YAML document store for league data.

Layout under ``data_dir``::

    users.yaml                              {'users': [...]}
    teams.yaml                              {'teams': [...]}
    tournaments/<id>/tournament.yaml        one tournament
    tournaments/<id>/matches/<match>.yaml   one match per file
    .locks/<name>.lock                      FileLock files

Callers hold the matching lock around every read-modify-write.
"""
import logging
import os
import shutil
from typing import List, Optional

import yaml
from filelock import FileLock

from league.models import Match, Team, Tournament, User, is_valid_id

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TIMEOUT = 10


def _lock_path(data_dir: str, name: str) -> str:
    locks_dir = os.path.join(data_dir, '.locks')
    os.makedirs(locks_dir, exist_ok=True)
    return os.path.join(locks_dir, f'{name}.lock')


def data_lock(data_dir: str, name: str, timeout: float = DEFAULT_LOCK_TIMEOUT) -> FileLock:
    """Lock guarding one shared document (``users``, ``teams`` or ``tournaments``)."""
    return FileLock(_lock_path(data_dir, name), timeout=timeout)


def tournament_lock(data_dir: str, tournament_id: str, timeout: float = DEFAULT_LOCK_TIMEOUT) -> FileLock:
    """Lock guarding one tournament document and all of its matches."""
    return FileLock(_lock_path(data_dir, f'tournament-{tournament_id}'), timeout=timeout)


def _read_yaml(path: str):
    if not os.path.exists(path):
        return None
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.warning(f'Failed to parse {path}: {e}')
        return None


def _write_yaml(path: str, data):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)


def load_users(data_dir: str) -> List[User]:
    """Load the user registry."""
    data = _read_yaml(os.path.join(data_dir, 'users.yaml'))
    if not data:
        return []
    return [User.from_dict(u) for u in data.get('users') or []]


def save_users(data_dir: str, users: List[User]):
    _write_yaml(os.path.join(data_dir, 'users.yaml'), {'users': [u.to_dict() for u in users]})


def load_teams(data_dir: str) -> List[Team]:
    """Load every team."""
    data = _read_yaml(os.path.join(data_dir, 'teams.yaml'))
    if not data:
        return []
    return [Team.from_dict(t) for t in data.get('teams') or []]


def save_teams(data_dir: str, teams: List[Team]):
    _write_yaml(os.path.join(data_dir, 'teams.yaml'), {'teams': [t.to_dict() for t in teams]})


def _tournament_dir(data_dir: str, tournament_id: str) -> str:
    return os.path.join(data_dir, 'tournaments', tournament_id)


def list_tournament_ids(data_dir: str) -> List[str]:
    tournaments_dir = os.path.join(data_dir, 'tournaments')
    if not os.path.isdir(tournaments_dir):
        return []
    return sorted(name for name in os.listdir(tournaments_dir) if is_valid_id(name))


def load_tournament(data_dir: str, tournament_id: str) -> Optional[Tournament]:
    """Load one tournament, or None when the id is unknown or malformed."""
    if not is_valid_id(tournament_id):
        return None
    data = _read_yaml(os.path.join(_tournament_dir(data_dir, tournament_id), 'tournament.yaml'))
    if not data:
        return None
    return Tournament.from_dict(data)


def load_tournaments(data_dir: str) -> List[Tournament]:
    """Load every tournament, oldest first."""
    tournaments = []
    for tournament_id in list_tournament_ids(data_dir):
        tournament = load_tournament(data_dir, tournament_id)
        if tournament is not None:
            tournaments.append(tournament)
    tournaments.sort(key=lambda t: t.created or '')
    return tournaments


def save_tournament(data_dir: str, tournament: Tournament):
    path = os.path.join(_tournament_dir(data_dir, tournament.id), 'tournament.yaml')
    _write_yaml(path, tournament.to_dict())


def _matches_dir(data_dir: str, tournament_id: str) -> str:
    return os.path.join(_tournament_dir(data_dir, tournament_id), 'matches')


def load_matches(data_dir: str, tournament_id: str) -> List[Match]:
    """Load the matches of a tournament ordered by match number."""
    matches_dir = _matches_dir(data_dir, tournament_id)
    if not is_valid_id(tournament_id) or not os.path.isdir(matches_dir):
        return []
    matches = []
    for filename in os.listdir(matches_dir):
        if not filename.endswith('.yaml'):
            continue
        data = _read_yaml(os.path.join(matches_dir, filename))
        if data:
            matches.append(Match.from_dict(data))
    matches.sort(key=lambda m: m.number)
    return matches


def load_match(data_dir: str, tournament_id: str, match_id: str) -> Optional[Match]:
    if not is_valid_id(tournament_id) or not is_valid_id(match_id):
        return None
    data = _read_yaml(os.path.join(_matches_dir(data_dir, tournament_id), f'{match_id}.yaml'))
    if not data:
        return None
    return Match.from_dict(data)


def save_match(data_dir: str, match: Match):
    path = os.path.join(_matches_dir(data_dir, match.tournament_id), f'{match.id}.yaml')
    _write_yaml(path, match.to_dict())


def delete_match(data_dir: str, tournament_id: str, match_id: str):
    path = os.path.join(_matches_dir(data_dir, tournament_id), f'{match_id}.yaml')
    if os.path.exists(path):
        os.remove(path)


def replace_matches(data_dir: str, tournament_id: str, matches: List[Match]):
    """Discard every stored match of the tournament and write ``matches``."""
    matches_dir = _matches_dir(data_dir, tournament_id)
    if os.path.isdir(matches_dir):
        shutil.rmtree(matches_dir)
    os.makedirs(matches_dir, exist_ok=True)
    for match in matches:
        save_match(data_dir, match)
