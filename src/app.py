"""
Flask REST API for the League Manager.
"""
import os
import re
import logging
from datetime import timedelta
from functools import wraps
from flask import Flask, request, jsonify, g
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired
from werkzeug.exceptions import HTTPException
from werkzeug.security import generate_password_hash, check_password_hash

from league import storage, views
from league.errors import (LeagueError, AuthenticationError, ConflictError, ForbiddenError,
                           NotFoundError, ValidationError)
from league.fixtures import create_manual_match, schedule_tournament, update_match_details
from league.invites import (TEAM_CODE_LENGTH, TOURNAMENT_CODE_LENGTH, generate_invite_code,
                            normalize_invite_code)
from league.ledger import record_card, record_goal, set_player_of_the_match
from league.models import POSITIONS, FINISHED, Profile, Team, Tournament, User, is_valid_id
from league.outcome import update_status
from league.standings import compute_table, league_table
from league.stats import player_stats

app = Flask(__name__)


def _get_or_create_secret_key() -> bytes:
    """Get SECRET_KEY from env, or generate and persist to file."""
    env_key = os.environ.get('SECRET_KEY')
    if env_key:
        return env_key.encode() if isinstance(env_key, str) else env_key
    key_file = os.path.join(DATA_DIR, '.secret_key')
    if os.path.exists(key_file):
        with open(key_file, 'rb') as f:
            return f.read()
    key = os.urandom(24)
    os.makedirs(os.path.dirname(key_file), exist_ok=True)
    with open(key_file, 'wb') as f:
        f.write(key)
    return key


BASE_DIR = os.path.dirname(os.path.dirname(__file__))
DATA_DIR = os.environ.get('LEAGUE_DATA_DIR', os.path.join(BASE_DIR, 'data'))
TOKEN_MAX_AGE = timedelta(days=int(os.environ.get('LEAGUE_TOKEN_MAX_AGE_DAYS', '30')))
LOCK_TIMEOUT = float(os.environ.get('LEAGUE_LOCK_TIMEOUT', storage.DEFAULT_LOCK_TIMEOUT))
TOKEN_SALT = 'league-auth'
MIN_PASSWORD_LENGTH = 4
EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
TEAM_ROLES = ('captain', 'viceCaptain')
STANDINGS_SCOPES = ('league', 'all')

# Endpoints reachable without a bearer token
PUBLIC_ENDPOINTS = ('index', 'register', 'login', None)

app.secret_key = _get_or_create_secret_key()
app.logger.setLevel(getattr(logging, os.environ.get('LEAGUE_LOG_LEVEL', 'INFO').upper(), logging.INFO))


# ---------------------------------------------------------------------------
# Users and authentication
# ---------------------------------------------------------------------------

def _normalize_email(email) -> str:
    return email.strip().lower() if isinstance(email, str) else ''


def find_user(user_id):
    """Return the user with ``user_id`` or None."""
    if not is_valid_id(user_id):
        return None
    return next((u for u in storage.load_users(DATA_DIR) if u.id == user_id), None)


def create_user(name: str, email: str, password: str) -> User:
    """Register a new user. Raises ValidationError / ConflictError."""
    name = name.strip() if isinstance(name, str) else ''
    email = _normalize_email(email)
    if not name:
        raise ValidationError('Name is required.')
    if not EMAIL_RE.match(email):
        raise ValidationError('A valid email address is required.')
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters.')

    with storage.data_lock(DATA_DIR, 'users', LOCK_TIMEOUT):
        users = storage.load_users(DATA_DIR)
        if any(u.email == email for u in users):
            raise ConflictError('User already exists')
        user = User(email=email, password_hash=generate_password_hash(password), profile=Profile(name=name))
        users.append(user)
        storage.save_users(DATA_DIR, users)
    app.logger.info(f'Registered user {user.id}')
    return user


def authenticate_user(email: str, password: str):
    """Check email/password. Returns the User if valid, else None."""
    email = _normalize_email(email)
    if not email or not isinstance(password, str):
        return None
    for u in storage.load_users(DATA_DIR):
        if u.email == email:
            return u if check_password_hash(u.password_hash, password) else None
    return None


def _token_serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(app.secret_key, salt=TOKEN_SALT)


def issue_token(user_id: str) -> str:
    return _token_serializer().dumps({'user_id': user_id})


def verify_token(token: str) -> str:
    """Return the user id carried by ``token``. Raises AuthenticationError."""
    try:
        data = _token_serializer().loads(token, max_age=int(TOKEN_MAX_AGE.total_seconds()))
    except SignatureExpired:
        raise AuthenticationError('Token has expired')
    except BadSignature:
        app.logger.warning('Rejected request with an invalid token')
        raise AuthenticationError('Invalid token')
    user_id = data.get('user_id') if isinstance(data, dict) else None
    if not is_valid_id(user_id):
        raise AuthenticationError('Invalid token')
    return user_id


@app.before_request
def authenticate_request():
    """Resolve the bearer token into g.user for every non-public endpoint."""
    if request.method == 'OPTIONS' or request.endpoint in PUBLIC_ENDPOINTS:
        return

    auth_header = request.headers.get('Authorization', '')
    if not auth_header.startswith('Bearer '):
        raise AuthenticationError('Missing or invalid Authorization header')

    user = find_user(verify_token(auth_header[7:].strip()))
    if user is None:
        raise AuthenticationError('User no longer exists')
    g.user = user
    g.user_id = user.id


# ---------------------------------------------------------------------------
# Request helpers
# ---------------------------------------------------------------------------

def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('No data provided')
    return data


def _required_str(data: dict, key: str, label: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f'{label} is required')
    return value.strip()


def _optional_int(data: dict, key: str, label: str):
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f'{label} must be an integer')
    return value


def _users_by_id() -> dict:
    return {u.id: u for u in storage.load_users(DATA_DIR)}


def _teams_by_id() -> dict:
    return {t.id: t for t in storage.load_teams(DATA_DIR)}


def _find_team(teams, team_id):
    if not is_valid_id(team_id):
        return None
    return next((t for t in teams if t.id == team_id), None)


def _find_match(tournament, match_id):
    match = storage.load_match(DATA_DIR, tournament.id, match_id)
    if match is None:
        raise NotFoundError('Match not found')
    return match


def _render_tournament(tournament) -> dict:
    matches = storage.load_matches(DATA_DIR, tournament.id)
    return views.tournament_view(tournament, matches, _teams_by_id(), _users_by_id())


def _render_match(match) -> dict:
    return views.match_view(match, _teams_by_id(), _users_by_id())


# ---------------------------------------------------------------------------
# Admin policy
# ---------------------------------------------------------------------------

def team_admin_required(f):
    """Load the team under the teams lock and require the caller to be one of its admins.

    The wrapped view receives ``(team, teams)`` and must save ``teams`` itself.
    """
    @wraps(f)
    def decorated_function(team_id, **kwargs):
        with storage.data_lock(DATA_DIR, 'teams', LOCK_TIMEOUT):
            teams = storage.load_teams(DATA_DIR)
            team = _find_team(teams, team_id)
            if team is None:
                raise NotFoundError('Team not found')
            if not team.is_admin(g.user_id):
                raise ForbiddenError('Only team admins can manage this team')
            return f(team, teams, **kwargs)
    return decorated_function


def tournament_admin_required(f):
    """Load the tournament under its lock and require the caller to be its admin.

    Holding the per-tournament lock for the whole view serialises every
    mutation of the tournament and its matches.
    """
    @wraps(f)
    def decorated_function(tournament_id, **kwargs):
        if not is_valid_id(tournament_id):
            raise NotFoundError('Tournament not found')
        with storage.tournament_lock(DATA_DIR, tournament_id, LOCK_TIMEOUT):
            tournament = storage.load_tournament(DATA_DIR, tournament_id)
            if tournament is None:
                raise NotFoundError('Tournament not found')
            if tournament.admin_id != g.user_id:
                raise ForbiddenError('User not authorized')
            return f(tournament, **kwargs)
    return decorated_function


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------

@app.errorhandler(LeagueError)
def handle_league_error(e):
    return jsonify({'success': False, 'message': e.message}), e.status_code


@app.errorhandler(HTTPException)
def handle_http_error(e):
    return jsonify({'success': False, 'message': e.description}), e.code


@app.errorhandler(Exception)
def handle_unexpected_error(e):
    app.logger.exception(f'Unhandled error on {request.method} {request.path}')
    return jsonify({'success': False, 'message': 'Server Error'}), 500


# ---------------------------------------------------------------------------
# Routes: auth and users
# ---------------------------------------------------------------------------

@app.route('/')
def index():
    return jsonify({'message': 'League Manager API is running'})


@app.route('/api/auth/register', methods=['POST'])
def register():
    data = _json_body()
    user = create_user(data.get('name'), data.get('email'), data.get('password'))
    return jsonify({'user': views.user_view(user), 'token': issue_token(user.id)}), 201


@app.route('/api/auth/login', methods=['POST'])
def login():
    data = _json_body()
    user = authenticate_user(data.get('email'), data.get('password'))
    if user is None:
        raise ValidationError('Invalid credentials')
    return jsonify({'user': views.user_view(user), 'token': issue_token(user.id)})


@app.route('/api/auth/me')
def get_me():
    return jsonify(views.user_view(g.user))


@app.route('/api/users/<user_id>')
def get_user(user_id):
    user = find_user(user_id)
    if user is None:
        raise NotFoundError('User not found')
    return jsonify(views.user_view(user))


def _apply_profile_update(profile, data: dict):
    """Update the profile fields present in ``data``."""
    if 'name' in data:
        profile.name = _required_str(data, 'name', 'Name')
    if 'age' in data:
        age = _optional_int(data, 'age', 'Age')
        if age is not None and age < 0:
            raise ValidationError('Age must not be negative')
        profile.age = age
    if 'position' in data:
        position = data['position']
        if position is not None and position not in POSITIONS:
            raise ValidationError(f"Position must be one of: {', '.join(POSITIONS)}")
        profile.position = position
    for key, attr in (('imageUrl', 'image_url'), ('year', 'year'), ('mobile', 'mobile')):
        if key in data:
            value = data[key]
            if value is not None and not isinstance(value, str):
                raise ValidationError(f'{key} must be a string')
            setattr(profile, attr, value)


@app.route('/api/users/profile', methods=['PUT'])
def update_profile():
    data = _json_body()
    with storage.data_lock(DATA_DIR, 'users', LOCK_TIMEOUT):
        users = storage.load_users(DATA_DIR)
        user = next((u for u in users if u.id == g.user_id), None)
        if user is None:
            raise NotFoundError('User not found')
        _apply_profile_update(user.profile, data)
        storage.save_users(DATA_DIR, users)
    return jsonify(views.user_view(user))


@app.route('/api/users/<user_id>/stats')
def get_user_stats(user_id):
    if find_user(user_id) is None:
        raise NotFoundError('User not found')
    matches = []
    for tournament in storage.load_tournaments(DATA_DIR):
        matches.extend(storage.load_matches(DATA_DIR, tournament.id))
    return jsonify(views.stats_view(player_stats(user_id, matches, _teams_by_id())))


# ---------------------------------------------------------------------------
# Routes: teams
# ---------------------------------------------------------------------------

@app.route('/api/teams', methods=['GET'])
def list_teams():
    """Teams the caller is a member of."""
    users_by_id = _users_by_id()
    teams = [t for t in storage.load_teams(DATA_DIR) if t.is_member(g.user_id)]
    return jsonify([views.team_view(t, users_by_id) for t in teams])


@app.route('/api/teams', methods=['POST'])
def create_team():
    data = _json_body()
    name = _required_str(data, 'name', 'Team name')
    with storage.data_lock(DATA_DIR, 'teams', LOCK_TIMEOUT):
        teams = storage.load_teams(DATA_DIR)
        team = Team(
            name=name,
            logo_url=data.get('logoUrl'),
            admin_ids=[g.user_id],
            members=[g.user_id],
            invite_code=generate_invite_code(TEAM_CODE_LENGTH, [t.invite_code for t in teams]),
        )
        teams.append(team)
        storage.save_teams(DATA_DIR, teams)
    app.logger.info(f'User {g.user_id} created team {team.id}')
    return jsonify(views.team_view(team, _users_by_id())), 201


@app.route('/api/teams/join', methods=['POST'])
def join_team():
    code = normalize_invite_code(_json_body().get('inviteCode'))
    if not code:
        raise ValidationError('Invite code is required')
    with storage.data_lock(DATA_DIR, 'teams', LOCK_TIMEOUT):
        teams = storage.load_teams(DATA_DIR)
        team = next((t for t in teams if t.invite_code == code), None)
        if team is None:
            raise NotFoundError('Team not found with this invite code')
        if team.is_member(g.user_id):
            raise ConflictError('You are already a member of this team')
        team.members.append(g.user_id)
        storage.save_teams(DATA_DIR, teams)
    return jsonify(views.team_view(team, _users_by_id()))


@app.route('/api/teams/<team_id>')
def get_team(team_id):
    team = _find_team(storage.load_teams(DATA_DIR), team_id)
    if team is None:
        raise NotFoundError('Team not found')
    return jsonify(views.team_view(team, _users_by_id()))


def _apply_branding_update(record, data: dict, label: str):
    """Patch ``name`` and ``logoUrl`` on a team or tournament."""
    if 'name' in data:
        record.name = _required_str(data, 'name', label)
    if 'logoUrl' in data:
        logo_url = data['logoUrl']
        if logo_url is not None and not isinstance(logo_url, str):
            raise ValidationError('logoUrl must be a string')
        record.logo_url = logo_url


@app.route('/api/teams/<team_id>', methods=['PUT'])
@team_admin_required
def update_team(team, teams):
    _apply_branding_update(team, _json_body(), 'Team name')
    storage.save_teams(DATA_DIR, teams)
    return jsonify(views.team_view(team, _users_by_id()))


@app.route('/api/teams/<team_id>/members', methods=['POST'])
@team_admin_required
def add_team_member(team, teams):
    member_id = _required_str(_json_body(), 'memberId', 'Member')
    if find_user(member_id) is None:
        raise NotFoundError('User not found')
    if team.is_member(member_id):
        raise ConflictError('User is already in the team')
    team.members.append(member_id)
    storage.save_teams(DATA_DIR, teams)
    return jsonify({'success': True, 'message': 'Member added successfully',
                    'team': views.team_view(team, _users_by_id())})


@app.route('/api/teams/<team_id>/members/<member_id>', methods=['DELETE'])
@team_admin_required
def remove_team_member(team, teams, member_id):
    if member_id == g.user_id:
        raise ForbiddenError('Admin cannot remove themself')
    if not team.is_member(member_id):
        raise NotFoundError('Member not found')
    team.remove_member(member_id)
    storage.save_teams(DATA_DIR, teams)
    return jsonify({'success': True, 'message': 'Member removed successfully',
                    'team': views.team_view(team, _users_by_id())})


@app.route('/api/teams/<team_id>/admins', methods=['PUT'])
@team_admin_required
def toggle_team_admin(team, teams):
    member_id = _required_str(_json_body(), 'memberId', 'Member')
    if member_id == g.user_id:
        raise ForbiddenError('Cannot change your own admin status')
    if not team.is_member(member_id):
        raise ValidationError('Player is not a member of this team')
    if team.is_admin(member_id):
        team.admin_ids.remove(member_id)
    else:
        team.admin_ids.append(member_id)
    storage.save_teams(DATA_DIR, teams)
    return jsonify({'success': True, 'message': 'Admin status updated',
                    'team': views.team_view(team, _users_by_id())})


@app.route('/api/teams/<team_id>/roles', methods=['PUT'])
@team_admin_required
def set_team_role(team, teams):
    data = _json_body()
    member_id = _required_str(data, 'memberId', 'Member')
    role = data.get('role')
    if role not in TEAM_ROLES:
        raise ValidationError('Invalid role specified')
    if not team.is_member(member_id):
        raise ValidationError('Player is not a member of this team')
    if role == 'captain':
        team.captain_id = member_id
    else:
        team.vice_captain_id = member_id
    storage.save_teams(DATA_DIR, teams)
    return jsonify({'success': True, 'message': 'Team role updated',
                    'team': views.team_view(team, _users_by_id())})


# ---------------------------------------------------------------------------
# Routes: tournaments
# ---------------------------------------------------------------------------

@app.route('/api/tournaments', methods=['GET'])
def list_tournaments():
    """Tournaments the caller administers or plays in."""
    teams_by_id = _teams_by_id()
    my_team_ids = {t.id for t in teams_by_id.values() if t.is_member(g.user_id)}
    users_by_id = _users_by_id()
    result = []
    for tournament in storage.load_tournaments(DATA_DIR):
        if tournament.admin_id == g.user_id or my_team_ids.intersection(tournament.team_ids):
            matches = storage.load_matches(DATA_DIR, tournament.id)
            result.append(views.tournament_view(tournament, matches, teams_by_id, users_by_id))
    return jsonify(result)


@app.route('/api/tournaments', methods=['POST'])
def create_tournament():
    data = _json_body()
    name = _required_str(data, 'name', 'Tournament name')
    with storage.data_lock(DATA_DIR, 'tournaments', LOCK_TIMEOUT):
        existing_codes = [t.invite_code for t in storage.load_tournaments(DATA_DIR)]
        tournament = Tournament(
            name=name,
            logo_url=data.get('logoUrl'),
            admin_id=g.user_id,
            invite_code=generate_invite_code(TOURNAMENT_CODE_LENGTH, existing_codes),
        )
        storage.save_tournament(DATA_DIR, tournament)
    app.logger.info(f'User {g.user_id} created tournament {tournament.id}')
    return jsonify(_render_tournament(tournament)), 201


@app.route('/api/tournaments/join', methods=['POST'])
def join_tournament():
    data = _json_body()
    code = normalize_invite_code(data.get('inviteCode'))
    if not code:
        raise ValidationError('Invite code is required')
    found = next((t for t in storage.load_tournaments(DATA_DIR) if t.invite_code == code), None)
    if found is None:
        raise NotFoundError('Tournament not found with this invite code.')

    team = _find_team(storage.load_teams(DATA_DIR), data.get('teamId'))
    if team is None:
        raise NotFoundError('Your team was not found.')
    if not team.is_admin(g.user_id):
        raise ForbiddenError('You must be an admin of the team to join a tournament.')

    with storage.tournament_lock(DATA_DIR, found.id, LOCK_TIMEOUT):
        tournament = storage.load_tournament(DATA_DIR, found.id)
        if tournament.has_team(team.id):
            raise ConflictError('This team is already in the tournament.')
        tournament.team_ids.append(team.id)
        storage.save_tournament(DATA_DIR, tournament)
    return jsonify({'success': True, 'message': 'Successfully joined tournament!',
                    'tournamentId': tournament.id})


@app.route('/api/tournaments/<tournament_id>')
def get_tournament(tournament_id):
    tournament = storage.load_tournament(DATA_DIR, tournament_id)
    if tournament is None:
        raise NotFoundError('Tournament not found')
    return jsonify(_render_tournament(tournament))


@app.route('/api/tournaments/<tournament_id>', methods=['PUT'])
@tournament_admin_required
def update_tournament(tournament):
    _apply_branding_update(tournament, _json_body(), 'Tournament name')
    storage.save_tournament(DATA_DIR, tournament)
    return jsonify(_render_tournament(tournament))


@app.route('/api/tournaments/<tournament_id>/teams', methods=['POST'])
@tournament_admin_required
def add_team_to_tournament(tournament):
    team_code_or_id = _required_str(_json_body(), 'teamCodeOrId', 'Team id or invite code')
    teams = storage.load_teams(DATA_DIR)
    team = _find_team(teams, team_code_or_id)
    if team is None:
        code = normalize_invite_code(team_code_or_id)
        team = next((t for t in teams if t.invite_code == code), None)
    if team is None:
        raise NotFoundError('Team not found with that ID or Invite Code')
    if tournament.has_team(team.id):
        raise ConflictError('Team is already in this tournament')
    tournament.team_ids.append(team.id)
    storage.save_tournament(DATA_DIR, tournament)
    return jsonify({'success': True, 'message': 'Team added successfully.',
                    'tournament': _render_tournament(tournament)})


@app.route('/api/tournaments/<tournament_id>/schedule', methods=['POST'])
@tournament_admin_required
def schedule_matches(tournament):
    matches = schedule_tournament(tournament)
    storage.replace_matches(DATA_DIR, tournament.id, matches)
    storage.save_tournament(DATA_DIR, tournament)
    app.logger.info(f'Scheduled {len(matches)} matches for tournament {tournament.id}')
    return jsonify(_render_tournament(tournament))


@app.route('/api/tournaments/<tournament_id>/matches', methods=['POST'])
@tournament_admin_required
def add_match(tournament):
    data = _json_body()
    match = create_manual_match(
        tournament,
        storage.load_matches(DATA_DIR, tournament.id),
        data.get('teamAId'),
        data.get('teamBId'),
        data.get('round'),
    )
    storage.save_match(DATA_DIR, match)
    return jsonify(_render_tournament(tournament)), 201


@app.route('/api/tournaments/<tournament_id>/matches/<match_id>', methods=['PUT'])
@tournament_admin_required
def update_match(tournament, match_id):
    data = _json_body()
    match = _find_match(tournament, match_id)
    when = {}
    for key in ('date', 'time'):
        if key in data:
            if data[key] is not None and not isinstance(data[key], str):
                raise ValidationError(f'{key} must be a string')
            when[key] = data[key]
    update_match_details(match, tournament, data.get('teamAId'), data.get('teamBId'), **when)
    storage.save_match(DATA_DIR, match)
    return jsonify(_render_match(match))


@app.route('/api/tournaments/<tournament_id>/matches/<match_id>', methods=['DELETE'])
@tournament_admin_required
def delete_match(tournament, match_id):
    match = _find_match(tournament, match_id)
    storage.delete_match(DATA_DIR, tournament.id, match.id)
    app.logger.info(f'Deleted match {match.id} from tournament {tournament.id}')
    return jsonify({'success': True, 'message': 'Match deleted'})


@app.route('/api/tournaments/<tournament_id>/matches/<match_id>/status', methods=['PATCH'])
@tournament_admin_required
def update_match_status(tournament, match_id):
    data = _json_body()
    match = _find_match(tournament, match_id)
    update_status(match, data.get('status'), data.get('penaltyScoreA'), data.get('penaltyScoreB'))
    storage.save_match(DATA_DIR, match)
    if match.status == FINISHED:
        app.logger.info(f'Match {match.id} finished {match.score_a}-{match.score_b}, winner {match.winner_id}')
    return jsonify(_render_match(match))


@app.route('/api/tournaments/<tournament_id>/matches/<match_id>/goal', methods=['POST'])
@tournament_admin_required
def add_goal(tournament, match_id):
    data = _json_body()
    match = _find_match(tournament, match_id)
    is_own_goal = data.get('isOwnGoal', False)
    if not isinstance(is_own_goal, bool):
        raise ValidationError('isOwnGoal must be true or false')
    for key, label in (('scorerId', 'Scorer'), ('assistId', 'Assist')):
        if data.get(key) and find_user(data[key]) is None:
            raise NotFoundError(f'{label} not found')
    record_goal(
        match,
        _teams_by_id(),
        scorer_id=data.get('scorerId'),
        scorer_name=data.get('scorerName'),
        assist_id=data.get('assistId'),
        assist_name=data.get('assistName'),
        is_own_goal=is_own_goal,
        team_id=data.get('teamId'),
    )
    storage.save_match(DATA_DIR, match)
    return jsonify(_render_match(match))


@app.route('/api/tournaments/<tournament_id>/matches/<match_id>/card', methods=['POST'])
@tournament_admin_required
def add_card(tournament, match_id):
    data = _json_body()
    match = _find_match(tournament, match_id)
    if data.get('playerId') and find_user(data['playerId']) is None:
        raise NotFoundError('Player not found')
    record_card(
        match,
        _teams_by_id(),
        data.get('cardType'),
        player_id=data.get('playerId'),
        player_name=data.get('playerName'),
        team_id=data.get('teamId'),
    )
    storage.save_match(DATA_DIR, match)
    return jsonify(_render_match(match))


@app.route('/api/tournaments/<tournament_id>/matches/<match_id>/potm', methods=['PATCH'])
@tournament_admin_required
def update_player_of_the_match(tournament, match_id):
    data = _json_body()
    match = _find_match(tournament, match_id)
    if data.get('playerId') and find_user(data['playerId']) is None:
        raise NotFoundError('Player not found')
    set_player_of_the_match(match, data.get('playerId'), _teams_by_id())
    storage.save_match(DATA_DIR, match)
    return jsonify(_render_match(match))


@app.route('/api/tournaments/<tournament_id>/standings')
def get_standings(tournament_id):
    """Points table. ``scope=league`` (default) skips knockout rounds, ``scope=all`` counts every round."""
    tournament = storage.load_tournament(DATA_DIR, tournament_id)
    if tournament is None:
        raise NotFoundError('Tournament not found')
    scope = request.args.get('scope', 'league')
    if scope not in STANDINGS_SCOPES:
        raise ValidationError(f"scope must be one of: {', '.join(STANDINGS_SCOPES)}")
    matches = storage.load_matches(DATA_DIR, tournament.id)
    if scope == 'league':
        rows = league_table(matches, tournament.team_ids)
    else:
        rows = compute_table(matches, tournament.team_ids)
    return jsonify(views.standings_view(rows, _teams_by_id()))


if __name__ == '__main__':
    app.run(debug=True, port=5000)
