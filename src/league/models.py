"""
Domain records for users, teams, tournaments and matches.

Every record converts to and from the plain dicts stored in the YAML
documents (``to_dict`` / ``from_dict``). Cross-record fields are references
(ids only); the resolved, display-ready forms live in ``league.views``.
"""
import re
import uuid
from datetime import datetime


POSITIONS = ('Forward', 'Midfielder', 'Defender', 'Goalkeeper')
CARD_TYPES = ('Yellow', 'Red')

SCHEDULED = 'Scheduled'
LIVE = 'Live'
FINISHED = 'Finished'
MATCH_STATUSES = (SCHEDULED, LIVE, FINISHED)

LEAGUE_STAGE = 'League Stage'
KNOCKOUT_ROUNDS = frozenset({'Final', 'Semi-Final', 'Quarter-Final', 'Eliminator'})

_ID_RE = re.compile(r'^[0-9a-f]{32}$')


def new_id() -> str:
    return uuid.uuid4().hex


def is_valid_id(value) -> bool:
    """True if ``value`` looks like an id produced by ``new_id``."""
    return isinstance(value, str) and bool(_ID_RE.match(value))


def is_knockout(round_name) -> bool:
    return round_name in KNOCKOUT_ROUNDS


def _now() -> str:
    return datetime.now().isoformat()


class Profile:
    def __init__(self, name, age=None, position=None, image_url=None, year=None, mobile=None):
        self.name = name
        self.age = age
        self.position = position
        self.image_url = image_url
        self.year = year
        self.mobile = mobile

    def to_dict(self):
        return {
            'name': self.name,
            'age': self.age,
            'position': self.position,
            'image_url': self.image_url,
            'year': self.year,
            'mobile': self.mobile,
        }

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        return cls(
            name=data.get('name', ''),
            age=data.get('age'),
            position=data.get('position'),
            image_url=data.get('image_url'),
            year=data.get('year'),
            mobile=data.get('mobile'),
        )

    def __repr__(self):
        return f"Profile(name={self.name}, position={self.position})"


class User:
    def __init__(self, email, password_hash, profile, id=None, created=None):
        self.id = id or new_id()
        self.email = email
        self.password_hash = password_hash
        self.profile = profile
        self.created = created or _now()

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'password_hash': self.password_hash,
            'profile': self.profile.to_dict(),
            'created': self.created,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data['id'],
            email=data['email'],
            password_hash=data['password_hash'],
            profile=Profile.from_dict(data.get('profile')),
            created=data.get('created'),
        )

    def __repr__(self):
        return f"User(id={self.id}, email={self.email})"


class Team:
    def __init__(self, name, invite_code, admin_ids=None, members=None, logo_url=None,
                 captain_id=None, vice_captain_id=None, id=None, created=None):
        self.id = id or new_id()
        self.name = name
        self.logo_url = logo_url
        self.admin_ids = list(admin_ids) if admin_ids else []
        self.members = list(members) if members else []
        self.captain_id = captain_id
        self.vice_captain_id = vice_captain_id
        self.invite_code = invite_code
        self.created = created or _now()

    def is_admin(self, user_id) -> bool:
        return user_id in self.admin_ids

    def is_member(self, user_id) -> bool:
        return user_id in self.members

    def remove_member(self, user_id):
        """Drop a member together with any admin right or role they held."""
        self.members = [m for m in self.members if m != user_id]
        self.admin_ids = [a for a in self.admin_ids if a != user_id]
        if self.captain_id == user_id:
            self.captain_id = None
        if self.vice_captain_id == user_id:
            self.vice_captain_id = None

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'logo_url': self.logo_url,
            'admin_ids': list(self.admin_ids),
            'members': list(self.members),
            'captain_id': self.captain_id,
            'vice_captain_id': self.vice_captain_id,
            'invite_code': self.invite_code,
            'created': self.created,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data['id'],
            name=data['name'],
            logo_url=data.get('logo_url'),
            admin_ids=data.get('admin_ids', []),
            members=data.get('members', []),
            captain_id=data.get('captain_id'),
            vice_captain_id=data.get('vice_captain_id'),
            invite_code=data['invite_code'],
            created=data.get('created'),
        )

    def __repr__(self):
        return f"Team(name={self.name}, members={len(self.members)})"


class Tournament:
    def __init__(self, name, admin_id, invite_code, team_ids=None, logo_url=None,
                 is_scheduling_done=False, id=None, created=None):
        self.id = id or new_id()
        self.name = name
        self.logo_url = logo_url
        self.admin_id = admin_id
        self.team_ids = list(team_ids) if team_ids else []
        self.invite_code = invite_code
        self.is_scheduling_done = is_scheduling_done
        self.created = created or _now()

    def has_team(self, team_id) -> bool:
        return team_id in self.team_ids

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'logo_url': self.logo_url,
            'admin_id': self.admin_id,
            'team_ids': list(self.team_ids),
            'invite_code': self.invite_code,
            'is_scheduling_done': self.is_scheduling_done,
            'created': self.created,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data['id'],
            name=data['name'],
            logo_url=data.get('logo_url'),
            admin_id=data['admin_id'],
            team_ids=data.get('team_ids', []),
            invite_code=data['invite_code'],
            is_scheduling_done=data.get('is_scheduling_done', False),
            created=data.get('created'),
        )

    def __repr__(self):
        return f"Tournament(name={self.name}, teams={len(self.team_ids)})"


class Goal:
    def __init__(self, team_id, scorer_id=None, scorer_name=None, assist_id=None,
                 assist_name=None, is_own_goal=False, minute=0, id=None):
        self.id = id or new_id()
        self.team_id = team_id  # benefiting team
        self.scorer_id = scorer_id
        self.scorer_name = scorer_name
        self.assist_id = assist_id
        self.assist_name = assist_name
        self.is_own_goal = is_own_goal
        self.minute = minute

    def to_dict(self):
        return {
            'id': self.id,
            'team_id': self.team_id,
            'scorer_id': self.scorer_id,
            'scorer_name': self.scorer_name,
            'assist_id': self.assist_id,
            'assist_name': self.assist_name,
            'is_own_goal': self.is_own_goal,
            'minute': self.minute,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data.get('id'),
            team_id=data['team_id'],
            scorer_id=data.get('scorer_id'),
            scorer_name=data.get('scorer_name'),
            assist_id=data.get('assist_id'),
            assist_name=data.get('assist_name'),
            is_own_goal=bool(data.get('is_own_goal', False)),
            minute=data.get('minute', 0),
        )

    def __repr__(self):
        return f"Goal(team_id={self.team_id}, scorer={self.scorer_id or self.scorer_name}, own={self.is_own_goal})"


class Card:
    def __init__(self, team_id, card_type, player_id=None, player_name=None, minute=0, id=None):
        self.id = id or new_id()
        self.team_id = team_id
        self.card_type = card_type
        self.player_id = player_id
        self.player_name = player_name
        self.minute = minute

    def to_dict(self):
        return {
            'id': self.id,
            'team_id': self.team_id,
            'card_type': self.card_type,
            'player_id': self.player_id,
            'player_name': self.player_name,
            'minute': self.minute,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data.get('id'),
            team_id=data['team_id'],
            card_type=data['card_type'],
            player_id=data.get('player_id'),
            player_name=data.get('player_name'),
            minute=data.get('minute', 0),
        )

    def __repr__(self):
        return f"Card(type={self.card_type}, player={self.player_id or self.player_name})"


class Match:
    def __init__(self, tournament_id, number, team_a_id, team_b_id, round, status=SCHEDULED,
                 score_a=0, score_b=0, penalty_score_a=None, penalty_score_b=None,
                 date=None, time=None, goals=None, cards=None, winner_id=None,
                 player_of_the_match_id=None, id=None):
        self.id = id or new_id()
        self.tournament_id = tournament_id
        self.number = number
        self.team_a_id = team_a_id
        self.team_b_id = team_b_id
        self.round = round
        self.status = status
        self.score_a = score_a
        self.score_b = score_b
        self.penalty_score_a = penalty_score_a
        self.penalty_score_b = penalty_score_b
        self.date = date
        self.time = time
        self.goals = list(goals) if goals else []
        self.cards = list(cards) if cards else []
        self.winner_id = winner_id
        self.player_of_the_match_id = player_of_the_match_id

    @property
    def team_ids(self):
        return (self.team_a_id, self.team_b_id)

    def opponent_of(self, team_id):
        if team_id == self.team_a_id:
            return self.team_b_id
        if team_id == self.team_b_id:
            return self.team_a_id
        raise KeyError(team_id)

    def to_dict(self):
        return {
            'id': self.id,
            'tournament_id': self.tournament_id,
            'number': self.number,
            'team_a_id': self.team_a_id,
            'team_b_id': self.team_b_id,
            'round': self.round,
            'status': self.status,
            'score_a': self.score_a,
            'score_b': self.score_b,
            'penalty_score_a': self.penalty_score_a,
            'penalty_score_b': self.penalty_score_b,
            'date': self.date,
            'time': self.time,
            'goals': [g.to_dict() for g in self.goals],
            'cards': [c.to_dict() for c in self.cards],
            'winner_id': self.winner_id,
            'player_of_the_match_id': self.player_of_the_match_id,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data['id'],
            tournament_id=data['tournament_id'],
            number=data['number'],
            team_a_id=data['team_a_id'],
            team_b_id=data['team_b_id'],
            round=data['round'],
            status=data.get('status', SCHEDULED),
            score_a=data.get('score_a', 0),
            score_b=data.get('score_b', 0),
            penalty_score_a=data.get('penalty_score_a'),
            penalty_score_b=data.get('penalty_score_b'),
            date=data.get('date'),
            time=data.get('time'),
            goals=[Goal.from_dict(g) for g in data.get('goals') or []],
            cards=[Card.from_dict(c) for c in data.get('cards') or []],
            winner_id=data.get('winner_id'),
            player_of_the_match_id=data.get('player_of_the_match_id'),
        )

    def __repr__(self):
        return (f"Match(number={self.number}, {self.team_a_id} {self.score_a}-{self.score_b} "
                f"{self.team_b_id}, status={self.status})")
