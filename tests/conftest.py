"""
Shared pytest fixtures for league manager tests.

Running tests:
    pytest tests/
"""
import pytest
import sys
import os

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from league.models import Match, Team, Tournament, new_id


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point the app at an empty temporary data directory."""
    import app as app_module
    monkeypatch.setattr(app_module, 'DATA_DIR', str(tmp_path))
    return tmp_path


@pytest.fixture
def client(data_dir):
    """Create a test client backed by the temporary data directory."""
    from app import app
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


@pytest.fixture
def register(client):
    """Register a user through the API and return (user, auth headers)."""
    def _register(name='Alice', email=None, password='secret123'):
        email = email or f'{name.lower().replace(" ", ".")}@example.com'
        response = client.post('/api/auth/register', json={
            'name': name, 'email': email, 'password': password})
        assert response.status_code == 201, response.get_json()
        body = response.get_json()
        return body['user'], {'Authorization': f"Bearer {body['token']}"}
    return _register


@pytest.fixture
def two_teams():
    """Two teams with two players each, keyed by id."""
    alice, bob, carol, dave = new_id(), new_id(), new_id(), new_id()
    lions = Team(name='Lions', invite_code='LIONS001', admin_ids=[alice], members=[alice, bob])
    tigers = Team(name='Tigers', invite_code='TIGERS01', admin_ids=[carol], members=[carol, dave])
    return {
        'lions': lions,
        'tigers': tigers,
        'players': {'alice': alice, 'bob': bob, 'carol': carol, 'dave': dave},
        'by_id': {lions.id: lions, tigers.id: tigers},
    }


@pytest.fixture
def league_match(two_teams):
    """A scheduled League Stage match between Lions (A) and Tigers (B)."""
    return Match(
        tournament_id=new_id(),
        number=1,
        team_a_id=two_teams['lions'].id,
        team_b_id=two_teams['tigers'].id,
        round='League Stage',
    )


@pytest.fixture
def four_team_tournament():
    """A tournament with four participating team ids."""
    team_ids = [new_id() for _ in range(4)]
    return Tournament(name='Spring Cup', admin_id=new_id(), invite_code='SPRINGCUP1', team_ids=team_ids)


@pytest.fixture
def finished_match():
    """Build a Finished match with the winner derived from the score unless given."""
    def _finished_match(team_a_id, team_b_id, score_a, score_b, round='League Stage', number=1, winner_id=None):
        if winner_id is None:
            if score_a > score_b:
                winner_id = team_a_id
            elif score_b > score_a:
                winner_id = team_b_id
        return Match(
            tournament_id='f' * 32,
            number=number,
            team_a_id=team_a_id,
            team_b_id=team_b_id,
            round=round,
            status='Finished',
            score_a=score_a,
            score_b=score_b,
            winner_id=winner_id,
        )
    return _finished_match
