"""
Tests for the YAML document store.
"""
import pytest
import sys
import os
import yaml

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from league import storage
from league.fixtures import generate_round_robin
from league.models import Profile, Team, Tournament, User, new_id


@pytest.fixture
def store_dir(tmp_path):
    return str(tmp_path)


class TestDocuments:
    """Tests for the users and teams documents."""

    def test_missing_documents_are_empty(self, store_dir):
        assert storage.load_users(store_dir) == []
        assert storage.load_teams(store_dir) == []
        assert storage.load_tournaments(store_dir) == []

    def test_users_document_layout(self, store_dir, tmp_path):
        user = User(email='a@example.com', password_hash='hash', profile=Profile(name='Alice'))
        storage.save_users(store_dir, [user])
        data = yaml.safe_load((tmp_path / 'users.yaml').read_text())
        assert data['users'][0]['email'] == 'a@example.com'
        assert storage.load_users(store_dir)[0].id == user.id

    def test_corrupt_document_is_treated_as_empty(self, store_dir, tmp_path):
        (tmp_path / 'teams.yaml').write_text('teams: [unclosed')
        assert storage.load_teams(store_dir) == []

    def test_teams_saved_in_order(self, store_dir):
        teams = [Team(name=n, invite_code=f'CODE000{i}') for i, n in enumerate(['Lions', 'Tigers'])]
        storage.save_teams(store_dir, teams)
        assert [t.name for t in storage.load_teams(store_dir)] == ['Lions', 'Tigers']


class TestTournaments:
    """Tests for tournament and match storage."""

    def test_tournament_directory(self, store_dir, tmp_path):
        tournament = Tournament(name='Cup', admin_id=new_id(), invite_code='ABCDEFGHIJ')
        storage.save_tournament(store_dir, tournament)
        assert (tmp_path / 'tournaments' / tournament.id / 'tournament.yaml').exists()
        assert storage.load_tournament(store_dir, tournament.id).name == 'Cup'

    @pytest.mark.parametrize('tournament_id', ['missing', '..', new_id()])
    def test_unknown_or_malformed_tournament(self, store_dir, tournament_id):
        assert storage.load_tournament(store_dir, tournament_id) is None
        assert storage.load_matches(store_dir, tournament_id) == []

    def test_matches_loaded_in_number_order(self, store_dir):
        tournament_id = new_id()
        matches = generate_round_robin(tournament_id, ['A', 'B', 'C', 'D'])
        for match in reversed(matches):
            storage.save_match(store_dir, match)
        assert [m.number for m in storage.load_matches(store_dir, tournament_id)] == [1, 2, 3, 4, 5, 6]

    def test_replace_matches_discards_old(self, store_dir):
        tournament_id = new_id()
        old = generate_round_robin(tournament_id, ['A', 'B', 'C'])
        storage.replace_matches(store_dir, tournament_id, old)
        new = generate_round_robin(tournament_id, ['A', 'B'])
        storage.replace_matches(store_dir, tournament_id, new)
        loaded = storage.load_matches(store_dir, tournament_id)
        assert [m.id for m in loaded] == [new[0].id]

    def test_single_match_update(self, store_dir):
        tournament_id = new_id()
        matches = generate_round_robin(tournament_id, ['A', 'B', 'C'])
        storage.replace_matches(store_dir, tournament_id, matches)
        match = storage.load_match(store_dir, tournament_id, matches[1].id)
        match.score_a = 4
        storage.save_match(store_dir, match)
        assert storage.load_match(store_dir, tournament_id, matches[1].id).score_a == 4
        assert storage.load_match(store_dir, tournament_id, matches[0].id).score_a == 0

    def test_delete_match(self, store_dir):
        tournament_id = new_id()
        matches = generate_round_robin(tournament_id, ['A', 'B', 'C'])
        storage.replace_matches(store_dir, tournament_id, matches)
        storage.delete_match(store_dir, tournament_id, matches[0].id)
        assert [m.number for m in storage.load_matches(store_dir, tournament_id)] == [2, 3]
        assert storage.load_match(store_dir, tournament_id, matches[0].id) is None


class TestLocks:
    """Tests for the file locks."""

    def test_lock_files_live_under_locks_dir(self, store_dir, tmp_path):
        tournament_id = new_id()
        with storage.tournament_lock(store_dir, tournament_id):
            assert (tmp_path / '.locks' / f'tournament-{tournament_id}.lock').exists()
        with storage.data_lock(store_dir, 'teams'):
            assert (tmp_path / '.locks' / 'teams.lock').exists()
