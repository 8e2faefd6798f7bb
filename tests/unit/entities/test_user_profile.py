"""Unit tests for users and profiles."""

from src.agenda.entities import Profile, ProfileRepository, User, UserRepository


class TestUserRepository:
    def test_email_lookup_is_case_insensitive(self, session):
        users = UserRepository(session)
        created = users.create(User(email="Ana@Example.com", password_hash="x"))
        session.commit()

        assert created.email == "ana@example.com"
        assert users.get_by_email("ANA@example.COM").id == created.id
        assert users.get(created.id).email == "ana@example.com"

    def test_unknown_user(self, session):
        assert UserRepository(session).get_by_email("nobody@example.com") is None


class TestProfileRepository:
    def test_full_name(self, session, alice):
        assert ProfileRepository(session).get_full_name(alice.id) == "Alice Martín"

    def test_missing_profile(self, session):
        assert ProfileRepository(session).get_by_user("missing") is None
        assert ProfileRepository(session).get_full_name("missing") is None

    def test_profile_without_name(self, session, bob):
        profile = ProfileRepository(session).get_by_user(bob.id)
        assert isinstance(profile, Profile)
        assert profile.full_name is None
