"""Tests for user store operations."""

import sqlite3
from uuid import UUID

import pytest

from basicauth.db import Core
from basicauth.db.user import UserOperations
from basicauth.exceptions import ConflictError, ResourceNotFound


@pytest.fixture
def users(test_db: sqlite3.Connection) -> UserOperations:
    return UserOperations(test_db)


def _create(users: UserOperations, username="alice", email="a@x.com") -> str:
    return users.create(
        username=username,
        email=email,
        password_hash="pw-hash",
        security_question="q",
        security_answer_hash="answer-hash",
    )


class TestCreate:
    """Tests for UserOperations.create."""

    def test_returns_uuid(self, users):
        user_id = _create(users)
        assert UUID(user_id).version == 4

    def test_stores_all_columns(self, users, test_db):
        user_id = _create(users)

        row = test_db.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        assert row["username"] == "alice"
        assert row["email"] == "a@x.com"
        assert row["password_hash"] == "pw-hash"
        assert row["security_question"] == "q"
        assert row["security_answer_hash"] == "answer-hash"
        assert row["created_at"].endswith("Z")

    def test_duplicate_email_conflicts(self, users):
        _create(users)
        with pytest.raises(ConflictError) as exc_info:
            _create(users, username="bob")
        assert exc_info.value.message == "User already exists"

    def test_duplicate_username_conflicts(self, users):
        _create(users)
        with pytest.raises(ConflictError) as exc_info:
            _create(users, email="b@x.com")
        assert exc_info.value.message == "User already exists"

    def test_uniqueness_is_case_insensitive(self, users):
        _create(users)
        with pytest.raises(ConflictError):
            _create(users, username="ALICE", email="other@x.com")
        with pytest.raises(ConflictError):
            _create(users, username="other", email="A@X.COM")

    def test_distinct_pairs_succeed(self, users):
        _create(users)
        _create(users, username="bob", email="b@x.com")
        assert len(users.list()) == 2


class TestLookup:
    """Tests for get_by_email and get_by_id."""

    def test_get_by_email(self, users):
        user_id = _create(users)
        row = users.get_by_email("a@x.com")
        assert row["id"] == user_id

    def test_get_by_email_not_found(self, users):
        with pytest.raises(ResourceNotFound):
            users.get_by_email("nobody@x.com")

    def test_get_by_id(self, users):
        user_id = _create(users)
        assert users.get_by_id(user_id)["email"] == "a@x.com"

    def test_get_by_id_not_found(self, users):
        with pytest.raises(ResourceNotFound):
            users.get_by_id("550e8400-e29b-41d4-a716-446655440000")


class TestUpdatePasswordHash:
    """Tests for update_password_hash."""

    def test_overwrites_hash(self, users):
        user_id = _create(users)
        users.update_password_hash(user_id, "new-hash")
        assert users.get_by_id(user_id)["password_hash"] == "new-hash"

    def test_last_write_wins(self, users):
        user_id = _create(users)
        users.update_password_hash(user_id, "first")
        users.update_password_hash(user_id, "second")
        assert users.get_by_id(user_id)["password_hash"] == "second"

    def test_unknown_id_not_found(self, users):
        with pytest.raises(ResourceNotFound):
            users.update_password_hash("550e8400-e29b-41d4-a716-446655440000", "h")


class TestList:
    """Tests for list."""

    def test_empty(self, users):
        assert users.list() == []

    def test_oldest_first(self, users):
        first = _create(users)
        second = _create(users, username="bob", email="b@x.com")
        assert [row["id"] for row in users.list()] == [first, second]


class TestCore:
    """Tests for Core commit/rollback semantics."""

    def test_commit_on_success(self, test_settings):
        from basicauth.db import get_core, init_db

        init_db(test_settings.database_path)
        with get_core(test_settings.database_path) as core:
            _create(core.user)

        with get_core(test_settings.database_path) as core:
            assert len(core.user.list()) == 1

    def test_rollback_on_error(self, test_settings):
        from basicauth.db import get_core, init_db

        init_db(test_settings.database_path)
        with pytest.raises(RuntimeError):
            with get_core(test_settings.database_path) as core:
                _create(core.user)
                raise RuntimeError("abort")

        with get_core(test_settings.database_path) as core:
            assert core.user.list() == []

    def test_user_operations_cached(self, test_db):
        core = Core(test_db)
        assert core.user is core.user
