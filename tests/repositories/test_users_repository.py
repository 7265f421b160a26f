# tests/repositories/test_users_repository.py
import uuid

import pytest

from core_store.db.models import DEFAULT_ROLE


class TestUsersRepository:
    def test_create_flushes_and_assigns_defaults(self, users_repo):
        user = users_repo.create(email="ada@example.org", name="Ada")

        assert user.id is not None
        assert user.role == DEFAULT_ROLE
        assert users_repo.get_by_id(user.id) is user

    def test_get_by_email(self, users_repo):
        user = users_repo.create(email="grace@example.org", name="Grace")

        assert users_repo.get_by_email("grace@example.org") is user
        assert users_repo.get_by_email("nobody@example.org") is None

    def test_exists_and_count(self, users_repo):
        user = users_repo.create(email="one@example.org", name="One")
        users_repo.create(email="two@example.org", name="Two")

        assert users_repo.exists(user.id)
        assert not users_repo.exists(uuid.uuid4())
        assert users_repo.count() == 2

    def test_list_users_newest_first_with_paging(self, users_repo, clock):
        emails = []
        for i in range(4):
            clock.advance(seconds=1)
            emails.append(users_repo.create(email=f"u{i}@example.org", name=f"U{i}").email)

        page = users_repo.list_users(limit=2)
        rest = users_repo.list_users(limit=2, offset=2)

        assert [u.email for u in page] == ["u3@example.org", "u2@example.org"]
        assert [u.email for u in rest] == ["u1@example.org", "u0@example.org"]

    def test_update_fields(self, users_repo):
        user = users_repo.create(email="old@example.org", name="Old")

        users_repo.update_fields(user, fields={"email": "new@example.org", "role": "Admin"})

        assert users_repo.get_by_email("new@example.org") is user
        assert user.role == "Admin"

    def test_update_fields_rejects_unknown_keys(self, users_repo):
        user = users_repo.create(email="guard@example.org", name="Guard")

        with pytest.raises(ValueError):
            users_repo.update_fields(user, fields={"created_at": None})

    def test_delete(self, users_repo):
        user = users_repo.create(email="gone@example.org", name="Gone")
        user_id = user.id

        users_repo.delete(user)

        assert users_repo.get_by_id(user_id) is None
