# tests/services/test_users_service.py
import uuid

import pytest

from core_store.exceptions import (
    OwnerHasEntitiesError,
    ReferentialIntegrityError,
    UniquenessViolationError,
    UserNotFoundError,
)
from core_store.schemas import CoreEntityCreate, UserCreate, UserUpdate


class TestCreateUser:
    def test_assigns_id_and_equal_timestamps(self, users_service):
        user = users_service.create_user(UserCreate(email="ada@example.org", name="Ada"))

        assert isinstance(user.id, uuid.UUID)
        assert user.created_at == user.updated_at

    def test_omitted_role_is_standard_user(self, users_service):
        user = users_service.create_user(UserCreate(email="std@example.org", name="Std"))

        assert user.role == "Standard User"

    def test_explicit_role_is_kept_verbatim(self, users_service):
        user = users_service.create_user(
            UserCreate(email="ops@example.org", name="Ops", role="Operator")
        )

        assert user.role == "Operator"

    def test_duplicate_email_is_rejected(self, users_service, users_repo):
        users_service.create_user(UserCreate(email="dup@example.org", name="First"))

        with pytest.raises(UniquenessViolationError) as excinfo:
            users_service.create_user(UserCreate(email="dup@example.org", name="Second"))

        assert excinfo.value.field == "email"
        assert excinfo.value.value == "dup@example.org"
        assert users_repo.count() == 1

    def test_duplicate_caught_by_database_constraint(
        self, users_service, users_repo, monkeypatch
    ):
        """
        Scenario: the pre-check misses a concurrent insert.
        Expected: the database unique constraint surfaces as the same domain error.
        """
        users_service.create_user(UserCreate(email="race@example.org", name="First"))
        monkeypatch.setattr(users_repo.__class__, "get_by_email", lambda self, email: None)

        with pytest.raises(UniquenessViolationError):
            users_service.create_user(UserCreate(email="race@example.org", name="Second"))

        monkeypatch.undo()
        assert users_repo.count() == 1


class TestReadUsers:
    def test_get_user(self, users_service):
        created = users_service.create_user(UserCreate(email="get@example.org", name="Get"))

        assert users_service.get_user(created.id) == created

    def test_get_missing_user(self, users_service):
        with pytest.raises(UserNotFoundError):
            users_service.get_user(uuid.uuid4())

    def test_get_user_by_email(self, users_service):
        created = users_service.create_user(UserCreate(email="mail@example.org", name="Mail"))

        assert users_service.get_user_by_email("mail@example.org").id == created.id
        with pytest.raises(UserNotFoundError) as excinfo:
            users_service.get_user_by_email("nobody@example.org")
        assert excinfo.value.field == "email"

    def test_list_users(self, users_service, clock):
        for i in range(3):
            clock.advance(seconds=1)
            users_service.create_user(UserCreate(email=f"l{i}@example.org", name=f"L{i}"))

        assert [u.name for u in users_service.list_users(limit=2)] == ["L2", "L1"]


class TestUpdateUser:
    def test_update_changes_updated_at_only(self, users_service, clock):
        created = users_service.create_user(UserCreate(email="up@example.org", name="Before"))

        later = clock.advance(minutes=1)
        updated = users_service.update_user(created.id, UserUpdate(name="After"))

        assert updated.name == "After"
        assert updated.created_at == created.created_at
        assert updated.updated_at == later
        assert updated.created_at <= updated.updated_at

    def test_empty_update_is_a_noop(self, users_service, clock):
        created = users_service.create_user(UserCreate(email="same@example.org", name="Same"))

        clock.advance(minutes=1)
        updated = users_service.update_user(created.id, UserUpdate())

        assert updated.updated_at == created.updated_at

    def test_update_to_taken_email_is_rejected(self, users_service):
        users_service.create_user(UserCreate(email="taken@example.org", name="Taken"))
        other = users_service.create_user(UserCreate(email="free@example.org", name="Free"))

        with pytest.raises(UniquenessViolationError):
            users_service.update_user(other.id, UserUpdate(email="taken@example.org"))

        assert users_service.get_user(other.id).email == "free@example.org"

    def test_update_to_own_email_is_allowed(self, users_service):
        user = users_service.create_user(UserCreate(email="me@example.org", name="Me"))

        updated = users_service.update_user(
            user.id, UserUpdate(email="me@example.org", role="Admin")
        )

        assert updated.role == "Admin"

    def test_update_missing_user(self, users_service):
        with pytest.raises(UserNotFoundError):
            users_service.update_user(uuid.uuid4(), UserUpdate(name="Ghost"))


class TestDeleteUser:
    def test_delete_user(self, users_service):
        user = users_service.create_user(UserCreate(email="bye@example.org", name="Bye"))

        assert users_service.delete_user(user.id) is True
        with pytest.raises(UserNotFoundError):
            users_service.get_user(user.id)

    def test_delete_missing_user_returns_false(self, users_service):
        assert users_service.delete_user(uuid.uuid4()) is False

    def test_delete_owner_with_entities_is_restricted(self, users_service, entities_service):
        owner = users_service.create_user(UserCreate(email="own@example.org", name="Owner"))
        entities_service.create_entity(
            CoreEntityCreate(title="Mine", content="body", owner_id=owner.id)
        )

        with pytest.raises(OwnerHasEntitiesError) as excinfo:
            users_service.delete_user(owner.id)

        assert isinstance(excinfo.value, ReferentialIntegrityError)
        assert excinfo.value.count == 1
        assert users_service.get_user(owner.id).id == owner.id

    def test_delete_owner_after_entities_removed(self, users_service, entities_service):
        owner = users_service.create_user(UserCreate(email="free2@example.org", name="Owner"))
        entity = entities_service.create_entity(
            CoreEntityCreate(title="Mine", content="body", owner_id=owner.id)
        )

        entities_service.delete_entity(entity.id)

        assert users_service.delete_user(owner.id) is True
