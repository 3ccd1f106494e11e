"""
Unit tests for services.users module.
Tests that database unique constraints, not only the lookups before insert,
produce the field-specific conflict errors.
"""
import pytest
from tortoise.exceptions import IntegrityError

from billy_bingo.core.errors import Conflict
from billy_bingo.models.user import User
from billy_bingo.services import users as user_service


PASSWORD = "StrongPass1"


@pytest.fixture
def skip_precheck(monkeypatch):
    """Disable the friendly uniqueness lookup so the insert/update hits the constraint."""

    async def _noop(*args, **kwargs):
        return None

    monkeypatch.setattr(user_service, "_ensure_unique", _noop)


@pytest.mark.asyncio
class TestConstraintConflicts:

    async def test_register_duplicate_email(self, db, skip_precheck):
        await user_service.register_user("firstuser", "dup@example.com", PASSWORD)
        with pytest.raises(Conflict) as exc:
            await user_service.register_user("seconduser", "DUP@example.com", PASSWORD)
        assert exc.value.message == "Email already exists"
        assert await User.all().count() == 1

    async def test_register_duplicate_name(self, db, skip_precheck):
        await user_service.register_user("samename", "one@example.com", PASSWORD)
        with pytest.raises(Conflict) as exc:
            await user_service.register_user("samename", "two@example.com", PASSWORD)
        assert exc.value.message == "Username already exists"

    async def test_update_to_taken_email(self, db, skip_precheck):
        await user_service.register_user("owner1", "taken@example.com", PASSWORD)
        other = await user_service.register_user("owner2", "free@example.com", PASSWORD)
        with pytest.raises(Conflict) as exc:
            await user_service.update_user(other, {"email": "taken@example.com"})
        assert exc.value.message == "Email already exists"

    async def test_update_to_taken_name(self, db, skip_precheck):
        await user_service.register_user("takenname", "a1@example.com", PASSWORD)
        other = await user_service.register_user("freename", "a2@example.com", PASSWORD)
        with pytest.raises(Conflict) as exc:
            await user_service.update_user(other, {"name": "takenname"})
        assert exc.value.message == "Username already exists"


@pytest.mark.parametrize(
    "driver_message, expected",
    [
        ("UNIQUE constraint failed: users.email", "Email already exists"),
        ("UNIQUE constraint failed: users.name", "Username already exists"),
        (
            'duplicate key value violates unique constraint "users_name_key"\n'
            "DETAIL:  Key (name)=(email1) already exists.",
            "Username already exists",
        ),
        (
            'duplicate key value violates unique constraint "users_email_key"\n'
            "DETAIL:  Key (email)=(name@example.com) already exists.",
            "Email already exists",
        ),
        ("(1062, \"Duplicate entry 'email' for key 'users.name'\")", "Username already exists"),
        ("(1062, \"Duplicate entry 'a@b.co' for key 'email'\")", "Email already exists"),
        ("something else entirely", "User already exists"),
    ],
)
def test_conflict_matches_column_not_value(driver_message, expected):
    conflict = user_service._conflict_from_integrity(IntegrityError(driver_message))
    assert conflict.message == expected
