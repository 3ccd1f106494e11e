# billy_bingo/models/user.py
"""
Database model for users.
Represents a user account: identity fields plus the salted password hash.
"""
import uuid
from tortoise import fields, models

from billy_bingo.core.errors import ValidationError
from billy_bingo.core.security import hash_password, verify_password

# Storage-level floor; request validation applies the stricter rule
MIN_STORED_PASSWORD_LENGTH = 6

class User(models.Model):
    """
    User database model.

    Relationships:
    - Has many BingoCards (one-to-many, via related_name="bingo_cards")

    Security:
    - Password is stored as an argon2 hash, never as plain text
    - Name and email are unique; the database constraints are authoritative
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Primary key: unique user identifier
    name = fields.CharField(max_length=50, unique=True, index=True)  # Display/login name
    email = fields.CharField(max_length=256, unique=True, index=True)  # Stored lowercased
    password_hash = fields.CharField(max_length=255)  # argon2 hash
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "users"

    def set_password(self, plain: str) -> None:
        """Hash and store a new password; refuses anything under the storage minimum."""
        if plain is None or len(plain) < MIN_STORED_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_STORED_PASSWORD_LENGTH} characters long"
            )
        self.password_hash = hash_password(plain)

    def check_password(self, plain: str) -> bool:
        return verify_password(plain, self.password_hash)

    def to_public(self) -> dict:
        """Serializable view of the user; the password hash is never included."""
        return {
            "id": str(self.id),
            "name": self.name,
            "email": self.email,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
