# billy_bingo/models/bingo_card.py
"""
Database model for bingo cards.
A card belongs to one user and holds exactly 25 free-text squares.
"""
import uuid
from tortoise import fields, models

from billy_bingo.core.errors import ValidationError

SQUARE_COUNT = 25

class BingoCard(models.Model):
    """
    Bingo card database model.

    Relationships:
    - Belongs to a User (many-to-one); deleted together with its owner

    The ``summary`` (filled squares / completion) is derived on read and never stored.
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    user = fields.ForeignKeyField(
        "models.User",
        related_name="bingo_cards",
        on_delete=fields.CASCADE,
    )
    name = fields.CharField(max_length=100)
    date = fields.CharField(max_length=50, default="")  # Free text, e.g. "2024-08-09" or "Night 2"
    venue = fields.CharField(max_length=200, default="")
    squares = fields.JSONField()  # list[str] of length 25
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "bingo_cards"
        ordering = ["-created_at"]

    async def save(self, *args, **kwargs):
        if not isinstance(self.squares, list) or len(self.squares) != SQUARE_COUNT:
            raise ValidationError(f"Bingo card must have exactly {SQUARE_COUNT} squares")
        await super().save(*args, **kwargs)

    @property
    def summary(self) -> dict:
        filled = sum(1 for s in self.squares or [] if s and s.strip())
        return {
            "filledSquares": filled,
            "totalSquares": SQUARE_COUNT,
            "progress": f"{filled}/{SQUARE_COUNT}",
            "isComplete": filled == SQUARE_COUNT,
        }

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "userId": str(self.user_id),
            "name": self.name,
            "date": self.date,
            "venue": self.venue,
            "squares": list(self.squares),
            "summary": self.summary,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
