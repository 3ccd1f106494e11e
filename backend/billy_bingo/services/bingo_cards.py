"""
Bingo Card Service

Owner-scoped CRUD for bingo cards. Every lookup filters on both the card id and
the owner id, so another user's card looks exactly like a missing one.
"""
import logging
import math
from typing import Any, Dict, List

from ..core.errors import NotFound, ValidationError
from ..core.validation import parse_uuid, validate_bingo_card
from ..models.bingo_card import BingoCard

logger = logging.getLogger("uvicorn.error")

UPDATABLE_FIELDS = ("name", "date", "venue", "squares")
SORT_FIELDS = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "name": "name",
    "date": "date",
    "venue": "venue",
}
RECENT_CARDS = 5


def _clean(data: Dict[str, Any]) -> Dict[str, Any]:
    """Keep recognised fields and normalise text values."""
    cleaned: Dict[str, Any] = {}
    for key in UPDATABLE_FIELDS:
        if key not in data:
            continue
        value = data[key]
        if key == "squares":
            cleaned[key] = list(value)
        elif key == "name":
            cleaned[key] = value.strip()
        else:
            cleaned[key] = (value or "").strip()
    return cleaned


async def create_card(owner_id, data: Dict[str, Any]) -> BingoCard:
    validate_bingo_card(data, full=True)
    fields = _clean(data)
    fields.setdefault("date", "")
    fields.setdefault("venue", "")
    card = await BingoCard.create(user_id=owner_id, **fields)
    logger.info("[cards] created card id=%s user=%s", card.id, owner_id)
    return card


async def list_cards(owner_id, limit: int = 50, skip: int = 0, sort: str = "createdAt") -> List[BingoCard]:
    """List the owner's cards, newest first by default; sort is always descending."""
    column = SORT_FIELDS.get(sort)
    if column is None:
        raise ValidationError(f"sort must be one of: {', '.join(SORT_FIELDS)}")
    return await BingoCard.filter(user_id=owner_id).order_by(f"-{column}").offset(skip).limit(limit)


async def get_card(owner_id, card_id: Any) -> BingoCard:
    cid = parse_uuid(card_id)
    card = await BingoCard.get_or_none(id=cid, user_id=owner_id) if cid else None
    if not card:
        raise NotFound("Bingo card not found")
    return card


async def update_card(owner_id, card_id: Any, data: Dict[str, Any]) -> BingoCard:
    """
    Apply a partial update. Unknown fields are ignored; recognised fields are
    validated before anything is written.
    """
    card = await get_card(owner_id, card_id)
    validate_bingo_card(data, full=False)
    changes = _clean(data)
    if changes:
        card.update_from_dict(changes)
        await card.save()
    return card


async def delete_card(owner_id, card_id: Any) -> None:
    card = await get_card(owner_id, card_id)
    await card.delete()
    logger.info("[cards] deleted card id=%s user=%s", card.id, owner_id)


async def card_stats(owner_id) -> Dict[str, Any]:
    cards = await BingoCard.filter(user_id=owner_id).order_by("-created_at")
    summaries = [c.summary for c in cards]
    total = len(cards)
    return {
        "totalCards": total,
        "completedCards": sum(1 for s in summaries if s["isComplete"]),
        "averageProgress": math.floor(sum(s["filledSquares"] for s in summaries) / total + 0.5) if total else 0,
        "recentCards": [c.to_dict() for c in cards[:RECENT_CARDS]],
    }
