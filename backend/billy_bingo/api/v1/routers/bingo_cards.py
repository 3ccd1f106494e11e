# billy_bingo/api/v1/routers/bingo_cards.py
from fastapi import APIRouter, Depends, Query, status

from billy_bingo.api.v1.deps import get_current_user
from billy_bingo.models.user import User
from billy_bingo.schemas.bingo_card import BingoCardIn
from billy_bingo.services import bingo_cards as card_service

# All routes require authentication
router = APIRouter(
    prefix="/bingo-cards",
    tags=["bingo-cards"],
)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_bingo_card(body: BingoCardIn, user: User = Depends(get_current_user)):
    """
    Create a bingo card owned by the authenticated user.

    Raises:
        ValidationError (400): Missing name, bad lengths, or squares that are
            not exactly 25 strings
    """
    card = await card_service.create_card(user.id, body.model_dump(exclude_unset=True))
    return {
        "success": True,
        "message": "Bingo card created successfully",
        "data": card.to_dict(),
    }


@router.get("")
async def list_bingo_cards(
    user: User = Depends(get_current_user),
    limit: int = Query(50, ge=1, le=100),
    skip: int = Query(0, ge=0),
    sort: str = Query("createdAt"),
):
    """
    List the authenticated user's cards.

    Args:
        limit: Maximum number of cards (1-100)
        skip: Number of cards to skip
        sort: Field to sort by, descending (createdAt, updatedAt, name, date, venue)
    """
    cards = await card_service.list_cards(user.id, limit=limit, skip=skip, sort=sort)
    return {
        "success": True,
        "message": "Bingo cards retrieved successfully",
        "data": [c.to_dict() for c in cards],
        "count": len(cards),
    }


@router.get("/stats")
async def bingo_card_stats(user: User = Depends(get_current_user)):
    """
    Totals, completed count, average filled squares and the five newest cards.
    """
    return {
        "success": True,
        "message": "Bingo card statistics retrieved successfully",
        "data": await card_service.card_stats(user.id),
    }


@router.get("/{card_id}")
async def get_bingo_card(card_id: str, user: User = Depends(get_current_user)):
    card = await card_service.get_card(user.id, card_id)
    return {
        "success": True,
        "message": "Bingo card retrieved successfully",
        "data": card.to_dict(),
    }


@router.put("/{card_id}")
async def update_bingo_card(card_id: str, body: BingoCardIn, user: User = Depends(get_current_user)):
    """
    Partially update a card. Only name, date, venue and squares are applied.

    Raises:
        NotFound (404): Card missing or owned by someone else
        ValidationError (400): Invalid values for the supplied fields
    """
    card = await card_service.update_card(user.id, card_id, body.model_dump(exclude_unset=True))
    return {
        "success": True,
        "message": "Bingo card updated successfully",
        "data": card.to_dict(),
    }


@router.delete("/{card_id}")
async def delete_bingo_card(card_id: str, user: User = Depends(get_current_user)):
    await card_service.delete_card(user.id, card_id)
    return {"success": True, "message": "Bingo card deleted successfully", "data": None}
