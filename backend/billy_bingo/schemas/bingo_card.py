# billy_bingo/schemas/bingo_card.py
"""
Pydantic schemas for bingo card endpoints.
"""
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict


class BingoCardIn(BaseModel):
    """
    Request model for creating or updating a bingo card.
    On update only the keys actually sent are applied.
    """
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None  # 1-100 characters
    date: Optional[str] = None  # Free text, up to 50 characters
    venue: Optional[str] = None  # Free text, up to 200 characters
    squares: Optional[List[Any]] = None  # Exactly 25 strings, each up to 200 characters
