# billy_bingo/models/__init__.py
"""
Database models module initialization.
Exports all Tortoise ORM models for convenient imports.

Models exported:
- User: User account and authentication model
- BingoCard: Per-user bingo card (25 squares)
"""
from .user import User
from .bingo_card import BingoCard
