"""
Services Module

Domain logic behind the HTTP routes:
- users: registration, login and profile updates
- bingo_cards: owner-scoped bingo card CRUD and statistics
- setlistfm: setlist.fm REST API client
- setlists: setlist pass-throughs and song aggregation with fallback
"""

from .setlistfm import SetlistApiError, SetlistFmClient
from .setlists import (
    SetlistResult,
    SetlistService,
    extract_songs,
    get_fallback_songs,
)

__all__ = [
    "SetlistApiError",
    "SetlistFmClient",
    "SetlistResult",
    "SetlistService",
    "extract_songs",
    "get_fallback_songs",
]
