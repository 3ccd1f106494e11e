"""
Setlist Service

Wraps the setlist.fm client for the configured artist:
- paginated setlist listing, single setlist, search and artist info pass-throughs
- multi-page song aggregation with a static fallback list

Upstream failures never propagate as exceptions from here; every call returns a
SetlistResult and the caller decides the HTTP status.
"""
import asyncio
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .setlistfm import SetlistApiError, SetlistFmClient

logger = logging.getLogger("uvicorn.error")

DEFAULT_ITEMS_PER_PAGE = 20
SEARCH_PARAMS = ("artistName", "venueName", "cityName", "countryCode", "date", "year", "p")

FALLBACK_SONGS = sorted([
    "Dust in a Baggie",
    "Away From the Mire",
    "Hide and Seek",
    "Turmoil & Tinfoil",
    "In the Morning Light",
    "Red Daisy",
    "Pyramid Country",
    "Secrets",
    "Love and Regret",
    "Heartbeat of America",
    "Know It All",
    "Wargasm",
    "Wharf Rat",
    "Thunder",
    "Likes of Me",
    "Hollow Heart",
    "Doin' Things Right",
    "Thirst Mutilator",
    "Dealing Despair",
    "Highway Hypnosis",
    "Must Be Seven",
    "Taking Water",
    "Fire Line",
    "Hellbender",
    "Enough to Leave",
    "Running the Route",
    "This Old World",
    "Bronzeback",
    "All of Tomorrow",
    "Unwanted Love",
    "Slow Train",
    "Tipper",
    "Fireline",
    "Meet Me at the Creek",
    "Rank Stranger",
    "Lonesome LA Cowboy",
    "Black Clouds",
    "While I'm Waiting Here",
    "Spinning",
    "Running",
    "Dos Banjos",
    "Streamline Cannonball",
    "Ernest T. Grass",
    "Leaders",
])


@dataclass
class SetlistResult:
    """Outcome of a setlist operation: either data or an error message."""
    success: bool
    data: Any = None
    error: Optional[str] = None
    pagination: Optional[Dict[str, int]] = None


@dataclass
class SongAggregate:
    """Accumulates setlists across pages while aggregating songs."""
    setlists: List[dict] = field(default_factory=list)
    pages_fetched: int = 0

    def add_page(self, payload: Any) -> None:
        self.pages_fetched += 1
        page_setlists = payload.get("setlist") if isinstance(payload, dict) else None
        if isinstance(page_setlists, list):
            self.setlists.extend(page_setlists)


def get_fallback_songs() -> List[str]:
    """Static, sorted song list used when setlist.fm is unavailable."""
    return list(FALLBACK_SONGS)


def extract_songs(setlists: Iterable[Any]) -> List[str]:
    """
    Collect distinct, trimmed song names from setlist payloads.

    Walks setlist -> sets.set[] -> song[] -> name. Empty names and malformed
    entries are skipped. The result is sorted ascending.
    """
    songs = set()
    for setlist in setlists or []:
        if not isinstance(setlist, dict):
            continue
        sets_block = setlist.get("sets")
        sets = sets_block.get("set") if isinstance(sets_block, dict) else None
        if not isinstance(sets, list):
            continue
        for s in sets:
            tracks = s.get("song") if isinstance(s, dict) else None
            if not isinstance(tracks, list):
                continue
            for song in tracks:
                name = song.get("name") if isinstance(song, dict) else None
                if isinstance(name, str) and name.strip():
                    songs.add(name.strip())
    return sorted(songs)


def total_pages(payload: Any) -> int:
    """Number of pages the upstream reports for a listing (at least 1)."""
    if not isinstance(payload, dict):
        return 1
    try:
        total = int(payload.get("total") or 0)
        per_page = int(payload.get("itemsPerPage") or 0)
    except (TypeError, ValueError):
        return 1
    if total > 0 and per_page > 0:
        return max(1, math.ceil(total / per_page))
    return 1


class SetlistService:
    """Setlist operations for the configured artist."""

    def __init__(self, client: SetlistFmClient, page_delay: float = 0.1):
        self.client = client
        self.page_delay = page_delay

    async def get_artist_setlists(self, page: int = 1) -> SetlistResult:
        try:
            response = await self.client.get_configured_artist_setlists(page)
        except SetlistApiError as e:
            logger.error("[setlists] failed to fetch setlists page %s: %s", page, e)
            return SetlistResult(success=False, error=str(e))
        payload = response if isinstance(response, dict) else {}
        return SetlistResult(
            success=True,
            data=response,
            pagination={
                "page": page,
                "total": payload.get("total") or 0,
                "itemsPerPage": payload.get("itemsPerPage") or DEFAULT_ITEMS_PER_PAGE,
            },
        )

    async def get_songs(self, max_pages: int = 5) -> dict:
        """
        Aggregate distinct song names across up to ``max_pages`` setlist pages.

        Page 1 is mandatory: if it fails the static fallback list is returned with
        success=False. Later pages are fetched one at a time with a fixed pause;
        a failed later page is logged and skipped.
        """
        first = await self.get_artist_setlists(1)
        if not first.success:
            logger.warning("[setlists] using fallback songs: %s", first.error)
            return self._fallback_result(first.error)

        aggregate = SongAggregate()
        aggregate.add_page(first.data)
        available = total_pages(first.data)
        pages_to_fetch = min(max_pages, available)

        for page in range(2, pages_to_fetch + 1):
            result = await self.get_artist_setlists(page)
            if result.success:
                aggregate.add_page(result.data)
            else:
                aggregate.pages_fetched += 1
                logger.warning("[setlists] skipping page %s: %s", page, result.error)
            await asyncio.sleep(self.page_delay)

        songs = extract_songs(aggregate.setlists)
        return {
            "success": True,
            "data": {
                "songs": songs,
                "metadata": {
                    "totalSetlists": len(aggregate.setlists),
                    "totalSongs": len(songs),
                    "pagesFetched": aggregate.pages_fetched,
                    "totalPagesAvailable": available,
                },
            },
        }

    @staticmethod
    def _fallback_result(error: Optional[str]) -> dict:
        songs = get_fallback_songs()
        return {
            "success": False,
            "error": error,
            "data": {
                "songs": songs,
                "metadata": {
                    "totalSetlists": 0,
                    "totalSongs": len(songs),
                    "pagesFetched": 0,
                    "totalPagesAvailable": 0,
                    "fallback": True,
                },
            },
        }

    async def get_setlist(self, setlist_id: str) -> SetlistResult:
        try:
            return SetlistResult(success=True, data=await self.client.get_setlist(setlist_id))
        except SetlistApiError as e:
            logger.error("[setlists] failed to fetch setlist %s: %s", setlist_id, e)
            return SetlistResult(success=False, error=str(e))

    async def search_setlists(self, params: Dict[str, Any]) -> SetlistResult:
        query = {k: v for k, v in params.items() if k in SEARCH_PARAMS}
        try:
            return SetlistResult(success=True, data=await self.client.search_setlists(query))
        except SetlistApiError as e:
            logger.error("[setlists] search failed (%s): %s", query, e)
            return SetlistResult(success=False, error=str(e))

    async def get_artist_info(self) -> SetlistResult:
        try:
            return SetlistResult(success=True, data=await self.client.get_configured_artist())
        except SetlistApiError as e:
            logger.error("[setlists] failed to fetch artist info: %s", e)
            return SetlistResult(success=False, error=str(e))
