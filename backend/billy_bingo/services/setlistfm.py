"""
setlist.fm REST API client

Thin async wrapper over https://api.setlist.fm/rest/1.0: builds the request,
adds the API key header, and returns the parsed JSON body.
Every failure (transport, non-2xx status, bad JSON) surfaces as SetlistApiError.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from ..config import Settings

logger = logging.getLogger("uvicorn.error")


class SetlistApiError(Exception):
    """Raised when a setlist.fm request cannot produce a JSON payload."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SetlistFmClient:
    """setlist.fm API client"""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://api.setlist.fm/rest/1.0",
        artist_mbid: str = "640db492-34c4-47df-be14-96e2cd4b9fe4",
        language: str = "en",
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.artist_mbid = artist_mbid
        self.language = language

    @classmethod
    def from_settings(cls, settings: Settings) -> "SetlistFmClient":
        return cls(
            api_key=settings.setlist_api_key,
            base_url=settings.setlist_api_base,
            artist_mbid=settings.setlist_artist_mbid,
        )

    def is_available(self) -> bool:
        """Check if API key is configured"""
        return bool(self.api_key)

    def _headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "Accept-Language": self.language,
            "x-api-key": self.api_key or "",
            "User-Agent": "billy-bingo/0.1",
        }

    async def _get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        if not self.is_available():
            raise SetlistApiError("SETLIST_API_KEY is missing")

        query = {k: v for k, v in (params or {}).items() if v is not None}
        url = f"{self.base_url}{endpoint}"
        logger.debug("[setlistfm] GET %s params=%s", url, query)

        try:
            async with httpx.AsyncClient() as client:
                resp = await client.get(url, params=query, headers=self._headers())
        except httpx.HTTPError as e:
            raise SetlistApiError(f"Request failed: {e}") from e

        if not 200 <= resp.status_code < 300:
            raise SetlistApiError(
                f"API request failed with status {resp.status_code}: {resp.text}",
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as e:
            raise SetlistApiError(f"Failed to parse response: {e}") from e

    # ---------- Artists ----------
    async def get_artist(self, mbid: str) -> Any:
        return await self._get(f"/artist/{mbid}")

    async def get_artist_setlists(self, mbid: str, page: int = 1) -> Any:
        return await self._get(f"/artist/{mbid}/setlists", {"p": page})

    async def get_configured_artist(self) -> Any:
        return await self.get_artist(self.artist_mbid)

    async def get_configured_artist_setlists(self, page: int = 1) -> Any:
        return await self.get_artist_setlists(self.artist_mbid, page)

    async def search_artists(self, params: Dict[str, Any]) -> Any:
        return await self._get("/search/artists", params)

    # ---------- Setlists ----------
    async def get_setlist(self, setlist_id: str) -> Any:
        return await self._get(f"/setlist/{setlist_id}")

    async def search_setlists(self, params: Dict[str, Any]) -> Any:
        return await self._get("/search/setlists", params)

    # ---------- Venues ----------
    async def get_venue(self, venue_id: str) -> Any:
        return await self._get(f"/venue/{venue_id}")

    async def get_venue_setlists(self, venue_id: str, page: int = 1) -> Any:
        return await self._get(f"/venue/{venue_id}/setlists", {"p": page})

    async def search_venues(self, params: Dict[str, Any]) -> Any:
        return await self._get("/search/venues", params)
