# billy_bingo/api/v1/routers/setlists.py
import datetime as dt

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse

from billy_bingo.api.v1.deps import get_setlist_service
from billy_bingo.core.errors import ValidationError
from billy_bingo.services.setlists import SEARCH_PARAMS, SetlistService, get_fallback_songs

router = APIRouter(prefix="/setlists", tags=["setlists"])

MAX_PAGES_LIMIT = 20


def utc_now_iso() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat()


def _upstream_failure(message: str, error: str | None, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "error": error},
    )


@router.get("/health")
async def health_check(service: SetlistService = Depends(get_setlist_service)):
    """
    Check setlist.fm with a one-page fetch.

    Always 200; ``apiStatus`` is "connected" when that fetch succeeded and
    "fallback" when song requests would currently use the static list.
    """
    result = await service.get_artist_setlists(1)
    return {
        "success": True,
        "message": "Setlist API integration is healthy",
        "apiStatus": "connected" if result.success else "fallback",
        "timestamp": utc_now_iso(),
    }


@router.get("/billy-strings")
async def artist_setlists(
    page: int = Query(1),
    service: SetlistService = Depends(get_setlist_service),
):
    """
    One page of the configured artist's setlists, passed through from setlist.fm.
    """
    if page < 1:
        raise ValidationError("Page number must be greater than 0")
    result = await service.get_artist_setlists(page)
    if not result.success:
        return _upstream_failure("Failed to fetch setlists", result.error)
    return {
        "success": True,
        "message": "Setlists retrieved successfully",
        "data": result.data,
        "pagination": result.pagination,
    }


@router.get("/billy-strings/songs")
async def artist_songs(
    maxPages: int = Query(5),
    service: SetlistService = Depends(get_setlist_service),
):
    """
    Distinct songs across up to ``maxPages`` pages of setlists.

    Returns:
        200 with the aggregated list, or 206 with the static fallback list
        when setlist.fm could not be reached.
    """
    if maxPages < 1 or maxPages > MAX_PAGES_LIMIT:
        raise ValidationError(f"maxPages must be between 1 and {MAX_PAGES_LIMIT}")

    result = await service.get_songs(maxPages)
    ok = result["success"]
    return JSONResponse(
        status_code=status.HTTP_200_OK if ok else status.HTTP_206_PARTIAL_CONTENT,
        content={
            "success": ok,
            "message": "Songs retrieved successfully" if ok else "Using fallback songs due to API error",
            "data": result["data"],
            "error": result.get("error"),
        },
    )


@router.get("/billy-strings/artist-info")
async def artist_info(service: SetlistService = Depends(get_setlist_service)):
    result = await service.get_artist_info()
    if not result.success:
        return _upstream_failure("Failed to fetch artist information", result.error)
    return {
        "success": True,
        "message": "Artist information retrieved successfully",
        "data": result.data,
    }


@router.get("/search")
async def search_setlists(request: Request, service: SetlistService = Depends(get_setlist_service)):
    """
    Search setlist.fm.

    Accepted query keys: artistName, venueName, cityName, countryCode, date,
    year and p (page). At least one is required; others are ignored.
    """
    params = {}
    for key in SEARCH_PARAMS:
        value = request.query_params.get(key)
        if value and value.strip():
            params[key] = value.strip()

    if not params:
        raise ValidationError("At least one search parameter is required")

    if "p" in params:
        try:
            page = int(params["p"])
        except ValueError:
            raise ValidationError("Page number must be a number")
        if page < 1:
            raise ValidationError("Page number must be greater than 0")
        params["p"] = page

    result = await service.search_setlists(params)
    if not result.success:
        return _upstream_failure("Search failed", result.error)
    return {
        "success": True,
        "message": "Search completed successfully",
        "data": result.data,
        "searchParams": params,
    }


@router.get("/fallback-songs")
async def fallback_songs():
    songs = get_fallback_songs()
    return {
        "success": True,
        "message": "Fallback songs retrieved successfully",
        "data": {"songs": songs, "metadata": {"totalSongs": len(songs), "fallback": True}},
    }


# Keep last: the path parameter would otherwise shadow the routes above
@router.get("/{setlist_id}")
async def get_setlist(setlist_id: str, service: SetlistService = Depends(get_setlist_service)):
    setlist_id = setlist_id.strip()
    if not setlist_id:
        raise ValidationError("Setlist ID is required")
    result = await service.get_setlist(setlist_id)
    if not result.success:
        return _upstream_failure("Setlist not found", result.error, status.HTTP_404_NOT_FOUND)
    return {
        "success": True,
        "message": "Setlist retrieved successfully",
        "data": result.data,
    }
