# vibes/api/spotify_api.py
import logging
from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Query, Response
from fastapi.responses import JSONResponse

from vibes.models.spotify_models import SpotifyProfile, TopTracksResponse
from vibes.services.exceptions import RefreshFailure
from vibes.services.spotify_auth_service import SpotifyAuthService, get_spotify_auth_service
from vibes.services.spotify_cookies import clear_token_cookies, set_token_cookies
from vibes.services.spotify_user_service import (
    convert_time_frame_to_range,
    fetch_profile,
    fetch_top_tracks,
    format_time_range,
)

router = APIRouter()

logger = logging.getLogger(__name__)


class NotConnected(Exception):
    def __init__(self, response: JSONResponse):
        self.response = response


def _access_token(
    response: Response,
    access_token: Optional[str],
    refresh_token: Optional[str],
    service: SpotifyAuthService,
) -> str:
    """
    取得可用的 access_token：
    1. cookie 裡有 access_token → 直接用
    2. 只剩 refresh_token（access 過期被瀏覽器丟掉）→ refresh，新 token 寫回 cookie
    3. 都沒有 / refresh 失敗 → 401
    """
    if access_token:
        return access_token

    if not refresh_token:
        raise NotConnected(JSONResponse(
            status_code=401,
            content={"error": "No Spotify access token found", "connected": False},
        ))

    try:
        token = service.refresh_access_token(refresh_token)
    except RefreshFailure as e:
        logger.warning("Spotify refresh failed: %s", e)
        failed = JSONResponse(
            status_code=401,
            content={"error": "Spotify connection lost", "connected": False},
        )
        clear_token_cookies(failed)
        raise NotConnected(failed)

    set_token_cookies(response, token.access_token, token.expires_in, token.refresh_token)
    return token.access_token


@router.get("/spotify/top-tracks", response_model=TopTracksResponse)
def top_tracks(
    response: Response,
    timeFrame: str = Query("week", description="week / month / year"),
    limit: int = Query(5, ge=1, le=50),
    access_token: Optional[str] = Cookie(None),
    refresh_token: Optional[str] = Cookie(None),
    service: SpotifyAuthService = Depends(get_spotify_auth_service),
):
    try:
        token = _access_token(response, access_token, refresh_token, service)
    except NotConnected as e:
        return e.response

    time_range = convert_time_frame_to_range(timeFrame)
    tracks = fetch_top_tracks(token, timeFrame, limit)

    return {
        "tracks": tracks,
        "connected": True,
        "timeRange": time_range,
        "label": format_time_range(time_range),
    }


@router.get("/spotify/me", response_model=SpotifyProfile)
def me(
    response: Response,
    access_token: Optional[str] = Cookie(None),
    refresh_token: Optional[str] = Cookie(None),
    service: SpotifyAuthService = Depends(get_spotify_auth_service),
):
    try:
        token = _access_token(response, access_token, refresh_token, service)
    except NotConnected as e:
        return e.response

    return fetch_profile(token)
