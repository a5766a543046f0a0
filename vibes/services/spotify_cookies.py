# vibes/services/spotify_cookies.py
from typing import Optional

from fastapi import Response

from vibes.config.settings import COOKIE_SECURE

ACCESS_TOKEN_COOKIE = "access_token"
REFRESH_TOKEN_COOKIE = "refresh_token"
AUTH_SOURCE_COOKIE = "spotify_auth_source"

REFRESH_TOKEN_MAX_AGE = 30 * 24 * 60 * 60  # 30 天
AUTH_SOURCE_MAX_AGE = 600                  # 授權流程 10 分鐘內要完成


def _set(response: Response, key: str, value: str, max_age: int) -> None:
    response.set_cookie(
        key=key,
        value=value,
        max_age=max_age,
        path="/",
        httponly=True,
        secure=COOKIE_SECURE,
        samesite="lax",
    )


def set_token_cookies(
    response: Response, access_token: str, expires_in: int, refresh_token: Optional[str] = None
) -> None:
    """refresh_token 為 None 時保留瀏覽器原本的 refresh cookie。"""
    _set(response, ACCESS_TOKEN_COOKIE, access_token, expires_in)
    if refresh_token:
        _set(response, REFRESH_TOKEN_COOKIE, refresh_token, REFRESH_TOKEN_MAX_AGE)


def clear_token_cookies(response: Response) -> None:
    for key in (ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE):
        response.delete_cookie(key, path="/", secure=COOKIE_SECURE, httponly=True, samesite="lax")


def set_auth_source_cookie(response: Response, source: str) -> None:
    _set(response, AUTH_SOURCE_COOKIE, source, AUTH_SOURCE_MAX_AGE)


def clear_auth_source_cookie(response: Response) -> None:
    response.delete_cookie(AUTH_SOURCE_COOKIE, path="/", secure=COOKIE_SECURE, httponly=True, samesite="lax")
