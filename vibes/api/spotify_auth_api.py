# vibes/api/spotify_auth_api.py
import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Cookie, Depends, Query, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse

from vibes.config.settings import FRONTEND_URL, MINIAPP_URL
from vibes.models.spotify_auth_models import (
    AuthLoginResponse,
    InvocationSource,
    RefreshResponse,
    SpotifyStatusResponse,
)
from vibes.services.auth_state import AuthEvent, AuthState, state_from_cookies, transition
from vibes.services.exceptions import (
    ConsentDenied,
    MissingCode,
    RefreshFailure,
    UpstreamTokenError,
)
from vibes.services.spotify_auth_service import (
    SpotifyAuthService,
    check_callback_params,
    get_spotify_auth_service,
)
from vibes.services.spotify_cookies import (
    clear_auth_source_cookie,
    clear_token_cookies,
    set_auth_source_cookie,
    set_token_cookies,
)

router = APIRouter()

logger = logging.getLogger(__name__)


def _with_query(url: str, **params) -> str:
    sep = "&" if "?" in url else "?"
    return url + sep + urlencode(params)


def _parse_source(raw: Optional[str]) -> InvocationSource:
    try:
        return InvocationSource(raw) if raw else InvocationSource.DIRECT
    except ValueError:
        return InvocationSource.DIRECT


def _success_url(source: InvocationSource) -> str:
    if source is InvocationSource.EMBEDDED:
        return MINIAPP_URL
    return f"{FRONTEND_URL}/profile"


def _error_url(source: InvocationSource, error: str) -> str:
    if source is InvocationSource.EMBEDDED:
        # 拒絕授權時直接回 mini-app，不帶 error
        if error == "access_denied":
            return MINIAPP_URL
        return _with_query(MINIAPP_URL, error=error)
    return f"{FRONTEND_URL}/connect-spotify?" + urlencode({"error": error})


def _redirect(url: str) -> RedirectResponse:
    response = RedirectResponse(url=url)
    clear_auth_source_cookie(response)
    return response


@router.get(
    "/spotify/login",
    summary="Spotify Login — 建立 OAuth URL",
    response_model=AuthLoginResponse,
)
def login(
    request: Request,
    response: Response,
    source: InvocationSource = Query(InvocationSource.DIRECT, description="direct / embedded (mini-app)"),
    service: SpotifyAuthService = Depends(get_spotify_auth_service),
):
    # 1. 依照目前的 host 決定 redirect URI，並塞進 state
    url = service.build_authorize_url(request.url.hostname)

    # 2. callback 時要知道是不是從 mini-app 來的
    set_auth_source_cookie(response, source.value)

    return {"authorization_url": url}


def _handle_callback(
    request: Request,
    code: Optional[str],
    error: Optional[str],
    state: Optional[str],
    source_cookie: Optional[str],
    service: SpotifyAuthService,
) -> RedirectResponse:
    source = _parse_source(source_cookie)
    # callback 一定是在使用者被導去授權頁之後才會被打到
    auth_state = AuthState.AUTHORIZATION_REQUESTED

    # 1. 使用者拒絕 / 沒有 code → 不打 token endpoint
    try:
        code = check_callback_params(code, error)
    except (ConsentDenied, MissingCode) as e:
        auth_state = transition(auth_state, AuthEvent.DENY)
        logger.info("Spotify authorization not granted (%s): %s", auth_state.value, e)
        return _redirect(_error_url(source, "access_denied"))

    auth_state = transition(auth_state, AuthEvent.APPROVE)

    # 2. code → token（state 帶回原本的 redirect URI）
    try:
        tokens = service.exchange_code(code, state, request.url.hostname)
    except UpstreamTokenError as e:
        auth_state = transition(auth_state, AuthEvent.EXCHANGE_FAILED)
        logger.error("Error exchanging code for token (%s): %s", auth_state.value, e)
        return _redirect(_error_url(source, "token_error"))

    auth_state = transition(auth_state, AuthEvent.EXCHANGE_OK)
    logger.info("Spotify connected (%s)", auth_state.value)

    # 3. token 存在 cookie，server 端不保存
    response = _redirect(_success_url(source))
    set_token_cookies(response, tokens.access_token, tokens.expires_in, tokens.refresh_token)
    return response


@router.get("/auth/callback/spotify", summary="Spotify OAuth Callback")
def callback(
    request: Request,
    code: Optional[str] = Query(None, description="Spotify 回傳的授權 code"),
    error: Optional[str] = Query(None),
    state: Optional[str] = Query(None, description="nonce.base64(redirect_uri)"),
    spotify_auth_source: Optional[str] = Cookie(None),
    service: SpotifyAuthService = Depends(get_spotify_auth_service),
):
    return _handle_callback(request, code, error, state, spotify_auth_source, service)


@router.get("/spotify/callback", summary="Spotify OAuth Callback (alternate path)")
def callback_alias(
    request: Request,
    code: Optional[str] = Query(None),
    error: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    spotify_auth_source: Optional[str] = Cookie(None),
    service: SpotifyAuthService = Depends(get_spotify_auth_service),
):
    return _handle_callback(request, code, error, state, spotify_auth_source, service)


@router.get("/spotify/status", response_model=SpotifyStatusResponse)
def status(
    access_token: Optional[str] = Cookie(None),
    refresh_token: Optional[str] = Cookie(None),
):
    state = state_from_cookies(access_token, refresh_token)
    return {"connected": state is AuthState.AUTHENTICATED, "state": state.value}


@router.post("/spotify/refresh", response_model=RefreshResponse)
def refresh(
    response: Response,
    refresh_token: Optional[str] = Cookie(None),
    service: SpotifyAuthService = Depends(get_spotify_auth_service),
):
    try:
        token = service.refresh_access_token(refresh_token or "")
    except RefreshFailure as e:
        logger.warning("Spotify refresh failed, resetting connection: %s", e)
        failed = JSONResponse(
            status_code=401,
            content={
                "detail": "connection lost",
                "connected": False,
                "state": transition(AuthState.EXPIRED, AuthEvent.REFRESH_FAILED).value,
            },
        )
        clear_token_cookies(failed)
        return failed

    # Spotify 沒回新的 refresh_token → 沿用舊的 cookie
    set_token_cookies(response, token.access_token, token.expires_in, token.refresh_token)
    return {"status": "ok", "expires_in": token.expires_in}
