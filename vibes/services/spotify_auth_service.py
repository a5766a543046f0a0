# vibes/services/spotify_auth_service.py
import logging
from typing import Optional
from urllib.parse import urlencode

import requests
from fastapi import HTTPException
from pydantic import ValidationError
from requests.auth import HTTPBasicAuth

from vibes.config.settings import SpotifyConfig, get_spotify_config
from vibes.models.spotify_auth_models import RefreshedToken, TokenPair
from vibes.services.exceptions import (
    ConsentDenied,
    MissingCode,
    RefreshFailure,
    SpotifyConfigError,
    StateDecodeFailure,
    UpstreamTokenError,
)
from vibes.services.redirect_resolver import resolve_redirect_uri
from vibes.services.spotify_state import build_state, generate_nonce, redirect_uri_from_state

logger = logging.getLogger(__name__)

SPOTIFY_SCOPES = ("user-read-private", "user-read-email", "user-top-read")


class SpotifyAuthService:
    """
    Spotify authorization code flow：
    - build_authorize_url：產生授權 URL（state 內夾帶 redirect URI）
    - exchange_code：code → TokenPair
    - refresh_access_token：refresh_token → 新的 access_token

    不存任何 token，全部交給呼叫端（cookie）。
    """

    def __init__(self, config: SpotifyConfig, session: Optional[requests.Session] = None):
        if not config.client_id:
            raise SpotifyConfigError("SPOTIFY_CLIENT_ID is not configured")
        if not config.client_secret:
            raise SpotifyConfigError("SPOTIFY_CLIENT_SECRET is not configured")

        self.config = config
        self.session = session or requests.Session()

    # --------------------------
    # Authorization URL
    # --------------------------
    def build_authorize_url(self, hostname: Optional[str] = None) -> str:
        redirect_uri = resolve_redirect_uri(self.config, hostname)
        state = build_state(generate_nonce(), redirect_uri)

        params = {
            "response_type": "code",
            "client_id": self.config.client_id,
            "scope": " ".join(SPOTIFY_SCOPES),
            "redirect_uri": redirect_uri,
            "state": state,
        }
        logger.info("Built Spotify authorize URL with redirect_uri=%s", redirect_uri)
        return f"{self.config.authorize_url}?{urlencode(params)}"

    # --------------------------
    # Code exchange
    # --------------------------
    def redirect_uri_for_exchange(self, state: Optional[str], hostname: Optional[str] = None) -> str:
        """
        redirect URI 必須和建立授權 URL 時完全一致，所以優先用 state 裡帶回來的那一個；
        state 壞掉或不在註冊清單內才退回用 host 判斷。
        """
        if state:
            try:
                return redirect_uri_from_state(state, self.config.allowed_redirect_uris)
            except StateDecodeFailure as e:
                logger.warning("Ignoring state redirect URI: %s", e)

        return resolve_redirect_uri(self.config, hostname)

    def exchange_code(
        self, code: str, state: Optional[str] = None, hostname: Optional[str] = None
    ) -> TokenPair:
        if not code:
            raise MissingCode("authorization code is required")

        redirect_uri = self.redirect_uri_for_exchange(state, hostname)
        logger.info("Exchanging Spotify code with redirect_uri=%s", redirect_uri)

        return self._post_token(
            {
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": redirect_uri,
            },
            TokenPair,
            UpstreamTokenError,
        )

    # --------------------------
    # Refresh
    # --------------------------
    def refresh_access_token(self, refresh_token: str) -> RefreshedToken:
        if not refresh_token:
            raise RefreshFailure(None, "refresh token is required")

        return self._post_token(
            {"grant_type": "refresh_token", "refresh_token": refresh_token},
            RefreshedToken,
            RefreshFailure,
        )

    def _post_token(self, payload: dict, model, error_cls):
        try:
            r = self.session.post(
                self.config.token_url,
                data=payload,
                auth=HTTPBasicAuth(self.config.client_id, self.config.client_secret),
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            logger.error("Spotify token endpoint unreachable (%s): %s", payload["grant_type"], e)
            raise error_cls(None, str(e)) from e

        if not r.ok:
            logger.error(
                "Spotify token endpoint rejected %s: %s %s",
                payload["grant_type"], r.status_code, r.text,
            )
            raise error_cls(r.status_code, r.text)

        # 2xx 但 body 不是 JSON 或缺欄位，也當作 token endpoint 失敗
        try:
            return model(**r.json())
        except (ValueError, TypeError, ValidationError) as e:
            logger.error("Spotify token endpoint sent unusable %s body: %s", payload["grant_type"], e)
            raise error_cls(r.status_code, r.text) from e


def check_callback_params(code: Optional[str], error: Optional[str]) -> str:
    """
    Spotify redirect 回來時先檢查：
    - 有 error → 使用者拒絕授權
    - 沒有 code → 當作拒絕處理
    """
    if error:
        raise ConsentDenied(error)
    if not code:
        raise MissingCode("callback without code")
    return code


def get_spotify_auth_service() -> SpotifyAuthService:
    """FastAPI dependency；測試時用 app.dependency_overrides 換掉"""
    try:
        return SpotifyAuthService(get_spotify_config())
    except SpotifyConfigError as e:
        logger.error("Spotify OAuth misconfigured: %s", e)
        raise HTTPException(status_code=500, detail="Spotify is not configured")
