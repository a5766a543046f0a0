# vibes/models/spotify_auth_models.py
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class RedirectTarget(str, Enum):
    LOCAL_DEVELOPMENT = "local_development"
    PRODUCTION = "production"


class InvocationSource(str, Enum):
    # 直接從瀏覽器開啟 vs. 從 Farcaster mini-app host 內開啟
    DIRECT = "direct"
    EMBEDDED = "embedded"


# Spotify token endpoint（authorization_code）回傳
class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    expires_in: int
    token_type: str = "Bearer"
    scope: Optional[str] = None


# refresh_token grant 回傳；Spotify 不一定會給新的 refresh_token
class RefreshedToken(BaseModel):
    access_token: str
    expires_in: int
    token_type: str = "Bearer"
    refresh_token: Optional[str] = None
    scope: Optional[str] = None


# 登入（redirect）回傳的資訊
class AuthLoginResponse(BaseModel):
    authorization_url: str


class SpotifyStatusResponse(BaseModel):
    connected: bool
    state: str


class RefreshResponse(BaseModel):
    status: str
    expires_in: int
