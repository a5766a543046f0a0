# vibes/config/settings.py
import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict


def load_env():
    if os.getenv("ENVIRONMENT") == "production":
        return

    base_dir = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    env_path = os.path.join(base_dir, ".env")

    if os.path.exists(env_path):
        load_dotenv(env_path)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# Load env now
load_env()

# Spotify
SPOTIFY_CLIENT_ID = os.getenv("SPOTIFY_CLIENT_ID", "")
SPOTIFY_CLIENT_SECRET = os.getenv("SPOTIFY_CLIENT_SECRET", "")
SPOTIFY_REDIRECT_URI_LOCAL = os.getenv(
    "SPOTIFY_REDIRECT_URI_LOCAL", "http://localhost:3000/api/auth/callback/spotify"
)
SPOTIFY_REDIRECT_URI_PRODUCTION = os.getenv(
    "SPOTIFY_REDIRECT_URI_PRODUCTION",
    "https://proof-of-vibes.vercel.app/api/auth/callback/spotify",
)
SPOTIFY_HTTP_TIMEOUT = float(os.getenv("SPOTIFY_HTTP_TIMEOUT", "15"))

# Frontend / mini-app redirects
FRONTEND_URL = os.getenv("FRONTEND_URL", "").rstrip("/")
MINIAPP_URL = os.getenv(
    "MINIAPP_URL",
    "https://warpcast.com/~/developers/mini-apps/preview?url=https://proof-of-vibes.vercel.app",
)
COOKIE_SECURE = _env_bool("COOKIE_SECURE", True)

# Neynar (Farcaster)
NEYNAR_API_KEY = os.getenv("NEYNAR_API_KEY", "")

# Server
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


class SpotifyConfig(BaseModel):
    """
    Spotify OAuth 設定，process 啟動時讀一次，之後注入到 SpotifyAuthService。
    redirect URI 兩個都必須先在 Spotify Dashboard 註冊。
    """

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: str
    redirect_uri_local: str
    redirect_uri_production: str
    timeout: float = 15.0
    authorize_url: str = "https://accounts.spotify.com/authorize"
    token_url: str = "https://accounts.spotify.com/api/token"

    @property
    def allowed_redirect_uris(self) -> tuple:
        return (self.redirect_uri_local, self.redirect_uri_production)


@lru_cache
def get_spotify_config() -> SpotifyConfig:
    return SpotifyConfig(
        client_id=SPOTIFY_CLIENT_ID,
        client_secret=SPOTIFY_CLIENT_SECRET,
        redirect_uri_local=SPOTIFY_REDIRECT_URI_LOCAL,
        redirect_uri_production=SPOTIFY_REDIRECT_URI_PRODUCTION,
        timeout=SPOTIFY_HTTP_TIMEOUT,
    )


def get_neynar_api_key() -> Optional[str]:
    return NEYNAR_API_KEY or None
