# vibes/services/redirect_resolver.py
from typing import Optional

from vibes.config.settings import SpotifyConfig
from vibes.models.spotify_auth_models import RedirectTarget

LOCAL_HOSTNAMES = ("localhost", "127.0.0.1")


def resolve_redirect_target(hostname: Optional[str]) -> RedirectTarget:
    """
    localhost / 127.0.0.1 → 本機開發，其它 host（或沒有 host，例如 server 端執行）→ production
    """
    if hostname in LOCAL_HOSTNAMES:
        return RedirectTarget.LOCAL_DEVELOPMENT
    return RedirectTarget.PRODUCTION


def resolve_redirect_uri(config: SpotifyConfig, hostname: Optional[str]) -> str:
    if resolve_redirect_target(hostname) is RedirectTarget.LOCAL_DEVELOPMENT:
        return config.redirect_uri_local
    return config.redirect_uri_production
