# vibes/services/spotify_state.py
import base64
import binascii
import random
import string
from typing import Iterable, Optional

from vibes.services.exceptions import StateDecodeFailure

STATE_DELIMITER = "."
NONCE_LENGTH = 16
NONCE_ALPHABET = string.ascii_letters + string.digits


def generate_nonce(length: int = NONCE_LENGTH) -> str:
    # CSRF 用的一次性值，不是 security token，用 random 即可
    return "".join(random.choice(NONCE_ALPHABET) for _ in range(length))


def build_state(nonce: str, redirect_uri: str) -> str:
    encoded = base64.b64encode(redirect_uri.encode("utf-8")).decode("ascii")
    return f"{nonce}{STATE_DELIMITER}{encoded}"


def decode_redirect_uri(state: str) -> str:
    """
    取 state 最後一個 "." 之後的片段，base64 解回 redirect URI。
    格式不對就丟 StateDecodeFailure。
    """
    if not state or STATE_DELIMITER not in state:
        raise StateDecodeFailure("state has no redirect segment")

    segment = state.rsplit(STATE_DELIMITER, 1)[1]
    if not segment:
        raise StateDecodeFailure("empty redirect segment")

    try:
        return base64.b64decode(segment, validate=True).decode("utf-8")
    except (binascii.Error, ValueError) as e:
        raise StateDecodeFailure(f"undecodable redirect segment: {e}") from e


def redirect_uri_from_state(state: Optional[str], allowed: Iterable[str]) -> str:
    """Decode the redirect URI carried in ``state`` and check it is registered."""
    redirect_uri = decode_redirect_uri(state or "")
    if redirect_uri not in tuple(allowed):
        raise StateDecodeFailure(f"redirect URI not registered: {redirect_uri}")
    return redirect_uri
