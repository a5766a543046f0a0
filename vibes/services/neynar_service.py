# vibes/services/neynar_service.py
import logging
from typing import Dict, List, Optional

import requests
from fastapi import HTTPException

from vibes.config.settings import get_neynar_api_key

NEYNAR_API_BASE = "https://api.neynar.com/v2/farcaster"
NEYNAR_TIMEOUT = 15

logger = logging.getLogger(__name__)


def parse_fid(raw: Optional[str]) -> int:
    if not raw:
        raise HTTPException(status_code=400, detail="Missing fid parameter")
    try:
        return int(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid fid format")


def valid_fids(fids: List) -> List[int]:
    """Drop anything that is not a whole number; keeps input order."""
    result = []
    for fid in fids:
        try:
            result.append(int(fid))
        except (TypeError, ValueError):
            continue
    return result


def _neynar_get(path: str, params: Dict, what: str) -> Dict:
    url = f"{NEYNAR_API_BASE}/{path}"
    headers = {
        "Accept": "application/json",
        "api_key": get_neynar_api_key() or "",
    }

    logger.info("Fetching %s from Neynar: %s %s", what, url, params)
    try:
        r = requests.get(url, headers=headers, params=params, timeout=NEYNAR_TIMEOUT)
    except requests.RequestException as e:
        logger.error("Error fetching %s from Neynar: %s", what, e)
        raise HTTPException(status_code=500, detail=f"Failed to fetch {what} data")

    if not r.ok:
        logger.error("Neynar API error: %s %s", r.status_code, r.text)
        raise HTTPException(status_code=r.status_code, detail=f"Failed to fetch {what}: {r.text}")

    return r.json()


def fetch_users(fids: List[int]) -> Dict:
    return _neynar_get("user/bulk", {"fids": ",".join(str(f) for f in fids)}, "users")


def fetch_followers(fid: int, limit: int = 20, cursor: Optional[str] = None) -> Dict:
    params = {"fid": fid, "limit": limit}
    if cursor:
        params["cursor"] = cursor
    return _neynar_get("followers", params, "followers")


def fetch_following(fid: int, limit: int = 20, cursor: Optional[str] = None) -> Dict:
    params = {"fid": fid, "limit": limit}
    if cursor:
        params["cursor"] = cursor
    return _neynar_get("following", params, "following")
