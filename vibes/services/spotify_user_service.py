# vibes/services/spotify_user_service.py
from typing import Dict, List, Optional

import requests
from fastapi import HTTPException

SPOTIFY_API_BASE = "https://api.spotify.com/v1"
SPOTIFY_API_TIMEOUT = 15

# UI 上的 timeFrame → Spotify time_range
TIME_FRAME_TO_RANGE = {
    "week": "short_term",   # 最近 4 週
    "month": "medium_term", # 最近 6 個月
    "year": "long_term",    # 數年
}

TIME_RANGE_LABELS = {
    "short_term": "Last 4 Weeks",
    "medium_term": "Last 6 Months",
    "long_term": "All Time",
}


def convert_time_frame_to_range(time_frame: str) -> str:
    return TIME_FRAME_TO_RANGE.get(time_frame, "short_term")


def format_time_range(time_range: str) -> str:
    return TIME_RANGE_LABELS.get(time_range, "Last 4 Weeks")


# --------- Spotify API Wrapper ---------
def _spotify_get(access_token: str, path: str, params: Optional[Dict] = None) -> Dict:
    url = f"{SPOTIFY_API_BASE}/{path}"
    headers = {"Authorization": f"Bearer {access_token}"}

    try:
        r = requests.get(url, headers=headers, params=params, timeout=SPOTIFY_API_TIMEOUT)
    except requests.RequestException as e:
        raise HTTPException(status_code=502, detail=f"Spotify unreachable: {e}")

    if r.status_code != 200:
        raise HTTPException(status_code=r.status_code, detail=f"Spotify error: {r.text}")

    return r.json()


# --------- Top Tracks ---------
def fetch_top_tracks(access_token: str, time_frame: str = "week", limit: int = 5) -> List[Dict]:
    time_range = convert_time_frame_to_range(time_frame)
    data = _spotify_get(
        access_token,
        "me/top/tracks",
        params={"time_range": time_range, "limit": limit},
    )

    tracks = []
    for track in data.get("items", []):
        album = track.get("album") or {}
        images = album.get("images") or []
        tracks.append({
            "id": track.get("id"),
            "name": track.get("name", ""),
            "artist": ", ".join(a["name"] for a in track.get("artists", [])),
            "album": album.get("name", ""),
            "albumArt": images[0]["url"] if images else "",
            "timeFrame": time_frame,
        })

    return tracks


# --------- Profile ---------
def fetch_profile(access_token: str) -> Dict:
    data = _spotify_get(access_token, "me")
    images = data.get("images") or []

    return {
        "id": data["id"],
        "display_name": data.get("display_name"),
        "image_url": images[0]["url"] if images else None,
        "spotify_url": data.get("external_urls", {}).get("spotify"),
    }
