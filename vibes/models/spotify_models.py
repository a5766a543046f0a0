# vibes/models/spotify_models.py
from typing import List, Optional

from pydantic import BaseModel


class TopTrack(BaseModel):
    id: Optional[str] = None  # local files 沒有 Spotify id
    name: str
    artist: str
    album: str
    albumArt: str
    timeFrame: str


class TopTracksResponse(BaseModel):
    tracks: List[TopTrack]
    connected: bool
    timeRange: str
    label: str


class SpotifyProfile(BaseModel):
    id: str
    display_name: Optional[str] = None
    image_url: Optional[str] = None
    spotify_url: Optional[str] = None
