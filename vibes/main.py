# vibes/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vibes.config.settings import CORS_ORIGINS, LOG_LEVEL

# === Import Routers ===
from vibes.api.spotify_auth_api import router as spotify_auth_router
from vibes.api.spotify_api import router as spotify_router
from vibes.api.farcaster_api import router as farcaster_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Proof of Vibes Backend",
    description=(
        "Backend for: "
        "• Spotify OAuth (authorization code + cookies) "
        "• Spotify top tracks "
        "• Farcaster social graph via Neynar"
    ),
    version="1.0.0"
)

# === CORS Middleware ===
# token 放在 cookie，所以不能用 "*"
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# === Spotify OAuth（login / callback / status / refresh） ===
app.include_router(spotify_auth_router, prefix="/api", tags=["Spotify OAuth"])

# === Spotify Web API ===
app.include_router(spotify_router, prefix="/api", tags=["Spotify"])

# === Farcaster（Neynar） ===
app.include_router(farcaster_router, prefix="/api", tags=["Farcaster"])

@app.get("/")
def root():
    return {
        "status": "ok",
        "message": "Proof of Vibes backend running with Spotify OAuth + Neynar"
    }
