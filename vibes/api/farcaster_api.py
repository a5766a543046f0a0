# vibes/api/farcaster_api.py
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from vibes.services.neynar_service import (
    fetch_followers,
    fetch_following,
    fetch_users,
    parse_fid,
    valid_fids,
)

router = APIRouter()


class UsersRequest(BaseModel):
    fids: Optional[List] = None


# === 單一使用者 ===
@router.get("/users")
def get_user(fid: Optional[str] = Query(None)):
    return fetch_users([parse_fid(fid)])


# === 多個使用者 ===
@router.post("/users")
def get_users(payload: UsersRequest):
    if not payload.fids:
        raise HTTPException(status_code=400, detail="Invalid or missing fids parameter")

    fids = valid_fids(payload.fids)
    if not fids:
        raise HTTPException(status_code=400, detail="No valid FIDs provided")

    return fetch_users(fids)


@router.get("/followers")
def get_followers(
    fid: Optional[str] = Query(None),
    limit: int = Query(20, ge=1, le=100),
    cursor: Optional[str] = Query(None),
):
    return fetch_followers(parse_fid(fid), limit, cursor)


@router.get("/following")
def get_following(
    fid: Optional[str] = Query(None),
    limit: int = Query(20, ge=1, le=100),
    cursor: Optional[str] = Query(None),
):
    return fetch_following(parse_fid(fid), limit, cursor)
