"""Cumulative donor leaderboard."""

from typing import Any

from fastapi import APIRouter, Depends

from donation_relay.dependencies import get_store
from donation_relay.store import DonationStore


router = APIRouter()


@router.get("/leaderboard", response_model=list[Any])
async def get_leaderboard(store: DonationStore = Depends(get_store)):
    """Every donor ever recorded, highest total first, as [member, score, ...]."""
    return await store.leaderboard()
