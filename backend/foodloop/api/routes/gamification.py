"""Gamification Routes: read-only views of balances, badges and history."""

from uuid import UUID

from fastapi import APIRouter, Depends

from foodloop.core.domain_types import UserId
from foodloop.schemas.gamification import (
    BadgeAwardResponse, PointsHistoryResponse, UserPointsResponse,
)
from foodloop.api.dependencies import get_scoring_engine
from foodloop.services.scoring_engine import ScoringEngine

router = APIRouter(prefix="/api/v1/gamification", tags=["gamification"])


@router.get("/points/{user_id}", response_model=UserPointsResponse)
async def get_user_points(
    user_id: UUID, scoring: ScoringEngine = Depends(get_scoring_engine),
):
    return await scoring.get_user_points(UserId(user_id))


@router.get("/badges/{user_id}", response_model=list[BadgeAwardResponse])
async def get_user_badges(
    user_id: UUID, scoring: ScoringEngine = Depends(get_scoring_engine),
):
    return await scoring.get_user_badges(UserId(user_id))


@router.get("/leaderboard", response_model=list[UserPointsResponse])
async def get_leaderboard(scoring: ScoringEngine = Depends(get_scoring_engine)):
    return await scoring.get_leaderboard()


@router.get("/history/{user_id}", response_model=list[PointsHistoryResponse])
async def get_points_history(
    user_id: UUID, scoring: ScoringEngine = Depends(get_scoring_engine),
):
    return await scoring.get_points_history(UserId(user_id))
