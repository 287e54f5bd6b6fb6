"""Freshness Routes: submit a 1-5 rating, read a donation's summary."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from foodloop.core.domain_types import DonationId, UserId
from foodloop.schemas.freshness import (
    FreshnessRatingCreate, FreshnessRatingResponse, FreshnessSummary,
)
from foodloop.api.dependencies import get_freshness_ratings
from foodloop.services.freshness_ratings import FreshnessRatings

router = APIRouter(prefix="/api/v1/freshness", tags=["freshness"])


@router.post(
    "", response_model=FreshnessRatingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def rate_freshness(
    body: FreshnessRatingCreate,
    ratings: FreshnessRatings = Depends(get_freshness_ratings),
):
    return await ratings.rate_freshness(
        DonationId(body.donation_id), UserId(body.user_id),
        body.rating, body.comment,
    )


@router.get("/donation/{donation_id}", response_model=FreshnessSummary)
async def get_freshness_summary(
    donation_id: UUID,
    ratings: FreshnessRatings = Depends(get_freshness_ratings),
):
    summary = await ratings.get_freshness_summary(DonationId(donation_id))
    return FreshnessSummary(
        ratings=[
            FreshnessRatingResponse.model_validate(r) for r in summary["ratings"]
        ],
        average_rating=summary["average_rating"],
        total_ratings=summary["total_ratings"],
    )
