"""Pydantic schemas for match API responses."""

from typing import List

from pydantic import BaseModel, Field

from .models import MatchSummary


class MatchWindowResponse(BaseModel):
    """Schema for one page of match history."""

    matches: List[MatchSummary] = Field(..., description="Matches in upstream order")
    has_more: bool = Field(
        ...,
        description="True when the page was full; approximate, the upstream has no total",
    )
    next_start: int = Field(..., description="Offset to request for the next page")
