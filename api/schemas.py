"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field


# Card schemas
class CardResponse(BaseModel):
    """Card representation."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    rank: str
    suit: str


class CardCreateRequest(BaseModel):
    """Request to add a custom card. Presence of rank and suit is checked by the store."""

    rank: str | None = None
    suit: str | None = None
    id: str | None = None


class CardUpdateRequest(BaseModel):
    """Partial card update."""

    model_config = ConfigDict(populate_by_name=True)

    rank: str | None = None
    suit: str | None = None
    new_id: str | None = Field(default=None, alias="newId")


class RemovedResponse(BaseModel):
    """Card moved to the discard pile."""

    removed: CardResponse


# Deck schemas
class DrawRequest(BaseModel):
    """Optional body for a draw."""

    n: int | None = None


class DrawResponse(BaseModel):
    """Cards drawn from the top of the deck."""

    drawn: list[CardResponse]
    remaining: int


class DeckStatusResponse(BaseModel):
    """Result of a whole-deck operation."""

    status: str
    remaining: int


class StatsResponse(BaseModel):
    """Deck and discard pile sizes."""

    remaining: int
    discard: int


class HealthResponse(StatsResponse):
    """Health check."""

    status: str


class ErrorResponse(BaseModel):
    """Error body."""

    error: str
