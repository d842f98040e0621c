"""Whole-deck endpoints: shuffle, draw, peek, reset and stats."""

from typing import Annotated

from fastapi import APIRouter, Body, Query

from api.deps import CardStoreDep
from api.schemas import (
    CardResponse,
    DeckStatusResponse,
    DrawRequest,
    DrawResponse,
    ErrorResponse,
    StatsResponse,
)

router = APIRouter()


@router.post("/shuffle")
async def shuffle(store: CardStoreDep) -> DeckStatusResponse:
    """Shuffle the cards still in the deck."""
    remaining = store.shuffle()
    return DeckStatusResponse(status="shuffled", remaining=remaining)


@router.post("/draw", responses={400: {"model": ErrorResponse}})
async def draw(
    store: CardStoreDep,
    n: Annotated[int | None, Query()] = None,
    body: Annotated[DrawRequest | None, Body()] = None,
) -> DrawResponse:
    """Draw n cards (default 1) from the top of the deck onto the discard pile."""
    count = n or (body.n if body is not None else None) or 1
    drawn, remaining = store.draw(count)
    return DrawResponse(
        drawn=[CardResponse.model_validate(c) for c in drawn],
        remaining=remaining,
    )


@router.get("/peek")
async def peek(
    store: CardStoreDep,
    n: Annotated[int | None, Query()] = None,
) -> list[CardResponse]:
    """Look at the top n cards (default 1) without drawing them."""
    return [CardResponse.model_validate(c) for c in store.peek(n or 1)]


@router.post("/reset")
async def reset(store: CardStoreDep) -> DeckStatusResponse:
    """Replace the deck with a fresh ordered deck and empty the discard pile."""
    remaining = store.reset()
    return DeckStatusResponse(status="reset", remaining=remaining)


@router.get("/stats")
async def stats(store: CardStoreDep) -> StatsResponse:
    """Deck and discard pile sizes."""
    return StatsResponse(**store.stats())
