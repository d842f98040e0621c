"""Card CRUD endpoints."""

from typing import Annotated

from fastapi import APIRouter, Body, status

from api.deps import CardStoreDep
from api.schemas import (
    CardCreateRequest,
    CardResponse,
    CardUpdateRequest,
    ErrorResponse,
    RemovedResponse,
)

router = APIRouter()


@router.get("")
async def list_cards(
    store: CardStoreDep,
    suit: str | None = None,
    rank: str | None = None,
) -> list[CardResponse]:
    """List cards still in the deck, optionally filtered by suit and rank."""
    return [CardResponse.model_validate(c) for c in store.list_cards(suit=suit, rank=rank)]


@router.get("/{card_id}", responses={404: {"model": ErrorResponse}})
async def get_card(card_id: str, store: CardStoreDep) -> CardResponse:
    """Get a card from the deck or the discard pile."""
    return CardResponse.model_validate(store.get_card(card_id))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def add_card(
    store: CardStoreDep,
    request: Annotated[CardCreateRequest | None, Body()] = None,
) -> CardResponse:
    """Add a custom card to the deck."""
    if request is None:
        request = CardCreateRequest()
    card = store.add_card(request.rank, request.suit, request.id)
    return CardResponse.model_validate(card)


@router.put(
    "/{card_id}",
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_card(
    card_id: str,
    store: CardStoreDep,
    request: Annotated[CardUpdateRequest | None, Body()] = None,
) -> CardResponse:
    """Change the rank, suit or id of a card in the deck. A missing body changes nothing."""
    if request is None:
        request = CardUpdateRequest()
    card = store.update_card(
        card_id,
        rank=request.rank,
        suit=request.suit,
        new_id=request.new_id,
    )
    return CardResponse.model_validate(card)


@router.delete("/{card_id}", responses={404: {"model": ErrorResponse}})
async def remove_card(card_id: str, store: CardStoreDep) -> RemovedResponse:
    """Move a card from the deck to the discard pile."""
    card = store.remove_card(card_id)
    return RemovedResponse(removed=CardResponse.model_validate(card))
