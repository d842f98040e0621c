"""Request dependencies."""

from typing import Annotated

from fastapi import Depends, Request

from core.cards import CardStore


def get_card_store(request: Request) -> CardStore:
    """Return the card store owned by the running application."""
    return request.app.state.card_store


CardStoreDep = Annotated[CardStore, Depends(get_card_store)]
