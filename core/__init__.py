"""In-memory card and book stores - no HTTP or console code."""

from core.books import Book, BookStore
from core.cards import Card, CardStore, RANKS, SUITS, make_deck
from core.errors import Conflict, InvalidInput, NotFound, StoreError

__all__ = [
    "Book",
    "BookStore",
    "Card",
    "CardStore",
    "RANKS",
    "SUITS",
    "make_deck",
    "Conflict",
    "InvalidInput",
    "NotFound",
    "StoreError",
]
