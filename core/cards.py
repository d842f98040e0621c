"""Card records and the in-memory deck store."""

import logging
from dataclasses import dataclass
from random import Random
from threading import RLock

from core.errors import Conflict, InvalidInput, NotFound

logger = logging.getLogger(__name__)

SUITS: tuple[str, ...] = ("Clubs", "Diamonds", "Hearts", "Spades")
RANKS: tuple[str, ...] = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")


def default_card_id(rank: str, suit: str) -> str:
    """Return the default id for a rank and suit, e.g. 'A-Clubs'."""
    return f"{rank}-{suit}"


@dataclass(slots=True)
class Card:
    """Playing card record. Mutable so it can be renamed in place."""

    id: str
    rank: str
    suit: str

    def __str__(self) -> str:
        return f"{self.rank} of {self.suit}"


def make_deck() -> list[Card]:
    """Build a standard 52-card deck, suit-major and rank-minor."""
    return [Card(default_card_id(rank, suit), rank, suit) for suit in SUITS for rank in RANKS]


class CardStore:
    """
    Active deck plus discard pile.

    Every operation takes the store lock, so a single instance can be shared
    between request handlers running on a thread pool.
    """

    def __init__(
        self,
        cards: list[Card] | None = None,
        discarded: list[Card] | None = None,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize the store.

        Args:
            cards: Initial active sequence (defaults to a fresh ordered deck)
            discarded: Initial discard pile (defaults to empty)
            rng: Random number generator for shuffling
        """
        self._rng = rng or Random()
        self._lock = RLock()
        self._active: list[Card] = list(cards) if cards is not None else make_deck()
        self._discarded: list[Card] = list(discarded) if discarded is not None else []

    def _find_active(self, card_id: str) -> int:
        for index, card in enumerate(self._active):
            if card.id == card_id:
                return index
        return -1

    def _id_taken(self, card_id: str) -> bool:
        return any(c.id == card_id for c in self._active) or any(
            c.id == card_id for c in self._discarded
        )

    @property
    def active(self) -> list[Card]:
        """Return a copy of the active sequence."""
        with self._lock:
            return list(self._active)

    @property
    def discarded(self) -> list[Card]:
        """Return a copy of the discard pile."""
        with self._lock:
            return list(self._discarded)

    def list_cards(self, suit: str | None = None, rank: str | None = None) -> list[Card]:
        """Return active cards, optionally filtered by suit and rank (case-insensitive)."""
        with self._lock:
            results = list(self._active)
        if suit:
            results = [c for c in results if c.suit.lower() == suit.lower()]
        if rank:
            results = [c for c in results if c.rank.lower() == rank.lower()]
        return results

    def get_card(self, card_id: str) -> Card:
        """Look up a card by exact id in the deck, then in the discard pile."""
        with self._lock:
            for card in self._active:
                if card.id == card_id:
                    return card
            for card in self._discarded:
                if card.id == card_id:
                    return card
        raise NotFound("Card not found")

    def add_card(self, rank: str | None, suit: str | None, card_id: str | None = None) -> Card:
        """Append a custom card to the deck."""
        if not rank or not suit:
            raise InvalidInput("rank and suit are required")
        new_id = card_id or default_card_id(rank, suit)
        with self._lock:
            if self._id_taken(new_id):
                raise Conflict("A card with that id already exists")
            card = Card(new_id, rank, suit)
            self._active.append(card)
        logger.debug("Added card %s", new_id)
        return card

    def update_card(
        self,
        card_id: str,
        rank: str | None = None,
        suit: str | None = None,
        new_id: str | None = None,
    ) -> Card:
        """
        Update a card still in the deck.

        A rename is checked against every id in both sequences, the card's own
        id included, before any field changes.
        """
        with self._lock:
            index = self._find_active(card_id)
            if index == -1:
                raise NotFound("Card not in deck")
            if new_id and self._id_taken(new_id):
                raise Conflict("newId already exists")

            card = self._active[index]
            if rank:
                card.rank = rank
            if suit:
                card.suit = suit
            if new_id:
                card.id = new_id
        logger.debug("Updated card %s -> %s", card_id, card.id)
        return card

    def remove_card(self, card_id: str) -> Card:
        """Move a card from the deck to the end of the discard pile."""
        with self._lock:
            index = self._find_active(card_id)
            if index == -1:
                raise NotFound("Card not found in deck")
            card = self._active.pop(index)
            self._discarded.append(card)
        logger.debug("Discarded card %s", card_id)
        return card

    def shuffle(self) -> int:
        """Shuffle the deck in place and return the number of cards in it."""
        with self._lock:
            # random.shuffle is a Fisher-Yates shuffle
            self._rng.shuffle(self._active)
            return len(self._active)

    def draw(self, n: int = 1) -> tuple[list[Card], int]:
        """
        Draw cards from the top of the deck onto the discard pile.

        Args:
            n: Number of cards to draw; values below 1 are treated as 1

        Returns:
            The drawn cards in deck order (fewer than n when the deck runs out)
            and the number of cards left.
        """
        n = max(1, n)
        with self._lock:
            if not self._active:
                raise InvalidInput("Deck is empty")
            drawn = self._active[:n]
            del self._active[:n]
            self._discarded.extend(drawn)
            remaining = len(self._active)
        logger.debug("Drew %d card(s), %d remaining", len(drawn), remaining)
        return drawn, remaining

    def peek(self, n: int = 1) -> list[Card]:
        """Return the top n cards without removing them."""
        with self._lock:
            return self._active[: max(1, n)]

    def reset(self) -> int:
        """Replace the deck with a fresh ordered 52-card deck and empty the discard pile."""
        with self._lock:
            self._active = make_deck()
            self._discarded = []
            return len(self._active)

    def stats(self) -> dict[str, int]:
        """Return deck and discard pile sizes."""
        with self._lock:
            return {"remaining": len(self._active), "discard": len(self._discarded)}

    def __len__(self) -> int:
        with self._lock:
            return len(self._active)
