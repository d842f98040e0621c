"""Pytest fixtures for card store and library tests."""

import io
from random import Random

import pytest
from rich.console import Console

from core.books import BookStore, sample_books
from core.cards import CardStore


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def card_store(rng):
    """A fresh, ordered 52-card deck."""
    return CardStore(rng=rng)


@pytest.fixture
def empty_card_store(rng):
    """A store with no cards in the deck or the discard pile."""
    return CardStore(cards=[], rng=rng)


@pytest.fixture
def book_store():
    """The two sample books, next id 3."""
    return BookStore(sample_books())


@pytest.fixture
def console():
    """A console that records plain text output."""
    return Console(file=io.StringIO(), width=120, color_system=None, force_terminal=False)
