"""Book records and the in-memory book store."""

import logging
from dataclasses import dataclass
from typing import Iterator

from core.errors import InvalidInput, NotFound

logger = logging.getLogger(__name__)

DEFAULT_AUTHOR = "Unknown"


@dataclass
class Book:
    """A single book in the library."""

    id: int
    title: str
    author: str = DEFAULT_AUTHOR
    year: int | None = None
    isbn: str | None = None

    def __str__(self) -> str:
        parts = [f"#{self.id}", self.title, f"by {self.author}"]
        if self.year is not None:
            parts.append(f"({self.year})")
        if self.isbn:
            parts.append(f"ISBN {self.isbn}")
        return " ".join(parts)

    def matches(self, term: str) -> bool:
        """Check whether the term occurs in the title, author, ISBN or year."""
        q = term.lower()
        return (
            q in self.title.lower()
            or q in self.author.lower()
            or (self.isbn is not None and q in self.isbn.lower())
            or (self.year is not None and q in str(self.year))
        )


def sample_books() -> list[Book]:
    """Books the library CLI starts with."""
    return [
        Book(1, "The Pragmatic Programmer", "Andrew Hunt", 1999),
        Book(2, "Clean Code", "Robert C. Martin", 2008),
    ]


class BookStore:
    """Ordered collection of books with an auto-incrementing id counter."""

    def __init__(self, books: list[Book] | None = None) -> None:
        self._books: list[Book] = list(books or [])
        self._next_id = max((b.id for b in self._books), default=0) + 1

    @property
    def next_id(self) -> int:
        """Return the id the next added book will receive."""
        return self._next_id

    def list_books(self) -> list[Book]:
        return list(self._books)

    def add_book(
        self,
        title: str,
        author: str | None = None,
        year: int | None = None,
        isbn: str | None = None,
    ) -> Book:
        """
        Add a book and assign it the next id.

        Raises:
            InvalidInput: If the title is empty. No id is consumed.
        """
        title = (title or "").strip()
        if not title:
            raise InvalidInput("Title is required.")

        book = Book(
            id=self._next_id,
            title=title,
            author=(author or "").strip() or DEFAULT_AUTHOR,
            year=year,
            isbn=(isbn or "").strip() or None,
        )
        self._next_id += 1
        self._books.append(book)
        logger.debug("Added book %d", book.id)
        return book

    def get_book(self, book_id: int) -> Book:
        for book in self._books:
            if book.id == book_id:
                return book
        raise NotFound("Book not found.")

    def find_books(self, term: str) -> list[Book]:
        """Return books whose title, author, ISBN or year contains the term."""
        return [b for b in self._books if b.matches(term)]

    def update_book(
        self,
        book_id: int,
        title: str | None = None,
        author: str | None = None,
        year: int | None = None,
        isbn: str | None = None,
    ) -> Book:
        """Overwrite the fields that were given a non-empty value."""
        book = self.get_book(book_id)
        if title:
            book.title = title
        if author:
            book.author = author
        if year is not None:
            book.year = year
        if isbn:
            book.isbn = isbn
        logger.debug("Updated book %d", book_id)
        return book

    def remove_book(self, book_id: int) -> Book:
        book = self.get_book(book_id)
        self._books.remove(book)
        logger.debug("Removed book %d", book_id)
        return book

    def clear(self) -> int:
        """Remove every book and return how many were removed. Ids are not reused."""
        count = len(self._books)
        self._books = []
        return count

    def __len__(self) -> int:
        return len(self._books)

    def __iter__(self) -> Iterator[Book]:
        return iter(list(self._books))
