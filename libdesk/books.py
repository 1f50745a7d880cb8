"""The book catalogue kept in a three-column CSV file."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable

HEADER = "ID,Title,Author"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

Ask = Callable[[str], str]
Say = Callable[[str], None]


@dataclass(frozen=True)
class Book:
    """One catalogue entry."""

    book_id: str
    title: str
    author: str


class BookError(Exception):
    """Raised when a catalogue operation cannot be done."""


class DuplicateBookError(BookError):
    """Raised when a book ID is already in the catalogue."""


def _fields(line: str) -> list[str]:
    return [field for field in line.rstrip("\r\n").split(",") if field]


def _parse(line: str) -> Book | None:
    fields = _fields(line)
    if len(fields) < 3:
        return None
    return Book(fields[0], fields[1], fields[2])


def _validate(book: Book) -> None:
    values = (book.book_id, book.title, book.author)
    if not all(values):
        raise BookError("All fields must be filled! Please try again.")
    if any(ch in value for value in values for ch in ",\r\n"):
        raise BookError("Fields must not contain commas or line breaks.")


class BookCatalog:
    """Books stored one per line after a header row."""

    def __init__(self, path) -> None:
        self.path = Path(path)

    def _body(self) -> list[str]:
        try:
            lines = self.path.read_text(encoding="utf-8").splitlines(keepends=True)
        except FileNotFoundError:
            return []
        return lines[1:]

    def _ids(self) -> set[str]:
        return {fields[0] for fields in map(_fields, self._body()) if fields}

    def _append(self, book: Book) -> None:
        needs_header = not self.path.exists() or self.path.stat().st_size == 0
        with self.path.open("a", encoding="utf-8", newline="") as handle:
            if needs_header:
                handle.write(HEADER + "\n")
            handle.write(f"{book.book_id},{book.title},{book.author}\n")

    def _remove_lines(self, book_id: str) -> list[str]:
        lines = self.path.read_text(encoding="utf-8").splitlines(keepends=True)
        kept, removed = lines[:1], []
        for line in lines[1:]:
            fields = _fields(line)
            (removed if fields and fields[0] == book_id else kept).append(line)
        if removed:
            scratch = self.path.with_name(self.path.name + ".tmp")
            scratch.write_text("".join(kept), encoding="utf-8", newline="")
            scratch.replace(self.path)
        return removed

    def books(self) -> list[Book]:
        """Return every well-formed entry in file order."""
        return [book for book in map(_parse, self._body()) if book is not None]

    def find(self, book_id: str) -> Book | None:
        """Return the first book with this ID, or None."""
        return next((book for book in self.books() if book.book_id == book_id), None)

    def add(self, book: Book) -> None:
        """Add a new book; its ID must not already be present."""
        _validate(book)
        if book.book_id in self._ids():
            raise DuplicateBookError(book.book_id)
        self._append(book)

    def restore(self, book: Book) -> None:
        """Put a returned book back on the shelf without a duplicate check."""
        _validate(book)
        self._append(book)

    def delete(self, book_id: str) -> None:
        """Remove every line with this ID; raise BookError if there is none."""
        if not self._remove_lines(book_id):
            raise BookError(f"no book with ID {book_id!r}")

    def take(self, book_id: str) -> Book:
        """Remove a book from the shelf and return it."""
        book = self.find(book_id)
        if book is None:
            raise BookError(f"no book with ID {book_id!r}")
        self._remove_lines(book_id)
        return book


def format_book_table(books: Iterable[Book]) -> str:
    """Render the catalogue listing with a total."""
    books = list(books)
    rows = [
        "\t\t\t=== Book List ===",
        "",
        f"{'Book ID':<10} | {'Title':<30} | {'Author':<20}",
        "-" * 62,
    ]
    rows += [f"{b.book_id:<10} | {b.title:<30} | {b.author:<20}" for b in books]
    if not books:
        rows.append("No books found.")
    rows.append(f"\nTotal books: {len(books)}")
    return "\n".join(rows)


def _yes(answer: str) -> bool:
    return answer[:1] in ("y", "Y")


def _add_books(catalog: BookCatalog, ask: Ask, say: Say) -> None:
    if not catalog.path.exists():
        say("No existing file found. A new one will be created.")
    while True:
        while True:
            book_id = ask("Enter desired ID for the book: ")
            if book_id in catalog._ids():
                say(f"ID '{book_id}' already exists. Try another.")
                continue
            title = ask("Enter book title: ")
            author = ask("Enter book author: ")
            try:
                catalog.add(Book(book_id, title, author))
            except DuplicateBookError:
                say(f"ID '{book_id}' already exists. Try another.")
            except BookError as error:
                say(f"\n{error}\n")
            else:
                break
        say(f"Book added successfully with ID '{book_id}'.")
        if not _yes(ask("Do you want to add another book? (y/n): ")):
            return


def _search_books(catalog: BookCatalog, ask: Ask, say: Say) -> None:
    if not catalog.path.exists():
        say("Could not open file!")
        return
    while True:
        book_id = ask("Enter book ID to search: ")
        if not book_id:
            say("\nID cannot be empty! Please try again.\n")
            continue
        book = catalog.find(book_id)
        if book is None:
            say(f"No book found with ID '{book_id}'.")
        else:
            say("\nBook found:")
            say(f"ID: {book.book_id}")
            say(f"Title: {book.title}")
            say(f"Author: {book.author}")
        if not _yes(ask("\nDo you want to search again? (y/n): ").lstrip()):
            return


def _delete_books(catalog: BookCatalog, ask: Ask, say: Say) -> None:
    while True:
        if not catalog.path.exists():
            say("Could not open file.")
            return
        book_id = ask("Enter book ID to delete: ")
        if not book_id:
            say("\nID cannot be empty! Please try again.\n")
            continue
        try:
            catalog.delete(book_id)
        except BookError:
            say("Book not found!")
        else:
            say("Book Deleted Successfully!")
        if not _yes(ask("\nDo you want to delete another book? (y/n): ")):
            return


def _display_books(catalog: BookCatalog, say: Say) -> None:
    if not catalog.path.exists():
        say("Could not open file!")
        return
    say(format_book_table(catalog.books()))


def manage_books(catalog: BookCatalog, ask: Ask, say: Say) -> None:
    """Run the book management menu until the user exits."""
    while True:
        say("\n\n\t\t\t=== Book Management System ===\n")
        say("What do you want to do: ")
        say("1. Add a book. ")
        say("2. Search a book. ")
        say("3. Delete a book. ")
        say("4. Display all books.")
        say("5. Exit. ")
        match = _LEADING_INT.match(ask("Enter your choice: "))
        choice = int(match.group(1)) if match else None
        if choice == 1:
            say("\n\n\t\t\t=== Add a Book ===\n")
            _add_books(catalog, ask, say)
        elif choice == 2:
            say("\n\n\t\t\t=== Search a Book ===\n")
            _search_books(catalog, ask, say)
        elif choice == 3:
            say("\n\n\t\t\t=== Delete a Book ===\n")
            _delete_books(catalog, ask, say)
        elif choice == 4:
            say("\n\n\t\t\t=== Display All Books ===\n")
            _display_books(catalog, say)
        elif choice == 5:
            say("Exiting...\n")
            return
        else:
            say("\nInvalid choice. Please try again.")