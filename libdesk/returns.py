"""Returning issued books and charging fines for late returns."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from libdesk.books import Book, BookCatalog
from libdesk.dates import Date, days_between, is_valid_date, parse_date
from libdesk.fines import FineLedger, FineRecord
from libdesk.issues import IssueLog

GRACE_DAYS = 7
FINE_PER_DAY = 100

Ask = Callable[[str], str]
Say = Callable[[str], None]


class ReturnError(Exception):
    """Raised when a book cannot be returned."""


@dataclass(frozen=True)
class ReturnReceipt:
    """The outcome of one return."""

    book: Book
    member_id: str
    issue_date: Date
    return_date: Date
    days: int
    fine: int

    @property
    def days_late(self) -> int:
        return max(self.days - GRACE_DAYS, 0)


def compute_fine(days: int) -> int:
    """Return the fine for a loan of this many days."""
    return 0 if days <= GRACE_DAYS else (days - GRACE_DAYS) * FINE_PER_DAY


def _check_return_date(issue_date: Date, return_date: Date) -> int:
    if not is_valid_date(return_date.day, return_date.month, return_date.year):
        raise ReturnError("Invalid return date. Please enter a valid date.")
    days = days_between(issue_date, return_date)
    if days < 0:
        raise ReturnError("Return date cannot be before issue date.")
    return days


def return_book(
    catalog: BookCatalog,
    issues: IssueLog,
    ledger: FineLedger,
    book_id: str,
    member_id: str,
    return_date: Date,
) -> ReturnReceipt:
    """Close an issue, put the book back and charge any fine."""
    record = issues.find(book_id, member_id)
    if record is None:
        raise ReturnError("This book was not issued to this member.")
    days = _check_return_date(record.issue_date, return_date)
    issues.remove(book_id, member_id)
    book = Book(book_id, record.title, record.author)
    catalog.restore(book)
    fine = compute_fine(days)
    if fine:
        ledger.add(
            FineRecord(
                book_id,
                member_id,
                record.issue_date,
                return_date,
                days - GRACE_DAYS,
                fine,
            )
        )
    return ReturnReceipt(book, member_id, record.issue_date, return_date, days, fine)


def _yes(answer: str) -> bool:
    return answer.lstrip()[:1] in ("y", "Y")


def _ask_token(ask: Ask, prompt: str) -> str:
    while True:
        words = ask(prompt).split()
        if words:
            return words[0]


def _ask_return_date(issue_date: Date, ask: Ask, say: Say) -> Date:
    while True:
        text = ask("Enter Return Date (DD-MM-YYYY or DD MM YYYY): ")
        try:
            return_date = parse_date(text)
            _check_return_date(issue_date, return_date)
        except ValueError:
            say("Invalid return date. Please enter a valid date.")
        except ReturnError as error:
            say(str(error))
        else:
            return return_date


def return_books(
    catalog: BookCatalog,
    issues: IssueLog,
    ledger: FineLedger,
    ask: Ask,
    say: Say,
) -> None:
    """Take back books interactively until the user stops."""
    say("\n\n\t\t\t=== Return Books ===\n")
    while True:
        book_id = _ask_token(ask, "Enter Book ID to return: ")
        member_id = _ask_token(ask, "Enter Member ID: ")
        record = issues.find(book_id, member_id)
        if record is None:
            say("This book was not issued to this member.")
        else:
            return_date = _ask_return_date(record.issue_date, ask, say)
            receipt = return_book(catalog, issues, ledger, book_id, member_id, return_date)
            say(f"Book restored to {catalog.path.name} successfully.")
            say(f"Days between issue and return: {receipt.days}")
            if receipt.fine:
                say(f"Book returned late. Fine of Rs.{receipt.fine} added.")
            else:
                say("Book returned on time. No fine.")
        if not _yes(ask("\nDo you want to return another book? (y/n): ")):
            return