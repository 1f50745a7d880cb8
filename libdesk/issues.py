"""Book issues to members, kept in five-column CSV files."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable

from libdesk.books import BookCatalog
from libdesk.dates import Date, format_date, is_valid_date, parse_date
from libdesk.members import MemberRegistry, add_members

HEADER = "Member ID,Book Title,Book Author,Book ID,Issue Date"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_THREE_INTS = re.compile(r"\s*([+-]?\d+)\s+([+-]?\d+)\s+([+-]?\d+)")

Ask = Callable[[str], str]
Say = Callable[[str], None]


@dataclass(frozen=True)
class IssueRecord:
    """One book lent to one member on one day."""

    member_id: str
    title: str
    author: str
    book_id: str
    issue_date: Date


class IssueError(Exception):
    """Raised when a book cannot be issued."""


def _fields(line: str) -> list[str]:
    return [field for field in line.rstrip("\r\n").split(",") if field]


def _parse(line: str) -> IssueRecord | None:
    fields = _fields(line)
    if len(fields) < 5:
        return None
    try:
        issue_date = parse_date(fields[4])
    except ValueError:
        return None
    return IssueRecord(fields[0], fields[1], fields[2], fields[3], issue_date)


def _matches(line: str, book_id: str, member_id: str) -> bool:
    fields = _fields(line)
    return len(fields) >= 4 and fields[3] == book_id and fields[0] == member_id


class IssueLog:
    """Issue records stored one per line after a header row."""

    def __init__(self, path) -> None:
        self.path = Path(path)

    def records(self) -> list[IssueRecord]:
        """Return every well-formed record in file order."""
        try:
            lines = self.path.read_text(encoding="utf-8").splitlines()
        except FileNotFoundError:
            return []
        return [record for record in map(_parse, lines[1:]) if record is not None]

    def add(self, record: IssueRecord) -> None:
        """Append a record, writing the header to a new file."""
        values = (record.member_id, record.title, record.author, record.book_id)
        for value in values:
            if not value or any(ch in value for ch in ",\r\n"):
                raise IssueError(f"invalid field: {value!r}")
        needs_header = not self.path.exists() or self.path.stat().st_size == 0
        with self.path.open("a", encoding="utf-8", newline="") as handle:
            if needs_header:
                handle.write(HEADER + "\n")
            handle.write(
                f"{record.member_id},{record.title},{record.author},"
                f"{record.book_id},{format_date(record.issue_date)}\n"
            )

    def find(self, book_id: str, member_id: str) -> IssueRecord | None:
        """Return the first record of this book lent to this member, or None."""
        return next(
            (
                record
                for record in self.records()
                if record.book_id == book_id and record.member_id == member_id
            ),
            None,
        )

    def remove(self, book_id: str, member_id: str) -> int:
        """Delete the matching records and return how many were removed."""
        try:
            lines = self.path.read_text(encoding="utf-8").splitlines(keepends=True)
        except FileNotFoundError:
            return 0
        kept = lines[:1]
        removed = 0
        for line in lines[1:]:
            if _matches(line, book_id, member_id):
                removed += 1
            else:
                kept.append(line)
        if removed:
            scratch = self.path.with_name(self.path.name + ".tmp")
            scratch.write_text("".join(kept), encoding="utf-8", newline="")
            scratch.replace(self.path)
        return removed

    def history_for(self, member_id: str) -> list[IssueRecord]:
        """Return every record for one member in file order."""
        return [record for record in self.records() if record.member_id == member_id]


def issue_book(
    catalog: BookCatalog,
    registry: MemberRegistry,
    issues: IssueLog,
    history: IssueLog,
    member_id: str,
    book_id: str,
    issue_date: Date,
) -> IssueRecord:
    """Take a book off the shelf and record it as lent to a member."""
    if not registry.exists(member_id):
        raise IssueError(f"no member with ID {member_id!r}")
    if not is_valid_date(issue_date.day, issue_date.month, issue_date.year):
        raise IssueError(f"invalid issue date: {issue_date}")
    book = catalog.find(book_id)
    if book is None:
        raise IssueError("Book not found in stock.")
    record = IssueRecord(member_id, book.title, book.author, book.book_id, issue_date)
    catalog.take(book_id)
    issues.add(record)
    history.add(record)
    return record


def format_history(records: Iterable[IssueRecord], member_id: str) -> str:
    """Render one member's issue history."""
    records = list(records)
    rows = [
        f"\n=== Issue History for Member ID: {member_id} ===",
        f"{'Title':<30} {'Author':<30} {'Issue Date':<15}",
        "-" * 63,
    ]
    rows += [
        f"{r.title:<30} {r.author:<30} {format_date(r.issue_date):<15}"
        for r in records
    ]
    if not records:
        rows.append(f"No history found for Member ID {member_id}.")
    return "\n".join(rows)


def _yes(answer: str) -> bool:
    return answer.lstrip()[:1] in ("y", "Y")


def _ask_token(ask: Ask, prompt: str) -> str:
    while True:
        words = ask(prompt).split()
        if words:
            return words[0]


def _ask_issue_date(ask: Ask, say: Say) -> Date:
    while True:
        match = _THREE_INTS.match(ask("Enter date of issue (DD MM YYYY): "))
        if match is None:
            say("Invalid input format. Please enter 3 integers.")
            continue
        day, month, year = (int(group) for group in match.groups())
        if is_valid_date(day, month, year):
            return Date(day, month, year)
        say("Invalid date. Please enter a valid calendar date.")


def _verify_member(registry: MemberRegistry, ask: Ask, say: Say) -> str | None:
    member_id = _ask_token(ask, "Enter member ID to verify: ")
    if registry.exists(member_id):
        say("Member found")
        return member_id
    say("You have to buy membership to issue books\n")
    if _yes(ask("Do you want to buy membership (yes/no): ")):
        add_members(registry, ask, say)
        return _ask_token(ask, "Enter member ID to verify: ")
    say("Unable to issue a book !")
    return None


def _issue(
    catalog: BookCatalog,
    registry: MemberRegistry,
    issues: IssueLog,
    history: IssueLog,
    ask: Ask,
    say: Say,
) -> None:
    while True:
        if not (catalog.path.exists() and registry.path.exists()):
            say("Unable to open file!")
            return
        say("To issue a book, you have to be a member")
        member_id = _verify_member(registry, ask, say)
        if member_id is None:
            say("Member verification failed.")
            if _yes(ask("Do you want to try again? (y/n): ")):
                continue
            return
        say("Member verified.")
        book_id = _ask_token(ask, "Enter book ID to issue: ")
        book = catalog.find(book_id)
        if book is None:
            say("Book not found in stock.")
        else:
            say(f"Book available: {book.title} by {book.author}")
            member = registry.find(member_id)
            if member is None:
                say("Member ID not found in record even after verification.")
            else:
                issue_date = _ask_issue_date(ask, say)
                try:
                    issue_book(
                        catalog, registry, issues, history, member_id, book_id, issue_date
                    )
                except IssueError as error:
                    say(str(error))
                else:
                    say(f"Book issued to: {member.name}, {member.member_id}")
        if not _yes(ask("Do you want to issue another book? (y/n): ")):
            return


def _show_history(history: IssueLog, ask: Ask, say: Say) -> None:
    if not history.path.exists():
        say("No issue history found.")
        return
    member_id = _ask_token(ask, "Enter Member ID to view history: ")
    say(format_history(history.history_for(member_id), member_id))


def issue_books(
    catalog: BookCatalog,
    registry: MemberRegistry,
    issues: IssueLog,
    history: IssueLog,
    ask: Ask,
    say: Say,
) -> None:
    """Run the issue portal menu until the user exits."""
    say("\n\n\t\t\t=== Issue Portal ===\n")
    while True:
        say("1. Issue a book")
        say("2. View issue history")
        say("3. Exit")
        match = _LEADING_INT.match(ask("Enter your choice: "))
        choice = int(match.group(1)) if match else None
        if choice == 1:
            _issue(catalog, registry, issues, history, ask, say)
        elif choice == 2:
            _show_history(history, ask, say)
        elif choice == 3:
            say("Exiting issue portal.")
            return
        else:
            say("Invalid choice, please try again.")