"""Late-return fines kept in a six-column CSV file."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable

from libdesk.dates import Date, format_date, parse_date

HEADER = "Book ID,Member ID,Date of Issue,Date of Return,Days Late,Fine"
_RULE = "-" * 88

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

Ask = Callable[[str], str]
Say = Callable[[str], None]


@dataclass(frozen=True)
class FineRecord:
    """One fine charged for a late return."""

    book_id: str
    member_id: str
    issue_date: Date
    return_date: Date
    days_late: int
    fine: int


def _fields(line: str) -> list[str]:
    return [field for field in line.rstrip("\r\n").split(",") if field]


def _leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _parse(line: str) -> FineRecord | None:
    fields = _fields(line)
    if len(fields) < 6:
        return None
    try:
        issue_date = parse_date(fields[2])
        return_date = parse_date(fields[3])
    except ValueError:
        return None
    return FineRecord(
        fields[0],
        fields[1],
        issue_date,
        return_date,
        _leading_int(fields[4]),
        _leading_int(fields[5]),
    )


class FineLedger:
    """Fine records stored one per line after a header row."""

    def __init__(self, path) -> None:
        self.path = Path(path)

    def records(self) -> list[FineRecord]:
        """Return every well-formed record in file order."""
        try:
            lines = self.path.read_text(encoding="utf-8").splitlines()
        except FileNotFoundError:
            return []
        return [record for record in map(_parse, lines[1:]) if record is not None]

    def records_for(self, member_id: str) -> list[FineRecord]:
        """Return the records charged to one member."""
        return [record for record in self.records() if record.member_id == member_id]

    def total_for(self, member_id: str) -> int:
        """Return the sum of a member's fines."""
        return sum(record.fine for record in self.records_for(member_id))

    def add(self, record: FineRecord) -> None:
        """Append a fine record, writing the header to a new file."""
        for value in (record.book_id, record.member_id):
            if not value or any(ch in value for ch in ",\r\n"):
                raise ValueError(f"invalid identifier: {value!r}")
        needs_header = not self.path.exists() or self.path.stat().st_size == 0
        with self.path.open("a", encoding="utf-8", newline="") as handle:
            if needs_header:
                handle.write(HEADER + "\n")
            handle.write(
                f"{record.book_id},{record.member_id},"
                f"{format_date(record.issue_date)},{format_date(record.return_date)},"
                f"{record.days_late},{record.fine}\n"
            )

    def clear(self, member_id: str) -> int:
        """Delete a member's records and return how many were removed."""
        try:
            lines = self.path.read_text(encoding="utf-8").splitlines(keepends=True)
        except FileNotFoundError:
            return 0
        kept = lines[:1]
        removed = 0
        for line in lines[1:]:
            fields = _fields(line)
            if len(fields) >= 2 and fields[1] == member_id:
                removed += 1
            else:
                kept.append(line)
        if removed:
            scratch = self.path.with_name(self.path.name + ".tmp")
            scratch.write_text("".join(kept), encoding="utf-8", newline="")
            scratch.replace(self.path)
        return removed


def format_fine_slip(records: Iterable[FineRecord], member_id: str) -> str:
    """Render a member's fine slip with the total due."""
    records = list(records)
    rows = [
        "",
        _RULE,
        f"| {'Book ID':<8} | {'Member ID':<10} | {'Date Of Issue':<15} | "
        f"{'Date Of Return':<15} | {'Days Late':<10} | {'Fine':<6} |",
        _RULE,
    ]
    rows += [
        f"| {r.book_id:<8} | {r.member_id:<10} | {format_date(r.issue_date):<15} | "
        f"{format_date(r.return_date):<15} | {r.days_late:<10} | {r.fine:<6} |"
        for r in records
    ]
    if records:
        rows.append(_RULE)
        rows.append(
            f"Total Fine for Member {member_id} = {sum(r.fine for r in records)}"
        )
    else:
        rows.append(f"No records found for Member ID: {member_id}")
    return "\n".join(rows)


def _yes(answer: str) -> bool:
    return answer[:1] in ("y", "Y")


def _slips(ledger: FineLedger, ask: Ask, say: Say) -> None:
    while True:
        member_id = ask("Enter Member ID: ")
        if not ledger.path.exists():
            say("Unable to open file!")
            return
        say(format_fine_slip(ledger.records_for(member_id), member_id))
        if not _yes(ask("\nDo you want to generate another (y/n): ")):
            return


def _clearance(ledger: FineLedger, ask: Ask, say: Say) -> None:
    while True:
        member_id = ask("Enter Member ID to clear fine: ")
        if not ledger.path.exists():
            say("Error opening file!")
            return
        if ledger.clear(member_id):
            say(f"Fine cleared for Member ID: {member_id}")
        else:
            say(f"No fine records found for Member ID: {member_id}")
        if not _yes(ask("\nDo you want to clear another fine? (y/n): ")):
            return


def fine_portal(ledger: FineLedger, ask: Ask, say: Say) -> None:
    """Offer one fine-portal action: slip, clearance or exit."""
    say("\n\n\t\t\t=== Welcome to the Fine Portal! ===\n")
    say("Please select an option:")
    say("1. Fine Slip")
    say("2. Fine Clearance")
    say("3. Exit")
    match = _LEADING_INT.match(ask("Enter your choice: "))
    choice = int(match.group(1)) if match else None
    if choice == 1:
        say("\n\n\t\t\t=== Fine Slip Generation ===\n")
        _slips(ledger, ask, say)
    elif choice == 2:
        say("\n\n\t\t\t=== Fine Clearance ===\n")
        _clearance(ledger, ask, say)
    elif choice == 3:
        say("Exiting Fine Portal.\n")
        return
    else:
        say("Invalid choice. Please try again.")
    say("Thank you for using the Fine Portal!")