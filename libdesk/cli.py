"""The library desk's top-level menu and command entry point."""

from __future__ import annotations

import argparse
import getpass
from pathlib import Path
from typing import Callable

from libdesk.accounts import UserStore, admin
from libdesk.books import BookCatalog, manage_books
from libdesk.fines import FineLedger, fine_portal
from libdesk.issues import IssueLog, issue_books
from libdesk.members import MemberRegistry, manage_members
from libdesk.returns import return_books

Ask = Callable[[str], str]
Say = Callable[[str], None]

_MENU = (
    "\nWhat do you want to use:\n"
    "A. Member Management System\n"
    "B. Books Management System\n"
    "C. Book Issue Management System\n"
    "D. Book Return Management System\n"
    "E. Fine Management System\n"
    "F. Exit"
)


class Library:
    """The set of record files that make up one library's data."""

    def __init__(self, directory) -> None:
        self.directory = Path(directory)
        self.users = UserStore(self.directory / "loginfile.csv")
        self.catalog = BookCatalog(self.directory / "books.csv")
        self.registry = MemberRegistry(self.directory / "member.csv")
        self.issues = IssueLog(self.directory / "issue.csv")
        self.history = IssueLog(self.directory / "history.csv")
        self.ledger = FineLedger(self.directory / "fine.csv")


def _ask_letter(ask: Ask) -> str:
    while True:
        answer = ask("Enter your choice: ").strip()
        if answer:
            return answer[0]


def run(library: Library, ask: Ask, say: Say, ask_password: Ask) -> bool:
    """Log in, then run the main menu; return True if access was granted."""
    if not admin(library.users, ask, say, ask_password):
        say("Login failed. Exiting the program.\n")
        return False
    say("\n\n\t\t\t=== Welcome to Library Management System ===\n")
    while True:
        say(_MENU)
        choice = _ask_letter(ask).upper()
        if choice == "A":
            manage_members(library.registry, ask, say)
        elif choice == "B":
            manage_books(library.catalog, ask, say)
        elif choice == "C":
            issue_books(
                library.catalog,
                library.registry,
                library.issues,
                library.history,
                ask,
                say,
            )
        elif choice == "D":
            return_books(library.catalog, library.issues, library.ledger, ask, say)
        elif choice == "E":
            fine_portal(library.ledger, ask, say)
        elif choice == "F":
            say("Exiting...\n")
            return True
        else:
            say("Invalid input. Please try again.")


def main(argv=None) -> int:
    """Start the interactive library desk."""
    parser = argparse.ArgumentParser(
        prog="libdesk", description="Library management desk."
    )
    parser.add_argument(
        "--directory",
        default=".",
        help="directory holding the library's CSV files (default: current)",
    )
    args = parser.parse_args(argv)
    library = Library(args.directory)
    try:
        run(library, input, print, getpass.getpass)
    except (EOFError, KeyboardInterrupt):
        print()
        return 1
    return 0