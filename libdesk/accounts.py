"""Administrator accounts kept in a two-column CSV file."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, Iterator

HEADER = "UserName,Password"
MAX_PASSWORD_LENGTH = 11
MAX_LOGIN_PASSWORD_LENGTH = 49
MAX_ATTEMPTS = 3

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

Ask = Callable[[str], str]
Say = Callable[[str], None]


class AccountError(Exception):
    """Raised when an account cannot be created."""


class DuplicateUserError(AccountError):
    """Raised when a username is already registered."""


class UserStore:
    """Usernames and passwords stored one per line after a header."""

    def __init__(self, path) -> None:
        self.path = Path(path)

    def _pairs(self) -> Iterator[tuple[str, str]]:
        lines = self.path.read_text(encoding="utf-8").splitlines()
        for line in lines[1:]:
            username, sep, rest = line.partition(",")
            if sep and username and rest:
                yield username, rest

    def users(self) -> dict[str, str]:
        """Return the registered users mapped to their passwords."""
        result: dict[str, str] = {}
        try:
            for username, stored in self._pairs():
                result.setdefault(username, stored)
        except FileNotFoundError:
            pass
        return result

    def register(self, username: str, password: str) -> None:
        """Add a user; the stored password is cut to its field limit."""
        if not username or any(ch.isspace() or ch == "," for ch in username):
            raise AccountError(f"invalid username: {username!r}")
        stored = password[:MAX_PASSWORD_LENGTH]
        if not stored or "\n" in stored or "\r" in stored:
            raise AccountError("password must be a non-empty single line")
        if username in self.users():
            raise DuplicateUserError(username)
        needs_header = not self.path.exists() or self.path.stat().st_size == 0
        with self.path.open("a", encoding="utf-8", newline="") as handle:
            if needs_header:
                handle.write(HEADER + "\n")
            handle.write(f"{username},{stored}\n")

    def authenticate(self, username: str, password: str) -> bool:
        """Return True if the pair matches a stored account."""
        return any(pair == (username, password) for pair in self._pairs())


def _printable(text: str) -> str:
    return "".join(ch for ch in text if " " <= ch <= "~")


def _ask_token(ask: Ask, prompt: str) -> str:
    while True:
        words = ask(prompt).split()
        if words:
            return words[0]


def _ask_option(ask: Ask, say: Say) -> int:
    while True:
        match = _LEADING_INT.match(ask("Choose an option (1-3): "))
        if match is None:
            say("Invalid input. Please enter a number.")
            continue
        option = int(match.group(1))
        if not 1 <= option <= 3:
            say("Enter a valid option.")
            continue
        return option


def _register(store: UserStore, ask: Ask, say: Say, ask_password: Ask) -> None:
    say("\n\n\t\t\t=== Register ===\n")
    username = _ask_token(ask, "Enter new username: ")
    typed = _printable(ask_password("Enter new password: "))
    try:
        store.register(username, typed)
    except DuplicateUserError:
        say("Username already exists. Try a different one.")
    except AccountError as error:
        say(str(error))
    except OSError:
        say("Error opening file.")
    else:
        say("User registered successfully!")


def login(store: UserStore, ask: Ask, say: Say, ask_password: Ask) -> bool:
    """Give the user three attempts to log in; return True on success."""
    for attempt in range(1, MAX_ATTEMPTS + 1):
        say(f"\n\n\t\t\t=== Login (Attempt {attempt} of {MAX_ATTEMPTS}) ===\n")
        username = _ask_token(ask, "Enter username: ")
        entered = _printable(ask_password("Enter password: "))
        entered = entered[:MAX_LOGIN_PASSWORD_LENGTH]
        try:
            granted = store.authenticate(username, entered)
        except FileNotFoundError:
            say(f"Error: Could not open {store.path.name}")
            return False
        if granted:
            say(f"Access granted. Welcome, {username}!")
            return True
        say("Access denied. Invalid username or password.")
    say("Too many failed attempts. Returning to main menu.")
    return False


def admin(store: UserStore, ask: Ask, say: Say, ask_password: Ask) -> bool:
    """Run the login menu; True once logged in, False if the user exits."""
    say("\n\n\t\t\t=== Welcome to the Login System ===\n")
    while True:
        say("1. Register")
        say("2. Login")
        say("3. Exit")
        option = _ask_option(ask, say)
        if option == 1:
            _register(store, ask, say, ask_password)
        elif option == 2:
            if login(store, ask, say, ask_password):
                return True
            say("Login failed.")
        else:
            say("Exiting admin panel...\n")
            return False