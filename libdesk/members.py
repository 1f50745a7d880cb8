"""The membership register kept in a five-column CSV file."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable

HEADER = "Name,ID,Department,Session,Contact"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

Ask = Callable[[str], str]
Say = Callable[[str], None]


@dataclass(frozen=True)
class Member:
    """One registered library member."""

    name: str
    member_id: str
    department: str
    session: str
    contact: str


class MemberError(Exception):
    """Raised when a membership operation cannot be done."""


class DuplicateMemberError(MemberError):
    """Raised when a member ID is already registered."""


def _fields(line: str) -> list[str]:
    return [field for field in line.rstrip("\r\n").split(",") if field]


def _parse(line: str) -> Member | None:
    fields = _fields(line)
    if len(fields) < 2:
        return None
    fields += [""] * (5 - len(fields))
    return Member(*fields[:5])


def _validate(member: Member) -> None:
    values = (
        member.name,
        member.member_id,
        member.department,
        member.session,
        member.contact,
    )
    if not all(values):
        raise MemberError("All fields must be filled! Please try again.")
    if any(ch in value for value in values for ch in ",\r\n"):
        raise MemberError("Fields must not contain commas or line breaks.")


def _is_complete(member: Member) -> bool:
    return all(
        (member.name, member.member_id, member.department, member.session, member.contact)
    )


class MemberRegistry:
    """Members stored one per line after a header row."""

    def __init__(self, path) -> None:
        self.path = Path(path)

    def _body(self) -> list[str]:
        try:
            lines = self.path.read_text(encoding="utf-8").splitlines(keepends=True)
        except FileNotFoundError:
            return []
        return lines[1:]

    def members(self) -> list[Member]:
        """Return every entry that carries at least a name and an ID."""
        return [member for member in map(_parse, self._body()) if member is not None]

    def find(self, member_id: str) -> Member | None:
        """Return the first member with this ID, or None."""
        return next(
            (member for member in self.members() if member.member_id == member_id),
            None,
        )

    def exists(self, member_id: str) -> bool:
        """Return True if a member with this ID is registered."""
        return self.find(member_id) is not None

    def add(self, member: Member) -> None:
        """Register a new member; the ID must not already be present."""
        _validate(member)
        if self.exists(member.member_id):
            raise DuplicateMemberError(member.member_id)
        needs_header = not self.path.exists() or self.path.stat().st_size == 0
        with self.path.open("a", encoding="utf-8", newline="") as handle:
            if needs_header:
                handle.write(HEADER + "\n")
            handle.write(
                f"{member.name},{member.member_id},{member.department},"
                f"{member.session},{member.contact}\n"
            )

    def delete(self, member_id: str) -> None:
        """Remove every entry with this ID; raise MemberError if there is none."""
        lines = self.path.read_text(encoding="utf-8").splitlines(keepends=True)
        kept = lines[:1]
        found = False
        for line in lines[1:]:
            fields = _fields(line)
            if len(fields) >= 2 and fields[1] == member_id:
                found = True
            else:
                kept.append(line)
        if not found:
            raise MemberError(f"no member with ID {member_id!r}")
        scratch = self.path.with_name(self.path.name + ".tmp")
        scratch.write_text("".join(kept), encoding="utf-8", newline="")
        scratch.replace(self.path)


def format_member_table(members: Iterable[Member]) -> str:
    """Render the member listing."""
    members = list(members)
    rows = [
        "\t\t\t=== Member List ===",
        "",
        f"{'Name':<20} {'ID':<10} {'Department':<15} {'Session':<10} {'Contact':<15}",
        "-" * 80,
    ]
    rows += [
        f"{m.name:<20} {m.member_id:<10} {m.department:<15} {m.session:<10} {m.contact:<15}"
        for m in members
    ]
    if not members:
        rows.append("No member records found.")
    return "\n".join(rows)


def _yes(answer: str) -> bool:
    return answer[:1] in ("y", "Y")


def add_members(registry: MemberRegistry, ask: Ask, say: Say) -> None:
    """Ask for member details and register them until the user stops."""
    say("Provide the following details to get membership")
    while True:
        while True:
            name = ask("1. Name : ")
            while True:
                member_id = ask("2. User ID : ")
                if not registry.exists(member_id):
                    break
                say("User ID already exists")
            department = ask("3. Department : ")
            session = ask("4. Session : ")
            contact = ask("5. Contact : ")
            try:
                registry.add(Member(name, member_id, department, session, contact))
            except DuplicateMemberError:
                say("User ID already exists")
            except MemberError as error:
                say(f"\n{error}\n")
            else:
                break
        if not _yes(ask("Do you want to enter user again? (y/n): ")):
            return


def _search_members(registry: MemberRegistry, ask: Ask, say: Say) -> None:
    if not registry.path.exists():
        say("Unable to open file")
        return
    while True:
        member_id = ask("Enter ID of member: ")
        member = registry.find(member_id)
        if member is None:
            say(f"Member with ID {member_id} not found.")
        else:
            say("Member found:")
            say(f"Name: {member.name}")
            say(f"ID: {member.member_id}")
            say(f"Department: {member.department}")
            say(f"Session: {member.session}")
            say(f"Contact: {member.contact}")
        if not _yes(ask("Do you want to find another member (yes/no) : ")):
            return


def _delete_members(registry: MemberRegistry, ask: Ask, say: Say) -> None:
    while True:
        if not registry.path.exists():
            say("Unable to open file")
            return
        member_id = ask("Enter the ID of member : ")
        try:
            registry.delete(member_id)
        except MemberError:
            say("ID not found")
        else:
            say("Data successfully deleted")
        if not _yes(ask("Do you want to delete membership again (yes/no) : ")):
            return


def _display_members(registry: MemberRegistry, say: Say) -> None:
    if not registry.path.exists():
        say("Unable to open file")
        return
    say(format_member_table(m for m in registry.members() if _is_complete(m)))


def manage_members(registry: MemberRegistry, ask: Ask, say: Say) -> None:
    """Run the membership menu until the user exits."""
    while True:
        say("\n\n\t\t\t=== Membership portal ===\n")
        say("\nOptions : ")
        say("1. Add Member\n2. Search member\n3. Delete membership\n4. Display All Members\n5. Exit")
        match = _LEADING_INT.match(ask("Select an option: "))
        option = int(match.group(1)) if match else None
        if option is None or not 1 <= option <= 5:
            say("Invalid option. Please choose a valid option.")
            continue
        if option == 1:
            say("\n\n\t\t\t=== Adding Member ===\n")
            add_members(registry, ask, say)
        elif option == 2:
            say("\n\n\t\t\t=== Search Member ===\n")
            _search_members(registry, ask, say)
        elif option == 3:
            say("\n\n\t\t\t=== Delete Member ===\n")
            _delete_members(registry, ask, say)
        elif option == 4:
            say("\n\n\t\t\t=== Display Members ===\n")
            _display_members(registry, say)
        else:
            say("Exiting...\n")
            return