# libdesk

libdesk is a console program for a small library's lending desk. It keeps
every record in a plain CSV file and covers the work at the counter:

- **Accounts**: staff register a username and password, then log in (three
  attempts per try) before the library menu opens.
- **Books**: add, search, delete and list the books in stock.
- **Members**: add, search, delete and list library members.
- **Issues**: lend a book to a verified member on a given date, and look up a
  member's issue history. A visitor who is not a member can be registered on
  the spot.
- **Returns**: take a book back, put it back in stock and work out any fine.
  A loan of up to 7 days is free; each day beyond that costs 100.
- **Fines**: print a fine slip with a member's total, or clear all of a
  member's fines.

## Installing

```
pip install .
```

libdesk needs Python 3.10 or later and nothing outside the standard library.

## Running

```
libdesk
libdesk --directory path/to/records
```

`--directory` names the folder holding the CSV files; it defaults to the
current directory. Files are created there as records are first written.

The program first shows the login menu (register, login, exit). Choosing exit,
or failing three login attempts and then exiting, ends the program. After a
successful login it shows the main menu:

```
A. Member Management System
B. Books Management System
C. Book Issue Management System
D. Book Return Management System
E. Fine Management System
F. Exit
```

Letters may be typed in either case. The fine portal carries out one action
(a slip or a clearance, repeated while you answer `y`) and then returns to the
main menu. Pressing Ctrl-D or Ctrl-C at a prompt quits with exit status 1.

## Data files

All records live in CSV files with a header row:

| File            | Columns                                                              |
|-----------------|----------------------------------------------------------------------|
| `loginfile.csv` | UserName, Password                                                   |
| `books.csv`     | ID, Title, Author                                                    |
| `member.csv`    | Name, ID, Department, Session, Contact                               |
| `issue.csv`     | Member ID, Book Title, Book Author, Book ID, Issue Date              |
| `history.csv`   | Member ID, Book Title, Book Author, Book ID, Issue Date              |
| `fine.csv`      | Book ID, Member ID, Date of Issue, Date of Return, Days Late, Fine   |

Dates are written as `DD-MM-YYYY`; when read, `DD MM YYYY` is accepted too and
a two-digit year means 20xx. Fields may not contain commas or line breaks.

When a book is issued it is removed from `books.csv` and a line is added to
both `issue.csv` (open loans) and `history.csv` (every loan). When it is
returned its line leaves `issue.csv`, the book is added back to `books.csv`,
and a late return adds a line to `fine.csv`.

## Using it from Python

Each file is handled by a small store class, and the loan and return steps can
be run without the menus:

```python
from libdesk.books import Book, BookCatalog, format_book_table
from libdesk.members import Member, MemberRegistry
from libdesk.issues import IssueLog, issue_book
from libdesk.returns import return_book
from libdesk.fines import FineLedger, format_fine_slip
from libdesk.dates import parse_date

catalog = BookCatalog("books.csv")
registry = MemberRegistry("member.csv")
issues = IssueLog("issue.csv")
history = IssueLog("history.csv")
ledger = FineLedger("fine.csv")

catalog.add(Book("B1", "Dune", "Frank Herbert"))
registry.add(Member("Ada", "M1", "Maths", "2024", "555-0100"))

issue_book(catalog, registry, issues, history, "M1", "B1", parse_date("01-01-2024"))
receipt = return_book(catalog, issues, ledger, "B1", "M1", parse_date("15-01-2024"))
print(receipt.days, receipt.fine)          # 14 700

print(format_book_table(catalog.books()))
print(format_fine_slip(ledger.records_for("M1"), "M1"))
```

- `libdesk.accounts.UserStore` registers and checks staff accounts.
- `libdesk.books.BookCatalog`, `libdesk.members.MemberRegistry`,
  `libdesk.issues.IssueLog` and `libdesk.fines.FineLedger` read and change
  their files; mistakes raise `BookError`, `MemberError`, `IssueError` or
  `ReturnError` (with `DuplicateBookError`, `DuplicateMemberError` and
  `DuplicateUserError` for IDs already in use).
- `libdesk.returns.compute_fine` gives the fine for a number of days on loan.
- `libdesk.dates` parses, checks and compares dates.
- `libdesk.cli.Library` bundles the six stores for one directory, and
  `libdesk.cli.run` drives the whole menu with any `ask`/`say` functions.

## What it does not do

- Passwords are stored in `loginfile.csv` as plain text, cut to 11
  characters; they are not hashed.
- There is a single kind of staff account; no roles or per-user permissions.
- Records are plain files with no locking, so only one desk should use a
  directory at a time.

## Running the tests

```
pip install .[test]
pytest
```