import pytest

from libdesk.books import (
    Book,
    BookCatalog,
    BookError,
    DuplicateBookError,
    format_book_table,
    manage_books,
)

DUNE = Book("b1", "Dune", "Herbert")
EMMA = Book("b2", "Emma", "Austen")


def scripted(*answers):
    remaining = iter(answers)
    return lambda prompt: next(remaining)


@pytest.fixture
def catalog(tmp_path):
    return BookCatalog(tmp_path / "books.csv")


@pytest.fixture
def stocked(catalog):
    catalog.add(DUNE)
    catalog.add(EMMA)
    return catalog


def test_add_find_round_trip(stocked):
    assert stocked.find("b1") == DUNE
    assert stocked.find("b2") == EMMA
    assert stocked.find("b3") is None


def test_header_written_once(stocked):
    lines = stocked.path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "ID,Title,Author"
    assert lines.count("ID,Title,Author") == 1


def test_books_keep_file_order(stocked):
    assert stocked.books() == [DUNE, EMMA]


def test_missing_file_has_no_books(catalog):
    assert catalog.books() == []


def test_duplicate_id_rejected(stocked):
    with pytest.raises(DuplicateBookError):
        stocked.add(Book("b1", "Other", "Someone"))
    assert stocked.books() == [DUNE, EMMA]


@pytest.mark.parametrize(
    "book", [Book("", "T", "A"), Book("x", "", "A"), Book("x", "T", ""), Book("x", "A,B", "C")]
)
def test_invalid_book_rejected(catalog, book):
    with pytest.raises(BookError):
        catalog.add(book)
    assert catalog.books() == []


def test_delete(stocked):
    stocked.delete("b1")
    assert stocked.books() == [EMMA]
    with pytest.raises(BookError):
        stocked.delete("b1")


def test_take_and_restore(stocked):
    assert stocked.take("b2") == EMMA
    assert stocked.find("b2") is None
    stocked.restore(EMMA)
    assert stocked.find("b2") == EMMA


def test_take_missing(stocked):
    with pytest.raises(BookError):
        stocked.take("b9")
    assert stocked.books() == [DUNE, EMMA]


def test_empty_fields_in_file_are_skipped(catalog):
    catalog.path.write_text("ID,Title,Author\n7,,Dune,Herbert\nshort\n", encoding="utf-8")
    assert catalog.books() == [Book("7", "Dune", "Herbert")]


def test_table_lists_books_and_total():
    table = format_book_table([DUNE, EMMA])
    assert "Dune" in table and "Austen" in table
    assert table.endswith("Total books: 2")
    assert "No books found." not in table


def test_empty_table():
    table = format_book_table([])
    assert "No books found." in table
    assert table.endswith("Total books: 0")


def test_menu_add_book(catalog):
    out = []
    manage_books(catalog, scripted("1", "b1", "Dune", "Herbert", "n", "5"), out.append)
    assert catalog.books() == [DUNE]
    assert "Book added successfully with ID 'b1'." in out
    assert out[-1] == "Exiting...\n"


def test_menu_add_retries_duplicate_and_empty(stocked):
    out = []
    answers = scripted("1", "b1", "b3", "", "Nobody", "b3", "Ulysses", "Joyce", "n", "5")
    manage_books(stocked, answers, out.append)
    assert "ID 'b1' already exists. Try another." in out
    assert stocked.find("b3") == Book("b3", "Ulysses", "Joyce")


def test_menu_search(stocked):
    out = []
    manage_books(stocked, scripted("2", "b1", "y", "zz", "n", "5"), out.append)
    assert "Title: Dune" in out
    assert "No book found with ID 'zz'." in out


def test_menu_delete(stocked):
    out = []
    manage_books(stocked, scripted("3", "b1", "y", "b1", "n", "5"), out.append)
    assert stocked.books() == [EMMA]
    assert out.count("Book Deleted Successfully!") == 1
    assert "Book not found!" in out


def test_menu_display_and_invalid(stocked):
    out = []
    manage_books(stocked, scripted("9", "4", "5"), out.append)
    assert "\nInvalid choice. Please try again." in out
    assert format_book_table([DUNE, EMMA]) in out


def test_menu_search_without_file(catalog):
    out = []
    manage_books(catalog, scripted("2", "5"), out.append)
    assert "Could not open file!" in out