import pytest

from libdesk.dates import Date
from libdesk.fines import HEADER, FineLedger, FineRecord, fine_portal, format_fine_slip

FIRST = FineRecord("B1", "M1", Date(1, 1, 2024), Date(20, 1, 2024), 12, 1200)
SECOND = FineRecord("B2", "M1", Date(3, 2, 2024), Date(15, 2, 2024), 5, 500)
OTHER = FineRecord("B3", "M2", Date(5, 3, 2024), Date(14, 3, 2024), 2, 200)


def scripted(*answers):
    it = iter(answers)
    return lambda prompt: next(it)


@pytest.fixture
def ledger(tmp_path):
    return FineLedger(tmp_path / "fine.csv")


@pytest.fixture
def filled(ledger):
    for record in (FIRST, OTHER, SECOND):
        ledger.add(record)
    return ledger


def test_round_trip(ledger):
    ledger.add(FIRST)
    assert ledger.records() == [FIRST]


def test_file_format(ledger):
    ledger.add(FIRST)
    lines = ledger.path.read_text().splitlines()
    assert lines[0] == HEADER
    assert lines[1] == "B1,M1,01-01-2024,20-01-2024,12,1200"


def test_records_for_and_total(filled):
    mine = filled.records_for("M1")
    assert mine == [FIRST, SECOND]
    assert filled.total_for("M1") == sum(r.fine for r in mine)
    assert filled.total_for("nobody") == 0


def test_missing_file_is_empty(ledger):
    assert ledger.records() == []
    assert ledger.clear("M1") == 0


def test_clear_removes_only_member(filled):
    assert filled.clear("M1") == 2
    assert filled.records() == [OTHER]
    assert filled.path.read_text().splitlines()[0] == HEADER


def test_clear_without_match_leaves_file(filled):
    before = filled.path.read_text()
    assert filled.clear("M9") == 0
    assert filled.path.read_text() == before


def test_malformed_lines_skipped(ledger):
    ledger.path.write_text(HEADER + "\nB1,M1\n\nB2,M1,01-01-2024,09-01-2024,3x,50\n")
    records = ledger.records()
    assert len(records) == 1
    assert records[0].days_late == 3
    assert records[0].fine == 50


def test_add_rejects_bad_id(ledger):
    with pytest.raises(ValueError):
        ledger.add(FineRecord("", "M1", Date(1, 1, 2024), Date(2, 1, 2024), 1, 100))


def test_format_fine_slip(filled):
    text = format_fine_slip(filled.records_for("M1"), "M1")
    assert f"Total Fine for Member M1 = {filled.total_for('M1')}" in text
    assert "01-01-2024" in text and "B2" in text
    assert "No records found for Member ID: M9" in format_fine_slip([], "M9")


def test_portal_slip(filled):
    out = []
    fine_portal(filled, scripted("1", "M1", "n"), out.append)
    text = "\n".join(out)
    assert "Total Fine for Member M1" in text
    assert out[-1] == "Thank you for using the Fine Portal!"


def test_portal_slip_without_file(ledger):
    out = []
    fine_portal(ledger, scripted("1", "M1"), out.append)
    assert "Unable to open file!" in out


def test_portal_clearance(filled):
    out = []
    fine_portal(filled, scripted("2", "M1", "y", "M9", "n"), out.append)
    assert "Fine cleared for Member ID: M1" in out
    assert "No fine records found for Member ID: M9" in out
    assert filled.records_for("M1") == []


def test_portal_exit(filled):
    out = []
    fine_portal(filled, scripted("3"), out.append)
    assert out[-1] == "Exiting Fine Portal.\n"
    assert "Thank you for using the Fine Portal!" not in out


def test_portal_invalid_choice(filled):
    out = []
    fine_portal(filled, scripted("7"), out.append)
    assert out[-2:] == ["Invalid choice. Please try again.", "Thank you for using the Fine Portal!"]