import pytest

from libdesk.accounts import (
    AccountError,
    DuplicateUserError,
    UserStore,
    admin,
    login,
)


def scripted(*answers):
    remaining = iter(answers)
    return lambda prompt: next(remaining)


@pytest.fixture
def store(tmp_path):
    return UserStore(tmp_path / "loginfile.csv")


def test_register_then_authenticate(store):
    store.register("alice", "secret")
    assert store.authenticate("alice", "secret") is True
    assert store.authenticate("alice", "token") is False
    assert store.authenticate("nobody", "secret") is False


def test_file_starts_with_header(store):
    store.register("alice", "secret")
    store.register("bob", "token")
    lines = store.path.read_text(encoding="utf-8").splitlines()
    assert lines == ["UserName,Password", "alice,secret", "bob,token"]


def test_users_lists_registered_accounts(store):
    store.register("alice", "secret")
    store.register("bob", "token")
    assert store.users() == {"alice": "secret", "bob": "token"}


def test_duplicate_username_rejected(store):
    store.register("alice", "secret")
    with pytest.raises(DuplicateUserError):
        store.register("alice", "token")
    assert store.users() == {"alice": "secret"}


def test_long_password_is_cut(store):
    store.register("carol", "secret" * 2)
    stored = store.users()["carol"]
    assert len(stored) == 11
    assert ("secret" * 2).startswith(stored)


@pytest.mark.parametrize("username", ["", "a,b", "two words"])
def test_bad_username_rejected(store, username):
    with pytest.raises(AccountError):
        store.register(username, "secret")


def test_empty_password_rejected(store):
    with pytest.raises(AccountError):
        store.register("alice", "")


def test_missing_file(store):
    assert store.users() == {}
    with pytest.raises(FileNotFoundError):
        store.authenticate("alice", "secret")


def test_login_success(store):
    store.register("alice", "secret")
    out = []
    assert login(store, scripted("alice"), out.append, scripted("secret")) is True
    assert "Access granted. Welcome, alice!" in out


def test_login_gives_up_after_three_failures(store):
    store.register("alice", "secret")
    out = []
    ok = login(
        store,
        scripted("alice", "alice", "alice"),
        out.append,
        scripted("token", "token", "token"),
    )
    assert ok is False
    assert out[-1] == "Too many failed attempts. Returning to main menu."
    assert out.count("Access denied. Invalid username or password.") == 3


def test_login_second_attempt_succeeds(store):
    store.register("alice", "secret")
    out = []
    ok = login(store, scripted("alice", "alice"), out.append, scripted("token", "secret"))
    assert ok is True
    assert out.count("Access denied. Invalid username or password.") == 1


def test_login_without_file(store):
    out = []
    assert login(store, scripted("alice"), out.append, scripted("secret")) is False
    assert "Error: Could not open loginfile.csv" in out


def test_admin_register_then_login(store):
    out = []
    ok = admin(
        store,
        scripted("1", "dave", "2", "dave"),
        out.append,
        scripted("secret", "secret"),
    )
    assert ok is True
    assert store.users() == {"dave": "secret"}
    assert "User registered successfully!" in out


def test_admin_exit(store):
    out = []
    assert admin(store, scripted("3"), out.append, scripted()) is False
    assert "Exiting admin panel...\n" in out


def test_admin_rejects_bad_options(store):
    out = []
    assert admin(store, scripted("abc", "7", "3"), out.append, scripted()) is False
    assert "Invalid input. Please enter a number." in out
    assert "Enter a valid option." in out


def test_admin_reports_duplicate(store):
    store.register("alice", "secret")
    out = []
    admin(store, scripted("1", "alice", "3"), out.append, scripted("token"))
    assert "Username already exists. Try a different one." in out
    assert store.users() == {"alice": "secret"}