from conftest import make_account, make_employer
from talenthub.services.identity import IdentityProvider
from talenthub.services.session_store import SessionStore


def test_sign_in_and_out_notify_subscribers(db):
    provider = IdentityProvider()
    store = SessionStore(provider)
    store.init()
    events = []
    store.subscribe(lambda user, profile: events.append((user, profile)))

    account = make_account(db, email="hr@acme.com")
    make_employer(db, employer_id=account.uid, company_name="Acme")

    _, token = provider.sign_in(db, "hr@acme.com", "secret123")
    user, profile = events[-1]
    assert user.uid == account.uid
    assert profile.role == "employer"
    assert profile.name == "Acme"
    assert store.get(account.uid).has_role

    provider.sign_out(token)
    assert events[-1] == (None, None)
    assert store.get(account.uid) is None

    store.dispose()


def test_dispose_stops_following_the_provider(db):
    provider = IdentityProvider()
    store = SessionStore(provider)
    store.init()
    store.dispose()
    assert not store.active

    make_account(db, email="t@example.com")
    provider.sign_in(db, "t@example.com", "secret123")

    assert store._sessions == {}


def test_sync_only_notifies_on_change(db):
    store = SessionStore(IdentityProvider())
    events = []
    unsubscribe = store.subscribe(lambda user, profile: events.append(profile))
    account = make_account(db, email="new@example.com")

    first = store.sync(db, account)
    store.sync(db, account)

    assert len(events) == 1
    assert first.profile.provisional is True
    assert first.has_role is False

    make_employer(db, employer_id=account.uid)
    store.sync(db, account)
    assert len(events) == 2
    assert events[-1].role == "employer"

    unsubscribe()
    store.end(account.uid)
    assert len(events) == 2


def test_failing_listener_does_not_break_others(db):
    store = SessionStore(IdentityProvider())
    seen = []

    def broken(user, profile):
        raise RuntimeError("boom")

    store.subscribe(broken)
    store.subscribe(lambda user, profile: seen.append(user))

    store.sync(db, make_account(db))
    assert len(seen) == 1
