import asyncio

from stackscroll.components.session import (
    EMAIL_NOT_CONFIRMED,
    GENERIC_AUTH_FAILURE,
    INVALID_CREDENTIALS,
    SIGNUP_REJECTED,
    VERIFICATION_PENDING,
    SessionManager,
    sign_in_message,
    validate_password,
)
from stackscroll.domain.entities import Session, User
from stackscroll.domain.errors import AuthRejected, RemoteFailure, ValidationError


class SpyAuthStore:
    """Hand-rolled auth store that records calls and lets tests push events."""

    def __init__(self, session=None):
        self.session = session
        self.calls: list[str] = []
        self.callbacks = []
        self.unsubscribe_count = 0
        self.sign_in_error = None
        self.sign_out_error = None
        self.restore_error = None

    async def get_current_session(self):
        self.calls.append("get_current_session")
        if self.restore_error:
            raise self.restore_error
        return self.session

    def on_session_change(self, callback):
        self.callbacks.append(callback)
        spy = self

        class Handle:
            def unsubscribe(self):
                spy.unsubscribe_count += 1

        return Handle()

    async def sign_in_with_password(self, email, password):
        self.calls.append("sign_in")
        if self.sign_in_error:
            raise self.sign_in_error
        return self.session

    async def sign_up(self, email, password):
        self.calls.append("sign_up")
        return None

    async def sign_out(self):
        self.calls.append("sign_out")
        if self.sign_out_error:
            raise self.sign_out_error

    def emit(self, event, session):
        for callback in list(self.callbacks):
            callback(event, session)


def make_session(user_id="u-1", email="u1@example.com"):
    return Session(access_token="tok", user=User(id=user_id, email=email))


# --- Pure helpers ---


def test_validate_password_min_length():
    assert validate_password("12345") == "Password must be at least 6 characters long"
    assert validate_password("123456") is None
    assert validate_password("abc", min_length=3) is None


def test_sign_in_message_classification():
    assert sign_in_message(AuthRejected("Invalid login credentials")) == INVALID_CREDENTIALS
    assert sign_in_message(AuthRejected("Email not confirmed")) == EMAIL_NOT_CONFIRMED
    assert (
        sign_in_message(AuthRejected("nope", error_code="email_not_confirmed"))
        == EMAIL_NOT_CONFIRMED
    )
    assert sign_in_message(RemoteFailure("boom", status_code=500)) == GENERIC_AUTH_FAILURE


def test_sign_in_message_never_echoes_raw_text():
    message = sign_in_message(AuthRejected("SQL error near 'users'"))
    assert "SQL" not in message


# --- Lifecycle ---


def test_initialize_restores_existing_session():
    store = SpyAuthStore(session=make_session())
    manager = SessionManager(store)

    assert manager.ready is False
    asyncio.run(manager.initialize())

    assert manager.ready is True
    assert manager.current_user().id == "u-1"
    assert len(store.callbacks) == 1


def test_initialize_is_idempotent():
    store = SpyAuthStore()
    manager = SessionManager(store)

    asyncio.run(manager.initialize())
    asyncio.run(manager.initialize())

    assert store.calls.count("get_current_session") == 1
    assert len(store.callbacks) == 1


def test_initialize_survives_restore_failure():
    store = SpyAuthStore()
    store.restore_error = RemoteFailure("offline")
    manager = SessionManager(store)

    asyncio.run(manager.initialize())

    assert manager.ready is True
    assert manager.current_user() is None


def test_store_events_update_identity_and_notify():
    store = SpyAuthStore()
    manager = SessionManager(store)
    asyncio.run(manager.initialize())
    seen = []
    manager.subscribe(seen.append)

    store.emit("SIGNED_IN", make_session("u-2"))
    assert manager.current_user().id == "u-2"

    store.emit("SIGNED_OUT", None)
    assert manager.current_user() is None
    assert [u.id if u else None for u in seen] == ["u-2", None]


def test_unchanged_identity_does_not_notify():
    store = SpyAuthStore(session=make_session())
    manager = SessionManager(store)
    asyncio.run(manager.initialize())
    seen = []
    manager.subscribe(seen.append)

    store.emit("TOKEN_REFRESHED", make_session())

    assert seen == []


def test_unsubscribe_stops_notifications():
    store = SpyAuthStore()
    manager = SessionManager(store)
    asyncio.run(manager.initialize())
    seen = []
    handle = manager.subscribe(seen.append)

    handle.unsubscribe()
    handle.unsubscribe()
    store.emit("SIGNED_IN", make_session())

    assert seen == []


def test_dispose_releases_store_subscription_once():
    store = SpyAuthStore()
    manager = SessionManager(store)
    asyncio.run(manager.initialize())
    seen = []
    manager.subscribe(seen.append)

    manager.dispose()
    manager.dispose()
    store.emit("SIGNED_IN", make_session())

    assert store.unsubscribe_count == 1
    assert manager.disposed is True
    assert manager.current_user() is None
    assert seen == []


def test_initialize_after_dispose_does_nothing():
    store = SpyAuthStore()
    manager = SessionManager(store)
    manager.dispose()

    asyncio.run(manager.initialize())

    assert store.calls == []
    assert store.callbacks == []


# --- Sign in / up / out ---


def test_sign_in_success_sets_identity():
    store = SpyAuthStore(session=make_session())
    manager = SessionManager(store)

    out = asyncio.run(manager.sign_in("u1@example.com", "whatever"))

    assert out.success is True
    assert out.status == "signed_in"
    assert manager.current_user().id == "u-1"


def test_sign_in_unconfirmed_email_message():
    store = SpyAuthStore()
    store.sign_in_error = AuthRejected("Email not confirmed", reason="email_not_confirmed")
    manager = SessionManager(store)

    out = asyncio.run(manager.sign_in("a@example.com", "pw"))

    assert out.success is False
    assert out.message == EMAIL_NOT_CONFIRMED
    assert manager.current_user() is None


def test_sign_in_other_rejection_is_generic():
    store = SpyAuthStore()
    store.sign_in_error = AuthRejected("Invalid login credentials")
    manager = SessionManager(store)

    out = asyncio.run(manager.sign_in("a@example.com", "pw"))

    assert out.message == INVALID_CREDENTIALS


def test_sign_up_short_password_makes_no_store_call():
    store = SpyAuthStore()
    manager = SessionManager(store)

    out = asyncio.run(manager.sign_up("a@example.com", "12345"))

    assert out.success is False
    assert isinstance(out.error, ValidationError)
    assert out.error.field_name == "password"
    assert "sign_up" not in store.calls


def test_sign_up_success_does_not_sign_in():
    store = SpyAuthStore(session=make_session())
    manager = SessionManager(store)

    out = asyncio.run(manager.sign_up("a@example.com", "123456"))

    assert out.status == "verification_pending"
    assert out.message == VERIFICATION_PENDING
    assert manager.current_user() is None


def test_sign_out_clears_identity():
    store = SpyAuthStore(session=make_session())
    manager = SessionManager(store)
    asyncio.run(manager.initialize())

    out = asyncio.run(manager.sign_out())

    assert out.status == "signed_out"
    assert out.error is None
    assert manager.current_user() is None


def test_sign_out_clears_identity_even_when_remote_fails():
    store = SpyAuthStore(session=make_session())
    store.sign_out_error = RemoteFailure("network down")
    manager = SessionManager(store)
    asyncio.run(manager.initialize())

    out = asyncio.run(manager.sign_out())

    assert manager.current_user() is None
    assert isinstance(out.error, RemoteFailure)
    assert out.message == GENERIC_AUTH_FAILURE


def test_against_dev_store(store, alice, session_manager):
    asyncio.run(session_manager.initialize())

    out = asyncio.run(session_manager.sign_in("alice@example.com", "secret-pw"))

    assert out.success is True
    assert session_manager.current_user() == alice
    assert store.listener_count == 1

    session_manager.dispose()
    assert store.listener_count == 0


def test_dispose_during_initialize_leaves_no_store_listener(store, session_manager):
    store.latency = 0.05

    async def scenario():
        task = asyncio.create_task(session_manager.initialize())
        await asyncio.sleep(0.01)
        session_manager.dispose()
        await task

    asyncio.run(scenario())

    assert store.listener_count == 0
    assert session_manager.ready is False


def test_sign_up_rejection_hides_store_text(alice, session_manager):
    out = asyncio.run(session_manager.sign_up("alice@example.com", "123456"))

    assert out.success is False
    assert isinstance(out.error, AuthRejected)
    assert out.error.message == "User already registered"
    assert out.message == SIGNUP_REJECTED
