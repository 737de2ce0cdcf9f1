import asyncio
from datetime import timedelta

import pytest

from stackscroll.adapters.auth_events import ListenerRegistry
from stackscroll.adapters.memory_store import InMemoryContentStore
from stackscroll.domain.entities import NewArticle
from stackscroll.domain.errors import AuthorizationDenied, AuthRejected, RemoteFailure


def sign_in(store, email, password):
    return asyncio.run(store.sign_in_with_password(email, password))


def test_sign_in_and_events(store, alice):
    events = []
    store.on_session_change(lambda event, session: events.append(event))

    session = sign_in(store, "alice@example.com", "secret-pw")
    asyncio.run(store.sign_out())

    assert session.user == alice
    assert events == ["SIGNED_IN", "SIGNED_OUT"]


def test_sign_in_email_is_case_insensitive(store, alice):
    assert sign_in(store, "ALICE@example.com", "secret-pw").user.id == alice.id


def test_wrong_password_rejected(store, alice):
    with pytest.raises(AuthRejected) as exc:
        sign_in(store, "alice@example.com", "nope")
    assert exc.value.reason == "invalid_credentials"


def test_unconfirmed_account_until_confirmed(store):
    asyncio.run(store.sign_up("new@example.com", "secret-pw"))

    with pytest.raises(AuthRejected) as exc:
        sign_in(store, "new@example.com", "secret-pw")
    assert exc.value.reason == "email_not_confirmed"

    store.confirm_email("new@example.com")
    assert sign_in(store, "new@example.com", "secret-pw").user.email == "new@example.com"


def test_auto_confirm(clock):
    store = InMemoryContentStore(clock, auto_confirm=True)
    asyncio.run(store.sign_up("new@example.com", "secret-pw"))

    assert sign_in(store, "new@example.com", "secret-pw") is not None


def test_session_expires_with_clock(store, clock, alice):
    sign_in(store, "alice@example.com", "secret-pw")
    clock.advance(timedelta(hours=2))

    assert asyncio.run(store.get_current_session()) is None


def test_list_newest_first(store, clock, alice):
    store.seed_article("Old", "a", alice.id)
    clock.advance(timedelta(minutes=5))
    store.seed_article("New", "b", alice.id)

    titles = [a.title for a in asyncio.run(store.list_articles())]

    assert titles == ["New", "Old"]


def test_list_rejects_unknown_order_field(store):
    with pytest.raises(RemoteFailure):
        asyncio.run(store.list_articles(order_by="nonsense"))


def test_insert_requires_signed_in_author(store, alice, bob):
    draft = NewArticle(title="T", body="B", author_id=alice.id)
    with pytest.raises(AuthorizationDenied):
        asyncio.run(store.insert_article(draft))

    sign_in(store, "bob@example.com", "hunter22")
    with pytest.raises(AuthorizationDenied):
        asyncio.run(store.insert_article(draft))


def test_insert_assigns_sequential_ids(store, alice):
    sign_in(store, "alice@example.com", "secret-pw")

    first = asyncio.run(store.insert_article(NewArticle(title="1", body="x", author_id=alice.id)))
    second = asyncio.run(store.insert_article(NewArticle(title="2", body="y", author_id=alice.id)))

    assert (first.id, second.id) == (1, 2)


def test_delete_checks_author(store, alice, bob):
    article = store.seed_article("Mine", "body", alice.id)
    sign_in(store, "bob@example.com", "hunter22")

    with pytest.raises(AuthorizationDenied):
        asyncio.run(store.delete_article(article.id))


def test_delete_missing_or_malformed_id_is_noop(store, alice):
    sign_in(store, "alice@example.com", "secret-pw")

    asyncio.run(store.delete_article(99))
    asyncio.run(store.delete_article("not-a-number"))


def test_delete_accepts_string_id(store, alice):
    article = store.seed_article("Mine", "body", alice.id)
    sign_in(store, "alice@example.com", "secret-pw")

    asyncio.run(store.delete_article(str(article.id)))

    assert asyncio.run(store.list_articles()) == []


def test_fail_next_is_one_shot(store):
    store.fail_next("list_articles", RemoteFailure("injected"))

    with pytest.raises(RemoteFailure):
        asyncio.run(store.list_articles())
    assert asyncio.run(store.list_articles()) == []


def test_listener_handle_unsubscribes_once():
    registry = ListenerRegistry()
    seen = []
    handle = registry.add(lambda event, session: seen.append(event))

    handle.unsubscribe()
    handle.unsubscribe()
    registry.emit("SIGNED_OUT", None)

    assert handle.active is False
    assert len(registry) == 0
    assert seen == []


def test_failed_sign_out_still_ends_session(store, alice):
    events = []
    store.on_session_change(lambda event, session: events.append(event))
    sign_in(store, "alice@example.com", "secret-pw")
    store.fail_next("sign_out", RemoteFailure("injected"))

    with pytest.raises(RemoteFailure):
        asyncio.run(store.sign_out())

    assert asyncio.run(store.get_current_session()) is None
    assert events == ["SIGNED_IN", "SIGNED_OUT"]
    with pytest.raises(AuthorizationDenied):
        asyncio.run(store.insert_article(NewArticle(title="T", body="B", author_id=alice.id)))
