import asyncio
from datetime import UTC, datetime

import pytest

from stackscroll.components.listing import (
    COPY_FAILED,
    DELETE_DENIED,
    DELETE_FAILED,
    LINK_COPIED,
    LOAD_FAILED,
    READ_MORE,
    SHOW_LESS,
    ListingViewModel,
    render_preview,
)
from stackscroll.domain.entities import Article, User
from stackscroll.domain.errors import AuthorizationDenied, RemoteFailure

BASE_URL = "https://stackscroll.example"


def make_article(article_id=1, body="Body", author_id="author-1", day=1):
    return Article(
        id=article_id,
        title=f"Post {article_id}",
        body=body,
        author_id=author_id,
        created_at=datetime(2025, 1, day, tzinfo=UTC),
    )


class SpyArticleStore:
    def __init__(self, articles=None):
        self.articles = list(articles or [])
        self.list_calls = 0
        self.deleted = []
        self.list_error = None
        self.delete_error = None

    async def list_articles(self, order_by="created_at", descending=True):
        self.list_calls += 1
        if self.list_error:
            raise self.list_error
        return sorted(self.articles, key=lambda a: a.created_at, reverse=descending)

    async def insert_article(self, article):
        raise NotImplementedError

    async def delete_article(self, article_id):
        if self.delete_error:
            raise self.delete_error
        self.deleted.append(article_id)
        self.articles = [a for a in self.articles if a.id != article_id]


class GatedArticleStore:
    """Each list call blocks until the test releases it, in any order."""

    def __init__(self):
        self.pending = []

    async def list_articles(self, order_by="created_at", descending=True):
        slot = {"gate": asyncio.Event()}
        self.pending.append(slot)
        await slot["gate"].wait()
        if "error" in slot:
            raise slot["error"]
        return slot["result"]

    def release(self, index, result=None, error=None):
        slot = self.pending[index]
        if error is not None:
            slot["error"] = error
        slot["result"] = result or []
        slot["gate"].set()


@pytest.fixture
def author():
    return User(id="author-1", email="author@example.com")


def make_vm(store, clipboard, **kwargs):
    return ListingViewModel(store, clipboard, BASE_URL, **kwargs)


# --- Preview rendering ---


def test_render_preview_collapsed_truncates_and_marks():
    body = "x" * 250
    assert render_preview(body, expanded=False) == "x" * 200 + "..."


def test_render_preview_short_body_still_gets_marker():
    assert render_preview("Hello", expanded=False) == "Hello..."


def test_render_preview_expanded_is_full_body():
    body = "y" * 250
    assert render_preview(body, expanded=True) == body


def test_render_preview_counts_characters_not_bytes():
    body = "é" * 201
    assert render_preview(body, expanded=False) == "é" * 200 + "..."


# --- Expansion ---


def test_toggle_expand_round_trip(clipboard):
    article = make_article(1, body="z" * 300)
    vm = make_vm(SpyArticleStore([article]), clipboard)
    collapsed = vm.render(article)

    vm.toggle_expand(article)
    assert vm.render(article) == article.body
    assert vm.toggle_label(article) == SHOW_LESS

    vm.toggle_expand(article)
    assert vm.render(article) == collapsed
    assert vm.toggle_label(article) == READ_MORE


def test_only_one_article_expanded(clipboard):
    first, second = make_article(1), make_article(2)
    vm = make_vm(SpyArticleStore([first, second]), clipboard)

    vm.toggle_expand(first)
    vm.toggle_expand(second)

    assert vm.expanded_id == 2
    assert vm.is_expanded(first) is False
    assert vm.is_expanded(second) is True


def test_toggle_notifies_on_change(clipboard):
    calls = []
    vm = make_vm(SpyArticleStore(), clipboard, on_change=lambda: calls.append(1))

    vm.toggle_expand(make_article())

    assert calls == [1]


def test_display_date(clipboard):
    vm = make_vm(SpyArticleStore(), clipboard)
    assert vm.display_date(make_article(day=9)) == "2025-01-09"


# --- Loading ---


def test_load_orders_newest_first(clipboard):
    store = SpyArticleStore(
        [make_article(1, day=1), make_article(3, day=3), make_article(2, day=2)]
    )
    vm = make_vm(store, clipboard)

    out = asyncio.run(vm.load())

    assert out.success is True
    assert [a.id for a in vm.articles] == [3, 2, 1]
    assert vm.state.loading is False
    assert vm.is_empty is False


def test_is_empty_only_after_loading(clipboard):
    vm = make_vm(SpyArticleStore(), clipboard)
    assert vm.is_empty is False

    asyncio.run(vm.load())

    assert vm.is_empty is True


def test_failed_load_keeps_previous_articles(clipboard):
    store = SpyArticleStore([make_article(1)])
    vm = make_vm(store, clipboard)
    asyncio.run(vm.load())

    store.list_error = RemoteFailure("boom", status_code=500)
    out = asyncio.run(vm.load())

    assert out.success is False
    assert out.message == LOAD_FAILED
    assert [a.id for a in vm.articles] == [1]
    assert vm.state.error == LOAD_FAILED
    assert vm.state.loading is False


def test_stale_load_result_is_discarded(clipboard):
    async def scenario():
        store = GatedArticleStore()
        vm = make_vm(store, clipboard)

        first = asyncio.create_task(vm.load())
        await asyncio.sleep(0)
        second = asyncio.create_task(vm.load())
        await asyncio.sleep(0)

        store.release(1, [make_article(2)])
        newer = await second
        store.release(0, [make_article(1)])
        older = await first
        return vm, older, newer

    vm, older, newer = asyncio.run(scenario())

    assert newer.superseded is False
    assert older.superseded is True
    assert [a.id for a in vm.articles] == [2]


def test_stale_load_failure_is_discarded(clipboard):
    async def scenario():
        store = GatedArticleStore()
        vm = make_vm(store, clipboard)

        first = asyncio.create_task(vm.load())
        await asyncio.sleep(0)
        second = asyncio.create_task(vm.load())
        await asyncio.sleep(0)

        store.release(1, [make_article(5)])
        await second
        store.release(0, error=RemoteFailure("late failure"))
        older = await first
        return vm, older

    vm, older = asyncio.run(scenario())

    assert older.superseded is True
    assert vm.state.error is None
    assert [a.id for a in vm.articles] == [5]


def test_focus_id_expands_matching_article(clipboard):
    store = SpyArticleStore([make_article(1), make_article(7, day=2)])
    vm = make_vm(store, clipboard, focus_id="7")

    asyncio.run(vm.load())

    assert vm.expanded_id == 7


def test_focus_id_applies_once(clipboard):
    store = SpyArticleStore([make_article(7)])
    vm = make_vm(store, clipboard, focus_id="7")
    asyncio.run(vm.load())
    vm.toggle_expand(vm.articles[0])

    asyncio.run(vm.load())

    assert vm.expanded_id is None


def test_unknown_focus_id_is_ignored(clipboard):
    vm = make_vm(SpyArticleStore([make_article(1)]), clipboard, focus_id="99")

    asyncio.run(vm.load())

    assert vm.expanded_id is None


def test_reload_clears_expansion_of_vanished_article(clipboard):
    article = make_article(1)
    store = SpyArticleStore([article])
    vm = make_vm(store, clipboard)
    asyncio.run(vm.load())
    vm.toggle_expand(article)

    store.articles = []
    asyncio.run(vm.load())

    assert vm.expanded_id is None


# --- Delete ---


def test_can_delete_only_for_author(clipboard, author):
    vm = make_vm(SpyArticleStore(), clipboard)
    article = make_article(author_id=author.id)

    assert vm.can_delete(article, author) is True
    assert vm.can_delete(article, User(id="someone-else")) is False
    assert vm.can_delete(article, None) is False


def test_delete_by_non_author_never_reaches_store(clipboard):
    store = SpyArticleStore([make_article(1, author_id="author-1")])
    vm = make_vm(store, clipboard)
    asyncio.run(vm.load())

    out = asyncio.run(vm.delete(vm.articles[0], User(id="intruder")))

    assert out.success is False
    assert out.message == DELETE_DENIED
    assert isinstance(out.error, AuthorizationDenied)
    assert store.deleted == []


def test_delete_by_author_reloads(clipboard, author):
    store = SpyArticleStore([make_article(1), make_article(2, day=2)])
    vm = make_vm(store, clipboard)
    asyncio.run(vm.load())

    out = asyncio.run(vm.delete(vm.articles[0], author))

    assert out.success is True
    assert store.deleted == [2]
    assert store.list_calls == 2
    assert [a.id for a in vm.articles] == [1]


def test_failed_delete_keeps_sequence(clipboard, author):
    store = SpyArticleStore([make_article(1)])
    vm = make_vm(store, clipboard)
    asyncio.run(vm.load())
    store.delete_error = RemoteFailure("boom")

    out = asyncio.run(vm.delete(vm.articles[0], author))

    assert out.success is False
    assert out.message == DELETE_FAILED
    assert [a.id for a in vm.articles] == [1]
    assert store.list_calls == 1


# --- Share ---


def test_share_copies_article_url(clipboard):
    vm = make_vm(SpyArticleStore(), clipboard)

    out = vm.share(make_article(42))

    assert out.success is True
    assert out.message == LINK_COPIED
    assert clipboard.copied == [f"{BASE_URL}/blog/42"]


def test_share_reports_clipboard_failure(clipboard):
    clipboard.fail = True
    vm = make_vm(SpyArticleStore(), clipboard)

    out = vm.share(make_article(42))

    assert out.success is False
    assert out.message == COPY_FAILED
