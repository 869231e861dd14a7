from datetime import datetime

import pytest

from bard.api.store import Store
from bard.api.store.models import Article
from bard.api.store.repositories.article import ArticleRepository

CONTENT = '[{"type": "paragraph", "children": [{"text": "Hello"}]}]'


@pytest.mark.asyncio
async def test_create_and_get_article(temp_db_path):
    store = Store(temp_db_path, create=True)
    repo = ArticleRepository(store)

    article = await repo.create(
        Article(user_id="user-1", title="First", content=CONTENT, subscribers_only=True)
    )

    assert article.id is not None
    fetched = await repo.get_by_id(article.id)
    assert fetched is not None
    assert fetched.title == "First"
    assert fetched.user_id == "user-1"
    assert fetched.content == CONTENT
    assert fetched.subscribers_only is True
    assert fetched.published_at is None
    assert fetched.deleted_at is None
    assert fetched.created_at == article.created_at

    store.close()


@pytest.mark.asyncio
async def test_get_missing_article(temp_db_path):
    store = Store(temp_db_path, create=True)
    repo = ArticleRepository(store)

    assert await repo.get_by_id("does-not-exist") is None
    assert await repo.get_by_id("it's-quoted") is None

    store.close()


@pytest.mark.asyncio
async def test_update_article(temp_db_path):
    store = Store(temp_db_path, create=True)
    repo = ArticleRepository(store)

    article = await repo.create(Article(user_id="user-1", title="Draft"))
    article.title = "Final"
    article.content = CONTENT
    article.published_at = datetime(2024, 1, 2, 3, 4, 5)
    await repo.update(article)

    fetched = await repo.get_by_id(article.id)
    assert fetched.title == "Final"
    assert fetched.content == CONTENT
    assert fetched.published_at == datetime(2024, 1, 2, 3, 4, 5)

    store.close()


@pytest.mark.asyncio
async def test_delete_article(temp_db_path):
    store = Store(temp_db_path, create=True)
    repo = ArticleRepository(store)

    article = await repo.create(Article(user_id="user-1", title="Gone"))

    assert await repo.delete(article.id) is True
    assert await repo.get_by_id(article.id) is None
    assert await repo.delete(article.id) is False

    store.close()


@pytest.mark.asyncio
async def test_list_articles(temp_db_path):
    store = Store(temp_db_path, create=True)
    repo = ArticleRepository(store)

    assert await repo.list_all() == []

    created = []
    for i in range(12):
        created.append(await repo.create(Article(user_id="user-1", title=f"A{i}")))

    deleted = created[3]
    deleted.deleted_at = datetime.now()
    await repo.update(deleted)

    articles = await repo.list_all()
    assert len(articles) == 11
    assert deleted.id not in {a.id for a in articles}

    everything = await repo.list_all(include_deleted=True)
    assert len(everything) == 12

    page = await repo.list_all(limit=5, offset=10)
    assert len(page) == 1

    store.close()


@pytest.mark.asyncio
async def test_list_articles_by_user(temp_db_path):
    store = Store(temp_db_path, create=True)
    repo = ArticleRepository(store)

    await repo.create(Article(user_id="alice", title="one"))
    await repo.create(Article(user_id="bob", title="two"))
    await repo.create(Article(user_id="alice", title="three"))

    articles = await repo.list_by_user("alice")
    assert {a.title for a in articles} == {"one", "three"}

    store.close()
