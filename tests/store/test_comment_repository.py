from datetime import datetime

import pytest

from bard.api.store import Store
from bard.api.store.models import Comment
from bard.api.store.repositories.comment import CommentRepository

MESSAGE = '[{"type": "paragraph", "children": [{"text": "Nice post"}]}]'


@pytest.mark.asyncio
async def test_create_and_get_comment(temp_db_path):
    store = Store(temp_db_path, create=True)
    repo = CommentRepository(store)

    comment = await repo.create(
        Comment(user_id="user-1", article_id="article-1", message=MESSAGE)
    )

    fetched = await repo.get_by_id(comment.id)
    assert fetched is not None
    assert fetched.article_id == "article-1"
    assert fetched.parent_id is None
    assert fetched.message == MESSAGE
    assert fetched.likes == 0

    store.close()


@pytest.mark.asyncio
async def test_update_comment(temp_db_path):
    store = Store(temp_db_path, create=True)
    repo = CommentRepository(store)

    comment = await repo.create(Comment(user_id="user-1", article_id="article-1"))
    comment.message = MESSAGE
    comment.likes = 3
    await repo.update(comment)

    fetched = await repo.get_by_id(comment.id)
    assert fetched.message == MESSAGE
    assert fetched.likes == 3

    store.close()


@pytest.mark.asyncio
async def test_list_by_article(temp_db_path):
    store = Store(temp_db_path, create=True)
    repo = CommentRepository(store)

    first = await repo.create(Comment(user_id="u1", article_id="a1", message=MESSAGE))
    reply = await repo.create(
        Comment(user_id="u2", article_id="a1", parent_id=first.id, message=MESSAGE)
    )
    await repo.create(Comment(user_id="u1", article_id="a2", message=MESSAGE))

    comments = await repo.list_by_article("a1")
    assert [c.id for c in comments] == [first.id, reply.id]
    assert comments[1].parent_id == first.id

    reply.deleted_at = datetime.now()
    await repo.update(reply)

    assert [c.id for c in await repo.list_by_article("a1")] == [first.id]
    assert len(await repo.list_by_article("a1", include_deleted=True)) == 2
    assert len(await repo.list_all()) == 2

    store.close()


@pytest.mark.asyncio
async def test_delete_comment(temp_db_path):
    store = Store(temp_db_path, create=True)
    repo = CommentRepository(store)

    comment = await repo.create(Comment(user_id="u1", article_id="a1"))
    assert await repo.delete(comment.id) is True
    assert await repo.get_by_id(comment.id) is None
    assert await repo.list_all() == []

    store.close()
