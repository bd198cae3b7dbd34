"""PostService tests that exercise the service directly."""

import io
from concurrent.futures import ThreadPoolExecutor

import pytest

from blog_api.errors import NotFound, ValidationError
from blog_api.models.user import User
from blog_api.schemas.post import PostFields
from blog_api.services.auth import get_password_hash
from blog_api.services.post_service import PostService
from blog_api.services.storage import UploadedAsset


def thumbnail(content: bytes = b"png") -> UploadedAsset:
    return UploadedAsset(name="cover.png", size=len(content), source=io.BytesIO(content))


def fields(**overrides) -> PostFields:
    data = {"title": "Title", "category": "Fantasy", "description": "A long enough description"}
    data.update(overrides)
    return PostFields(**data)


@pytest.fixture
def author(db):
    user = User(
        name="Author", email="author@example.com", password_hash=get_password_hash("pw1234")
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def test_create_and_delete_adjust_counter(db, store, settings, author):
    service = PostService(db, store, settings)

    post = service.create_post(author.id, fields(), thumbnail())
    db.refresh(author)
    assert author.posts == 1

    service.delete_post(author.id, post.id)
    db.refresh(author)
    assert author.posts == 0


def test_counter_never_goes_negative(db, store, settings, author):
    service = PostService(db, store, settings)
    post = service.create_post(author.id, fields(), thumbnail())

    author.posts = 0
    db.commit()

    service.delete_post(author.id, post.id)
    db.refresh(author)
    assert author.posts == 0


def test_create_for_unknown_user(db, store, settings):
    service = PostService(db, store, settings)
    with pytest.raises(NotFound):
        service.create_post(9999, fields(), thumbnail())
    assert list(store.root.iterdir()) == []


def test_create_rejects_oversized_thumbnail(db, store, settings, author):
    service = PostService(db, store, settings)
    too_big = UploadedAsset(
        name="big.png", size=settings.max_thumbnail_bytes + 1, source=io.BytesIO(b"")
    )
    with pytest.raises(ValidationError):
        service.create_post(author.id, fields(), too_big)


def test_concurrent_creates_keep_exact_count(db, store, settings, author, session_factory):
    """Each worker uses its own session, as concurrent requests would."""
    workers = 6

    def create(i: int) -> int:
        session = session_factory()
        try:
            post = PostService(session, store, settings).create_post(
                author.id, fields(title=f"Post {i}"), thumbnail()
            )
            return post.id
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=workers) as pool:
        ids = list(pool.map(create, range(workers)))

    assert len(set(ids)) == workers
    db.refresh(author)
    assert author.posts == workers
