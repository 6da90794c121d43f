import asyncio
from datetime import datetime, timezone

import httpx
import pytest

from app.exceptions import InvalidLimitError, SourceError, UnsupportedOperationError
from app.services.sources.zenn import ZennRepository, zenn_page

BASE_URL = "https://zenn.test/api"


def zenn_item(n):
    return {
        "id": 1000 + n,
        "post_type": "Article",
        "title": f"Zenn post {n}",
        "slug": f"slug-{n}",
        "comments_count": 0,
        "liked_count": 3,
        "article_type": "tech",
        "emoji": "📝",
        "published_at": "2024-05-01T10:00:00.000+09:00",
        "body_updated_at": "2024-05-02T10:00:00.000+09:00",
        "user": {"id": 1, "username": "kozennoki", "name": "kozennoki"},
    }


def make_repo(handler):
    return ZennRepository.create(
        BASE_URL, username="kozennoki", transport=httpx.MockTransport(handler)
    )


def run(coro):
    return asyncio.run(coro)


@pytest.mark.parametrize("limit,offset,page", [(10, 0, 1), (5, 10, 3), (10, 5, 1), (1, 4, 5)])
def test_zenn_page(limit, offset, page):
    assert zenn_page(limit, offset) == page


def test_get_articles_maps_fields():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={"articles": [zenn_item(1), zenn_item(2)], "next_page": 2})

    repo = make_repo(handler)
    articles = run(repo.get_articles(5, 10))

    params = requests[0].url.params
    assert requests[0].url.path == "/api/articles"
    assert params["username"] == "kozennoki"
    assert params["order"] == "latest"
    assert params["page"] == "3"

    first = articles[0]
    assert first.id == "1001"
    assert first.title == "📝Zenn post 1"
    assert first.image == "📝"
    assert first.body == ""
    assert first.description == "Zenn記事 - 1001"
    assert first.category.slug == "zenn"
    assert first.category.name == "Zenn"
    assert first.published_at == datetime(2024, 5, 1, 1, 0, tzinfo=timezone.utc)
    assert first.created_at == first.published_at
    assert first.updated_at == datetime(2024, 5, 2, 1, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("limit", [0, -1])
def test_get_articles_rejects_non_positive_limit_without_request(limit):
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={"articles": []})

    repo = make_repo(handler)

    with pytest.raises(InvalidLimitError, match="limit must be greater than 0"):
        run(repo.get_articles(limit, 0))
    assert requests == []


def test_get_articles_bad_status():
    repo = make_repo(lambda request: httpx.Response(503, text="unavailable"))

    with pytest.raises(SourceError) as exc_info:
        run(repo.get_articles(10, 0))

    assert "failed to fetch articles from Zenn" in str(exc_info.value)
    assert exc_info.value.status_code == 503


def test_get_articles_malformed_payload():
    repo = make_repo(lambda request: httpx.Response(200, json={"articles": [{"title": "no id"}]}))

    with pytest.raises(SourceError, match="failed to decode Zenn response"):
        run(repo.get_articles(10, 0))


def test_get_articles_empty_page():
    repo = make_repo(lambda request: httpx.Response(200, json={"articles": [], "next_page": None}))

    assert run(repo.get_articles(10, 90)) == []


@pytest.mark.parametrize(
    "call",
    [
        lambda r: r.get_article_by_id("1"),
        lambda r: r.get_articles_by_category("zenn", 10, 0),
        lambda r: r.get_popular_articles(5),
        lambda r: r.get_latest_articles(5),
        lambda r: r.count_articles(),
        lambda r: r.count_articles_by_category("zenn"),
        lambda r: r.get_categories(),
    ],
)
def test_advanced_operations_are_unsupported(call):
    repo = make_repo(lambda request: pytest.fail("no request expected"))

    with pytest.raises(UnsupportedOperationError) as exc_info:
        run(call(repo))

    assert isinstance(exc_info.value, NotImplementedError)
    assert str(exc_info.value).startswith("zenn does not support")


def test_get_articles_tolerates_missing_published_at():
    item = zenn_item(1)
    item["published_at"] = None
    other = zenn_item(2)
    del other["published_at"]
    del other["body_updated_at"]
    repo = make_repo(lambda request: httpx.Response(200, json={"articles": [item, other, zenn_item(3)]}))

    articles = run(repo.get_articles(10, 0))

    assert [a.id for a in articles] == ["1001", "1002", "1003"]
    assert articles[0].published_at == datetime(2024, 5, 2, 1, 0, tzinfo=timezone.utc)
    assert articles[0].created_at == articles[0].published_at
    assert articles[1].published_at is None
    assert articles[1].updated_at is None
    assert articles[2].published_at == datetime(2024, 5, 1, 1, 0, tzinfo=timezone.utc)
