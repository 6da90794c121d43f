"""
Test configuration and fixtures
"""
from datetime import datetime, timezone
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.container import Container
from app.exceptions import ArticleNotFoundError, SourceError
from app.main import create_app
from app.models.entities import Article, Category
from app.services.article_service import (
    GetArticleByIdUsecase,
    GetArticlesByCategoryUsecase,
    GetArticlesUsecase,
    GetLatestArticlesUsecase,
    GetPopularArticlesUsecase,
    GetZennArticlesUsecase,
)
from app.services.category_service import GetCategoriesUsecase
from app.services.sources.base import ArticleAdvancedReader, ArticleReader, CategoryReader

API_KEY = "test-nerine-key"

TECH = Category(slug="technology", name="Technology")
LIFE = Category(slug="life", name="Life")


def make_article(n: int, category: Category = TECH) -> Article:
    ts = datetime(2024, 1, n, 9, 0, tzinfo=timezone.utc)
    return Article(
        id=f"article-{n}",
        title=f"Article {n}",
        image=f"https://images.example.com/{n}.png",
        category=category,
        description=f"description {n}",
        body=f"<p>body {n}</p>",
        published_at=ts,
        created_at=ts,
        updated_at=ts,
    )


class FakeArticleRepository(ArticleAdvancedReader):
    """In-memory primary source that records every call"""

    def __init__(self, articles: List[Article], error: Optional[Exception] = None):
        super().__init__("fake")
        self.articles = articles
        self.error = error
        self.calls = []

    def _check(self):
        if self.error is not None:
            raise self.error

    def _in(self, slug):
        return [a for a in self.articles if a.category.slug == slug]

    async def get_articles(self, limit, offset):
        self.calls.append(("get_articles", limit, offset))
        self._check()
        return self.articles[offset:offset + limit]

    async def get_article_by_id(self, article_id):
        self.calls.append(("get_article_by_id", article_id))
        self._check()
        for a in self.articles:
            if a.id == article_id:
                return a
        raise ArticleNotFoundError(article_id)

    async def get_articles_by_category(self, category_slug, limit, offset):
        self.calls.append(("get_articles_by_category", category_slug, limit, offset))
        self._check()
        return self._in(category_slug)[offset:offset + limit]

    async def get_popular_articles(self, limit):
        self.calls.append(("get_popular_articles", limit))
        self._check()
        return self.articles[:limit]

    async def get_latest_articles(self, limit):
        self.calls.append(("get_latest_articles", limit))
        self._check()
        return sorted(self.articles, key=lambda a: a.created_at, reverse=True)[:limit]

    async def count_articles(self):
        self.calls.append(("count_articles",))
        self._check()
        return len(self.articles)

    async def count_articles_by_category(self, category_slug):
        self.calls.append(("count_articles_by_category", category_slug))
        self._check()
        return len(self._in(category_slug))


class FakeCategoryRepository(CategoryReader):
    def __init__(self, categories: List[Category], error: Optional[Exception] = None):
        self.categories = categories
        self.error = error

    async def get_categories(self):
        if self.error is not None:
            raise self.error
        return list(self.categories)

    async def get_category_by_slug(self, slug):
        for c in self.categories:
            if c.slug == slug:
                return c
        raise SourceError(f"category '{slug}' not found", status_code=404)


class FakeReader(ArticleReader):
    """Minimal-tier source"""

    def __init__(self, articles: List[Article], error: Optional[Exception] = None):
        super().__init__("fake-reader")
        self.articles = articles
        self.error = error
        self.calls = []

    async def get_articles(self, limit, offset):
        self.calls.append(("get_articles", limit, offset))
        if self.error is not None:
            raise self.error
        return self.articles[offset:offset + limit]


def build_container(article_repo, category_repo, reader) -> Container:
    return Container(
        get_articles=GetArticlesUsecase(article_repo),
        get_article_by_id=GetArticleByIdUsecase(article_repo),
        get_popular_articles=GetPopularArticlesUsecase(article_repo),
        get_latest_articles=GetLatestArticlesUsecase(article_repo),
        get_articles_by_category=GetArticlesByCategoryUsecase(article_repo),
        get_categories=GetCategoriesUsecase(category_repo),
        get_zenn_articles=GetZennArticlesUsecase(reader),
    )


@pytest.fixture
def articles():
    """25 articles, first 20 in technology, last 5 in life"""
    return [make_article(n, TECH if n <= 20 else LIFE) for n in range(1, 26)]


@pytest.fixture
def article_repo(articles):
    return FakeArticleRepository(articles)


@pytest.fixture
def category_repo():
    return FakeCategoryRepository([TECH, LIFE])


@pytest.fixture
def reader():
    return FakeReader([make_article(n) for n in range(1, 4)])


@pytest.fixture
def settings():
    return Settings(
        microcms_api_key="test-microcms-key",
        microcms_service_id="test-service",
        nerine_api_key=API_KEY,
        log_level="WARNING",
        log_file="",
        _env_file=None,
    )


@pytest.fixture
def client(settings, article_repo, category_repo, reader):
    app = create_app(settings, build_container(article_repo, category_repo, reader))
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers():
    return {"X-API-Key": API_KEY}
