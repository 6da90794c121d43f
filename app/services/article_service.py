"""
文章查询用例
每个用例都是单次、顺序执行的流程：校验/钳制参数 ->（按需）取总数 -> 取一页数据 ->（按需）附加分页信息
上游任何错误都以 UsecaseError 抛出，消息带操作前缀，不重试，不返回部分结果
"""
from dataclasses import dataclass, field
from typing import List, Optional

from app.exceptions import UsecaseError
from app.models.entities import Article, Pagination
from app.services.pagination import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    TOP_DEFAULT_LIMIT,
    TOP_MAX_LIMIT,
    build_pagination,
    validate_limit,
)
from app.services.sources.base import ArticleAdvancedReader, ArticleReader


@dataclass(frozen=True)
class PageInput:
    """分页输入（page 1 起始）"""
    page: Optional[int] = 1
    limit: Optional[int] = DEFAULT_LIMIT


@dataclass(frozen=True)
class CategoryPageInput:
    """分类文章分页输入"""
    category_slug: str
    page: Optional[int] = 1
    limit: Optional[int] = DEFAULT_LIMIT


@dataclass(frozen=True)
class TopInput:
    """Top-N 输入"""
    limit: Optional[int] = TOP_DEFAULT_LIMIT


@dataclass(frozen=True)
class ArticleIdInput:
    id: str


@dataclass(frozen=True)
class ArticlesOutput:
    """文章列表输出；Top-N 视图 pagination 为 None"""
    articles: List[Article] = field(default_factory=list)
    pagination: Optional[Pagination] = None


@dataclass(frozen=True)
class ArticleOutput:
    article: Article


def _wrap(action: str, exc: Exception) -> UsecaseError:
    return UsecaseError(f"failed to {action}: {exc}")


class GetArticlesUsecase:
    """文章列表（默认 10 / 上限 100）"""

    def __init__(self, repo: ArticleAdvancedReader):
        self.repo = repo

    async def execute(self, input: PageInput) -> ArticlesOutput:
        try:
            total = await self.repo.count_articles()
            limit, offset, pagination = build_pagination(
                input.page, input.limit, DEFAULT_LIMIT, MAX_LIMIT, total
            )
            articles = await self.repo.get_articles(limit, offset)
        except Exception as e:
            raise _wrap("get articles", e) from e
        return ArticlesOutput(articles=articles, pagination=pagination)


class GetArticleByIdUsecase:
    """
    按 ID 获取文章
    空 ID 由路由层拦截，这里不重复校验
    """

    def __init__(self, repo: ArticleAdvancedReader):
        self.repo = repo

    async def execute(self, input: ArticleIdInput) -> ArticleOutput:
        try:
            article = await self.repo.get_article_by_id(input.id)
        except Exception as e:
            raise _wrap("get article by ID", e) from e
        return ArticleOutput(article=article)


class GetPopularArticlesUsecase:
    """热门文章 Top-N（默认 5 / 上限 20），不带分页"""

    def __init__(self, repo: ArticleAdvancedReader):
        self.repo = repo

    async def execute(self, input: TopInput) -> ArticlesOutput:
        limit = validate_limit(input.limit, TOP_DEFAULT_LIMIT, TOP_MAX_LIMIT)
        try:
            articles = await self.repo.get_popular_articles(limit)
        except Exception as e:
            raise _wrap("get popular articles", e) from e
        return ArticlesOutput(articles=articles)


class GetLatestArticlesUsecase:
    """最新文章 Top-N（默认 5 / 上限 20），不带分页"""

    def __init__(self, repo: ArticleAdvancedReader):
        self.repo = repo

    async def execute(self, input: TopInput) -> ArticlesOutput:
        limit = validate_limit(input.limit, TOP_DEFAULT_LIMIT, TOP_MAX_LIMIT)
        try:
            articles = await self.repo.get_latest_articles(limit)
        except Exception as e:
            raise _wrap("get latest articles", e) from e
        return ArticlesOutput(articles=articles)


class GetArticlesByCategoryUsecase:
    """分类文章列表（默认 10 / 上限 100）"""

    def __init__(self, repo: ArticleAdvancedReader):
        self.repo = repo

    async def execute(self, input: CategoryPageInput) -> ArticlesOutput:
        try:
            total = await self.repo.count_articles_by_category(input.category_slug)
            limit, offset, pagination = build_pagination(
                input.page, input.limit, DEFAULT_LIMIT, MAX_LIMIT, total
            )
            articles = await self.repo.get_articles_by_category(input.category_slug, limit, offset)
        except Exception as e:
            raise _wrap("get articles by category", e) from e
        return ArticlesOutput(articles=articles, pagination=pagination)


class GetZennArticlesUsecase:
    """
    Zenn 文章列表（默认 10 / 上限 100）

    只依赖最小能力，任何 ArticleReader 都可以传入。
    Zenn 不提供可靠的总条数，total 固定为 0，因此 total_pages 始终为 0。
    """

    def __init__(self, repo: ArticleReader):
        self.repo = repo

    async def execute(self, input: PageInput) -> ArticlesOutput:
        limit, offset, pagination = build_pagination(
            input.page, input.limit, DEFAULT_LIMIT, MAX_LIMIT, 0
        )
        try:
            articles = await self.repo.get_articles(limit, offset)
        except Exception as e:
            raise _wrap("get Zenn articles", e) from e
        return ArticlesOutput(articles=articles, pagination=pagination)
