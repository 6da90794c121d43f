"""
Zenn 数据源实现（只实现最小能力：分页列表）
接口: GET https://zenn.dev/api/articles?username=<user>&order=latest&page=<n>
无需鉴权；不返回正文，也不提供可靠的总条数
"""
from datetime import datetime
from typing import List, Optional

import httpx
from pydantic import BaseModel, ValidationError

from app.exceptions import InvalidLimitError, SourceError, UnsupportedOperationError
from app.models.entities import Article, Category, ZENN_CATEGORY
from app.services.sources.base import ArticleReader
from app.utils.http_client import HttpClient
from app.utils.logger import logger


class _ZennArticle(BaseModel):
    id: int
    title: str
    slug: str = ""
    emoji: str = ""
    # 未公开或草稿可能为 null
    published_at: Optional[datetime] = None
    body_updated_at: Optional[datetime] = None


class _ZennResponse(BaseModel):
    articles: List[_ZennArticle] = []
    next_page: Optional[int] = None


def zenn_page(limit: int, offset: int) -> int:
    """offset/limit 换算为 Zenn 的 1 起始页码"""
    return offset // limit + 1


def _to_article(raw: _ZennArticle) -> Article:
    """将 Zenn 文章转为 Article（无正文，描述由 ID 拼成）"""
    published_at = raw.published_at or raw.body_updated_at
    return Article(
        id=str(raw.id),
        title=f"{raw.emoji}{raw.title}",
        image=raw.emoji or None,
        category=ZENN_CATEGORY,
        description=f"Zenn記事 - {raw.id}",
        body="",
        published_at=published_at,
        created_at=published_at,
        updated_at=raw.body_updated_at or published_at,
    )


class ZennRepository(ArticleReader):
    """Zenn 文章数据源"""

    def __init__(self, client: HttpClient, username: str):
        """
        初始化 Zenn 数据源

        Args:
            client: 指向 Zenn API 的 HTTP 客户端
            username: 文章作者
        """
        super().__init__("zenn")
        self.client = client
        self.username = username

    @classmethod
    def create(
        cls,
        base_url: str,
        username: str,
        timeout: float = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "ZennRepository":
        """按配置创建数据源及其 HTTP 客户端"""
        return cls(HttpClient(base_url=base_url, timeout=timeout, transport=transport), username)

    async def get_articles(self, limit: int, offset: int) -> List[Article]:
        """
        获取一页 Zenn 文章

        Raises:
            InvalidLimitError: limit <= 0，此时不发出请求
            SourceError: 请求失败或响应无法解析
        """
        if limit <= 0:
            raise InvalidLimitError()
        page = zenn_page(limit, offset)

        try:
            data = await self.client.get(
                "/articles",
                params={"username": self.username, "order": "latest", "page": page},
            )
            resp = _ZennResponse.model_validate(data)
        except ValidationError as e:
            logger.error(f"Zenn 响应解析失败: page={page}, {e}")
            raise SourceError(f"failed to decode Zenn response: {e}") from e
        except SourceError as e:
            logger.error(f"获取 Zenn 文章失败: page={page}, {e}")
            raise SourceError(
                f"failed to fetch articles from Zenn: {e}", status_code=e.status_code
            ) from e

        articles = [_to_article(a) for a in resp.articles]
        logger.debug(f"Zenn 第 {page} 页: {len(articles)} 条")
        return articles

    # 以下扩展能力 Zenn 不支持，调用即报错，不做降级

    async def get_article_by_id(self, article_id: str) -> Article:
        raise UnsupportedOperationError(self.name, "get_article_by_id")

    async def get_articles_by_category(
        self,
        category_slug: str,
        limit: int,
        offset: int,
    ) -> List[Article]:
        raise UnsupportedOperationError(self.name, "get_articles_by_category")

    async def get_popular_articles(self, limit: int) -> List[Article]:
        raise UnsupportedOperationError(self.name, "get_popular_articles")

    async def get_latest_articles(self, limit: int) -> List[Article]:
        raise UnsupportedOperationError(self.name, "get_latest_articles")

    async def count_articles(self) -> int:
        raise UnsupportedOperationError(self.name, "count_articles")

    async def count_articles_by_category(self, category_slug: str) -> int:
        raise UnsupportedOperationError(self.name, "count_articles_by_category")

    async def get_categories(self) -> List[Category]:
        raise UnsupportedOperationError(self.name, "get_categories")
