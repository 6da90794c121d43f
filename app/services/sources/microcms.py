"""
microCMS 数据源实现
文档: https://document.microcms.io/content-api/get-list-contents
- 列表: GET /api/v1/{endpoint}?limit=&offset=&filters=&orders=
- 详情: GET /api/v1/{endpoint}/{content_id}
- 鉴权: 请求头 X-MICROCMS-API-KEY
"""
from typing import Any, Dict, List, Optional, Union
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from app.exceptions import ArticleNotFoundError, SourceError
from app.models.entities import Article, Category
from app.services.sources.base import ArticleAdvancedReader, CategoryReader
from app.utils.http_client import HttpClient
from app.utils.logger import logger

BLOG_ENDPOINT = "blog"
CATEGORIES_ENDPOINT = "categories"


class _RawCategory(BaseModel):
    id: str
    name: str = ""


class _RawImage(BaseModel):
    url: str


class _RawArticle(BaseModel):
    id: str
    title: str = ""
    image: Optional[Union[_RawImage, str]] = None
    # 引用字段通常是展开后的对象，也兼容只返回 id 字符串
    category: Optional[Union[_RawCategory, str]] = None
    description: str = ""
    body: str = ""
    publishedAt: Optional[str] = None
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None


class MicroCMSClient(HttpClient):
    """microCMS Content API 客户端"""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        初始化 microCMS 客户端

        Args:
            base_url: API 基础 URL，如 https://<service>.microcms.io/api/v1
            api_key: API key
            timeout: 请求超时（秒）
            transport: 自定义传输层（测试用）
        """
        super().__init__(
            base_url=base_url,
            timeout=timeout,
            headers={"X-MICROCMS-API-KEY": api_key},
            transport=transport,
        )

    async def list(
        self,
        endpoint: str,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        filters: Optional[str] = None,
        orders: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        """
        获取列表

        Args:
            endpoint: API 名称（blog / categories）
            limit: 条数，0 表示只取 totalCount
            offset: 偏移量
            filters: 过滤条件，如 category[equals]tech
            orders: 排序字段，"-" 前缀表示倒序

        Returns:
            {"contents": [...], "totalCount": n, "offset": n, "limit": n}
        """
        params = {
            "limit": limit,
            "offset": offset,
            "filters": filters,
            "orders": ",".join(orders) if orders else None,
        }
        data = await self.get(f"/{endpoint}", params=params)
        if not isinstance(data, dict) or not isinstance(data.get("contents", []), list):
            raise SourceError(f"malformed list response from microCMS endpoint '{endpoint}'")
        return data

    async def get_content(self, endpoint: str, content_id: str) -> Dict[str, Any]:
        """获取单条内容（content_id 整体转义，不能带出查询参数或子路径）"""
        data = await self.get(f"/{endpoint}/{quote(content_id, safe='')}")
        if not isinstance(data, dict):
            raise SourceError(f"malformed content response from microCMS endpoint '{endpoint}'")
        return data


def _to_category(raw: Union[_RawCategory, str, None]) -> Category:
    if raw is None:
        return Category(slug="", name="")
    if isinstance(raw, str):
        return Category(slug=raw, name=raw)
    return Category(slug=raw.id, name=raw.name)


def _to_article(item: Dict[str, Any]) -> Article:
    """将 microCMS blog 内容转为 Article"""
    try:
        raw = _RawArticle.model_validate(item)
        image = raw.image.url if isinstance(raw.image, _RawImage) else raw.image
        return Article(
            id=raw.id,
            title=raw.title,
            image=image or None,
            category=_to_category(raw.category),
            description=raw.description,
            body=raw.body,
            published_at=raw.publishedAt or raw.createdAt,
            created_at=raw.createdAt,
            updated_at=raw.updatedAt,
        )
    except ValidationError as e:
        raise SourceError(f"malformed article from microCMS: {e}") from e


class MicroCMSArticleRepository(ArticleAdvancedReader):
    """microCMS 文章数据源（实现全部扩展能力）"""

    def __init__(self, client: MicroCMSClient):
        super().__init__("microcms")
        self.client = client

    async def _list_articles(self, action: str, **params) -> List[Article]:
        try:
            resp = await self.client.list(BLOG_ENDPOINT, **params)
            articles = [_to_article(item) for item in resp.get("contents") or []]
        except SourceError as e:
            logger.error(f"microCMS {action} 失败: {e}")
            raise SourceError(f"failed to {action}: {e}", status_code=e.status_code) from e
        logger.debug(f"microCMS {action}: {len(articles)} 条")
        return articles

    async def _count(self, action: str, filters: Optional[str] = None) -> int:
        try:
            resp = await self.client.list(BLOG_ENDPOINT, limit=0, filters=filters)
            return int(resp.get("totalCount") or 0)
        except (TypeError, ValueError) as e:
            raise SourceError(f"failed to {action}: malformed totalCount") from e
        except SourceError as e:
            logger.error(f"microCMS {action} 失败: {e}")
            raise SourceError(f"failed to {action}: {e}", status_code=e.status_code) from e

    async def get_articles(self, limit: int, offset: int) -> List[Article]:
        return await self._list_articles("get articles", limit=limit, offset=offset)

    async def get_article_by_id(self, article_id: str) -> Article:
        try:
            item = await self.client.get_content(BLOG_ENDPOINT, article_id)
            return _to_article(item)
        except SourceError as e:
            logger.error(f"microCMS 获取文章失败: id={article_id}, {e}")
            if e.status_code == 404:
                raise ArticleNotFoundError(article_id) from e
            raise SourceError(f"failed to get article by ID: {e}", status_code=e.status_code) from e

    async def get_articles_by_category(
        self,
        category_slug: str,
        limit: int,
        offset: int,
    ) -> List[Article]:
        return await self._list_articles(
            "get articles by category",
            limit=limit,
            offset=offset,
            filters=category_filter(category_slug),
        )

    async def get_popular_articles(self, limit: int) -> List[Article]:
        # microCMS 没有阅读量指标，取默认排序的第一页
        return await self.get_articles(limit, 0)

    async def get_latest_articles(self, limit: int) -> List[Article]:
        return await self._list_articles(
            "get latest articles",
            limit=limit,
            offset=0,
            orders=["-createdAt"],
        )

    async def count_articles(self) -> int:
        return await self._count("count articles")

    async def count_articles_by_category(self, category_slug: str) -> int:
        return await self._count("count articles by category", category_filter(category_slug))


class MicroCMSCategoryRepository(CategoryReader):
    """microCMS 分类数据源"""

    def __init__(self, client: MicroCMSClient):
        self.client = client

    async def get_categories(self) -> List[Category]:
        try:
            resp = await self.client.list(CATEGORIES_ENDPOINT)
            categories = [
                _to_category(_RawCategory.model_validate(item))
                for item in resp.get("contents") or []
            ]
        except ValidationError as e:
            raise SourceError(f"failed to get categories: malformed category: {e}") from e
        except SourceError as e:
            logger.error(f"microCMS 获取分类失败: {e}")
            raise SourceError(f"failed to get categories: {e}", status_code=e.status_code) from e
        logger.debug(f"microCMS 分类: {len(categories)} 个")
        return categories

    async def get_category_by_slug(self, slug: str) -> Category:
        try:
            item = await self.client.get_content(CATEGORIES_ENDPOINT, slug)
            return _to_category(_RawCategory.model_validate(item))
        except ValidationError as e:
            raise SourceError(f"failed to get category by slug: malformed category: {e}") from e
        except SourceError as e:
            raise SourceError(f"failed to get category by slug: {e}", status_code=e.status_code) from e


def category_filter(category_slug: str) -> str:
    """分类过滤条件"""
    return f"category[equals]{category_slug}"
