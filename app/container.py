"""依赖容器：按配置创建数据源与用例，整个进程只创建一次"""
from dataclasses import dataclass, field
from typing import List, Optional

import httpx

from app.config import Settings
from app.services.article_service import (
    GetArticleByIdUsecase,
    GetArticlesByCategoryUsecase,
    GetArticlesUsecase,
    GetLatestArticlesUsecase,
    GetPopularArticlesUsecase,
    GetZennArticlesUsecase,
)
from app.services.category_service import GetCategoriesUsecase
from app.services.sources.microcms import (
    MicroCMSArticleRepository,
    MicroCMSCategoryRepository,
    MicroCMSClient,
)
from app.services.sources.zenn import ZennRepository
from app.utils.http_client import HttpClient
from app.utils.logger import logger


@dataclass
class Container:
    """用例集合"""
    get_articles: GetArticlesUsecase
    get_article_by_id: GetArticleByIdUsecase
    get_popular_articles: GetPopularArticlesUsecase
    get_latest_articles: GetLatestArticlesUsecase
    get_articles_by_category: GetArticlesByCategoryUsecase
    get_categories: GetCategoriesUsecase
    get_zenn_articles: GetZennArticlesUsecase
    clients: List[HttpClient] = field(default_factory=list)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "Container":
        """
        创建容器

        Args:
            settings: 已校验的配置
            transport: 自定义传输层（测试用，两个上游共用）
        """
        microcms_client = MicroCMSClient(
            base_url=settings.microcms_endpoint,
            api_key=settings.microcms_api_key,
            timeout=settings.microcms_timeout,
            transport=transport,
        )
        article_repo = MicroCMSArticleRepository(microcms_client)
        category_repo = MicroCMSCategoryRepository(microcms_client)
        zenn_repo = ZennRepository.create(
            base_url=settings.zenn_base_url,
            username=settings.zenn_username,
            timeout=settings.zenn_timeout,
            transport=transport,
        )
        logger.info(f"数据源已创建: microCMS={settings.microcms_endpoint}, Zenn={settings.zenn_base_url}")

        return cls(
            get_articles=GetArticlesUsecase(article_repo),
            get_article_by_id=GetArticleByIdUsecase(article_repo),
            get_popular_articles=GetPopularArticlesUsecase(article_repo),
            get_latest_articles=GetLatestArticlesUsecase(article_repo),
            get_articles_by_category=GetArticlesByCategoryUsecase(article_repo),
            get_categories=GetCategoriesUsecase(category_repo),
            get_zenn_articles=GetZennArticlesUsecase(zenn_repo),
            clients=[microcms_client, zenn_repo.client],
        )

    async def close(self) -> None:
        """关闭全部 HTTP 客户端"""
        for client in self.clients:
            try:
                await client.close()
            except Exception as e:
                logger.error(f"关闭 HTTP 客户端失败: {client.base_url}, {e}")
