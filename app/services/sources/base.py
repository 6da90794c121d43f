"""数据源基类：最小能力（分页列表）与扩展能力（详情、分类过滤、排序、计数）"""
from abc import ABC, abstractmethod
from typing import List
from app.models.entities import Article, Category


class ArticleReader(ABC):
    """最小能力：所有文章数据源都必须实现"""

    def __init__(self, name: str):
        """
        初始化数据源

        Args:
            name: 数据源名称
        """
        self.name = name

    @abstractmethod
    async def get_articles(self, limit: int, offset: int) -> List[Article]:
        """
        获取一页文章

        Args:
            limit: 条数
            offset: 偏移量（0 起始）

        Returns:
            文章列表
        """
        pass


class ArticleAdvancedReader(ArticleReader):
    """扩展能力：只有 microCMS 实现"""

    @abstractmethod
    async def get_article_by_id(self, article_id: str) -> Article:
        """
        按 ID 获取文章

        Raises:
            ArticleNotFoundError: 文章不存在
        """
        pass

    @abstractmethod
    async def get_articles_by_category(
        self,
        category_slug: str,
        limit: int,
        offset: int,
    ) -> List[Article]:
        """按分类 slug 获取一页文章"""
        pass

    @abstractmethod
    async def get_popular_articles(self, limit: int) -> List[Article]:
        """获取热门文章 Top-N"""
        pass

    @abstractmethod
    async def get_latest_articles(self, limit: int) -> List[Article]:
        """获取最新文章 Top-N（按创建时间倒序）"""
        pass

    @abstractmethod
    async def count_articles(self) -> int:
        """文章总数"""
        pass

    @abstractmethod
    async def count_articles_by_category(self, category_slug: str) -> int:
        """指定分类下的文章总数"""
        pass


class CategoryReader(ABC):
    """分类数据源"""

    @abstractmethod
    async def get_categories(self) -> List[Category]:
        """获取全部分类"""
        pass

    @abstractmethod
    async def get_category_by_slug(self, slug: str) -> Category:
        """按 slug 获取分类"""
        pass
