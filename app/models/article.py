"""文章 / 分类 API 模型（对外 JSON 结构）"""
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class _Wire(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CategorySchema(_Wire):
    """分类"""
    slug: str
    name: str


class ArticleSchema(_Wire):
    """文章"""
    id: str
    title: str
    image: Optional[str] = None
    category: CategorySchema
    description: str
    body: str
    published_at: Optional[datetime] = Field(default=None, alias="publishedAt")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")


class PaginationSchema(_Wire):
    """分页信息；字段全部可空，与 popular/latest 不带分页的契约保持一致"""
    total: Optional[int] = None
    page: Optional[int] = None
    limit: Optional[int] = None
    total_pages: Optional[int] = Field(default=None, alias="totalPages")


class ArticlesResponse(_Wire):
    """文章列表"""
    articles: List[ArticleSchema]
    pagination: Optional[PaginationSchema] = None


class ArticleResponse(_Wire):
    """文章详情"""
    article: ArticleSchema


class CategoriesResponse(_Wire):
    """分类列表"""
    categories: List[CategorySchema]
