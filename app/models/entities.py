"""领域实体：每次请求从上游构造，构造后不再修改"""
from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator


class Category(BaseModel):
    """文章分类，slug 用于 URL 与过滤"""
    model_config = ConfigDict(frozen=True)
    slug: str
    name: str


class Article(BaseModel):
    """文章"""
    model_config = ConfigDict(frozen=True)
    id: str
    title: str
    image: Optional[str] = None
    category: Category
    description: str = ""
    # 数据源不提供正文时为空字符串
    body: str = ""
    published_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("published_at", "created_at", "updated_at")
    @classmethod
    def _to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        # 带时区的时间统一转为 UTC
        if v is not None and v.tzinfo is not None:
            return v.astimezone(timezone.utc)
        return v


class Pagination(BaseModel):
    """分页信息，每次调用根据上游 total 重新计算"""
    model_config = ConfigDict(frozen=True)
    total: int
    page: int
    limit: int
    total_pages: int


# Zenn 文章统一挂在这个固定分类下
ZENN_CATEGORY = Category(slug="zenn", name="Zenn")
