"""数据模型模块"""
from app.models.common import ErrorResponse, HealthResponse
from app.models.entities import Article, Category, Pagination, ZENN_CATEGORY
from app.models.article import (
    ArticleSchema,
    CategorySchema,
    PaginationSchema,
    ArticlesResponse,
    ArticleResponse,
    CategoriesResponse,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "Article",
    "Category",
    "Pagination",
    "ZENN_CATEGORY",
    "ArticleSchema",
    "CategorySchema",
    "PaginationSchema",
    "ArticlesResponse",
    "ArticleResponse",
    "CategoriesResponse",
]
