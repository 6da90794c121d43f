"""领域实体 -> 对外 JSON 模型（纯结构转换）"""
from typing import List

from app.models.article import ArticleSchema, CategorySchema, PaginationSchema
from app.models.entities import Article, Category, Pagination


def to_category(category: Category) -> CategorySchema:
    return CategorySchema(slug=category.slug, name=category.name)


def to_categories(categories: List[Category]) -> List[CategorySchema]:
    return [to_category(c) for c in categories]


def to_article(article: Article) -> ArticleSchema:
    return ArticleSchema(
        id=article.id,
        title=article.title,
        image=article.image,
        category=to_category(article.category),
        description=article.description,
        body=article.body,
        published_at=article.published_at,
        created_at=article.created_at,
        updated_at=article.updated_at,
    )


def to_articles(articles: List[Article]) -> List[ArticleSchema]:
    return [to_article(a) for a in articles]


def to_pagination(pagination: Pagination) -> PaginationSchema:
    return PaginationSchema(
        total=pagination.total,
        page=pagination.page,
        limit=pagination.limit,
        total_pages=pagination.total_pages,
    )


def error_message(exc: Exception) -> str:
    return str(exc)
