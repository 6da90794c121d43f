"""分类 API 路由"""
from typing import Optional
from fastapi import APIRouter, Depends, Query

from app.container import Container
from app.dependencies.auth import get_container
from app.exceptions import ApiError, UsecaseError
from app.models.article import ArticlesResponse, CategoriesResponse
from app.routers.presenter import error_message, to_articles, to_categories, to_pagination
from app.services.article_service import CategoryPageInput
from app.services.pagination import DEFAULT_LIMIT
from app.utils.logger import logger

router = APIRouter()


@router.get("/categories", response_model=CategoriesResponse)
async def list_categories(container: Container = Depends(get_container)):
    """全部分类"""
    try:
        output = await container.get_categories.execute()
    except UsecaseError as e:
        logger.error(f"获取分类失败: {e}")
        raise ApiError(500, "Failed to get categories", detail=error_message(e)) from e

    return CategoriesResponse(categories=to_categories(output.categories))


@router.get(
    "/categories/{slug}/articles",
    response_model=ArticlesResponse,
    response_model_exclude_unset=True,
)
async def list_articles_by_category(
    slug: str,
    page: Optional[int] = Query(default=1, description="页码，从 1 开始"),
    limit: Optional[int] = Query(default=DEFAULT_LIMIT, description="每页条数，默认 10，最大 100"),
    container: Container = Depends(get_container),
):
    """分类下的文章列表（分页）"""
    if not slug.strip():
        raise ApiError(400, "Category slug is required")

    try:
        output = await container.get_articles_by_category.execute(
            CategoryPageInput(category_slug=slug, page=page, limit=limit)
        )
    except UsecaseError as e:
        logger.error(f"获取分类文章失败: slug={slug}, {e}")
        raise ApiError(500, "Failed to get articles", detail=error_message(e)) from e

    return ArticlesResponse(
        articles=to_articles(output.articles),
        pagination=to_pagination(output.pagination),
    )
