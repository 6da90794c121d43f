"""Zenn 文章 API 路由"""
from typing import Optional
from fastapi import APIRouter, Depends, Query

from app.container import Container
from app.dependencies.auth import get_container
from app.exceptions import ApiError, UsecaseError
from app.models.article import ArticlesResponse
from app.routers.presenter import error_message, to_articles, to_pagination
from app.services.article_service import PageInput
from app.services.pagination import DEFAULT_LIMIT
from app.utils.logger import logger

router = APIRouter()


@router.get("/zenn/articles", response_model=ArticlesResponse, response_model_exclude_unset=True)
async def list_zenn_articles(
    page: Optional[int] = Query(default=1, description="页码，从 1 开始"),
    limit: Optional[int] = Query(default=DEFAULT_LIMIT, description="每页条数，默认 10，最大 100"),
    container: Container = Depends(get_container),
):
    """
    Zenn 文章列表
    Zenn 不返回总条数，pagination.total 与 totalPages 固定为 0
    """
    try:
        output = await container.get_zenn_articles.execute(PageInput(page=page, limit=limit))
    except UsecaseError as e:
        logger.error(f"获取 Zenn 文章失败: {e}")
        raise ApiError(500, "Failed to get Zenn articles", detail=error_message(e)) from e

    return ArticlesResponse(
        articles=to_articles(output.articles),
        pagination=to_pagination(output.pagination),
    )
