"""文章 API 路由"""
from typing import Optional
from fastapi import APIRouter, Depends, Query

from app.container import Container
from app.dependencies.auth import get_container
from app.exceptions import ApiError, UsecaseError
from app.models.article import ArticleResponse, ArticlesResponse
from app.routers.presenter import error_message, to_article, to_articles, to_pagination
from app.services.article_service import ArticleIdInput, PageInput, TopInput
from app.services.pagination import DEFAULT_LIMIT, TOP_DEFAULT_LIMIT
from app.utils.logger import logger

router = APIRouter()


@router.get("/articles", response_model=ArticlesResponse, response_model_exclude_unset=True)
async def list_articles(
    page: Optional[int] = Query(default=1, description="页码，从 1 开始，小于 1 按 1 处理"),
    limit: Optional[int] = Query(default=DEFAULT_LIMIT, description="每页条数，默认 10，最大 100"),
    container: Container = Depends(get_container),
):
    """文章列表（分页）"""
    try:
        output = await container.get_articles.execute(PageInput(page=page, limit=limit))
    except UsecaseError as e:
        logger.error(f"获取文章列表失败: {e}")
        raise ApiError(500, "Failed to get articles", detail=error_message(e)) from e

    return ArticlesResponse(
        articles=to_articles(output.articles),
        pagination=to_pagination(output.pagination),
    )


@router.get("/articles/popular", response_model=ArticlesResponse, response_model_exclude_unset=True)
async def list_popular_articles(
    limit: Optional[int] = Query(default=TOP_DEFAULT_LIMIT, description="条数，默认 5，最大 20"),
    container: Container = Depends(get_container),
):
    """热门文章（不带分页）"""
    try:
        output = await container.get_popular_articles.execute(TopInput(limit=limit))
    except UsecaseError as e:
        logger.error(f"获取热门文章失败: {e}")
        raise ApiError(500, "Failed to get articles", detail=error_message(e)) from e

    return ArticlesResponse(articles=to_articles(output.articles))


@router.get("/articles/latest", response_model=ArticlesResponse, response_model_exclude_unset=True)
async def list_latest_articles(
    limit: Optional[int] = Query(default=TOP_DEFAULT_LIMIT, description="条数，默认 5，最大 20"),
    container: Container = Depends(get_container),
):
    """最新文章（不带分页）"""
    try:
        output = await container.get_latest_articles.execute(TopInput(limit=limit))
    except UsecaseError as e:
        logger.error(f"获取最新文章失败: {e}")
        raise ApiError(500, "Failed to get articles", detail=error_message(e)) from e

    return ArticlesResponse(articles=to_articles(output.articles))


@router.get("/articles/{article_id}", response_model=ArticleResponse, response_model_exclude_unset=True)
async def get_article(
    article_id: str,
    container: Container = Depends(get_container),
):
    """
    文章详情
    上游 404 目前同样返回 500（错误信息中带 not found）
    """
    if not article_id.strip():
        raise ApiError(400, "Article ID is required")

    try:
        output = await container.get_article_by_id.execute(ArticleIdInput(id=article_id))
    except UsecaseError as e:
        logger.error(f"获取文章详情失败: id={article_id}, {e}")
        raise ApiError(500, "Failed to get article", detail=error_message(e)) from e

    return ArticleResponse(article=to_article(output.article))
