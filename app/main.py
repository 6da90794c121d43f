"""FastAPI应用入口"""
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings, load_settings
from app.container import Container
from app.dependencies.auth import verify_api_key
from app.exceptions import register_exception_handlers
from app.models.common import HealthResponse
from app.routers import articles, categories, zenn
from app.utils.logger import logger, setup_logger


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[Container] = None,
) -> FastAPI:
    """
    创建应用

    Args:
        settings: 配置，不传则从环境变量加载（必填项缺失时抛 ConfigError）
        container: 依赖容器，不传则按配置创建

    Returns:
        FastAPI 应用
    """
    if settings is None:
        settings = load_settings()
    setup_logger(settings.log_level, settings.log_file)
    if container is None:
        container = Container.from_settings(settings)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="microCMS / Zenn 博客文章聚合接口",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.container = container

    # 配置CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # 注册路由（全部需要 X-API-Key）
    auth = [Depends(verify_api_key)]
    app.include_router(articles.router, prefix="/api/v1", tags=["文章"], dependencies=auth)
    app.include_router(categories.router, prefix="/api/v1", tags=["分类"], dependencies=auth)
    app.include_router(zenn.router, prefix="/api/v1", tags=["Zenn"], dependencies=auth)

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """健康检查（无需鉴权）"""
        return HealthResponse(status="ok")

    @app.on_event("startup")
    async def startup_event():
        """应用启动事件"""
        logger.info(f"{settings.app_name} v{settings.app_version} 启动成功")
        logger.info(f"API文档地址: http://{settings.host}:{settings.port}/docs")

    @app.on_event("shutdown")
    async def shutdown_event():
        """应用关闭事件"""
        logger.info(f"{settings.app_name} 正在关闭...")
        await app.state.container.close()

    return app


def main() -> None:
    """命令行入口：加载配置并启动 uvicorn"""
    import uvicorn

    settings = load_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
