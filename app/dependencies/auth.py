"""
鉴权与依赖注入
除 /health 外的接口都要求请求头 X-API-Key 与配置的 NERINE_API_KEY 一致
"""
import secrets
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request, status

from app.config import Settings
from app.container import Container

API_KEY_HEADER = "X-API-Key"


def get_settings(request: Request) -> Settings:
    """当前应用的配置"""
    return request.app.state.settings


def get_container(request: Request) -> Container:
    """当前应用的依赖容器"""
    return request.app.state.container


async def verify_api_key(
    x_api_key: Optional[str] = Header(default=None, alias=API_KEY_HEADER),
    settings: Settings = Depends(get_settings),
) -> None:
    """校验 X-API-Key，缺失或不一致返回 401"""
    if not x_api_key:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="missing API key")
    if not secrets.compare_digest(x_api_key.encode(), settings.nerine_api_key.encode()):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid API key")
