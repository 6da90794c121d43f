"""HTTP客户端封装"""
from typing import Dict, Any, Optional

import httpx

from app.exceptions import SourceError
from app.utils.logger import logger


class HttpClient:
    """异步HTTP客户端（单次请求，不重试）"""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        初始化HTTP客户端

        Args:
            base_url: API基础URL
            timeout: 请求超时时间（秒）
            headers: 每个请求都携带的请求头
            transport: 自定义传输层（测试时注入 httpx.MockTransport）
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers=headers,
            transport=transport,
            follow_redirects=True,
        )

    async def close(self):
        """关闭客户端"""
        await self.client.aclose()

    async def get(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        发送GET请求

        Args:
            endpoint: API端点
            params: 查询参数（值为 None 的参数不发送）

        Returns:
            JSON响应数据

        Raises:
            SourceError: 网络错误、非 2xx 状态或响应体不是 JSON
        """
        url = f"{self.base_url}{endpoint}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        logger.debug(f"GET请求: {url}, 参数: {params}")
        try:
            response = await self.client.get(endpoint, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP状态错误: {e.response.status_code}, 响应: {e.response.text}")
            raise SourceError(
                f"{url} returned status {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            logger.error(f"请求错误: {url}, {e!r}")
            raise SourceError(f"request to {url} failed: {e!r}") from e

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"响应解析失败: {url}, {e}")
            raise SourceError(f"failed to decode response from {url}: {e}") from e
