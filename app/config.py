"""配置管理模块"""
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.exceptions import ConfigError


# 启动时必须提供的环境变量（按校验顺序）
REQUIRED_SETTINGS = (
    ("microcms_api_key", "MICROCMS_API_KEY"),
    ("microcms_service_id", "MICROCMS_SERVICE_ID"),
    ("nerine_api_key", "NERINE_API_KEY"),
)


class Settings(BaseSettings):
    """应用配置"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # 应用配置
    app_name: str = "Nerine API"
    app_version: str = "1.0.0"

    # 服务器配置
    host: str = "0.0.0.0"
    port: int = 8080

    # 入站鉴权：请求头 X-API-Key 必须与此值一致
    nerine_api_key: str = ""

    # microCMS 配置
    microcms_api_key: str = ""
    microcms_service_id: str = ""
    microcms_base_url: str = "https://{service_id}.microcms.io/api/v1"
    microcms_timeout: int = 10

    # Zenn 配置
    zenn_base_url: str = "https://zenn.dev/api"
    zenn_username: str = "kozennoki"
    zenn_timeout: int = 10

    # 日志配置（log_file 为空时不写文件）
    log_level: str = "INFO"
    log_file: str = "logs/app.log"

    def validate_required(self) -> "Settings":
        """
        校验必填项

        Raises:
            ConfigError: 任一必填项为空
        """
        for field, env_name in REQUIRED_SETTINGS:
            if not getattr(self, field).strip():
                raise ConfigError(f"{env_name} is required")
        return self

    @property
    def microcms_endpoint(self) -> str:
        """microCMS API 基础 URL（已代入 service id）"""
        return self.microcms_base_url.format(service_id=self.microcms_service_id)


def load_settings(**overrides) -> Settings:
    """
    从环境变量 / .env 加载并校验配置，进程启动时调用一次

    Args:
        overrides: 覆盖项（测试或命令行传入）

    Returns:
        校验通过的配置

    Raises:
        ConfigError: 必填项缺失
    """
    return Settings(**overrides).validate_required()
