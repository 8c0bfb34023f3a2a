"""
配置文件 - 项目配置管理
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field
from typing import Optional


class GrpcTlsSettings(BaseModel):
    enabled: bool = False
    cert: Optional[str] = None
    key: Optional[str] = None
    ca: Optional[str] = None


class GrpcSettings(BaseModel):
    enabled: bool = True
    host: str = "0.0.0.0"
    port: int = 50051
    # This maps to GRPC option grpc.max_concurrent_streams
    max_concurrent_streams: int = 100
    # Blank names: False -> empty response, True -> INVALID_ARGUMENT
    strict_validation: bool = False
    tls: GrpcTlsSettings = Field(default_factory=GrpcTlsSettings)


class DatabaseSettings(BaseModel):
    # 默认内存库：每次启动都会重建 schema 并重新写入种子数据
    url: str = "sqlite+aiosqlite:///:memory:"
    echo: bool = False
    seed_on_startup: bool = True


class Settings(BaseSettings):
    """项目配置"""

    # 基础配置
    PROJECT_NAME: str = "Person gRPC Service"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # 分组配置：嵌套模型，环境变量形如 DATABASE__URL / GRPC__PORT
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    grpc: GrpcSettings = Field(default_factory=GrpcSettings)

    # pydantic-settings v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="allow",
        env_nested_delimiter="__",
    )


settings = Settings()
