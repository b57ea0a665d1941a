# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """全局配置，从 .env / 环境变量读取"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # 运行环境
    ENV: str = Field("dev", description="运行环境: dev / prod")

    DEBUG: bool = Field(
        False,
        description="诊断模式：错误处理链路的诊断日志只在开启时输出",
        validation_alias=AliasChoices("DEBUG", "debug"),
    )
    LOG_LEVEL: str = Field(
        "INFO",
        description="日志级别: DEBUG / INFO / WARNING / ERROR",
        validation_alias=AliasChoices("LOG_LEVEL", "log_level"),
    )

    # HTTP
    HTTP_ADDR: str = Field(
        "127.0.0.1:8090",
        description="监听地址 host:port",
        validation_alias=AliasChoices("HTTP_ADDR", "http_addr"),
    )

    # 静态资源
    PUBLIC_DIR: Optional[str] = Field(
        "./space_public",
        description="静态资源根目录（为空时不挂载）",
        validation_alias=AliasChoices("PUBLIC_DIR", "public_dir"),
    )
    INDEX_FALLBACK: bool = Field(
        True,
        description="静态资源不存在时回退到 index.html（SPA）",
        validation_alias=AliasChoices("INDEX_FALLBACK", "index_fallback"),
    )

    # Auth
    JWT_SECRET_KEY: str = Field(
        "dev-secret-change-me",
        description="JWT 签名密钥（生产务必更换）",
        validation_alias=AliasChoices("JWT_SECRET_KEY", "jwt_secret_key"),
    )
    JWT_ALGORITHM: str = Field(
        "HS256",
        description="JWT 签名算法",
        validation_alias=AliasChoices("JWT_ALGORITHM", "jwt_algorithm"),
    )


settings = Settings()
