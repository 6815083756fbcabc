# -*- coding: UTF-8 -*-
"""
@Project : minio-bridge
@File    : conf.py
@Author  : guhua@jiqid.com
@Date    : 2025/12/10 10:02
"""
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_PATH = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """全局配置"""

    model_config = SettingsConfigDict(
        env_file=f'{BASE_PATH}/.env',
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=True,
    )

    # 环境
    ENVIRONMENT: Literal['dev', 'prod'] = 'dev'

    # FastAPI
    FASTAPI_API_PATH: str = ''
    FASTAPI_TITLE: str = 'MinIO Bridge'
    FASTAPI_VERSION: str = '1.0.0'
    FASTAPI_DESCRIPTION: str = '资源文件与固件存储桥接服务'
    FASTAPI_DOCS_URL: str | None = '/docs'
    FASTAPI_OPENAPI_URL: str | None = '/openapi'

    # Uvicorn
    MINIO_BRIDGE_HOST: str = '0.0.0.0'
    MINIO_BRIDGE_PORT: int = 9102

    # MinIO
    MINIO_ENDPOINT: str = 'minio:9100'
    MINIO_ACCESS_KEY: str = 'admin'
    MINIO_SECRET_KEY: str = '12345678'
    MINIO_SECURE: bool = False
    MINIO_REGION: str = 'us-east-1'
    MINIO_BUCKET_NAME: str = 'nxt-tenant'
    MINIO_CONNECT_TIMEOUT: float = 5.0  # s
    MINIO_READ_TIMEOUT: float = 60.0  # s
    MINIO_MAX_ATTEMPTS: int = 3

    # 固件
    FIRMWARE_BUCKET_NAME: str = 'nxt-device'
    FIRMWARE_PREFIX: str = 'firmware'
    FIRMWARE_MANIFEST_NAME: str = 'firmwareInfo.json'
    FIRMWARE_URL_SCHEME: str = 'oss'
    FIRMWARE_ALLOWED_EXTENSIONS: list[str] = ['.img']
    FIRMWARE_MAX_SIZE: int = 100 * 1024 * 1024  # 100MB

    # 资源文件
    UPLOAD_DEFAULT_PATH: str = 'uploads/'
    UPLOAD_ALLOWED_EXTENSIONS: list[str] = ['.mp3', '.wav']
    UPLOAD_MAX_SIZE: int = 50 * 1024 * 1024  # 50MB
    RESOURCE_DIR_NAME: str = 'resource'
    STREAM_CHUNK_SIZE: int = 64 * 1024
    PREVIEW_INLINE_TYPES: list[str] = [
        'text/plain',
        'text/html',
        'text/css',
        'application/javascript',
        'image/jpeg',
        'image/png',
        'image/gif',
        'application/pdf',
        'audio/mpeg',
        'audio/wav',
        'video/mp4',
    ]

    # 时间
    DATETIME_TIMEZONE: str = 'Asia/Shanghai'
    DATETIME_TIMEZONE_FALLBACK: str = 'UTC'
    DATETIME_FORMAT: str = '%Y-%m-%d %H:%M:%S'

    # 中间件
    MIDDLEWARE_CORS: bool = True
    CORS_ALLOWED_ORIGINS: list[str] = ['*']
    CORS_ALLOWED_METHODS: list[str] = ['GET', 'POST', 'OPTIONS', 'PUT', 'DELETE']
    CORS_ALLOWED_HEADERS: list[str] = ['Content-Type', 'Authorization']
    CORS_MAX_AGE: int = 86400
    MIDDLEWARE_GZIP: bool = True
    GZIP_MINIMUM_SIZE: int = 1000

    # 日志
    LOG_STD_LEVEL: str = 'INFO'
    LOG_FILE_LEVEL: str = 'INFO'
    LOG_DIR: str | None = None
    LOG_ACCESS_FILENAME: str = 'minio_bridge_access.log'
    LOG_ERROR_FILENAME: str = 'minio_bridge_error.log'
    LOG_FORMAT: str = (
        '<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | '
        '<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>'
    )


@lru_cache
def get_settings() -> Settings:
    """获取全局配置"""
    return Settings()


settings = get_settings()
