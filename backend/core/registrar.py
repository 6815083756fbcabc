# -*- coding: UTF-8 -*-
"""
@Project : minio-bridge
@File    : registrar.py
@Author  : guhua@jiqid.com
@Date    : 2025/12/11 15:00
"""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from backend.app.router import router
from backend.common.exception.exception_handler import register_exception
from backend.common.log import log, set_custom_logfile, setup_logging
from backend.core.conf import settings
from backend.core.storage import create_storage_context


@asynccontextmanager
async def register_init(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    启动初始化

    :param app: FastAPI 应用实例
    :return:
    """
    storage = create_storage_context()
    # 资源桶不存在时自动创建，固件桶仅在使用时检查
    await storage.resource_storage.ensure_bucket()
    app.state.storage = storage
    log.info(f'[Startup] storage ready: endpoint={settings.MINIO_ENDPOINT}')

    yield

    await storage.resource_storage.close()
    await storage.firmware_storage.close()
    log.info('[Shutdown] storage clients closed')


def register_app() -> FastAPI:
    """注册 FastAPI 应用"""
    app = FastAPI(
        title=settings.FASTAPI_TITLE,
        version=settings.FASTAPI_VERSION,
        description=settings.FASTAPI_DESCRIPTION,
        docs_url=settings.FASTAPI_DOCS_URL,
        openapi_url=settings.FASTAPI_OPENAPI_URL,
        lifespan=register_init,
    )

    register_logger()
    register_middleware(app)
    register_router(app)
    register_exception(app)

    return app


def register_logger() -> None:
    """注册日志"""
    setup_logging()
    set_custom_logfile()


def register_middleware(app: FastAPI) -> None:
    """注册中间件（执行顺序从下往上）"""
    if settings.MIDDLEWARE_GZIP:
        app.add_middleware(GZipMiddleware, minimum_size=settings.GZIP_MINIMUM_SIZE)

    if settings.MIDDLEWARE_CORS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ALLOWED_ORIGINS,
            allow_credentials=False,
            allow_methods=settings.CORS_ALLOWED_METHODS,
            allow_headers=settings.CORS_ALLOWED_HEADERS,
            max_age=settings.CORS_MAX_AGE,
        )


def register_router(app: FastAPI) -> None:
    """注册路由"""
    app.include_router(router)
