# -*- coding: UTF-8 -*-
"""
@Project : minio-bridge
@File    : main.py
@Author  : guhua@jiqid.com
@Date    : 2025/12/11 15:10
"""
import uvicorn

from backend.core.conf import settings
from backend.core.registrar import register_app

app = register_app()


if __name__ == '__main__':
    uvicorn.run(
        'backend.main:app',
        host=settings.MINIO_BRIDGE_HOST,
        port=settings.MINIO_BRIDGE_PORT,
        log_config=None,
    )
