# -*- coding: UTF-8 -*-
"""
@Project : minio-bridge
@File    : router.py
@Author  : guhua@jiqid.com
@Date    : 2025/12/11 14:42
"""
from fastapi import APIRouter

from backend.app.domain.api.v1.bridge import router as bridge_router

from backend.core.conf import settings

v1 = APIRouter(prefix=settings.FASTAPI_API_PATH)

v1.include_router(bridge_router)
