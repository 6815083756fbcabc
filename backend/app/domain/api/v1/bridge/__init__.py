# -*- coding: UTF-8 -*-
"""
@Project : minio-bridge
@File    : __init__.py
@Author  : guhua@jiqid.com
@Date    : 2025/12/11 14:40
"""
from fastapi import APIRouter

from backend.app.domain.api.v1.bridge.file import router as file_router
from backend.app.domain.api.v1.bridge.firmware import router as firmware_router

router = APIRouter()

router.include_router(file_router, tags=['资源文件'])
router.include_router(firmware_router, tags=['固件'])
