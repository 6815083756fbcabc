# -*- coding: UTF-8 -*-
"""
@Project : minio-bridge
@File    : storage.py
@Author  : guhua@jiqid.com
@Date    : 2025/12/11 11:00
"""
from dataclasses import dataclass, field
from typing import Annotated

from fastapi import Depends, Request

from backend.app.domain.service.file import FileService
from backend.app.domain.service.firmware import FirmwareService
from backend.app.domain.service.firmware_resolver import LatestFirmwareResolver
from backend.common.object_storage import ObjectStorage, ObjectStorageClient
from backend.core.conf import settings


@dataclass
class StorageContext:
    """进程级对象存储上下文，启动时创建，关闭时释放"""

    resource_storage: ObjectStorage
    firmware_storage: ObjectStorage
    file_service: FileService = field(init=False)
    firmware_service: FirmwareService = field(init=False)
    firmware_resolver: LatestFirmwareResolver = field(init=False)

    def __post_init__(self) -> None:
        self.file_service = FileService(self.resource_storage)
        self.firmware_service = FirmwareService(self.firmware_storage)
        self.firmware_resolver = LatestFirmwareResolver(self.firmware_storage)


def create_storage_context() -> StorageContext:
    return StorageContext(
        resource_storage=ObjectStorageClient.from_settings(settings.MINIO_BUCKET_NAME),
        firmware_storage=ObjectStorageClient.from_settings(settings.FIRMWARE_BUCKET_NAME),
    )


def get_storage_context(request: Request) -> StorageContext:
    return request.app.state.storage


def get_file_service(request: Request) -> FileService:
    return get_storage_context(request).file_service


def get_firmware_service(request: Request) -> FirmwareService:
    return get_storage_context(request).firmware_service


def get_firmware_resolver(request: Request) -> LatestFirmwareResolver:
    return get_storage_context(request).firmware_resolver


CurrentFileService = Annotated[FileService, Depends(get_file_service)]
CurrentFirmwareService = Annotated[FirmwareService, Depends(get_firmware_service)]
CurrentFirmwareResolver = Annotated[LatestFirmwareResolver, Depends(get_firmware_resolver)]
