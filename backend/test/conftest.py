# -*- coding: UTF-8 -*-
"""
@Project : minio-bridge
@File    : conftest.py
@Author  : guhua@jiqid.com
@Date    : 2025/12/12 10:00
"""
import asyncio
import io

from datetime import datetime, timezone
from typing import IO

import pytest

from fastapi.testclient import TestClient

from backend.app.domain.service.file import FileService
from backend.app.domain.service.firmware import FirmwareService
from backend.app.domain.service.firmware_resolver import LatestFirmwareResolver
from backend.common.object_storage import (
    BucketNotFoundError,
    ObjectInfo,
    ObjectNotFoundError,
    ObjectStorageError,
    StorageObject,
)
from backend.core.registrar import register_app
from backend.core.storage import StorageContext


class InMemoryObjectStorage:
    """内存对象存储，行为与 ObjectStorageClient 保持一致"""

    def __init__(self, bucket: str = 'nxt-device'):
        self.bucket = bucket
        self.bucket_present = True
        self.objects: dict[str, tuple[bytes, str, datetime]] = {}
        self.read_delay = 0.0
        self.failing_prefixes: set[str] = set()
        self.failing_removals: set[str] = set()
        self.put_count = 0

    def add(self, key: str, data: bytes = b'', content_type: str = 'application/octet-stream') -> None:
        self.objects[key] = (data, content_type, datetime(2024, 10, 11, 8, 30, tzinfo=timezone.utc))

    def _require_bucket(self) -> None:
        if not self.bucket_present:
            raise BucketNotFoundError(self.bucket)

    async def bucket_exists(self) -> bool:
        return self.bucket_present

    async def stat_object(self, key: str) -> ObjectInfo:
        self._require_bucket()
        if key not in self.objects:
            raise ObjectNotFoundError(self.bucket, key)
        data, content_type, last_modified = self.objects[key]
        return ObjectInfo(key=key, size=len(data), last_modified=last_modified, content_type=content_type)

    async def object_exists(self, key: str) -> bool:
        try:
            await self.stat_object(key)
        except ObjectNotFoundError:
            return False
        return True

    async def open_object(self, key: str) -> StorageObject:
        info = await self.stat_object(key)
        return StorageObject(info, io.BytesIO(self.objects[key][0]))

    async def get_object(self, key: str) -> bytes:
        await self.stat_object(key)
        data = self.objects[key][0]
        if self.read_delay:
            await asyncio.sleep(self.read_delay)
        return data

    async def put_object(
            self, key: str, data: bytes | IO[bytes], content_type: str = 'application/octet-stream'
    ) -> None:
        self._require_bucket()
        if not isinstance(data, bytes):
            data = data.read()
        self.add(key, data, content_type)
        self.put_count += 1

    async def remove_object(self, key: str) -> None:
        self._require_bucket()
        if key in self.failing_removals:
            raise ObjectStorageError(f'remove failed: {key}')
        self.objects.pop(key, None)

    async def list_objects(self, prefix: str = '', recursive: bool = False) -> list[ObjectInfo]:
        self._require_bucket()
        if any(prefix.startswith(p) for p in self.failing_prefixes):
            raise ObjectStorageError(f'list failed: {prefix}')

        dirs: dict[str, ObjectInfo] = {}
        files: list[ObjectInfo] = []
        for key in sorted(self.objects):
            if not key.startswith(prefix):
                continue
            rest = key[len(prefix):]
            head, sep, _ = rest.partition('/')
            if not recursive and sep:
                dir_key = f'{prefix}{head}/'
                dirs.setdefault(dir_key, ObjectInfo(key=dir_key, is_dir=True))
                continue
            data, content_type, last_modified = self.objects[key]
            files.append(ObjectInfo(
                key=key, size=len(data), last_modified=last_modified, is_dir=key.endswith('/')
            ))
        return list(dirs.values()) + files


@pytest.fixture
def firmware_storage() -> InMemoryObjectStorage:
    return InMemoryObjectStorage('nxt-device')


@pytest.fixture
def resource_storage() -> InMemoryObjectStorage:
    return InMemoryObjectStorage('nxt-tenant')


@pytest.fixture
def firmware_service(firmware_storage) -> FirmwareService:
    return FirmwareService(firmware_storage)


@pytest.fixture
def firmware_resolver(firmware_storage) -> LatestFirmwareResolver:
    return LatestFirmwareResolver(firmware_storage)


@pytest.fixture
def file_service(resource_storage) -> FileService:
    return FileService(resource_storage)


@pytest.fixture
def client(resource_storage, firmware_storage) -> TestClient:
    app = register_app()
    app.state.storage = StorageContext(resource_storage=resource_storage, firmware_storage=firmware_storage)
    # 不进入 lifespan，避免连接真实的对象存储
    return TestClient(app)
