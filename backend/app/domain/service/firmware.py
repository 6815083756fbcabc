# -*- coding: UTF-8 -*-
"""
@Project : minio-bridge
@File    : firmware.py
@Author  : guhua@jiqid.com
@Date    : 2025/12/10 14:30
"""
import asyncio
import os

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import UploadFile

from backend.app.domain.crud.crud_manifest import CRUDFirmwareManifest
from backend.app.domain.schema.firmware import FirmwareInfo
from backend.app.domain.service.firmware_resolver import firmware_prefix, list_firmware_images
from backend.common.exception import errors
from backend.common.log import log
from backend.common.object_storage import BucketNotFoundError, ObjectNotFoundError, ObjectStorage, ObjectStorageError
from backend.common.response.response_code import CustomErrorCode
from backend.core.conf import settings
from backend.utils.file_ops import file_verify, upload_content_type
from backend.utils.timezone import timezone
from backend.utils.version import parse_version


class FirmwareService:
    """
    固件服务类

    固件清单是存储在对象存储中的 JSON 文件，读-改-写之间没有条件写保护；
    同一产品的写操作通过进程内锁串行化，多实例部署时仍可能互相覆盖
    """

    def __init__(self, storage: ObjectStorage):
        self.storage = storage
        self.manifest = CRUDFirmwareManifest(storage)
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_refs: dict[str, int] = {}

    def firmware_url(self, product_name: str, version: str) -> str:
        return (
            f'{settings.FIRMWARE_URL_SCHEME}://{self.storage.bucket}/'
            f'{firmware_prefix(product_name)}{product_name}_{version}.img'
        )

    @asynccontextmanager
    async def _product_lock(self, product_name: str) -> AsyncIterator[None]:
        """ 按产品串行化清单的读-改-写，没有持有者和等待者时释放锁 """
        lock = self._locks.setdefault(product_name, asyncio.Lock())
        self._lock_refs[product_name] = self._lock_refs.get(product_name, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_refs[product_name] -= 1
            if not self._lock_refs[product_name]:
                del self._lock_refs[product_name]
                del self._locks[product_name]

    @staticmethod
    def _next_id(firmware_list: list[FirmwareInfo], now_ts: int) -> str:
        """ 条目 id 取当前秒级时间戳，与已有 id 冲突时取最大 id + 1 """
        existing = {int(firmware.id) for firmware in firmware_list if firmware.id.isdigit()}
        if now_ts in existing:
            return str(max(existing) + 1)
        return str(now_ts)

    async def _check_bucket(self) -> None:
        try:
            exists = await self.storage.bucket_exists()
        except ObjectStorageError as e:
            raise errors.StorageUnavailableError(msg=f'检查桶是否存在失败: {e}')
        if not exists:
            raise errors.StorageUnavailableError(msg=f'桶 {self.storage.bucket} 不存在')

    async def append(self, *, product_name: str, version: str, upload_user: str = '') -> FirmwareInfo:
        """ 追加固件清单条目，相同 product_name + version 已存在时不做修改 """
        try:
            parse_version(version)
        except ValueError as e:
            raise errors.RequestError(msg=str(e))
        await self._check_bucket()

        async with self._product_lock(product_name):
            firmware_list = await self.manifest.get(product_name)
            created = firmware_list is None
            firmware_list = firmware_list or []

            for firmware in firmware_list:
                if firmware.product_name == product_name and firmware.version == version:
                    log.info(f'[Firmware] 相同的 product_name={product_name} 和 version={version} 已存在，未执行任何操作')
                    return firmware

            now = timezone.now()
            new_info = FirmwareInfo(
                id=self._next_id(firmware_list, int(now.timestamp())),
                product_name=product_name,
                version=version,
                upload_user=upload_user,
                upload_time=timezone.to_str(now),
                url=self.firmware_url(product_name, version),
            )
            firmware_list.append(new_info)
            await self.manifest.save(product_name, firmware_list)
            action = '已创建' if created else '已更新'
            log.info(f'[Firmware] {self.manifest.manifest_key(product_name)} {action}并添加了新的条目')
        return new_info

    async def delete(self, *, pk: str, product_name: str) -> FirmwareInfo | None:
        """ 删除固件清单条目及对应的固件镜像，条目不存在时视为成功 """
        await self._check_bucket()

        async with self._product_lock(product_name):
            firmware_list = await self.manifest.get(product_name)
            if firmware_list is None:
                log.info(f'[Firmware] {self.manifest.manifest_key(product_name)} 不存在，无需删除')
                return None

            deleted = None
            updated_list = []
            for firmware in firmware_list:
                if deleted is None and firmware.id == pk and firmware.product_name == product_name:
                    deleted = firmware
                    continue
                updated_list.append(firmware)

            if deleted is None:
                log.info(f'[Firmware] 未找到 id={pk} 且 product_name={product_name} 的固件条目')
                return None

            if updated_list:
                await self.manifest.save(product_name, updated_list)
                log.info(f'[Firmware] {self.manifest.manifest_key(product_name)} 已更新并删除了指定的条目')
            else:
                await self.manifest.delete(product_name)
                log.info(f'[Firmware] {self.manifest.manifest_key(product_name)} 已删除，因为其中不再包含任何条目')

            await self._remove_images(deleted)
        return deleted

    async def _remove_images(self, firmware: FirmwareInfo) -> None:
        """ 删除条目对应版本的镜像：旧命名 <product>_<version>.img 以及同版本的规范命名镜像 """
        prefix = firmware_prefix(firmware.product_name)
        keys = {f'{prefix}{firmware.product_name}_{firmware.version}.img'}
        keys.update(
            image.key
            for image in await list_firmware_images(self.storage, firmware.product_name)
            if image.version_str == firmware.version
        )

        for key in sorted(keys):
            try:
                await self.storage.stat_object(key)
            except ObjectNotFoundError:
                log.info(f'[Firmware] 对应的固件文件 {key} 不存在，已删除 JSON 条目')
                continue
            await self.storage.remove_object(key)
            log.info(f'[Firmware] 已删除固件文件: {key}')

    async def get_list(self, *, product_name: str) -> list[FirmwareInfo]:
        """ 获取产品固件清单，清单不存在时返回空列表 """
        return await self.manifest.get(product_name) or []

    async def upload(
            self,
            *,
            files: list[UploadFile],
            product_name: str,
            version: str,
            upload_user: str = '',
    ) -> list[str]:
        """ 上传固件镜像并登记到固件清单，返回实际上传的对象路径 """
        for file in files:
            file_verify(
                file,
                allowed_extensions=settings.FIRMWARE_ALLOWED_EXTENSIONS,
                max_size=settings.FIRMWARE_MAX_SIZE,
                error=CustomErrorCode.INVALID_FIRMWARE_TYPE,
            )
        await self._check_bucket()

        uploaded = []
        prefix = firmware_prefix(product_name)
        for file in files:
            key = f'{prefix}{os.path.basename(file.filename)}'
            if await self.storage.object_exists(key):
                log.info(f'[Firmware] File {key} already exists, skipping upload')
            else:
                try:
                    await self.storage.put_object(key, file.file, content_type=upload_content_type(file))
                except BucketNotFoundError as e:
                    raise errors.StorageUnavailableError(msg=str(e))
                except ObjectStorageError as e:
                    raise errors.UploadError(msg=f'Error uploading file {file.filename}: {e}')
                uploaded.append(key)

            await self.append(product_name=product_name, version=version, upload_user=upload_user)
        return uploaded
