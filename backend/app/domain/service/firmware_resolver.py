# -*- coding: UTF-8 -*-
"""
@Project : minio-bridge
@File    : firmware_resolver.py
@Author  : guhua@jiqid.com
@Date    : 2025/12/11 09:30
"""
import asyncio
import re

from typing import NamedTuple

from backend.app.domain.schema.firmware import GetLatestFirmwaresDetail, LatestFirmware
from backend.common.exception import errors
from backend.common.log import log
from backend.common.object_storage import ObjectStorage
from backend.core.conf import settings

FIRMWARE_IMAGE_EXT = '.img'


class FirmwareImage(NamedTuple):
    """
    按命名规则解析出的固件镜像

    示例文件名：NXT2204_[Std]_V1.0.5_20211011.img
    """

    key: str
    file_name: str
    tag: str
    version: tuple[int, int, int]
    date: str

    @property
    def version_str(self) -> str:
        return '.'.join(str(part) for part in self.version)

    @property
    def rank(self) -> tuple[tuple[int, int, int], str]:
        # 先比较版本号，版本号相同再比较 YYYYMMDD 日期
        return self.version, self.date

    @property
    def newest_version(self) -> str:
        return f'{self.tag}_V{self.version_str}_{self.date}'


def firmware_prefix(product_name: str) -> str:
    return f'{settings.FIRMWARE_PREFIX}/{product_name}/'


def firmware_image_pattern(product_name: str) -> re.Pattern[str]:
    return re.compile(
        rf'^{re.escape(product_name)}_([^_]+)_V(\d+)\.(\d+)\.(\d+)_(\d{{8}}){re.escape(FIRMWARE_IMAGE_EXT)}$'
    )


def parse_firmware_image(pattern: re.Pattern[str], key: str, file_name: str) -> FirmwareImage | None:
    """文件名不符合命名规则时返回 None"""
    matches = pattern.match(file_name)
    if matches is None:
        return None
    tag, major, minor, patch, date = matches.groups()
    return FirmwareImage(key=key, file_name=file_name, tag=tag, version=(int(major), int(minor), int(patch)), date=date)


async def list_firmware_images(storage: ObjectStorage, product_name: str) -> list[FirmwareImage]:
    """列出产品目录（不递归）下所有符合命名规则的镜像"""
    prefix = firmware_prefix(product_name)
    pattern = firmware_image_pattern(product_name)

    images = []
    for obj in await storage.list_objects(prefix, recursive=False):
        if obj.is_dir or not obj.key.endswith(FIRMWARE_IMAGE_EXT):
            continue
        file_name = obj.key.removeprefix(prefix)
        image = parse_firmware_image(pattern, obj.key, file_name)
        if image is None:
            log.info(f'[Firmware] 跳过不符合格式的文件名: {file_name}')
            continue
        images.append(image)
    return images


class LatestFirmwareResolver:
    """根据镜像文件名计算各产品的最新固件，不依赖固件清单"""

    def __init__(self, storage: ObjectStorage):
        self.storage = storage

    async def resolve_one(self, product_name: str) -> LatestFirmware:
        images = await list_firmware_images(self.storage, product_name)
        if not images:
            raise errors.NotFoundError(msg=f'未找到产品 {product_name} 的任何 .img 文件')

        latest = max(images, key=lambda image: image.rank)
        return LatestFirmware(product_name=product_name, newest_version=latest.newest_version)

    async def resolve_many(self, product_name_list: list[str]) -> GetLatestFirmwaresDetail:
        """
        并发查询多个产品的最新固件

        单个产品失败只记录到 errors，不影响其他产品；latest_firmwares 按完成顺序排列
        """
        result = GetLatestFirmwaresDetail()
        lock = asyncio.Lock()

        async def _resolve(product_name: str) -> None:
            try:
                latest = await self.resolve_one(product_name)
            except Exception as e:
                msg = e.msg if isinstance(e, errors.BaseExceptionMixin) else str(e)
                log.warning(f'[Firmware] 查询最新固件失败 product_name={product_name}, error={msg}')
                async with lock:
                    result.errors[product_name] = msg
                return
            async with lock:
                result.latest_firmwares.append(latest)

        await asyncio.gather(*(_resolve(name) for name in dict.fromkeys(product_name_list)))
        return result
