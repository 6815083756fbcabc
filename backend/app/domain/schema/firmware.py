# -*- coding: UTF-8 -*-
"""
@Project : minio-bridge
@File    : firmware.py
@Author  : guhua@jiqid.com
@Date    : 2025/12/10 11:40
"""
from pydantic import Field

from backend.common.schema import SchemaBase


class FirmwareInfo(SchemaBase):
    """固件清单条目"""

    id: str = Field('', description='固件 ID（上传时间戳）')
    product_name: str = Field(description='产品名称')
    version: str = Field(description='固件版本')
    upload_user: str = Field('', description='上传用户')
    upload_time: str = Field('', description='上传时间')
    url: str = Field('', description='固件地址')


class DeleteFirmwareParam(SchemaBase):
    """删除固件参数"""

    id: str = Field(description='固件 ID')
    product_name: str = Field(description='产品名称')


class GetFirmwareListParam(SchemaBase):
    """查询固件列表参数"""

    product_name: str = Field(description='产品名称')


class GetLatestFirmwaresParam(SchemaBase):
    """查询最新固件参数"""

    product_name_list: list[str] = Field(default_factory=list, description='产品名称列表')


class LatestFirmware(SchemaBase):
    """产品最新固件"""

    product_name: str = Field(description='产品名称')
    newest_version: str = Field(description='最新版本，例如 [Std]_V1.0.5_20211011')


class GetLatestFirmwaresDetail(SchemaBase):
    """最新固件查询结果"""

    latest_firmwares: list[LatestFirmware] = Field(default_factory=list, description='查询成功的产品')
    errors: dict[str, str] = Field(default_factory=dict, description='查询失败的产品及原因')
