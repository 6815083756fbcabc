# -*- coding: UTF-8 -*-
"""
@Project : minio-bridge
@File    : firmware.py
@Author  : guhua@jiqid.com
@Date    : 2025/12/11 14:00
"""
from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile

from backend.app.domain.schema.firmware import (
    DeleteFirmwareParam,
    FirmwareInfo,
    GetFirmwareListParam,
    GetLatestFirmwaresDetail,
    GetLatestFirmwaresParam,
)
from backend.common.exception import errors
from backend.common.response.response_code import CustomErrorCode
from backend.common.response.response_schema import ResponseModel, response_base
from backend.core.storage import CurrentFirmwareResolver, CurrentFirmwareService
from backend.utils.version import VERSION_PATTERN

router = APIRouter()


# =============================
# 上传固件
# =============================
@router.post('/uploadFirmware', summary='上传固件')
async def upload_firmware(
        firmware_service: CurrentFirmwareService,
        files: Annotated[list[UploadFile], File(description='固件镜像（.img）')],
        product_name: Annotated[str, Form(min_length=1, description='产品名称')],
        version: Annotated[str, Form(pattern=VERSION_PATTERN, description='固件版本，例如 1.0.5')],
        upload_user: Annotated[str, Form(description='上传用户')] = '',
) -> ResponseModel:
    uploaded = await firmware_service.upload(
        files=files,
        product_name=product_name,
        version=version,
        upload_user=upload_user,
    )
    return response_base.success(msg='Files uploaded successfully', data=uploaded)


# =============================
# 删除固件
# =============================
@router.delete('/deleteFirmware', summary='删除固件')
async def delete_firmware(firmware_service: CurrentFirmwareService, obj: DeleteFirmwareParam) -> ResponseModel:
    await firmware_service.delete(pk=obj.id, product_name=obj.product_name)
    return response_base.success()


# =============================
# 获取固件列表
# =============================
@router.post('/getFirmwareList', summary='获取产品固件列表')
async def get_firmware_list(
        firmware_service: CurrentFirmwareService, obj: GetFirmwareListParam
) -> list[FirmwareInfo]:
    return await firmware_service.get_list(product_name=obj.product_name)


# =============================
# 获取多个产品的最新固件
# =============================
@router.post('/getLatestFirmwares', summary='获取多个产品的最新固件版本')
async def get_latest_firmwares(
        firmware_resolver: CurrentFirmwareResolver, obj: GetLatestFirmwaresParam
) -> GetLatestFirmwaresDetail:
    if not obj.product_name_list:
        raise errors.CustomError(error=CustomErrorCode.PRODUCT_NAME_LIST_EMPTY)
    return await firmware_resolver.resolve_many(obj.product_name_list)
