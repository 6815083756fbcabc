# -*- coding: UTF-8 -*-
"""
@Project : minio-bridge
@File    : response_code.py
@Author  : guhua@jiqid.com
@Date    : 2025/12/10 10:31
"""
from enum import Enum


class CustomCodeBase(Enum):
    """自定义状态码基类"""

    @property
    def code(self) -> int:
        return self.value[0]

    @property
    def msg(self) -> str:
        return self.value[1]


class CustomResponseCode(CustomCodeBase):
    """自定义响应状态码"""

    HTTP_200 = (200, '请求成功')
    HTTP_422 = (422, '请求参数非法')
    HTTP_500 = (500, '服务器内部错误')


class CustomErrorCode(CustomCodeBase):
    """自定义错误状态码"""

    INVALID_FIRMWARE_TYPE = (400, 'Invalid file type. Only img files are allowed')
    INVALID_FILE_TYPE = (400, 'Invalid file type. Only mp3 and wav are allowed')
    PRODUCT_NAME_LIST_EMPTY = (400, 'ProductNameList is empty')
    KEY_REQUIRED = (400, 'Key is required')


class StandardResponseCode:
    """标准 HTTP 状态码"""

    HTTP_200 = 200
    HTTP_400 = 400
    HTTP_404 = 404
    HTTP_422 = 422
    HTTP_500 = 500
    HTTP_503 = 503
