# -*- coding: UTF-8 -*-
"""
@Project : minio-bridge
@File    : response_schema.py
@Author  : guhua@jiqid.com
@Date    : 2025/12/10 10:33
"""
from typing import Any

from pydantic import BaseModel, Field

from backend.common.response.response_code import CustomResponseCode


class ResponseModel(BaseModel):
    """
    通用返回模型（不校验 data 类型）

    E.g. ::

        @router.post('/test')
        def test() -> ResponseModel:
            return ResponseModel(data={'test': 'test'})
    """

    code: int = Field(CustomResponseCode.HTTP_200.code, description='返回状态码')
    msg: str = Field(CustomResponseCode.HTTP_200.msg, description='返回信息')
    data: Any | None = Field(None, description='返回数据')


class ResponseBase:
    """统一返回方法"""

    @staticmethod
    def __response(*, res: CustomResponseCode, msg: str | None = None, data: Any | None = None) -> ResponseModel:
        return ResponseModel(code=res.code, msg=msg or res.msg, data=data)

    def success(
            self,
            *,
            res: CustomResponseCode = CustomResponseCode.HTTP_200,
            msg: str | None = None,
            data: Any | None = None,
    ) -> ResponseModel:
        return self.__response(res=res, msg=msg, data=data)


response_base: ResponseBase = ResponseBase()
