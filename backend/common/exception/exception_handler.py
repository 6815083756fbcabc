# -*- coding: UTF-8 -*-
"""
@Project : minio-bridge
@File    : exception_handler.py
@Author  : guhua@jiqid.com
@Date    : 2025/12/10 10:48
"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException
from starlette.responses import JSONResponse

from backend.common.exception.errors import BaseExceptionMixin
from backend.common.log import log
from backend.common.object_storage import ObjectStorageError
from backend.common.response.response_code import CustomResponseCode, StandardResponseCode
from backend.core.conf import settings


def _validation_message(exc: RequestValidationError) -> str:
    """取第一条校验错误作为提示"""
    errors = exc.errors()
    if not errors:
        return CustomResponseCode.HTTP_422.msg
    error = errors[0]
    field = '.'.join(str(loc) for loc in error.get('loc', ()) if loc not in ('body', 'query', 'form'))
    return f'{CustomResponseCode.HTTP_422.msg}: {field} {error.get("msg", "")}'.strip()


def register_exception(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """全局 HTTP 异常处理"""
        return JSONResponse(
            status_code=exc.status_code,
            content={'code': exc.status_code, 'msg': exc.detail, 'data': None},
            headers=getattr(exc, 'headers', None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """请求参数校验异常处理"""
        msg = _validation_message(exc)
        log.warning(f'[Request Invalid] path={request.url.path}, msg={msg}')
        data = {'errors': exc.errors()} if settings.ENVIRONMENT == 'dev' else None
        return JSONResponse(
            status_code=StandardResponseCode.HTTP_422,
            content={'code': StandardResponseCode.HTTP_422, 'msg': msg, 'data': data},
        )

    @app.exception_handler(BaseExceptionMixin)
    async def custom_exception_handler(request: Request, exc: BaseExceptionMixin):
        """业务异常处理"""
        if exc.code >= StandardResponseCode.HTTP_500:
            log.error(f'[Request Failed] path={request.url.path}, code={exc.code}, msg={exc.msg}')
        return JSONResponse(
            status_code=exc.code,
            content={'code': exc.code, 'msg': exc.msg, 'data': exc.data},
            background=exc.background,
        )

    @app.exception_handler(ObjectStorageError)
    async def storage_exception_handler(request: Request, exc: ObjectStorageError):
        """对象存储异常兜底处理"""
        log.error(f'[Storage Error] path={request.url.path}, error={exc!r}')
        return JSONResponse(
            status_code=StandardResponseCode.HTTP_503,
            content={'code': StandardResponseCode.HTTP_503, 'msg': str(exc), 'data': None},
        )

    @app.exception_handler(Exception)
    async def all_unknown_exception_handler(request: Request, exc: Exception):
        """全局未知异常处理"""
        log.exception(f'[Unknown Error] path={request.url.path}, error={exc!r}')
        return JSONResponse(
            status_code=StandardResponseCode.HTTP_500,
            content={'code': StandardResponseCode.HTTP_500, 'msg': CustomResponseCode.HTTP_500.msg, 'data': None},
        )
