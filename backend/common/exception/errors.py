# -*- coding: UTF-8 -*-
"""
@Project : minio-bridge
@File    : errors.py
@Author  : guhua@jiqid.com
@Date    : 2025/12/10 10:35
"""
from typing import Any

from starlette.background import BackgroundTask

from backend.common.response.response_code import CustomErrorCode, StandardResponseCode


class BaseExceptionMixin(Exception):
    """业务异常基类"""

    code: int

    def __init__(self, *, msg: str | None = None, data: Any = None, background: BackgroundTask | None = None):
        self.msg = msg
        self.data = data
        # The original background task: https://www.starlette.io/background/
        self.background = background
        super().__init__(msg)


class CustomError(BaseExceptionMixin):
    """自定义异常"""

    def __init__(self, *, error: CustomErrorCode, data: Any = None, background: BackgroundTask | None = None):
        self.code = error.code
        super().__init__(msg=error.msg, data=data, background=background)


class RequestError(BaseExceptionMixin):
    """请求参数异常"""

    code = StandardResponseCode.HTTP_400

    def __init__(self, *, msg: str = 'Bad Request', data: Any = None, background: BackgroundTask | None = None):
        super().__init__(msg=msg, data=data, background=background)


class NotFoundError(BaseExceptionMixin):
    """资源不存在"""

    code = StandardResponseCode.HTTP_404

    def __init__(self, *, msg: str = 'Not Found', data: Any = None, background: BackgroundTask | None = None):
        super().__init__(msg=msg, data=data, background=background)


class ServerError(BaseExceptionMixin):
    """服务端异常"""

    code = StandardResponseCode.HTTP_500

    def __init__(
            self, *, msg: str = 'Internal Server Error', data: Any = None, background: BackgroundTask | None = None
    ):
        super().__init__(msg=msg, data=data, background=background)


class StorageUnavailableError(BaseExceptionMixin):
    """对象存储不可用（桶不存在或连接失败）"""

    code = StandardResponseCode.HTTP_503

    def __init__(
            self, *, msg: str = 'Storage Unavailable', data: Any = None, background: BackgroundTask | None = None
    ):
        super().__init__(msg=msg, data=data, background=background)


class ManifestDecodeError(ServerError):
    """固件清单解析失败"""

    def __init__(self, *, msg: str = '解析 JSON 文件失败', data: Any = None):
        super().__init__(msg=msg, data=data)


class ManifestEncodeError(ServerError):
    """固件清单编码失败"""

    def __init__(self, *, msg: str = 'JSON 编码失败', data: Any = None):
        super().__init__(msg=msg, data=data)


class UploadError(ServerError):
    """对象上传失败"""

    def __init__(self, *, msg: str = '上传文件失败', data: Any = None):
        super().__init__(msg=msg, data=data)
