# -*- coding: UTF-8 -*-
"""
@Project : minio-bridge
@File    : file_ops.py
@Author  : guhua@jiqid.com
@Date    : 2025/12/10 11:20
"""
import mimetypes
import os

from fastapi import UploadFile

from backend.common.exception import errors
from backend.common.response.response_code import CustomErrorCode


def has_valid_extension(filename: str | None, allowed_extensions: list[str]) -> bool:
    """校验文件扩展名（不区分大小写）"""
    if not filename:
        return False
    ext = os.path.splitext(filename)[1].lower()
    return ext in allowed_extensions


def file_verify(file: UploadFile, *, allowed_extensions: list[str], max_size: int, error: CustomErrorCode) -> None:
    """
    上传文件校验

    :param file: 上传文件
    :param allowed_extensions: 允许的扩展名
    :param max_size: 最大字节数
    :param error: 扩展名不合法时返回的错误码
    :return:
    """
    if not has_valid_extension(file.filename, allowed_extensions):
        raise errors.CustomError(error=error)
    if file.size is not None and file.size > max_size:
        raise errors.RequestError(msg=f'文件 {file.filename} 超出大小限制 {max_size // (1024 * 1024)}MB')


def guess_content_type(filename: str | None, default: str = 'application/octet-stream') -> str:
    """根据文件名推断 Content-Type"""
    if not filename:
        return default
    content_type, _ = mimetypes.guess_type(filename)
    return content_type or default


def upload_content_type(file: UploadFile) -> str:
    """优先使用客户端声明的 Content-Type"""
    if file.content_type and file.content_type != 'application/octet-stream':
        return file.content_type
    return guess_content_type(file.filename)
