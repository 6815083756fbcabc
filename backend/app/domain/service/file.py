# -*- coding: UTF-8 -*-
"""
@Project : minio-bridge
@File    : file.py
@Author  : guhua@jiqid.com
@Date    : 2025/12/11 10:15
"""
import os

from fastapi import UploadFile

from backend.app.domain.schema.file import GetObjectInfoDetail
from backend.common.exception import errors
from backend.common.log import log
from backend.common.object_storage import ObjectNotFoundError, ObjectStorage, ObjectStorageError, StorageObject
from backend.common.response.response_code import CustomErrorCode
from backend.core.conf import settings
from backend.utils.file_ops import file_verify, guess_content_type, upload_content_type
from backend.utils.timezone import timezone


class FileService:
    """资源文件服务类"""

    def __init__(self, storage: ObjectStorage):
        self.storage = storage

    async def upload(self, *, files: list[UploadFile], file_paths: list[str]) -> list[str]:
        """ 上传资源文件，第 i 个文件放到 file_paths[i] 目录下，已存在的文件跳过 """
        for file in files:
            file_verify(
                file,
                allowed_extensions=settings.UPLOAD_ALLOWED_EXTENSIONS,
                max_size=settings.UPLOAD_MAX_SIZE,
                error=CustomErrorCode.INVALID_FILE_TYPE,
            )

        uploaded = []
        for i, file in enumerate(files):
            file_path = settings.UPLOAD_DEFAULT_PATH
            if i < len(file_paths) and file_paths[i]:
                file_path = file_paths[i].rstrip('/') + '/'
            key = f'{file_path}{os.path.basename(file.filename)}'

            if await self.storage.object_exists(key):
                log.info(f'[File] File {key} already exists, skipping upload')
                continue
            try:
                await self.storage.put_object(key, file.file, content_type=upload_content_type(file))
            except ObjectStorageError as e:
                raise errors.UploadError(msg=f'Error uploading file {file.filename}: {e}')
            uploaded.append(key)
        return uploaded

    async def open(self, *, key: str) -> StorageObject:
        try:
            return await self.storage.open_object(key)
        except ObjectNotFoundError:
            raise errors.NotFoundError(msg=f'文件 {key} 不存在')

    async def preview(self, *, key: str) -> tuple[StorageObject, bool]:
        """ 打开待预览的文件，并判断是否可以在浏览器中直接显示 """
        if not key:
            raise errors.CustomError(error=CustomErrorCode.KEY_REQUIRED)
        obj = await self.open(key=key)
        content_type = obj.info.content_type
        if not content_type or content_type == 'application/octet-stream':
            content_type = guess_content_type(key)
        return obj, content_type in settings.PREVIEW_INLINE_TYPES

    async def delete_prefix(self, prefix: str) -> int:
        """ 递归删除前缀下的所有对象 """
        count = 0
        for obj in await self.storage.list_objects(prefix, recursive=True):
            await self.storage.remove_object(obj.key)
            log.info(f'[File] Deleted object: {obj.key}')
            count += 1
        return count

    async def delete(self, *, key_list: list[str]) -> int:
        count = 0
        for key in key_list:
            try:
                count += await self.delete_prefix(key)
            except ObjectStorageError as e:
                raise errors.ServerError(msg=f'Failed to delete object {key}: {e}')
        return count

    async def get_resource_list(self, *, path: str = '', com_id: str = '') -> list[GetObjectInfoDetail]:
        """ 列出目录（不递归），目录在前、文件在后 """
        prefix = path or f'{com_id}/{settings.RESOURCE_DIR_NAME}/'

        dirs = []
        files = []
        for obj in await self.storage.list_objects(prefix, recursive=False):
            name = obj.key.removeprefix(prefix)
            if obj.is_dir:
                name = name.rstrip('/')
            if not name:
                continue

            info = GetObjectInfoDetail(
                file_name=name,
                key=obj.key,
                is_dir=obj.is_dir,
                size=round(obj.size / (1024 * 1024), 2),
                last_modified=timezone.to_str(obj.last_modified) if obj.last_modified else '',
            )
            if obj.is_dir:
                dirs.append(info)
            else:
                files.append(info)
        return dirs + files

    async def create_folder(self, *, current_path: str, folder_name: str) -> str:
        """ 以 / 结尾的空对象表示文件夹 """
        folder_name = folder_name.strip('/')
        if not folder_name:
            raise errors.RequestError(msg='folderName is required')
        current_path = current_path.rstrip('/')
        key = f'{current_path}/{folder_name}/' if current_path else f'{folder_name}/'
        try:
            await self.storage.put_object(key, b'')
        except ObjectStorageError as e:
            log.error(f'[File] Failed to create folder {key}: {e}')
            raise errors.ServerError(msg='Failed to create folder')
        return key
