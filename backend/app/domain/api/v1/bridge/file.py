# -*- coding: UTF-8 -*-
"""
@Project : minio-bridge
@File    : file.py
@Author  : guhua@jiqid.com
@Date    : 2025/12/11 14:30
"""
from typing import Annotated
from urllib.parse import quote

from fastapi import APIRouter, File, Form, Query, UploadFile
from fastapi.responses import StreamingResponse

from backend.app.domain.schema.file import (
    CreateFolderParam,
    DeleteFileParam,
    DownloadFileParam,
    GetObjectInfoDetail,
    GetResourceListParam,
)
from backend.common.response.response_schema import ResponseModel, response_base
from backend.core.storage import CurrentFileService

router = APIRouter()


def _content_disposition(disposition: str, key: str) -> str:
    return f"{disposition}; filename*=UTF-8''{quote(key)}"


@router.post('/upload', summary='上传资源文件（mp3/wav）')
async def upload_file(
        file_service: CurrentFileService,
        files: Annotated[list[UploadFile], File(description='资源文件')],
        file_paths: Annotated[list[str] | None, Form(alias='filePath', description='上传目录，与文件一一对应')] = None,
) -> ResponseModel:
    uploaded = await file_service.upload(files=files, file_paths=file_paths or [])
    return response_base.success(msg='Files uploaded successfully', data=uploaded)


@router.post('/download', summary='下载文件')
async def download_file(file_service: CurrentFileService, obj: DownloadFileParam) -> StreamingResponse:
    storage_object = await file_service.open(key=obj.key)
    return StreamingResponse(
        storage_object.iter_chunks(),
        media_type='application/octet-stream',
        headers={'Content-Disposition': _content_disposition('attachment', obj.key)},
    )


@router.delete('/delete', summary='批量删除文件或目录')
async def delete_file(file_service: CurrentFileService, obj: DeleteFileParam) -> ResponseModel:
    count = await file_service.delete(key_list=obj.key_list)
    return response_base.success(data={'deleted': count})


@router.post('/resourceList', summary='获取资源文件列表')
async def get_resource_list(
        file_service: CurrentFileService, obj: GetResourceListParam
) -> list[GetObjectInfoDetail]:
    return await file_service.get_resource_list(path=obj.path, com_id=obj.com_id)


@router.get('/previewFile', summary='预览音频文件')
async def preview_file(
        file_service: CurrentFileService,
        key: Annotated[str, Query(description='对象路径')] = '',
) -> StreamingResponse:
    storage_object, inline = await file_service.preview(key=key)
    disposition = 'inline' if inline else 'attachment'
    return StreamingResponse(
        storage_object.iter_chunks(),
        media_type='audio/mpeg',
        headers={'Content-Disposition': _content_disposition(disposition, key)},
    )


@router.post('/createFolder', summary='新建文件夹')
async def create_folder(file_service: CurrentFileService, obj: CreateFolderParam) -> ResponseModel:
    key = await file_service.create_folder(current_path=obj.current_path, folder_name=obj.folder_name)
    return response_base.success(msg='Folder created successfully', data={'key': key})
