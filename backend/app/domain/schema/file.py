# -*- coding: UTF-8 -*-
"""
@Project : minio-bridge
@File    : file.py
@Author  : guhua@jiqid.com
@Date    : 2025/12/10 11:45
"""
from pydantic import Field

from backend.common.schema import SchemaBase


class DownloadFileParam(SchemaBase):
    """下载文件参数"""

    key: str = Field(description='对象路径')


class DeleteFileParam(SchemaBase):
    """删除文件参数"""

    key_list: list[str] = Field(default_factory=list, alias='keyList', description='对象路径（或目录前缀）列表')


class GetResourceListParam(SchemaBase):
    """查询资源列表参数"""

    path: str = Field('', description='目录前缀')
    com_id: str = Field('', alias='comID', description='租户 ID')


class CreateFolderParam(SchemaBase):
    """新建文件夹参数"""

    current_path: str = Field('', alias='currentPath', description='当前路径')
    folder_name: str = Field(alias='folderName', description='文件夹名称')


class GetObjectInfoDetail(SchemaBase):
    """资源列表条目"""

    file_name: str = Field(alias='fileName', description='文件名')
    key: str = Field(description='文件路径')
    is_dir: bool = Field(alias='isDir', description='是否为目录')
    size: float = Field(description='文件大小，单位 MB')
    last_modified: str = Field('', alias='lastModified', description='上次修改时间')
