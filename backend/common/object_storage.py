# -*- coding: UTF-8 -*-
"""
MinIO / S3 Async Client Wrapper
Author: guhua@jiqid.com
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime
from functools import partial
from typing import IO, Any, AsyncIterator, Callable, Optional, Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from backend.common.log import log
from backend.core.conf import settings

_NOT_FOUND_CODES = frozenset({'NoSuchKey', 'NotFound', '404'})


class ObjectStorageError(Exception):
    """ 对象存储操作失败 """


class BucketNotFoundError(ObjectStorageError):
    """ 存储桶不存在 """

    def __init__(self, bucket: str):
        super().__init__(f'桶 {bucket} 不存在')
        self.bucket = bucket


class ObjectNotFoundError(ObjectStorageError):
    """ 对象不存在 """

    def __init__(self, bucket: str, key: str):
        super().__init__(f'对象 {bucket}/{key} 不存在')
        self.bucket = bucket
        self.key = key


@dataclass(frozen=True)
class ObjectInfo:
    key: str
    size: int = 0
    last_modified: Optional[datetime] = None
    content_type: Optional[str] = None
    etag: Optional[str] = None
    is_dir: bool = False


class StorageObject:
    """ 已打开的对象，按块异步读取 """

    def __init__(self, info: ObjectInfo, body: Any):
        self.info = info
        self._body = body

    async def read(self, size: int = -1) -> bytes:
        loop = asyncio.get_running_loop()
        if size < 0:
            return await loop.run_in_executor(None, self._body.read)
        return await loop.run_in_executor(None, self._body.read, size)

    async def iter_chunks(self, chunk_size: int = settings.STREAM_CHUNK_SIZE) -> AsyncIterator[bytes]:
        try:
            while True:
                chunk = await self.read(chunk_size)
                if not chunk:
                    break
                yield chunk
        finally:
            self.close()

    def close(self) -> None:
        self._body.close()


class ObjectStorage(Protocol):
    """ 服务层依赖的对象存储接口 """

    bucket: str

    async def bucket_exists(self) -> bool: ...

    async def stat_object(self, key: str) -> ObjectInfo: ...

    async def object_exists(self, key: str) -> bool: ...

    async def open_object(self, key: str) -> StorageObject: ...

    async def get_object(self, key: str) -> bytes: ...

    async def put_object(
            self, key: str, data: bytes | IO[bytes], content_type: str = 'application/octet-stream'
    ) -> None: ...

    async def remove_object(self, key: str) -> None: ...

    async def list_objects(self, prefix: str = '', recursive: bool = False) -> list[ObjectInfo]: ...


class ObjectStorageClient:
    """
    S3 兼容对象存储异步 Client 封装，一个实例绑定一个桶

    boto3 为同步 SDK，所有调用放到默认线程池执行
    """

    def __init__(
            self,
            endpoint: str,
            access_key: str,
            secret_key: str,
            bucket: str,
            secure: bool = False,
            region: str = 'us-east-1',
            connect_timeout: float = 5.0,
            read_timeout: float = 60.0,
            max_attempts: int = 3,
    ):
        self.bucket = bucket
        self.region = region
        self.endpoint_url = f"{'https' if secure else 'http'}://{endpoint}"

        cfg = Config(
            signature_version='s3v4',
            s3={'addressing_style': 'path'},
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
            retries={'max_attempts': max_attempts, 'mode': 'standard'},
        )

        self.client = boto3.client(
            's3',
            endpoint_url=self.endpoint_url,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            region_name=region,
            config=cfg,
        )

    @classmethod
    def from_settings(cls, bucket: str) -> 'ObjectStorageClient':
        return cls(
            endpoint=settings.MINIO_ENDPOINT,
            access_key=settings.MINIO_ACCESS_KEY,
            secret_key=settings.MINIO_SECRET_KEY,
            bucket=bucket,
            secure=settings.MINIO_SECURE,
            region=settings.MINIO_REGION,
            connect_timeout=settings.MINIO_CONNECT_TIMEOUT,
            read_timeout=settings.MINIO_READ_TIMEOUT,
            max_attempts=settings.MINIO_MAX_ATTEMPTS,
        )

    async def close(self):
        """ 关闭客户端 """
        self.client.close()

    async def _run(self, func: Callable[..., Any], /, *, key: str = '', **kwargs) -> Any:
        """ 在线程池执行 SDK 调用，并将 SDK 异常转换为结构化异常 """
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, partial(func, **kwargs))
        except ClientError as e:
            code = e.response.get('Error', {}).get('Code', '')
            if code == 'NoSuchBucket':
                raise BucketNotFoundError(self.bucket) from e
            if code in _NOT_FOUND_CODES:
                raise ObjectNotFoundError(self.bucket, key) from e
            raise ObjectStorageError(f'对象存储请求失败: bucket={self.bucket}, key={key}, code={code}') from e
        except BotoCoreError as e:
            raise ObjectStorageError(f'对象存储连接失败: bucket={self.bucket}, error={e}') from e

    async def bucket_exists(self) -> bool:
        try:
            await self._run(self.client.head_bucket, Bucket=self.bucket)
        except (BucketNotFoundError, ObjectNotFoundError):
            return False
        return True

    async def ensure_bucket(self) -> None:
        """ 确保桶存在，不存在则创建 """
        if await self.bucket_exists():
            log.info(f'[Storage] We already own {self.bucket}')
            return

        kwargs: dict[str, Any] = {'Bucket': self.bucket}
        if self.region != 'us-east-1':
            kwargs['CreateBucketConfiguration'] = {'LocationConstraint': self.region}
        try:
            await self._run(self.client.create_bucket, **kwargs)
        except ObjectStorageError:
            # 并发创建时桶可能已被其他实例创建
            if not await self.bucket_exists():
                raise
        log.info(f'[Storage] bucket created: {self.bucket}')

    async def stat_object(self, key: str) -> ObjectInfo:
        resp = await self._run(self.client.head_object, key=key, Bucket=self.bucket, Key=key)
        return ObjectInfo(
            key=key,
            size=resp.get('ContentLength', 0),
            last_modified=resp.get('LastModified'),
            content_type=resp.get('ContentType'),
            etag=resp.get('ETag'),
        )

    async def object_exists(self, key: str) -> bool:
        try:
            await self.stat_object(key)
        except ObjectNotFoundError:
            return False
        return True

    async def open_object(self, key: str) -> StorageObject:
        resp = await self._run(self.client.get_object, key=key, Bucket=self.bucket, Key=key)
        info = ObjectInfo(
            key=key,
            size=resp.get('ContentLength', 0),
            last_modified=resp.get('LastModified'),
            content_type=resp.get('ContentType'),
            etag=resp.get('ETag'),
        )
        return StorageObject(info, resp['Body'])

    async def get_object(self, key: str) -> bytes:
        obj = await self.open_object(key)
        try:
            return await obj.read()
        finally:
            obj.close()

    async def put_object(
            self,
            key: str,
            data: bytes | IO[bytes],
            content_type: str = 'application/octet-stream',
    ) -> None:
        resp = await self._run(
            self.client.put_object, key=key, Bucket=self.bucket, Key=key, Body=data, ContentType=content_type
        )
        log.info(f'[Storage Upload] bucket={self.bucket}, key={key}, etag={resp.get("ETag")}')

    async def remove_object(self, key: str) -> None:
        await self._run(self.client.delete_object, key=key, Bucket=self.bucket, Key=key)
        log.info(f'[Storage Remove] bucket={self.bucket}, key={key}')

    def _list_objects(self, prefix: str, recursive: bool) -> list[ObjectInfo]:
        kwargs: dict[str, Any] = {'Bucket': self.bucket, 'Prefix': prefix}
        if not recursive:
            kwargs['Delimiter'] = '/'

        objects: list[ObjectInfo] = []
        paginator = self.client.get_paginator('list_objects_v2')
        for page in paginator.paginate(**kwargs):
            for common_prefix in page.get('CommonPrefixes', []):
                objects.append(ObjectInfo(key=common_prefix['Prefix'], is_dir=True))
            for item in page.get('Contents', []):
                objects.append(ObjectInfo(
                    key=item['Key'],
                    size=item.get('Size', 0),
                    last_modified=item.get('LastModified'),
                    etag=item.get('ETag'),
                    is_dir=item['Key'].endswith('/'),
                ))
        return objects

    async def list_objects(self, prefix: str = '', recursive: bool = False) -> list[ObjectInfo]:
        """ 列出前缀下的对象；非递归时目录以 is_dir=True 返回 """
        return await self._run(self._list_objects, key=prefix, prefix=prefix, recursive=recursive)
