# -*- coding: UTF-8 -*-
"""
@Project : minio-bridge
@File    : test_object_storage.py
@Author  : guhua@jiqid.com
@Date    : 2025/12/12 16:00
"""
import io

from datetime import datetime, timezone

import pytest

from botocore.response import StreamingBody
from botocore.stub import Stubber

from backend.common.object_storage import (
    BucketNotFoundError,
    ObjectNotFoundError,
    ObjectStorageClient,
    ObjectStorageError,
)


@pytest.fixture
def storage() -> ObjectStorageClient:
    return ObjectStorageClient(
        endpoint='localhost:9000',
        access_key='admin',
        secret_key='12345678',
        bucket='nxt-device',
        max_attempts=1,
    )


@pytest.fixture
def stubber(storage):
    with Stubber(storage.client) as stub:
        yield stub
        stub.assert_no_pending_responses()


def test_endpoint_url(storage):
    assert storage.endpoint_url == 'http://localhost:9000'


async def test_bucket_exists(storage, stubber):
    stubber.add_response('head_bucket', {}, {'Bucket': 'nxt-device'})

    assert await storage.bucket_exists() is True


async def test_bucket_missing(storage, stubber):
    stubber.add_client_error('head_bucket', service_error_code='404', http_status_code=404)

    assert await storage.bucket_exists() is False


async def test_stat_missing_object(storage, stubber):
    stubber.add_client_error('head_object', service_error_code='404', http_status_code=404)

    with pytest.raises(ObjectNotFoundError) as exc_info:
        await storage.stat_object('firmware/P/firmwareInfo.json')
    assert exc_info.value.key == 'firmware/P/firmwareInfo.json'


async def test_get_missing_object(storage, stubber):
    stubber.add_client_error('get_object', service_error_code='NoSuchKey', http_status_code=404)

    with pytest.raises(ObjectNotFoundError):
        await storage.get_object('firmware/P/firmwareInfo.json')


async def test_get_object(storage, stubber):
    body = StreamingBody(io.BytesIO(b'[]'), 2)
    stubber.add_response('get_object', {'Body': body, 'ContentLength': 2, 'ContentType': 'application/json'})

    assert await storage.get_object('firmware/P/firmwareInfo.json') == b'[]'


async def test_put_to_missing_bucket(storage, stubber):
    stubber.add_client_error('put_object', service_error_code='NoSuchBucket', http_status_code=404)

    with pytest.raises(BucketNotFoundError):
        await storage.put_object('firmware/P/firmwareInfo.json', b'[]', content_type='application/json')


async def test_other_errors_are_storage_errors(storage, stubber):
    stubber.add_client_error('delete_object', service_error_code='AccessDenied', http_status_code=403)

    with pytest.raises(ObjectStorageError) as exc_info:
        await storage.remove_object('firmware/P/P_1.0.5.img')
    assert not isinstance(exc_info.value, ObjectNotFoundError)


async def test_list_objects_non_recursive(storage, stubber):
    stubber.add_response(
        'list_objects_v2',
        {
            'CommonPrefixes': [{'Prefix': 'firmware/P/archive/'}],
            'Contents': [
                {
                    'Key': 'firmware/P/P_[Std]_V1.0.5_20211011.img',
                    'Size': 1024,
                    'LastModified': datetime(2021, 10, 11, tzinfo=timezone.utc),
                    'ETag': '"etag"',
                },
            ],
            'IsTruncated': False,
        },
    )

    objects = await storage.list_objects('firmware/P/')

    assert [(o.key, o.is_dir) for o in objects] == [
        ('firmware/P/archive/', True),
        ('firmware/P/P_[Std]_V1.0.5_20211011.img', False),
    ]
    assert objects[1].size == 1024
