# -*- coding: UTF-8 -*-
"""
@Project : minio-bridge
@File    : test_crud_manifest.py
@Author  : guhua@jiqid.com
@Date    : 2025/12/12 10:20
"""
import json

import pytest

from backend.app.domain.crud.crud_manifest import CRUDFirmwareManifest
from backend.app.domain.schema.firmware import FirmwareInfo
from backend.common.exception import errors


def test_manifest_key():
    assert CRUDFirmwareManifest.manifest_key('NXT2204') == 'firmware/NXT2204/firmwareInfo.json'


def test_encode_decode_keeps_entries_and_order():
    firmware_list = [
        FirmwareInfo(id='1700000000', product_name='NXT2204', version='1.0.5', upload_user='a'),
        FirmwareInfo(id='1700000100', product_name='NXT2204', version='1.0.4', upload_user='b'),
    ]

    data = CRUDFirmwareManifest.encode(firmware_list)

    assert CRUDFirmwareManifest.decode(data) == firmware_list
    assert [item['version'] for item in json.loads(data)] == ['1.0.5', '1.0.4']


def test_encode_uses_snake_case_fields():
    data = CRUDFirmwareManifest.encode([FirmwareInfo(product_name='P', version='1.0.0')])

    assert set(json.loads(data)[0]) == {'id', 'product_name', 'version', 'upload_user', 'upload_time', 'url'}


@pytest.mark.parametrize('data', [b'', b'  ', b'null', b'[]'])
def test_decode_empty_content(data):
    assert CRUDFirmwareManifest.decode(data) == []


@pytest.mark.parametrize('data', [b'[', b'{}', b'"text"', b'[{"product_name": "P"}]'])
def test_decode_malformed_content(data):
    with pytest.raises(errors.ManifestDecodeError):
        CRUDFirmwareManifest.decode(data)


async def test_get_missing_manifest_returns_none(firmware_storage):
    assert await CRUDFirmwareManifest(firmware_storage).get('NXT2204') is None
