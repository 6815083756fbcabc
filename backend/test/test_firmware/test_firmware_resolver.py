# -*- coding: UTF-8 -*-
"""
@Project : minio-bridge
@File    : test_firmware_resolver.py
@Author  : guhua@jiqid.com
@Date    : 2025/12/12 11:00
"""
import pytest

from backend.app.domain.service.firmware_resolver import firmware_image_pattern, parse_firmware_image
from backend.common.exception import errors


def add_images(storage, product_name: str, *file_names: str) -> None:
    for file_name in file_names:
        storage.add(f'firmware/{product_name}/{file_name}', b'img')


@pytest.mark.parametrize(
    'file_names, expected',
    [
        (('P_[Std]_V1.0.4_20211011.img', 'P_[Std]_V1.0.5_20211001.img'), '[Std]_V1.0.5_20211001'),
        (('P_[Std]_V1.0.5_20211001.img', 'P_[Std]_V1.0.5_20211011.img'), '[Std]_V1.0.5_20211011'),
        (('P_[Std]_V1.0.5_20211011.img', 'P_[Std]_V1.2.0_20200101.img'), '[Std]_V1.2.0_20200101'),
        (('P_[Std]_V1.9.0_20211011.img', 'P_[Std]_V1.10.0_20200101.img'), '[Std]_V1.10.0_20200101'),
        (('P_[Std]_V2.0.0_20200101.img', 'P_[Std]_V1.99.99_20991231.img'), '[Std]_V2.0.0_20200101'),
    ],
)
async def test_resolve_one_ranks_by_version_then_date(firmware_resolver, firmware_storage, file_names, expected):
    add_images(firmware_storage, 'P', *file_names)

    latest = await firmware_resolver.resolve_one('P')

    assert latest.product_name == 'P'
    assert latest.newest_version == expected


async def test_resolve_one_keeps_tag_of_winning_image(firmware_resolver, firmware_storage):
    add_images(firmware_storage, 'NXT2204', 'NXT2204_[Std]_V1.0.5_20211011.img', 'NXT2204_[Pro]_V1.0.6_20211012.img')

    latest = await firmware_resolver.resolve_one('NXT2204')

    assert latest.newest_version == '[Pro]_V1.0.6_20211012'


async def test_resolve_one_skips_names_outside_the_pattern(firmware_resolver, firmware_storage):
    add_images(
        firmware_storage,
        'P',
        'P_[Std]_1.9.9_20991231.img',
        'P_1.9.9.img',
        'Q_[Std]_V9.9.9_20991231.img',
        'P_[Std]_V1.0.5_2021101.img',
        'P_[Std]_V1.0.1_20211011.bin',
        'P_[Std]_V1.0.1_20211011.img',
    )
    firmware_storage.add('firmware/P/firmwareInfo.json', b'[]')
    firmware_storage.add('firmware/P/archive/P_[Std]_V9.0.0_20991231.img', b'img')

    latest = await firmware_resolver.resolve_one('P')

    assert latest.newest_version == '[Std]_V1.0.1_20211011'


async def test_resolve_one_without_images_raises_not_found(firmware_resolver, firmware_storage):
    add_images(firmware_storage, 'P', 'P_no_marker.img')

    with pytest.raises(errors.NotFoundError):
        await firmware_resolver.resolve_one('P')


async def test_resolve_one_escapes_product_name(firmware_resolver, firmware_storage):
    add_images(firmware_storage, 'A.B', 'AxB_[Std]_V1.0.0_20211011.img')

    with pytest.raises(errors.NotFoundError):
        await firmware_resolver.resolve_one('A.B')


async def test_resolve_many_isolates_failures(firmware_resolver, firmware_storage):
    add_images(firmware_storage, 'A', 'A_[Std]_V1.0.5_20211011.img')

    result = await firmware_resolver.resolve_many(['A', 'B'])

    assert [(f.product_name, f.newest_version) for f in result.latest_firmwares] == [('A', '[Std]_V1.0.5_20211011')]
    assert list(result.errors) == ['B']


async def test_resolve_many_records_backend_errors(firmware_resolver, firmware_storage):
    add_images(firmware_storage, 'A', 'A_[Std]_V1.0.5_20211011.img')
    add_images(firmware_storage, 'C', 'C_[Std]_V1.0.0_20211011.img')
    firmware_storage.failing_prefixes.add('firmware/C/')

    result = await firmware_resolver.resolve_many(['C', 'A'])

    assert [f.product_name for f in result.latest_firmwares] == ['A']
    assert 'list failed' in result.errors['C']


async def test_resolve_many_collects_every_product(firmware_resolver, firmware_storage):
    names = [f'P{i}' for i in range(8)]
    for i, name in enumerate(names):
        add_images(firmware_storage, name, f'{name}_[Std]_V1.0.{i}_20211011.img')

    result = await firmware_resolver.resolve_many(names)

    assert result.errors == {}
    assert sorted(f.product_name for f in result.latest_firmwares) == names


def test_parse_firmware_image():
    pattern = firmware_image_pattern('NXT2204')

    image = parse_firmware_image(pattern, 'k', 'NXT2204_[Std]_V1.0.5_20211011.img')

    assert image.tag == '[Std]'
    assert image.version == (1, 0, 5)
    assert image.version_str == '1.0.5'
    assert image.date == '20211011'
    assert parse_firmware_image(pattern, 'k', 'NXT2204_[Std]_V1.0_20211011.img') is None
