# -*- coding: UTF-8 -*-
"""
@Project : minio-bridge
@File    : version.py
@Author  : guhua@jiqid.com
@Date    : 2025/12/10 11:26
"""
import re

VERSION_PATTERN = r'^\d+\.\d+\.\d+$'

_version_re = re.compile(VERSION_PATTERN)


def parse_version(version: str) -> tuple[int, int, int]:
    """
    解析 major.minor.patch 版本号

    :param version: 版本号，例如 1.0.5
    :return: (major, minor, patch)
    """
    if not _version_re.match(version):
        raise ValueError(f'版本格式不正确: {version}')
    major, minor, patch = (int(part) for part in version.split('.'))
    return major, minor, patch
