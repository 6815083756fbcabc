# -*- coding: UTF-8 -*-
"""
@Project : minio-bridge
@File    : timezone.py
@Author  : guhua@jiqid.com
@Date    : 2025/12/10 11:02
"""
import zoneinfo

from datetime import datetime

from backend.common.log import log
from backend.core.conf import settings


class TimeZone:
    def __init__(
            self,
            tz: str = settings.DATETIME_TIMEZONE,
            fallback: str = settings.DATETIME_TIMEZONE_FALLBACK,
    ) -> None:
        """
        时区工具

        配置的时区无法加载时（例如系统缺少 tzdata），使用 fallback 时区并记录告警

        :param tz: 时区名称
        :param fallback: 备用时区名称
        """
        try:
            self.tz_info = zoneinfo.ZoneInfo(tz)
        except (zoneinfo.ZoneInfoNotFoundError, ValueError):
            log.warning(f'无法加载时区 {tz}，使用 {fallback} 时区')
            self.tz_info = zoneinfo.ZoneInfo(fallback)

    def now(self) -> datetime:
        """获取当前时区时间"""
        return datetime.now(self.tz_info)

    def to_str(self, t: datetime, format_str: str = settings.DATETIME_FORMAT) -> str:
        """将 datetime 对象转换为指定格式的字符串"""
        return t.astimezone(self.tz_info).strftime(format_str)


timezone: TimeZone = TimeZone()
