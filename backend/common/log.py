#!/usr/bin/env python
# -*- coding: utf-8 -*-
# @Author    : guhua@jiqid.com
# @File      : log.py
# @Created   : 2025/12/10 10:20

import inspect
import logging
import os
import sys

from loguru import logger

from backend.core.conf import settings


class InterceptHandler(logging.Handler):
    """将标准库 logging 的记录转发给 loguru"""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging() -> None:
    """接管根日志以及 uvicorn 日志"""
    logging.root.handlers = [InterceptHandler()]
    logging.root.setLevel(settings.LOG_STD_LEVEL)

    for name in logging.root.manager.loggerDict.keys():
        logging.getLogger(name).handlers = []
        if 'uvicorn.access' in name or 'botocore' in name:
            logging.getLogger(name).propagate = False
        else:
            logging.getLogger(name).propagate = True

    logger.remove()
    logger.add(sys.stdout, level=settings.LOG_STD_LEVEL, format=settings.LOG_FORMAT)


def set_custom_logfile() -> None:
    """按配置追加文件日志"""
    if not settings.LOG_DIR:
        return

    os.makedirs(settings.LOG_DIR, exist_ok=True)
    log_access_file = os.path.join(settings.LOG_DIR, settings.LOG_ACCESS_FILENAME)
    log_error_file = os.path.join(settings.LOG_DIR, settings.LOG_ERROR_FILENAME)

    log_config = {
        'format': settings.LOG_FORMAT,
        'enqueue': True,
        'rotation': '00:00',
        'retention': '7 days',
        'compression': 'tar.gz',
    }

    logger.add(
        log_access_file,
        level=settings.LOG_FILE_LEVEL,
        filter=lambda record: record['level'].no <= 25,
        backtrace=False,
        diagnose=False,
        **log_config,
    )
    logger.add(
        log_error_file,
        level='WARNING',
        filter=lambda record: record['level'].no >= 30,
        backtrace=True,
        diagnose=True,
        **log_config,
    )


log = logger
