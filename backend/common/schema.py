# -*- coding: UTF-8 -*-
"""
@Project : minio-bridge
@File    : schema.py
@Author  : guhua@jiqid.com
@Date    : 2025/12/10 10:40
"""
from pydantic import BaseModel, ConfigDict


class SchemaBase(BaseModel):
    """Schema 基类"""

    model_config = ConfigDict(use_enum_values=True, populate_by_name=True)
