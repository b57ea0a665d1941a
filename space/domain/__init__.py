# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""
领域层：

- schemas: Pydantic 数据结构（错误响应格式 / 备份文件描述）
"""
from . import schemas  # noqa: F401

__all__ = ["schemas"]
