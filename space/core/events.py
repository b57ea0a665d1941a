# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from dataclasses import dataclass

from space.common.context import HttpContext
from space.common.errors import ApiError


@dataclass
class ApiErrorEvent:
    """一次错误处理的事件；http_context 只是借用，生命周期不超过本次请求

    before hook 可以替换 error 来改写最终响应。
    """

    http_context: HttpContext
    error: ApiError
