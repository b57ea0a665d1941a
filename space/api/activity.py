# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import time
from typing import AsyncIterator

from starlette.requests import Request

from space.core.app import App
from space.infra.slogger import activity_logger


class ActivityLogger:
    """请求记录（FastAPI 依赖）：具体路由和 catch-all 共用，未匹配的请求也会被记录"""

    def __init__(self, app: App) -> None:
        self.app = app

    async def __call__(self, request: Request) -> AsyncIterator[None]:
        started = time.perf_counter()
        auth = getattr(request.state, "auth", None)
        auth_id = auth.id if auth is not None else "-"

        try:
            yield
        except Exception as exc:
            activity_logger.info(
                "%s %s failed: %s (auth=%s, %.1fms)",
                request.method,
                request.url.path,
                type(exc).__name__,
                auth_id,
                (time.perf_counter() - started) * 1000,
            )
            raise

        activity_logger.info(
            "%s %s ok (auth=%s, %.1fms)",
            request.method,
            request.url.path,
            auth_id,
            (time.perf_counter() - started) * 1000,
        )
