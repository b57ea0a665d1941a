# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from typing import Iterable, Optional

from fastapi import FastAPI

from space.api.base import DEFAULT_ROUTE_GROUPS, RouteGroup, init_api
from space.api.static import static_directory_handler
from space.common.logging import setup_logging
from space.core.app import App
from space.infra.config import Settings, settings as default_settings


def create_app(
    settings: Optional[Settings] = None,
    route_groups: Optional[Iterable[RouteGroup]] = None,
) -> FastAPI:
    """组装入口：App（配置 + hook）-> init_api -> 静态资源"""

    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    space = App(settings)
    fastapi_app = init_api(space, DEFAULT_ROUTE_GROUPS if route_groups is None else route_groups)

    # 静态资源（SPA），必须在 /api 挂载之后注册
    if settings.PUBLIC_DIR:
        fastapi_app.add_api_route(
            "/{path:path}",
            static_directory_handler(settings.PUBLIC_DIR, settings.INDEX_FALLBACK),
            methods=["GET", "HEAD"],
            include_in_schema=False,
        )

    return fastapi_app


app = create_app()
