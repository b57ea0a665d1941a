# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from typing import Callable, Iterable, List

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware import Middleware

from space.api.activity import ActivityLogger
from space.api.health import bind_health_api
from space.api.router import ApiRouter
from space.common.errors import NotFoundError
from space.common.exception_handlers import defer_to_api_error_handler
from space.common.middlewares import (
    API_PREFIX,
    LoadAuthContextMiddleware,
    RecoverMiddleware,
    RemoveTrailingSlashMiddleware,
    SecurityHeadersMiddleware,
    TraceIdMiddleware,
)
from space.core.app import App

RouteGroup = Callable[[App, ApiRouter], None]

DEFAULT_ROUTE_GROUPS: List[RouteGroup] = [
    bind_health_api,
]

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


async def catch_all() -> None:
    raise NotFoundError()


def init_api(app: App, route_groups: Iterable[RouteGroup] = DEFAULT_ROUTE_GROUPS) -> FastAPI:
    """创建 FastAPI 实例：中间件、统一错误处理、/api 路由组与 catch-all"""

    fastapi_app = FastAPI(
        title="space",
        debug=app.is_debug(),
        redirect_slashes=False,
        docs_url="/api/docs" if app.is_debug() else None,
        redoc_url=None,
        openapi_url="/api/openapi.json" if app.is_debug() else None,
        middleware=[
            Middleware(TraceIdMiddleware),
            Middleware(RemoveTrailingSlashMiddleware),
            Middleware(LoadAuthContextMiddleware, space=app),
            Middleware(SecurityHeadersMiddleware),
            Middleware(RecoverMiddleware, space=app),
        ],
        # 内置的 HTTPException / 校验错误处理改为继续抛出，统一交给 RecoverMiddleware
        exception_handlers={
            StarletteHTTPException: defer_to_api_error_handler,
            RequestValidationError: defer_to_api_error_handler,
        },
    )
    fastapi_app.state.space = app

    api = ApiRouter()
    for bind in route_groups:
        bind(app, api)

    # catch all any route；方法不匹配的已有路径同样落到这里（404，不返回 405）
    api.add_api_route(
        "/{path:path}",
        catch_all,
        methods=ALL_METHODS,
        dependencies=[Depends(ActivityLogger(app))],
        include_in_schema=False,
    )

    fastapi_app.state.api_router = api
    fastapi_app.mount(API_PREFIX, api)

    # Mount 只匹配 /api/...，裸的 /api（/api/ 去掉斜杠后也是它）单独兜住，不能落到静态资源
    fastapi_app.add_api_route(
        API_PREFIX,
        catch_all,
        methods=ALL_METHODS,
        dependencies=[Depends(ActivityLogger(app))],
        include_in_schema=False,
    )

    return fastapi_app
