# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from typing import Callable, Dict

from starlette.datastructures import Headers, MutableHeaders
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from space.common.context import HttpContext
from space.common.exception_handlers import ApiErrorHandler
from space.common.trace import REQUEST_ID_HEADER, TRACE_ID_HEADER, new_trace_id, set_trace_id
from space.core.app import App
from space.core.auth import extract_token

API_PREFIX = "/api"

SECURE_HEADERS: Dict[str, str] = {
    "X-XSS-Protection": "1; mode=block",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
}


class TraceIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        trace_id = request.headers.get(REQUEST_ID_HEADER) or new_trace_id()
        set_trace_id(trace_id)
        response: Response = await call_next(request)
        response.headers[TRACE_ID_HEADER] = trace_id
        return response


def skip_non_api_paths(scope: Scope) -> bool:
    return not scope["path"].startswith(API_PREFIX + "/")


class RemoveTrailingSlashMiddleware:
    """去掉路径末尾的一个 /，只改写路由用的 path，不做重定向"""

    def __init__(self, app: ASGIApp, skipper: Callable[[Scope], bool] = skip_non_api_paths) -> None:
        self.app = app
        self.skipper = skipper

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or self.skipper(scope):
            await self.app(scope, receive, send)
            return

        # 只去掉最后一个 /
        path: str = scope["path"]
        if len(path) > 1 and path.endswith("/"):
            scope = dict(scope)
            scope["path"] = path[:-1]
            raw_path = scope.get("raw_path")
            if raw_path and raw_path.endswith(b"/"):
                scope["raw_path"] = raw_path[:-1]

        await self.app(scope, receive, send)


class LoadAuthContextMiddleware:
    """解析 Authorization 头，写入 request.state.auth；必须在所有路由组之前执行"""

    def __init__(self, app: ASGIApp, space: App) -> None:
        self.app = app
        self.space = space

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] in ("http", "websocket"):
            token = extract_token(Headers(scope=scope).get("Authorization"))
            state = scope.setdefault("state", {})
            state["auth"] = self.space.auth_resolver.resolve(token) if token else None

        await self.app(scope, receive, send)


class SecurityHeadersMiddleware:
    """基础安全响应头；handler 自己设置过的不覆盖"""

    def __init__(self, app: ASGIApp, headers: Dict[str, str] = SECURE_HEADERS) -> None:
        self.app = app
        self.headers = headers

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message: Message) -> None:
            if message["type"] == "http.response.start":
                response_headers = MutableHeaders(scope=message)
                for name, value in self.headers.items():
                    if name not in response_headers:
                        response_headers[name] = value
            await send(message)

        await self.app(scope, receive, send_with_headers)


class RecoverMiddleware:
    """兜底：路由层抛出的任何异常都交给 ApiErrorHandler，进程不会因单个请求崩溃"""

    def __init__(self, app: ASGIApp, space: App) -> None:
        self.app = app
        self.handle_error = ApiErrorHandler(space)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        ctx = HttpContext(scope, receive, send)
        try:
            await self.app(scope, receive, ctx.send)
        except Exception as exc:  # noqa: BLE001
            await self.handle_error(ctx, exc)
