# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Optional, Type, TypeVar

from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import NoResultFound
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import Response

from space.common.context import HttpContext
from space.common.errors import ApiError, BadRequestError, NotFoundError
from space.core.events import ApiErrorEvent
from space.infra.slogger import slogger

if TYPE_CHECKING:
    from space.core.app import App

E = TypeVar("E", bound=BaseException)

INVALID_DATA_MESSAGE = "Failed to load the submitted data due to invalid formatting."


def _error_chain(exc: BaseException) -> Iterator[BaseException]:
    """exc 以及通过 `raise ... from` 显式包装的原因"""
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__


def _find(exc: BaseException, cls: Type[E]) -> Optional[E]:
    for item in _error_chain(exc):
        if isinstance(item, cls):
            return item
    return None


def classify_error(exc: BaseException, *, debug: bool = False) -> ApiError:
    """任意异常 -> ApiError，不会抛出"""

    api_err = _find(exc, ApiError)
    if api_err is not None:
        if debug and api_err.raw_data is not None:
            slogger.error("api error raw data: %r", api_err.raw_data)
        return api_err

    http_err = _find(exc, StarletteHTTPException)
    if http_err is not None:
        if debug and http_err.__cause__ is not None:
            slogger.error("http error internal cause: %r", http_err.__cause__)
        if not 100 <= http_err.status_code <= 599:
            # starlette 不校验 status_code
            return BadRequestError("", http_err)
        return ApiError(http_err.status_code, f"{http_err.detail}", raw_data=http_err)

    validation_err = _find(exc, RequestValidationError)
    if validation_err is not None:
        if debug:
            slogger.error("request validation error: %s", validation_err)
        return BadRequestError(INVALID_DATA_MESSAGE, validation_err.errors())

    if debug:
        slogger.error("unhandled error: %r", exc, exc_info=exc)

    if _find(exc, NoResultFound) is not None:
        return NotFoundError("", exc)
    return BadRequestError("", exc)


class ApiErrorHandler:
    """错误处理：分类 -> before hook（末尾写响应）-> after hook"""

    def __init__(self, app: App) -> None:
        self.app = app

    async def __call__(self, ctx: HttpContext, exc: Optional[BaseException]) -> None:
        if exc is None:
            return

        debug = self.app.is_debug()

        if ctx.committed:
            if debug:
                slogger.error("error handler: response was already committed: %r", exc)
            return

        event = ApiErrorEvent(http_context=ctx, error=classify_error(exc, debug=debug))

        try:
            await self.app.on_before_api_error().trigger(event, _send_error_response)
        except Exception as hook_err:  # noqa: BLE001
            # 极少见：例如客户端已经断开
            if debug:
                slogger.error("error handler: failed to send error response: %r", hook_err)
            return

        try:
            await self.app.on_after_api_error().trigger(event)
        except Exception as after_err:  # noqa: BLE001
            if debug:
                slogger.error("error handler: after error hook failed: %r", after_err)


async def _send_error_response(event: ApiErrorEvent) -> None:
    ctx = event.http_context
    if ctx.committed:
        return

    if ctx.request.method == "HEAD":
        await ctx.no_content(event.error.code)
        return

    await ctx.json(event.error.code, event.error.to_dict())


async def defer_to_api_error_handler(request: Request, exc: Exception) -> Response:  # noqa: ARG001
    """替换 FastAPI 内置的 HTTPException / 校验错误处理，让所有错误都走 ApiErrorHandler"""
    raise exc
