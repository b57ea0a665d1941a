# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from typing import Any

from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import Message, Receive, Scope, Send

from space.common.serializer import FIELDS_PARAM, serialize


class HttpContext:
    """单个请求的上下文：记录响应是否已经提交，所有写操作都经过这里"""

    def __init__(self, scope: Scope, receive: Receive, send: Send) -> None:
        self.request = Request(scope, receive)
        self._send = send
        self.committed = False

    async def send(self, message: Message) -> None:
        if message["type"] == "http.response.start":
            self.committed = True
        await self._send(message)

    async def write(self, response: Response) -> None:
        if self.committed:
            raise RuntimeError("response already committed")
        await response(self.request.scope, self.request.receive, self.send)

    async def json(self, status_code: int, data: Any) -> None:
        content = serialize(data, self.request.query_params.get(FIELDS_PARAM))
        await self.write(JSONResponse(status_code=status_code, content=content))

    async def no_content(self, status_code: int) -> None:
        await self.write(Response(status_code=status_code))
