# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

"""Hook：有序、可变的回调链

约定：
- handler 签名为 (event) -> None，可以是同步函数也可以是协程函数
- handler 抛出 StopPropagation 时静默结束整条链（包括 one-off handler）
- 其它异常原样抛给 trigger 的调用方
- handler 只在应用初始化阶段注册，服务启动后只读，不加锁
"""

import inspect
import uuid
from typing import Any, Awaitable, Callable, Generic, List, Tuple, TypeVar, Union

T = TypeVar("T")

Handler = Callable[[T], Union[None, Awaitable[None]]]


class StopPropagation(Exception):
    """中断 hook 链，不视为错误"""


class Hook(Generic[T]):
    def __init__(self) -> None:
        self._handlers: List[Tuple[str, Handler]] = []

    def __len__(self) -> int:
        return len(self._handlers)

    def pre_add(self, handler: Handler) -> str:
        hid = uuid.uuid4().hex
        self._handlers.insert(0, (hid, handler))
        return hid

    def add(self, handler: Handler) -> str:
        hid = uuid.uuid4().hex
        self._handlers.append((hid, handler))
        return hid

    def remove(self, hid: str) -> None:
        self._handlers = [(i, h) for i, h in self._handlers if i != hid]

    def reset(self) -> None:
        self._handlers = []

    async def trigger(self, event: T, *one_off_handlers: Handler) -> None:
        handlers = [h for _, h in self._handlers]
        handlers.extend(one_off_handlers)

        for handler in handlers:
            try:
                result: Any = handler(event)
                if inspect.isawaitable(result):
                    await result
            except StopPropagation:
                return
