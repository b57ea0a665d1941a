# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

"""ApiRouter：/api 下所有路由组共用的路由器

- 同一路径模式、方法重叠时，后注册的覆盖先注册的
- 路由按具体程度排序：静态段 < 参数段 < 通配（{path:path}），同级保持注册顺序，
  因此注册顺序不影响匹配结果
"""

from typing import Any, Optional, Set, Tuple

from fastapi import APIRouter
from starlette.routing import BaseRoute

STATIC_SEGMENT = 0
PARAM_SEGMENT = 1
CATCH_ALL_SEGMENT = 2


def route_priority(route: BaseRoute) -> Tuple[int, ...]:
    path: str = getattr(route, "path", "") or ""
    ranks = []
    for part in path.strip("/").split("/"):
        if part.startswith("{") and part.endswith("}"):
            ranks.append(CATCH_ALL_SEGMENT if part.endswith(":path}") else PARAM_SEGMENT)
        elif part:
            ranks.append(STATIC_SEGMENT)
    return tuple(ranks)


def _methods(route: BaseRoute) -> Optional[Set[str]]:
    methods = getattr(route, "methods", None)
    return set(methods) if methods is not None else None


class ApiRouter(APIRouter):
    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault("redirect_slashes", False)
        super().__init__(**kwargs)

    def add_api_route(self, *args: Any, **kwargs: Any) -> None:
        super().add_api_route(*args, **kwargs)
        self._settle()

    def add_route(self, *args: Any, **kwargs: Any) -> None:
        super().add_route(*args, **kwargs)
        self._settle()

    def add_api_websocket_route(self, *args: Any, **kwargs: Any) -> None:
        super().add_api_websocket_route(*args, **kwargs)
        self._settle()

    def _settle(self) -> None:
        newest = self.routes.pop()
        newest_path = getattr(newest, "path", None)
        newest_methods = _methods(newest)

        kept = []
        for route in self.routes:
            if type(route) is not type(newest) or getattr(route, "path", None) != newest_path:
                kept.append(route)
                continue

            methods = _methods(route)
            if methods is None or newest_methods is None:
                continue  # 同路径的 websocket 等无方法路由直接替换

            remaining = methods - newest_methods
            if remaining == methods:
                kept.append(route)
            elif remaining:
                route.methods = remaining  # type: ignore[attr-defined]
                kept.append(route)

        kept.append(newest)
        kept.sort(key=route_priority)
        self.routes[:] = kept
