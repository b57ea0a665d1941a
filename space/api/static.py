# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""静态资源

和 starlette 的 StaticFiles 不同：
- 不做目录补 `/` 的重定向（末尾斜杠由 RemoveTrailingSlashMiddleware 统一处理，避免互相冲突的重定向）
- 资源不存在且 index_fallback=True 时返回根目录的 index.html（SPA 前端路由）
- 资源不存在时抛 NotFoundError，走统一的错误处理
"""

from __future__ import annotations

import mimetypes
import os
import posixpath
import re
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Awaitable, Callable, Iterator, Optional, Union
from urllib.parse import unquote

from starlette.requests import Request
from starlette.responses import FileResponse, Response, StreamingResponse

from space.common.errors import NotFoundError

INDEX_FILE = "index.html"
CHUNK_SIZE = 64 * 1024

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")

FileSystem = Union[str, "os.PathLike[str]", Traversable]


def unescape_path(value: str) -> str:
    if _BAD_ESCAPE.search(value):
        raise ValueError(f"failed to unescape path variable: invalid escape in {value!r}")
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError as e:
        raise ValueError(f"failed to unescape path variable: {e}") from e


def clean_path(value: str) -> str:
    """规范化为相对于根目录的 `/` 分隔路径，结果永远不会跳出根目录"""
    value = value.replace("\\", "/")
    cleaned = posixpath.normpath("/" + value.lstrip("/"))
    return cleaned.lstrip("/")


def _open_in(root: Traversable, name: str) -> Optional[Traversable]:
    if "\x00" in name:
        return None

    target = root
    for part in name.split("/"):
        if part:
            target = target.joinpath(part)

    if target.is_dir():
        target = target.joinpath(INDEX_FILE)
    if not target.is_file():
        return None
    return target


def _iter_file(resource: Traversable) -> Iterator[bytes]:
    with resource.open("rb") as f:
        while True:
            chunk = f.read(CHUNK_SIZE)
            if not chunk:
                break
            yield chunk


def _file_response(request: Request, resource: Traversable) -> Response:
    if isinstance(resource, Path):
        return FileResponse(resource)

    media_type = mimetypes.guess_type(resource.name)[0] or "application/octet-stream"
    if request.method == "HEAD":
        return Response(media_type=media_type)
    return StreamingResponse(_iter_file(resource), media_type=media_type)


def serve_file(request: Request, root: Traversable, name: str) -> Response:
    resource = _open_in(root, name)
    if resource is None:
        raise NotFoundError()
    return _file_response(request, resource)


def static_directory_handler(
    file_system: FileSystem,
    index_fallback: bool = False,
) -> Callable[[Request], Awaitable[Response]]:
    """返回一个 endpoint，路由需要带 `{path:path}` 通配参数"""

    if isinstance(file_system, (str, os.PathLike)):
        root: Traversable = Path(file_system)
    else:
        root = file_system

    async def static_endpoint(request: Request) -> Response:
        name = clean_path(unescape_path(request.path_params.get("path", "")))

        try:
            return serve_file(request, root, name)
        except NotFoundError:
            if not index_fallback:
                raise
        return serve_file(request, root, INDEX_FILE)

    return static_endpoint
