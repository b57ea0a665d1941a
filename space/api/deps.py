# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from typing import Optional

from fastapi import Depends
from starlette.requests import Request

from space.common.errors import UnauthorizedError
from space.core.app import App
from space.core.auth import AuthContext


def get_space(request: Request) -> App:
    return request.app.state.space


def get_auth(request: Request) -> Optional[AuthContext]:
    """LoadAuthContextMiddleware 解析出的认证信息，未登录时为 None"""
    return getattr(request.state, "auth", None)


def require_auth(auth: Optional[AuthContext] = Depends(get_auth)) -> AuthContext:
    if auth is None:
        raise UnauthorizedError("The request requires valid authorization token to be set.")
    return auth
