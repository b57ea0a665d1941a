# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from typing import Optional

from space.common.hooks import Hook
from space.core.auth import AuthResolver, TokenAuthResolver
from space.core.events import ApiErrorEvent
from space.infra.config import Settings, settings as default_settings


class App:
    """进程级共享状态：配置 + 错误处理 hook 链

    只在应用初始化阶段（开始接收请求前）修改，之后只读。
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        auth_resolver: Optional[AuthResolver] = None,
    ) -> None:
        self.settings = settings or default_settings
        self.auth_resolver: AuthResolver = auth_resolver or TokenAuthResolver(
            self.settings.JWT_SECRET_KEY,
            algorithm=self.settings.JWT_ALGORITHM,
        )

        self._on_before_api_error: Hook[ApiErrorEvent] = Hook()
        self._on_after_api_error: Hook[ApiErrorEvent] = Hook()

    def is_debug(self) -> bool:
        return bool(self.settings.DEBUG)

    def on_before_api_error(self) -> Hook[ApiErrorEvent]:
        return self._on_before_api_error

    def on_after_api_error(self) -> Hook[ApiErrorEvent]:
        return self._on_after_api_error
