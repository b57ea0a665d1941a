# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from fastapi import APIRouter, Depends

from space.api.activity import ActivityLogger
from space.core.app import App


def bind_health_api(app: App, api: APIRouter) -> None:
    @api.api_route(
        "/health",
        methods=["GET", "HEAD"],
        dependencies=[Depends(ActivityLogger(app))],
        tags=["health"],
    )
    def health_check() -> dict:
        return {"code": 200, "message": "API is healthy."}
