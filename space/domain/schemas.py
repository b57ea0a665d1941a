# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class ApiErrorResponse(BaseModel):
    """错误响应的线上格式；raw_data 不在其中"""

    code: int = Field(..., ge=100, le=599)
    message: str


class BackupFileInfo(BaseModel):
    key: str
    size: int
    modified: datetime
