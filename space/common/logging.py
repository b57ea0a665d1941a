# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import logging
import sys
from typing import Union

from space.common.trace import get_trace_id

LOG_FORMAT = "[%(asctime)s - %(levelname)s - trace=%(trace_id)s - %(name)s - %(message)s]"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class TraceIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        setattr(record, "trace_id", get_trace_id())
        return True


def _to_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


def _ensure_trace_filter(handler: logging.Handler) -> None:
    if not any(isinstance(f, TraceIdFilter) for f in handler.filters):
        handler.addFilter(TraceIdFilter())


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """初始化全局日志；重复调用只调整级别，不会重复加 handler"""

    root = logging.getLogger()
    root.setLevel(_to_level(level))

    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        root.addHandler(handler)

    # uvicorn / pytest 预先装好的 handler 也要带上 trace_id
    for h in root.handlers:
        _ensure_trace_filter(h)
