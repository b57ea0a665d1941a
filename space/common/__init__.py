# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""通用基础设施（错误/错误处理/hook/中间件/日志/trace 等）

约定：
- 路由不直接拼错误响应：错误统一抛出（ApiError 或任意异常），由 RecoverMiddleware 交给 ApiErrorHandler
- ApiErrorHandler 负责分类、触发 hook、写 {code, message} 响应，保证同一请求不会写两次
- trace_id 通过 middleware 注入，并写入日志，便于线上排障
"""

from __future__ import annotations
