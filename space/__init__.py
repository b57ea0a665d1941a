# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""space：HTTP API 启动与统一错误处理层"""

__version__ = "0.1.0"
