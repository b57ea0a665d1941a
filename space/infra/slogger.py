# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

import logging


"""统一日志出口

日志初始化由 space.common.logging.setup_logging() 负责。
slogger 用于错误处理链路的诊断输出，activity_logger 记录每个 API 请求。
"""


slogger = logging.getLogger("space")

activity_logger = logging.getLogger("space.activity")
