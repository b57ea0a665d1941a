# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from typing import Any, Dict, Optional


def sentenize(message: str) -> str:
    """首字母大写，末尾补句号"""
    message = (message or "").strip()
    if not message:
        return ""

    message = message[0].upper() + message[1:]
    if message[-1] not in ".!?":
        message += "."
    return message


class ApiError(Exception):
    """统一的 API 错误

    raw_data 只给 hook / 日志使用，永远不会序列化给客户端。
    """

    def __init__(self, code: int, message: str = "", raw_data: Optional[Any] = None) -> None:
        if not isinstance(code, int) or not 100 <= code <= 599:
            raise ValueError(f"invalid http status code: {code!r}")

        self._code = code
        self._message = sentenize(message)
        self._raw_data = raw_data
        super().__init__(self._message)

    @property
    def code(self) -> int:
        return self._code

    @property
    def message(self) -> str:
        return self._message

    @property
    def raw_data(self) -> Optional[Any]:
        return self._raw_data

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self._code, "message": self._message}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self._code}, message={self._message!r})"


class BadRequestError(ApiError):
    default_message = "Something went wrong while processing your request."

    def __init__(self, message: str = "", raw_data: Any = None) -> None:
        super().__init__(400, message or self.default_message, raw_data)


class UnauthorizedError(ApiError):
    default_message = "Missing or invalid authentication token."

    def __init__(self, message: str = "", raw_data: Any = None) -> None:
        super().__init__(401, message or self.default_message, raw_data)


class ForbiddenError(ApiError):
    default_message = "You are not allowed to perform this request."

    def __init__(self, message: str = "", raw_data: Any = None) -> None:
        super().__init__(403, message or self.default_message, raw_data)


class NotFoundError(ApiError):
    default_message = "The requested resource wasn't found."

    def __init__(self, message: str = "", raw_data: Any = None) -> None:
        super().__init__(404, message or self.default_message, raw_data)
