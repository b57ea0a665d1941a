# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol

import jwt

from space.infra.slogger import slogger


@dataclass
class AuthContext:
    id: str
    type: str
    claims: Dict[str, Any] = field(default_factory=dict)


class AuthResolver(Protocol):
    def resolve(self, token: str) -> Optional[AuthContext]:
        ...


def extract_token(header_value: Optional[str]) -> str:
    """Authorization 头可以是裸 token，也可以是 `Bearer <token>`"""
    value = (header_value or "").strip()
    if value[:7].lower() == "bearer ":
        value = value[7:].strip()
    return value


class TokenAuthResolver:
    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        self._secret = secret
        self._algorithm = algorithm

    def make_token(self, *, auth_id: str, auth_type: str, ttl_seconds: int = 3600, **extra: Any) -> str:
        now = int(time.time())
        payload: Dict[str, Any] = {
            **extra,
            "id": auth_id,
            "type": auth_type,
            "iat": now,
            "exp": now + ttl_seconds,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def resolve(self, token: str) -> Optional[AuthContext]:
        if not token:
            return None

        try:
            claims = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except jwt.PyJWTError as e:
            slogger.debug("ignore invalid auth token: %s", e)
            return None

        auth_id = claims.get("id")
        auth_type = claims.get("type")
        if not auth_id or not auth_type:
            return None
        return AuthContext(id=str(auth_id), type=str(auth_type), claims=claims)
