"""
Test helpers: settings builder and a minimal raw ASGI harness.
"""

from typing import Any, Dict, List, Optional

from space.infra.config import Settings


def build_settings(**overrides: Any) -> Settings:
    values: Dict[str, Any] = {"DEBUG": False, "PUBLIC_DIR": None}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_scope(method: str = "GET", path: str = "/api/test", query_string: bytes = b"") -> Dict[str, Any]:
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "scheme": "http",
        "path": path,
        "raw_path": path.encode(),
        "root_path": "",
        "query_string": query_string,
        "headers": [],
        "client": ("testclient", 50000),
        "server": ("testserver", 80),
    }


async def empty_receive() -> Dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


class RecordingSend:
    """ASGI send() that records every message, optionally failing."""

    def __init__(self, fail_with: Optional[Exception] = None) -> None:
        self.messages: List[Dict[str, Any]] = []
        self.fail_with = fail_with

    async def __call__(self, message: Dict[str, Any]) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.messages.append(message)

    @property
    def status(self) -> int:
        return self.messages[0]["status"]

    @property
    def body(self) -> bytes:
        return b"".join(m.get("body", b"") for m in self.messages if m["type"] == "http.response.body")

    @property
    def starts(self) -> int:
        return sum(1 for m in self.messages if m["type"] == "http.response.start")
