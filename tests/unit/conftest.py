"""
测试共享夹具

提供不访问网络的 HTTP 会话替身，以及隔离的用户目录。
"""

import hashlib
import threading
from typing import Dict, Iterator, List, Optional, Union

import pytest
import requests


class FakeResponse:
    """模拟 requests.Response 的流式下载接口"""

    def __init__(self, body: bytes = b"", status_code: int = 200, fail_after: Optional[int] = None):
        self.body = body
        self.status_code = status_code
        self.fail_after = fail_after
        self.headers = {"Content-Length": str(len(body))}
        self.closed = False

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def iter_content(self, chunk_size: int = 1) -> Iterator[bytes]:
        for index, offset in enumerate(range(0, len(self.body), chunk_size)):
            if self.fail_after is not None and index >= self.fail_after:
                raise requests.ConnectionError("连接被重置")
            yield self.body[offset:offset + chunk_size]

    def close(self) -> None:
        self.closed = True


class FakeSession:
    """按地址返回预设响应；未登记的地址返回 404"""

    def __init__(self, routes: Optional[Dict[str, Union[FakeResponse, Exception]]] = None):
        self.routes = routes or {}
        self.requested: List[str] = []
        self.responses: List[FakeResponse] = []
        self._lock = threading.Lock()

    def get(self, url: str, **kwargs) -> FakeResponse:
        with self._lock:
            self.requested.append(url)
        route = self.routes.get(url)
        if isinstance(route, Exception):
            raise route
        response = route if route is not None else FakeResponse(status_code=404)
        with self._lock:
            self.responses.append(response)
        return response


@pytest.fixture
def make_session():
    """构造 FakeSession"""
    return FakeSession


@pytest.fixture
def make_response():
    """构造 FakeResponse"""
    return FakeResponse


@pytest.fixture
def sha256_hex():
    """计算字节串的 SHA-256 十六进制值"""
    return lambda data: hashlib.sha256(data).hexdigest()


@pytest.fixture
def local_appdata(tmp_path, monkeypatch):
    """将 LOCALAPPDATA 指向临时目录"""
    base = tmp_path / "LocalAppData"
    base.mkdir()
    monkeypatch.setenv("LOCALAPPDATA", str(base))
    return base
