"""
Pytest configuration and fixtures.
"""

import http.server
import json
import threading
from collections import deque
from dataclasses import dataclass, field

import pytest

from doc_delivery.config import Settings


class FakeGateway:
    """In-memory job gateway that returns a canned job body and file."""

    def __init__(self, response=None, file_bytes=b"%PDF-1.7 fake"):
        self.response = response
        self.file_bytes = file_bytes
        self.submitted = []
        self.downloaded = []

    def submit_job(self, job, *, api_key):
        self.submitted.append((job, api_key))
        return self.response

    def download(self, url):
        self.downloaded.append(url)
        return self.file_bytes


def finished_job(tasks, status="finished"):
    return {"data": {"id": "job-1", "status": status, "tasks": tasks}}


@pytest.fixture
def settings():
    return Settings(api_key="test-key")


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@dataclass
class StubResponse:
    status: int = 200
    body: bytes = b""
    content_type: str = "application/octet-stream"
    headers: dict = field(default_factory=dict)


@dataclass
class RecordedRequest:
    method: str
    path: str
    headers: dict
    body: bytes


@dataclass
class StubServer:
    base_url: str
    requests: list = field(default_factory=list)
    _responses: dict = field(default_factory=dict)

    def add(self, method, path, status=200, body=b"", content_type="application/octet-stream", headers=None):
        if isinstance(body, (dict, list)):
            body = json.dumps(body).encode("utf-8")
            content_type = "application/json"
        self._responses.setdefault((method, path), deque()).append(StubResponse(status, body, content_type, dict(headers or {})))

    def next_response(self, method, path):
        queue = self._responses.get((method, path))
        return queue.popleft() if queue else None


class _Handler(http.server.BaseHTTPRequestHandler):
    def log_message(self, format, *args):
        return

    def _handle(self):
        stub: StubServer = self.server.stub  # type: ignore[attr-defined]
        path = self.path.split("?", 1)[0]
        length = int(self.headers.get("Content-Length", "0") or "0")
        stub.requests.append(
            RecordedRequest(self.command, path, dict(self.headers.items()), self.rfile.read(length))
        )
        resp = stub.next_response(self.command, path)
        if resp is None:
            self.send_error(404, "No response queued for path")
            return
        self.send_response(resp.status)
        self.send_header("Content-Type", resp.content_type)
        self.send_header("Content-Length", str(len(resp.body)))
        for name, value in resp.headers.items():
            self.send_header(name, value)
        self.end_headers()
        self.wfile.write(resp.body)

    do_GET = _handle
    do_POST = _handle


@pytest.fixture
def stub_server():
    """Threaded local HTTP server answering queued responses per method and path."""
    server = http.server.ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    server.daemon_threads = True
    host, port = server.server_address[:2]
    server.stub = StubServer(base_url=f"http://{host}:{port}")  # type: ignore[attr-defined]
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield server.stub  # type: ignore[attr-defined]
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)
