import json
import threading
from datetime import datetime, timedelta
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from oaiclient.transport import (
    APIError,
    ClientConfig,
    Pagination,
    RateLimitHeaders,
    ResetTime,
    Transport,
)


@pytest.mark.parametrize(
    "suffix,expect",
    [
        ("/chat/completions", "https://api.openai.com/v1/chat/completions"),
        ("/completions", "https://api.openai.com/v1/completions"),
    ],
)
def test_full_url(suffix, expect):
    assert Transport(ClientConfig("token")).full_url(suffix) == expect


def test_rate_limit_headers_parse_and_defaults():
    headers = {
        "X-RateLimit-Limit-Requests": "60",
        "x-ratelimit-remaining-tokens": "bad",
        "x-ratelimit-reset-requests": "1s",
    }
    limits = RateLimitHeaders.from_headers(headers)
    assert limits.limit_requests == 60
    assert limits.remaining_tokens == 0
    assert limits.reset_requests == "1s"
    assert limits.reset_tokens == ""


def test_reset_time():
    before = datetime.now()
    moment = ResetTime("1m30s").time()
    assert before + timedelta(seconds=89) <= moment <= datetime.now() + timedelta(seconds=91)
    assert abs((ResetTime("junk").time() - datetime.now()).total_seconds()) < 1


def test_pagination_query():
    assert Pagination().query() == ""
    query = Pagination(limit=20, order="desc", after="a b", before="x").query()
    assert query == "?after=a+b&before=x&limit=20&order=desc"


class _Handler(BaseHTTPRequestHandler):
    def log_message(self, *args):
        pass

    def _reply(self):
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length else b""
        if self.path.startswith("/v1/fail"):
            payload = json.dumps({"error": {"message": "bad", "code": "invalid_api_key"}}).encode()
            self.send_response(401)
        else:
            payload = json.dumps(
                {
                    "auth": self.headers.get("Authorization"),
                    "beta": self.headers.get("OpenAI-Beta"),
                    "body": json.loads(body) if body else None,
                }
            ).encode()
            self.send_response(200)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    do_GET = do_POST = _reply


@pytest.fixture
def transport():
    server = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield Transport(ClientConfig("token", base_url=f"http://127.0.0.1:{server.server_port}/v1"))
    server.shutdown()
    server.server_close()


def test_request_sends_auth_beta_and_body(transport):
    data = transport.request("POST", "/echo", {"a": 1}, beta=True).json()
    assert data == {"auth": "Bearer token", "beta": "assistants=v2", "body": {"a": 1}}


def test_request_error_is_api_error(transport):
    with pytest.raises(APIError) as info:
        transport.request("GET", "/fail")
    assert info.value.status_code == 401
    assert info.value.code == "invalid_api_key"