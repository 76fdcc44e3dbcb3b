import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from types import SimpleNamespace
from urllib.parse import urlsplit

import pytest

from oaiclient.messages import MessageRequest, MessagesAPI
from oaiclient.transport import APIError, ClientConfig, Transport

THREAD_ID = "thread_abc123"
MESSAGE_ID = "msg_abc123"
FILE_ID = "file_abc123"


@pytest.fixture
def server():
    routes = {}
    seen = []

    class Handler(BaseHTTPRequestHandler):
        def _dispatch(self):
            parsed = urlsplit(self.path)
            length = int(self.headers.get("Content-Length") or 0)
            body = self.rfile.read(length) if length else b""
            req = SimpleNamespace(
                method=self.command,
                path=parsed.path,
                query=parsed.query,
                headers={k.lower(): v for k, v in self.headers.items()},
                body=body,
            )
            seen.append(req)
            handler = routes.get(parsed.path)
            if handler is None:
                status, headers, payload = (
                    404,
                    {"Content-Type": "application/json"},
                    b'{"error":{"message":"not found","type":"invalid_request_error"}}',
                )
            else:
                status, headers, payload = handler(req)
            self.send_response(status)
            for key, value in headers.items():
                self.send_header(key, value)
            self.send_header("Content-Length", str(len(payload)))
            self.end_headers()
            self.wfile.write(payload)

        do_GET = do_POST = do_DELETE = _dispatch

        def log_message(self, *args):
            pass

    httpd = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    base_url = f"http://127.0.0.1:{httpd.server_address[1]}/v1"
    yield SimpleNamespace(routes=routes, seen=seen, base_url=base_url)
    httpd.shutdown()
    httpd.server_close()


def _json(obj, status=200):
    return status, {"Content-Type": "application/json"}, json.dumps(obj).encode()


def _message_payload(metadata=None):
    return {
        "id": MESSAGE_ID,
        "object": "thread.message",
        "created_at": 1234567890,
        "thread_id": THREAD_ID,
        "role": "user",
        "content": [
            {"type": "text", "text": {"value": "How does AI work?", "annotations": None}}
        ],
        "file_ids": None,
        "assistant_id": "",
        "run_id": "",
        "metadata": metadata,
    }


def _not_allowed():
    return _json({"error": {"message": "unsupported method"}}, status=405)


def _register(server):
    base = f"/v1/threads/{THREAD_ID}/messages"

    def file_handler(req):
        if req.method != "GET":
            return _not_allowed()
        return _json(
            {
                "id": FILE_ID,
                "object": "thread.message.file",
                "created_at": 1699061776,
                "message_id": MESSAGE_ID,
            }
        )

    def files_handler(req):
        if req.method != "GET":
            return _not_allowed()
        return _json(
            {
                "data": [
                    {
                        "id": FILE_ID,
                        "object": "thread.message.file",
                        "created_at": 0,
                        "message_id": MESSAGE_ID,
                    }
                ]
            }
        )

    def message_handler(req):
        if req.method == "POST":
            payload = json.loads(req.body)["metadata"]
            return _json(_message_payload(payload))
        if req.method == "GET":
            return _json(_message_payload())
        if req.method == "DELETE":
            return _json(
                {"id": MESSAGE_ID, "object": "thread.message.deleted", "deleted": True}
            )
        return _not_allowed()

    def messages_handler(req):
        if req.method == "POST":
            return _json(_message_payload())
        if req.method == "GET":
            return _json(
                {
                    "object": "list",
                    "data": [_message_payload()],
                    "first_id": MESSAGE_ID,
                    "last_id": MESSAGE_ID,
                    "has_more": False,
                }
            )
        return _not_allowed()

    server.routes[f"{base}/{MESSAGE_ID}/files/{FILE_ID}"] = file_handler
    server.routes[f"{base}/{MESSAGE_ID}/files"] = files_handler
    server.routes[f"{base}/{MESSAGE_ID}"] = message_handler
    server.routes[base] = messages_handler


@pytest.fixture
def api(server):
    _register(server)
    return MessagesAPI(Transport(ClientConfig(auth_token="token", base_url=server.base_url)))


def test_create_message(api, server):
    msg = api.create_message(THREAD_ID, MessageRequest(role="user", content="How does AI work?"))
    assert msg.id == MESSAGE_ID
    assert msg.thread_id == THREAD_ID
    assert msg.content[0].type == "text"
    assert msg.content[0].text.value == "How does AI work?"
    assert msg.content[0].text.annotations == []
    assert msg.assistant_id == ""
    assert msg.metadata is None
    request = server.seen[0]
    assert request.method == "POST"
    assert json.loads(request.body) == {"role": "user", "content": "How does AI work?"}
    assert request.headers["openai-beta"] == "assistants=v2"


def test_list_messages_without_options(api, server):
    msgs = api.list_messages(THREAD_ID)
    assert len(msgs.messages) == 1
    assert msgs.object == "list"
    assert msgs.first_id == MESSAGE_ID
    assert msgs.last_id == MESSAGE_ID
    assert msgs.has_more is False
    assert server.seen[0].query == ""


def test_list_messages_with_options(api, server):
    msgs = api.list_messages(
        THREAD_ID, limit=1, order="desc", after="obj_foo", before="obj_bar", run_id="run_abc123"
    )
    assert len(msgs.messages) == 1
    assert server.seen[0].query == (
        "after=obj_foo&before=obj_bar&limit=1&order=desc&run_id=run_abc123"
    )


def test_retrieve_message(api, server):
    msg = api.retrieve_message(THREAD_ID, MESSAGE_ID)
    assert msg.id == MESSAGE_ID
    assert msg.created_at == 1234567890
    assert server.seen[0].method == "GET"


def test_modify_message(api, server):
    msg = api.modify_message(THREAD_ID, MESSAGE_ID, {"foo": "bar"})
    assert msg.metadata["foo"] == "bar"
    assert json.loads(server.seen[0].body) == {"metadata": {"foo": "bar"}}


def test_delete_message(api):
    status = api.delete_message(THREAD_ID, MESSAGE_ID)
    assert status.id == MESSAGE_ID
    assert status.object == "thread.message.deleted"
    assert status.deleted is True


def test_delete_missing_message_raises(api):
    with pytest.raises(APIError) as info:
        api.delete_message(THREAD_ID, "not_exist_id")
    assert info.value.status_code == 404


def test_retrieve_message_file(api):
    msg_file = api.retrieve_message_file(THREAD_ID, MESSAGE_ID, FILE_ID)
    assert msg_file.id == FILE_ID
    assert msg_file.message_id == MESSAGE_ID
    assert msg_file.created_at == 1699061776


def test_list_message_files(api):
    files = api.list_message_files(THREAD_ID, MESSAGE_ID)
    assert len(files.message_files) == 1
    assert files.message_files[0].id == FILE_ID


def test_message_request_to_dict_includes_optional_fields():
    request = MessageRequest(
        role="user",
        content="hi",
        file_ids=["file_1"],
        metadata={"k": "v"},
        attachments=[{"file_id": "file_1", "tools": [{"type": "file_search"}]}],
    )
    assert request.to_dict() == {
        "role": "user",
        "content": "hi",
        "file_ids": ["file_1"],
        "metadata": {"k": "v"},
        "attachments": [{"file_id": "file_1", "tools": [{"type": "file_search"}]}],
    }