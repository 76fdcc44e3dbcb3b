import json
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from oaiclient.models import ModelsAPI
from oaiclient.transport import ClientConfig, Transport

FINE_TUNE_MODEL_ID = "fine-tune-model-id"

ROUTES = {
    ("GET", "/v1/models"): {
        "data": [{"id": "m1", "owned_by": "org", "created": 5, "permission": [{"id": "p", "allow_view": True}]}]
    },
    ("GET", "/v1/models/text-davinci-003"): {"id": "text-davinci-003", "object": "model"},
    ("DELETE", "/v1/models/" + FINE_TUNE_MODEL_ID): {"id": FINE_TUNE_MODEL_ID, "object": "model", "deleted": True},
}


class _Handler(BaseHTTPRequestHandler):
    def log_message(self, *args):
        pass

    def _reply(self):
        if self.path == "/v1/models/slow":
            time.sleep(0.5)
        payload = json.dumps(ROUTES.get((self.command, self.path), {})).encode()
        self.send_response(200)
        self.send_header("x-ratelimit-limit-requests", "7")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    do_GET = do_DELETE = _reply


@pytest.fixture
def server():
    srv = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    threading.Thread(target=srv.serve_forever, daemon=True).start()
    yield f"http://127.0.0.1:{srv.server_port}/v1"
    srv.shutdown()
    srv.server_close()


def _api(base_url, timeout=None):
    return ModelsAPI(Transport(ClientConfig("token", base_url=base_url, timeout=timeout)))


def test_list_models(server):
    result = _api(server).list_models()
    assert [m.id for m in result.models] == ["m1"]
    assert result.models[0].permission[0].allow_view is True
    assert result.headers["x-ratelimit-limit-requests"] == "7"


def test_get_model(server):
    model = _api(server).get_model("text-davinci-003")
    assert model.id == "text-davinci-003"


def test_delete_fine_tune_model(server):
    response = _api(server).delete_fine_tune_model(FINE_TUNE_MODEL_ID)
    assert response.deleted is True
    assert response.id == FINE_TUNE_MODEL_ID


def test_get_model_timeout(server):
    with pytest.raises(TimeoutError):
        _api(server, timeout=0.05).get_model("slow")