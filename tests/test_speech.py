import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from types import SimpleNamespace

import pytest

from oaiclient.speech import (
    CreateSpeechRequest,
    SpeechAPI,
    SpeechModel,
    SpeechResponseFormat,
    SpeechVoice,
)
from oaiclient.transport import APIError, ClientConfig, Transport

AUDIO = b"ID3 fake mp3 audio bytes"


def _speech_reply(path, content_type, body):
    if path != "/v1/audio/speech":
        return 404, "application/json", b'{"error":{"message":"not found"}}'
    if content_type.split(";")[0].strip() != "application/json":
        return 400, "text/plain", b"request is not json"
    try:
        params = json.loads(body)
    except ValueError:
        return 400, "text/plain", b"failed to parse request body"
    missing = [name for name in ("model", "input", "voice") if name not in params]
    if missing:
        return 400, "text/plain", f"no {missing[0]} in params".encode()
    return 200, "audio/mpeg", AUDIO


@pytest.fixture
def speech():
    """A speech API talking to a local endpoint whose reply can be swapped."""
    state = SimpleNamespace(bodies=[], reply=_speech_reply)

    class Endpoint(BaseHTTPRequestHandler):
        def do_POST(self):
            body = self.rfile.read(int(self.headers.get("Content-Length", 0)))
            state.bodies.append(body)
            status, kind, payload = state.reply(
                self.path, self.headers.get("Content-Type", ""), body
            )
            self.send_response(status)
            self.send_header("Content-Type", kind)
            self.send_header("Content-Length", str(len(payload)))
            self.end_headers()
            self.wfile.write(payload)

        def log_message(self, *args):
            pass

    httpd = ThreadingHTTPServer(("127.0.0.1", 0), Endpoint)
    worker = threading.Thread(target=httpd.serve_forever, daemon=True)
    worker.start()
    base_url = f"http://127.0.0.1:{httpd.server_address[1]}/v1"
    state.api = SpeechAPI(Transport(ClientConfig(auth_token="token", base_url=base_url)))
    try:
        yield state
    finally:
        httpd.shutdown()
        httpd.server_close()


def test_create_speech_happy_path(speech):
    request = CreateSpeechRequest(model=SpeechModel.TTS_1, input="Hello!", voice=SpeechVoice.ALLOY)
    with speech.api.create_speech(request) as response:
        data = response.read()
    assert data == AUDIO
    assert json.loads(speech.bodies[0]) == {"model": "tts-1", "input": "Hello!", "voice": "alloy"}


def test_create_speech_error_status_raises(speech):
    speech.reply = lambda *_: (
        500,
        "application/json",
        b'{"error":{"message":"boom","type":"server_error"}}',
    )
    request = CreateSpeechRequest(model="tts-1-hd", input="Hi", voice="nova")
    with pytest.raises(APIError) as info:
        speech.api.create_speech(request)
    assert info.value.status_code == 500
    assert info.value.message == "boom"


@pytest.mark.parametrize(
    "request_, expected",
    [
        (
            CreateSpeechRequest(model=SpeechModel.TTS_1_HD, input="x", voice=SpeechVoice.ECHO),
            {"model": "tts-1-hd", "input": "x", "voice": "echo"},
        ),
        (
            CreateSpeechRequest(
                model="canary-tts",
                input="x",
                voice=SpeechVoice.SHIMMER,
                response_format=SpeechResponseFormat.FLAC,
                speed=1.5,
            ),
            {
                "model": "canary-tts",
                "input": "x",
                "voice": "shimmer",
                "response_format": "flac",
                "speed": 1.5,
            },
        ),
    ],
)
def test_to_dict(request_, expected):
    assert request_.to_dict() == expected


def test_enum_values():
    assert SpeechResponseFormat("pcm") is SpeechResponseFormat.PCM
    assert SpeechVoice("onyx") is SpeechVoice.ONYX