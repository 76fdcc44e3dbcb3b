"""Text-to-speech endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .transport import Transport


class SpeechModel(str, Enum):
    TTS_1 = "tts-1"
    TTS_1_HD = "tts-1-hd"
    CANARY_TTS = "canary-tts"


class SpeechVoice(str, Enum):
    ALLOY = "alloy"
    ECHO = "echo"
    FABLE = "fable"
    ONYX = "onyx"
    NOVA = "nova"
    SHIMMER = "shimmer"


class SpeechResponseFormat(str, Enum):
    MP3 = "mp3"
    OPUS = "opus"
    AAC = "aac"
    FLAC = "flac"
    WAV = "wav"
    PCM = "pcm"


def _value(item: Any) -> Any:
    return item.value if isinstance(item, Enum) else item


@dataclass
class CreateSpeechRequest:
    model: SpeechModel | str
    input: str
    voice: SpeechVoice | str
    response_format: SpeechResponseFormat | str = ""
    speed: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "model": _value(self.model),
            "input": self.input,
            "voice": _value(self.voice),
        }
        if self.response_format:
            body["response_format"] = _value(self.response_format)
        if self.speed:
            body["speed"] = self.speed
        return body


class SpeechAPI:
    """The ``/audio/speech`` endpoint."""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    def create_speech(self, request: CreateSpeechRequest):
        """Return the open audio response; the caller reads and closes it."""
        return self.transport.request_raw("POST", "/audio/speech", request)