import json
import os
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

# Keep test runs off the filesystem (set BEFORE any receptro imports)
os.environ.setdefault("LOG_TO_FILE", "false")

from receptro.clients.llm import InferenceClient  # noqa: E402


@pytest.fixture
def sample_image_bytes():
    """A few bytes that start like a JPEG"""
    return b"\xff\xd8\xff\xe0\x00\x10JFIF\x00business-card"


@pytest.fixture
def sample_audio_bytes():
    """A few bytes that start like a WAV"""
    return b"RIFF$\x00\x00\x00WAVEfmt turn-on-the-lights"


@pytest.fixture
def sample_card_fields():
    """Vision model output for a business card"""
    return '{"name":"Jane Doe","phone":"555-1234"}'


@pytest.fixture
def sample_intent():
    """Intent model output for 'turn on the lights'"""
    return {"response": "Sure, turning on the lights!", "action": "turn_on_lights"}


@pytest.fixture
def sample_speech_bytes():
    """Bytes standing in for synthesized MP3 audio"""
    return b"ID3\x04\x00\x00\x00\x00\x00\x00mp3-frames"


@pytest.fixture
def fake_inference_client(
    sample_card_fields, sample_intent, sample_speech_bytes
) -> MagicMock:
    """InferenceClient double returning the canned business-card and lights outputs"""
    client = MagicMock(spec=InferenceClient)
    client.vision_extract.return_value = sample_card_fields
    client.transcribe.return_value = "turn on the lights"
    client.chat_json.return_value = json.dumps(sample_intent)
    client.synthesize_speech.return_value = sample_speech_bytes
    return client


@pytest.fixture
def make_chat_completion():
    """Build the shape of an OpenAI chat completion with a single choice"""

    def _make(content):
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
        )

    return _make


@pytest.fixture
def mock_openai():
    """OpenAI SDK double for exercising the real InferenceClient"""
    return MagicMock()
