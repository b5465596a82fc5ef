import base64
import json
import re
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from receptro.clients.llm import InferenceClient
from receptro.encoding import parse_data_url
from receptro.main import app, get_inference_client

DATA_URL_PATTERN = re.compile(r"^data:audio/mpeg;base64,[A-Za-z0-9+/]+={0,2}$")


@pytest.fixture
def client(mock_openai):
    """HTTP client wired to a real InferenceClient over a mocked OpenAI SDK"""
    inference_client = InferenceClient(mock_openai)
    app.dependency_overrides[get_inference_client] = lambda: inference_client
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.mark.integration
def test_business_card_scenario(
    client, mock_openai, make_chat_completion, sample_image_bytes
):
    """
    Business card JPEG → one vision call → extracted fields returned verbatim
    """
    fields = '{"name":"Jane Doe","phone":"555-1234"}'
    mock_openai.chat.completions.create.return_value = make_chat_completion(fields)

    response = client.post(
        "/api/process",
        json={
            "file": {
                "name": "card.jpg",
                "type": "image/jpeg",
                "data": base64.b64encode(sample_image_bytes).decode(),
            }
        },
    )

    assert response.status_code == 200
    assert response.json() == {"kind": "image", "data": {"content": fields}}

    mock_openai.chat.completions.create.assert_called_once()
    image_url = mock_openai.chat.completions.create.call_args.kwargs["messages"][0][
        "content"
    ][1]["image_url"]["url"]
    # Bytes survive browser base64 → server bytes → data URL unchanged
    assert parse_data_url(image_url) == ("image/jpeg", sample_image_bytes)
    mock_openai.audio.transcriptions.create.assert_not_called()


@pytest.mark.integration
def test_voice_command_scenario(
    client,
    mock_openai,
    make_chat_completion,
    sample_audio_bytes,
    sample_speech_bytes,
):
    """
    WAV saying "turn on the lights" → transcript → intent JSON → speech of
    exactly the intent's response → non-empty audio data URL
    """
    intent = {"response": "Sure, turning on the lights!", "action": "turn_on_lights"}
    mock_openai.audio.transcriptions.create.return_value = SimpleNamespace(
        text="turn on the lights"
    )
    mock_openai.chat.completions.create.return_value = make_chat_completion(
        json.dumps(intent)
    )
    mock_openai.audio.speech.create.return_value = SimpleNamespace(
        content=sample_speech_bytes
    )

    response = client.post(
        "/api/process",
        json={
            "file": {
                "name": "command.wav",
                "type": "audio/wav",
                "data": base64.b64encode(sample_audio_bytes).decode(),
            }
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["kind"] == "audio"
    assert data["data"]["transcription"] == "turn on the lights"
    assert data["data"]["intentParameters"] == intent
    assert DATA_URL_PATTERN.match(data["data"]["audioResponse"])
    assert parse_data_url(data["data"]["audioResponse"])[1] == sample_speech_bytes

    transcription_kwargs = mock_openai.audio.transcriptions.create.call_args.kwargs
    assert transcription_kwargs["file"] == ("command.wav", sample_audio_bytes, "audio/wav")

    chat_messages = mock_openai.chat.completions.create.call_args.kwargs["messages"]
    assert chat_messages[1]["content"][0]["text"] == "turn on the lights"

    speech_kwargs = mock_openai.audio.speech.create.call_args.kwargs
    assert speech_kwargs["input"] == "Sure, turning on the lights!"


@pytest.mark.integration
def test_voice_command_with_unparseable_intent(
    client, mock_openai, make_chat_completion, sample_audio_bytes
):
    """A non-JSON intent reply fails the request and nothing is synthesized"""
    mock_openai.audio.transcriptions.create.return_value = SimpleNamespace(
        text="turn on the lights"
    )
    mock_openai.chat.completions.create.return_value = make_chat_completion(
        "Sure, turning on the lights!"
    )

    response = client.post(
        "/api/process",
        json={
            "file": {
                "name": "command.wav",
                "type": "audio/wav",
                "data": base64.b64encode(sample_audio_bytes).decode(),
            }
        },
    )

    assert response.status_code == 502
    assert "Failed to parse response JSON" in response.json()["detail"]
    mock_openai.audio.speech.create.assert_not_called()


@pytest.mark.integration
def test_multipart_voice_command(
    client, mock_openai, make_chat_completion, sample_audio_bytes, sample_speech_bytes
):
    """The multipart route runs the same audio pipeline"""
    mock_openai.audio.transcriptions.create.return_value = SimpleNamespace(
        text="what's the weather"
    )
    mock_openai.chat.completions.create.return_value = make_chat_completion(
        '{"response": "It is sunny today.", "intent": "weather"}'
    )
    mock_openai.audio.speech.create.return_value = SimpleNamespace(
        content=sample_speech_bytes
    )

    response = client.post(
        "/api/upload", files={"file": ("weather.mp3", sample_audio_bytes, "audio/mpeg")}
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["intentParameters"]["intent"] == "weather"
    assert mock_openai.audio.speech.create.call_args.kwargs["input"] == "It is sunny today."
