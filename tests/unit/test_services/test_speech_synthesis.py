import re
from unittest.mock import patch

import pytest

from receptro.config import Config
from receptro.encoding import parse_data_url
from receptro.services.speech_synthesis.service import (
    EmptySpeechError,
    synthesize_reply,
)

DATA_URL_PATTERN = re.compile(r"^data:audio/mpeg;base64,[A-Za-z0-9+/]+={0,2}$")


@pytest.mark.unit
def test_synthesize_reply_returns_mpeg_data_url(
    fake_inference_client, sample_speech_bytes
):
    """Synthesized audio comes back as a data:audio/mpeg URL"""
    audio_url = synthesize_reply(fake_inference_client, "Hello!", "test-request-id")

    assert DATA_URL_PATTERN.match(audio_url)
    assert parse_data_url(audio_url) == ("audio/mpeg", sample_speech_bytes)


@pytest.mark.unit
def test_synthesize_reply_uses_fixed_voice_and_tone(fake_inference_client):
    """Voice and tone instructions are fixed"""
    synthesize_reply(fake_inference_client, "Hello!", "test-request-id")

    kwargs = fake_inference_client.synthesize_speech.call_args.kwargs
    assert kwargs["text"] == "Hello!"
    assert kwargs["voice"] == Config.SPEECH.VOICE == "coral"
    assert "cheerful and positive" in kwargs["instructions"]
    assert kwargs["instructions"] == Config.SPEECH.INSTRUCTIONS


@pytest.mark.unit
@patch("receptro.services.speech_synthesis.service.Config.SPEECH.INSTRUCTIONS", "Speak calmly.")
@patch("receptro.services.speech_synthesis.service.Config.SPEECH.VOICE", "alloy")
def test_synthesize_reply_reads_voice_from_config(fake_inference_client):
    """Voice and tone come from Config when the call is made"""
    synthesize_reply(fake_inference_client, "Hello!", "test-request-id")

    kwargs = fake_inference_client.synthesize_speech.call_args.kwargs
    assert kwargs["voice"] == "alloy"
    assert kwargs["instructions"] == "Speak calmly."


@pytest.mark.unit
def test_synthesize_reply_empty_audio(fake_inference_client):
    """No audio bytes is an error, never an empty data URL"""
    fake_inference_client.synthesize_speech.return_value = b""

    with pytest.raises(EmptySpeechError):
        synthesize_reply(fake_inference_client, "Hello!", "test-request-id")
